from flask import Blueprint, jsonify

from verdict import get_room_store
from verdict.errors import RoomNotFound

rooms = Blueprint('rooms', __name__)


@rooms.route('', methods=['GET'])
def list_rooms():
    """
    Lists live rooms with their phase and player count.
    """
    store = get_room_store()
    with store.lock:
        listing = store.summary()
    return jsonify({'count': len(listing), 'rooms': listing})


@rooms.route('/<string:room_code>', methods=['GET'])
def get_room(room_code):
    """
    Returns the public state of a single room. Evidence content is not included.
    """
    store = get_room_store()
    with store.lock:
        try:
            room = store.get(room_code)
        except RoomNotFound as exc:
            return jsonify({'error': exc.message}), 404
        payload = room.to_dict()
    return jsonify(payload)
