from flask import Blueprint, jsonify

from verdict import get_room_store

main = Blueprint('main', __name__)


@main.route('/')
def index():
    """Liveness probe with the number of live rooms."""
    store = get_room_store()
    with store.lock:
        count = len(store)
    return jsonify({'status': 'online', 'rooms': count})
