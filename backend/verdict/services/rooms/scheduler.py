from typing import List

from verdict import socketio
from verdict.models import Room
from .registry import RoomStore, room_channel

ROOM_CLOSED = {'code': 'RoomClosed', 'message': 'This room was closed for inactivity.'}


def sweep_empty_rooms(store: RoomStore) -> List[Room]:
    """Destroy every room whose roster is empty. Returns the removed rooms."""
    with store.lock:
        removed = []
        for code in store.empty_room_codes():
            room = store.destroy_room(code)
            if room:
                removed.append(room)
        return removed


def close_swept_rooms(app, rooms: List[Room]) -> None:
    namespace = app.config.get('SOCKETIO_NAMESPACE', '/')
    for room in rooms:
        app.logger.info(f"[room-reaped] code={room.code} phase={room.phase}")
        socketio.emit('error', ROOM_CLOSED, to=room_channel(room.code), namespace=namespace)
        socketio.close_room(room_channel(room.code), namespace=namespace)


def start_room_reaper(app, store: RoomStore) -> None:
    """Periodically remove empty rooms.

    - No-ops in TESTING mode unless ENABLE_REAPER_IN_TESTS is set
    - Runs as a Socket.IO background task so it cooperates with the async mode
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_REAPER_IN_TESTS'):
        return
    interval = int(app.config.get('ROOM_SWEEP_INTERVAL_SEC', 300))
    if interval <= 0:
        app.logger.info("[reaper-off] ROOM_SWEEP_INTERVAL_SEC <= 0")
        return

    def _worker():
        while True:
            socketio.sleep(interval)
            with app.app_context():
                try:
                    removed = sweep_empty_rooms(store)
                    close_swept_rooms(app, removed)
                except Exception:
                    app.logger.exception("[reaper-error] sweep failed")

    app.logger.info(f"[reaper-start] interval={interval}s")
    socketio.start_background_task(_worker)
