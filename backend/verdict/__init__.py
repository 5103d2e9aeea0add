from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def _allowed_origins(value):
    if not value or value == '*':
        return '*'
    if isinstance(value, str):
        return [origin.strip() for origin in value.split(',') if origin.strip()]
    return list(value)


def get_room_store(flask_app=None):
    """Return the room store owned by the given (or current) app."""
    return (flask_app or current_app).extensions['verdict_rooms']


def create_app(config_class=Config, store=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    origins = _allowed_origins(flask_app.config.get('CORS_ALLOWED_ORIGINS', '*'))
    CORS(flask_app, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # Each app owns its room registry; tests may inject their own
    from verdict.services.rooms.registry import RoomStore
    if store is None:
        store = RoomStore(code_length=int(flask_app.config.get('ROOM_CODE_LENGTH', 4)))
    flask_app.extensions['verdict_rooms'] = store

    # Import and register blueprints here
    from verdict.main import main
    flask_app.register_blueprint(main)

    from verdict.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers on the configured namespace
    from verdict.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    from verdict.services.rooms.scheduler import start_room_reaper
    start_room_reaper(flask_app, store)

    return flask_app
