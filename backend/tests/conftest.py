import os
import sys
import pytest

# Ensure the backend root (containing the `verdict` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from verdict import create_app, get_room_store, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    ROOM_CODE_LENGTH = 4
    ROOM_SWEEP_INTERVAL_SEC = 300
    MIN_PLAYERS = 2
    ENFORCE_MIN_PLAYERS = True
    VOTE_POINTS = 3
    TOP_EVIDENCE_BONUS = 5
    RESET_SCORES_ON_START = True


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def store(flask_app):
    return get_room_store(flask_app)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def drain():
    """Drain a client's received events as (name, payload) pairs, or payloads of one event."""
    def _drain(test_client, name=None):
        received = [(pkt['name'], pkt['args'][0] if pkt['args'] else None)
                    for pkt in test_client.get_received()]
        if name is None:
            return received
        return [payload for event, payload in received if event == name]
    return _drain
