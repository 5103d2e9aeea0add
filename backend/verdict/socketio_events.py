import functools

from flask import current_app, request
from flask_socketio import emit, join_room

from verdict import socketio, get_room_store
from verdict.errors import GameError, InvalidPayload
from verdict.services.rooms import ledger, phases
from verdict.services.rooms.registry import room_channel

HOST_LEFT = {'code': 'HostLeft', 'message': 'The host disconnected.'}
INTERNAL_ERROR = {'code': 'InternalError', 'message': 'Something went wrong, please try again.'}


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _namespace() -> str:
    return current_app.config.get('SOCKETIO_NAMESPACE', '/')


def _broadcast(event, payload, room_code):
    socketio.emit(event, payload, to=room_channel(room_code), namespace=_namespace())


def _send_to(sid, event, payload):
    socketio.emit(event, payload, to=sid, namespace=_namespace())


def _required(data, key):
    value = data.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidPayload(f'{key} is required')
    return value


def guarded(handler):
    """Run a handler under the store lock and turn failures into an error reply.

    Game errors go back to the sender with their code. Anything else is
    logged and reported as a generic error so one bad event cannot take
    other rooms down with it.
    """
    @functools.wraps(handler)
    def wrapper(data=None):
        if not isinstance(data, dict):
            data = {}
        try:
            with get_room_store().lock:
                return handler(data)
        except GameError as exc:
            current_app.logger.info(f"[rejected] event={handler.__name__} sid={_get_sid()} code={exc.code}")
            emit('error', exc.to_dict())
        except Exception:
            current_app.logger.exception(f"[handler-error] event={handler.__name__} sid={_get_sid()}")
            emit('error', INTERNAL_ERROR)
    return wrapper


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    store = get_room_store()
    try:
        with store.lock:
            departure = store.release_connection(sid)
            if departure is None:
                return
            room = departure.room
            if departure.host_left:
                current_app.logger.info(f"[host-left] room={room.code} players={len(room.players)}")
                _broadcast('error', HOST_LEFT, room.code)
                socketio.close_room(room_channel(room.code), namespace=_namespace())
            else:
                current_app.logger.info(f"[player-left] room={room.code} player={departure.player.id if departure.player else None}")
                _broadcast('playerLeft', {'players': room.roster()}, room.code)
    except Exception:
        # The connection is already gone; nobody to reply to
        current_app.logger.exception(f"[handler-error] event=disconnect sid={sid}")


@guarded
def handle_create_room(data):
    sid = _get_sid()
    room = get_room_store().create_room(sid)
    join_room(room_channel(room.code))
    current_app.logger.info(f"[room-created] code={room.code} host={sid}")
    emit('roomCreated', {'roomCode': room.code})


@guarded
def handle_join_room(data):
    code = _required(data, 'roomCode')
    name = _required(data, 'playerName')
    room, player = get_room_store().join_room(code, name, _get_sid())
    join_room(room_channel(room.code))
    current_app.logger.info(f"[player-joined] room={room.code} player={player.id} count={len(room.players)}")
    emit('joinedRoom', {'roomCode': room.code, 'playerId': player.id})
    _broadcast('playerJoined', {'players': room.roster()}, room.code)


@guarded
def handle_start_game(data):
    room = get_room_store().get(_required(data, 'roomCode'))
    cfg = current_app.config
    payload = phases.start_game(
        room,
        _get_sid(),
        data.get('crime'),
        data.get('accusedId'),
        min_players=int(cfg.get('MIN_PLAYERS', 2)),
        enforce_min_players=bool(cfg.get('ENFORCE_MIN_PLAYERS', True)),
        reset_scores=bool(cfg.get('RESET_SCORES_ON_START', True)),
    )
    current_app.logger.info(f"[game-started] room={room.code} players={len(room.players)}")
    _broadcast('gameStarted', payload, room.code)


@guarded
def handle_change_phase(data):
    room = get_room_store().get(_required(data, 'roomCode'))
    cfg = current_app.config
    payload = phases.change_phase(
        room,
        _get_sid(),
        data.get('phase'),
        data.get('timer'),
        vote_points=int(cfg.get('VOTE_POINTS', 3)),
        top_bonus=int(cfg.get('TOP_EVIDENCE_BONUS', 5)),
    )
    current_app.logger.info(f"[phase] room={room.code} phase={payload['phase']}")
    _broadcast('phaseChanged', payload, room.code)


@guarded
def handle_submit_evidence(data):
    room = get_room_store().get(_required(data, 'roomCode'))
    evidence = ledger.submit_evidence(
        room,
        _required(data, 'playerId'),
        _get_sid(),
        data.get('imageData'),
        data.get('caption'),
    )
    current_app.logger.info(f"[evidence] room={room.code} player={evidence.player_id}")
    _broadcast('evidenceSubmitted', {'playerId': evidence.player_id}, room.code)
    # Only the host sees submission progress
    _send_to(room.host_connection_id, 'playerJoined', {'players': room.roster()})


@guarded
def handle_vote(data):
    room = get_room_store().get(_required(data, 'roomCode'))
    voter_id = _required(data, 'playerId')
    evidence = ledger.cast_vote(room, voter_id, _get_sid(), _required(data, 'evidenceId'))
    _broadcast('voteReceived', {'evidenceId': evidence.id, 'playerId': voter_id}, room.code)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('createRoom', handle_create_room, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('startGame', handle_start_game, namespace=namespace)
    socketio.on_event('changePhase', handle_change_phase, namespace=namespace)
    socketio.on_event('submitEvidence', handle_submit_evidence, namespace=namespace)
    socketio.on_event('vote', handle_vote, namespace=namespace)
