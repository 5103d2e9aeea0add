import os


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    # Comma-separated list, or '*' for any origin
    CORS_ALLOWED_ORIGINS = os.environ.get('CORS_ALLOWED_ORIGINS', '*')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '4'))
    # Idle room sweep period (seconds)
    ROOM_SWEEP_INTERVAL_SEC = int(os.environ.get('ROOM_SWEEP_INTERVAL_SEC', '300'))
    # Minimum players before the host may start a game
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '2'))
    ENFORCE_MIN_PLAYERS = _env_flag('ENFORCE_MIN_PLAYERS', True)
    # Scoring applied when the room enters the results phase
    VOTE_POINTS = int(os.environ.get('VOTE_POINTS', '3'))
    TOP_EVIDENCE_BONUS = int(os.environ.get('TOP_EVIDENCE_BONUS', '5'))
    RESET_SCORES_ON_START = _env_flag('RESET_SCORES_ON_START', True)
