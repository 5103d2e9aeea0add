"""Game errors reported back to the connection that caused them.

Every error carries a stable ``code`` (sent on the wire next to the human
readable message) so clients can react without parsing text.
"""


class GameError(Exception):
    """Base class for recoverable, client-caused failures."""

    code = 'GameError'
    message = 'Request could not be completed'

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self):
        return {'code': self.code, 'message': self.message}


class RoomNotFound(GameError):
    code = 'RoomNotFound'
    message = 'Room not found'


class GameAlreadyStarted(GameError):
    code = 'GameAlreadyStarted'
    message = 'The game has already started'


class GameNotStarted(GameError):
    code = 'GameNotStarted'
    message = 'The game has not started yet'


class NameTaken(GameError):
    code = 'NameTaken'
    message = 'That name is already taken'


class NotAuthorized(GameError):
    code = 'NotAuthorized'
    message = 'Only the host can do that'


class NotEnoughPlayers(GameError):
    code = 'NotEnoughPlayers'
    message = 'Not enough players to start'

    def __init__(self, min_players=None):
        message = None
        if min_players is not None:
            message = f'At least {min_players} players are required to start'
        super().__init__(message)


class PlayerNotFound(GameError):
    code = 'PlayerNotFound'
    message = 'Player not found in this room'


class AlreadySubmitted(GameError):
    code = 'AlreadySubmitted'
    message = 'Evidence already submitted'


class EvidenceNotFound(GameError):
    code = 'EvidenceNotFound'
    message = 'Evidence not found'


class SelfVote(GameError):
    code = 'SelfVote'
    message = 'You cannot vote for your own evidence'


class AlreadyInRoom(GameError):
    code = 'AlreadyInRoom'
    message = 'This connection is already in a room'


class InvalidPhase(GameError):
    code = 'InvalidPhase'
    message = 'Invalid phase'


class InvalidPayload(GameError):
    code = 'InvalidPayload'
    message = 'Invalid request'
