"""Phase transitions for a room.

``lobby`` is the only initial phase and is left through ``start_game``.
After that the host drives the room through any named phases; only
``trial`` and ``results`` carry extra payload, and ``results`` applies
scoring once per game session.
"""

from flask import current_app

from verdict.errors import GameNotStarted, InvalidPhase, NotAuthorized, NotEnoughPlayers
from verdict.models import EVIDENCE, LOBBY, RESULTS, TRIAL, Room
from .scoring import score_results


def _require_host(room: Room, connection_id: str) -> None:
    if room.host_connection_id != connection_id:
        raise NotAuthorized()


def start_game(room: Room, connection_id: str, crime, accused_id,
               min_players: int = 2, enforce_min_players: bool = True,
               reset_scores: bool = True):
    """Reset the session and open the evidence phase. Returns the broadcast payload."""
    _require_host(room, connection_id)
    if enforce_min_players and len(room.players) < min_players:
        raise NotEnoughPlayers(min_players)

    # The accused need not be in the roster
    accused = room.find_player(accused_id)
    gs = room.game_state
    gs.phase = EVIDENCE
    gs.crime = crime if crime is not None else ''
    gs.accused_id = accused_id
    gs.evidences = []
    gs.votes = {}
    gs.scored = False
    for player in room.players:
        player.evidence_submitted = False
        if reset_scores:
            player.score = 0

    return {
        'crime': gs.crime,
        'accused': accused.to_dict() if accused else None,
    }


def change_phase(room: Room, connection_id: str, phase, timer=None,
                 vote_points: int = 3, top_bonus: int = 5):
    """Move the room to ``phase``. Returns the broadcast payload."""
    _require_host(room, connection_id)
    if not isinstance(phase, str) or not phase.strip():
        raise InvalidPhase('phase is required')
    if phase == LOBBY:
        raise InvalidPhase('Start a new game to return to the lobby')
    gs = room.game_state
    if gs.phase == LOBBY:
        raise GameNotStarted()

    gs.phase = phase
    data = {'phase': phase, 'timer': timer}

    if phase == TRIAL:
        data['evidences'] = room.evidence_list()
    elif phase == RESULTS:
        if not gs.scored:
            awarded = score_results(room, vote_points=vote_points, top_bonus=top_bonus)
            gs.scored = True
            current_app.logger.info(f"[scored] room={room.code} awarded={awarded}")
        else:
            current_app.logger.info(f"[score-skip] room={room.code} already scored this game")
        data['scores'] = room.scores()
        data['evidences'] = room.evidence_list()
    return data
