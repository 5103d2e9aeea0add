import random
import string
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits

LOBBY = 'lobby'
EVIDENCE = 'evidence'
TRIAL = 'trial'
RESULTS = 'results'


def generate_room_code(taken, length=4, alphabet=ROOM_CODE_ALPHABET, max_attempts=100000):
    """Generate a short room code not present in ``taken``."""
    for _ in range(max_attempts):
        code = ''.join(random.choices(alphabet, k=length))
        if code not in taken:
            return code
    raise RuntimeError(f'No free room code after {max_attempts} attempts')


def _unique_id(prefix: str) -> str:
    suffix = ''.join(random.choices(_SUFFIX_ALPHABET, k=9))
    return f"{prefix}-{time.time_ns()}-{suffix}"


def new_player_id() -> str:
    return _unique_id('player')


def new_evidence_id() -> str:
    return _unique_id('ev')


@dataclass
class Player:
    id: str
    name: str
    connection_id: str
    score: int = 0
    evidence_submitted: bool = False

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
            'evidenceSubmitted': self.evidence_submitted,
        }


@dataclass
class Evidence:
    id: str
    player_id: str
    player_name: str
    payload: object = None
    caption: str = ''
    votes: int = 0

    def to_dict(self):
        return {
            'id': self.id,
            'playerId': self.player_id,
            'playerName': self.player_name,
            'imageData': self.payload,
            'caption': self.caption,
            'votes': self.votes,
        }


@dataclass
class GameState:
    phase: str = LOBBY
    crime: str = ''
    accused_id: Optional[str] = None
    evidences: List[Evidence] = field(default_factory=list)
    # voter player id -> evidence id currently backed
    votes: Dict[str, str] = field(default_factory=dict)
    # set once per game session when results scoring has been applied
    scored: bool = False

    def find_evidence(self, evidence_id) -> Optional[Evidence]:
        for evidence in self.evidences:
            if evidence.id == evidence_id:
                return evidence
        return None


@dataclass
class Room:
    code: str
    host_connection_id: str
    players: List[Player] = field(default_factory=list)
    game_state: GameState = field(default_factory=GameState)
    created_at: float = field(default_factory=time.time)

    @property
    def phase(self) -> str:
        return self.game_state.phase

    def find_player(self, player_id) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def find_player_by_connection(self, connection_id) -> Optional[Player]:
        for player in self.players:
            if player.connection_id == connection_id:
                return player
        return None

    def roster(self):
        return [p.to_dict() for p in self.players]

    def scores(self):
        return {p.id: p.score for p in self.players}

    def evidence_list(self):
        return [e.to_dict() for e in self.game_state.evidences]

    def summary(self):
        return {
            'code': self.code,
            'phase': self.phase,
            'players': len(self.players),
        }

    def to_dict(self):
        gs = self.game_state
        return {
            'code': self.code,
            'phase': gs.phase,
            'crime': gs.crime,
            'accusedId': gs.accused_id,
            'players': self.roster(),
            'evidenceCount': len(gs.evidences),
            'ballotCount': len(gs.votes),
        }
