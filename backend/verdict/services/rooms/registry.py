import threading
from collections import namedtuple
from typing import Dict, List, Optional, Tuple

from verdict.errors import (
    AlreadyInRoom,
    GameAlreadyStarted,
    InvalidPayload,
    NameTaken,
    RoomNotFound,
)
from verdict.models import (
    LOBBY,
    ROOM_CODE_ALPHABET,
    Player,
    Room,
    generate_room_code,
    new_player_id,
)

# Result of releasing a connection: the player is None when the host left
Departure = namedtuple('Departure', ['room', 'player', 'host_left'])


def room_channel(code: str) -> str:
    """Socket.IO room name used to broadcast to everyone in a game room."""
    return f"room:{code}"


def normalize_code(code) -> str:
    if code is None:
        return ''
    return str(code).strip().upper()


class RoomStore:
    """In-memory registry of live rooms.

    Also keeps a connection index (sid -> (room code, player id)) so the
    owner of a connection can be found without scanning every room. The
    host of a room is indexed with a player id of None.

    Callers are expected to hold ``lock`` for the duration of an inbound
    event so each event runs to completion before the next one.
    """

    def __init__(self, code_length=4, alphabet=ROOM_CODE_ALPHABET):
        self.code_length = code_length
        self.alphabet = alphabet
        self.rooms: Dict[str, Room] = {}
        self._connections: Dict[str, Tuple[str, Optional[str]]] = {}
        self.lock = threading.RLock()

    def __len__(self):
        return len(self.rooms)

    def __contains__(self, code):
        return normalize_code(code) in self.rooms

    def get(self, code) -> Room:
        room = self.rooms.get(normalize_code(code))
        if room is None:
            raise RoomNotFound()
        return room

    def create_room(self, host_connection_id: str) -> Room:
        if host_connection_id in self._connections:
            raise AlreadyInRoom()
        code = generate_room_code(self.rooms, length=self.code_length, alphabet=self.alphabet)
        room = Room(code=code, host_connection_id=host_connection_id)
        self.rooms[code] = room
        self._connections[host_connection_id] = (code, None)
        return room

    def join_room(self, code, name: str, connection_id: str) -> Tuple[Room, Player]:
        room = self.get(code)
        if room.phase != LOBBY:
            raise GameAlreadyStarted()
        if not isinstance(name, str) or not name.strip():
            raise InvalidPayload('playerName is required')
        if any(p.name == name for p in room.players):
            raise NameTaken()
        if connection_id in self._connections:
            raise AlreadyInRoom()

        player = Player(id=new_player_id(), name=name, connection_id=connection_id)
        room.players.append(player)
        self._connections[connection_id] = (room.code, player.id)
        return room, player

    def locate(self, connection_id: str) -> Optional[Tuple[Room, Optional[Player]]]:
        entry = self._connections.get(connection_id)
        if not entry:
            return None
        code, player_id = entry
        room = self.rooms.get(code)
        if room is None:
            self._connections.pop(connection_id, None)
            return None
        player = room.find_player(player_id) if player_id else None
        return room, player

    def release_connection(self, connection_id: str) -> Optional[Departure]:
        """Forget a connection: destroy its room if it hosted one, else drop its player."""
        located = self.locate(connection_id)
        if not located:
            return None
        room, player = located
        if room.host_connection_id == connection_id:
            self.destroy_room(room.code)
            return Departure(room, None, True)

        self._connections.pop(connection_id, None)
        room.players = [p for p in room.players if p.connection_id != connection_id]
        return Departure(room, player, False)

    def destroy_room(self, code) -> Optional[Room]:
        room = self.rooms.pop(normalize_code(code), None)
        if room is None:
            return None
        self._connections.pop(room.host_connection_id, None)
        for player in room.players:
            self._connections.pop(player.connection_id, None)
        return room

    def empty_room_codes(self) -> List[str]:
        return [code for code, room in self.rooms.items() if not room.players]

    def summary(self):
        return [room.summary() for room in self.rooms.values()]
