"""Evidence submissions and ballots.

A room holds at most one evidence per player per game, and each player
holds at most one ballot. Moving a ballot takes the vote off the old
evidence before adding it to the new one, so the sum of evidence votes
always equals the number of ballots.
"""

from verdict.errors import AlreadySubmitted, EvidenceNotFound, PlayerNotFound, SelfVote
from verdict.models import Evidence, Player, Room, new_evidence_id


def _acting_player(room: Room, player_id, connection_id: str) -> Player:
    player = room.find_player(player_id)
    if not player or player.connection_id != connection_id:
        raise PlayerNotFound()
    return player


def submit_evidence(room: Room, player_id, connection_id: str, payload, caption) -> Evidence:
    player = _acting_player(room, player_id, connection_id)
    if player.evidence_submitted:
        raise AlreadySubmitted()

    evidence = Evidence(
        id=new_evidence_id(),
        player_id=player.id,
        player_name=player.name,
        payload=payload,
        caption=caption if caption is not None else '',
    )
    room.game_state.evidences.append(evidence)
    player.evidence_submitted = True
    return evidence


def cast_vote(room: Room, voter_id, connection_id: str, evidence_id) -> Evidence:
    """Record or move the voter's ballot onto ``evidence_id``."""
    voter = _acting_player(room, voter_id, connection_id)
    gs = room.game_state
    target = gs.find_evidence(evidence_id)
    if not target:
        raise EvidenceNotFound()
    if target.player_id == voter.id:
        raise SelfVote()

    previous_id = gs.votes.get(voter.id)
    if previous_id is not None:
        previous = gs.find_evidence(previous_id)
        if previous:
            previous.votes = max(0, previous.votes - 1)
    gs.votes[voter.id] = target.id
    target.votes += 1
    return target
