from typing import Dict

from verdict.models import Room


def score_results(room: Room, vote_points: int = 3, top_bonus: int = 5) -> Dict[str, int]:
    """Apply results scoring for the room's evidence.

    Each submitter earns ``vote_points`` per vote their evidence received.
    Every evidence tied at the highest vote count (when that count is above
    zero) earns its submitter ``top_bonus`` on top. Submitters who already
    left the room are skipped. Returns the points awarded per player id.
    """
    evidences = room.game_state.evidences
    if not evidences:
        return {}
    max_votes = max(e.votes for e in evidences)

    awarded: Dict[str, int] = {}
    for evidence in evidences:
        player = room.find_player(evidence.player_id)
        if not player:
            continue
        points = evidence.votes * vote_points
        if max_votes > 0 and evidence.votes == max_votes:
            points += top_bonus
        player.score += points
        awarded[player.id] = awarded.get(player.id, 0) + points
    return awarded
