"""
Tiebreak calculation functions for Swiss divisions.

These functions calculate the percentage tiebreaks used to order players
with equal score:

- OMW%: opponents' match-win percentage
- GW%: the player's own game-win percentage
- OGW%: opponents' game-win percentage

Every percentage is floored at 0.33, and a player (or opponent set) with
nothing played gets exactly 0.33.
"""

import functools
import logging
from typing import Dict, List, Optional, Sequence
from dataclasses import dataclass, field

from swisstour.tournament_core.scoring import split_score
from swisstour.tournament_core.structure import Player, RoundRecord

logger = logging.getLogger(__name__)

PERCENTAGE_FLOOR = 0.33
TIEBREAK_EPSILON = 0.001


@dataclass(frozen=True)
class PlayerTiebreakers:
    """Derived tiebreak statistics for one player. Never persisted."""

    player_id: str
    player_name: str
    score: int
    match_wins: int
    match_losses: int
    game_wins: int
    game_losses: int
    opponent_match_win_percentage: float  # OMW%
    game_win_percentage: float  # GW%
    opponent_game_win_percentage: float  # OGW%


@dataclass
class _PlayerTally:
    """Running totals while scanning the round records."""

    player: Player
    match_wins: int = 0
    match_losses: int = 0
    game_wins: int = 0
    game_losses: int = 0
    opponents: List[str] = field(default_factory=list)

    def add_opponent(self, opponent_id: str):
        if opponent_id not in self.opponents:
            self.opponents.append(opponent_id)


def floored_percentage(won: int, lost: int) -> float:
    """Return won / (won + lost) floored at 0.33, or 0.33 when nothing was played."""
    total = won + lost
    if total <= 0:
        return PERCENTAGE_FLOOR
    return max(PERCENTAGE_FLOOR, won / total)


def _tally_records(
    players: Sequence[Player], records: Sequence[RoundRecord]
) -> Dict[str, _PlayerTally]:
    tallies = {p.id: _PlayerTally(player=p) for p in players}

    for record in records:
        for match_id, result in (record.results or {}).items():
            if not result:
                continue

            match = record.find_match(match_id)
            if match is None or len(match.players) != 2:
                logger.debug(
                    "Round %s: no two-player match for result %s", record.round, match_id
                )
                continue

            first = tallies.get(match.players[0].id)
            second = tallies.get(match.players[1].id)
            if first is None or second is None:
                logger.debug(
                    "Round %s: match %s references an unknown player",
                    record.round,
                    match_id,
                )
                continue

            parts = split_score(result.score)
            if parts is None:
                continue
            games1, games2 = parts

            first.add_opponent(second.player.id)
            second.add_opponent(first.player.id)

            first.game_wins += games1
            first.game_losses += games2
            second.game_wins += games2
            second.game_losses += games1

            # Ties count for neither side
            if result.winner_id == first.player.id:
                first.match_wins += 1
                second.match_losses += 1
            elif result.winner_id == second.player.id:
                second.match_wins += 1
                first.match_losses += 1

    return tallies


def calculate_tiebreakers(
    players: Sequence[Player], records: Sequence[RoundRecord]
) -> List[PlayerTiebreakers]:
    """
    Calculate tiebreak statistics for every player.

    Opponent percentages are pooled: the opponents' wins summed over the
    distinct opponent set, divided by their summed matches (or games). Each
    opponent counts once no matter how often they were met.

    Args:
        players: Players with their current score
        records: Every archived round, in round order

    Returns:
        List of PlayerTiebreakers in the same order as ``players``
    """
    tallies = _tally_records(players, records)

    tiebreakers = []
    for player in players:
        tally = tallies[player.id]

        opponent_match_wins = 0
        opponent_match_losses = 0
        opponent_game_wins = 0
        opponent_game_losses = 0
        for opponent_id in tally.opponents:
            opponent = tallies.get(opponent_id)
            if opponent is None:
                continue
            opponent_match_wins += opponent.match_wins
            opponent_match_losses += opponent.match_losses
            opponent_game_wins += opponent.game_wins
            opponent_game_losses += opponent.game_losses

        tiebreakers.append(
            PlayerTiebreakers(
                player_id=player.id,
                player_name=player.name,
                score=player.score,
                match_wins=tally.match_wins,
                match_losses=tally.match_losses,
                game_wins=tally.game_wins,
                game_losses=tally.game_losses,
                opponent_match_win_percentage=floored_percentage(
                    opponent_match_wins, opponent_match_losses
                ),
                game_win_percentage=floored_percentage(
                    tally.game_wins, tally.game_losses
                ),
                opponent_game_win_percentage=floored_percentage(
                    opponent_game_wins, opponent_game_losses
                ),
            )
        )

    return tiebreakers


def _compare_desc(a: float, b: float, epsilon: float) -> int:
    if abs(a - b) <= epsilon:
        return 0
    return -1 if a > b else 1


def compare_tiebreakers(a: PlayerTiebreakers, b: PlayerTiebreakers) -> int:
    """Comparator: negative when ``a`` ranks above ``b``."""
    if a.score != b.score:
        return -1 if a.score > b.score else 1

    for attr in (
        "opponent_match_win_percentage",
        "game_win_percentage",
        "opponent_game_win_percentage",
    ):
        cmp = _compare_desc(getattr(a, attr), getattr(b, attr), TIEBREAK_EPSILON)
        if cmp:
            return cmp
    return 0


def rank_by_tiebreakers(
    tiebreakers: Sequence[PlayerTiebreakers],
) -> List[PlayerTiebreakers]:
    """Sort by score, then OMW%, GW% and OGW%, all descending.

    Players tied on all four keys keep their input order.
    """
    return sorted(tiebreakers, key=functools.cmp_to_key(compare_tiebreakers))


def find_tiebreakers(
    tiebreakers: Sequence[PlayerTiebreakers], player_id: str
) -> Optional[PlayerTiebreakers]:
    for tb in tiebreakers:
        if tb.player_id == player_id:
            return tb
    return None
