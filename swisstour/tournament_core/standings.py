"""
Standings derived from a division's full round history.

Scores are never patched incrementally: every player is reset to zero and
every archived round is replayed in order, so edits to any past round are
reflected exactly.
"""

from typing import List, Sequence
from dataclasses import dataclass

from swisstour.tournament_core.scoring import (
    STANDARD_SCORING,
    ScoringSystem,
    apply_results,
)
from swisstour.tournament_core.structure import Player, RoundRecord
from swisstour.tournament_core.tiebreaks import (
    PlayerTiebreakers,
    calculate_tiebreakers,
    rank_by_tiebreakers,
)


@dataclass(frozen=True)
class Standing:
    """One row of the standings table."""

    rank: int
    tiebreakers: PlayerTiebreakers

    @property
    def player_id(self) -> str:
        return self.tiebreakers.player_id

    @property
    def score(self) -> int:
        return self.tiebreakers.score


def recompute_scores(
    players: Sequence[Player],
    records: Sequence[RoundRecord],
    scoring: ScoringSystem = STANDARD_SCORING,
) -> List[Player]:
    """
    Reset every score to zero and replay all round records.

    Each round's confirmed results are applied first, then that round's bye
    bonuses. Calling this twice with the same inputs gives the same scores.

    Args:
        players: The player pool; never mutated
        records: Every archived round, in round order
        scoring: Point table to use

    Returns:
        New list of players in the same order with replayed scores
    """
    replayed = [p.with_score(0) for p in players]
    for record in sorted(records, key=lambda r: r.round):
        replayed = apply_results(
            replayed,
            record.results or {},
            record.matches,
            record.bye_players,
            scoring,
        )
    return replayed


def calculate_standings(
    players: Sequence[Player], records: Sequence[RoundRecord]
) -> List[Standing]:
    """Build the standings table.

    With history the rows follow the Swiss tiebreak ranking; with no round
    archived yet they are ordered by score alone.
    """
    tiebreakers = calculate_tiebreakers(players, records)
    if records:
        ordered = rank_by_tiebreakers(tiebreakers)
    else:
        ordered = sorted(tiebreakers, key=lambda tb: -tb.score)
    return [Standing(rank=i + 1, tiebreakers=tb) for i, tb in enumerate(ordered)]
