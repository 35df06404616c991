"""
Configurable scoring for Swiss divisions.

This module defines how a literal "<a>-<b>" score string is parsed into a
result, and how confirmed results and byes are converted to points.
"""

import logging
import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from dataclasses import dataclass

from swisstour.tournament_core.structure import Match, MatchResult, Player, find_match

logger = logging.getLogger(__name__)

SCORE_PATTERN = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")


@dataclass(frozen=True)
class ScoringSystem:
    """Defines how results and byes are scored in a division."""

    # Decisive results
    win_points: int = 3
    two_zero_win_points: int = 7
    loss_points: int = 0

    # Ties only score when the score has the same components as scoring_draw;
    # any other tie ("0-0") is worth nothing to either player.
    scoring_draw: str = "1-1"
    draw_points: int = 3

    # Bye scoring
    bye_points: int = 6

    def tie_points(self, score: str) -> int:
        """Get the points each player receives for a tie with this score string."""
        parts = split_score(score)
        if parts is not None and parts == split_score(self.scoring_draw):
            return self.draw_points
        return 0

    def result_points(
        self, result: MatchResult, players: Tuple[Player, Player]
    ) -> Dict[str, int]:
        """
        Determine the points earned from one confirmed result.

        Args:
            result: The confirmed result
            players: The two players of the match the result belongs to

        Returns:
            Dictionary mapping player id to points earned (players that earn
            nothing are still present with 0)
        """
        if split_score(result.score) is None:
            return {}

        first, second = players
        if is_tie_score(result.score):
            points = self.tie_points(result.score)
            return {first.id: points, second.id: points}

        won = self.two_zero_win_points if result.is_two_zero else self.win_points
        return {result.winner_id: won, result.loser_id: self.loss_points}


# Pre-defined scoring systems
STANDARD_SCORING = ScoringSystem()


def split_score(score: Optional[str]) -> Optional[Tuple[int, int]]:
    """Return the two numeric components of a score string, or None if malformed."""
    if not score:
        return None
    m = SCORE_PATTERN.match(score)
    if m is None:
        return None
    return int(m.group(1)), int(m.group(2))


def is_tie_score(score: str) -> bool:
    parts = split_score(score)
    return parts is not None and parts[0] == parts[1]


def parse_score(
    score: Optional[str], players: Sequence[Player], match_id: str = ""
) -> Optional[MatchResult]:
    """
    Parse a literal "<a>-<b>" score into a result.

    ``a`` is the first player's component. Equal components are a tie with
    empty winner and loser ids. Otherwise the higher side wins, and the
    result is a two-zero win when either component is exactly 2.

    The stored score is normalised to "<a>-<b>" without padding.
    Returns None for a missing or malformed score; the match must then be
    treated as unconfirmed.
    """
    parts = split_score(score)
    if parts is None or len(players) != 2:
        return None

    a, b = parts
    normalised = f"{a}-{b}"
    if a == b:
        return MatchResult(
            match_id=match_id,
            winner_id="",
            loser_id="",
            is_two_zero=False,
            score=normalised,
        )

    first, second = players[0], players[1]
    winner, loser = (first, second) if a > b else (second, first)
    return MatchResult(
        match_id=match_id,
        winner_id=winner.id,
        loser_id=loser.id,
        is_two_zero=(a == 2 or b == 2),
        score=normalised,
    )


def apply_results(
    players: Iterable[Player],
    results: Mapping[str, MatchResult],
    matches: Sequence[Match],
    bye_players: Iterable[Player] = (),
    scoring: ScoringSystem = STANDARD_SCORING,
) -> List[Player]:
    """
    Add the points of one round's confirmed results and byes to the players.

    Args:
        players: Current players; never mutated
        results: Confirmed results keyed by match id (unconfirmed matches absent)
        matches: The round's matches, used to find the participants of ties
        bye_players: Players who sat out the round
        scoring: Point table to use

    Returns:
        New list of players in the same order with updated scores
    """
    deltas: Dict[str, int] = {}

    for match_id, result in results.items():
        if result is None:
            continue
        match = find_match(matches, match_id)
        if match is None or len(match.players) != 2:
            if result.is_tie:
                logger.debug("Skipping tie for unknown match %s", match_id)
                continue
            # A decisive result still names its winner without the match
            players_for_result = (
                Player(result.winner_id, ""),
                Player(result.loser_id, ""),
            )
        else:
            players_for_result = match.players

        points = scoring.result_points(result, players_for_result)
        if not points:
            logger.debug(
                "Skipping malformed score %r for match %s", result.score, match_id
            )
        for player_id, earned in points.items():
            if player_id:
                deltas[player_id] = deltas.get(player_id, 0) + earned

    for bye_player in bye_players:
        deltas[bye_player.id] = deltas.get(bye_player.id, 0) + scoring.bye_points

    return [p.with_score(p.score + deltas.get(p.id, 0)) for p in players]
