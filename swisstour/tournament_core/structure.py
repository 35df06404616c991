"""
Core structures for representing Swiss divisions.

This module provides a simple, clean way to represent a division with:
- Players and their cumulative score
- Matches between exactly two players
- Confirmed match results keyed by match id
- Round records, the archived snapshot of each finished round
"""

from typing import Dict, List, Tuple, Optional
from dataclasses import dataclass, field, replace
from enum import Enum


@dataclass(frozen=True)
class Player:
    """A registered player. Score changes produce a new instance."""

    id: str
    name: str
    score: int = 0

    def with_score(self, score: int) -> "Player":
        return replace(self, score=score)


class MatchStatus(Enum):
    """Lifecycle of a match."""

    ONGOING = "ongoing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Match:
    """A match between exactly two players.

    The players are a snapshot taken when the match was paired, so their
    ``score`` reflects the standings at that moment, not the current one.
    """

    id: str
    players: Tuple[Player, Player]
    status: MatchStatus = MatchStatus.ONGOING
    history: Tuple[str, ...] = ()

    @property
    def player_ids(self) -> Tuple[str, str]:
        return (self.players[0].id, self.players[1].id)

    def involves(self, player_id: str) -> bool:
        return player_id in self.player_ids

    def opponent_of(self, player_id: str) -> Optional[Player]:
        """Return the other participant, or None if the player is not in this match."""
        first, second = self.players
        if first.id == player_id:
            return second
        if second.id == player_id:
            return first
        return None

    def completed(self) -> "Match":
        return replace(self, status=MatchStatus.COMPLETED)


@dataclass(frozen=True)
class MatchResult:
    """A confirmed result for a match.

    Empty winner and loser ids denote a tie. ``score`` is the literal
    "<a>-<b>" string the result was parsed from, from the perspective of
    the match's first player.
    """

    match_id: str
    winner_id: str
    loser_id: str
    is_two_zero: bool
    score: str

    @property
    def is_tie(self) -> bool:
        return not self.winner_id and not self.loser_id


@dataclass(frozen=True)
class RoundRecord:
    """An archived round: its matches, confirmed results and bye players."""

    round: int
    matches: List[Match] = field(default_factory=list)
    results: Dict[str, MatchResult] = field(default_factory=dict)
    bye_players: List[Player] = field(default_factory=list)

    def find_match(self, match_id: str) -> Optional[Match]:
        return find_match(self.matches, match_id)


@dataclass(frozen=True)
class Pairing:
    """The outcome of pairing one round."""

    matches: List[Match] = field(default_factory=list)
    bye_players: List[Player] = field(default_factory=list)


@dataclass(frozen=True)
class Division:
    """Complete state of one division, owned by the caller.

    The engine never stores a Division; it only receives slices of it.
    """

    id: str
    name: str
    players: List[Player] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)  # Current round
    results: Dict[str, MatchResult] = field(default_factory=dict)  # Current round
    round: int = 1
    records: List[RoundRecord] = field(default_factory=list)
    bye_players: List[Player] = field(default_factory=list)  # Current round
    started: bool = False
    ended: bool = False

    def find_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def find_match(self, match_id: str) -> Optional[Match]:
        return find_match(self.matches, match_id)

    @property
    def pending_matches(self) -> List[Match]:
        """Current-round matches that have no confirmed result."""
        return [m for m in self.matches if m.id not in self.results]


def find_match(matches: List[Match], match_id: str) -> Optional[Match]:
    """Find a match by id in a list of matches."""
    for match in matches:
        if match.id == match_id:
            return match
    return None
