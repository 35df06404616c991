"""
Fluent assertion interface for testing division standings.

This module provides a clean, fluent way to assert scores, tiebreaks and
positions for testing purposes. It works with the pure Python
tournament_core structures.
"""

from typing import Dict, List, Optional, Union
from dataclasses import dataclass

from swisstour.tournament_core.standings import Standing, calculate_standings
from swisstour.tournament_core.structure import Division
from swisstour.tournament_core.tiebreaks import PlayerTiebreakers


# Use the built-in AssertionError for proper test framework integration


@dataclass
class StandingsAssertion:
    """Fluent interface for asserting division standings."""

    division: Division
    player_name: Optional[str] = None
    player_id: Optional[str] = None
    _standings: Optional[List[Standing]] = None
    _name_to_id: Optional[Dict[str, str]] = None

    def __post_init__(self):
        """Calculate standings once on initialization."""
        if self._standings is None:
            self._standings = calculate_standings(
                self.division.players, self.division.records
            )
        if self._name_to_id is None:
            self._name_to_id = {p.name: p.id for p in self.division.players}

    def player(self, name: str) -> "PlayerResultAssertion":
        """Select a player by name and start a chain of assertions."""
        if name not in self._name_to_id:
            raise AssertionError(f"Player '{name}' not found in division")
        return PlayerResultAssertion(
            division=self.division,
            player_name=name,
            player_id=self._name_to_id[name],
            _standings=self._standings,
            _name_to_id=self._name_to_id,
        )

    def order(self, *names: str) -> "StandingsAssertion":
        """Assert the leading rows of the standings, top first."""
        id_to_name = {v: k for k, v in self._name_to_id.items()}
        actual = [id_to_name.get(s.player_id, s.player_id) for s in self._standings]
        if actual[: len(names)] != list(names):
            raise AssertionError(f"expected standings to start {list(names)}, got {actual}")
        return self


class PlayerResultAssertion(StandingsAssertion):
    """Fluent interface for asserting one player's results."""

    def _get_standing(self) -> Standing:
        for standing in self._standings:
            if standing.player_id == self.player_id:
                return standing
        raise AssertionError(f"Player ID {self.player_id} not found in standings")

    def _get_tiebreakers(self) -> PlayerTiebreakers:
        return self._get_standing().tiebreakers

    def _check(self, label: str, actual, expected):
        if actual != expected:
            raise AssertionError(
                f"{self.player_name} expected {expected} {label}, got {actual}"
            )
        return self

    def _check_close(self, label: str, actual: float, expected: float):
        # Allow small floating point differences
        if abs(actual - expected) > 0.0001:
            raise AssertionError(
                f"{self.player_name} expected {expected} for {label}, got {actual}"
            )
        return self

    def score(self, expected: int) -> "PlayerResultAssertion":
        """Assert the cumulative score."""
        return self._check("points", self._get_tiebreakers().score, expected)

    def match_wins(self, expected: int) -> "PlayerResultAssertion":
        return self._check("match wins", self._get_tiebreakers().match_wins, expected)

    def match_losses(self, expected: int) -> "PlayerResultAssertion":
        return self._check(
            "match losses", self._get_tiebreakers().match_losses, expected
        )

    def games(self, won: int, lost: int) -> "PlayerResultAssertion":
        """Assert the game wins and losses."""
        tb = self._get_tiebreakers()
        return self._check("games (won, lost)", (tb.game_wins, tb.game_losses), (won, lost))

    def omw(self, expected: Union[int, float]) -> "PlayerResultAssertion":
        return self._check_close(
            "OMW%", self._get_tiebreakers().opponent_match_win_percentage, expected
        )

    def gw(self, expected: Union[int, float]) -> "PlayerResultAssertion":
        return self._check_close(
            "GW%", self._get_tiebreakers().game_win_percentage, expected
        )

    def ogw(self, expected: Union[int, float]) -> "PlayerResultAssertion":
        return self._check_close(
            "OGW%", self._get_tiebreakers().opponent_game_win_percentage, expected
        )

    def position(self, expected: int) -> "PlayerResultAssertion":
        """Assert the 1-based position in the standings."""
        return self._check("position", self._get_standing().rank, expected)


def assert_standings(division: Division) -> StandingsAssertion:
    """Entry point for standings assertions."""
    return StandingsAssertion(division)
