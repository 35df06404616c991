"""
Builder for creating division histories with a fluent API.

This module provides a builder class for creating tournament_core
structures by player name, without any database dependencies. It is used
by the tests and by the division simulation command.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass, field

from swisstour.tournament_core.scoring import STANDARD_SCORING, ScoringSystem, parse_score
from swisstour.tournament_core.standings import recompute_scores
from swisstour.tournament_core.structure import (
    Division,
    Match,
    MatchResult,
    MatchStatus,
    Player,
    RoundRecord,
)


@dataclass
class _RoundDraft:
    number: int
    matches: List[Match] = field(default_factory=list)
    results: Dict[str, MatchResult] = field(default_factory=dict)
    bye_players: List[Player] = field(default_factory=list)

    def freeze(self) -> RoundRecord:
        return RoundRecord(
            round=self.number,
            matches=list(self.matches),
            results=dict(self.results),
            bye_players=list(self.bye_players),
        )


class DivisionBuilder:
    """Builder for creating division structures easily."""

    def __init__(
        self,
        name: str = "Test Division",
        division_id: str = "division-1",
        scoring: ScoringSystem = STANDARD_SCORING,
    ):
        self.name = name
        self.division_id = division_id
        self.scoring = scoring
        self.players: Dict[str, Player] = {}  # name -> player
        self.rounds: List[_RoundDraft] = []
        self.current_round: Optional[_RoundDraft] = None
        self._next_player_id = 1

    def player(self, name: str) -> "DivisionBuilder":
        """Add a player by name."""
        if name not in self.players:
            self.players[name] = Player(id=str(self._next_player_id), name=name)
            self._next_player_id += 1
        return self

    def players_named(self, *names: str) -> "DivisionBuilder":
        for name in names:
            self.player(name)
        return self

    def player_id(self, name: str) -> str:
        return self._get_player(name).id

    def round(self, number: Optional[int] = None) -> "DivisionBuilder":
        """Start a new round; numbers default to the next one."""
        if number is None:
            number = len(self.rounds) + 1
        self.current_round = _RoundDraft(number)
        self.rounds.append(self.current_round)
        return self

    def match(
        self, first: str, second: str, score: Optional[str] = None
    ) -> "DivisionBuilder":
        """Pair two named players in the current round.

        The score is from the first player's perspective; leave it out (or
        pass a malformed one) to keep the match unconfirmed.
        """
        draft = self._require_round()
        players = (self._get_player(first), self._get_player(second))
        match_id = f"r{draft.number}-m{len(draft.matches) + 1}"

        result = parse_score(score, players, match_id)
        status = MatchStatus.COMPLETED if result else MatchStatus.ONGOING
        draft.matches.append(Match(id=match_id, players=players, status=status))
        if result is not None:
            draft.results[match_id] = result
        return self

    def bye(self, name: str) -> "DivisionBuilder":
        """Give a named player the bye in the current round."""
        self._require_round().bye_players.append(self._get_player(name))
        return self

    def records(self) -> List[RoundRecord]:
        return [draft.freeze() for draft in self.rounds]

    def build(self) -> Division:
        """Build the division with scores replayed from the rounds added so far."""
        records = self.records()
        players = recompute_scores(list(self.players.values()), records, self.scoring)
        return Division(
            id=self.division_id,
            name=self.name,
            players=players,
            round=len(records) + 1,
            records=records,
            started=bool(records),
        )

    def _require_round(self) -> _RoundDraft:
        if self.current_round is None:
            raise ValueError("Must add a round before adding matches or byes")
        return self.current_round

    def _get_player(self, name: str) -> Player:
        player = self.players.get(name)
        if player is None:
            raise ValueError(f"Player not found: {name}")
        return player
