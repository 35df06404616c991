"""
Division workflow: the lifecycle of a Swiss division from registration to
final standings.

Every operation loads the division from a repository, derives a new
Division value using the tournament_core engine and saves it back. Scores
are always recomputed from the full round history after a round is
archived or a past round is edited.
"""

import logging
import random
import uuid
from dataclasses import replace
from typing import List, Optional, Sequence

from swisstour.tournament_core.pairing import pair
from swisstour.tournament_core.scoring import STANDARD_SCORING, ScoringSystem, parse_score
from swisstour.tournament_core.standings import (
    Standing,
    calculate_standings,
    recompute_scores,
)
from swisstour.tournament_core.structure import (
    Division,
    Match,
    MatchResult,
    MatchStatus,
    Player,
    RoundRecord,
)
from swisstour.tournament.repository import DivisionRepository, DjangoDivisionRepository

logger = logging.getLogger(__name__)


class DivisionError(Exception):
    pass


class DivisionNotFoundError(DivisionError):
    pass


class DivisionStateError(DivisionError):
    pass


class DivisionEndedError(DivisionStateError):
    pass


class NoResultsError(DivisionStateError):
    pass


class IncompleteResultsError(DivisionStateError):
    def __init__(self, pending: int):
        super().__init__(f"{pending} match(es) have no confirmed result")
        self.pending = pending


class UnknownMatchError(DivisionError):
    pass


class UnknownPlayerError(DivisionError):
    pass


class UnknownRoundError(DivisionError):
    pass


class DivisionSaveError(DivisionError):
    pass


def _refuse(error: DivisionStateError) -> DivisionStateError:
    logger.warning("Refused: %s", error)
    return error


def scoring_from_settings() -> ScoringSystem:
    """Build the ScoringSystem configured by ``SWISSTOUR_SCORING``."""
    from django.conf import settings

    overrides = getattr(settings, "SWISSTOUR_SCORING", None) or {}
    return replace(STANDARD_SCORING, **overrides)


class DivisionService:
    def __init__(
        self,
        repository: DivisionRepository,
        scoring: Optional[ScoringSystem] = None,
        rng: Optional[random.Random] = None,
    ):
        self.repository = repository
        self.scoring = scoring or STANDARD_SCORING
        self.rng = rng or random.Random()

    @classmethod
    def from_settings(cls, repository: Optional[DivisionRepository] = None):
        """Create a service backed by the database and configured from Django settings."""
        from django.conf import settings

        seed = getattr(settings, "SWISSTOUR_RANDOM_SEED", None)
        return cls(
            repository or DjangoDivisionRepository(),
            scoring=scoring_from_settings(),
            rng=random.Random(seed),
        )

    # Divisions

    def create_division(self, name: str) -> Division:
        division = Division(id=str(uuid.uuid4()), name=name)
        self._save(division)
        logger.info("Created division %s (%s)", division.name, division.id)
        return division

    def delete_division(self, division_id: str) -> bool:
        deleted = self.repository.delete(division_id)
        if deleted:
            logger.info("Deleted division %s", division_id)
        return deleted

    def list_divisions(self) -> List[Division]:
        return self.repository.all()

    def get_division(self, division_id: str) -> Division:
        division = self.repository.load(division_id)
        if division is None:
            raise DivisionNotFoundError(f"Division {division_id} does not exist")
        return division

    # Registration

    def add_player(self, division_id: str, name: str) -> Player:
        division = self.get_division(division_id)
        if division.ended:
            raise _refuse(DivisionEndedError(f"{division.name} has ended"))
        name = name.strip()
        if not name:
            raise ValueError("Player name must not be empty")

        player = Player(id=str(uuid.uuid4()), name=name, score=0)
        self._save(replace(division, players=division.players + [player]))
        logger.info("Added player %s to %s", name, division.name)
        return player

    def remove_player(self, division_id: str, player_id: str) -> Division:
        division = self.get_division(division_id)
        if division.started:
            raise _refuse(
                DivisionStateError("Players cannot be removed once the division started")
            )
        if division.find_player(player_id) is None:
            raise UnknownPlayerError(f"Player {player_id} is not in {division.name}")

        players = [p for p in division.players if p.id != player_id]
        return self._save(replace(division, players=players))

    # Rounds

    def start(self, division_id: str) -> Division:
        """Pair the first round at random and mark the division started."""
        division = self.get_division(division_id)
        if division.started:
            raise _refuse(DivisionStateError(f"{division.name} has already started"))
        if len(division.players) < 2:
            raise _refuse(DivisionStateError("At least two players are needed to start"))

        pairing = pair(division.players, first_round=True, rng=self.rng)
        division = self._save(
            replace(
                division,
                matches=pairing.matches,
                bye_players=pairing.bye_players,
                results={},
                started=True,
            )
        )
        logger.info(
            "Started %s with %d players, %d matches",
            division.name,
            len(division.players),
            len(division.matches),
        )
        return division

    def record_result(
        self, division_id: str, match_id: str, score: str
    ) -> Optional[MatchResult]:
        """Confirm a current-round result from a "<a>-<b>" score string.

        A malformed score leaves the match unconfirmed, dropping any result
        it had, and returns None.
        """
        division = self._get_active(division_id)
        match = division.find_match(match_id)
        if match is None:
            raise UnknownMatchError(f"Match {match_id} is not in the current round")

        result = parse_score(score, match.players, match.id)
        results = dict(division.results)
        if result is None:
            logger.warning("Ignoring malformed score %r for match %s", score, match_id)
            results.pop(match_id, None)
        else:
            results[match_id] = result
        self._save(replace(division, results=results))
        return result

    def clear_result(self, division_id: str, match_id: str) -> Division:
        division = self._get_active(division_id)
        if division.find_match(match_id) is None:
            raise UnknownMatchError(f"Match {match_id} is not in the current round")
        results = {k: v for k, v in division.results.items() if k != match_id}
        return self._save(replace(division, results=results))

    def pending_matches(self, division_id: str) -> List[Match]:
        return self.get_division(division_id).pending_matches

    def next_round(self, division_id: str, allow_incomplete: bool = False) -> Division:
        """Archive the current round and pair the next one by score.

        Raises:
            NoResultsError: no match of the round has a confirmed result
            IncompleteResultsError: some matches are unconfirmed and
                ``allow_incomplete`` is false
        """
        division = self._get_active(division_id)
        if division.matches and not division.results:
            raise _refuse(
                NoResultsError("Confirm at least one result before the next round")
            )
        pending = division.pending_matches
        if pending and not allow_incomplete:
            raise _refuse(IncompleteResultsError(len(pending)))

        record = RoundRecord(
            round=division.round,
            matches=[
                m.completed() if m.id in division.results else m
                for m in division.matches
            ],
            results=dict(division.results),
            bye_players=list(division.bye_players),
        )
        records = division.records + [record]
        players = recompute_scores(division.players, records, self.scoring)
        pairing = pair(players, first_round=False, rng=self.rng)

        division = self._save(
            replace(
                division,
                players=players,
                records=records,
                matches=pairing.matches,
                bye_players=pairing.bye_players,
                results={},
                round=division.round + 1,
            )
        )
        logger.info(
            "%s: archived round %d (%d unconfirmed), paired round %d",
            division.name,
            record.round,
            len(pending),
            division.round,
        )
        return division

    def repair_round(self, division_id: str) -> Division:
        """Throw away the current pairing and its results and pair again."""
        division = self._get_active(division_id)
        pairing = pair(
            division.players, first_round=not division.records, rng=self.rng
        )
        logger.info("%s: re-paired round %d", division.name, division.round)
        return self._save(
            replace(
                division,
                matches=pairing.matches,
                bye_players=pairing.bye_players,
                results={},
            )
        )

    def end(self, division_id: str) -> Division:
        division = self.get_division(division_id)
        if division.ended:
            return division
        logger.info("%s: ended after round %d", division.name, division.round)
        return self._save(replace(division, ended=True))

    # Corrections

    def edit_match_players(
        self,
        division_id: str,
        match_id: str,
        player_ids: Sequence[str],
        round_index: Optional[int] = None,
    ) -> Division:
        """Replace the participants of a match and drop its result.

        ``round_index`` selects an archived round (0-based); without it the
        current round is edited. Editing an archived round recomputes all
        scores.

        A new participant must not already play another match of that round
        or hold its bye.
        """
        division = self.get_division(division_id)
        if len(player_ids) != 2 or player_ids[0] == player_ids[1]:
            raise _refuse(DivisionStateError("A match needs two different players"))
        new_players = []
        for player_id in player_ids:
            player = division.find_player(player_id)
            if player is None:
                raise UnknownPlayerError(f"Player {player_id} is not in {division.name}")
            new_players.append(player)

        if round_index is None:
            if division.ended:
                raise _refuse(DivisionEndedError(f"{division.name} has ended"))
            if division.find_match(match_id) is None:
                raise UnknownMatchError(f"Match {match_id} is not in the current round")
            _check_unassigned(division.matches, division.bye_players, match_id, new_players)
            matches = _replace_match_players(division.matches, match_id, new_players)
            results = {k: v for k, v in division.results.items() if k != match_id}
            return self._save(replace(division, matches=matches, results=results))

        record = self._get_record(division, round_index)
        if record.find_match(match_id) is None:
            raise UnknownMatchError(f"Match {match_id} is not in round {record.round}")
        _check_unassigned(record.matches, record.bye_players, match_id, new_players)
        edited = replace(
            record,
            matches=_replace_match_players(record.matches, match_id, new_players),
            results={k: v for k, v in record.results.items() if k != match_id},
        )
        logger.info("%s: re-paired match %s in round %d", division.name, match_id, record.round)
        return self._save_with_records(division, round_index, edited)

    def edit_historical_result(
        self, division_id: str, round_index: int, match_id: str, score: str
    ) -> Optional[MatchResult]:
        """Correct the result of an archived match and recompute all scores.

        Uses the same parser as live entry; a malformed score changes
        nothing and returns None.
        """
        division = self.get_division(division_id)
        record = self._get_record(division, round_index)
        match = record.find_match(match_id)
        if match is None:
            raise UnknownMatchError(f"Match {match_id} is not in round {record.round}")

        result = parse_score(score, match.players, match.id)
        if result is None:
            logger.warning(
                "Ignoring malformed score %r for match %s in round %d",
                score,
                match_id,
                record.round,
            )
            return None

        results = dict(record.results)
        results[match_id] = result
        edited = replace(
            record,
            matches=[m.completed() if m.id == match_id else m for m in record.matches],
            results=results,
        )
        self._save_with_records(division, round_index, edited)
        logger.info(
            "%s: corrected match %s in round %d to %s",
            division.name,
            match_id,
            record.round,
            score,
        )
        return result

    # Standings

    def standings(self, division_id: str) -> List[Standing]:
        division = self.get_division(division_id)
        return calculate_standings(division.players, division.records)

    # Helpers

    def _get_active(self, division_id: str) -> Division:
        division = self.get_division(division_id)
        if division.ended:
            raise _refuse(DivisionEndedError(f"{division.name} has ended"))
        if not division.started:
            raise _refuse(DivisionStateError(f"{division.name} has not started"))
        return division

    def _get_record(self, division: Division, round_index: int) -> RoundRecord:
        if not 0 <= round_index < len(division.records):
            raise UnknownRoundError(
                f"{division.name} has no archived round at index {round_index}"
            )
        return division.records[round_index]

    def _save_with_records(
        self, division: Division, round_index: int, record: RoundRecord
    ) -> Division:
        records = list(division.records)
        records[round_index] = record
        players = recompute_scores(division.players, records, self.scoring)
        return self._save(replace(division, records=records, players=players))

    def _save(self, division: Division) -> Division:
        if not self.repository.save(division):
            raise DivisionSaveError(f"Could not save division {division.id}")
        return division


def _check_unassigned(
    matches: List[Match],
    bye_players: List[Player],
    match_id: str,
    players: List[Player],
):
    bye_ids = {p.id for p in bye_players}
    for player in players:
        if player.id in bye_ids:
            raise _refuse(DivisionStateError(f"{player.name} has the bye this round"))
        if any(m.id != match_id and m.involves(player.id) for m in matches):
            raise _refuse(
                DivisionStateError(f"{player.name} already plays another match this round")
            )


def _replace_match_players(
    matches: List[Match], match_id: str, players: List[Player]
) -> List[Match]:
    return [
        replace(m, players=(players[0], players[1]), status=MatchStatus.ONGOING)
        if m.id == match_id
        else m
        for m in matches
    ]
