"""
Transform database models to tournament_core structure representation.

This module provides functions to convert the Django models from
swisstour.tournament into the clean tournament_core structures the engine
works with.
"""

import logging
from typing import Dict, List, Optional

from swisstour.tournament_core.structure import (
    Division,
    Match,
    MatchResult,
    MatchStatus,
    Player,
    RoundRecord,
)

logger = logging.getLogger(__name__)


def player_from_json(data: Dict) -> Player:
    return Player(
        id=str(data["id"]), name=data.get("name", ""), score=int(data.get("score", 0))
    )


def match_from_json(data: Dict) -> Optional[Match]:
    """Convert a stored match snapshot; None when it does not hold exactly two players."""
    players = data.get("players") or []
    if len(players) != 2:
        logger.warning(
            "Skipping stored match %s with %d players", data.get("id"), len(players)
        )
        return None
    try:
        status = MatchStatus(data.get("status", MatchStatus.ONGOING.value))
    except ValueError:
        status = MatchStatus.ONGOING
    return Match(
        id=str(data["id"]),
        players=(player_from_json(players[0]), player_from_json(players[1])),
        status=status,
        history=tuple(data.get("history") or ()),
    )


def result_from_json(match_id: str, data: Dict) -> MatchResult:
    return MatchResult(
        match_id=data.get("matchId") or match_id,
        winner_id=data.get("winnerId") or "",
        loser_id=data.get("loserId") or "",
        is_two_zero=bool(data.get("isTwoZero", False)),
        score=data.get("score") or "",
    )


def matches_from_json(items: List[Dict]) -> List[Match]:
    matches = []
    for item in items or []:
        match = match_from_json(item)
        if match is not None:
            matches.append(match)
    return matches


def results_from_json(items: Dict[str, Dict]) -> Dict[str, MatchResult]:
    # Unconfirmed matches may have been stored as null
    return {
        match_id: result_from_json(match_id, data)
        for match_id, data in (items or {}).items()
        if data
    }


def division_to_structure(model) -> Division:
    """Convert a Division model instance to a Division structure.

    Args:
        model: A ``tournament.models.Division`` instance

    Returns:
        Division structure with players, current round and round records
    """
    players = [
        Player(id=p.player_id, name=p.name, score=p.score)
        for p in model.players.all().order_by("seq", "id")
    ]
    records = [
        RoundRecord(
            round=r.number,
            matches=matches_from_json(r.matches),
            results=results_from_json(r.results),
            bye_players=[player_from_json(p) for p in r.bye_players or []],
        )
        for r in model.rounds.all().order_by("number", "id")
    ]
    return Division(
        id=model.division_id,
        name=model.name,
        players=players,
        matches=matches_from_json(model.current_matches),
        results=results_from_json(model.current_results),
        round=model.round,
        records=records,
        bye_players=[player_from_json(p) for p in model.bye_players or []],
        started=model.started,
        ended=model.ended,
    )
