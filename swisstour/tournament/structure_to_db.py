"""
Convert tournament_core structures to database objects.

This module provides functions to convert a pure Division structure into
the Django models used for persistence. Matches, results and byes are
stored as JSON snapshots.
"""

from typing import Dict, List

from swisstour.tournament_core.structure import Division, Match, MatchResult, Player


def player_to_json(player: Player) -> Dict:
    return {"id": player.id, "name": player.name, "score": player.score}


def match_to_json(match: Match) -> Dict:
    return {
        "id": match.id,
        "players": [player_to_json(p) for p in match.players],
        "status": match.status.value,
        "history": list(match.history),
    }


def result_to_json(result: MatchResult) -> Dict:
    return {
        "matchId": result.match_id,
        "winnerId": result.winner_id,
        "loserId": result.loser_id,
        "isTwoZero": result.is_two_zero,
        "score": result.score,
    }


def matches_to_json(matches: List[Match]) -> List[Dict]:
    return [match_to_json(m) for m in matches]


def results_to_json(results: Dict[str, MatchResult]) -> Dict[str, Dict]:
    return {match_id: result_to_json(r) for match_id, r in results.items()}


def structure_to_db(division: Division):
    """Write a Division structure to the database.

    The division row is created or updated in place; its players and round
    records are replaced wholesale. Call inside a transaction.

    Args:
        division: The Division structure to persist

    Returns:
        The saved ``tournament.models.Division`` instance
    """
    from swisstour.tournament.models import (
        Division as DivisionModel,
        DivisionPlayer,
        DivisionRound,
    )

    model, _ = DivisionModel.objects.get_or_create(
        division_id=division.id, defaults={"name": division.name}
    )
    model.name = division.name
    model.round = division.round
    model.started = division.started
    model.ended = division.ended
    model.current_matches = matches_to_json(division.matches)
    model.current_results = results_to_json(division.results)
    model.bye_players = [player_to_json(p) for p in division.bye_players]
    model.save()

    model.players.all().delete()
    for seq, player in enumerate(division.players):
        DivisionPlayer.objects.create(
            division=model,
            player_id=player.id,
            name=player.name,
            score=player.score,
            seq=seq,
        )

    model.rounds.all().delete()
    for record in division.records:
        DivisionRound.objects.create(
            division=model,
            number=record.round,
            matches=matches_to_json(record.matches),
            results=results_to_json(record.results),
            bye_players=[player_to_json(p) for p in record.bye_players],
        )

    return model
