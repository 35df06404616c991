import logging

from swisstour.tournament.divisions import DivisionService


class Shush:
    def __enter__(self):
        logging.disable(logging.CRITICAL)
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        logging.disable(logging.NOTSET)
        return False


def create_started_division(service: DivisionService, *names: str, name="Division"):
    """Create a division with the named players and pair its first round."""
    division = service.create_division(name)
    for player_name in names:
        service.add_player(division.id, player_name)
    return service.start(division.id)


def player_named(division, name):
    return next(p for p in division.players if p.name == name)


def score_of(division, name):
    return player_named(division, name).score


def score_for(match, winner_id, score="1-0"):
    """Orient a "<winner>-<loser>" score to the match's first player."""
    if match.players[0].id == winner_id:
        return score
    high, low = score.split("-")
    return f"{low}-{high}"
