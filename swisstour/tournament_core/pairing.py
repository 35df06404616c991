"""
Swiss pairing for a single round.

Players are ordered (shuffled for the first round, by score otherwise)
and paired off in consecutive twos. With an odd player count the last
player in that order receives the bye. Rematches are allowed.
"""

import logging
import random
import uuid
from typing import List, Optional, Sequence

from swisstour.tournament_core.structure import Match, MatchStatus, Pairing, Player

logger = logging.getLogger(__name__)


def order_players(
    players: Sequence[Player], first_round: bool, rng: random.Random
) -> List[Player]:
    """Return the pairing order for a round.

    The first round is a uniform shuffle. Later rounds sort by score
    descending with ties broken randomly on every call.
    """
    ordered = list(players)
    if first_round:
        rng.shuffle(ordered)
        return ordered

    keyed = [(-p.score, rng.random(), i) for i, p in enumerate(ordered)]
    keyed.sort()
    return [ordered[i] for _, _, i in keyed]


def new_match_id(rng: random.Random) -> str:
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def pair(
    players: Sequence[Player],
    first_round: bool = False,
    rng: Optional[random.Random] = None,
) -> Pairing:
    """Pair the next round.

    Args:
        players: The current player pool
        first_round: Shuffle instead of sorting by score
        rng: Source of randomness; a seeded instance makes the pairing reproducible

    Returns:
        Pairing with floor(n/2) matches and, for an odd pool, one bye player
    """
    if rng is None:
        rng = random.Random()

    ordered = order_players(players, first_round, rng)

    matches = []
    for i in range(0, len(ordered) - 1, 2):
        matches.append(
            Match(
                id=new_match_id(rng),
                players=(ordered[i], ordered[i + 1]),
                status=MatchStatus.ONGOING,
            )
        )

    bye_players = [ordered[-1]] if len(ordered) % 2 == 1 else []

    logger.debug(
        "Paired %d players into %d matches (%d bye, first_round=%s)",
        len(ordered),
        len(matches),
        len(bye_players),
        first_round,
    )
    return Pairing(matches=matches, bye_players=bye_players)
