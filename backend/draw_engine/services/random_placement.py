"""
Fill the slots left after seeds and byes.

Only empty slots are touched. Pairs beyond the number of empty slots are not
placed; this is logged, not raised.
"""

import logging
import random
from typing import List, Optional, Sequence

from draw_engine.config import get_random_source
from draw_engine.errors import CapacityExceededError
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.pool import Pool
from draw_engine.models.round import Round
from draw_engine.utils.game_slots import empty_slots, fill_sequentially, set_team

logger = logging.getLogger(__name__)


def place_remaining_teams_randomly(
    rnd: Optional[Round],
    pairs: Optional[Sequence[PlayerPair]],
    rng: Optional[random.Random] = None,
) -> int:
    """Shuffle pairs into the empty slots (or pools) of rnd. Returns how many were placed."""
    if rnd is None or not pairs:
        return 0
    rng = rng or get_random_source()

    shuffled = list(pairs)
    rng.shuffle(shuffled)
    if rnd.is_group_round:
        return _fill_pools(rnd.pools, shuffled)
    return _fill_slots(rnd, shuffled)


def place_teams_in_order(rnd: Optional[Round], pairs: Optional[Sequence[PlayerPair]]) -> int:
    """Fill empty slots first-to-last (or pools, balanced) in input order."""
    if rnd is None or not pairs:
        return 0
    if rnd.is_group_round:
        return _fill_pools(rnd.pools, list(pairs))
    return _fill_slots(rnd, list(pairs))


def place_qualifier_placeholders(
    rnd: Round,
    nb_qualifiers: int,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """Reserve nb_qualifiers random empty slots for QUALIFIER placeholders.

    Ordinals 1..n follow bracket order of the chosen slots and are recorded
    on the round, so cross-phase propagation can find each slot again after
    the placeholder has been replaced.
    """
    if nb_qualifiers <= 0:
        return []
    rng = rng or get_random_source()

    free = empty_slots(rnd)
    if len(free) < nb_qualifiers:
        raise CapacityExceededError(
            f"{nb_qualifiers} qualifier slots needed in {rnd.stage.value} but only {len(free)} are empty"
        )

    chosen = sorted(rng.sample(free, nb_qualifiers))
    for ordinal, slot in enumerate(chosen, start=1):
        set_team(rnd, slot, PlayerPair.qualifier(ordinal))
        rnd.register_qualifier_slot(ordinal, slot)
    logger.debug("Reserved %d qualifier slots in %s: %s", nb_qualifiers, rnd.stage.value, chosen)
    return chosen


def _fill_slots(rnd: Round, pairs: List[PlayerPair]) -> int:
    free = empty_slots(rnd)
    if len(pairs) > len(free):
        logger.warning(
            "%s: %d pairs for %d empty slots, %d left unplaced",
            rnd.stage.value,
            len(pairs),
            len(free),
            len(pairs) - len(free),
        )
    return fill_sequentially(rnd, pairs)


def _fill_pools(pools: Sequence[Pool], pairs: List[PlayerPair]) -> int:
    """Each pair goes to the least filled pool with room; ties go to the first pool."""
    placed = 0
    for pair in pairs:
        open_pools = [p for p in pools if not p.is_full]
        if not open_pools:
            logger.warning("All pools are full, %d pairs left unplaced", len(pairs) - placed)
            break
        target = min(open_pools, key=lambda p: p.size)
        target.add_pair(pair)
        placed += 1
    return placed
