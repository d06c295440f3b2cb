"""
Seed placement: canonical seed-slot template and writes into a round or pools.

Template (recursive halving):
  seed 1 -> slot 0, seed 2 -> slot N-1
  seeds 3-4 -> the two slots that split the bracket in halves {N/2-1, N/2}
  seeds 5-8 -> the far end of each quarter that already holds a seed
  ... doubling the group size until every seed has a slot.

  8-draw  -> 0, 7, {4, 3}
  16-draw -> 0, 15, {8, 7}, {4, 11, 12, 3}

Only the group a seed falls into is fixed; the order inside a group comes
from the injected random source, so seeds 3 and 4 can swap halves.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from draw_engine.config import get_random_source
from draw_engine.errors import CapacityExceededError, InvalidArgumentError, StructuralMismatchError
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.pool import Pool
from draw_engine.models.round import Round
from draw_engine.utils.draw_math import is_power_of_two, next_power_of_two
from draw_engine.utils.game_slots import place_team

logger = logging.getLogger(__name__)


def seed_slot_groups(draw_size: int) -> List[List[int]]:
    """Template groups in seed order, unshuffled.

    16 -> [[0], [15], [7, 8], [3, 4, 11, 12], [1, 2, 5, 6, 9, 10, 13, 14]]
    """
    if draw_size == 1:
        return [[0]]

    groups: List[List[int]] = [[0], [draw_size - 1]]
    taken = {0, draw_size - 1}
    block = draw_size // 2
    while block >= 2:
        group: List[int] = []
        for start in range(0, draw_size, block):
            end = start + block - 1
            # each block holds exactly one earlier seed, at one of its ends
            group.append(end if start in taken else start)
        taken.update(group)
        groups.append(group)
        block //= 2
    return groups


def seed_positions(draw_size: int, nb_seeds: int, rng: Optional[random.Random] = None) -> List[int]:
    """Slot indices for seeds 1..nb_seeds, in seed order."""
    if draw_size < 0 or nb_seeds < 0:
        raise InvalidArgumentError(
            f"draw_size and nb_seeds must be >= 0 (draw_size={draw_size}, nb_seeds={nb_seeds})"
        )
    if nb_seeds == 0:
        return []
    if not is_power_of_two(draw_size):
        raise InvalidArgumentError(f"draw_size must be a power of two, got {draw_size}")
    if nb_seeds > draw_size:
        raise InvalidArgumentError(f"nb_seeds ({nb_seeds}) cannot exceed draw_size ({draw_size})")

    rng = rng or get_random_source()
    target = min(next_power_of_two(nb_seeds), draw_size)

    positions: List[int] = []
    for group in seed_slot_groups(draw_size):
        if len(positions) >= target:
            break
        shuffled = list(group)
        # seeds 1 and 2 are fixed; only later groups are drawn
        if len(positions) >= 2:
            rng.shuffle(shuffled)
        positions.extend(shuffled)

    return positions[:nb_seeds]


def sort_by_seed(pairs: Sequence[PlayerPair]) -> List[PlayerPair]:
    """Seeded pairs by ascending seed, then unseeded ones in input order."""
    seeded = sorted((p for p in pairs if p.is_seeded), key=lambda p: p.seed)
    unseeded = [p for p in pairs if not p.is_seeded]
    return seeded + unseeded


def place_seed_teams(
    rnd: Round,
    pairs_by_seed: Sequence[PlayerPair],
    nb_seeds: int,
    draw_size: int,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """Write the first nb_seeds pairs at their template slots.

    Returns the slots used, in seed order.
    """
    if nb_seeds < 0 or draw_size < 0:
        raise InvalidArgumentError(
            f"draw_size and nb_seeds must be >= 0 (draw_size={draw_size}, nb_seeds={nb_seeds})"
        )
    if draw_size != rnd.nb_slots:
        raise StructuralMismatchError(
            f"draw_size {draw_size} does not match {rnd.stage.value} slot count {rnd.nb_slots}"
        )

    count = min(nb_seeds, len(pairs_by_seed))
    if count == 0:
        return []

    slots = seed_positions(draw_size, nb_seeds, rng)[:count]
    for pair, slot in zip(pairs_by_seed, slots):
        place_team(rnd, slot, pair)
        logger.debug("Seed %s placed at slot %d of %s", pair.name, slot, rnd.stage.value)
    return slots


def place_seed_teams_in_pools(
    pools: Sequence[Pool],
    seeded_pairs: Sequence[PlayerPair],
    capacity_per_pool: Optional[int] = None,
) -> None:
    """Round-robin seeds across pools: seed 1 -> pool 0, seed 2 -> pool 1, ...

    A full pool is skipped and the seed falls to the next pool with room.
    """
    if not pools or not seeded_pairs:
        return

    def room(pool: Pool) -> int:
        cap = capacity_per_pool if capacity_per_pool is not None else pool.capacity
        return cap - pool.size

    idx = 0
    for pair in seeded_pairs:
        for attempt in range(len(pools)):
            pool = pools[(idx + attempt) % len(pools)]
            if room(pool) > 0:
                pool.add_pair(pair)
                idx = (idx + attempt + 1) % len(pools)
                logger.debug("Seed %s placed in %s", pair.name, pool.name)
                break
        else:
            raise CapacityExceededError(f"No pool has room left for seed {pair.name}")
