"""
Staggered seed entry: the top half of the seeds skips the first round.

  first round   -> seeds (total - total // 2 + 1)..total, on their template slots
  second round  -> seeds 1..total // 2, entered directly

A seed entering late keeps the template slot it would have had in the first
round; that first-round game is a BYE vs BYE walkover and the seed sits in
the second-round slot it feeds, registered on the round (Round.entries) so
propagation writes the seed there instead of the walkover's BYE.

  16-draw, 4 seeds -> R16 slots 0 and 15 hold BYE vs BYE,
                      QUARTERS slots 0 and 7 hold seeds 1 and 2,
                      seeds 3 and 4 play R16 from slots {7, 8}
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, Tuple

from draw_engine.errors import InvalidArgumentError, StructuralMismatchError
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.round import Round
from draw_engine.models.stage import Stage
from draw_engine.services.seed_placement import seed_positions
from draw_engine.utils.game_slots import game_index, opposite_slot, place_team

logger = logging.getLogger(__name__)


def seeds_entering_at_stage(stage: Stage, draw_size: int, total_seeds: int) -> int:
    """Seeds joining at stage when the ladder starts with draw_size slots.

    64-draw, 16 seeds: 8 at R64 (seeds 9-16), 8 at R32 (seeds 1-8).
    An odd seed count puts the extra seed in the first round.
    """
    if total_seeds <= 0 or draw_size < 4:
        return 0
    if stage == Stage.from_nb_teams(draw_size):
        return total_seeds - total_seeds // 2
    if stage == Stage.from_nb_teams(draw_size // 2):
        return total_seeds // 2
    return 0


def place_seed_teams_staggered(
    first: Round,
    second: Round,
    pairs_by_seed: Sequence[PlayerPair],
    total_seeds: int,
    rng: Optional[random.Random] = None,
) -> Tuple[List[int], List[int]]:
    """Place seeds over the first two rounds of a ladder.

    Returns (first-round slots of the seeds playing it, second-round slots
    of the seeds entering late), both in seed order.
    """
    draw_size = first.nb_slots
    if second.nb_slots * 2 != draw_size:
        raise StructuralMismatchError(
            f"{second.stage.value} does not follow {first.stage.value} ({second.nb_slots} vs {draw_size} slots)"
        )
    if total_seeds < 0 or total_seeds > draw_size // 2:
        raise InvalidArgumentError(
            f"Staggered entry takes between 0 and {draw_size // 2} seeds in a draw of {draw_size} (got {total_seeds})"
        )

    count = min(total_seeds, len(pairs_by_seed))
    if count == 0:
        return [], []

    positions = seed_positions(draw_size, count, rng)
    late = seeds_entering_at_stage(second.stage, draw_size, count)

    entry_slots: List[int] = []
    for pair, slot in zip(pairs_by_seed[:late], positions[:late]):
        place_team(first, slot, PlayerPair.bye())
        place_team(first, opposite_slot(slot), PlayerPair.bye())
        entry = game_index(slot)
        place_team(second, entry, pair)
        second.register_entry(entry, pair)
        entry_slots.append(entry)
        logger.debug("Seed %s enters at slot %d of %s", pair.name, entry, second.stage.value)

    first_slots = positions[late:count]
    for pair, slot in zip(pairs_by_seed[late:count], first_slots):
        place_team(first, slot, pair)
        logger.debug("Seed %s placed at slot %d of %s", pair.name, slot, first.stage.value)

    return first_slots, entry_slots
