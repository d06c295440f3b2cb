"""
BYE placement for the first round of a knockout phase.

Byes needed = draw_size - real pairs - reserved qualifier slots - byes
already in the round.

Order of placement:
1. Opposite each seed, strongest seed first, when that slot is empty.
2. Opposite the rest of the seed template, slot by slot, so the pairs that
   later land on those slots get the byes and they spread evenly.
3. Only if byes remain: empty slots facing a BYE. That is the one way to get
   BYE vs BYE; it is expected with allow_bye_vs_bye (staggered entry) and
   logged as a warning otherwise.
"""

import logging
from typing import List, Optional

from draw_engine.config import DRAW_ALLOW_BYE_VS_BYE
from draw_engine.errors import CapacityExceededError, InvalidArgumentError, StructuralMismatchError
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.round import Round
from draw_engine.services.seed_placement import seed_slot_groups
from draw_engine.utils.draw_math import is_power_of_two, next_power_of_two
from draw_engine.utils.game_slots import count_byes, empty_slots, get_team, is_empty, opposite_slot, set_team

logger = logging.getLogger(__name__)


def needed_byes(
    draw_size: int,
    total_real_pairs: int,
    reserved_qualifier_slots: int = 0,
    existing_byes: int = 0,
) -> int:
    return max(0, draw_size - total_real_pairs - reserved_qualifier_slots - existing_byes)


def seed_slots_in_order(rnd: Round, nb_seeds: int, draw_size: int) -> List[int]:
    """Template slots that currently hold a real team, strongest seed first.

    The occupant's seed number drives the order, so the in-group shuffle done
    at seed placement time does not matter here.
    """
    if nb_seeds <= 0:
        return []

    target = min(next_power_of_two(nb_seeds), draw_size)
    candidates: List[int] = []
    for group in seed_slot_groups(draw_size):
        if len(candidates) >= target:
            break
        candidates.extend(group)

    occupied = []
    for slot in candidates:
        team = get_team(rnd, slot)
        if team is not None and team.is_real:
            rank = team.seed if team.is_seeded else draw_size + 1
            occupied.append((rank, slot))
    occupied.sort()
    return [slot for _, slot in occupied[:nb_seeds]]


def place_bye_teams(
    rnd: Round,
    total_real_pairs: int,
    nb_seeds: int,
    draw_size: int,
    reserved_qualifier_slots: int = 0,
    allow_bye_vs_bye: Optional[bool] = None,
) -> int:
    """Place the required BYEs into rnd. Returns the number placed."""
    if total_real_pairs < 0 or nb_seeds < 0 or reserved_qualifier_slots < 0:
        raise InvalidArgumentError(
            "total_real_pairs, nb_seeds and reserved_qualifier_slots must be >= 0"
        )
    if not is_power_of_two(draw_size):
        raise StructuralMismatchError(f"draw_size must be a power of two, got {draw_size}")
    if draw_size != rnd.nb_slots:
        raise StructuralMismatchError(
            f"draw_size {draw_size} does not match {rnd.stage.value} slot count {rnd.nb_slots}"
        )
    if total_real_pairs > draw_size:
        raise InvalidArgumentError(
            f"Too many pairs ({total_real_pairs}) for a draw of {draw_size}"
        )
    if allow_bye_vs_bye is None:
        allow_bye_vs_bye = DRAW_ALLOW_BYE_VS_BYE

    remaining = needed_byes(draw_size, total_real_pairs, reserved_qualifier_slots, count_byes(rnd))
    if remaining == 0:
        return 0

    available = len(empty_slots(rnd))
    if available < remaining:
        raise CapacityExceededError(
            f"{remaining} byes needed in {rnd.stage.value} but only {available} empty slots remain"
        )

    placed = 0

    # Strategy 1: opposite the seeds
    for seed_slot in seed_slots_in_order(rnd, nb_seeds, draw_size):
        if remaining == 0:
            break
        target = opposite_slot(seed_slot)
        if is_empty(rnd, target):
            set_team(rnd, target, PlayerPair.bye())
            remaining -= 1
            placed += 1

    # Strategy 2: opposite the remaining template slots, so byes spread over
    # the bracket the same way seeds do
    for slot in _template_order(draw_size):
        if remaining == 0:
            break
        target = opposite_slot(slot)
        holder = get_team(rnd, slot)
        if holder is not None and holder.is_bye:
            continue
        if is_empty(rnd, target):
            set_team(rnd, target, PlayerPair.bye())
            remaining -= 1
            placed += 1

    # Strategy 3: BYE vs BYE, no other room left
    if remaining > 0:
        if not allow_bye_vs_bye:
            logger.warning(
                "%s: %d byes left and every free slot faces a BYE, pairing byes together",
                rnd.stage.value,
                remaining,
            )
        for slot in empty_slots(rnd):
            if remaining == 0:
                break
            set_team(rnd, slot, PlayerPair.bye())
            remaining -= 1
            placed += 1

    logger.debug("Placed %d byes in %s", placed, rnd.stage.value)
    return placed


def _template_order(draw_size: int) -> List[int]:
    return [slot for group in seed_slot_groups(draw_size) for slot in group]
