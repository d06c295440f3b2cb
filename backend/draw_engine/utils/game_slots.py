"""
Flat slot addressing for knockout rounds.

Slot i lives in game i // 2: team A for even slots, team B for odd ones.
A slot is empty only when it holds None; BYE and QUALIFIER placeholders
count as filled.
"""

from typing import List, Optional, Sequence

from draw_engine.errors import OccupiedSlotError
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.round import Round
from draw_engine.models.score import TeamSide


def game_index(slot: int) -> int:
    return slot // 2


def side_of(slot: int) -> TeamSide:
    return TeamSide.TEAM_A if slot % 2 == 0 else TeamSide.TEAM_B


def opposite_slot(slot: int) -> int:
    return slot + 1 if slot % 2 == 0 else slot - 1


def get_team(rnd: Round, slot: int) -> Optional[PlayerPair]:
    return rnd.games[game_index(slot)].team(side_of(slot))


def set_team(rnd: Round, slot: int, pair: Optional[PlayerPair]) -> None:
    rnd.games[game_index(slot)].set_team(side_of(slot), pair)


def is_empty(rnd: Round, slot: int) -> bool:
    return get_team(rnd, slot) is None


def place_team(rnd: Round, slot: int, pair: PlayerPair, allow_qualifier_overwrite: bool = False) -> None:
    """Write pair into an empty slot, raising OccupiedSlotError otherwise."""
    current = get_team(rnd, slot)
    if current is not None and not (allow_qualifier_overwrite and current.is_qualifier):
        raise OccupiedSlotError(
            f"Slot {slot} of {rnd.stage.value} already holds {current.name}, cannot place {pair.name}"
        )
    set_team(rnd, slot, pair)


def empty_slots(rnd: Round) -> List[int]:
    return [slot for slot in range(rnd.nb_slots) if is_empty(rnd, slot)]


def count_byes(rnd: Round) -> int:
    return sum(1 for t in rnd.teams() if t.is_bye)


def fill_sequentially(rnd: Round, pairs: Sequence[PlayerPair]) -> int:
    """Place pairs into empty slots in bracket order. Returns how many were placed."""
    slots = empty_slots(rnd)
    placed = 0
    for slot, pair in zip(slots, pairs):
        set_team(rnd, slot, pair)
        placed += 1
    return placed
