from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from draw_engine.errors import CapacityExceededError
from draw_engine.models.player_pair import PlayerPair


def pool_name(index: int) -> str:
    """0 -> 'Pool A', 1 -> 'Pool B', ..."""
    return f"Pool {chr(ord('A') + index)}"


@dataclass(eq=False)
class Pool:
    name: str
    capacity: int
    pairs: List[PlayerPair] = field(default_factory=list)
    # final order supplied by the caller; overrides computed standings
    ranking: Optional[List[PlayerPair]] = None

    @property
    def size(self) -> int:
        return len(self.pairs)

    @property
    def is_full(self) -> bool:
        return self.size >= self.capacity

    @property
    def remaining_capacity(self) -> int:
        return max(0, self.capacity - self.size)

    def add_pair(self, pair: PlayerPair) -> None:
        if self.is_full:
            raise CapacityExceededError(f"{self.name} is full ({self.capacity} pairs)")
        self.pairs.append(pair)

    def contains(self, pair: Optional[PlayerPair]) -> bool:
        return pair is not None and any(p is pair for p in self.pairs)
