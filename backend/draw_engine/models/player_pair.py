from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from uuid import uuid4


class PairType(str, Enum):
    NORMAL = "NORMAL"
    BYE = "BYE"
    QUALIFIER = "QUALIFIER"


@dataclass(eq=False)
class PlayerPair:
    """An entrant of the draw, or a BYE / QUALIFIER placeholder.

    Real pairs are compared by identity, which stays stable for the whole
    tournament. Placeholders never carry player names.
    """
    player1: Optional[str] = None
    player2: Optional[str] = None
    seed: int = 0
    type: PairType = PairType.NORMAL
    qualifier_index: Optional[int] = None
    id: str = field(default_factory=lambda: uuid4().hex)

    @classmethod
    def bye(cls) -> PlayerPair:
        return cls(type=PairType.BYE)

    @classmethod
    def qualifier(cls, index: int) -> PlayerPair:
        """QUALIFIER placeholder for the index-th qualifier slot (1-based)."""
        if index < 1:
            raise ValueError(f"qualifier index must be >= 1, got {index}")
        return cls(type=PairType.QUALIFIER, qualifier_index=index)

    @property
    def is_bye(self) -> bool:
        return self.type == PairType.BYE

    @property
    def is_qualifier(self) -> bool:
        return self.type == PairType.QUALIFIER

    @property
    def is_real(self) -> bool:
        return self.type == PairType.NORMAL

    @property
    def is_seeded(self) -> bool:
        return self.is_real and self.seed > 0

    @property
    def name(self) -> str:
        if self.is_bye:
            return "BYE"
        if self.is_qualifier:
            return f"Q{self.qualifier_index}"
        return " / ".join(p for p in (self.player1, self.player2) if p) or self.id[:8]

    def __repr__(self) -> str:
        seed = f" [{self.seed}]" if self.is_seeded else ""
        return f"PlayerPair({self.name}{seed})"
