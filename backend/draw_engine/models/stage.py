"""
Stage: ordered names of tournament rounds.

Declaration order is progression order: GROUPS, then qualification rounds,
then the main draw from R64 down to FINAL.
"""

from enum import Enum
from functools import total_ordering
from typing import Optional

from draw_engine.errors import InvalidArgumentError


@total_ordering
class Stage(Enum):
    GROUPS = "GROUPS"
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    R64 = "R64"
    R32 = "R32"
    R16 = "R16"
    QUARTERS = "QUARTERS"
    SEMIS = "SEMIS"
    FINAL = "FINAL"

    @property
    def order(self) -> int:
        return list(Stage).index(self)

    @property
    def nb_teams(self) -> int:
        """Slot count of a main-draw stage, 0 for groups and qualifications."""
        return _NB_TEAMS.get(self, 0)

    @property
    def label(self) -> str:
        return _LABELS[self]

    def is_qualification(self) -> bool:
        return self in (Stage.Q1, Stage.Q2, Stage.Q3)

    def is_main_draw(self, draw_size: int) -> bool:
        """True for knockout stages that belong to a main draw of draw_size slots."""
        return 0 < self.nb_teams <= draw_size

    def next(self) -> Optional["Stage"]:
        stages = list(Stage)
        idx = stages.index(self)
        return stages[idx + 1] if idx < len(stages) - 1 else None

    def __lt__(self, other):
        if not isinstance(other, Stage):
            return NotImplemented
        return self.order < other.order

    @classmethod
    def from_nb_teams(cls, teams: int) -> "Stage":
        for stage, count in _NB_TEAMS.items():
            if count == teams:
                return stage
        raise InvalidArgumentError(f"Unsupported number of teams for main draw: {teams}")

    @classmethod
    def from_qualif_index(cls, index: int) -> "Stage":
        """1 -> Q1, 2 -> Q2, 3 -> Q3."""
        if index == 1:
            return cls.Q1
        if index == 2:
            return cls.Q2
        if index == 3:
            return cls.Q3
        raise InvalidArgumentError(f"Qualification rounds go up to Q3, got index={index}")


_NB_TEAMS = {
    Stage.R64: 64,
    Stage.R32: 32,
    Stage.R16: 16,
    Stage.QUARTERS: 8,
    Stage.SEMIS: 4,
    Stage.FINAL: 2,
}

_LABELS = {
    Stage.GROUPS: "Groups",
    Stage.Q1: "Qualifications 1",
    Stage.Q2: "Qualifications 2",
    Stage.Q3: "Qualifications 3",
    Stage.R64: "Round of 64",
    Stage.R32: "Round of 32",
    Stage.R16: "Round of 16",
    Stage.QUARTERS: "Quarter-finals",
    Stage.SEMIS: "Semi-finals",
    Stage.FINAL: "Final",
}
