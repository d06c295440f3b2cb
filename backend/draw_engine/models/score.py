"""
Match score as far as the draw engine needs it: sets and an optional forfeit.

Supported string formats:
  "6-4"             -> 1 set
  "6-3 4-6 10-7"    -> 3 sets
  "6-3, 4-6, 10-7"  -> comma-separated variant

The engine only reads the winning side. Point and game rules of a match are
left to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class TeamSide(str, Enum):
    TEAM_A = "A"
    TEAM_B = "B"

    def other(self) -> TeamSide:
        return TeamSide.TEAM_B if self == TeamSide.TEAM_A else TeamSide.TEAM_A


@dataclass
class Score:
    sets: List[Tuple[int, int]] = field(default_factory=list)  # (team_a_games, team_b_games) per set
    forfeit_by: Optional[TeamSide] = None
    sets_to_win: Optional[int] = None

    @property
    def team_a_sets_won(self) -> int:
        return sum(1 for a, b in self.sets if a > b)

    @property
    def team_b_sets_won(self) -> int:
        return sum(1 for a, b in self.sets if b > a)

    @property
    def team_a_games(self) -> int:
        return sum(a for a, _ in self.sets)

    @property
    def team_b_games(self) -> int:
        return sum(b for _, b in self.sets)

    def winner_side(self) -> Optional[TeamSide]:
        """Side that won, or None when the score is not decisive yet."""
        if self.forfeit_by is not None:
            return self.forfeit_by.other()

        a_sets = self.team_a_sets_won
        b_sets = self.team_b_sets_won
        if self.sets_to_win is not None and max(a_sets, b_sets) < self.sets_to_win:
            return None
        if a_sets > b_sets:
            return TeamSide.TEAM_A
        if b_sets > a_sets:
            return TeamSide.TEAM_B
        return None

    @classmethod
    def forfeit(cls, side: TeamSide) -> Score:
        return cls(forfeit_by=side)

    @classmethod
    def parse(cls, raw: Optional[str], sets_to_win: Optional[int] = None) -> Optional[Score]:
        """Parse strings like '6-4', '6-3 4-6 10-7', '6-3, 4-6, 10-7'.

        Returns None if the string cannot be parsed.
        """
        if not raw or not raw.strip():
            return None

        # Normalize: replace commas with spaces, collapse whitespace
        parts = raw.replace(",", " ").split()

        sets: List[Tuple[int, int]] = []
        for part in parts:
            pair = part.split("-")
            if len(pair) != 2:
                return None
            try:
                a = int(pair[0])
                b = int(pair[1])
            except ValueError:
                return None
            sets.append((a, b))

        return cls(sets=sets, sets_to_win=sets_to_win)

    def __str__(self) -> str:
        if self.forfeit_by is not None:
            return f"forfeit ({self.forfeit_by.value})"
        return " ".join(f"{a}-{b}" for a, b in self.sets)
