from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4

from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.score import Score, TeamSide


@dataclass(eq=False)
class Game:
    team_a: Optional[PlayerPair] = None
    team_b: Optional[PlayerPair] = None
    score: Optional[Score] = None
    pool_name: Optional[str] = None  # set on group-stage fixtures only
    id: str = field(default_factory=lambda: uuid4().hex)

    def team(self, side: TeamSide) -> Optional[PlayerPair]:
        return self.team_a if side == TeamSide.TEAM_A else self.team_b

    def set_team(self, side: TeamSide, pair: Optional[PlayerPair]) -> None:
        if side == TeamSide.TEAM_A:
            self.team_a = pair
        else:
            self.team_b = pair

    @property
    def winner_side(self) -> Optional[TeamSide]:
        """
        Side that advances, or None while undecided.

        - BYE vs BYE: team A (a BYE moves on)
        - real pair vs BYE: the real pair, no score needed
        - any unresolved QUALIFIER placeholder: undecided
        - otherwise the score decides (forfeit first, then sets)
        """
        a, b = self.team_a, self.team_b
        if a is None or b is None:
            return None
        if a.is_bye and b.is_bye:
            return TeamSide.TEAM_A
        if a.is_qualifier or b.is_qualifier:
            return None
        if b.is_bye:
            return TeamSide.TEAM_A
        if a.is_bye:
            return TeamSide.TEAM_B
        if self.score is None:
            return None
        return self.score.winner_side()

    @property
    def winner(self) -> Optional[PlayerPair]:
        side = self.winner_side
        return self.team(side) if side is not None else None

    @property
    def is_decided(self) -> bool:
        return self.winner_side is not None

    @property
    def is_empty(self) -> bool:
        return self.team_a is None and self.team_b is None

    def __repr__(self) -> str:
        a = self.team_a.name if self.team_a else "-"
        b = self.team_b.name if self.team_b else "-"
        score = f" {self.score}" if self.score else ""
        return f"Game({a} vs {b}{score})"
