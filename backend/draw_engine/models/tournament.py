from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel

from draw_engine.models.game import Game
from draw_engine.models.round import Round
from draw_engine.models.stage import Stage


class TournamentFormat(str, Enum):
    KNOCKOUT = "KNOCKOUT"
    QUALIF_KO = "QUALIF_KO"
    GROUPS_KO = "GROUPS_KO"


class DrawMode(str, Enum):
    SEEDED = "SEEDED"  # automatic
    MANUAL = "MANUAL"


class TournamentConfig(SQLModel):
    """Draw configuration, set once before the rounds are built.

    Counts are not range-checked here: the builder's ``validate`` reports
    every problem at once instead of failing on the first field.
    """
    format: TournamentFormat = TournamentFormat.KNOCKOUT
    draw_mode: DrawMode = DrawMode.SEEDED
    main_draw_size: int = 32
    nb_seeds: int = 0
    pre_qual_draw_size: int = 0
    nb_qualifiers: int = 0
    nb_seeds_qualify: int = 0
    nb_pools: int = 0
    nb_pairs_per_pool: int = 0
    nb_qualified_by_pool: int = 0
    # KNOCKOUT only: the top half of the seeds enters in the second round
    staggered_entry: bool = False
    sets_to_win: Optional[int] = Field(default=2)


@dataclass(eq=False)
class Tournament:
    config: TournamentConfig
    name: str = ""
    rounds: List[Round] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid4().hex)

    def round_for(self, stage: Stage) -> Optional[Round]:
        return next((r for r in self.rounds if r.stage == stage), None)

    def find_game(self, game_id: str) -> Optional[Game]:
        for rnd in self.rounds:
            for game in rnd.games:
                if game.id == game_id:
                    return game
        return None

    def round_of(self, game: Game) -> Optional[Round]:
        return next((r for r in self.rounds if any(g is game for g in r.games)), None)
