from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from draw_engine.models.game import Game
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.pool import Pool
from draw_engine.models.stage import Stage


@dataclass(eq=False)
class Round:
    """One round of the tournament.

    Knockout rounds hold their slots in ``games`` (two per game). A GROUPS
    round holds its slots in ``pools``; its ``games`` are the round-robin
    fixtures derived from those pools.
    """
    stage: Stage
    games: List[Game] = field(default_factory=list)
    pools: List[Pool] = field(default_factory=list)
    # qualifier ordinal (1-based) -> flat slot index in this round
    qualifier_slots: Dict[int, int] = field(default_factory=dict)
    # flat slot index -> pair that enters this round directly (staggered seeds)
    entries: Dict[int, PlayerPair] = field(default_factory=dict)

    @classmethod
    def knockout(cls, stage: Stage, nb_slots: int) -> Round:
        return cls(stage=stage, games=[Game() for _ in range(nb_slots // 2)])

    @property
    def is_group_round(self) -> bool:
        return self.stage == Stage.GROUPS

    @property
    def nb_slots(self) -> int:
        if self.is_group_round:
            return sum(p.capacity for p in self.pools)
        return len(self.games) * 2

    def teams(self) -> Iterator[PlayerPair]:
        """Every pair currently placed in this round's slots."""
        if self.is_group_round:
            for pool in self.pools:
                yield from pool.pairs
            return
        for game in self.games:
            if game.team_a is not None:
                yield game.team_a
            if game.team_b is not None:
                yield game.team_b

    def has_any_team(self) -> bool:
        return next(self.teams(), None) is not None

    def pool(self, name: str) -> Optional[Pool]:
        return next((p for p in self.pools if p.name == name), None)

    def replace_games(self, games: List[Game], pools: Optional[List[Pool]] = None) -> None:
        """Swap in fresh games (and pools), forgetting every slot registration."""
        self.games = games
        self.pools = pools if pools is not None else []
        self.qualifier_slots = {}
        self.entries = {}

    def register_entry(self, slot: int, pair: PlayerPair) -> None:
        self.entries[slot] = pair

    def register_qualifier_slot(self, ordinal: int, slot: int) -> None:
        self.qualifier_slots[ordinal] = slot

    def find_qualifier_slot(self, ordinal: int) -> Optional[int]:
        """Slot reserved for qualifier #ordinal.

        Placeholders written outside the automatic draw (manual mode) are
        discovered on first lookup and remembered from then on, so the slot
        stays known after a winner has replaced the placeholder.
        """
        if ordinal in self.qualifier_slots:
            return self.qualifier_slots[ordinal]
        for game_index, game in enumerate(self.games):
            for offset, team in enumerate((game.team_a, game.team_b)):
                if team is not None and team.is_qualifier and team.qualifier_index == ordinal:
                    slot = game_index * 2 + offset
                    self.qualifier_slots[ordinal] = slot
                    return slot
        return None

    def __repr__(self) -> str:
        if self.is_group_round:
            return f"Round({self.stage.value}, pools={len(self.pools)}, fixtures={len(self.games)})"
        return f"Round({self.stage.value}, games={len(self.games)})"
