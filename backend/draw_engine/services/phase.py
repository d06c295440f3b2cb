from __future__ import annotations

import random
from typing import List, Optional, Protocol, Sequence

from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.round import Round
from draw_engine.models.tournament import Tournament


class TournamentPhase(Protocol):
    """What the builder needs from a phase (knockout ladder or group stage)."""

    def validate(self) -> List[str]:
        ...

    def initialize(self) -> List[Round]:
        ...

    def rounds(self, tournament: Tournament) -> List[Round]:
        ...

    def place_seed_teams(
        self, rnd: Round, pairs_by_seed: Sequence[PlayerPair], rng: Optional[random.Random] = None
    ) -> None:
        ...

    def place_bye_teams(self, rnd: Round, total_pairs: int) -> int:
        ...

    def propagate_winners(self, tournament: Tournament) -> int:
        ...
