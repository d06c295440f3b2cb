"""
Knockout phase: one elimination ladder, either the qualification rounds or
the main draw.

MAIN_DRAW builds rounds from Stage.from_nb_teams(draw_size) down to FINAL.
QUALIFS builds Q1..Qn where n = log2(draw_size / nb_qualifiers), at most Q3.
Its last round has nb_qualifiers games, one per qualifier ordinal.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from draw_engine.errors import InvalidArgumentError, StructuralMismatchError
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.round import Round
from draw_engine.models.stage import Stage
from draw_engine.models.tournament import Tournament
from draw_engine.services.bye_placement import needed_byes, place_bye_teams
from draw_engine.services.propagation import propagate_knockout_round
from draw_engine.services.random_placement import place_remaining_teams_randomly
from draw_engine.services.seed_placement import place_seed_teams
from draw_engine.services.staggered_entry import place_seed_teams_staggered
from draw_engine.utils.draw_math import is_power_of_two, nb_qualif_rounds, round_slot_counts

logger = logging.getLogger(__name__)

MAX_MAIN_DRAW_SIZE = 64
MAX_QUALIF_ROUNDS = 3


class PhaseKind(str, Enum):
    QUALIFS = "QUALIFS"
    MAIN_DRAW = "MAIN_DRAW"


class KnockoutPhase:
    def __init__(
        self,
        draw_size: int,
        nb_seeds: int,
        kind: PhaseKind,
        nb_qualifiers: int = 0,
        staggered_entry: bool = False,
    ):
        self.draw_size = draw_size
        self.nb_seeds = nb_seeds
        self.kind = kind
        # QUALIFS: winners produced; MAIN_DRAW: slots reserved for them
        self.nb_qualifiers = nb_qualifiers
        self.staggered_entry = staggered_entry

    def __repr__(self) -> str:
        return f"KnockoutPhase({self.kind.value}, draw_size={self.draw_size}, nb_seeds={self.nb_seeds})"

    # ========================================================================
    # Structure
    # ========================================================================

    def validate(self) -> List[str]:
        errors: List[str] = []
        label = "Qualification draw" if self.kind == PhaseKind.QUALIFS else "Main draw"

        if self.draw_size <= 0 or not is_power_of_two(self.draw_size):
            errors.append(f"{label} size must be a power of two (got {self.draw_size})")
        if self.nb_seeds < 0:
            errors.append(f"{label} seed count must be >= 0 (got {self.nb_seeds})")
        elif self.nb_seeds > self.draw_size:
            errors.append(
                f"{label} seed count ({self.nb_seeds}) cannot exceed the draw size ({self.draw_size})"
            )
        if self.nb_qualifiers < 0:
            errors.append(f"Number of qualifiers must be >= 0 (got {self.nb_qualifiers})")

        if self.kind == PhaseKind.MAIN_DRAW:
            if self.draw_size > MAX_MAIN_DRAW_SIZE or self.draw_size < 2:
                errors.append(f"Main draw size must be between 2 and {MAX_MAIN_DRAW_SIZE} (got {self.draw_size})")
            if self.nb_qualifiers >= self.draw_size > 0:
                errors.append(
                    f"Number of qualifiers ({self.nb_qualifiers}) must be lower than the main draw size ({self.draw_size})"
                )
            if self.staggered_entry:
                if self.draw_size < 4:
                    errors.append(f"Staggered entry needs a main draw of at least 4 (got {self.draw_size})")
                elif self.nb_seeds > self.draw_size // 2:
                    errors.append(
                        f"Staggered entry takes at most {self.draw_size // 2} seeds in a draw of {self.draw_size} "
                        f"(got {self.nb_seeds})"
                    )
            return errors

        if self.staggered_entry:
            errors.append("Staggered entry only applies to a main draw")
        if self.nb_qualifiers <= 0 or not is_power_of_two(self.nb_qualifiers):
            errors.append(f"Number of qualifiers must be a power of two (got {self.nb_qualifiers})")
        elif is_power_of_two(self.draw_size):
            if self.draw_size < 2 * self.nb_qualifiers:
                errors.append(
                    f"Qualification draw ({self.draw_size}) must be at least twice the number of qualifiers ({self.nb_qualifiers})"
                )
            elif nb_qualif_rounds(self.draw_size, self.nb_qualifiers) > MAX_QUALIF_ROUNDS:
                errors.append(
                    f"At most {MAX_QUALIF_ROUNDS} qualification rounds are supported "
                    f"({self.draw_size} -> {self.nb_qualifiers})"
                )
        return errors

    def stages(self) -> List[Stage]:
        if self.kind == PhaseKind.MAIN_DRAW:
            return [Stage.from_nb_teams(size) for size in round_slot_counts(self.draw_size)]
        nb_rounds = nb_qualif_rounds(self.draw_size, self.nb_qualifiers)
        return [Stage.from_qualif_index(i) for i in range(1, nb_rounds + 1)]

    def initialize(self) -> List[Round]:
        """Empty rounds of this ladder, first round first."""
        errors = self.validate()
        if errors:
            raise InvalidArgumentError("; ".join(errors), errors)

        rounds = []
        slots = self.draw_size
        for stage in self.stages():
            rounds.append(Round.knockout(stage, slots))
            slots //= 2
        logger.debug("%r initialized %s", self, [r.stage.value for r in rounds])
        return rounds

    def rounds(self, tournament: Tournament) -> List[Round]:
        """This phase's rounds inside the tournament, in play order."""
        stages = set(self.stages())
        return sorted((r for r in tournament.rounds if r.stage in stages), key=lambda r: r.stage.order)

    def first_round(self, tournament: Tournament) -> Optional[Round]:
        rounds = self.rounds(tournament)
        return rounds[0] if rounds else None

    def last_round(self, tournament: Tournament) -> Optional[Round]:
        rounds = self.rounds(tournament)
        return rounds[-1] if rounds else None

    # ========================================================================
    # Placement
    # ========================================================================

    def nb_leading_entrants(self, nb_pairs: int) -> int:
        """How many of the strongest pairs go on template slots.

        The seeds, or more when there are more byes than seeds: the best
        pairs get the byes whether they are seeded or not.
        """
        return min(nb_pairs, max(self.nb_seeds, needed_byes(self.draw_size, nb_pairs)))

    def place_seed_teams(
        self,
        rnd: Round,
        pairs_by_seed: Sequence[PlayerPair],
        rng: Optional[random.Random] = None,
        nb_placed: Optional[int] = None,
    ) -> None:
        """Seeds on their template slots.

        nb_placed widens the template to the leading pairs beyond the seeds,
        the ones due a BYE.
        """
        count = self.nb_seeds if nb_placed is None else nb_placed
        place_seed_teams(rnd, pairs_by_seed, count, self.draw_size, rng)

    def place_seed_teams_staggered(
        self,
        tournament: Tournament,
        pairs_by_seed: Sequence[PlayerPair],
        rng: Optional[random.Random] = None,
    ) -> Tuple[List[int], List[int]]:
        """Seeds over the first two rounds, the top half entering in the second."""
        rounds = self.rounds(tournament)
        if len(rounds) < 2:
            raise StructuralMismatchError(f"{self!r} has no second round for seeds to enter")
        return place_seed_teams_staggered(rounds[0], rounds[1], pairs_by_seed, self.nb_seeds, rng)

    def place_bye_teams(
        self,
        rnd: Round,
        total_pairs: int,
        reserved_qualifier_slots: int = 0,
        allow_bye_vs_bye: Optional[bool] = None,
        nb_placed: Optional[int] = None,
    ) -> int:
        return place_bye_teams(
            rnd,
            total_pairs,
            self.nb_seeds if nb_placed is None else nb_placed,
            self.draw_size,
            reserved_qualifier_slots=reserved_qualifier_slots,
            allow_bye_vs_bye=allow_bye_vs_bye,
        )

    def place_remaining_teams_randomly(
        self,
        rnd: Round,
        pairs: Sequence[PlayerPair],
        rng: Optional[random.Random] = None,
    ) -> int:
        return place_remaining_teams_randomly(rnd, pairs, rng)

    # ========================================================================
    # Propagation
    # ========================================================================

    def propagate_winners(
        self,
        tournament: Tournament,
        from_round: Optional[Round] = None,
        skip_undrawn: bool = True,
    ) -> int:
        """Push every decided result one round forward, for each round of the ladder.

        With from_round, rounds before it are left alone: they cannot be
        affected by a change made in from_round or later.
        With skip_undrawn, nothing happens while the ladder's first round is
        still empty, so later rounds filled by hand are kept. A ladder fed by
        pools passes False: its first round empties whenever pools reopen.
        Every later round is always rewritten from the one before it.
        Returns the number of slots that changed.
        """
        rounds = self.rounds(tournament)
        if not rounds:
            return 0
        if skip_undrawn and not rounds[0].has_any_team():
            logger.debug("%r: first round not drawn yet, nothing to propagate", self)
            return 0
        if from_round is not None:
            starts = [i for i, r in enumerate(rounds) if r is from_round]
            if starts:
                rounds = rounds[starts[0]:]
        changed = 0
        for current, nxt in zip(rounds, rounds[1:]):
            changed += propagate_knockout_round(current, nxt)
        return changed
