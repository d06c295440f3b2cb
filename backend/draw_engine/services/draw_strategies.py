"""
Initial population of each phase's first round.

SEEDED (automatic):
  seeds -> byes -> (qualifier placeholders) -> everyone else at random
  In a plain knockout with more byes than seeds, the best unseeded pairs
  join the seeds on template slots so the byes go to them.
MANUAL:
  pairs go in as given, first empty slot first, placeholders included

Only first rounds are filled here; later rounds are written by propagation.
"""

from __future__ import annotations

import logging
import random
from typing import List, Sequence, Tuple

from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.tournament import DrawMode, Tournament, TournamentConfig, TournamentFormat
from draw_engine.services.group_phase import GroupPhase
from draw_engine.services.knockout_phase import KnockoutPhase, PhaseKind
from draw_engine.services.phase import TournamentPhase
from draw_engine.services.random_placement import place_qualifier_placeholders, place_teams_in_order
from draw_engine.services.seed_placement import sort_by_seed
from draw_engine.services.staggered_entry import seeds_entering_at_stage

logger = logging.getLogger(__name__)


def split_qualification_entrants(
    config: TournamentConfig, pairs_by_seed: Sequence[PlayerPair]
) -> Tuple[List[PlayerPair], List[PlayerPair]]:
    """(direct entrants, qualification players) for QUALIF_KO.

    The weakest pairs play qualifications: at least one per qualifier slot,
    plus whoever does not fit among the direct entrants, capped by the
    qualification draw size. Pairs beyond both draws are dropped.
    """
    total = len(pairs_by_seed)
    direct_capacity = config.main_draw_size - config.nb_qualifiers
    nb_qualif = min(
        total,
        config.pre_qual_draw_size,
        max(config.nb_qualifiers, total - direct_capacity),
    )
    direct = list(pairs_by_seed[: total - nb_qualif])
    qualif = list(pairs_by_seed[total - nb_qualif:])
    if len(direct) > direct_capacity:
        logger.warning(
            "%d pairs do not fit in the main draw or the qualifications and are left out",
            len(direct) - direct_capacity,
        )
        direct = direct[:direct_capacity]
    return direct, qualif


class AutomaticDrawStrategy:
    def __init__(self, rng: random.Random):
        self.rng = rng

    def place_players(self, tournament: Tournament, phases: Sequence[TournamentPhase], pairs: Sequence[PlayerPair]):
        config = tournament.config
        real = [p for p in pairs if p.is_real]
        if len(real) != len(pairs):
            logger.warning("Automatic draw ignores %d placeholder pairs", len(pairs) - len(real))
        ordered = sort_by_seed(real)

        if config.format == TournamentFormat.QUALIF_KO:
            qualifs, main = phases[0], phases[1]
            direct, qualif_players = split_qualification_entrants(config, ordered)
            self._fill_knockout(tournament, qualifs, qualif_players)
            self._fill_main_draw_with_qualifiers(tournament, main, direct, config.nb_qualifiers)
        elif config.format == TournamentFormat.GROUPS_KO:
            self._fill_groups(tournament, phases[0], ordered)
        elif phases[0].staggered_entry:
            self._fill_knockout_staggered(tournament, phases[0], ordered)
        else:
            self._fill_knockout(tournament, phases[0], ordered)

    def _fill_knockout(self, tournament: Tournament, phase: KnockoutPhase, pairs: List[PlayerPair]) -> None:
        rnd = phase.first_round(tournament)
        entrants = pairs[: phase.draw_size]
        if len(pairs) > phase.draw_size:
            logger.warning("%d pairs for a draw of %d, extra pairs left out", len(pairs), phase.draw_size)

        nb_seeds = min(phase.nb_seeds, len(entrants))
        # the strongest pairs, seeded or not, take the template slots the byes face
        nb_leading = phase.nb_leading_entrants(len(entrants))
        phase.place_seed_teams(rnd, entrants, self.rng, nb_placed=nb_leading)
        phase.place_bye_teams(rnd, len(entrants), nb_placed=nb_leading)
        phase.place_remaining_teams_randomly(rnd, entrants[nb_leading:], self.rng)
        logger.info(
            "%s %s: %d pairs, %d seeds, %d on template slots",
            phase.kind.value,
            rnd.stage.value,
            len(entrants),
            nb_seeds,
            nb_leading,
        )

    def _fill_knockout_staggered(self, tournament: Tournament, phase: KnockoutPhase, pairs: List[PlayerPair]) -> None:
        rounds = phase.rounds(tournament)
        first, second = rounds[0], rounds[1]
        nb_seeds = min(phase.nb_seeds, len(pairs))
        late = seeds_entering_at_stage(second.stage, phase.draw_size, nb_seeds)
        capacity = phase.draw_size - late
        entrants = pairs[:capacity]
        if len(pairs) > capacity:
            logger.warning("%d pairs for %d places with staggered seeds, extra pairs left out", len(pairs), capacity)

        phase.place_seed_teams_staggered(tournament, entrants, self.rng)
        # walkover games of the late seeds are BYE vs BYE on purpose
        phase.place_bye_teams(first, len(entrants) - late, allow_bye_vs_bye=True)
        phase.place_remaining_teams_randomly(first, entrants[nb_seeds:], self.rng)
        logger.info(
            "MAIN_DRAW %s: %d pairs, %d seeds, %d entering at %s",
            first.stage.value,
            len(entrants),
            nb_seeds,
            late,
            second.stage.value,
        )

    def _fill_main_draw_with_qualifiers(
        self,
        tournament: Tournament,
        phase: KnockoutPhase,
        direct: List[PlayerPair],
        nb_qualifiers: int,
    ) -> None:
        rnd = phase.first_round(tournament)
        nb_seeds = min(phase.nb_seeds, len(direct))
        phase.place_seed_teams(rnd, direct, self.rng)
        phase.place_bye_teams(rnd, len(direct), reserved_qualifier_slots=nb_qualifiers)
        place_qualifier_placeholders(rnd, nb_qualifiers, self.rng)
        phase.place_remaining_teams_randomly(rnd, direct[nb_seeds:], self.rng)
        logger.info(
            "MAIN_DRAW %s: %d direct entrants, %d seeds, %d qualifier slots",
            rnd.stage.value,
            len(direct),
            nb_seeds,
            nb_qualifiers,
        )

    def _fill_groups(self, tournament: Tournament, phase: GroupPhase, pairs: List[PlayerPair]) -> None:
        rnd = phase.group_round(tournament)
        capacity = phase.nb_pools * phase.nb_pairs_per_pool
        entrants = pairs[:capacity]
        if len(pairs) > capacity:
            logger.warning("%d pairs for %d pool places, extra pairs left out", len(pairs), capacity)

        nb_seeds = min(phase.nb_seeds, len(entrants))
        phase.place_seed_teams(rnd, entrants, self.rng)
        phase.place_remaining_teams_randomly(rnd, entrants[nb_seeds:], self.rng)
        phase.generate_pool_games(rnd)
        logger.info("GROUPS: %d pairs in %d pools, %d seeds", len(entrants), len(rnd.pools), nb_seeds)


class ManualDrawStrategy:
    def place_players(self, tournament: Tournament, phases: Sequence[TournamentPhase], pairs: Sequence[PlayerPair]):
        remaining = list(pairs)
        for phase in phases:
            if isinstance(phase, KnockoutPhase) and phase.kind == PhaseKind.MAIN_DRAW and _fed_by_groups(phases):
                # bracket after pools is written by propagation only
                continue
            rnd = phase.rounds(tournament)[0]
            chunk, remaining = remaining[: rnd.nb_slots], remaining[rnd.nb_slots:]
            place_teams_in_order(rnd, chunk)
            if isinstance(phase, GroupPhase):
                phase.generate_pool_games(rnd)
            elif phase.nb_qualifiers and phase.kind == PhaseKind.MAIN_DRAW:
                for ordinal in range(1, phase.nb_qualifiers + 1):
                    rnd.find_qualifier_slot(ordinal)
            logger.info("Manual draw: %d pairs placed in %s", len(chunk), rnd.stage.value)
        if remaining:
            logger.warning("Manual draw: %d pairs had no slot left", len(remaining))


def _fed_by_groups(phases: Sequence[TournamentPhase]) -> bool:
    return any(isinstance(p, GroupPhase) for p in phases)


def draw_strategy_for(mode: DrawMode, rng: random.Random):
    if mode == DrawMode.MANUAL:
        return ManualDrawStrategy()
    return AutomaticDrawStrategy(rng)
