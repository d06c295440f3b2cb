"""
Tournament builder: composes phases by format, runs the initial draw and
drives propagation across phase boundaries.

Phase composition:
  KNOCKOUT   -> [main draw]
  QUALIF_KO  -> [qualifications, main draw with QUALIFIER slots]
  GROUPS_KO  -> [pools, bracket of nb_pools * nb_qualified_by_pool]

Propagation order follows the list: a phase is settled before the one it
feeds, so one pass reaches the fixed point.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence

from draw_engine.config import get_random_source
from draw_engine.errors import InvalidArgumentError
from draw_engine.models.game import Game
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.round import Round
from draw_engine.models.score import Score
from draw_engine.models.tournament import DrawMode, Tournament, TournamentConfig, TournamentFormat
from draw_engine.services.draw_strategies import draw_strategy_for
from draw_engine.services.group_phase import GroupPhase
from draw_engine.services.knockout_phase import KnockoutPhase, PhaseKind
from draw_engine.services.phase import TournamentPhase
from draw_engine.services.propagation import propagate_qualifiers

logger = logging.getLogger(__name__)

_COUNT_FIELDS = (
    "main_draw_size",
    "nb_seeds",
    "pre_qual_draw_size",
    "nb_qualifiers",
    "nb_seeds_qualify",
    "nb_pools",
    "nb_pairs_per_pool",
    "nb_qualified_by_pool",
)


# ============================================================================
# Configuration checks
# ============================================================================


def build_phases(config: TournamentConfig) -> List[TournamentPhase]:
    if config.format == TournamentFormat.QUALIF_KO:
        return [
            KnockoutPhase(config.pre_qual_draw_size, config.nb_seeds_qualify, PhaseKind.QUALIFS, config.nb_qualifiers),
            KnockoutPhase(config.main_draw_size, config.nb_seeds, PhaseKind.MAIN_DRAW, config.nb_qualifiers),
        ]
    if config.format == TournamentFormat.GROUPS_KO:
        groups = GroupPhase(
            config.nb_pools,
            config.nb_pairs_per_pool,
            config.nb_qualified_by_pool,
            nb_seeds=config.nb_seeds,
        )
        return [groups, KnockoutPhase(groups.bracket_size, 0, PhaseKind.MAIN_DRAW)]
    return [
        KnockoutPhase(
            config.main_draw_size,
            config.nb_seeds,
            PhaseKind.MAIN_DRAW,
            staggered_entry=config.staggered_entry,
        )
    ]


def validate_config(config: TournamentConfig) -> List[str]:
    """Every problem with config, as readable messages. Empty list means valid."""
    errors: List[str] = []
    for name in _COUNT_FIELDS:
        value = getattr(config, name)
        if value < 0:
            errors.append(f"{name} must be >= 0 (got {value})")
    if errors:
        return errors

    for phase in build_phases(config):
        errors.extend(phase.validate())

    if config.format == TournamentFormat.GROUPS_KO:
        bracket = config.nb_pools * config.nb_qualified_by_pool
        if bracket > 0 and config.main_draw_size != bracket:
            errors.append(
                f"Main draw size ({config.main_draw_size}) must equal pools x qualified per pool ({bracket})"
            )
    elif config.format == TournamentFormat.KNOCKOUT and config.nb_qualifiers:
        errors.append("Qualifiers are only used with the QUALIF_KO format")
    if config.staggered_entry:
        if config.format != TournamentFormat.KNOCKOUT:
            errors.append("Staggered entry is only used with the KNOCKOUT format")
        if config.draw_mode == DrawMode.MANUAL:
            errors.append("Staggered entry needs an automatic draw")

    # same message can come from several phases
    return list(dict.fromkeys(errors))


def max_pairs(config: TournamentConfig) -> int:
    if config.format == TournamentFormat.QUALIF_KO:
        return config.main_draw_size - config.nb_qualifiers + config.pre_qual_draw_size
    if config.format == TournamentFormat.GROUPS_KO:
        return config.nb_pools * config.nb_pairs_per_pool
    if config.staggered_entry:
        # each late seed leaves a walkover game in the first round
        return config.main_draw_size - config.nb_seeds // 2
    return config.main_draw_size


def validate_pair_count(config: TournamentConfig, nb_pairs: int) -> List[str]:
    limit = max_pairs(config)
    if nb_pairs > limit:
        return [f"{nb_pairs} pairs registered but the {config.format.value} draw holds at most {limit}"]
    return []


# ============================================================================
# Builder
# ============================================================================


class TournamentBuilder:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or get_random_source()

    @staticmethod
    def validate(config: TournamentConfig) -> List[str]:
        return validate_config(config)

    def initialize_rounds(self, tournament: Tournament) -> List[Round]:
        """Empty every round of the tournament, in play order.

        A round already present for a stage is kept and gets fresh games, so
        references held on it stay valid across a new draw.
        """
        errors = validate_config(tournament.config)
        if errors:
            raise InvalidArgumentError("; ".join(errors), errors)

        existing = {r.stage: r for r in tournament.rounds}
        rounds: List[Round] = []
        for phase in build_phases(tournament.config):
            for fresh in phase.initialize():
                current = existing.get(fresh.stage)
                if current is None:
                    rounds.append(fresh)
                    continue
                current.replace_games(fresh.games, fresh.pools)
                rounds.append(current)
        tournament.rounds = rounds
        logger.info(
            "Tournament %s: %s rounds %s",
            tournament.id,
            tournament.config.format.value,
            [r.stage.value for r in rounds],
        )
        return rounds

    def setup_and_populate_tournament(self, tournament: Tournament, pairs: Sequence[PlayerPair]) -> Tournament:
        """Build the rounds and draw the first round of each phase."""
        config = tournament.config
        errors = validate_config(config) + validate_pair_count(config, sum(1 for p in pairs if p.is_real))
        if errors:
            raise InvalidArgumentError("; ".join(errors), errors)

        self.initialize_rounds(tournament)
        phases = build_phases(config)
        draw_strategy_for(config.draw_mode, self.rng).place_players(tournament, phases, list(pairs))
        logger.info("Tournament %s drawn (%s, %d pairs)", tournament.id, config.draw_mode.value, len(pairs))
        return tournament

    def propagate_winners(
        self,
        tournament: Tournament,
        pool_rankings: Optional[Dict[str, List[PlayerPair]]] = None,
    ) -> int:
        """Bring every dependent slot in line with current results.

        Returns the number of slots that changed.

        Guarantees:
            - Idempotent (a second call returns 0)
            - Never raises on partial results
        """
        return self._propagate(tournament, build_phases(tournament.config), 0, None, pool_rankings)

    def propagate_winners_from_game(self, tournament: Tournament, game: Game) -> int:
        """Same fixed point as propagate_winners, starting at the round holding game."""
        rnd = tournament.round_of(game)
        if rnd is None:
            raise InvalidArgumentError(f"Game {game.id} does not belong to tournament {tournament.id}")

        phases = build_phases(tournament.config)
        for idx, phase in enumerate(phases):
            if any(r is rnd for r in phase.rounds(tournament)):
                return self._propagate(tournament, phases, idx, rnd, None)
        return 0

    def record_score(self, tournament: Tournament, game_id: str, score: Optional[Score]) -> Game:
        """Set (or clear, with None) a game's score and propagate from there."""
        game = tournament.find_game(game_id)
        if game is None:
            raise InvalidArgumentError(f"Game {game_id} not found in tournament {tournament.id}")
        game.score = score
        self.propagate_winners_from_game(tournament, game)
        return game

    def _propagate(
        self,
        tournament: Tournament,
        phases: List[TournamentPhase],
        start_phase: int,
        start_round: Optional[Round],
        pool_rankings: Optional[Dict[str, List[PlayerPair]]],
    ) -> int:
        changed = 0
        for idx in range(start_phase, len(phases)):
            phase = phases[idx]
            if isinstance(phase, GroupPhase):
                # writes straight into the bracket's first round
                changed += phase.propagate_winners(tournament, pool_rankings)
                continue

            changed += phase.propagate_winners(
                tournament,
                from_round=start_round if idx == start_phase else None,
                skip_undrawn=not (idx > 0 and isinstance(phases[idx - 1], GroupPhase)),
            )

            if phase.kind == PhaseKind.QUALIFS and idx + 1 < len(phases):
                last = phase.last_round(tournament)
                main_first = phases[idx + 1].rounds(tournament)[0]
                changed += propagate_qualifiers(last, main_first)

        if changed:
            logger.debug("Tournament %s: %d slots updated by propagation", tournament.id, changed)
        return changed
