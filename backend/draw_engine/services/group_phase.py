"""
Group phase: round-robin pools whose best pairs move into a knockout bracket.

Bracket draw size = nb_pools * nb_qualified_by_pool.

Cross-pool template (pools paired consecutively, A with B, C with D, ...):
  1 qualified per pool:  1A v 1B
  2 qualified per pool:  1A v 2B, 1B v 2A
  k qualified per pool:  rank r of A meets rank k+1-r of B, better rank as team A
A single pool plays its own qualifiers against each other: 1 v k, 2 v k-1, ...
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from draw_engine.errors import InvalidArgumentError
from draw_engine.models.game import Game
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.pool import Pool, pool_name
from draw_engine.models.round import Round
from draw_engine.models.stage import Stage
from draw_engine.models.tournament import Tournament
from draw_engine.services.knockout_phase import MAX_MAIN_DRAW_SIZE
from draw_engine.services.pool_ranking import rank_pool
from draw_engine.services.random_placement import place_remaining_teams_randomly
from draw_engine.services.seed_placement import place_seed_teams_in_pools
from draw_engine.utils.draw_math import is_power_of_two
from draw_engine.utils.round_robin import rr_pairings_by_round

logger = logging.getLogger(__name__)

PoolRanker = Callable[[Pool, List[Game]], List[PlayerPair]]
# (pool index, 1-based rank)
PoolSpot = Tuple[int, int]


def cross_pool_template(nb_pools: int, nb_qualified_by_pool: int) -> List[Tuple[PoolSpot, PoolSpot]]:
    """Bracket first-round fixtures as ((pool, rank), (pool, rank)), in bracket order.

    >>> cross_pool_template(4, 2)[:2]
    [((0, 1), (1, 2)), ((1, 1), (0, 2))]
    """
    k = nb_qualified_by_pool
    fixtures: List[Tuple[PoolSpot, PoolSpot]] = []

    if nb_pools == 1:
        for r in range(1, k // 2 + 1):
            fixtures.append(((0, r), (0, k + 1 - r)))
        return fixtures

    for a in range(0, nb_pools - 1, 2):
        b = a + 1
        for r in range(1, k + 1):
            first: PoolSpot = (a, r)
            second: PoolSpot = (b, k + 1 - r)
            if second[1] < first[1]:
                first, second = second, first
            fixtures.append((first, second))
    return fixtures


class GroupPhase:
    def __init__(
        self,
        nb_pools: int,
        nb_pairs_per_pool: int,
        nb_qualified_by_pool: int,
        nb_seeds: int = 0,
        ranker: Optional[PoolRanker] = None,
    ):
        self.nb_pools = nb_pools
        self.nb_pairs_per_pool = nb_pairs_per_pool
        self.nb_qualified_by_pool = nb_qualified_by_pool
        self.nb_seeds = nb_seeds
        self.ranker: PoolRanker = ranker or rank_pool

    def __repr__(self) -> str:
        return (
            f"GroupPhase(pools={self.nb_pools}, pairs_per_pool={self.nb_pairs_per_pool}, "
            f"qualified_by_pool={self.nb_qualified_by_pool})"
        )

    @property
    def bracket_size(self) -> int:
        return self.nb_pools * self.nb_qualified_by_pool

    def validate(self) -> List[str]:
        errors: List[str] = []
        if self.nb_pools <= 0:
            errors.append(f"Number of pools must be positive (got {self.nb_pools})")
        if self.nb_pairs_per_pool <= 0:
            errors.append(f"Number of pairs per pool must be positive (got {self.nb_pairs_per_pool})")
        if self.nb_qualified_by_pool <= 0:
            errors.append(f"Number of qualified pairs per pool must be positive (got {self.nb_qualified_by_pool})")
        if self.nb_pools > 26:
            errors.append(f"At most 26 pools are supported (got {self.nb_pools})")
        if self.nb_seeds < 0:
            errors.append(f"Number of seeds must be >= 0 (got {self.nb_seeds})")
        if errors:
            return errors

        if self.nb_qualified_by_pool > self.nb_pairs_per_pool:
            errors.append(
                f"Qualified pairs per pool ({self.nb_qualified_by_pool}) cannot exceed "
                f"pairs per pool ({self.nb_pairs_per_pool})"
            )
        if not is_power_of_two(self.bracket_size):
            errors.append(
                f"Pools x qualified per pool ({self.nb_pools} x {self.nb_qualified_by_pool} = "
                f"{self.bracket_size}) must be a power of two"
            )
        elif self.bracket_size < 2:
            errors.append("At least two pairs must qualify for the knockout stage")
        elif self.bracket_size > MAX_MAIN_DRAW_SIZE:
            errors.append(
                f"Knockout stage after pools cannot exceed {MAX_MAIN_DRAW_SIZE} pairs (got {self.bracket_size})"
            )
        if self.nb_seeds > self.nb_pools * self.nb_pairs_per_pool:
            errors.append(
                f"Number of seeds ({self.nb_seeds}) cannot exceed the number of pool places "
                f"({self.nb_pools * self.nb_pairs_per_pool})"
            )
        return errors

    # ========================================================================
    # Structure
    # ========================================================================

    def initialize(self) -> List[Round]:
        errors = self.validate()
        if errors:
            raise InvalidArgumentError("; ".join(errors), errors)
        pools = [Pool(name=pool_name(i), capacity=self.nb_pairs_per_pool) for i in range(self.nb_pools)]
        return [Round(stage=Stage.GROUPS, pools=pools)]

    def rounds(self, tournament: Tournament) -> List[Round]:
        return [r for r in tournament.rounds if r.stage == Stage.GROUPS]

    def group_round(self, tournament: Tournament) -> Optional[Round]:
        return tournament.round_for(Stage.GROUPS)

    # ========================================================================
    # Placement
    # ========================================================================

    def place_seed_teams(
        self,
        rnd: Round,
        pairs_by_seed: Sequence[PlayerPair],
        rng: Optional[random.Random] = None,
    ) -> None:
        seeds = list(pairs_by_seed[: self.nb_seeds])
        place_seed_teams_in_pools(rnd.pools, seeds, self.nb_pairs_per_pool)

    def place_bye_teams(self, rnd: Round, total_pairs: int) -> int:
        # pools are sized by their members, nothing to pad
        return 0

    def place_remaining_teams_randomly(
        self,
        rnd: Round,
        pairs: Sequence[PlayerPair],
        rng: Optional[random.Random] = None,
    ) -> int:
        return place_remaining_teams_randomly(rnd, pairs, rng)

    def generate_pool_games(self, rnd: Round) -> List[Game]:
        """Rebuild the round's fixtures from current pool members.

        Fixtures between the same two pairs keep their Game (and score).
        """
        existing: Dict[frozenset, Game] = {}
        for game in rnd.games:
            if game.team_a is not None and game.team_b is not None:
                existing[frozenset((game.team_a.id, game.team_b.id))] = game

        games: List[Game] = []
        for pool in rnd.pools:
            for _, _, idx_a, idx_b in rr_pairings_by_round(pool.size):
                a, b = pool.pairs[idx_a], pool.pairs[idx_b]
                game = existing.get(frozenset((a.id, b.id)))
                if game is None:
                    game = Game(team_a=a, team_b=b)
                game.pool_name = pool.name
                games.append(game)

        rnd.games = games
        logger.debug("Generated %d pool games across %d pools", len(games), len(rnd.pools))
        return games

    # ========================================================================
    # Standings & propagation
    # ========================================================================

    def pool_games(self, rnd: Round, pool: Pool) -> List[Game]:
        return [g for g in rnd.games if g.pool_name == pool.name]

    def is_pool_finished(self, rnd: Round, pool: Pool) -> bool:
        games = self.pool_games(rnd, pool)
        return bool(games) and all(g.is_decided for g in games)

    def pool_ranking(self, rnd: Round, pool: Pool) -> List[PlayerPair]:
        return self.ranker(pool, self.pool_games(rnd, pool))

    def propagate_winners(
        self,
        tournament: Tournament,
        rankings: Optional[Dict[str, List[PlayerPair]]] = None,
    ) -> int:
        """Write pool qualifiers into the bracket's first round.

        A pool feeds the bracket once it has a supplied ranking (kept on the
        pool, see Pool.ranking) or once all its games are decided; otherwise
        its bracket slots are emptied again.
        Returns the number of slots that changed.
        """
        rnd = self.group_round(tournament)
        bracket = tournament.round_for(Stage.from_nb_teams(self.bracket_size))
        if rnd is None or bracket is None:
            return 0

        for name, ranked in (rankings or {}).items():
            pool = rnd.pool(name)
            if pool is None:
                raise InvalidArgumentError(f"Unknown pool {name!r}")
            pool.ranking = list(ranked)

        qualified: Dict[int, List[PlayerPair]] = {}
        for idx, pool in enumerate(rnd.pools):
            if pool.ranking is not None:
                qualified[idx] = pool.ranking[: self.nb_qualified_by_pool]
            elif self.is_pool_finished(rnd, pool):
                qualified[idx] = self.pool_ranking(rnd, pool)[: self.nb_qualified_by_pool]

        def spot(pool_spot: PoolSpot) -> Optional[PlayerPair]:
            pool_idx, rank = pool_spot
            ranked = qualified.get(pool_idx)
            if ranked is None or rank > len(ranked):
                return None
            return ranked[rank - 1]

        changed = 0
        template = cross_pool_template(self.nb_pools, self.nb_qualified_by_pool)
        for game, (spot_a, spot_b) in zip(bracket.games, template):
            team_a, team_b = spot(spot_a), spot(spot_b)
            if game.team_a is not team_a:
                game.team_a = team_a
                changed += 1
            if game.team_b is not team_b:
                game.team_b = team_b
                changed += 1
        if changed:
            logger.debug("Pool qualifiers moved into %s (%d slots changed)", bracket.stage.value, changed)
        return changed
