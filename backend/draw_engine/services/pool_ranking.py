"""
Default pool standings.

One point per win; ties are broken by game difference (games won minus games
lost over all sets), then by the order pairs were drawn into the pool.
Callers with other tie-break rules pass their own ranking to the group phase
instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from draw_engine.models.game import Game
from draw_engine.models.player_pair import PlayerPair
from draw_engine.models.pool import Pool
from draw_engine.models.score import TeamSide


@dataclass
class PoolRankingDetails:
    pair: PlayerPair
    played: int = 0
    wins: int = 0
    losses: int = 0
    games_won: int = 0
    games_lost: int = 0

    @property
    def points(self) -> int:
        return self.wins

    @property
    def game_average(self) -> int:
        return self.games_won - self.games_lost


def compute_pool_standings(pool: Pool, games: Iterable[Game]) -> List[PoolRankingDetails]:
    """Standings of pool from the decided games between two of its pairs."""
    rows = {p.id: PoolRankingDetails(pair=p) for p in pool.pairs}

    for game in games:
        a, b = game.team_a, game.team_b
        if not (pool.contains(a) and pool.contains(b)):
            continue
        side = game.winner_side
        if side is None:
            continue

        row_a, row_b = rows[a.id], rows[b.id]
        row_a.played += 1
        row_b.played += 1
        if side == TeamSide.TEAM_A:
            row_a.wins += 1
            row_b.losses += 1
        else:
            row_b.wins += 1
            row_a.losses += 1

        if game.score is not None:
            row_a.games_won += game.score.team_a_games
            row_a.games_lost += game.score.team_b_games
            row_b.games_won += game.score.team_b_games
            row_b.games_lost += game.score.team_a_games

    order = {p.id: i for i, p in enumerate(pool.pairs)}
    return sorted(
        rows.values(),
        key=lambda r: (-r.points, -r.game_average, order[r.pair.id]),
    )


def rank_pool(pool: Pool, games: Iterable[Game]) -> List[PlayerPair]:
    return [row.pair for row in compute_pool_standings(pool, games)]
