from draw_engine.models import Game, PlayerPair, Pool, Score, TeamSide
from draw_engine.services.pool_ranking import compute_pool_standings, rank_pool


def _pool(n: int) -> Pool:
    pool = Pool(name="Pool A", capacity=n)
    for i in range(n):
        pool.add_pair(PlayerPair(player1=f"P{i}a", player2=f"P{i}b"))
    return pool


def test_points_then_game_difference():
    pool = _pool(3)
    a, b, c = pool.pairs
    games = [
        Game(team_a=a, team_b=b, score=Score.parse("6-2 6-2")),
        Game(team_a=b, team_b=c, score=Score.parse("6-4 6-4")),
        Game(team_a=c, team_b=a, score=Score.parse("6-4 6-4")),
    ]
    standings = compute_pool_standings(pool, games)

    assert [r.pair for r in standings] == [a, c, b]
    assert [r.points for r in standings] == [1, 1, 1]
    assert [r.game_average for r in standings] == [4, 0, -4]
    assert all(r.played == 2 for r in standings)


def test_undecided_games_do_not_count():
    pool = _pool(3)
    a, b, c = pool.pairs
    games = [
        Game(team_a=a, team_b=b),
        Game(team_a=c, team_b=b, score=Score.parse("6-0 6-0")),
    ]
    standings = compute_pool_standings(pool, games)
    assert standings[0].pair is c
    assert standings[0].wins == 1
    assert next(r for r in standings if r.pair is a).played == 0


def test_draw_order_breaks_full_ties():
    pool = _pool(4)
    assert rank_pool(pool, []) == pool.pairs


def test_forfeit_counts_as_a_win_without_games():
    pool = _pool(2)
    a, b = pool.pairs
    ranked = compute_pool_standings(pool, [Game(team_a=a, team_b=b, score=Score.forfeit(TeamSide.TEAM_A))])
    assert ranked[0].pair is b
    assert ranked[0].games_won == 0


def test_games_with_outsiders_are_ignored():
    pool = _pool(2)
    a, b = pool.pairs
    outsider = PlayerPair(player1="x")
    standings = compute_pool_standings(pool, [Game(team_a=outsider, team_b=b, score=Score.parse("6-0 6-0"))])
    assert [r.played for r in standings] == [0, 0]
    assert standings[0].pair is a
