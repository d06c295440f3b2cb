from draw_engine.models import Game, PlayerPair, Score, TeamSide


def _pair(name: str, seed: int = 0) -> PlayerPair:
    return PlayerPair(player1=name, player2=f"{name} partner", seed=seed)


class TestGameWinner:
    def test_no_teams_is_undecided(self):
        assert Game().winner is None
        assert Game(team_a=_pair("a")).winner is None

    def test_score_decides(self):
        a, b = _pair("a"), _pair("b")
        game = Game(team_a=a, team_b=b, score=Score.parse("4-6 6-7"))
        assert game.winner is b
        assert game.winner_side == TeamSide.TEAM_B
        assert game.is_decided

    def test_clearing_score_undecides(self):
        game = Game(team_a=_pair("a"), team_b=_pair("b"), score=Score.parse("6-1 6-1"))
        game.score = None
        assert game.winner is None
        assert not game.is_decided

    def test_bye_loses_without_score(self):
        a = _pair("a")
        assert Game(team_a=a, team_b=PlayerPair.bye()).winner is a
        assert Game(team_a=PlayerPair.bye(), team_b=a).winner is a

    def test_bye_vs_bye_moves_a_bye_on(self):
        bye = PlayerPair.bye()
        game = Game(team_a=bye, team_b=PlayerPair.bye())
        assert game.winner is bye

    def test_unresolved_qualifier_is_undecided(self):
        assert Game(team_a=_pair("a"), team_b=PlayerPair.qualifier(1)).winner is None
        assert Game(team_a=PlayerPair.qualifier(2), team_b=PlayerPair.bye()).winner is None

    def test_forfeit(self):
        a, b = _pair("a"), _pair("b")
        assert Game(team_a=a, team_b=b, score=Score.forfeit(TeamSide.TEAM_B)).winner is a


class TestPlayerPair:
    def test_placeholders(self):
        bye = PlayerPair.bye()
        q = PlayerPair.qualifier(3)
        assert bye.is_bye and not bye.is_real and bye.player1 is None
        assert q.is_qualifier and q.qualifier_index == 3 and q.name == "Q3"

    def test_names(self):
        assert PlayerPair(player1="Lebron", player2="Galan", seed=1).name == "Lebron / Galan"
        assert PlayerPair(player1="Lebron", player2="Galan", seed=1).is_seeded
        assert not PlayerPair(player1="x").is_seeded

    def test_identity_equality(self):
        a = PlayerPair(player1="x", player2="y")
        b = PlayerPair(player1="x", player2="y")
        assert a != b
        assert a == a
