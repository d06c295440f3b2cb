from draw_engine.models.game import Game
from draw_engine.models.player_pair import PairType, PlayerPair
from draw_engine.models.pool import Pool, pool_name
from draw_engine.models.round import Round
from draw_engine.models.score import Score, TeamSide
from draw_engine.models.stage import Stage
from draw_engine.models.tournament import DrawMode, Tournament, TournamentConfig, TournamentFormat

__all__ = [
    "DrawMode",
    "Game",
    "PairType",
    "PlayerPair",
    "Pool",
    "Round",
    "Score",
    "Stage",
    "TeamSide",
    "Tournament",
    "TournamentConfig",
    "TournamentFormat",
    "pool_name",
]
