from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from draw_engine.config import get_random_source
from draw_engine.errors import DrawEngineError, InvalidArgumentError
from draw_engine.models import Game, PairType, PlayerPair, Round, Tournament, TournamentConfig
from draw_engine.services.tournament_builder import TournamentBuilder, validate_config

router = APIRouter()


class PairIn(BaseModel):
    player1: Optional[str] = None
    player2: Optional[str] = None
    seed: int = 0
    type: PairType = PairType.NORMAL
    qualifier_index: Optional[int] = Field(default=None, ge=1)

    def to_pair(self, ordinal: int = 1) -> PlayerPair:
        if self.type == PairType.BYE:
            return PlayerPair.bye()
        if self.type == PairType.QUALIFIER:
            return PlayerPair.qualifier(self.qualifier_index or ordinal)
        return PlayerPair(player1=self.player1, player2=self.player2, seed=self.seed)


class DrawPreviewRequest(BaseModel):
    config: TournamentConfig
    pairs: List[PairIn] = []
    random_seed: Optional[int] = None


def _to_pairs(entries: List[PairIn]) -> List[PlayerPair]:
    """QUALIFIER entries without an index take the lowest free ordinal, in order of appearance."""
    taken = {e.qualifier_index for e in entries if e.type == PairType.QUALIFIER and e.qualifier_index}
    ordinal = 0
    pairs = []
    for entry in entries:
        if entry.type == PairType.QUALIFIER and entry.qualifier_index is None:
            ordinal += 1
            while ordinal in taken:
                ordinal += 1
            pairs.append(entry.to_pair(ordinal))
        else:
            pairs.append(entry.to_pair())
    return pairs


def _pair_dict(pair: Optional[PlayerPair]):
    if pair is None:
        return None
    return {
        "id": pair.id,
        "name": pair.name,
        "seed": pair.seed,
        "type": pair.type.value,
        "qualifier_index": pair.qualifier_index,
    }


def _game_dict(game: Game):
    return {
        "id": game.id,
        "team_a": _pair_dict(game.team_a),
        "team_b": _pair_dict(game.team_b),
        "pool": game.pool_name,
        "winner": _pair_dict(game.winner),
    }


def _round_dict(rnd: Round):
    return {
        "stage": rnd.stage.value,
        "label": rnd.stage.label,
        "games": [_game_dict(g) for g in rnd.games],
        "pools": [
            {"name": p.name, "pairs": [_pair_dict(pair) for pair in p.pairs]}
            for p in rnd.pools
        ],
    }


@router.post("/draws/validate")
def validate_draw_config(config: TournamentConfig):
    """Report every configuration problem at once"""
    errors = validate_config(config)
    return {"valid": not errors, "errors": errors}


@router.post("/draws/preview")
def preview_draw(request: DrawPreviewRequest):
    """Build and draw a tournament without storing it"""
    tournament = Tournament(config=request.config)
    builder = TournamentBuilder(get_random_source(request.random_seed))
    try:
        builder.setup_and_populate_tournament(tournament, _to_pairs(request.pairs))
        builder.propagate_winners(tournament)
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=422, detail={"errors": exc.errors})
    except DrawEngineError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return {
        "id": tournament.id,
        "format": tournament.config.format.value,
        "rounds": [_round_dict(r) for r in tournament.rounds],
    }
