import pytest

from draw_engine.errors import OccupiedSlotError
from draw_engine.models import PlayerPair, Round, Stage, TeamSide
from draw_engine.utils.game_slots import (
    count_byes,
    empty_slots,
    fill_sequentially,
    game_index,
    get_team,
    opposite_slot,
    place_team,
    set_team,
    side_of,
)


def test_slot_addressing():
    assert [game_index(s) for s in range(6)] == [0, 0, 1, 1, 2, 2]
    assert side_of(4) == TeamSide.TEAM_A
    assert side_of(5) == TeamSide.TEAM_B
    assert opposite_slot(4) == 5
    assert opposite_slot(5) == 4


def test_set_and_get_map_to_game_sides():
    rnd = Round.knockout(Stage.QUARTERS, 8)
    pair = PlayerPair(player1="a", player2="b")
    set_team(rnd, 3, pair)
    assert rnd.games[1].team_b is pair
    assert get_team(rnd, 3) is pair
    assert 3 not in empty_slots(rnd)


def test_placeholders_count_as_filled():
    rnd = Round.knockout(Stage.SEMIS, 4)
    set_team(rnd, 0, PlayerPair.bye())
    set_team(rnd, 2, PlayerPair.qualifier(1))
    assert empty_slots(rnd) == [1, 3]
    assert count_byes(rnd) == 1


def test_place_team_refuses_occupied_slot():
    rnd = Round.knockout(Stage.SEMIS, 4)
    place_team(rnd, 0, PlayerPair(player1="a"))
    with pytest.raises(OccupiedSlotError):
        place_team(rnd, 0, PlayerPair(player1="b"))


def test_place_team_may_replace_qualifier_placeholder():
    rnd = Round.knockout(Stage.SEMIS, 4)
    set_team(rnd, 1, PlayerPair.qualifier(1))
    pair = PlayerPair(player1="q")
    place_team(rnd, 1, pair, allow_qualifier_overwrite=True)
    assert get_team(rnd, 1) is pair


def test_fill_sequentially_skips_filled_slots():
    rnd = Round.knockout(Stage.SEMIS, 4)
    bye = PlayerPair.bye()
    set_team(rnd, 1, bye)
    pairs = [PlayerPair(player1=str(i)) for i in range(5)]
    assert fill_sequentially(rnd, pairs) == 3
    assert [get_team(rnd, s) for s in range(4)] == [pairs[0], bye, pairs[1], pairs[2]]
