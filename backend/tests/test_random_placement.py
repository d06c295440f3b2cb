import logging
import random

import pytest

from draw_engine.errors import CapacityExceededError
from draw_engine.models import PlayerPair, Pool, Round, Stage
from draw_engine.services.random_placement import (
    place_qualifier_placeholders,
    place_remaining_teams_randomly,
    place_teams_in_order,
)
from draw_engine.utils.game_slots import empty_slots, get_team, set_team


def _make_pairs(n: int) -> list[PlayerPair]:
    return [PlayerPair(player1=f"P{i}a", player2=f"P{i}b") for i in range(1, n + 1)]


def _group_round(nb_pools: int, capacity: int) -> Round:
    pools = [Pool(name=f"Pool {chr(ord('A') + i)}", capacity=capacity) for i in range(nb_pools)]
    return Round(stage=Stage.GROUPS, pools=pools)


class TestKnockoutRound:
    def test_existing_slots_untouched(self, rng):
        rnd = Round.knockout(Stage.QUARTERS, 8)
        seed, bye = PlayerPair(player1="seed", seed=1), PlayerPair.bye()
        set_team(rnd, 0, seed)
        set_team(rnd, 1, bye)
        pairs = _make_pairs(6)

        assert place_remaining_teams_randomly(rnd, pairs, rng) == 6
        assert get_team(rnd, 0) is seed
        assert get_team(rnd, 1) is bye
        assert empty_slots(rnd) == []
        placed = list(rnd.teams())
        assert all(sum(1 for t in placed if t is p) == 1 for p in pairs)

    def test_excess_pairs_are_left_out(self, rng, caplog):
        rnd = Round.knockout(Stage.QUARTERS, 8)
        with caplog.at_level(logging.WARNING):
            assert place_remaining_teams_randomly(rnd, _make_pairs(10), rng) == 8
        assert "left unplaced" in caplog.text

    def test_nothing_to_place(self, rng):
        rnd = Round.knockout(Stage.QUARTERS, 8)
        assert place_remaining_teams_randomly(rnd, None, rng) == 0
        assert place_remaining_teams_randomly(rnd, [], rng) == 0
        assert place_remaining_teams_randomly(None, _make_pairs(2), rng) == 0
        assert not rnd.has_any_team()

    def test_layout_depends_on_random_source(self):
        layouts = set()
        for s in range(10):
            rnd = Round.knockout(Stage.QUARTERS, 8)
            pairs = _make_pairs(8)
            place_remaining_teams_randomly(rnd, pairs, random.Random(s))
            layouts.add(tuple(pairs.index(get_team(rnd, slot)) for slot in range(8)))
        assert len(layouts) > 1

    def test_in_order_fills_first_to_last(self):
        rnd = Round.knockout(Stage.SEMIS, 4)
        pairs = _make_pairs(3)
        assert place_teams_in_order(rnd, pairs) == 3
        assert [get_team(rnd, s) for s in range(4)] == pairs + [None]


class TestPools:
    def test_balanced_fill(self, rng):
        rnd = _group_round(3, 4)
        assert place_remaining_teams_randomly(rnd, _make_pairs(10), rng) == 10
        assert sorted(p.size for p in rnd.pools) == [3, 3, 4]

    def test_keeps_seeded_members(self, rng):
        rnd = _group_round(2, 3)
        seed = PlayerPair(player1="seed", seed=1)
        rnd.pools[0].add_pair(seed)
        place_remaining_teams_randomly(rnd, _make_pairs(5), rng)
        assert rnd.pools[0].pairs[0] is seed
        assert [p.size for p in rnd.pools] == [3, 3]

    def test_full_pools_leave_pairs_out(self, rng, caplog):
        rnd = _group_round(2, 2)
        with caplog.at_level(logging.WARNING):
            assert place_remaining_teams_randomly(rnd, _make_pairs(5), rng) == 4
        assert "All pools are full" in caplog.text


class TestQualifierPlaceholders:
    def test_ordinals_follow_bracket_order(self, rng):
        rnd = Round.knockout(Stage.R16, 16)
        slots = place_qualifier_placeholders(rnd, 4, rng)

        assert slots == sorted(slots)
        assert len(set(slots)) == 4
        for ordinal, slot in enumerate(slots, start=1):
            team = get_team(rnd, slot)
            assert team.is_qualifier and team.qualifier_index == ordinal
            assert rnd.qualifier_slots[ordinal] == slot

    def test_only_empty_slots_are_used(self, rng):
        rnd = Round.knockout(Stage.SEMIS, 4)
        set_team(rnd, 0, PlayerPair.bye())
        set_team(rnd, 3, PlayerPair.bye())
        assert place_qualifier_placeholders(rnd, 2, rng) == [1, 2]

    def test_zero_is_a_no_op(self, rng):
        rnd = Round.knockout(Stage.SEMIS, 4)
        assert place_qualifier_placeholders(rnd, 0, rng) == []
        assert rnd.qualifier_slots == {}

    def test_not_enough_room(self, rng):
        rnd = Round.knockout(Stage.SEMIS, 4)
        set_team(rnd, 0, PlayerPair.bye())
        with pytest.raises(CapacityExceededError):
            place_qualifier_placeholders(rnd, 4, rng)
