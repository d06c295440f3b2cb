"""
Tests for moving qualification winners into the main draw.

Each qualifier ordinal owns one main-draw slot for the whole tournament: the
slot is found once and reused whether it holds the placeholder or a winner.
"""

import random

from draw_engine.models import PlayerPair, Round, Score, Stage
from draw_engine.services.propagation import propagate_qualifiers
from draw_engine.services.random_placement import place_qualifier_placeholders
from draw_engine.utils.game_slots import fill_sequentially, get_team, set_team


def _make_pairs(n: int) -> list[PlayerPair]:
    return [PlayerPair(player1=f"P{i}a", player2=f"P{i}b") for i in range(1, n + 1)]


def _setup(nb_qualifiers: int = 2, seed: int = 1):
    """Helper: last qualification round with nb_qualifiers games and a main draw of 8."""
    last_qualif = Round.knockout(Stage.Q1, nb_qualifiers * 2)
    qualif_pairs = _make_pairs(nb_qualifiers * 2)
    fill_sequentially(last_qualif, qualif_pairs)
    main = Round.knockout(Stage.QUARTERS, 8)
    slots = place_qualifier_placeholders(main, nb_qualifiers, random.Random(seed))
    return last_qualif, main, qualif_pairs, slots


class TestQualifierPropagation:
    def test_undecided_games_keep_placeholders(self):
        last_qualif, main, _, slots = _setup()
        assert propagate_qualifiers(last_qualif, main) == 0
        for ordinal, slot in enumerate(slots, start=1):
            assert get_team(main, slot).qualifier_index == ordinal

    def test_winner_lands_on_its_ordinal_slot(self):
        last_qualif, main, pairs, slots = _setup()
        last_qualif.games[1].score = Score.parse("6-1 6-1")

        assert propagate_qualifiers(last_qualif, main) == 1
        assert get_team(main, slots[1]) is pairs[2]
        assert get_team(main, slots[0]).is_qualifier

    def test_idempotent(self):
        last_qualif, main, _, _ = _setup()
        for game in last_qualif.games:
            game.score = Score.parse("6-1 6-1")
        assert propagate_qualifiers(last_qualif, main) == 2
        assert propagate_qualifiers(last_qualif, main) == 0

    def test_corrected_result_replaces_in_place(self):
        last_qualif, main, pairs, slots = _setup()
        last_qualif.games[0].score = Score.parse("6-1 6-1")
        propagate_qualifiers(last_qualif, main)

        last_qualif.games[0].score = Score.parse("1-6 1-6")
        assert propagate_qualifiers(last_qualif, main) == 1
        assert get_team(main, slots[0]) is pairs[1]
        assert not any(t is pairs[0] for t in main.teams())

    def test_cleared_result_restores_placeholder(self):
        last_qualif, main, pairs, slots = _setup()
        last_qualif.games[0].score = Score.parse("6-1 6-1")
        propagate_qualifiers(last_qualif, main)

        last_qualif.games[0].score = None
        assert propagate_qualifiers(last_qualif, main) == 1
        restored = get_team(main, slots[0])
        assert restored.is_qualifier and restored.qualifier_index == 1
        assert propagate_qualifiers(last_qualif, main) == 0

    def test_order_of_results_does_not_matter(self):
        all_at_once = _setup(nb_qualifiers=4, seed=3)
        one_by_one = _setup(nb_qualifiers=4, seed=3)

        for game in all_at_once[0].games:
            game.score = Score.parse("6-1 6-1")
        propagate_qualifiers(all_at_once[0], all_at_once[1])

        for idx in (3, 0, 2, 1):
            one_by_one[0].games[idx].score = Score.parse("6-1 6-1")
            propagate_qualifiers(one_by_one[0], one_by_one[1])

        layout_a = [all_at_once[2].index(get_team(all_at_once[1], s)) for s in all_at_once[3]]
        layout_b = [one_by_one[2].index(get_team(one_by_one[1], s)) for s in one_by_one[3]]
        assert layout_a == layout_b == [0, 2, 4, 6]

    def test_placeholders_written_by_hand_are_found(self):
        last_qualif = Round.knockout(Stage.Q2, 4)
        pairs = _make_pairs(4)
        fill_sequentially(last_qualif, pairs)
        main = Round.knockout(Stage.QUARTERS, 8)
        set_team(main, 5, PlayerPair.qualifier(1))
        set_team(main, 2, PlayerPair.qualifier(2))
        for game in last_qualif.games:
            game.score = Score.parse("6-1 6-1")

        assert propagate_qualifiers(last_qualif, main) == 2
        assert get_team(main, 5) is pairs[0]
        assert get_team(main, 2) is pairs[2]
        assert main.qualifier_slots == {1: 5, 2: 2}

    def test_missing_slot_is_skipped(self):
        last_qualif = Round.knockout(Stage.Q1, 4)
        fill_sequentially(last_qualif, _make_pairs(4))
        last_qualif.games[0].score = Score.parse("6-1 6-1")
        main = Round.knockout(Stage.QUARTERS, 8)
        assert propagate_qualifiers(last_qualif, main) == 0
        assert not main.has_any_team()

    def test_bye_in_qualifying_sends_the_pair_through(self):
        last_qualif = Round.knockout(Stage.Q1, 2)
        pair = PlayerPair(player1="q", player2="r")
        set_team(last_qualif, 0, pair)
        set_team(last_qualif, 1, PlayerPair.bye())
        main = Round.knockout(Stage.SEMIS, 4)
        set_team(main, 3, PlayerPair.qualifier(1))

        assert propagate_qualifiers(last_qualif, main) == 1
        assert get_team(main, 3) is pair
