import pytest

from draw_engine.utils.draw_math import (
    is_power_of_two,
    log2_int,
    nb_qualif_rounds,
    next_power_of_two,
    round_slot_counts,
)


def test_is_power_of_two():
    assert [n for n in range(0, 70) if is_power_of_two(n)] == [1, 2, 4, 8, 16, 32, 64]
    assert not is_power_of_two(-4)


def test_log2_int():
    assert log2_int(1) == 0
    assert log2_int(64) == 6
    with pytest.raises(ValueError):
        log2_int(48)


def test_next_power_of_two():
    assert next_power_of_two(0) == 1
    assert next_power_of_two(3) == 4
    assert next_power_of_two(4) == 4
    assert next_power_of_two(5) == 8
    assert next_power_of_two(17) == 32


def test_round_counts():
    assert round_slot_counts(16) == [16, 8, 4, 2]
    assert nb_qualif_rounds(32, 16) == 1
    assert nb_qualif_rounds(32, 4) == 3
    assert nb_qualif_rounds(16, 0) == 0
