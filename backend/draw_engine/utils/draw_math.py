"""
Draw arithmetic helpers: power-of-two checks, log2 and round counts.
"""

from typing import List


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def log2_int(n: int) -> int:
    """Exact log2 of a power of two."""
    if not is_power_of_two(n):
        raise ValueError(f"{n} is not a power of two")
    return n.bit_length() - 1


def next_power_of_two(n: int) -> int:
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def nb_qualif_rounds(pre_qual_draw_size: int, nb_qualifiers: int) -> int:
    """Rounds played in qualification until nb_qualifiers winners remain."""
    if nb_qualifiers <= 0 or pre_qual_draw_size <= 0:
        return 0
    return log2_int(pre_qual_draw_size) - log2_int(nb_qualifiers)


def round_slot_counts(draw_size: int, stop_at: int = 2) -> List[int]:
    """Slot counts of each round, e.g. 16 -> [16, 8, 4, 2]."""
    sizes: List[int] = []
    size = draw_size
    while size >= stop_at:
        sizes.append(size)
        size //= 2
    return sizes
