"""
Round-robin fixtures for one pool.

Circle method: position 0 stays put, the others rotate one step per matchday.
Odd pool sizes get a phantom position; whoever draws it sits the matchday out.
"""

from typing import List, Tuple


def rr_pairings_by_round(pool_size: int) -> List[Tuple[int, int, int, int]]:
    """
    Returns (matchday, sequence_in_matchday, idx_a, idx_b) for every pairing.
    idx_a < idx_b are 0-based pool positions.

    pool_size 4:
      matchday 1: 0v3, 1v2
      matchday 2: 0v2, 3v1 -> (1, 3)
      matchday 3: 0v1, 2v3
    """
    if pool_size < 2:
        return []

    n = pool_size if pool_size % 2 == 0 else pool_size + 1
    phantom = pool_size if pool_size % 2 == 1 else -1
    half = n // 2

    result: List[Tuple[int, int, int, int]] = []
    positions = list(range(n))

    for matchday in range(1, n):
        seq = 0
        for i in range(half):
            a, b = positions[i], positions[n - 1 - i]
            if a == phantom or b == phantom:
                continue
            seq += 1
            result.append((matchday, seq, min(a, b), max(a, b)))
        positions = [positions[0], positions[-1]] + positions[1:-1]

    return result
