"""
Utility functions for the N-Queens step-wise solver.

This module contains:
- Attack checking functions
- Solution validation
- Bitmask width and symmetry helpers
- Reference solution counts
"""

import numbers
from typing import Dict, List, Sequence, Tuple

from .board import EMPTY


# Native integer width used for the per-row bitmasks
MAX_BOARD_SIZE = 31

# Number of distinct solutions of the classic N-Queens problem
KNOWN_SOLUTION_COUNTS: Dict[int, int] = {
    1: 1,
    2: 0,
    3: 0,
    4: 2,
    5: 10,
    6: 4,
    7: 40,
    8: 92,
    9: 352,
    10: 724,
    11: 2680,
    12: 14200,
    13: 73712,
    14: 365596,
}


# =============================================================================
# Attack Checking Functions
# =============================================================================

def check_attack(q1: Tuple[int, int], q2: Tuple[int, int]) -> bool:
    """
    Check if two queens attack each other.

    Attack types:
    - Rook-type: same row or same column
    - Diagonal: |r-r'| = |c-c'|

    Args:
        q1: First queen position (row, col)
        q2: Second queen position (row, col)

    Returns:
        Boolean indicating if queens attack each other.
    """
    r1, c1 = q1
    r2, c2 = q2

    if r1 == r2 or c1 == c2:
        return True

    return abs(r1 - r2) == abs(c1 - c2)


def conflicts_with_placed(queens: Sequence[int], row: int, col: int) -> bool:
    """
    Check a trial placement against every accepted queen above it.

    Args:
        queens: Board (queens[row] = column or EMPTY)
        row: Trial row
        col: Trial column

    Returns:
        True if (row, col) shares a column or diagonal with a queen in
        rows 0..row-1.
    """
    for r in range(row):
        c = queens[r]
        if c != EMPTY and check_attack((r, c), (row, col)):
            return True
    return False


def count_attacking_pairs(queens: Sequence[int]) -> int:
    """
    Count attacking pairs among placed queens (naive O(N²) ground truth).

    Args:
        queens: Board (queens[row] = column or EMPTY)

    Returns:
        Number of attacking pairs
    """
    placed = [(r, c) for r, c in enumerate(queens) if c != EMPTY]
    count = 0
    for i in range(len(placed)):
        for j in range(i + 1, len(placed)):
            if check_attack(placed[i], placed[j]):
                count += 1
    return count


def is_valid_solution(queens: Sequence[int]) -> bool:
    """A board is a solution when every row holds a queen and none attack."""
    n = len(queens)
    if n == 0 or any(c == EMPTY or not 0 <= c < n for c in queens):
        return False
    return count_attacking_pairs(queens) == 0


# =============================================================================
# Symmetry Helpers
# =============================================================================

def symmetry_limit(n: int) -> int:
    """
    Column limit for the first row under left-right symmetry pruning.

    Only the left half of the first row (plus the centre column for odd n)
    is explored: ceil(n / 2).
    """
    return (n + 1) // 2


def has_distinct_mirror(queens: Sequence[int], n: int) -> bool:
    """
    Whether a solution's left-right reflection is a different solution.

    Only the first row decides this: with odd n and the first queen in the
    centre column, the first-row placement lies on the reflection axis.
    """
    return not (n % 2 == 1 and queens[0] == n // 2)


def is_supported_size(n) -> bool:
    """Whether n is an integer board size the bitmask solver accepts."""
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        return False
    return 1 <= n <= MAX_BOARD_SIZE


def check_board_size(n: int) -> Dict[str, any]:
    """
    Check whether a board size is supported by the bitmask solver.

    Args:
        n: Board dimension

    Returns:
        Dictionary with size information and reference solution count
        (None when not tabulated)
    """
    return {
        'n': n,
        'bits_required': n,
        'max_supported': MAX_BOARD_SIZE,
        'supported': is_supported_size(n),
        'first_row_columns': symmetry_limit(n),
        'known_solutions': KNOWN_SOLUTION_COUNTS.get(n),
    }


def solution_rows(queens: Sequence[int]) -> List[Tuple[int, int]]:
    """Placed queens as (row, col) pairs."""
    return [(r, c) for r, c in enumerate(queens) if c != EMPTY]
