"""
Board representation for the N-Queens search.

This module provides:
- StepResult: the immutable snapshot emitted by every solver step
- Board helpers: empty boards, mirroring, matrix and text renderings

A board is a sequence of N integers where queens[row] is the column of the
queen in that row, or EMPTY when no queen has been placed there yet.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


EMPTY = -1
NO_TRIAL: Tuple[int, int] = (EMPTY, EMPTY)


def empty_board(n: int) -> Tuple[int, ...]:
    """Board of size n with no queen placed."""
    return (EMPTY,) * n


def mirror_board(queens: Sequence[int], n: Optional[int] = None) -> Tuple[int, ...]:
    """
    Reflect a board left-right.

    Every placed column c becomes n-1-c; empty rows stay empty.

    Args:
        queens: Board to mirror
        n: Board dimension (defaults to len(queens))

    Returns:
        Mirrored board as a new tuple
    """
    if n is None:
        n = len(queens)
    return tuple(
        (n - 1) - col if col != EMPTY else EMPTY
        for col in queens
    )


def board_to_matrix(queens: Sequence[int], n: Optional[int] = None) -> np.ndarray:
    """
    Convert a board to an N×N occupancy matrix.

    Args:
        queens: Board (queens[row] = column or EMPTY)
        n: Board dimension (defaults to len(queens))

    Returns:
        int8 array with 1 where a queen sits and 0 elsewhere
    """
    if n is None:
        n = len(queens)
    matrix = np.zeros((n, n), dtype=np.int8)
    for row, col in enumerate(queens):
        if col != EMPTY:
            matrix[row, col] = 1
    return matrix


def format_board(
    queens: Sequence[int],
    trial_pos: Optional[Tuple[int, int]] = None,
    has_conflict: bool = False
) -> str:
    """
    Render a board as text.

    'Q' marks a placed queen, '?' a pending trial, 'X' a conflicting trial
    and '.' an empty square.
    """
    n = len(queens)
    lines = []
    for row in range(n):
        cells = ['.'] * n
        if queens[row] != EMPTY:
            cells[queens[row]] = 'Q'
        if trial_pos is not None and trial_pos[0] == row and trial_pos[1] != EMPTY:
            cells[trial_pos[1]] = 'X' if has_conflict else '?'
        lines.append(' '.join(cells))
    return '\n'.join(lines)


@dataclass(frozen=True)
class StepResult:
    """
    Snapshot of the search after one solver step.

    The snapshot owns its own copy of the board, so callers can keep it
    around (or draw it later) while the solver keeps advancing.

    Attributes:
        queens: Board at the time of the trial (complete board when a
            solution was just found)
        trial_pos: (row, col) of the trial just evaluated, NO_TRIAL when
            the snapshot is terminal or empty
        has_conflict: Whether the trial attacked an accepted queen above it
        solution_found: Whether this trial completed a solution
        solutions_count: Running number of solutions after this step
        new_solutions_found: Solutions credited by this step (0, 1 or 2)
        steps_count: Running number of trials after this step
        is_finished: Whether the search has terminated
        is_symmetric_base: Whether the found solution has a distinct mirror
    """

    queens: Tuple[int, ...]
    trial_pos: Tuple[int, int] = NO_TRIAL
    has_conflict: bool = False
    solution_found: bool = False
    solutions_count: int = 0
    new_solutions_found: int = 0
    steps_count: int = 0
    is_finished: bool = False
    is_symmetric_base: bool = False

    @classmethod
    def empty(cls, n: int) -> 'StepResult':
        """Snapshot of an untouched board, used before a search starts."""
        return cls(queens=empty_board(n))

    @property
    def board_size(self) -> int:
        return len(self.queens)

    @property
    def placed_count(self) -> int:
        """Number of rows holding a queen."""
        return sum(1 for col in self.queens if col != EMPTY)

    def mirrored_queens(self) -> Tuple[int, ...]:
        """Left-right reflection of this snapshot's board."""
        return mirror_board(self.queens, self.board_size)

    def __str__(self) -> str:
        return format_board(self.queens, self.trial_pos, self.has_conflict)
