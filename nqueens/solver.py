"""
Step-wise backtracking solver for the N-Queens problem.

The solver keeps the whole depth-first search in its fields (cursor,
partial board, per-row occupancy masks, counters) and advances exactly one
trial placement per call to step(). This makes it easy to drive from a
timer, a test harness or a loop that drains it to completion.

Conflict detection uses three bitmasks per row:
- col: columns occupied by queens in the rows above
- rising: rising diagonals, shifted left by one bit per row
- falling: falling diagonals, shifted right by one bit per row

Only the left half of the first row is searched (plus the centre column for
odd N). Each solution found is credited together with its left-right mirror
unless the first queen sits on the reflection axis.
"""

import numbers
from typing import List, Tuple

from .interfaces import SolverInterface
from .board import EMPTY, NO_TRIAL, StepResult
from .utils import MAX_BOARD_SIZE, has_distinct_mirror, symmetry_limit


class StepwiseSolver(SolverInterface):
    """
    Backtracking N-Queens solver advanced one trial at a time.

    Attributes:
        _n: Board dimension
        _queens: Partial board, queens[row] = column or EMPTY
        _col_masks: Occupied columns for each row 0..N
        _rising_masks: Occupied rising diagonals for each row 0..N
        _falling_masks: Occupied falling diagonals for each row 0..N
        _row: Row currently being extended (-1 once finished)
        _col: Last column trialed in that row
        _solutions_found: Solutions credited so far
        _steps: Trials evaluated so far
    """

    def __init__(self, n: int):
        """
        Initialize an empty search.

        Args:
            n: Board dimension, 1 <= n <= MAX_BOARD_SIZE

        Raises:
            TypeError: If n is not an integer
            ValueError: If n is outside the supported range
        """
        if isinstance(n, bool) or not isinstance(n, numbers.Integral):
            raise TypeError(f"Board size must be an integer, got {type(n).__name__}")
        n = int(n)
        if n < 1:
            raise ValueError(f"Board size must be at least 1, got {n}")
        if n > MAX_BOARD_SIZE:
            raise ValueError(
                f"Board size {n} exceeds the {MAX_BOARD_SIZE}-bit mask width"
            )

        self._n = n
        self._full_mask = (1 << n) - 1
        self._queens: List[int] = [EMPTY] * n
        self._col_masks: List[int] = [0] * (n + 1)
        self._rising_masks: List[int] = [0] * (n + 1)
        self._falling_masks: List[int] = [0] * (n + 1)
        self._row = 0
        self._col = -1
        self._solutions_found = 0
        self._steps = 0

    @property
    def n(self) -> int:
        return self._n

    @property
    def solutions_count(self) -> int:
        return self._solutions_found

    @property
    def steps_count(self) -> int:
        return self._steps

    @property
    def is_finished(self) -> bool:
        return self._row < 0

    @property
    def cursor(self) -> Tuple[int, int]:
        """Current (row, col) of the search."""
        return (self._row, self._col)

    @property
    def queens(self) -> Tuple[int, ...]:
        return tuple(self._queens)

    def masks(self, row: int) -> Tuple[int, int, int]:
        """Cached (col, rising, falling) masks for a row."""
        return (self._col_masks[row], self._rising_masks[row], self._falling_masks[row])

    def recompute_masks(self, row: int) -> Tuple[int, int, int]:
        """
        Rebuild the masks for a row from the board alone.

        A queen in row i contributes its column bit shifted by row - i
        (left for rising diagonals, right for falling ones).

        Args:
            row: Row index in 0..N

        Returns:
            (col, rising, falling) masks
        """
        col_mask = rising = falling = 0
        for i in range(row):
            col = self._queens[i]
            if col == EMPTY:
                continue
            bit = 1 << col
            col_mask |= bit
            rising |= (bit << (row - i)) & self._full_mask
            falling |= bit >> (row - i)
        return (col_mask, rising, falling)

    def _has_conflict(self, row: int, col: int) -> bool:
        occupied = self._col_masks[row] | self._rising_masks[row] | self._falling_masks[row]
        return bool(occupied & (1 << col))

    def _place(self, row: int, col: int) -> None:
        """Accept a queen and derive the masks of the next row."""
        self._queens[row] = col
        bit = 1 << col
        self._col_masks[row + 1] = self._col_masks[row] | bit
        self._rising_masks[row + 1] = ((self._rising_masks[row] | bit) << 1) & self._full_mask
        self._falling_masks[row + 1] = (self._falling_masks[row] | bit) >> 1

    def _backtrack(self) -> None:
        """Pop the exhausted row and resume the previous one past its queen."""
        self._queens[self._row] = EMPTY
        self._row -= 1
        if self._row >= 0:
            self._col = self._queens[self._row]

    def _terminal_result(self) -> StepResult:
        return StepResult(
            queens=tuple(self._queens),
            trial_pos=NO_TRIAL,
            solutions_count=self._solutions_found,
            steps_count=self._steps,
            is_finished=True,
        )

    def step(self) -> StepResult:
        """
        Evaluate the next trial placement.

        Exhausted rows are popped inside the same call until a trial can be
        made, so every non-terminal result describes exactly one trial.
        Once the first row runs out of columns every call returns the same
        terminal result.

        Returns:
            StepResult for the trial, or a terminal StepResult
        """
        while 0 <= self._row < self._n:
            row = self._row
            self._col += 1
            limit = symmetry_limit(self._n) if row == 0 else self._n

            if self._col >= limit:
                self._backtrack()
                continue

            col = self._col
            # Moving past the row's previous queen abandons it
            self._queens[row] = EMPTY
            self._steps += 1
            conflict = self._has_conflict(row, col)

            if conflict:
                return StepResult(
                    queens=tuple(self._queens),
                    trial_pos=(row, col),
                    has_conflict=True,
                    solutions_count=self._solutions_found,
                    steps_count=self._steps,
                )

            board_before = tuple(self._queens)
            self._place(row, col)

            if row < self._n - 1:
                self._row = row + 1
                self._col = -1
                return StepResult(
                    queens=board_before,
                    trial_pos=(row, col),
                    solutions_count=self._solutions_found,
                    steps_count=self._steps,
                )

            # Complete solution; the cursor stays on the last row
            mirrored = has_distinct_mirror(self._queens, self._n)
            credited = 2 if mirrored else 1
            self._solutions_found += credited
            return StepResult(
                queens=tuple(self._queens),
                trial_pos=(row, col),
                solution_found=True,
                solutions_count=self._solutions_found,
                new_solutions_found=credited,
                steps_count=self._steps,
                is_symmetric_base=mirrored,
            )

        return self._terminal_result()


def create_solver(n: int) -> StepwiseSolver:
    """
    Factory function to create a solver for a board size.

    Args:
        n: Board dimension

    Returns:
        Fresh StepwiseSolver
    """
    return StepwiseSolver(n)
