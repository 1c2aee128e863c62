"""
Search driver for the step-wise N-Queens solver.

The driver owns a solver, calls step() once per tick and pushes every
snapshot to a renderer. It pauses after each solution, records the base
solution and, when the solver flags one, the mirrored solution it derives
itself. Timing is injected through a clock callable so the same loop runs
in real time or instantly in tests.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .board import StepResult, mirror_board
from .config import Config, SPEED_SETTINGS
from .interfaces import RendererInterface
from .solver import StepwiseSolver, create_solver
from .utils import is_supported_size
from .visualize import save_solution_image


@dataclass(frozen=True)
class SolutionRecord:
    """
    One recorded solution.

    Attributes:
        solution_id: 1-based id in discovery order (mirrors take base id + 1)
        queens: Complete board
        is_mirror: Whether the board was derived by mirroring a found solution
        steps_count: Steps taken when the solution was found
        filename: Saved image, if any
    """

    solution_id: int
    queens: Tuple[int, ...]
    is_mirror: bool = False
    steps_count: int = 0
    filename: Optional[str] = None


@dataclass
class SearchSummary:
    """Totals of a driven search run."""

    board_size: int
    solutions_count: int
    steps_count: int
    is_finished: bool
    elapsed_seconds: float
    solutions: List[SolutionRecord] = field(default_factory=list)
    history: List[Tuple[int, int]] = field(default_factory=list)


class SearchDriver:
    """
    Drives a StepwiseSolver tick by tick.

    Attributes:
        config: Run configuration
        renderer: Optional renderer receiving every snapshot
        clock: Callable sleeping for a number of seconds
        board_size: Board dimension used by the next start()
        solver: Active solver, None before start() or after reset()
        solutions: Solutions recorded during the current search
        history: (steps, solutions) pairs, one per solution event
        status_text: Human-readable status line
        stats_text: Human-readable step counter
    """

    def __init__(
        self,
        config: Config,
        renderer: Optional[RendererInterface] = None,
        clock: Callable[[float], None] = time.sleep,
        verbose: Optional[bool] = None
    ):
        self.config = config
        self.renderer = renderer
        self.clock = clock
        self.verbose = config.verbose if verbose is None else verbose
        self.board_size = config.size
        self.speed = config.speed
        self.interval_ms = config.interval_ms

        self.solver: Optional[StepwiseSolver] = None
        self.solutions: List[SolutionRecord] = []
        self.history: List[Tuple[int, int]] = []
        self.last_result: Optional[StepResult] = None
        self.status_text = "Press start. The search only explores half the board using symmetry."
        self.stats_text = ""

        self._paused = False
        self._finish_reported = False
        self._start_time: Optional[float] = None
        self._elapsed = 0.0

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        """A search exists and has not finished yet (paused or not)."""
        return self.solver is not None and not self.solver.is_finished

    @property
    def is_paused(self) -> bool:
        return self._paused

    def set_speed(self, name: str) -> None:
        """
        Select a speed preset.

        Raises:
            ValueError: If name is not a known preset
        """
        if name not in SPEED_SETTINGS:
            raise ValueError(f"Unknown speed '{name}', must be one of {list(SPEED_SETTINGS)}")
        self.speed = name
        self.interval_ms = SPEED_SETTINGS[name]

    def change_size(self, n: int) -> bool:
        """
        Change the board size for the next search.

        Refused while a search is in progress, and for sizes the solver
        does not support; a refused change leaves the driver untouched.

        Returns:
            True if the size was changed
        """
        if self.is_running or not is_supported_size(n):
            return False
        n = int(n)
        self.board_size = n
        self.reset()
        self.status_text = f"Board size changed to {n}×{n}"
        return True

    def start(self) -> None:
        """Discard any previous search and start a new one."""
        self.solver = create_solver(self.board_size)
        self.solutions = []
        self.history = []
        self.last_result = None
        self._paused = False
        self._finish_reported = False
        self._start_time = time.time()
        self._elapsed = 0.0
        self.status_text = "Searching... (symmetry pruning on)"
        self.stats_text = "Steps: 0"

        if self.verbose:
            print("=" * 60)
            print(f"Backtracking Search (N={self.board_size})")
            print("=" * 60)
            print(f"Board: {self.board_size}×{self.board_size}, Queens: {self.board_size}")
            print(f"Speed: {self.speed} ({self.interval_ms} ms/step)")
            print("=" * 60)

    def reset(self) -> None:
        """Stop the current search and show an empty board."""
        self.solver = None
        self.solutions = []
        self.history = []
        self.last_result = None
        self._paused = False
        self._finish_reported = False
        self._start_time = None
        self._elapsed = 0.0
        self.status_text = "Press start to begin."
        self.stats_text = ""
        if self.renderer is not None:
            self.renderer.render(StepResult.empty(self.board_size))

    def pause(self) -> None:
        if self.is_running and not self._paused:
            self._paused = True
            self.status_text = "Paused"

    def resume(self) -> None:
        if self._paused:
            self._paused = False
            self.status_text = "Searching... (symmetry pruning on)"

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def tick(self) -> Optional[StepResult]:
        """
        Advance the solver by one step and render the result.

        Returns:
            The StepResult, or None when no search is active or it is paused
        """
        if self.solver is None or self._paused:
            return None

        result = self.solver.step()
        self.last_result = result

        if self.renderer is not None:
            self.renderer.render(result)

        if result.is_finished:
            self._handle_finished(result)
            return result

        self.stats_text = f"Steps: {result.steps_count}"
        if result.solution_found:
            self._handle_solution(result)
        else:
            self.status_text = f"Searching... found {result.solutions_count} solutions"

        self._print_progress(result)
        return result

    def _handle_solution(self, result: StepResult) -> None:
        """Record the found solution and, if flagged, its mirror."""
        base_id = result.solutions_count - result.new_solutions_found + 1
        self.history.append((result.steps_count, result.solutions_count))

        records = [self._record(base_id, result.queens, False, result.steps_count)]
        message = f"Found solution #{base_id}"

        if result.is_symmetric_base:
            mirrored = mirror_board(result.queens, self.board_size)
            records.append(self._record(base_id + 1, mirrored, True, result.steps_count))
            message += f" and mirror solution #{base_id + 1} (derived)"

        for record in records:
            self.solutions.append(record)
            if self.renderer is not None:
                self.renderer.on_solution(record)

        if self.config.save:
            message += ", images saved."
        self.status_text = message

        if self.verbose:
            print(f"  {message} at step {result.steps_count:,}")

    def _record(
        self,
        solution_id: int,
        queens: Tuple[int, ...],
        is_mirror: bool,
        steps_count: int
    ) -> SolutionRecord:
        filename = None
        if self.config.save:
            img_dir = Path(self.config.output_dir) / f"N{self.board_size}" / "img"
            img_dir.mkdir(parents=True, exist_ok=True)
            title = f"Solution #{solution_id}" + (" (mirror)" if is_mirror else "")
            filename = save_solution_image(
                queens,
                str(img_dir / f"solution_{solution_id}.png"),
                colors=self.config.colors,
                title=title,
                dpi=self.config.dpi,
            )
        return SolutionRecord(solution_id, tuple(queens), is_mirror, steps_count, filename)

    def _handle_finished(self, result: StepResult) -> None:
        if self._finish_reported:
            return
        self._update_elapsed()
        self._finish_reported = True
        self.history.append((result.steps_count, result.solutions_count))
        self.status_text = f"Done! Found {result.solutions_count} solutions (symmetry saved about half the work)"
        self.stats_text = f"Steps computed: {result.steps_count}"

        if self.verbose:
            print("=" * 60)
            print(f"Search finished: {result.solutions_count} solutions in "
                  f"{result.steps_count:,} steps ({self._elapsed:.1f}s)")
            print("=" * 60)

        if self.renderer is not None:
            self.renderer.on_finished(self.summary())

    def _update_elapsed(self) -> None:
        # Frozen once the finish has been reported
        if self._start_time is not None and not self._finish_reported:
            self._elapsed = time.time() - self._start_time

    def _print_progress(self, result: StepResult) -> None:
        """Print progress if at print interval."""
        if not self.verbose:
            return
        interval = self.config.log_interval if self.config.log_interval > 0 else 10000
        if result.steps_count % interval == 0:
            self._update_elapsed()
            print(f"Step {result.steps_count:>9,}: "
                  f"solutions={result.solutions_count:>6}, "
                  f"row={result.trial_pos[0]:>2}, "
                  f"Time={self._elapsed:>5.1f}s")

    def run(self, max_ticks: Optional[int] = None) -> SearchSummary:
        """
        Drive the search until it finishes, is paused, or a limit is hit.

        Sleeps for the speed preset interval between ticks and for
        solution_pause_ms after each solution. Starts a search first if
        none is active.

        Args:
            max_ticks: Optional cap on the number of ticks in this call

        Returns:
            SearchSummary of the search so far
        """
        if self.solver is None:
            self.start()

        ticks = 0
        while True:
            result = self.tick()
            if result is None or result.is_finished:
                break
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break
            if self.config.max_steps and result.steps_count >= self.config.max_steps:
                break
            delay_ms = self.config.solution_pause_ms if result.solution_found else self.interval_ms
            if delay_ms > 0:
                self.clock(delay_ms / 1000.0)

        return self.summary()

    def summary(self) -> SearchSummary:
        """Totals of the current (or last) search."""
        self._update_elapsed()
        solver = self.solver
        history = list(self.history)
        if solver is not None and not self._finish_reported:
            history.append((solver.steps_count, solver.solutions_count))
        return SearchSummary(
            board_size=self.board_size,
            solutions_count=solver.solutions_count if solver else 0,
            steps_count=solver.steps_count if solver else 0,
            is_finished=solver.is_finished if solver else False,
            elapsed_seconds=self._elapsed,
            solutions=list(self.solutions),
            history=history,
        )
