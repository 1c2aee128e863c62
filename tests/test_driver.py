"""
Tests for the search driver: ticking, pausing, solution records and export.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib
matplotlib.use('Agg')

import pytest

from nqueens.board import EMPTY, mirror_board
from nqueens.config import Config, SPEED_SETTINGS
from nqueens.driver import SearchDriver
from nqueens.interfaces import RendererInterface
from nqueens.utils import KNOWN_SOLUTION_COUNTS, is_valid_solution


class RecordingRenderer(RendererInterface):
    """Renderer that keeps everything it is given."""

    def __init__(self):
        self.snapshots = []
        self.records = []
        self.summaries = []

    def render(self, snapshot):
        self.snapshots.append(snapshot)

    def on_solution(self, record):
        self.records.append(record)

    def on_finished(self, summary):
        self.summaries.append(summary)


class RecordingClock:
    def __init__(self):
        self.sleeps = []

    def __call__(self, seconds):
        self.sleeps.append(seconds)


def make_driver(size=4, **overrides):
    config = Config(sizes=[size], verbose=False, **overrides)
    renderer = RecordingRenderer()
    clock = RecordingClock()
    driver = SearchDriver(config, renderer=renderer, clock=clock)
    return driver, renderer, clock


# =============================================================================
# Lifecycle Tests
# =============================================================================

def test_tick_without_search_returns_none():
    driver, renderer, _ = make_driver()
    assert driver.tick() is None
    assert driver.solver is None
    assert renderer.snapshots == []


def test_run_to_completion():
    driver, renderer, _ = make_driver(size=6)
    summary = driver.run()

    assert summary.is_finished
    assert summary.solutions_count == KNOWN_SOLUTION_COUNTS[6]
    assert summary.board_size == 6
    assert len(summary.solutions) == KNOWN_SOLUTION_COUNTS[6]
    assert renderer.snapshots[-1].is_finished
    assert len(renderer.summaries) == 1
    assert driver.status_text.startswith("Done! Found 4 solutions")
    assert driver.stats_text == f"Steps computed: {summary.steps_count}"


def test_every_step_is_rendered():
    driver, renderer, _ = make_driver(size=5)
    summary = driver.run()

    trials = [s for s in renderer.snapshots if not s.is_finished]
    assert len(trials) == summary.steps_count


def test_ticks_after_finish_do_not_report_again():
    driver, renderer, _ = make_driver(size=4)
    summary = driver.run()

    for _ in range(3):
        result = driver.tick()
        assert result.is_finished
        assert result.steps_count == summary.steps_count

    assert len(renderer.summaries) == 1
    assert driver.summary().history == summary.history


# =============================================================================
# Solution Record Tests
# =============================================================================

def test_four_queens_records():
    driver, renderer, _ = make_driver(size=4)
    driver.run()

    ids = [r.solution_id for r in driver.solutions]
    assert ids == [1, 2]
    base, mirror = driver.solutions
    assert base.queens == (1, 3, 0, 2)
    assert not base.is_mirror
    assert mirror.is_mirror
    assert mirror.queens == mirror_board(base.queens, 4)
    assert renderer.records == driver.solutions


@pytest.mark.parametrize("n", [5, 6, 7])
def test_solution_ids_consecutive_and_valid(n):
    driver, _, _ = make_driver(size=n)
    driver.run()

    ids = [r.solution_id for r in driver.solutions]
    assert ids == list(range(1, KNOWN_SOLUTION_COUNTS[n] + 1))
    assert all(is_valid_solution(r.queens) for r in driver.solutions)
    assert len({r.queens for r in driver.solutions}) == len(driver.solutions)


def test_solution_status_text():
    driver, _, _ = make_driver(size=4)
    driver.start()
    result = driver.tick()
    while not result.solution_found:
        result = driver.tick()

    assert driver.status_text == "Found solution #1 and mirror solution #2 (derived)"
    assert driver.stats_text == f"Steps: {result.steps_count}"


# =============================================================================
# Timing Tests
# =============================================================================

def test_clock_uses_interval_and_solution_pause():
    driver, _, clock = make_driver(size=4, speed='4x', solution_pause_ms=300)
    summary = driver.run()

    solution_events = len(summary.history) - 1  # last entry is the final total
    assert clock.sleeps.count(0.3) == solution_events
    assert clock.sleeps.count(SPEED_SETTINGS['4x'] / 1000.0) == len(clock.sleeps) - solution_events
    # No sleep after the terminal tick
    assert len(clock.sleeps) == summary.steps_count


def test_set_speed():
    driver, _, _ = make_driver()
    driver.set_speed('slow')
    assert driver.speed == 'slow'
    assert driver.interval_ms == 500

    with pytest.raises(ValueError):
        driver.set_speed('ludicrous')


def test_max_ticks_and_max_steps():
    driver, _, _ = make_driver(size=8)
    summary = driver.run(max_ticks=25)
    assert summary.steps_count == 25
    assert not summary.is_finished
    assert summary.history[-1] == (25, summary.solutions_count)

    driver, _, _ = make_driver(size=8, max_steps=40)
    summary = driver.run()
    assert summary.steps_count == 40
    assert not summary.is_finished


# =============================================================================
# Pause / Reset / Resize Tests
# =============================================================================

def test_pause_and_resume():
    driver, _, _ = make_driver(size=5)
    driver.start()
    driver.tick()
    driver.pause()

    assert driver.is_paused
    assert driver.status_text == "Paused"
    assert driver.tick() is None
    steps_before = driver.solver.steps_count
    driver.run()
    assert driver.solver.steps_count == steps_before

    driver.resume()
    summary = driver.run()
    assert summary.is_finished
    assert summary.solutions_count == KNOWN_SOLUTION_COUNTS[5]


def test_change_size_refused_while_running():
    driver, renderer, _ = make_driver(size=4)
    driver.start()
    driver.tick()

    assert driver.is_running
    assert not driver.change_size(6)
    assert driver.board_size == 4

    driver.run()
    assert driver.change_size(6)
    assert driver.board_size == 6
    assert driver.solver is None
    assert driver.status_text == "Board size changed to 6×6"
    assert renderer.snapshots[-1].queens == (EMPTY,) * 6


@pytest.mark.parametrize("n", [0, -3, 32, 8.0, True])
def test_change_size_rejects_unsupported_sizes(n):
    driver, renderer, _ = make_driver(size=4)
    status = driver.status_text

    assert not driver.change_size(n)
    assert driver.board_size == 4
    assert driver.status_text == status
    assert renderer.snapshots == []

    driver.run()
    assert driver.summary().solutions_count == 2


def test_driver_requires_a_board_size():
    with pytest.raises(ValueError, match="board size"):
        SearchDriver(Config(sizes=[], verbose=False))


def test_reset_discards_search():
    driver, renderer, _ = make_driver(size=5)
    driver.run(max_ticks=10)
    driver.reset()

    assert driver.solver is None
    assert driver.solutions == []
    assert not driver.is_running
    assert renderer.snapshots[-1].steps_count == 0

    summary = driver.run()
    assert summary.is_finished
    assert summary.solutions_count == KNOWN_SOLUTION_COUNTS[5]


# =============================================================================
# Export Tests
# =============================================================================

def test_save_exports_base_and_mirror_images(tmp_path):
    driver, _, _ = make_driver(size=4, save=True, output_dir=str(tmp_path), dpi=30)
    driver.run()

    img_dir = tmp_path / "N4" / "img"
    assert (img_dir / "solution_1.png").exists()
    assert (img_dir / "solution_2.png").exists()
    assert [r.filename for r in driver.solutions] == [
        str(img_dir / "solution_1.png"),
        str(img_dir / "solution_2.png"),
    ]
