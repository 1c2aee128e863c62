"""
Visualization functions for the N-Queens step-wise solver.

This module provides:
- Board drawing with placed queens, pending trials and conflicts
- BoardRenderer: a live renderer fed one snapshot per solver step
- Solution image export (base and mirrored solutions)
- Search progress plots (solutions found vs steps)
- Save functionality with metadata
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Rectangle
from typing import List, Dict, Optional, Sequence, Tuple
from pathlib import Path
import json
from datetime import datetime

from .board import EMPTY, StepResult
from .config import ColorScheme
from .interfaces import RendererInterface
from .utils import solution_rows


def draw_squares(ax, n: int, colors: ColorScheme) -> None:
    """Draw the checkerboard squares; row 0 is at the top."""
    for r in range(n):
        for c in range(n):
            color = colors.light_square if (r + c) % 2 == 0 else colors.dark_square
            ax.add_patch(Rectangle((c, n - 1 - r), 1, 1, facecolor=color, edgecolor='none'))
    ax.add_patch(Rectangle(
        (0, 0), n, n, facecolor='none', edgecolor=colors.border, linewidth=1.5
    ))


def draw_queen(
    ax,
    n: int,
    row: int,
    col: int,
    color: str,
    text: str,
    text_color: str,
    radius: float = 1 / 2.2
) -> None:
    """Draw one queen marker centred in its square."""
    cx, cy = col + 0.5, n - 1 - row + 0.5
    ax.add_patch(Circle((cx, cy), radius, facecolor=color, edgecolor='none'))
    fontsize = max(6, min(24, 160 / n))
    ax.text(cx, cy, text, ha='center', va='center',
            fontsize=fontsize, color=text_color, fontweight='bold')


def render_board(
    queens: Sequence[int],
    trial_pos: Optional[Tuple[int, int]] = None,
    has_conflict: bool = False,
    colors: Optional[ColorScheme] = None,
    title: Optional[str] = None,
    ax=None
):
    """
    Draw a board state on a matplotlib axis.

    Features:
    - Checkerboard with the configured light/dark squares
    - Green circles 'Q': accepted queens
    - Orange circle '?': trial under evaluation
    - Red circle 'X': trial in conflict with an accepted queen

    Args:
        queens: Board (queens[row] = column or EMPTY)
        trial_pos: Optional (row, col) of the current trial
        has_conflict: Whether the trial is in conflict
        colors: Colour scheme (defaults to ColorScheme())
        title: Optional axis title
        ax: Axis to draw on (a new figure is created when None)

    Returns:
        The axis drawn on
    """
    colors = colors or ColorScheme()
    n = len(queens)

    if ax is None:
        fig, ax = plt.subplots(figsize=(max(4, n * 0.6), max(4, n * 0.6)))
        fig.patch.set_facecolor(colors.background)

    ax.clear()
    draw_squares(ax, n, colors)

    for r, c in solution_rows(queens):
        draw_queen(ax, n, r, c, colors.queen_safe, 'Q', colors.background)

    if trial_pos is not None and trial_pos[0] != EMPTY:
        r, c = trial_pos
        # A trial that was accepted is already drawn as a placed queen
        if queens[r] != c or has_conflict:
            color = colors.queen_conflict if has_conflict else colors.queen_trial
            draw_queen(ax, n, r, c, color, 'X' if has_conflict else '?', colors.background)

    ax.set_xlim(0, n)
    ax.set_ylim(0, n)
    ax.set_aspect('equal')
    ax.set_xticks(np.arange(n) + 0.5)
    ax.set_yticks(np.arange(n) + 0.5)
    ax.set_xticklabels(np.arange(n))
    ax.set_yticklabels(np.arange(n - 1, -1, -1))
    ax.tick_params(colors=colors.text_secondary, length=0)
    for spine in ax.spines.values():
        spine.set_visible(False)

    if title:
        ax.set_title(title, fontsize=13, fontweight='bold', color=colors.text_primary)

    return ax


def snapshot_title(snapshot: StepResult) -> str:
    """Title line summarising a snapshot."""
    n = snapshot.board_size
    if snapshot.is_finished:
        status = f"Done! {snapshot.solutions_count} solutions"
    elif snapshot.solution_found:
        status = f"Solution found ({snapshot.solutions_count} total)"
    else:
        status = f"{snapshot.solutions_count} solutions so far"
    return f"{n}×{n} Board | {status}\nSteps: {snapshot.steps_count:,}"


class BoardRenderer(RendererInterface):
    """
    Live matplotlib renderer.

    Keeps a single figure and redraws it for every snapshot. With show
    enabled the figure is displayed interactively and refreshed with a short
    plt.pause(); otherwise drawing happens off-screen and save() can export
    the current frame.

    Attributes:
        colors: Colour scheme used for drawing
        show: Whether to display the figure interactively
        pause_s: Seconds plt.pause() waits per frame when showing
        last_snapshot: Most recent snapshot rendered
    """

    def __init__(
        self,
        colors: Optional[ColorScheme] = None,
        show: bool = False,
        pause_s: float = 0.001,
        dpi: int = 100
    ):
        self.colors = colors or ColorScheme()
        self.show = show
        self.pause_s = pause_s
        self.dpi = dpi
        self.last_snapshot: Optional[StepResult] = None
        self._fig = None
        self._ax = None

    def _ensure_figure(self, n: int) -> None:
        if self._fig is None:
            side = max(4, n * 0.6)
            self._fig, self._ax = plt.subplots(figsize=(side, side))
            self._fig.patch.set_facecolor(self.colors.background)
            if self.show:
                plt.ion()
                plt.show(block=False)

    def render(self, snapshot: StepResult) -> None:
        self._ensure_figure(snapshot.board_size)
        render_board(
            snapshot.queens,
            trial_pos=snapshot.trial_pos,
            has_conflict=snapshot.has_conflict,
            colors=self.colors,
            title=snapshot_title(snapshot),
            ax=self._ax,
        )
        self.last_snapshot = snapshot
        if self.show:
            plt.pause(self.pause_s)

    def save(self, filename: str) -> str:
        """Save the current frame to a file."""
        if self._fig is None:
            raise RuntimeError("Nothing has been rendered yet")
        self._fig.savefig(filename, dpi=self.dpi, bbox_inches='tight',
                          facecolor=self._fig.get_facecolor())
        return filename

    def close(self) -> None:
        if self._fig is not None:
            plt.close(self._fig)
            self._fig = None
            self._ax = None


def save_solution_image(
    queens: Sequence[int],
    filename: str,
    colors: Optional[ColorScheme] = None,
    title: Optional[str] = None,
    dpi: int = 100
) -> str:
    """
    Save a complete board as an image.

    Args:
        queens: Board to draw
        filename: Path to save the figure
        colors: Optional colour scheme
        title: Optional title
        dpi: Image resolution

    Returns:
        Path to saved file
    """
    colors = colors or ColorScheme()
    ax = render_board(queens, colors=colors, title=title)
    fig = ax.figure
    fig.savefig(filename, dpi=dpi, bbox_inches='tight', facecolor=fig.get_facecolor())
    plt.close(fig)
    return filename


def plot_search_progress(
    history: Sequence[Tuple[int, int]],
    filename: Optional[str] = None,
    show: bool = False,
    metadata: Optional[Dict] = None
) -> Optional[str]:
    """
    Plot solutions found against steps taken.

    Args:
        history: (steps_count, solutions_count) pairs, one per solution
            event (plus the final totals)
        filename: Optional path to save the figure
        show: Whether to display the plot
        metadata: Optional dict with run parameters

    Returns:
        Filename if saved, None otherwise
    """
    plt.figure(figsize=(12, 7))

    data = np.array(history, dtype=float).reshape(-1, 2)
    x = np.concatenate([[0.0], data[:, 0]])
    y = np.concatenate([[0.0], data[:, 1]])
    plt.step(x, y, where='post', linewidth=1.5, color='#0EA5E9')

    plt.xlabel('Steps', fontsize=12)
    plt.ylabel('Solutions found', fontsize=12)

    title = 'Solutions Found During Backtracking Search'
    if metadata:
        subtitle_parts = []
        if 'board_size' in metadata:
            subtitle_parts.append(f"N={metadata['board_size']}")
        if 'speed' in metadata:
            subtitle_parts.append(f"Speed={metadata['speed']}")
        if subtitle_parts:
            title += '\n' + ' | '.join(subtitle_parts)

    plt.title(title, fontsize=13, fontweight='bold')
    plt.grid(True, alpha=0.3)

    final_steps = int(x[-1])
    final_solutions = int(y[-1])
    stats_text = f'Steps: {final_steps:,}\n'
    stats_text += f'Solutions: {final_solutions:,}'
    if metadata and metadata.get('known_solutions') is not None:
        stats_text += f'\nKnown: {metadata["known_solutions"]:,}'

    plt.gca().text(0.02, 0.98, stats_text, transform=plt.gca().transAxes,
                   fontsize=10, verticalalignment='top', horizontalalignment='left',
                   fontfamily='monospace',
                   bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.8))

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=150, bbox_inches='tight')
        if not show:
            plt.close()
        return filename

    if show:
        plt.show()

    return None


def save_solutions_text(solutions: List[Sequence[int]], filename: str) -> str:
    """
    Save solutions one per line.

    Format: the N column indices of each solution, row by row, separated by
    commas. No headers.
    """
    with open(filename, 'w') as f:
        for queens in solutions:
            f.write(",".join(str(int(c)) for c in queens) + "\n")
    return filename


def create_run_output_folder(base_output_dir: str, board_size: int) -> str:
    """
    Create a timestamped output folder for a run.

    Structure: base_output_dir/N{board_size}/run_{datetime}/
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_folder = Path(base_output_dir) / f"N{board_size}" / f"run_{timestamp}"
    run_folder.mkdir(parents=True, exist_ok=True)
    return str(run_folder)


def save_run_results(
    output_dir: str,
    summary,
    metadata: Dict,
    save_plots: bool = True,
    colors: Optional[ColorScheme] = None
) -> Dict[str, str]:
    """
    Save all results for a single run to a timestamped folder.

    Creates: output_dir/N{size}/run_{datetime}/

    Always saves:
    - solutions.txt: One recorded solution per line
    - metadata.json: Run parameters and results

    Optionally saves:
    - search_progress.png: Solutions vs steps plot
    - final_board.png: Last recorded solution

    Args:
        output_dir: Base output directory
        summary: SearchSummary of the run
        metadata: Dict with run parameters
        save_plots: Whether to save plots
        colors: Optional colour scheme for board images

    Returns:
        Dict mapping result type to filename
    """
    n = metadata.get('board_size', summary.board_size)
    run_folder = create_run_output_folder(output_dir, n)
    run_path = Path(run_folder)

    saved_files = {'run_folder': run_folder}

    solutions_txt = run_path / "solutions.txt"
    save_solutions_text([record.queens for record in summary.solutions], str(solutions_txt))
    saved_files['solutions_txt'] = str(solutions_txt)

    json_metadata = dict(metadata)
    json_metadata['solutions_count'] = summary.solutions_count
    json_metadata['steps_count'] = summary.steps_count
    json_metadata['is_finished'] = summary.is_finished
    json_metadata['elapsed_seconds'] = summary.elapsed_seconds
    json_metadata['recorded_solutions'] = len(summary.solutions)
    json_metadata['mirror_solutions'] = sum(1 for r in summary.solutions if r.is_mirror)
    json_metadata['timestamp'] = datetime.now().isoformat()

    json_file = run_path / "metadata.json"
    with open(json_file, 'w') as f:
        json.dump(json_metadata, f, indent=2)
    saved_files['metadata'] = str(json_file)

    if save_plots:
        progress_file = run_path / "search_progress.png"
        plot_search_progress(summary.history, filename=str(progress_file), metadata=metadata)
        saved_files['progress_plot'] = str(progress_file)

        if summary.solutions:
            last = summary.solutions[-1]
            board_file = run_path / "final_board.png"
            save_solution_image(
                last.queens, str(board_file), colors=colors,
                title=f"Solution #{last.solution_id}"
            )
            saved_files['final_board'] = str(board_file)

    return saved_files
