"""
N-Queens Step-wise Backtracking Visualizer Package

This package provides a backtracking N-Queens solver that advances one trial
placement per call, plus a driver and matplotlib renderer built around it.

Modules:
    - interfaces: Abstract base classes for Solver and Renderer
    - board: StepResult snapshots and board helpers
    - utils: Attack checks, validation and symmetry helpers
    - solver: Step-wise bitmask backtracking solver
    - config: Configuration management
    - driver: Tick-based driving loop owning a solver
    - visualize: Board rendering, solution images and progress plots
"""

from .interfaces import SolverInterface, RendererInterface
from .board import EMPTY, StepResult, empty_board, mirror_board, board_to_matrix, format_board
from .utils import (
    KNOWN_SOLUTION_COUNTS,
    MAX_BOARD_SIZE,
    check_attack,
    conflicts_with_placed,
    is_valid_solution,
    check_board_size,
)
from .solver import StepwiseSolver, create_solver
from .config import Config, ColorScheme, SPEED_SETTINGS
from .driver import SearchDriver, SearchSummary, SolutionRecord
from .visualize import (
    BoardRenderer,
    render_board,
    save_solution_image,
    plot_search_progress,
    save_run_results,
)

__all__ = [
    'SolverInterface',
    'RendererInterface',
    'EMPTY',
    'StepResult',
    'empty_board',
    'mirror_board',
    'board_to_matrix',
    'format_board',
    'KNOWN_SOLUTION_COUNTS',
    'MAX_BOARD_SIZE',
    'check_attack',
    'conflicts_with_placed',
    'is_valid_solution',
    'check_board_size',
    'StepwiseSolver',
    'create_solver',
    'Config',
    'ColorScheme',
    'SPEED_SETTINGS',
    'SearchDriver',
    'SearchSummary',
    'SolutionRecord',
    'BoardRenderer',
    'render_board',
    'save_solution_image',
    'plot_search_progress',
    'save_run_results',
]
