"""
Main entry point for the N-Queens step-wise backtracking visualizer.

This script provides a config-driven interface to drive the solver, render
each step and export found solutions (including derived mirror solutions).

Usage:
    python main.py --config config.yaml
    python main.py --size 8 --speed max --save
    python main.py --size 4 5 6 --speed max --quiet
"""

import argparse
import sys
import time
from typing import Dict

from nqueens.config import Config, SPEED_SETTINGS
from nqueens.driver import SearchDriver, SearchSummary
from nqueens.utils import KNOWN_SOLUTION_COUNTS, check_board_size
from nqueens.visualize import BoardRenderer, save_run_results


# =============================================================================
# Runner Classes
# =============================================================================

class SearchRunner:
    """
    Orchestrates driven searches based on configuration.
    """

    def __init__(self, config: Config):
        """
        Initialize runner with configuration.

        Args:
            config: Configuration instance
        """
        self.config = config

    def run_single(self, size: int) -> SearchSummary:
        """
        Drive one search on a board of the given size.

        Args:
            size: Board dimension N

        Returns:
            SearchSummary of the run
        """
        renderer = None
        if self.config.show:
            renderer = BoardRenderer(colors=self.config.colors, show=True, dpi=self.config.dpi)

        # Real-time pacing only when someone is watching
        clock = time.sleep if self.config.show else (lambda seconds: None)

        driver = SearchDriver(self.config, renderer=renderer, clock=clock)
        driver.change_size(size)
        driver.start()

        try:
            return driver.run()
        finally:
            if renderer is not None:
                renderer.close()

    def run(self) -> Dict[int, SearchSummary]:
        """
        Execute a search for every configured board size.

        Returns:
            Dictionary with the summary for each board size
        """
        all_results = {}

        for size in self.config.sizes:
            print(f"\n{'#'*60}")
            print(f"# Board Size N = {size}")
            print(f"{'#'*60}")

            self._print_size_info(check_board_size(size))
            all_results[size] = self.run_single(size)

        return all_results

    def _print_size_info(self, info: dict) -> None:
        """Print board size information."""
        print(f"\nBoard size check for N={info['n']}:")
        print(f"  Mask bits: {info['bits_required']} / {info['max_supported']}")
        print(f"  First-row columns searched: {info['first_row_columns']} of {info['n']}")
        if info['known_solutions'] is not None:
            print(f"  Known solution count: {info['known_solutions']}")
        print()


# =============================================================================
# CLI Interface
# =============================================================================

def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='N-Queens Step-wise Backtracking Visualizer',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        default='config.yaml',
        help='Path to YAML configuration file'
    )

    parser.add_argument(
        '--size', '-n',
        type=int,
        nargs='+',
        help='Board size(s) N (overrides config)'
    )

    parser.add_argument(
        '--speed',
        type=str,
        choices=list(SPEED_SETTINGS),
        help='Speed preset (overrides config)'
    )

    parser.add_argument(
        '--max-steps', '-s',
        type=int,
        help='Stop after this many steps, 0 = run to completion (overrides config)'
    )

    parser.add_argument(
        '--log-interval',
        type=int,
        help='Log progress every N steps (0 = auto)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress progress output'
    )

    parser.add_argument(
        '--save',
        action='store_true',
        help='Save solution images and plots'
    )

    parser.add_argument(
        '--output-dir', '-o',
        type=str,
        help='Output directory for saved results'
    )

    parser.add_argument(
        '--show',
        action='store_true',
        help='Show the board interactively while searching'
    )

    return parser.parse_args()


def load_config_with_overrides(args: argparse.Namespace) -> Config:
    """
    Load configuration from file and apply CLI overrides.

    Args:
        args: Parsed command line arguments

    Returns:
        Configuration with overrides applied
    """
    try:
        config = Config.from_yaml(args.config)
    except FileNotFoundError:
        print(f"Warning: Config file '{args.config}' not found, using defaults")
        config = Config()
    except Exception as e:
        print(f"Error loading config: {e}")
        sys.exit(1)

    # Apply CLI overrides
    if args.size:
        config.sizes = args.size
    if args.speed:
        config.speed = args.speed
    if args.max_steps is not None:
        config.max_steps = args.max_steps
    if args.log_interval is not None:
        config.log_interval = args.log_interval
    if args.quiet:
        config.verbose = False
    if args.save:
        config.save = True
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.show:
        config.show = True

    return config


def main():
    """Main entry point."""
    args = parse_args()

    # Load configuration
    config = load_config_with_overrides(args)

    # Validate
    errors = config.validate()
    if errors:
        print("Configuration errors:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    # Print configuration
    config.print_summary()

    # Run searches
    runner = SearchRunner(config)
    results = runner.run()

    # Final summary
    print(f"\n{'#'*60}")
    print("# Final Results")
    print(f"{'#'*60}")

    for size, summary in results.items():
        known = KNOWN_SOLUTION_COUNTS.get(size)
        if not summary.is_finished:
            status = f"stopped after {summary.steps_count:,} steps"
        elif known is None:
            status = "finished"
        elif summary.solutions_count == known:
            status = "✓ matches known count"
        else:
            status = f"✗ expected {known}"
        print(f"N={size}: {summary.solutions_count} solutions, "
              f"{summary.steps_count:,} steps ({status})")

    if not config.save:
        print()
        return

    print(f"\n{'#'*60}")
    print("# Saving Results")
    print(f"{'#'*60}")

    for size, summary in results.items():
        metadata = {
            'board_size': size,
            'speed': config.speed,
            'max_steps': config.max_steps,
            'known_solutions': KNOWN_SOLUTION_COUNTS.get(size),
        }
        saved = save_run_results(config.output_dir, summary, metadata, colors=config.colors)
        print(f"N={size}: Saved to {saved['run_folder']}/")
        print(f"  - solutions.txt, metadata.json")
        print(f"  - search_progress.png" + (", final_board.png" if 'final_board' in saved else ""))

    print()


if __name__ == "__main__":
    main()
