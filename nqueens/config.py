"""
Configuration management for the N-Queens visualizer.

This module provides a clean interface for loading and validating
configuration from YAML files. Colours and speed presets live here as plain
data handed to the driver and renderer.
"""

import yaml
from dataclasses import dataclass, field, asdict
from typing import Dict, List

from .utils import MAX_BOARD_SIZE


# Tick interval in milliseconds for each speed preset
SPEED_SETTINGS: Dict[str, int] = {
    'slow': 500,
    'normal': 100,
    '2x': 50,
    '4x': 25,
    'max': 1,
}

DEFAULT_SPEED = 'normal'


@dataclass
class ColorScheme:
    """
    Colours used when drawing the board.

    Attributes:
        background: Figure background
        light_square: Squares where (row + col) is even
        dark_square: Squares where (row + col) is odd
        queen_safe: Accepted queens
        queen_trial: Pending trial placement
        queen_conflict: Trial that attacks an accepted queen
        text_primary: Titles
        text_secondary: Labels and status lines
        border: Board outline
    """

    background: str = '#F8FAFC'
    light_square: str = '#E2E8F0'
    dark_square: str = '#F1F5F9'
    queen_safe: str = '#10B981'
    queen_trial: str = '#F97316'
    queen_conflict: str = '#EF4444'
    text_primary: str = '#0F172A'
    text_secondary: str = '#64748B'
    border: str = '#CBD5E1'

    @classmethod
    def from_dict(cls, data: dict) -> 'ColorScheme':
        """Build a scheme from a partial mapping; unknown keys are ignored."""
        defaults = cls()
        return cls(**{
            name: data.get(name, getattr(defaults, name))
            for name in asdict(defaults)
        })

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Config:
    """
    Configuration container for the visualizer.

    Attributes:
        sizes: List of board sizes to run
        speed: Speed preset name (key of SPEED_SETTINGS)
        solution_pause_ms: Pause after each solution, in milliseconds
        max_steps: Stop after this many steps (0 = run to completion)
        log_interval: Steps between progress lines (0 = auto)
        show: Whether to show the board interactively
        save: Whether to save solution images and plots
        output_dir: Directory to save results
        dpi: Resolution of saved images
        verbose: Whether to print progress
        colors: Board colour scheme
    """

    # Board configuration
    sizes: List[int] = field(default_factory=lambda: [8])

    # Driver configuration
    speed: str = DEFAULT_SPEED
    solution_pause_ms: int = 1000
    max_steps: int = 0
    log_interval: int = 0

    # Visualization and output
    show: bool = False
    save: bool = False
    output_dir: str = 'results'
    dpi: int = 100
    verbose: bool = True
    colors: ColorScheme = field(default_factory=ColorScheme)

    @property
    def size(self) -> int:
        """
        First configured board size.

        Raises:
            ValueError: If no board size is configured
        """
        if not self.sizes:
            raise ValueError("At least one board size must be specified")
        return int(self.sizes[0])

    @property
    def interval_ms(self) -> int:
        """Tick interval of the selected speed preset."""
        return SPEED_SETTINGS.get(self.speed, SPEED_SETTINGS[DEFAULT_SPEED])

    @classmethod
    def from_yaml(cls, path: str) -> 'Config':
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance
        """
        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """
        Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance
        """
        # Accept either 'sizes' or a single 'size'
        sizes = data.get('sizes')
        if sizes is None:
            size = data.get('size')
            sizes = [size] if size is not None else [8]
        if not isinstance(sizes, list):
            sizes = [sizes]

        return cls(
            sizes=sizes,
            speed=str(data.get('speed', DEFAULT_SPEED)),
            solution_pause_ms=data.get('solution_pause_ms', 1000),
            max_steps=data.get('max_steps', 0),
            log_interval=data.get('log_interval', 0),
            show=data.get('show', False),
            save=data.get('save', False),
            output_dir=data.get('output_dir', 'results'),
            dpi=data.get('dpi', 100),
            verbose=data.get('verbose', True),
            colors=ColorScheme.from_dict(data.get('colors') or {}),
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            'sizes': self.sizes,
            'speed': self.speed,
            'solution_pause_ms': self.solution_pause_ms,
            'max_steps': self.max_steps,
            'log_interval': self.log_interval,
            'show': self.show,
            'save': self.save,
            'output_dir': self.output_dir,
            'dpi': self.dpi,
            'verbose': self.verbose,
            'colors': self.colors.to_dict(),
        }

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Validate sizes
        if not self.sizes:
            errors.append("At least one board size must be specified")
        for size in self.sizes:
            if not isinstance(size, int) or isinstance(size, bool):
                errors.append(f"Board size must be an integer, got {size!r}")
            elif not 1 <= size <= MAX_BOARD_SIZE:
                errors.append(
                    f"Board size must be between 1 and {MAX_BOARD_SIZE}, got {size}"
                )

        # Validate speed
        if self.speed not in SPEED_SETTINGS:
            errors.append(
                f"Invalid speed '{self.speed}', must be one of {list(SPEED_SETTINGS)}"
            )

        if self.solution_pause_ms < 0:
            errors.append(f"solution_pause_ms must be non-negative, got {self.solution_pause_ms}")
        if self.max_steps < 0:
            errors.append(f"max_steps must be non-negative, got {self.max_steps}")
        if self.log_interval < 0:
            errors.append(f"log_interval must be non-negative, got {self.log_interval}")
        if self.dpi < 1:
            errors.append(f"dpi must be positive, got {self.dpi}")

        return errors

    def print_summary(self) -> None:
        """Print configuration summary."""
        print("=" * 60)
        print("Configuration Summary")
        print("=" * 60)
        print(f"Board sizes: {self.sizes}")
        print(f"Speed: {self.speed} ({self.interval_ms} ms/step)")
        print(f"Solution pause: {self.solution_pause_ms} ms")
        print(f"Max steps: {self.max_steps:,}" if self.max_steps > 0 else "Max steps: unlimited")
        if self.log_interval > 0:
            print(f"Log interval: {self.log_interval:,}")
        print(f"Save: {self.save}" + (f" → {self.output_dir}" if self.save else ""))
        print("=" * 60)
