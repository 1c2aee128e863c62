"""
Abstract interfaces for Solver and Renderer classes.

These interfaces define the contract between the search core and whatever
drives or displays it, so a driving loop can be written once against them.
"""

from abc import ABC, abstractmethod
from typing import Tuple, Any


class SolverInterface(ABC):
    """
    Abstract interface for step-wise N-Queens solvers.

    A solver holds the whole search in its own fields and advances exactly
    one unit of work per call to step(). Each call returns an immutable
    snapshot the caller may keep after the solver moves on.

    Attributes:
        n: Board dimension (N×N board with N queens)
        solutions_count: Solutions credited so far
        steps_count: Trial placements evaluated so far
    """

    @property
    @abstractmethod
    def n(self) -> int:
        """Board dimension."""
        pass

    @property
    @abstractmethod
    def solutions_count(self) -> int:
        """Solutions credited so far (mirror solutions included)."""
        pass

    @property
    @abstractmethod
    def steps_count(self) -> int:
        """Number of trial placements evaluated so far."""
        pass

    @property
    @abstractmethod
    def is_finished(self) -> bool:
        """Whether the search space has been exhausted."""
        pass

    @abstractmethod
    def step(self) -> Any:
        """
        Advance the search by one trial placement.

        Returns:
            StepResult snapshot describing the trial just evaluated, or a
            terminal snapshot once the search is finished.
        """
        pass

    @property
    @abstractmethod
    def queens(self) -> Tuple[int, ...]:
        """Copy of the current (partial) board."""
        pass


class RendererInterface(ABC):
    """
    Abstract interface for anything that displays the search.

    Only render() is required. The solution and completion hooks default
    to doing nothing so simple renderers stay one method long.
    """

    @abstractmethod
    def render(self, snapshot: Any) -> None:
        """
        Display one search snapshot.

        Args:
            snapshot: StepResult emitted by the solver (or an empty board
                snapshot after a reset)
        """
        pass

    def on_solution(self, record: Any) -> None:
        """Called once per recorded solution (base and mirror)."""
        pass

    def on_finished(self, summary: Any) -> None:
        """Called once when the search terminates."""
        pass
