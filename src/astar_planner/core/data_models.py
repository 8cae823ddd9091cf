"""Core data models shared by the search engine and its domains."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Hashable, Sequence


class StepResult(Enum):
    """Outcome of a single A* expansion step."""

    CONTINUE = "continue"
    FOUND = "found"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        """True once the search has concluded (path found or none exists)."""
        return self is not StepResult.CONTINUE


def zero_heuristic(state: Any) -> float:
    """Heuristic that always estimates zero remaining cost (Dijkstra)."""
    return 0.0


def always_legal(state: Any, action: Any) -> bool:
    return True


@dataclass
class SearchProblem:
    """Bundle of the domain-supplied pieces an A* search runs over."""

    start: Hashable
    is_goal: Callable[[Any], bool]
    actions: Sequence[Callable[[Any], Any]]
    g_cost: Callable[[Any, Any], float]
    h_cost: Callable[[Any], float] = zero_heuristic
    is_legal: Callable[[Any, Any], bool] = always_legal


# Type aliases for clarity
State = Hashable  # Any hashable domain state
Action = Callable[[Any], Any]  # Pure state transition
Cost = float
