"""Generic incremental A* search.

This module implements a resumable best-first (A*) search over arbitrary
hashable states and callable actions. The search advances one expansion per
call to :func:`advance`, so callers can bound the work they do per call and
pick the search up again later. :class:`AStarSearcher` wraps the step
function in a budgeted drive loop.

The settled (closed) set is final: a state is never reopened even when a
cheaper route to it surfaces after settlement. Results are optimal only when
costs are non-negative and the heuristic is consistent. An inadmissible
heuristic yields a greedy, not necessarily optimal, path.
"""

import time
import logging
from typing import Optional, List, Dict, Any, Callable, Hashable, Sequence
from dataclasses import dataclass, field

from astar_planner.core.data_models import StepResult, SearchProblem
from astar_planner.search.frontiers import create_frontier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchNode:
    """Immutable record of one discovered state.

    ``g`` is the cost of the single edge that produced this node, not the
    cumulative cost. ``predecessor`` is the arena index of the node this one
    was reached from (``None`` for the synthetic root).
    """
    state: Hashable
    action: Optional[Callable[[Any], Any]]
    g: float
    h: float
    predecessor: Optional[int] = None
    index: int = 0
    path_cost: float = 0.0  # memoized sum of g over the chain, root excluded

    @property
    def is_root(self) -> bool:
        return self.predecessor is None

    def total_cost(self) -> float:
        """Cost of the path from the start state to this node."""
        return self.path_cost

    def priority(self) -> float:
        """Estimated total cost f = total path cost + h."""
        return self.path_cost + self.h


@dataclass
class SearchStatistics:
    """Counters describing the work a search has done so far."""
    steps: int = 0
    nodes_expanded: int = 0
    nodes_generated: int = 0
    frontier_replacements: int = 0
    candidates_discarded: int = 0
    settled_skips: int = 0
    max_frontier_size: int = 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return {
            'steps': self.steps,
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'frontier_replacements': self.frontier_replacements,
            'candidates_discarded': self.candidates_discarded,
            'settled_skips': self.settled_skips,
            'max_frontier_size': self.max_frontier_size,
        }


class SearchState:
    """Bookkeeping for one search: node arena, frontier, settled set and path.

    Nodes live in an append-only arena and refer to their predecessor by
    index, so every predecessor outlives the nodes that point at it. A state
    is held by at most one of the frontier and the settled set.
    """

    def __init__(self, start: Hashable, frontier: str = 'scan'):
        self.start = start
        self.frontier_kind = frontier
        self.nodes: List[SearchNode] = []
        self.frontier = create_frontier(frontier)
        self.settled: Dict[Hashable, int] = {}
        self.path: List[Callable[[Any], Any]] = []
        self.result: StepResult = StepResult.CONTINUE
        self.goal: Optional[int] = None
        self.statistics = SearchStatistics()

        root = self.add_node(start, None, 0.0, 0.0, None)
        self.frontier.push(start, root.index, root.priority())

    def add_node(self, state: Hashable, action: Optional[Callable[[Any], Any]],
                 g: float, h: float, predecessor: Optional[int]) -> SearchNode:
        """Create a node in the arena and return it."""
        path_cost = 0.0
        if predecessor is not None:
            path_cost = self.nodes[predecessor].path_cost + g
        node = SearchNode(
            state=state,
            action=action,
            g=g,
            h=h,
            predecessor=predecessor,
            index=len(self.nodes),
            path_cost=path_cost
        )
        self.nodes.append(node)
        return node

    def node(self, index: int) -> SearchNode:
        return self.nodes[index]

    def frontier_node(self, state: Hashable) -> Optional[SearchNode]:
        """Node currently representing ``state`` in the frontier, if any."""
        index = self.frontier.get(state)
        return self.nodes[index] if index is not None else None

    def settled_node(self, state: Hashable) -> Optional[SearchNode]:
        index = self.settled.get(state)
        return self.nodes[index] if index is not None else None

    def chain(self, index: int) -> List[SearchNode]:
        """Nodes from the root to the node at ``index``, in that order."""
        nodes = []
        current: Optional[int] = index
        while current is not None:
            node = self.nodes[current]
            nodes.append(node)
            current = node.predecessor
        return list(reversed(nodes))

    def reconstruct_path(self, index: int) -> List[Callable[[Any], Any]]:
        """Actions leading from the start state to the node at ``index``."""
        return [node.action for node in self.chain(index) if not node.is_root]

    def goal_node(self) -> Optional[SearchNode]:
        return self.nodes[self.goal] if self.goal is not None else None

    @property
    def concluded(self) -> bool:
        return self.result.is_terminal

    def __repr__(self) -> str:
        return (f"SearchState(start={self.start!r}, frontier={len(self.frontier)}, "
                f"settled={len(self.settled)}, result={self.result.value})")


def new_search(start: Hashable, frontier: str = 'scan') -> SearchState:
    """Start a search whose frontier holds only the synthetic root node.

    Args:
        start: Start state
        frontier: Frontier container, 'scan' or 'heap'

    Returns:
        Fresh SearchState ready for :func:`advance`
    """
    return SearchState(start, frontier=frontier)


def advance(search: SearchState,
            is_goal: Callable[[Any], bool],
            actions: Sequence[Callable[[Any], Any]],
            g_cost: Callable[[Any, Any], float],
            h_cost: Callable[[Any], float],
            is_legal: Callable[[Any, Any], bool]) -> StepResult:
    """Perform exactly one A* expansion step.

    Picks the frontier node with the lowest priority, settles it, and either
    reports it as the goal or expands its legal successors. Actions are
    tried in the given order, which decides ties between equal-cost routes.

    Args:
        search: Search state to advance (mutated)
        is_goal: Goal test
        actions: Candidate actions, each mapping a state to its successor
        g_cost: Cost of applying an action to a state
        h_cost: Heuristic estimate of the remaining cost from a state
        is_legal: Whether an action may be applied to a state

    Returns:
        FOUND when the goal was settled (``search.path`` is populated),
        EXHAUSTED when the frontier ran out, CONTINUE otherwise. Once a search
        has concluded, further calls return the same result and do nothing.
    """
    if search.result.is_terminal:
        return search.result

    frontier = search.frontier
    stats = search.statistics

    if len(frontier) == 0:
        search.result = StepResult.EXHAUSTED
        logger.info(f"A* exhausted the frontier after {stats.steps} steps, no path found")
        return search.result

    stats.steps += 1
    node = search.nodes[frontier.pop()]
    search.settled[node.state] = node.index

    if is_goal(node.state):
        search.goal = node.index
        search.path = search.reconstruct_path(node.index)
        search.result = StepResult.FOUND
        logger.info(f"A* found path of total cost: {node.total_cost():.2f} "
                    f"({len(search.path)} actions, {stats.steps} steps)")
        return search.result

    stats.nodes_expanded += 1
    logger.debug(f"Expanding {node.state!r} (f={node.priority():.2f}, "
                 f"frontier={len(frontier)})")

    for action in actions:
        if not is_legal(node.state, action):
            continue

        successor = action(node.state)
        if successor in search.settled:
            stats.settled_skips += 1
            continue

        g = g_cost(node.state, action)
        h = h_cost(successor)
        candidate = search.add_node(successor, action, g, h, node.index)
        stats.nodes_generated += 1

        existing = frontier.get(successor)
        if existing is None:
            frontier.push(successor, candidate.index, candidate.priority())
        elif candidate.total_cost() < search.nodes[existing].total_cost():
            frontier.replace(successor, candidate.index, candidate.priority())
            stats.frontier_replacements += 1
        else:
            stats.candidates_discarded += 1

    stats.max_frontier_size = max(stats.max_frontier_size, len(frontier))
    return StepResult.CONTINUE


@dataclass
class SearchResult:
    """Result from an A* drive loop."""
    success: bool
    path: List[Callable[[Any], Any]] = field(default_factory=list)
    total_cost: Optional[float] = None
    steps: int = 0
    nodes_expanded: int = 0
    nodes_generated: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    statistics: Optional[Dict[str, Any]] = None

    def to_dict(self, action_names: Optional[Callable[[Any], str]] = None) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        name = action_names or (lambda a: getattr(a, '__name__', repr(a)))
        return {
            'success': self.success,
            'path': [name(action) for action in self.path],
            'total_cost': self.total_cost,
            'steps': self.steps,
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'computation_time': self.computation_time,
            'termination_reason': self.termination_reason,
            'statistics': self.statistics,
        }


@dataclass
class SearchConfig:
    """Configuration for the A* drive loop."""
    frontier: str = 'scan'  # 'scan' (linear scan) or 'heap'
    max_steps: Optional[int] = None  # Steps per run() call, None for unbounded
    max_computation_time: Optional[float] = None  # Seconds per run() call
    statistics_tracking: bool = True  # Attach statistics dict to results


class AStarSearcher:
    """Drives :func:`advance` to completion or until a budget runs out."""

    def __init__(self, config: Optional[SearchConfig] = None):
        """Initialize A* searcher.

        Args:
            config: Search configuration parameters
        """
        self.config = config or SearchConfig()
        # Validates the frontier name up front
        create_frontier(self.config.frontier)
        if self.config.max_steps is not None and self.config.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.config.max_steps}")
        if (self.config.max_computation_time is not None
                and self.config.max_computation_time <= 0):
            raise ValueError(
                f"max_computation_time must be positive, got {self.config.max_computation_time}"
            )

        logger.debug(f"A* searcher initialized with frontier={self.config.frontier}, "
                     f"max_steps={self.config.max_steps}, "
                     f"max_computation_time={self.config.max_computation_time}")

    def new_search(self, start: Hashable) -> SearchState:
        return new_search(start, frontier=self.config.frontier)

    def search(self, problem: SearchProblem) -> SearchResult:
        """Search from ``problem.start`` with a fresh search state."""
        return self.run(self.new_search(problem.start), problem)

    def run(self, search: SearchState, problem: SearchProblem) -> SearchResult:
        """Advance ``search`` until it concludes or a budget runs out.

        A run stopped by a budget leaves ``search`` intact; calling ``run``
        again continues from where it stopped.

        Args:
            search: Search state to drive
            problem: Domain functions for the step function

        Returns:
            SearchResult describing the outcome of this run
        """
        start_time = time.perf_counter()
        deadline = None
        if self.config.max_computation_time is not None:
            deadline = start_time + self.config.max_computation_time

        steps_this_run = 0
        result = search.result
        termination_reason = None

        while not result.is_terminal:
            if self.config.max_steps is not None and steps_this_run >= self.config.max_steps:
                termination_reason = "max_steps"
                break
            if deadline is not None and time.perf_counter() > deadline:
                termination_reason = "timeout"
                break

            result = advance(
                search,
                problem.is_goal,
                problem.actions,
                problem.g_cost,
                problem.h_cost,
                problem.is_legal
            )
            steps_this_run += 1

        computation_time = time.perf_counter() - start_time
        if termination_reason is None:
            termination_reason = result.value
        else:
            logger.info(f"A* run stopped by {termination_reason} after {steps_this_run} steps; "
                        f"search can be resumed")

        return self._create_result(search, termination_reason, computation_time)

    def _create_result(self, search: SearchState, termination_reason: str,
                       computation_time: float) -> SearchResult:
        stats = search.statistics
        goal = search.goal_node()
        return SearchResult(
            success=search.result is StepResult.FOUND,
            path=list(search.path),
            total_cost=goal.total_cost() if goal is not None else None,
            steps=stats.steps,
            nodes_expanded=stats.nodes_expanded,
            nodes_generated=stats.nodes_generated,
            computation_time=computation_time,
            termination_reason=termination_reason,
            statistics=stats.to_dict() if self.config.statistics_tracking else None
        )


def create_astar_searcher(frontier: str = 'scan',
                          max_steps: Optional[int] = None,
                          max_computation_time: Optional[float] = None,
                          statistics_tracking: bool = True) -> AStarSearcher:
    """Factory function to create A* searcher with custom configuration.

    Args:
        frontier: Frontier container, 'scan' or 'heap'
        max_steps: Expansion steps allowed per run, None for unbounded
        max_computation_time: Seconds allowed per run, None for unbounded
        statistics_tracking: Attach statistics to results

    Returns:
        Configured AStarSearcher instance
    """
    config = SearchConfig(
        frontier=frontier,
        max_steps=max_steps,
        max_computation_time=max_computation_time,
        statistics_tracking=statistics_tracking
    )

    return AStarSearcher(config)
