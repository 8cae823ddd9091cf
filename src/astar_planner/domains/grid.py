"""Tile-grid path finding on top of the generic A* engine.

Positions are ``(x, y)`` tuples and a level is a 2-D integer array indexed
``level[y, x]`` where 0 is a free cell and anything else is a wall.
"""

import json
import logging
import math
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

import numpy as np

from astar_planner.core.data_models import SearchProblem, zero_heuristic
from astar_planner.search.astar import AStarSearcher, SearchResult

logger = logging.getLogger(__name__)

Position = Tuple[int, int]  # (x, y)
Move = Callable[[Position], Position]

PATH_MARK = 2


def move_left(pos: Position) -> Position:
    return (pos[0] - 1, pos[1])


def move_right(pos: Position) -> Position:
    return (pos[0] + 1, pos[1])


def move_up(pos: Position) -> Position:
    return (pos[0], pos[1] - 1)


def move_down(pos: Position) -> Position:
    return (pos[0], pos[1] + 1)


MOVES: Tuple[Move, ...] = (move_left, move_right, move_up, move_down)

DEFAULT_LEVEL = np.array([
    [1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1],
    [1, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 1],
    [1, 0, 0, 1, 0, 1, 0, 0, 1, 0, 0, 0, 1],
    [1, 0, 1, 1, 0, 1, 1, 0, 0, 0, 1, 0, 1],
    [1, 0, 0, 1, 0, 0, 1, 1, 1, 1, 1, 0, 1],
    [1, 0, 0, 1, 0, 1, 0, 0, 0, 0, 1, 0, 1],
    [1, 0, 0, 1, 0, 0, 0, 0, 0, 0, 1, 0, 1],
    [1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 1],
    [1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1],
], dtype=np.int32)
DEFAULT_START: Position = (1, 1)
DEFAULT_GOAL: Position = (11, 7)


def euclidean_distance(a: Position, b: Position) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def manhattan_distance(a: Position, b: Position) -> float:
    return float(abs(b[0] - a[0]) + abs(b[1] - a[1]))


HEURISTICS: Dict[str, Callable[[Position, Position], float]] = {
    'euclidean': euclidean_distance,
    'manhattan': manhattan_distance,
    'zero': lambda a, b: zero_heuristic(a),
}


def is_free(level: np.ndarray, pos: Position) -> bool:
    """True if ``pos`` lies inside the level on a non-wall cell."""
    x, y = pos
    height, width = level.shape
    if x < 0 or y < 0 or y >= height or x >= width:
        return False
    return bool(level[y, x] == 0)


def make_problem(level: np.ndarray, start: Position, goal: Position,
                 heuristic: str = 'euclidean') -> SearchProblem:
    """Build the search problem for walking from ``start`` to ``goal``.

    Every move costs 1 and is legal when it lands on a free cell.

    Raises:
        ValueError: If the heuristic is unknown or start/goal are not free cells
    """
    if heuristic not in HEURISTICS:
        raise ValueError(f"Unknown heuristic '{heuristic}', expected one of {sorted(HEURISTICS)}")
    for name, pos in (('start', start), ('goal', goal)):
        if not is_free(level, pos):
            raise ValueError(f"{name} position {pos} is outside the level or on a wall")

    distance = HEURISTICS[heuristic]
    start = (int(start[0]), int(start[1]))
    goal = (int(goal[0]), int(goal[1]))

    return SearchProblem(
        start=start,
        is_goal=lambda pos: pos == goal,
        actions=MOVES,
        g_cost=lambda pos, move: 1.0,
        h_cost=lambda pos: distance(pos, goal),
        # Apply the move and check where it lands
        is_legal=lambda pos, move: is_free(level, move(pos))
    )


def find_path(level: np.ndarray, start: Position, goal: Position,
              heuristic: str = 'euclidean',
              searcher: Optional[AStarSearcher] = None) -> SearchResult:
    """Find a 4-directional path across ``level``."""
    problem = make_problem(level, start, goal, heuristic)
    searcher = searcher or AStarSearcher()
    result = searcher.search(problem)
    logger.info(f"Grid search {start} -> {goal}: {result.termination_reason}, "
                f"{len(result.path)} moves, {result.nodes_expanded} nodes expanded")
    return result


def walk(start: Position, path: List[Move]) -> List[Position]:
    """Positions visited when following ``path`` from ``start``, start included."""
    positions = [start]
    for move in path:
        positions.append(move(positions[-1]))
    return positions


def render_level(level: np.ndarray, start: Optional[Position] = None,
                 path: Optional[List[Move]] = None) -> str:
    """Render the level as rows of digits, marking visited cells with 2.

    Cells left by a move are marked, so the goal cell keeps its own value.
    """
    canvas = level.copy()
    if start is not None and path:
        for x, y in walk(start, path)[:-1]:
            canvas[y, x] = PATH_MARK
    return "\n".join("".join(str(int(v)) for v in row) for row in canvas)


def load_level(file_path: Union[str, Path]) -> np.ndarray:
    """Load a level from a JSON file holding a list of rows of ints.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't a rectangular 2-D grid of ints
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Level file not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            rows = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}")

    if not isinstance(rows, list) or not rows or not all(isinstance(r, list) for r in rows):
        raise ValueError(f"Level in {file_path} must be a non-empty list of rows")
    if len({len(r) for r in rows}) != 1 or not rows[0]:
        raise ValueError(f"Level in {file_path} must be rectangular")

    try:
        level = np.array(rows, dtype=np.int32)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Level in {file_path} must contain integers: {e}")

    return level
