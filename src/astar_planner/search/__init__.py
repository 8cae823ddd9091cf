"""Search algorithms for the A* planner.

This module implements the generic step-resumable A* engine and the
frontier containers it can run on.
"""

from .frontiers import ScanFrontier, HeapFrontier, create_frontier
from .astar import (
    AStarSearcher, SearchNode, SearchState, SearchResult, SearchConfig,
    SearchStatistics, advance, new_search, create_astar_searcher
)

__all__ = [
    'ScanFrontier',
    'HeapFrontier',
    'create_frontier',
    'AStarSearcher',
    'SearchNode',
    'SearchState',
    'SearchResult',
    'SearchConfig',
    'SearchStatistics',
    'advance',
    'new_search',
    'create_astar_searcher'
]
