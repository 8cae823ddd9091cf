"""Demonstration domains for the A* engine.

- grid: 4-directional path finding on a tile level
- goap: goal-oriented action planning over time, energy, money and food
"""

from . import goap, grid

__all__ = [
    'goap',
    'grid'
]
