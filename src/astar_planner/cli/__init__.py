"""Command-line interface for the A* planner.

This module provides CLI commands for the grid and resource planning domains.
"""

from .main import main_cli
from .commands import grid_command, plan_command, config_command
from .utils import setup_logging, save_results

__all__ = [
    'main_cli',
    'grid_command',
    'plan_command',
    'config_command',
    'setup_logging',
    'save_results'
]
