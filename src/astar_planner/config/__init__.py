"""Configuration management for the A* planner.

This module provides Hydra-based configuration management with hierarchical
parameter groups and runtime override capabilities.
"""

from .config_manager import ConfigManager, load_config
from .validators import validate_config, ConfigValidationError

__all__ = [
    'ConfigManager',
    'load_config',
    'validate_config',
    'ConfigValidationError'
]
