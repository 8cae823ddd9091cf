"""Configuration validation for the A* planner."""

import logging
from typing import Any, List

from omegaconf import DictConfig, ListConfig

logger = logging.getLogger(__name__)

FRONTIER_NAMES = ('scan', 'heap')
HEURISTIC_NAMES = ('euclidean', 'manhattan', 'zero')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_grid_config(config.get('grid', {}))
        validate_goap_config(config.get('goap', {}))

        logger.info("Configuration validation passed")

    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    frontier = search_config.get('frontier', 'scan')
    if frontier not in FRONTIER_NAMES:
        raise ConfigValidationError(
            f"search.frontier must be one of {list(FRONTIER_NAMES)}, got {frontier}"
        )

    max_steps = search_config.get('max_steps', None)
    if max_steps is not None and (not _is_int(max_steps) or max_steps <= 0):
        raise ConfigValidationError(
            f"search.max_steps must be null or a positive integer, got {max_steps}"
        )

    max_time = search_config.get('max_computation_time', None)
    if max_time is not None and (not _is_number(max_time) or max_time <= 0):
        raise ConfigValidationError(
            f"search.max_computation_time must be null or a positive number, got {max_time}"
        )


def _validate_position(key: str, value: Any) -> None:
    if not isinstance(value, (list, tuple, ListConfig)) or len(value) != 2:
        raise ConfigValidationError(f"{key} must be a pair [x, y], got {value}")
    if not all(_is_int(v) and v >= 0 for v in value):
        raise ConfigValidationError(f"{key} must hold two non-negative integers, got {value}")


def validate_grid_config(grid_config: DictConfig) -> None:
    """Validate grid domain configuration section.

    Args:
        grid_config: Grid configuration section
    """
    if not grid_config:
        return

    heuristic = grid_config.get('heuristic', 'euclidean')
    if heuristic not in HEURISTIC_NAMES:
        raise ConfigValidationError(
            f"grid.heuristic must be one of {list(HEURISTIC_NAMES)}, got {heuristic}"
        )

    for key in ('start', 'goal'):
        if key in grid_config:
            _validate_position(f"grid.{key}", grid_config.get(key))


def validate_goap_config(goap_config: DictConfig) -> None:
    """Validate resource planning configuration section.

    Args:
        goap_config: Planning configuration section
    """
    if not goap_config:
        return

    money_goal = goap_config.get('money_goal', 2000)
    if not _is_int(money_goal) or money_goal < 0:
        raise ConfigValidationError(
            f"goap.money_goal must be a non-negative integer, got {money_goal}"
        )

    start = goap_config.get('start', {})
    if start:
        for key in ('time', 'energy', 'money', 'food'):
            value = start.get(key, 0)
            if not _is_int(value) or value < 0:
                raise ConfigValidationError(
                    f"goap.start.{key} must be a non-negative integer, got {value}"
                )
        unknown = set(start.keys()) - {'time', 'energy', 'money', 'food'}
        if unknown:
            raise ConfigValidationError(f"goap.start has unknown resources: {sorted(unknown)}")


def check_config_consistency(config: DictConfig) -> List[str]:
    """Check configuration consistency and return issues.

    Args:
        config: Configuration to check

    Returns:
        List of consistency issues
    """
    issues = []

    grid_config = config.get('grid', {})
    if grid_config and grid_config.get('start') is not None:
        if list(grid_config.get('start')) == list(grid_config.get('goal', [])):
            issues.append("grid.start equals grid.goal; the search returns an empty path")

    goap_config = config.get('goap', {})
    if goap_config:
        start_money = goap_config.get('start', {}).get('money', 0)
        if start_money >= goap_config.get('money_goal', 2000):
            issues.append("goap.start.money already meets goap.money_goal; the plan is empty")

    return issues
