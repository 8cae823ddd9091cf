"""CLI command implementations."""

import logging
from typing import Any, Dict, Optional

from omegaconf import DictConfig

from astar_planner.config import ConfigManager, load_config, validate_config, ConfigValidationError
from astar_planner.config.validators import check_config_consistency
from astar_planner.domains import goap, grid
from astar_planner.search.astar import AStarSearcher, SearchResult, create_astar_searcher

from .utils import parse_overrides, print_search_summary, save_results

logger = logging.getLogger(__name__)


def build_searcher(search_config: Optional[DictConfig]) -> AStarSearcher:
    """Create a searcher from the ``search`` config section."""
    search_config = search_config or {}
    return create_astar_searcher(
        frontier=search_config.get('frontier', 'scan'),
        max_steps=search_config.get('max_steps', None),
        max_computation_time=search_config.get('max_computation_time', None),
        statistics_tracking=bool(search_config.get('statistics_tracking', True))
    )


def load_manager(args, flags: Optional[Dict[str, Any]] = None) -> ConfigManager:
    """Compose the configuration and fold command line flags into it.

    ``--config`` overrides are applied first, then every flag that was
    given on the command line; flags therefore win.
    """
    manager = ConfigManager()
    manager.load_config(overrides=parse_overrides(getattr(args, 'config', None)))

    values = {
        'search.frontier': getattr(args, 'frontier', None),
        'search.max_steps': getattr(args, 'max_steps', None),
    }
    values.update(flags or {})
    manager.apply(values)
    return manager


def _report_failure(result: SearchResult) -> None:
    if result.termination_reason == "exhausted":
        print("\nPath not found!")
    else:
        # Budget stop; the search itself is only suspended
        print(f"\nSearch stopped by {result.termination_reason}")


def _finish(args, result: SearchResult, payload: Dict[str, Any]) -> int:
    if not getattr(args, 'quiet', False):
        print_search_summary(payload)
    if getattr(args, 'output', None):
        save_results(payload, args.output)
        logger.info(f"Results saved to {args.output}")
    return 0 if result.success else 1


def grid_command(args) -> int:
    """Handle grid command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 when a path was found)
    """
    try:
        manager = load_manager(args, {
            'grid.start': list(args.start) if args.start else None,
            'grid.goal': list(args.goal) if args.goal else None,
            'grid.heuristic': args.heuristic,
        })

        level = grid.load_level(args.level) if args.level else grid.DEFAULT_LEVEL
        start = tuple(manager.get_parameter('grid.start', grid.DEFAULT_START))
        goal = tuple(manager.get_parameter('grid.goal', grid.DEFAULT_GOAL))
        heuristic = manager.get_parameter('grid.heuristic', 'euclidean')
        searcher = build_searcher(manager.get_parameter('search'))

        print("Search level:")
        print(grid.render_level(level))

        result = grid.find_path(level, start, goal, heuristic=heuristic, searcher=searcher)

        if result.success:
            print(f"\nPath found ({len(result.path)} moves):")
            print(grid.render_level(level, start, result.path))
        else:
            _report_failure(result)

        payload = result.to_dict()
        payload['start'] = list(start)
        payload['goal'] = list(goal)
        payload['positions'] = [list(p) for p in grid.walk(start, result.path)]
        return _finish(args, result, payload)

    except Exception as e:
        logger.error(f"Grid command failed: {e}")
        return 1


def plan_command(args) -> int:
    """Handle plan command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 when a plan was found)
    """
    try:
        manager = load_manager(args, {'goap.money_goal': args.money_goal})

        start = goap.Resources(**{
            field: int(manager.get_parameter(f'goap.start.{field}', default))
            for field, default in goap.DEFAULT_START._asdict().items()
        })
        target = int(manager.get_parameter('goap.money_goal', goap.DEFAULT_MONEY_GOAL))
        searcher = build_searcher(manager.get_parameter('search'))

        result = goap.plan(start, goap.money_goal(target), searcher=searcher)

        if result.success:
            print(f"\nPath found ({len(result.path)} actions):")
            for line in goap.format_plan(start, result.path):
                print(line)
        else:
            _report_failure(result)

        payload = result.to_dict(action_names=goap.action_name)
        payload['start'] = start._asdict()
        payload['money_goal'] = target
        return _finish(args, result, payload)

    except Exception as e:
        logger.error(f"Plan command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            manager = ConfigManager()
            manager.load_config(overrides=parse_overrides(args.config), validate=False)
            print("Current Configuration:")
            print("=" * 50)
            print(manager.to_yaml())
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=parse_overrides(args.config), validate=False)
                validate_config(config)
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1
            for issue in check_config_consistency(config):
                print(f"Warning: {issue}")
            print("Configuration is valid")
            return 0

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
