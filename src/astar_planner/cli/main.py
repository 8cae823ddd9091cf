"""Main CLI entry point for the A* planner."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='astar-planner',
        description='A* planner - step-resumable best-first search with demo domains',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  astar-planner grid                            # Path across the built-in level
  astar-planner grid --level level.json --start 1 1 --goal 5 3
  astar-planner plan --money-goal 1000          # Plan work/eat/buy food actions
  astar-planner -c search.frontier=heap plan    # Override configuration
  astar-planner config show                     # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Comma-separated configuration overrides (e.g., search.frontier=heap)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except results'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Grid command
    grid_parser = subparsers.add_parser(
        'grid',
        help='Find a path across a tile level',
        description='Find a 4-directional path across a tile level (0 free, 1 wall)'
    )

    grid_parser.add_argument(
        '--level',
        type=str,
        help='Path to a JSON level (list of rows); defaults to the built-in 13x9 level'
    )

    grid_parser.add_argument(
        '--start',
        type=int,
        nargs=2,
        metavar=('X', 'Y'),
        help='Start position (default from config: 1 1)'
    )

    grid_parser.add_argument(
        '--goal',
        type=int,
        nargs=2,
        metavar=('X', 'Y'),
        help='Goal position (default from config: 11 7)'
    )

    grid_parser.add_argument(
        '--heuristic',
        choices=['euclidean', 'manhattan', 'zero'],
        help='Heuristic estimate (default from config: euclidean)'
    )

    # Plan command
    plan_parser = subparsers.add_parser(
        'plan',
        help='Plan resource actions',
        description='Plan work / eat / buy food actions until enough money is earned'
    )

    plan_parser.add_argument(
        '--money-goal',
        type=int,
        help='Money to earn (default from config: 2000)'
    )

    for sub in (grid_parser, plan_parser):
        sub.add_argument(
            '--frontier',
            choices=['scan', 'heap'],
            help='Frontier container (default from config: scan)'
        )
        sub.add_argument(
            '--max-steps',
            type=int,
            help='Stop after this many expansion steps'
        )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Show or validate planner configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    # Setup logging based on verbosity
    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'grid':
            return commands.grid_command(parsed_args)
        if parsed_args.command == 'plan':
            return commands.plan_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
