"""CLI utility functions."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Hydra is chatty at DEBUG
    logging.getLogger('hydra').setLevel(logging.WARNING)


def parse_overrides(config_arg: Optional[str]) -> List[str]:
    """Split a comma-separated ``--config`` value into Hydra overrides.

    Commas inside brackets belong to list or dict values (grid.start=[2,3]).
    """
    if not config_arg:
        return []

    overrides = []
    current = []
    depth = 0
    for ch in config_arg:
        if ch in '[{':
            depth += 1
        elif ch in ']}':
            depth -= 1
        if ch == ',' and depth == 0:
            overrides.append(''.join(current))
            current = []
        else:
            current.append(ch)
    overrides.append(''.join(current))

    return [item.strip() for item in overrides if item.strip()]


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Tuples and numpy scalars need converting for JSON
    def convert(obj):
        if hasattr(obj, 'tolist'):
            return obj.tolist()
        elif isinstance(obj, dict):
            return {k: convert(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [convert(item) for item in obj]
        else:
            return obj

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(convert(results), f, indent=2, sort_keys=True)
        else:
            json.dump(convert(results), f)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


def print_search_summary(result: Dict[str, Any]) -> None:
    """Print the statistics block that follows a search."""
    print(f"\nTermination:      {result['termination_reason']}")
    if result.get('total_cost') is not None:
        print(f"Total cost:       {result['total_cost']:.2f}")
    print(f"Steps:            {result['steps']}")
    print(f"Nodes expanded:   {result['nodes_expanded']}")
    print(f"Nodes generated:  {result['nodes_generated']}")
    print(f"Time:             {format_duration(result['computation_time'])}")
