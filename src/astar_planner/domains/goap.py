"""Goal-oriented action planning over a small resource model.

An agent has time, energy, money and food. It can work, eat and buy food,
and plans the cheapest sequence of those actions that earns enough money
without any resource dropping below zero.
"""

import logging
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence

from astar_planner.core.data_models import SearchProblem, zero_heuristic
from astar_planner.search.astar import AStarSearcher, SearchResult

logger = logging.getLogger(__name__)


class Resources(NamedTuple):
    time: int
    energy: int
    money: int
    food: int

    def __str__(self) -> str:
        return "(" + ", ".join(str(v) for v in self) + ")"


Action = Callable[[Resources], Resources]


def work(state: Resources) -> Resources:
    return state._replace(
        time=state.time - 60,
        energy=state.energy - 400,
        money=state.money + 100
    )


def eat(state: Resources) -> Resources:
    return state._replace(
        time=state.time - 15,
        food=state.food - 1,
        energy=state.energy + 1200
    )


def buy_food(state: Resources) -> Resources:
    return state._replace(
        time=state.time - 30,
        energy=state.energy - 100,
        money=state.money - 100,
        food=state.food + 7
    )


ACTIONS: Sequence[Action] = (work, eat, buy_food)

ACTION_NAMES: Dict[Action, str] = {
    work: "Work",
    eat: "Eat",
    buy_food: "Buy food",
}

DEFAULT_START = Resources(time=2000, energy=0, money=0, food=5)
DEFAULT_MONEY_GOAL = 2000


def is_legal(state: Resources, action: Action) -> bool:
    """An action is legal when no resource would go negative."""
    return all(value >= 0 for value in action(state))


def g_cost(state: Resources, action: Action) -> float:
    """Time spent plus energy spent; energy gained costs nothing."""
    after = action(state)
    time_cost = float(state.time - after.time)
    energy_cost = max(0.0, float(state.energy - after.energy))
    return time_cost + energy_cost


h_cost = zero_heuristic


def money_goal(target: int = DEFAULT_MONEY_GOAL) -> Callable[[Resources], bool]:
    """Goal test satisfied once at least ``target`` money has been earned."""
    def is_goal(state: Resources) -> bool:
        return state.money >= target
    return is_goal


def action_name(action: Action) -> str:
    return ACTION_NAMES.get(action, getattr(action, '__name__', repr(action)))


def make_problem(start: Resources = DEFAULT_START,
                 is_goal: Optional[Callable[[Resources], bool]] = None,
                 actions: Sequence[Action] = ACTIONS) -> SearchProblem:
    return SearchProblem(
        start=Resources(*start),
        is_goal=is_goal or money_goal(),
        actions=actions,
        g_cost=g_cost,
        h_cost=h_cost,
        is_legal=is_legal
    )


def plan(start: Resources = DEFAULT_START,
         is_goal: Optional[Callable[[Resources], bool]] = None,
         actions: Sequence[Action] = ACTIONS,
         searcher: Optional[AStarSearcher] = None) -> SearchResult:
    """Plan the cheapest action sequence from ``start`` to ``is_goal``."""
    searcher = searcher or AStarSearcher()
    result = searcher.search(make_problem(start, is_goal, actions))
    logger.info(f"Planned from {Resources(*start)}: {result.termination_reason}, "
                f"{len(result.path)} actions, cost {result.total_cost}")
    return result


def format_plan(start: Resources, path: List[Action]) -> List[str]:
    """One line per action: ``(before) - Name -> (after)``."""
    lines = []
    state = Resources(*start)
    for action in path:
        after = action(state)
        lines.append(f"{state} - {action_name(action)} -> {after}")
        state = after
    return lines
