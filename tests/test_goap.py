"""Tests for the resource planning domain."""

from collections import Counter

import pytest

from astar_planner.domains.goap import (
    ACTIONS, DEFAULT_MONEY_GOAL, DEFAULT_START, Resources,
    action_name, buy_food, eat, format_plan, g_cost, is_legal,
    make_problem, money_goal, plan, work
)
from astar_planner.search.astar import create_astar_searcher


def replay(start, path):
    """Apply ``path`` to ``start``, checking legality at every step."""
    state = Resources(*start)
    for action in path:
        assert is_legal(state, action)
        state = action(state)
        assert all(value >= 0 for value in state)
    return state


class TestResources:
    """Test the resource record and actions."""

    def test_str(self):
        assert str(Resources(2000, 0, 0, 5)) == "(2000, 0, 0, 5)"

    def test_resources_are_hashable(self):
        assert len({Resources(1, 2, 3, 4), Resources(1, 2, 3, 4)}) == 1

    def test_actions(self):
        state = Resources(time=2000, energy=1200, money=100, food=5)

        assert work(state) == Resources(1940, 800, 200, 5)
        assert eat(state) == Resources(1985, 2400, 100, 4)
        assert buy_food(state) == Resources(1970, 1100, 0, 12)
        assert ACTIONS == (work, eat, buy_food)

    def test_action_names(self):
        assert action_name(work) == "Work"
        assert action_name(eat) == "Eat"
        assert action_name(buy_food) == "Buy food"
        assert action_name(len) == "len"


class TestRules:
    """Test the legality guard and cost model."""

    def test_guard_rejects_negative_resources(self):
        assert not is_legal(DEFAULT_START, work)  # no energy
        assert not is_legal(DEFAULT_START, buy_food)  # no money
        assert is_legal(DEFAULT_START, eat)
        assert not is_legal(Resources(2000, 1200, 0, 0), eat)  # no food
        assert not is_legal(Resources(10, 1200, 0, 5), eat)  # no time

    def test_cost_counts_time_and_energy_spent(self):
        state = Resources(2000, 1200, 100, 5)

        assert g_cost(state, work) == 460.0
        assert g_cost(state, buy_food) == 130.0
        # Energy gained is free
        assert g_cost(state, eat) == 15.0

    def test_money_goal(self):
        is_goal = money_goal(300)

        assert not is_goal(Resources(0, 0, 299, 0))
        assert is_goal(Resources(0, 0, 300, 0))
        assert money_goal()(Resources(0, 0, DEFAULT_MONEY_GOAL, 0))

    def test_make_problem_defaults(self):
        problem = make_problem()

        assert problem.start == DEFAULT_START
        assert problem.h_cost(DEFAULT_START) == 0.0
        assert not problem.is_goal(DEFAULT_START)


class TestPlan:
    """Test planning end to end."""

    @pytest.mark.parametrize("frontier", ["scan", "heap"])
    def test_small_goal(self, frontier):
        """Three shifts of work need exactly one meal first."""
        result = plan(is_goal=money_goal(300),
                      searcher=create_astar_searcher(frontier=frontier))

        assert result.success
        assert result.path == [eat, work, work, work]
        assert result.total_cost == pytest.approx(1395.0)
        assert replay(DEFAULT_START, result.path) == Resources(1805, 0, 300, 4)

    def test_default_goal(self):
        """Earning 2000 needs a food run, paid for by one extra shift."""
        result = plan(searcher=create_astar_searcher(frontier='heap'))

        assert result.success
        final = replay(DEFAULT_START, result.path)
        assert final.money >= DEFAULT_MONEY_GOAL
        assert result.total_cost == pytest.approx(9910.0)

        counts = Counter(result.path)
        assert counts[work] == 21
        assert counts[eat] == 8
        assert counts[buy_food] == 1

    def test_goal_already_met(self):
        result = plan(start=Resources(0, 0, 500, 0), is_goal=money_goal(500))

        assert result.success
        assert result.path == []
        assert result.total_cost == 0.0

    def test_unreachable_goal(self):
        """Without food or energy nothing can be done."""
        result = plan(start=Resources(2000, 0, 0, 0), is_goal=money_goal(100))

        assert not result.success
        assert result.termination_reason == "exhausted"

    def test_start_accepts_plain_tuples(self):
        result = plan(start=(2000, 0, 0, 5), is_goal=money_goal(100))

        assert result.success
        assert result.path == [eat, work]


class TestFormatPlan:
    """Test plan formatting."""

    def test_format_plan(self):
        lines = format_plan(DEFAULT_START, [eat, work])

        assert lines == [
            "(2000, 0, 0, 5) - Eat -> (1985, 1200, 0, 4)",
            "(1985, 1200, 0, 4) - Work -> (1925, 800, 100, 4)",
        ]

    def test_format_empty_plan(self):
        assert format_plan(DEFAULT_START, []) == []
