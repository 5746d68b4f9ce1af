"""Tests for actions, action catalogues and ranges."""

from __future__ import annotations

import math

import numpy as np
import pytest

from episode_engine.core.types import Action, ActionList, Range


def test_action_list_from_scalar_values_assigns_sequential_ids() -> None:
    actions = ActionList.from_values((-2.0, 0.0, 2.0))

    assert len(actions) == 3
    assert actions.ids() == (0, 1, 2)
    assert actions[2] == Action(id=2, values=(2.0,))
    assert [action.at() for action in actions] == [-2.0, 0.0, 2.0]


def test_action_list_accepts_vector_values() -> None:
    actions = ActionList.from_values([(1.0, -1.0), np.array([0.5, 0.25])])

    assert actions[0].dimension() == 2
    assert actions[1].at(1) == 0.25


def test_action_list_is_immutable() -> None:
    actions = ActionList.from_values((1.0,))

    with pytest.raises(AttributeError):
        actions.actions = ()  # type: ignore[misc]
    assert isinstance(actions.actions, tuple)


def test_range_bound_clamps_both_sides() -> None:
    torque = Range(-2.0, 2.0)

    assert torque.bound(5.0) == 2.0
    assert torque.bound(-7.5) == -2.0
    assert torque.bound(0.3) == 0.3
    assert torque.length() == 4.0
    assert torque.center() == 0.0


def test_range_to_scaled_maps_onto_resolution() -> None:
    theta = Range(-math.pi, math.pi)

    assert theta.to_scaled(-math.pi, 10.0) == pytest.approx(0.0)
    assert theta.to_scaled(0.0, 10.0) == pytest.approx(5.0)
    assert theta.to_scaled(math.pi / 2.0, 10.0) == pytest.approx(7.5)


def test_range_choose_random_stays_inside() -> None:
    rng = np.random.default_rng(3)
    interval = Range(1.0, 2.0)

    draws = [interval.choose_random(rng) for _ in range(200)]

    assert all(interval.in_range(value) for value in draws)


def test_range_rejects_inverted_bounds() -> None:
    with pytest.raises(ValueError, match="exceeds"):
        Range(1.0, 0.0)
