"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys


def _preload_numpy_without_macos_check() -> None:
    """Preload NumPy while bypassing the macOS sanity check.

    This avoids a hard crash seen with some macOS BLAS/LAPACK builds during
    NumPy's import-time polyfit check.
    """
    if sys.platform != "darwin":
        return

    original_platform = sys.platform
    try:
        sys.platform = "linux"
        import numpy  # noqa: F401
    finally:
        sys.platform = original_platform


_preload_numpy_without_macos_check()


from typing import Sequence

import numpy as np
import pytest

from episode_engine.core.types import Action, ActionList
from episode_engine.rl.agent import Control
from episode_engine.rl.env import Problem


class ScriptedProblem(Problem):
    """Deterministic problem whose observation equals the step index.

    Rewards cycle through ``rewards``; ``z`` is always ``0.5``. When
    ``terminate_at`` is set, the problem reports termination once that many
    steps have been taken in the current episode.
    """

    def __init__(
        self,
        n_vars: int = 2,
        rewards: Sequence[float] = (1.0,),
        terminate_at: int | None = None,
    ) -> None:
        super().__init__(
            n_vars=n_vars,
            discrete_actions=ActionList.from_values((-1.0, 0.0, 1.0)),
            continuous_actions=ActionList.from_values((0.0,)),
        )
        self.set_resolution(10.0)
        self.rewards = tuple(rewards)
        self.terminate_at = terminate_at
        self.t = 0
        self.initialize_calls = 0
        self.draw_calls = 0
        self.applied_actions: list[Action] = []

    def initialize(self) -> None:
        self.initialize_calls += 1
        self.t = 0
        self.update_rt_step()

    def step(self, action: Action) -> None:
        self.applied_actions.append(action)
        self.t += 1
        self.update_rt_step()

    def update_rt_step(self) -> None:
        self.observations[:] = float(self.t)
        self.tr_step.o_tp1[:] = float(self.t)
        self.tr_step.update_rt_step(self.r(), self.z(), self.end_of_episode())

    def end_of_episode(self) -> bool:
        return self.terminate_at is not None and self.t >= self.terminate_at

    def r(self) -> float:
        if self.t == 0:
            return 0.0
        return self.rewards[(self.t - 1) % len(self.rewards)]

    def z(self) -> float:
        return 0.5

    def draw(self) -> None:
        self.draw_calls += 1


class RecordingControl(Control):
    """Control that logs every call and learns a weight vector from rewards."""

    def __init__(self, actions: ActionList, n_vars: int = 2, alpha: float = 0.1) -> None:
        self.actions = actions
        self.alpha = alpha
        self.weights = np.zeros(n_vars, dtype=np.float64)
        self.calls: list[tuple] = []
        self.reset_calls = 0

    def propose_action(self, x: np.ndarray) -> Action:
        self.calls.append(("propose_action", x.copy()))
        return self.actions[0]

    def initialize(self, x: np.ndarray) -> Action:
        self.calls.append(("initialize", x.copy()))
        return self.actions[1]

    def step(
        self,
        x_t: np.ndarray,
        a_t: Action,
        x_tp1: np.ndarray,
        r_tp1: float,
        z_tp1: float,
    ) -> Action:
        self.calls.append(("step", x_t.copy(), a_t, x_tp1.copy(), r_tp1, z_tp1))
        self.weights += self.alpha * r_tp1 * (x_t - x_tp1)
        return self.actions[2]

    def reset(self) -> None:
        self.reset_calls += 1

    def compute_value_function(self, x: np.ndarray) -> float:
        return float(x[0] + 100.0 * x[1])

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def make_problem():
    return ScriptedProblem


@pytest.fixture
def make_control():
    return RecordingControl
