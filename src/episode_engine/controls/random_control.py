"""Uniform random control used as a non-learning baseline."""

from __future__ import annotations

import numpy as np

from episode_engine.core.types import Action, ActionList
from episode_engine.rl.agent import Control


class RandomControl(Control):
    """Pick an action uniformly from a catalogue, ignoring observations."""

    def __init__(self, actions: ActionList, seed: int | None = None) -> None:
        if len(actions) == 0:
            raise ValueError("RandomControl requires a non-empty action list.")
        self._actions = actions
        self._rng = np.random.default_rng(seed)

    def propose_action(self, x: np.ndarray) -> Action:
        return self._actions[int(self._rng.integers(len(self._actions)))]

    def initialize(self, x: np.ndarray) -> Action:
        return self.propose_action(x)

    def step(
        self,
        x_t: np.ndarray,
        a_t: Action,
        x_tp1: np.ndarray,
        r_tp1: float,
        z_tp1: float,
    ) -> Action:
        return self.propose_action(x_tp1)

    def reset(self) -> None:
        pass

    def compute_value_function(self, x: np.ndarray) -> float:
        return 0.0
