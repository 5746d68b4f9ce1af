"""Abstract environment interface driven by the simulator."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from episode_engine.core.dynamics import TransitionRecord
from episode_engine.core.types import Action, ActionList


class Problem(ABC):
    """Environment producing transition records in response to actions.

    A problem owns its raw observation vector, a per-variable resolution
    vector used for the scaled representation, two action catalogues fixed at
    construction, and exactly one ``TransitionRecord`` that it rewrites on
    every ``initialize``/``step`` call.
    """

    def __init__(
        self,
        n_vars: int,
        discrete_actions: ActionList,
        continuous_actions: ActionList,
    ) -> None:
        self._observations = np.zeros(n_vars, dtype=np.float64)
        self._resolutions = np.zeros(n_vars, dtype=np.float64)
        self._output = TransitionRecord(n_vars)
        self._discrete_actions = discrete_actions
        self._continuous_actions = continuous_actions

    @abstractmethod
    def initialize(self) -> None:
        """Reset episodic state and write a fresh record (no action taken)."""

    @abstractmethod
    def step(self, action: Action) -> None:
        """Apply one action for one fixed timestep and write the record."""

    @abstractmethod
    def update_rt_step(self) -> None:
        """Write the scaled observation and current r/z/termination to the record."""

    @abstractmethod
    def end_of_episode(self) -> bool:
        """Termination predicate; must not mutate state."""

    @abstractmethod
    def r(self) -> float:
        """Current reward."""

    @abstractmethod
    def z(self) -> float:
        """Current auxiliary signal."""

    def draw(self) -> None:
        """Optional diagnostic output hook."""

    @property
    def discrete_actions(self) -> ActionList:
        return self._discrete_actions

    @property
    def continuous_actions(self) -> ActionList:
        return self._continuous_actions

    @property
    def observations(self) -> np.ndarray:
        """Raw (unscaled) observation values."""
        return self._observations

    @property
    def resolutions(self) -> np.ndarray:
        return self._resolutions

    @property
    def tr_step(self) -> TransitionRecord:
        return self._output

    def set_resolution(self, resolution: float) -> None:
        self._resolutions[:] = float(resolution)

    def dimension(self) -> int:
        return int(self._observations.shape[0])
