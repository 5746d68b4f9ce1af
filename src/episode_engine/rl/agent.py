"""Control interface and the agents that adapt it to the simulator."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from episode_engine.core.dynamics import TransitionRecord
from episode_engine.core.types import Action


class Control(ABC):
    """Learning/decision algorithm consumed by agents.

    Implementations own their learned parameters. ``reset`` clears
    episode-local state only (traces, running baselines), never the
    parameters themselves.
    """

    @abstractmethod
    def propose_action(self, x: np.ndarray) -> Action:
        """Greedy action for ``x`` without learning."""

    @abstractmethod
    def initialize(self, x: np.ndarray) -> Action:
        """First action of an episode starting from ``x``."""

    @abstractmethod
    def step(
        self,
        x_t: np.ndarray,
        a_t: Action,
        x_tp1: np.ndarray,
        r_tp1: float,
        z_tp1: float,
    ) -> Action:
        """Learn from one transition and return the next action."""

    @abstractmethod
    def reset(self) -> None:
        """Clear episode-local learning state."""

    @abstractmethod
    def compute_value_function(self, x: np.ndarray) -> float:
        """Current value estimate for ``x``."""


class RLAgent(ABC):
    """Adapter between a transition record and a control.

    The wrapped control is shared, not owned: its lifetime is managed by the
    caller and several agents may wrap the same instance.
    """

    def __init__(self, control: Control) -> None:
        self._control = control

    @abstractmethod
    def initialize(self, step: TransitionRecord) -> Action:
        """Return the first action of an episode."""

    @abstractmethod
    def get_next_action(self, step: TransitionRecord) -> Action:
        """Return the action following the transition held in ``step``."""

    @abstractmethod
    def reset(self) -> None:
        """Prepare for a new run."""

    @property
    def control(self) -> Control:
        return self._control

    def compute_value_function(self, x: np.ndarray) -> float:
        return float(self._control.compute_value_function(x))


class LearnerAgent(RLAgent):
    """Agent that feeds every transition into the control's learning step.

    The record's observation is overwritten in place by the problem, so the
    agent buffers its own copy of the previous observation. When the record
    is flagged terminal, a zero absorbing state replaces the next
    observation in the update.
    """

    def __init__(self, control: Control) -> None:
        super().__init__(control)
        self._a_t: Action | None = None
        self._x_t: np.ndarray | None = None
        self._absorbing_state: np.ndarray | None = None

    def initialize(self, step: TransitionRecord) -> Action:
        self._a_t = self._control.initialize(step.o_tp1)
        self._buffered_copy(step.o_tp1)
        return self._a_t

    def get_next_action(self, step: TransitionRecord) -> Action:
        if self._x_t is None or self._a_t is None:
            raise RuntimeError("LearnerAgent.get_next_action called before initialize.")
        x_tp1 = self._absorbing_state if step.end_of_episode else step.o_tp1
        a_tp1 = self._control.step(self._x_t, self._a_t, x_tp1, step.r_tp1, step.z_tp1)
        self._buffered_copy(step.o_tp1)
        self._a_t = a_tp1
        return self._a_t

    def reset(self) -> None:
        self._control.reset()

    @property
    def absorbing_state(self) -> np.ndarray | None:
        return self._absorbing_state

    def _buffered_copy(self, source: np.ndarray) -> None:
        if self._x_t is None or self._x_t.shape != source.shape:
            self._x_t = np.array(source, dtype=np.float64, copy=True)
            self._absorbing_state = np.zeros_like(self._x_t)
        else:
            np.copyto(self._x_t, source)


class ControlAgent(RLAgent):
    """Evaluation-only agent: greedy actions, no learning, no reset."""

    def initialize(self, step: TransitionRecord) -> Action:
        return self._control.propose_action(step.o_tp1)

    def get_next_action(self, step: TransitionRecord) -> Action:
        return self._control.propose_action(step.o_tp1)

    def reset(self) -> None:
        # Evaluation must not perturb learned state.
        pass
