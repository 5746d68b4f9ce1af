"""Transition record shared between a problem and the agent driving it."""

from __future__ import annotations

import numpy as np


class TransitionRecord:
    """Single transition buffer emitted by problem initialize/step calls.

    One record exists per problem. It is overwritten in place every step, so
    readers that need the previous observation must keep their own copy.

    Attributes:
        r_tp1: Immediate reward of the last transition.
        z_tp1: Auxiliary scalar signal accompanying the reward.
        end_of_episode: Termination flag, possibly forced by the simulator.
    """

    def __init__(self, n_vars: int) -> None:
        self._o_tp1 = np.zeros(n_vars, dtype=np.float64)
        self.r_tp1 = 0.0
        self.z_tp1 = 0.0
        self.end_of_episode = False

    @property
    def o_tp1(self) -> np.ndarray:
        """Next observation; fixed size, written in place."""
        return self._o_tp1

    def dimension(self) -> int:
        return int(self._o_tp1.shape[0])

    def update_rt_step(self, r_tp1: float, z_tp1: float, end_of_episode: bool) -> None:
        self.r_tp1 = float(r_tp1)
        self.z_tp1 = float(z_tp1)
        self.end_of_episode = bool(end_of_episode)

    def set_forced_end_of_episode(self, end_of_episode: bool) -> None:
        """Overwrite only the termination flag (step-budget truncation)."""
        self.end_of_episode = bool(end_of_episode)

    def __repr__(self) -> str:
        return (
            f"TransitionRecord(o_tp1={self._o_tp1.tolist()}, r_tp1={self.r_tp1}, "
            f"z_tp1={self.z_tp1}, end_of_episode={self.end_of_episode})"
        )
