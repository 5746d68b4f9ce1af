"""Swing-up pendulum problem with torque-limited control."""

from __future__ import annotations

import math

import numpy as np

from episode_engine.core.types import Action, ActionList, Range
from episode_engine.rl.env import Problem


class SwingPendulum(Problem):
    """Pendulum swing-up task with two variables (angle, angular velocity).

    Discrete actions apply ``-u_max``, ``0`` or ``u_max`` torque; the single
    continuous action is bounded to the same torque range. The reward is
    ``cos(theta)``, so the upright position (theta = 0) pays the most.

    Natural termination (staying up for ``required_up_time`` seconds) is off
    by default, so episodes run to the simulator's step cap.
    """

    def __init__(
        self,
        random: bool = False,
        *,
        natural_termination: bool = False,
        seed: int | None = None,
    ) -> None:
        self.u_max = 2.0
        self.step_time = 0.01
        self.max_velocity = (math.pi / 4.0) / self.step_time
        self.action_range = Range(-self.u_max, self.u_max)
        self.theta_range = Range(-math.pi, math.pi)
        self.velocity_range = Range(-self.max_velocity, self.max_velocity)
        self.mass = 1.0
        self.length = 1.0
        self.g = 9.8
        self.required_up_time = 10.0
        self.up_range = math.pi / 4.0

        super().__init__(
            n_vars=2,
            discrete_actions=ActionList.from_values(
                (self.action_range.min, 0.0, self.action_range.max)
            ),
            continuous_actions=ActionList.from_values((0.0,)),
        )
        self.set_resolution(10.0)

        self.random = random
        self.natural_termination = natural_termination
        self._rng = np.random.default_rng(seed)
        self.theta = 0.0
        self.velocity = 0.0
        self.up_time = 0

    def initialize(self) -> None:
        self.up_time = 0
        if self.random:
            self.theta = self.theta_range.choose_random(self._rng)
        else:
            self.theta = math.pi / 2.0
        self.velocity = 0.0
        self._adjust_theta()
        self.update_rt_step()

    def step(self, action: Action) -> None:
        torque = self.action_range.bound(action.at(0))
        theta_acc = (
            -self.step_time * self.velocity
            + self.mass * self.g * self.length * math.sin(self.theta)
            + torque
        )
        self.velocity = self.velocity_range.bound(self.velocity + theta_acc)
        self.theta += self.velocity * self.step_time
        self._adjust_theta()
        self.up_time = 0 if abs(self.theta) > self.up_range else self.up_time + 1
        self.update_rt_step()

    def update_rt_step(self) -> None:
        scaled = self.tr_step.o_tp1
        scaled[0] = self.theta_range.to_scaled(self.theta, self.resolutions[0])
        scaled[1] = self.velocity_range.to_scaled(self.velocity, self.resolutions[1])

        self.observations[0] = self.theta
        self.observations[1] = self.velocity

        self.tr_step.update_rt_step(self.r(), self.z(), self.end_of_episode())

    def end_of_episode(self) -> bool:
        if not self.natural_termination:
            return False
        return self.up_time + 1 >= self.required_up_time / self.step_time

    def r(self) -> float:
        return math.cos(self.theta)

    def z(self) -> float:
        return 0.0

    def _adjust_theta(self) -> None:
        if self.theta >= math.pi:
            self.theta -= 2.0 * math.pi
        if self.theta < -math.pi:
            self.theta += 2.0 * math.pi
