"""Shared action and range types used by problems, controls and agents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np


@dataclass(frozen=True)
class Action:
    """One entry of an action catalogue.

    Attributes:
        id: Position of the action inside its catalogue.
        values: Action components (a single torque, a velocity pair, ...).
    """

    id: int
    values: tuple[float, ...]

    def at(self, index: int = 0) -> float:
        return self.values[index]

    def dimension(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class ActionList:
    """Immutable action catalogue populated once at construction."""

    actions: tuple[Action, ...]

    @classmethod
    def from_values(cls, values: Iterable[float | Iterable[float]]) -> "ActionList":
        """Build a catalogue with ids ``0..n-1`` from scalar or vector values."""
        actions = []
        for action_id, value in enumerate(values):
            if np.isscalar(value):
                components = (float(value),)
            else:
                components = tuple(float(component) for component in value)
            actions.append(Action(id=action_id, values=components))
        return cls(actions=tuple(actions))

    def ids(self) -> tuple[int, ...]:
        return tuple(action.id for action in self.actions)

    def __len__(self) -> int:
        return len(self.actions)

    def __getitem__(self, index: int) -> Action:
        return self.actions[index]

    def __iter__(self) -> Iterator[Action]:
        return iter(self.actions)


@dataclass(frozen=True)
class Range:
    """Closed interval used for clamping and observation scaling."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"Range min={self.min} exceeds max={self.max}.")

    def length(self) -> float:
        return self.max - self.min

    def bound(self, value: float) -> float:
        """Clamp ``value`` into ``[min, max]``."""
        return float(min(max(value, self.min), self.max))

    def in_range(self, value: float) -> bool:
        return self.min <= value <= self.max

    def center(self) -> float:
        return self.min + self.length() / 2.0

    def choose_random(self, rng: np.random.Generator) -> float:
        return float(rng.uniform(self.min, self.max))

    def to_scaled(self, value: float, resolution: float) -> float:
        """Map ``value`` from this range onto ``[0, resolution]``."""
        return (value - self.min) * resolution / self.length()
