"""Training entry point wiring a control and a problem into a simulator."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

import numpy as np
import pandas as pd

from episode_engine.core.params import SimulatorConfig
from episode_engine.rl.agent import Control, LearnerAgent
from episode_engine.rl.env import Problem
from episode_engine.rl.rollout import EpisodeHistory
from episode_engine.rl.simulator import Simulator
from episode_engine.rl.statistics import BenchmarkResult


@dataclass(frozen=True)
class TrainingResult:
    """Outputs of one ``train_agent`` call."""

    history: pd.DataFrame
    benchmarks: tuple[BenchmarkResult, ...]
    value_function: np.ndarray | None


def train_agent(
    control: Control,
    problem: Problem,
    config: SimulatorConfig,
    *,
    stream: TextIO | None = None,
    value_function_path: Path | None = None,
) -> TrainingResult:
    """Train ``control`` on ``problem`` for every configured run.

    The episode history covers learning episodes only; evaluation episodes
    run in their own nested simulator.
    """
    agent = LearnerAgent(control)
    sim = Simulator.from_config(agent, problem, config, stream=stream)
    history = EpisodeHistory()
    sim.add_episode_listener(history)
    benchmarks = sim.run()

    value_function = None
    if value_function_path is not None:
        value_function = sim.compute_value_function(value_function_path)

    return TrainingResult(
        history=history.to_frame(),
        benchmarks=tuple(benchmarks),
        value_function=value_function,
    )
