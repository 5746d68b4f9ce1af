"""Episode history collection and rollout helpers for RL experiments."""

from __future__ import annotations

import pandas as pd

from episode_engine.rl.agent import RLAgent
from episode_engine.rl.env import Problem
from episode_engine.rl.simulator import EpisodeSummary, Simulator

HISTORY_COLUMNS: tuple[str, ...] = (
    "nb_episode_done",
    "time_steps",
    "episode_r",
    "episode_z",
    "average_time_per_step",
)


class EpisodeHistory:
    """Episode-end listener accumulating one summary per finished episode."""

    def __init__(self) -> None:
        self._summaries: list[EpisodeSummary] = []

    def __call__(self, summary: EpisodeSummary) -> None:
        self._summaries.append(summary)

    def __len__(self) -> int:
        return len(self._summaries)

    @property
    def summaries(self) -> tuple[EpisodeSummary, ...]:
        return tuple(self._summaries)

    def clear(self) -> None:
        self._summaries.clear()

    def to_frame(self) -> pd.DataFrame:
        """One row per episode, in completion order."""
        rows = [summary.to_dict() for summary in self._summaries]
        return pd.DataFrame(rows, columns=list(HISTORY_COLUMNS))


def run_rollout(
    agent: RLAgent,
    problem: Problem,
    max_episode_time_steps: int,
    nb_episodes: int,
) -> pd.DataFrame:
    """Run ``nb_episodes`` quietly and return per-episode diagnostics."""
    history = EpisodeHistory()
    sim = Simulator(agent, problem, max_episode_time_steps, nb_episodes, verbose=False)
    sim.add_episode_listener(history)
    sim.run_episodes()
    return history.to_frame()
