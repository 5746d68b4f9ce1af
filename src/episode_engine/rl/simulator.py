"""Episode/run driver connecting an agent to a problem."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
import sys
import time
from typing import Any, Callable, Iterator, TextIO

import numpy as np

from episode_engine.core.params import SimulatorConfig
from episode_engine.core.types import Action
from episode_engine.rl.agent import ControlAgent, RLAgent
from episode_engine.rl.env import Problem
from episode_engine.rl.statistics import BenchmarkResult, summarize_episode_lengths
from episode_engine.utils.io import write_value_function

DEFAULT_VALUE_FUNCTION_PATH = Path("visualization") / "valueFunction.txt"

# Both grid axes cover 0.0, 0.1, ..., 10.0 (the scaled observation space).
VALUE_FUNCTION_AXIS: np.ndarray = np.linspace(0.0, 10.0, 101)


class EpisodePhase(Enum):
    """Driver state between two ``step`` calls."""

    AWAITING_EPISODE_START = "awaiting_episode_start"
    IN_EPISODE = "in_episode"


@dataclass(frozen=True)
class EpisodeSummary:
    """Snapshot handed to every episode-end listener."""

    time_steps: int
    nb_episode_done: int
    average_time_per_step: float
    episode_r: float
    episode_z: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


EpisodeListener = Callable[[EpisodeSummary], None]


class Simulator:
    """Drive an agent through episodes and runs on a problem.

    One ``step`` call is one transition of a two-phase state machine: the
    first call of an episode initializes the problem and asks the agent for
    its first action; every later call applies the pending action, feeds the
    resulting record to the agent and checks for termination.
    """

    def __init__(
        self,
        agent: RLAgent,
        problem: Problem,
        max_episode_time_steps: int,
        nb_episodes: int = -1,
        nb_runs: int = -1,
        *,
        verbose: bool = True,
        enable_statistics: bool = False,
        test_episodes_after_each_run: bool = False,
        max_test_episodes_after_each_run: int = 20,
        show_progress: bool = False,
        stream: TextIO | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._agent = agent
        self._problem = problem
        self._max_episode_time_steps = max_episode_time_steps
        self.nb_episodes = nb_episodes
        self.nb_runs = nb_runs
        self.verbose = verbose
        self.enable_statistics = enable_statistics
        self.test_episodes_after_each_run = test_episodes_after_each_run
        self.max_test_episodes_after_each_run = max_test_episodes_after_each_run
        self.show_progress = show_progress
        self._stream = stream
        self._clock = clock

        self._phase = EpisodePhase.AWAITING_EPISODE_START
        self._agent_action: Action | None = None
        self._ending_of_episode = False
        self._nb_episode_done = 0
        self._total_time_in_milliseconds = 0.0
        self._statistics: list[float] = []
        self._on_episode_end: list[EpisodeListener] = []

        self.time_step = 0
        self.episode_r = 0.0
        self.episode_z = 0.0

    @classmethod
    def from_config(
        cls,
        agent: RLAgent,
        problem: Problem,
        config: SimulatorConfig,
        stream: TextIO | None = None,
    ) -> "Simulator":
        """Build a simulator from a loaded ``SimulatorConfig``."""
        return cls(
            agent,
            problem,
            config.max_episode_time_steps,
            config.nb_episodes,
            config.nb_runs,
            verbose=config.verbose,
            enable_statistics=config.enable_statistics,
            test_episodes_after_each_run=config.test_episodes_after_each_run,
            max_test_episodes_after_each_run=config.max_test_episodes_after_each_run,
            show_progress=config.show_progress,
            stream=stream,
        )

    @property
    def agent(self) -> RLAgent:
        return self._agent

    @property
    def problem(self) -> Problem:
        return self._problem

    @property
    def max_episode_time_steps(self) -> int:
        return self._max_episode_time_steps

    @property
    def phase(self) -> EpisodePhase:
        return self._phase

    @property
    def pending_action(self) -> Action | None:
        return self._agent_action

    @property
    def nb_episode_done(self) -> int:
        return self._nb_episode_done

    @property
    def statistics(self) -> tuple[float, ...]:
        return tuple(self._statistics)

    def is_beginning_of_episode(self) -> bool:
        return self._phase is EpisodePhase.AWAITING_EPISODE_START

    def is_ending_of_episode(self) -> bool:
        return self._ending_of_episode

    def add_episode_listener(self, listener: EpisodeListener) -> None:
        """Register ``listener``; listeners fire in registration order."""
        self._on_episode_end.append(listener)

    def remove_episode_listener(self, listener: EpisodeListener) -> None:
        self._on_episode_end.remove(listener)

    def average_time_per_step(self) -> float:
        """Mean decision time in milliseconds, ``0.0`` before the first step."""
        if self.time_step <= 0:
            return 0.0
        return self._total_time_in_milliseconds / self.time_step

    def step(self) -> None:
        record = self._problem.tr_step
        if self._phase is EpisodePhase.AWAITING_EPISODE_START:
            self._problem.initialize()
            self.time_step = 0
            self.episode_r = 0.0
            self.episode_z = 0.0
            self._total_time_in_milliseconds = 0.0
            self._ending_of_episode = False
            record.set_forced_end_of_episode(self._ending_of_episode)
            self._agent_action = self._agent.initialize(record)
            self._phase = EpisodePhase.IN_EPISODE
        else:
            self._problem.step(self._agent_action)
            self.time_step += 1
            self.episode_r += record.r_tp1
            self.episode_z += record.z_tp1
            self._ending_of_episode = (
                record.end_of_episode or self.time_step == self._max_episode_time_steps
            )
            record.set_forced_end_of_episode(self._ending_of_episode)
            started = self._clock()
            self._agent_action = self._agent.get_next_action(record)
            self._total_time_in_milliseconds += (self._clock() - started) * 1000.0

        if self._ending_of_episode or self.time_step == self._max_episode_time_steps:
            self._end_episode()

    def run_episodes(self) -> None:
        """Step until the episode budget is met; always steps at least once."""
        while True:
            self.step()
            if self._nb_episode_done >= self.nb_episodes:
                break

    def run(self) -> list[BenchmarkResult]:
        """Execute every configured run and return the benchmarks collected."""
        self._print(f"## ControlLearner={type(self._agent).__name__}")
        benchmarks: list[BenchmarkResult] = []
        runs: Any = range(self.nb_runs)
        if self.show_progress:
            # Import tqdm lazily to keep quiet runs free of progress side effects.
            from tqdm.auto import tqdm

            runs = tqdm(runs, desc="Runs", dynamic_ncols=True, leave=False)

        for run in runs:
            self._print(f"\n@@ Run={run}")
            self._statistics.clear()
            self._nb_episode_done = 0
            self._agent.reset()
            self.run_episodes()
            if self.enable_statistics:
                result = self.benchmark()
                if result is not None:
                    benchmarks.append(result)
            if self.test_episodes_after_each_run:
                self.run_evaluate(self.max_test_episodes_after_each_run)

        if self.show_progress:
            runs.close()
        return benchmarks

    def run_evaluate(self, nb_episodes: int = 20, nb_runs: int = 1) -> None:
        """Run a frozen, non-learning evaluation of the current control."""
        self._print(f"\n@@ Evaluate={int(self.test_episodes_after_each_run)}")
        with self.evaluation_scope(nb_episodes=nb_episodes, nb_runs=nb_runs) as runner:
            runner.run()

    @contextmanager
    def evaluation_scope(
        self,
        nb_episodes: int = 20,
        nb_runs: int = 1,
    ) -> Iterator["Simulator"]:
        """Yield a nested simulator wrapping the control in a ``ControlAgent``.

        The evaluation agent and simulator are released on every exit path.
        """
        runner = Simulator(
            ControlAgent(self._agent.control),
            self._problem,
            self._max_episode_time_steps,
            nb_episodes,
            nb_runs,
            verbose=self.verbose,
            stream=self._stream,
            clock=self._clock,
        )
        try:
            yield runner
        finally:
            runner.close()

    def close(self) -> None:
        """Drop listeners, the pending action and the statistics sample."""
        self._on_episode_end.clear()
        self._statistics.clear()
        self._agent_action = None
        self._phase = EpisodePhase.AWAITING_EPISODE_START

    def benchmark(self) -> BenchmarkResult | None:
        """Report and consume the episode-length sample of the current run.

        An empty sample reports nothing and returns ``None``.
        """
        result = summarize_episode_lengths(self._statistics)
        self._statistics.clear()
        if result is None:
            return None
        self._print("")
        self._print(f"## Average: length={result.mean:g}")
        self._print(f"## (+- 95%) ={result.confidence_95:g}")
        return result

    def compute_value_function(
        self,
        sink: str | Path | TextIO = DEFAULT_VALUE_FUNCTION_PATH,
    ) -> np.ndarray | None:
        """Sample the agent's value function on a grid for 2-D problems.

        The grid is written row by row (first coordinate) to ``sink``. Other
        dimensionalities skip the grid. ``problem.draw()`` is always called.
        """
        grid: np.ndarray | None = None
        if self._problem.dimension() == 2:
            n_points = VALUE_FUNCTION_AXIS.shape[0]
            grid = np.zeros((n_points, n_points), dtype=np.float64)
            x_t = np.zeros(2, dtype=np.float64)
            for row, x in enumerate(VALUE_FUNCTION_AXIS):
                for col, y in enumerate(VALUE_FUNCTION_AXIS):
                    x_t[0] = x
                    x_t[1] = y
                    grid[row, col] = self._agent.compute_value_function(x_t)
            write_value_function(grid, sink)

        self._problem.draw()
        return grid

    def _end_episode(self) -> None:
        average_time_per_step = self.average_time_per_step()
        self._print(
            f"{{{self._nb_episode_done} [{self.time_step} "
            f"({self.episode_r:g},{self.episode_z:g},{average_time_per_step:g})]}} ",
            end="",
        )
        if self.enable_statistics:
            self._statistics.append(float(self.time_step))
        self._nb_episode_done += 1
        self._agent_action = None
        self._phase = EpisodePhase.AWAITING_EPISODE_START

        summary = EpisodeSummary(
            time_steps=self.time_step,
            nb_episode_done=self._nb_episode_done,
            average_time_per_step=average_time_per_step,
            episode_r=self.episode_r,
            episode_z=self.episode_z,
        )
        for listener in tuple(self._on_episode_end):
            listener(summary)

    def _print(self, message: str, end: str = "\n") -> None:
        if not self.verbose:
            return
        print(message, end=end, file=self._stream or sys.stdout, flush=True)
