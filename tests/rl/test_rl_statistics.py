"""Run benchmark statistics tests."""

from __future__ import annotations

import io
import math

import pytest

from episode_engine.rl.agent import LearnerAgent
from episode_engine.rl.simulator import Simulator
from episode_engine.rl.statistics import summarize_episode_lengths


def test_reference_sample_uses_single_division_after_sqrt() -> None:
    result = summarize_episode_lengths([10, 20, 30])

    assert result is not None
    assert result.n_samples == 3
    assert result.mean == pytest.approx(20.0)
    assert result.sigma_bar == pytest.approx(math.sqrt(200.0) / 3.0)
    assert result.sigma_bar == pytest.approx(4.714045207910317)
    assert result.standard_error == pytest.approx(2.721655269759087)
    assert result.confidence_95 == pytest.approx(5.443310539518174)
    # Neither population (8.165) nor sample (10.0) standard deviation.
    assert result.sigma_bar != pytest.approx(10.0)
    assert result.sigma_bar != pytest.approx(math.sqrt(200.0 / 3.0))


def test_constant_sample_has_zero_dispersion() -> None:
    result = summarize_episode_lengths([5000.0] * 4)

    assert result.mean == 5000.0
    assert result.sigma_bar == 0.0
    assert result.confidence_95 == 0.0


def test_empty_sample_returns_none() -> None:
    assert summarize_episode_lengths([]) is None


def test_benchmark_prints_and_consumes_sample(make_problem, make_control) -> None:
    problem = make_problem()
    stream = io.StringIO()
    sim = Simulator(
        LearnerAgent(make_control(problem.discrete_actions)),
        problem,
        10,
        enable_statistics=True,
        stream=stream,
    )
    for length in (10, 20, 30):
        sim._statistics.append(float(length))

    result = sim.benchmark()

    assert result.to_dict()["mean"] == pytest.approx(20.0)
    assert stream.getvalue() == "\n## Average: length=20\n## (+- 95%) =5.44331\n"
    assert sim.statistics == ()
    assert sim.benchmark() is None
