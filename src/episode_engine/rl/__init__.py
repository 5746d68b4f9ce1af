"""Simulator, agents and environment interface for episodic RL experiments."""

from episode_engine.rl.agent import Control, ControlAgent, LearnerAgent, RLAgent
from episode_engine.rl.env import Problem
from episode_engine.rl.simulator import EpisodePhase, EpisodeSummary, Simulator
from episode_engine.rl.statistics import BenchmarkResult

__all__ = [
    "BenchmarkResult",
    "Control",
    "ControlAgent",
    "EpisodePhase",
    "EpisodeSummary",
    "LearnerAgent",
    "Problem",
    "RLAgent",
    "Simulator",
]
