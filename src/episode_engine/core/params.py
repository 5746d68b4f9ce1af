"""Simulator configuration schema and YAML helpers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class SimulatorConfig:
    """Episode/run budget and reporting switches for one experiment.

    Counts are deliberately not range-checked: zero or negative values give
    degenerate loops rather than errors.
    """

    max_episode_time_steps: int
    nb_episodes: int = -1
    nb_runs: int = -1
    verbose: bool = True
    enable_statistics: bool = False
    test_episodes_after_each_run: bool = False
    max_test_episodes_after_each_run: int = 20
    show_progress: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert config object to a plain dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "SimulatorConfig":
        """Create config object from a plain dict."""
        if "max_episode_time_steps" not in payload:
            raise ValueError("Simulator config requires 'max_episode_time_steps'.")
        metadata = payload.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise ValueError("Simulator config 'metadata' must be a mapping.")
        return cls(
            max_episode_time_steps=int(payload["max_episode_time_steps"]),
            nb_episodes=int(payload.get("nb_episodes", -1)),
            nb_runs=int(payload.get("nb_runs", -1)),
            verbose=bool(payload.get("verbose", True)),
            enable_statistics=bool(payload.get("enable_statistics", False)),
            test_episodes_after_each_run=bool(
                payload.get("test_episodes_after_each_run", False)
            ),
            max_test_episodes_after_each_run=int(
                payload.get("max_test_episodes_after_each_run", 20)
            ),
            show_progress=bool(payload.get("show_progress", False)),
            metadata=dict(metadata),
        )


def save_simulator_config(config: SimulatorConfig, output_path: Path) -> None:
    """Serialize config to YAML."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(yaml.safe_dump(config.to_dict(), sort_keys=False))


def load_simulator_config(path: Path) -> SimulatorConfig:
    """Load config from YAML."""
    if not path.exists():
        raise FileNotFoundError(f"Simulator config not found: {path}")
    payload = yaml.safe_load(path.read_text())
    if not isinstance(payload, dict):
        raise ValueError("Expected a mapping in simulator config YAML.")
    return SimulatorConfig.from_dict(payload)
