"""Run swing-pendulum experiments and persist run artifacts."""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

from episode_engine.controls.random_control import RandomControl
from episode_engine.core.params import SimulatorConfig, load_simulator_config
from episode_engine.problems.swing_pendulum import SwingPendulum
from episode_engine.rl.train import train_agent
from episode_engine.utils.io import ensure_run_dir, write_json, write_yaml


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the swing-pendulum experiment.")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("configs/sim/pendulum.yaml"),
        help="Path to simulator config YAML.",
    )
    parser.add_argument(
        "--run-dir",
        type=Path,
        default=None,
        help="Optional explicit output run directory.",
    )
    parser.add_argument("--tag", default="manual", help="Tag used in default run directory.")
    parser.add_argument("--max-steps", type=int, default=None)
    parser.add_argument("--episodes", type=int, default=None)
    parser.add_argument("--runs", type=int, default=None)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument(
        "--random-start",
        action="store_true",
        help="Start each episode from a uniformly random angle.",
    )
    parser.add_argument(
        "--evaluate",
        action="store_true",
        help="Run evaluation episodes after each run.",
    )
    parser.add_argument("--quiet", action="store_true", help="Disable console progress lines.")
    args = parser.parse_args()

    config = _resolve_config(args)
    problem = SwingPendulum(random=args.random_start, seed=args.seed)
    control = RandomControl(problem.discrete_actions, seed=args.seed)

    run_dir = args.run_dir or _default_run_dir(tag=args.tag)
    ensure_run_dir(run_dir)

    result = train_agent(
        control,
        problem,
        config,
        value_function_path=run_dir / "value_function.txt",
    )
    # Terminates the last progress line.
    print()

    write_yaml(
        run_dir / "config_resolved.yaml",
        {
            "created_at_utc": datetime.now(timezone.utc).isoformat(),
            "config_path": str(args.config),
            "seed": args.seed,
            "random_start": args.random_start,
            "simulator": config.to_dict(),
        },
    )
    result.history.to_csv(run_dir / "episodes.csv", index=False)
    write_json(
        run_dir / "run_summary.json",
        {
            "n_episodes": int(len(result.history)),
            "mean_episode_r": (
                float(result.history["episode_r"].mean()) if len(result.history) else None
            ),
            "benchmarks": [benchmark.to_dict() for benchmark in result.benchmarks],
        },
    )

    print(f"Run directory: {run_dir}")
    print(f"Episodes: {len(result.history)}")
    return 0


def _resolve_config(args: argparse.Namespace) -> SimulatorConfig:
    if args.config.exists():
        config = load_simulator_config(args.config)
    else:
        config = SimulatorConfig(max_episode_time_steps=5000, nb_episodes=1, nb_runs=50)
    overrides: dict[str, object] = {}
    if args.max_steps is not None:
        overrides["max_episode_time_steps"] = args.max_steps
    if args.episodes is not None:
        overrides["nb_episodes"] = args.episodes
    if args.runs is not None:
        overrides["nb_runs"] = args.runs
    if args.evaluate:
        overrides["test_episodes_after_each_run"] = True
    if args.quiet:
        overrides["verbose"] = False
    return replace(config, **overrides)


def _default_run_dir(tag: str) -> Path:
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    safe_tag = "".join(ch if ch.isalnum() or ch in {"-", "_"} else "_" for ch in tag)
    return Path("runs") / "pendulum" / f"{timestamp}_{safe_tag}"


if __name__ == "__main__":
    raise SystemExit(main())
