"""I/O helpers for experiment artifacts and value-function grids."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TextIO

import numpy as np
import yaml


def ensure_run_dir(run_dir: Path) -> None:
    """Create run directory and parent paths."""
    run_dir.mkdir(parents=True, exist_ok=True)


def write_json(path: Path, payload: Any) -> None:
    """Write JSON with stable formatting."""
    path.write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def write_yaml(path: Path, payload: Any) -> None:
    """Write YAML with stable formatting."""
    path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")


def format_value_rows(grid: np.ndarray) -> str:
    """Render a 2-D grid as space-separated rows, one per line, no header."""
    if grid.ndim != 2:
        raise ValueError(f"Expected a 2-D grid, got shape {grid.shape}.")
    lines = [" ".join(f"{float(value):g}" for value in row) for row in grid]
    return "".join(line + "\n" for line in lines)


def write_value_function(grid: np.ndarray, sink: str | Path | TextIO) -> None:
    """Write a value-function grid to a path or an open text stream."""
    text = format_value_rows(grid)
    if isinstance(sink, (str, Path)):
        output_path = Path(sink)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
        return
    sink.write(text)
