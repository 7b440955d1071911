"""Helpers for writing run artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml


def config_snapshot_path(results_path: Path) -> Path:
    return results_path.with_name(f"{results_path.stem}.config.yaml")


def write_config_snapshot(results_path: Path, snapshot: Mapping[str, Any]) -> Path:
    """Write the run configuration as YAML beside its result file."""
    path = config_snapshot_path(results_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(dict(snapshot), sort_keys=False), encoding="utf-8")
    return path
