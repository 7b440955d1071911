"""Configuration loading for experiment runs."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

_ENV_PATTERN = re.compile(r"\$\{([A-Z0-9_]+)\}")

MODES: tuple[str, ...] = ("summary", "tasks", "both")
DEFAULT_DATASET_DIR = Path("dataset")
DEFAULT_DATASET_PATH = DEFAULT_DATASET_DIR / "eval_dataset.json"
DEFAULT_PROVIDER_CONFIG = Path("configs/providers/openrouter.yaml")


def expand_env(value: Any) -> Any:
    """Substitute ``${VAR}`` references with environment values, recursively."""
    if isinstance(value, str):
        def replace(match: re.Match[str]) -> str:
            return os.environ.get(match.group(1), match.group(0))

        return _ENV_PATTERN.sub(replace, value)
    if isinstance(value, list):
        return [expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: expand_env(val) for key, val in value.items()}
    return value


def load_yaml(path: Path) -> Mapping[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return expand_env(raw)


def load_provider_config(path: Path | None) -> Mapping[str, Any]:
    """Load provider config; a missing file means environment-only settings."""
    if path is None or not path.exists():
        return {}
    return load_yaml(path)


@dataclass(frozen=True)
class RunSettings:
    dataset_path: Path = DEFAULT_DATASET_PATH
    results_dir: Path = DEFAULT_DATASET_DIR
    limit: int = 30
    mode: str = "both"
    sleep_ms: int = 250
    model: str | None = None
    trace_path: Path | None = None

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"Unsupported mode: {self.mode} (expected one of {', '.join(MODES)})")
        if self.limit < 0:
            raise ValueError("limit must be non-negative")
        if self.sleep_ms < 0:
            raise ValueError("sleep_ms must be non-negative")

    def to_dict(self) -> dict[str, Any]:
        return {
            "dataset_path": str(self.dataset_path),
            "results_dir": str(self.results_dir),
            "limit": self.limit,
            "mode": self.mode,
            "sleep_ms": self.sleep_ms,
            "model": self.model,
            "trace_path": str(self.trace_path) if self.trace_path else None,
        }
