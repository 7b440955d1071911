"""Combine the summary section of one run with the task section of another."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Mapping

from reflection_eval.common.utils import file_timestamp, utc_timestamp

COMBINED_PREFIX = "experiment_results_combined_"


def _first_present(key: str, *sources: Mapping[str, Any]) -> Any:
    for source in sources:
        value = source.get(key)
        if value:
            return value
    return None


def merge_results(
    summary_data: Mapping[str, Any],
    tasks_data: Mapping[str, Any],
    *,
    summary_name: str,
    tasks_name: str,
    created_at: str | None = None,
) -> dict[str, Any]:
    """Build a ``combined`` result; sections are copied unchanged."""
    merged: dict[str, Any] = {
        "created_at": created_at or utc_timestamp(),
        "dataset_version": _first_present("dataset_version", summary_data, tasks_data),
        "dataset_size": _first_present("dataset_size", summary_data, tasks_data),
        "model": _first_present("model", summary_data, tasks_data),
        "mode": "combined",
        "summary": copy.deepcopy(summary_data.get("summary")),
        "tasks": copy.deepcopy(tasks_data.get("tasks")),
        "sources": {"summary": summary_name, "tasks": tasks_name},
    }
    if summary_data.get("sample_ids") and summary_data.get("sample_ids") == tasks_data.get("sample_ids"):
        merged["sample_ids"] = list(summary_data["sample_ids"])
    return merged


def write_merged(merged: Mapping[str, Any], directory: Path, stamp: str | None = None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{COMBINED_PREFIX}{stamp or file_timestamp()}.json"
    path.write_text(json.dumps(merged, indent=2), encoding="utf-8")
    return path
