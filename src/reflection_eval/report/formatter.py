"""Text, Markdown and CSV reports for experiment result files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import numpy as np
import pandas as pd

from reflection_eval.eval.runner import RESULTS_PREFIX
from reflection_eval.report.merge import COMBINED_PREFIX

BOOTSTRAP_SAMPLES = 1000

_FAMILY_TITLES: dict[str, str] = {
    "summary": "Summary Experiment Results",
    "tasks": "Task Experiment Results (F1)",
}


def latest_results_file(
    directory: Path,
    prefix: str = RESULTS_PREFIX,
    exclude_prefix: str | None = COMBINED_PREFIX,
) -> Path | None:
    """Return the last ``<prefix>*.json`` run file by name, or None.

    Names starting with ``exclude_prefix`` (merged results) are skipped.
    """
    if not directory.is_dir():
        return None
    files = sorted(
        path
        for path in directory.glob(f"{prefix}*.json")
        if path.is_file() and not (exclude_prefix and path.name.startswith(exclude_prefix))
    )
    return files[-1] if files else None


def load_results(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def _family(results: Mapping[str, Any], family: str) -> Mapping[str, Any]:
    section = results.get(family)
    return section if isinstance(section, Mapping) else {}


def _averages(results: Mapping[str, Any], family: str) -> list[tuple[str, float]]:
    averages = _family(results, family).get("averages") or {}
    return [(str(version), float(avg)) for version, avg in averages.items()]


def _raw_scores(results: Mapping[str, Any], family: str, version: str) -> list[float]:
    raw = _family(results, family).get("raw_scores") or {}
    return [float(value) for value in raw.get(version, []) or []]


def format_percent(value: float) -> str:
    return f"{value * 100:.1f}%"


def format_row(label: str, value: Any) -> str:
    return f"{label:<28} {str(value):>6}"


def bootstrap_ci(values: list[float], n_boot: int = BOOTSTRAP_SAMPLES, seed: int = 7) -> tuple[float, float, float]:
    """Mean with a percentile bootstrap 95% interval; NaNs when empty."""
    if not values:
        return float("nan"), float("nan"), float("nan")
    arr = np.array(values, dtype=float)
    rng = np.random.default_rng(seed)
    means = rng.choice(arr, size=(n_boot, len(arr)), replace=True).mean(axis=1)
    return float(arr.mean()), float(np.percentile(means, 2.5)), float(np.percentile(means, 97.5))


def format_text_report(results: Mapping[str, Any]) -> str:
    lines: list[str] = []
    for family, title in _FAMILY_TITLES.items():
        if lines:
            lines.append("")
        lines.extend([title, "-" * len(title)])
        lines.extend(format_row(version, format_percent(avg)) for version, avg in _averages(results, family))
    return "\n".join(lines)


def _markdown_table(results: Mapping[str, Any], family: str) -> str:
    rows = _averages(results, family)
    if not rows:
        return ""
    lines = [
        f"### {_FAMILY_TITLES[family]}",
        "",
        "| Prompt Version | Avg Score | Samples | 95% CI |",
        "| --- | --- | --- | --- |",
    ]
    for version, avg in rows:
        values = _raw_scores(results, family, version)
        if values:
            _, lower, upper = bootstrap_ci(values)
            interval = f"{format_percent(lower)} - {format_percent(upper)}"
        else:
            interval = "n/a"
        lines.append(f"| {version} | {format_percent(avg)} | {len(values)} | {interval} |")
    lines.append("")
    return "\n".join(lines)


def format_markdown_report(results: Mapping[str, Any]) -> str:
    parts = [
        f"# Experiment Results ({results.get('created_at', '')})",
        "",
        f"- Dataset: {results.get('dataset_version', '')} ({results.get('dataset_size', 0)} samples)",
        f"- Model: {results.get('model', '')}",
        f"- Mode: {results.get('mode', '')}",
    ]
    sources = results.get("sources")
    if isinstance(sources, Mapping):
        parts.append(f"- Sources: summary={sources.get('summary')}, tasks={sources.get('tasks')}")
    parts.append("")
    parts.extend(table for table in (_markdown_table(results, family) for family in _FAMILY_TITLES) if table)
    return "\n".join(parts)


def raw_scores_frame(results: Mapping[str, Any]) -> pd.DataFrame:
    """Long-form per-sample scores: one row per family, version and sample."""
    sample_ids: list[str] = list(results.get("sample_ids") or [])
    records: list[dict[str, Any]] = []
    for family in _FAMILY_TITLES:
        raw = _family(results, family).get("raw_scores") or {}
        for version, values in raw.items():
            for index, value in enumerate(values or []):
                records.append(
                    {
                        "family": family,
                        "prompt_version": version,
                        "sample_index": index,
                        "sample_id": sample_ids[index] if index < len(sample_ids) else None,
                        "score": float(value),
                    }
                )
    return pd.DataFrame.from_records(
        records, columns=["family", "prompt_version", "sample_index", "sample_id", "score"]
    )


def plot_averages(frame: pd.DataFrame, output_path: Path) -> Path | None:
    """Bar chart of mean score per prompt version, one panel per family."""
    if frame.empty:
        return None
    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    import seaborn as sns

    sns.set_theme(style="whitegrid")
    grid = sns.catplot(
        data=frame,
        x="prompt_version",
        y="score",
        col="family",
        kind="bar",
        errorbar=("ci", 95),
        sharex=False,
        height=4,
        aspect=1.2,
    )
    grid.set_axis_labels("Prompt version", "Score")
    grid.set(ylim=(0, 1))
    grid.figure.tight_layout()
    grid.figure.savefig(output_path, dpi=200)
    plt.close(grid.figure)
    return output_path


def write_reports(results: Mapping[str, Any], input_path: Path, *, plot: bool = False) -> list[Path]:
    """Write ``.md``, ``.txt`` and ``.csv`` siblings of ``input_path``."""
    base = input_path.with_suffix("")
    markdown_path = base.with_name(f"{base.name}.md")
    text_path = base.with_name(f"{base.name}.txt")
    csv_path = base.with_name(f"{base.name}.csv")

    markdown_path.write_text(format_markdown_report(results), encoding="utf-8")
    text_path.write_text(format_text_report(results), encoding="utf-8")
    frame = raw_scores_frame(results)
    frame.to_csv(csv_path, index=False)
    written = [markdown_path, text_path, csv_path]
    if plot:
        png_path = plot_averages(frame, base.with_name(f"{base.name}.png"))
        if png_path is not None:
            written.append(png_path)
    return written
