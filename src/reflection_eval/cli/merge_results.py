"""CLI entrypoint for merging summary and task results from two runs."""

from __future__ import annotations

import argparse
from pathlib import Path

from reflection_eval.eval.config import DEFAULT_DATASET_DIR
from reflection_eval.report.formatter import latest_results_file, load_results
from reflection_eval.report.merge import merge_results, write_merged


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Merge experiment results into a combined report.")
    parser.add_argument("summary_file", nargs="?", default=None, help="Result file supplying summary scores.")
    parser.add_argument("tasks_file", nargs="?", default=None, help="Result file supplying task scores.")
    parser.add_argument(
        "--dataset-dir",
        default=str(DEFAULT_DATASET_DIR),
        help="Directory holding result files.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    dataset_dir = Path(args.dataset_dir)
    latest = latest_results_file(dataset_dir)
    summary_name = args.summary_file or (latest.name if latest else None)
    tasks_name = args.tasks_file or summary_name
    if not summary_name or not tasks_name:
        raise SystemExit("Missing experiment results files. Run experiments first.")

    summary_path = dataset_dir / summary_name
    tasks_path = dataset_dir / tasks_name
    if not summary_path.exists() or not tasks_path.exists():
        raise SystemExit("One or more result files not found.")

    merged = merge_results(
        load_results(summary_path),
        load_results(tasks_path),
        summary_name=summary_name,
        tasks_name=tasks_name,
    )
    print(f"Wrote {write_merged(merged, dataset_dir)}")


if __name__ == "__main__":
    main()
