"""CLI entrypoint for rendering experiment result reports."""

from __future__ import annotations

import argparse
from pathlib import Path

from reflection_eval.eval.config import DEFAULT_DATASET_DIR
from reflection_eval.report.formatter import latest_results_file, load_results, write_reports


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Format experiment results as Markdown, text and CSV.")
    parser.add_argument(
        "results_file",
        nargs="?",
        default=None,
        help="Result file name inside the dataset directory (default: newest).",
    )
    parser.add_argument(
        "--dataset-dir",
        default=str(DEFAULT_DATASET_DIR),
        help="Directory holding result files.",
    )
    parser.add_argument("--plot", action="store_true", help="Also render a PNG bar chart.")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    dataset_dir = Path(args.dataset_dir)
    input_path = dataset_dir / args.results_file if args.results_file else latest_results_file(dataset_dir)
    if input_path is None or not input_path.exists():
        raise SystemExit("No experiment results found. Run experiments first.")

    results = load_results(input_path)
    for path in write_reports(results, input_path, plot=args.plot):
        print(f"Wrote {path}")


if __name__ == "__main__":
    main()
