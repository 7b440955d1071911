"""CLI entrypoint for synthetic dataset generation."""

from __future__ import annotations

import argparse
from pathlib import Path

from reflection_eval.dataset.generator import DEFAULT_VARIANTS, generate_dataset, write_dataset
from reflection_eval.eval.config import DEFAULT_DATASET_PATH


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate the synthetic reflection dataset.")
    parser.add_argument(
        "--output",
        default=str(DEFAULT_DATASET_PATH),
        help="Where to write the dataset JSON.",
    )
    parser.add_argument(
        "--variants",
        type=int,
        default=DEFAULT_VARIANTS,
        help="Transcript variants per scenario.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        dataset = generate_dataset(variants_per_scenario=args.variants)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    output_path = write_dataset(dataset, Path(args.output))
    print(f"Wrote {len(dataset.samples)} samples to {output_path}")


if __name__ == "__main__":
    main()
