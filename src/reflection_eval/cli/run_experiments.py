"""CLI entrypoint for prompt experiments."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from reflection_eval.common.utils import file_timestamp
from reflection_eval.dataset.generator import load_dataset
from reflection_eval.eval.artifacts import write_config_snapshot
from reflection_eval.eval.attempts import AttemptLogger
from reflection_eval.eval.config import (
    DEFAULT_DATASET_DIR,
    DEFAULT_DATASET_PATH,
    DEFAULT_PROVIDER_CONFIG,
    MODES,
    RunSettings,
    load_provider_config,
)
from reflection_eval.eval.runner import (
    build_result_payload,
    format_console_summary,
    results_path_for,
    run_experiment,
    write_results,
)
from reflection_eval.llm.models import ModelRegistry
from reflection_eval.llm.openrouter_client import API_KEY_ENV, OpenRouterClient, OpenRouterConfig
from reflection_eval.observability.tracing import JsonlTraceSink


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run prompt experiments against the dataset.")
    parser.add_argument("--limit", type=int, default=30, help="Maximum number of samples to run.")
    parser.add_argument("--mode", choices=MODES, default="both", help="Prompt families to run.")
    parser.add_argument(
        "--sleep-ms",
        type=int,
        default=250,
        help="Pause after every model call, in milliseconds.",
    )
    parser.add_argument(
        "--dataset",
        default=str(DEFAULT_DATASET_PATH),
        help="Path to the dataset JSON.",
    )
    parser.add_argument(
        "--results-dir",
        default=str(DEFAULT_DATASET_DIR),
        help="Directory for result files.",
    )
    parser.add_argument(
        "--provider-config",
        default=str(DEFAULT_PROVIDER_CONFIG),
        help="Provider config YAML (optional).",
    )
    parser.add_argument(
        "--model",
        default=os.environ.get("EVAL_MODEL"),
        help="Model key from the provider config or a raw model id.",
    )
    parser.add_argument(
        "--trace-file",
        default=os.environ.get("EVAL_TRACE_PATH"),
        help="Optional JSONL file receiving one trace per model call.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        settings = RunSettings(
            dataset_path=Path(args.dataset),
            results_dir=Path(args.results_dir),
            limit=args.limit,
            mode=args.mode,
            sleep_ms=args.sleep_ms,
            model=args.model,
            trace_path=Path(args.trace_file) if args.trace_file else None,
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    provider_cfg = load_provider_config(Path(args.provider_config))
    try:
        client_config = OpenRouterConfig.from_mapping(provider_cfg)
    except ValueError as exc:
        raise SystemExit(f"Missing {API_KEY_ENV} in environment.") from exc
    try:
        model = ModelRegistry(provider_cfg).resolve(settings.model)
    except KeyError as exc:
        raise SystemExit(str(exc)) from exc

    if not settings.dataset_path.exists():
        raise SystemExit(f"Dataset not found: {settings.dataset_path}. Generate it first.")
    dataset = load_dataset(settings.dataset_path)
    samples = dataset.samples[: settings.limit]

    stamp = file_timestamp()
    results_path = results_path_for(settings.results_dir, stamp)
    attempt_logger = AttemptLogger(results_path.with_name(f"{results_path.stem}.attempts.jsonl"))
    trace_sink = JsonlTraceSink(settings.trace_path) if settings.trace_path else None

    print(f"Running {settings.mode} experiments on {len(samples)} samples with {model.model_id}")
    try:
        state = run_experiment(
            samples=samples,
            generator=OpenRouterClient(client_config),
            model_id=model.model_id,
            mode=settings.mode,
            sleep_ms=settings.sleep_ms,
            trace_sink=trace_sink,
            attempt_logger=attempt_logger,
        )
    finally:
        attempt_logger.close()
        if trace_sink is not None:
            trace_sink.close()

    payload = build_result_payload(
        state,
        dataset_version=dataset.version,
        model=model.model_id,
        mode=settings.mode,
    )
    print(format_console_summary(payload))
    if state.parse_failures:
        print(f"Unparseable responses: {state.parse_failures}/{state.calls}")

    try:
        write_results(payload, results_path)
        write_config_snapshot(
            results_path,
            {
                "settings": settings.to_dict(),
                "model": {"key": model.key, "id": model.model_id, "class": model.model_class},
                "provider": {
                    "base_url": client_config.base_url,
                    "timeout_s": client_config.timeout_s,
                    "retries": client_config.retries,
                },
            },
        )
    except OSError as exc:
        raise SystemExit(f"Failed to write results to {results_path}: {exc}") from exc
    print(f"Saved results to {results_path}")


if __name__ == "__main__":
    main()
