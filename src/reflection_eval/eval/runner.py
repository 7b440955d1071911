"""Experiment runner: prompt versions x samples against one model."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from reflection_eval.common.types import Sample
from reflection_eval.common.utils import file_timestamp, hash_prompt_text, utc_timestamp
from reflection_eval.eval.attempts import AttemptLogger, build_attempt_record
from reflection_eval.eval.config import MODES
from reflection_eval.eval.parsing import extract_json
from reflection_eval.eval.scoring import aggregate, score_summary, score_tasks
from reflection_eval.llm.base import ContentGenerator
from reflection_eval.observability.events import LLMCallEvent, TraceRecord
from reflection_eval.observability.tracing import TraceSink, log_trace_best_effort
from reflection_eval.prompts.library import SUMMARY, TASKS, prompts_for

RESULTS_PREFIX = "experiment_results_"

_TRACE_NAMES: dict[str, str] = {SUMMARY: "summary_experiment", TASKS: "task_experiment"}

_FAMILIES_BY_MODE: dict[str, tuple[str, ...]] = {
    "summary": (SUMMARY,),
    "tasks": (TASKS,),
    "both": (SUMMARY, TASKS),
}


def families_for_mode(mode: str) -> tuple[str, ...]:
    if mode not in _FAMILIES_BY_MODE:
        raise ValueError(f"Unsupported mode: {mode} (expected one of {', '.join(MODES)})")
    return _FAMILIES_BY_MODE[mode]


@dataclass
class ExperimentState:
    """Score series accumulated over a run, keyed by family then prompt version.

    Every series is appended in sample order, so index ``i`` of any series
    belongs to ``sample_ids[i]``.
    """

    sample_ids: list[str] = field(default_factory=list)
    scores: dict[str, dict[str, list[float]]] = field(
        default_factory=lambda: {SUMMARY: {}, TASKS: {}}
    )
    calls: int = 0
    parse_failures: int = 0

    def start_sample(self, sample_id: str) -> None:
        self.sample_ids.append(sample_id)

    def record(self, family: str, version: str, score: float) -> None:
        self.scores.setdefault(family, {}).setdefault(version, []).append(score)

    def raw_scores(self, family: str) -> dict[str, list[float]]:
        return {version: list(values) for version, values in self.scores.get(family, {}).items()}

    def averages(self, family: str) -> dict[str, float]:
        return {version: aggregate(values) for version, values in self.scores.get(family, {}).items()}


def _score_prediction(
    family: str, parsed: dict[str, Any] | None, sample: Sample
) -> tuple[Any, dict[str, float], float]:
    if family == SUMMARY:
        summary_scores = score_summary(parsed, sample.ground_truth)
        return parsed, summary_scores.to_dict(), summary_scores.overall
    predicted_tasks = (parsed or {}).get("tasks") or []
    task_scores = score_tasks(predicted_tasks, sample.ground_truth.tasks)
    return predicted_tasks, task_scores.to_dict(), task_scores.f1


def run_experiment(
    *,
    samples: Iterable[Sample],
    generator: ContentGenerator,
    model_id: str,
    mode: str = "both",
    sleep_ms: int = 250,
    trace_sink: TraceSink | None = None,
    attempt_logger: AttemptLogger | None = None,
    sleep: Callable[[float], None] = time.sleep,
    state: ExperimentState | None = None,
) -> ExperimentState:
    """Run every prompt version of every enabled family over ``samples``.

    Calls are strictly sequential with a fixed ``sleep_ms`` pause after
    each one. Unparseable output scores zero; exceptions from the
    generator propagate and end the run.
    """
    families = families_for_mode(mode)
    state = state if state is not None else ExperimentState()

    for sample in samples:
        state.start_sample(sample.id)
        for family in families:
            for version, build in prompts_for(family).items():
                prompt = build(sample.transcript)
                started = time.monotonic()
                response = generator.generate(model=model_id, prompt=prompt)
                latency_ms = (time.monotonic() - started) * 1000.0
                raw_text = str(response.get("text") or "")
                state.calls += 1

                parsed = extract_json(raw_text)
                if parsed is None:
                    state.parse_failures += 1
                prediction, detail, score = _score_prediction(family, parsed, sample)
                state.record(family, version, score)

                if attempt_logger is not None:
                    event = LLMCallEvent(
                        event_type="llm_call",
                        sample_id=sample.id,
                        family=family,
                        prompt_version=version,
                        model_id=model_id,
                        prompt_hash=hash_prompt_text(prompt),
                        latency_ms=latency_ms,
                        usage=response.get("usage", {}) or {},
                    )
                    attempt_logger.write_attempt(
                        build_attempt_record(
                            event=event,
                            raw_text=raw_text,
                            prediction=parsed,
                            scores=detail,
                            score=score,
                        )
                    )

                log_trace_best_effort(
                    trace_sink,
                    TraceRecord(
                        name=_TRACE_NAMES[family],
                        input={
                            "sample_id": sample.id,
                            "prompt_version": version,
                            "transcript": sample.transcript,
                        },
                        output={"prediction": prediction, "scores": detail},
                        metadata={"model": model_id, "experiment": family},
                    ),
                )
                sleep(sleep_ms / 1000.0)
    return state


def build_result_payload(
    state: ExperimentState,
    *,
    dataset_version: str,
    model: str,
    mode: str,
    created_at: str | None = None,
) -> dict[str, Any]:
    return {
        "created_at": created_at or utc_timestamp(),
        "dataset_version": dataset_version,
        "dataset_size": len(state.sample_ids),
        "mode": mode,
        "model": model,
        "sample_ids": list(state.sample_ids),
        "summary": {
            "averages": state.averages(SUMMARY),
            "raw_scores": state.raw_scores(SUMMARY),
        },
        "tasks": {
            "averages": state.averages(TASKS),
            "raw_scores": state.raw_scores(TASKS),
        },
    }


def results_path_for(results_dir: Path, stamp: str | None = None) -> Path:
    return results_dir / f"{RESULTS_PREFIX}{stamp or file_timestamp()}.json"


def write_results(payload: Mapping[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def _percent(value: float) -> str:
    return f"{value * 100:.1f}%"


def format_console_summary(payload: Mapping[str, Any]) -> str:
    lines = ["Summary scores:"]
    for version, avg in (payload.get("summary", {}).get("averages") or {}).items():
        lines.append(f"  {version}: {_percent(avg)}")
    lines.append("Task scores (F1):")
    for version, avg in (payload.get("tasks", {}).get("averages") or {}).items():
        lines.append(f"  {version}: {_percent(avg)}")
    return "\n".join(lines)
