"""Per-call attempt records for experiment runs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, TextIO

from reflection_eval.common.utils import utc_timestamp
from reflection_eval.observability.events import LLMCallEvent

SCHEMA_VERSION = "attempt.v1"


def build_attempt_record(
    *,
    event: LLMCallEvent,
    raw_text: str,
    prediction: Any,
    scores: Mapping[str, Any],
    score: float,
    schema_version: str = SCHEMA_VERSION,
) -> dict[str, Any]:
    return {
        "schema_version": schema_version,
        "timestamp_utc": utc_timestamp(),
        **event.to_dict(),
        "raw_text": raw_text,
        "prediction": prediction,
        "parse_error": prediction is None,
        "scores": dict(scores),
        "score": score,
    }


class AttemptLogger:
    """Append attempt records to a JSONL file."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._handle: TextIO | None = None

    @property
    def path(self) -> Path:
        return self._path

    def write_attempt(self, record: Mapping[str, Any]) -> None:
        if self._handle is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = self._path.open("a", encoding="utf-8")
        self._handle.write(json.dumps(record, ensure_ascii=True) + "\n")

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
