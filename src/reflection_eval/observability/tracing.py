"""Best-effort trace sinks."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Protocol, TextIO

from reflection_eval.observability.events import TraceRecord


class TraceSink(Protocol):
    def log(self, record: TraceRecord) -> None:
        """Record a trace."""


class JsonlTraceSink:
    """Append trace records to a JSONL file, opened lazily."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._handle: TextIO | None = None

    @property
    def path(self) -> Path:
        return self._path

    def log(self, record: TraceRecord) -> None:
        if self._handle is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = self._path.open("a", encoding="utf-8")
        self._handle.write(json.dumps(record.to_dict(), ensure_ascii=True, default=str) + "\n")
        self._handle.flush()

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None


def log_trace_best_effort(sink: TraceSink | None, record: TraceRecord) -> bool:
    """Send a trace without letting sink failures reach the caller.

    Returns True when the sink accepted the record.
    """
    if sink is None:
        return False
    try:
        sink.log(record)
    except Exception as exc:  # noqa: BLE001 - traces must never abort a run
        print(f"Trace logging failed ({record.name}): {exc}", file=sys.stderr)
        return False
    return True
