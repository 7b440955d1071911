"""Event schema for trace sinks and attempt logs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class LLMCallEvent:
    event_type: str
    sample_id: str
    family: str
    prompt_version: str
    model_id: str
    prompt_hash: str
    latency_ms: float | None = None
    usage: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_type": self.event_type,
            "sample_id": self.sample_id,
            "family": self.family,
            "prompt_version": self.prompt_version,
            "model_id": self.model_id,
            "prompt_hash": self.prompt_hash,
            "latency_ms": self.latency_ms,
            "usage": dict(self.usage),
        }


@dataclass(frozen=True)
class TraceRecord:
    """One experiment trace: what went in, what came out, and how it was run."""

    name: str
    input: Mapping[str, Any]
    output: Mapping[str, Any]
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "input": dict(self.input),
            "output": dict(self.output),
            "metadata": dict(self.metadata),
        }
