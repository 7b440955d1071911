"""Pytest fixtures for reflection-eval tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from reflection_eval.common.types import Dataset, GroundTruth, Sample, Task


class StubGenerator:
    """Content generator returning canned text and recording prompts."""

    def __init__(self, reply: str | Callable[[str], str]) -> None:
        self._reply = reply
        self.calls: list[dict[str, str]] = []

    def generate(self, *, model: str, prompt: str) -> dict[str, Any]:
        self.calls.append({"model": model, "prompt": prompt})
        text = self._reply(prompt) if callable(self._reply) else self._reply
        return {"text": text, "usage": {"total_tokens": 10}}


@pytest.fixture
def login_sample() -> Sample:
    return Sample(
        id="sample_01",
        role="frontend engineer",
        transcript="Fixed the login bug and ran a demo.",
        ground_truth=GroundTruth(
            wins=["Fix login bug"],
            drains=[],
            future_focus=[],
            tasks=[
                Task(task_text="Fix login bug", category="creating"),
                Task(task_text="Run demo", category="collaborating"),
            ],
        ),
    )


@pytest.fixture
def second_sample() -> Sample:
    return Sample(
        id="sample_02",
        role="sales lead",
        transcript="Closed the Redwood renewal.",
        ground_truth=GroundTruth(
            wins=["Closed the renewal with Redwood"],
            drains=["Chasing late-stage pricing approvals"],
            future_focus=["Update the pipeline forecast"],
            tasks=[Task(task_text="Close Redwood renewal", category="collaborating")],
        ),
    )


@pytest.fixture
def make_stub() -> Callable[..., StubGenerator]:
    return StubGenerator


@pytest.fixture
def result_payload() -> dict[str, Any]:
    return {
        "created_at": "2026-02-01T10:00:00Z",
        "dataset_version": "v1",
        "dataset_size": 2,
        "mode": "both",
        "model": "google/gemini-2.5-flash-lite",
        "sample_ids": ["sample_01", "sample_02"],
        "summary": {
            "averages": {"v1_simple": 0.5, "v2_structured": 0.75},
            "raw_scores": {"v1_simple": [0.25, 0.75], "v2_structured": [0.5, 1.0]},
        },
        "tasks": {
            "averages": {"v1_simple": 0.4, "v2_structured": 0.6, "v3_examples": 0.8},
            "raw_scores": {
                "v1_simple": [0.4, 0.4],
                "v2_structured": [0.6, 0.6],
                "v3_examples": [0.8, 0.8],
            },
        },
    }


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def tiny_dataset(login_sample: Sample, second_sample: Sample) -> Dataset:
    return Dataset(version="v1", created_at="2026-02-01T09:00:00Z", samples=[login_sample, second_sample])
