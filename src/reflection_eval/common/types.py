"""Shared dataclasses for datasets, samples and scores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

Category = Literal["creating", "collaborating", "communicating", "organizing"]
CATEGORIES: tuple[str, ...] = ("creating", "collaborating", "communicating", "organizing")

SUMMARY_FIELDS: tuple[str, ...] = ("wins", "drains", "future_focus")


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


@dataclass(frozen=True)
class Task:
    task_text: str
    category: Category

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Task":
        return cls(task_text=str(raw.get("task_text", "")), category=raw.get("category", ""))

    def to_dict(self) -> dict[str, Any]:
        return {"task_text": self.task_text, "category": self.category}


@dataclass(frozen=True)
class Scenario:
    """Role-based seed facts used to synthesize transcripts."""

    role: str
    wins: tuple[str, ...]
    drains: tuple[str, ...]
    future_focus: tuple[str, ...]
    tasks: tuple[Task, ...]


@dataclass(frozen=True)
class GroundTruth:
    wins: list[str] = field(default_factory=list)
    drains: list[str] = field(default_factory=list)
    future_focus: list[str] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)

    @classmethod
    def from_scenario(cls, scenario: Scenario) -> "GroundTruth":
        return cls(
            wins=list(scenario.wins),
            drains=list(scenario.drains),
            future_focus=list(scenario.future_focus),
            tasks=list(scenario.tasks),
        )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "GroundTruth":
        tasks = raw.get("tasks") or []
        return cls(
            wins=_str_list(raw.get("wins")),
            drains=_str_list(raw.get("drains")),
            future_focus=_str_list(raw.get("future_focus")),
            tasks=[Task.from_mapping(task) for task in tasks if isinstance(task, Mapping)],
        )

    def field_items(self, name: str) -> list[str]:
        if name not in SUMMARY_FIELDS:
            raise KeyError(f"Unknown summary field: {name}")
        return list(getattr(self, name))

    def to_dict(self) -> dict[str, Any]:
        return {
            "wins": list(self.wins),
            "drains": list(self.drains),
            "future_focus": list(self.future_focus),
            "tasks": [task.to_dict() for task in self.tasks],
        }


@dataclass(frozen=True)
class Sample:
    """One synthetic transcript plus its structured ground truth."""

    id: str
    role: str
    transcript: str
    ground_truth: GroundTruth

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Sample":
        return cls(
            id=str(raw.get("id", "")),
            role=str(raw.get("role", "")),
            transcript=str(raw.get("transcript", "")),
            ground_truth=GroundTruth.from_mapping(raw.get("ground_truth", {}) or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role,
            "transcript": self.transcript,
            "ground_truth": self.ground_truth.to_dict(),
        }


@dataclass(frozen=True)
class Dataset:
    version: str
    created_at: str
    samples: list[Sample] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Dataset":
        return cls(
            version=str(raw.get("version", "")),
            created_at=str(raw.get("created_at", "")),
            samples=[Sample.from_mapping(item) for item in raw.get("samples", []) or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "created_at": self.created_at,
            "samples": [sample.to_dict() for sample in self.samples],
        }


@dataclass(frozen=True)
class TaskScores:
    recall: float = 0.0
    precision: float = 0.0
    f1: float = 0.0
    category_accuracy: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "recall": self.recall,
            "precision": self.precision,
            "f1": self.f1,
            "category_accuracy": self.category_accuracy,
        }


@dataclass(frozen=True)
class SummaryScores:
    wins: float = 0.0
    drains: float = 0.0
    future_focus: float = 0.0
    overall: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "wins": self.wins,
            "drains": self.drains,
            "future_focus": self.future_focus,
            "overall": self.overall,
        }
