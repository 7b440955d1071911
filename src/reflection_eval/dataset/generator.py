"""Synthetic reflection dataset generation.

Transcripts are built by interpolating scenario facts into sentence
fragments picked by variant index, so repeated runs produce identical
text. Ground truth is always the scenario's structured facts, never
re-derived from the transcript.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from reflection_eval.common.types import Dataset, GroundTruth, Sample, Scenario
from reflection_eval.common.utils import utc_timestamp
from reflection_eval.dataset.scenarios import SCENARIOS

DATASET_VERSION = "v1"
DEFAULT_VARIANTS = 2

FILLERS = (
    "It felt like a steady day overall.",
    "The morning was a blur but the afternoon clicked.",
    "I was juggling a few things at once.",
    "I had to switch gears more than I wanted to.",
    "It was productive but a bit draining.",
)

OPENERS = (
    "So, quick recap of my day.",
    "Alright, here's how today went.",
    "Okay, let me think this through.",
    "Short version of today.",
    "If I zoom out on the day.",
)

MIDDLES = (
    "I kept bouncing between tasks.",
    "There were a few interruptions.",
    "I had to pause and circle back a couple times.",
    "Some things took longer than expected.",
    "I tried to keep momentum where I could.",
)

HUMAN_TOUCHES = (
    "Honestly, that took more energy than I expected.",
    "It was satisfying but also a little exhausting.",
    "I felt like I was in the weeds for a bit.",
    "I wish I had a longer uninterrupted block.",
    "Overall it felt solid, just busy.",
)

CLOSERS = (
    "Tomorrow I want to start fresh on that focus item.",
    "I need to make sure I follow through first thing tomorrow.",
    "That’s the main thing I want to tackle next.",
    "I’m hoping to carve out time for that tomorrow.",
    "That’s the big item for the next session.",
)


def _pick(pool: Sequence[str], index: int) -> str:
    return pool[index % len(pool)]


def make_transcript(scenario: Scenario, variant: int) -> str:
    """Render the six-sentence transcript for one scenario variant."""
    filler = _pick(FILLERS, variant)
    opener = _pick(OPENERS, variant)
    middle = _pick(MIDDLES, variant + 2)
    human_touch = _pick(HUMAN_TOUCHES, variant + 3)
    closer = _pick(CLOSERS, variant)

    wins = " and ".join(scenario.wins)
    drains = " and ".join(scenario.drains)
    focus = " and ".join(scenario.future_focus)
    task_mentions = ", ".join(task.task_text for task in scenario.tasks[:3])
    extra_task = scenario.tasks[-1].task_text if scenario.tasks else ""

    sentences = [
        f"{opener} Today as a {scenario.role}, {filler.lower()}",
        f"Big wins were {wins.lower()}, which was great.",
        f"I also spent time on {task_mentions.lower()}. {middle.lower()}",
        f"One more thing I handled was {extra_task.lower()}.",
        f"The main drain was {drains.lower()}. {human_touch.lower()}",
        f"Next up, I need to {focus.lower()}. {closer}",
    ]
    return " ".join(sentences)


def generate_dataset(
    scenarios: Sequence[Scenario] = SCENARIOS,
    *,
    variants_per_scenario: int = DEFAULT_VARIANTS,
    version: str = DATASET_VERSION,
    created_at: str | None = None,
) -> Dataset:
    """Build a dataset with ``len(scenarios) * variants_per_scenario`` samples.

    Sample ids run sequentially across the whole corpus (``sample_01``,
    ``sample_02``, ...), not per scenario.
    """
    if variants_per_scenario < 1:
        raise ValueError("variants_per_scenario must be at least 1")
    samples: list[Sample] = []
    index = 1
    for scenario in scenarios:
        for variant in range(variants_per_scenario):
            samples.append(
                Sample(
                    id=f"sample_{index:02d}",
                    role=scenario.role,
                    transcript=make_transcript(scenario, variant),
                    ground_truth=GroundTruth.from_scenario(scenario),
                )
            )
            index += 1
    return Dataset(version=version, created_at=created_at or utc_timestamp(), samples=samples)


def write_dataset(dataset: Dataset, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(dataset.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def load_dataset(path: Path) -> Dataset:
    raw = json.loads(path.read_text(encoding="utf-8"))
    return Dataset.from_mapping(raw)
