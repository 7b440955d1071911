"""Scoring for summary fields and extracted tasks.

Similarity is a token-set overlap divided by the size of the larger set
(not the union), so two phrasings that share most words of the longer
one still clear the match threshold. Summary fields are scored recall
only; tasks get precision, recall, F1 and category accuracy over the
matched pairs.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Sequence

from reflection_eval.common.types import SUMMARY_FIELDS, GroundTruth, SummaryScores, Task, TaskScores

MATCH_THRESHOLD = 0.6

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Any) -> str:
    """Lower-case, replace punctuation with spaces, collapse whitespace.

    Anything that is not a string normalizes to ``""`` and matches nothing.
    """
    value = text if isinstance(text, str) else ""
    value = _NON_ALNUM.sub(" ", value.lower())
    return _WHITESPACE.sub(" ", value).strip()


def _tokens(text: Any) -> set[str]:
    return set(normalize_text(text).split())


def similarity(a: Any, b: Any) -> float:
    """``|A & B| / max(|A|, |B|)`` over normalized token sets."""
    a_tokens = _tokens(a)
    b_tokens = _tokens(b)
    if not a_tokens or not b_tokens:
        return 0.0
    return len(a_tokens & b_tokens) / max(len(a_tokens), len(b_tokens))


def score_array(predicted: Any, expected: Any) -> float:
    """Fraction of expected items matched by at least one predicted item."""
    if not isinstance(expected, (list, tuple)) or not expected:
        return 0.0
    candidates = list(predicted) if isinstance(predicted, (list, tuple)) else []
    hits = sum(
        1
        for item in expected
        if any(similarity(pred, item) >= MATCH_THRESHOLD for pred in candidates)
    )
    return hits / len(expected)


def _task_field(task: Any, name: str) -> Any:
    if isinstance(task, Task):
        return getattr(task, name)
    if isinstance(task, Mapping):
        return task.get(name)
    return None


def score_tasks(predicted_tasks: Any, expected_tasks: Any) -> TaskScores:
    """Match expected tasks to predicted ones and compute P/R/F1.

    Each expected task takes the first predicted task above the threshold;
    the same predicted task may satisfy several expected ones.
    """
    expected: Sequence[Any] = expected_tasks if isinstance(expected_tasks, (list, tuple)) else []
    predicted: Sequence[Any] = predicted_tasks if isinstance(predicted_tasks, (list, tuple)) else []
    if not expected:
        return TaskScores()

    matched = 0
    correct_category = 0
    for expected_task in expected:
        expected_text = _task_field(expected_task, "task_text")
        match = next(
            (
                pred
                for pred in predicted
                if similarity(_task_field(pred, "task_text"), expected_text) >= MATCH_THRESHOLD
            ),
            None,
        )
        if match is None:
            continue
        matched += 1
        if _task_field(match, "category") == _task_field(expected_task, "category"):
            correct_category += 1

    recall = matched / len(expected)
    precision = matched / len(predicted) if predicted else 0.0
    f1 = 0.0 if precision + recall == 0 else 2 * precision * recall / (precision + recall)
    category_accuracy = correct_category / matched if matched else 0.0
    return TaskScores(recall=recall, precision=precision, f1=f1, category_accuracy=category_accuracy)


def aggregate(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def score_summary(prediction: Mapping[str, Any] | None, ground_truth: GroundTruth) -> SummaryScores:
    """Score wins, drains and future focus; ``overall`` is their plain mean."""
    prediction = prediction or {}
    fields = {
        name: score_array(prediction.get(name), ground_truth.field_items(name))
        for name in SUMMARY_FIELDS
    }
    return SummaryScores(overall=aggregate(fields.values()), **fields)
