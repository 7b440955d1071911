"""Tests for similarity and extraction scoring."""

import pytest

from reflection_eval.common.types import GroundTruth, Task
from reflection_eval.eval.scoring import (
    aggregate,
    normalize_text,
    score_array,
    score_summary,
    score_tasks,
    similarity,
)


class TestNormalize:
    def test_strips_punctuation_and_case(self):
        assert normalize_text("  Fixed the AUTH-redirect bug!! ") == "fixed the auth redirect bug"

    def test_none_is_empty(self):
        assert normalize_text(None) == ""

    def test_non_string_is_empty(self):
        assert normalize_text({"text": "Closed the renewal"}) == ""
        assert normalize_text(["Closed", "renewal"]) == ""


class TestSimilarity:
    def test_identical_text_is_one(self):
        assert similarity("Ship landing page update", "ship landing page update") == 1.0

    def test_empty_side_is_zero(self):
        assert similarity("", "anything") == 0.0
        assert similarity("!!!", "anything") == 0.0
        assert similarity("anything", None) == 0.0

    def test_denominator_is_larger_set_not_union(self):
        # |A & B| = 2, max(|A|, |B|) = 4, |A | B| = 5
        assert similarity("a b c", "b c d e") == pytest.approx(0.5)

    def test_duplicates_collapse(self):
        assert similarity("bug bug bug", "bug") == 1.0

    @pytest.mark.parametrize(
        "a,b",
        [
            ("fix login bug", "fixed login bug"),
            ("Daily standup meeting", "standup"),
            ("x", "y z"),
        ],
    )
    def test_bounds(self, a, b):
        assert 0.0 <= similarity(a, b) <= 1.0


class TestScoreArray:
    def test_empty_expected_is_zero(self):
        assert score_array([], []) == 0.0
        assert score_array(["something"], []) == 0.0
        assert score_array(["something"], None) == 0.0

    def test_case_insensitive_match(self):
        assert score_array(["fix login bug"], ["Fix login bug"]) == 1.0

    def test_partial_recall(self):
        expected = ["Shipped the landing page update", "Fixed the auth redirect bug"]
        assert score_array(["shipped landing page update"], expected) == 0.5

    def test_extra_predictions_not_penalized(self):
        predicted = ["Fix login bug", "Invented item", "Another invented item"]
        assert score_array(predicted, ["Fix login bug"]) == 1.0

    def test_non_list_prediction_matches_nothing(self):
        assert score_array("Fix login bug", ["Fix login bug"]) == 0.0
        assert score_array(None, ["Fix login bug"]) == 0.0

    def test_object_items_match_nothing(self):
        expected = ["Closed the renewal with Redwood"]
        predicted = [{"text": "Closed the renewal with Redwood"}]
        assert similarity(predicted[0], expected[0]) == 0.0
        assert score_array(predicted, expected) == 0.0


class TestScoreTasks:
    def test_partial_match_f1(self):
        expected = [
            {"task_text": "Fix login bug", "category": "creating"},
            {"task_text": "Run demo", "category": "collaborating"},
        ]
        predicted = [{"task_text": "fix login bug", "category": "creating"}]
        scores = score_tasks(predicted, expected)
        assert scores.recall == pytest.approx(0.5)
        assert scores.precision == pytest.approx(1.0)
        assert scores.f1 == pytest.approx(2 / 3)
        assert scores.category_accuracy == pytest.approx(1.0)

    def test_empty_expected_short_circuits(self):
        scores = score_tasks([{"task_text": "x", "category": "creating"}], [])
        assert scores.to_dict() == {"recall": 0, "precision": 0, "f1": 0, "category_accuracy": 0}

    def test_no_predictions(self):
        scores = score_tasks([], [Task(task_text="Fix login bug", category="creating")])
        assert scores.f1 == 0.0
        assert scores.precision == 0.0
        assert scores.category_accuracy == 0.0

    def test_first_match_wins_over_better_category(self):
        expected = [Task(task_text="Fix login bug", category="creating")]
        predicted = [
            {"task_text": "Fix login bug", "category": "organizing"},
            {"task_text": "Fix login bug", "category": "creating"},
        ]
        scores = score_tasks(predicted, expected)
        assert scores.recall == 1.0
        assert scores.precision == 0.5
        assert scores.category_accuracy == 0.0

    def test_malformed_predictions_count_against_precision(self):
        expected = [Task(task_text="Fix login bug", category="creating")]
        predicted = ["Fix login bug", {"task_text": "Fix login bug", "category": "creating"}]
        scores = score_tasks(predicted, expected)
        assert scores.recall == 1.0
        assert scores.precision == 0.5

    def test_non_list_prediction(self):
        scores = score_tasks({"task_text": "Fix login bug"}, [Task("Fix login bug", "creating")])
        assert scores.f1 == 0.0


class TestSummaryAndAggregate:
    def test_aggregate(self):
        assert aggregate([]) == 0.0
        assert aggregate([0.0, 1.0, 0.5]) == pytest.approx(0.5)

    def test_summary_overall_is_mean_of_fields(self):
        truth = GroundTruth(wins=["Fix login bug"], drains=[], future_focus=[])
        scores = score_summary({"wins": ["Fixed login bug"], "drains": [], "future_focus": []}, truth)
        assert scores.wins == 1.0
        assert scores.drains == 0.0
        assert scores.future_focus == 0.0
        assert scores.overall == pytest.approx(1 / 3)

    def test_summary_of_missing_prediction(self):
        truth = GroundTruth(wins=["a"], drains=["b"], future_focus=["c"])
        assert score_summary(None, truth).overall == 0.0
