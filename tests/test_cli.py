"""End-to-end tests for the command line entrypoints."""

import json

import pytest

from reflection_eval.cli import format_results, generate_dataset, merge_results, run_experiments
from reflection_eval.dataset.generator import write_dataset

REPLY = '{"wins": ["Fixed login bug"], "drains": [], "future_focus": [], "tasks": []}'


@pytest.fixture
def dataset_file(tmp_path, tiny_dataset):
    return write_dataset(tiny_dataset, tmp_path / "dataset" / "eval_dataset.json")


def _run_args(tmp_path, dataset_file, *extra):
    return [
        "--dataset",
        str(dataset_file),
        "--results-dir",
        str(tmp_path / "dataset"),
        "--provider-config",
        str(tmp_path / "missing.yaml"),
        "--sleep-ms",
        "0",
        *extra,
    ]


class TestGenerateCli:
    def test_writes_dataset(self, tmp_path, capsys):
        output = tmp_path / "dataset" / "eval_dataset.json"
        generate_dataset.main(["--output", str(output)])
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["samples"]) == 30
        assert "Wrote 30 samples" in capsys.readouterr().out


class TestRunCli:
    def test_missing_api_key(self, tmp_path, dataset_file, monkeypatch):
        monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
        with pytest.raises(SystemExit) as excinfo:
            run_experiments.main(_run_args(tmp_path, dataset_file))
        assert "Missing OPENROUTER_API_KEY" in str(excinfo.value.code)

    def test_missing_dataset(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "k")
        with pytest.raises(SystemExit) as excinfo:
            run_experiments.main(_run_args(tmp_path, tmp_path / "nope.json"))
        assert "Dataset not found" in str(excinfo.value.code)

    def test_full_run(self, tmp_path, dataset_file, monkeypatch, make_stub, capsys):
        monkeypatch.setenv("OPENROUTER_API_KEY", "k")
        stub = make_stub(REPLY)
        monkeypatch.setattr(run_experiments, "OpenRouterClient", lambda config: stub)
        trace_path = tmp_path / "traces.jsonl"

        run_experiments.main(
            _run_args(tmp_path, dataset_file, "--limit", "1", "--model", "test/model", "--trace-file", str(trace_path))
        )

        out = capsys.readouterr().out
        assert "Summary scores:" in out
        assert "v1_simple: 33.3%" in out
        results = sorted((tmp_path / "dataset").glob("experiment_results_*.json"))
        assert len(results) == 1
        payload = json.loads(results[0].read_text(encoding="utf-8"))
        assert payload["model"] == "test/model"
        assert payload["dataset_size"] == 1
        assert payload["mode"] == "both"
        assert payload["summary"]["averages"]["v2_structured"] == pytest.approx(1 / 3)
        assert set(payload["tasks"]["raw_scores"]) == {"v1_simple", "v2_structured", "v3_examples"}
        assert len(stub.calls) == 5
        assert len(trace_path.read_text(encoding="utf-8").splitlines()) == 5
        assert results[0].with_name(f"{results[0].stem}.attempts.jsonl").exists()
        assert results[0].with_name(f"{results[0].stem}.config.yaml").exists()


class TestFormatCli:
    def test_no_results(self, tmp_path):
        with pytest.raises(SystemExit):
            format_results.main(["--dataset-dir", str(tmp_path)])

    def test_latest_file(self, tmp_path, result_payload, capsys):
        (tmp_path / "experiment_results_20260101_000000.json").write_text("{}", encoding="utf-8")
        latest = tmp_path / "experiment_results_20260201_000000.json"
        latest.write_text(json.dumps(result_payload), encoding="utf-8")
        format_results.main(["--dataset-dir", str(tmp_path)])
        assert (tmp_path / "experiment_results_20260201_000000.md").exists()
        assert (tmp_path / "experiment_results_20260201_000000.txt").exists()
        assert not (tmp_path / "experiment_results_20260101_000000.md").exists()
        assert "Wrote" in capsys.readouterr().out

    def test_named_file(self, tmp_path, result_payload):
        (tmp_path / "mine.json").write_text(json.dumps(result_payload), encoding="utf-8")
        format_results.main(["mine.json", "--dataset-dir", str(tmp_path)])
        assert (tmp_path / "mine.md").read_text(encoding="utf-8").startswith("# Experiment Results")


class TestMergeCli:
    def test_missing_files(self, tmp_path):
        with pytest.raises(SystemExit):
            merge_results.main(["--dataset-dir", str(tmp_path)])
        with pytest.raises(SystemExit):
            merge_results.main(["a.json", "b.json", "--dataset-dir", str(tmp_path)])

    def test_merge_defaults_to_latest(self, tmp_path, result_payload):
        (tmp_path / "experiment_results_20260201_000000.json").write_text(
            json.dumps(result_payload), encoding="utf-8"
        )
        merge_results.main(["--dataset-dir", str(tmp_path)])
        combined = list(tmp_path.glob("experiment_results_combined_*.json"))
        assert len(combined) == 1
        merged = json.loads(combined[0].read_text(encoding="utf-8"))
        assert merged["sources"] == {
            "summary": "experiment_results_20260201_000000.json",
            "tasks": "experiment_results_20260201_000000.json",
        }
        assert merged["summary"] == result_payload["summary"]

    def test_newer_run_after_merge_is_picked(self, tmp_path, result_payload):
        (tmp_path / "experiment_results_20260101_000000.json").write_text(
            json.dumps(result_payload), encoding="utf-8"
        )
        merge_results.main(["--dataset-dir", str(tmp_path)])
        newer = dict(result_payload, created_at="2026-03-01T00:00:00Z")
        (tmp_path / "experiment_results_20260301_000000.json").write_text(json.dumps(newer), encoding="utf-8")

        format_results.main(["--dataset-dir", str(tmp_path)])
        assert (tmp_path / "experiment_results_20260301_000000.md").exists()
        assert not list(tmp_path.glob("experiment_results_combined_*.md"))

        merge_results.main(["--dataset-dir", str(tmp_path)])
        sources = [
            json.loads(path.read_text(encoding="utf-8"))["sources"]["summary"]
            for path in tmp_path.glob("experiment_results_combined_*.json")
        ]
        assert "experiment_results_20260301_000000.json" in sources
