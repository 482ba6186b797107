"""Pipeline results model and CLI smoke tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from genesis_trace.cli import main, parse_args
from genesis_trace.exceptions import ResultsFileError
from genesis_trace.pipeline import JobResult, load_results, pipeline_exit_code, status_counts


def _set_env(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GENESIS_TRACE_THEME", "default")
    monkeypatch.setenv("GENESIS_TRACE_LOG_LEVEL", "info")
    monkeypatch.delenv("GENESIS_TRACE_LOG_FILE", raising=False)
    monkeypatch.delenv("GENESIS_TRACE_SLACK_WEBHOOK_URL", raising=False)


def _write_results(tmp_path: Path, payload: Any) -> Path:
    target = tmp_path / "results.json"
    target.write_text(json.dumps(payload), encoding="utf-8")
    return target


_JOBS = [
    {"job": "lint", "status": "success", "duration_ms": 850},
    {"job": "unit-tests", "status": "success", "duration_ms": 12_300, "warnings": 2},
    {"job": "deploy", "status": "skipped"},
]


def test_exit_code_depends_only_on_failed_jobs() -> None:
    passing = [JobResult(job="a", status="success", warnings=5), JobResult(job="b", status="skipped")]
    assert pipeline_exit_code(passing) == 0
    assert pipeline_exit_code([]) == 0
    failing = [*passing, JobResult(job="c", status="failed", error="exit 1")]
    assert pipeline_exit_code(failing) == 1
    assert status_counts(failing) == {"success": 1, "failed": 1, "skipped": 1}


def test_load_results_accepts_array_or_jobs_object(tmp_path: Path) -> None:
    path = _write_results(tmp_path, _JOBS)
    results = load_results(path)
    assert [result.job for result in results] == ["lint", "unit-tests", "deploy"]
    assert results[1].warnings == 2

    path = _write_results(tmp_path, {"run": 7, "jobs": _JOBS[:1]})
    assert load_results(path) == [JobResult(job="lint", status="success", duration_ms=850)]


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps([{"job": "lint", "status": "exploded"}]),
        json.dumps([{"job": "lint", "status": "success", "duration_ms": -1}]),
    ],
)
def test_load_results_rejects_bad_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "results.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ResultsFileError):
        load_results(path)


def test_load_results_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ResultsFileError):
        load_results(tmp_path / "missing.json")


def test_parse_args_pipeline() -> None:
    args = parse_args(["--no-color", "--theme", "ocean", "pipeline", "out/results.json"])
    assert args.command == "pipeline"
    assert args.theme == "ocean"
    assert args.no_color is True
    assert args.results == Path("out/results.json")


def test_cli_pipeline_passes(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_env(monkeypatch, tmp_path)
    path = _write_results(tmp_path, _JOBS)

    assert main(["--no-color", "pipeline", str(path)]) == 0
    out = capsys.readouterr().out
    assert "unit-tests" in out
    assert "12.3s" in out
    assert "Pipeline passed: 2 success, 0 failed, 1 skipped" in out
    assert "\x1b[" not in out


def test_cli_pipeline_fails_on_failed_job(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_env(monkeypatch, tmp_path)
    path = _write_results(
        tmp_path,
        [*_JOBS, {"job": "e2e", "status": "failed", "duration_ms": 61_000, "error": "timeout"}],
    )

    assert main(["--no-color", "pipeline", str(path)]) == 1
    out = capsys.readouterr().out
    assert "timeout" in out
    assert "Pipeline failed: 2 success, 1 failed, 1 skipped" in out


def test_cli_returns_2_for_bad_input(monkeypatch: Any, tmp_path: Path) -> None:
    _set_env(monkeypatch, tmp_path)
    assert main(["pipeline", str(tmp_path / "missing.json")]) == 2
    assert main(["--theme", "no-such-theme", "themes"]) == 2
    monkeypatch.setenv("GENESIS_TRACE_LOG_LEVEL", "loud")
    assert main(["themes"]) == 2


def test_cli_themes_lists_builtins(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_env(monkeypatch, tmp_path)
    assert main(["--no-color", "themes"]) == 0
    out = capsys.readouterr().out
    for name in ("default", "ocean"):
        assert name in out


def test_cli_showcase_renders_every_widget(monkeypatch: Any, tmp_path: Path, capsys: Any) -> None:
    _set_env(monkeypatch, tmp_path)
    assert main(["--no-color", "showcase", "--delay", "0"]) == 0
    out = capsys.readouterr().out
    assert "genesis-trace" in out
    assert "Sample data ready" in out
    assert "Deployment finished" in out
    assert "north" in out
    assert "Synced" in out
