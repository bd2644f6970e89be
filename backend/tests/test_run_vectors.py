from __future__ import annotations

import json

from klb.vectors import VectorOutcome, run_reference_vectors
from scripts import run_vectors


def test_reference_vectors_all_pass() -> None:
    outcomes = run_reference_vectors()

    assert [outcome.name for outcome in outcomes] == [
        "Basic distribution",
        "Load balancing",
        "Deadline priority",
        "Dependency chain",
        "Overflow",
        "Reschedule idempotence",
    ]
    failures = [outcome for outcome in outcomes if not outcome.passed]
    assert failures == []


def test_script_prints_report_and_exits_cleanly(capsys) -> None:
    exit_code = run_vectors.main([])

    assert exit_code == 0
    report = json.loads(capsys.readouterr().out)
    assert report["passed"] is True
    assert len(report["results"]) == 6


def test_script_reports_failures(monkeypatch, capsys) -> None:
    failing = VectorOutcome("Broken", False, "forced")
    monkeypatch.setattr(run_vectors, "run_reference_vectors", lambda: [failing])

    exit_code = run_vectors.main(["--only-failures"])

    assert exit_code == 1
    report = json.loads(capsys.readouterr().out)
    assert report["results"] == [{"name": "Broken", "passed": False, "details": "forced"}]
