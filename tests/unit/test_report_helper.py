from datetime import datetime, timedelta
from types import SimpleNamespace

from webshop_e2e_kit.utils.ReportHelper import (
    aggregate_test_results,
    build_test_data,
    count_statuses,
    create_report_summary,
    flatten_results,
    generate_browser_report,
    get_env,
    load_environment,
    load_test_data,
)


def test_get_env(monkeypatch):
    monkeypatch.setenv("WEBSHOP_SAMPLE", "  value ")
    monkeypatch.setenv("WEBSHOP_BLANK", "   ")
    monkeypatch.delenv("WEBSHOP_MISSING", raising=False)
    assert get_env("WEBSHOP_SAMPLE") == "value"
    assert get_env("WEBSHOP_BLANK", "fallback") == "fallback"
    assert get_env("WEBSHOP_MISSING", "fallback") == "fallback"


def test_load_environment_applies_env_specific_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APP_ENV", "qa")
    monkeypatch.delenv("WEBSHOP_FROM_FILE", raising=False)
    (tmp_path / ".env.qa").write_text("WEBSHOP_FROM_FILE=qa-value\n", encoding="utf-8")

    assert load_environment() == ".env.qa"
    assert get_env("WEBSHOP_FROM_FILE") == "qa-value"
    monkeypatch.delenv("WEBSHOP_FROM_FILE")


def test_load_test_data_csv(tmp_path):
    path = tmp_path / "logins.csv"
    path.write_text("Email,Password\na@example.com,secret\nb@example.com,\n", encoding="utf-8")

    rows = load_test_data(path)

    assert rows == [
        {"Email": "a@example.com", "Password": "secret"},
        {"Email": "b@example.com", "Password": ""},
    ]


def test_load_test_data_missing_file(tmp_path):
    assert load_test_data(tmp_path / "missing.csv") == []


def make_item(excinfo=None, longrepr=None, doc="Registers a customer.\n\nMore text."):
    def function():
        pass

    function.__doc__ = doc
    item = SimpleNamespace(
        name="test_register",
        nodeid="tests/e2e/test_x.py::test_register",
        function=function,
        _phase_durations={"setup": 0.5, "call": 1.25, "teardown": 0.25},
    )
    if excinfo is not None:
        item._call_excinfo = excinfo
        item._call_longrepr = longrepr
    return item


def test_build_test_data_passed():
    row = build_test_data(make_item(), "firefox")
    assert row["test_status"] == "PASSED"
    assert row["title"] == "Registers a customer."
    assert row["browser"] == "firefox"
    assert row["duration"] == 2.0
    assert row["error_log"] == ""


def test_build_test_data_failed_and_skipped():
    failed = build_test_data(make_item(SimpleNamespace(typename="AssertionError"), "boom"))
    skipped = build_test_data(make_item(SimpleNamespace(typename="Skipped"), "skip"))
    assert failed["test_status"] == "FAILED"
    assert failed["error_log"] == "boom"
    assert skipped["test_status"] == "SKIPPED"


def test_build_test_data_title_falls_back_to_nodeid():
    row = build_test_data(make_item(doc=None))
    assert row["title"] == "tests/e2e/test_x.py::test_register"


def test_aggregate_worker_results():
    config = SimpleNamespace(test_results_summary=[{"test_status": "PASSED"}], _test_results_from_workers=[])
    flatten_results([[{"test_status": "FAILED"}], {"test_status": "SKIPPED"}], config)

    rows = aggregate_test_results(config)

    assert [r["test_status"] for r in rows] == ["PASSED", "FAILED", "SKIPPED"]


def test_count_statuses_treats_error_as_failed():
    rows = [{"test_status": s} for s in ("PASSED", "ERROR", "failed", "SKIPPED", "RERUN")]
    assert count_statuses(rows) == {"PASSED": 1, "FAILED": 2, "SKIPPED": 1}


def test_create_report_summary():
    rows = [{"test_status": "PASSED"}, {"test_status": "PASSED"}, {"test_status": "FAILED"}]
    summary = create_report_summary(rows, datetime.now() - timedelta(seconds=65), "webkit")

    assert summary["total"] == 3
    assert summary["passed"] == 2
    assert summary["failed"] == 1
    assert summary["pass_rate"] == "66.7"
    assert summary["duration"].startswith("0:01:0")
    assert create_report_summary([])["pass_rate"] == "0"


def test_generate_browser_report(tmp_path):
    rows = [{"test_status": "PASSED", "title": "Login", "test_id": "test_login", "duration": 1.0, "error_log": "", "screenshot": ""}]
    summary = create_report_summary(rows, browser="chromium")

    result = generate_browser_report(rows, summary, tmp_path, "chromium")

    report_path = tmp_path / "chromium" / "index.html"
    assert result["report_path"] == str(report_path.absolute())
    assert "test_login" in report_path.read_text(encoding="utf-8")
