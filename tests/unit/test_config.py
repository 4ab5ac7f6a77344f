from pathlib import Path

import pytest

from webshop_e2e_kit.browsers import browser_icon, display_name
from webshop_e2e_kit.config import DEFAULT_BROWSERS, ReportConfig, parse_browsers


def test_candidate_paths_order(tmp_path):
    config = ReportConfig(report_dir=tmp_path / "reports", downloaded_dir=tmp_path / "dl")
    assert config.candidate_paths("firefox") == [
        tmp_path / "dl" / "json-report-firefox" / "cucumber-report.json",
        tmp_path / "dl" / "firefox-json-report" / "cucumber-report.json",
        tmp_path / "reports" / "firefox" / "cucumber-report.json",
    ]


def test_detail_link_per_layout(tmp_path):
    local = ReportConfig(report_dir=tmp_path, downloaded_dir=tmp_path)
    ci = local.with_overrides(layout="ci")
    assert local.detail_link("webkit") == "webkit/index.html"
    assert ci.detail_link("webkit") == "browser-report-webkit/index.html"


def test_unknown_layout_rejected(tmp_path):
    with pytest.raises(ValueError):
        ReportConfig(report_dir=tmp_path, downloaded_dir=tmp_path, layout="nested")


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("REPORT_DIR", "out")
    monkeypatch.setenv("BROWSERS", "Firefox, webkit,firefox")
    monkeypatch.setenv("REPORT_LAYOUT", "CI")
    monkeypatch.delenv("DOWNLOADED_REPORTS_DIR", raising=False)

    config = ReportConfig.from_env(root=tmp_path)

    assert config.report_dir == tmp_path / "out"
    assert config.downloaded_dir == tmp_path / "downloaded-reports"
    assert config.browsers == ("firefox", "webkit")
    assert config.layout == "ci"
    assert config.output_path == tmp_path / "out" / "index.html"


def test_with_overrides_ignores_none(tmp_path):
    config = ReportConfig(report_dir=tmp_path, downloaded_dir=tmp_path)
    assert config.with_overrides(layout=None, title="T").title == "T"
    assert config.with_overrides(report_dir=Path("x")).report_dir == Path("x")


def test_parse_browsers_default():
    assert parse_browsers("") == DEFAULT_BROWSERS
    assert parse_browsers(" , ") == DEFAULT_BROWSERS


def test_display_names():
    assert display_name("webkit") == "WebKit"
    assert display_name("chromium") == "Chromium"
    assert display_name("edge") == "Edge"
    assert browser_icon("edge")
