import json

import pytest

from webshop_e2e_kit.config import ReportConfig


def make_feature(name, *scenario_statuses, duration=1_000_000_000):
    """Cucumber JSON feature with one scenario per status list."""
    return {
        "id": name.lower(),
        "name": name,
        "elements": [
            {
                "name": f"{name} scenario {i}",
                "steps": [
                    {"name": "step", "result": {"status": status, "duration": duration}}
                    for status in statuses
                ],
            }
            for i, statuses in enumerate(scenario_statuses)
        ],
    }


@pytest.fixture
def make_document():
    return make_feature


@pytest.fixture
def report_config(tmp_path):
    return ReportConfig(
        report_dir=tmp_path / "reports",
        downloaded_dir=tmp_path / "downloaded-reports",
        title="Shop Report",
    )


@pytest.fixture
def write_result(report_config):
    """Write a result document to reports/<browser>/cucumber-report.json."""

    def _write(browser, document, path=None):
        path = path or report_config.report_dir / browser / report_config.result_file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write
