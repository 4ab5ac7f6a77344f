# Report generation utilities and helpers
import logging
import os
import traceback
import zipfile
from datetime import datetime
from importlib import metadata
from pathlib import Path
from typing import Any

import pandas as pd
from dotenv import load_dotenv

from .reports.HtmlReportUtils import render_browser_report, write_report


logger = logging.getLogger(__name__)
logger.propagate = True


def load_environment():
    """Load .env, then the .env.<app_env> overrides selected by APP_ENV."""
    load_dotenv()

    app_env = os.getenv("APP_ENV", "").lower()
    if not app_env:
        return None
    env_file = f".env.{app_env}"
    if os.path.exists(env_file):
        load_dotenv(env_file, override=True)
        logger.info(f"Loaded environment-specific config from {env_file}")
        return env_file
    logger.warning(f"Environment file {env_file} not found for APP_ENV={app_env}")
    return None


def load_test_data(path: Path):
    """Load test data rows from CSV or Excel file using pandas.

    Supports multiple file formats and encodings:
    - CSV files with utf-8-sig, latin-1, or utf-8 encoding
    - Excel workbooks (.xlsx)

    Returns a list of dict rows suitable for pytest parametrization.
    """

    if not os.path.exists(path):
        logger.error(f"Data file not found: {path}")
        return []

    try:
        if zipfile.is_zipfile(path):
            df = pd.read_excel(
                path, engine="openpyxl", dtype=str, keep_default_na=False
            )
        else:
            df = None
            for enc in ("utf-8-sig", "latin-1", "utf-8"):
                try:
                    df = pd.read_csv(
                        path, encoding=enc, dtype=str, keep_default_na=False
                    )
                    break
                except UnicodeDecodeError:
                    df = None
            if df is None:
                logger.error(
                    f"Could not load CSV file {path} with any supported encoding"
                )
                return []
        df = df.fillna("")

        return df.to_dict(orient="records")
    except Exception as exc:
        logger.error(f"Error loading data file {path}: {exc}", exc_info=True)
        return []


def get_env(key: str, default: Any = "") -> Any:
    value = os.getenv(key)
    if value is not None:
        value = value.strip()
        return value if value else default
    return default


def extract_test_case_name_from_docstring(item):
    """Scenario title from the test function docstring, falling back to the nodeid."""
    function = getattr(item, "function", None)
    docstring = getattr(function, "__doc__", None)
    if docstring and docstring.strip():
        return docstring.strip().splitlines()[0]
    return item.nodeid


# Flatten if results is a list of lists or dicts
def flatten_results(res, cfg):
    """Flatten and aggregate test results from workers."""
    if cfg is None:
        return
    if isinstance(res, dict):
        cfg._test_results_from_workers.append(res)
    elif isinstance(res, list):
        for x in res:
            flatten_results(x, cfg)


def build_test_data(item, browser=""):
    """
    Build test result data dictionary from test execution information.

    Args:
        item: pytest Item object containing test metadata
        browser: browser identifier the session runs against

    Returns:
        Dictionary containing test result data:
        - test_status: PASSED, FAILED, or SKIPPED
        - test_id: Test name/nodeid
        - title: first docstring line or nodeid
        - error_log: Exception message if test failed (from report.longrepr)
        - duration: Total execution time in seconds (sum of all phases)
        - screenshot: relative path of the failure screenshot, if one was taken
    """

    call_longrepr = getattr(item, "_call_longrepr", None)
    call_excinfo = getattr(item, "_call_excinfo", None)

    if call_excinfo is None:
        status = "PASSED"
        error_log = ""
    else:
        error_log = call_longrepr if call_longrepr else ""
        if call_excinfo.typename == "Skipped":
            status = "SKIPPED"
        else:
            status = "FAILED"

    total_duration = sum(getattr(item, "_phase_durations", {}).values())

    return {
        "test_status": status,
        "test_id": getattr(item, "name", item.nodeid),
        "title": extract_test_case_name_from_docstring(item),
        "browser": browser,
        "error_log": error_log,
        "duration": total_duration,
        "screenshot": getattr(item, "_screenshot_path", ""),
    }


def aggregate_test_results(config):
    """
    Aggregate test results from master process and xdist workers.

    Collects results from config.test_results_summary (master process)
    and config._test_results_from_workers (aggregated worker results).
    """
    report_rows = []

    if hasattr(config, "test_results_summary") and config.test_results_summary:
        master_results = [r for r in config.test_results_summary if isinstance(r, dict)]
        report_rows.extend(master_results)

    if (
        hasattr(config, "_test_results_from_workers")
        and config._test_results_from_workers
    ):
        for entry in config._test_results_from_workers:
            if isinstance(entry, dict):
                report_rows.append(entry)
            elif isinstance(entry, list):
                worker_results = [r for r in entry if isinstance(r, dict)]
                report_rows.extend(worker_results)

    return report_rows


def count_statuses(report_rows):
    """Count PASSED / FAILED / SKIPPED rows, treating ERROR as FAILED."""
    counts = {"PASSED": 0, "FAILED": 0, "SKIPPED": 0}
    for row in report_rows:
        status = str(row.get("test_status", "")).upper()
        if status == "ERROR":
            status = "FAILED"
        if status in counts:
            counts[status] += 1
    return counts


def create_report_summary(report_rows, start_time=None, browser=""):
    """
    Create summary object for the per-browser HTML report template.
    """
    if start_time:
        duration = datetime.now() - start_time
        duration_str = str(duration).split(".")[0]  # Remove microseconds
    else:
        duration_str = ""

    counts = count_statuses(report_rows)
    total = len(report_rows)

    return {
        "env_name": os.getenv("APP_ENV", "").upper(),
        "project_name": os.getenv("PROJECT_NAME", "Web Shop E2E"),
        "base_url": get_env("BASE_URL", "https://demowebshop.tricentis.com/"),
        "browser": browser,
        "total": total,
        "duration": duration_str,
        "passed": counts["PASSED"],
        "failed": counts["FAILED"],
        "skipped": counts["SKIPPED"],
        "pass_rate": f"{counts['PASSED'] / total * 100:.1f}" if total else "0",
        "generated_date": datetime.now().strftime("%m-%d-%Y"),
        "generated_time": datetime.now().strftime("%I:%M:%S %p"),
    }


def get_report_path(report_dir, browser):
    """
    Location of a browser's detailed report: <report_dir>/<browser>/index.html
    """
    browser_dir = Path(report_dir) / browser
    browser_dir.mkdir(parents=True, exist_ok=True)
    return browser_dir / "index.html"


def generate_browser_report(report_rows, report_summary, report_dir, browser):
    """
    Generate and save the detailed HTML report for one browser run.

    Returns:
        Dictionary with html_content and report_path, or None on failure
    """
    report_title = get_env(
        "REPORT_TITLE", "Web Shop E2E Test Report"
    ) + f" - {browser.upper()}"

    try:
        html_content = render_browser_report(
            report_rows, report_summary, report_title, browser
        )
        report_path = write_report(html_content, get_report_path(report_dir, browser))

        logger.info(f"HTML report generated: {report_path.absolute()}")
        return {
            "html_content": html_content,
            "report_path": str(report_path.absolute()),
        }
    except Exception as e:
        logger.error(f"Error generating HTML report: {e}")
        traceback.print_exc()
        return None


def get_version():
    try:
        return metadata.version("webshop-e2e-kit")
    except metadata.PackageNotFoundError:
        return "0.0.0"
