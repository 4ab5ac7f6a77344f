"""
Hook specifications for webshop_e2e_kit plugin.
These hooks allow source projects to customize the reporting behavior.
"""

import pytest


@pytest.hookspec
def pytest_webshop_modify_report_row(report_row, test_data):
    """
    Hook specification for source projects to enrich a test result row.

    Source projects can implement this hook in their conftest.py to add
    columns taken from the data-driven row (CSV/Excel) to the per-browser
    report.

    Args:
        report_row: Dictionary with base test result data (status, duration, error_log, etc.)
        test_data: Dictionary with parametrized test data from CSV/Excel

    Returns:
        Dictionary with custom attributes to merge into report_row, or None.

    Example in source project's conftest.py:
        @pytest.hookimpl
        def pytest_webshop_modify_report_row(report_row, test_data):
            return {"scenario_data": test_data.get("Email", "")}
    """


@pytest.hookspec
def pytest_webshop_browser_report_ready(config, browser, html_content, report_path):
    """
    Hook specification called after a browser's detailed HTML report is written.

    Args:
        config: Pytest config object with access to options and settings
        browser: Browser identifier the session ran against
        html_content: Complete HTML content as string
        report_path: Absolute path to the saved HTML report file

    Returns:
        None. This is a notification hook, return values are ignored.
    """
