"""
Project conftest.py - browser fixtures, hooks and report generation come from the webshop_e2e_kit plugin
"""

import logging

import pytest

pytest_plugins = ["pytester"]

logger = logging.getLogger(__name__)


# ============================================================================
# pytest_webshop_modify_report_row Hook Implementation
# ============================================================================
# Adds data-driven columns (from @pytest.mark.datafile rows) to report rows


@pytest.hookimpl
def pytest_webshop_modify_report_row(report_row, test_data):
    if not test_data:
        return None
    return {
        "title": test_data.get("Scenario", report_row.get("title", "")),
        "Email": test_data.get("Email", ""),
    }


# ============================================================================
# pytest_webshop_browser_report_ready Hook Implementation
# ============================================================================
# Called after reports/<browser>/index.html is written


@pytest.hookimpl
def pytest_webshop_browser_report_ready(config, browser, html_content, report_path):
    logger.info(f"{browser} HTML report ready at: {report_path}")
