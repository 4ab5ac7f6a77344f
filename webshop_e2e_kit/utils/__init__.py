"""
Utility functions for webshop-e2e-kit
"""

from .ReportHelper import (
    load_test_data,
    load_environment,
    get_env,
    extract_test_case_name_from_docstring,
    flatten_results,
)
from .kill_stale_browsers import kill_browser_instance as kill_stale_browsers

__all__ = [
    "load_test_data",
    "load_environment",
    "get_env",
    "extract_test_case_name_from_docstring",
    "flatten_results",
    "kill_stale_browsers",
]
