"""
Web Shop E2E
Cross-browser end-to-end suite for the demo web shop with per-browser and combined HTML reports.
"""

from webshop_e2e_kit.utils import ReportHelper
from webshop_e2e_kit.utils.kill_stale_browsers import kill_browser_instance

__version__ = ReportHelper.get_version()

__all__ = ["ReportHelper", "kill_browser_instance"]
