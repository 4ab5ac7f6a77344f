"""
Web Shop E2E - Pytest Plugin
Runs the demo web shop scenarios against one browser per session, captures
failure evidence and writes the per-browser detailed HTML report.

PYTEST HOOK EXECUTION ORDER (Session Lifecycle):
=====================================================

PHASE 1: SESSION INITIALIZATION
1. pytest_addoption             - Register command-line options
2. pytest_addhooks              - Register pytest_webshop_* hook specifications
3. pytest_plugin_registered     - Disable pytest-xdist when PARALLEL_EXECUTION=N
4. pytest_configure             - Environment, logging, markers, cucumber JSON path
5. pytest_report_header         - Browser / environment header

PHASE 2: TEST COLLECTION
6. pytest_collection_modifyitems - Skip e2e scenarios unless enabled
7. pytest_generate_tests        - Parametrize tests with CSV/Excel data

PHASE 3: TEST EXECUTION (per test)
8. pytest_runtest_setup         - Scenario start banner
9. pytest_runtest_makereport    - Result rows, failure screenshots

PHASE 4: XDIST WORKER COORDINATION (parallel execution only)
10. pytest_testnodedown         - Aggregate worker results to master

PHASE 5: SESSION FINALIZATION
11. pytest_terminal_summary     - Pass/fail/skip counts
12. pytest_unconfigure          - Generate per-browser HTML report (master only)
"""

import logging
import re
from datetime import datetime
from pathlib import Path

import pytest
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.support.ui import WebDriverWait

from . import hookspec
from .browser_manager import BrowserManager
from .browsers import SUPPORTED_BROWSERS
from .config import DEFAULT_BASE_URL, RESULT_FILE_NAME
from .pages import LoginPage, RegistrationPage
from .utils.LogUtils import configure_logging, log_scenario_end, log_scenario_start
from .utils.ReportHelper import (
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


logger = logging.getLogger(__name__)
logger.propagate = True

HOME_PAGE_TITLE = "Demo Web Shop"

_MASTER_CONFIG = None  # Global reference to master config for xdist aggregation


# ============================================================================
# Option helpers
# ============================================================================


def get_browser_name(config):
    browser = config.getoption("webshop_browser", None) or get_env("BROWSER", "chromium")
    return browser.lower()


def is_headless(config):
    return bool(config.getoption("webshop_headless", False)) or get_env(
        "HEADLESS", "N"
    ).upper() in ("Y", "TRUE", "1")


def e2e_enabled(config):
    return bool(config.getoption("webshop_run_e2e", False)) or get_env(
        "RUN_E2E", "N"
    ).upper() == "Y"


def get_report_dir(config):
    report_dir = config.getoption("webshop_report_dir", None) or get_env(
        "REPORT_DIR", "reports"
    )
    return Path(report_dir)


def reporting_enabled(config):
    return e2e_enabled(config) or bool(config.getoption("webshop_report_dir", None))


# ============================================================================
# HOOK 1: pytest_addoption
# ============================================================================


def pytest_addoption(parser):
    """
    Register command-line options for the webshop-e2e plugin.

    Options:
    - --browser: Browser engine for the session (chromium, firefox, webkit)
    - --headless: Run the browser without a window
    - --shop-report-dir: Root folder of the reports (default: reports)
    - --run-e2e: Execute scenarios marked e2e (skipped otherwise)
    """
    group = parser.getgroup("webshop-e2e", "Web Shop E2E Options")
    group.addoption(
        "--browser",
        action="store",
        dest="webshop_browser",
        default=None,
        choices=SUPPORTED_BROWSERS,
        help="Browser to run against (default: $BROWSER or chromium)",
    )
    group.addoption(
        "--headless",
        action="store_true",
        dest="webshop_headless",
        default=False,
        help="Run the browser in headless mode (default: $HEADLESS)",
    )
    group.addoption(
        "--shop-report-dir",
        action="store",
        dest="webshop_report_dir",
        default=None,
        help="Reports root; the browser report lands in <dir>/<browser>/index.html",
    )
    group.addoption(
        "--run-e2e",
        action="store_true",
        dest="webshop_run_e2e",
        default=False,
        help="Run browser scenarios marked e2e (default: $RUN_E2E)",
    )


# ============================================================================
# HOOK 2: pytest_addhooks
# ============================================================================


def pytest_addhooks(pluginmanager):
    pluginmanager.add_hookspecs(hookspec)


# ============================================================================
# HOOK 3: pytest_plugin_registered
# ============================================================================


def pytest_plugin_registered(plugin, manager):
    """Unregister pytest-xdist's DSession when PARALLEL_EXECUTION is N."""
    if str(plugin).find("xdist.dsession.DSession") != -1:
        parallel_execution = get_env("PARALLEL_EXECUTION", "Y").strip().upper()
        if parallel_execution == "N":
            logger.warning("Parallel execution disabled, unregistering pytest-xdist")
            manager.unregister(plugin)


# ============================================================================
# HOOK 4: pytest_configure
# Runs before pytest-bdd's own configure so the cucumber JSON path default applies
# ============================================================================


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config):
    """
    Initialize webshop-e2e plugin configuration.

    Config attributes created:
    - config.test_results_summary: List to collect test result dicts
    - config._sessionstart_time: Session start datetime (master only)
    - config.webshop_browser: Browser identifier for the session
    """
    load_environment()

    config.addinivalue_line("markers", "e2e: browser scenario against the demo web shop")
    config.addinivalue_line(
        "markers", "datafile(name): parametrize the row fixture from data/<name>"
    )

    config.webshop_browser = get_browser_name(config)

    if reporting_enabled(config):
        configure_logging(level=get_env("LOG_LEVEL", "INFO"), log_dir=get_env("LOG_DIR", "logs"))

        # Default pytest-bdd cucumber JSON output to reports/<browser>/cucumber-report.json
        if not getattr(config.option, "cucumber_json_path", None):
            browser_dir = get_report_dir(config) / config.webshop_browser
            browser_dir.mkdir(parents=True, exist_ok=True)
            config.option.cucumber_json_path = str(browser_dir / RESULT_FILE_NAME)

    if not hasattr(config, "workerinput") and not hasattr(config, "_sessionstart_time"):
        config._sessionstart_time = datetime.now()

    config.test_results_summary = []

    global _MASTER_CONFIG
    if not hasattr(config, "workerinput"):
        _MASTER_CONFIG = config


# ============================================================================
# HOOK 5: pytest_report_header
# ============================================================================


def pytest_report_header(config):
    if hasattr(config, "workerinput"):
        return

    from . import __version__

    return [
        "",
        "=" * 80,
        f"Web Shop E2E v{__version__}",
        "=" * 80,
        f"Browser:        {config.webshop_browser}",
        f"Headless:       {'Yes' if is_headless(config) else 'No'}",
        f"Base URL:       {get_env('BASE_URL', DEFAULT_BASE_URL)}",
        f"Environment:    {get_env('APP_ENV', 'DEVELOPMENT').upper()}",
        f"E2E scenarios:  {'Enabled' if e2e_enabled(config) else 'Skipped (use --run-e2e)'}",
        "=" * 80,
        "",
    ]


# ============================================================================
# HOOK 6: pytest_collection_modifyitems
# ============================================================================


def pytest_collection_modifyitems(session, config, items):
    """Skip items marked e2e unless --run-e2e or RUN_E2E=Y."""
    if e2e_enabled(config):
        return
    skip_e2e = pytest.mark.skip(reason="browser scenarios need --run-e2e or RUN_E2E=Y")
    for item in items:
        if item.get_closest_marker("e2e") is not None:
            item.add_marker(skip_e2e)


# ============================================================================
# HOOK 7: pytest_generate_tests
# ============================================================================


def pytest_generate_tests(metafunc):
    """
    Parametrize tests with data from CSV/Excel files.

    Triggered when the test has @pytest.mark.datafile("filename.csv") and
    uses the 'row' fixture. Files are read from the data/ directory that is
    a sibling of the test's directory.
    """
    marker = metafunc.definition.get_closest_marker("datafile")
    if not marker or not marker.args:
        return

    if "row" not in metafunc.fixturenames:
        return

    data_file = marker.args[0]
    test_file_path = metafunc.definition.path
    data_path = Path(test_file_path).parent.parent / "data" / data_file

    rows = load_test_data(data_path)

    if not rows:
        logger.error(
            f"Failed to load data file '{data_file}' at {data_path}; "
            f"file may not exist, be empty, or have encoding issues"
        )
        pytest.fail(f"Data file '{data_file}' could not be loaded from {data_path}")

    metafunc.parametrize("row", rows)


# ============================================================================
# HOOK 8: pytest_runtest_setup
# ============================================================================


def pytest_runtest_setup(item):
    if item.get_closest_marker("e2e") is not None:
        log_scenario_start(logger, item.name, item.config.webshop_browser)


# ============================================================================
# HOOK 9: pytest_runtest_makereport
# ============================================================================


def _safe_name(nodeid):
    return re.sub(r"[^a-zA-Z0-9_-]", "_", nodeid).strip("_")[:150]


def capture_failure_evidence(item, driver, report_dir, browser):
    """
    Save a screenshot and the page source of a failed scenario.

    Returns the screenshot path relative to the browser report folder, or ""
    when capturing failed.
    """
    browser_dir = Path(report_dir) / browser
    name = _safe_name(item.nodeid)
    screenshot_rel = Path("screenshots") / f"{name}.png"
    try:
        (browser_dir / "screenshots").mkdir(parents=True, exist_ok=True)
        (browser_dir / "traces").mkdir(parents=True, exist_ok=True)
        driver.save_screenshot(str(browser_dir / screenshot_rel))
        (browser_dir / "traces" / f"{name}.html").write_text(
            driver.page_source, encoding="utf-8"
        )
    except (WebDriverException, OSError) as e:
        logger.warning(f"Could not capture failure evidence for {item.nodeid}: {e}")
        return ""
    logger.info(f"Screenshot saved: {browser_dir / screenshot_rel}")
    return screenshot_rel.as_posix()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture individual test result data.

    Result data collected after teardown:
    - test_status: PASSED, FAILED, or SKIPPED
    - test_id / title: test name and first docstring line
    - duration: sum of setup + call + teardown in seconds
    - error_log: failure representation
    - screenshot: failure screenshot relative to the browser report
    """
    if not hasattr(item, "_phase_durations"):
        item._phase_durations = {}
    item._phase_durations[call.when] = getattr(call, "duration", 0)

    outcome = yield
    report = outcome.get_result()
    config = item.config

    # setup failures and skips count as the test outcome
    if call.when == "call" or (call.when == "setup" and call.excinfo is not None):
        item._call_longrepr = (
            str(report.longrepr) if report.longrepr else "No error details available"
        )
        item._call_excinfo = call.excinfo

    funcargs = getattr(item, "funcargs", {})
    if call.when == "call" and report.failed and "driver" in funcargs:
        item._screenshot_path = capture_failure_evidence(
            item, funcargs["driver"], get_report_dir(config), config.webshop_browser
        )

    if call.when != "teardown":
        return

    report_row = build_test_data(item, config.webshop_browser)
    test_data = funcargs.get("row", {})

    try:
        for extra in config.hook.pytest_webshop_modify_report_row(
            report_row=dict(report_row), test_data=test_data
        ):
            if isinstance(extra, dict):
                report_row.update(extra)
            elif extra is not None:
                logger.warning(
                    f"pytest_webshop_modify_report_row returned {type(extra).__name__} instead of dict, "
                    f"ignoring result for test {item.nodeid}"
                )
    except Exception as e:
        logger.error(
            f"Error calling pytest_webshop_modify_report_row for test {item.nodeid}: {e}",
            exc_info=True,
        )

    if item.get_closest_marker("e2e") is not None:
        log_scenario_end(logger, item.name, report_row["test_status"], config.webshop_browser)

    config.test_results_summary.append(report_row)

    # For xdist workers: sync to workeroutput for master aggregation
    if hasattr(config, "workeroutput"):
        config.workeroutput["test_results_summary"] = list(config.test_results_summary)


# ============================================================================
# HOOK 10: pytest_testnodedown (xdist only)
# ============================================================================


@pytest.hookimpl(optionalhook=True)
def pytest_testnodedown(node, error):
    """Aggregate results from an xdist worker into the master config."""
    config = _MASTER_CONFIG
    if config is None:
        logger.warning("Master config not available for result aggregation")
        return

    worker_id = (
        node.workerinput.get("workerid", "unknown")
        if hasattr(node, "workerinput")
        else "unknown"
    )
    if error:
        logger.warning(f"Worker {worker_id} encountered error: {error}")

    if not hasattr(node, "workeroutput") or node.workeroutput is None:
        return

    if not hasattr(config, "_test_results_from_workers"):
        config._test_results_from_workers = []

    results = node.workeroutput.get("test_results_summary", [])
    if not results:
        return

    flatten_results(results, config)


# ============================================================================
# HOOK 11: pytest_terminal_summary
# ============================================================================


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Write pass/fail/skip counts and pass rate for the session's browser."""
    if hasattr(config, "workerinput") or not reporting_enabled(config):
        return

    results = aggregate_test_results(config)
    if not results:
        return

    counts = count_statuses(results)
    total = len(results)

    terminalreporter.ensure_newline()
    terminalreporter.section(
        f"Web Shop E2E Summary ({config.webshop_browser})", sep="="
    )
    for line in (
        f"Total Tests:  {total}",
        f"Passed:       {counts['PASSED']}",
        f"Failed:       {counts['FAILED']}",
        f"Skipped:      {counts['SKIPPED']}",
        f"Pass Rate:    {counts['PASSED'] / total * 100:.1f}%",
    ):
        terminalreporter.write_line(line)
    terminalreporter.ensure_newline()


# ============================================================================
# HOOK 12: pytest_unconfigure
# ============================================================================


def pytest_unconfigure(config):
    """
    Generate the per-browser HTML report after all tests complete.

    Only runs in the master process and only when reporting is enabled
    (--run-e2e or --shop-report-dir). The combined cross-browser index is
    produced separately by webshop-combined-report.
    """
    if hasattr(config, "workerinput") or not reporting_enabled(config):
        return

    browser = getattr(config, "webshop_browser", "chromium")
    report_rows = aggregate_test_results(config)
    report_summary = create_report_summary(
        report_rows, getattr(config, "_sessionstart_time", None), browser
    )

    try:
        result = generate_browser_report(
            report_rows, report_summary, get_report_dir(config), browser
        )
        if result:
            try:
                config.hook.pytest_webshop_browser_report_ready(
                    config=config,
                    browser=browser,
                    html_content=result["html_content"],
                    report_path=result["report_path"],
                )
            except Exception as hook_error:
                logger.warning(
                    f"Hook pytest_webshop_browser_report_ready failed: {hook_error}",
                    exc_info=True,
                )
    except Exception as e:
        logger.error(f"Failed to generate HTML report: {e}", exc_info=True)


# ============================================================================
# Pytest Fixtures (provided by plugin for all consuming projects)
# ============================================================================


@pytest.fixture(scope="function")
def row(request):
    """Parametrized data row (dict) from a @pytest.mark.datafile file."""
    return request.param


@pytest.fixture(scope="session")
def browser_name(pytestconfig):
    return pytestconfig.webshop_browser


@pytest.fixture(scope="session")
def base_url():
    return get_env("BASE_URL", DEFAULT_BASE_URL)


@pytest.fixture(scope="function")
def driver(request, browser_name):
    """
    Selenium driver for the session's browser with an isolated profile.

    SCOPE: Function-scoped (created/destroyed for each test)

    Environment Variables:
    - BROWSER (chromium | firefox | webkit), overridden by --browser
    - HEADLESS (Y/N), overridden by --headless
    """
    manager = BrowserManager(browser_name, headless=is_headless(request.config))
    driver = manager.launch()
    request.addfinalizer(manager.close)
    yield driver


@pytest.fixture()
def wait(driver):
    """WebDriverWait with WAIT_TIME seconds timeout (default 15)."""
    timeout = int(get_env("WAIT_TIME", "15"))
    return WebDriverWait(driver, timeout)


@pytest.fixture()
def home_page(driver, base_url):
    """Driver opened on the shop home page."""
    logger.info("Navigating to home page")
    driver.get(base_url)
    WebDriverWait(driver, int(get_env("WAIT_TIME", "15"))).until(
        lambda d: d.title == HOME_PAGE_TITLE
    )
    assert driver.title == HOME_PAGE_TITLE
    logger.info("On home page")
    return driver


@pytest.fixture()
def login_page(home_page):
    return LoginPage(home_page)


@pytest.fixture()
def registration_page(home_page):
    return RegistrationPage(home_page)


@pytest.fixture()
def scenario_context():
    """Values shared between the steps of one scenario."""
    return {}
