"""
Console and per-worker file logging for the e2e suite.

Console output is colourised by level; each pytest-xdist worker (or plain
process) gets its own plain-text file logs/test-<date>-worker-<id>.log.
"""

import logging
import os
from datetime import datetime
from pathlib import Path

RESET = "\x1b[0m"
BRIGHT = "\x1b[1m"
LEVEL_COLORS = {
    "CRITICAL": "\x1b[41m" + BRIGHT,
    "ERROR": "\x1b[41m" + BRIGHT,
    "WARNING": "\x1b[33m" + BRIGHT,
    "INFO": "\x1b[32m",
    "DEBUG": "\x1b[36m",
}

LOG_FORMAT = "[%(asctime)s] [Worker-%(worker_id)s] [%(levelname)s] %(message)s"

# Marks handlers installed here so a second configure call replaces them
_HANDLER_ATTR = "_webshop_e2e_handler"


def get_worker_id():
    return os.getenv("PYTEST_XDIST_WORKER") or str(os.getpid())


class WorkerFilter(logging.Filter):
    def __init__(self, worker_id):
        super().__init__()
        self.worker_id = worker_id

    def filter(self, record):
        record.worker_id = self.worker_id
        return True


class ColorFormatter(logging.Formatter):
    def format(self, record):
        color = LEVEL_COLORS.get(record.levelname)
        if color:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{RESET}"
        return super().format(record)


def configure_logging(level="INFO", log_dir="logs", worker_id=None, log_to_file=True):
    """
    Attach console (and optionally file) handlers to the root logger.

    Returns the log file path, or None when file logging is off.
    """
    worker_id = worker_id or get_worker_id()
    root = logging.getLogger()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(level)

    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            root.removeHandler(handler)
            handler.close()

    worker_filter = WorkerFilter(worker_id)

    console = logging.StreamHandler()
    console.setFormatter(ColorFormatter(LOG_FORMAT))
    console.addFilter(worker_filter)
    setattr(console, _HANDLER_ATTR, True)
    root.addHandler(console)

    if not log_to_file:
        return None

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / f"test-{datetime.now():%Y-%m-%d}-worker-{worker_id}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    file_handler.addFilter(worker_filter)
    setattr(file_handler, _HANDLER_ATTR, True)
    root.addHandler(file_handler)
    return log_file


def _scenario_banner(lines):
    separator = "=" * 80
    return "\n".join([separator, *lines, separator])


def log_scenario_start(logger, scenario_name, browser=None):
    browser_info = f" [Browser: {browser.upper()}]" if browser else ""
    logger.info(
        "\n"
        + _scenario_banner(
            ["--- START OF SCENARIO ---", f"Scenario: {scenario_name}{browser_info}"]
        )
    )


def log_scenario_end(logger, scenario_name, status, browser=None):
    browser_info = f" [Browser: {browser.upper()}]" if browser else ""
    logger.info(
        "\n"
        + _scenario_banner(
            [
                f"Scenario: {scenario_name}{browser_info} | Status: {status}",
                "--- END OF SCENARIO ---",
            ]
        )
    )
