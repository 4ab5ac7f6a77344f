"""
Combined cross-browser report.

Reads the per-browser cucumber JSON results, summarises them and writes a
single index.html dashboard linking to each browser's detailed report.

    python -m webshop_e2e_kit.combined_report --layout ci --strict
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from .config import LAYOUTS, ReportConfig, parse_browsers
from .utils.LogUtils import configure_logging
from .utils.ReportHelper import get_env, load_environment
from .utils.reports.HtmlReportUtils import render_combined_report, write_report
from .utils.reports.ResultAggregator import (
    AggregateSummary,
    BrowserSummary,
    combine,
    summarize,
)
from .utils.reports.ResultCollector import (
    collect_result_documents,
    copy_attachments,
    write_merged_documents,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_MISSING_BROWSERS = 2


@dataclass
class CombinedReportResult:
    report_path: Path
    browser_summaries: List[Tuple[str, BrowserSummary]]
    aggregate: AggregateSummary
    expected_browsers: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def found_browsers(self) -> List[str]:
        return [browser for browser, _ in self.browser_summaries]

    @property
    def missing_browsers(self) -> List[str]:
        found = set(self.found_browsers)
        return [b for b in self.expected_browsers if b not in found]


def build_browser_summaries(documents):
    """Summaries in collection order as (browser, BrowserSummary) pairs."""
    return [(browser, summarize(document, browser)) for browser, document in documents.items()]


def generate_combined_report(
    config: ReportConfig,
    now: Optional[datetime] = None,
    merge_json: bool = False,
    copy_files: bool = False,
) -> Optional[CombinedReportResult]:
    """
    Collect, summarise, render and write the combined report.

    Returns None without writing anything when no browser report was found.
    Errors writing the index file propagate to the caller.
    """
    logger.info("Generating combined test report index...")

    documents = collect_result_documents(config)
    if not documents:
        logger.error("No browser reports found. Make sure tests have run first.")
        return None

    browser_summaries = build_browser_summaries(documents)
    aggregate = combine(summary for _, summary in browser_summaries)

    html = render_combined_report(
        browser_summaries, aggregate, now or datetime.now(), config
    )
    report_path = write_report(html, config.output_path)

    if merge_json:
        write_merged_documents(config, documents)
    if copy_files:
        copy_attachments(config)

    result = CombinedReportResult(
        report_path=report_path,
        browser_summaries=browser_summaries,
        aggregate=aggregate,
        expected_browsers=config.browsers,
    )
    logger.info(f"Combined report generated: {report_path}")
    logger.info(f"Browsers included: {', '.join(result.found_browsers)}")
    if result.missing_browsers:
        logger.warning(f"Browsers without results: {', '.join(result.missing_browsers)}")
    logger.info(
        f"Passed: {aggregate.passed}  Failed: {aggregate.failed}  "
        f"Skipped: {aggregate.skipped}  Success rate: {aggregate.success_rate}%"
    )
    return result


def build_parser():
    parser = argparse.ArgumentParser(
        prog="webshop-combined-report",
        description="Merge per-browser cucumber JSON results into one HTML dashboard.",
    )
    parser.add_argument("--report-dir", help="Reports root (default: $REPORT_DIR or ./reports)")
    parser.add_argument(
        "--downloaded-dir",
        help="CI artifact download folder (default: $DOWNLOADED_REPORTS_DIR or ./downloaded-reports)",
    )
    parser.add_argument("--layout", choices=LAYOUTS, help="Link layout of browser reports")
    parser.add_argument("--browsers", help="Comma separated browser list, e.g. chromium,firefox")
    parser.add_argument("--title", help="Report title")
    parser.add_argument(
        "--merge-json",
        action="store_true",
        help="Also write <browser>-enriched.json and all-browsers-combined.json",
    )
    parser.add_argument(
        "--copy-attachments",
        action="store_true",
        help="Copy screenshots and traces next to the combined report",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 2 when some expected browsers have no results",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    load_environment()
    configure_logging(
        level="DEBUG" if args.verbose else get_env("LOG_LEVEL", "INFO"),
        log_to_file=False,
    )

    try:
        config = ReportConfig.from_env().with_overrides(
            report_dir=Path(args.report_dir) if args.report_dir else None,
            downloaded_dir=Path(args.downloaded_dir) if args.downloaded_dir else None,
            layout=args.layout,
            browsers=parse_browsers(args.browsers) if args.browsers else None,
            title=args.title,
        )
    except ValueError as e:
        logger.error(str(e))
        return EXIT_FAILED

    try:
        result = generate_combined_report(
            config, merge_json=args.merge_json, copy_files=args.copy_attachments
        )
    except OSError as e:
        logger.error(f"Combined report generation failed: {e}", exc_info=True)
        return EXIT_FAILED

    if result is None:
        return EXIT_FAILED
    if args.strict and result.missing_browsers:
        logger.error(
            f"Expected {len(result.expected_browsers)} browser reports, "
            f"found {len(result.found_browsers)}"
        )
        return EXIT_MISSING_BROWSERS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
