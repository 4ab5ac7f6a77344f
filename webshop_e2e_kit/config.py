"""
Report configuration for the cross-browser reporting pipeline.

A ReportConfig value is built once (from the environment or from CLI flags)
and passed explicitly to the collector, aggregator and renderer.
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

from .browsers import SUPPORTED_BROWSERS
from .utils.ReportHelper import get_env


DEFAULT_BROWSERS = SUPPORTED_BROWSERS
DEFAULT_BASE_URL = "https://demowebshop.tricentis.com/"
RESULT_FILE_NAME = "cucumber-report.json"

LAYOUT_LOCAL = "local"
LAYOUT_CI = "ci"
LAYOUTS = (LAYOUT_LOCAL, LAYOUT_CI)


def parse_browsers(value) -> Tuple[str, ...]:
    """Parse a comma separated browser list, keeping order and dropping duplicates."""
    if not value:
        return DEFAULT_BROWSERS
    browsers = []
    for name in str(value).split(","):
        name = name.strip().lower()
        if name and name not in browsers:
            browsers.append(name)
    return tuple(browsers) or DEFAULT_BROWSERS


@dataclass(frozen=True)
class ReportConfig:
    """Where per-browser results live and how the combined report is laid out."""

    report_dir: Path = field(default_factory=lambda: Path.cwd() / "reports")
    downloaded_dir: Path = field(
        default_factory=lambda: Path.cwd() / "downloaded-reports"
    )
    browsers: Tuple[str, ...] = DEFAULT_BROWSERS
    layout: str = LAYOUT_LOCAL
    result_file_name: str = RESULT_FILE_NAME
    output_name: str = "index.html"
    title: str = "Web Shop E2E Test Report"
    base_url: str = DEFAULT_BASE_URL

    def __post_init__(self):
        if self.layout not in LAYOUTS:
            raise ValueError(
                f"Unknown report layout '{self.layout}', expected one of {LAYOUTS}"
            )
        object.__setattr__(self, "report_dir", Path(self.report_dir))
        object.__setattr__(self, "downloaded_dir", Path(self.downloaded_dir))
        object.__setattr__(self, "browsers", tuple(self.browsers))

    @classmethod
    def from_env(cls, root: Optional[Path] = None) -> "ReportConfig":
        """
        Build a config from environment variables.

        REPORT_DIR and DOWNLOADED_REPORTS_DIR are resolved against root
        (default: current working directory) when relative.
        """
        root = Path(root) if root is not None else Path.cwd()
        return cls(
            report_dir=root / get_env("REPORT_DIR", "reports"),
            downloaded_dir=root / get_env("DOWNLOADED_REPORTS_DIR", "downloaded-reports"),
            browsers=parse_browsers(get_env("BROWSERS", "")),
            layout=get_env("REPORT_LAYOUT", LAYOUT_LOCAL).lower(),
            title=get_env("REPORT_TITLE", "Web Shop E2E Test Report"),
            base_url=get_env("BASE_URL", DEFAULT_BASE_URL),
        )

    def with_overrides(self, **changes) -> "ReportConfig":
        """Copy with the non-None values in changes applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def candidate_paths(self, browser: str):
        """Result document locations for a browser, artifact layout first."""
        return [
            self.downloaded_dir / f"json-report-{browser}" / self.result_file_name,
            self.downloaded_dir / f"{browser}-json-report" / self.result_file_name,
            self.report_dir / browser / self.result_file_name,
        ]

    def detail_link(self, browser: str) -> str:
        """Relative link from the combined index to a browser's own report."""
        if self.layout == LAYOUT_CI:
            return f"browser-report-{browser}/index.html"
        return f"{browser}/index.html"

    @property
    def output_path(self) -> Path:
        return self.report_dir / self.output_name
