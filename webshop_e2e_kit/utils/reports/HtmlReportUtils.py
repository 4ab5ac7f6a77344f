import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ...browsers import browser_icon, display_name

logger = logging.getLogger(__name__)

PACKAGE_TEMPLATE_ROOT = Path(__file__).resolve().parents[2] / "templates"

TIMESTAMP_FORMAT = "%m-%d-%Y %I:%M:%S %p"


def get_html_template(template_dir="html_report", template_name="html_template.html"):
    """
    Returns the Jinja2 template object for a report.
    Checks for a source template in the project working directory first, then falls back to the package template.
    """
    source_template_dir = Path.cwd() / "templates" / template_dir
    if (source_template_dir / template_name).exists():
        search_dir = source_template_dir
    else:
        search_dir = PACKAGE_TEMPLATE_ROOT / template_dir
    logger.debug(f"Loading template {template_name} from {search_dir}")

    env = Environment(
        loader=FileSystemLoader(str(search_dir)),
        autoescape=select_autoescape(["html"]),
        keep_trailing_newline=True,
    )
    env.globals["format_duration"] = format_duration
    return env.get_template(template_name)


def format_duration(seconds):
    """
    Convert duration in seconds to HH:MM:SS format string.
    """
    if isinstance(seconds, (float, int)):
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = int(seconds % 60)
        return f"{hours:02}:{minutes:02}:{secs:02}"
    return str(seconds)


def read_embedded_css(template_dir="html_report"):
    css_path = PACKAGE_TEMPLATE_ROOT / template_dir / "scripts" / "css" / "report.css"
    try:
        return css_path.read_text(encoding="utf-8")
    except OSError:
        return ""


def render_combined_report(browser_summaries, aggregate, generated_at, config):
    """
    Render the cross-browser index page.

    Args:
        browser_summaries: ordered list of (browser, BrowserSummary)
        aggregate: AggregateSummary over the same browsers
        generated_at: datetime embedded in the header
        config: ReportConfig, used for the title and the per-browser links

    The output only depends on the inputs; generated_at is the only
    time-dependent value.
    """
    cards = []
    for browser, summary in browser_summaries:
        card = summary.to_dict()
        card.update(
            {
                "id": browser,
                "name": display_name(browser),
                "icon": browser_icon(browser),
                "link": config.detail_link(browser),
            }
        )
        cards.append(card)

    template = get_html_template("combined_report", "index.html")
    return template.render(
        report_title=config.title,
        generated_at=generated_at.strftime(TIMESTAMP_FORMAT),
        summary=aggregate.to_dict(),
        browsers=cards,
        base_url=config.base_url,
        layout=config.layout,
    )


def write_report(html_content, output_path):
    """Write rendered HTML, creating the parent directory. OSError propagates."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(html_content)
    return output_path


def render_browser_report(report_rows, summary, report_title, browser):
    """
    Render the detailed report for a single browser run from plugin result rows.
    """
    template = get_html_template()
    return template.render(
        report_title=report_title,
        browser=browser,
        browser_name=display_name(browser),
        summary=summary,
        report_rows=report_rows,
        embedded_css=read_embedded_css(),
    )
