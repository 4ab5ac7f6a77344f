import json
import logging
import platform
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)
logger.propagate = True


def load_result_document(path):
    """
    Read a cucumber JSON result document.

    Returns the parsed list of features, or None when the file cannot be read,
    is not valid JSON, or does not have the expected top-level shape.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read result document {path}: {e}")
        return None

    if not isinstance(data, list) or not all(isinstance(f, dict) for f in data):
        logger.warning(
            f"Unexpected result document shape in {path}: "
            f"expected a list of features, got {type(data).__name__}"
        )
        return None
    return data


def find_result_document(config, browser):
    """
    Probe the candidate paths for a browser and return (path, document)
    for the first one that exists, or None.

    A first existing file that cannot be parsed excludes the browser; later
    candidates are not consulted.
    """
    for candidate in config.candidate_paths(browser):
        if not candidate.is_file():
            continue
        document = load_result_document(candidate)
        if document is None:
            logger.warning(f"Skipping {browser}: {candidate} is not a valid result document")
            return None
        logger.info(f"Found {browser} report: {candidate}")
        return candidate, document
    return None


def collect_result_documents(config):
    """
    Collect one result document per configured browser.

    Browsers without a readable document are logged and left out; the
    returned dict keeps the configured browser order.
    """
    documents = {}
    for browser in config.browsers:
        found = find_result_document(config, browser)
        if found is None:
            logger.warning(f"No valid report found for {browser}")
            continue
        documents[browser] = found[1]
    return documents


def merge_result_documents(documents):
    """
    Merge per-browser documents into one feature list.

    Every feature is tagged with browser metadata; a feature id is only taken
    once per browser.
    """
    merged = []
    seen = set()
    for browser, document in documents.items():
        for feature in document:
            feature_id = f"{browser}-{feature.get('id') or feature.get('name')}"
            if feature_id in seen:
                continue
            seen.add(feature_id)
            enriched = dict(feature)
            enriched["metadata"] = [
                {"name": "Browser", "value": browser.upper()},
                {"name": "Platform", "value": platform.system().lower()},
                {"name": "Python Version", "value": platform.python_version()},
            ]
            merged.append(enriched)
    return merged


def write_merged_documents(config, documents):
    """Write <browser>-enriched.json files and all-browsers-combined.json."""
    merged = merge_result_documents(documents)
    config.report_dir.mkdir(parents=True, exist_ok=True)

    by_browser = {}
    for feature in merged:
        browser = feature["metadata"][0]["value"].lower()
        by_browser.setdefault(browser, []).append(feature)

    written = []
    for browser, features in by_browser.items():
        path = config.report_dir / f"{browser}-enriched.json"
        path.write_text(json.dumps(features, indent=2), encoding="utf-8")
        logger.info(f"Created enriched {browser} report: {path}")
        written.append(path)

    combined_path = config.report_dir / "all-browsers-combined.json"
    combined_path.write_text(json.dumps(merged, indent=2), encoding="utf-8")
    logger.info(f"Created combined report: {combined_path}")
    written.append(combined_path)
    return written


def copy_attachments(config, root=None):
    """
    Copy screenshots and traces next to the combined report.

    Per-browser folders (reports/<browser>/screenshots) land in
    reports/screenshots/<browser>; root level screenshots/ and traces/
    are copied as-is. Copy failures are logged and ignored.
    """
    root = Path(root) if root is not None else Path.cwd()
    copied = 0
    try:
        for kind in ("screenshots", "traces"):
            target = config.report_dir / kind
            for browser in config.browsers:
                source = config.report_dir / browser / kind
                if source.is_dir():
                    shutil.copytree(source, target / browser, dirs_exist_ok=True)
                    copied += 1
            source = root / kind
            if source.is_dir() and source.resolve() != target.resolve():
                shutil.copytree(source, target, dirs_exist_ok=True)
                logger.info(f"{kind.capitalize()} copied to report directory")
                copied += 1
    except (OSError, shutil.Error) as e:
        logger.warning(f"Could not copy attachments: {e}")
    return copied
