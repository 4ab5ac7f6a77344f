"""
Empty the report, screenshot and trace folders before a new test run.
"""

import logging
import shutil
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

CLEAN_DIRS = ("reports", "screenshots", "traces")


def empty_dir(path: Path):
    """Remove everything inside path, keeping the directory itself."""
    for child in path.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()


def clean_reports(root=None, dirs=CLEAN_DIRS):
    """
    Empty each existing directory in dirs under root.

    Returns the list of cleaned directories. A directory that cannot be
    emptied is logged and skipped.
    """
    root = Path(root) if root is not None else Path.cwd()
    cleaned = []
    for name in dirs:
        path = root / name
        if not path.is_dir():
            continue
        try:
            empty_dir(path)
        except OSError as e:
            logger.warning(f"Could not clean {path}: {e}")
            continue
        logger.info(f"Cleaned {name} directory")
        cleaned.append(path)
    return cleaned


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    clean_reports()
    logger.info("Reports cleaned successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
