"""
Open files and folders with the host OS default application.

Fire-and-forget: the launched application is not waited on, and a failure is
logged and reported as False. Nothing here touches the index.
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from article_locator.schemas import LookupResult

logger = logging.getLogger(__name__)


def _launch(path: str) -> None:
    if sys.platform.startswith("win"):
        os.startfile(path)  # type: ignore[attr-defined]
    elif sys.platform == "darwin":
        subprocess.Popen(["open", path], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    else:
        subprocess.Popen(["xdg-open", path], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


def open_path(path: str, log: logging.Logger | None = None) -> bool:
    """Open a file or folder. Returns False if the launch failed."""
    log = log or logger
    try:
        _launch(path)
    except OSError as e:
        log.warning(f"Failed to open {path}: {e}")
        return False

    log.info(f"Opening: {path}")
    return True


def open_lookup_result(result: LookupResult, log: logging.Logger | None = None) -> int:
    """
    Open everything a lookup found.

    Each file that cannot be opened is replaced by its folder. For an
    article-only fallback the folder itself is opened.

    Returns:
        Number of successful launches
    """
    log = log or logger
    opened = 0

    for target in result.targets:
        if open_path(target, log):
            opened += 1
            continue

        folder = os.path.dirname(target)
        if folder and folder != target and os.path.isfile(target):
            log.warning(f"Could not open file, opening folder {folder}")
            if open_path(folder, log):
                opened += 1

    return opened
