"""
Snapshot cache for the module listing.

The cache is the plain-text file:

    <work_dir>/buf

Its modification time is the only metadata used: a snapshot younger than
FRESHNESS_SECONDS is served verbatim, anything older is refetched.
The file is never deleted, a cache miss simply overwrites it.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

from canvasfzf.errors import FilesystemError

LOGGER = logging.getLogger(__name__)

CACHE_FILENAME = "buf"
FRESHNESS_SECONDS = 300


def cache_path(work_dir: str | Path) -> Path:
    return Path(work_dir) / CACHE_FILENAME


def should_use_cache(
    work_dir: str | Path,
    force_refresh: bool = False,
    now: Optional[float] = None,
) -> Optional[str]:
    """
    Return the cached listing if it is fresh, otherwise None.

    An absent file is a normal cache miss. Any other filesystem error is
    raised as FilesystemError instead of silently refetching.
    """
    if force_refresh:
        LOGGER.debug("Cache bypassed (forced refresh)")
        return None

    path = cache_path(work_dir)
    try:
        mtime = path.stat().st_mtime
    except FileNotFoundError:
        LOGGER.debug("No cache file at %s", path)
        return None
    except OSError as exc:
        raise FilesystemError(f"cannot inspect cache file {path}: {exc}") from exc

    current = time.time() if now is None else now
    age = current - mtime
    if age >= FRESHNESS_SECONDS:
        LOGGER.debug("Cache is stale (%.0fs old)", age)
        return None

    try:
        listing = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FilesystemError(f"cannot read cache file {path}: {exc}") from exc

    LOGGER.info("Using cached listing (%.0fs old)", age)
    return listing


def save_listing(listing: str, work_dir: str | Path) -> Path:
    """
    Overwrite the cache file with a freshly built listing.
    """
    path = cache_path(work_dir)
    try:
        path.write_text(listing, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"cannot write cache file {path}: {exc}") from exc
    LOGGER.debug("Saved listing to %s", path)
    return path
