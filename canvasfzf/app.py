"""
Main flow: listing (cache or Canvas) -> selector -> open link.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from canvasfzf.cache import save_listing, should_use_cache
from canvasfzf.canvas import build_listing
from canvasfzf.config import Config
from canvasfzf.model import parse_selection
from canvasfzf.platforms import Platform

LOGGER = logging.getLogger(__name__)


def obtain_listing(
    config: Config,
    force_refresh: bool = False,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Return the cached listing when fresh, otherwise fetch and cache a new one.
    """
    listing = should_use_cache(config.work_dir, force_refresh=force_refresh)
    if listing is not None:
        return listing

    listing = build_listing(config, session=session)
    save_listing(listing, config.work_dir)
    return listing


def run(
    config: Config,
    platform: Platform,
    force_refresh: bool = False,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Run the whole pipeline once and return the link that was opened.
    """
    listing = obtain_listing(config, force_refresh=force_refresh, session=session)
    selected = platform.select_interactively(listing)
    link = parse_selection(selected)
    platform.open_link(link)
    return link
