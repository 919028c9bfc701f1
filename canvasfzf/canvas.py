from __future__ import annotations

import logging
from typing import Any, Iterator, List, Optional

import requests

from canvasfzf.config import Config
from canvasfzf.errors import ApiError, TransportError
from canvasfzf.model import Course, ModuleItem, format_listing

LOGGER = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Canvas REST API
# ---------------------------------------------------------------------------

MODULES_ENDPOINT = "{base_url}/api/v1/courses/{course_id}/modules"

# One page is assumed to hold every module of a course.
MODULES_PARAMS = {"include[]": "items", "per_page": "100"}


def make_session(token: str) -> requests.Session:
    """
    Create a requests session that authenticates with the bearer token.
    """
    session = requests.Session()
    session.headers.update({"Authorization": f"Bearer {token}"})
    return session


def fetch_course_modules(session: requests.Session, base_url: str, course_id: int) -> List[Any]:
    """
    Load the modules (with embedded items) of one course.

    Returns:
        The decoded JSON array of module objects.
    """
    url = MODULES_ENDPOINT.format(base_url=base_url, course_id=course_id)
    try:
        resp = session.get(url, params=MODULES_PARAMS)
    except requests.RequestException as exc:
        raise TransportError(f"cannot reach Canvas for course {course_id}: {exc}") from exc

    if not resp.ok:
        raise ApiError(
            f"Canvas returned HTTP {resp.status_code} for course {course_id}",
            status_code=resp.status_code,
        )

    try:
        modules = resp.json()
    except ValueError as exc:
        raise ApiError(f"invalid JSON in modules response for course {course_id}") from exc

    if not isinstance(modules, list):
        raise ApiError(f"expected a list of modules for course {course_id}, got {type(modules).__name__}")

    return modules


# ---------------------------------------------------------------------------
# Flattening
# ---------------------------------------------------------------------------


def items_from_modules(modules: List[Any], course: Course) -> Iterator[ModuleItem]:
    """
    Flatten modules into ModuleItems, keeping API order.

    Items without a string title or html_url (sub-headers, dividers, ...)
    are skipped. A module without an items list (Canvas only sends items_url
    for very large modules) is an ApiError.
    """
    for module in modules:
        if not isinstance(module, dict):
            raise ApiError(f"malformed module entry in course {course.course_id}")

        items = module.get("items")
        if not isinstance(items, list):
            raise ApiError(f"malformed items of module {module.get('id')!r} in course {course.course_id}")

        for item in items:
            if not isinstance(item, dict):
                continue
            title = item.get("title")
            link = item.get("html_url")
            if not isinstance(title, str) or not isinstance(link, str):
                LOGGER.debug("Skipping item without title/link in %s: %r", course.name, item.get("id"))
                continue

            yield ModuleItem(title=title, link=link, course_name=course.name)


def build_listing(config: Config, session: Optional[requests.Session] = None) -> str:
    """
    Fetch every configured course (in configured order) and build the listing.

    The first failing course aborts the whole aggregation. The caller is
    responsible for caching the result.
    """
    if session is None:
        session = make_session(config.token)

    items: List[ModuleItem] = []
    for course in config.courses:
        modules = fetch_course_modules(session, config.api_url, course.course_id)
        found = list(items_from_modules(modules, course))
        LOGGER.info("FETCH %s (%d): %d items", course.name, course.course_id, len(found))
        items.extend(found)

    return format_listing(items)
