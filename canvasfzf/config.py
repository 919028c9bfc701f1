"""
Configuration loaded from the environment (and an optional .env file).

Expected variables:

    TOKEN           Canvas API access token
    CANVAS_API_URL  e.g. https://canvas.example.edu
    COURSE_IDS      comma separated course ids, e.g. "101, 202"
    COURSE_NAMES    comma separated display names, same order, e.g. "Algorithms, Databases"
    CANVAS_FZF_DIR  working directory holding .env, the cache and helper scripts (optional)
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from canvasfzf.errors import ConfigurationError
from canvasfzf.model import Course


def _default_work_dir() -> Path:
    """
    Return the default working directory (~/git/canvas-fuzzy-finder).
    """
    return Path.home() / "git" / "canvas-fuzzy-finder"


@dataclass(frozen=True)
class Config:
    """
    Immutable settings for one run.
    """

    token: str
    api_url: str
    courses: Tuple[Course, ...]
    work_dir: Path
    system: str


def _split_list(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",")]


def parse_courses(ids_raw: str, names_raw: str) -> Tuple[Course, ...]:
    """
    Build Course objects from the parallel COURSE_IDS / COURSE_NAMES lists.
    """
    ids = _split_list(ids_raw)
    names = _split_list(names_raw)

    if len(ids) != len(names):
        raise ConfigurationError(
            f"COURSE_IDS has {len(ids)} entries but COURSE_NAMES has {len(names)}"
        )

    courses: list[Course] = []
    for raw_id, name in zip(ids, names):
        try:
            course_id = int(raw_id)
        except ValueError as exc:
            raise ConfigurationError(f"invalid course id {raw_id!r} in COURSE_IDS") from exc
        if course_id <= 0:
            raise ConfigurationError(f"course id must be positive, got {course_id}")
        if not name:
            raise ConfigurationError(f"empty course name for course id {course_id}")
        courses.append(Course(course_id=course_id, name=name))

    return tuple(courses)


def _require(env: Mapping[str, str], key: str) -> str:
    value = (env.get(key) or "").strip()
    if not value:
        raise ConfigurationError(f"{key} is required")
    return value


def load_config(work_dir: str | Path | None = None, env: Optional[Mapping[str, str]] = None) -> Config:
    """
    Load the configuration.

    When env is None the process environment is used, after loading
    <work_dir>/.env (variables already set in the environment win).
    Passing env explicitly skips the .env file, which keeps tests isolated.
    """
    if work_dir is None:
        source = os.environ if env is None else env
        configured = (source.get("CANVAS_FZF_DIR") or "").strip()
        work_dir = Path(configured).expanduser() if configured else _default_work_dir()
    work_path = Path(work_dir).expanduser()

    if env is None:
        load_dotenv(work_path / ".env")
        env = os.environ

    token = _require(env, "TOKEN")
    api_url = _require(env, "CANVAS_API_URL").rstrip("/")
    courses = parse_courses(_require(env, "COURSE_IDS"), _require(env, "COURSE_NAMES"))

    return Config(
        token=token,
        api_url=api_url,
        courses=courses,
        work_dir=work_path,
        system=sys.platform,
    )
