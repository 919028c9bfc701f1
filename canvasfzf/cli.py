"""
CLI (Command Line Interface).

    canvasfzf               pick a module item with fzf and open it
    canvasfzf --refresh     ignore the cached listing and refetch from Canvas
    canvasfzf --print       print the listing instead of launching the selector
    canvasfzf --dir PATH    use another working directory (.env, cache, helper scripts)

Errors are reported on stderr and the process exits with status 1.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.logging import RichHandler

from canvasfzf.app import obtain_listing, run
from canvasfzf.config import load_config
from canvasfzf.errors import CanvasFzfError
from canvasfzf.platforms import detect_platform

LOGGER = logging.getLogger(__name__)

err_console = Console(stderr=True)


def _setup_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser.
    """
    parser = argparse.ArgumentParser(
        prog="canvasfzf",
        description="Fuzzy-find Canvas module items and open them in the browser",
    )
    parser.add_argument("--refresh", action="store_true", help="Refetch from Canvas even if the cache is fresh")
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print the listing and exit")
    parser.add_argument("--dir", dest="work_dir", type=str, default=None, help="Working directory")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    return parser


def _main(args: argparse.Namespace) -> int:
    config = load_config(work_dir=args.work_dir)

    if args.print_only:
        listing = obtain_listing(config, force_refresh=args.refresh)
        print(listing, end="")
        return 0

    platform = detect_platform(config.work_dir, config.system)
    run(config, platform, force_refresh=args.refresh)
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI entry point. Exits via SystemExit with a return code.
    """
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    try:
        code = _main(args)
    except CanvasFzfError as exc:
        LOGGER.debug("Aborted", exc_info=True)
        err_console.print(f"[bold red]error:[/bold red] {escape(str(exc))}", markup=True, highlight=False)
        code = 1

    raise SystemExit(code)
