"""
Platform-specific selector and link opener.

The selection UI is an external fzf helper script living in the working
directory. The hand-off is file based:

    listing  -> <work_dir>/buf                 (read by the helper)
    helper   -> <work_dir>/title-url-name.txt  (the chosen line)

One Platform is chosen at startup by detect_platform() and used for the
whole run.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from canvasfzf.errors import ExternalToolError, FilesystemError, UnsupportedPlatformError

LOGGER = logging.getLogger(__name__)

EXCHANGE_FILENAME = "buf"
RESULT_FILENAME = "title-url-name.txt"


def _run(cmd: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """
    Run an external command synchronously; launch failures become ExternalToolError.
    """
    LOGGER.debug("Running %s", cmd)
    try:
        return subprocess.run(cmd, cwd=cwd, check=False)
    except OSError as exc:
        raise ExternalToolError(f"cannot run {cmd[0]!r}: {exc}") from exc


class Platform(ABC):
    """
    Capability set every supported OS provides.
    """

    name = "abstract"

    def __init__(self, work_dir: str | Path) -> None:
        self.work_dir = Path(work_dir)

    @property
    def exchange_path(self) -> Path:
        return self.work_dir / EXCHANGE_FILENAME

    @property
    def result_path(self) -> Path:
        return self.work_dir / RESULT_FILENAME

    @abstractmethod
    def selector_command(self) -> List[str]:
        """Command line that launches the interactive selector helper."""

    @abstractmethod
    def opener_command(self, url: str) -> List[str]:
        """Command line that opens url with the default handler."""

    def _write_exchange(self, listing: str) -> None:
        # Leave an identical file untouched so its mtime (the cache age) is kept.
        path = self.exchange_path
        try:
            if path.exists() and path.read_text(encoding="utf-8") == listing:
                return
            path.write_text(listing, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FilesystemError(f"cannot write selector input {path}: {exc}") from exc

    def _discard_result(self) -> None:
        try:
            self.result_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise FilesystemError(f"cannot remove {self.result_path}: {exc}") from exc

    def select_interactively(self, listing: str) -> str:
        """
        Let the user pick one line of the listing and return it (stripped).

        Blocks until the helper exits. An empty string means nothing was chosen.
        """
        self._discard_result()
        self._write_exchange(listing)
        try:
            proc = _run(self.selector_command(), cwd=self.work_dir)
            if proc.returncode != 0:
                LOGGER.info("Selector exited with status %d", proc.returncode)
            try:
                selected = self.result_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise FilesystemError(f"cannot read selector result {self.result_path}: {exc}") from exc
        except BaseException:
            # keep the original error, the leftover result file is only logged
            try:
                self._discard_result()
            except FilesystemError as cleanup_exc:
                LOGGER.warning("%s", cleanup_exc)
            raise

        self._discard_result()
        return selected.strip()

    def open_link(self, url: str) -> None:
        """
        Open url with the platform's default handler (exit status is not checked).
        """
        LOGGER.info("Opening %s", url)
        _run(self.opener_command(url))


class WindowsPlatform(Platform):
    name = "windows"

    def selector_command(self) -> List[str]:
        return ["pwsh", "-File", str(self.work_dir / "fzf-to-title-url-name.ps1")]

    def opener_command(self, url: str) -> List[str]:
        return ["explorer", url]


class MacOSPlatform(Platform):
    name = "macos"

    def selector_command(self) -> List[str]:
        return ["kitty", "sh", str(self.work_dir / "fzf-to-title-url-name.sh")]

    def opener_command(self, url: str) -> List[str]:
        return ["open", url]


class LinuxPlatform(Platform):
    name = "linux"

    def selector_command(self) -> List[str]:
        return ["kitty", "sh", str(self.work_dir / "fzf-to-title-url-name.sh")]

    def opener_command(self, url: str) -> List[str]:
        return ["xdg-open", url]


def detect_platform(work_dir: str | Path, system: Optional[str] = None) -> Platform:
    """
    Pick the Platform for the running OS (or for the given sys.platform value).
    """
    system = sys.platform if system is None else system
    if system in ("win32", "cygwin"):
        return WindowsPlatform(work_dir)
    if system == "darwin":
        return MacOSPlatform(work_dir)
    if system.startswith("linux"):
        return LinuxPlatform(work_dir)
    raise UnsupportedPlatformError(f"platform {system!r} is not supported")
