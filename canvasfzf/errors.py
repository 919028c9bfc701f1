"""
Error hierarchy for canvasfzf.

Every error is fatal for the current run: nothing is retried, and the CLI
reports the message on stderr and exits with a non-zero status.
"""

from __future__ import annotations

from typing import Optional


class CanvasFzfError(Exception):
    """Base exception for all canvasfzf errors."""


class ConfigurationError(CanvasFzfError):
    """Missing or malformed environment values (token, URL, course lists)."""


class UnsupportedPlatformError(ConfigurationError):
    """The operating system has no selector/opener implementation."""


class TransportError(CanvasFzfError):
    """The Canvas API could not be reached."""


class ApiError(CanvasFzfError):
    """
    The Canvas API answered with a non-success status or an unexpected body.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FilesystemError(CanvasFzfError):
    """Reading or writing the cache or selector exchange files failed."""


class ExternalToolError(CanvasFzfError):
    """The selector helper or the link opener could not be launched."""


class SelectionParseError(CanvasFzfError):
    """The selector returned a line without a link field."""
