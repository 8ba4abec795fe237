"""Exception types and the exit codes reserved for each failure point.

Every stage of a run has its own exit status so that a calling script can
tell where a run stopped from the status alone.
"""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple


class ExitCode(IntEnum):
    """Process exit statuses, one per failure point."""

    SUCCESS = 0x00
    CONFIG = 0x02

    LIST_TRANSPORT = 0xE1
    LIST_READ = 0xE2
    LIST_DECODE = 0xE3
    LIST_STATUS = 0xF0

    NOT_FOUND = 0xA0

    PURGE_TRANSPORT = 0xB0
    PURGE_DECODE = 0xB1
    PURGE_STATUS = 0xB2

    SITEMAP_OPEN = 0xC0
    SITEMAP_READ = 0xC1
    SITEMAP_DECODE = 0xC2

    PREFETCH_TRANSPORT = 0xD0
    PREFETCH_DECODE = 0xD1
    PREFETCH_STATUS = 0xD2


class CallCodes(NamedTuple):
    """Exit codes and status wording of a single API call."""

    transport: ExitCode
    read: ExitCode
    decode: ExitCode
    status: ExitCode
    # how a non-"ok" answer reads in the log
    status_format: str = "{status}: {description}"


LIST_CODES = CallCodes(
    ExitCode.LIST_TRANSPORT,
    ExitCode.LIST_READ,
    ExitCode.LIST_DECODE,
    ExitCode.LIST_STATUS,
)
# purge and prefetch have no separate read failure
PURGE_CODES = CallCodes(
    ExitCode.PURGE_TRANSPORT,
    ExitCode.PURGE_TRANSPORT,
    ExitCode.PURGE_DECODE,
    ExitCode.PURGE_STATUS,
)
PREFETCH_CODES = CallCodes(
    ExitCode.PREFETCH_TRANSPORT,
    ExitCode.PREFETCH_TRANSPORT,
    ExitCode.PREFETCH_DECODE,
    ExitCode.PREFETCH_STATUS,
    "{status} ({description})",
)


class RefreshError(Exception):
    """Base class for every fatal error of a run.

    Parameters
    ----------
    detail
        Underlying error text (exception message or API description).
    exit_code
        Status the process exits with when this error reaches ``main``.
    """

    def __init__(self, detail: str, exit_code: ExitCode):
        super().__init__(detail)
        self.detail = detail
        self.exit_code = exit_code
        self.stage = ""
        self.suffix = ""

    def during(self, stage: str, suffix: str = "") -> "RefreshError":
        """Attach the stage message the error line starts with."""
        self.stage = stage
        self.suffix = suffix
        return self

    @property
    def message(self) -> str:
        return f"{self.stage}{self.detail}{self.suffix}"


class ConfigError(RefreshError):
    def __init__(self, detail: str):
        super().__init__(detail, ExitCode.CONFIG)


class TransportError(RefreshError):
    """Network or file I/O failure."""


class DecodeError(RefreshError):
    """Malformed JSON or XML."""


class ApiStatusError(RefreshError):
    """The API answered with a status other than ``"ok"``."""

    def __init__(
        self,
        status: str,
        description: str,
        exit_code: ExitCode,
        status_format: str = "{status}: {description}",
    ):
        super().__init__(
            status_format.format(status=status, description=description), exit_code
        )
        self.status = status
        self.description = description


class NotFoundError(RefreshError):
    """No CDN resource matches the configured site."""

    def __init__(self, detail: str = "not found"):
        super().__init__(detail, ExitCode.NOT_FOUND)
