"""Console logging for a refresh run.

One line per event, ``<timestamp> | <LEVEL> | <message>``, on stdout. The
logger is built per run by :func:`configure` and handed to the components
that need it.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import Final, TextIO

LOGGER_NAME: Final[str] = "cdn77_refresh"
LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-6s| %(message)s"


class _Rfc3339Formatter(logging.Formatter):
    """Timestamps as RFC 3339 in local time, e.g. ``2024-05-01T12:00:00+02:00``."""

    def formatTime(self, record, datefmt=None):
        created = datetime.fromtimestamp(record.created).astimezone()
        return created.isoformat(timespec="seconds")


def configure(*, verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """(Re)configure and return the run logger.

    Parameters
    ----------
    verbose
        *True* lowers the level to DEBUG, which also shows request endpoints.
    stream
        Output stream, stdout by default.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(logging.DEBUG if verbose else logging.INFO)
    lg.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(_Rfc3339Formatter(LOG_FORMAT))
    lg.addHandler(handler)

    lg.propagate = False
    return lg
