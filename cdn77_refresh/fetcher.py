"""Module for reading sitemap content from a URL or a local file.

A source whose trimmed, lower-cased form starts with ``http://`` or
``https://`` is downloaded; anything else is opened as a file path.
"""

from __future__ import annotations

import logging

import requests

from .config import DEFAULT_USER_AGENT
from .errors import ExitCode, TransportError

_REMOTE_PREFIXES = ("http://", "https://")


def is_remote(source: str) -> bool:
    """Tells whether *source* names an HTTP(S) resource."""
    return source.strip().lower().startswith(_REMOTE_PREFIXES)


class SitemapFetcher:
    """Reads raw sitemap bytes over HTTP(S) or from disk."""

    def __init__(
        self,
        *,
        timeout: float = 30,
        user_agent: str | None = None,
        logger: logging.Logger | None = None,
    ):
        """Create a new ``SitemapFetcher``.

        Parameters
        ----------
        timeout
            Maximum seconds to wait for an HTTP response.
        user_agent
            Custom *User-Agent* header value. If *None*, the default string
            containing the contact e-mail from the ``EMAIL`` env var is used.
        logger
            Logger for debug output.
        """
        self.timeout = timeout
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.logger = logger or logging.getLogger(__name__)

        # Prepared headers dict reused across requests
        self._headers = {"User-Agent": self.user_agent}

    def fetch(self, source: str) -> bytes:
        """Return the full content of *source*.

        Raises
        ------
        TransportError
            ``SITEMAP_OPEN`` when the request or the open fails,
            ``SITEMAP_READ`` when reading the body fails.
        """
        if is_remote(source):
            return self._fetch_url(source.strip())
        return self._read_file(source)

    def _fetch_url(self, url: str) -> bytes:
        self.logger.debug("GET %s", url)
        try:
            resp = requests.get(
                url, timeout=self.timeout, headers=self._headers, stream=True
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e), ExitCode.SITEMAP_OPEN) from e

        with resp:
            try:
                resp.raise_for_status()  # Raise HTTPError for bad responses (4xx or 5xx)
            except requests.exceptions.HTTPError as e:
                raise TransportError(str(e), ExitCode.SITEMAP_OPEN) from e
            try:
                return resp.content
            except requests.exceptions.RequestException as e:
                raise TransportError(str(e), ExitCode.SITEMAP_READ) from e

    def _read_file(self, path: str) -> bytes:
        if not path:
            raise TransportError("no sitemap given", ExitCode.SITEMAP_OPEN)
        self.logger.debug("Opening %s", path)
        try:
            fp = open(path, "rb")
        except OSError as e:
            raise TransportError(str(e), ExitCode.SITEMAP_OPEN) from e

        with fp:
            try:
                return fp.read()
            except OSError as e:
                raise TransportError(str(e), ExitCode.SITEMAP_READ) from e
