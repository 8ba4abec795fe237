"""Module running a refresh: resolve the resource, purge, prefetch the sitemap."""

import logging
from typing import List, Optional

from .client import Cdn77Client
from .config import RefreshConfig
from .errors import RefreshError
from .fetcher import SitemapFetcher
from .models import ResourceList
from .parser import SitemapParser
from .resolver import resolve_cdn_id


class CacheRefresher:
    """Runs the stages of a refresh in order, stopping at the first failure.

    Every stage logs one line when it succeeds. When it fails it raises a
    :class:`~cdn77_refresh.errors.RefreshError` whose ``message`` is the
    stage line followed by the cause; logging it and exiting is left to the
    caller.

    The API client and the sitemap fetcher/parser can be injected, which
    keeps unit tests free of module-level patching:

    >>> refresher = CacheRefresher(cfg, logger, client=Mock(), fetcher=Mock())
    """

    def __init__(
        self,
        config: RefreshConfig,
        logger: logging.Logger,
        *,
        client: Optional[Cdn77Client] = None,
        fetcher: Optional[SitemapFetcher] = None,
        parser: Optional[SitemapParser] = None,
    ):
        self.config = config
        self.logger = logger

        # Use injected dependencies or fall back to concrete implementations
        self.client = (
            client
            if client is not None
            else Cdn77Client(
                config.login,
                config.token,
                api_url=config.api_url,
                timeout=config.timeout,
                user_agent=config.user_agent,
                logger=logger,
            )
        )
        self.fetcher = (
            fetcher
            if fetcher is not None
            else SitemapFetcher(
                timeout=config.timeout, user_agent=config.user_agent, logger=logger
            )
        )
        self.parser = parser if parser is not None else SitemapParser()

    # --- Stages ---
    def list_resources(self) -> ResourceList:
        message = "Reading resource list from CDN77 ... "
        try:
            resources = self.client.list_resources()
        except RefreshError as e:
            raise e.during(message)
        self.logger.info(message + "ok")
        return resources

    def resolve_id(self, resources: ResourceList) -> str:
        message = f"Searching for {self.config.site} ... "
        try:
            cdn_id = resolve_cdn_id(self.config.site, resources.resources)
        except RefreshError as e:
            raise e.during(message, ", aborting")
        self.logger.info(f"{message}ok (resource id #{cdn_id})")
        return cdn_id

    def purge_all(self, cdn_id: str) -> None:
        message = "Starting 'purge-all' ... "
        try:
            response = self.client.purge_all(cdn_id)
        except RefreshError as e:
            raise e.during(message, ", aborting")
        self.logger.info(message + "ok" + self._details(response.description))

    def load_urls(self) -> List[str]:
        """Read the sitemap and return its page URLs in document order."""
        message = f"Reading '{self.config.sitemap}' ... "
        try:
            content = self.fetcher.fetch(self.config.sitemap)
            urls = self.parser.parse_urls(content)
        except RefreshError as e:
            raise e.during(message, ", aborting")
        self.logger.info(message + "ok")
        return urls

    def prefetch(self, cdn_id: str, urls: List[str]) -> None:
        message = "Prefetching "
        if self.config.verbose:
            message += ", ".join(f"'{url}'" for url in urls)
        message += " ... "
        try:
            response = self.client.prefetch(cdn_id, urls)
        except RefreshError as e:
            raise e.during(message)
        self.logger.info(message + "ok" + self._details(response.description))

    def _details(self, description: str) -> str:
        return f" ({description})" if self.config.verbose else ""

    def run(self) -> None:
        """Runs every stage; a purge that succeeded stays applied if a later stage fails."""
        resources = self.list_resources()
        cdn_id = self.resolve_id(resources)

        if self.config.purge_all:
            self.purge_all(cdn_id)

        self.prefetch(cdn_id, self.load_urls())
        self.logger.info("End.")
