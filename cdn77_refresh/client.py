"""Client for the three CDN77 API calls a refresh run needs.

Credentials travel as request parameters (``login`` and ``passwd``). Every
answer is a JSON object with a ``status`` and a ``description``; anything
other than ``"ok"`` is reported as :class:`~cdn77_refresh.errors.ApiStatusError`.
HTTP status codes are not checked, the body is always decoded so that the
API's own description reaches the log.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from .config import DEFAULT_API_URL, DEFAULT_USER_AGENT
from .errors import (
    LIST_CODES,
    PREFETCH_CODES,
    PURGE_CODES,
    ApiStatusError,
    CallCodes,
    DecodeError,
    TransportError,
)
from .models import ApiResponse, ResourceList

RESOURCE_LIST_PATH = "/cdn-resource/list"
PURGE_ALL_PATH = "/data/purge-all"
PREFETCH_PATH = "/data/prefetch"


class Cdn77Client:
    """Calls the CDN77 API on behalf of one account."""

    def __init__(
        self,
        login: str,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30,
        user_agent: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.login = login
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self._headers = {"User-Agent": user_agent or DEFAULT_USER_AGENT}

    @property
    def credentials(self) -> Dict[str, str]:
        return {"login": self.login, "passwd": self.token}

    def _call(
        self, method: str, path: str, params: Dict[str, Any], codes: CallCodes
    ) -> Dict[str, Any]:
        """Send one request and return the decoded JSON object."""
        url = self.api_url + path
        self.logger.debug("%s %s", method, url)

        try:
            if method == "GET":
                resp = requests.get(
                    url,
                    params=params,
                    timeout=self.timeout,
                    headers=self._headers,
                    stream=True,
                )
            else:
                resp = requests.post(
                    url,
                    data=params,
                    timeout=self.timeout,
                    headers=self._headers,
                    stream=True,
                )
        except requests.exceptions.RequestException as e:
            raise TransportError(str(e), codes.transport) from e

        with resp:
            try:
                body = resp.content
            except requests.exceptions.RequestException as e:
                raise TransportError(str(e), codes.read) from e

        try:
            data = json.loads(body)
        except ValueError as e:
            raise DecodeError(str(e), codes.decode) from e
        if not isinstance(data, dict):
            raise DecodeError(
                f"expected a JSON object, got {type(data).__name__}", codes.decode
            )
        return data

    @staticmethod
    def _check_status(envelope: ApiResponse, codes: CallCodes) -> None:
        if not envelope.ok:
            raise ApiStatusError(
                envelope.status, envelope.description, codes.status, codes.status_format
            )

    def list_resources(self) -> ResourceList:
        """Fetch every CDN resource of the account."""
        data = self._call("GET", RESOURCE_LIST_PATH, self.credentials, LIST_CODES)
        try:
            resources = ResourceList.from_json(data)
        except ValueError as e:
            raise DecodeError(str(e), LIST_CODES.decode) from e
        self._check_status(resources, LIST_CODES)
        return resources

    def purge_all(self, cdn_id: str) -> ApiResponse:
        """Invalidate all cached content of resource *cdn_id*."""
        params = dict(self.credentials, cdn_id=cdn_id)
        envelope = ApiResponse.from_json(
            self._call("POST", PURGE_ALL_PATH, params, PURGE_CODES)
        )
        self._check_status(envelope, PURGE_CODES)
        return envelope

    def prefetch(self, cdn_id: str, urls: List[str]) -> ApiResponse:
        """Queue *urls* for prefetch on resource *cdn_id* in a single request."""
        params = dict(self.credentials, cdn_id=cdn_id)
        params["url[]"] = list(urls)
        envelope = ApiResponse.from_json(
            self._call("POST", PREFETCH_PATH, params, PREFETCH_CODES)
        )
        self._check_status(envelope, PREFETCH_CODES)
        return envelope
