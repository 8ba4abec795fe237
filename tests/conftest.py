import codecs  # Import codecs for BOM
import json

import pytest
import requests

from cdn77_refresh.config import DEFAULT_API_URL, RefreshConfig


# Helper class for mocking requests.get / requests.post
class MockResponse:
    def __init__(self, body, status_code=200, read_error=None):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._content = body
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self.read_error = read_error
        self.closed = False

    @property
    def content(self):
        # Simulates a connection dropping while the body is streamed
        if self.read_error is not None:
            raise self.read_error
        return self._content

    def raise_for_status(self):
        if not self.ok:
            raise requests.exceptions.HTTPError(f"{self.status_code} Client Error")

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


SITEMAP_TWO_URLS = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
   <url><loc>https://a.com/1</loc><lastmod>2024-01-01</lastmod></url>
   <url><loc>https://a.com/2</loc><priority>0.5</priority></url>
</urlset>"""

BOM_SITEMAP = codecs.BOM_UTF8 + (
    """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
   <url><loc>http://bom.com/page1</loc></url>
</urlset>""".encode(
        "utf-8"
    )
)


class FakeCdn77:
    """In-memory stand-in for the CDN77 API and for remote sitemaps.

    Bodies can be replaced per test; an entry in ``errors`` keyed by URL makes
    the request itself raise. Every call is recorded in ``calls`` as
    ``(method, url, params)``.
    """

    def __init__(self):
        self.api_url = DEFAULT_API_URL.rstrip("/")
        self.bodies = {
            self.api_url + "/cdn-resource/list": {
                "status": "ok",
                "description": "Request was successful.",
                "cdnResources": [
                    {"id": 1, "cname": "other.example"},
                    {"id": 5, "cname": "Site.Example"},
                ],
            },
            self.api_url + "/data/purge-all": {
                "status": "ok",
                "description": "Purge is accepted.",
            },
            self.api_url + "/data/prefetch": {"status": "ok", "description": "queued"},
            "https://a.com/sitemap.xml": SITEMAP_TWO_URLS,
            "http://bom.com/sitemap.xml": BOM_SITEMAP,
            "http://badxml.com/sitemap.xml": "<urlset><unclosed-tag</urlset>",
        }
        self.responses = {
            "http://notfound.com/sitemap.xml": MockResponse("Not Found", 404),
            "http://dropped.com/sitemap.xml": MockResponse(
                b"", read_error=requests.exceptions.ChunkedEncodingError("dropped")
            ),
        }
        self.errors = {
            "http://error.com/sitemap.xml": requests.exceptions.ConnectionError(
                "Network error"
            ),
        }
        self.calls = []

    def endpoint(self, path):
        return self.api_url + path

    def calls_to(self, path):
        return [call for call in self.calls if call[1] == self.endpoint(path)]

    def _respond(self, method, url, params):
        self.calls.append((method, url, params))
        if url in self.errors:
            raise self.errors[url]
        if url in self.responses:
            return self.responses[url]
        if url in self.bodies:
            return MockResponse(self.bodies[url])
        print(f"WARN: Unexpected URL requested in test: {url}")
        return MockResponse("<root/>", status_code=404)

    def get(self, url, params=None, **kwargs):  # Accept **kwargs for timeout/headers
        return self._respond("GET", url, params)

    def post(self, url, data=None, **kwargs):
        return self._respond("POST", url, data)


@pytest.fixture
def fake_api(monkeypatch):
    """Patches requests.get and requests.post to answer from a FakeCdn77."""
    api = FakeCdn77()
    monkeypatch.setattr(requests, "get", api.get)
    monkeypatch.setattr(requests, "post", api.post)
    return api


@pytest.fixture
def sitemap_file(tmp_path):
    path = tmp_path / "sitemap.xml"
    path.write_text(SITEMAP_TWO_URLS, encoding="utf-8")
    return path


@pytest.fixture
def base_config(sitemap_file):
    return RefreshConfig(
        login="me@example.com",
        token="secret",
        site="site.example",
        sitemap=str(sitemap_file),
    )
