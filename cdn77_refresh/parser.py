"""Module for parsing sitemap XML content."""

import xml.etree.ElementTree as ET
from typing import List

from .errors import DecodeError, ExitCode


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class SitemapParser:
    """Parses ``<urlset>`` documents into lists of page URLs."""

    def parse(self, content: bytes) -> ET.Element:
        """Parses raw bytes into the root XML element.

        Args:
            content: The sitemap document as read from disk or the network.

        Returns:
            The root element.

        Raises:
            DecodeError: If the content is not well-formed XML.
        """
        try:
            return ET.fromstring(content)
        except ET.ParseError:
            # A UTF-8 BOM in front of the declaration trips the byte parser;
            # the decoded text parses fine.
            try:
                return ET.fromstring(content.decode("utf-8-sig"))
            except (ET.ParseError, UnicodeDecodeError) as e:
                raise DecodeError(str(e), ExitCode.SITEMAP_DECODE) from e

    def is_urlset(self, element: ET.Element) -> bool:
        """Checks if the given XML element is a ``<urlset>``, with or without namespace."""
        return _local_name(element.tag) == "urlset"

    def extract_urls(self, element: ET.Element) -> List[str]:
        """Extracts the ``<loc>`` of every ``<url>`` child of a urlset, in document order.

        Other fields (lastmod, changefreq, priority) are ignored, as are
        ``<url>`` entries without a location.
        """
        urls = []
        for url in element:
            if _local_name(url.tag) != "url":
                continue
            for child in url:
                if _local_name(child.tag) == "loc" and child.text and child.text.strip():
                    urls.append(child.text.strip())
                    break
        return urls

    def parse_urls(self, content: bytes) -> List[str]:
        """Parses a sitemap document and returns its page URLs.

        Raises:
            DecodeError: If the content is malformed or its root is not ``urlset``.
        """
        root = self.parse(content)
        if not self.is_urlset(root):
            raise DecodeError(
                f"expected element type <urlset> but have <{_local_name(root.tag)}>",
                ExitCode.SITEMAP_DECODE,
            )
        return self.extract_urls(root)
