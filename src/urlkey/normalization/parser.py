"""
URL parsing and canonicalization.

Turns an arbitrary URL-like string into a CanonicalURL:
- Strip fragment, query and scheme before looking at the host
- Split path and trailing page segment
- Detect IPv6 and IPv4 literals, elide default ports (80, 443)
- Convert Unicode domains to punycode
- Validate the host, returning the reset value on failure
"""

import ipaddress
import logging
from typing import Optional

from .transcoder import ACE_PREFIX, IDNATranscoder
from .url import CanonicalURL

logger = logging.getLogger(__name__)

MAX_HOST_LENGTH = 253

# Ports that do not distinguish one URL from another
DEFAULT_PORTS = frozenset({"80", "443"})

# Characters that mark the last path segment as a page
PAGE_MARKERS = frozenset(".-_")


class URLParser:
    """
    URL parsing and canonicalization engine.

    The parser never raises on bad input. A failed parse returns the reset
    value ``CanonicalURL()``, which is falsy.

    Usage:
        parser = URLParser()
        url = parser.parse("http://www.Example.com:443/path/logo.jpg?q=1#top")
        print(url.host)      # www.example.com
        print(url.page)      # logo.jpg
        print(url.to_url())  # www.example.com/path/logo.jpg
    """

    def __init__(
        self,
        transcoder: Optional[IDNATranscoder] = None,
        suppress_transcoding: bool = False,
    ):
        """
        Initialize parser.

        Args:
            transcoder: Shared IDNA transcoder (creates a new one if None)
            suppress_transcoding: Never transcode domain labels by default
        """
        self.transcoder = transcoder or IDNATranscoder()
        self.suppress_transcoding = suppress_transcoding

    def parse(
        self, raw: str, suppress_transcoding: Optional[bool] = None
    ) -> CanonicalURL:
        """
        Parse a raw URL or host string.

        Args:
            raw: URL-like string, with or without scheme
            suppress_transcoding: Per-call override of the parser default

        Returns:
            CanonicalURL, or the reset value CanonicalURL() if the input has no
            usable host
        """
        if not isinstance(raw, str):
            return CanonicalURL()

        if suppress_transcoding is None:
            suppress_transcoding = self.suppress_transcoding

        url = raw

        idx = url.find("#")
        if idx > 0:
            url = url[:idx]

        idx = url.find("?")
        if idx > 0:
            url = url[:idx]

        idx = url.find("://")
        if idx > -1:
            url = url[idx + 3 :]

        path = ""
        idx = url.find("/")
        if idx > 0:
            path = url[idx + 1 :]
            url = url[:idx]

        path, page = self._split_page(path)

        url = url.lower().strip()

        # More than one colon can only be an IPv6 literal
        if url.count(":") > 1:
            return self._parse_ipv6(url, path, page)

        port = ""
        idx = url.find(":")
        if idx > -1:
            port = self._normalize_port(url[idx + 1 :])
            url = url[:idx]

        if self._is_ipv4(url):
            return CanonicalURL(host=url, port=port, path=path, page=page, is_ip=True)

        # Drop the DNS root dot
        if url.endswith("."):
            url = url[:-1]

        host = url
        is_transcoded = False
        if not suppress_transcoding:
            ascii_host = self.transcoder.to_ascii(url)
            if ascii_host is not None:
                host = ascii_host
                is_transcoded = host != url and host.startswith(ACE_PREFIX)

        if not self._is_valid_host(host):
            logger.debug(f"Rejected URL '{raw}': no usable host")
            return CanonicalURL()

        return CanonicalURL(
            host=host,
            port=port,
            path=path,
            page=page,
            is_transcoded=is_transcoded,
        )

    def _parse_ipv6(self, url: str, path: str, page: str) -> CanonicalURL:
        """
        Build the value for an IPv6-shaped host.

        The literal is accepted as-is, without checking it against the IPv6
        grammar.
        """
        port = ""
        idx = url.find("]:")
        if idx > 0:
            port = self._normalize_port(url[idx + 2 :])
            url = url[:idx]

        # Remove zone id
        idx = url.find("%")
        if idx > 0:
            url = url[:idx]

        host = url.strip("[]")
        if not host:
            return CanonicalURL()

        return CanonicalURL(
            host=host, port=port, path=path, page=page, is_ip=True, is_ipv6=True
        )

    @staticmethod
    def _split_page(path: str) -> tuple[str, str]:
        """
        Split a trailing page segment off the path.

        Args:
            path: Path without its leading slash

        Returns:
            (path, page) where page is empty unless the path has more than one
            segment and the last one contains one of '.', '-', '_'
        """
        if "/" not in path:
            return path, ""

        head, _, last = path.rpartition("/")
        if PAGE_MARKERS.isdisjoint(last):
            return path, ""

        return head, last

    @staticmethod
    def _normalize_port(port: str) -> str:
        """Return the port, or an empty string for default ports."""
        if port in DEFAULT_PORTS:
            return ""
        return port

    @staticmethod
    def _is_ipv4(host: str) -> bool:
        """Check for a dotted-quad IPv4 literal."""
        try:
            ipaddress.IPv4Address(host)
        except ValueError:
            return False
        return True

    @staticmethod
    def _is_valid_host(host: str) -> bool:
        """Final validation: non-empty, within DNS length, has a separator."""
        if not host or len(host) > MAX_HOST_LENGTH:
            return False
        return "." in host or ":" in host
