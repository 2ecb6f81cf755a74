"""
Canonical URL value.

A CanonicalURL is either fully valid (non-empty host) or fully reset (every
field at its zero value). Instances are immutable; the helper methods return
rewritten copies without re-validating them.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class CanonicalURL:
    """
    Canonical URL components.

    Attributes:
        host: Lowercase host; IPv6 literals without brackets or zone id
        port: Port digits, empty when absent or a default port (80, 443)
        path: Directory part of the path, without the separating slash
        page: Final path segment when it looks like a page (has '.', '-' or '_')
        is_ip: Host is a literal IPv4 or IPv6 address
        is_ipv6: Host is an IPv6 literal
        is_transcoded: Host was converted from Unicode to punycode
    """

    host: str = ""
    port: str = ""
    path: str = ""
    page: str = ""
    is_ip: bool = False
    is_ipv6: bool = False
    is_transcoded: bool = False

    @property
    def is_valid(self) -> bool:
        """True when the value holds a usable host."""
        return len(self.host) > 0

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        return self.to_url()

    def to_url(self) -> str:
        """
        Rebuild the canonical URL string.

        Never emits a trailing slash when there is neither a path nor a page,
        so "example.com" and "example.com/" render identically.
        """
        host = self.host
        if self.port:
            if self.is_ipv6:
                host = f"[{host}]"
            host = f"{host}:{self.port}"

        parts = [host]
        if self.path:
            parts.append(self.path)
        if self.page:
            parts.append(self.page)

        return "/".join(parts)

    def has_port(self) -> bool:
        return len(self.port) > 0

    def without_port(self) -> "CanonicalURL":
        return replace(self, port="")

    def has_www(self) -> bool:
        return self.host.startswith("www.")

    def without_www(self) -> "CanonicalURL":
        """Drop a leading "www." label from the host."""
        if not self.has_www():
            return self
        return replace(self, host=self.host[len("www.") :])

    def has_path(self) -> bool:
        return len(self.path) > 0

    def without_path(self) -> "CanonicalURL":
        """Drop both path and page."""
        return replace(self, path="", page="")

    def has_page(self) -> bool:
        return len(self.page) > 0

    def without_page(self) -> "CanonicalURL":
        return replace(self, page="")
