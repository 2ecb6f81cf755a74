"""
Public suffix resolution and host segmentation.

Splits a host into its eTLD+1 (apex) and the subdomain labels in front of it,
using the Public Suffix List.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from publicsuffixlist import PublicSuffixList

from .url import CanonicalURL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segments:
    """
    Host segments.

    Attributes:
        apex: eTLD+1 of the host, empty for IPs and unresolvable hosts
        labels: Labels left of the apex, in host order
    """

    apex: str = ""
    labels: tuple[str, ...] = ()


class PublicSuffixResolver:
    """
    eTLD+1 lookup backed by the Public Suffix List.

    The list is loaded once at construction; lookups are read-only, so one
    resolver can be shared across threads.
    """

    def __init__(self, psl_file: Optional[Path] = None):
        """
        Initialize resolver with the Public Suffix List.

        Args:
            psl_file: Optional path to a public_suffix_list.dat file. Uses the
                list bundled with publicsuffixlist when None.
        """
        if psl_file is None:
            self.psl = PublicSuffixList()
        else:
            with Path(psl_file).open("rb") as fp:
                self.psl = PublicSuffixList(fp)
            logger.info(f"Loaded public suffix list from {psl_file}")

    def effective_tld_plus_one(self, host: str) -> Optional[str]:
        """
        Get the registrable domain of a host.

        Args:
            host: Lowercase ASCII domain (already punycode if applicable)

        Returns:
            eTLD+1 (e.g., 'example.co.uk' from 'www.example.co.uk'), or None
            for bare public suffixes and malformed input
        """
        if not host or host.startswith(".") or host.endswith("."):
            return None
        return self.psl.privatesuffix(host) or None

    def apex_for(self, url: CanonicalURL) -> Optional[str]:
        """
        Get the apex used for fingerprinting.

        IP hosts have no registrable domain, so the host itself is returned.
        """
        if url.is_ip:
            return url.host
        return self.effective_tld_plus_one(url.host)


def segmentize(url: CanonicalURL, resolver: PublicSuffixResolver) -> Segments:
    """
    Split a host into its apex and subdomain labels.

    Args:
        url: Parsed URL
        resolver: Public suffix resolver

    Returns:
        Segments; empty for IP hosts, reset values and hosts that are not
        registrable domains
    """
    if url.is_ip or not url.host:
        return Segments()

    apex = resolver.effective_tld_plus_one(url.host)
    if not apex:
        return Segments()

    prefix = url.host[: -len(apex)].rstrip(".")
    labels = tuple(prefix.split(".")) if prefix else ()
    return Segments(apex=apex, labels=labels)


def has_label(url: CanonicalURL, resolver: PublicSuffixResolver) -> bool:
    """Return True if the host has labels in front of its apex."""
    if url.is_ip:
        return False
    apex = resolver.effective_tld_plus_one(url.host)
    return apex is not None and len(apex) != len(url.host)


def without_label(url: CanonicalURL, resolver: PublicSuffixResolver) -> CanonicalURL:
    """Reduce the host to its apex, leaving IPs and unresolvable hosts alone."""
    if not has_label(url, resolver):
        return url
    return replace(url, host=resolver.effective_tld_plus_one(url.host))
