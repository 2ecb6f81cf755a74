"""
Fingerprint generation.

Derives deterministic keys from a CanonicalURL in four kinds:
- APEX: eTLD+1 of the host
- HOST: the host
- FULL: the rendered canonical URL
- FULL_NO_PAGE: the rendered URL with its page replaced by a trailing slash

Each kind is available in two hash spaces:
- xxh64: 64-bit xxHash (uint64, signed int64, 16-char hex)
- sha256: 256-bit SHA-256 digest (32 bytes, 64-char hex)
"""

import hashlib
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Callable, Generic, Optional, TypeVar

import xxhash

from ..normalization.suffix import PublicSuffixResolver
from ..normalization.url import CanonicalURL

T = TypeVar("T")


class Kind(IntEnum):
    """Fingerprint kind: which derived text is hashed."""

    APEX = 0
    HOST = 1
    FULL = 2
    FULL_NO_PAGE = 3


@dataclass(frozen=True)
class Fingerprints(Generic[T]):
    """All four kinds of fingerprint for one URL; None where no key exists."""

    apex: Optional[T] = None
    host: Optional[T] = None
    full: Optional[T] = None
    full_no_page: Optional[T] = None


def encode_text(text: str) -> bytes:
    """UTF-8 encode text for hashing; lone surrogates are kept as their code units."""
    return text.encode("utf-8", errors="surrogatepass")


def xxh64_uint(text: str) -> int:
    """Hash text with xxHash64 (seed 0)."""
    return xxhash.xxh64(encode_text(text)).intdigest()


def to_signed_int64(value: int) -> int:
    """Convert an unsigned 64-bit value to the signed int64 range (for Parquet)."""
    if value >= 2**63:
        value -= 2**64
    return value


def sha256_bytes(text: str) -> bytes:
    """Hash text with SHA-256."""
    return hashlib.sha256(encode_text(text)).digest()


class Fingerprinter:
    """
    Generate kind based keys for parsed URLs.

    Every method returns None when the kind has nothing to hash (reset value,
    unresolvable apex, unknown kind). The URL is never modified.

    Usage:
        fingerprinter = Fingerprinter()
        url = URLParser().parse("www.example.com/path/logo.jpg")
        fingerprinter.hex64(url, Kind.APEX)     # xxh64 of 'example.com'
        fingerprinter.hex256(url, Kind.HOST)    # sha256 of 'www.example.com'
        fingerprinter.all_hex64(url).full_no_page  # xxh64 of 'www.example.com/path/'
    """

    def __init__(self, resolver: Optional[PublicSuffixResolver] = None):
        """
        Initialize fingerprinter.

        Args:
            resolver: Public suffix resolver for APEX keys (creates new if None)
        """
        self.resolver = resolver or PublicSuffixResolver()

    def text(self, url: CanonicalURL, kind: Kind) -> Optional[str]:
        """
        Get the text a kind hashes.

        Args:
            url: Parsed URL
            kind: Fingerprint kind

        Returns:
            Text to hash, or None if the kind yields nothing for this URL or is
            not a fingerprint kind
        """
        try:
            kind = Kind(kind)
        except ValueError:
            return None

        if kind is Kind.APEX:
            if not url.host:
                return None
            return self.resolver.apex_for(url) or None

        if kind is Kind.HOST:
            return url.host or None

        if kind is Kind.FULL_NO_PAGE and url.page:
            return replace(url, page="").to_url() + "/"

        # FULL, and FULL_NO_PAGE without a page
        return url.to_url() or None

    def _key(
        self, url: CanonicalURL, kind: Kind, hasher: Callable[[str], T]
    ) -> Optional[T]:
        text = self.text(url, kind)
        if text is None:
            return None
        return hasher(text)

    def _all(
        self, url: CanonicalURL, method: Callable[[CanonicalURL, Kind], Optional[T]]
    ) -> Fingerprints[T]:
        return Fingerprints(
            apex=method(url, Kind.APEX),
            host=method(url, Kind.HOST),
            full=method(url, Kind.FULL),
            full_no_page=method(url, Kind.FULL_NO_PAGE),
        )

    # xxh64 space

    def uint64(self, url: CanonicalURL, kind: Kind) -> Optional[int]:
        """xxHash64 key as an unsigned integer."""
        return self._key(url, kind, xxh64_uint)

    def int64(self, url: CanonicalURL, kind: Kind) -> Optional[int]:
        """xxHash64 key as a signed int64 (for Parquet/polars Int64 columns)."""
        key = self.uint64(url, kind)
        if key is None:
            return None
        return to_signed_int64(key)

    def hex64(self, url: CanonicalURL, kind: Kind) -> Optional[str]:
        """xxHash64 key as 16 lowercase hex characters."""
        key = self.uint64(url, kind)
        if key is None:
            return None
        return f"{key:016x}"

    # sha256 space

    def bytes256(self, url: CanonicalURL, kind: Kind) -> Optional[bytes]:
        """SHA-256 key as 32 raw bytes."""
        return self._key(url, kind, sha256_bytes)

    def hex256(self, url: CanonicalURL, kind: Kind) -> Optional[str]:
        """SHA-256 key as 64 lowercase hex characters."""
        key = self.bytes256(url, kind)
        if key is None:
            return None
        return key.hex()

    # All kinds at once

    def all_uint64(self, url: CanonicalURL) -> Fingerprints[int]:
        return self._all(url, self.uint64)

    def all_int64(self, url: CanonicalURL) -> Fingerprints[int]:
        return self._all(url, self.int64)

    def all_hex64(self, url: CanonicalURL) -> Fingerprints[str]:
        return self._all(url, self.hex64)

    def all_bytes256(self, url: CanonicalURL) -> Fingerprints[bytes]:
        return self._all(url, self.bytes256)

    def all_hex256(self, url: CanonicalURL) -> Fingerprints[str]:
        return self._all(url, self.hex256)
