"""
URL parsing and normalization utilities.

Handles canonicalization, IDNA transcoding, eTLD+1 extraction and host
segmentation.
"""

from .parser import URLParser
from .suffix import (
    PublicSuffixResolver,
    Segments,
    has_label,
    segmentize,
    without_label,
)
from .transcoder import IDNATranscoder
from .url import CanonicalURL

__all__ = [
    "CanonicalURL",
    "URLParser",
    "IDNATranscoder",
    "PublicSuffixResolver",
    "Segments",
    "segmentize",
    "has_label",
    "without_label",
]
