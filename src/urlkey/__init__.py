"""
urlkey: canonical URL parsing and deterministic URL fingerprints.
"""

from .fingerprint import Fingerprinter, Fingerprints, Kind
from .network import is_private
from .normalization import CanonicalURL, PublicSuffixResolver, URLParser, segmentize

__version__ = "0.1.0"

__all__ = [
    "CanonicalURL",
    "URLParser",
    "PublicSuffixResolver",
    "segmentize",
    "Fingerprinter",
    "Fingerprints",
    "Kind",
    "is_private",
]
