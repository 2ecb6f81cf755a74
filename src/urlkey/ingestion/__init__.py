"""
URL list ingestion.

Handles streaming line-delimited URL lists and batch fingerprinting.
"""

from .processor import FingerprintProcessor
from .stream import StreamParser, open_lines

__all__ = ["FingerprintProcessor", "StreamParser", "open_lines"]
