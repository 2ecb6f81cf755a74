"""
Fingerprint generation for canonical URLs.

Derives apex, host, full and full-without-page keys with xxHash64 and SHA-256.
"""

from .generator import Fingerprinter, Fingerprints, Kind

__all__ = ["Fingerprinter", "Fingerprints", "Kind"]
