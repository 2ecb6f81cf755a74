"""
Unicode domain to ASCII (punycode) transcoding.

Uses UTS #46 mapping for lookup, followed by the transitional deviation
mapping (legacy handling of sharp s, final sigma, ZWJ and ZWNJ).
"""

import logging
from dataclasses import dataclass
from typing import Optional

import idna

logger = logging.getLogger(__name__)

ACE_PREFIX = "xn--"

# UTS #46 deviation characters and their transitional replacements
_TRANSITIONAL = str.maketrans(
    {
        "\u00df": "ss",  # sharp s
        "\u03c2": "\u03c3",  # final sigma
        "\u200c": None,  # ZWNJ
        "\u200d": None,  # ZWJ
    }
)


@dataclass(frozen=True)
class IDNATranscoder:
    """
    Convert Unicode domain names to their ASCII-compatible form.

    Construct once at startup and share; instances are immutable.

    Usage:
        transcoder = IDNATranscoder()
        transcoder.to_ascii("bücher.example.com")  # 'xn--bcher-kva.example.com'

    Attributes:
        transitional: Apply transitional processing (sharp s -> ss, final sigma -> sigma)
    """

    transitional: bool = True

    def to_ascii(self, domain: str) -> Optional[str]:
        """
        Transcode a domain to ASCII.

        Args:
            domain: Domain label sequence, without a trailing root dot

        Returns:
            ASCII form of the domain, or None if it cannot be transcoded
        """
        if not domain:
            return None

        try:
            mapped = idna.uts46_remap(domain, std3_rules=False)
            if self.transitional:
                mapped = mapped.translate(_TRANSITIONAL)
            return idna.encode(mapped).decode("ascii")
        except (idna.IDNAError, UnicodeError) as e:
            logger.debug(f"IDNA transcoding failed for '{domain}': {e}")
            return None
