"""
Batch fingerprinting pipeline.

Parses a column of raw URLs and attaches canonical components and xxh64
fingerprints, ready for Parquet storage.
"""

import logging
from typing import Iterable, Iterator, Optional

import polars as pl

from ..fingerprint import Fingerprinter, Kind
from ..normalization import CanonicalURL, URLParser

logger = logging.getLogger(__name__)

OUTPUT_SCHEMA = {
    "url": pl.Utf8,
    "host": pl.Utf8,
    "port": pl.Utf8,
    "path": pl.Utf8,
    "page": pl.Utf8,
    "is_ip": pl.Boolean,
    "is_ipv6": pl.Boolean,
    "is_transcoded": pl.Boolean,
    "apex": pl.Utf8,
    "fp_apex": pl.Int64,
    "fp_host": pl.Int64,
    "fp_full": pl.Int64,
    "fp_full_no_page": pl.Int64,
}


class FingerprintProcessor:
    """
    Process raw URL data through parsing and fingerprinting.

    Transforms input records with a 'url' column into one row per parsable
    URL. Fingerprints are xxh64 keys stored as signed Int64; they are null
    where the kind produced no key (e.g. an unresolvable apex).
    """

    def __init__(
        self,
        parser: Optional[URLParser] = None,
        fingerprinter: Optional[Fingerprinter] = None,
    ):
        """
        Initialize processor.

        Args:
            parser: URL parser instance (creates new if None)
            fingerprinter: Fingerprinter instance (creates new if None)
        """
        self.parser = parser or URLParser()
        self.fingerprinter = fingerprinter or Fingerprinter()
        self.urls_processed = 0
        self.urls_invalid = 0

    def process_batch(self, df: pl.DataFrame) -> pl.DataFrame:
        """
        Parse and fingerprint a batch of URLs.

        Args:
            df: Input Polars DataFrame with a 'url' column

        Returns:
            DataFrame with OUTPUT_SCHEMA columns; unparsable URLs are dropped

        Raises:
            ValueError: If the input has no 'url' column
        """
        if "url" not in df.columns:
            raise ValueError("Input DataFrame must have a 'url' column")

        return self.process_lines(df["url"].to_list())

    def process_lines(self, lines: Iterable[Optional[str]]) -> pl.DataFrame:
        """
        Parse and fingerprint an iterable of raw URLs.

        Args:
            lines: Raw URL strings; None and empty entries are skipped

        Returns:
            DataFrame with OUTPUT_SCHEMA columns
        """
        return self.process_urls(self._parse_lines(lines))

    def process_urls(self, urls: Iterable[CanonicalURL]) -> pl.DataFrame:
        """
        Fingerprint already parsed URLs.

        Args:
            urls: Parsed URLs; reset values are skipped and counted as invalid

        Returns:
            DataFrame with OUTPUT_SCHEMA columns
        """
        records = []
        for url in urls:
            if not url:
                self.urls_invalid += 1
                continue
            records.append(self._record(url))
        self.urls_processed += len(records)

        if not records:
            return pl.DataFrame(schema=OUTPUT_SCHEMA)

        return pl.DataFrame(records, schema=OUTPUT_SCHEMA)

    def _parse_lines(self, lines: Iterable[Optional[str]]) -> Iterator[CanonicalURL]:
        for raw_url in lines:
            if not raw_url:
                continue

            url = self.parser.parse(raw_url)
            if not url:
                self.urls_invalid += 1
                logger.debug(f"Skipping unparsable URL '{raw_url}'")
                continue

            yield url

    def _record(self, url: CanonicalURL) -> dict:
        fp = self.fingerprinter.all_int64(url)
        return {
            "url": url.to_url(),
            "host": url.host,
            "port": url.port,
            "path": url.path,
            "page": url.page,
            "is_ip": url.is_ip,
            "is_ipv6": url.is_ipv6,
            "is_transcoded": url.is_transcoded,
            "apex": self.fingerprinter.text(url, Kind.APEX),
            "fp_apex": fp.apex,
            "fp_host": fp.host,
            "fp_full": fp.full,
            "fp_full_no_page": fp.full_no_page,
        }

    def get_stats(self) -> dict:
        """
        Get processing statistics.

        Returns:
            Dictionary with counts of processed and rejected URLs
        """
        return {
            "urls_processed": self.urls_processed,
            "urls_invalid": self.urls_invalid,
        }
