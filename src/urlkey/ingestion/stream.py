"""
Line-oriented URL stream parsing.

Reads newline-delimited URLs from a readable source and parses each line.
Supports plain text and zstd compressed (.zst) files.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, TextIO, Union

import zstandard as zstd

from ..normalization import CanonicalURL, URLParser

logger = logging.getLogger(__name__)

Source = Union[BinaryIO, TextIO]


def open_lines(path: Union[str, Path]) -> BinaryIO:
    """
    Open a URL list file for streaming.

    Args:
        path: Path to a plain text file or a zstd compressed '.zst' file

    Returns:
        Binary stream of the decompressed contents; the caller closes it

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"URL list not found: {path}")

    fh = path.open("rb")
    if path.suffix == ".zst":
        decompressor = zstd.ZstdDecompressor()
        return decompressor.stream_reader(fh, closefd=True)
    return fh


class StreamParser:
    """
    Parse URLs from a line-delimited source.

    Single pass: the source is consumed as it is iterated, and a second
    iteration yields nothing. Do not share an instance between threads.

    Usage:
        with open_lines("urls.txt.zst") as fh:
            for url in StreamParser(fh):
                print(url.host)
    """

    def __init__(
        self,
        source: Source,
        parser: Optional[URLParser] = None,
        skip_invalid: bool = False,
    ):
        """
        Initialize stream parser.

        Args:
            source: Binary or text readable, one URL per line
            parser: URL parser instance (creates new if None)
            skip_invalid: Drop lines that fail to parse instead of yielding the
                reset value
        """
        self.source = source
        self.parser = parser or URLParser()
        self.skip_invalid = skip_invalid
        self.lines_read = 0
        self.invalid = 0
        self._lines = self._read_lines()

    def _read_lines(self) -> Iterator[str]:
        source = self.source
        if not isinstance(source, io.TextIOBase):
            source = io.TextIOWrapper(
                source, encoding="utf-8", errors="replace", newline="\n"
            )

        for line in source:
            yield line.rstrip("\r\n")

    def __iter__(self) -> Iterator[CanonicalURL]:
        return self

    def __next__(self) -> CanonicalURL:
        while True:
            line = next(self._lines)
            self.lines_read += 1
            url = self.parser.parse(line)
            if url:
                return url

            self.invalid += 1
            logger.debug(f"Line {self.lines_read}: could not parse '{line}'")
            if not self.skip_invalid:
                return url
