#!/usr/bin/env python3
"""
Fingerprint a URL list.

Reads newline-delimited URLs (plain text, .zst, or stdin), parses each one and
prints its canonical form with apex/host/full/full-no-page keys as TSV, or
writes the batch processor output to a Parquet file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, TextIO

# Ensure local package imports work when running as a script
sys.path.insert(0, str(Path(__file__).parent / "src"))

from urlkey.config import get_config
from urlkey.fingerprint import Fingerprinter, Kind
from urlkey.ingestion import FingerprintProcessor, StreamParser, open_lines
from urlkey.normalization import CanonicalURL, PublicSuffixResolver, URLParser

logger = logging.getLogger(__name__)

SPACES = ("xxh64", "sha256")


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    config = get_config()
    parser = argparse.ArgumentParser(
        description="Parse a URL list and print or store its fingerprints."
    )
    parser.add_argument(
        "--input",
        required=True,
        help="Path to a URL list (one per line, '.zst' allowed) or '-' for stdin.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write a Parquet file instead of printing TSV (xxh64 keys as Int64).",
    )
    parser.add_argument(
        "--space",
        choices=SPACES,
        default=config.output.default_space,
        help="Hash space for TSV output (defaults to config).",
    )
    parser.add_argument(
        "--idna",
        default=not config.parser.suppress_transcoding,
        action=argparse.BooleanOptionalAction,
        help="Transcode Unicode domains to punycode (default: on).",
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Drop lines that do not parse instead of printing empty rows.",
    )
    return parser.parse_args()


def format_row(url: CanonicalURL, fingerprinter: Fingerprinter, space: str) -> str:
    """Render one TSV row: canonical URL followed by the four keys."""
    method = fingerprinter.hex64 if space == "xxh64" else fingerprinter.hex256
    keys = [method(url, kind) or "" for kind in Kind]
    return "\t".join([url.to_url(), *keys])


def iter_rows(
    stream: StreamParser, fingerprinter: Fingerprinter, space: str
) -> Iterator[str]:
    for url in stream:
        yield format_row(url, fingerprinter, space)


def write_tsv(
    stream: StreamParser, fingerprinter: Fingerprinter, space: str, out: TextIO
) -> None:
    out.write("\t".join(["url", *(kind.name.lower() for kind in Kind)]) + "\n")
    for row in iter_rows(stream, fingerprinter, space):
        out.write(row + "\n")


def write_parquet(
    stream: StreamParser, processor: FingerprintProcessor, output: Path
) -> int:
    config = get_config()
    df = processor.process_urls(stream)
    output.parent.mkdir(parents=True, exist_ok=True)
    df.write_parquet(
        output,
        compression=config.output.compression,
        compression_level=config.output.compression_level,
    )
    return len(df)


def main() -> None:
    args = parse_args()
    config = get_config()

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    url_parser = URLParser(suppress_transcoding=not args.idna)
    fingerprinter = Fingerprinter(PublicSuffixResolver(config.suffix.psl_file))

    if args.input == "-":
        source = sys.stdin
    else:
        try:
            source = open_lines(args.input)
        except FileNotFoundError as e:
            logger.error(str(e))
            sys.exit(1)

    stream = StreamParser(source, url_parser, skip_invalid=args.skip_invalid)

    try:
        if args.output is not None:
            processor = FingerprintProcessor(url_parser, fingerprinter)
            rows = write_parquet(stream, processor, args.output)
            logger.info("Wrote %d rows to %s", rows, args.output)
        else:
            write_tsv(stream, fingerprinter, args.space, sys.stdout)
    finally:
        if source is not sys.stdin:
            source.close()

    logger.info(
        "Read %d lines, %d could not be parsed", stream.lines_read, stream.invalid
    )


if __name__ == "__main__":
    main()
