"""
Basic fingerprinting example.

Demonstrates how to use the URL parser, segmentizer, fingerprinter and batch
processor.
"""

import polars as pl

from urlkey.fingerprint import Fingerprinter, Kind
from urlkey.ingestion import FingerprintProcessor
from urlkey.network import is_private
from urlkey.normalization import PublicSuffixResolver, URLParser, segmentize


def main():
    """Run basic fingerprinting example."""
    print("=" * 60)
    print("urlkey: Basic Fingerprinting Example")
    print("=" * 60)

    # Shared, read-only components
    parser = URLParser()
    resolver = PublicSuffixResolver()
    fingerprinter = Fingerprinter(resolver)

    # Example 1: Parse a single URL
    print("\n1. Single URL Parsing")
    print("-" * 60)

    raw_url = "HTTPS://WWW.Example.COM:443/path/logo.jpg?z=1#fragment"
    print(f"Raw URL: {raw_url}")

    url = parser.parse(raw_url)
    print(f"\nCanonical URL: {url.to_url()}")
    print(f"Host: {url.host}")
    print(f"Port: {url.port!r}")
    print(f"Path: {url.path}")
    print(f"Page: {url.page}")

    segments = segmentize(url, resolver)
    print(f"Apex (eTLD+1): {segments.apex}")
    print(f"Labels: {list(segments.labels)}")

    # Example 2: Fingerprints
    print("\n\n2. Fingerprints")
    print("-" * 60)

    for kind in Kind:
        print(f"{kind.name:<13} xxh64={fingerprinter.hex64(url, kind)}")
        print(f"{'':<13} sha256={fingerprinter.hex256(url, kind)}")

    # Example 3: Internationalized domains and IP literals
    print("\n\n3. IDNA and IP Literals")
    print("-" * 60)

    for raw in ["âbc.com", "bücher.example.com", "10.0.0.5:8080/admin", "[::1]:443/"]:
        parsed = parser.parse(raw)
        print(
            f"{raw:<22} -> {parsed.to_url():<28} "
            f"ip={parsed.is_ip} idna={parsed.is_transcoded} private={is_private(parsed)}"
        )

    # Example 4: Batch processing
    print("\n\n4. Batch Processing")
    print("-" * 60)

    sample_data = pl.DataFrame(
        {
            "url": [
                "https://www.example.com/page1",
                "https://subdomain.example.com/page2?param=value",
                "http://example.org:8080/path/to/resource.html",
                "https://www.example.co.uk/british-site",
                "not a url",
            ],
        }
    )

    processor = FingerprintProcessor(parser=parser, fingerprinter=fingerprinter)
    result = processor.process_batch(sample_data)

    print(result.select(["url", "apex", "fp_apex", "fp_full"]))
    print(f"\nStats: {processor.get_stats()}")


if __name__ == "__main__":
    main()
