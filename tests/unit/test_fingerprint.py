"""Unit tests for fingerprint generation."""

import hashlib

import pytest
import xxhash

from urlkey.fingerprint import Fingerprinter, Fingerprints, Kind
from urlkey.normalization import CanonicalURL, PublicSuffixResolver, URLParser

SAMPLE_URLS = [
    "example.com",
    "http://example.com/",
    "sub.example.com",
    "sub.example.com/path",
    "www.example.com/path/logo.jpg",
    "www.example.com/path/level/logo.jpg",
    "www.example.com/path/level/legend-of-zelda",
    "www.example.com/path/level/legion_three",
    "www.example.com/path/page",
    "www.example.com/path/page/",
    "www.example.com/",
    "10.10.10.10:454/path/index.html",
    "[acca::01f9]:1500/path",
]


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@pytest.fixture(scope="module")
def fingerprinter():
    """Create a Fingerprinter once per module (suffix list loading is slow)."""
    return Fingerprinter(PublicSuffixResolver())


@pytest.fixture
def parser():
    """Create a URLParser instance."""
    return URLParser()


class TestKindText:
    """Test the text each kind hashes."""

    def test_apex(self, fingerprinter, parser):
        url = parser.parse("www.example.com/path")
        assert fingerprinter.text(url, Kind.APEX) == "example.com"

    def test_host(self, fingerprinter, parser):
        url = parser.parse("www.example.com/path")
        assert fingerprinter.text(url, Kind.HOST) == "www.example.com"

    def test_full(self, fingerprinter, parser):
        url = parser.parse("https://www.example.com:8080/path/logo.jpg?q=1")
        assert fingerprinter.text(url, Kind.FULL) == "www.example.com:8080/path/logo.jpg"

    def test_full_no_page(self, fingerprinter, parser):
        """Test the page is replaced by a trailing slash."""
        url = parser.parse("example.com/path/logo.jpg")
        assert fingerprinter.text(url, Kind.FULL_NO_PAGE) == "example.com/path/"

    def test_full_no_page_without_page(self, fingerprinter, parser):
        """Test FULL_NO_PAGE degrades to FULL when there is no page."""
        url = parser.parse("example.com/path")
        assert fingerprinter.text(url, Kind.FULL_NO_PAGE) == "example.com/path"

    def test_full_no_page_single_segment(self, fingerprinter, parser):
        """Test a single path segment is never dropped as a page."""
        url = parser.parse("example.com/index.html")
        assert fingerprinter.text(url, Kind.FULL_NO_PAGE) == "example.com/index.html"

    def test_ip_apex(self, fingerprinter, parser):
        """Test the apex of an IP host is the host."""
        url = parser.parse("10.10.10.10:454/path")
        assert fingerprinter.text(url, Kind.APEX) == "10.10.10.10"

    def test_accepts_plain_int(self, fingerprinter, parser):
        """Test kinds can be given as their integer values."""
        url = parser.parse("www.example.com")
        assert fingerprinter.text(url, 1) == "www.example.com"

    def test_unknown_kind(self, fingerprinter, parser):
        """Test an unknown kind yields no key instead of raising."""
        url = parser.parse("example.com")

        assert fingerprinter.text(url, 7) is None
        assert fingerprinter.hex64(url, 7) is None
        assert fingerprinter.bytes256(url, -1) is None

    def test_url_not_modified(self, fingerprinter, parser):
        """Test computing FULL_NO_PAGE leaves the page in place."""
        url = parser.parse("example.com/path/logo.jpg")
        fingerprinter.text(url, Kind.FULL_NO_PAGE)
        assert url.page == "logo.jpg"


class TestEmptyInput:
    """Test kinds with nothing to hash produce no key."""

    @pytest.mark.parametrize("kind", list(Kind))
    def test_reset_value(self, fingerprinter, kind):
        url = CanonicalURL()

        assert fingerprinter.text(url, kind) is None
        assert fingerprinter.uint64(url, kind) is None
        assert fingerprinter.int64(url, kind) is None
        assert fingerprinter.hex64(url, kind) is None
        assert fingerprinter.bytes256(url, kind) is None
        assert fingerprinter.hex256(url, kind) is None

    def test_unresolvable_apex(self, fingerprinter):
        """Test a host without a registrable domain has no apex key."""
        url = CanonicalURL(host="co.uk")

        assert fingerprinter.hex64(url, Kind.APEX) is None
        assert fingerprinter.hex64(url, Kind.HOST) is not None

    def test_all_kinds_reset_value(self, fingerprinter):
        assert fingerprinter.all_hex256(CanonicalURL()) == Fingerprints()


class TestUnencodableText:
    """Test hosts that are not valid UTF-8 text still get keys."""

    def test_lone_surrogate_host(self, fingerprinter, parser):
        url = parser.parse("a\udcff.example.com")
        raw = "a\udcff.example.com".encode("utf-8", errors="surrogatepass")

        assert url.host == "a\udcff.example.com"
        assert fingerprinter.hex64(url, Kind.HOST) == xxhash.xxh64(raw).hexdigest()
        assert fingerprinter.hex256(url, Kind.HOST) == hashlib.sha256(raw).hexdigest()

    def test_all_kinds(self, fingerprinter, parser):
        """Test every kind is computed without raising."""
        keys = fingerprinter.all_hex64(parser.parse("a\udcff.example.com/x/y.html"))

        assert keys.host is not None
        assert keys.full is not None
        assert keys.full_no_page is not None


class TestSHA256:
    """Test SHA-256 keys."""

    def test_apex_and_host_digest(self, fingerprinter, parser):
        """Test keys are SHA-256 digests of the kind text."""
        url = parser.parse("www.example.com/path")

        assert fingerprinter.hex256(url, Kind.APEX) == sha256_hex("example.com")
        assert fingerprinter.hex256(url, Kind.HOST) == sha256_hex("www.example.com")

    def test_bytes_and_hex_agree(self, fingerprinter, parser):
        url = parser.parse("www.example.com/path/logo.jpg")

        for kind in Kind:
            raw = fingerprinter.bytes256(url, kind)
            assert len(raw) == 32
            assert raw.hex() == fingerprinter.hex256(url, kind)

    def test_hex_format(self, fingerprinter, parser):
        key = fingerprinter.hex256(parser.parse("example.com"), Kind.FULL)
        assert len(key) == 64
        assert all(c in "0123456789abcdef" for c in key)


class TestXXH64:
    """Test xxHash64 keys."""

    def test_uint64_value(self, fingerprinter, parser):
        url = parser.parse("www.example.com/path")
        expected = xxhash.xxh64(b"example.com").intdigest()

        assert fingerprinter.uint64(url, Kind.APEX) == expected

    def test_hex_format(self, fingerprinter, parser):
        """Test hex keys are zero padded to 16 characters."""
        url = parser.parse("www.example.com/path")

        for kind in Kind:
            key = fingerprinter.hex64(url, kind)
            assert len(key) == 16
            assert int(key, 16) == fingerprinter.uint64(url, kind)

    def test_int64_range(self, fingerprinter, parser):
        """Test signed keys fit int64 and map back to the unsigned key."""
        for raw in SAMPLE_URLS:
            url = parser.parse(raw)
            for kind in Kind:
                signed = fingerprinter.int64(url, kind)
                assert -(2**63) <= signed < 2**63
                assert signed % 2**64 == fingerprinter.uint64(url, kind)


class TestProperties:
    """Test equivalences between URLs and kinds."""

    @pytest.mark.parametrize("method", ["uint64", "hex64", "bytes256", "hex256"])
    def test_determinism(self, fingerprinter, parser, method):
        """Test repeated calls return identical keys."""
        generate = getattr(fingerprinter, method)
        for raw in SAMPLE_URLS:
            for kind in Kind:
                assert generate(parser.parse(raw), kind) == generate(
                    parser.parse(raw), kind
                )

    @pytest.mark.parametrize("method", ["hex64", "hex256"])
    def test_apex_equivalence(self, fingerprinter, parser, method):
        """Test subdomains share apex keys but not host keys."""
        generate = getattr(fingerprinter, method)
        www = parser.parse("www.example.com")
        sub = parser.parse("sub.example.com")

        assert generate(www, Kind.APEX) == generate(sub, Kind.APEX)
        assert generate(www, Kind.HOST) != generate(sub, Kind.HOST)

    def test_full_no_page_fallback(self, fingerprinter, parser):
        """Test FULL_NO_PAGE equals FULL when there is no page."""
        for raw in ["sub.example.com/path", "example.com", "www.example.com/path/page/"]:
            url = parser.parse(raw)
            assert url.page == ""
            assert fingerprinter.hex64(url, Kind.FULL_NO_PAGE) == fingerprinter.hex64(
                url, Kind.FULL
            )
            assert fingerprinter.hex256(
                url, Kind.FULL_NO_PAGE
            ) == fingerprinter.hex256(url, Kind.FULL)

    def test_full_no_page_matches_directory(self, fingerprinter, parser):
        """Test a page URL and its directory URL share FULL_NO_PAGE keys."""
        page = parser.parse("example.com/path/logo.jpg")
        directory = parser.parse("example.com/path/")
        bare = parser.parse("example.com/path")

        key = fingerprinter.hex64(page, Kind.FULL_NO_PAGE)
        assert key == fingerprinter.hex64(directory, Kind.FULL_NO_PAGE)
        assert key != fingerprinter.hex64(bare, Kind.FULL_NO_PAGE)

    def test_default_port_equivalence(self, fingerprinter, parser):
        """Test explicit default ports do not change keys."""
        plain = parser.parse("example.com/path")
        for raw in ["http://example.com:80/path", "https://example.com:443/path"]:
            assert fingerprinter.all_hex64(parser.parse(raw)) == fingerprinter.all_hex64(
                plain
            )

    def test_trailing_slash_equivalence(self, fingerprinter, parser):
        assert fingerprinter.all_hex256(
            parser.parse("example.com")
        ) == fingerprinter.all_hex256(parser.parse("http://example.com/"))

    @pytest.mark.parametrize(
        "all_method,method",
        [
            ("all_uint64", "uint64"),
            ("all_int64", "int64"),
            ("all_hex64", "hex64"),
            ("all_bytes256", "bytes256"),
            ("all_hex256", "hex256"),
        ],
    )
    def test_all_kinds_match_single(self, fingerprinter, parser, all_method, method):
        """Test the multi-kind result equals calling each kind on its own."""
        for raw in SAMPLE_URLS:
            url = parser.parse(raw)
            fp = getattr(fingerprinter, all_method)(url)
            single = getattr(fingerprinter, method)

            assert fp.apex == single(url, Kind.APEX)
            assert fp.host == single(url, Kind.HOST)
            assert fp.full == single(url, Kind.FULL)
            assert fp.full_no_page == single(url, Kind.FULL_NO_PAGE)
