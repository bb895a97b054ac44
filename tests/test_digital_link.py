"""
Tests for the Digital Link normalizer and parser.
"""

import pytest

from gs1_identifiers.core import AIDictionary, AIEntry, IdentifierTable, normalize, parse
from gs1_identifiers.exceptions import MalformedIdentifierError


class TestNormalize:
    """Tests for shortcode to AI code rewriting."""

    @pytest.mark.parametrize("url,expected", [
        ("https://id.gs1.org/gtin/09506000164908",
         "https://id.gs1.org/01/09506000164908"),
        ("https://id.gs1.org/gtin/09506000164908/lot/ABC123/ser/XYZ789",
         "https://id.gs1.org/01/09506000164908/10/ABC123/21/XYZ789"),
        ("https://id.gs1.org?gtin=09506000164908&lot=ABC123",
         "https://id.gs1.org?01=09506000164908&10=ABC123"),
        ("https://id.gs1.org/01/09506000164908?lot=ABC123&ser=XYZ789",
         "https://id.gs1.org/01/09506000164908?10=ABC123&21=XYZ789"),
        ("https://id.gs1.org/01/09506000164908/lot/ABC123?21=XYZ789&exp=230101",
         "https://id.gs1.org/01/09506000164908/10/ABC123?21=XYZ789&17=230101"),
        ("https://id.gs1.org/01/09506000164908?linktype=all&lot=ABC123",
         "https://id.gs1.org/01/09506000164908?linktype=all&10=ABC123"),
        ("https://id.gs1.org/01/09506000164908?lot=",
         "https://id.gs1.org/01/09506000164908?10="),
        ("https://id.gs1.org/01/09506000164908?novalue",
         "https://id.gs1.org/01/09506000164908?novalue"),
    ])
    def test_normalize(self, url, expected):
        assert normalize(url) == expected

    def test_trailing_slash_removed(self):
        assert normalize("https://id.gs1.org/gtin/09506000164908/") == "https://id.gs1.org/01/09506000164908"

    def test_query_values_untouched(self):
        assert normalize("https://id.gs1.org/01/09506000164908?10=lot") == "https://id.gs1.org/01/09506000164908?10=lot"

    def test_fragment_kept(self):
        assert normalize("https://id.gs1.org/gtin/09506000164908#top") == "https://id.gs1.org/01/09506000164908#top"

    def test_idempotent(self):
        once = normalize("https://id.gs1.org/gtin/09506000164908/ser/1?exp=230101")
        assert normalize(once) == once

    def test_none_and_empty(self):
        assert normalize(None) is None
        assert normalize("") == ""

    def test_custom_table(self):
        table = IdentifierTable(AIDictionary([AIEntry(ai="8013", title="GMN", shortcode="gmn", type="I")]))
        assert normalize("https://example.com/gmn/1987654Ad4X4bL5ttr2310c2K", table) == \
            "https://example.com/8013/1987654Ad4X4bL5ttr2310c2K"


class TestParse:
    """Tests for AI/value extraction."""

    def test_gtin_only(self):
        assert parse("https://id.gs1.org/01/09520123456788") == {"01": "09520123456788"}

    def test_brand_domain(self):
        assert parse("https://brand.example.com/01/09520123456788/22/2A") == {
            "01": "09520123456788",
            "22": "2A",
        }

    def test_path_and_query(self):
        result = parse("https://id.gs1.org/01/09520123456788/10/ABC123?17=180426")
        assert result == {"01": "09520123456788", "10": "ABC123", "17": "180426"}
        assert list(result) == ["01", "10", "17"]

    def test_query_only(self):
        assert parse("https://id.gs1.org?01=09520123456788&21=12345") == {
            "01": "09520123456788",
            "21": "12345",
        }

    def test_non_ai_segments_skipped(self):
        assert parse("https://id.gs1.org/01/09520123456788/12345/XYZ") == {"01": "09520123456788"}

    def test_special_characters_kept(self):
        assert parse("https://id.gs1.org/01/09520123456788/10/LOT@123")["10"] == "LOT@123"

    def test_empty_value(self):
        assert parse("https://id.gs1.org/01/09520123456788/21/")["21"] == ""

    def test_values_are_decoded(self):
        result = parse("https://id.gs1.org/01/09520123456788/10/ABC-123_%E2%82%AC?99=VALUE")
        assert result["10"] == "ABC-123_€"
        assert result["99"] == "VALUE"

    @pytest.mark.parametrize("query", ["12345=x", "abc12=x", "1=x", "17"])
    def test_query_keys_must_be_ai_codes(self, query):
        assert parse("https://id.gs1.org/01/09520123456788?" + query) == {"01": "09520123456788"}

    def test_later_duplicate_wins(self):
        assert parse("https://id.gs1.org/01/09520123456788/10/A?10=B")["10"] == "B"

    def test_meta(self):
        result = parse("https://id.gs1.org/01/09520123456788", include_meta=True)
        assert result == {
            "protocol": "https",
            "domain": "id.gs1.org",
            "port": "443",
            "01": "09520123456788",
        }
        assert list(result)[:3] == ["protocol", "domain", "port"]

    def test_meta_explicit_port(self):
        result = parse("http://resolver.example.com:8080/01/09520123456788", include_meta=True)
        assert result["protocol"] == "http"
        assert result["port"] == "8080"

    def test_meta_default_http_port(self):
        assert parse("http://example.com/01/09520123456788", include_meta=True)["port"] == "80"

    def test_no_ai_segments(self):
        assert parse("https://id.gs1.org/123456/AB@CD") == {}

    @pytest.mark.parametrize("url", ["", "id.gs1.org/01/09520123456788", "/01/09520123456788"])
    def test_scheme_and_host_required(self, url):
        with pytest.raises(MalformedIdentifierError):
            parse(url)

    def test_invalid_port(self):
        with pytest.raises(MalformedIdentifierError):
            parse("https://id.gs1.org:port/01/09520123456788")
