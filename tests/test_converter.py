"""
Tests for identifier conversion.

Tests cover:
- EPC URN <-> Digital Link for every EPC scheme, instance and class level
- Conversion records (asURN, asCaptured, canonicalDL, key, serial)
- CBV vocabulary URN <-> WebURI, bare strings and CBV expansion
- Short-name alias replacement
"""

import pytest

from gs1_identifiers.core import (
    Converter,
    GCPLengthResolver,
    short_name_replacer,
    to_bare_string,
    to_cbv_vocabulary,
    to_digital_link,
    to_urn,
    to_urn_map,
)
from gs1_identifiers.exceptions import MalformedIdentifierError, UnsupportedIdentifierError

# (EPC URN, canonical Digital Link), GCP length 7 throughout
EPC_PAIRS = [
    ("urn:epc:id:sgtin:0614141.812345.400", "https://id.gs1.org/01/80614141123458/21/400"),
    ("urn:epc:id:sgtin:9520123.045678.ABC", "https://id.gs1.org/01/09520123456788/21/ABC"),
    ("urn:epc:idpat:sgtin:0614141.812345.*", "https://id.gs1.org/01/80614141123458"),
    ("urn:epc:class:lgtin:9520123.045678.LOT1", "https://id.gs1.org/01/09520123456788/10/LOT1"),
    ("urn:epc:id:upui:9520123.045678.ABC123", "https://id.gs1.org/01/09520123456788/235/ABC123"),
    ("urn:epc:id:sscc:0614141.1234567890", "https://id.gs1.org/00/106141412345678908"),
    ("urn:epc:id:sgln:0614141.12345.400", "https://id.gs1.org/414/0614141123452/254/400"),
    ("urn:epc:id:sgln:0614141.12345.0", "https://id.gs1.org/414/0614141123452"),
    ("urn:epc:id:pgln:0614141.12345", "https://id.gs1.org/417/0614141123452"),
    ("urn:epc:id:grai:0614141.12345.400", "https://id.gs1.org/8003/0614141123452400"),
    ("urn:epc:idpat:grai:0614141.12345.*", "https://id.gs1.org/8003/0614141123452"),
    ("urn:epc:id:giai:0614141.12345400", "https://id.gs1.org/8004/061414112345400"),
    ("urn:epc:id:ginc:0614141.12345ABC", "https://id.gs1.org/401/061414112345ABC"),
    ("urn:epc:id:gsin:0614141.123456789", "https://id.gs1.org/402/06141411234567890"),
    ("urn:epc:id:gsrn:0614141.1234567890", "https://id.gs1.org/8018/061414112345678902"),
    ("urn:epc:id:gsrnp:0614141.1234567890", "https://id.gs1.org/8017/061414112345678902"),
    ("urn:epc:id:gdti:0614141.12345.400", "https://id.gs1.org/253/0614141123452400"),
    ("urn:epc:idpat:gdti:0614141.12345.*", "https://id.gs1.org/253/0614141123452"),
    ("urn:epc:id:sgcn:4012345.67890.04711", "https://id.gs1.org/255/401234567890104711"),
    ("urn:epc:idpat:sgcn:4012345.67890.*", "https://id.gs1.org/255/4012345678901"),
    ("urn:epc:id:cpi:0614141.123ABC.123456789", "https://id.gs1.org/8010/0614141123ABC/8011/123456789"),
    ("urn:epc:idpat:cpi:0614141.123ABC.*", "https://id.gs1.org/8010/0614141123ABC"),
    ("urn:epc:id:itip:4012345.012345.01.02.987", "https://id.gs1.org/8006/040123451234560102/21/987"),
    ("urn:epc:idpat:itip:4012345.012345.01.02.*", "https://id.gs1.org/8006/040123451234560102"),
]


class TestEPCConversion:
    """Tests for EPC URN <-> Digital Link conversion."""

    @pytest.mark.parametrize("urn,uri", EPC_PAIRS)
    def test_urn_to_digital_link(self, urn, uri):
        assert to_digital_link(urn) == uri

    @pytest.mark.parametrize("urn,uri", EPC_PAIRS)
    def test_digital_link_to_urn(self, urn, uri):
        assert to_urn(uri, 7) == urn

    def test_gcp_length_from_table(self):
        """The packaged GCP table knows 0614141 and 9520 (length 7)."""
        assert to_urn("https://id.gs1.org/01/80614141123458/21/400") == "urn:epc:id:sgtin:0614141.812345.400"
        assert to_urn("https://id.gs1.org/00/106141412345678908") == "urn:epc:id:sscc:0614141.1234567890"

    def test_gcp_length_changes_split(self):
        assert to_urn("https://id.gs1.org/01/80614141123458/21/400", 9) == "urn:epc:id:sgtin:061414112.8345.400"

    def test_check_digit_not_verified(self):
        """URNs carry no check digit, so a wrong one still converts."""
        assert to_urn("https://id.gs1.org/01/80614141123459/21/400", 7) == "urn:epc:id:sgtin:0614141.812345.400"

    def test_custom_resolver(self):
        converter = Converter(resolver=GCPLengthResolver({"061414": 6}))
        assert converter.to_urn("https://id.gs1.org/414/0614141123452") == "urn:epc:id:sgln:061414.112345.0"

    def test_unknown_gcp(self):
        converter = Converter(resolver=GCPLengthResolver())
        with pytest.raises(UnsupportedIdentifierError, match="GCP length not found"):
            converter.to_urn("https://id.gs1.org/01/80614141123458/21/400")

    def test_malformed_urn(self):
        with pytest.raises(MalformedIdentifierError, match="SGTIN"):
            to_digital_link("urn:epc:id:sgtin:0614141.812345")

    def test_malformed_digital_link(self):
        with pytest.raises(MalformedIdentifierError):
            to_urn("https://id.gs1.org/00/1061414123456789", 7)

    def test_unrecognized_input_unchanged(self):
        assert to_digital_link("urn:example:thing:1") == "urn:example:thing:1"
        assert to_urn("https://example.com/products/42") == "https://example.com/products/42"
        assert to_urn("urn:epc:id:sgtin:0614141.812345.400") == "urn:epc:id:sgtin:0614141.812345.400"

    @pytest.mark.parametrize("value", [None, "", "  "])
    def test_blank_passes_through(self, value):
        assert to_digital_link(value) == value
        assert to_urn(value) == value


class TestConversionRecord:
    """Tests for the full Digital Link -> URN record."""

    def test_sgtin_record(self):
        record = to_urn_map("https://brand.example.com/01/80614141123458/21/400", 7)
        assert record == {
            "asURN": "urn:epc:id:sgtin:0614141.812345.400",
            "asCaptured": "https://brand.example.com/01/80614141123458/21/400",
            "canonicalDL": "https://id.gs1.org/01/80614141123458/21/400",
            "gtin": "80614141123458",
            "serial": "400",
        }

    def test_canonical_kept_on_gs1_domain(self):
        uri = "https://id.gs1.org/00/106141412345678908"
        record = to_urn_map(uri, 7)
        assert record["canonicalDL"] == uri
        assert record["sscc"] == "106141412345678908"
        assert "serial" not in record

    def test_lgtin_record(self):
        record = to_urn_map("https://id.gs1.org/01/09520123456788/10/LOT1", 7)
        assert record["lgtin"] == "09520123456788"
        assert record["serial"] == "LOT1"

    def test_grai_record(self):
        record = to_urn_map("https://id.gs1.org/8003/0614141123452400", 7)
        assert record["grai"] == "0614141123452"
        assert record["serial"] == "400"

    def test_sgln_without_extension(self):
        record = to_urn_map("https://id.gs1.org/414/0614141123452", 7)
        assert record["asURN"] == "urn:epc:id:sgln:0614141.12345.0"
        assert "serial" not in record

    def test_class_level_has_no_serial(self):
        record = to_urn_map("https://id.gs1.org/8010/0614141123ABC", 7)
        assert record["asURN"] == "urn:epc:idpat:cpi:0614141.123ABC.*"
        assert record["cpi"] == "0614141123ABC"
        assert "serial" not in record

    def test_unsupported_uri(self):
        with pytest.raises(UnsupportedIdentifierError, match="does not match"):
            to_urn_map("https://example.com/products/42", 7)


class TestVocabulary:
    """Tests for CBV vocabulary conversions."""

    def test_urn_to_web_uri(self):
        assert to_digital_link("urn:epcglobal:cbv:bizstep:shipping") == "https://ref.gs1.org/cbv/BizStep-shipping"
        assert to_digital_link("urn:epcglobal:cbv:disp:in_transit") == "https://ref.gs1.org/cbv/Disp-in_transit"

    def test_web_uri_to_urn(self):
        assert to_urn("https://ref.gs1.org/cbv/BizStep-shipping") == "urn:epcglobal:cbv:bizstep:shipping"
        assert to_urn("https://ref.gs1.org/cbv/btt-po") == "urn:epcglobal:cbv:btt:po"

    def test_voc_web_uri_to_urn(self):
        assert to_urn("https://ref.gs1.org/voc/Bizstep-receiving") == "urn:epcglobal:cbv:bizstep:receiving"

    @pytest.mark.parametrize("urn", [
        "urn:epcglobal:cbv:bizstep:shipping",
        "urn:epcglobal:cbv:disp:in_progress",
        "urn:epcglobal:cbv:btt:inv",
        "urn:epcglobal:cbv:sdt:owning_party",
        "urn:epcglobal:cbv:er:incorrect_data",
    ])
    def test_round_trip(self, urn):
        assert to_urn(to_digital_link(urn)) == urn

    def test_gs1_voc(self):
        assert to_digital_link("gs1:MT-Temperature") == "https://gs1.org/voc/MT-Temperature"
        assert to_urn("https://gs1.org/voc/MT-Temperature") == "gs1:MT-Temperature"
        assert to_urn("https://gs1.org/voc/BizStep-shipping") == "gs1:BizStep-shipping"


class TestBareString:
    """Tests for prefix stripping."""

    @pytest.mark.parametrize("value,expected", [
        ("urn:epcglobal:cbv:bizstep:shipping", "shipping"),
        ("https://ref.gs1.org/cbv/Disp-in_transit", "in_transit"),
        ("HTTPS://REF.GS1.ORG/CBV/BTT-po", "po"),
        ("https://ref.gs1.org/voc/Bizstep-receiving", "receiving"),
        ("https://gs1.org/voc/BizStep-shipping", "shipping"),
        ("https://gs1.org/voc/disp-active", "active"),
        ("cbv:SDT-owning_party", "owning_party"),
        ("shipping", "shipping"),
        ("urn:example:step:custom", "urn:example:step:custom"),
    ])
    def test_strip(self, value, expected):
        assert to_bare_string(value) == expected

    def test_idempotent(self):
        once = to_bare_string("urn:epcglobal:cbv:disp:in_transit")
        assert to_bare_string(once) == once

    @pytest.mark.parametrize("value", [None, "", " "])
    def test_blank(self, value):
        assert to_bare_string(value) == value


class TestCbvVocabulary:
    """Tests for bare value expansion per EPCIS field."""

    def test_urn_format(self):
        assert to_cbv_vocabulary("shipping", "bizStep", "urn") == "urn:epcglobal:cbv:bizstep:shipping"

    def test_web_uri_format(self):
        assert to_cbv_vocabulary("in_transit", "disposition", "webURI") == "https://ref.gs1.org/cbv/Disp-in_transit"

    def test_curie_stripped(self):
        assert to_cbv_vocabulary("cbv:BizStep-shipping", "bizStep", "urn") == "urn:epcglobal:cbv:bizstep:shipping"

    def test_user_vocabulary_unchanged(self):
        assert to_cbv_vocabulary("urn:example:step:custom", "bizStep", "urn") == "urn:example:step:custom"
        assert to_cbv_vocabulary("https://example.com/steps/custom", "bizStep", "webUri") == \
            "https://example.com/steps/custom"

    def test_unknown_field(self):
        assert to_cbv_vocabulary("shipping", "readPoint", "urn") == "shipping"

    def test_missing_inputs(self):
        assert to_cbv_vocabulary(None, "bizStep", "urn") is None
        assert to_cbv_vocabulary("", "bizStep", "urn") == ""
        assert to_cbv_vocabulary("shipping", None, "urn") == "shipping"

    def test_round_trip_through_bare(self):
        urn = "urn:epcglobal:cbv:sdt:possessing_party"
        assert to_cbv_vocabulary(to_bare_string(urn), "source", "urn") == urn


class TestShortNameReplacer:
    """Tests for short-name alias replacement."""

    @pytest.mark.parametrize("identifier,expected", [
        ("https://example.org/giai/401234599999", "https://id.gs1.org/8004/401234599999"),
        ("https://example.com/gdti/4012345000054987", "https://id.gs1.org/253/4012345000054987"),
        ("https://hello.comain//cpi/381366783201294-5A", "https://id.gs1.org/8010/381366783201294-5A"),
        ("https://myownDomain/gtin/12345678901231/ser/9999", "https://id.gs1.org/01/12345678901231/21/9999"),
        ("https://example.com/253/4012345000054987", "https://id.gs1.org/253/4012345000054987"),
        ("https://id.gs1.de/01/04012345999990/21/XYZ-1234", "https://id.gs1.org/01/04012345999990/21/XYZ-1234"),
        ("https://id.gs1.de/01/84384384898340/ser/894893894838934893",
         "https://id.gs1.org/01/84384384898340/21/894893894838934893"),
    ])
    def test_replaced(self, identifier, expected):
        assert short_name_replacer(identifier) == expected

    @pytest.mark.parametrize("identifier", [
        "https://www.ncbi.nlm.nih.gov/Taxonomy/Browser/wwwtax.cgi?id=9606",
        "https://identifiers.org/inchikey:CZMRCDWAGMRECN-UGDNZRGBSA-N",
        "testing:123",
        "urn:epc:id:gsin:8439589358.953939",
        "https://id.example/4343884394893",
    ])
    def test_unchanged(self, identifier):
        assert short_name_replacer(identifier) == identifier

    def test_qualifiers_keep_domain(self):
        """Only primary keys move to the GS1 resolver domain."""
        assert short_name_replacer("https://example.com/lot/ABC") == "https://example.com/10/ABC"
        assert short_name_replacer("https://example.com/ser/1") == "https://example.com/21/1"

    def test_none(self):
        assert short_name_replacer(None) is None
        assert short_name_replacer("") == ""
