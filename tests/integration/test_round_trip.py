"""
Round-trip tests across conversion, normalization and validation.
"""

import pytest

from gs1_identifiers import (
    ValidationContext,
    normalize,
    parse,
    short_name_replacer,
    to_digital_link,
    to_urn,
    to_urn_map,
    validate_identifier,
)

URNS = [
    "urn:epc:id:sgtin:0614141.812345.6789",
    "urn:epc:id:sscc:0614141.1234567890",
    "urn:epc:id:sgln:0614141.12345.400",
    "urn:epc:id:grai:0614141.12345.ABC",
    "urn:epc:id:giai:0614141.A1-2",
    "urn:epc:id:gsrn:0614141.1234567890",
    "urn:epc:id:gdti:0614141.12345.DOC1",
    "urn:epc:id:sgcn:4012345.67890.04711",
    "urn:epc:id:cpi:0614141.5PQ7-Z43.12345",
    "urn:epc:id:itip:4012345.012345.01.02.987",
    "urn:epc:class:lgtin:4012345.012345.LOT-9",
    "urn:epc:id:upui:4012345.012345.TPX51",
    "urn:epc:id:pgln:4000001.00000",
]


class TestUrnRoundTrip:
    """URN -> Digital Link -> URN with the GCP length from the packaged table."""

    @pytest.mark.parametrize("urn", URNS)
    def test_round_trip(self, urn):
        uri = to_digital_link(urn)
        assert uri.startswith("https://id.gs1.org/")
        assert to_urn(uri) == urn

    @pytest.mark.parametrize("urn", URNS)
    def test_generated_link_is_valid(self, urn):
        """Links built from URNs carry correct check digits."""
        uri = to_digital_link(urn)
        assert validate_identifier(uri, ValidationContext(gcp_length=7))


class TestShortNamePipeline:
    """Short-name links through alias replacement, parsing and conversion."""

    def test_brand_link_to_urn(self):
        uri = short_name_replacer("https://brand.example.com/gtin/80614141123458/ser/6789")
        assert uri == "https://id.gs1.org/01/80614141123458/21/6789"
        assert parse(uri) == {"01": "80614141123458", "21": "6789"}
        assert to_urn(uri) == "urn:epc:id:sgtin:0614141.812345.6789"

    def test_normalized_link_record(self):
        uri = normalize("https://brand.example.com/gtin/80614141123458/ser/6789")
        record = to_urn_map(uri)
        assert record["asCaptured"] == "https://brand.example.com/01/80614141123458/21/6789"
        assert record["canonicalDL"] == "https://id.gs1.org/01/80614141123458/21/6789"
        assert record["serial"] == "6789"
