"""
Digital-Link-only GTIN validators.

These cover GTIN URIs carrying data attributes (net weight, amount, expiry,
consumer product variant) that have no EPC URN form. They only apply when
validation is not restricted to EPCIS-compliant identifiers.
"""

from __future__ import annotations

import re
from typing import Sequence

from ..constants import (
    AMOUNT_PARAM,
    CPV_URI,
    EXPIRY_DATE_PARAM,
    GTIN_URI,
    LOT_URI,
    NET_WEIGHT_PARAM,
    SERIAL_URI,
)
from ..exceptions import MalformedIdentifierError
from . import check_digit
from .base import (
    DL_WITHOUT_GCP_MESSAGE,
    IdentifierValidator,
    PatternRule,
    ValidationContext,
    check_digit_check,
    fail,
    gcp_check,
)

# AI 22 / 10 / 21 value characters
QUALIFIER_VALUE = r"[!%-?A-Z_a-z\x22]{1,20}"
# YYMMDD with a real month and day
DATE_VALUE = re.compile(r"\d{2}(?:0[1-9]|1[0-2])(?:0[1-9]|[12]\d|3[01])")
DATE_AIS = ("11", "12", "13", "15", "16", "17")

LOT_SEGMENT = re.compile(r"/10/([^/?#]+)")
SERIAL_SEGMENT = re.compile(r"/21/([^/?#]+)")


def gtin_rule(pattern: str, example: str) -> PatternRule:
    """Base GTIN rule: 14 digits after /01/, then GCP and check digit."""
    return PatternRule(
        pattern,
        f"Invalid GTIN, GTIN should consist of 14 digits (Ex: {example}). Please check the URI: {{value}}",
        gcp_check(GTIN_URI, "GTIN", indicator=True),
        check_digit_check(check_digit.validate_gtin),
    )


DOMAIN_RULE = PatternRule(
    r"(http|https)://.*",
    "Invalid GTIN, GTIN should start with Domain name (Ex: https://id.gs1.org/). "
    "Please check the URI: {value}",
)


class DigitalLinkOnlyValidator(IdentifierValidator):
    """GTIN strategy with no URN grammar."""

    urn_marker = None
    uri_prefix = GTIN_URI
    epcis_compliant = False
    required: Sequence[str] = ()

    def rules_for(self, identifier: str, context: ValidationContext) -> Sequence[PatternRule]:
        if context.gcp_length is None:
            raise MalformedIdentifierError(DL_WITHOUT_GCP_MESSAGE, identifier)
        return self.uri_rules

    def matches(self, identifier: str) -> bool:
        return GTIN_URI in identifier and all(p in identifier for p in self.required)


class GTINWeightAmountBestBeforeValidator(DigitalLinkOnlyValidator):
    """GTIN with net weight (3103), expiry date (17) and amount payable (3922)."""

    name = "GTINWeightAmountBestBefore"
    required = (EXPIRY_DATE_PARAM, NET_WEIGHT_PARAM, AMOUNT_PARAM)

    uri_rules = (
        DOMAIN_RULE,
        gtin_rule(
            r"(http|https)://.*./01/[0-9]{14}(/.*|\?.*)?",
            "https://id.gs1.org/01/09520123456788?3103=000195&17=201225&3922=0299",
        ),
        PatternRule(
            r"(http|https)://.*./01/[0-9]{14}\?(?=[^?]*\b3103=\d{6})(?=[^?]*\b17=\d{6})"
            r"(?=[^?]*\b3922=\d{1,15})([^?]*)",
            "Invalid GTIN, GTIN should carry 3103 (6 digits), 17 (YYMMDD) and 3922 (1-15 digits) "
            "(Ex: https://id.gs1.org/01/09520123456788?3103=000195&17=201225&3922=0299). "
            "Please check the URI: {value}",
        ),
    )


def _lot_serial_expiry_check(uri: str, context: ValidationContext) -> None:
    lots = LOT_SEGMENT.findall(uri)
    serials = SERIAL_SEGMENT.findall(uri)

    if not lots and not serials:
        fail("Invalid GTIN, GTIN should carry a batch/lot (/10/) or a serial (/21/). Please check the URI: {value}", uri)
    if len(lots) > 1 or len(serials) > 1:
        fail("Invalid GTIN, batch/lot and serial may each appear only once. Please check the URI: {value}", uri)

    for value in lots + serials:
        if not re.fullmatch(QUALIFIER_VALUE, value):
            raise MalformedIdentifierError(
                f"Invalid GTIN, batch/lot or serial '{value}' should be 1 to 20 characters. "
                f"Please check the URI: {uri}",
                uri,
            )

    _, _, query = uri.partition("?")
    for pair in filter(None, query.split("&")):
        key, _, value = pair.partition("=")
        if key in DATE_AIS and not DATE_VALUE.fullmatch(value):
            fail(
                f"Invalid GTIN, date AI {key} should be a valid YYMMDD date. Please check the URI: {{value}}",
                uri,
            )


class GTINLotSerialExpiryValidator(DigitalLinkOnlyValidator):
    """GTIN with a batch/lot and/or serial, plus optional date attributes."""

    name = "GTINLotSerialExpiry"

    uri_rules = (
        DOMAIN_RULE,
        PatternRule(
            r"(?:http|https)://.*/01/\d{14}(?:[/?#].*)?",
            "Invalid GTIN, GTIN should consist of 14 digits "
            "(Ex: https://id.gs1.org/01/09520123456788/10/ABC1/21/12345?17=201225). "
            "Please check the URI: {value}",
            gcp_check(GTIN_URI, "GTIN", indicator=True),
            check_digit_check(check_digit.validate_gtin),
            _lot_serial_expiry_check,
        ),
    )

    def matches(self, identifier: str) -> bool:
        return GTIN_URI in identifier and (LOT_URI in identifier or SERIAL_URI in identifier)


class GTINCPVValidator(DigitalLinkOnlyValidator):
    """GTIN with a consumer product variant (AI 22)."""

    name = "GTINCPV"
    required = (CPV_URI,)

    uri_rules = (
        DOMAIN_RULE,
        gtin_rule(r"(http|https)://.*./01/[0-9]{14}(/.*|\?.*)?", "https://id.gs1.org/01/09520123456788/22/2A"),
        PatternRule(
            rf"(http|https)://.*./01/[0-9]{{14}}/22/{QUALIFIER_VALUE}",
            "Invalid GTIN, consumer product variant should be 1 to 20 characters "
            "(Ex: https://id.gs1.org/01/09520123456788/22/2A). Please check the URI: {value}",
        ),
    )


class GTINWeightValidator(DigitalLinkOnlyValidator):
    """GTIN with net weight in kg (3103)."""

    name = "GTINWeight"
    required = (NET_WEIGHT_PARAM,)

    uri_rules = (
        DOMAIN_RULE,
        gtin_rule(r"(http|https)://.*./01/[0-9]{14}(/.*|\?.*)?", "https://id.gs1.org/01/09520123456788?3103=000195"),
        PatternRule(
            r"(http|https)://.*./01/[0-9]{14}\?(?=[^?]*\b3103=\d{6})([^?]*)",
            "Invalid GTIN, net weight 3103 should be 6 digits "
            "(Ex: https://id.gs1.org/01/09520123456788?3103=000195). Please check the URI: {value}",
        ),
    )

