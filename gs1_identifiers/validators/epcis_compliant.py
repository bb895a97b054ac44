"""
Validators for the GS1 keys that may appear in EPCIS events.

Each validator accepts the EPC URN form (urn:epc:id:..., and urn:epc:idpat:...
for class-level identifiers where EPC defines one) and the GS1 Digital Link
form. Rules follow GS1 EPC Tag Data Standard 2.x, section 6.
"""

from __future__ import annotations

from ..constants import (
    CLASS_URN_PREFIX,
    CPI_SERIAL_URI,
    CPI_URI,
    CPI_URN,
    EXPIRY_DATE_PARAM,
    GCN_URI,
    GCN_URN,
    GDTI_URI,
    GDTI_URN,
    GIAI_URI,
    GIAI_URN,
    GINC_URI,
    GINC_URN,
    GLN_URI,
    GRAI_URI,
    GRAI_URN,
    GSIN_URI,
    GSIN_URN,
    GSRN_URI,
    GSRN_URN,
    GSRNP_URI,
    GSRNP_URN,
    GTIN_URI,
    ITIP_URI,
    ITIP_URN,
    LGTIN_URN,
    LOT_URI,
    PGLN_URI,
    PGLN_URN,
    SERIAL_URI,
    SGLN_URN,
    SGTIN_URN,
    SSCC_URI,
    SSCC_URN,
    TPX_URI,
    UPUI_URN,
)
from . import check_digit
from .base import (
    CHARS,
    CPI_CHARS,
    Check,
    IdentifierValidator,
    PatternRule,
    ValidationContext,
    check_digit_check,
    fail,
    gcp_check,
)


def _urn_value(urn: str, marker: str) -> str:
    return urn[urn.find(marker) + len(marker):]


def urn_key_check(marker: str, name: str, length: int, example: str,
                  components: int = 2, needs_more: bool = False) -> Check:
    """
    Check the digit count of the first `components` dot-separated parts of
    an EPC URN (GCP + reference), optionally requiring a further part.
    """
    def check(urn: str, context: ValidationContext) -> None:
        parts = _urn_value(urn, marker).split(".")
        if needs_more and len(parts) <= components:
            fail(
                f"Invalid {name}, {name} should be followed by a serial or extension "
                f"(Ex: {example}). Please check the provided URN: {{value}}",
                urn,
            )
        if len("".join(parts[:components])) != length:
            fail(
                f"Invalid {name}, GCP and reference of {name} should have {length} digits "
                f"(Ex: {example}). Please check the provided URN: {{value}}",
                urn,
            )
    return check


def start_rule(urn_prefix: str, name: str, example: str) -> PatternRule:
    return PatternRule(
        f"{urn_prefix}.*",
        f'Invalid {name}, {name} should start with "{urn_prefix}" (Ex: {example}). '
        "Please check the provided URN: {value}",
    )


def gcp_rule(urn_prefix: str, name: str, example: str, chars: str = "[0-9]") -> PatternRule:
    return PatternRule(
        f"{urn_prefix}{chars}{{6,12}}.*",
        f"Invalid {name}, {name} should consist of GCP with 6-12 digits (Ex: {example}). "
        "Please check the provided URN: {value}",
    )


def domain_rule(name: str, example: str) -> PatternRule:
    return PatternRule(
        r"(http|https)://.*",
        f"Invalid {name}, {name} should start with Domain name (Ex: {example}). "
        "Please check the URI: {value}",
    )


def _uri_message(name: str, what: str, example: str) -> str:
    return f"Invalid {name}, {name} {what} (Ex: {example}). Please check the URI: {{value}}"


class SGTINValidator(IdentifierValidator):
    """Serialised GTIN, plus the class-level GTIN pattern."""

    name = "SGTIN"
    urn_marker = SGTIN_URN
    uri_prefix = GTIN_URI
    class_key_length = 14

    urn_rules = (
        start_rule("urn:epc:id:sgtin:", "SGTIN", "urn:epc:id:sgtin:234567890.1123.9999"),
        gcp_rule("urn:epc:id:sgtin:", "SGTIN", "urn:epc:id:sgtin:234567890.1123.9999"),
        PatternRule(
            r"urn:epc:id:sgtin:[0-9]{6,12}\.[0-9]{1,7}.*",
            "Invalid SGTIN, SGTIN should be of 14 digits with GCP of 6-12 digits "
            "(Ex: urn:epc:id:sgtin:234567890.1123.9999). Please check the provided URN: {value}",
            urn_key_check(SGTIN_URN, "SGTIN", 13, "urn:epc:id:sgtin:234567890.1123.9999", needs_more=True),
        ),
        PatternRule(
            rf"urn:epc:id:sgtin:[0-9]{{6,12}}\.[0-9]{{1,7}}\.{CHARS}{{1,20}}",
            "Invalid SGTIN, SGTIN should consist of serial numbers "
            "(Ex: urn:epc:id:sgtin:234567.1890123.0000). Please check the provided URN: {value}",
        ),
    )
    class_urn_rules = (
        start_rule("urn:epc:idpat:sgtin:", "GTIN", "urn:epc:idpat:sgtin:234567890.1123.*"),
        gcp_rule("urn:epc:idpat:sgtin:", "GTIN", "urn:epc:idpat:sgtin:234567890.1123.*"),
        PatternRule(
            r"urn:epc:idpat:sgtin:[0-9]{6,12}\.[0-9]{1,7}\.\*",
            "Invalid GTIN, Class level GTIN should be of 14 digits with GCP of 6-12 digits "
            "(Ex: urn:epc:idpat:sgtin:234567890.1123.*). Please check the provided URN: {value}",
            urn_key_check(SGTIN_URN, "GTIN", 13, "urn:epc:idpat:sgtin:234567890.1123.*"),
        ),
    )
    uri_rules = (
        domain_rule("GTIN", "https://id.gs1.org/"),
        PatternRule(
            r"(http|https)://.*./01/[0-9]{14}.*",
            _uri_message("GTIN", "should consist of 14 digits", "https://id.gs1.org/01/12345678901231/21/9999"),
        ),
        PatternRule(
            rf"(http|https)://.*./01/[0-9]{{14}}/21/{CHARS}{{1,20}}",
            _uri_message("SGTIN", "should consist of 14 digit GTIN followed by serial numbers",
                         "https://id.gs1.org/01/12345678901231/21/9999"),
            gcp_check(GTIN_URI, "GTIN", indicator=True),
            check_digit_check(check_digit.validate_gtin),
        ),
    )
    class_uri_rules = (
        domain_rule("GTIN", "https://id.gs1.org/"),
        PatternRule(
            r"(http|https)://.*./01/[0-9]{14}",
            _uri_message("GTIN", "should consist of 14 digits", "https://id.gs1.org/01/12345678901231"),
            gcp_check(GTIN_URI, "GTIN", indicator=True),
            check_digit_check(check_digit.validate_gtin),
        ),
    )

    def matches(self, identifier: str) -> bool:
        if SGTIN_URN in identifier:
            return True
        return GTIN_URI in identifier and not (
            LOT_URI in identifier or EXPIRY_DATE_PARAM in identifier
        )


class LGTINValidator(IdentifierValidator):
    """GTIN + batch/lot (EPC class identifier)."""

    name = "LGTIN"
    urn_marker = LGTIN_URN
    uri_prefix = GTIN_URI

    urn_rules = (
        start_rule("urn:epc:class:lgtin:", "LGTIN", "urn:epc:class:lgtin:234567890.1123.9999"),
        gcp_rule("urn:epc:class:lgtin:", "LGTIN", "urn:epc:class:lgtin:234567890.1123.9999"),
        PatternRule(
            r"urn:epc:class:lgtin:[0-9]{6,12}\.[0-9]{1,7}.*",
            "Invalid LGTIN, LGTIN should be of 14 digits and GCP should match 6-12 digits "
            "(Ex: urn:epc:class:lgtin:234567890.1123.9999). Please check the provided URN: {value}",
            urn_key_check(LGTIN_URN, "LGTIN", 13, "urn:epc:class:lgtin:234567890.1123.9999"),
        ),
        PatternRule(
            rf"urn:epc:class:lgtin:[0-9]{{6,12}}\.[0-9]{{1,7}}\.{CHARS}{{1,20}}",
            "Invalid LGTIN, LGTIN should consist of a batch/lot number "
            "(Ex: urn:epc:class:lgtin:234567890.1123.9999). Please check the provided URN: {value}",
        ),
    )
    uri_rules = (
        domain_rule("LGTIN", "https://id.gs1.org/01/12345678901231/10/1111"),
        PatternRule(
            r"(http|https)://.*./01/[0-9]{14}.*",
            _uri_message("LGTIN", "should consist of 14 digit GTIN", "https://id.gs1.org/01/12345678901231/10/1111"),
        ),
        PatternRule(
            rf"(http|https)://.*./01/[0-9]{{14}}/10/{CHARS}{{1,20}}",
            _uri_message("LGTIN", "should consist of 14 digit GTIN followed by batch/lot",
                         "https://id.gs1.org/01/12345678901231/10/1111"),
            gcp_check(GTIN_URI, "LGTIN", indicator=True),
            check_digit_check(check_digit.validate_gtin),
        ),
    )

    def matches(self, identifier: str) -> bool:
        if LGTIN_URN in identifier:
            return True
        return (GTIN_URI in identifier and LOT_URI in identifier) and not (
            SERIAL_URI in identifier or EXPIRY_DATE_PARAM in identifier
        )


class UPUIValidator(IdentifierValidator):
    """GTIN + third party controlled, serialised extension (TPX)."""

    name = "UPUI"
    urn_marker = UPUI_URN
    uri_prefix = GTIN_URI

    urn_rules = (
        start_rule("urn:epc:id:upui:", "UPUI", "urn:epc:id:upui:234567890123.1.1234ABCD5678EFGH"),
        gcp_rule("urn:epc:id:upui:", "UPUI", "urn:epc:id:upui:234567890123.1.1234ABCD5678EFGH"),
        PatternRule(
            r"urn:epc:id:upui:[0-9]{6,12}\.[0-9]{1,7}.*",
            "Invalid UPUI, UPUI must be of 14 digits "
            "(Ex: urn:epc:id:upui:234567890123.1.1234ABCD5678EFGH). Please check the provided URN: {value}",
        ),
        PatternRule(
            rf"urn:epc:id:upui:[0-9]{{6,12}}\.[0-9]{{1,7}}\.{CHARS}{{1,28}}",
            "Invalid UPUI, UPUI should consist of TPX of 1 to 28 characters "
            "(Ex: urn:epc:id:upui:234567890123.1.1234ABCD5678EFGH). Please check the provided URN: {value}",
            urn_key_check(UPUI_URN, "UPUI", 13, "urn:epc:id:upui:234567890123.1.1234ABCD5678EFGH"),
        ),
    )
    uri_rules = (
        domain_rule("UPUI", "https://id.gs1.org/01/12345678901231/235/9999"),
        PatternRule(
            r"(http|https)://.*./01/[0-9]{14}.*",
            _uri_message("UPUI", "must consist of 14 digits", "https://id.gs1.org/01/12345678901231/235/9999"),
        ),
        PatternRule(
            rf"(http|https)://.*./01/[0-9]{{14}}/235/{CHARS}{{1,28}}",
            _uri_message("UPUI", "must consist of TPX 1 to 28 characters",
                         "https://id.gs1.org/01/12345678901231/235/9999"),
            gcp_check(GTIN_URI, "UPUI", indicator=True),
            check_digit_check(check_digit.validate_gtin),
        ),
    )

    def matches(self, identifier: str) -> bool:
        if UPUI_URN in identifier:
            return True
        return GTIN_URI in identifier and TPX_URI in identifier


class SGLNValidator(IdentifierValidator):
    name = "SGLN"
    urn_marker = SGLN_URN
    uri_prefix = GLN_URI

    urn_rules = (
        start_rule("urn:epc:id:sgln:", "SGLN", "urn:epc:id:sgln:1234567890.12.1111"),
        gcp_rule("urn:epc:id:sgln:", "SGLN", "urn:epc:id:sgln:1234567890.12.1111"),
        PatternRule(
            r"urn:epc:id:sgln:[0-9]{6,12}\.[0-9]{0,6}.*",
            "Invalid SGLN, SGLN should be of 13 digits with GCP 6-12 digits "
            "(Ex: urn:epc:id:sgln:1234567890.12.1111). Please check the provided URN: {value}",
            urn_key_check(SGLN_URN, "SGLN", 12, "urn:epc:id:sgln:1234567890.12.1111", needs_more=True),
        ),
        PatternRule(
            rf"urn:epc:id:sgln:[0-9]{{6,12}}\.[0-9]{{0,6}}(?:\.{CHARS}{{1,20}})?",
            "Invalid SGLN, SGLN should consist of an extension "
            "(Ex: urn:epc:id:sgln:1234567890.12.1111). Please check the provided URN: {value}",
        ),
    )
    uri_rules = (
        domain_rule("GLN", "https://id.gs1.org/"),
        PatternRule(
            r"(http|https):?://.*/414/[0-9]{13}.*",
            _uri_message("GLN", "should consist of 13 digits",
                         "https://id.gs1.org/414/1234567890128/254/1111"),
            gcp_check(GLN_URI, "GLN"),
            check_digit_check(check_digit.validate_gln),
        ),
        PatternRule(
            rf"(http|https):?://.*/414/[0-9]{{13}}(/254/{CHARS}{{1,20}})?",
            _uri_message("SGLN", "should consist of 13 digit GLN with an optional extension",
                         "https://id.gs1.org/414/1234567890128/254/1111"),
        ),
    )


class SSCCValidator(IdentifierValidator):
    name = "SSCC"
    urn_marker = SSCC_URN
    uri_prefix = SSCC_URI

    urn_rules = (
        start_rule("urn:epc:id:sscc:", "SSCC", "urn:epc:id:sscc:234567.18901234567"),
        gcp_rule("urn:epc:id:sscc:", "SSCC", "urn:epc:id:sscc:234567.18901234567"),
        PatternRule(
            r"urn:epc:id:sscc:[0-9]{6,12}\.[0-9]{5,11}",
            "Invalid SSCC, SSCC should be 18 digits with GCP 6-12 digits "
            "(Ex: urn:epc:id:sscc:234567.18901234567). Please check the provided URN: {value}",
            urn_key_check(SSCC_URN, "SSCC", 17, "urn:epc:id:sscc:234567.18901234567"),
        ),
    )
    uri_rules = (
        domain_rule("SSCC", "https://id.gs1.org/"),
        PatternRule(
            r"(http|https)://.*/00/[0-9]{18}",
            _uri_message("SSCC", "should consist of 18 digits", "https://id.gs1.org/00/012345678966638624"),
            gcp_check(SSCC_URI, "SSCC", indicator=True),
            check_digit_check(check_digit.validate_sscc),
        ),
    )


class GRAIValidator(IdentifierValidator):
    name = "GRAI"
    urn_marker = GRAI_URN
    uri_prefix = GRAI_URI
    class_key_length = 13

    urn_rules = (
        start_rule("urn:epc:id:grai:", "GRAI", "urn:epc:id:grai:1234567890.12.1ABC"),
        gcp_rule("urn:epc:id:grai:", "GRAI", "urn:epc:id:grai:1234567890.12.1ABC"),
        PatternRule(
            r"urn:epc:id:grai:[0-9]{6,12}\.[0-9]{0,6}.*",
            "Invalid GRAI, GRAI must be 13 digits followed by a serial "
            "(Ex: urn:epc:id:grai:1234567890.12.1ABC). Please check the provided URN: {value}",
            urn_key_check(GRAI_URN, "GRAI", 12, "urn:epc:id:grai:1234567890.12.1ABC"),
        ),
        PatternRule(
            rf"urn:epc:id:grai:[0-9]{{6,12}}\.[0-9]{{0,6}}\.{CHARS}{{1,16}}",
            "Invalid GRAI, GRAI with serial must be 13 digits followed by 1 to 16 alphanumeric characters "
            "(Ex: urn:epc:id:grai:1234567890.12.1ABC). Please check the provided URN: {value}",
        ),
    )
    class_urn_rules = (
        start_rule("urn:epc:idpat:grai:", "GRAI", "urn:epc:idpat:grai:1234567890.12.*"),
        gcp_rule("urn:epc:idpat:grai:", "GRAI", "urn:epc:idpat:grai:1234567890.12.*"),
        PatternRule(
            r"urn:epc:idpat:grai:[0-9]{6,12}\.[0-9]{0,6}\.\*",
            "Invalid GRAI, Class level GRAI must be 13 digits "
            "(Ex: urn:epc:idpat:grai:1234567890.12.*). Please check the provided URN: {value}",
            urn_key_check(GRAI_URN, "GRAI", 12, "urn:epc:idpat:grai:1234567890.12.*"),
        ),
    )
    uri_rules = (
        domain_rule("GRAI", "https://id.gs1.org/"),
        PatternRule(
            rf"(http|https)://.*/8003/[0-9]{{13}}{CHARS}{{1,16}}",
            _uri_message("GRAI", "with serial must be 13 digits followed by 1 to 16 alphanumeric characters",
                         "https://id.gs1.org/8003/1234567890128ABCD"),
            gcp_check(GRAI_URI, "GRAI"),
            check_digit_check(check_digit.validate_grai),
        ),
    )
    class_uri_rules = (
        domain_rule("GRAI", "https://id.gs1.org/"),
        PatternRule(
            r"(http|https)://.*/8003/[0-9]{13}",
            _uri_message("GRAI", "must be 13 digits", "https://id.gs1.org/8003/9524321890009"),
            gcp_check(GRAI_URI, "GRAI"),
            check_digit_check(check_digit.validate_grai),
        ),
    )


class GIAIValidator(IdentifierValidator):
    name = "GIAI"
    urn_marker = GIAI_URN
    uri_prefix = GIAI_URI

    urn_rules = (
        start_rule("urn:epc:id:giai:", "GIAI", "urn:epc:id:giai:1234567890.ABCDEF1234"),
        gcp_rule("urn:epc:id:giai:", "GIAI", "urn:epc:id:giai:1234567890.ABCDEF1234"),
        PatternRule(
            rf"urn:epc:id:giai:[0-9]{{6,12}}\.{CHARS}{{1,24}}",
            "Invalid GIAI, GIAI should consist of GCP with 6-12 digits followed by an alphanumeric "
            "asset reference (Ex: urn:epc:id:giai:1234567890.ABCDEF1234). Please check the provided URN: {value}",
        ),
    )
    uri_rules = (
        domain_rule("GIAI", "https://id.gs1.org/8004/1234567890ABCD"),
        PatternRule(
            rf"(http|https)://.*./8004/[0-9]{{6,12}}{CHARS}{{1,24}}",
            _uri_message("GIAI", "must be between 7 and 30 alphanumeric characters",
                         "https://id.gs1.org/8004/1234567890ABCD"),
            gcp_check(GIAI_URI, "GIAI"),
        ),
    )


def _ginc_length(urn: str, context: ValidationContext) -> None:
    gcp, _, reference = _urn_value(urn, GINC_URN).partition(".")
    if not 7 <= len(gcp) + len(reference) <= 30:
        fail(
            "Invalid GINC, GINC should be between 7 and 30 characters "
            "(Ex: urn:epc:id:ginc:1234567890.ABCDEF123456789). Please check the provided URN: {value}",
            urn,
        )


class GINCValidator(IdentifierValidator):
    name = "GINC"
    urn_marker = GINC_URN
    uri_prefix = GINC_URI

    urn_rules = (
        start_rule("urn:epc:id:ginc:", "GINC", "urn:epc:id:ginc:1234567890.ABCDEF123456789"),
        gcp_rule("urn:epc:id:ginc:", "GINC", "urn:epc:id:ginc:1234567890.ABCDEF123456789"),
        PatternRule(
            rf"urn:epc:id:ginc:[0-9]{{6,12}}\.{CHARS}{{0,24}}",
            "Invalid GINC, GINC should be between 7 and 30 characters with GCP 6-12 digits "
            "(Ex: urn:epc:id:ginc:1234567890.ABCDEF123456789). Please check the provided URN: {value}",
            _ginc_length,
        ),
    )
    uri_rules = (
        domain_rule("GINC", "https://id.gs1.org/401/123456789012100"),
        PatternRule(
            rf"(http|https)://.*./401/[0-9]{{6,12}}{CHARS}{{1,24}}",
            _uri_message("GINC", "should be between 7 and 30 characters with GCP 6-12 digits",
                         "https://id.gs1.org/401/123456789012100"),
            gcp_check(GINC_URI, "GINC"),
        ),
    )


class GSINValidator(IdentifierValidator):
    name = "GSIN"
    urn_marker = GSIN_URN
    uri_prefix = GSIN_URI

    urn_rules = (
        start_rule("urn:epc:id:gsin:", "GSIN", "urn:epc:id:gsin:123456.7890123456"),
        gcp_rule("urn:epc:id:gsin:", "GSIN", "urn:epc:id:gsin:123456.7890123456"),
        PatternRule(
            r"urn:epc:id:gsin:[0-9]{6,12}\.[0-9]{4,10}",
            "Invalid GSIN, GSIN should consist of 17 digits with GCP 6-12 digits "
            "(Ex: urn:epc:id:gsin:123456.7890123456). Please check the provided URN: {value}",
            urn_key_check(GSIN_URN, "GSIN", 16, "urn:epc:id:gsin:123456.7890123456"),
        ),
    )
    uri_rules = (
        domain_rule("GSIN", "https://id.gs1.org/402/12345607890123456"),
        PatternRule(
            r"(http|https)://.*./402/[0-9]{17}",
            _uri_message("GSIN", "should consist of 17 digits", "https://id.gs1.org/402/12345607890123456"),
            gcp_check(GSIN_URI, "GSIN"),
            check_digit_check(check_digit.validate_gsin),
        ),
    )


def _validate_gsrnp_check_digit(uri: str) -> None:
    check_digit.validate_segment(uri, GSRNP_URI, 17, "GSRNP")


class GSRNPValidator(IdentifierValidator):
    """Global Service Relation Number, provider."""

    name = "GSRNP"
    urn_marker = GSRNP_URN
    uri_prefix = GSRNP_URI

    urn_rules = (
        start_rule("urn:epc:id:gsrnp:", "GSRNP", "urn:epc:id:gsrnp:123456.78901234567"),
        PatternRule(
            r"urn:epc:id:gsrnp:[0-9]{6,12}\..*",
            "Invalid GSRNP, GSRNP should consist of GCP with 6-12 digits "
            "(Ex: urn:epc:id:gsrnp:123456.78901234567). Please check the provided URN: {value}",
        ),
        PatternRule(
            r"urn:epc:id:gsrnp:[0-9]{6,12}\.[0-9]{5,11}",
            "Invalid GSRNP, GSRNP should be of 18 digits "
            "(Ex: urn:epc:id:gsrnp:123456.78901234567). Please check the provided URN: {value}",
            urn_key_check(GSRNP_URN, "GSRNP", 17, "urn:epc:id:gsrnp:123456.78901234567"),
        ),
    )
    uri_rules = (
        domain_rule("GSRNP", "https://id.gs1.org/8017/123456789091429723"),
        PatternRule(
            r"(http|https)://.*./8017/[0-9]{18}",
            _uri_message("GSRNP", "should consist of 18 digits", "https://id.gs1.org/8017/123456789091429723"),
            gcp_check(GSRNP_URI, "GSRNP"),
            check_digit_check(_validate_gsrnp_check_digit),
        ),
    )


class GSRNValidator(IdentifierValidator):
    """Global Service Relation Number, recipient."""

    name = "GSRN"
    urn_marker = GSRN_URN
    uri_prefix = GSRN_URI

    urn_rules = (
        start_rule("urn:epc:id:gsrn:", "GSRN", "urn:epc:id:gsrn:123456.78901234567"),
        PatternRule(
            r"urn:epc:id:gsrn:[0-9]{6,12}\..*",
            "Invalid GSRN, GSRN should consist of GCP with 6-12 digits "
            "(Ex: urn:epc:id:gsrn:123456.78901234567). Please check the provided URN: {value}",
        ),
        PatternRule(
            r"urn:epc:id:gsrn:[0-9]{6,12}\.[0-9]{5,11}",
            "Invalid GSRN, GSRN should consist of 18 digits "
            "(Ex: urn:epc:id:gsrn:123456.78901234567). Please check the provided URN: {value}",
            urn_key_check(GSRN_URN, "GSRN", 17, "urn:epc:id:gsrn:123456.78901234567"),
        ),
    )
    uri_rules = (
        domain_rule("GSRN", "https://id.gs1.org/8018/123456789091429723"),
        PatternRule(
            r"(http|https)://.*./8018/[0-9]{18}",
            _uri_message("GSRN", "should consist of 18 digits", "https://id.gs1.org/8018/123456789091429723"),
            gcp_check(GSRN_URI, "GSRN"),
            check_digit_check(check_digit.validate_gsrn),
        ),
    )


class GDTIValidator(IdentifierValidator):
    name = "GDTI"
    urn_marker = GDTI_URN
    uri_prefix = GDTI_URI
    class_key_length = 13

    urn_rules = (
        start_rule("urn:epc:id:gdti:", "GDTI", "urn:epc:id:gdti:123456.789012.ABC123"),
        gcp_rule("urn:epc:id:gdti:", "GDTI", "urn:epc:id:gdti:123456.789012.ABC123"),
        PatternRule(
            r"urn:epc:id:gdti:[0-9]{6,12}\.[0-9]{0,6}.*",
            "Invalid GDTI, GDTI should be of 13 digits "
            "(Ex: urn:epc:id:gdti:123456.789012.ABC123). Please check the provided URN: {value}",
            urn_key_check(GDTI_URN, "GDTI", 12, "urn:epc:id:gdti:123456.789012.ABC123"),
        ),
        PatternRule(
            rf"urn:epc:id:gdti:[0-9]{{6,12}}\.[0-9]{{0,6}}\.{CHARS}{{1,17}}",
            "Invalid GDTI, GDTI with serial must be 13 digits followed by 1 to 17 alphanumeric characters "
            "(Ex: urn:epc:id:gdti:123456.789012.ABC123). Please check the provided URN: {value}",
        ),
    )
    class_urn_rules = (
        start_rule("urn:epc:idpat:gdti:", "GDTI", "urn:epc:idpat:gdti:123456.789012.*"),
        gcp_rule("urn:epc:idpat:gdti:", "GDTI", "urn:epc:idpat:gdti:123456.789012.*"),
        PatternRule(
            r"urn:epc:idpat:gdti:[0-9]{6,12}\.[0-9]{0,6}\.\*",
            "Invalid GDTI, Class level GDTI should be of 13 digits "
            "(Ex: urn:epc:idpat:gdti:123456.789012.*). Please check the provided URN: {value}",
            urn_key_check(GDTI_URN, "GDTI", 12, "urn:epc:idpat:gdti:123456.789012.*"),
        ),
    )
    uri_rules = (
        domain_rule("GDTI", "https://id.gs1.org/"),
        PatternRule(
            r"(http|https)://.*./253/[0-9]{13}.*",
            _uri_message("GDTI", "must be 13 digits", "https://id.gs1.org/253/1234567890128ABC123"),
        ),
        PatternRule(
            rf"(http|https)://.*./253/[0-9]{{13}}{CHARS}{{1,17}}",
            _uri_message("GDTI", "must be 13 digits followed by 1 to 17 alphanumeric characters",
                         "https://id.gs1.org/253/1234567890128ABC123"),
            gcp_check(GDTI_URI, "GDTI"),
            check_digit_check(check_digit.validate_gdti),
        ),
    )
    class_uri_rules = (
        domain_rule("GDTI", "https://id.gs1.org/"),
        PatternRule(
            r"(http|https)://.*./253/[0-9]{13}",
            _uri_message("GDTI", "must be 13 digits", "https://id.gs1.org/253/9524321400017"),
            gcp_check(GDTI_URI, "GDTI"),
            check_digit_check(check_digit.validate_gdti),
        ),
    )


class GCNValidator(IdentifierValidator):
    """Global Coupon Number (EPC scheme sgcn)."""

    name = "GCN"
    urn_marker = GCN_URN
    uri_prefix = GCN_URI
    class_key_length = 13

    urn_rules = (
        start_rule("urn:epc:id:sgcn:", "GCN", "urn:epc:id:sgcn:123456.789012.4567890"),
        gcp_rule("urn:epc:id:sgcn:", "GCN", "urn:epc:id:sgcn:123456.789012.4567890"),
        PatternRule(
            r"urn:epc:id:sgcn:[0-9]{6,12}\.[0-9]{0,7}.*",
            "Invalid GCN, GCN should consist of 13 digits "
            "(Ex: urn:epc:id:sgcn:123456.789012.4567890). Please check the provided URN: {value}",
        ),
        PatternRule(
            r"urn:epc:id:sgcn:[0-9]{6,12}\.[0-9]{0,7}\.[0-9]{0,12}",
            "Invalid GCN, GCN with serial must be between 14 and 25 digits "
            "(Ex: urn:epc:id:sgcn:123456.789012.4567890). Please check the provided URN: {value}",
            urn_key_check(GCN_URN, "GCN", 12, "urn:epc:id:sgcn:123456.789012.4567890"),
        ),
    )
    class_urn_rules = (
        start_rule("urn:epc:idpat:sgcn:", "GCN", "urn:epc:idpat:sgcn:123456.789012.*"),
        gcp_rule("urn:epc:idpat:sgcn:", "GCN", "urn:epc:idpat:sgcn:123456.789012.*"),
        PatternRule(
            r"urn:epc:idpat:sgcn:[0-9]{6,12}\.[0-9]{0,7}\.\*",
            "Invalid GCN, Class level GCN should consist of 13 digits "
            "(Ex: urn:epc:idpat:sgcn:123456.789012.*). Please check the provided URN: {value}",
            urn_key_check(GCN_URN, "GCN", 12, "urn:epc:idpat:sgcn:123456.789012.*"),
        ),
    )
    uri_rules = (
        domain_rule("GCN", "https://id.gs1.org/255/12345678901284844274999"),
        PatternRule(
            r"(http|https)://.*./255/[0-9]{13}.*",
            _uri_message("GCN", "should consist of 13 digits", "https://id.gs1.org/255/12345678901284844274999"),
        ),
        PatternRule(
            r"(http|https)://.*./255/[0-9]{13}[0-9]{0,12}",
            _uri_message("GCN", "with serial must be between 14 and 25 digits",
                         "https://id.gs1.org/255/12345678901284844274999"),
            gcp_check(GCN_URI, "GCN"),
            check_digit_check(check_digit.validate_gcn),
        ),
    )
    class_uri_rules = (
        domain_rule("GCN", "https://id.gs1.org/255/9524321678904"),
        PatternRule(
            r"(http|https)://.*./255/[0-9]{13}",
            _uri_message("GCN", "should consist of 13 digits", "https://id.gs1.org/255/9524321678904"),
            gcp_check(GCN_URI, "GCN"),
            check_digit_check(check_digit.validate_gcn),
        ),
    )


def _cpi_urn_check(urn: str, context: ValidationContext) -> None:
    value = _urn_value(urn, CPI_URN)
    gcp, _, rest = value.partition(".")
    reference = rest.rpartition(".")[0]
    if not 7 <= len(gcp) + len(reference) <= 30:
        fail(
            "Invalid CPI, CPI must be between 7 and 30 characters "
            "(Ex: urn:epc:id:cpi:123456789.0123459.1234). Please check the provided URN: {value}",
            urn,
        )
    if not gcp.isdigit():
        fail("Invalid CPI, CPI should consist of GCP with 6-12 digits. Please check the provided URN: {value}", urn)


class CPIValidator(IdentifierValidator):
    """Component / Part Identifier, serialised or class level."""

    name = "CPI"
    urn_marker = CPI_URN
    uri_prefix = CPI_URI

    urn_rules = (
        start_rule("urn:epc:id:cpi:", "CPI", "urn:epc:id:cpi:123456789.0123459.1234"),
        gcp_rule("urn:epc:id:cpi:", "CPI", "urn:epc:id:cpi:123456789.0123459.1234", chars=CPI_CHARS),
        PatternRule(
            rf"urn:epc:id:cpi:{CPI_CHARS}{{6,12}}\.{CPI_CHARS}{{1,24}}.*",
            "Invalid CPI, CPI must be between 7 and 30 characters with GCP 6-12 digits "
            "(Ex: urn:epc:id:cpi:123456789.0123459.1234). Please check the provided URN: {value}",
        ),
        PatternRule(
            rf"urn:epc:id:cpi:{CPI_CHARS}{{6,12}}\.{CPI_CHARS}{{1,24}}\.[0-9]{{1,12}}",
            "Invalid CPI, CPI must be between 7 and 30 characters followed by a serial of 1-12 digits "
            "(Ex: urn:epc:id:cpi:123456789.0123459.1234). Please check the provided URN: {value}",
            _cpi_urn_check,
        ),
    )
    class_urn_rules = (
        start_rule("urn:epc:idpat:cpi:", "CPI", "urn:epc:idpat:cpi:123456789.0123459.*"),
        gcp_rule("urn:epc:idpat:cpi:", "CPI", "urn:epc:idpat:cpi:123456789.0123459.*", chars=CPI_CHARS),
        PatternRule(
            rf"urn:epc:idpat:cpi:{CPI_CHARS}{{6,12}}\.{CPI_CHARS}{{0,24}}\.\*",
            "Invalid CPI, Class level CPI must be between 7 and 30 characters with GCP 6-12 digits "
            "(Ex: urn:epc:idpat:cpi:123456789.0123459.*). Please check the provided URN: {value}",
            _cpi_urn_check,
        ),
    )
    uri_rules = (
        domain_rule("CPI", "https://id.gs1.org/"),
        PatternRule(
            rf"(http|https)://.*./8010/{CPI_CHARS}{{7,30}}.*",
            _uri_message("CPI", "must be between 7 and 30 characters",
                         "https://id.gs1.org/8010/1234567890123459/8011/1234"),
            gcp_check(CPI_URI, "CPI"),
        ),
        PatternRule(
            rf"(http|https)://.*./8010/{CPI_CHARS}{{7,30}}/8011/[0-9]{{1,12}}",
            _uri_message("CPI", "must be 7-30 characters followed by a serial of 1 to 12 digits",
                         "https://id.gs1.org/8010/1234567890123459/8011/1234"),
        ),
    )
    class_uri_rules = (
        domain_rule("CPI", "https://id.gs1.org/"),
        PatternRule(
            rf"(http|https)://.*./8010/{CPI_CHARS}{{7,30}}",
            _uri_message("CPI", "must be between 7 and 30 characters", "https://id.gs1.org/8010/1234567890123459"),
            gcp_check(CPI_URI, "CPI"),
        ),
    )

    def is_class_level(self, identifier: str, is_urn: bool) -> bool:
        if is_urn:
            return CLASS_URN_PREFIX in identifier
        return CPI_SERIAL_URI not in identifier


def _validate_itip_check_digit(uri: str) -> None:
    check_digit.validate_segment(uri, ITIP_URI, 13, "ITIP")


class ITIPValidator(IdentifierValidator):
    """Individual Trade Item Piece."""

    name = "ITIP"
    urn_marker = ITIP_URN
    uri_prefix = ITIP_URI
    class_key_length = 18

    urn_rules = (
        start_rule("urn:epc:id:itip:", "ITIP", "urn:epc:id:itip:23456789.10123.56.78.0000"),
        gcp_rule("urn:epc:id:itip:", "ITIP", "urn:epc:id:itip:23456789.10123.56.78.0000"),
        PatternRule(
            r"urn:epc:id:itip:[0-9]{6,12}\.[0-9]{1,7}\.[0-9]{2}\.[0-9]{2}.*",
            "Invalid ITIP, ITIP should consist of 18 digits "
            "(Ex: urn:epc:id:itip:23456789.10123.56.78.0000). Please check the provided URN: {value}",
            urn_key_check(ITIP_URN, "ITIP", 17, "urn:epc:id:itip:23456789.10123.56.78.0000",
                          components=4, needs_more=True),
        ),
        PatternRule(
            rf"urn:epc:id:itip:[0-9]{{6,12}}\.[0-9]{{1,7}}\.[0-9]{{2}}\.[0-9]{{2}}\.{CHARS}{{1,20}}",
            "Invalid ITIP, ITIP should consist of serial numbers of 1 to 20 characters "
            "(Ex: urn:epc:id:itip:23456789.10123.56.78.0000). Please check the provided URN: {value}",
        ),
    )
    class_urn_rules = (
        start_rule("urn:epc:idpat:itip:", "ITIP", "urn:epc:idpat:itip:23456789.10123.56.78.*"),
        gcp_rule("urn:epc:idpat:itip:", "ITIP", "urn:epc:idpat:itip:23456789.10123.56.78.*"),
        PatternRule(
            r"urn:epc:idpat:itip:[0-9]{6,12}\.[0-9]{1,7}\.[0-9]{2}\.[0-9]{2}\.\*",
            "Invalid ITIP, Class level ITIP should consist of 18 digits "
            "(Ex: urn:epc:idpat:itip:23456789.10123.56.78.*). Please check the provided URN: {value}",
            urn_key_check(ITIP_URN, "ITIP", 17, "urn:epc:idpat:itip:23456789.10123.56.78.*", components=4),
        ),
    )
    uri_rules = (
        domain_rule("ITIP", "https://id.gs1.org/8006/123456789012356756/21/100"),
        PatternRule(
            r"(http|https)://.*./8006/[0-9]{18}.*",
            _uri_message("ITIP", "must consist of 18 digits", "https://id.gs1.org/8006/123456789012356756/21/100"),
        ),
        PatternRule(
            rf"(http|https)://.*./8006/[0-9]{{18}}/21/{CHARS}{{1,20}}",
            _uri_message("ITIP", "must consist of serial numbers of 1 to 20 characters",
                         "https://id.gs1.org/8006/123456789012356756/21/100"),
            gcp_check(ITIP_URI, "ITIP", indicator=True),
            check_digit_check(_validate_itip_check_digit),
        ),
    )
    class_uri_rules = (
        domain_rule("ITIP", "https://id.gs1.org/8006/123456789012356756"),
        PatternRule(
            r"(http|https)://.*./8006/[0-9]{18}",
            _uri_message("ITIP", "must consist of 18 digits", "https://id.gs1.org/8006/123456789012356756"),
            gcp_check(ITIP_URI, "ITIP", indicator=True),
            check_digit_check(_validate_itip_check_digit),
        ),
    )


class PGLNValidator(IdentifierValidator):
    """Party GLN."""

    name = "PGLN"
    urn_marker = PGLN_URN
    uri_prefix = PGLN_URI

    urn_rules = (
        start_rule("urn:epc:id:pgln:", "PGLN", "urn:epc:id:pgln:123456.789012"),
        PatternRule(
            r"urn:epc:id:pgln:[0-9]{6,12}\..*",
            "Invalid PGLN, PGLN should consist of GCP with 6-12 digits "
            "(Ex: urn:epc:id:pgln:123456.789012). Please check the provided URN: {value}",
        ),
        PatternRule(
            r"urn:epc:id:pgln:[0-9]{6,12}\.[0-9]{0,6}",
            "Invalid PGLN, PGLN length should be 12 digits "
            "(Ex: urn:epc:id:pgln:123456.789012). Please check the provided URN: {value}",
            urn_key_check(PGLN_URN, "PGLN", 12, "urn:epc:id:pgln:123456.789012"),
        ),
    )
    uri_rules = (
        domain_rule("PGLN", "https://id.gs1.org/"),
        PatternRule(
            r"(http|https):?://.*/417/[0-9]{13}",
            _uri_message("PGLN", "should consist of 13 digits", "https://id.gs1.org/417/1234567890128"),
            gcp_check(PGLN_URI, "PGLN"),
            check_digit_check(check_digit.validate_pgln),
        ),
    )
