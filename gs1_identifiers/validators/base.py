"""
Building blocks shared by every identifier validator.

A validator is an ordered list of PatternRule objects per grammar (EPC URN,
Digital Link URI, and their class-level variants). Rules are applied in
order and the first failing rule raises with its own message, so the
message always names the most basic thing that is wrong.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from ..constants import CLASS_URN_PREFIX
from ..exceptions import MalformedIdentifierError

# GS1 AI encodable character set 82 as used in EPC URNs and Digital Link paths
CHARS = r"[\x21-\x22\x25-\x2F\x30-\x39\x3A-\x3F\x41-\x5A\x5F\x61-\x7A]"
# Component/part reference characters (CPI)
CPI_CHARS = r"[\x23\x2D\x2F\x30-\x39\x41-\x5A]"

GCP_LENGTH_MESSAGE = (
    "Invalid GCP Length, GCP Length should be between 6-12 digits. "
    "Please check the provided GCP Length: {gcp}"
)
DL_WITHOUT_GCP_MESSAGE = (
    "Digital Link URI detected. Pass ValidationContext(gcp_length=...) to "
    "validate Digital Link URIs."
)


@dataclass(frozen=True)
class ValidationContext:
    """
    Per-call validation options.

    Attributes:
        epcis_compliant: Only accept AIs that may appear in EPCIS events
        validate_check_digit: Verify the GS1 check digit of Digital Link keys
        gcp_length: GCP length for Digital Link URIs; None selects URN mode
    """
    epcis_compliant: bool = True
    validate_check_digit: bool = True
    gcp_length: Optional[int] = None


class ValidationStatus(Enum):
    NOT_APPLICABLE = "not_applicable"
    INVALID = "invalid"
    VALID = "valid"


@dataclass(frozen=True)
class ValidationOutcome:
    """Three-state result of check_identifier."""
    status: ValidationStatus
    reason: Optional[str] = None
    validator: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.status is ValidationStatus.VALID

    def __bool__(self) -> bool:
        return self.valid


Check = Callable[[str, ValidationContext], None]


class PatternRule:
    """
    One validation step: a full-match regex plus optional extra checks.

    Args:
        pattern: Regex the whole identifier must match
        message: Error message; '{value}' is replaced by the identifier
        checks: Callables run after a successful match, each raising
            MalformedIdentifierError (or a subclass) on failure
    """

    def __init__(self, pattern: str, message: str, *checks: Check):
        self.pattern = re.compile(pattern)
        self.message = message
        self.checks: Tuple[Check, ...] = checks

    def validate(self, identifier: str, context: ValidationContext) -> None:
        if not self.pattern.fullmatch(identifier):
            raise MalformedIdentifierError(self.message.format(value=identifier), identifier)
        for check in self.checks:
            check(identifier, context)


def fail(message: str, identifier: str) -> None:
    raise MalformedIdentifierError(message.format(value=identifier), identifier)


def gcp_check(uri_prefix: str, name: str, indicator: bool = False) -> Check:
    """
    Check that the context GCP length is 6..12 and that the key after
    uri_prefix starts with that many digits (after the indicator digit
    for GTIN-family keys).
    """
    def check(uri: str, context: ValidationContext) -> None:
        gcp = context.gcp_length
        if gcp is None or not 6 <= gcp <= 12:
            raise MalformedIdentifierError(GCP_LENGTH_MESSAGE.format(gcp=gcp), uri)

        value = uri[uri.find(uri_prefix) + len(uri_prefix):]
        if indicator:
            value = value[1:]
        match = re.match(r"\d*", value)
        if len(match.group(0)) < gcp:
            fail(
                f"Invalid {name}, {name} should start with a GCP of {gcp} digits. "
                "Please check the provided URI: {value}",
                uri,
            )
    return check


def check_digit_check(validate: Callable[[str], None]) -> Check:
    """Run a CheckDigitEngine segment check when the context asks for it."""
    def check(uri: str, context: ValidationContext) -> None:
        if context.validate_check_digit:
            validate(uri)
    return check


class IdentifierValidator:
    """
    Base class of the per-AI validation strategies.

    Subclasses set the URN marker, the Digital Link prefix and their rule
    lists. Identifiers containing the URN marker are checked against the
    URN grammar, everything else against the Digital Link grammar.
    """

    name = ""
    urn_marker: Optional[str] = None
    uri_prefix = ""
    epcis_compliant = True

    urn_rules: Sequence[PatternRule] = ()
    uri_rules: Sequence[PatternRule] = ()
    class_urn_rules: Sequence[PatternRule] = ()
    class_uri_rules: Sequence[PatternRule] = ()

    # Length of the value after uri_prefix that marks a class-level URI
    class_key_length: Optional[int] = None

    def supports_validation(self, identifier: str, epcis_compliant: Optional[bool] = None) -> bool:
        """
        Structural match on prefixes only. With epcis_compliant=True,
        strategies for AIs outside EPCIS never match.
        """
        if epcis_compliant and not self.epcis_compliant:
            return False
        return self.matches(identifier)

    def matches(self, identifier: str) -> bool:
        if self.urn_marker and self.urn_marker in identifier:
            return True
        return self.uri_prefix in identifier

    def is_urn(self, identifier: str) -> bool:
        return bool(self.urn_marker) and self.urn_marker in identifier

    def is_class_level(self, identifier: str, is_urn: bool) -> bool:
        if is_urn:
            return bool(self.class_urn_rules) and CLASS_URN_PREFIX in identifier
        if not self.class_uri_rules or self.class_key_length is None:
            return False
        value = identifier[identifier.find(self.uri_prefix) + len(self.uri_prefix):]
        return len(value) == self.class_key_length

    def rules_for(self, identifier: str, context: ValidationContext) -> Sequence[PatternRule]:
        is_urn = self.is_urn(identifier)
        if not is_urn and context.gcp_length is None:
            raise MalformedIdentifierError(DL_WITHOUT_GCP_MESSAGE, identifier)

        class_level = self.is_class_level(identifier, is_urn)
        if is_urn:
            return self.class_urn_rules if class_level else self.urn_rules
        return self.class_uri_rules if class_level else self.uri_rules

    def validate(self, identifier: str, context: Optional[ValidationContext] = None) -> bool:
        """
        Validate the identifier against this strategy's grammar.

        Returns:
            True when every rule passes.

        Raises:
            MalformedIdentifierError: a rule failed
            CheckDigitError: the Digital Link key has a wrong check digit
        """
        context = context or ValidationContext()
        for rule in self.rules_for(identifier, context):
            rule.validate(identifier, context)
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
