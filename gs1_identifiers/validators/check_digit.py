"""
GS1 Check Digit Engine

Implements the GS1 Mod10 check digit used by GTIN, GLN, SSCC, GSIN, GRAI,
GSRN, GDTI and GCN, both as a plain calculation over a digit string and
as a segment check inside a Digital Link URI.

Based on GS1 General Specifications, section 7.9.1.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..constants import (
    GCN_URI,
    GDTI_URI,
    GLN_URI,
    GRAI_URI,
    GSIN_URI,
    GSRN_URI,
    GTIN_URI,
    PGLN_URI,
    SSCC_URI,
)
from ..exceptions import CheckDigitError, MalformedIdentifierError


@dataclass
class ValidationResult:
    """Result of a validation operation."""
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


def calculate_check_digit_mod10(digits: str) -> int:
    """
    Calculate GS1 Mod10 check digit.

    Algorithm (GS1 General Specifications):
    1. From right to left, alternate multipliers 3 and 1
    2. Sum all products
    3. Check digit = (10 - (sum mod 10)) mod 10

    Args:
        digits: Numeric string without check digit

    Returns:
        Calculated check digit (0-9)
    """
    if not digits or not digits.isdigit():
        raise ValueError("Input must be a non-empty numeric string")

    total = 0
    for i, digit in enumerate(reversed(digits)):
        multiplier = 3 if i % 2 == 0 else 1
        total += int(digit) * multiplier

    return (10 - (total % 10)) % 10


def checksum(digits: str) -> str:
    """Check digit of a digit string, as a single character."""
    return str(calculate_check_digit_mod10(digits))


def validate_check_digit(
    value: str,
    ai_code: str = ""
) -> ValidationResult:
    """
    Validate the trailing check digit of a complete GS1 key.

    Supports GTIN-8/12/13/14, SSCC-18, GLN-13, GSIN-17, GDTI, GRAI and any
    other mod-10 keys. Never raises; see validate_segment for the raising
    variant used on Digital Link URIs.

    Args:
        value: The complete value including check digit
        ai_code: Optional AI code for context

    Returns:
        ValidationResult with check digit status
    """
    result = ValidationResult(valid=True)
    if ai_code:
        result.meta['ai'] = ai_code

    if not value or not value.isdigit():
        result.valid = False
        result.errors.append("Value must be numeric for check digit validation")
        return result

    if len(value) < 2:
        result.valid = False
        result.errors.append("Value too short for check digit validation")
        return result

    data_digits = value[:-1]
    provided_check = int(value[-1])
    calculated_check = calculate_check_digit_mod10(data_digits)

    result.meta['calculated_check_digit'] = calculated_check
    result.meta['provided_check_digit'] = provided_check
    result.meta['check_digit_valid'] = (provided_check == calculated_check)

    if provided_check != calculated_check:
        result.valid = False
        result.errors.append(
            f"Check digit mismatch: expected {calculated_check}, got {provided_check}"
        )

    return result


def validate_segment(uri: str, ai_prefix: str, payload_length: int, name: str) -> None:
    """
    Verify the check digit of the key that follows an AI prefix in a URI.

    The payload_length characters after ai_prefix are the data digits and
    the next character is the check digit.

    Raises:
        MalformedIdentifierError: prefix missing, segment truncated or not numeric
        CheckDigitError: check digit does not match the data digits
    """
    idx = uri.find(ai_prefix)
    if idx < 0:
        raise MalformedIdentifierError(f"{name} prefix not found in: {uri}", uri)

    start = idx + len(ai_prefix)
    end = start + payload_length + 1
    if end > len(uri):
        raise MalformedIdentifierError(
            f"{name} segment too short ({payload_length}+1 digits) in: {uri}", uri
        )

    segment = uri[start:end]
    if not segment.isdigit():
        raise MalformedIdentifierError(f"{name} segment must be numeric in: {uri}", uri)

    expected = calculate_check_digit_mod10(segment[:payload_length])
    actual = int(segment[payload_length])
    if expected != actual:
        raise CheckDigitError(
            f"{name} has invalid check digit: expected {expected} but found {actual} in {uri}",
            uri,
            expected=expected,
            actual=actual,
        )


def validate_gtin(uri: str) -> None:
    """Validate GTIN (AI /01/, 13 digits + check digit)."""
    validate_segment(uri, GTIN_URI, 13, "GTIN")


def validate_gln(uri: str) -> None:
    """Validate GLN (AI /414/, 12 digits + check digit)."""
    validate_segment(uri, GLN_URI, 12, "GLN")


def validate_pgln(uri: str) -> None:
    validate_segment(uri, PGLN_URI, 12, "PGLN")


def validate_sscc(uri: str) -> None:
    """Validate SSCC (AI /00/, 17 digits + check digit)."""
    validate_segment(uri, SSCC_URI, 17, "SSCC")


def validate_gsin(uri: str) -> None:
    validate_segment(uri, GSIN_URI, 16, "GSIN")


def validate_grai(uri: str) -> None:
    validate_segment(uri, GRAI_URI, 12, "GRAI")


def validate_gsrn(uri: str) -> None:
    validate_segment(uri, GSRN_URI, 17, "GSRN")


def validate_gdti(uri: str) -> None:
    validate_segment(uri, GDTI_URI, 12, "GDTI")


def validate_gcn(uri: str) -> None:
    validate_segment(uri, GCN_URI, 12, "GCN")
