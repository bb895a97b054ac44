"""
Validation modules for GS1 identifiers.
"""

from .check_digit import (
    calculate_check_digit_mod10,
    checksum,
    validate_check_digit,
    validate_segment,
    validate_gtin,
    validate_gln,
    validate_pgln,
    validate_sscc,
    validate_gsin,
    validate_grai,
    validate_gsrn,
    validate_gdti,
    validate_gcn,
    ValidationResult,
)
from .base import (
    ValidationContext,
    ValidationOutcome,
    ValidationStatus,
    IdentifierValidator,
    PatternRule,
)
from .registry import (
    VALIDATORS,
    find_validator,
    validate_identifier,
    check_identifier,
    validate_digital_link,
)

__all__ = [
    "calculate_check_digit_mod10",
    "checksum",
    "validate_check_digit",
    "validate_segment",
    "validate_gtin",
    "validate_gln",
    "validate_pgln",
    "validate_sscc",
    "validate_gsin",
    "validate_grai",
    "validate_gsrn",
    "validate_gdti",
    "validate_gcn",
    "ValidationResult",
    "ValidationContext",
    "ValidationOutcome",
    "ValidationStatus",
    "IdentifierValidator",
    "PatternRule",
    "VALIDATORS",
    "find_validator",
    "validate_identifier",
    "check_identifier",
    "validate_digital_link",
]
