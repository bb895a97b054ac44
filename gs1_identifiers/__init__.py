"""
GS1 Identifier Toolkit

Conversion and validation of GS1 identifiers across their EPC URN,
GS1 Digital Link, bare-string and CBV vocabulary forms.

Based on the GS1 EPC Tag Data Standard, the GS1 Digital Link standard and
the EPCIS/CBV 2.0 standards.
"""

from .core import (
    AIEntry,
    AIDictionary,
    Converter,
    GCPLengthResolver,
    IdentifierTable,
    VocabularyElement,
    get_gcp_length_resolver,
    get_identifier_table,
    normalize,
    parse,
    short_name_replacer,
    to_bare_string,
    to_cbv_vocabulary,
    to_digital_link,
    to_urn,
    to_urn_map,
)
from .validators import (
    ValidationContext,
    ValidationOutcome,
    ValidationStatus,
    calculate_check_digit_mod10,
    check_identifier,
    validate_check_digit,
    validate_digital_link,
    validate_identifier,
)
from .exceptions import (
    ValidationError,
    MalformedIdentifierError,
    CheckDigitError,
    UnsupportedIdentifierError,
)

__version__ = "1.0.0"
__all__ = [
    "AIEntry",
    "AIDictionary",
    "Converter",
    "GCPLengthResolver",
    "IdentifierTable",
    "VocabularyElement",
    "get_gcp_length_resolver",
    "get_identifier_table",
    "normalize",
    "parse",
    "short_name_replacer",
    "to_bare_string",
    "to_cbv_vocabulary",
    "to_digital_link",
    "to_urn",
    "to_urn_map",
    "ValidationContext",
    "ValidationOutcome",
    "ValidationStatus",
    "calculate_check_digit_mod10",
    "check_identifier",
    "validate_check_digit",
    "validate_digital_link",
    "validate_identifier",
    "ValidationError",
    "MalformedIdentifierError",
    "CheckDigitError",
    "UnsupportedIdentifierError",
]
