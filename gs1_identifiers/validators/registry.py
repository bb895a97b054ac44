"""
Pattern Validator

Ordered registry of identifier validators. The first validator whose
prefixes match an identifier owns it; the more specific Digital-Link-only
GTIN validators come before the EPCIS-compliant ones so that, for example,
a GTIN URI with a net weight is not validated as a plain SGTIN.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..core.digital_link import normalize
from ..core.gcp_length import GCPLengthResolver, get_gcp_length_resolver
from ..exceptions import MalformedIdentifierError, UnsupportedIdentifierError, ValidationError
from .base import IdentifierValidator, ValidationContext, ValidationOutcome, ValidationStatus
from .epcis_compliant import (
    CPIValidator,
    GCNValidator,
    GDTIValidator,
    GIAIValidator,
    GINCValidator,
    GRAIValidator,
    GSINValidator,
    GSRNPValidator,
    GSRNValidator,
    ITIPValidator,
    LGTINValidator,
    PGLNValidator,
    SGLNValidator,
    SGTINValidator,
    SSCCValidator,
    UPUIValidator,
)
from .non_compliant import (
    GTINCPVValidator,
    GTINLotSerialExpiryValidator,
    GTINWeightAmountBestBeforeValidator,
    GTINWeightValidator,
)

logger = logging.getLogger(__name__)

VALIDATORS: Tuple[IdentifierValidator, ...] = (
    GTINWeightAmountBestBeforeValidator(),
    GTINLotSerialExpiryValidator(),
    GTINCPVValidator(),
    GTINWeightValidator(),
    CPIValidator(),
    GCNValidator(),
    GDTIValidator(),
    GIAIValidator(),
    GINCValidator(),
    GRAIValidator(),
    GSINValidator(),
    GSRNPValidator(),
    GSRNValidator(),
    ITIPValidator(),
    PGLNValidator(),
    SGLNValidator(),
    SSCCValidator(),
    LGTINValidator(),
    UPUIValidator(),
    SGTINValidator(),
)


def _check_scheme(identifier: Optional[str]) -> str:
    if identifier is None or not identifier.strip():
        raise MalformedIdentifierError("Identifier must not be blank", identifier)
    if "://" not in identifier and not identifier.startswith("urn:"):
        raise MalformedIdentifierError(
            f"Identifier is neither an EPC URN nor a Digital Link URI: {identifier}", identifier
        )
    return identifier


def find_validator(identifier: str, context: Optional[ValidationContext] = None) -> Optional[IdentifierValidator]:
    """Return the first validator supporting the identifier, or None."""
    context = context or ValidationContext()
    for validator in VALIDATORS:
        if validator.supports_validation(identifier, context.epcis_compliant):
            return validator
    return None


def validate_identifier(identifier: str, context: Optional[ValidationContext] = None) -> bool:
    """
    Validate an EPC URN or GS1 Digital Link URI.

    Args:
        identifier: URN, or Digital Link URI (then context.gcp_length is required)
        context: Validation options; defaults to EPCIS-compliant with check digits

    Returns:
        True when the owning validator accepts the identifier, False when
        no validator recognizes it.

    Raises:
        MalformedIdentifierError: blank or schemeless input, or a failed rule
        CheckDigitError: wrong check digit in a Digital Link key
    """
    context = context or ValidationContext()
    _check_scheme(identifier)

    validator = find_validator(identifier, context)
    if validator is None:
        logger.debug("No validator supports %s", identifier)
        return False

    logger.debug("Validating %s with %s", identifier, validator.name)
    return validator.validate(identifier, context)


def check_identifier(identifier: str, context: Optional[ValidationContext] = None) -> ValidationOutcome:
    """
    Validate without raising.

    Returns:
        VALID, INVALID with the failure message, or NOT_APPLICABLE when no
        validator recognizes the identifier.
    """
    context = context or ValidationContext()
    try:
        _check_scheme(identifier)
    except ValidationError as exc:
        return ValidationOutcome(ValidationStatus.INVALID, reason=exc.message)

    validator = find_validator(identifier, context)
    if validator is None:
        return ValidationOutcome(ValidationStatus.NOT_APPLICABLE)

    try:
        validator.validate(identifier, context)
    except ValidationError as exc:
        return ValidationOutcome(ValidationStatus.INVALID, reason=exc.message, validator=validator.name)
    return ValidationOutcome(ValidationStatus.VALID, validator=validator.name)


def validate_digital_link(
    url: str,
    context: Optional[ValidationContext] = None,
    resolver: Optional[GCPLengthResolver] = None,
) -> str:
    """
    Normalize and validate a Digital Link URI.

    Shortcode aliases are rewritten to AI codes first. When the context
    carries no GCP length it is looked up in the GCP prefix table.

    Returns:
        The normalized URI.

    Raises:
        MalformedIdentifierError: the URI breaks a rule of its identifier
        UnsupportedIdentifierError: GCP length unknown, or no validator
            recognizes the URI
    """
    context = context or ValidationContext()
    normalized = normalize(_check_scheme(url))

    if context.gcp_length is None:
        resolver = resolver or get_gcp_length_resolver()
        context = ValidationContext(
            epcis_compliant=context.epcis_compliant,
            validate_check_digit=context.validate_check_digit,
            gcp_length=resolver.resolve_uri(normalized),
        )

    if not validate_identifier(normalized, context):
        raise UnsupportedIdentifierError(
            f"Identifier did not match any GS1 identifier format: {normalized}", normalized
        )
    return normalized
