"""
Error taxonomy for GS1 identifier conversion and validation.

- ValidationError: base class, carries the offending raw identifier
- MalformedIdentifierError: recognized shape but structurally broken
- CheckDigitError: check digit mismatch, carries expected and actual digits
- UnsupportedIdentifierError: well-formed but unresolvable (e.g. unknown GCP)
"""

from __future__ import annotations

from typing import Optional


class ValidationError(ValueError):
    """Base error for every identifier failure."""

    def __init__(self, message: str, identifier: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.identifier = identifier


class MalformedIdentifierError(ValidationError):
    """Identifier belongs to a known family but breaks one of its rules."""


class CheckDigitError(MalformedIdentifierError):
    """Identifier carries a check digit that does not match its payload."""

    def __init__(
        self,
        message: str,
        identifier: Optional[str] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        super().__init__(message, identifier)
        self.expected = expected
        self.actual = actual


class UnsupportedIdentifierError(ValidationError):
    """Identifier is well-formed but cannot be resolved locally."""
