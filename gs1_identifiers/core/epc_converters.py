"""
EPC URN <-> GS1 Digital Link converters, one per EPC scheme.

Three key layouts cover every scheme:
- IndicatorKeyConverter: the first digit of the URN item reference moves in
  front of the GCP and a check digit is appended (SGTIN, LGTIN, UPUI, SSCC, ITIP)
- CheckDigitKeyConverter: GCP + reference + check digit, serial appended
  directly where the AI carries one (SGLN, GRAI, GDTI, GCN, GSIN, GSRN, GSRNP, PGLN)
- PlainKeyConverter: GCP + reference, no check digit (GIAI, GINC, CPI)

Every conversion validates its input with the scheme's validator before
building the output, and the URN built from a Digital Link is validated
again before it is returned.

Reference: GS1 EPC Tag Data Standard 2.x, section 7
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from ..constants import (
    AS_CAPTURED,
    AS_URN,
    CANONICAL_DL,
    CPI_SERIAL_URI,
    CPI_URI,
    EPC_CLASS_URN,
    EPC_ID_URN,
    EPC_IDPAT_URN,
    GCN_URI,
    GDTI_URI,
    GIAI_URI,
    GINC_URI,
    GLN_EXTENSION_URI,
    GLN_URI,
    GRAI_URI,
    GS1_IDENTIFIER_DOMAIN,
    GSIN_URI,
    GSRN_URI,
    GSRNP_URI,
    GTIN_URI,
    ITIP_URI,
    LOT_URI,
    PGLN_URI,
    SERIAL,
    SERIAL_URI,
    SSCC_URI,
    TPX_URI,
)
from ..validators.base import IdentifierValidator, ValidationContext
from ..validators.check_digit import checksum
from ..validators.epcis_compliant import (
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

logger = logging.getLogger(__name__)

CLASS_LEVEL_SUFFIX = ".*"


def _segment(uri: str, prefix: str, stop: Optional[str] = None) -> str:
    """Text after prefix, up to stop when stop follows it."""
    start = uri.find(prefix) + len(prefix)
    end = uri.find(stop, start) if stop else -1
    return uri[start:end] if end >= 0 else uri[start:]


class EPCConverter:
    """
    Base converter for one EPC scheme.

    Attributes:
        scheme: EPC scheme name as it appears in the URN (e.g. 'sgtin')
        uri_prefix: Digital Link primary key prefix (e.g. '/01/')
        key_name: Name of the key entry in the conversion record
        urn_base: URN namespace of instance-level identifiers
    """

    scheme = ""
    uri_prefix = ""
    key_name = ""
    serial_prefix: Optional[str] = None
    urn_base = EPC_ID_URN

    def __init__(self, validator: IdentifierValidator):
        self.validator = validator

    @property
    def name(self) -> str:
        return self.validator.name

    @property
    def urn_prefix(self) -> str:
        return f"{self.urn_base}{self.scheme}:"

    @property
    def class_urn_prefix(self) -> str:
        return f"{EPC_IDPAT_URN}{self.scheme}:"

    def supports_urn(self, urn: str) -> bool:
        if urn.startswith(self.urn_prefix):
            return True
        return bool(self.validator.class_urn_rules) and urn.startswith(self.class_urn_prefix)

    def supports_digital_link(self, uri: str) -> bool:
        return "://" in uri and not self.validator.is_urn(uri) and self.validator.matches(uri)

    def key_of(self, uri: str) -> str:
        """Primary key value of a Digital Link URI, without qualifiers."""
        return _segment(uri, self.uri_prefix, self.serial_prefix)

    def to_digital_link(self, urn: str) -> str:
        """
        Convert an EPC URN of this scheme to its canonical Digital Link URI.

        Raises:
            MalformedIdentifierError: the URN breaks the scheme's grammar
        """
        self.validator.validate(urn)
        class_level = self.validator.is_class_level(urn, True)
        fields = urn[len(self.class_urn_prefix if class_level else self.urn_prefix):]

        uri = GS1_IDENTIFIER_DOMAIN + self.build_path(fields, class_level)
        logger.debug("Converted %s to %s", urn, uri)
        return uri

    def to_urn_map(self, uri: str, gcp_length: int) -> Dict[str, str]:
        """
        Convert a Digital Link URI of this scheme to its EPC URN.

        Returns:
            Dict with asURN, asCaptured, canonicalDL, the key entry and,
            for serialised identifiers, the serial.

        Raises:
            MalformedIdentifierError: the URI, or the URN built from it, is invalid
        """
        context = ValidationContext(validate_check_digit=False, gcp_length=gcp_length)
        self.validator.validate(uri, context)

        class_level = self.validator.is_class_level(uri, False)
        body, serial = self.build_urn(uri, gcp_length, class_level)
        urn = (self.class_urn_prefix if class_level else self.urn_prefix) + body
        self.validator.validate(urn)

        if GS1_IDENTIFIER_DOMAIN in uri:
            canonical = uri
        else:
            canonical = GS1_IDENTIFIER_DOMAIN + uri[uri.find(self.uri_prefix):]

        result = {
            AS_URN: urn,
            AS_CAPTURED: uri,
            CANONICAL_DL: canonical,
            self.key_name: self.key_of(uri),
        }
        if serial is not None:
            result[SERIAL] = serial
        logger.debug("Converted %s to %s with GCP length %d", uri, urn, gcp_length)
        return result

    def build_path(self, fields: str, class_level: bool) -> str:
        raise NotImplementedError

    def build_urn(self, uri: str, gcp_length: int, class_level: bool) -> Tuple[str, Optional[str]]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.scheme!r})"


class IndicatorKeyConverter(EPCConverter):
    """Keys whose first digit (indicator / extension) precedes the GCP."""

    data_digits = 13

    def __init__(self, validator, scheme, uri_prefix, key_name, serial_prefix=None,
                 data_digits=13, urn_base=EPC_ID_URN):
        super().__init__(validator)
        self.scheme = scheme
        self.uri_prefix = uri_prefix
        self.key_name = key_name
        self.serial_prefix = serial_prefix
        self.data_digits = data_digits
        self.urn_base = urn_base

    def _key(self, gcp: str, reference: str) -> str:
        data = (reference[:1] + gcp + reference[1:])[:self.data_digits]
        return data + checksum(data)

    def build_path(self, fields: str, class_level: bool) -> str:
        gcp, reference, *rest = fields.split(".", 2)
        path = self.uri_prefix + self._key(gcp, reference)
        if self.serial_prefix and not class_level:
            path += self.serial_prefix + rest[0]
        return path

    def _urn_key(self, key: str, gcp_length: int) -> str:
        return f"{key[1:gcp_length + 1]}.{key[0]}{key[gcp_length + 1:self.data_digits]}"

    def build_urn(self, uri, gcp_length, class_level):
        body = self._urn_key(self.key_of(uri), gcp_length)
        if class_level:
            return body + CLASS_LEVEL_SUFFIX, None
        if self.serial_prefix:
            serial = _segment(uri, self.serial_prefix)
            return f"{body}.{serial}", serial
        return body, None


class ITIPConverter(IndicatorKeyConverter):
    """GTIN-style key followed by piece and total (2 digits each)."""

    def __init__(self):
        super().__init__(ITIPValidator(), "itip", ITIP_URI, "itip", SERIAL_URI)

    def build_path(self, fields, class_level):
        gcp, reference, piece, total, *rest = fields.split(".", 4)
        path = self.uri_prefix + self._key(gcp, reference) + piece + total
        if not class_level:
            path += self.serial_prefix + rest[0]
        return path

    def _urn_key(self, key, gcp_length):
        return f"{super()._urn_key(key, gcp_length)}.{key[14:16]}.{key[16:18]}"


class CheckDigitKeyConverter(EPCConverter):
    """GCP + reference + check digit, optionally followed directly by a serial."""

    def __init__(self, validator, scheme, uri_prefix, key_name, data_digits, appended_serial=False):
        super().__init__(validator)
        self.scheme = scheme
        self.uri_prefix = uri_prefix
        self.key_name = key_name
        self.data_digits = data_digits
        self.appended_serial = appended_serial

    def key_of(self, uri: str) -> str:
        return _segment(uri, self.uri_prefix)[:self.data_digits + 1]

    def build_path(self, fields, class_level):
        gcp, reference, *rest = fields.split(".", 2)
        data = (gcp + reference)[:self.data_digits]
        path = self.uri_prefix + data + checksum(data)
        if self.appended_serial and not class_level and rest:
            path += rest[0]
        return path

    def build_urn(self, uri, gcp_length, class_level):
        key = self.key_of(uri)
        body = f"{key[:gcp_length]}.{key[gcp_length:self.data_digits]}"
        if not self.appended_serial:
            return body, None
        if class_level:
            return body + CLASS_LEVEL_SUFFIX, None
        serial = _segment(uri, self.uri_prefix)[self.data_digits + 1:]
        return (f"{body}.{serial}" if serial else body), serial


class SGLNConverter(CheckDigitKeyConverter):
    """GLN with an optional extension; extension '0' means no /254/ segment."""

    serial_prefix = GLN_EXTENSION_URI

    def __init__(self):
        super().__init__(SGLNValidator(), "sgln", GLN_URI, "sgln", 12)

    def key_of(self, uri):
        return _segment(uri, self.uri_prefix, self.serial_prefix)[:self.data_digits + 1]

    def build_path(self, fields, class_level):
        gcp, location, *rest = fields.split(".", 2)
        data = gcp + location
        path = self.uri_prefix + data + checksum(data)
        extension = rest[0] if rest else ""
        if extension and extension != "0":
            path += self.serial_prefix + extension
        return path

    def build_urn(self, uri, gcp_length, class_level):
        key = self.key_of(uri)
        body = f"{key[:gcp_length]}.{key[gcp_length:self.data_digits]}"
        if self.serial_prefix in uri:
            extension = _segment(uri, self.serial_prefix)
            return f"{body}.{extension}", extension
        return f"{body}.0", None


class PlainKeyConverter(EPCConverter):
    """GCP + alphanumeric reference with no check digit."""

    def __init__(self, validator, scheme, uri_prefix, key_name):
        super().__init__(validator)
        self.scheme = scheme
        self.uri_prefix = uri_prefix
        self.key_name = key_name

    def build_path(self, fields, class_level):
        gcp, reference = fields.split(".", 1)
        return self.uri_prefix + gcp + reference

    def build_urn(self, uri, gcp_length, class_level):
        key = self.key_of(uri)
        return f"{key[:gcp_length]}.{key[gcp_length:]}", None


class CPIConverter(PlainKeyConverter):
    """Component/part reference with a numeric serial after /8011/."""

    serial_prefix = CPI_SERIAL_URI

    def __init__(self):
        super().__init__(CPIValidator(), "cpi", CPI_URI, "cpi")

    def build_path(self, fields, class_level):
        gcp, reference, serial = fields.split(".", 2)
        path = self.uri_prefix + gcp + reference
        if not class_level:
            path += self.serial_prefix + serial
        return path

    def build_urn(self, uri, gcp_length, class_level):
        body, _ = super().build_urn(uri, gcp_length, class_level)
        if class_level:
            return body + CLASS_LEVEL_SUFFIX, None
        serial = _segment(uri, self.serial_prefix)
        return f"{body}.{serial}", serial


# Same order as the validator registry: more specific GTIN schemes before SGTIN
CONVERTERS: Tuple[EPCConverter, ...] = (
    CPIConverter(),
    CheckDigitKeyConverter(GCNValidator(), "sgcn", GCN_URI, "sgcn", 12, appended_serial=True),
    CheckDigitKeyConverter(GDTIValidator(), "gdti", GDTI_URI, "gdti", 12, appended_serial=True),
    PlainKeyConverter(GIAIValidator(), "giai", GIAI_URI, "giai"),
    PlainKeyConverter(GINCValidator(), "ginc", GINC_URI, "ginc"),
    CheckDigitKeyConverter(GRAIValidator(), "grai", GRAI_URI, "grai", 12, appended_serial=True),
    CheckDigitKeyConverter(GSINValidator(), "gsin", GSIN_URI, "gsin", 16),
    CheckDigitKeyConverter(GSRNPValidator(), "gsrnp", GSRNP_URI, "gsrnp", 17),
    CheckDigitKeyConverter(GSRNValidator(), "gsrn", GSRN_URI, "gsrn", 17),
    ITIPConverter(),
    CheckDigitKeyConverter(PGLNValidator(), "pgln", PGLN_URI, "pgln", 12),
    SGLNConverter(),
    IndicatorKeyConverter(SSCCValidator(), "sscc", SSCC_URI, "sscc", data_digits=17),
    IndicatorKeyConverter(LGTINValidator(), "lgtin", GTIN_URI, "lgtin", LOT_URI, urn_base=EPC_CLASS_URN),
    IndicatorKeyConverter(UPUIValidator(), "upui", GTIN_URI, "upui", TPX_URI),
    IndicatorKeyConverter(SGTINValidator(), "sgtin", GTIN_URI, "gtin", SERIAL_URI),
)


def find_urn_converter(urn: str) -> Optional[EPCConverter]:
    """Converter for an EPC URN, or None when no scheme matches."""
    for converter in CONVERTERS:
        if converter.supports_urn(urn):
            return converter
    return None


def find_digital_link_converter(uri: str) -> Optional[EPCConverter]:
    """Converter for a Digital Link URI, or None when no scheme matches."""
    for converter in CONVERTERS:
        if converter.supports_digital_link(uri):
            return converter
    return None
