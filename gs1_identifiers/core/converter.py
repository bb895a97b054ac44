"""
Identifier Converter

Moves GS1 identifiers and CBV vocabulary values between their textual forms.

Features:
- EPC URN <-> GS1 Digital Link for every EPCIS-compliant key
- CBV vocabulary URN <-> WebURI, bare string and CURIE handling
- gs1: <-> https://gs1.org/voc/ for measurement and alert types
- Short-name Digital Link aliases (/gtin/, /ser/, ...) to AI codes

Examples:
    to_digital_link("urn:epc:id:sgtin:0614141.812345.400")
        -> "https://id.gs1.org/01/80614141123458/21/400"
    to_urn("https://ref.gs1.org/cbv/BizStep-shipping")
        -> "urn:epcglobal:cbv:bizstep:shipping"
    to_bare_string("urn:epcglobal:cbv:disp:in_transit") -> "in_transit"
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Tuple

from ..constants import AS_URN, GS1_IDENTIFIER_DOMAIN, GS1_VOC_DOMAIN, GS1_VOC_PREFIX
from ..exceptions import UnsupportedIdentifierError
from .epc_converters import find_digital_link_converter, find_urn_converter
from .gcp_length import GCPLengthResolver, get_gcp_length_resolver
from .vocabulary import VocabularyElement

logger = logging.getLogger(__name__)

# Primary keys first, then qualifiers
SHORT_NAMES: Tuple[Tuple[str, str], ...] = (
    ("/gtin/", "/01/"),
    ("/itip/", "/8006/"),
    ("/cpi/", "/8010/"),
    ("/gln/", "/414/"),
    ("/party/", "/417/"),
    ("/gsrnp/", "/8017/"),
    ("/gsrn/", "/8018/"),
    ("/gcn/", "/255/"),
    ("/sscc/", "/00/"),
    ("/gdti/", "/253/"),
    ("/ginc/", "/401/"),
    ("/gsin/", "/402/"),
    ("/grai/", "/8003/"),
    ("/giai/", "/8004/"),
    ("/cpv/", "/22/"),
    ("/lot/", "/10/"),
    ("/ser/", "/21/"),
)

# Qualifiers never carry the resolver domain in front of them
KEEP_DOMAIN = frozenset({"/lot/", "/ser/", "/10/", "/21/"})


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _with_domain(identifier: str, marker: str) -> str:
    """Replace everything before marker with the GS1 resolver domain."""
    return GS1_IDENTIFIER_DOMAIN + identifier[identifier.find(marker):]


class Converter:
    """
    Stateless conversion facade over the shared tables.

    Args:
        resolver: GCP length resolver used when a Digital Link conversion is
            called without a GCP length; defaults to the shared resolver.
    """

    def __init__(self, resolver: Optional[GCPLengthResolver] = None):
        self._resolver = resolver

    @property
    def resolver(self) -> GCPLengthResolver:
        return self._resolver or get_gcp_length_resolver()

    def to_digital_link(self, urn: Optional[str]) -> Optional[str]:
        """
        Convert a URN to its Web form.

        Vocabulary URNs become CBV WebURIs, gs1: CURIEs become
        https://gs1.org/voc/ URIs and EPC URNs become GS1 Digital Link URIs.
        Anything else is returned unchanged.

        Raises:
            MalformedIdentifierError: an EPC URN breaks its scheme's grammar
        """
        if _is_blank(urn):
            return urn

        element = VocabularyElement.for_urn(urn)
        if element is not None:
            return element.prefixes.cbv_web_uri_prefix + urn[urn.rfind(":") + 1:]

        if urn.startswith(GS1_VOC_PREFIX):
            return GS1_VOC_DOMAIN + urn[len(GS1_VOC_PREFIX):]

        converter = find_urn_converter(urn)
        if converter is not None:
            return converter.to_digital_link(urn)

        logger.debug("No conversion to Web form for %s", urn)
        return urn

    def to_urn(self, uri: Optional[str], gcp_length: Optional[int] = None) -> Optional[str]:
        """
        Convert a Web URI to its URN form.

        Vocabulary WebURIs (CBV or VOC, case-insensitive) keep the text after
        their last '-'. Digital Link URIs of an EPC scheme become EPC URNs.
        https://gs1.org/voc/ URIs become gs1: CURIEs. Anything else is
        returned unchanged.

        Args:
            uri: WebURI or Digital Link URI
            gcp_length: GCP length of the Digital Link key; looked up in the
                GCP prefix table when omitted

        Raises:
            MalformedIdentifierError: the Digital Link breaks its key's grammar
            UnsupportedIdentifierError: the GCP length cannot be resolved
        """
        if _is_blank(uri):
            return uri

        element = VocabularyElement.for_web_uri(uri)
        if element is not None:
            return element.prefixes.urn_prefix + uri[uri.rfind("-") + 1:]

        if uri.lower().startswith(GS1_VOC_DOMAIN.lower()):
            return GS1_VOC_PREFIX + uri[len(GS1_VOC_DOMAIN):]

        if find_digital_link_converter(uri) is not None:
            return self.to_urn_map(uri, gcp_length)[AS_URN]

        logger.debug("No conversion to URN for %s", uri)
        return uri

    def to_urn_map(self, uri: str, gcp_length: Optional[int] = None) -> Dict[str, str]:
        """
        Convert a Digital Link URI and return the full conversion record.

        Returns:
            Dict with asURN, asCaptured, canonicalDL, the scheme key
            (gtin, sscc, sgln, ...) and the serial where the scheme has one.

        Raises:
            UnsupportedIdentifierError: no EPC scheme matches the URI, or the
                GCP length cannot be resolved
            MalformedIdentifierError: the URI breaks its key's grammar
        """
        converter = find_digital_link_converter(uri or "")
        if converter is None:
            raise UnsupportedIdentifierError(
                f"Provided URI format does not match any EPC scheme: {uri}", uri
            )

        if gcp_length is None:
            gcp_length = self.resolver.resolve(converter.key_of(uri), converter.uri_prefix, source=uri)
        return converter.to_urn_map(uri, gcp_length)

    def to_bare_string(self, value: Optional[str]) -> Optional[str]:
        """
        Strip every standard vocabulary prefix.

        URN prefixes cut after the last ':'; WebURI (ref.gs1.org and
        gs1.org/voc) and CURIE prefixes (case-insensitive) cut after the last
        '-'. Other values, including values that are already bare, are
        returned unchanged.
        """
        if _is_blank(value):
            return value

        if VocabularyElement.for_urn(value) is not None:
            return value[value.rfind(":") + 1:]

        if (
            VocabularyElement.for_web_uri(value) is not None
            or VocabularyElement.for_gs1_web_uri(value) is not None
            or VocabularyElement.for_curie(value) is not None
        ):
            return value[value.rfind("-") + 1:]

        return value

    def to_cbv_vocabulary(
        self,
        bare_value: Optional[str],
        field_name: Optional[str],
        target_format: Optional[str] = "urn",
    ) -> Optional[str]:
        """
        Expand a bare or CURIE vocabulary value for an EPCIS field.

        Args:
            bare_value: e.g. 'shipping' or 'cbv:BizStep-shipping'
            field_name: EPCIS field such as 'bizStep' or 'disposition'
            target_format: 'urn' or 'webUri' (case-insensitive)

        Returns:
            The URN or WebURI form. Values already holding ':' or '/' (user
            vocabularies) and values of unknown fields are returned as given.
        """
        if _is_blank(bare_value) or field_name is None:
            return bare_value

        element = VocabularyElement.for_field(field_name)
        if element is None:
            return bare_value

        curie = element.prefixes.curie_prefix
        if curie in bare_value:
            bare_value = bare_value[bare_value.find(curie) + len(curie):]

        if ":" in bare_value or "/" in bare_value:
            return bare_value
        return element.prefixes.prefix_for(target_format) + bare_value

    def short_name_replacer(self, identifier: Optional[str]) -> Optional[str]:
        """
        Rewrite short-name Digital Link aliases to numeric AI codes.

        Primary key aliases and codes also get the text in front of them
        replaced by https://id.gs1.org; batch/lot and serial never do.

        Example:
            "https://example.com/gtin/12345678901231/ser/9999"
                -> "https://id.gs1.org/01/12345678901231/21/9999"
        """
        if not identifier:
            return identifier

        for alias, code in SHORT_NAMES:
            if alias in identifier:
                if alias not in KEEP_DOMAIN:
                    identifier = _with_domain(identifier, alias)
                identifier = identifier.replace(alias, code)
            elif (
                code in identifier
                and code not in KEEP_DOMAIN
                and not identifier.startswith(GS1_IDENTIFIER_DOMAIN)
            ):
                identifier = _with_domain(identifier, code)
        return identifier


_converter: Optional[Converter] = None
_converter_lock = threading.Lock()


def get_converter() -> Converter:
    """Return the shared converter."""
    global _converter

    if _converter is None:
        with _converter_lock:
            if _converter is None:
                _converter = Converter()
    return _converter


def to_digital_link(urn: Optional[str]) -> Optional[str]:
    return get_converter().to_digital_link(urn)


def to_urn(uri: Optional[str], gcp_length: Optional[int] = None) -> Optional[str]:
    return get_converter().to_urn(uri, gcp_length)


def to_urn_map(uri: str, gcp_length: Optional[int] = None) -> Dict[str, str]:
    return get_converter().to_urn_map(uri, gcp_length)


def to_bare_string(value: Optional[str]) -> Optional[str]:
    return get_converter().to_bare_string(value)


def to_cbv_vocabulary(bare_value: Optional[str], field_name: Optional[str],
                      target_format: Optional[str] = "urn") -> Optional[str]:
    return get_converter().to_cbv_vocabulary(bare_value, field_name, target_format)


def short_name_replacer(identifier: Optional[str]) -> Optional[str]:
    return get_converter().short_name_replacer(identifier)
