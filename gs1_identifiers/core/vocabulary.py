"""
CBV vocabulary elements.

Each EPCIS standard vocabulary element is spelled four ways: URN
(urn:epcglobal:cbv:bizstep:shipping), CBV WebURI
(https://ref.gs1.org/cbv/BizStep-shipping), CURIE (cbv:BizStep-shipping)
and the older VOC WebURI (https://ref.gs1.org/voc/Bizstep-shipping).
The gs1.org/voc WebURI (https://gs1.org/voc/BizStep-shipping) is only
recognized when stripping prefixes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

GS1_CBV_DOMAIN = "https://ref.gs1.org/cbv/"
GS1_VOC_DOMAIN = "https://ref.gs1.org/voc/"
GS1_WEB_VOC_DOMAIN = "https://gs1.org/voc/"

URN = "urn"
WEB_URI = "weburi"


@dataclass(frozen=True)
class VocabularyPrefixSet:
    """Prefixes of one vocabulary element in every textual form."""
    urn_prefix: str
    cbv_web_uri_prefix: str
    curie_prefix: str
    voc_web_uri_prefix: str
    gs1_web_uri_prefix: str

    def web_uri_prefixes(self) -> Tuple[str, str]:
        return (self.cbv_web_uri_prefix, self.voc_web_uri_prefix)

    def prefix_for(self, target_format: str) -> str:
        """Prefix for 'urn' or 'webUri' (case-insensitive); URN otherwise."""
        if target_format and target_format.lower() == WEB_URI:
            return self.cbv_web_uri_prefix
        return self.urn_prefix


def _prefixes(urn: str, cbv: str, voc: Optional[str] = None) -> VocabularyPrefixSet:
    return VocabularyPrefixSet(
        urn_prefix=f"urn:epcglobal:cbv:{urn}:",
        cbv_web_uri_prefix=f"{GS1_CBV_DOMAIN}{cbv}-",
        curie_prefix=f"cbv:{cbv}-",
        voc_web_uri_prefix=f"{GS1_VOC_DOMAIN}{voc or cbv}-",
        gs1_web_uri_prefix=f"{GS1_WEB_VOC_DOMAIN}{cbv}-",
    )


class VocabularyElement(Enum):
    """Closed set of CBV vocabulary elements with their EPCIS field names."""

    BIZ_STEP = (_prefixes("bizstep", "BizStep", "Bizstep"), ("bizstep",))
    DISPOSITION = (
        _prefixes("disp", "Disp"),
        ("disposition", "persistentdisposition"),
    )
    BIZ_TRANSACTION_TYPE = (
        _prefixes("btt", "BTT"),
        ("biztransaction", "biztransactionlist"),
    )
    SOURCE_DEST_TYPE = (
        _prefixes("sdt", "SDT"),
        ("source", "destination", "sourcelist", "destinationlist"),
    )
    ERROR_REASON = (_prefixes("er", "ER"), ("errordeclaration", "reason"))

    def __init__(self, prefixes: VocabularyPrefixSet, field_names: Tuple[str, ...]):
        self.prefixes = prefixes
        self.field_names = field_names

    @classmethod
    def for_field(cls, field_name: Optional[str]) -> Optional['VocabularyElement']:
        """Element serving an EPCIS field name (case-insensitive)."""
        if not field_name:
            return None
        key = field_name.lower()
        for element in cls:
            if key in element.field_names:
                return element
        return None

    @classmethod
    def for_urn(cls, value: str) -> Optional['VocabularyElement']:
        """Element whose URN prefix starts the value (case-sensitive)."""
        for element in cls:
            if value.startswith(element.prefixes.urn_prefix):
                return element
        return None

    @classmethod
    def for_web_uri(cls, value: str) -> Optional['VocabularyElement']:
        """Element whose CBV or VOC WebURI prefix starts the value (case-insensitive)."""
        lowered = value.lower()
        for element in cls:
            if any(lowered.startswith(p.lower()) for p in element.prefixes.web_uri_prefixes()):
                return element
        return None

    @classmethod
    def for_curie(cls, value: str) -> Optional['VocabularyElement']:
        """Element whose CURIE prefix starts the value (case-insensitive)."""
        lowered = value.lower()
        for element in cls:
            if lowered.startswith(element.prefixes.curie_prefix.lower()):
                return element
        return None

    @classmethod
    def for_gs1_web_uri(cls, value: str) -> Optional['VocabularyElement']:
        """Element whose https://gs1.org/voc/ prefix starts the value (case-insensitive)."""
        lowered = value.lower()
        for element in cls:
            if lowered.startswith(element.prefixes.gs1_web_uri_prefix.lower()):
                return element
        return None
