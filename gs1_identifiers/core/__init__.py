"""
Core modules: identifier tables, GCP length resolution, Digital Link
normalization and identifier conversion.
"""

from .ai_dictionary_loader import load_ai_dictionary, save_ai_dictionary, AIEntry, AIDictionary
from .vocabulary import VocabularyElement, VocabularyPrefixSet
from .identifier_table import IdentifierTable, get_identifier_table
from .gcp_length import GCPLengthResolver, GCPPrefixEntry, get_gcp_length_resolver, load_gcp_prefix_entries
from .digital_link import normalize, parse
from .converter import (
    Converter,
    get_converter,
    to_digital_link,
    to_urn,
    to_urn_map,
    to_bare_string,
    to_cbv_vocabulary,
    short_name_replacer,
)

__all__ = [
    "load_ai_dictionary",
    "save_ai_dictionary",
    "AIEntry",
    "AIDictionary",
    "VocabularyElement",
    "VocabularyPrefixSet",
    "IdentifierTable",
    "get_identifier_table",
    "GCPLengthResolver",
    "GCPPrefixEntry",
    "get_gcp_length_resolver",
    "load_gcp_prefix_entries",
    "normalize",
    "parse",
    "Converter",
    "get_converter",
    "to_digital_link",
    "to_urn",
    "to_urn_map",
    "to_bare_string",
    "to_cbv_vocabulary",
    "short_name_replacer",
]
