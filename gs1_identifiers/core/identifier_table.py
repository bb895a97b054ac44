"""
Process-wide registry of AI descriptors and vocabulary prefix sets.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from .ai_dictionary_loader import AIDictionary, AIEntry, load_ai_dictionary
from .vocabulary import VocabularyElement

logger = logging.getLogger(__name__)


class IdentifierTable:
    """
    Read-only view over the AI dictionary and the vocabulary elements.

    Built once and passed by reference to the normalizer, the converter
    and the validators.
    """

    def __init__(self, ai_dictionary: Optional[AIDictionary] = None):
        self.ai_dictionary = ai_dictionary if ai_dictionary is not None else AIDictionary()

    def lookup(self, token: str) -> Optional[AIEntry]:
        """Find an AI descriptor by numeric code or shortcode alias."""
        if not token:
            return None
        return self.ai_dictionary.get(token)

    def lookup_vocabulary(self, field_name: str) -> Optional[VocabularyElement]:
        """Find the vocabulary element serving an EPCIS field name."""
        return VocabularyElement.for_field(field_name)

    def __len__(self) -> int:
        return len(self.ai_dictionary)


_table: Optional[IdentifierTable] = None
_table_lock = threading.Lock()


def get_identifier_table(
    json_path: Optional[Path] = None,
    force_reload: bool = False,
) -> IdentifierTable:
    """
    Return the shared IdentifierTable, building it on first use.

    Args:
        json_path: Optional aitable.json to build from (only honoured on
            the first call or together with force_reload).
        force_reload: Rebuild the shared table.
    """
    global _table

    if _table is not None and not force_reload:
        return _table

    with _table_lock:
        if _table is None or force_reload:
            _table = IdentifierTable(load_ai_dictionary(json_path, force_reload=force_reload))
            logger.debug("Identifier table ready with %d AIs", len(_table))
    return _table
