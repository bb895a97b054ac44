"""
AI Dictionary Loader for GS1 Identifiers

Loads and manages the GS1 Application Identifier table used by the
Digital Link normalizer and the validators. Every entry is reachable by
its numeric AI code and by its Digital Link shortcode alias.

Reference: https://ref.gs1.org/ai/
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_AI_TABLE_PATH = Path(__file__).resolve().parent.parent / "data" / "aitable.json"
AI_TABLE_ENV = "GS1_AI_TABLE_PATH"


@dataclass(frozen=True)
class AIEntry:
    """
    Represents a single GS1 Application Identifier entry.

    Attributes:
        ai: The Application Identifier code (2-4 digits)
        shortcode: Digital Link alias (e.g. 'gtin', 'lot'), None if the AI has none
        title: Human-readable title/name
        label: Short data title printed under barcodes
        format: Value shape, e.g. 'N14' or 'N13+X..17'
        type: 'I' primary identifier, 'Q' qualifier, 'D' data attribute
        fixed_length: True if the value has a predefined length
        check_digit: True if the value ends with a mod-10 check digit
        regex: Validation regex for the value
        qualifiers: Ordered AI codes that may follow this AI in a Digital Link path
    """
    ai: str
    title: str
    shortcode: Optional[str] = None
    label: str = ""
    format: str = ""
    type: str = "D"
    fixed_length: bool = False
    check_digit: bool = False
    regex: Optional[str] = None
    qualifiers: List[str] = field(default_factory=list)

    @property
    def is_primary_key(self) -> bool:
        return self.type == "I"


def _entry_from_record(record: Dict[str, Any]) -> AIEntry:
    """Build an AIEntry from one record of the packaged aitable.json."""
    return AIEntry(
        ai=str(record["ai"]),
        title=record.get("title", ""),
        shortcode=record.get("shortcode") or None,
        label=record.get("label", ""),
        format=record.get("format", ""),
        type=record.get("type", "D"),
        fixed_length=bool(record.get("fixedLength", False)),
        # the GS1 table marks check digits with 'L' (last position)
        check_digit=bool(record.get("checkDigit")),
        regex=record.get("regex"),
        qualifiers=list(record.get("qualifiers") or []),
    )


class AIDictionary:
    """
    Lookup table of AI entries keyed by both code and shortcode alias.
    """

    def __init__(self, entries: Optional[List[AIEntry]] = None):
        self._entries: Dict[str, AIEntry] = {}
        self._by_key: Dict[str, AIEntry] = {}

        for entry in entries or []:
            self.add(entry)

    def add(self, entry: AIEntry) -> None:
        """
        Add an AI entry, indexing it by code and alias.

        A later record replaces an earlier one with the same code. A key
        that would shadow another entry's code or alias is skipped.
        """
        previous = self._entries.get(entry.ai)
        if previous is not None:
            logger.debug("Replacing duplicate AI %s", entry.ai)
            self._by_key.pop(previous.ai, None)
            if previous.shortcode:
                self._by_key.pop(previous.shortcode, None)

        for key in (entry.ai, entry.shortcode):
            if not key:
                continue
            owner = self._by_key.get(key)
            if owner is not None and owner.ai != entry.ai:
                logger.warning(
                    "AI table key %r of AI %s collides with AI %s; keeping the first",
                    key, entry.ai, owner.ai,
                )
                continue
            self._by_key[key] = entry

        self._entries[entry.ai] = entry

    def get(self, key: str) -> Optional[AIEntry]:
        """Get AI entry by code or shortcode alias."""
        return self._by_key.get(key)

    def get_code(self, key: str) -> Optional[str]:
        """Return the numeric AI code for a code or alias, None if unknown."""
        entry = self._by_key.get(key)
        return entry.ai if entry else None

    def __contains__(self, key: str) -> bool:
        return key in self._by_key

    def __len__(self) -> int:
        return len(self._entries)

    def shortcodes(self) -> Dict[str, str]:
        """Return the alias -> code mapping."""
        return {e.shortcode: e.ai for e in self._entries.values() if e.shortcode}

    def to_json(self) -> str:
        """Export dictionary to JSON in the packaged record layout."""
        data = []
        for entry in self._entries.values():
            data.append({
                'title': entry.title,
                'label': entry.label,
                'shortcode': entry.shortcode,
                'ai': entry.ai,
                'format': entry.format,
                'type': entry.type,
                'fixedLength': entry.fixed_length,
                'checkDigit': 'L' if entry.check_digit else '',
                'regex': entry.regex,
                'qualifiers': entry.qualifiers,
            })
        return json.dumps(data, indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> 'AIDictionary':
        """Load dictionary from JSON."""
        data = json.loads(json_str)
        if not isinstance(data, list):
            raise ValueError("AI table must be a JSON list of records")
        return cls([_entry_from_record(record) for record in data])


# Global cached dictionary instance
_cached_dictionary: Optional[AIDictionary] = None


def _resolve_table_path(json_path: Optional[Path]) -> Path:
    if json_path is not None:
        return Path(json_path)
    override = os.getenv(AI_TABLE_ENV)
    return Path(override) if override else DEFAULT_AI_TABLE_PATH


def load_ai_dictionary(
    json_path: Optional[Path] = None,
    force_reload: bool = False
) -> AIDictionary:
    """
    Load the AI dictionary, using cache when possible.

    A missing or unparseable resource yields an empty dictionary; every
    lookup then reports "not found" instead of failing at import time.

    Args:
        json_path: Optional path to an aitable.json file.
        force_reload: Force reload even if cached.

    Returns:
        AIDictionary instance ready for use.
    """
    global _cached_dictionary

    if _cached_dictionary is not None and not force_reload and json_path is None:
        return _cached_dictionary

    path = _resolve_table_path(json_path)
    try:
        dictionary = AIDictionary.from_json(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.warning("Could not load AI table from %s, continuing with an empty table: %s", path, exc)
        dictionary = AIDictionary()
    else:
        logger.info("Loaded %d application identifiers from %s", len(dictionary), path)

    if json_path is None:
        _cached_dictionary = dictionary
    return dictionary


def save_ai_dictionary(dictionary: AIDictionary, json_path: Path) -> None:
    """Save AI dictionary to a JSON file in the packaged record layout."""
    with open(json_path, 'w', encoding='utf-8') as f:
        f.write(dictionary.to_json())
