"""
GCP Length Resolver

Finds the length of the Global Company Prefix embedded in a GS1 key by
longest-prefix match over the GS1 "GCP prefix format list".

Features:
- Table ordered by descending prefix length, so the first match is the most specific
- Indicator digit of GTIN-family keys skipped before matching
- Optional static fallback length when no prefix matches
- Auto-detection of the key from a full Digital Link URI

Reference: https://www.gs1.org/standards/bc-epc-tds/gcp-length
"""

from __future__ import annotations

import json
import logging
import os
import re
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

from ..constants import GCP_DIRECT_PREFIXES, GEPIR_HINT
from ..exceptions import UnsupportedIdentifierError

logger = logging.getLogger(__name__)

DEFAULT_GCP_TABLE_PATH = (
    Path(__file__).resolve().parent.parent / "data" / "gcpprefixformatlist.json"
)
GCP_TABLE_ENV = "GS1_GCP_TABLE_PATH"
DEFAULT_GCP_LENGTH_ENV = "GS1_DEFAULT_GCP_LENGTH"

# /<digits>/<value> anywhere in a URI, or <digits>/<value> at its start
AI_SEGMENT_PATTERN = re.compile(r"(/|^)(\d+/|/\d+/)([^/]+)")


@dataclass(frozen=True)
class GCPPrefixEntry:
    """One row of the GCP prefix format list."""
    prefix: str
    length: int


def _sorted_entries(entries: Iterable[GCPPrefixEntry]) -> List[GCPPrefixEntry]:
    # most specific prefix first
    return sorted(entries, key=lambda e: (len(e.prefix), e.prefix), reverse=True)


def load_gcp_prefix_entries(json_path: Optional[Path] = None) -> List[GCPPrefixEntry]:
    """
    Load prefix entries from a GS1 GCPPrefixFormatList JSON export.

    Args:
        json_path: Path of the export; defaults to GS1_GCP_TABLE_PATH or the
            packaged list.

    Returns:
        Entries in file order. An unreadable file yields an empty list.
    """
    if json_path is None:
        override = os.getenv(GCP_TABLE_ENV)
        json_path = Path(override) if override else DEFAULT_GCP_TABLE_PATH

    try:
        data = json.loads(Path(json_path).read_text(encoding="utf-8"))
        rows = data["GCPPrefixFormatList"]["entry"]
        entries = [GCPPrefixEntry(str(row["prefix"]), int(row["gcpLength"])) for row in rows]
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.warning("Could not load GCP prefix list from %s, continuing with an empty table: %s", json_path, exc)
        return []

    logger.info("Loaded %d GCP prefixes from %s", len(entries), json_path)
    return entries


class GCPLengthResolver:
    """
    Longest-prefix-match engine over a GCP length table.

    Args:
        entries: GCPPrefixEntry rows, or a plain {prefix: length} mapping.
        default_length: Length returned when no prefix matches. None makes
            an unmatched key an UnsupportedIdentifierError.
    """

    def __init__(
        self,
        entries: Union[Iterable[GCPPrefixEntry], Mapping[str, int], None] = None,
        default_length: Optional[int] = None,
    ):
        if isinstance(entries, Mapping):
            entries = [GCPPrefixEntry(str(p), int(n)) for p, n in entries.items()]
        self._entries = tuple(_sorted_entries(entries or []))
        self.default_length = default_length

    @property
    def entries(self) -> List[GCPPrefixEntry]:
        return list(self._entries)

    def set_default_length(self, length: Optional[int]) -> None:
        """Set or clear the fallback length used when no prefix matches."""
        self.default_length = length

    def resolve(self, payload: str, ai_prefix: str = "", source: Optional[str] = None) -> int:
        """
        Resolve the GCP length of a GS1 key.

        Args:
            payload: Key digits as they appear after the AI (e.g. a GTIN-14)
            ai_prefix: AI path prefix such as '/01/' or '/414/'
            source: Original URI, only used in error messages

        Returns:
            The GCP length.

        Raises:
            UnsupportedIdentifierError: no prefix matched and no default is set
        """
        digits = payload or ""
        if ai_prefix not in GCP_DIRECT_PREFIXES and len(digits) > 13:
            # GTIN-14 style keys start with an indicator digit
            digits = digits[1:]

        for entry in self._entries:
            if digits.startswith(entry.prefix):
                return entry.length

        if self.default_length is not None:
            logger.debug("No GCP prefix matched %r, using default length %d", payload, self.default_length)
            return self.default_length

        raise UnsupportedIdentifierError(
            f"GCP length not found for Digital Link URI: {source or payload}. {GEPIR_HINT}",
            source or payload,
        )

    def resolve_uri(self, uri: Optional[str]) -> int:
        """
        Resolve the GCP length from the first AI segment of a Digital Link URI.

        Raises:
            UnsupportedIdentifierError: blank input, a URN, or no AI segment
        """
        if not uri or not uri.strip() or "urn:" in uri:
            raise UnsupportedIdentifierError(f"GCP length not found for: {uri}. {GEPIR_HINT}", uri)

        match = AI_SEGMENT_PATTERN.search(uri)
        if not match:
            raise UnsupportedIdentifierError(f"GCP length not found for: {uri}. {GEPIR_HINT}", uri)

        prefix = match.group(2)
        if not prefix.startswith("/"):
            prefix = "/" + prefix
        return self.resolve(match.group(3), prefix, source=uri)


def _default_length_from_env() -> Optional[int]:
    value = os.getenv(DEFAULT_GCP_LENGTH_ENV)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Invalid default GCP length value: {value}") from exc


_resolver: Optional[GCPLengthResolver] = None
_resolver_lock = threading.Lock()


def get_gcp_length_resolver(force_reload: bool = False) -> GCPLengthResolver:
    """Return the shared resolver built from the packaged (or configured) table."""
    global _resolver

    if _resolver is not None and not force_reload:
        return _resolver

    with _resolver_lock:
        if _resolver is None or force_reload:
            _resolver = GCPLengthResolver(
                load_gcp_prefix_entries(),
                default_length=_default_length_from_env(),
            )
    return _resolver


def prefix_table(resolver: GCPLengthResolver) -> Dict[str, int]:
    """Plain {prefix: length} view of a resolver's table, most specific first."""
    return {e.prefix: e.length for e in resolver.entries}
