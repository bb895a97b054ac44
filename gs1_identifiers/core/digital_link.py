"""
GS1 Digital Link normalizer and parser.

normalize() rewrites shortcode aliases (gtin, lot, ser, exp, ...) in path
segments and query keys to their numeric AI codes; parse() extracts the
AI/value pairs of a Digital Link URI into an ordered dict.

Examples:
    normalize("https://id.gs1.org/gtin/09506000164908/lot/ABC123")
        -> "https://id.gs1.org/01/09506000164908/10/ABC123"
    parse("https://id.gs1.org/01/09520123456788/10/ABC123")
        -> {"01": "09520123456788", "10": "ABC123"}

Reference: https://www.gs1.org/standards/gs1-digital-link
"""

from __future__ import annotations

import re
from typing import Dict, Optional
from urllib.parse import unquote_plus, urlsplit

from ..exceptions import MalformedIdentifierError
from .identifier_table import IdentifierTable, get_identifier_table

# /<AI>/<value> in the path
PATH_PATTERN = re.compile(r"/(\d{2,4})/([^/]*)")
# Query keys taken as AI codes
AI_CODE = re.compile(r"\d{2,4}")

DEFAULT_PORTS = {"http": 80, "https": 443}


def _ai_code(token: str, table: IdentifierTable) -> str:
    return table.ai_dictionary.get_code(token) or token


def normalize(url: Optional[str], table: Optional[IdentifierTable] = None) -> Optional[str]:
    """
    Replace shortcode aliases with AI codes.

    Path segments and query keys are rewritten; query values and unknown
    tokens are left as they are. One trailing '/' is removed from the path.

    Args:
        url: Digital Link URI (None is returned unchanged)
        table: Identifier table; defaults to the shared table

    Returns:
        The normalized URI.
    """
    if not url:
        return url
    table = table or get_identifier_table()

    rest, hash_sign, fragment = url.partition("#")
    path, question, query = rest.partition("?")
    if path.endswith("/"):
        path = path[:-1]

    scheme_end = path.find("://")
    authority_end = path.find("/", scheme_end + 3) if scheme_end >= 0 else 0
    if authority_end >= 0:
        head, tail = path[:authority_end], path[authority_end:]
        path = head + "/".join(_ai_code(segment, table) for segment in tail.split("/"))

    if query:
        pairs = []
        for pair in query.split("&"):
            key, equals, value = pair.partition("=")
            pairs.append(_ai_code(key, table) + equals + value if equals else pair)
        query = "&".join(pairs)

    return path + question + query + hash_sign + fragment


def parse(url: str, include_meta: bool = False) -> Dict[str, str]:
    """
    Extract AI codes and values from a Digital Link URI.

    Path segments matching /<2-4 digit AI>/<value> are read left to right,
    then <AI>=<value> query pairs; a later duplicate overwrites an earlier
    one. Segments that do not look like an AI are skipped.

    Args:
        url: Digital Link URI
        include_meta: Prepend 'protocol', 'domain' and 'port' entries

    Returns:
        Ordered dict of AI code to URL-decoded value.

    Raises:
        MalformedIdentifierError: url has no scheme or host
    """
    if not url:
        raise MalformedIdentifierError("Digital Link URI must not be blank", url)
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as exc:
        raise MalformedIdentifierError(f"Invalid Digital Link URI {url}: {exc}", url) from exc

    if not parts.scheme or not parts.hostname:
        raise MalformedIdentifierError(f"Invalid Digital Link URI, scheme and host are required: {url}", url)

    result: Dict[str, str] = {}
    if include_meta:
        result["protocol"] = parts.scheme
        result["domain"] = parts.hostname
        if port is None:
            port = DEFAULT_PORTS.get(parts.scheme.lower(), -1)
        result["port"] = str(port)

    for match in PATH_PATTERN.finditer(parts.path):
        result[match.group(1)] = unquote_plus(match.group(2))

    if parts.query.strip():
        for pair in parts.query.split("&"):
            key, equals, value = pair.partition("=")
            if equals and AI_CODE.fullmatch(key):
                result[key] = unquote_plus(value)

    return result
