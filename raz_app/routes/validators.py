"""Lightweight request validation helpers."""

import re
from typing import Optional, Tuple

from ..omdb.models import ContentKind

# IMDb ids as used by OMDb: "tt" followed by digits
IMDB_ID_PATTERN = re.compile(r'^tt\d{1,12}$')

MAX_QUERY_LENGTH = 200


def validate_kind(kind: Optional[str]) -> Tuple[Optional[ContentKind], Optional[str]]:
    """
    Validate a content kind path segment.

    Returns:
        Tuple of (parsed_kind, error_or_none)
    """
    if not kind:
        return None, "Missing content kind"
    try:
        return ContentKind.parse(kind), None
    except ValueError:
        allowed = ', '.join(k.value for k in ContentKind)
        return None, f"Unknown content kind: {kind} (expected one of: {allowed})"


def validate_imdb_id(imdb_id: Optional[str]) -> Optional[str]:
    """
    Validate an IMDb id against the safe character pattern.

    Returns:
        None if valid, or error message string.
    """
    if not imdb_id:
        return "Missing IMDb ID"
    if not IMDB_ID_PATTERN.match(imdb_id):
        return "Invalid IMDb ID format"
    return None


def sanitize_string(value: str, max_length: int = 500, allow_newlines: bool = False) -> str:
    """
    Sanitize a string by removing control characters and limiting length.

    Args:
        value: String to sanitize
        max_length: Maximum allowed length
        allow_newlines: Whether to allow newlines

    Returns:
        Sanitized string
    """
    if not isinstance(value, str):
        return ""

    # Remove control characters (except newlines if allowed)
    if allow_newlines:
        result = ''.join(c for c in value if c >= ' ' or c in '\n\r\t')
    else:
        result = ''.join(c for c in value if c >= ' ')

    # Limit length
    return result[:max_length]
