"""
Utility functions for HTTP signatures

Header name normalization, HTTP date handling and base64 decoding shared by
the signing and verification paths.
"""

import base64
import binascii
import re
import time
from datetime import datetime, timezone
from email.utils import formatdate, parsedate_to_datetime
from typing import Any, Dict, Mapping, Optional

from .exceptions import ErrorKind, make_error

HTTP_DATE_PATTERN = re.compile(
    r'^(Mon|Tue|Wed|Thu|Fri|Sat|Sun), \d{2} '
    r'(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) \d{4} \d{2}:\d{2}:\d{2} GMT$'
)


def normalize_header_name(name: str) -> str:
    """
    Normalize header name to lowercase.

    Args:
        name: Header name to normalize

    Returns:
        str: Normalized header name
    """
    return name.strip().lower()


def lowercase_headers(headers: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """
    Copy a header mapping with lower-cased names.

    When a header appears more than once under different casings the last
    one wins. ``None`` values are dropped.
    """
    if not headers:
        return {}
    return {
        normalize_header_name(name): _header_value(value)
        for name, value in headers.items()
        if value is not None
    }


def _header_value(value: Any) -> str:
    # Bytes go on the wire as-is, the way http.client writes them
    if isinstance(value, bytes):
        return value.decode('latin-1')
    return str(value)


def format_http_date(timestamp: Optional[float] = None) -> str:
    """
    Format a timestamp as an RFC 1123 HTTP date.

    Args:
        timestamp: Unix timestamp (uses current time if None)

    Returns:
        str: Date such as ``Thu, 05 Jan 2012 21:31:40 GMT``
    """
    if timestamp is None:
        timestamp = time.time()
    return formatdate(timestamp, usegmt=True)


def parse_http_date(value: str) -> datetime:
    """
    Parse an RFC 1123 HTTP date into an aware UTC datetime.

    Raises:
        RequestError: If the value is not an RFC 1123 date
    """
    if not isinstance(value, str) or not HTTP_DATE_PATTERN.match(value.strip()):
        raise make_error(
            ErrorKind.INVALID_DATE_HEADER,
            f"Cannot parse date '{value}': expected an RFC 1123 date in GMT",
            {"date": value}
        )
    try:
        parsed = parsedate_to_datetime(value.strip())
    except (TypeError, ValueError) as e:
        raise make_error(
            ErrorKind.INVALID_DATE_HEADER,
            f"Cannot parse date '{value}': {e}",
            {"date": value, "original_error": str(e)}
        )
    return parsed.astimezone(timezone.utc)


def decode_base64(value: str, kind: ErrorKind) -> bytes:
    """
    Decode standard base64, ignoring embedded whitespace.

    Args:
        value: Base64 text
        kind: Error kind raised when ``value`` is malformed

    Returns:
        bytes: Decoded bytes
    """
    if not isinstance(value, (str, bytes)):
        raise make_error(kind, f"{kind.default_message}: expected str, got {type(value).__name__}")
    if isinstance(value, bytes):
        value = value.decode('ascii', errors='replace')
    compact = ''.join(value.split())
    try:
        decoded = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise make_error(kind, details={"original_error": str(e)})
    if not decoded:
        raise make_error(kind, f"{kind.default_message}: empty value")
    return decoded


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode('ascii')
