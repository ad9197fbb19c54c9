"""
Clock skew validation

Judges request freshness by comparing the ``X-Date`` (preferred) or ``Date``
header to the current time.
"""

import logging
from datetime import datetime, timezone
from typing import Mapping, Optional

from .exceptions import ErrorKind, make_error
from .types import DATE_HEADER, X_DATE_HEADER
from .utils import lowercase_headers, parse_http_date

logger = logging.getLogger(__name__)


def check_clock_skew(
    headers: Mapping[str, str],
    allowed_clock_skew: int,
    now: Optional[datetime] = None
) -> None:
    """
    Check that the request date is not older than ``allowed_clock_skew``.

    A negative allowance disables the check. Zero is rejected since it
    cannot be told apart from a disabled check by sign alone. Dates in the
    future are accepted.

    Args:
        headers: Resolved header values (names are lower-cased)
        allowed_clock_skew: Allowed age of the date header in seconds
        now: Current time (defaults to ``datetime.now(timezone.utc)``)

    Raises:
        ConfigurationError: If ``allowed_clock_skew`` is 0
        RequestError: If no date header is present, it cannot be parsed or
            the allowance is exceeded
    """
    if allowed_clock_skew < 0:
        return
    if allowed_clock_skew == 0:
        raise make_error(ErrorKind.ALLOWED_CLOCK_SKEW_MISCONFIGURED)

    headers = lowercase_headers(headers)
    date_value = headers.get(X_DATE_HEADER) or headers.get(DATE_HEADER)
    if not date_value:
        raise make_error(ErrorKind.DATE_HEADER_MISSING_FOR_CLOCK_SKEW)

    header_date = parse_http_date(date_value)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed = int((now - header_date).total_seconds())
    if elapsed > allowed_clock_skew:
        logger.info(f"Clock skew of {elapsed}s exceeds allowed {allowed_clock_skew}s")
        raise make_error(
            ErrorKind.ALLOWED_CLOCK_SKEW_EXCEEDED,
            f"Allowed clock skew exceeded: {elapsed}s > {allowed_clock_skew}s",
            {"elapsed_seconds": elapsed, "allowed_clock_skew": allowed_clock_skew}
        )
