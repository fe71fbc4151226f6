"""
Posted-Date Filter - Resolve when a job was posted

Job records describe their posting time in one of three ways: an absolute
Unix timestamp, an ISO-8601 UTC datetime string, or relative text such as
"3 days ago". This module resolves whichever is present into absolute Unix
seconds, or None when the posting time cannot be determined.
"""

import re
import math
import time
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

from constants import (
    DAYS_PER_MONTH,
    DAYS_PER_WEEK,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
)
from jobsift.filters.fields import as_record, is_finite_number

logger = logging.getLogger(__name__)


# Relative posting-time patterns, checked in order. The first unit that
# matches wins even if the text also names another unit.
RELATIVE_PATTERNS: List[Tuple[re.Pattern, int]] = [
    (re.compile(r'(\d+)\s*hour'), SECONDS_PER_HOUR),
    (re.compile(r'(\d+)\s*day'), SECONDS_PER_DAY),
    (re.compile(r'(\d+)\s*week'), DAYS_PER_WEEK * SECONDS_PER_DAY),
    (re.compile(r'(\d+)\s*month'), DAYS_PER_MONTH * SECONDS_PER_DAY),
]

# Fractional seconds following the seconds field
_FRACTION = re.compile(r'(?<=:\d{2})\.(\d+)')


def _now_seconds(now: Optional[float] = None) -> int:
    return math.floor(time.time() if now is None else now)


def parse_iso_datetime(value: str) -> Optional[int]:
    """
    Parse an ISO-8601 datetime string to Unix seconds.

    Args:
        value: Datetime text such as "2024-05-01T12:00:00.000Z"

    Returns:
        Unix seconds (floored), or None when the text is not a valid datetime
    """
    text = (value or '').strip()
    if not text:
        return None

    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'

    # fromisoformat before 3.11 accepts only 3 or 6 fractional digits
    text = _FRACTION.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), text, count=1)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unparsable posting datetime: {value!r}")
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    try:
        return math.floor(parsed.timestamp())
    except (OverflowError, OSError, ValueError):
        return None


def parse_relative_posted(text: str, now: Optional[float] = None) -> Optional[int]:
    """
    Resolve relative posting text ("just posted", "5 hours ago") to Unix seconds.

    Args:
        text: Human-readable posting text
        now: Reference time in Unix seconds (defaults to the current time)

    Returns:
        Unix seconds, or None if no pattern matches
    """
    human = (text or '').lower()
    if not human:
        return None

    current = _now_seconds(now)
    if 'just' in human:
        return current

    for pattern, unit_seconds in RELATIVE_PATTERNS:
        match = pattern.search(human)
        if match:
            return current - int(match.group(1)) * unit_seconds

    return None


def get_posted_unix(job: Any, now: Optional[float] = None) -> Optional[int]:
    """
    Resolve a job's posting time to absolute Unix seconds.

    Resolution order (the first field present decides, with no fallthrough):
    1. job_posted_at_timestamp, a number used verbatim
    2. job_posted_at_datetime_utc, an ISO-8601 string
    3. job_posted_human_readable, relative text

    Args:
        job: Raw job record or JobRecord
        now: Reference time in Unix seconds (defaults to the current time)

    Returns:
        Unix seconds in [0, now], or None when unknown
    """
    record = as_record(job)
    current = _now_seconds(now)

    if is_finite_number(record.posted_timestamp):
        posted = math.floor(record.posted_timestamp)
        if posted < 0:
            return None
        return min(posted, current)

    if isinstance(record.posted_datetime_utc, str):
        posted = parse_iso_datetime(record.posted_datetime_utc)
        if posted is None or posted < 0:
            return None
        return min(posted, current)

    return parse_relative_posted(record.posted_human_readable, now=current)


def posted_within(job: Any, days: int, now: Optional[float] = None) -> bool:
    """
    Check whether a job was posted within the last `days` days.

    Jobs whose posting time is unknown never pass.
    """
    current = _now_seconds(now)
    posted = get_posted_unix(job, now=current)
    if posted is None:
        return False
    return current - posted <= days * SECONDS_PER_DAY
