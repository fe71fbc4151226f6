"""
Experience Filter - Infer the experience bucket of a job

Structured experience hints win over title heuristics. Title heuristics are a
declarative ordered table of (pattern, bucket) rules; the first match wins.
"""

import re
import logging
from typing import Any, List, Tuple

from jobsift.filters.fields import as_record

logger = logging.getLogger(__name__)


ENTRY = 'entry'
MID = 'mid'
SENIOR = 'senior'
UNKNOWN = 'unknown'

EXPERIENCE_BUCKETS = (ENTRY, MID, SENIOR)

# Month thresholds for required_experience_in_months: (upper bound, bucket)
EXPERIENCE_MONTH_THRESHOLDS: List[Tuple[float, str]] = [
    (24, ENTRY),
    (84, MID),
]

# Title heuristics, checked in order
TITLE_PATTERNS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r'\b(intern|junior|jr|entry)\b', re.IGNORECASE), ENTRY),
    (re.compile(r'\b(principal|staff|lead|sr|senior)\b', re.IGNORECASE), SENIOR),
]


def bucket_from_months(months: float) -> str:
    """Map required experience in months to a bucket."""
    for upper, bucket in EXPERIENCE_MONTH_THRESHOLDS:
        if months < upper:
            return bucket
    return SENIOR


def infer_from_title(title: str) -> str:
    """
    Infer an experience bucket from a job title.

    Args:
        title: Job title

    Returns:
        Bucket of the first matching pattern; 'mid' for an unmatched non-empty
        title; 'unknown' for an empty title
    """
    if not title:
        return UNKNOWN

    for pattern, bucket in TITLE_PATTERNS:
        if pattern.search(title):
            return bucket

    return MID


def infer_experience(job: Any) -> str:
    """
    Infer the experience bucket of a job.

    Priority:
    1. job_required_experience.no_experience_required is True -> entry
    2. job_required_experience.required_experience_in_months -> by threshold
    3. title heuristics

    Args:
        job: Raw job record or JobRecord

    Returns:
        'entry', 'mid', 'senior' or 'unknown'
    """
    record = as_record(job)

    if record.no_experience_required:
        return ENTRY

    if record.required_experience_months is not None:
        return bucket_from_months(record.required_experience_months)

    return infer_from_title(record.title)
