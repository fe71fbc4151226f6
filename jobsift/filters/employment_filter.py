"""
Employment Filter - Canonicalize the employment type of a job

The employment type text field is checked first, then the array of
employment types. Each path is an ordered table of (substring, type) rules.
"""

import logging
from typing import Any, Iterable, List, Optional, Tuple

from jobsift.filters.fields import as_record

logger = logging.getLogger(__name__)


FULL_TIME = 'full-time'
PART_TIME = 'part-time'
CONTRACT = 'contract'
INTERNSHIP = 'internship'
TEMPORARY = 'temporary'
UNKNOWN = 'unknown'

EMPLOYMENT_TYPES = (FULL_TIME, PART_TIME, CONTRACT, INTERNSHIP, TEMPORARY)

# Substring rules for the employment type text, in priority order
TEXT_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (('full',), FULL_TIME),
    (('part',), PART_TIME),
    (('contract',), CONTRACT),
    (('intern',), INTERNSHIP),
    (('temporary', 'temp'), TEMPORARY),
]

# The employment types array carries no temporary rule
ARRAY_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (('full',), FULL_TIME),
    (('part',), PART_TIME),
    (('contract',), CONTRACT),
    (('intern',), INTERNSHIP),
]


def match_employment_text(text: str, rules=TEXT_RULES) -> Optional[str]:
    """Return the type of the first rule with a substring in `text`, or None."""
    lowered = (text or '').lower()
    if not lowered:
        return None
    for needles, employment_type in rules:
        if any(needle in lowered for needle in needles):
            return employment_type
    return None


def match_employment_types(types: Iterable[str], rules=ARRAY_RULES) -> Optional[str]:
    """Apply rules in priority order across every entry of an employment types array."""
    lowered = [(t or '').lower() for t in types]
    for needles, employment_type in rules:
        if any(needle in t for t in lowered for needle in needles):
            return employment_type
    return None


def normalize_employment(job: Any) -> str:
    """
    Normalize a job's employment type.

    Args:
        job: Raw job record or JobRecord

    Returns:
        One of EMPLOYMENT_TYPES, or 'unknown'
    """
    record = as_record(job)

    employment_type = match_employment_text(record.employment_text)
    if employment_type:
        return employment_type

    employment_type = match_employment_types(record.employment_types)
    if employment_type:
        return employment_type

    return UNKNOWN
