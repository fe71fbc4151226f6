"""
Salary Filter - Rule-based salary parsing and band matching

Parses salary information from job records into an annualized numeric range
and tests that range against the salary bands offered as filters.

Structured min/max fields are preferred when present. Otherwise the free-text
salary string is scanned for numbers ("$50k - $70k", "$25/hour", "120,000").
Hourly figures are annualized at 2080 hours per year.
"""

import re
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from constants import HOURS_PER_YEAR
from jobsift.filters.fields import as_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SalaryRange:
    """Annualized salary bounds; either bound may be unknown (None)."""
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_known(self) -> bool:
        return self.min is not None or self.max is not None


# A number with optional thousands separators/decimals and an optional "k"
SALARY_TOKEN = re.compile(r'(\d[\d,.]*)\s*(k)?')

# "/h", "/ h" or "hour" anywhere marks an hourly rate
HOURLY_MARKER = re.compile(r'/ ?h|hour')

_NUMERIC_PREFIX = re.compile(r'\d+(?:\.\d+)?')

# Salary bands offered as filters: band key -> (lower, upper); None = open-ended
SALARY_BANDS: Dict[str, Tuple[float, Optional[float]]] = {
    '0-50k': (0, 50000),
    '50-100k': (50000, 100000),
    '100k+': (100000, None),
}


def _parse_salary_value(digits: str, has_k: bool) -> Optional[float]:
    """
    Convert a matched salary token to a float.

    Args:
        digits: Token text like "120,000" or "52.5"
        has_k: True if the token was followed by "k"

    Returns:
        Float value, or None if the token holds no usable number
    """
    match = _NUMERIC_PREFIX.match(digits.replace(',', ''))
    if not match:
        return None
    value = float(match.group(0))
    return value * 1000 if has_k else value


def parse_salary_text(salary_str: str) -> SalaryRange:
    """
    Parse a free-text salary string into an annualized range.

    Only the first two numbers found are used; the smaller becomes the
    minimum. A single number is used for both bounds.

    Args:
        salary_str: Salary text from the job record

    Returns:
        SalaryRange, with both bounds None when no number is present
    """
    if not salary_str:
        return SalaryRange()

    text = salary_str.replace('\u00a0', ' ').lower()
    is_hourly = bool(HOURLY_MARKER.search(text))

    values = []
    for match in SALARY_TOKEN.finditer(text):
        value = _parse_salary_value(match.group(1), bool(match.group(2)))
        if value is not None:
            values.append(value)

    if not values:
        logger.debug(f"No salary figures in {salary_str!r}")
        return SalaryRange()

    if len(values) == 1:
        low = high = values[0]
    else:
        low, high = min(values[0], values[1]), max(values[0], values[1])

    if is_hourly:
        low, high = low * HOURS_PER_YEAR, high * HOURS_PER_YEAR

    return SalaryRange(min=low, max=high)


def get_annual_salary_range(job: Any) -> SalaryRange:
    """
    Resolve a job's annual salary range.

    Args:
        job: Raw job record or JobRecord

    Returns:
        SalaryRange from job_min_salary/job_max_salary when either is a finite
        number, else parsed from job_salary, else unknown
    """
    record = as_record(job)

    if record.min_salary is not None or record.max_salary is not None:
        low, high = record.min_salary, record.max_salary
        if low is not None and high is not None and low > high:
            low, high = high, low
        return SalaryRange(min=low, max=high)

    if record.salary_text.strip():
        return parse_salary_text(record.salary_text)

    return SalaryRange()


def range_overlaps(
    min_salary: Optional[float],
    max_salary: Optional[float],
    range_min: Optional[float],
    range_max: Optional[float],
) -> bool:
    """
    Test whether a salary range overlaps a target range.

    A missing bound on either side is replaced by its partner, so a single
    figure behaves as a point.

    Args:
        min_salary: Job's minimum salary
        max_salary: Job's maximum salary
        range_min: Target range lower bound
        range_max: Target range upper bound

    Returns:
        True if the ranges overlap; False when the job salary is unknown
    """
    if min_salary is None and max_salary is None:
        return False

    a1 = min_salary if min_salary is not None else max_salary
    a2 = max_salary if max_salary is not None else min_salary
    b1 = range_min if range_min is not None else range_max
    b2 = range_max if range_max is not None else range_min

    if b1 is None or b2 is None:
        return False

    return a1 <= b2 and a2 >= b1


def salary_in_band(salary: SalaryRange, band: str) -> bool:
    """
    Check a salary range against a named band.

    The open-ended top band passes when either bound reaches its floor.
    Unknown salaries and unknown band keys never match.
    """
    if not salary.is_known or band not in SALARY_BANDS:
        return False

    low, high = SALARY_BANDS[band]
    if high is None:
        return any(v is not None and v >= low for v in (salary.min, salary.max))

    return range_overlaps(salary.min, salary.max, low, high)
