"""
Filter Evaluator - Decide which jobs pass the current filter criteria

Combines the posted-date, salary, experience, employment and company
normalizers with a FilterCriteria. Dimensions are ANDed; the accepted values
within a dimension are ORed.

Unknown values are handled per dimension:
- date posted: unknown posting time is excluded
- experience: unknown experience passes
- commitment: unknown employment type is excluded
- salary: unknown salary is excluded
- company: a missing company name never contains a non-empty substring

The experience dimension is deliberately lenient while the date dimension is
strict; tests pin both behaviors.
"""

import time
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from constants import COMPANY_OPTIONS_LIMIT
from jobsift.filters.criteria import FilterCriteria
from jobsift.filters.employment_filter import normalize_employment
from jobsift.filters.experience_filter import UNKNOWN as UNKNOWN_EXPERIENCE, infer_experience
from jobsift.filters.fields import JobRecord, get_company_name
from jobsift.filters.posted_filter import get_posted_unix, posted_within
from jobsift.filters.salary_filter import SalaryRange, get_annual_salary_range, salary_in_band

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedJobFacts:
    """Facts derived from a raw job record for one filter pass."""
    posted_unix_seconds: Optional[int]
    salary: SalaryRange
    experience: str
    employment_type: str
    company_name: str


def normalize_job(job: Any, now: Optional[float] = None) -> NormalizedJobFacts:
    """
    Derive every normalized fact of a job.

    Args:
        job: Raw job record or JobRecord
        now: Reference time in Unix seconds (defaults to the current time)

    Returns:
        NormalizedJobFacts
    """
    record = JobRecord.from_raw(job)
    return NormalizedJobFacts(
        posted_unix_seconds=get_posted_unix(record, now=now),
        salary=get_annual_salary_range(record),
        experience=infer_experience(record),
        employment_type=normalize_employment(record),
        company_name=record.company_name,
    )


def include(job: Any, criteria: Optional[FilterCriteria] = None, now: Optional[float] = None) -> bool:
    """
    Decide whether a single job passes the criteria.

    Facts are computed lazily, only for the dimensions that are constrained.

    Args:
        job: Raw job record or JobRecord
        criteria: Current filter selection (None means unconstrained)
        now: Reference time in Unix seconds (defaults to the current time)

    Returns:
        True if the job passes every constrained dimension
    """
    criteria = criteria or FilterCriteria()
    record = JobRecord.from_raw(job)

    if criteria.date_windows:
        current = time.time() if now is None else now
        if not any(posted_within(record, days, now=current) for days in criteria.date_windows):
            return False

    if criteria.experience:
        bucket = infer_experience(record)
        if bucket != UNKNOWN_EXPERIENCE and bucket not in criteria.experience:
            return False

    if criteria.commitment:
        if normalize_employment(record) not in criteria.commitment:
            return False

    if criteria.salary_bands:
        salary = get_annual_salary_range(record)
        if not any(salary_in_band(salary, band) for band in criteria.salary_bands):
            return False

    if criteria.companies:
        company = record.company_name.lower()
        if not any(c.lower() in company for c in criteria.companies):
            return False

    return True


def filter_jobs(
    jobs: Optional[Iterable[Any]],
    criteria: Optional[FilterCriteria] = None,
    now: Optional[float] = None,
) -> List[Any]:
    """
    Filter raw job records.

    The returned list holds the caller's own record objects, in their
    original order. A single reference time is used for the whole pass.

    Args:
        jobs: Raw job records (None is treated as an empty list)
        criteria: Filter selection (None means unconstrained)
        now: Reference time in Unix seconds (defaults to the current time)

    Returns:
        Records that pass the criteria
    """
    jobs = list(jobs or [])
    criteria = criteria or FilterCriteria()

    if criteria.is_unconstrained:
        return jobs

    current = time.time() if now is None else now
    kept = [job for job in jobs if include(JobRecord.from_raw(job), criteria, now=current)]

    logger.debug(
        f"Filter pass kept {len(kept)}/{len(jobs)} jobs "
        f"(active: {', '.join(criteria.active_dimensions())})"
    )
    return kept


def company_options(jobs: Optional[Iterable[Any]], limit: int = COMPANY_OPTIONS_LIMIT) -> List[str]:
    """Distinct company names across jobs, sorted, capped at `limit`."""
    names = {get_company_name(job) for job in (jobs or [])}
    names.discard('')
    return sorted(names)[:limit]
