"""
Field Normalizer - Alias resolution for raw job records

Job records from the search API arrive with inconsistent key names depending
on the upstream publisher. This module resolves each canonical fact (company,
title, location, employment type text) from an ordered list of alias keys and
ingests a raw record into a JobRecord of named optional fields.

Every function here is total: missing or malformed data resolves to an empty
value, never an exception.
"""

import math
import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


COMPANY_ALIASES = ('employer_name', 'company_name', 'job_publisher', 'publisher')
TITLE_ALIASES = ('job_title', 'job_job_title', 'title')
LOCATION_ALIASES = ('job_location', 'location')
LOCATION_PARTS = ('job_city', 'job_state', 'job_country')
EMPLOYMENT_TEXT_ALIASES = ('job_employment_type_text', 'job_employment_type')


def _as_mapping(job: Any) -> Mapping[str, Any]:
    if isinstance(job, Mapping):
        return job
    return {}


def _as_text(value: Any) -> str:
    """Render a raw field value as text; lists are joined with commas."""
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return ','.join(str(v) for v in value if v is not None)
    return str(value)


def is_finite_number(value: Any) -> bool:
    """True for real ints/floats that are finite (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def resolve_alias(job: Any, aliases: Sequence[str], default: str = '') -> str:
    """
    Return the first truthy value among the alias keys, as text.

    Args:
        job: Raw job record (any mapping; other types resolve to the default)
        aliases: Ordered keys to try
        default: Value returned when no alias is present

    Returns:
        Resolved string value
    """
    data = _as_mapping(job)
    for key in aliases:
        value = data.get(key)
        if value:
            return _as_text(value)
    return default


def get_company_name(job: Any) -> str:
    return resolve_alias(job, COMPANY_ALIASES)


def get_job_title(job: Any) -> str:
    return resolve_alias(job, TITLE_ALIASES)


def get_location(job: Any) -> str:
    """Resolve a display location, composing city/state/country as a fallback."""
    location = resolve_alias(job, LOCATION_ALIASES)
    if location:
        return location

    data = _as_mapping(job)
    parts = [_as_text(data.get(key)).strip() for key in LOCATION_PARTS]
    return ', '.join(p for p in parts if p)


def get_employment_text(job: Any) -> str:
    return resolve_alias(job, EMPLOYMENT_TEXT_ALIASES)


@dataclass(frozen=True)
class JobRecord:
    """
    A raw job record with its alias-resolved fields.

    Built once per record at the start of a filter pass. The original mapping
    is kept in `raw` so callers always get their own objects back.
    """
    raw: Any = None
    title: str = ''
    company_name: str = ''
    location: str = ''
    employment_text: str = ''
    employment_types: List[str] = field(default_factory=list)
    posted_timestamp: Any = None
    posted_datetime_utc: Any = None
    posted_human_readable: str = ''
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None
    salary_text: str = ''
    no_experience_required: bool = False
    required_experience_months: Optional[float] = None

    @classmethod
    def from_raw(cls, job: Any) -> 'JobRecord':
        """
        Ingest a raw record.

        Args:
            job: Raw job record as returned by the search API

        Returns:
            JobRecord with every recognized field resolved
        """
        if isinstance(job, JobRecord):
            return job

        data = _as_mapping(job)
        if job is not None and not data:
            logger.debug(f"Ignoring non-mapping job record of type {type(job).__name__}")

        experience = data.get('job_required_experience')
        if not isinstance(experience, Mapping):
            experience = {}

        types = data.get('job_employment_types')
        if isinstance(types, (list, tuple)):
            employment_types = [t.lower() if isinstance(t, str) else '' for t in types]
        else:
            employment_types = []

        months = experience.get('required_experience_in_months')
        salary_text = data.get('job_salary')

        return cls(
            raw=job,
            title=get_job_title(data),
            company_name=get_company_name(data),
            location=get_location(data),
            employment_text=get_employment_text(data),
            employment_types=employment_types,
            posted_timestamp=data.get('job_posted_at_timestamp'),
            posted_datetime_utc=data.get('job_posted_at_datetime_utc'),
            posted_human_readable=_as_text(data.get('job_posted_human_readable') or ''),
            min_salary=_finite_or_none(data.get('job_min_salary')),
            max_salary=_finite_or_none(data.get('job_max_salary')),
            salary_text=salary_text if isinstance(salary_text, str) else '',
            no_experience_required=experience.get('no_experience_required') is True,
            required_experience_months=float(months) if is_finite_number(months) else None,
        )


def _finite_or_none(value: Any) -> Optional[float]:
    return float(value) if is_finite_number(value) else None


def as_record(job: Any) -> JobRecord:
    """Accept either a raw mapping or an already-ingested JobRecord."""
    return JobRecord.from_raw(job)
