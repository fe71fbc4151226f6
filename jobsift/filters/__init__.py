"""
Filters Package - Job normalization and filtering engine

Pure, rule-based functions that normalize loosely-structured job records from
the search API and evaluate filter criteria against them.

- Fields: alias resolution and the JobRecord ingestion model
- Posted filter: posting time resolution and recency windows
- Salary filter: salary parsing, annualization and band matching
- Experience filter: entry/mid/senior inference
- Employment filter: employment type canonicalization
- Criteria: immutable filter selection
- Evaluator: per-job inclusion and list filtering
"""

from .fields import (
    JobRecord,
    get_company_name,
    get_job_title,
    get_location,
    resolve_alias,
)
from .posted_filter import (
    get_posted_unix,
    posted_within,
    parse_relative_posted,
)
from .salary_filter import (
    SalaryRange,
    SALARY_BANDS,
    get_annual_salary_range,
    parse_salary_text,
    range_overlaps,
    salary_in_band,
)
from .experience_filter import infer_experience
from .employment_filter import normalize_employment
from .criteria import (
    FilterCriteria,
    InvalidCriteriaError,
    filter_options,
)
from .evaluator import (
    NormalizedJobFacts,
    company_options,
    filter_jobs,
    include,
    normalize_job,
)

__all__ = [
    # Fields
    'JobRecord',
    'get_company_name',
    'get_job_title',
    'get_location',
    'resolve_alias',
    # Posted filter
    'get_posted_unix',
    'posted_within',
    'parse_relative_posted',
    # Salary filter
    'SalaryRange',
    'SALARY_BANDS',
    'get_annual_salary_range',
    'parse_salary_text',
    'range_overlaps',
    'salary_in_band',
    # Experience / employment
    'infer_experience',
    'normalize_employment',
    # Criteria
    'FilterCriteria',
    'InvalidCriteriaError',
    'filter_options',
    # Evaluator
    'NormalizedJobFacts',
    'company_options',
    'filter_jobs',
    'include',
    'normalize_job',
]
