"""
Filter Criteria - Immutable value type for the five filter dimensions

Each dimension holds the set of values the user accepts. An empty set means
the dimension is unconstrained; a single-select control produces a
one-element set.

`FilterCriteria.from_labels()` turns UI selections ("Last 7 days",
"Entry level,Mid level", "$100k+") or canonical tokens ("7d", "entry",
"100k+") into criteria, treating sentinels such as "Any" as unset.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

from jobsift.filters.employment_filter import EMPLOYMENT_TYPES
from jobsift.filters.experience_filter import EXPERIENCE_BUCKETS
from jobsift.filters.salary_filter import SALARY_BANDS

logger = logging.getLogger(__name__)


class InvalidCriteriaError(ValueError):
    """Raised when a filter selection is not part of a dimension's vocabulary."""


# UI labels, in display order, mapped to canonical values
DATE_POSTED_LABELS: Dict[str, int] = {
    'Last 24 hours': 1,
    'Last 3 days': 3,
    'Last 7 days': 7,
    'Last 30 days': 30,
}
EXPERIENCE_LABELS: Dict[str, str] = {
    'Entry level': 'entry',
    'Mid level': 'mid',
    'Senior level': 'senior',
}
COMMITMENT_LABELS: Dict[str, str] = {
    'Full-time': 'full-time',
    'Part-time': 'part-time',
    'Contract': 'contract',
    'Internship': 'internship',
    'Temporary': 'temporary',
}
SALARY_LABELS: Dict[str, str] = {
    '$0 - $50k': '0-50k',
    '$50k - $100k': '50-100k',
    '$100k+': '100k+',
}

DATE_WINDOWS = frozenset(DATE_POSTED_LABELS.values())

# Selections meaning "no constraint"
SENTINELS = frozenset({'', 'any', 'any time', 'all', 'all time', 'none', 'no companies'})


def _lookup_table(labels: Mapping[str, Any], canonical: Iterable[Any]) -> Dict[str, Any]:
    """Case-insensitive lookup of both UI labels and canonical tokens."""
    table = {label.lower(): value for label, value in labels.items()}
    for value in canonical:
        table[str(value).lower()] = value
    return table


_DATE_LOOKUP = _lookup_table(DATE_POSTED_LABELS, DATE_WINDOWS)
_DATE_LOOKUP.update({f'{days}d': days for days in DATE_WINDOWS})
_EXPERIENCE_LOOKUP = _lookup_table(EXPERIENCE_LABELS, EXPERIENCE_BUCKETS)
_COMMITMENT_LOOKUP = _lookup_table(COMMITMENT_LABELS, EMPLOYMENT_TYPES)
_SALARY_LOOKUP = _lookup_table(SALARY_LABELS, SALARY_BANDS)


def _split_values(value: Any, split_commas: bool = True) -> List[str]:
    """
    Flatten a selection into a list of non-sentinel strings.

    Args:
        value: None, a string (optionally comma-joined), or an iterable of values
        split_commas: Split strings on commas (multi-select encoding)

    Returns:
        Stripped selection strings with sentinels removed
    """
    if value is None:
        return []

    if isinstance(value, str):
        items = value.split(',') if split_commas else [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = [str(v) for v in value if v is not None]
    else:
        items = [str(value)]

    return [s.strip() for s in items if s.strip().lower() not in SENTINELS]


def _as_frozenset(value: Any) -> FrozenSet[Any]:
    if value is None:
        return frozenset()
    if isinstance(value, (str, int)):
        return frozenset([value])
    return frozenset(value)


def _resolve(dimension: str, value: Any, lookup: Mapping[str, Any]) -> FrozenSet[Any]:
    resolved = set()
    for item in _split_values(value):
        key = item.lower()
        if key not in lookup:
            raise InvalidCriteriaError(f"Unknown {dimension} filter: {item!r}")
        resolved.add(lookup[key])
    return frozenset(resolved)


@dataclass(frozen=True)
class FilterCriteria:
    """
    Immutable filter selection.

    Semantics are AND across dimensions and OR within a dimension.
    """
    date_windows: FrozenSet[int] = field(default_factory=frozenset)
    experience: FrozenSet[str] = field(default_factory=frozenset)
    commitment: FrozenSet[str] = field(default_factory=frozenset)
    salary_bands: FrozenSet[str] = field(default_factory=frozenset)
    companies: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        # Normalize any iterable to frozenset and validate vocabularies
        checks = [
            ('date_windows', DATE_WINDOWS),
            ('experience', frozenset(EXPERIENCE_BUCKETS)),
            ('commitment', frozenset(EMPLOYMENT_TYPES)),
            ('salary_bands', frozenset(SALARY_BANDS)),
        ]
        for name, allowed in checks:
            values = _as_frozenset(getattr(self, name))
            invalid = values - allowed
            if invalid:
                raise InvalidCriteriaError(f"Invalid {name}: {sorted(map(str, invalid))}")
            object.__setattr__(self, name, values)

        raw_companies = _as_frozenset(self.companies)
        invalid = [c for c in raw_companies if not isinstance(c, str)]
        if invalid:
            raise InvalidCriteriaError(f"Invalid companies: {sorted(map(repr, invalid))}")
        companies = frozenset(c.strip() for c in raw_companies if c.strip())
        object.__setattr__(self, 'companies', companies)

    @classmethod
    def from_labels(
        cls,
        date_posted: Any = None,
        experience: Any = None,
        commitment: Any = None,
        salary: Any = None,
        company: Any = None,
    ) -> 'FilterCriteria':
        """
        Build criteria from UI selections.

        Enumerated dimensions accept a label, a canonical token, a
        comma-joined multi-select string, or a list. The company selection is
        a single substring when given as a string (names may contain commas)
        and a set of substrings when given as a list.

        Raises:
            InvalidCriteriaError: If a selection is not a known label or token
        """
        if isinstance(company, str):
            companies = _split_values(company, split_commas=False)
        else:
            companies = _split_values(company)

        return cls(
            date_windows=_resolve('date posted', date_posted, _DATE_LOOKUP),
            experience=_resolve('experience', experience, _EXPERIENCE_LOOKUP),
            commitment=_resolve('commitment', commitment, _COMMITMENT_LOOKUP),
            salary_bands=_resolve('salary', salary, _SALARY_LOOKUP),
            companies=frozenset(companies),
        )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> 'FilterCriteria':
        """Build criteria from a request mapping keyed by dimension name."""
        data = data or {}
        return cls.from_labels(
            date_posted=data.get('date_posted'),
            experience=data.get('experience'),
            commitment=data.get('commitment'),
            salary=data.get('salary'),
            company=data.get('company'),
        )

    @property
    def is_unconstrained(self) -> bool:
        return not self.active_dimensions()

    def active_dimensions(self) -> List[str]:
        """Names of the dimensions that constrain results."""
        return [
            name for name in ('date_windows', 'experience', 'commitment', 'salary_bands', 'companies')
            if getattr(self, name)
        ]

    def to_dict(self) -> Dict[str, List[Any]]:
        """Serializable view with sorted values, for API responses."""
        return {
            'date_posted': [f'{days}d' for days in sorted(self.date_windows)],
            'experience': sorted(self.experience),
            'commitment': sorted(self.commitment),
            'salary': sorted(self.salary_bands),
            'company': sorted(self.companies),
        }


def filter_options() -> Dict[str, List[str]]:
    """UI label vocabularies for each dimension, sentinel first."""
    return {
        'date_posted': ['Any time'] + list(DATE_POSTED_LABELS),
        'experience': ['Any'] + list(EXPERIENCE_LABELS),
        'commitment': ['Any'] + list(COMMITMENT_LABELS),
        'salary': ['Any'] + list(SALARY_LABELS),
    }
