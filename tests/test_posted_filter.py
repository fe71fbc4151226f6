"""
Tests for posting time resolution and recency windows.

These tests use a fixed reference time so relative text resolves
deterministically.
"""

import pytest

from jobsift.filters.posted_filter import (
    get_posted_unix,
    parse_iso_datetime,
    parse_relative_posted,
    posted_within,
)

NOW = 1_700_000_000
HOUR = 3600
DAY = 86400


def test_numeric_timestamp_used_verbatim():
    """Test that a numeric timestamp wins and is returned as-is."""
    job = {
        "job_posted_at_timestamp": NOW - 500,
        "job_posted_at_datetime_utc": "2001-01-01T00:00:00Z",
        "job_posted_human_readable": "just posted",
    }
    assert get_posted_unix(job, now=NOW) == NOW - 500


def test_float_timestamp_is_floored():
    assert get_posted_unix({"job_posted_at_timestamp": NOW - 10.7}, now=NOW) == NOW - 11


def test_future_timestamp_clamped_to_now():
    assert get_posted_unix({"job_posted_at_timestamp": NOW + DAY}, now=NOW) == NOW


def test_negative_timestamp_is_unknown():
    assert get_posted_unix({"job_posted_at_timestamp": -5}, now=NOW) is None


def test_boolean_timestamp_is_not_a_number():
    """Test that a boolean timestamp falls through to the next rule."""
    job = {"job_posted_at_timestamp": True, "job_posted_human_readable": "2 days ago"}
    assert get_posted_unix(job, now=NOW) == NOW - 2 * DAY


def test_iso_datetime_parsed():
    """Test ISO-8601 strings with a Z suffix and fractional seconds."""
    job = {"job_posted_at_datetime_utc": "2023-11-14T20:13:20.000Z"}
    assert get_posted_unix(job, now=NOW) == NOW - 2 * HOUR


def test_iso_datetime_naive_is_utc():
    assert parse_iso_datetime("2023-11-14T22:13:20") == NOW


def test_iso_datetime_with_offset():
    assert parse_iso_datetime("2023-11-14T23:13:20+01:00") == NOW


def test_invalid_iso_datetime_is_unknown_without_fallthrough():
    """Test that a present but unparsable ISO string does not fall through."""
    job = {
        "job_posted_at_datetime_utc": "yesterday-ish",
        "job_posted_human_readable": "1 day ago",
    }
    assert get_posted_unix(job, now=NOW) is None


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Just posted", NOW),
        ("5 hours ago", NOW - 5 * HOUR),
        ("Posted 3 days ago", NOW - 3 * DAY),
        ("2 weeks ago", NOW - 14 * DAY),
        ("1 month ago", NOW - 30 * DAY),
    ],
)
def test_relative_text(text, expected):
    """Test each relative unit."""
    assert parse_relative_posted(text, now=NOW) == expected


def test_relative_hours_checked_before_days():
    """Test that the hour branch wins even when a larger unit appears first."""
    assert parse_relative_posted("2 days and 5 hours ago", now=NOW) == NOW - 5 * HOUR


def test_relative_unmatched_text_is_unknown():
    assert parse_relative_posted("a while back", now=NOW) is None
    assert parse_relative_posted("an hour ago", now=NOW) is None
    assert parse_relative_posted("30+ days ago", now=NOW) is None
    assert parse_relative_posted("", now=NOW) is None


def test_missing_posting_fields_are_unknown():
    assert get_posted_unix({}, now=NOW) is None
    assert get_posted_unix(None, now=NOW) is None
    assert get_posted_unix("not a record", now=NOW) is None


def test_posted_within_window():
    """Test "3 days ago" against 7-day and 1-day windows."""
    job = {"job_posted_human_readable": "3 days ago"}
    assert posted_within(job, 7, now=NOW) is True
    assert posted_within(job, 3, now=NOW) is True
    assert posted_within(job, 1, now=NOW) is False


def test_posted_within_unknown_always_fails():
    for days in (1, 3, 7, 30):
        assert posted_within({}, days, now=NOW) is False


def test_resolved_time_never_exceeds_now():
    jobs = [
        {"job_posted_at_timestamp": NOW + 999},
        {"job_posted_at_datetime_utc": "2099-01-01T00:00:00Z"},
        {"job_posted_human_readable": "just now"},
    ]
    for job in jobs:
        assert get_posted_unix(job, now=NOW) <= NOW


@pytest.mark.parametrize(
    "value",
    [
        "2023-11-14T22:13:20.1Z",
        "2023-11-14T22:13:20.12Z",
        "2023-11-14T22:13:20.1234Z",
        "2023-11-14T22:13:20.12345+00:00",
        "2023-11-14T22:13:20.1234567Z",
    ],
)
def test_iso_datetime_any_fraction_length(value):
    """Test that fractional seconds of any length parse the same on every Python version."""
    assert parse_iso_datetime(value) == NOW
