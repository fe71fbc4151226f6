"""
Pytest configuration and shared fixtures for JobSift tests.
"""

import os
import sys

import pytest
import yaml

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Fixed reference time: 2023-11-14T22:13:20Z
NOW = 1_700_000_000
DAY = 86400


@pytest.fixture
def now():
    """Fixed reference time in Unix seconds."""
    return NOW


@pytest.fixture
def sample_jobs():
    """
    Sample JSearch-shaped job records covering the main field variants.

    Returns:
        list: Raw job records
    """
    return [
        {
            "job_id": "a1",
            "job_title": "Senior Backend Engineer",
            "employer_name": "TechCorp",
            "job_city": "Austin",
            "job_state": "TX",
            "job_country": "US",
            "job_employment_type": "FULLTIME",
            "job_posted_at_timestamp": NOW - 2 * DAY,
            "job_min_salary": 130000,
            "job_max_salary": 160000,
            "job_required_experience": {
                "no_experience_required": False,
                "required_experience_in_months": 96,
            },
        },
        {
            "job_id": "b2",
            "job_title": "Junior Frontend Developer",
            "company_name": "StartupXYZ",
            "job_employment_type_text": "Part-time",
            "job_posted_human_readable": "5 days ago",
            "job_salary": "$25/hour",
        },
        {
            "job_id": "c3",
            "job_title": "Data Analyst",
            "job_publisher": "LinkedIn",
            "job_employment_types": ["CONTRACTOR"],
            "job_posted_at_datetime_utc": "2023-10-01T09:00:00.000Z",
            "job_salary": "$50k - $70k",
        },
        {
            "job_id": "d4",
            "job_title": "",
            "publisher": "Indeed",
            "job_salary": "Competitive",
        },
    ]


@pytest.fixture
def config_file(tmp_path):
    """
    Write a valid config.yaml to a temporary directory.

    Returns:
        Path: Path to the config file
    """
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump(
            {
                "api": {
                    "host": "jsearch.example.test",
                    "num_pages": 1,
                    "timeout_seconds": 5,
                    "max_retries": 0,
                    "calls_per_minute": 6000,
                    "default_query": "python developer",
                },
                "filters": {"company_options_limit": 10},
            }
        )
    )
    return path


class FakeJSearchClient:
    """Stands in for JSearchClient; records calls and returns canned jobs."""

    def __init__(self, jobs=None, total_pages=3):
        self.jobs = jobs or []
        self.total_pages = total_pages
        self.calls = []

    def search(self, query, location="", job_type="", page=1):
        from jobsift.jsearch import SearchResult

        self.calls.append({"query": query, "location": location, "job_type": job_type, "page": page})
        return SearchResult(jobs=self.jobs, total_pages=self.total_pages)


@pytest.fixture
def fake_client(sample_jobs):
    return FakeJSearchClient(jobs=sample_jobs)


@pytest.fixture
def client(config_file, fake_client, monkeypatch):
    """Flask test client backed by the fake JSearch client."""
    from jobsift import create_app

    monkeypatch.setenv("RAPIDAPI_KEY", "test-key")
    app = create_app(config_path=config_file, client=fake_client)
    app.config["TESTING"] = True
    return app.test_client()
