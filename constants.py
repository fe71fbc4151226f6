"""
Constants - Shared configuration and constants

This module contains shared constants used across the JobSift application.
"""

from pathlib import Path

# Application directories
APP_DIR = Path(__file__).parent
CONFIG_PATH = APP_DIR / "config.yaml"

# JSearch (RapidAPI) defaults
JSEARCH_HOST = 'jsearch.p.rapidapi.com'
JSEARCH_NUM_PAGES = 2
JSEARCH_TIMEOUT_SECONDS = 15.0
DEFAULT_QUERY = 'developer'

# Annualization: 40 hours/week * 52 weeks
HOURS_PER_YEAR = 40 * 52

# Time units used when resolving relative posting times
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30

# Maximum number of company names offered as filter options
COMPANY_OPTIONS_LIMIT = 50
