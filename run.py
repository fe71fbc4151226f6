#!/usr/bin/env python3
"""
JobSift - Main Entry Point

Uses the application factory pattern via jobsift.create_app().

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development (default), production, testing
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (optional)
    RAPIDAPI_KEY: JSearch API key
    PORT: HTTP port (default: 5000)
"""

import os
import sys
from pathlib import Path

# Ensure app directory is in path
APP_DIR = Path(__file__).parent
sys.path.insert(0, str(APP_DIR))

# Load environment variables from .env file
from dotenv import load_dotenv

load_dotenv(APP_DIR / ".env")

# Initialize logging first
from jobsift.logging_config import setup_logging, get_logger

flask_env = os.environ.get("FLASK_ENV", "development")
log_level = os.environ.get("LOG_LEVEL")
json_logs = flask_env == "production"

setup_logging(level=log_level, json_logs=json_logs)
logger = get_logger(__name__)


def main():
    """Main entry point for JobSift."""
    from jobsift import create_app

    try:
        app = create_app()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)

    config = app.config["JOBSIFT_CONFIG"]
    port = int(os.environ.get("PORT", 5000))

    logger.info("=" * 60)
    logger.info("  JobSift - Starting Up")
    logger.info("=" * 60)
    logger.info(f"  Environment: {flask_env}")
    logger.info(f"  Configuration: {config.config_path}")
    logger.info(f"  Search API: {config.api_base_url}")
    logger.info(f"  API key set: {'yes' if config.api_key else 'no'}")
    logger.info("")
    logger.info(f"  Jobs API: http://localhost:{port}/api/jobs")
    logger.info(f"  Health Check: http://localhost:{port}/api/health")
    logger.info("=" * 60)

    debug_mode = flask_env != "production"
    app.run(debug=debug_mode, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
