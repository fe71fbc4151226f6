"""
JobSift - Application Factory

Job-listing browser backend: fetches listings from the JSearch API and
filters them by posting date, experience, commitment, salary and company.
"""

import logging
from flask import Flask
from flask_cors import CORS

from config_loader import get_config

logger = logging.getLogger(__name__)


def create_app(config_path=None, client=None):
    """
    Application factory for creating Flask app instances.

    Args:
        config_path: Optional path to config.yaml file
        client: Optional JSearch client (tests inject a fake)

    Returns:
        Configured Flask application instance
    """
    # Load environment variables
    from dotenv import load_dotenv

    load_dotenv()

    try:
        config = get_config(config_path)
    except FileNotFoundError as e:
        logger.error(f"Configuration Error: {e}")
        raise

    if not config.api_key:
        logger.warning("RAPIDAPI_KEY is not set; job searches will return no results")

    app = Flask(__name__)
    CORS(app)

    app.config["JOBSIFT_CONFIG"] = config

    if client is None:
        from jobsift.jsearch import JSearchClient

        client = JSearchClient.from_config(config)
    app.config["JSEARCH_CLIENT"] = client

    register_blueprints(app)

    return app


def register_blueprints(app):
    """Register all Flask blueprints."""
    from jobsift.routes import register_all_blueprints

    register_all_blueprints(app)
