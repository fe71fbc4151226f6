"""
Routes Package - Flask Blueprints for JobSift

Blueprint structure:
- jobs_bp: job search, filtering and filter options (/api/*)
"""

import logging

logger = logging.getLogger(__name__)


def register_all_blueprints(app):
    """
    Register all Flask blueprints with the application.

    Args:
        app: Flask application instance
    """
    from .jobs import jobs_bp

    app.register_blueprint(jobs_bp)
    logger.info("Registered jobs blueprint (API routes)")


from .jobs import jobs_bp

__all__ = [
    "register_all_blueprints",
    "jobs_bp",
]
