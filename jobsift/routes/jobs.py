"""
Jobs Routes Blueprint - Job search and filtering API

Fetches one page of listings from the JSearch API and applies the filter
engine. Records are returned exactly as the API sent them.
"""

import logging
from flask import Blueprint, current_app, jsonify, request

from jobsift.filters import (
    FilterCriteria,
    InvalidCriteriaError,
    company_options,
    filter_jobs,
    filter_options,
)

logger = logging.getLogger(__name__)

jobs_bp = Blueprint("jobs", __name__, url_prefix="/api")

FILTER_PARAMS = ("date_posted", "experience", "commitment", "salary", "company")


def _criteria_from_args(args) -> FilterCriteria:
    """Build criteria from query args; repeated params form a multi-select."""
    selections = {}
    for name in FILTER_PARAMS:
        values = args.getlist(name)
        if len(values) > 1:
            selections[name] = values
        elif values:
            selections[name] = values[0]
    return FilterCriteria.from_mapping(selections)


@jobs_bp.route("/health")
def health():
    """Health check."""
    return jsonify({"status": "ok"})


@jobs_bp.route("/filters/options")
def get_filter_options():
    """Label vocabularies for each filter dimension."""
    return jsonify(filter_options())


@jobs_bp.route("/jobs")
def search_jobs():
    """
    Search JSearch and filter the returned page.

    Query Parameters:
        query (str, optional): Job title or keywords (default from config)
        location (str, optional): Location text
        job_type (str, optional): Job type keyword (remote, fulltime, internship)
        page (int, optional): 1-based page number (default: 1; below 1 is a 400)
        date_posted, experience, commitment, salary, company: filter selections

    Returns:
        JSON response with:
        - jobs: raw job records that pass the filters
        - total: number of jobs returned
        - total_pages: total pages reported by the API
        - page: requested page
        - companies: company filter options from the unfiltered page
        - filters: the applied criteria

    Examples:
        GET /api/jobs?query=python&date_posted=Last%207%20days
        GET /api/jobs?experience=entry&experience=mid&salary=100k%2B
    """
    config = current_app.config["JOBSIFT_CONFIG"]
    client = current_app.config["JSEARCH_CLIENT"]

    try:
        page = int(request.args.get("page", 1))
        criteria = _criteria_from_args(request.args)
    except InvalidCriteriaError as e:
        logger.warning(f"Invalid filter in /api/jobs: {e}")
        return jsonify({"error": str(e)}), 400
    except ValueError as e:
        logger.warning(f"Invalid parameter in /api/jobs: {e}")
        return jsonify({"error": "Invalid parameters"}), 400

    if page < 1:
        return jsonify({"error": "page must be 1 or greater"}), 400

    query = request.args.get("query", "").strip() or config.default_query
    result = client.search(
        query,
        location=request.args.get("location", ""),
        job_type=request.args.get("job_type", ""),
        page=page,
    )

    jobs = filter_jobs(result.jobs, criteria)
    return jsonify({
        "jobs": jobs,
        "total": len(jobs),
        "total_pages": result.total_pages,
        "page": page,
        "companies": company_options(result.jobs, limit=config.company_options_limit),
        "filters": criteria.to_dict(),
    })


@jobs_bp.route("/jobs/filter", methods=["POST"])
def filter_job_list():
    """
    Filter a caller-supplied list of job records.

    Request Body:
        jobs (list): raw job records
        filters (dict, optional): date_posted, experience, commitment, salary, company

    Returns:
        JSON response with the passing records and their count
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "JSON object body required"}), 400

    jobs = data.get("jobs") or []
    filters = data.get("filters") or {}
    if not isinstance(jobs, list) or not isinstance(filters, dict):
        return jsonify({"error": "jobs must be a list and filters an object"}), 400

    try:
        criteria = FilterCriteria.from_mapping(filters)
    except InvalidCriteriaError as e:
        logger.warning(f"Invalid filter in /api/jobs/filter: {e}")
        return jsonify({"error": str(e)}), 400

    kept = filter_jobs(jobs, criteria)
    return jsonify({"jobs": kept, "total": len(kept)})
