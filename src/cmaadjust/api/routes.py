"""
API Routes for the adjustment service

Provides REST API endpoints for:
- Adjustment calculation for a subject and its comparables
- Default adjustment rates
- Saved per-CMA adjustment settings
"""

from flask import Blueprint, current_app, jsonify, request

from cmaadjust import __version__
from cmaadjust.adjustments.report import build_adjustment_report, parse_calculation_request
from cmaadjust.core.database import get_connection
from cmaadjust.core.models import CmaAdjustmentsData, DEFAULT_ADJUSTMENT_RATES
from cmaadjust.core.repository import (
    delete_cma_adjustments,
    init_adjustments_table,
    load_cma_adjustments,
    save_cma_adjustments,
)
from cmaadjust.exceptions import CmaNotFoundError, DatabaseError, ValidationError
from cmaadjust.logging_config import get_logger

logger = get_logger(__name__)

# Create blueprint
api = Blueprint("api", __name__, url_prefix="/api")


def _db_path():
    """Database path override from app config (tests), else the configured default."""
    return current_app.config.get("DATABASE_PATH")


@api.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError):
    return jsonify({"status": "error", "error": e.message, "field": e.field}), 400


@api.errorhandler(CmaNotFoundError)
def handle_not_found(e: CmaNotFoundError):
    return jsonify({"status": "error", "error": e.message}), 404


@api.errorhandler(DatabaseError)
def handle_database_error(e: DatabaseError):
    logger.error("Database error: %s", e)
    return jsonify({"status": "error", "error": "Database error"}), 500


# Health
@api.route("/health", methods=["GET"])
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy", "version": __version__})


# Calculation Endpoints
@api.route("/adjustments/defaults", methods=["GET"])
def default_rates():
    """Get the default adjustment rate table."""
    return jsonify({
        "status": "success",
        "rates": DEFAULT_ADJUSTMENT_RATES.to_dict(),
    })


@api.route("/adjustments/calculate", methods=["POST"])
def calculate():
    """Calculate adjustments for a subject and its comparables."""
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Request body must be JSON")

    report = build_adjustment_report(parse_calculation_request(data))
    return jsonify({"status": "success", **report})


# Saved Settings Endpoints
@api.route("/cmas/<cma_id>/adjustments", methods=["GET"])
def get_cma_adjustments(cma_id: str):
    """Get a CMA's saved adjustment settings, or the defaults if none."""
    with get_connection(_db_path()) as conn:
        data = load_cma_adjustments(conn, cma_id)

    saved = data is not None
    if data is None:
        data = CmaAdjustmentsData()

    return jsonify({
        "status": "success",
        "cmaId": cma_id,
        "saved": saved,
        "adjustments": data.to_dict(),
    })


@api.route("/cmas/<cma_id>/adjustments", methods=["PUT"])
def put_cma_adjustments(cma_id: str):
    """Save a CMA's adjustment settings."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    if "rates" in body and not isinstance(body["rates"], dict):
        raise ValidationError("rates must be an object", field="rates")
    overrides = body.get("compAdjustments")
    if overrides is not None and not isinstance(overrides, dict):
        raise ValidationError("compAdjustments must be an object", field="compAdjustments")
    enabled = body.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ValidationError("enabled must be true or false", field="enabled", value=enabled)

    data = CmaAdjustmentsData.from_dict({
        "rates": body.get("rates"),
        "compAdjustments": overrides or {},
        "enabled": enabled,
    })

    with get_connection(_db_path()) as conn:
        save_cma_adjustments(conn, cma_id, data)

    return jsonify({
        "status": "success",
        "cmaId": cma_id,
        "adjustments": data.to_dict(),
    })


@api.route("/cmas/<cma_id>/adjustments", methods=["DELETE"])
def remove_cma_adjustments(cma_id: str):
    """Delete a CMA's saved adjustment settings."""
    with get_connection(_db_path()) as conn:
        if not delete_cma_adjustments(conn, cma_id):
            raise CmaNotFoundError(cma_id)

    return jsonify({"status": "success", "cmaId": cma_id})


def register_routes(app):
    """Register API routes with Flask app."""
    app.register_blueprint(api)

    with get_connection(app.config.get("DATABASE_PATH")) as conn:
        init_adjustments_table(conn)

    logger.info("API routes registered")
