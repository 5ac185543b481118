"""API routes: audit trail passthrough and programmatic dashboard access."""

import logging

from flask import Blueprint, jsonify, current_app

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/getData", methods=["GET"])
def get_data():
    """Relay the audit trail sheet as-is.

    Returns the upstream JSON body with 200, or 500 with the error message.
    No caching; every call goes upstream.
    """
    client = current_app.audit_trail_client
    try:
        data = client.fetch_payload()
    except Exception as e:
        logger.error(f"Audit trail passthrough failed: {e}")
        return jsonify({"error": str(e)}), 500
    return jsonify(data), 200


@api_bp.route("/deescalation/stats", methods=["GET"])
def deescalation_stats():
    """Current dashboard statistics as JSON."""
    poller = current_app.audit_trail_poller
    payload = poller.snapshot.to_dict()
    payload["loading"] = poller.loading
    return jsonify(payload)
