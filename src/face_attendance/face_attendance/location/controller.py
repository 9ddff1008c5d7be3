from __future__ import annotations

import logging
import math

from flask import Flask, jsonify, request

from ..common.responses import json_errors
from ..container import Container

logger = logging.getLogger(__name__)


def _as_float(value):
    """Lenient float parse; anything unusable becomes None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/validate-location", methods=["POST"], endpoint="validate_location")
    @json_errors("Failed to validate location")
    def validate_location():
        data = request.get_json(silent=True) or {}
        latitude = _as_float(data.get("latitude"))
        longitude = _as_float(data.get("longitude"))
        logger.info("Location validation request: lat=%s lon=%s", latitude, longitude)

        if latitude is None or longitude is None:
            return jsonify({"allowed": False, "message": "Latitude and longitude are required"}), 400

        office = container.options.office
        if not office.is_configured:
            logger.error("Office location not configured")
            return jsonify({"allowed": False, "message": "Office location not configured"}), 500

        result = container.location_gate.validate_against(latitude, longitude, office)
        logger.info("Location validation result: allowed=%s distance=%s", result.allowed, result.distance_meters)
        return jsonify(result.to_dict())
