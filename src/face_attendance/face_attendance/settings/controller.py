from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import error_response, json_errors
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings/<key>", methods=["GET"], endpoint="get_setting")
    @json_errors("Failed to fetch setting")
    def get_setting(key: str):
        return jsonify(container.settings_service.get(key).to_dict())

    @app.route("/api/settings/<key>", methods=["PUT"], endpoint="update_setting")
    @json_errors("Failed to update setting")
    def update_setting(key: str):
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "value" not in data:
            return error_response("Setting value is required", 400)
        return jsonify(container.settings_service.update(key, data["value"]).to_dict())
