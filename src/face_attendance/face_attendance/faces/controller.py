from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.images import decode_data_url
from ..common.responses import error_response, json_errors
from ..container import Container
from ..core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _staff_or_404(staff_id: str):
        staff = container.staff_repo.get_by_id(staff_id)
        if not staff:
            raise NotFoundError("Staff not found")
        return staff

    @app.route("/api/staff/<staff_id>/register-face", methods=["POST"], endpoint="register_face")
    @json_errors("Failed to register face")
    def register_face(staff_id: str):
        data = request.get_json(silent=True) or {}
        descriptor = data.get("faceDescriptor")
        if not isinstance(descriptor, list):
            return error_response("Invalid face descriptor", 400)

        image = data.get("faceImage")
        reference_image = decode_data_url(image) if image else None

        container.face_store.upsert(staff_id, descriptor, reference_image)
        staff = _staff_or_404(staff_id)
        return jsonify({"success": True, "staff": staff.to_dict()})

    @app.route("/api/staff/<staff_id>/face", methods=["DELETE"], endpoint="delete_face")
    @json_errors("Failed to delete face data")
    def delete_face(staff_id: str):
        staff = _staff_or_404(staff_id)
        removed = container.face_store.remove(staff_id)
        staff = container.staff_repo.get_by_id(staff_id) or staff
        return jsonify({"success": True, "removed": removed, "staff": staff.to_dict()})

    @app.route("/api/staff/biometric", methods=["GET"], endpoint="list_biometric")
    @json_errors("Failed to fetch biometric data")
    def list_biometric():
        faces = container.face_store.list_valid()
        logger.info("Returning %d valid biometric records", len(faces))
        return jsonify([f.to_dict() for f in faces])
