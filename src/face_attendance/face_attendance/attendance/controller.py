from __future__ import annotations

import logging

from flask import Flask, current_app, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date, parse_iso_datetime
from ..common.responses import error_response, json_errors
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import AttendanceStatus, ScanOutcome
from ..core.exceptions import ValidationError
from .orchestrator import ScanResult

logger = logging.getLogger(__name__)

NO_FACE_MESSAGE = "No face detected. Please look at the camera."


def _frame_encoder():
    """Build the face_recognition encoder on first use and keep it on the app."""

    encoder = current_app.extensions.get("frame_encoder")
    if encoder is None:
        from ..faces.encoder import FrameEncoder

        encoder = FrameEncoder()
        current_app.extensions["frame_encoder"] = encoder
    return encoder


def _scan_response(result: ScanResult):
    body = result.to_dict()
    if result.outcome == ScanOutcome.ALREADY_COMPLETED:
        body["error"] = result.message
        return jsonify(body), 409
    return jsonify(body), 200


def _parse_optional_datetime(value, field_name: str):
    if value in (None, ""):
        return None
    try:
        return parse_iso_datetime(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO-8601 timestamp") from None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/scan", methods=["POST"], endpoint="attendance_scan")
    @json_errors("Failed to process attendance")
    def attendance_scan():
        data = request.get_json(silent=True) or {}

        if "embedding" in data:
            result = container.orchestrator.scan_and_record(data["embedding"], now=now_local())
            return _scan_response(result)

        if not container.options.allow_client_resolved_scans:
            return error_response("A face embedding is required", 400)

        staff_id = data.get("staffId")
        staff_name = data.get("staffName")
        if not staff_id or not staff_name:
            return error_response("Staff ID and name required", 400)

        logger.info("Client-resolved scan for %s (%s)", staff_name, staff_id)
        result = container.orchestrator.record_resolved_scan(str(staff_id), str(staff_name), now=now_local())
        return _scan_response(result)

    @app.route("/api/attendance/scan-frame", methods=["POST"], endpoint="attendance_scan_frame")
    @json_errors("Failed to process attendance")
    def attendance_scan_frame():
        data = request.get_json(silent=True) or {}
        embedding = _frame_encoder().encode_base64(data.get("image") or "")
        if embedding is None:
            return jsonify(ScanResult(outcome=ScanOutcome.NOT_RECOGNIZED, message=NO_FACE_MESSAGE).to_dict())
        return _scan_response(container.orchestrator.scan_and_record(embedding, now=now_local()))

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @json_errors("Failed to fetch attendance")
    def attendance_list():
        staff_id = request.args.get("staffId")
        date_s = request.args.get("date")

        try:
            work_date = parse_iso_date(date_s) if date_s else None
        except ValueError:
            return error_response("date must be YYYY-MM-DD", 400)

        if staff_id and work_date:
            record = container.attendance_service.get_today_record(staff_id, work_date)
            return jsonify([record.to_dict()] if record else [])

        if staff_id:
            limit = request.args.get("limit", DEFAULT_HISTORY_LIMIT, type=int)
            records = container.attendance_service.history(staff_id, limit=limit)
        else:
            records = container.attendance_service.list_for_date(work_date or now_local().date())
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/<attendance_id>", methods=["PUT"], endpoint="attendance_update")
    @json_errors("Failed to update attendance")
    def attendance_update(attendance_id: str):
        data = request.get_json(silent=True) or {}
        try:
            status = AttendanceStatus(data.get("status"))
        except ValueError:
            return error_response("status must be one of: present, late, absent", 400)

        record = container.attendance_service.correct_record(
            attendance_id,
            check_in_time=_parse_optional_datetime(data.get("checkIn"), "checkIn"),
            check_out_time=_parse_optional_datetime(data.get("checkOut"), "checkOut"),
            status=status,
        )
        return jsonify(record.to_dict())
