from __future__ import annotations

from datetime import date

from flask import Flask, jsonify

from ..common.http import arg_date, error_response, json_body, optional_int, parse_timestamp, unexpected_error_response
from ..core.constants import (
    DEFAULT_CLOCK_IN_END_OFFSET,
    DEFAULT_CLOCK_IN_START_OFFSET,
    DEFAULT_CLOCK_OUT_END_OFFSET,
    DEFAULT_CLOCK_OUT_START_OFFSET,
    DEFAULT_HALF_DAY_THRESHOLD_MINUTES,
    DEFAULT_LATE_THRESHOLD_MINUTES,
)
from ..core.enums import VerificationMethod
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    console = container.console

    def _clock_kwargs(data: dict) -> dict:
        employee_id = optional_int(data.get("employee_id"), "employee_id")
        if not employee_id:
            raise ValidationError("employee_id is required")
        return dict(
            employee_id=employee_id,
            shift_id=optional_int(data.get("shift_id"), "shift_id"),
            override_time=parse_timestamp(data.get("override_time")),
            notes=data.get("notes") or None,
            verification=data.get("verification_method") or VerificationMethod.MANUAL.value,
            face_confidence=data.get("face_confidence"),
        )

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="api_clock_in")
    def api_clock_in():
        try:
            record = console.attendance.clock_in(**_clock_kwargs(json_body()))
            return jsonify({"success": True, "record": record.to_dict()}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to clock in")

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="api_clock_out")
    def api_clock_out():
        try:
            record = console.attendance.clock_out(**_clock_kwargs(json_body()))
            return jsonify({"success": True, "record": record.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to clock out")

    @app.route("/api/attendance/employees/<int:employee_id>", methods=["GET"], endpoint="api_attendance_history")
    def api_attendance_history(employee_id: int):
        try:
            start = arg_date("start", date.today())
            end = arg_date("end", start)
            rows = console.attendance.history(employee_id, start=start, end=end)
            return jsonify({"items": [r.to_dict() for r in rows]})
        except DomainError as e:
            return error_response(e)

    @app.route("/api/attendance/employees/<int:employee_id>/today", methods=["GET"], endpoint="api_attendance_today")
    def api_attendance_today(employee_id: int):
        try:
            record = console.attendance.get_today_record(employee_id, arg_date("date", date.today()))
            return jsonify({"record": record.to_dict() if record else None})
        except DomainError as e:
            return error_response(e)

    @app.route("/api/shifts/<int:shift_id>/attendance-window", methods=["GET"], endpoint="api_attendance_window")
    def api_attendance_window(shift_id: int):
        try:
            window = console.windows.resolve(shift_id, arg_date("date", date.today()))
            return jsonify(window.to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/api/shifts/<int:shift_id>/attendance-window", methods=["PUT"], endpoint="api_attendance_window_update")
    def api_attendance_window_update(shift_id: int):
        try:
            data = json_body()
            offset = console.settings.update_shift_override(
                shift_id,
                clock_in_start_offset=data.get("clock_in_start_offset", DEFAULT_CLOCK_IN_START_OFFSET),
                clock_in_end_offset=data.get("clock_in_end_offset", DEFAULT_CLOCK_IN_END_OFFSET),
                clock_out_start_offset=data.get("clock_out_start_offset", DEFAULT_CLOCK_OUT_START_OFFSET),
                clock_out_end_offset=data.get("clock_out_end_offset", DEFAULT_CLOCK_OUT_END_OFFSET),
                late_threshold_minutes=optional_int(data.get("late_threshold_minutes"), "late_threshold_minutes"),
                half_day_threshold_minutes=optional_int(
                    data.get("half_day_threshold_minutes"), "half_day_threshold_minutes"
                ),
            )
            return jsonify({"success": True, "override": offset.to_dict()})
        except DomainError as e:
            return error_response(e)

    @app.route("/api/attendance/settings", methods=["GET"], endpoint="api_attendance_settings")
    def api_attendance_settings():
        try:
            return jsonify(console.settings.get_default().to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/api/attendance/settings", methods=["PUT"], endpoint="api_attendance_settings_update")
    def api_attendance_settings_update():
        try:
            data = json_body()
            config = console.settings.update_default(
                clock_in_start=data.get("clock_in_start") or "",
                clock_in_end=data.get("clock_in_end") or "",
                clock_out_start=data.get("clock_out_start") or "",
                clock_out_end=data.get("clock_out_end") or "",
                late_threshold_minutes=data.get("late_threshold_minutes", DEFAULT_LATE_THRESHOLD_MINUTES),
                half_day_threshold_minutes=data.get("half_day_threshold_minutes", DEFAULT_HALF_DAY_THRESHOLD_MINUTES),
            )
            return jsonify({"success": True, "settings": config.to_dict()})
        except DomainError as e:
            return error_response(e)
