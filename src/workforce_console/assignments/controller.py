from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import arg_date, error_response, json_body, optional_int, unexpected_error_response
from ..core.exceptions import DomainError, ValidationError
from ..rotation.planner import get_available_patterns
from ..container import Container


def register(app: Flask, container: Container) -> None:
    console = container.console

    @app.route("/api/rotation/patterns", methods=["GET"], endpoint="api_rotation_patterns")
    def api_rotation_patterns():
        patterns = get_available_patterns(request.args.get("start"), request.args.get("end"))
        return jsonify({"patterns": [p.value for p in patterns]})

    @app.route("/api/rotation/plan", methods=["POST"], endpoint="api_rotation_plan")
    def api_rotation_plan():
        try:
            data = json_body()
            rotation = console.planner.plan_from_strings(
                start_date=data.get("start_date") or "",
                end_date=data.get("end_date") or None,
                pattern=data.get("pattern") or "none",
                interval=data.get("interval", 1),
            )
            return jsonify({"success": True, "rotation": rotation.to_dict()})
        except DomainError as e:
            return error_response(e)

    @app.route("/api/shifts", methods=["GET"], endpoint="api_shifts")
    def api_shifts():
        return jsonify({"items": [s.to_dict() for s in container.shifts_repo.list_all()]})

    @app.route("/api/shifts/<int:shift_id>/candidates", methods=["GET"], endpoint="api_shift_candidates")
    def api_shift_candidates(shift_id: int):
        try:
            start = arg_date("start", date.today())
            end = arg_date("end", start)
            selection = console.new_selection()
            selection.load(shift_id=shift_id, start=start, end=end)
            selection.set_department(request.args.get("department") or None)
            items = [
                {**e.to_dict(), "pre_assigned": selection.is_pre_assigned(e.employee_id)}
                for e in selection.visible_candidates(request.args.get("search", ""))
            ]
            return jsonify({"items": items, "pre_assigned": sorted(selection.pre_assigned)})
        except DomainError as e:
            return error_response(e)

    @app.route("/api/departments/<name>/rules", methods=["GET"], endpoint="api_department_rules")
    def api_department_rules(name: str):
        return jsonify(console.policies.validate(name).to_dict())

    @app.route("/api/assignments", methods=["GET"], endpoint="api_assignments")
    def api_assignments():
        try:
            start = arg_date("start", date.today())
            end = arg_date("end", start)
            rows = console.fetch_assignments(
                start=start,
                end=end,
                shift_id=optional_int(request.args.get("shift_id"), "shift_id"),
                employee_id=optional_int(request.args.get("employee_id"), "employee_id"),
            )
            return jsonify({"items": [a.to_dict() for a in rows]})
        except DomainError as e:
            return error_response(e)

    @app.route("/api/shifts/<int:shift_id>/assignments/bulk", methods=["POST"], endpoint="api_bulk_assign")
    def api_bulk_assign(shift_id: int):
        try:
            data = json_body()
            employee_ids = data.get("employee_ids") or []
            if not isinstance(employee_ids, list):
                raise ValidationError("employee_ids must be a list")
            end_s = data.get("end_date")
            outcome = console.submit_bulk_assignment(
                shift_id=shift_id,
                employee_ids=[optional_int(i, "employee_ids") or 0 for i in employee_ids],
                start_date=parse_iso_date(data.get("start_date") or date.today().strftime("%Y-%m-%d")),
                end_date=parse_iso_date(end_s) if end_s else None,
                pattern=data.get("rotation_pattern") or "none",
                interval=data.get("interval", 1),
                department=data.get("department") or None,
            )
            return jsonify(outcome.to_dict()), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            return unexpected_error_response("Failed to assign shifts")

    @app.route("/api/shifts/<int:shift_id>/assignments", methods=["POST"], endpoint="api_assign")
    def api_assign(shift_id: int):
        try:
            data = json_body()
            assignment = console.assignments.assign(
                shift_id=shift_id,
                employee_id=optional_int(data.get("employee_id"), "employee_id") or 0,
                schedule_date=parse_iso_date(data.get("schedule_date") or ""),
                notes=data.get("notes"),
            )
            return jsonify({"success": True, "assignment": assignment.to_dict()}), 201
        except DomainError as e:
            return error_response(e)

    @app.route("/api/assignments/<int:assignment_id>/status", methods=["PATCH"], endpoint="api_assignment_status")
    def api_assignment_status(assignment_id: int):
        try:
            data = json_body()
            assignment = console.assignments.update_status(
                assignment_id=assignment_id,
                status=data.get("status") or "",
                overtime_minutes=optional_int(data.get("overtime_minutes"), "overtime_minutes"),
                notes=data.get("notes"),
            )
            return jsonify({"success": True, "assignment": assignment.to_dict()})
        except DomainError as e:
            return error_response(e)

    @app.route("/api/assignments/<int:assignment_id>", methods=["DELETE"], endpoint="api_assignment_delete")
    def api_assignment_delete(assignment_id: int):
        try:
            console.assignments.delete(assignment_id=assignment_id)
            return jsonify({"success": True})
        except DomainError as e:
            return error_response(e)
