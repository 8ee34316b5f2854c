from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import bool_value, date_value, datetime_value, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<int:user_id>/<work_date>", methods=["GET"], endpoint="attendance_day")
    def attendance_day(user_id: int, work_date: str):
        day = container.attendance_service.day_status(user_id=user_id, work_date=date_value(work_date, "work_date"))
        return jsonify(day.to_dict())

    @app.route("/api/status-rules", methods=["GET"], endpoint="status_rules")
    def status_rules():
        return jsonify([v.to_dict() for v in container.status_rule_service.list_versions()])

    @app.route("/api/status-rules", methods=["POST"], endpoint="status_rules_create")
    def status_rules_create():
        body = json_body()
        rule_id = container.status_rule_service.create_version(
            effective_from=datetime_value(body.get("effective_from"), "effective_from"),
            normal_label=str(body.get("normal_label") or ""),
            late_label=str(body.get("late_label") or ""),
            early_leave_label=str(body.get("early_leave_label") or ""),
            absence_label=str(body.get("absence_label") or ""),
            indeterminate_label=str(body.get("indeterminate_label") or ""),
            supersede=bool_value(body.get("supersede"), "supersede"),
        )
        return jsonify({"rule_id": rule_id}), 201
