from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import date_value
from ..common.validators import require_positive_ids
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/timeline", methods=["GET"], endpoint="attendance_timeline")
    def attendance_timeline():
        work_date = date_value(request.args.get("date") or now_local().date().isoformat(), "date")
        user_ids = require_positive_ids(request.args.getlist("user_id"), "user_id") or None

        rows = container.timeline_service.day_timeline(work_date=work_date, user_ids=user_ids)
        return jsonify({"date": work_date.isoformat(), "users": rows})
