from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.http import bool_value, date_value, id_list, json_body, optional_date, positive_int
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_PENDING_PAGE_SIZE
from ..core.enums import ShiftType
from ..core.exceptions import ValidationError


def _shift_type(value: Optional[str]) -> Optional[ShiftType]:
    if not value:
        return None
    try:
        return ShiftType(value)
    except ValueError:
        raise ValidationError(f"Unknown shift_type: {value}")


def register(app: Flask, container: Container) -> None:
    mutator = container.batch_mutator
    queue = container.approval_queue_service

    @app.route("/api/batch/apply-template", methods=["POST"], endpoint="batch_apply_template")
    def batch_apply_template():
        body = json_body()
        template_id = positive_int(body.get("template_id"), "template_id")
        user_ids = id_list(body, "user_ids")
        override = bool_value(body.get("override_existing"), "override_existing")

        if "dates" in body:
            dates = [date_value(d, "dates") for d in id_list(body, "dates")]
            outcome = mutator.apply_template(
                template_id=template_id,
                user_ids=user_ids,
                dates=dates,
                override_existing=override,
            )
        elif body.get("start_date") and body.get("end_date"):
            outcome = mutator.apply_template_to_range(
                template_id=template_id,
                user_ids=user_ids,
                start_date=date_value(body["start_date"], "start_date"),
                end_date=date_value(body["end_date"], "end_date"),
                override_existing=override,
            )
        else:
            raise ValidationError("Either dates or start_date/end_date is required")

        return jsonify(outcome.to_dict())

    @app.route("/api/batch/approve", methods=["POST"], endpoint="batch_approve")
    def batch_approve():
        body = json_body()
        outcome = mutator.approve(id_list(body, "shift_ids"), body.get("note"))
        return jsonify(outcome.to_dict())

    @app.route("/api/batch/cancel-approval", methods=["POST"], endpoint="batch_cancel_approval")
    def batch_cancel_approval():
        body = json_body()
        outcome = mutator.cancel_approval(id_list(body, "shift_ids"))
        return jsonify(outcome.to_dict())

    @app.route("/api/batch/approve-user", methods=["POST"], endpoint="batch_approve_user")
    def batch_approve_user():
        body = json_body()
        user_id = positive_int(body.get("user_id"), "user_id")
        outcome = mutator.approve_all_for_user(
            user_id,
            date_from=optional_date(body.get("date_from"), "date_from"),
            date_to=optional_date(body.get("date_to"), "date_to"),
            note=body.get("note"),
        )
        return jsonify(outcome.to_dict())

    @app.route("/api/batch/history", methods=["GET"], endpoint="batch_history")
    def batch_history():
        limit = request.args.get("limit", default=DEFAULT_HISTORY_LIMIT, type=int)
        return jsonify([r.to_dict() for r in mutator.list_history(limit=limit)])

    @app.route("/api/batch/pending", methods=["GET"], endpoint="batch_pending")
    def batch_pending():
        user_id = request.args.get("user_id")
        filters = {
            "user_id": positive_int(user_id, "user_id") if user_id else None,
            "date_from": optional_date(request.args.get("date_from"), "date_from"),
            "date_to": optional_date(request.args.get("date_to"), "date_to"),
            "shift_type": _shift_type(request.args.get("shift_type")),
        }

        if request.args.get("group_by") == "user":
            page = queue.pending_by_user(
                **filters,
                page=request.args.get("page", default=1, type=int),
                page_size=request.args.get("page_size", default=DEFAULT_PENDING_PAGE_SIZE, type=int),
            )
            return jsonify(page.to_dict())

        return jsonify([s.to_dict() for s in queue.pending_shifts(**filters)])

    @app.route("/api/batch/stats", methods=["GET"], endpoint="batch_stats")
    def batch_stats():
        stats = queue.approval_stats(
            date_from=optional_date(request.args.get("date_from"), "date_from"),
            date_to=optional_date(request.args.get("date_to"), "date_to"),
        )
        return jsonify(stats.to_dict())
