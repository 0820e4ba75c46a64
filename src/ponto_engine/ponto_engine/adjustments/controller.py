from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import actor_id, json_body, parse_date, parse_datetime
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timesheet/adjustments", methods=["GET"], endpoint="list_adjustments")
    def list_adjustments():
        employee_id = request.args.get("employee_id", type=int)
        if employee_id:
            items = container.adjustment_service.list_for_employee(employee_id=employee_id)
        else:
            items = container.adjustment_service.list_pending()
        return jsonify([a.as_dict() for a in items])

    @app.route("/api/timesheet/adjustments", methods=["POST"], endpoint="create_adjustment")
    def create_adjustment():
        employee_id = actor_id()
        if employee_id is None:
            raise ValidationError("Funcionário não identificado")
        body = json_body()
        adjustment = container.adjustment_service.create(
            employee_id=employee_id,
            type=body.get("type", ""),
            justification=body.get("justification", ""),
            timestamp=parse_datetime(body.get("timestamp"), "timestamp"),
            end_date=parse_date(body.get("end_date"), "end_date"),
            attachment_ref=body.get("attachment_url"),
        )
        return jsonify(adjustment.as_dict()), 201

    @app.route("/api/timesheet/adjustments/<int:adjustment_id>/process", methods=["POST"], endpoint="process_adjustment")
    def process_adjustment(adjustment_id: int):
        reviewer_id = actor_id()
        if reviewer_id is None:
            raise ValidationError("Revisor não identificado")
        body = json_body()
        result = container.adjustment_service.process(
            adjustment_id=adjustment_id,
            decision=body.get("status", ""),
            reviewer_id=reviewer_id,
            feedback=body.get("feedback"),
        )
        return jsonify(
            {
                "adjustment": result.updated_adjustment.as_dict(),
                "synthesized_punches": [p.timestamp.isoformat() for p in result.synthesized_punches],
            }
        )
