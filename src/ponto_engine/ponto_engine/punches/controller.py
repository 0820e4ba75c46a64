from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import actor_id, json_body, parse_datetime, parse_float, parse_int
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timesheet/punches/<int:punch_id>", methods=["PUT"], endpoint="edit_punch")
    def edit_punch(punch_id: int):
        body = json_body()
        new_timestamp = parse_datetime(body.get("timestamp"), "timestamp")
        if new_timestamp is None:
            raise ValidationError("Informe o novo horário")
        change = container.punch_service.edit(
            punch_id=punch_id,
            new_timestamp=new_timestamp,
            justification=body.get("justification", ""),
            actor_id=actor_id(),
        )
        return jsonify({"punch": change.updated_punch.as_dict(), "audit": change.audit_entry.as_dict()})

    @app.route("/api/timesheet/punches/<int:punch_id>", methods=["DELETE"], endpoint="delete_punch")
    def delete_punch(punch_id: int):
        entry = container.punch_service.soft_delete(
            punch_id=punch_id,
            justification=json_body().get("justification", ""),
            actor_id=actor_id(),
        )
        return jsonify({"audit": entry.as_dict()})

    @app.route("/api/timesheet/punches", methods=["POST"], endpoint="create_punch")
    def create_punch():
        body = json_body()
        timestamp = parse_datetime(body.get("timestamp"), "timestamp")
        if timestamp is None:
            raise ValidationError("Informe o horário da marcação")
        employee_id = parse_int(body.get("employee_id"), "employee_id")
        if employee_id is None:
            raise ValidationError("Informe o funcionário")
        container.punch_service.create_manual(
            employee_id=employee_id,
            timestamp=timestamp,
            justification=body.get("justification", ""),
            actor_id=actor_id(),
        )
        return jsonify({"message": "Marcação registrada"}), 201

    @app.route("/api/timesheet/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        employee_id = actor_id()
        if employee_id is None:
            raise ValidationError("Funcionário não identificado")
        body = json_body()
        punch = container.punch_service.clock_in(
            employee_id=employee_id,
            latitude=parse_float(body.get("latitude"), "latitude"),
            longitude=parse_float(body.get("longitude"), "longitude"),
        )
        return jsonify({"timestamp": punch.timestamp.isoformat()}), 201
