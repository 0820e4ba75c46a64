from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/timesheet/<int:employee_id>", methods=["GET"], endpoint="timesheet_mirror")
    def timesheet_mirror(employee_id: int):
        mirror = container.timesheet_service.get_mirror(
            employee_id=employee_id,
            month_key=request.args.get("month", ""),
        )
        return jsonify(mirror.as_dict())

    @app.route("/api/reports/absenteismo", methods=["GET"], endpoint="absenteeism_report")
    def absenteeism_report():
        rows = container.timesheet_service.absenteeism_report(month_key=request.args.get("month", ""))
        return jsonify([r.as_dict() for r in rows])
