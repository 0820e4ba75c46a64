from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/audit", methods=["GET"], endpoint="audit_list")
    def audit_list():
        entries = container.audit_service.list_recent(
            employee_id=request.args.get("employee_id", type=int),
            limit=request.args.get("limit", default=200, type=int),
        )
        return jsonify(entries)
