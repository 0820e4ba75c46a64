from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/afd", methods=["GET"], endpoint="list_afd_files")
    def list_afd_files():
        limit = request.args.get("limit", default=200, type=int)
        return jsonify([f.as_dict() for f in container.afd_service.list_files(limit=limit)])

    @app.route("/api/afd/upload", methods=["POST"], endpoint="afd_upload")
    def afd_upload():
        upload = request.files.get("file")
        if upload is None:
            raise ValidationError("Nenhum arquivo enviado")

        skip_duplicates = request.form.get("skip_duplicates", "0") in {"1", "true", "on"}
        result = container.afd_service.import_file(
            upload.read(),
            filename=upload.filename or "",
            skip_duplicates=skip_duplicates,
        )
        return jsonify(
            {
                "message": "Arquivo processado com sucesso",
                "afd_file_id": result.afd_file_id,
                "processed_count": result.matched_count,
                "inserted_count": len(result.punch_inserts),
                "total_records": result.total_records,
                "unprocessed_count": result.unprocessed_count,
                "malformed_lines": result.malformed_lines,
            }
        )
