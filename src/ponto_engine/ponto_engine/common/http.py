from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Optional

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ACTOR_HEADER = "X-Actor-Id"


def actor_id() -> Optional[int]:
    """Acting user id, set by the authentication layer in front of the app."""
    value = request.headers.get(ACTOR_HEADER, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{ACTOR_HEADER} inválido")


def parse_datetime(value: Optional[str], field_name: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} inválido (ISO 8601)")


def parse_date(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} inválido (AAAA-MM-DD)")


def parse_int(value, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} inválido")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} inválido")


def parse_float(value, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} inválido")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} inválido")
    return number


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return jsonify({"message": str(exc)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(exc: NotFoundError):
        return jsonify({"message": str(exc)}), 404
