from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_NON_DIGITS = re.compile(r"\D")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} é obrigatório(a)")
    return value.strip()


def digits_only(value: Optional[str]) -> str:
    """Strip punctuation from PIS/CPF values (e.g. '123.456.789-01')."""
    return _NON_DIGITS.sub("", value or "")
