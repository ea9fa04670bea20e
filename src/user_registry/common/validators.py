from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import BadRequestError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or value == "":
        raise BadRequestError(f"{field_name} cannot be empty")
    return value


def is_blank(value: Optional[str]) -> bool:
    return value is None or value == ""


def require_optional_str(value: Any, field_name: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise BadRequestError(f"{field_name} must be a string")
    return value
