from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_fields(body: Mapping[str, Any], fields: Iterable[str], message: str) -> None:
    """Raise `ValidationError(message)` if any of `fields` is missing or falsy."""

    for name in fields:
        if not body.get(name):
            raise ValidationError(message)


def require_choice(value: Any, choices: Iterable[str], message: str) -> str:
    if not isinstance(value, str) or value not in set(choices):
        raise ValidationError(message)
    return value
