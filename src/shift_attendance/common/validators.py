from __future__ import annotations

from typing import Iterable, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive_ids(values: Iterable[object], field_name: str) -> list[int]:
    out: list[int] = []
    for v in values:
        try:
            n = int(v)
        except (TypeError, ValueError):
            raise ValidationError(f"{field_name} contains an invalid id: {v!r}")
        if n <= 0:
            raise ValidationError(f"{field_name} contains an invalid id: {v!r}")
        out.append(n)
    return out


def clean_note(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None
