from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Optional

from ..core.enums import ShiftType


@dataclass(frozen=True)
class ShiftTemplate:
    """Mẫu ca (template) của một địa điểm: khung giờ + các thứ áp dụng."""

    template_id: int
    location_id: int
    name: str
    shift_type: ShiftType
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    break_duration_minutes: Optional[int] = None
    # ISO weekdays: Monday=1 .. Sunday=7
    applicable_weekdays: frozenset[int] = field(default_factory=lambda: frozenset(range(1, 8)))
    is_active: bool = True
