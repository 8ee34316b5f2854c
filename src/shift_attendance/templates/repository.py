from __future__ import annotations

from typing import Optional, Protocol

from .model import ShiftTemplate


class TemplateRepository(Protocol):
    def get_by_id(self, template_id: int) -> Optional[ShiftTemplate]:
        raise NotImplementedError
