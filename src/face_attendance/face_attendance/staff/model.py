from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Staff:
    """Domain entity: a staff member who can register a face and scan in.

    Plain data object; no DB access code lives here.
    """

    staff_id: str
    name: str
    email: str
    department: Optional[str] = None
    position: Optional[str] = None
    has_face: bool = False
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.staff_id,
            "name": self.name,
            "email": self.email,
            "department": self.department,
            "position": self.position,
            "hasFace": self.has_face,
        }
