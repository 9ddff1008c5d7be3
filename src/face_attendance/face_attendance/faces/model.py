from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class StoredFace:
    """Row as persisted; ``descriptor`` is not validated yet."""

    staff_id: str
    name: str
    descriptor: Any


@dataclass(frozen=True)
class FaceEmbedding:
    """A registered identity with a validated 128-number embedding."""

    staff_id: str
    display_name: str
    embedding: tuple[float, ...]
    reference_image: Optional[bytes] = None

    def to_dict(self) -> dict:
        return {"id": self.staff_id, "name": self.display_name, "descriptor": list(self.embedding)}
