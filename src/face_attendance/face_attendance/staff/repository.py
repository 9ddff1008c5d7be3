from __future__ import annotations

from typing import Optional, Protocol

from .model import Staff


class StaffRepository(Protocol):
    """Repository interface for staff lookups.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        raise NotImplementedError
