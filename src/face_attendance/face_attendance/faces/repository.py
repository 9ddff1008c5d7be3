from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import StoredFace


class FaceEmbeddingRepository(Protocol):
    def list_registered(self) -> Sequence[StoredFace]:
        """All staff rows that have a stored descriptor, unvalidated."""

        raise NotImplementedError

    def save(self, *, staff_id: str, descriptor: Sequence[float], reference_image: Optional[bytes]) -> bool:
        """Replace the staff member's descriptor and image.

        Returns False when the staff member does not exist.
        """

        raise NotImplementedError

    def delete(self, *, staff_id: str) -> bool:
        """Clear descriptor and image. Returns True if a descriptor was removed."""

        raise NotImplementedError
