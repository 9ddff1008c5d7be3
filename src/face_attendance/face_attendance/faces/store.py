from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

from ..common.validators import is_valid_embedding, require_embedding, require_non_empty
from ..core.constants import EMBEDDING_DIMENSIONS
from ..core.exceptions import NotFoundError
from .model import FaceEmbedding
from .repository import FaceEmbeddingRepository

logger = logging.getLogger(__name__)


class FaceEmbeddingStore:
    """Registered face embeddings, as seen by the matcher.

    Reads are lock-free; registrations and removals are serialized among
    themselves. A scan may see a slightly stale set.
    """

    def __init__(self, faces: FaceEmbeddingRepository):
        self._faces = faces
        self._write_lock = threading.Lock()

    def list_valid(self) -> list[FaceEmbedding]:
        valid: list[FaceEmbedding] = []
        for row in self._faces.list_registered():
            descriptor = row.descriptor
            if isinstance(descriptor, dict):
                # Some drivers hand back index-keyed objects instead of arrays.
                descriptor = list(descriptor.values())
            if not is_valid_embedding(descriptor):
                size = len(descriptor) if hasattr(descriptor, "__len__") else "n/a"
                logger.warning(
                    "Skipping face of %s (%s): descriptor is not %d finite numbers (length=%s)",
                    row.name,
                    row.staff_id,
                    EMBEDDING_DIMENSIONS,
                    size,
                )
                continue
            valid.append(
                FaceEmbedding(
                    staff_id=row.staff_id,
                    display_name=row.name,
                    embedding=tuple(float(v) for v in descriptor),
                )
            )
        logger.debug("Loaded %d valid face embeddings", len(valid))
        return valid

    def upsert(self, staff_id: str, embedding: Sequence[float], reference_image: Optional[bytes] = None) -> None:
        staff_id = require_non_empty(staff_id, "Staff ID")
        vector = require_embedding(embedding)

        with self._write_lock:
            if not self._faces.save(staff_id=staff_id, descriptor=vector, reference_image=reference_image):
                raise NotFoundError("Staff not found")
        logger.info("Face registered for staff %s", staff_id)

    def remove(self, staff_id: str) -> bool:
        """Forget a staff member's face. Removing a missing face is not an error."""

        with self._write_lock:
            removed = self._faces.delete(staff_id=staff_id)
        if removed:
            logger.info("Face data removed for staff %s", staff_id)
        return removed
