from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np

from ..core.constants import EMBEDDING_DIMENSIONS
from ..core.exceptions import ValidationError
from .model import FaceEmbedding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FaceMatch:
    staff_id: str
    display_name: str
    distance: float


class FaceMatcher:
    """Nearest-neighbour search over registered embeddings.

    The threshold is an acceptance radius in embedding space: the best
    candidate is accepted only when its Euclidean distance is strictly below
    it. Ties keep the first candidate encountered.
    """

    def match(
        self,
        live_embedding: Sequence[float],
        candidates: Iterable[FaceEmbedding],
        threshold: float,
    ) -> Optional[FaceMatch]:
        live = _live_vector(live_embedding)
        if threshold is None or not math.isfinite(threshold) or threshold <= 0:
            raise ValidationError("Match threshold must be a positive number")

        best: Optional[FaceEmbedding] = None
        best_distance = math.inf

        for candidate in candidates:
            vector = _candidate_vector(candidate.embedding)
            if vector is None:
                logger.debug("Ignoring malformed embedding for %s", candidate.staff_id)
                continue
            distance = float(np.linalg.norm(live - vector))
            if distance < best_distance:
                best = candidate
                best_distance = distance

        if best is None or not best_distance < threshold:
            logger.info(
                "Face not recognized (best distance=%s, threshold=%s)",
                "n/a" if best is None else f"{best_distance:.4f}",
                threshold,
            )
            return None

        logger.info("Face matched %s (distance=%.4f)", best.display_name, best_distance)
        return FaceMatch(staff_id=best.staff_id, display_name=best.display_name, distance=best_distance)


def _live_vector(values: Sequence[float]) -> np.ndarray:
    try:
        vector = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError):
        raise ValidationError("Live embedding must be numeric") from None
    if vector.shape != (EMBEDDING_DIMENSIONS,):
        raise ValidationError(
            f"Live embedding must have {EMBEDDING_DIMENSIONS} dimensions, got shape {vector.shape}"
        )
    if not np.all(np.isfinite(vector)):
        raise ValidationError("Live embedding contains non-finite values")
    return vector


def _candidate_vector(values: Sequence[float]) -> Optional[np.ndarray]:
    try:
        vector = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError):
        return None
    if vector.shape != (EMBEDDING_DIMENSIONS,) or not np.all(np.isfinite(vector)):
        return None
    return vector
