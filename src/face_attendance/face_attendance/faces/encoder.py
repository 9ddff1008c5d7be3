from __future__ import annotations

from typing import Optional

import cv2
import face_recognition
import numpy as np

from ..common.images import decode_data_url
from ..core.exceptions import ValidationError


class FrameEncoder:
    """Turn a camera frame into a 128-d face embedding.

    Wraps ``face_recognition`` (dlib); the first detected face is encoded.
    """

    def __init__(self, *, model: str = "hog"):
        self._model = model

    def encode_base64(self, image: str) -> Optional[list[float]]:
        return self.encode_bytes(decode_data_url(image))

    def encode_bytes(self, image_bytes: bytes) -> Optional[list[float]]:
        img = cv2.imdecode(np.frombuffer(image_bytes, np.uint8), cv2.IMREAD_UNCHANGED)
        if img is None:
            raise ValidationError("Invalid image")

        # RGBA -> BGR, grayscale -> BGR
        if len(img.shape) == 3 and img.shape[2] == 4:
            img = cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
        elif len(img.shape) == 2:
            img = cv2.cvtColor(img, cv2.COLOR_GRAY2BGR)

        rgb = np.ascontiguousarray(cv2.cvtColor(img, cv2.COLOR_BGR2RGB), dtype=np.uint8)
        boxes = face_recognition.face_locations(rgb, model=self._model)
        if not boxes:
            return None
        encoding = face_recognition.face_encodings(rgb, boxes)[0]
        return [float(v) for v in encoding.tolist()]
