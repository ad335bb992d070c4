import os
from typing import Optional

import numpy as np

from doorcam.analysis.models import Observation
from doorcam.core.config import get_settings
from doorcam.core.exceptions import ModelUnavailableError
from doorcam.core.logging import get_logger


# COCO class IDs relevant at a front door: everything the label
# classifier knows how to categorise
SURVEILLANCE_CLASSES = {
    0:  "person",
    2:  "car",
    5:  "bus",
    7:  "truck",
    14: "bird",
    15: "cat",
    16: "dog",
    24: "backpack",
    26: "handbag",
    28: "suitcase",
}


class ObjectDetector:
    """
    Wraps YOLOv8 and turns each sampled frame into Observations.

    The model is loaded lazily on first use. Any failure to import
    ultralytics or load weights surfaces as ModelUnavailableError so the
    caller can fall back instead of crashing mid-video.
    """

    def __init__(self, model_name: Optional[str] = None, confidence_threshold: Optional[float] = None):
        self.settings = get_settings()
        self.logger = get_logger()
        self.model_name = model_name or self.settings.yolo_model
        self.confidence_threshold = (
            confidence_threshold
            if confidence_threshold is not None
            else self.settings.yolo_confidence_threshold
        )
        self._model = None

    def _load_model(self):
        """Lazy-load YOLO model; only loads when first detection is requested."""
        if self._model is not None:
            return

        model_path = self.settings.yolo_model_path

        # Use explicit path if configured, otherwise let ultralytics auto-download
        target = model_path if (model_path and os.path.exists(model_path)) else self.model_name

        self.logger.info("yolo_model_loading", model=target)
        try:
            from ultralytics import YOLO
            self._model = YOLO(target)
        except Exception as e:
            self.logger.error("yolo_model_load_failed", model=target, error=str(e))
            raise ModelUnavailableError(f"Could not load detection model {target}: {e}") from e

        self.logger.info("yolo_model_loaded", model=target, device="cpu")

    def warmup(self):
        """Load weights and run one dummy pass so the first real frame isn't slow."""
        self._load_model()
        dummy = np.zeros((64, 64, 3), dtype=np.uint8)
        self._predict(dummy)
        self.logger.info("yolo_warmup_complete")

    def _predict(self, frame: np.ndarray):
        try:
            return self._model.predict(
                frame,
                device="cpu",
                verbose=False,
                conf=self.confidence_threshold,
                classes=list(SURVEILLANCE_CLASSES.keys()),
            )
        except Exception as e:
            raise ModelUnavailableError(f"Detection model failed: {e}") from e

    def detect(self, frame: np.ndarray, frame_second: float) -> list[Observation]:
        """
        Run YOLO on a single BGR frame.

        Returns one Observation per surveillance-relevant box (may be empty).
        """
        self._load_model()
        predictions = self._predict(frame)

        if not predictions or predictions[0].boxes is None:
            return []

        observations = []
        boxes = predictions[0].boxes
        for i in range(len(boxes)):
            cls_id = int(boxes.cls[i].item())
            if cls_id not in SURVEILLANCE_CLASSES:
                continue

            observations.append(Observation(
                label=SURVEILLANCE_CLASSES[cls_id],
                confidence=float(boxes.conf[i].item()),
                timestamp=frame_second,
            ))

        return observations
