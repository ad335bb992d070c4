from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache


class Settings(BaseSettings):
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    service_name: str = Field("doorcam", alias="SERVICE_NAME")

    # ── Upstream adapter ─────────────────────────────────────────────────────

    video_input_path: str = Field("data/videos/sample.mp4", alias="VIDEO_INPUT_PATH")

    # Sampled frames per second handed to the detector
    frame_sample_fps: float = Field(0.5, alias="FRAME_SAMPLE_FPS")

    # YOLO model name, ultralytics auto-downloads on first run
    yolo_model: str = Field("yolov8n.pt", alias="YOLO_MODEL")

    # Optional: absolute path to a local .pt file (skips auto-download)
    yolo_model_path: str = Field("", alias="YOLO_MODEL_PATH")

    # Minimum detection confidence to keep a bounding box
    yolo_confidence_threshold: float = Field(0.35, alias="YOLO_CONFIDENCE_THRESHOLD")

    # ── Anomaly rules ────────────────────────────────────────────────────────

    # Activity after NIGHT_START_HOUR or before NIGHT_END_HOUR is "night"
    night_start_hour: int = Field(22, alias="NIGHT_START_HOUR")
    night_end_hour: int = Field(6, alias="NIGHT_END_HOUR")

    # A category seen more than this many times is flagged as repeated
    repeated_activity_threshold: int = Field(3, alias="REPEATED_ACTIVITY_THRESHOLD")

    # Priority events lasting longer than this are flagged
    long_duration_minutes: float = Field(10.0, alias="LONG_DURATION_MINUTES")

    # ── Empty-input fallback ─────────────────────────────────────────────────

    # When detection yields nothing usable, report on simulated observations
    # instead of failing. Disable to get EmptyInputError.
    synthetic_fallback_enabled: bool = Field(True, alias="SYNTHETIC_FALLBACK_ENABLED")
    synthetic_seed: Optional[int] = Field(None, alias="SYNTHETIC_SEED")

    class Config:
        env_file = ".env"
        case_sensitive = True
        populate_by_name = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
