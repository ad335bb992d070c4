import os
from datetime import datetime
from typing import Optional

import cv2

from doorcam.analysis.models import VideoMetadata
from doorcam.core.exceptions import DecodeError


class FrameSampler:
    """
    Iterates (frame, seconds) pairs from a video at roughly sample_fps.
    Raises DecodeError if the container cannot be opened or has no FPS.
    """

    def __init__(self, video_path: str, sample_fps: float):
        if sample_fps <= 0:
            raise ValueError("sample_fps must be greater than 0")

        self.video_path = video_path
        self.cap = cv2.VideoCapture(video_path)

        if not self.cap.isOpened():
            raise DecodeError(f"Failed to open video: {video_path}")

        self.original_fps = self.cap.get(cv2.CAP_PROP_FPS)

        if not self.original_fps or self.original_fps <= 0:
            self.release()
            raise DecodeError(
                f"Invalid FPS detected for video: {video_path}"
            )

        self.sample_fps = sample_fps
        self.frame_interval = max(
            int(self.original_fps / sample_fps), 1
        )
        self.total_frames = int(self.cap.get(cv2.CAP_PROP_FRAME_COUNT) or 0)
        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH) or 0)
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT) or 0)
        self.frame_count = 0
        self.frames_sampled = 0

    @property
    def duration_seconds(self) -> float:
        return self.total_frames / self.original_fps

    def probe_metadata(self, start_time: Optional[datetime] = None) -> VideoMetadata:
        """Container-level metadata; frames_analyzed reflects what was sampled so far."""
        return VideoMetadata(
            filename=os.path.basename(self.video_path),
            duration_seconds=self.duration_seconds,
            width=self.width,
            height=self.height,
            frame_rate=float(self.original_fps),
            frames_analyzed=self.frames_sampled,
            start_time=start_time,
        )

    def __iter__(self):
        return self

    def __next__(self):
        while True:
            ret, frame = self.cap.read()

            if not ret:
                self.release()
                raise StopIteration

            self.frame_count += 1

            if self.frame_count % self.frame_interval == 0:
                self.frames_sampled += 1
                timestamp_sec = (
                    self.cap.get(cv2.CAP_PROP_POS_MSEC) / 1000.0
                )
                return frame, float(timestamp_sec)

    def release(self):
        cap = getattr(self, "cap", None)
        if cap is not None and cap.isOpened():
            cap.release()

    def __del__(self):
        """Ensure the video capture is always released, even on exceptions."""
        self.release()
