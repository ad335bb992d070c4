import os
from datetime import datetime
from typing import Callable, Optional

from doorcam.analysis.models import VideoMetadata
from doorcam.analysis.sources import ObservationSource, Observations, Unavailable
from doorcam.core.config import get_settings
from doorcam.core.exceptions import DecodeError, ModelUnavailableError
from doorcam.core.logging import get_logger
from doorcam.detection.detector import ObjectDetector
from doorcam.vision.frame_sampler import FrameSampler


def extract_observations(
    video_path: str,
    detector: Optional[ObjectDetector] = None,
    sampler_factory: Callable[[str, float], FrameSampler] = FrameSampler,
    sample_fps: Optional[float] = None,
    start_time: Optional[datetime] = None,
) -> tuple[ObservationSource, VideoMetadata]:
    """
    Sample the whole video, run detection on every sampled frame and hand
    back the materialised result together with the video's metadata.

    Decode and model failures never escape: they come back as
    Unavailable(reason) so the report pipeline can decide what to do.
    """
    settings = get_settings()
    logger = get_logger()
    detector = detector or ObjectDetector()
    sample_fps = sample_fps or settings.frame_sample_fps

    try:
        sampler = sampler_factory(video_path, sample_fps)
    except DecodeError as e:
        logger.error("observation_extraction_failed", video=video_path, error=str(e))
        return Unavailable(reason=f"decode_error: {e}"), VideoMetadata(
            filename=os.path.basename(video_path),
            start_time=start_time,
        )

    logger.info(
        "video_processing_started",
        video=video_path,
        total_frames=sampler.total_frames,
        frame_interval=sampler.frame_interval,
    )

    observations = []
    try:
        # Pay the model-loading cost up front; a missing model fails here
        detector.warmup()
        for frame, seconds in sampler:
            found = detector.detect(frame, seconds)
            if found:
                logger.debug("detections_found", second=seconds, count=len(found))
                observations.extend(found)
    except (DecodeError, ModelUnavailableError) as e:
        logger.error("observation_extraction_failed", video=video_path, error=str(e))
        kind = "decode_error" if isinstance(e, DecodeError) else "model_unavailable"
        return Unavailable(reason=f"{kind}: {e}"), sampler.probe_metadata(start_time)
    finally:
        sampler.release()

    metadata = sampler.probe_metadata(start_time)
    logger.info(
        "video_processing_completed",
        video=video_path,
        frames_sampled=metadata.frames_analyzed,
        observations=len(observations),
    )
    return Observations(observations=observations), metadata
