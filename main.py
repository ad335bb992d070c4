import os
from dataclasses import replace
from datetime import datetime, timedelta

from doorcam.core.logging import setup_logging, get_logger
from doorcam.core.config import get_settings
from doorcam.analysis.pipeline import ReportPipeline
from doorcam.detection.extractor import extract_observations


def video_start_time(path: str, duration_seconds: float = 0.0):
    """
    Best guess at when recording started.

    A camera writes the file as it records, so the modification time marks
    when recording ended; step back by the video's duration to get the
    first frame.
    """
    try:
        ended = datetime.fromtimestamp(os.path.getmtime(path))
    except OSError:
        return None
    return ended - timedelta(seconds=max(duration_seconds, 0.0))


def main():
    setup_logging()
    logger = get_logger()
    settings = get_settings()

    video_path = settings.video_input_path
    logger.info("starting_analysis", video=video_path)

    source, metadata = extract_observations(video_path)
    metadata = replace(
        metadata,
        start_time=video_start_time(video_path, metadata.duration_seconds),
    )

    pipeline = ReportPipeline.from_settings(settings)
    report = pipeline.analyze_source(source, metadata)

    print(report.text)
    logger.info(
        "analysis_finished",
        video=metadata.filename,
        priority_events=len(report.priority_events),
        anomalies=len(report.anomalies),
        synthetic=report.synthetic,
    )


if __name__ == "__main__":
    main()
