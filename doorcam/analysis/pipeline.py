import time
from typing import Callable, Optional, Sequence

from doorcam.analysis.anomaly import AnomalyDetector
from doorcam.analysis.grouping import EventGrouper
from doorcam.analysis.models import AnalysisReport, Observation, VideoMetadata
from doorcam.analysis.priority import PriorityEventBuilder
from doorcam.analysis.report import render_report
from doorcam.analysis.sources import ObservationSource, Observations, Unavailable
from doorcam.analysis.synthetic import (
    SimulatedObservationGenerator,
    SyntheticObservationGenerator,
)
from doorcam.analysis.time_patterns import analyze_time_patterns
from doorcam.core.config import Settings, get_settings
from doorcam.core.exceptions import EmptyInputError
from doorcam.core.logging import get_logger


class ReportPipeline:
    """
    Observations → grouped events → priority events → anomalies and
    hourly patterns → rendered report.

    Synchronous and side-effect free apart from logging. Each call owns
    its data; nothing is kept between runs.

    Empty input is handed to the synthetic generator when one is
    configured, otherwise EmptyInputError is raised. The clock is
    injectable so the rendered analysis time can be pinned in tests.
    """

    def __init__(
        self,
        anomaly_detector: Optional[AnomalyDetector] = None,
        fallback: Optional[SyntheticObservationGenerator] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.grouper = EventGrouper()
        self.priority_builder = PriorityEventBuilder()
        self.anomaly_detector = anomaly_detector or AnomalyDetector()
        self.fallback = fallback
        self.clock = clock
        self.logger = get_logger()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> "ReportPipeline":
        settings = settings or get_settings()
        fallback = None
        if settings.synthetic_fallback_enabled:
            fallback = SimulatedObservationGenerator(seed=settings.synthetic_seed)

        return cls(
            anomaly_detector=AnomalyDetector(
                night_start_hour=settings.night_start_hour,
                night_end_hour=settings.night_end_hour,
                repeated_threshold=settings.repeated_activity_threshold,
                long_duration_minutes=settings.long_duration_minutes,
            ),
            fallback=fallback,
            clock=clock,
        )

    def analyze(
        self,
        observations: Sequence[Observation],
        metadata: VideoMetadata,
    ) -> AnalysisReport:
        """Analyze observations, substituting synthetic ones if there are none."""
        if observations:
            return self._run(list(observations), metadata, synthetic=False)
        return self._run_fallback(metadata, reason="no_observations")

    def analyze_source(
        self,
        source: ObservationSource,
        metadata: VideoMetadata,
    ) -> AnalysisReport:
        """
        Like analyze(), but tells "nothing happened" apart from "detection
        failed": an empty Observations is reported as-is, only Unavailable
        falls back to synthetic data.
        """
        if isinstance(source, Unavailable):
            return self._run_fallback(metadata, reason=source.reason)
        if isinstance(source, Observations):
            return self._run(list(source.observations), metadata, synthetic=False)
        raise TypeError(f"Unsupported observation source: {type(source).__name__}")

    def _run_fallback(self, metadata: VideoMetadata, reason: str) -> AnalysisReport:
        if self.fallback is None:
            raise EmptyInputError(
                f"No observations for {metadata.filename} ({reason}) "
                "and no synthetic fallback configured"
            )

        observations = self.fallback.generate(metadata)
        self.logger.warning(
            "synthetic_fallback_used",
            video=metadata.filename,
            reason=reason,
            generated=len(observations),
        )
        return self._run(observations, metadata, synthetic=True)

    def _run(
        self,
        observations: list[Observation],
        metadata: VideoMetadata,
        synthetic: bool,
    ) -> AnalysisReport:
        started = self.clock()

        events = self.grouper.build(observations, metadata.start_time)
        priority_events = self.priority_builder.build_from_observations(
            observations, metadata.start_time
        )
        anomalies = self.anomaly_detector.detect(observations, priority_events)
        time_patterns = analyze_time_patterns(observations)

        analysis_seconds = max(self.clock() - started, 0.0)
        text = render_report(
            metadata=metadata,
            observation_count=len(observations),
            priority_events=priority_events,
            anomalies=anomalies,
            time_patterns=time_patterns,
            analysis_seconds=analysis_seconds,
            synthetic=synthetic,
        )

        self.logger.info(
            "analysis_completed",
            video=metadata.filename,
            observations=len(observations),
            events=len(events),
            priority_events=len(priority_events),
            anomalies=len(anomalies),
            synthetic=synthetic,
        )

        return AnalysisReport(
            metadata=metadata,
            observations=observations,
            events=events,
            priority_events=priority_events,
            anomalies=anomalies,
            time_patterns=time_patterns,
            analysis_seconds=analysis_seconds,
            synthetic=synthetic,
            text=text,
        )


def analyze(
    observations: Sequence[Observation],
    metadata: VideoMetadata,
    pipeline: Optional[ReportPipeline] = None,
) -> AnalysisReport:
    """Single entry point: run the full pipeline with settings-driven defaults."""
    pipeline = pipeline or ReportPipeline.from_settings()
    return pipeline.analyze(observations, metadata)
