from dataclasses import replace
from datetime import datetime

import pytest

from doorcam.analysis.models import EventCategory, Observation, Severity
from doorcam.analysis.pipeline import ReportPipeline, analyze
from doorcam.analysis.sources import Observations, Unavailable
from doorcam.analysis.synthetic import FixedObservationGenerator, SimulatedObservationGenerator
from doorcam.core.config import Settings
from doorcam.core.exceptions import EmptyInputError


FALLBACK = [
    Observation("person", 0.8, 8 * 3600.0),
    Observation("dog", 0.6, 8 * 3600.0 + 30),
]


@pytest.fixture
def pipeline(fixed_clock):
    return ReportPipeline(fallback=FixedObservationGenerator(FALLBACK), clock=fixed_clock)


def test_end_to_end_example(pipeline, example_observations, metadata):
    report = pipeline.analyze(example_observations, metadata)

    assert [(r.category, r.hour) for r in report.events] == [
        (EventCategory.PERSON, 6),
        (EventCategory.VEHICLE, 9),
    ]
    person = report.priority_events[0]
    assert person.frequency == 2
    assert person.duration == pytest.approx(180.0)
    assert person.confidence == pytest.approx(0.85)
    assert person.severity == Severity.MEDIUM

    assert [(p.hour, p.dominant_category) for p in report.time_patterns] == [
        (6, EventCategory.PERSON),
        (9, EventCategory.VEHICLE),
    ]
    assert report.anomalies == []
    assert report.synthetic is False
    assert report.analysis_seconds == 0.0
    assert "- Total observations: 3" in report.text
    assert "- Analysis time: 0.0s" in report.text


def test_analyze_is_deterministic(pipeline, example_observations, metadata):
    first = pipeline.analyze(example_observations, metadata)
    second = pipeline.analyze(list(example_observations), metadata)
    assert first.text == second.text
    assert first == second


def test_analysis_time_comes_from_clock(example_observations, metadata):
    ticks = iter([10.0, 12.5])
    report = ReportPipeline(clock=lambda: next(ticks)).analyze(example_observations, metadata)

    assert report.analysis_seconds == pytest.approx(2.5)
    assert "- Analysis time: 2.5s" in report.text


def test_empty_input_uses_fallback(pipeline, metadata):
    report = pipeline.analyze([], metadata)

    assert report.synthetic is True
    assert report.observations == FALLBACK
    assert len(report.priority_events) == 2
    assert "simulated activity" in report.text


def test_empty_input_without_fallback_raises(fixed_clock, metadata):
    with pytest.raises(EmptyInputError):
        ReportPipeline(clock=fixed_clock).analyze([], metadata)


def test_source_with_no_observations_is_reported_as_quiet(pipeline, metadata):
    report = pipeline.analyze_source(Observations([]), metadata)

    assert report.synthetic is False
    assert report.observations == []
    assert report.priority_events == []
    assert report.time_patterns == []
    assert "- Total observations: 0" in report.text


def test_unavailable_source_uses_fallback(pipeline, metadata):
    report = pipeline.analyze_source(Unavailable(reason="model_unavailable: no weights"), metadata)

    assert report.synthetic is True
    assert report.observations == FALLBACK


def test_unavailable_source_without_fallback_raises(fixed_clock, metadata):
    with pytest.raises(EmptyInputError, match="model_unavailable"):
        ReportPipeline(clock=fixed_clock).analyze_source(Unavailable("model_unavailable"), metadata)


def test_source_with_observations(pipeline, example_observations, metadata):
    from_source = pipeline.analyze_source(Observations(example_observations), metadata)
    direct = pipeline.analyze(example_observations, metadata)
    assert from_source.text == direct.text


def test_from_settings_wires_thresholds_and_fallback(fixed_clock):
    settings = Settings(
        REPEATED_ACTIVITY_THRESHOLD=5,
        LONG_DURATION_MINUTES=2.5,
        NIGHT_START_HOUR=21,
        NIGHT_END_HOUR=5,
        SYNTHETIC_SEED=7,
    )
    pipeline = ReportPipeline.from_settings(settings, clock=fixed_clock)

    assert pipeline.anomaly_detector.repeated_threshold == 5
    assert pipeline.anomaly_detector.long_duration_seconds == 150.0
    assert pipeline.anomaly_detector.night_start_hour == 21
    assert pipeline.anomaly_detector.night_end_hour == 5
    assert isinstance(pipeline.fallback, SimulatedObservationGenerator)
    assert pipeline.fallback.seed == 7


def test_from_settings_without_fallback(fixed_clock, metadata):
    settings = Settings(SYNTHETIC_FALLBACK_ENABLED=False)
    pipeline = ReportPipeline.from_settings(settings, clock=fixed_clock)

    assert pipeline.fallback is None
    with pytest.raises(EmptyInputError):
        pipeline.analyze([], metadata)


def test_module_level_analyze(pipeline, example_observations, metadata):
    report = analyze(example_observations, metadata, pipeline=pipeline)
    assert len(report.priority_events) == 2


def test_seeded_fallback_gives_identical_reports(fixed_clock, metadata):
    def run():
        pipeline = ReportPipeline(fallback=SimulatedObservationGenerator(seed=42), clock=fixed_clock)
        return pipeline.analyze([], metadata)

    assert run().text == run().text


def test_event_rows_and_descriptions_share_the_wall_clock(pipeline, example_observations, metadata):
    anchored = replace(metadata, start_time=datetime(2024, 5, 1, 8, 0, 0))
    report = pipeline.analyze(example_observations, anchored)

    assert report.events[0].description == "person at the door at 14:05"
    assert (
        "14:05:00 - 2 person detections from 14:05:00 to 14:08:00 over 3.0 min. "
        "Main activity: person at the door at 14:05"
    ) in report.text
    assert "06:05" not in report.text
