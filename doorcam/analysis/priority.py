from datetime import datetime
from typing import Optional, Sequence

from doorcam.analysis.formatting import format_event_time, format_minutes
from doorcam.analysis.grouping import (
    Bucket,
    describe,
    group_by_category_and_hour,
    observation_category,
)
from doorcam.analysis.models import (
    EventCategory,
    EventRecord,
    Observation,
    PriorityEvent,
    Severity,
)
from doorcam.core.logging import get_logger


# How much a category matters on its own, on the same 0-10 scale as the
# confidence and frequency components of the score.
TYPE_WEIGHTS = {
    EventCategory.PERSON:   8,
    EventCategory.VEHICLE:  6,
    EventCategory.PACKAGE:  5,
    EventCategory.MOVEMENT: 4,
    EventCategory.ANIMAL:   3,
}
DEFAULT_TYPE_WEIGHT = 5

HIGH_SEVERITY_SCORE = 8.0
MEDIUM_SEVERITY_SCORE = 5.0


def type_weight(category: EventCategory) -> int:
    return TYPE_WEIGHTS.get(category, DEFAULT_TYPE_WEIGHT)


def severity_score(category: EventCategory, confidence: float, frequency: int) -> float:
    """
    Average of three 0-10 components:
      confidence * 10, frequency * 2 (capped at 10), category weight.
    """
    base = confidence * 10
    frequency_score = min(frequency * 2, 10)
    return (base + frequency_score + type_weight(category)) / 3


def score_to_severity(score: float) -> Severity:
    if score >= HIGH_SEVERITY_SCORE:
        return Severity.HIGH
    if score >= MEDIUM_SEVERITY_SCORE:
        return Severity.MEDIUM
    return Severity.LOW


def _member_description(member, category: EventCategory, start_time: Optional[datetime]) -> str:
    if isinstance(member, EventRecord):
        return member.description
    return describe(category, member.timestamp, start_time)


class PriorityEventBuilder:
    """
    Turns (category, hour) buckets into severity-scored PriorityEvents.

    Works on raw observations (each detection counts towards frequency) or
    on already-grouped EventRecords; the bucket key and the statistics are
    the same either way. Output keeps bucket order; sorting for display
    is the renderer's job.
    """

    def __init__(self):
        self.logger = get_logger()

    def build_from_observations(
        self,
        observations: Sequence[Observation],
        start_time: Optional[datetime] = None,
    ) -> list[PriorityEvent]:
        return self._build(
            group_by_category_and_hour(observations, observation_category), start_time
        )

    def build_from_records(
        self,
        records: Sequence[EventRecord],
        start_time: Optional[datetime] = None,
    ) -> list[PriorityEvent]:
        return self._build(
            group_by_category_and_hour(records, lambda r: r.category), start_time
        )

    def _build(self, buckets: list[Bucket], start_time: Optional[datetime]) -> list[PriorityEvent]:
        events = [self._to_priority_event(bucket, start_time) for bucket in buckets]

        self.logger.debug(
            "priority_events_built",
            total=len(events),
            high=sum(1 for e in events if e.severity == Severity.HIGH),
            medium=sum(1 for e in events if e.severity == Severity.MEDIUM),
            low=sum(1 for e in events if e.severity == Severity.LOW),
        )
        return events

    def _to_priority_event(self, bucket: Bucket, start_time: Optional[datetime]) -> PriorityEvent:
        confidence = bucket.confidence
        return PriorityEvent(
            timestamp=bucket.start,
            category=bucket.category,
            description=self._build_description(bucket, start_time),
            confidence=confidence,
            frequency=bucket.size,
            duration=bucket.span,
            severity=score_to_severity(
                severity_score(bucket.category, confidence, bucket.size)
            ),
        )

    def _build_description(self, bucket: Bucket, start_time: Optional[datetime]) -> str:
        first = _member_description(bucket.first, bucket.category, start_time)
        if bucket.size == 1:
            return first

        return (
            f"{bucket.size} {bucket.category.value} detections from "
            f"{format_event_time(bucket.start, start_time)} to "
            f"{format_event_time(bucket.end, start_time)} "
            f"over {format_minutes(bucket.span)} min. "
            f"Main activity: {first}"
        )
