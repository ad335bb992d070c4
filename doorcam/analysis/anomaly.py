from typing import Sequence

from doorcam.analysis.formatting import format_minutes
from doorcam.analysis.grouping import observation_category
from doorcam.analysis.models import (
    Anomaly,
    AnomalyKind,
    EventCategory,
    Observation,
    PriorityEvent,
    Severity,
)
from doorcam.core.logging import get_logger


class AnomalyDetector:
    """
    Rule-based anomaly checks over one analysis run.

    Rules are independent and order-insensitive:
    - night:    any observation before night_end_hour or after night_start_hour
                → one anomaly for the whole run
    - repeated: a category seen more than repeated_threshold times
                → one anomaly per category
    - long:     a priority event lasting more than long_duration_minutes
                → one anomaly per event
    A single observation may trigger several rules; nothing is deduplicated.
    """

    def __init__(
        self,
        night_start_hour: int = 22,
        night_end_hour: int = 6,
        repeated_threshold: int = 3,
        long_duration_minutes: float = 10.0,
    ):
        self.night_start_hour = night_start_hour
        self.night_end_hour = night_end_hour
        self.repeated_threshold = repeated_threshold
        self.long_duration_seconds = long_duration_minutes * 60
        self.logger = get_logger()

    def detect(
        self,
        observations: Sequence[Observation],
        priority_events: Sequence[PriorityEvent],
    ) -> list[Anomaly]:
        anomalies = []
        anomalies.extend(self._night_activity(observations))
        anomalies.extend(self._repeated_activity(observations))
        anomalies.extend(self._long_duration(priority_events))

        self.logger.debug(
            "anomalies_detected",
            total=len(anomalies),
            night=sum(1 for a in anomalies if a.kind == AnomalyKind.NIGHT_ACTIVITY),
            repeated=sum(1 for a in anomalies if a.kind == AnomalyKind.REPEATED_ACTIVITY),
            long=sum(1 for a in anomalies if a.kind == AnomalyKind.LONG_DURATION),
        )
        return anomalies

    def is_night(self, hour: int) -> bool:
        return hour < self.night_end_hour or hour > self.night_start_hour

    def _night_activity(self, observations: Sequence[Observation]) -> list[Anomaly]:
        night = [o for o in observations if self.is_night(o.hour)]
        if not night:
            return []

        first = min(night, key=lambda o: o.timestamp)
        return [Anomaly(
            kind=AnomalyKind.NIGHT_ACTIVITY,
            description=(
                f"{len(night)} activities detected at night "
                f"(first at {first.hour:02d}h)"
            ),
            timestamp=first.timestamp,
            severity=Severity.MEDIUM,
        )]

    def _repeated_activity(self, observations: Sequence[Observation]) -> list[Anomaly]:
        by_category: dict[EventCategory, list[Observation]] = {}
        for obs in observations:
            by_category.setdefault(observation_category(obs), []).append(obs)

        anomalies = []
        for category in EventCategory:
            members = by_category.get(category, [])
            if len(members) <= self.repeated_threshold:
                continue
            anomalies.append(Anomaly(
                kind=AnomalyKind.REPEATED_ACTIVITY,
                description=f"{category.value} activity repeated {len(members)} times",
                timestamp=min(o.timestamp for o in members),
                severity=Severity.LOW,
            ))
        return anomalies

    def _long_duration(self, priority_events: Sequence[PriorityEvent]) -> list[Anomaly]:
        return [
            Anomaly(
                kind=AnomalyKind.LONG_DURATION,
                description=(
                    f"{event.category.value} activity lasted "
                    f"{format_minutes(event.duration)} min"
                ),
                timestamp=event.timestamp,
                severity=Severity.MEDIUM,
            )
            for event in priority_events
            if event.duration > self.long_duration_seconds
        ]
