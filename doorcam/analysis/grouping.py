from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from doorcam.analysis.classifier import classify
from doorcam.analysis.formatting import format_event_time
from doorcam.analysis.models import EventCategory, EventRecord, Observation, hour_of
from doorcam.core.logging import get_logger


# Per-category description templates. {time} is HH:MM of the bucket start.
DESCRIPTION_TEMPLATES = {
    EventCategory.PERSON:   "person at the door at {time}",
    EventCategory.VEHICLE:  "vehicle arrived at {time}",
    EventCategory.ANIMAL:   "animal passed by at {time}",
    EventCategory.PACKAGE:  "package spotted at {time}",
    EventCategory.MOVEMENT: "movement detected at {time}",
}

_CATEGORY_ORDER = {category: i for i, category in enumerate(EventCategory)}


def describe(category: EventCategory, seconds: float, start_time: Optional[datetime] = None) -> str:
    time = format_event_time(seconds, start_time, with_seconds=False)
    return DESCRIPTION_TEMPLATES[category].format(time=time)


def clamp_unit(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def mean_confidence(members: Iterable) -> float:
    values = [m.confidence for m in members]
    if not values:
        return 0.0
    return clamp_unit(sum(values) / len(values))


@dataclass(frozen=True)
class Bucket:
    """
    All members sharing one (category, hour) key.
    Members are sorted by timestamp, so members[0] is the earliest.
    """
    category: EventCategory
    hour: int
    members: tuple

    @property
    def first(self):
        return self.members[0]

    @property
    def start(self) -> float:
        return self.members[0].timestamp

    @property
    def end(self) -> float:
        return self.members[-1].timestamp

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def span(self) -> float:
        if self.size <= 1:
            return 0.0
        return self.end - self.start

    @property
    def confidence(self) -> float:
        return mean_confidence(self.members)


def group_by_category_and_hour(
    items: Iterable,
    category_of: Callable[[object], EventCategory],
) -> list[Bucket]:
    """
    Bucket anything with .timestamp and .confidence by (category, hour-of-day).

    Buckets come back ordered by hour, then by their earliest timestamp;
    category declaration order settles exact timestamp ties so the
    result does not depend on input order.
    """
    grouped: dict[tuple[EventCategory, int], list] = {}
    for item in items:
        key = (category_of(item), hour_of(item.timestamp))
        grouped.setdefault(key, []).append(item)

    buckets = [
        Bucket(
            category=category,
            hour=hour,
            members=tuple(sorted(members, key=lambda m: m.timestamp)),
        )
        for (category, hour), members in grouped.items()
    ]
    buckets.sort(key=lambda b: (b.hour, b.start, _CATEGORY_ORDER[b.category]))
    return buckets


def observation_category(observation: Observation) -> EventCategory:
    return classify(observation.label)


class EventGrouper:
    """Merges raw observations into one EventRecord per (category, hour) bucket."""

    def __init__(self):
        self.logger = get_logger()

    def build(
        self,
        observations: Sequence[Observation],
        start_time: Optional[datetime] = None,
    ) -> list[EventRecord]:
        buckets = group_by_category_and_hour(observations, observation_category)
        records = [self._to_record(bucket, start_time) for bucket in buckets]

        self.logger.debug(
            "events_grouped",
            observations=len(observations),
            events=len(records),
        )
        return records

    def _to_record(self, bucket: Bucket, start_time: Optional[datetime]) -> EventRecord:
        return EventRecord(
            timestamp=bucket.start,
            category=bucket.category,
            description=describe(bucket.category, bucket.start, start_time),
            confidence=bucket.confidence,
            source_labels=frozenset(m.label for m in bucket.members),
        )
