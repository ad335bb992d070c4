from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


SECONDS_PER_HOUR = 3600


class EventCategory(Enum):
    """Semantic event categories. MOVEMENT is the catch-all."""
    PERSON = "person"
    VEHICLE = "vehicle"
    ANIMAL = "animal"
    PACKAGE = "package"
    MOVEMENT = "movement"


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AnomalyKind(Enum):
    NIGHT_ACTIVITY = "night_activity"
    REPEATED_ACTIVITY = "repeated_activity"
    LONG_DURATION = "long_duration"
    # Reserved: no rule emits this yet
    UNUSUAL_PATTERN = "unusual_pattern"


def hour_of(seconds: float) -> int:
    """Hour-of-day (0-23) of an offset from the start of the video."""
    return int(seconds // SECONDS_PER_HOUR) % 24


@dataclass(frozen=True)
class Observation:
    """
    One detection from the external detector.
    timestamp is seconds since the start of the video.
    """
    label: str                  # raw detector label: "person", "car", ...
    confidence: float           # 0.0 - 1.0
    timestamp: float

    @property
    def hour(self) -> int:
        return hour_of(self.timestamp)


@dataclass(frozen=True)
class EventRecord:
    """One (category, hour) bucket of observations merged into a single activity."""
    timestamp: float
    category: EventCategory
    description: str
    confidence: float
    source_labels: frozenset = field(default_factory=frozenset)

    @property
    def hour(self) -> int:
        return hour_of(self.timestamp)


@dataclass(frozen=True)
class PriorityEvent:
    """
    A ranked summary of one (category, hour) bucket.
    duration is last - first member timestamp, 0.0 for single-member buckets.
    """
    timestamp: float
    category: EventCategory
    description: str
    confidence: float
    frequency: int
    duration: float
    severity: Severity


@dataclass(frozen=True)
class Anomaly:
    kind: AnomalyKind
    description: str
    timestamp: float
    severity: Severity


@dataclass(frozen=True)
class TimePattern:
    hour: int
    event_count: int
    dominant_category: EventCategory
    average_confidence: float


@dataclass(frozen=True)
class VideoMetadata:
    filename: str
    duration_seconds: float = 0.0
    width: int = 0
    height: int = 0
    frame_rate: float = 0.0
    frames_analyzed: int = 0
    # Wall-clock time of the first frame, if known
    start_time: Optional[datetime] = None


@dataclass(frozen=True)
class AnalysisReport:
    """Everything one analysis run produced, plus the rendered text."""
    metadata: VideoMetadata
    observations: list[Observation]
    events: list[EventRecord]
    priority_events: list[PriorityEvent]
    anomalies: list[Anomaly]
    time_patterns: list[TimePattern]
    analysis_seconds: float
    synthetic: bool
    text: str
