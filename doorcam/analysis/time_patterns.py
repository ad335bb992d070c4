from collections import Counter
from typing import Sequence

from doorcam.analysis.grouping import mean_confidence, observation_category
from doorcam.analysis.models import Observation, TimePattern


def analyze_time_patterns(observations: Sequence[Observation]) -> list[TimePattern]:
    """
    One TimePattern per hour-of-day that has observations, in hour order.
    Hours without activity are left out rather than zero-filled.

    The dominant category is the most frequent one in that hour; ties go to
    the category encountered first in the input.
    """
    by_hour: dict[int, list[Observation]] = {}
    for obs in observations:
        by_hour.setdefault(obs.hour, []).append(obs)

    patterns = []
    for hour in sorted(by_hour):
        members = by_hour[hour]
        # Counter.most_common keeps insertion order among equal counts
        counts = Counter(observation_category(o) for o in members)
        dominant, _ = counts.most_common(1)[0]
        patterns.append(TimePattern(
            hour=hour,
            event_count=len(members),
            dominant_category=dominant,
            average_confidence=mean_confidence(members),
        ))
    return patterns
