import random
from typing import Optional, Protocol, Sequence

from doorcam.analysis.models import Observation, VideoMetadata, hour_of


class SyntheticObservationGenerator(Protocol):
    """Supplies stand-in observations when detection produced none."""

    def generate(self, metadata: VideoMetadata) -> list[Observation]:
        ...


class FixedObservationGenerator:
    """Always returns the same observations. Handy for tests and demos."""

    def __init__(self, observations: Sequence[Observation]):
        self._observations = list(observations)

    def generate(self, metadata: VideoMetadata) -> list[Observation]:
        return list(self._observations)


class SimulatedObservationGenerator:
    """
    Simulated door-camera activity.

    With a known video duration, frames are "sampled" every 2s (3s for
    videos over an hour) and each sample rolls for hour-dependent
    detections:
      person  30%  between 06h and 22h, confidence 0.7-1.0
      car     20%  between 08h and 18h, confidence 0.6-1.0
      cat/dog 10%  any hour,            confidence 0.5-0.8
      bag     15%  any hour,            confidence 0.6-0.9

    Without a duration, 3-8 events are scattered across 06:00-22:00.

    The same seed always produces the same sequence; seed=None is random.
    """

    ANIMALS = ("cat", "dog")
    PACKAGES = ("backpack", "handbag", "suitcase")
    # One label per category; bicycle is outside the classifier table, so MOVEMENT
    DAYTIME_LABELS = ("person", "car", "cat", "backpack", "bicycle")

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed

    def generate(self, metadata: VideoMetadata) -> list[Observation]:
        rng = random.Random(self.seed)
        if metadata.duration_seconds > 0:
            return self._sample_frames(rng, metadata.duration_seconds)
        return self._scatter_over_day(rng)

    def _sample_frames(self, rng: random.Random, duration: float) -> list[Observation]:
        interval = 3.0 if duration > 3600 else 2.0
        observations = []
        second = 0.0
        while second < duration:
            observations.extend(self._detect_at(rng, second))
            second += interval
        return observations

    def _detect_at(self, rng: random.Random, second: float) -> list[Observation]:
        hour = hour_of(second)
        found = []

        if 6 <= hour <= 22 and rng.random() < 0.3:
            found.append(Observation("person", 0.7 + rng.random() * 0.3, second))

        if 8 <= hour <= 18 and rng.random() < 0.2:
            found.append(Observation("car", 0.6 + rng.random() * 0.4, second))

        if rng.random() < 0.1:
            found.append(Observation(rng.choice(self.ANIMALS), 0.5 + rng.random() * 0.3, second))

        if rng.random() < 0.15:
            found.append(Observation(rng.choice(self.PACKAGES), 0.6 + rng.random() * 0.3, second))

        return found

    def _scatter_over_day(self, rng: random.Random) -> list[Observation]:
        start = 6 * 3600
        window_minutes = 16 * 60
        observations = [
            Observation(
                label=rng.choice(self.DAYTIME_LABELS),
                confidence=0.7 + rng.random() * 0.3,
                timestamp=float(start + rng.randrange(window_minutes) * 60),
            )
            for _ in range(rng.randint(3, 8))
        ]
        return sorted(observations, key=lambda o: o.timestamp)
