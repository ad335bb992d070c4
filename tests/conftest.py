import pytest

from doorcam.analysis.models import Observation, VideoMetadata


def at(hours: int, minutes: int = 0, seconds: int = 0) -> float:
    """Offset in seconds from the start of the video."""
    return float(hours * 3600 + minutes * 60 + seconds)


@pytest.fixture
def make_obs():
    def _make(label: str, confidence: float, hours: int, minutes: int = 0, seconds: int = 0):
        return Observation(label=label, confidence=confidence, timestamp=at(hours, minutes, seconds))
    return _make


@pytest.fixture
def fixed_clock():
    return lambda: 0.0


@pytest.fixture
def metadata():
    return VideoMetadata(
        filename="front_door.mp4",
        duration_seconds=3900.0,
        width=1920,
        height=1080,
        frame_rate=30.0,
        frames_analyzed=1950,
    )


@pytest.fixture
def example_observations(make_obs):
    return [
        make_obs("person", 0.9, 6, 5),
        make_obs("person", 0.8, 6, 8),
        make_obs("car", 0.7, 9, 0),
    ]
