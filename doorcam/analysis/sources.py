from dataclasses import dataclass, field
from typing import Union

from doorcam.analysis.models import Observation


@dataclass(frozen=True)
class Observations:
    """Detection ran. An empty list means the camera saw nothing."""
    observations: list[Observation] = field(default_factory=list)


@dataclass(frozen=True)
class Unavailable:
    """Detection could not run (bad video, missing model, ...)."""
    reason: str


ObservationSource = Union[Observations, Unavailable]
