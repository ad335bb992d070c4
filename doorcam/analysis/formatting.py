from datetime import datetime, timedelta
from typing import Optional

from doorcam.analysis.models import hour_of


def format_clock(seconds: float, with_seconds: bool = False) -> str:
    """
    Render an offset from the start of the video as a time of day.
    Hours wrap at 24, matching hour_of().
    """
    total = int(seconds)
    hh = hour_of(seconds)
    mm = (total // 60) % 60
    if with_seconds:
        return f"{hh:02d}:{mm:02d}:{total % 60:02d}"
    return f"{hh:02d}:{mm:02d}"


def format_event_time(
    seconds: float,
    start_time: Optional[datetime] = None,
    with_seconds: bool = True,
) -> str:
    """Time of an event, anchored to the video's wall-clock start when known."""
    if start_time is None:
        return format_clock(seconds, with_seconds=with_seconds)
    moment = start_time + timedelta(seconds=seconds)
    return moment.strftime("%H:%M:%S" if with_seconds else "%H:%M")


def format_minutes(seconds: float) -> str:
    return f"{seconds / 60:.1f}"
