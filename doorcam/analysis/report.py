from typing import Sequence

from doorcam.analysis.formatting import format_event_time
from doorcam.analysis.models import (
    Anomaly,
    PriorityEvent,
    Severity,
    TimePattern,
    VideoMetadata,
)


REPORT_TITLE = "Door Camera Analysis Report"
RULE_WIDTH = 50

SEVERITY_GLYPHS = {
    Severity.HIGH:   "🔴",
    Severity.MEDIUM: "🟡",
    Severity.LOW:    "🟢",
}


def _fmt_length(seconds: float) -> str:
    total_minutes = int(seconds // 60)
    return f"{total_minutes // 60}h {total_minutes % 60}m"


def _fmt_priority_events(events: Sequence[PriorityEvent], metadata: VideoMetadata) -> list[str]:
    if not events:
        return ["  None"]
    ordered = sorted(events, key=lambda e: e.timestamp)
    return [
        f"{SEVERITY_GLYPHS[e.severity]} "
        f"{format_event_time(e.timestamp, metadata.start_time)} - {e.description}"
        for e in ordered
    ]


def _fmt_time_patterns(patterns: Sequence[TimePattern]) -> list[str]:
    lines = []
    for p in sorted(patterns, key=lambda p: p.hour):
        if p.event_count <= 0:
            continue
        lines.append(
            f"- {p.hour:02d}h: {p.event_count} events "
            f"(dominant: {p.dominant_category.value}, "
            f"avg confidence {p.average_confidence:.0%})"
        )
    return lines or ["  None"]


def render_report(
    metadata: VideoMetadata,
    observation_count: int,
    priority_events: Sequence[PriorityEvent],
    anomalies: Sequence[Anomaly],
    time_patterns: Sequence[TimePattern],
    analysis_seconds: float,
    synthetic: bool = False,
) -> str:
    """
    Render the textual security report.

    Pure: the same arguments always give the same string. Event times are
    shown as wall-clock times when metadata.start_time is set, otherwise as
    offsets into the video.
    """
    lines = [REPORT_TITLE, "=" * RULE_WIDTH]
    if synthetic:
        lines.append("NOTE: no detections were available; this report uses simulated activity.")
    lines.append("")

    lines += [
        "Video:",
        f"- File: {metadata.filename}",
        f"- Length: {_fmt_length(metadata.duration_seconds)}",
        f"- Resolution: {metadata.width}x{metadata.height}",
        f"- Frames analyzed: {metadata.frames_analyzed}",
        "",
    ]

    lines.append("Priority events:")
    lines += _fmt_priority_events(priority_events, metadata)
    lines.append("")

    if anomalies:
        lines.append("Anomalies:")
        lines += [f"{SEVERITY_GLYPHS[a.severity]} {a.description}" for a in anomalies]
        lines.append("")

    lines.append("Hourly activity:")
    lines += _fmt_time_patterns(time_patterns)
    lines.append("")

    lines += [
        "Statistics:",
        f"- Total observations: {observation_count}",
        f"- Priority events: {len(priority_events)}",
        f"- Anomalies: {len(anomalies)}",
        f"- Analysis time: {analysis_seconds:.1f}s",
    ]
    return "\n".join(lines) + "\n"
