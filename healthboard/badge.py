"""SVG badges that show the uptime or response time of an endpoint."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

BADGE_COLOR_AWESOME = "#40cc11"
BADGE_COLOR_GREAT = "#94cc11"
BADGE_COLOR_GOOD = "#ccd311"
BADGE_COLOR_PASSABLE = "#ccb311"
BADGE_COLOR_BAD = "#cc8111"
BADGE_COLOR_VERY_BAD = "#c7130a"

SUPPORTED_DURATIONS_MESSAGE = "Durations supported: 7d, 24h, 1h"

# Metrics are stored by hour, so the "1h" badge looks two hours back.
_LOOKBACK = {
    "7d": timedelta(days=7),
    "24h": timedelta(hours=24),
    "1h": timedelta(hours=2),
}

_UPTIME_LABEL_WIDTHS = {"7d": 65, "24h": 70, "1h": 65}
_RESPONSE_TIME_LABEL_WIDTHS = {"7d": 105, "24h": 110, "1h": 105}

_UPTIME_THRESHOLDS = (
    (0.975, BADGE_COLOR_AWESOME),
    (0.95, BADGE_COLOR_GREAT),
    (0.9, BADGE_COLOR_GOOD),
    (0.8, BADGE_COLOR_PASSABLE),
    (0.65, BADGE_COLOR_BAD),
)

_RESPONSE_TIME_THRESHOLDS = (
    (50, BADGE_COLOR_AWESOME),
    (200, BADGE_COLOR_GREAT),
    (300, BADGE_COLOR_GOOD),
    (500, BADGE_COLOR_PASSABLE),
    (750, BADGE_COLOR_BAD),
)


class UnsupportedDurationError(ValueError):
    """Raised when a badge is requested for a duration that is not supported."""

    def __init__(self, duration: str) -> None:
        super().__init__(SUPPORTED_DURATIONS_MESSAGE)
        self.duration = duration


def badge_time_range(duration: str, now: datetime | None = None) -> tuple[datetime, datetime]:
    """Return the ``(start, end)`` range of data a badge for ``duration`` covers."""
    try:
        lookback = _LOOKBACK[duration]
    except KeyError:
        raise UnsupportedDurationError(duration) from None
    if now is None:
        now = datetime.now(timezone.utc)
    return now - lookback, now


def uptime_badge_color(uptime: float) -> str:
    """Return the badge colour for an uptime between 0 and 1."""
    for threshold, color in _UPTIME_THRESHOLDS:
        if uptime >= threshold:
            return color
    return BADGE_COLOR_VERY_BAD


def response_time_badge_color(response_time: int) -> str:
    """Return the badge colour for a response time in milliseconds."""
    for threshold, color in _RESPONSE_TIME_THRESHOLDS:
        if response_time <= threshold:
            return color
    return BADGE_COLOR_VERY_BAD


def _format_uptime(uptime: float) -> str:
    return f"{uptime * 100:.2f}".rstrip("0").rstrip(".") + "%"


def _render_badge(label: str, label_width: int, value: str, value_width: int, color: str) -> str:
    width = label_width + value_width
    label_x = label_width // 2
    value_x = label_width + value_width // 2
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="20">
  <linearGradient id="b" x2="0" y2="100%">
    <stop offset="0" stop-color="#bbb" stop-opacity=".1"/>
    <stop offset="1" stop-opacity=".1"/>
  </linearGradient>
  <mask id="a">
    <rect width="{width}" height="20" rx="3" fill="#fff"/>
  </mask>
  <g mask="url(#a)">
    <path fill="#555" d="M0 0h{label_width}v20H0z"/>
    <path fill="{color}" d="M{label_width} 0h{value_width}v20H{label_width}z"/>
    <path fill="url(#b)" d="M0 0h{width}v20H0z"/>
  </g>
  <g fill="#fff" text-anchor="middle" font-family="DejaVu Sans,Verdana,Geneva,sans-serif" font-size="11">
    <text x="{label_x}" y="15" fill="#010101" fill-opacity=".3">
      {label}
    </text>
    <text x="{label_x}" y="14">
      {label}
    </text>
    <text x="{value_x}" y="15" fill="#010101" fill-opacity=".3">
      {value}
    </text>
    <text x="{value_x}" y="14">
      {value}
    </text>
  </g>
</svg>"""


def uptime_badge_svg(duration: str, uptime: float) -> str:
    """Render the uptime badge for ``duration`` and an uptime between 0 and 1."""
    label_width = _UPTIME_LABEL_WIDTHS.get(duration, 0)
    value = _format_uptime(uptime)
    adjustment = -10 if "." in value else 0
    value_width = len(value) * 11 + adjustment
    return _render_badge(
        f"uptime {duration}", label_width, value, value_width, uptime_badge_color(uptime)
    )


def response_time_badge_svg(duration: str, average_response_time: int) -> str:
    """Render the response time badge for ``duration`` and a time in milliseconds."""
    label_width = _RESPONSE_TIME_LABEL_WIDTHS.get(duration, 0)
    value = f"{average_response_time}ms"
    value_width = len(value) * 11
    return _render_badge(
        f"response time {duration}",
        label_width,
        value,
        value_width,
        response_time_badge_color(average_response_time),
    )