from datetime import datetime, timedelta, timezone

import pytest

from healthboard.badge import (
    BADGE_COLOR_AWESOME,
    BADGE_COLOR_BAD,
    BADGE_COLOR_GOOD,
    BADGE_COLOR_GREAT,
    BADGE_COLOR_PASSABLE,
    BADGE_COLOR_VERY_BAD,
    SUPPORTED_DURATIONS_MESSAGE,
    UnsupportedDurationError,
    badge_time_range,
    response_time_badge_color,
    response_time_badge_svg,
    uptime_badge_color,
    uptime_badge_svg,
)

NOW = datetime(2021, 12, 1, 12, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "uptime, expected",
    [
        (1, BADGE_COLOR_AWESOME),
        (0.99, BADGE_COLOR_AWESOME),
        (0.97, BADGE_COLOR_GREAT),
        (0.95, BADGE_COLOR_GREAT),
        (0.93, BADGE_COLOR_GOOD),
        (0.9, BADGE_COLOR_GOOD),
        (0.85, BADGE_COLOR_PASSABLE),
        (0.7, BADGE_COLOR_BAD),
        (0.65, BADGE_COLOR_BAD),
        (0.6, BADGE_COLOR_VERY_BAD),
    ],
)
def test_uptime_badge_color(uptime, expected):
    assert uptime_badge_color(uptime) == expected


@pytest.mark.parametrize(
    "response_time, expected",
    [
        (10, BADGE_COLOR_AWESOME),
        (50, BADGE_COLOR_AWESOME),
        (75, BADGE_COLOR_GREAT),
        (150, BADGE_COLOR_GREAT),
        (201, BADGE_COLOR_GOOD),
        (300, BADGE_COLOR_GOOD),
        (301, BADGE_COLOR_PASSABLE),
        (450, BADGE_COLOR_PASSABLE),
        (700, BADGE_COLOR_BAD),
        (1500, BADGE_COLOR_VERY_BAD),
    ],
)
def test_response_time_badge_color(response_time, expected):
    assert response_time_badge_color(response_time) == expected


@pytest.mark.parametrize(
    "duration, lookback",
    [
        ("7d", timedelta(days=7)),
        ("24h", timedelta(hours=24)),
        ("1h", timedelta(hours=2)),
    ],
)
def test_badge_time_range(duration, lookback):
    assert badge_time_range(duration, NOW) == (NOW - lookback, NOW)


def test_badge_time_range_defaults_to_current_time():
    start, end = badge_time_range("24h")
    assert end - start == timedelta(hours=24)
    assert abs(datetime.now(timezone.utc) - end) < timedelta(minutes=1)


def test_badge_time_range_rejects_unsupported_duration():
    with pytest.raises(UnsupportedDurationError) as info:
        badge_time_range("3d", NOW)
    assert str(info.value) == SUPPORTED_DURATIONS_MESSAGE
    assert info.value.duration == "3d"


@pytest.mark.parametrize(
    "uptime, text",
    [
        (1.0, "100%"),
        (0.5, "50%"),
        (0.995, "99.5%"),
        (0.0, "0%"),
        (0.1234, "12.34%"),
    ],
)
def test_uptime_badge_value_text(uptime, text):
    svg = uptime_badge_svg("24h", uptime)
    assert f"      {text}\n" in svg
    assert "uptime 24h" in svg


def test_uptime_badge_uses_color_and_label_width():
    svg = uptime_badge_svg("7d", 0.6)
    assert f'fill="{BADGE_COLOR_VERY_BAD}"' in svg
    assert 'd="M0 0h65v20H0z"' in svg
    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
    assert svg.endswith("</svg>")
    assert 'y2="100%"' in svg


def test_uptime_badge_total_width_is_label_plus_value():
    svg = uptime_badge_svg("24h", 1.0)
    # label 70 for 24h, value "100%" is four characters of width 11
    assert 'width="114" height="20"' in svg


def test_response_time_badge():
    svg = response_time_badge_svg("1h", 150)
    assert "response time 1h" in svg
    assert "      150ms\n" in svg
    assert f'fill="{BADGE_COLOR_GREAT}"' in svg
    assert 'd="M0 0h105v20H0z"' in svg


def test_response_time_badge_label_width_for_24h():
    svg = response_time_badge_svg("24h", 1000)
    assert 'd="M0 0h110v20H0z"' in svg
    assert f'fill="{BADGE_COLOR_VERY_BAD}"' in svg