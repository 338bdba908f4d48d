"""Maintenance windows during which no alerts are sent (all times in UTC)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

LONG_DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

_ONE_DAY = timedelta(hours=24)
_INTEGER = re.compile(r"[+-]?[0-9]+")

INVALID_START_FORMAT = (
    "invalid maintenance start format: must be hh:mm, "
    "between 00:00 and 23:59 inclusively (e.g. 23:00)"
)
INVALID_DURATION = "invalid maintenance duration: must be bigger than 0 (e.g. 30m)"
INVALID_DAY_NAME = (
    "invalid value specified for 'on'. supported values are "
    f"[{' '.join(LONG_DAY_NAMES)}]"
)


class MaintenanceError(ValueError):
    """Raised when a maintenance configuration is invalid."""


def _parse_int(text: str) -> int:
    digits = text.removeprefix("0")
    if not _INTEGER.fullmatch(digits):
        raise MaintenanceError(f"parsing {digits!r}: invalid syntax")
    return int(digits)


def parse_hhmm(value: str) -> timedelta:
    """Turn an ``hh:mm`` string into the time elapsed since midnight."""
    if len(value) != 5:
        raise MaintenanceError(INVALID_START_FORMAT)
    hours = _parse_int(value[:2])
    minutes = _parse_int(value[3:5])
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise MaintenanceError(INVALID_START_FORMAT)
    return timedelta(hours=hours, minutes=minutes)


def _as_utc(moment: datetime | None) -> datetime:
    if moment is None:
        return datetime.now(timezone.utc)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _day_name(moment: datetime) -> str:
    return LONG_DAY_NAMES[(moment.weekday() + 1) % 7]


@dataclass
class MaintenanceConfig:
    """A recurring maintenance period; enabled unless ``enabled`` is False."""

    enabled: bool | None = None
    start: str = ""
    duration: timedelta = timedelta(0)
    every: list[str] = field(default_factory=list)
    _start_offset: timedelta = field(
        default=timedelta(0), init=False, repr=False, compare=False
    )

    def is_enabled(self) -> bool:
        return True if self.enabled is None else self.enabled

    def validate_and_set_defaults(self) -> None:
        """Validate the configuration; must run before is_under_maintenance."""
        if not self.is_enabled():
            return
        if any(day not in LONG_DAY_NAMES for day in self.every):
            raise MaintenanceError(INVALID_DAY_NAME)
        self._start_offset = parse_hhmm(self.start)
        if self.duration <= timedelta(0) or self.duration >= _ONE_DAY:
            raise MaintenanceError(INVALID_DURATION)

    def is_under_maintenance(self, now: datetime | None = None) -> bool:
        """Whether ``now`` (default: the current time) falls in the window."""
        if not self.is_enabled():
            return False
        now = _as_utc(now)
        start_hour = int(self._start_offset.total_seconds() // 3600)
        if now.hour >= start_hour:
            day = _midnight(now)
        else:
            day = _midnight(now - self.duration)
        if self.every and _day_name(day) not in self.every:
            return False
        start = day + self._start_offset
        end = start + self.duration
        return start < now < end


def default_maintenance_config() -> MaintenanceConfig:
    """Return a maintenance configuration that is disabled."""
    return MaintenanceConfig(enabled=False)