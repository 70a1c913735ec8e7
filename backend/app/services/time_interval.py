"""Weekly recurring time spans and the wall-clock conversions at the API edge.

Inside the scheduler every time is a naive ``datetime.time`` in the
institution's zone. Offsets supplied by clients are resolved exactly once,
in :func:`parse_wall_clock`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from app.core.exceptions import InvalidIntervalError
from app.models.meeting import Weekday

WEEKDAY_ORDER: dict[Weekday, int] = {day: index for index, day in enumerate(Weekday)}

WALL_CLOCK_PATTERN = re.compile(
    r"^(?P<hour>[01]?\d|2[0-3]):(?P<minute>[0-5]\d)(?::(?P<second>[0-5]\d))?"
    r"(?P<offset>Z|[+-](?:[01]\d|2[0-3])(?::?[0-5]\d)?)?$"
)


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


@dataclass(frozen=True)
class TimeInterval:
    day: Weekday
    start: time
    end: time

    def __post_init__(self) -> None:
        # Meetings are scheduled to the minute; stored seconds are dropped.
        object.__setattr__(self, "start", self.start.replace(second=0, microsecond=0, tzinfo=None))
        object.__setattr__(self, "end", self.end.replace(second=0, microsecond=0, tzinfo=None))
        if _minutes(self.start) >= _minutes(self.end):
            raise InvalidIntervalError(self.day, self.start, self.end)

    @property
    def duration_minutes(self) -> int:
        return _minutes(self.end) - _minutes(self.start)

    def overlaps(self, other: TimeInterval) -> bool:
        return overlaps(self, other)

    def sort_key(self) -> tuple[int, int, int]:
        return WEEKDAY_ORDER[self.day], _minutes(self.start), _minutes(self.end)


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    # Touching endpoints share no time; identical slots do.
    if a.day != b.day:
        return False
    return _minutes(a.start) < _minutes(b.end) and _minutes(b.start) < _minutes(a.end)


def _parse_offset(raw: str) -> timezone:
    if raw == "Z":
        return timezone.utc
    sign = -1 if raw[0] == "-" else 1
    digits = raw[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_wall_clock(value: str, zone: ZoneInfo, on: date | None = None) -> time:
    """Parse ``"HH:MM"``/``"HH:MM:SS"`` with an optional UTC offset.

    Values with an offset are converted into ``zone`` using the offset that
    applies on ``on`` (today by default); values without one are returned
    as-is. A seconds field is accepted only when it is zero.
    """
    match = WALL_CLOCK_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid time {value!r}; expected HH:MM or HH:MM:SS")
    if int(match.group("second") or 0):
        raise ValueError(f"Invalid time {value!r}; meetings start and end on a whole minute")
    parsed = time(int(match.group("hour")), int(match.group("minute")))
    raw_offset = match.group("offset")
    if raw_offset is None:
        return parsed
    reference = on or datetime.now(zone).date()
    aware = datetime.combine(reference, parsed, tzinfo=_parse_offset(raw_offset))
    return aware.astimezone(zone).time().replace(tzinfo=None)


def format_wall_clock(value: time) -> str:
    return value.strftime("%H:%M:%S")


def format_display(value: time) -> str:
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {meridiem}"
