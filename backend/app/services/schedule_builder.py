from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import time

from sqlalchemy.orm import Session

from app.models.meeting import Weekday
from app.models.semester import Term
from app.services.meeting_store import MeetingStore, ScheduleEntry
from app.services.time_interval import WEEKDAY_ORDER, TimeInterval


@dataclass(frozen=True, order=True)
class ScheduleCourse:
    course_prefix: str
    course_number: str


@dataclass
class ScheduleBlock:
    """All courses meeting in one (day, start, end) slot of a term."""

    interval: TimeInterval
    term: Term
    academic_year: int
    courses: list[ScheduleCourse] = field(default_factory=list)

    @property
    def weekday(self) -> Weekday:
        return self.interval.day

    @property
    def start(self) -> time:
        return self.interval.start

    @property
    def end(self) -> time:
        return self.interval.end

    @property
    def duration_minutes(self) -> int:
        return self.interval.duration_minutes

    @property
    def course_prefix(self) -> str:
        return self.courses[0].course_prefix

    @property
    def id(self) -> str:
        """Stable block key, e.g. ``AMWED9051030FALL2026`` for AM at Wednesday 9:05-10:30.

        Minutes are zero-padded but hours are not, so ids differ from an
        ``HH24MI`` rendering for any block starting or ending before 10:00.
        """
        return (
            f"{self.course_prefix}{self.weekday.value}"
            f"{self.start.hour}{self.start.minute:02d}"
            f"{self.end.hour}{self.end.minute:02d}"
            f"{self.term.value}{self.academic_year}"
        )

    def sort_key(self) -> tuple:
        return (
            WEEKDAY_ORDER[self.weekday],
            self.start.hour,
            self.start.minute,
            self.duration_minutes,
            self.course_prefix,
        )


def group_schedule_blocks(entries: Iterable[ScheduleEntry], term: Term, academic_year: int) -> list[ScheduleBlock]:
    courses_by_slot: dict[TimeInterval, set[ScheduleCourse]] = {}
    for entry in entries:
        courses_by_slot.setdefault(entry.interval, set()).add(
            ScheduleCourse(entry.course_prefix, entry.course_number)
        )

    blocks = [
        ScheduleBlock(interval, term, academic_year, sorted(courses))
        for interval, courses in courses_by_slot.items()
        if courses
    ]
    blocks.sort(key=ScheduleBlock.sort_key)
    return blocks


def build_schedule(db: Session, term: Term, academic_year: int) -> list[ScheduleBlock]:
    return group_schedule_blocks(MeetingStore(db).schedule_entries(term, academic_year), term, academic_year)
