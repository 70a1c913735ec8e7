"""Read and write access to persisted meetings.

Everything the scheduling services know about the relational store goes
through :class:`MeetingStore`. Rows come back as plain frozen dataclasses so
that the services never hold ORM state between calls.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from app.core.exceptions import ParentNotFoundError, RoomNotFoundError
from app.models.course import Course
from app.models.course_instance import CourseInstance, OfferedStatus
from app.models.meeting import Meeting, Weekday
from app.models.non_class_event import NonClassEvent, NonClassParent
from app.models.room import Building, Room
from app.models.semester import Semester, Term
from app.services.time_interval import TimeInterval


class ParentKind(str, Enum):
    course_instance = "course-instance"
    non_class_event = "non-class-event"


@dataclass(frozen=True)
class ParentRef:
    kind: ParentKind
    id: str

    @classmethod
    def of(cls, meeting: Meeting) -> ParentRef:
        if meeting.course_instance_id is not None:
            return cls(ParentKind.course_instance, meeting.course_instance_id)
        return cls(ParentKind.non_class_event, meeting.non_class_event_id)


@dataclass(frozen=True)
class ParentInfo:
    ref: ParentRef
    title: str
    term: Term
    academic_year: int


@dataclass(frozen=True)
class MeetingDraft:
    """A meeting as a caller wants it; ``id`` is None for new meetings."""

    interval: TimeInterval
    room_id: str | None = None
    id: str | None = None


@dataclass(frozen=True)
class StoredMeeting:
    id: str
    parent: ParentRef
    interval: TimeInterval
    room_id: str | None


@dataclass(frozen=True)
class Booking:
    meeting_id: str
    parent: ParentRef
    title: str
    room_id: str
    interval: TimeInterval


@dataclass(frozen=True)
class RoomLabel:
    id: str
    campus: str | None
    name: str
    capacity: int | None = None


@dataclass(frozen=True)
class MeetingDetail:
    id: str
    interval: TimeInterval
    room: RoomLabel | None


@dataclass(frozen=True)
class ScheduleEntry:
    interval: TimeInterval
    course_prefix: str
    course_number: str


def _parent_column(kind: ParentKind):
    if kind is ParentKind.course_instance:
        return Meeting.course_instance_id
    return Meeting.non_class_event_id


def _interval(meeting: Meeting) -> TimeInterval:
    return TimeInterval(meeting.day, meeting.start_time, meeting.end_time)


def parent_statement(ref: ParentRef, *, lock: bool = False) -> Select:
    """Select a parent's title and semester, optionally locking the parent row.

    The lock serialises concurrent reconciliations of the same parent.
    """
    if ref.kind is ParentKind.course_instance:
        title = (Course.prefix + " " + Course.number).label("title")
        stmt = (
            select(CourseInstance.id, title, Semester.term, Semester.academic_year)
            .select_from(CourseInstance)
            .join(Course, Course.id == CourseInstance.course_id)
            .join(Semester, Semester.id == CourseInstance.semester_id)
            .where(CourseInstance.id == ref.id)
        )
        return stmt.with_for_update(of=CourseInstance) if lock else stmt

    stmt = (
        select(NonClassEvent.id, NonClassParent.title, Semester.term, Semester.academic_year)
        .select_from(NonClassEvent)
        .join(NonClassParent, NonClassParent.id == NonClassEvent.non_class_parent_id)
        .join(Semester, Semester.id == NonClassEvent.semester_id)
        .where(NonClassEvent.id == ref.id)
    )
    return stmt.with_for_update(of=NonClassEvent) if lock else stmt


def room_lock_statement(room_ids: Sequence[str]) -> Select:
    # Rooms are locked in id order so concurrent writers cannot deadlock.
    return select(Room.id).where(Room.id.in_(room_ids)).order_by(Room.id).with_for_update()


class MeetingStore:
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_parent(self, ref: ParentRef, *, lock: bool = False) -> ParentInfo:
        row = self.db.execute(parent_statement(ref, lock=lock)).first()
        if row is None:
            raise ParentNotFoundError(ref.kind, ref.id)
        return ParentInfo(ref, row.title, row.term, row.academic_year)

    def list_meetings(self, ref: ParentRef) -> list[StoredMeeting]:
        rows = self.db.execute(select(Meeting).where(_parent_column(ref.kind) == ref.id)).scalars()
        meetings = [StoredMeeting(row.id, ref, _interval(row), row.room_id) for row in rows]
        meetings.sort(key=lambda item: item.interval.sort_key())
        return meetings

    def list_meeting_details(self, ref: ParentRef) -> list[MeetingDetail]:
        meetings = self.list_meetings(ref)
        labels = self.room_labels(item.room_id for item in meetings if item.room_id)
        return [
            MeetingDetail(item.id, item.interval, labels.get(item.room_id) if item.room_id else None)
            for item in meetings
        ]

    def lock_rooms(self, room_ids: Iterable[str]) -> None:
        """Take row locks on the given rooms, in id order, for the current transaction.

        Raises RoomNotFoundError for the first id with no room.
        """
        wanted = sorted(set(room_ids))
        if not wanted:
            return
        found = set(self.db.execute(room_lock_statement(wanted)).scalars())
        for room_id in wanted:
            if room_id not in found:
                raise RoomNotFoundError(room_id)

    def find_bookings(self, room_id: str, term: Term, academic_year: int, day: Weekday) -> list[Booking]:
        return self._bookings(term, academic_year, day, Meeting.room_id == room_id)

    def bookings_for_day(self, term: Term, academic_year: int, day: Weekday) -> list[Booking]:
        return self._bookings(term, academic_year, day, Meeting.room_id.is_not(None))

    def _bookings(self, term: Term, academic_year: int, day: Weekday, room_criteria) -> list[Booking]:
        course_rows = self.db.execute(
            select(Meeting, Course.prefix, Course.number)
            .select_from(Meeting)
            .join(CourseInstance, CourseInstance.id == Meeting.course_instance_id)
            .join(Course, Course.id == CourseInstance.course_id)
            .join(Semester, Semester.id == CourseInstance.semester_id)
            .where(
                room_criteria,
                Meeting.day == day,
                Semester.term == term,
                Semester.academic_year == academic_year,
            )
        ).all()
        event_rows = self.db.execute(
            select(Meeting, NonClassParent.title)
            .select_from(Meeting)
            .join(NonClassEvent, NonClassEvent.id == Meeting.non_class_event_id)
            .join(NonClassParent, NonClassParent.id == NonClassEvent.non_class_parent_id)
            .join(Semester, Semester.id == NonClassEvent.semester_id)
            .where(
                room_criteria,
                Meeting.day == day,
                Semester.term == term,
                Semester.academic_year == academic_year,
            )
        ).all()

        bookings = [
            Booking(meeting.id, ParentRef.of(meeting), f"{prefix} {number}", meeting.room_id, _interval(meeting))
            for meeting, prefix, number in course_rows
        ]
        bookings.extend(
            Booking(meeting.id, ParentRef.of(meeting), title, meeting.room_id, _interval(meeting))
            for meeting, title in event_rows
        )
        bookings.sort(key=lambda item: (item.interval.sort_key(), item.title))
        return bookings

    def save(
        self,
        ref: ParentRef,
        *,
        creates: Sequence[MeetingDraft],
        updates: Sequence[MeetingDraft],
        delete_ids: Sequence[str],
    ) -> None:
        """Stage the writes for one parent and flush them; the caller commits."""
        parent_column = _parent_column(ref.kind).key
        for meeting_id in delete_ids:
            self.db.delete(self.db.get(Meeting, meeting_id))
        for draft in updates:
            meeting = self.db.get(Meeting, draft.id)
            meeting.day = draft.interval.day
            meeting.start_time = draft.interval.start
            meeting.end_time = draft.interval.end
            meeting.room_id = draft.room_id
        for draft in creates:
            self.db.add(
                Meeting(
                    **{parent_column: ref.id},
                    day=draft.interval.day,
                    start_time=draft.interval.start,
                    end_time=draft.interval.end,
                    room_id=draft.room_id,
                )
            )
        self.db.flush()

    def room_labels(self, room_ids: Iterable[str]) -> dict[str, RoomLabel]:
        wanted = set(room_ids)
        if not wanted:
            return {}
        rows = self.db.execute(
            select(Room, Building)
            .select_from(Room)
            .outerjoin(Building, Building.id == Room.building_id)
            .where(Room.id.in_(wanted))
        ).all()
        return {room.id: _label(room, building) for room, building in rows}

    def list_rooms(self) -> list[RoomLabel]:
        rows = self.db.execute(
            select(Room, Building).select_from(Room).outerjoin(Building, Building.id == Room.building_id)
        ).all()
        labels = [_label(room, building) for room, building in rows]
        labels.sort(key=lambda item: (item.campus or "", item.name))
        return labels

    def schedule_entries(self, term: Term, academic_year: int) -> list[ScheduleEntry]:
        rows = self.db.execute(
            select(Meeting.day, Meeting.start_time, Meeting.end_time, Course.prefix, Course.number)
            .select_from(Meeting)
            .join(CourseInstance, CourseInstance.id == Meeting.course_instance_id)
            .join(Course, Course.id == CourseInstance.course_id)
            .join(Semester, Semester.id == CourseInstance.semester_id)
            .where(
                Semester.term == term,
                Semester.academic_year == academic_year,
                CourseInstance.offered != OfferedStatus.retired,
            )
        ).all()
        return [
            ScheduleEntry(TimeInterval(row.day, row.start_time, row.end_time), row.prefix, row.number)
            for row in rows
        ]


def _label(room: Room, building: Building | None) -> RoomLabel:
    name = f"{building.name} {room.name}" if building is not None else room.name
    return RoomLabel(room.id, building.campus if building is not None else None, name, room.capacity)
