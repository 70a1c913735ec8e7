from datetime import time

import pytest

from app.core.exceptions import RoomConflictError
from app.models import Term, Weekday
from app.services.meeting_store import MeetingStore, ParentKind, ParentRef
from app.services.room_availability import MeetingCandidate, RoomAvailabilityValidator, list_room_availability
from app.services.time_interval import TimeInterval


def candidate(room, day=Weekday.MON, start="09:00", end="10:00", term=Term.FALL, academic_year=2026):
    return MeetingCandidate(
        TimeInterval(day, time.fromisoformat(start), time.fromisoformat(end)),
        room.id if room is not None else None,
        term,
        academic_year,
    )


@pytest.fixture
def validator(db_session):
    return RoomAvailabilityValidator(MeetingStore(db_session))


def test_meeting_without_room_never_conflicts(factory, validator):
    room = factory.room()
    factory.meeting(factory.course_instance(), room=room)

    assert validator.check_available(candidate(None)) is None


def test_overlapping_booking_in_same_room_conflicts(factory, validator):
    room = factory.room()
    factory.meeting(factory.course_instance("CS", "50"), start="09:00", end="10:00", room=room)

    with pytest.raises(RoomConflictError) as excinfo:
        validator.check_available(candidate(room, start="09:30", end="10:30"))

    error = excinfo.value
    assert error.status_code == 409
    assert error.titles == ["CS 50"]
    assert "Maxwell Dworkin G125" in error.message
    assert "CS 50" in error.message


def test_conflict_lists_every_booked_parent(factory, validator):
    room = factory.room()
    factory.meeting(factory.course_instance("AM", "10"), start="09:00", end="10:00", room=room)
    factory.meeting(factory.non_class_event("Faculty Lunch"), start="09:30", end="11:00", room=room)

    with pytest.raises(RoomConflictError) as excinfo:
        validator.check_available(candidate(room, start="09:00", end="11:00"))

    assert excinfo.value.titles == ["AM 10", "Faculty Lunch"]


def test_touching_bookings_are_available(factory, validator):
    room = factory.room()
    factory.meeting(factory.course_instance(), start="09:00", end="10:00", room=room)

    validator.check_available(candidate(room, start="10:00", end="11:00"))
    validator.check_available(candidate(room, start="08:00", end="09:00"))


def test_other_rooms_days_and_semesters_do_not_conflict(factory, validator):
    room = factory.room("G125")
    other_room = factory.room("G115")
    factory.meeting(factory.course_instance(), room=room)

    validator.check_available(candidate(other_room))
    validator.check_available(candidate(room, day=Weekday.TUE))
    validator.check_available(candidate(room, term=Term.SPRING))
    validator.check_available(candidate(room, academic_year=2027))


def test_excluded_meeting_is_ignored(factory, validator):
    room = factory.room()
    meeting = factory.meeting(factory.course_instance(), start="09:00", end="10:00", room=room)

    validator.check_available(candidate(room, start="09:00", end="11:00"), exclude_meeting_id=meeting.id)


def test_excluded_parent_is_ignored(factory, validator):
    room = factory.room()
    instance = factory.course_instance()
    factory.meeting(instance, start="09:00", end="10:00", room=room)

    conflicts = validator.find_conflicts(
        candidate(room),
        exclude_parent=ParentRef(ParentKind.course_instance, instance.id),
    )

    assert conflicts == []


def test_room_availability_lists_rooms_with_titles(factory, db_session):
    busy = factory.room("G125")
    free = factory.room("101", building="Science Center", campus="Allston")
    instance = factory.course_instance("CS", "50")
    factory.meeting(instance, start="09:00", end="10:00", room=busy)
    factory.meeting(factory.non_class_event("Seminar"), start="10:00", end="11:00", room=busy)

    slot = TimeInterval(Weekday.MON, time(9, 30), time(10, 30))
    rooms = list_room_availability(MeetingStore(db_session), Term.FALL, 2026, slot)

    assert [(item.room.campus, item.room.name) for item in rooms] == [
        ("Allston", "Science Center 101"),
        ("Cambridge", "Maxwell Dworkin G125"),
    ]
    assert rooms[0].available
    assert rooms[1].meeting_titles == ["CS 50", "Seminar"]
    assert free.id == rooms[0].room.id

    excluded = list_room_availability(
        MeetingStore(db_session),
        Term.FALL,
        2026,
        slot,
        exclude_parent=ParentRef(ParentKind.course_instance, instance.id),
    )
    assert excluded[1].meeting_titles == ["Seminar"]
