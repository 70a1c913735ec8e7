from datetime import time

import pytest
from sqlalchemy.dialects import postgresql

from app.core.exceptions import RoomConflictError
from app.models import Weekday
from app.services import meeting_store
from app.services.meeting_reconciler import MeetingReconciler
from app.services.meeting_store import MeetingDraft, MeetingStore, ParentKind, ParentRef
from app.services.time_interval import TimeInterval


def postgres_sql(statement):
    return str(statement.compile(dialect=postgresql.dialect()))


def monday_nine(room):
    return MeetingDraft(TimeInterval(Weekday.MON, time(9, 0), time(10, 0)), room.id)


def test_room_lock_selects_rooms_for_update_in_id_order():
    sql = postgres_sql(meeting_store.room_lock_statement(["b", "a"]))

    assert "ORDER BY rooms.id" in sql
    assert sql.rstrip().endswith("FOR UPDATE")


@pytest.mark.parametrize(
    ("kind", "table"),
    [(ParentKind.course_instance, "course_instances"), (ParentKind.non_class_event, "non_class_events")],
)
def test_parent_lock_only_when_requested(kind, table):
    ref = ParentRef(kind, "parent-1")

    assert f"FOR UPDATE OF {table}" in postgres_sql(meeting_store.parent_statement(ref, lock=True))
    assert "FOR UPDATE" not in postgres_sql(meeting_store.parent_statement(ref))


def test_reconcile_locks_parent_and_requested_rooms(factory, db_session, monkeypatch):
    first_room = factory.room("G125")
    second_room = factory.room("G115")
    instance = factory.course_instance()
    calls = []

    original_get_parent = MeetingStore.get_parent
    original_lock_rooms = MeetingStore.lock_rooms

    def get_parent(self, ref, *, lock=False):
        calls.append(("parent", ref.id, lock))
        return original_get_parent(self, ref, lock=lock)

    def lock_rooms(self, room_ids):
        room_ids = list(room_ids)
        calls.append(("rooms", sorted(room_ids)))
        return original_lock_rooms(self, room_ids)

    monkeypatch.setattr(MeetingStore, "get_parent", get_parent)
    monkeypatch.setattr(MeetingStore, "lock_rooms", lock_rooms)

    MeetingReconciler(db_session).reconcile(
        ParentRef(ParentKind.course_instance, instance.id),
        [monday_nine(first_room), monday_nine(second_room)],
    )

    assert calls[0] == ("parent", instance.id, True)
    assert calls[1] == ("rooms", sorted([first_room.id, second_room.id]))


def test_second_writer_sees_the_first_writers_booking(factory, session_factory):
    room = factory.room()
    first = factory.course_instance("CS", "50")
    second = factory.course_instance("AM", "10")

    first_session = session_factory()
    second_session = session_factory()
    try:
        MeetingReconciler(first_session).reconcile(
            ParentRef(ParentKind.course_instance, first.id), [monday_nine(room)]
        )

        with pytest.raises(RoomConflictError) as excinfo:
            MeetingReconciler(second_session).reconcile(
                ParentRef(ParentKind.course_instance, second.id), [monday_nine(room)]
            )
    finally:
        first_session.close()
        second_session.close()

    assert excinfo.value.titles == ["CS 50"]
