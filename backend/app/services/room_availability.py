from __future__ import annotations

import logging
from dataclasses import dataclass, field

from app.core.exceptions import RoomConflictError
from app.models.semester import Term
from app.services.meeting_store import Booking, MeetingStore, ParentRef, RoomLabel
from app.services.time_interval import TimeInterval, format_wall_clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeetingCandidate:
    interval: TimeInterval
    room_id: str | None
    term: Term
    academic_year: int


@dataclass
class RoomAvailability:
    room: RoomLabel
    meeting_titles: list[str] = field(default_factory=list)

    @property
    def available(self) -> bool:
        return not self.meeting_titles


def describe_conflict(candidate: MeetingCandidate, room_name: str, bookings: list[Booking]) -> dict:
    return {
        "room_id": candidate.room_id,
        "room": room_name,
        "day": candidate.interval.day.value,
        "start": format_wall_clock(candidate.interval.start),
        "end": format_wall_clock(candidate.interval.end),
        "titles": _unique_titles(bookings),
    }


def _unique_titles(bookings: list[Booking]) -> list[str]:
    return list(dict.fromkeys(booking.title for booking in bookings))


class RoomAvailabilityValidator:
    def __init__(self, store: MeetingStore) -> None:
        self.store = store

    def find_conflicts(
        self,
        candidate: MeetingCandidate,
        exclude_meeting_id: str | None = None,
        *,
        exclude_parent: ParentRef | None = None,
    ) -> list[Booking]:
        """Return every booking in the candidate's room that overlaps it."""
        if candidate.room_id is None:
            return []
        bookings = self.store.find_bookings(
            candidate.room_id,
            candidate.term,
            candidate.academic_year,
            candidate.interval.day,
        )
        return [
            booking
            for booking in bookings
            if booking.meeting_id != exclude_meeting_id
            and (exclude_parent is None or booking.parent != exclude_parent)
            and booking.interval.overlaps(candidate.interval)
        ]

    def check_available(
        self,
        candidate: MeetingCandidate,
        exclude_meeting_id: str | None = None,
        *,
        exclude_parent: ParentRef | None = None,
    ) -> None:
        conflicts = self.find_conflicts(candidate, exclude_meeting_id, exclude_parent=exclude_parent)
        if not conflicts:
            return
        room_name = self.store.room_labels([candidate.room_id]).get(candidate.room_id)
        detail = describe_conflict(candidate, room_name.name if room_name else candidate.room_id, conflicts)
        logger.debug("Room %s unavailable for %s: %s", candidate.room_id, candidate.interval, detail["titles"])
        raise RoomConflictError(detail["titles"], [detail])


def list_room_availability(
    store: MeetingStore,
    term: Term,
    academic_year: int,
    interval: TimeInterval,
    exclude_parent: ParentRef | None = None,
) -> list[RoomAvailability]:
    """List every room with the titles already booked in it during ``interval``.

    Meetings of ``exclude_parent`` are left out so that a room picker can
    offer a parent its own current room back.
    """
    by_room: dict[str, list[Booking]] = {}
    for booking in store.bookings_for_day(term, academic_year, interval.day):
        if exclude_parent is not None and booking.parent == exclude_parent:
            continue
        if booking.interval.overlaps(interval):
            by_room.setdefault(booking.room_id, []).append(booking)
    return [
        RoomAvailability(room, _unique_titles(by_room.get(room.id, [])))
        for room in store.list_rooms()
    ]
