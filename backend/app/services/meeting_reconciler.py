"""Atomic replacement of a course instance's or non-class event's meeting set.

The caller always sends the complete list of meetings a parent should have.
:func:`plan_reconciliation` diffs that list against what is stored, every
room booking in the result is checked, and only when all of them pass is the
diff written, in one transaction.
"""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidMeetingSetError, MeetingNotFoundError, RoomConflictError
from app.services.meeting_store import (
    Booking,
    MeetingDetail,
    MeetingDraft,
    MeetingStore,
    ParentInfo,
    ParentRef,
    StoredMeeting,
)
from app.services.room_availability import MeetingCandidate, RoomAvailabilityValidator, describe_conflict

logger = logging.getLogger(__name__)


@dataclass
class ReconcilePlan:
    to_create: list[MeetingDraft] = field(default_factory=list)
    to_update: list[MeetingDraft] = field(default_factory=list)
    to_delete: list[StoredMeeting] = field(default_factory=list)

    @property
    def bookings(self) -> list[MeetingDraft]:
        return [draft for draft in self.to_create + self.to_update if draft.room_id is not None]


def plan_reconciliation(existing: Sequence[StoredMeeting], desired: Sequence[MeetingDraft]) -> ReconcilePlan:
    counts = Counter(draft.id for draft in desired if draft.id is not None)
    duplicated = sorted(meeting_id for meeting_id, count in counts.items() if count > 1)
    if duplicated:
        raise InvalidMeetingSetError("Each meeting may appear only once in a meeting list", duplicated)

    existing_by_id = {meeting.id: meeting for meeting in existing}
    plan = ReconcilePlan()
    for draft in desired:
        if draft.id is None:
            plan.to_create.append(draft)
        elif draft.id in existing_by_id:
            plan.to_update.append(draft)
        else:
            raise MeetingNotFoundError(draft.id)
    plan.to_delete = [meeting for meeting in existing if meeting.id not in counts]
    return plan


class MeetingReconciler:
    def __init__(self, db: Session) -> None:
        self.db = db
        self.store = MeetingStore(db)
        self.validator = RoomAvailabilityValidator(self.store)

    def list_meetings(self, parent: ParentRef) -> list[MeetingDetail]:
        self.store.get_parent(parent)
        return self.store.list_meeting_details(parent)

    def reconcile(self, parent: ParentRef, desired: Sequence[MeetingDraft]) -> list[MeetingDetail]:
        try:
            info = self.store.get_parent(parent, lock=True)
            plan = plan_reconciliation(self.store.list_meetings(parent), desired)
            self.store.lock_rooms(draft.room_id for draft in plan.bookings)
            self._check_rooms(info, plan)
            self.store.save(
                parent,
                creates=plan.to_create,
                updates=plan.to_update,
                delete_ids=[meeting.id for meeting in plan.to_delete],
            )
            self.db.commit()
        except RoomConflictError as exc:
            self.db.rollback()
            logger.warning("Rejected meetings for %s %s: %s", parent.kind.value, parent.id, exc.message)
            raise
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to save meetings for %s %s", parent.kind.value, parent.id)
            raise
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Saved meetings for %s %s: %d created, %d updated, %d deleted",
            parent.kind.value,
            parent.id,
            len(plan.to_create),
            len(plan.to_update),
            len(plan.to_delete),
        )
        return self.store.list_meeting_details(parent)

    def _check_rooms(self, info: ParentInfo, plan: ReconcilePlan) -> None:
        bookings = plan.bookings
        conflicts: list[dict] = []
        titles: list[str] = []

        # The parent's stored meetings are all being replaced, so they are
        # excluded below; clashes inside the new set are caught here instead.
        for index, draft in enumerate(bookings):
            clashing = [
                other
                for other in bookings[:index]
                if other.room_id == draft.room_id and other.interval.overlaps(draft.interval)
            ]
            if clashing:
                candidate = self._candidate(info, draft)
                own = [Booking(other.id or "", info.ref, info.title, other.room_id, other.interval) for other in clashing]
                conflicts.append(describe_conflict(candidate, self._room_name(draft.room_id), own))
                titles.append(info.title)

        for draft in bookings:
            candidate = self._candidate(info, draft)
            found = self.validator.find_conflicts(candidate, draft.id, exclude_parent=info.ref)
            if found:
                conflicts.append(describe_conflict(candidate, self._room_name(draft.room_id), found))
                titles.extend(booking.title for booking in found)

        if conflicts:
            raise RoomConflictError(list(dict.fromkeys(titles)), conflicts)

    @staticmethod
    def _candidate(info: ParentInfo, draft: MeetingDraft) -> MeetingCandidate:
        return MeetingCandidate(draft.interval, draft.room_id, info.term, info.academic_year)

    def _room_name(self, room_id: str) -> str:
        label = self.store.room_labels([room_id]).get(room_id)
        return label.name if label is not None else room_id
