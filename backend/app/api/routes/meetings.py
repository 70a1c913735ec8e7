from fastapi import APIRouter, Depends

from app.api.deps import get_meeting_reconciler
from app.schemas.meeting import MeetingListUpdate, MeetingResponse
from app.services.meeting_reconciler import MeetingReconciler
from app.services.meeting_store import ParentKind, ParentRef

router = APIRouter()


@router.get("/{parent_kind}/{parent_id}", response_model=list[MeetingResponse])
def list_meetings(
    parent_kind: ParentKind,
    parent_id: str,
    reconciler: MeetingReconciler = Depends(get_meeting_reconciler),
) -> list[MeetingResponse]:
    details = reconciler.list_meetings(ParentRef(parent_kind, parent_id))
    return [MeetingResponse.from_detail(detail) for detail in details]


@router.put("/{parent_kind}/{parent_id}", response_model=list[MeetingResponse])
def replace_meetings(
    parent_kind: ParentKind,
    parent_id: str,
    payload: MeetingListUpdate,
    reconciler: MeetingReconciler = Depends(get_meeting_reconciler),
) -> list[MeetingResponse]:
    """Create, update, or remove meetings so the parent has exactly ``payload.meetings``.

    Meetings without an id are created, meetings with an id are updated, and
    stored meetings missing from the list are deleted. An empty list removes
    every meeting. Nothing is saved if any room is already booked.
    """
    drafts = [meeting.to_draft() for meeting in payload.meetings]
    details = reconciler.reconcile(ParentRef(parent_kind, parent_id), drafts)
    return [MeetingResponse.from_detail(detail) for detail in details]
