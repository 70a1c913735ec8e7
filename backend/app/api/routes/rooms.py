from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.config import get_settings
from app.models.meeting import Weekday
from app.models.semester import Term
from app.schemas.room import RoomAvailabilityOut
from app.services.meeting_store import MeetingStore, ParentKind, ParentRef
from app.services.room_availability import list_room_availability
from app.services.time_interval import TimeInterval, parse_wall_clock

router = APIRouter()


@router.get("/availability", response_model=list[RoomAvailabilityOut])
def get_room_availability(
    term: Term,
    day: Weekday,
    year: int = Query(ge=1900, le=3000),
    start_time: str = Query(alias="startTime"),
    end_time: str = Query(alias="endTime"),
    exclude_parent: str | None = Query(default=None, alias="excludeParent"),
    exclude_parent_kind: ParentKind = Query(default=ParentKind.course_instance, alias="excludeParentKind"),
    db: Session = Depends(get_db),
) -> list[RoomAvailabilityOut]:
    """List every room with what is already booked in it during the requested slot."""
    zone = get_settings().zone
    try:
        start = parse_wall_clock(start_time, zone)
        end = parse_wall_clock(end_time, zone)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    interval = TimeInterval(day, start, end)
    excluded = ParentRef(exclude_parent_kind, exclude_parent) if exclude_parent else None
    rooms = list_room_availability(MeetingStore(db), term, year, interval, exclude_parent=excluded)
    return [RoomAvailabilityOut.from_availability(item) for item in rooms]
