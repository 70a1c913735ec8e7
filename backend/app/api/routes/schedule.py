from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.models.semester import Term
from app.schemas.schedule import ScheduleBlockOut
from app.services.schedule_builder import build_schedule

router = APIRouter()


@router.get("", response_model=list[ScheduleBlockOut])
def get_schedule(
    term: Term,
    year: int = Query(ge=1900, le=3000),
    db: Session = Depends(get_db),
) -> list[ScheduleBlockOut]:
    return [ScheduleBlockOut.from_block(block) for block in build_schedule(db, term, year)]
