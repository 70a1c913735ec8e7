from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.services.meeting_reconciler import MeetingReconciler


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_meeting_reconciler(db: Session = Depends(get_db)) -> MeetingReconciler:
    return MeetingReconciler(db)
