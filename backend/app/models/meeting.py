import uuid
from datetime import time
from enum import Enum

from sqlalchemy import CheckConstraint, Enum as SAEnum, Index, String, Time
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Weekday(str, Enum):
    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"


class Meeting(Base):
    """One weekly occurrence of a course instance or non-class event.

    Exactly one of ``course_instance_id`` and ``non_class_event_id`` is set.
    Times are naive wall-clock values in the institution's time zone.
    """

    __tablename__ = "meetings"
    __table_args__ = (
        CheckConstraint(
            "(course_instance_id IS NULL) <> (non_class_event_id IS NULL)",
            name="ck_meetings_single_parent",
        ),
        CheckConstraint("start_time < end_time", name="ck_meetings_time_order"),
        Index("ix_meetings_room_day", "room_id", "day"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    course_instance_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    non_class_event_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    day: Mapped[Weekday] = mapped_column(SAEnum(Weekday, name="weekday"), nullable=False)
    start_time: Mapped[time] = mapped_column(Time(timezone=False), nullable=False)
    end_time: Mapped[time] = mapped_column(Time(timezone=False), nullable=False)
    room_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
