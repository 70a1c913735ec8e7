import uuid
from enum import Enum

from sqlalchemy import Enum as SAEnum, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class OfferedStatus(str, Enum):
    # Offered this semester, as it normally would be.
    yes = "Y"
    # Usually offered, but not this semester.
    no = "N"
    # Not offered this semester and normally would not be.
    blank = ""
    retired = "RETIRED"


class CourseInstance(Base):
    __tablename__ = "course_instances"
    __table_args__ = (
        UniqueConstraint("course_id", "semester_id", name="uq_course_instances_course_semester"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    course_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    semester_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    offered: Mapped[OfferedStatus] = mapped_column(
        SAEnum(OfferedStatus, name="offered_status"), nullable=False, default=OfferedStatus.blank
    )
