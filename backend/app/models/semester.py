import uuid
from enum import Enum

from sqlalchemy import Enum as SAEnum, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Term(str, Enum):
    FALL = "FALL"
    SPRING = "SPRING"


class Semester(Base):
    __tablename__ = "semesters"
    __table_args__ = (
        UniqueConstraint("term", "academic_year", name="uq_semesters_term_year"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    term: Mapped[Term] = mapped_column(SAEnum(Term, name="term"), nullable=False)
    academic_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
