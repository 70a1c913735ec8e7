import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")

from datetime import time  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.api.deps import get_db  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models import (  # noqa: E402
    Building,
    Course,
    CourseInstance,
    Meeting,
    NonClassEvent,
    NonClassParent,
    OfferedStatus,
    Room,
    Semester,
    Term,
    Weekday,
)


def t(value: str) -> time:
    return time.fromisoformat(value)


class SchedulingFactory:
    """Creates the records meetings hang off, committing each one."""

    def __init__(self, db):
        self.db = db

    def _save(self, record):
        self.db.add(record)
        self.db.commit()
        return record

    def semester(self, term=Term.FALL, academic_year=2026) -> Semester:
        existing = (
            self.db.query(Semester)
            .filter(Semester.term == term, Semester.academic_year == academic_year)
            .one_or_none()
        )
        if existing is not None:
            return existing
        return self._save(Semester(term=term, academic_year=academic_year))

    def course_instance(
        self,
        prefix="CS",
        number="50",
        *,
        term=Term.FALL,
        academic_year=2026,
        offered=OfferedStatus.yes,
    ) -> CourseInstance:
        course = self.db.query(Course).filter(Course.prefix == prefix, Course.number == number).one_or_none()
        if course is None:
            course = self._save(Course(prefix=prefix, number=number, title=f"{prefix} {number} title"))
        semester = self.semester(term, academic_year)
        return self._save(CourseInstance(course_id=course.id, semester_id=semester.id, offered=offered))

    def non_class_event(self, title="Reading Group", *, term=Term.FALL, academic_year=2026) -> NonClassEvent:
        parent = self._save(NonClassParent(title=title))
        semester = self.semester(term, academic_year)
        return self._save(NonClassEvent(non_class_parent_id=parent.id, semester_id=semester.id))

    def room(self, name="G125", building="Maxwell Dworkin", campus="Cambridge", capacity=40) -> Room:
        record = self.db.query(Building).filter(Building.name == building).one_or_none()
        if record is None:
            record = self._save(Building(name=building, campus=campus))
        return self._save(Room(building_id=record.id, name=name, capacity=capacity))

    def meeting(self, parent, day=Weekday.MON, start="09:00", end="10:00", room=None) -> Meeting:
        parent_field = "course_instance_id" if isinstance(parent, CourseInstance) else "non_class_event_id"
        return self._save(
            Meeting(
                **{parent_field: parent.id},
                day=day,
                start_time=t(start),
                end_time=t(end),
                room_id=room.id if room is not None else None,
            )
        )


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def factory(db_session):
    return SchedulingFactory(db_session)


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
