from app.models.course import Course  # noqa: F401
from app.models.course_instance import CourseInstance, OfferedStatus  # noqa: F401
from app.models.meeting import Meeting, Weekday  # noqa: F401
from app.models.non_class_event import NonClassEvent, NonClassParent  # noqa: F401
from app.models.room import Building, Room  # noqa: F401
from app.models.semester import Semester, Term  # noqa: F401
