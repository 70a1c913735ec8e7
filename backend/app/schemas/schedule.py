from pydantic import BaseModel

from app.models.meeting import Weekday
from app.services.schedule_builder import ScheduleBlock
from app.services.time_interval import format_display


class ScheduleCourseOut(BaseModel):
    coursePrefix: str
    courseNumber: str


class ScheduleBlockOut(BaseModel):
    id: str
    weekday: Weekday
    coursePrefix: str
    startHour: int
    startMinute: int
    endHour: int
    endMinute: int
    duration: int
    startTime: str
    endTime: str
    courses: list[ScheduleCourseOut]

    @classmethod
    def from_block(cls, block: ScheduleBlock) -> "ScheduleBlockOut":
        return cls(
            id=block.id,
            weekday=block.weekday,
            coursePrefix=block.course_prefix,
            startHour=block.start.hour,
            startMinute=block.start.minute,
            endHour=block.end.hour,
            endMinute=block.end.minute,
            duration=block.duration_minutes,
            startTime=format_display(block.start),
            endTime=format_display(block.end),
            courses=[
                ScheduleCourseOut(coursePrefix=course.course_prefix, courseNumber=course.course_number)
                for course in block.courses
            ],
        )
