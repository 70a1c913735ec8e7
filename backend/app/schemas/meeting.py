from __future__ import annotations

from datetime import time

from pydantic import BaseModel, Field, field_validator

from app.core.config import get_settings
from app.models.meeting import Weekday
from app.services.meeting_store import MeetingDetail, MeetingDraft
from app.services.time_interval import TimeInterval, format_wall_clock, parse_wall_clock


class MeetingRequest(BaseModel):
    id: str | None = Field(default=None, min_length=1, max_length=36)
    day: Weekday
    startTime: time
    endTime: time
    roomId: str | None = Field(default=None, min_length=1, max_length=36)

    @field_validator("startTime", "endTime", mode="before")
    @classmethod
    def parse_time(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_wall_clock(value, get_settings().zone)
        return value

    def to_draft(self) -> MeetingDraft:
        return MeetingDraft(TimeInterval(self.day, self.startTime, self.endTime), self.roomId, self.id)


class MeetingListUpdate(BaseModel):
    meetings: list[MeetingRequest] = Field(default_factory=list, max_length=100)


class MeetingRoomResponse(BaseModel):
    id: str
    campus: str | None = None
    name: str


class MeetingResponse(BaseModel):
    id: str
    day: Weekday
    startTime: str
    endTime: str
    room: MeetingRoomResponse | None = None

    @classmethod
    def from_detail(cls, detail: MeetingDetail) -> "MeetingResponse":
        room = None
        if detail.room is not None:
            room = MeetingRoomResponse(id=detail.room.id, campus=detail.room.campus, name=detail.room.name)
        return cls(
            id=detail.id,
            day=detail.interval.day,
            startTime=format_wall_clock(detail.interval.start),
            endTime=format_wall_clock(detail.interval.end),
            room=room,
        )
