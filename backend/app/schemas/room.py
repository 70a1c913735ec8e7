from pydantic import BaseModel

from app.services.room_availability import RoomAvailability


class RoomAvailabilityOut(BaseModel):
    id: str
    campus: str | None = None
    name: str
    capacity: int | None = None
    meetingTitles: list[str]
    available: bool

    @classmethod
    def from_availability(cls, item: RoomAvailability) -> "RoomAvailabilityOut":
        return cls(
            id=item.room.id,
            campus=item.room.campus,
            name=item.room.name,
            capacity=item.room.capacity,
            meetingTitles=item.meeting_titles,
            available=item.available,
        )
