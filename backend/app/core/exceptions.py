class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class SchedulerError(AppError):
    """Raised when a scheduling request is logically invalid."""
    def __init__(self, message: str, details: dict = None, status_code: int = 400):
        super().__init__(message, status_code=status_code, details=details)

class InvalidIntervalError(SchedulerError):
    """Raised when a meeting would end at or before the time it starts."""
    def __init__(self, day, start, end):
        day_value = getattr(day, "value", day)
        super().__init__(
            f"A meeting on {day_value} must end after it starts ({start} - {end})",
            details={"day": day_value, "start": str(start), "end": str(end)},
            status_code=422,
        )

class InvalidMeetingSetError(SchedulerError):
    """Raised when a requested meeting list cannot be reconciled as written."""
    def __init__(self, message: str, meeting_ids: list[str]):
        super().__init__(message, details={"meeting_ids": meeting_ids}, status_code=422)

class RoomConflictError(SchedulerError):
    """Raised when a meeting would double-book a room.

    ``titles`` holds every parent activity already booked in the requested
    slot(s), in the order they were found, without repeats.
    """
    def __init__(self, titles: list[str], conflicts: list[dict]):
        self.titles = titles
        self.conflicts = conflicts
        if len(conflicts) == 1:
            slot = conflicts[0]
            message = (
                f"{slot['room']} is not available on {slot['day']} between {slot['start']} and {slot['end']}. "
                f"It is already booked for {', '.join(titles)}"
            )
        else:
            message = (
                f"{len(conflicts)} requested meetings conflict with existing room bookings. "
                f"The rooms are already booked for {', '.join(titles)}"
            )
        super().__init__(message, details={"titles": titles, "conflicts": conflicts}, status_code=409)

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)

class ParentNotFoundError(ResourceNotFoundError):
    """Raised when a course instance or non-class event does not exist."""
    def __init__(self, kind, parent_id: str):
        label = "Course instance" if getattr(kind, "value", kind) == "course-instance" else "Non-class event"
        super().__init__(label, parent_id)

class MeetingNotFoundError(ResourceNotFoundError):
    """Raised when a meeting id does not belong to the parent being edited."""
    def __init__(self, meeting_id: str):
        super().__init__("Meeting", meeting_id)

class RoomNotFoundError(ResourceNotFoundError):
    def __init__(self, room_id: str):
        super().__init__("Room", room_id)
