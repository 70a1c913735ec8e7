from app.models import Term, Weekday


def test_schedule_returns_ordered_blocks(client, factory):
    cs50 = factory.course_instance("CS", "50")
    am10 = factory.course_instance("AM", "10")
    factory.meeting(cs50, Weekday.MON, "09:00", "10:00")
    factory.meeting(am10, Weekday.MON, "09:00", "10:00")
    factory.meeting(cs50, Weekday.TUE, "08:00", "09:00")
    factory.meeting(am10, Weekday.MON, "08:00", "09:00")

    response = client.get("/api/schedule", params={"term": "FALL", "year": 2026})

    assert response.status_code == 200
    blocks = response.json()
    assert [(block["weekday"], block["startHour"]) for block in blocks] == [("MON", 8), ("MON", 9), ("TUE", 8)]
    assert blocks[1] == {
        "id": "AMMON9001000FALL2026",
        "weekday": "MON",
        "coursePrefix": "AM",
        "startHour": 9,
        "startMinute": 0,
        "endHour": 10,
        "endMinute": 0,
        "duration": 60,
        "startTime": "9:00 AM",
        "endTime": "10:00 AM",
        "courses": [
            {"coursePrefix": "AM", "courseNumber": "10"},
            {"coursePrefix": "CS", "courseNumber": "50"},
        ],
    }


def test_schedule_for_semester_without_meetings_is_empty(client, factory):
    factory.course_instance("CS", "50", term=Term.SPRING)

    response = client.get("/api/schedule", params={"term": "SPRING", "year": 2030})

    assert response.status_code == 200
    assert response.json() == []


def test_schedule_rejects_unknown_term(client):
    assert client.get("/api/schedule", params={"term": "SUMMER", "year": 2026}).status_code == 422
    assert client.get("/api/schedule", params={"term": "FALL"}).status_code == 422
