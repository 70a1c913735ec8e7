def test_health_endpoints(client):
    live = client.get("/api/health/live")
    assert live.status_code == 200
    assert live.json()["status"] == "ok"

    ready = client.get("/api/health/ready")
    assert ready.status_code == 200
    payload = ready.json()
    assert payload["database"]["ok"] is True
    assert payload["database"]["missing_tables"] == []
    assert payload["timezone"] == "America/New_York"


def test_ready_reports_missing_tables(client, engine):
    with engine.begin() as connection:
        connection.exec_driver_sql("DROP TABLE meetings")

    ready = client.get("/api/health/ready")

    assert ready.status_code == 503
    assert ready.json()["database"]["missing_tables"] == ["meetings"]
