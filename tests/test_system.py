from rentmanager.services import reminder_service


def test_root(client):
    body = client.get("/").json()
    assert body["success"] is True
    assert body["docs"] == "/api/docs"


def test_api_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_validate_email_queues_notify_all(client, monkeypatch):
    calls = []
    monkeypatch.setattr(reminder_service, "notify_all", lambda: calls.append(True))

    response = client.get("/validate_email")
    assert response.json() == {"message": "Email validation process started"}
    assert calls == [True]


def test_invalid_uuid_is_a_validation_error(client, admin_headers):
    response = client.get("/api/persons/not-a-uuid", headers=admin_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["detail"] == "Validation error"
