from rentmanager.services import email_service, reminder_service
from tests.conftest import email_text, make_person


def test_custom_email(client, resident, admin_headers, sent_emails):
    payload = {"recipient_person_id": str(resident.person_id), "subject": "Recordatorio", "body": "<p>Hola</p>"}
    response = client.post("/api/admin/emails/custom", json=payload, headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": f"Custom email sent successfully to {resident.email}"}

    assert sent_emails[0]["to"] == resident.email
    assert sent_emails[0]["subject"] == "Recordatorio"
    assert "<p>Hola</p>" in email_text(sent_emails[0]["message"])


def test_custom_email_validation(client, db, resident, admin_headers, manager_headers):
    url = "/api/admin/emails/custom"
    base = {"recipient_person_id": str(resident.person_id), "subject": "Asunto", "body": "Cuerpo"}

    assert client.post(url, json=base, headers=manager_headers).status_code == 403

    response = client.post(url, json={**base, "recipient_person_id": "123"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid recipient_person_id format"

    response = client.post(url, json={**base, "subject": "  "}, headers=admin_headers)
    assert response.json()["detail"] == "Subject cannot be empty"

    response = client.post(url, json={**base, "body": ""}, headers=admin_headers)
    assert response.json()["detail"] == "Body cannot be empty"

    no_user = make_person(db, "Sin Usuario")
    response = client.post(url, json={**base, "recipient_person_id": str(no_user.id)}, headers=admin_headers)
    assert response.status_code == 404


def test_custom_email_delivery_failure(client, resident, admin_headers, monkeypatch):
    monkeypatch.setattr(email_service, "_deliver", lambda to, msg: False)
    payload = {"recipient_person_id": str(resident.person_id), "subject": "Asunto", "body": "Cuerpo"}
    response = client.post("/api/admin/emails/custom", json=payload, headers=admin_headers)
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to send email"


def test_annual_renewal_runs_in_background(client, admin_headers, monkeypatch):
    calls = []
    monkeypatch.setattr(reminder_service, "send_annual_renewal_reminders", lambda message: calls.append(message))

    response = client.post("/api/admin/emails/annual-renewal-reminders",
                           json={"optional_message": "Gracias por ser un buen inquilino"},
                           headers=admin_headers)
    assert response.status_code == 202
    assert response.json()["message"].startswith("Annual renewal reminder process started")
    assert calls == ["Gracias por ser un buen inquilino"]

    response = client.post("/api/admin/emails/annual-renewal-reminders", headers=admin_headers)
    assert response.status_code == 202
    assert calls[-1] == ""
