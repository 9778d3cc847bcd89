import os
import uuid
from datetime import timedelta

import pytest

from rentmanager.db.base import utcnow
from rentmanager.models import ContractSigningRequest, SigningStatus
from rentmanager.repositories import ContractSigningRepository
from rentmanager.services import contract_pdf_service
from tests.conftest import email_text


@pytest.fixture
def signing_request(client, resident, admin_headers):
    response = client.post("/api/admin/contract-signing/request",
                           json={"contract_id": str(uuid.uuid4()), "recipient_id": str(resident.person_id)},
                           headers=admin_headers)
    assert response.status_code == 200
    return response.json()


def test_create_request_emails_signing_link(client, resident, admin_headers, sent_emails):
    contract_id = str(uuid.uuid4())
    response = client.post("/api/admin/contract-signing/request",
                           json={"contract_id": contract_id, "recipient_id": str(resident.person_id),
                                 "expiration_days": 3},
                           headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Signature request created and email sent"

    assert len(sent_emails) == 1
    assert sent_emails[0]["to"] == resident.email
    assert f"/sign/{body['signing_id']}" in email_text(sent_emails[0]["message"])


def test_create_request_validation(client, db, admin_headers, resident_headers):
    from tests.conftest import make_person

    url = "/api/admin/contract-signing/request"
    recipient = make_person(db, "Sin Correo")

    assert client.post(url, json={"contract_id": str(uuid.uuid4()), "recipient_id": str(recipient.id)},
                       headers=resident_headers).status_code == 403

    response = client.post(url, json={"contract_id": "nope", "recipient_id": str(recipient.id)},
                           headers=admin_headers)
    assert response.json()["detail"] == "Invalid contract ID"

    response = client.post(url, json={"contract_id": str(uuid.uuid4()), "recipient_id": "nope"},
                           headers=admin_headers)
    assert response.json()["detail"] == "Invalid recipient ID"

    response = client.post(url, json={"contract_id": str(uuid.uuid4()), "recipient_id": str(uuid.uuid4())},
                           headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Recipient not found"

    response = client.post(url, json={"contract_id": str(uuid.uuid4()), "recipient_id": str(recipient.id)},
                           headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Recipient email not found"


def test_status_is_public(client, signing_request, resident):
    response = client.get(f"/api/public/contract-signing/status/{signing_request['signing_id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "pending"
    assert body["status_spanish"] == "Pendiente"
    assert body["recipient_email"] == resident.email

    # same routes are mounted under the legacy prefix
    response = client.get(f"/api/contract-signing/status/{signing_request['signing_id']}")
    assert response.status_code == 200

    assert client.get(f"/api/public/contract-signing/status/{uuid.uuid4()}").status_code == 404


def test_sign_once(client, signing_request, resident, sent_emails):
    url = f"/api/public/contract-signing/sign/{signing_request['signing_id']}"

    response = client.post(url)
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "signed"
    assert body["signedBy"] == resident.email
    assert body["message"] == "Contract successfully signed"

    # request email plus the signed copy
    assert len(sent_emails) == 2

    response = client.post(url)
    assert response.status_code == 400
    assert response.json()["detail"] == "Contract already signed"


def test_sign_survives_pdf_failure(client, signing_request, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(contract_pdf_service, "build_simple_contract_pdf", broken)

    response = client.post(f"/api/public/contract-signing/sign/{signing_request['signing_id']}")
    assert response.status_code == 200
    assert response.json()["status"] == "signed"


def test_reject_then_sign(client, signing_request):
    signing_id = signing_request["signing_id"]

    response = client.post(f"/api/public/contract-signing/reject/{signing_id}")
    assert response.status_code == 200
    assert response.json()["message"] == "Contract signing rejected"

    response = client.post(f"/api/public/contract-signing/sign/{signing_id}")
    assert response.status_code == 400
    assert response.json()["detail"] == "Contract signing was rejected"

    assert client.post(f"/api/public/contract-signing/reject/{uuid.uuid4()}").status_code == 404


def test_expiry_is_applied_on_read(client, db, signing_request):
    signing_id = uuid.UUID(signing_request["signing_id"])
    record = db.get(ContractSigningRequest, signing_id)
    record.expires_at = utcnow() - timedelta(hours=1)
    db.commit()

    response = client.get(f"/api/public/contract-signing/status/{signing_id}")
    assert response.json()["status"] == "expired"
    assert response.json()["status_spanish"] == "Expirado"

    db.refresh(record)
    assert record.status == SigningStatus.EXPIRED

    response = client.post(f"/api/public/contract-signing/sign/{signing_id}")
    assert response.status_code == 400
    assert response.json()["detail"] == "Contract signing request has expired"


def test_pdf_endpoint_serves_contract(client, signing_request):
    url = f"/api/public/contract-signing/pdf/{signing_request['signing_id']}"

    response = client.get(url)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"].startswith("inline")
    assert response.content.startswith(b"%PDF")

    client.post(f"/api/public/contract-signing/sign/{signing_request['signing_id']}")
    response = client.get(url, params={"signed": "true"})
    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


def test_pdf_endpoint_uses_generated_contract(client, signing_request, db):
    record = db.get(ContractSigningRequest, uuid.UUID(signing_request["signing_id"]))
    contract_pdf_service.save_contract(str(record.contract_id), b"%PDF-1.4 stored contract")

    response = client.get(f"/api/public/contract-signing/pdf/{record.id}")
    assert response.content == b"%PDF-1.4 stored contract"


def test_sign_records_signed_copy_path(client, db, signing_request):
    response = client.post(f"/api/public/contract-signing/sign/{signing_request['signing_id']}")
    assert response.status_code == 200

    record = db.get(ContractSigningRequest, uuid.UUID(signing_request["signing_id"]))
    db.refresh(record)
    assert record.signed_pdf_path == contract_pdf_service.signed_contract_path(str(record.contract_id))
    assert os.path.exists(record.signed_pdf_path)


def test_sign_without_writable_copy_leaves_path_empty(client, db, signing_request, tmp_path, monkeypatch):
    missing_dir = tmp_path / "gone"
    monkeypatch.setattr(contract_pdf_service, "signed_contract_path",
                        lambda contract_id: str(missing_dir / f"{contract_id}_signed.pdf"))

    response = client.post(f"/api/public/contract-signing/sign/{signing_request['signing_id']}")
    assert response.status_code == 200
    assert response.json()["status"] == "signed"

    record = db.get(ContractSigningRequest, uuid.UUID(signing_request["signing_id"]))
    db.refresh(record)
    assert record.status == SigningStatus.SIGNED
    assert record.signed_pdf_path is None


# ==================== Repository ====================

@pytest.fixture
def signing_rows(db, resident):
    repo = ContractSigningRepository(db)
    contract_id = uuid.uuid4()
    now = utcnow()
    rows = []
    for hours_ago in (3, 2, 1):
        row = repo.create_request(contract_id, resident.person_id, resident.email, expiration_days=7)
        row.created_at = now - timedelta(hours=hours_ago)
        rows.append(row)
    db.commit()
    return contract_id, rows


def test_lookups_return_newest_first(db, resident, signing_rows):
    contract_id, rows = signing_rows
    repo = ContractSigningRepository(db)
    newest_first = [r.id for r in reversed(rows)]

    assert [r.id for r in repo.get_by_contract_id(contract_id)] == newest_first
    assert [r.id for r in repo.get_by_recipient_id(resident.person_id)] == newest_first
    assert repo.get_by_contract_id(uuid.uuid4()) == []


def test_update_expired_statuses_only_touches_overdue_pending(db, signing_rows):
    _, (overdue, signed, future) = signing_rows
    repo = ContractSigningRepository(db)
    now = utcnow()
    overdue.expires_at = now - timedelta(minutes=1)
    signed.expires_at = now - timedelta(minutes=1)
    signed.status = SigningStatus.SIGNED
    future.expires_at = now + timedelta(days=1)
    db.commit()

    assert repo.update_expired_statuses(now=now) == 1

    for row in (overdue, signed, future):
        db.refresh(row)
    assert overdue.status == SigningStatus.EXPIRED
    assert signed.status == SigningStatus.SIGNED
    assert future.status == SigningStatus.PENDING
    assert repo.update_expired_statuses(now=now) == 0


def test_update_expired_statuses_keeps_request_due_right_now(db, signing_rows):
    _, rows = signing_rows
    deadline = utcnow()
    for row in rows:
        row.expires_at = deadline
    db.commit()

    # only strictly past deadlines expire
    assert ContractSigningRepository(db).update_expired_statuses(now=deadline) == 0
    assert len(ContractSigningRepository(db).get_pending()) == 3
