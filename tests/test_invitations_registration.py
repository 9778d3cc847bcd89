import uuid

from rentmanager.models import BankAccount, Person, Pricing, Property, Rental, User, UserRole, UserStatus


def test_invite_manager(client, db, admin_headers, sent_emails):
    payload = {"email": "nuevo.gerente@example.com", "name": "Nuevo Gerente", "tempPassword": "Temporal123",
               "message": "Bienvenido"}
    response = client.post("/api/admin/invitations/manager", json=payload, headers=admin_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["temp_password"] == "Temporal123"

    user = db.query(User).filter(User.email == "nuevo.gerente@example.com").one()
    assert user.role == UserRole.MANAGER
    assert user.status == UserStatus.NEW_USER
    assert db.get(Person, user.person_id).nit.startswith("TEMP-")

    assert sent_emails[0]["to"] == "nuevo.gerente@example.com"

    response = client.post("/api/users/login", json={"email": "nuevo.gerente@example.com", "password": "Temporal123"})
    assert response.status_code == 200


def test_invite_generates_password_and_checks_input(client, admin, admin_headers, manager_headers):
    url = "/api/admin/invitations/manager"

    assert client.post(url, json={"email": "x@example.com", "name": "X"}, headers=manager_headers).status_code == 403

    response = client.post(url, json={"email": "x@example.com", "name": "X"}, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["temp_password"]

    response = client.post(url, json={"email": admin.email, "name": "Dup"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "A user with this email already exists"

    response = client.post(url, json={"email": "y@example.com", "name": "Y", "status": "boss"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid status: boss"


def test_invitation_survives_email_failure(client, admin_headers, monkeypatch):
    from rentmanager.services import email_service

    monkeypatch.setattr(email_service, "_deliver", lambda to, msg: False)
    response = client.post("/api/admin/invitations/manager", json={"email": "z@example.com", "name": "Z"},
                           headers=admin_headers)
    assert response.status_code == 201


def _registration(**extra):
    payload = {
        "full_name": "Gloria Gerente",
        "phone": "3105556677",
        "nit": "52123456",
        "email": "gloria@example.com",
        "password": "segura-123",
        "property_address": "Calle 80 # 15-20",
        "property_city": "Bogotá",
        "property_state": "Cundinamarca",
        "property_type": "house",
        "bank_name": "Banco de Bogotá",
        "account_type": "checking",
        "account_number": "987654321",
        "account_holder": "Gloria Gerente",
        "monthly_rent": 2500000,
        "security_deposit": 2500000,
        "utilities_included": ["agua"],
        "due_day": 10,
        "start_date": "2024-01-01",
        "end_date": "2024-12-31",
    }
    payload.update(extra)
    return payload


def test_register_manager_creates_everything(client, db, resident_headers):
    response = client.post("/api/register/manager", json=_registration(), headers=resident_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["message"].startswith("Manager registration successful")

    user = db.get(User, uuid.UUID(body["user_id"]))
    assert user.status == UserStatus.PENDING
    assert user.role == UserRole.MANAGER

    prop = db.get(Property, uuid.UUID(body["property_id"]))
    assert prop.manager_ids == [body["person_id"]]
    assert str(prop.resident_id) == body["person_id"]

    rental = db.query(Rental).filter(Rental.property_id == prop.id).one()
    assert str(rental.renter_id) == body["person_id"]
    assert db.query(BankAccount).filter(BankAccount.id == rental.bank_account_id).count() == 1
    assert db.query(Pricing).filter(Pricing.rental_id == rental.id).one().due_day == 10

    # pending accounts cannot log in until approved
    response = client.post("/api/users/login", json={"email": "gloria@example.com", "password": "segura-123"})
    assert response.status_code == 401


def test_register_manager_validation(client, resident, resident_headers):
    assert client.post("/api/register/manager", json=_registration()).status_code == 401

    response = client.post("/api/register/manager", json=_registration(email=resident.email),
                           headers=resident_headers)
    assert response.status_code == 400

    response = client.post("/api/register/manager", json=_registration(password="corta"), headers=resident_headers)
    assert response.status_code == 400

    response = client.post("/api/register/manager", json=_registration(due_day=40), headers=resident_headers)
    assert response.status_code == 400
