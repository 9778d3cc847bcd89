from rentmanager.models import BankAccount, Person, User, UserRole
from tests.conftest import auth_headers, make_person, make_user


def test_admin_lists_all_persons(client, admin, manager, resident, admin_headers):
    response = client.get("/api/persons", headers=admin_headers)
    assert response.status_code == 200
    assert len(response.json()) == 3


def test_manager_without_properties_sees_only_self(client, manager, resident, manager_headers):
    response = client.get("/api/persons", headers=manager_headers)
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [str(manager.person_id)]


def test_manager_sees_renters_of_managed_properties(client, manager, resident, other_resident, rental, manager_headers):
    response = client.get("/api/persons", headers=manager_headers)
    assert response.status_code == 200
    ids = {p["id"] for p in response.json()}
    assert ids == {str(manager.person_id), str(resident.person_id)}


def test_resident_cannot_list_persons(client, resident_headers):
    assert client.get("/api/persons", headers=resident_headers).status_code == 403


def test_resident_reads_only_own_person(client, resident, other_resident, resident_headers):
    assert client.get(f"/api/persons/{resident.person_id}", headers=resident_headers).status_code == 200
    assert client.get(f"/api/persons/{other_resident.person_id}", headers=resident_headers).status_code == 403


def test_persons_by_role(client, manager, resident, other_resident, admin_headers):
    response = client.get("/api/persons/role/resident", headers=admin_headers)
    assert response.status_code == 200
    assert {p["full_name"] for p in response.json()} == {"Rosa Resident", "Omar Other"}

    assert client.get("/api/persons/role/landlord", headers=admin_headers).status_code == 400


def test_create_person_requires_admin_or_manager(client, manager_headers, resident_headers):
    payload = {"full_name": "Nuevo Inquilino", "phone": "3000000000", "nit": "111222333"}
    assert client.post("/api/persons", json=payload, headers=resident_headers).status_code == 403

    response = client.post("/api/persons", json=payload, headers=manager_headers)
    assert response.status_code == 201
    assert response.json()["full_name"] == "Nuevo Inquilino"


def test_update_person_admin_or_self(client, resident, other_resident, resident_headers):
    response = client.put(f"/api/persons/{resident.person_id}", json={"phone": "3119998877"},
                          headers=resident_headers)
    assert response.status_code == 200
    assert response.json()["phone"] == "3119998877"

    response = client.put(f"/api/persons/{other_resident.person_id}", json={"phone": "1"},
                          headers=resident_headers)
    assert response.status_code == 403


def test_delete_person_cascades(client, db, resident, bank_account, admin_headers):
    person_id = resident.person_id

    response = client.delete(f"/api/persons/{person_id}", headers=admin_headers)
    assert response.status_code == 204

    db.expire_all()
    assert db.get(Person, person_id) is None
    assert db.query(User).filter(User.person_id == person_id).count() == 0
    assert db.query(BankAccount).filter(BankAccount.person_id == person_id).count() == 0


def test_delete_person_admin_only_and_missing(client, db, manager_headers, admin_headers):
    person = make_person(db, "Someone")
    assert client.delete(f"/api/persons/{person.id}", headers=manager_headers).status_code == 403
    assert client.delete("/api/persons/00000000-0000-0000-0000-000000000000", headers=admin_headers).status_code == 404


def test_disabled_account_is_forbidden(client, db):
    from rentmanager.models import UserStatus
    user = make_user(db, "off@example.com", UserRole.ADMIN, status=UserStatus.DISABLED)
    assert client.get("/api/persons", headers=auth_headers(user)).status_code == 403
