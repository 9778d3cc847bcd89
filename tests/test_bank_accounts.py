from tests.conftest import auth_headers


def test_list_requires_staff(client, bank_account, manager_headers, resident_headers):
    assert len(client.get("/api/bank-accounts", headers=manager_headers).json()) == 1
    assert client.get("/api/bank-accounts", headers=resident_headers).status_code == 403


def test_owner_reads_own_accounts(client, bank_account, resident, other_resident, resident_headers):
    response = client.get(f"/api/bank-accounts/person/{resident.person_id}", headers=resident_headers)
    assert [a["id"] for a in response.json()] == [str(bank_account.id)]

    response = client.get(f"/api/bank-accounts/{bank_account.id}", headers=resident_headers)
    assert response.json()["bank_name"] == "Bancolombia"

    other = auth_headers(other_resident)
    assert client.get(f"/api/bank-accounts/{bank_account.id}", headers=other).status_code == 403
    assert client.get(f"/api/bank-accounts/person/{resident.person_id}", headers=other).status_code == 403


def test_create_only_for_self(client, resident, other_resident, resident_headers, admin_headers):
    payload = {"person_id": str(resident.person_id), "bank_name": "Davivienda", "account_number": "555"}
    response = client.post("/api/bank-accounts", json=payload, headers=resident_headers)
    assert response.status_code == 201

    payload["person_id"] = str(other_resident.person_id)
    response = client.post("/api/bank-accounts", json=payload, headers=resident_headers)
    assert response.status_code == 403

    assert client.post("/api/bank-accounts", json=payload, headers=admin_headers).status_code == 201


def test_update_keeps_owner(client, bank_account, resident, resident_headers):
    response = client.put(f"/api/bank-accounts/{bank_account.id}",
                          json={"account_number": "999", "person_id": "00000000-0000-0000-0000-000000000000"},
                          headers=resident_headers)
    assert response.status_code == 200
    assert response.json()["account_number"] == "999"
    assert response.json()["person_id"] == str(resident.person_id)


def test_delete_is_admin_only(client, bank_account, resident_headers, admin_headers):
    url = f"/api/bank-accounts/{bank_account.id}"
    assert client.delete(url, headers=resident_headers).status_code == 403
    assert client.delete(url, headers=admin_headers).status_code == 204
    assert client.get(url, headers=admin_headers).status_code == 404
