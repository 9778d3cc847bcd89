import pytest

from rentmanager.models import MaintenanceRequest, MaintenanceStatus
from tests.conftest import auth_headers


@pytest.fixture
def leak(db, managed_property, resident):
    request = MaintenanceRequest(property_id=managed_property.id, renter_id=resident.person_id,
                                 description="Fuga en el baño")
    db.add(request)
    db.commit()
    db.refresh(request)
    return request


def test_resident_request_is_filed_in_own_name(client, resident, other_resident, managed_property,
                                                resident_headers):
    payload = {
        "property_id": str(managed_property.id),
        "renter_id": str(other_resident.person_id),
        "description": "La ventana no cierra",
    }
    response = client.post("/api/maintenance-requests", json=payload, headers=resident_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["renter_id"] == str(resident.person_id)
    assert body["status"] == "pending"
    assert body["request_date"]


def test_create_validation(client, managed_property, admin_headers):
    response = client.post("/api/maintenance-requests", json={"description": "x"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "PropertyID is required"

    response = client.post("/api/maintenance-requests",
                           json={"property_id": str(managed_property.id), "description": "  "},
                           headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Description is required"


def test_list_all_is_admin_only(client, leak, admin_headers, manager_headers):
    assert len(client.get("/api/maintenance-requests", headers=admin_headers).json()) == 1
    assert client.get("/api/maintenance-requests", headers=manager_headers).status_code == 403


def test_property_ids_filter_by_role(client, db, leak, managed_property, other_property, other_resident,
                                     admin_headers, manager_headers, resident_headers):
    db.add(MaintenanceRequest(property_id=other_property.id, description="Puerta dañada"))
    db.commit()
    ids = [str(managed_property.id), str(other_property.id)]

    url = "/api/maintenance-requests/property-ids"
    assert len(client.post(url, json=ids, headers=admin_headers).json()) == 2
    assert [r["id"] for r in client.post(url, json=ids, headers=manager_headers).json()] == [str(leak.id)]
    assert [r["id"] for r in client.post(url, json=ids, headers=resident_headers).json()] == [str(leak.id)]
    assert client.post(url, json=ids, headers=auth_headers(other_resident)).json() == []
    assert client.post(url, json=[], headers=admin_headers).json() == []


def test_get_request_by_role(client, leak, other_resident, resident_headers, manager_headers):
    url = f"/api/maintenance-requests/{leak.id}"
    assert client.get(url, headers=resident_headers).status_code == 200
    assert client.get(url, headers=manager_headers).status_code == 200
    assert client.get(url, headers=auth_headers(other_resident)).status_code == 403


def test_lookups(client, leak, managed_property, resident, admin_headers):
    assert len(client.get(f"/api/maintenance-requests/property/{managed_property.id}",
                          headers=admin_headers).json()) == 1
    assert len(client.get(f"/api/maintenance-requests/renter/{resident.person_id}",
                          headers=admin_headers).json()) == 1
    assert len(client.get("/api/maintenance-requests/status/pending", headers=admin_headers).json()) == 1
    assert client.get("/api/maintenance-requests/status/open", headers=admin_headers).status_code == 400


def test_admin_update_and_delete(client, db, leak, admin_headers):
    response = client.put(f"/api/admin/maintenance-requests/{leak.id}", json={"status": "completed"},
                          headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == MaintenanceStatus.COMPLETED.value

    response = client.delete(f"/api/admin/maintenance-requests/{leak.id}", headers=admin_headers)
    assert response.json() == {"message": "Maintenance request deleted successfully"}
    assert client.get(f"/api/maintenance-requests/{leak.id}", headers=admin_headers).status_code == 404
