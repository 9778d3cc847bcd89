from datetime import datetime, timezone

import pytest

from rentmanager.models import Rental, RentalHistory
from tests.conftest import auth_headers


@pytest.fixture
def history(db, rental, resident):
    record = RentalHistory(person_id=resident.person_id, rental_id=rental.id, status="ended",
                           end_reason="Fin de contrato", end_date=datetime(2024, 6, 30, tzinfo=timezone.utc))
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture
def other_history(db, other_property, other_resident):
    rental = Rental(property_id=other_property.id, renter_id=other_resident.person_id)
    db.add(rental)
    db.commit()
    record = RentalHistory(person_id=other_resident.person_id, rental_id=rental.id, status="evicted",
                           end_date=datetime(2023, 1, 15, tzinfo=timezone.utc))
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def test_list_scoped_by_role(client, history, other_history, admin_headers, manager_headers, resident_headers):
    assert len(client.get("/api/rental-history", headers=admin_headers).json()) == 2
    assert [h["id"] for h in client.get("/api/rental-history", headers=manager_headers).json()] == [str(history.id)]
    assert [h["id"] for h in client.get("/api/rental-history", headers=resident_headers).json()] == [str(history.id)]


def test_admin_list_filters(client, history, other_history, admin_headers):
    response = client.get("/api/rental-history", params={"status": "evicted"}, headers=admin_headers)
    assert [h["id"] for h in response.json()] == [str(other_history.id)]

    response = client.get("/api/rental-history", params={"start_date": "2024-01-01", "end_date": "2024-12-31"},
                          headers=admin_headers)
    assert [h["id"] for h in response.json()] == [str(history.id)]

    response = client.get("/api/rental-history", params={"start_date": "ayer", "end_date": "2024-12-31"},
                          headers=admin_headers)
    assert response.status_code == 400


def test_status_and_date_range_are_admin_only(client, history, admin_headers, resident_headers):
    assert len(client.get("/api/rental-history/status/ended", headers=admin_headers).json()) == 1
    assert client.get("/api/rental-history/status/ended", headers=resident_headers).status_code == 403

    params = {"start_date": "2024-06-01", "end_date": "2024-07-01"}
    assert len(client.get("/api/rental-history/date-range", params=params, headers=admin_headers).json()) == 1
    assert client.get("/api/rental-history/date-range", params=params, headers=resident_headers).status_code == 403
    assert client.get("/api/rental-history/date-range", headers=admin_headers).status_code == 400


def test_for_rentals_filters_to_visible(client, history, other_history, rental, manager_headers):
    response = client.post("/api/rental-history/for-rentals",
                           json={"rental_ids": [str(rental.id), str(other_history.rental_id)]},
                           headers=manager_headers)
    assert [h["id"] for h in response.json()] == [str(history.id)]


def test_by_person(client, history, resident, other_resident, resident_headers, manager_headers):
    assert len(client.get(f"/api/rental-history/person/{resident.person_id}", headers=resident_headers).json()) == 1
    assert client.get(f"/api/rental-history/person/{other_resident.person_id}",
                      headers=resident_headers).status_code == 403
    assert client.get(f"/api/rental-history/person/{other_resident.person_id}",
                      headers=manager_headers).status_code == 200


def test_by_rental_allows_managing_manager(client, history, other_history, rental, other_resident,
                                           manager_headers, resident_headers):
    assert len(client.get(f"/api/rental-history/rental/{rental.id}", headers=manager_headers).json()) == 1
    assert len(client.get(f"/api/rental-history/rental/{rental.id}", headers=resident_headers).json()) == 1

    url = f"/api/rental-history/rental/{other_history.rental_id}"
    assert client.get(url, headers=manager_headers).status_code == 403
    assert client.get(url, headers=resident_headers).status_code == 403
    assert client.get("/api/rental-history/rental/00000000-0000-0000-0000-000000000000",
                      headers=resident_headers).status_code == 404


def test_get_single_record(client, history, other_resident, resident_headers, manager_headers):
    url = f"/api/rental-history/{history.id}"
    assert client.get(url, headers=resident_headers).json()["end_reason"] == "Fin de contrato"
    assert client.get(url, headers=manager_headers).status_code == 200
    assert client.get(url, headers=auth_headers(other_resident)).status_code == 403


def test_admin_crud(client, rental, resident, admin_headers, manager_headers):
    payload = {"person_id": str(resident.person_id), "rental_id": str(rental.id), "status": "active"}
    assert client.post("/api/admin/rental-history", json=payload, headers=manager_headers).status_code == 403

    response = client.post("/api/admin/rental-history", json=payload, headers=admin_headers)
    assert response.status_code == 201
    history_id = response.json()["id"]

    response = client.put(f"/api/admin/rental-history/{history_id}",
                          json={"status": "ended", "end_date": "2025-01-31"}, headers=admin_headers)
    assert response.json()["status"] == "ended"
    assert response.json()["end_date"].startswith("2025-01-31")

    response = client.delete(f"/api/admin/rental-history/{history_id}", headers=admin_headers)
    assert response.json() == {"message": "Rental history record deleted successfully"}
