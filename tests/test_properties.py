from datetime import datetime, timedelta, timezone

from rentmanager.models import Property, Rental


def test_property_listing_by_role(client, managed_property, other_property,
                                  admin_headers, manager_headers, resident_headers):
    assert len(client.get("/api/properties", headers=admin_headers).json()) == 2

    managed = client.get("/api/properties", headers=manager_headers).json()
    assert [p["id"] for p in managed] == [str(managed_property.id)]

    lived_in = client.get("/api/properties", headers=resident_headers).json()
    assert [p["id"] for p in lived_in] == [str(managed_property.id)]


def test_manager_creating_property_is_added_as_manager(client, db, manager, manager_headers):
    response = client.post("/api/properties", json={"address": "Avenida 68 # 1-1", "city": "Bogotá"},
                           headers=manager_headers)
    assert response.status_code == 201
    assert response.json()["manager_ids"] == [str(manager.person_id)]


def test_admin_must_supply_a_manager(client, admin, admin_headers):
    response = client.post("/api/properties", json={"address": "Sin gerente"}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "A property must have at least one manager"

    response = client.post("/api/properties",
                           json={"address": "Con gerente", "manager_ids": [str(admin.person_id)]},
                           headers=admin_headers)
    assert response.status_code == 201


def test_resident_cannot_create_property(client, resident_headers):
    response = client.post("/api/properties", json={"address": "x"}, headers=resident_headers)
    assert response.status_code == 403


def test_property_lookups(client, manager, resident, other_resident, managed_property, rental,
                          admin_headers, manager_headers, resident_headers):
    response = client.get(f"/api/properties/{managed_property.id}", headers=resident_headers)
    assert response.status_code == 200
    assert response.json()["address"] == "Calle 10 # 20-30"

    response = client.get(f"/api/properties/resident/{resident.person_id}", headers=resident_headers)
    assert len(response.json()) == 1
    response = client.get(f"/api/properties/resident/{other_resident.person_id}", headers=resident_headers)
    assert response.status_code == 403

    response = client.get(f"/api/properties/manager/{manager.person_id}", headers=manager_headers)
    assert len(response.json()) == 1
    response = client.get(f"/api/properties/manager/{manager.person_id}", headers=resident_headers)
    assert response.status_code == 403

    response = client.get(f"/api/properties/user/{resident.id}", headers=resident_headers)
    assert [p["id"] for p in response.json()] == [str(managed_property.id)]
    response = client.get(f"/api/properties/user/{other_resident.id}", headers=resident_headers)
    assert response.status_code == 403


def test_admin_update_and_delete_property(client, db, managed_property, admin_headers, manager_headers):
    url = f"/api/admin/properties/{managed_property.id}"

    assert client.put(url, json={"city": "Medellín"}, headers=manager_headers).status_code == 403

    response = client.put(url, json={"city": "Medellín"}, headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["city"] == "Medellín"

    response = client.put(url, json={"manager_ids": []}, headers=admin_headers)
    assert response.status_code == 400

    missing = "/api/admin/properties/00000000-0000-0000-0000-000000000000"
    assert client.put(missing, json={"city": "x"}, headers=admin_headers).status_code == 404

    assert client.delete(url, headers=admin_headers).status_code == 204
    db.expire_all()
    assert db.get(Property, managed_property.id) is None


# ==================== Rentals ====================

def test_rental_listing_by_role(client, db, rental, other_property, other_resident,
                                admin_headers, manager_headers, resident_headers):
    db.add(Rental(property_id=other_property.id, renter_id=other_resident.person_id))
    db.commit()

    assert len(client.get("/api/rentals", headers=admin_headers).json()) == 2
    managed = client.get("/api/rentals", headers=manager_headers).json()
    assert [r["id"] for r in managed] == [str(rental.id)]
    assert client.get("/api/rentals", headers=resident_headers).status_code == 403


def test_active_rentals(client, db, rental, other_property, other_resident, admin_headers):
    db.add(Rental(
        property_id=other_property.id,
        renter_id=other_resident.person_id,
        end_date=datetime.now(timezone.utc) - timedelta(days=1),
    ))
    db.commit()

    response = client.get("/api/rentals/active", headers=admin_headers)
    assert [r["id"] for r in response.json()] == [str(rental.id)]


def test_rental_lookups(client, rental, managed_property, resident, admin_headers):
    assert client.get(f"/api/rentals/{rental.id}", headers=admin_headers).json()["payment_terms"] == "monthly"
    assert len(client.get(f"/api/rentals/by-property/{managed_property.id}", headers=admin_headers).json()) == 1
    assert len(client.get(f"/api/rentals/by-renter/{resident.person_id}", headers=admin_headers).json()) == 1
    assert client.get("/api/rentals/00000000-0000-0000-0000-000000000000",
                      headers=admin_headers).status_code == 404


def test_admin_rental_crud(client, managed_property, other_resident, admin_headers, resident_headers):
    payload = {
        "property_id": str(managed_property.id),
        "renter_id": str(other_resident.person_id),
        "start_date": "2024-03-01",
        "end_date": "2025-02-28T00:00:00Z",
        "payment_terms": "monthly",
    }
    assert client.post("/api/admin/rentals", json=payload, headers=resident_headers).status_code == 403

    response = client.post("/api/admin/rentals", json=payload, headers=admin_headers)
    assert response.status_code == 201
    rental_id = response.json()["id"]
    assert response.json()["start_date"].startswith("2024-03-01")

    response = client.put(f"/api/admin/rentals/{rental_id}", json={"unpaid_months": 2}, headers=admin_headers)
    assert response.json()["unpaid_months"] == 2

    assert client.delete(f"/api/admin/rentals/{rental_id}", headers=admin_headers).status_code == 204
    assert client.delete(f"/api/admin/rentals/{rental_id}", headers=admin_headers).status_code == 404


def test_rental_rejects_bad_dates(client, managed_property, other_resident, admin_headers):
    payload = {
        "property_id": str(managed_property.id),
        "renter_id": str(other_resident.person_id),
        "start_date": "first of march",
    }
    assert client.post("/api/admin/rentals", json=payload, headers=admin_headers).status_code == 400


# ==================== Pricing ====================

def test_pricing_validation(client, rental, admin_headers):
    response = client.post("/api/admin/pricing", json={"monthly_rent": 100, "due_day": 5}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "RentalID is required"

    response = client.post("/api/admin/pricing", json={"rental_id": str(rental.id), "monthly_rent": 0, "due_day": 5},
                           headers=admin_headers)
    assert response.json()["detail"] == "MonthlyRent must be positive"

    response = client.post("/api/admin/pricing", json={"rental_id": str(rental.id), "monthly_rent": 10, "due_day": 32},
                           headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "DueDay must be between 1 and 31"


def test_pricing_crud(client, rental, admin_headers, manager_headers):
    payload = {"rental_id": str(rental.id), "monthly_rent": 1600000, "security_deposit": 1600000,
               "utilities_included": ["agua"], "due_day": 5}
    assert client.post("/api/admin/pricing", json=payload, headers=manager_headers).status_code == 403

    response = client.post("/api/admin/pricing", json=payload, headers=admin_headers)
    assert response.status_code == 201
    pricing_id = response.json()["id"]

    response = client.get(f"/api/admin/pricing/rental/{rental.id}", headers=admin_headers)
    assert response.json()["id"] == pricing_id

    response = client.put(f"/api/admin/pricing/{pricing_id}", json={**payload, "due_day": 10}, headers=admin_headers)
    assert response.json()["due_day"] == 10

    response = client.delete(f"/api/admin/pricing/{pricing_id}", headers=admin_headers)
    assert response.json() == {"message": "Pricing record deleted successfully"}
    assert client.get(f"/api/admin/pricing/{pricing_id}", headers=admin_headers).status_code == 404
    assert client.get(f"/api/admin/pricing/rental/{rental.id}", headers=admin_headers).status_code == 404
