import os

from rentmanager.services import contract_pdf_service


def _payload(owner, renter, prop, **extra):
    payload = {
        "owner_id": str(owner.person_id),
        "renter_id": str(renter.person_id),
        "property_id": str(prop.id),
        "start_date": "2024-03-01",
        "end_date": "2025-02-28",
        "monthly_rent": 1600000,
        "requires_deposit": True,
        "deposit_amount": 1600000,
    }
    payload.update(extra)
    return payload


def test_generate_contract_returns_pdf(client, manager, resident, managed_property, admin_headers):
    response = client.post("/api/admin/contracts/generate",
                           json=_payload(manager, resident, managed_property), headers=admin_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")
    assert "contrato_arrendamiento.pdf" in response.headers["content-disposition"]

    contract_id = response.headers["x-contract-id"]
    assert os.path.exists(contract_pdf_service.contract_path(contract_id))


def test_generate_contract_with_cosigner_and_witness(client, admin, manager, resident, other_resident,
                                                     managed_property, admin_headers):
    payload = _payload(manager, resident, managed_property,
                       cosigner_id=str(other_resident.person_id), witness_id=str(admin.person_id),
                       contract_duration="12", additional_info="Incluye parqueadero")
    response = client.post("/api/admin/contracts/generate", json=payload, headers=admin_headers)
    assert response.status_code == 200


def test_generate_contract_validation(client, manager, resident, managed_property, admin_headers,
                                      manager_headers):
    url = "/api/admin/contracts/generate"
    assert client.post(url, json=_payload(manager, resident, managed_property),
                       headers=manager_headers).status_code == 403

    response = client.post(url, json=_payload(manager, resident, managed_property, renter_id="abc"),
                           headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid renter ID"

    response = client.post(url, json=_payload(manager, resident, managed_property,
                                              owner_id="00000000-0000-0000-0000-000000000000"),
                           headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Owner not found"


def test_money_helpers():
    assert contract_pdf_service.number_to_words(21) == "veintiuno"
    assert contract_pdf_service.amount_in_words(1600000) == "UN MILLÓN SEISCIENTOS MIL"
    assert contract_pdf_service.format_money(1600000) == "$1,600,000.00"
