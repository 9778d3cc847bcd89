"""
Contract Endpoints (admin)
Generates the rental agreement PDF
"""
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import require_admin
from rentmanager.database import get_db
from rentmanager.repositories import PersonRepository, PropertyRepository, to_uuid
from rentmanager.schemas.contract import ContractGenerateRequest
from rentmanager.services import contract_pdf_service
from rentmanager.services.contract_pdf_service import ContractData, ContractParty

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Contracts"], dependencies=[Depends(require_admin)])


def _parse_id(value: str, label: str) -> uuid.UUID:
    try:
        return to_uuid(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID")


def _party(persons: PersonRepository, person_id: uuid.UUID, label: str) -> ContractParty:
    person = persons.get(person_id)
    if person is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return ContractParty(full_name=person.full_name, nit=person.nit or "")


def _optional_party(persons: PersonRepository, raw_id: Optional[str], label: str) -> Optional[ContractParty]:
    if not raw_id:
        return None
    return _party(persons, _parse_id(raw_id, label.lower()), label)


def _duration(value: Optional[str]) -> Optional[int]:
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


@router.post("/generate")
def generate_contract(request: ContractGenerateRequest, db: Session = Depends(get_db)):
    """
    Build the rental agreement, store it as {contract_id}.pdf and return it.

    The new contract id is sent back in the X-Contract-ID header.
    """
    renter_id = _parse_id(request.renter_id, "renter")
    owner_id = _parse_id(request.owner_id, "owner")
    property_id = _parse_id(request.property_id, "property")

    persons = PersonRepository(db)
    renter = _party(persons, renter_id, "Renter")
    owner = _party(persons, owner_id, "Owner")

    prop = PropertyRepository(db).get(property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail="Property not found")

    cosigner = _optional_party(persons, request.cosigner_id, "Cosigner")
    witness = _optional_party(persons, request.witness_id, "Witness")

    data = ContractData(
        owner=owner,
        renter=renter,
        property_address=prop.address,
        start_date=request.start_date,
        end_date=request.end_date,
        monthly_rent=request.monthly_rent,
        cosigner=cosigner,
        witness=witness,
        requires_deposit=request.requires_deposit,
        deposit_amount=request.deposit_amount,
        deposit_text=request.deposit_text or "",
        additional_info=request.additional_info or "",
        contract_duration=_duration(request.contract_duration),
    )

    contract_id = str(uuid.uuid4())
    try:
        pdf_bytes = contract_pdf_service.build_contract_pdf(data)
        contract_pdf_service.save_contract(contract_id, pdf_bytes)
    except Exception as e:
        logger.error(f"[CONTRACT] Error generating contract PDF: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate contract")

    logger.info(f"[CONTRACT] Contract {contract_id} generated for renter {renter_id}")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": "attachment; filename=contrato_arrendamiento.pdf",
            "X-Contract-ID": contract_id,
        },
    )
