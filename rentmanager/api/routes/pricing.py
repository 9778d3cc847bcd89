"""
Pricing Endpoints (admin)
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import require_admin
from rentmanager.database import get_db
from rentmanager.repositories import PricingRepository
from rentmanager.schemas.pricing import PricingCreate, PricingResponse, PricingUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pricing"], dependencies=[Depends(require_admin)])


def _validate(data: dict) -> None:
    if "monthly_rent" in data and (data["monthly_rent"] is None or data["monthly_rent"] <= 0):
        raise HTTPException(status_code=400, detail="MonthlyRent must be positive")
    if "due_day" in data and (data["due_day"] is None or not 1 <= data["due_day"] <= 31):
        raise HTTPException(status_code=400, detail="DueDay must be between 1 and 31")


@router.post("", response_model=PricingResponse, status_code=status.HTTP_201_CREATED)
def create_pricing(pricing_in: PricingCreate, db: Session = Depends(get_db)):
    if pricing_in.rental_id is None:
        raise HTTPException(status_code=400, detail="RentalID is required")
    data = pricing_in.model_dump()
    _validate(data)
    try:
        pricing = PricingRepository(db).create(data)
        logger.info(f"Pricing {pricing.id} created for rental {pricing.rental_id}")
        return pricing
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("", response_model=List[PricingResponse])
def list_pricing(db: Session = Depends(get_db)):
    return PricingRepository(db).get_all()


@router.get("/rental/{rental_id}", response_model=PricingResponse)
def get_pricing_by_rental(rental_id: UUID, db: Session = Depends(get_db)):
    pricing = PricingRepository(db).get_by_rental(rental_id)
    if pricing is None:
        raise HTTPException(status_code=404, detail="No pricing information found for this rental")
    return pricing


@router.get("/{pricing_id}", response_model=PricingResponse)
def get_pricing(pricing_id: UUID, db: Session = Depends(get_db)):
    pricing = PricingRepository(db).get(pricing_id)
    if pricing is None:
        raise HTTPException(status_code=404, detail="Pricing record not found")
    return pricing


@router.put("/{pricing_id}", response_model=PricingResponse)
def update_pricing(pricing_id: UUID, pricing_in: PricingUpdate, db: Session = Depends(get_db)):
    repo = PricingRepository(db)
    try:
        pricing = repo.get(pricing_id)
        if pricing is None:
            raise HTTPException(status_code=404, detail="Pricing record not found")
        data = pricing_in.model_dump(exclude_unset=True)
        if data.get("rental_id") is None:
            data.pop("rental_id", None)
        _validate(data)
        return repo.update(pricing, data)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{pricing_id}")
def delete_pricing(pricing_id: UUID, db: Session = Depends(get_db)):
    repo = PricingRepository(db)
    pricing = repo.get(pricing_id)
    if pricing is None:
        raise HTTPException(status_code=404, detail="Pricing record not found")
    try:
        repo.delete(pricing)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return {"message": "Pricing record deleted successfully"}
