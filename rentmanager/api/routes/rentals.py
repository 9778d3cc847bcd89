"""
Rental Endpoints
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import get_current_user, require_admin
from rentmanager.database import get_db
from rentmanager.models.user import User, UserRole
from rentmanager.repositories import PropertyRepository, RentalRepository
from rentmanager.schemas.rental import RentalCreate, RentalResponse, RentalUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rentals"])
admin_router = APIRouter(tags=["Rentals"], dependencies=[Depends(require_admin)])


@router.get("", response_model=List[RentalResponse])
def list_rentals(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    rentals = RentalRepository(db)

    if current_user.role == UserRole.ADMIN:
        return rentals.get_all()
    if current_user.role != UserRole.MANAGER:
        raise HTTPException(status_code=403, detail="You are not authorized to view all rentals via this endpoint.")
    if current_user.person_id is None:
        raise HTTPException(status_code=400, detail="Manager PersonID not found in token")

    managed = PropertyRepository(db).get_by_manager(current_user.person_id)
    return rentals.get_by_property_ids([p.id for p in managed])


@router.get("/active", response_model=List[RentalResponse])
def list_active_rentals(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Rentals whose end date is today or later"""
    return RentalRepository(db).get_active()


@router.get("/by-property/{property_id}", response_model=List[RentalResponse])
def list_rentals_by_property(
    property_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return RentalRepository(db).get_by_property(property_id)


@router.get("/by-renter/{renter_id}", response_model=List[RentalResponse])
def list_rentals_by_renter(
    renter_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return RentalRepository(db).get_by_renter(renter_id)


@router.get("/{rental_id}", response_model=RentalResponse)
def get_rental(
    rental_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    rental = RentalRepository(db).get(rental_id)
    if rental is None:
        raise HTTPException(status_code=404, detail="Rental not found")
    return rental


# ==================== ADMIN ====================

@admin_router.post("", response_model=RentalResponse, status_code=status.HTTP_201_CREATED)
def create_rental(rental_in: RentalCreate, db: Session = Depends(get_db)):
    try:
        rental = RentalRepository(db).create(rental_in.model_dump())
        logger.info(f"Rental created: {rental.id} (property {rental.property_id}, renter {rental.renter_id})")
        return rental
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@admin_router.put("/{rental_id}", response_model=RentalResponse)
def update_rental(rental_id: UUID, rental_in: RentalUpdate, db: Session = Depends(get_db)):
    rentals = RentalRepository(db)
    try:
        rental = rentals.get(rental_id)
        if rental is None:
            raise HTTPException(status_code=404, detail="Rental not found")
        return rentals.update(rental, rental_in.model_dump(exclude_unset=True))
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@admin_router.delete("/{rental_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rental(rental_id: UUID, db: Session = Depends(get_db)):
    rentals = RentalRepository(db)
    rental = rentals.get(rental_id)
    if rental is None:
        raise HTTPException(status_code=404, detail="Rental not found")
    try:
        rentals.delete(rental)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return None
