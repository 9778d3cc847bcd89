"""
Rental History Endpoints
"""
import logging
from typing import List, Optional, Set
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from rentmanager.core.dates import parse_query_date
from rentmanager.core.deps import date_range, get_current_user, require_admin
from rentmanager.database import get_db
from rentmanager.models.user import User, UserRole
from rentmanager.repositories import PropertyRepository, RentalHistoryRepository, RentalRepository
from rentmanager.schemas.common import RentalIdsRequest
from rentmanager.schemas.rental_history import (
    RentalHistoryCreate,
    RentalHistoryResponse,
    RentalHistoryUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Rental History"])
admin_router = APIRouter(tags=["Rental History"], dependencies=[Depends(require_admin)])


def _managed_rental_ids(db: Session, person_id) -> Set[UUID]:
    managed = PropertyRepository(db).get_by_manager(person_id)
    return {r.id for r in RentalRepository(db).get_by_property_ids([p.id for p in managed])}


def _own_rental_ids(db: Session, person_id) -> Set[UUID]:
    return {r.id for r in RentalRepository(db).get_by_renter(person_id)}


def _manages_rental(db: Session, user: User, rental_id) -> bool:
    rental = RentalRepository(db).get(rental_id)
    if rental is None:
        return False
    prop = PropertyRepository(db).get(rental.property_id)
    return prop is not None and prop.is_managed_by(user.person_id)


@router.get("", response_model=List[RentalHistoryResponse])
def list_rental_history(
    status_filter: Optional[str] = Query(None, alias="status"),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Admins may filter by status or by an end date range. Managers see the
    history of rentals on their properties, residents their own.
    """
    histories = RentalHistoryRepository(db)

    if current_user.role == UserRole.ADMIN:
        if status_filter:
            return histories.get_by_status(status_filter)
        if start_date and end_date:
            try:
                start = parse_query_date(start_date)
            except ValueError:
                raise HTTPException(status_code=400, detail="Invalid start_date format for admin filter.")
            try:
                end = parse_query_date(end_date)
            except ValueError:
                raise HTTPException(status_code=400, detail="Invalid end_date format for admin filter.")
            return histories.get_by_date_range(start, end)
        return histories.get_all()

    if current_user.role == UserRole.MANAGER:
        if current_user.person_id is None:
            raise HTTPException(status_code=400, detail="Manager PersonID not found in token")
        return histories.get_by_rental_ids(_managed_rental_ids(db, current_user.person_id))

    if current_user.role == UserRole.RESIDENT:
        if current_user.person_id is None:
            raise HTTPException(status_code=400, detail="Resident PersonID not found in token")
        return histories.get_by_rental_ids(_own_rental_ids(db, current_user.person_id))

    raise HTTPException(status_code=403, detail="You are not authorized to view rental history")


@router.get("/status/{history_status}", response_model=List[RentalHistoryResponse])
def list_rental_history_by_status(
    history_status: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return RentalHistoryRepository(db).get_by_status(history_status)


@router.get("/date-range", response_model=List[RentalHistoryResponse])
def list_rental_history_by_date_range(
    dates: tuple = Depends(date_range),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    start, end = dates
    return RentalHistoryRepository(db).get_by_date_range(start, end)


@router.post("/for-rentals", response_model=List[RentalHistoryResponse])
def list_rental_history_for_rentals(
    payload: RentalIdsRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """History for a set of rentals, limited to the rentals the caller may see"""
    requested = list(payload.rental_ids)

    if current_user.role == UserRole.ADMIN:
        allowed = requested
    elif current_user.role == UserRole.RESIDENT:
        own = _own_rental_ids(db, current_user.person_id)
        allowed = [rid for rid in requested if rid in own]
    elif current_user.role == UserRole.MANAGER:
        managed = _managed_rental_ids(db, current_user.person_id)
        allowed = [rid for rid in requested if rid in managed]
    else:
        allowed = []

    return RentalHistoryRepository(db).get_by_rental_ids(allowed)


@router.get("/person/{person_id}", response_model=List[RentalHistoryResponse])
def list_rental_history_by_person(
    person_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role not in (UserRole.ADMIN, UserRole.MANAGER) and current_user.person_id != person_id:
        raise HTTPException(status_code=403, detail="You are not authorized to view rental history for this person")
    return RentalHistoryRepository(db).get_by_person(person_id)


@router.get("/rental/{rental_id}", response_model=List[RentalHistoryResponse])
def list_rental_history_by_rental(
    rental_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role != UserRole.ADMIN:
        rental = RentalRepository(db).get(rental_id)
        if rental is None:
            raise HTTPException(status_code=404, detail="Rental not found")
        if current_user.role == UserRole.MANAGER:
            if not _manages_rental(db, current_user, rental_id):
                raise HTTPException(status_code=403, detail="Manager not authorized for this rental's history")
        elif current_user.role != UserRole.RESIDENT or rental.renter_id != current_user.person_id:
            raise HTTPException(
                status_code=403,
                detail="You are not authorized to view rental history for this rental"
            )
    return RentalHistoryRepository(db).get_by_rental(rental_id)


@router.get("/{history_id}", response_model=RentalHistoryResponse)
def get_rental_history(
    history_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    history = RentalHistoryRepository(db).get(history_id)
    if history is None:
        raise HTTPException(status_code=404, detail="Rental history not found")

    allowed = (
        current_user.role == UserRole.ADMIN
        or (current_user.role == UserRole.RESIDENT and history.person_id == current_user.person_id)
        or (current_user.role == UserRole.MANAGER and _manages_rental(db, current_user, history.rental_id))
    )
    if not allowed:
        raise HTTPException(status_code=403, detail="You are not authorized to view this rental history record")
    return history


# ==================== ADMIN ====================

@admin_router.post("", response_model=RentalHistoryResponse, status_code=status.HTTP_201_CREATED)
def create_rental_history(history_in: RentalHistoryCreate, db: Session = Depends(get_db)):
    try:
        return RentalHistoryRepository(db).create(history_in.model_dump())
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@admin_router.put("/{history_id}", response_model=RentalHistoryResponse)
def update_rental_history(history_id: UUID, history_in: RentalHistoryUpdate, db: Session = Depends(get_db)):
    histories = RentalHistoryRepository(db)
    try:
        history = histories.get(history_id)
        if history is None:
            raise HTTPException(status_code=404, detail="Rental history not found")
        return histories.update(history, history_in.model_dump(exclude_unset=True))
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@admin_router.delete("/{history_id}")
def delete_rental_history(history_id: UUID, db: Session = Depends(get_db)):
    histories = RentalHistoryRepository(db)
    history = histories.get(history_id)
    if history is None:
        raise HTTPException(status_code=404, detail="Rental history not found")
    try:
        histories.delete(history)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return {"message": "Rental history record deleted successfully"}
