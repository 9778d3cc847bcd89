"""
Rent Payment Endpoints
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import date_range, get_current_user, require_admin
from rentmanager.database import get_db
from rentmanager.models.user import User, UserRole
from rentmanager.repositories import PaymentRepository, PropertyRepository, RentalRepository
from rentmanager.schemas.payment import RentPaymentCreate, RentPaymentResponse, RentPaymentUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payments"])
admin_router = APIRouter(tags=["Payments"], dependencies=[Depends(require_admin)])


@router.get("", response_model=List[RentPaymentResponse])
def list_payments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="You are not authorized to view all payments")
    return PaymentRepository(db).get_all()


@router.get("/rental-ids", response_model=List[RentPaymentResponse])
def list_payments_by_rental_ids(
    rental_ids: List[UUID] = Query(default=[]),
    body_ids: List[UUID] = Body(default=[]),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Payments for several rentals; ids come from a JSON array body or repeated query values"""
    if current_user.role not in (UserRole.ADMIN, UserRole.MANAGER):
        raise HTTPException(status_code=403, detail="You are not authorized for this operation")
    ids = list(rental_ids) + list(body_ids)
    return PaymentRepository(db).get_by_rental_ids(ids)


@router.get("/rental/{rental_id}", response_model=List[RentPaymentResponse])
def list_payments_by_rental(
    rental_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return PaymentRepository(db).get_by_rental(rental_id)


@router.get("/{payment_id}", response_model=RentPaymentResponse)
def get_payment(
    payment_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Admins, the renter of the rental, or a manager of the rented property"""
    payment = PaymentRepository(db).get(payment_id)
    if payment is None:
        raise HTTPException(status_code=404, detail="Rent payment not found")

    if current_user.role == UserRole.ADMIN:
        return payment

    rental = RentalRepository(db).get(payment.rental_id)
    if rental is None:
        raise HTTPException(status_code=404, detail="Rental not found for this payment")

    if current_user.role == UserRole.RESIDENT and rental.renter_id == current_user.person_id:
        return payment

    if current_user.role == UserRole.MANAGER:
        prop = PropertyRepository(db).get(rental.property_id)
        if prop is None:
            raise HTTPException(status_code=500, detail="Could not verify property for manager authorization")
        if prop.is_managed_by(current_user.person_id):
            return payment

    raise HTTPException(status_code=403, detail="You are not authorized to view this payment")


# ==================== ADMIN ====================

@admin_router.get("/date-range", response_model=List[RentPaymentResponse])
def list_payments_by_date_range(
    dates: tuple = Depends(date_range),
    db: Session = Depends(get_db),
):
    start, end = dates
    return PaymentRepository(db).get_by_date_range(start, end)


@admin_router.get("/late", response_model=List[RentPaymentResponse])
def list_late_payments(db: Session = Depends(get_db)):
    return PaymentRepository(db).get_late()


@admin_router.post("", response_model=RentPaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment(payment_in: RentPaymentCreate, db: Session = Depends(get_db)):
    try:
        payment = PaymentRepository(db).create(payment_in.model_dump())
        logger.info(f"Payment {payment.id} recorded for rental {payment.rental_id}")
        return payment
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@admin_router.put("/{payment_id}", response_model=RentPaymentResponse)
def update_payment(payment_id: UUID, payment_in: RentPaymentUpdate, db: Session = Depends(get_db)):
    payments = PaymentRepository(db)
    try:
        payment = payments.get(payment_id)
        if payment is None:
            raise HTTPException(status_code=404, detail="Rent payment not found")
        return payments.update(payment, payment_in.model_dump(exclude_unset=True))
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@admin_router.delete("/{payment_id}")
def delete_payment(payment_id: UUID, db: Session = Depends(get_db)):
    payments = PaymentRepository(db)
    payment = payments.get(payment_id)
    if payment is None:
        raise HTTPException(status_code=404, detail="Rent payment not found")
    try:
        payments.delete(payment)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return {"message": "Rent payment deleted successfully"}
