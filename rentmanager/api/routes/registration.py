"""
Manager Registration Endpoint

A prospective manager registers themselves together with their first
property, bank account, rental and pricing. The account starts as pending
until an administrator approves it.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import get_current_user
from rentmanager.core.security import encode_password, get_password_hash
from rentmanager.database import get_db
from rentmanager.models import BankAccount, Person, Pricing, Property, Rental, User, UserRole, UserStatus
from rentmanager.repositories import UserRepository
from rentmanager.schemas.registration import ManagerRegistrationRequest, ManagerRegistrationResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Registration"])


@router.post("/manager", response_model=ManagerRegistrationResponse, status_code=status.HTTP_201_CREATED)
def register_manager(
    request: ManagerRegistrationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if UserRepository(db).get_by_email(request.email) is not None:
        raise HTTPException(status_code=400, detail="A user with this email already exists")

    try:
        person = Person(full_name=request.full_name, phone=request.phone, nit=request.nit or "")
        db.add(person)
        db.flush()

        prop = Property(
            address=request.property_address,
            apt_number=request.property_apt_number or "",
            city=request.property_city,
            state=request.property_state,
            zip_code=request.property_zip_code or "",
            type=request.property_type,
            resident_id=person.id,
            manager_ids=[str(person.id)],
        )
        account = BankAccount(
            person_id=person.id,
            bank_name=request.bank_name,
            account_type=request.account_type,
            account_number=request.account_number,
            account_holder=request.account_holder,
        )
        user = User(
            email=request.email,
            password_hash=get_password_hash(encode_password(request.password)),
            role=UserRole.MANAGER,
            status=UserStatus.PENDING,
            person_id=person.id,
        )
        db.add_all([prop, account, user])
        db.flush()

        # the manager starts out as the renter of their own property
        rental = Rental(
            property_id=prop.id,
            renter_id=person.id,
            bank_account_id=account.id,
            start_date=request.start_date,
            end_date=request.end_date,
            payment_terms=request.payment_terms or "",
            unpaid_months=0,
        )
        db.add(rental)
        db.flush()

        db.add(Pricing(
            rental_id=rental.id,
            monthly_rent=request.monthly_rent,
            security_deposit=request.security_deposit,
            utilities_included=list(request.utilities_included),
            tenant_responsible_for=list(request.tenant_responsible_for),
            late_fee=request.late_fee,
            due_day=request.due_day,
        ))
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Manager registration failed for {request.email}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info(f"Manager {request.email} registered (person {person.id}, property {prop.id}) by {current_user.email}")
    return ManagerRegistrationResponse(
        user_id=user.id,
        person_id=person.id,
        property_id=prop.id,
        message="Manager registration successful. An administrator will review and approve your account.",
    )
