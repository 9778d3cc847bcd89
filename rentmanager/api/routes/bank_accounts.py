"""
Bank Account Endpoints
Owners manage their own accounts; admins manage all of them
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import get_current_user
from rentmanager.database import get_db
from rentmanager.models.user import User, UserRole
from rentmanager.repositories import BankAccountRepository
from rentmanager.schemas.bank_account import BankAccountCreate, BankAccountResponse, BankAccountUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Bank Accounts"])


def _is_admin_or_self(user: User, person_id) -> bool:
    return user.role == UserRole.ADMIN or user.person_id == person_id


@router.get("", response_model=List[BankAccountResponse])
def list_bank_accounts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role not in (UserRole.ADMIN, UserRole.MANAGER):
        raise HTTPException(status_code=403, detail="Admin or manager role required to view all bank accounts")
    return BankAccountRepository(db).get_all()


@router.get("/person/{person_id}", response_model=List[BankAccountResponse])
def list_bank_accounts_by_person(
    person_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not _is_admin_or_self(current_user, person_id):
        raise HTTPException(status_code=403, detail="You can only access your own bank accounts")
    return BankAccountRepository(db).get_by_person(person_id)


@router.get("/{account_id}", response_model=BankAccountResponse)
def get_bank_account(
    account_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    account = BankAccountRepository(db).get(account_id)
    if account is None:
        raise HTTPException(status_code=404, detail="Bank account not found")
    if not _is_admin_or_self(current_user, account.person_id):
        raise HTTPException(status_code=403, detail="You can only access your own bank accounts")
    return account


@router.post("", response_model=BankAccountResponse, status_code=status.HTTP_201_CREATED)
def create_bank_account(
    account_in: BankAccountCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not _is_admin_or_self(current_user, account_in.person_id):
        logger.warning(
            f"User {current_user.email} attempted to create a bank account for person {account_in.person_id}"
        )
        raise HTTPException(status_code=403, detail="You can only create bank accounts for yourself")
    try:
        return BankAccountRepository(db).create(account_in.model_dump())
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/{account_id}", response_model=BankAccountResponse)
def update_bank_account(
    account_id: UUID,
    account_in: BankAccountUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    accounts = BankAccountRepository(db)
    try:
        account = accounts.get(account_id)
        if account is None:
            raise HTTPException(status_code=404, detail="Bank account not found")
        if not _is_admin_or_self(current_user, account.person_id):
            raise HTTPException(status_code=403, detail="You can only update your own bank accounts")
        return accounts.update(account, account_in.model_dump(exclude_unset=True))
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bank_account(
    account_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    accounts = BankAccountRepository(db)
    account = accounts.get(account_id)
    if account is None:
        raise HTTPException(status_code=404, detail="Bank account not found")
    try:
        accounts.delete(account)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return None
