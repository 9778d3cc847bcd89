"""
Person Endpoints
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import get_current_user
from rentmanager.database import get_db
from rentmanager.models.user import User, UserRole
from rentmanager.repositories import PersonRepository, PropertyRepository, RentalRepository
from rentmanager.schemas.person import PersonCreate, PersonResponse, PersonUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Persons"])


@router.get("", response_model=List[PersonResponse])
def list_persons(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Admins see everyone. Managers see the renters of the properties they
    manage plus themselves.
    """
    persons = PersonRepository(db)

    if current_user.role == UserRole.ADMIN:
        return persons.get_all()

    if current_user.role != UserRole.MANAGER:
        raise HTTPException(status_code=403, detail="You are not authorized to view all persons")

    if current_user.person_id is None:
        raise HTTPException(status_code=400, detail="Manager PersonID not found in token")

    managed = PropertyRepository(db).get_by_manager(current_user.person_id)
    if not managed:
        me = persons.get(current_user.person_id)
        return [me] if me else []

    ids = {current_user.person_id}
    for rental in RentalRepository(db).get_by_property_ids([p.id for p in managed]):
        if rental.renter_id:
            ids.add(rental.renter_id)
    return persons.get_by_ids(ids)


@router.get("/role/{role}", response_model=List[PersonResponse])
def list_persons_by_role(
    role: UserRole,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return PersonRepository(db).get_by_role(role)


@router.get("/{person_id}", response_model=PersonResponse)
def get_person(
    person_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role not in (UserRole.ADMIN, UserRole.MANAGER) and current_user.person_id != person_id:
        raise HTTPException(status_code=403, detail="You are not authorized to view this person")

    person = PersonRepository(db).get(person_id)
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return person


@router.post("", response_model=PersonResponse, status_code=status.HTTP_201_CREATED)
def create_person(
    person_in: PersonCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role not in (UserRole.ADMIN, UserRole.MANAGER):
        raise HTTPException(status_code=403, detail="You are not authorized to create a person")
    try:
        person = PersonRepository(db).create(person_in.model_dump())
        logger.info(f"[PERSON] Created person {person.id} by {current_user.email}")
        return person
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.put("/{person_id}", response_model=PersonResponse)
def update_person(
    person_id: UUID,
    person_in: PersonUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Admins may update anyone; other users only their own record"""
    if current_user.role != UserRole.ADMIN and current_user.person_id != person_id:
        raise HTTPException(status_code=403, detail="You are not authorized to update this person")

    persons = PersonRepository(db)
    try:
        person = persons.get(person_id)
        if person is None:
            raise HTTPException(status_code=404, detail="Person not found")
        return persons.update(person, person_in.model_dump(exclude_unset=True))
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_person(
    person_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a person along with its user account and bank accounts"""
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="You are not authorized to delete a person")

    persons = PersonRepository(db)
    person = persons.get(person_id)
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")

    try:
        persons.delete_cascade(person)
    except Exception as e:
        logger.error(f"[PERSON] Failed to delete person {person_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    logger.info(f"[PERSON] Deleted person {person_id}")
    return None
