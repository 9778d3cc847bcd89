"""
Property Endpoints
Reads for every authenticated role, updates and deletes for admins
"""
import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import get_current_user, require_admin
from rentmanager.database import get_db
from rentmanager.models.user import User, UserRole
from rentmanager.repositories import PropertyRepository, UserRepository
from rentmanager.schemas.property import PropertyCreate, PropertyResponse, PropertyUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Properties"])
admin_router = APIRouter(tags=["Properties"], dependencies=[Depends(require_admin)])


def _manager_list(manager_ids) -> List[str]:
    seen = []
    for manager_id in manager_ids or []:
        if str(manager_id) not in seen:
            seen.append(str(manager_id))
    return seen


# ==================== READ ====================

@router.get("", response_model=List[PropertyResponse])
def list_properties(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Admins see all properties, managers the ones they manage, residents their own"""
    properties = PropertyRepository(db)

    if current_user.role == UserRole.ADMIN:
        return properties.get_all()
    if current_user.role == UserRole.MANAGER:
        if current_user.person_id is None:
            raise HTTPException(status_code=400, detail="Manager PersonID not found in token")
        return properties.get_by_manager(current_user.person_id)
    if current_user.role == UserRole.RESIDENT:
        if current_user.person_id is None:
            raise HTTPException(status_code=400, detail="Resident PersonID not found in token")
        return properties.get_by_resident(current_user.person_id)

    raise HTTPException(status_code=403, detail="You are not authorized to view these properties")


@router.get("/resident/{resident_id}", response_model=List[PropertyResponse])
def list_properties_by_resident(
    resident_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role not in (UserRole.ADMIN, UserRole.MANAGER) and current_user.person_id != resident_id:
        raise HTTPException(status_code=403, detail="You can only access your own resident properties")
    return PropertyRepository(db).get_by_resident(resident_id)


@router.get("/manager/{manager_id}", response_model=List[PropertyResponse])
def list_properties_by_manager(
    manager_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role != UserRole.ADMIN and current_user.person_id != manager_id:
        raise HTTPException(status_code=403, detail="You can only access properties you manage")
    return PropertyRepository(db).get_by_manager(manager_id)


@router.get("/user/{user_id}", response_model=List[PropertyResponse])
def list_properties_by_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Properties reached through the rentals of the given user's person"""
    if current_user.role != UserRole.ADMIN and current_user.id != user_id:
        raise HTTPException(status_code=403, detail="You can only access your own properties")

    user = UserRepository(db).get(user_id)
    if user is None or user.person_id is None:
        return []
    return PropertyRepository(db).get_by_renter(user.person_id)


@router.get("/{property_id}", response_model=PropertyResponse)
def get_property(
    property_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    prop = PropertyRepository(db).get(property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop


# ==================== WRITE ====================

@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
def create_property(
    property_in: PropertyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a property; a manager creating one is always added as its manager"""
    if current_user.role not in (UserRole.ADMIN, UserRole.MANAGER):
        raise HTTPException(status_code=403, detail="Only managers and administrators can create properties")

    data = property_in.model_dump()
    manager_ids = _manager_list(data.pop("manager_ids"))
    if current_user.role == UserRole.MANAGER and current_user.person_id is not None:
        if str(current_user.person_id) not in manager_ids:
            logger.info(f"Adding manager {current_user.person_id} to new property's manager list")
            manager_ids.append(str(current_user.person_id))

    if not manager_ids:
        raise HTTPException(status_code=400, detail="A property must have at least one manager")

    try:
        prop = PropertyRepository(db).create({**data, "manager_ids": manager_ids})
        logger.info(f"Property created: {prop.id} ({prop.address})")
        return prop
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating property: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@admin_router.put("/{property_id}", response_model=PropertyResponse)
def update_property(
    property_id: UUID,
    property_in: PropertyUpdate,
    db: Session = Depends(get_db),
):
    properties = PropertyRepository(db)
    try:
        prop = properties.get(property_id)
        if prop is None:
            raise HTTPException(status_code=404, detail="Property not found")

        data = property_in.model_dump(exclude_unset=True)
        if "manager_ids" in data:
            data["manager_ids"] = _manager_list(data["manager_ids"])
            if not data["manager_ids"]:
                raise HTTPException(status_code=400, detail="A property must have at least one manager")

        return properties.update(prop, data)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@admin_router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(
    property_id: UUID,
    db: Session = Depends(get_db),
):
    properties = PropertyRepository(db)
    prop = properties.get(property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail="Property not found")
    try:
        properties.delete(prop)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return None
