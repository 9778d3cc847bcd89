"""
Maintenance Request Endpoints
"""
import logging
from typing import List, Set
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rentmanager.core.deps import get_current_user, require_admin
from rentmanager.database import get_db
from rentmanager.db.base import utcnow
from rentmanager.models.maintenance import MaintenanceStatus
from rentmanager.models.user import User, UserRole
from rentmanager.repositories import MaintenanceRepository, PropertyRepository, RentalRepository
from rentmanager.schemas.maintenance import (
    MaintenanceRequestCreate,
    MaintenanceRequestResponse,
    MaintenanceRequestUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Maintenance"])
admin_router = APIRouter(tags=["Maintenance"], dependencies=[Depends(require_admin)])


def _resident_property_ids(db: Session, person_id) -> Set[UUID]:
    """Properties a resident rents or lives in"""
    ids = {r.property_id for r in RentalRepository(db).get_by_renter(person_id)}
    ids.update(p.id for p in PropertyRepository(db).get_by_resident(person_id))
    return ids


@router.get("", response_model=List[MaintenanceRequestResponse])
def list_maintenance_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="You are not authorized to view all maintenance requests")
    return MaintenanceRepository(db).get_all()


@router.post("/property-ids", response_model=List[MaintenanceRequestResponse])
def list_maintenance_requests_by_property_ids(
    property_ids: List[UUID] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Requests for the given properties, limited to the ones the caller may see"""
    if not property_ids:
        return []

    if current_user.role == UserRole.ADMIN:
        allowed = list(property_ids)
    elif current_user.role == UserRole.MANAGER:
        managed = {p.id for p in PropertyRepository(db).get_by_manager(current_user.person_id)}
        allowed = [pid for pid in property_ids if pid in managed]
    elif current_user.role in (UserRole.RESIDENT, UserRole.USER):
        if current_user.person_id is None:
            raise HTTPException(status_code=400, detail="User PersonID not found in token")
        associated = _resident_property_ids(db, current_user.person_id)
        allowed = [pid for pid in property_ids if pid in associated]
    else:
        raise HTTPException(status_code=403, detail="You are not authorized for this operation")

    return MaintenanceRepository(db).get_by_property_ids(allowed)


@router.get("/property/{property_id}", response_model=List[MaintenanceRequestResponse])
def list_maintenance_requests_by_property(
    property_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return MaintenanceRepository(db).get_by_property(property_id)


@router.get("/renter/{renter_id}", response_model=List[MaintenanceRequestResponse])
def list_maintenance_requests_by_renter(
    renter_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return MaintenanceRepository(db).get_by_renter(renter_id)


@router.get("/status/{request_status}", response_model=List[MaintenanceRequestResponse])
def list_maintenance_requests_by_status(
    request_status: MaintenanceStatus,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return MaintenanceRepository(db).get_by_status(request_status)


@router.get("/{request_id}", response_model=MaintenanceRequestResponse)
def get_maintenance_request(
    request_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    request = MaintenanceRepository(db).get(request_id)
    if request is None:
        raise HTTPException(status_code=404, detail="Maintenance request not found")

    if current_user.role == UserRole.ADMIN:
        return request

    if current_user.role == UserRole.MANAGER:
        prop = PropertyRepository(db).get(request.property_id)
        if prop is not None and prop.is_managed_by(current_user.person_id):
            return request
        raise HTTPException(status_code=403, detail="Manager not authorized for this request")

    if current_user.role in (UserRole.RESIDENT, UserRole.USER):
        if request.renter_id is not None and request.renter_id == current_user.person_id:
            return request
        rented = {r.property_id for r in RentalRepository(db).get_by_renter(current_user.person_id)}
        if request.property_id in rented:
            return request
        raise HTTPException(status_code=403, detail="Resident/User not authorized for this request")

    raise HTTPException(status_code=403, detail="User role not authorized")


@router.post("", response_model=MaintenanceRequestResponse, status_code=status.HTTP_201_CREATED)
def create_maintenance_request(
    request_in: MaintenanceRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Residents always file requests in their own name"""
    data = request_in.model_dump()

    if current_user.role == UserRole.RESIDENT:
        if current_user.person_id is None:
            raise HTTPException(status_code=400, detail="User creating request does not have an associated PersonID")
        data["renter_id"] = current_user.person_id

    if data.get("property_id") is None:
        raise HTTPException(status_code=400, detail="PropertyID is required")
    if not (data.get("description") or "").strip():
        raise HTTPException(status_code=400, detail="Description is required")

    if data.get("request_date") is None:
        data["request_date"] = utcnow()
    if data.get("status") is None:
        data["status"] = MaintenanceStatus.PENDING

    try:
        request = MaintenanceRepository(db).create(data)
        logger.info(f"Maintenance request {request.id} filed for property {request.property_id}")
        return request
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create maintenance request: {e}"
        )


# ==================== ADMIN ====================

@admin_router.put("/{request_id}", response_model=MaintenanceRequestResponse)
def update_maintenance_request(
    request_id: UUID,
    request_in: MaintenanceRequestUpdate,
    db: Session = Depends(get_db),
):
    requests = MaintenanceRepository(db)
    try:
        request = requests.get(request_id)
        if request is None:
            raise HTTPException(status_code=404, detail="Maintenance request not found")
        return requests.update(request, request_in.model_dump(exclude_unset=True))
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@admin_router.delete("/{request_id}")
def delete_maintenance_request(request_id: UUID, db: Session = Depends(get_db)):
    requests = MaintenanceRepository(db)
    request = requests.get(request_id)
    if request is None:
        raise HTTPException(status_code=404, detail="Maintenance request not found")
    try:
        requests.delete(request)
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return {"message": "Maintenance request deleted successfully"}
