from typing import Iterable, List

from rentmanager.models.maintenance import MaintenanceRequest, MaintenanceStatus
from rentmanager.repositories.base import BaseRepository, to_uuid


class MaintenanceRepository(BaseRepository[MaintenanceRequest]):
    model = MaintenanceRequest

    def get_by_property(self, property_id) -> List[MaintenanceRequest]:
        return (
            self.db.query(MaintenanceRequest)
            .filter(MaintenanceRequest.property_id == to_uuid(property_id))
            .all()
        )

    def get_by_property_ids(self, property_ids: Iterable) -> List[MaintenanceRequest]:
        ids = [to_uuid(i) for i in property_ids]
        if not ids:
            return []
        return self.db.query(MaintenanceRequest).filter(MaintenanceRequest.property_id.in_(ids)).all()

    def get_by_renter(self, renter_id) -> List[MaintenanceRequest]:
        return (
            self.db.query(MaintenanceRequest)
            .filter(MaintenanceRequest.renter_id == to_uuid(renter_id))
            .all()
        )

    def get_by_status(self, status: MaintenanceStatus) -> List[MaintenanceRequest]:
        return self.db.query(MaintenanceRequest).filter(MaintenanceRequest.status == status).all()
