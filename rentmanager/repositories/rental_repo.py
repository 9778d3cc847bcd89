from datetime import datetime
from typing import Iterable, List, Optional

from rentmanager.db.base import utcnow
from rentmanager.models.rental import Rental
from rentmanager.repositories.base import BaseRepository, to_uuid


class RentalRepository(BaseRepository[Rental]):
    model = Rental

    def get_active(self, now: Optional[datetime] = None) -> List[Rental]:
        """Rentals whose end date has not passed yet."""
        now = now or utcnow()
        return self.db.query(Rental).filter(Rental.end_date >= now).all()

    def get_by_property(self, property_id) -> List[Rental]:
        return self.db.query(Rental).filter(Rental.property_id == to_uuid(property_id)).all()

    def get_by_property_ids(self, property_ids: Iterable) -> List[Rental]:
        ids = [to_uuid(i) for i in property_ids]
        if not ids:
            return []
        return self.db.query(Rental).filter(Rental.property_id.in_(ids)).all()

    def get_by_renter(self, renter_id) -> List[Rental]:
        return self.db.query(Rental).filter(Rental.renter_id == to_uuid(renter_id)).all()
