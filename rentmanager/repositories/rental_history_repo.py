from datetime import datetime
from typing import Iterable, List

from rentmanager.models.rental_history import RentalHistory
from rentmanager.repositories.base import BaseRepository, to_uuid


class RentalHistoryRepository(BaseRepository[RentalHistory]):
    model = RentalHistory

    def get_by_person(self, person_id) -> List[RentalHistory]:
        return self.db.query(RentalHistory).filter(RentalHistory.person_id == to_uuid(person_id)).all()

    def get_by_rental(self, rental_id) -> List[RentalHistory]:
        return self.db.query(RentalHistory).filter(RentalHistory.rental_id == to_uuid(rental_id)).all()

    def get_by_rental_ids(self, rental_ids: Iterable) -> List[RentalHistory]:
        ids = [to_uuid(i) for i in rental_ids]
        if not ids:
            return []
        return self.db.query(RentalHistory).filter(RentalHistory.rental_id.in_(ids)).all()

    def get_by_status(self, status: str) -> List[RentalHistory]:
        return self.db.query(RentalHistory).filter(RentalHistory.status == status).all()

    def get_by_date_range(self, start: datetime, end: datetime) -> List[RentalHistory]:
        return (
            self.db.query(RentalHistory)
            .filter(RentalHistory.end_date >= start, RentalHistory.end_date <= end)
            .all()
        )
