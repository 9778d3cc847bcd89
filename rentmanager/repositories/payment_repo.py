from datetime import datetime
from typing import Iterable, List

from rentmanager.models.payment import RentPayment
from rentmanager.repositories.base import BaseRepository, to_uuid


class PaymentRepository(BaseRepository[RentPayment]):
    model = RentPayment

    def get_by_rental(self, rental_id) -> List[RentPayment]:
        return (
            self.db.query(RentPayment)
            .filter(RentPayment.rental_id == to_uuid(rental_id))
            .order_by(RentPayment.payment_date.desc())
            .all()
        )

    def get_by_rental_ids(self, rental_ids: Iterable) -> List[RentPayment]:
        ids = [to_uuid(i) for i in rental_ids]
        if not ids:
            return []
        return self.db.query(RentPayment).filter(RentPayment.rental_id.in_(ids)).all()

    def get_by_date_range(self, start: datetime, end: datetime) -> List[RentPayment]:
        return (
            self.db.query(RentPayment)
            .filter(RentPayment.payment_date >= start, RentPayment.payment_date <= end)
            .all()
        )

    def get_late(self) -> List[RentPayment]:
        return self.db.query(RentPayment).filter(RentPayment.paid_on_time.is_(False)).all()
