from typing import Optional

from rentmanager.models.pricing import Pricing
from rentmanager.repositories.base import BaseRepository, to_uuid


class PricingRepository(BaseRepository[Pricing]):
    model = Pricing

    def get_by_rental(self, rental_id) -> Optional[Pricing]:
        return self.db.query(Pricing).filter(Pricing.rental_id == to_uuid(rental_id)).first()
