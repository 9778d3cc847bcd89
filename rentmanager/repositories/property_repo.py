from typing import List

from rentmanager.models.property import Property
from rentmanager.models.rental import Rental
from rentmanager.repositories.base import BaseRepository, to_uuid


class PropertyRepository(BaseRepository[Property]):
    model = Property

    def get_by_manager(self, person_id) -> List[Property]:
        """Properties whose manager list contains the person."""
        # manager_ids is a JSON list, filtered in Python to stay portable
        return [p for p in self.get_all() if p.is_managed_by(person_id)]

    def get_by_resident(self, person_id) -> List[Property]:
        return self.db.query(Property).filter(Property.resident_id == to_uuid(person_id)).all()

    def get_by_renter(self, person_id) -> List[Property]:
        """Properties the person rents, reached through their rentals."""
        rows = self.db.query(Rental.property_id).filter(Rental.renter_id == to_uuid(person_id)).all()
        return self.get_by_ids({row[0] for row in rows})
