from typing import Optional

from rentmanager.models.user import User
from rentmanager.repositories.base import BaseRepository, to_uuid


class UserRepository(BaseRepository[User]):
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_person_id(self, person_id) -> Optional[User]:
        return self.db.query(User).filter(User.person_id == to_uuid(person_id)).first()
