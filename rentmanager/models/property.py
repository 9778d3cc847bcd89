from sqlalchemy import String, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Uuid
from typing import List
import uuid

from rentmanager.db.base import Base


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    apt_number: Mapped[str] = mapped_column(String(50), nullable=True, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=True, default="")
    state: Mapped[str] = mapped_column(String(100), nullable=True, default="")
    zip_code: Mapped[str] = mapped_column(String(20), nullable=True, default="")
    type: Mapped[str] = mapped_column(String(50), nullable=True, default="")
    resident_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=True, index=True)

    # Person ids stored as strings; at least one is required
    manager_ids: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    def is_managed_by(self, person_id) -> bool:
        return person_id is not None and str(person_id) in (self.manager_ids or [])
