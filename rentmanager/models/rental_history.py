from datetime import datetime
from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Uuid
import uuid

from rentmanager.db.base import Base


class RentalHistory(Base):
    """Closed or ongoing tenancy record for a person on a rental"""
    __tablename__ = "rental_history"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    person_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("persons.id"), nullable=False, index=True)
    rental_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("rentals.id"), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    end_reason: Mapped[str] = mapped_column(String(500), nullable=True, default="")
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
