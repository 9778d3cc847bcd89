from datetime import datetime
from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Uuid
import uuid

from rentmanager.db.base import Base


class Rental(Base):
    __tablename__ = "rentals"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    property_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("properties.id"), nullable=False, index=True)
    renter_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("persons.id"), nullable=False, index=True)
    bank_account_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
    payment_terms: Mapped[str] = mapped_column(String(255), nullable=True, default="")
    unpaid_months: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
