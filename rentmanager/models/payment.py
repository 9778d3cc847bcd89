from datetime import datetime
from sqlalchemy import Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Uuid
import uuid

from rentmanager.db.base import Base


class RentPayment(Base):
    """A single rent payment made against a rental"""
    __tablename__ = "rent_payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    rental_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("rentals.id"), nullable=False, index=True)
    payment_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    amount_paid: Mapped[float] = mapped_column(Float, nullable=False)
    paid_on_time: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
