from sqlalchemy import Float, Integer, JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Uuid
from typing import List
import uuid

from rentmanager.db.base import Base


class Pricing(Base):
    __tablename__ = "pricing"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    rental_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("rentals.id"), nullable=False, index=True)
    monthly_rent: Mapped[float] = mapped_column(Float, nullable=False)
    security_deposit: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    utilities_included: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    tenant_responsible_for: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    late_fee: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    due_day: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
