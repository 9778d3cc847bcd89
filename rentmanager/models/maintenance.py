from sqlalchemy import Column, DateTime, ForeignKey, Text, Enum as SQLEnum, Uuid
from rentmanager.db.base import Base, TimestampMixin, utcnow
from enum import Enum
import uuid


class MaintenanceStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MaintenanceRequest(Base, TimestampMixin):
    __tablename__ = "maintenance_requests"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    property_id = Column(Uuid, ForeignKey("properties.id"), nullable=False, index=True)
    renter_id = Column(Uuid, ForeignKey("persons.id"), nullable=True, index=True)
    description = Column(Text, nullable=False)
    request_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    status = Column(
        SQLEnum(MaintenanceStatus, values_callable=lambda e: [m.value for m in e]),
        default=MaintenanceStatus.PENDING,
        nullable=False,
    )
