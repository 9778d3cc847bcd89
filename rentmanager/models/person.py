from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Uuid
import uuid

from rentmanager.db.base import Base


class Person(Base):
    """A natural person: renter, owner, manager, witness or cosigner"""
    __tablename__ = "persons"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=True, default="")
    nit: Mapped[str] = mapped_column(String(64), nullable=True, default="", index=True)  # tax id / cedula
