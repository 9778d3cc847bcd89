"""
rentmanager/repositories/base.py
--------------------------------
Generic SQLAlchemy repository shared by every entity repository.
"""
import logging
import uuid
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from rentmanager.db.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def to_uuid(value) -> Optional[uuid.UUID]:
    """Coerce a str/UUID into a UUID; raises ValueError on bad input."""
    if value is None or value == "":
        return None
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class BaseRepository(Generic[ModelT]):
    """CRUD operations for one table bound to a request scoped session."""

    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def get(self, id) -> Optional[ModelT]:
        return self.db.query(self.model).filter(self.model.id == to_uuid(id)).first()

    def get_all(self) -> List[ModelT]:
        return self.db.query(self.model).all()

    def get_by_ids(self, ids: Iterable) -> List[ModelT]:
        ids = [to_uuid(i) for i in ids]
        if not ids:
            return []
        return self.db.query(self.model).filter(self.model.id.in_(ids)).all()

    def create(self, data: Dict[str, Any]) -> ModelT:
        obj = self.model(**data)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        logger.debug(f"Created {self.model.__name__} {obj.id}")
        return obj

    def update(self, obj: ModelT, data: Dict[str, Any]) -> ModelT:
        for key, value in data.items():
            setattr(obj, key, value)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj: ModelT) -> None:
        self.db.delete(obj)
        self.db.commit()
        logger.debug(f"Deleted {self.model.__name__} {obj.id}")
