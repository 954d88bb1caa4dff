"""
Shared persistence helpers for the car aggregate and contacts.
"""

from typing import Generic, TypeVar, Optional, Type
from sqlalchemy.orm import Session

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Lookup and write helpers common to every table.

    Repositories only flush; the calling service commits or rolls back.
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def create(self, obj: T) -> T:
        """Add a row and flush it so its generated id is set."""
        self.db.add(obj)
        self.db.flush()
        return obj

    def get_by_id(self, id: int) -> Optional[T]:
        return self.db.get(self.model, id)

    def exists(self, id: int) -> bool:
        return self.db.query(self.model.id).filter(self.model.id == id).first() is not None

    def update(self, obj: T) -> T:
        """Flush pending changes of an attached row."""
        self.db.flush()
        return obj

    def delete(self, obj: T) -> None:
        """
        Delete a row; its `delete` cascades remove the owned children.

        Args:
            obj: Attached model instance
        """
        self.db.delete(obj)
        self.db.flush()
