"""
Contact repository.
"""

from typing import List
from sqlalchemy.orm import Session

from models import Contact as ContactModel
from .base_repository import BaseRepository


class ContactRepository(BaseRepository[ContactModel]):
    """Repository for Contact model operations."""

    def __init__(self, db: Session):
        super().__init__(db, ContactModel)

    def get_all_by_favorite(self) -> List[ContactModel]:
        """
        Get all contacts, favorites first, then by name.

        Returns:
            List of contacts
        """
        return self.db.query(self.model).order_by(
            self.model.favorite.desc(),
            self.model.name,
            self.model.id
        ).all()
