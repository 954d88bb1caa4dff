"""
Intervention repository for intervention-specific data access operations.
"""

from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import func

from models import Intervention as InterventionModel
from .base_repository import BaseRepository


class InterventionRepository(BaseRepository[InterventionModel]):
    """Repository for Intervention model operations."""

    def __init__(self, db: Session):
        super().__init__(db, InterventionModel)

    def get_by_car(self, car_id: int) -> List[InterventionModel]:
        """
        Get all interventions of a car.

        Args:
            car_id: Parent car ID

        Returns:
            Interventions ordered by id
        """
        return self.db.query(self.model).filter(
            self.model.car_id == car_id
        ).order_by(self.model.id).all()

    def next_number(self, year: int) -> int:
        """
        Next free intervention number for a year.

        Args:
            year: Intervention year

        Returns:
            One more than the highest number used in that year (1 for a new year)
        """
        highest = self.db.query(
            func.coalesce(func.max(self.model.number), 0)
        ).filter(self.model.year == year).scalar()
        return highest + 1
