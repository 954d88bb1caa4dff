"""
Car repository for car-specific data access operations.
"""

from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from constants import CarSortKey
from models import Car as CarModel, Intervention as InterventionModel, Operation as OperationModel
from .base_repository import BaseRepository


class CarRepository(BaseRepository[CarModel]):
    """Repository for Car model operations."""

    def __init__(self, db: Session):
        super().__init__(db, CarModel)

    def _sort_column(self, sorted_by: CarSortKey):
        return {
            CarSortKey.REGISTRATION: self.model.registration,
            CarSortKey.OWNER: self.model.owner,
            CarSortKey.BRAND: self.model.brand,
            CarSortKey.MODEL: self.model.model,
            CarSortKey.RELEASE_DATE: self.model.release_date,
        }[sorted_by]

    def _with_aggregate(self):
        return self.db.query(self.model).options(
            selectinload(self.model.interventions)
            .selectinload(InterventionModel.operations)
            .selectinload(OperationModel.operation_lines)
        )

    def get_all_sorted(self, sorted_by: CarSortKey = CarSortKey.REGISTRATION) -> List[CarModel]:
        """
        Get all cars with their interventions eagerly loaded.

        Args:
            sorted_by: Column to sort on (ties broken by id)

        Returns:
            List of cars
        """
        return self._with_aggregate().order_by(
            self._sort_column(sorted_by), self.model.id
        ).all()

    def get_with_interventions(self, car_id: int) -> Optional[CarModel]:
        """
        Get a car with its whole aggregate (interventions, operations, lines) loaded.

        Args:
            car_id: Car ID

        Returns:
            Car instance or None if not found
        """
        return self._with_aggregate().filter(self.model.id == car_id).first()
