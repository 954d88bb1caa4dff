"""
Car Service

Business operations on the car aggregate. Every write runs in a single
transaction, so a failing cascade leaves the store untouched.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from constants import CarSortKey
from exceptions import NotFoundError
from repositories.car_repository import CarRepository
from schemas import CarRead, CarWrite
from services.aggregate_builder import AggregateBuilder
from services.base_service import BaseService
from utils.loggable import loggable

logger = logging.getLogger(__name__)


class CarService(BaseService):
    """Service for car-related business logic."""

    resource_name = "Car"

    def __init__(self, db: Session):
        super().__init__(db)
        self.car_repo = CarRepository(db)
        self.builder = AggregateBuilder(db)

    def _get_or_raise(self, car_id: int):
        car = self.car_repo.get_with_interventions(car_id)
        if car is None:
            raise NotFoundError(self.resource_name, car_id)
        return car

    @loggable(debug=True)
    def get_all_cars(self, sorted_by: CarSortKey = CarSortKey.REGISTRATION) -> List[CarRead]:
        """
        List every car with its interventions.

        Args:
            sorted_by: Sort column

        Returns:
            List of CarRead
        """
        return [CarRead.model_validate(car) for car in self.car_repo.get_all_sorted(sorted_by)]

    @loggable(debug=True)
    def get_car(self, car_id: int) -> CarRead:
        """
        Raises:
            NotFoundError: If the car does not exist
        """
        return CarRead.model_validate(self._get_or_raise(car_id))

    @loggable()
    def create_car(self, payload: CarWrite) -> CarRead:
        """
        Insert a car, and any nested interventions, operations and lines.

        Args:
            payload: Car to create (its id, if any, is ignored)

        Returns:
            Created car with its generated id

        Raises:
            ConflictError: If registration or serial number is already used
        """
        with self.transaction("create car"):
            car = self.builder.build_car(payload)
            self.car_repo.create(car)
        logger.info(f"Created car {car.id} ({car.registration})")
        return self.get_car(car.id)

    @loggable()
    def update_car(self, car_id: int, payload: CarWrite) -> CarRead:
        """
        Replace the mutable fields of a car.

        When `payload.interventions` is given the stored interventions are
        synchronised to it; interventions left out are deleted with their
        operations and lines.

        Raises:
            NotFoundError: If the car (or a referenced intervention) does not exist
            ConflictError: If registration or serial number is already used
        """
        with self.transaction("update car"):
            car = self._get_or_raise(car_id)
            self.builder.apply_car(car, payload)
            self.car_repo.update(car)
        return self.get_car(car_id)

    @loggable()
    def delete_car(self, car_id: int) -> None:
        """
        Delete a car with all its interventions, operations and lines.

        Raises:
            NotFoundError: If the car does not exist
        """
        with self.transaction("delete car"):
            car = self._get_or_raise(car_id)
            self.car_repo.delete(car)
        logger.info(f"Deleted car {car_id}")
