"""
Intervention Service

Business operations on interventions, addressed directly or through their car.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from exceptions import NotFoundError
from repositories.car_repository import CarRepository
from repositories.intervention_repository import InterventionRepository
from schemas import InterventionRead, InterventionWrite
from services.aggregate_builder import AggregateBuilder
from services.base_service import BaseService
from utils.loggable import loggable

logger = logging.getLogger(__name__)


class InterventionService(BaseService):
    """Service for intervention-related business logic."""

    resource_name = "Intervention"

    def __init__(self, db: Session):
        super().__init__(db)
        self.car_repo = CarRepository(db)
        self.intervention_repo = InterventionRepository(db)
        self.builder = AggregateBuilder(db)

    def _get_or_raise(self, intervention_id: int):
        intervention = self.intervention_repo.get_by_id(intervention_id)
        if intervention is None:
            raise NotFoundError(self.resource_name, intervention_id)
        return intervention

    def _get_car_or_raise(self, car_id: int):
        car = self.car_repo.get_by_id(car_id)
        if car is None:
            raise NotFoundError("Car", car_id)
        return car

    @loggable(debug=True)
    def get_car_interventions(self, car_id: int) -> List[InterventionRead]:
        """
        Raises:
            NotFoundError: If the car does not exist
        """
        self._get_car_or_raise(car_id)
        return [InterventionRead.model_validate(i) for i in self.intervention_repo.get_by_car(car_id)]

    @loggable(debug=True)
    def get_intervention(self, intervention_id: int) -> InterventionRead:
        return InterventionRead.model_validate(self._get_or_raise(intervention_id))

    @loggable()
    def create_intervention(self, car_id: int, payload: InterventionWrite) -> InterventionRead:
        """
        Add an intervention to a car.

        Missing `year` defaults to the current year and missing `number` to the
        next free number of that year.

        Raises:
            NotFoundError: If the car does not exist
        """
        with self.transaction("create intervention"):
            car = self._get_car_or_raise(car_id)
            intervention = self.builder.build_intervention(payload)
            car.interventions.append(intervention)
            self.intervention_repo.create(intervention)
        logger.info(f"Created intervention {intervention.year}-{intervention.number} for car {car_id}")
        return self.get_intervention(intervention.id)

    @loggable()
    def update_intervention(self, intervention_id: int, payload: InterventionWrite) -> InterventionRead:
        """
        Update the mutable fields of an intervention; year and number are kept.

        Raises:
            NotFoundError: If the intervention (or a referenced operation) does not exist
        """
        with self.transaction("update intervention"):
            intervention = self._get_or_raise(intervention_id)
            self.builder.apply_intervention(intervention, payload)
            self.intervention_repo.update(intervention)
        return self.get_intervention(intervention_id)

    @loggable()
    def delete_intervention(self, intervention_id: int) -> None:
        """Delete an intervention with its operations and lines."""
        with self.transaction("delete intervention"):
            intervention = self._get_or_raise(intervention_id)
            car = intervention.car
            self.intervention_repo.delete(intervention)
            # A loaded collection keeps listing the deleted row until expired
            self.db.expire(car, ['interventions'])
        logger.info(f"Deleted intervention {intervention_id}")
