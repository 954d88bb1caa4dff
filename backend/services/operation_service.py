"""
Operation Service

Business operations on operations and their lines.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from exceptions import NotFoundError
from repositories.intervention_repository import InterventionRepository
from repositories.operation_repository import OperationRepository, OperationLineRepository
from schemas import OperationRead, OperationWrite, OperationLineRead, OperationLineWrite
from services.aggregate_builder import AggregateBuilder
from services.base_service import BaseService
from utils.loggable import loggable

logger = logging.getLogger(__name__)


class OperationService(BaseService):
    """Service for operation-related business logic."""

    resource_name = "Operation"

    def __init__(self, db: Session):
        super().__init__(db)
        self.intervention_repo = InterventionRepository(db)
        self.operation_repo = OperationRepository(db)
        self.builder = AggregateBuilder(db)

    def _get_or_raise(self, operation_id: int):
        operation = self.operation_repo.get_by_id(operation_id)
        if operation is None:
            raise NotFoundError(self.resource_name, operation_id)
        return operation

    def _get_intervention_or_raise(self, intervention_id: int):
        intervention = self.intervention_repo.get_by_id(intervention_id)
        if intervention is None:
            raise NotFoundError("Intervention", intervention_id)
        return intervention

    @loggable(debug=True)
    def get_intervention_operations(self, intervention_id: int) -> List[OperationRead]:
        self._get_intervention_or_raise(intervention_id)
        return [OperationRead.model_validate(o) for o in self.operation_repo.get_by_intervention(intervention_id)]

    @loggable(debug=True)
    def get_operation(self, operation_id: int) -> OperationRead:
        return OperationRead.model_validate(self._get_or_raise(operation_id))

    @loggable()
    def create_operation(self, intervention_id: int, payload: OperationWrite) -> OperationRead:
        """
        Add an operation (and its lines) to an intervention.

        Raises:
            NotFoundError: If the intervention does not exist
        """
        with self.transaction("create operation"):
            intervention = self._get_intervention_or_raise(intervention_id)
            operation = self.builder.build_operation(payload)
            intervention.operations.append(operation)
            self.operation_repo.create(operation)
        return self.get_operation(operation.id)

    @loggable()
    def update_operation(self, operation_id: int, payload: OperationWrite) -> OperationRead:
        with self.transaction("update operation"):
            operation = self._get_or_raise(operation_id)
            self.builder.apply_operation(operation, payload)
            self.operation_repo.update(operation)
        return self.get_operation(operation_id)

    @loggable()
    def delete_operation(self, operation_id: int) -> None:
        """Delete an operation with its lines; the parent intervention is kept."""
        with self.transaction("delete operation"):
            operation = self._get_or_raise(operation_id)
            intervention = operation.intervention
            self.operation_repo.delete(operation)
            self.db.expire(intervention, ['operations'])
        logger.info(f"Deleted operation {operation_id}")


class OperationLineService(BaseService):
    """Service for operation line business logic."""

    resource_name = "OperationLine"

    def __init__(self, db: Session):
        super().__init__(db)
        self.operation_repo = OperationRepository(db)
        self.line_repo = OperationLineRepository(db)
        self.builder = AggregateBuilder(db)

    def _get_or_raise(self, line_id: int):
        line = self.line_repo.get_by_id(line_id)
        if line is None:
            raise NotFoundError(self.resource_name, line_id)
        return line

    def _get_operation_or_raise(self, operation_id: int):
        operation = self.operation_repo.get_by_id(operation_id)
        if operation is None:
            raise NotFoundError("Operation", operation_id)
        return operation

    @loggable(debug=True)
    def get_operation_lines(self, operation_id: int) -> List[OperationLineRead]:
        self._get_operation_or_raise(operation_id)
        return [OperationLineRead.model_validate(line) for line in self.line_repo.get_by_operation(operation_id)]

    @loggable(debug=True)
    def get_operation_line(self, line_id: int) -> OperationLineRead:
        return OperationLineRead.model_validate(self._get_or_raise(line_id))

    @loggable()
    def create_operation_line(self, operation_id: int, payload: OperationLineWrite) -> OperationLineRead:
        with self.transaction("create operation line"):
            operation = self._get_operation_or_raise(operation_id)
            line = self.builder.build_operation_line(payload)
            operation.operation_lines.append(line)
            self.line_repo.create(line)
        return self.get_operation_line(line.id)

    @loggable()
    def update_operation_line(self, line_id: int, payload: OperationLineWrite) -> OperationLineRead:
        with self.transaction("update operation line"):
            line = self._get_or_raise(line_id)
            self.builder.apply_operation_line(line, payload)
            self.line_repo.update(line)
        return self.get_operation_line(line_id)

    @loggable()
    def delete_operation_line(self, line_id: int) -> None:
        with self.transaction("delete operation line"):
            line = self._get_or_raise(line_id)
            operation = line.operation
            self.line_repo.delete(line)
            self.db.expire(operation, ['operation_lines'])
