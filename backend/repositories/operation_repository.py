"""
Operation and operation line repositories.
"""

from typing import List
from sqlalchemy.orm import Session

from models import Operation as OperationModel, OperationLine as OperationLineModel
from .base_repository import BaseRepository


class OperationRepository(BaseRepository[OperationModel]):
    """Repository for Operation model operations."""

    def __init__(self, db: Session):
        super().__init__(db, OperationModel)

    def get_by_intervention(self, intervention_id: int) -> List[OperationModel]:
        return self.db.query(self.model).filter(
            self.model.intervention_id == intervention_id
        ).order_by(self.model.id).all()


class OperationLineRepository(BaseRepository[OperationLineModel]):
    """Repository for OperationLine model operations."""

    def __init__(self, db: Session):
        super().__init__(db, OperationLineModel)

    def get_by_operation(self, operation_id: int) -> List[OperationLineModel]:
        return self.db.query(self.model).filter(
            self.model.operation_id == operation_id
        ).order_by(self.model.id).all()
