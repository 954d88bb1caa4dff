"""
Dependency injection providers for FastAPI.

This module provides factory functions for creating service instances bound to
the request's database session, so tests can override `get_db` alone.
"""

from typing import Annotated

from sqlalchemy.orm import Session
from fastapi import Depends, Path

from constants import SQLiteLimits
from database import get_db
from services.car_service import CarService
from services.contact_service import ContactService
from services.intervention_service import InterventionService
from services.operation_service import OperationService, OperationLineService

# Path id; out-of-range values are rejected before reaching the database
RowId = Annotated[int, Path(ge=SQLiteLimits.INT_MIN, le=SQLiteLimits.INT_MAX)]


def get_car_service(db: Session = Depends(get_db)) -> CarService:
    """
    Factory function for creating CarService instances.

    Args:
        db: Database session (injected)

    Returns:
        CarService bound to the session
    """
    return CarService(db)


def get_intervention_service(db: Session = Depends(get_db)) -> InterventionService:
    return InterventionService(db)


def get_operation_service(db: Session = Depends(get_db)) -> OperationService:
    return OperationService(db)


def get_operation_line_service(db: Session = Depends(get_db)) -> OperationLineService:
    return OperationLineService(db)


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    return ContactService(db)
