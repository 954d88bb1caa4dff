"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations.
"""

from .base_repository import BaseRepository
from .car_repository import CarRepository
from .intervention_repository import InterventionRepository
from .operation_repository import OperationRepository, OperationLineRepository
from .contact_repository import ContactRepository

__all__ = [
    "BaseRepository",
    "CarRepository",
    "InterventionRepository",
    "OperationRepository",
    "OperationLineRepository",
    "ContactRepository",
]
