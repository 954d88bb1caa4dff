"""
Aggregate Builder

Copies write payloads onto the car aggregate (car -> interventions ->
operations -> lines). Nested collections present in a payload replace the
stored ones: known ids are updated, new entries are created and entries left
out are removed from the collection, which deletes them through the
`delete-orphan` cascade.
"""

from datetime import date
from typing import Callable, Iterable, List

from sqlalchemy.orm import Session

from exceptions import NotFoundError
from models import Car, Intervention, Operation, OperationLine
from repositories.intervention_repository import InterventionRepository
from schemas import CarWrite, InterventionWrite, OperationWrite, OperationLineWrite

CAR_FIELDS = (
    'registration', 'serial_number', 'owner', 'brand', 'model', 'motorization',
    'engine_code', 'release_date', 'comments', 'certificate', 'picture',
)
# id, year and number are insert-only
INTERVENTION_FIELDS = (
    'status', 'description', 'mileage', 'estimated_time', 'real_time',
    'amount', 'paid_amount', 'comments',
)
OPERATION_FIELDS = ('label',)
OPERATION_LINE_FIELDS = ('type', 'reference', 'quantity', 'done')


def _copy_fields(target, payload, fields: Iterable[str]) -> None:
    for field in fields:
        setattr(target, field, getattr(payload, field))


def sync_children(collection: List, payloads: List, build: Callable, apply: Callable, resource: str) -> None:
    """
    Make a relationship collection match a list of payloads.

    Args:
        collection: ORM relationship list (e.g. car.interventions)
        payloads: Write payloads, with `id` set for existing children
        build: Creates a new child from a payload
        apply: Copies a payload onto an existing child
        resource: Child entity name for NotFoundError

    Raises:
        NotFoundError: If a payload id does not belong to the collection
    """
    existing = {child.id: child for child in collection if child.id is not None}
    kept = []
    for payload in payloads:
        if payload.id is None:
            child = build(payload)
            collection.append(child)
        else:
            child = existing.get(payload.id)
            if child is None:
                raise NotFoundError(resource, payload.id)
            apply(child, payload)
        kept.append(child)

    for child in list(collection):
        if child not in kept:
            collection.remove(child)


class AggregateBuilder:
    """Builds and updates car aggregate rows from write schemas."""

    def __init__(self, db: Session):
        self.db = db
        self.intervention_repo = InterventionRepository(db)

    # Cars

    def build_car(self, payload: CarWrite) -> Car:
        car = Car()
        _copy_fields(car, payload, CAR_FIELDS)
        self.db.add(car)
        for intervention_payload in payload.interventions or []:
            car.interventions.append(self.build_intervention(intervention_payload))
        return car

    def apply_car(self, car: Car, payload: CarWrite) -> None:
        _copy_fields(car, payload, CAR_FIELDS)
        if payload.interventions is not None:
            sync_children(
                car.interventions, payload.interventions,
                self.build_intervention, self.apply_intervention, "Intervention"
            )

    # Interventions

    def _next_number(self, year: int) -> int:
        """
        Next free number of `year`.

        Interventions added to the session but not flushed yet count as taken,
        so siblings created from one payload get consecutive numbers.
        """
        with self.db.no_autoflush:
            stored = self.intervention_repo.next_number(year)
        pending = [
            i.number + 1 for i in self.db.new
            if isinstance(i, Intervention) and i.year == year and i.number is not None
        ]
        return max([stored] + pending)

    def build_intervention(self, payload: InterventionWrite) -> Intervention:
        year = payload.year if payload.year is not None else date.today().year
        number = payload.number if payload.number is not None else self._next_number(year)
        intervention = Intervention(year=year, number=number)
        _copy_fields(intervention, payload, INTERVENTION_FIELDS)
        for operation_payload in payload.operations or []:
            intervention.operations.append(self.build_operation(operation_payload))
        return intervention

    def apply_intervention(self, intervention: Intervention, payload: InterventionWrite) -> None:
        _copy_fields(intervention, payload, INTERVENTION_FIELDS)
        if payload.operations is not None:
            sync_children(
                intervention.operations, payload.operations,
                self.build_operation, self.apply_operation, "Operation"
            )

    # Operations

    def build_operation(self, payload: OperationWrite) -> Operation:
        operation = Operation()
        _copy_fields(operation, payload, OPERATION_FIELDS)
        for line_payload in payload.operation_lines or []:
            operation.operation_lines.append(self.build_operation_line(line_payload))
        return operation

    def apply_operation(self, operation: Operation, payload: OperationWrite) -> None:
        _copy_fields(operation, payload, OPERATION_FIELDS)
        if payload.operation_lines is not None:
            sync_children(
                operation.operation_lines, payload.operation_lines,
                self.build_operation_line, self.apply_operation_line, "OperationLine"
            )

    # Operation lines

    def build_operation_line(self, payload: OperationLineWrite) -> OperationLine:
        line = OperationLine()
        _copy_fields(line, payload, OPERATION_LINE_FIELDS)
        return line

    def apply_operation_line(self, line: OperationLine, payload: OperationLineWrite) -> None:
        _copy_fields(line, payload, OPERATION_LINE_FIELDS)
