"""
Tests for the car aggregate: creation, uniqueness, cascading deletes and
orphan removal.
"""

from datetime import date

import pytest
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError

from constants import CarSortKey
from exceptions import ConflictError, DatabaseError, NotFoundError, ValidationError
from models import Car, Intervention, Operation, OperationLine
from schemas import CarWrite, InterventionWrite, OperationWrite, OperationLineWrite
from services.car_service import CarService
from services.intervention_service import InterventionService
from services.operation_service import OperationService, OperationLineService


def make_car(registration="AB-123-CD", serial_number=None, interventions=None, **fields):
    return CarWrite(
        registration=registration,
        serial_number=serial_number,
        owner=fields.pop("owner", "Jean Dupont"),
        interventions=interventions,
        **fields,
    )


def make_intervention(status="DONE", operations=None, **fields):
    return InterventionWrite(status=status, operations=operations, **fields)


def full_car(registration="AB-123-CD"):
    """Car with two interventions, each with one operation and one line"""
    return make_car(
        registration=registration,
        interventions=[
            make_intervention(
                description="Vidange",
                operations=[OperationWrite(label="Huile", operation_lines=[OperationLineWrite(reference="5W30")])],
            ),
            make_intervention(
                description="Freins",
                operations=[OperationWrite(label="Plaquettes", operation_lines=[OperationLineWrite(reference="P-1")])],
            ),
        ],
    )


def test_create_then_read_returns_equivalent_car(db_session):
    service = CarService(db_session)
    payload = make_car(
        serial_number="VF1", brand="Renault", model="Clio", engine_code="K9K",
        release_date="2012-05-01", certificate=b"%PDF-1.4", picture=b"\x89PNG",
    )

    created = service.create_car(payload)
    fetched = service.get_car(created.id)

    assert created.id is not None
    assert fetched == created
    assert fetched.registration == "AB-123-CD"
    assert fetched.engine_code == "K9K"
    assert fetched.certificate == b"%PDF-1.4"
    assert fetched.interventions == []


def test_duplicate_registration_is_a_conflict(db_session):
    service = CarService(db_session)
    service.create_car(make_car())

    with pytest.raises(ConflictError):
        service.create_car(make_car(owner="Someone else"))

    assert db_session.query(Car).count() == 1


def test_duplicate_serial_number_is_a_conflict(db_session):
    service = CarService(db_session)
    service.create_car(make_car(registration="AA-111-AA", serial_number="VF1"))

    with pytest.raises(ConflictError):
        service.create_car(make_car(registration="BB-222-BB", serial_number="VF1"))


def test_cars_without_serial_number_do_not_collide(db_session):
    service = CarService(db_session)
    service.create_car(make_car(registration="AA-111-AA", serial_number=""))
    service.create_car(make_car(registration="BB-222-BB", serial_number=""))

    assert db_session.query(Car).count() == 2


def test_failed_nested_create_persists_nothing(db_session):
    service = CarService(db_session)
    service.create_car(make_car(registration="AA-111-AA"))

    with pytest.raises(ConflictError):
        service.create_car(make_car(registration="AA-111-AA", interventions=[make_intervention()]))

    assert db_session.query(Intervention).count() == 0


def test_delete_car_cascades_to_descendants(db_session):
    cars = CarService(db_session)
    created = cars.create_car(full_car())
    intervention_ids = [i.id for i in created.interventions]
    operation_ids = [o.id for i in created.interventions for o in i.operations]
    line_ids = [line.id for i in created.interventions for o in i.operations for line in o.operation_lines]

    cars.delete_car(created.id)

    with pytest.raises(NotFoundError):
        cars.get_car(created.id)
    for intervention_id in intervention_ids:
        with pytest.raises(NotFoundError):
            InterventionService(db_session).get_intervention(intervention_id)
    for operation_id in operation_ids:
        with pytest.raises(NotFoundError):
            OperationService(db_session).get_operation(operation_id)
    for line_id in line_ids:
        with pytest.raises(NotFoundError):
            OperationLineService(db_session).get_operation_line(line_id)
    assert db_session.query(OperationLine).count() == 0


def test_delete_missing_car_is_not_found(db_session):
    with pytest.raises(NotFoundError):
        CarService(db_session).delete_car(404)


def test_removing_intervention_from_car_deletes_it(db_session):
    cars = CarService(db_session)
    created = cars.create_car(full_car())
    kept, dropped = created.interventions

    payload = make_car(interventions=[InterventionWrite(id=kept.id, status=kept.status, description=kept.description)])
    updated = cars.update_car(created.id, payload)

    assert [i.id for i in updated.interventions] == [kept.id]
    assert updated.interventions[0].operations[0].label == "Huile"
    assert db_session.get(Intervention, dropped.id) is None
    assert db_session.get(Operation, dropped.operations[0].id) is None
    assert db_session.get(OperationLine, dropped.operations[0].operation_lines[0].id) is None
    assert db_session.get(Car, created.id) is not None


def test_update_without_interventions_keeps_them(db_session):
    cars = CarService(db_session)
    created = cars.create_car(full_car())

    updated = cars.update_car(created.id, make_car(owner="Marie Curie"))

    assert updated.owner == "Marie Curie"
    assert len(updated.interventions) == 2


def test_update_adds_new_interventions(db_session):
    cars = CarService(db_session)
    created = cars.create_car(make_car(interventions=[make_intervention(year=2020, number=1)]))
    existing = created.interventions[0]

    updated = cars.update_car(created.id, make_car(interventions=[
        InterventionWrite(id=existing.id, status="DONE"),
        make_intervention(status="PLANNED", year=2020),
    ]))

    assert [(i.year, i.number) for i in updated.interventions] == [(2020, 1), (2020, 2)]


def test_update_with_foreign_intervention_id_is_not_found(db_session):
    cars = CarService(db_session)
    first = cars.create_car(make_car(registration="AA-111-AA", interventions=[make_intervention()]))
    second = cars.create_car(make_car(registration="BB-222-BB"))

    with pytest.raises(NotFoundError):
        cars.update_car(second.id, make_car(
            registration="BB-222-BB",
            interventions=[InterventionWrite(id=first.interventions[0].id, status="DONE")],
        ))

    assert len(cars.get_car(first.id).interventions) == 1


def test_update_to_taken_registration_rolls_back(db_session):
    cars = CarService(db_session)
    cars.create_car(make_car(registration="AA-111-AA"))
    second = cars.create_car(make_car(registration="BB-222-BB"))

    with pytest.raises(ConflictError):
        cars.update_car(second.id, make_car(registration="AA-111-AA"))

    assert cars.get_car(second.id).registration == "BB-222-BB"


def test_get_all_cars_sorted(db_session):
    cars = CarService(db_session)
    cars.create_car(make_car(registration="CC-333-CC", owner="Alice", brand="Peugeot"))
    cars.create_car(make_car(registration="AA-111-AA", owner="Charlie", brand="Citroen"))
    cars.create_car(make_car(registration="BB-222-BB", owner="Bob", brand="Renault"))

    assert [c.registration for c in cars.get_all_cars()] == ["AA-111-AA", "BB-222-BB", "CC-333-CC"]
    assert [c.owner for c in cars.get_all_cars(CarSortKey.OWNER)] == ["Alice", "Bob", "Charlie"]
    assert [c.brand for c in cars.get_all_cars(CarSortKey.BRAND)] == ["Citroen", "Peugeot", "Renault"]


def test_intervention_numbering_defaults(db_session):
    cars = CarService(db_session)
    interventions = InterventionService(db_session)
    car = cars.create_car(make_car(interventions=[make_intervention(), make_intervention()]))

    third = interventions.create_intervention(car.id, make_intervention(status="PLANNED"))

    this_year = date.today().year
    numbers = [(i.year, i.number) for i in interventions.get_car_interventions(car.id)]
    assert numbers == [(this_year, 1), (this_year, 2), (this_year, 3)]
    assert third.number == 3


def test_intervention_year_and_number_are_insert_only(db_session):
    cars = CarService(db_session)
    interventions = InterventionService(db_session)
    car = cars.create_car(make_car(interventions=[make_intervention(year=2019, number=7)]))
    intervention_id = car.interventions[0].id

    updated = interventions.update_intervention(
        intervention_id, make_intervention(status="PAID", year=2024, number=99, amount=120.5)
    )

    assert (updated.year, updated.number) == (2019, 7)
    assert updated.status == "PAID"
    assert updated.amount == 120.5


def test_create_intervention_for_missing_car(db_session):
    with pytest.raises(NotFoundError):
        InterventionService(db_session).create_intervention(404, make_intervention())


def test_delete_intervention_keeps_car_and_siblings(db_session):
    cars = CarService(db_session)
    created = cars.create_car(full_car())
    dropped, kept = created.interventions

    InterventionService(db_session).delete_intervention(dropped.id)

    remaining = cars.get_car(created.id).interventions
    assert [i.id for i in remaining] == [kept.id]
    assert db_session.query(Operation).count() == 1


def test_operation_lifecycle(db_session):
    car = CarService(db_session).create_car(make_car(interventions=[make_intervention()]))
    intervention_id = car.interventions[0].id
    operations = OperationService(db_session)

    operation = operations.create_operation(intervention_id, OperationWrite(
        label="Distribution",
        operation_lines=[OperationLineWrite(reference="KIT-1"), OperationLineWrite(reference="POMPE")],
    ))
    assert [line.reference for line in operation.operation_lines] == ["KIT-1", "POMPE"]

    kit = operation.operation_lines[0]
    updated = operations.update_operation(operation.id, OperationWrite(
        label="Distribution complète",
        operation_lines=[OperationLineWrite(id=kit.id, reference="KIT-1", done=True)],
    ))
    assert updated.label == "Distribution complète"
    assert [(line.id, line.done) for line in updated.operation_lines] == [(kit.id, True)]
    assert db_session.query(OperationLine).count() == 1

    operations.delete_operation(operation.id)
    assert InterventionService(db_session).get_intervention(intervention_id).operations == []


def test_operation_line_lifecycle(db_session):
    car = CarService(db_session).create_car(make_car(interventions=[
        make_intervention(operations=[OperationWrite(label="Pneus")])
    ]))
    operation_id = car.interventions[0].operations[0].id
    lines = OperationLineService(db_session)

    line = lines.create_operation_line(operation_id, OperationLineWrite(type="PART", reference="205/55R16", quantity=4))
    assert line.done is False

    lines.update_operation_line(line.id, OperationLineWrite(type="PART", reference="205/55R16", quantity=2, done=True))
    assert lines.get_operation_lines(operation_id)[0].quantity == 2

    lines.delete_operation_line(line.id)
    assert lines.get_operation_lines(operation_id) == []
    with pytest.raises(NotFoundError):
        lines.create_operation_line(404, OperationLineWrite())


def test_missing_required_column_is_a_validation_error(db_session):
    service = CarService(db_session)
    payload = make_car()
    # Bypass schema validation to hit the NOT NULL constraint
    payload.owner = None

    with pytest.raises(ValidationError):
        service.create_car(payload)
    assert db_session.query(Car).count() == 0


def test_delete_intervention_without_operations(db_session):
    car = CarService(db_session).create_car(make_car(interventions=[make_intervention(), make_intervention()]))
    interventions = InterventionService(db_session)

    interventions.delete_intervention(car.interventions[0].id)

    assert [i.id for i in interventions.get_car_interventions(car.id)] == [car.interventions[1].id]


def test_delete_operation_keeps_intervention(db_session):
    car = CarService(db_session).create_car(full_car())
    intervention = car.interventions[0]

    OperationService(db_session).delete_operation(intervention.operations[0].id)

    assert InterventionService(db_session).get_intervention(intervention.id).operations == []
    assert db_session.query(Operation).count() == 1
    assert db_session.query(OperationLine).count() == 1


def test_failed_cascade_delete_rolls_back(db_session):
    cars = CarService(db_session)
    car = cars.create_car(full_car())

    def refuse_line_delete(mapper, connection, target):
        raise SQLAlchemyError("line is locked")

    event.listen(OperationLine, "before_delete", refuse_line_delete)
    try:
        with pytest.raises(DatabaseError):
            cars.delete_car(car.id)
        with pytest.raises(DatabaseError):
            InterventionService(db_session).delete_intervention(car.interventions[0].id)
    finally:
        event.remove(OperationLine, "before_delete", refuse_line_delete)

    assert cars.get_car(car.id) == car
    assert db_session.query(Intervention).count() == 2
    assert db_session.query(Operation).count() == 2
    assert db_session.query(OperationLine).count() == 2


def test_sibling_interventions_numbered_without_autoflush(db_session):
    cars = CarService(db_session)

    with db_session.no_autoflush:
        car = cars.create_car(make_car(interventions=[make_intervention(), make_intervention(), make_intervention()]))

    assert [i.number for i in car.interventions] == [1, 2, 3]
