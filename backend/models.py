from sqlalchemy import Column, String, Integer, BigInteger, Float, Boolean, Text, LargeBinary, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from database import Base


class Car(Base):
    """
    Root aggregate of the maintenance tracker.

    Owns its interventions: deleting a car, or removing an intervention from
    `interventions`, deletes the intervention and everything below it.
    """
    __tablename__ = 'cars'

    id = Column(Integer, primary_key=True, autoincrement=True)
    registration = Column(Text, unique=True, nullable=False)
    serial_number = Column('serialNumber', Text, unique=True)
    owner = Column(Text, nullable=False)
    brand = Column(Text)
    model = Column(Text)
    motorization = Column(Text)
    engine_code = Column('engineCode', Text)
    release_date = Column('releaseDate', String)  # YYYY-MM-DD
    comments = Column(Text)
    certificate = Column(LargeBinary)
    picture = Column(LargeBinary)

    interventions = relationship(
        "Intervention",
        back_populates="car",
        cascade="all, delete-orphan",
        order_by="Intervention.id",
    )

    __table_args__ = (
        CheckConstraint("registration != ''", name='ck_cars_registration'),
        CheckConstraint("owner != ''", name='ck_cars_owner'),
    )

    def __repr__(self):
        return (
            f"Car(id={self.id!r}, registration={self.registration!r}, owner={self.owner!r}, "
            f"certificate={self.certificate is not None}, picture={self.picture is not None})"
        )


class Intervention(Base):
    """
    Maintenance intervention on a car.

    `year` and `number` are written once on insert; updates never touch them.
    """
    __tablename__ = 'interventions'

    id = Column(Integer, primary_key=True, autoincrement=True)
    car_id = Column('carId', Integer, ForeignKey('cars.id', ondelete='CASCADE'), nullable=False)
    year = Column(Integer)
    number = Column(Integer)
    status = Column(Text, nullable=False)
    description = Column(Text)
    mileage = Column(Integer)
    estimated_time = Column('estimatedTime', Float)
    real_time = Column('realTime', Float)
    amount = Column(Float)
    paid_amount = Column('paidAmount', Float)
    comments = Column(Text)

    car = relationship("Car", back_populates="interventions")
    operations = relationship(
        "Operation",
        back_populates="intervention",
        cascade="all, delete-orphan",
        order_by="Operation.id",
    )

    __table_args__ = (
        Index('idx_interventions_car', 'carId'),
        Index('idx_interventions_year_number', 'year', 'number'),
    )


class Operation(Base):
    __tablename__ = 'operations'

    id = Column(Integer, primary_key=True, autoincrement=True)
    intervention_id = Column('interventionId', Integer, ForeignKey('interventions.id', ondelete='CASCADE'), nullable=False)
    label = Column(Text, nullable=False)

    # Default many-to-one cascade (save-update, merge) persists the parent along with the operation
    intervention = relationship("Intervention", back_populates="operations")
    operation_lines = relationship(
        "OperationLine",
        back_populates="operation",
        cascade="all, delete-orphan",
        order_by="OperationLine.id",
    )

    __table_args__ = (
        Index('idx_operations_intervention', 'interventionId'),
    )


class OperationLine(Base):
    """Part or task line used within an operation"""
    __tablename__ = 'operation_lines'

    id = Column(Integer, primary_key=True, autoincrement=True)
    operation_id = Column('operationId', Integer, ForeignKey('operations.id', ondelete='CASCADE'), nullable=False)
    type = Column(Text)
    reference = Column(Text)
    quantity = Column(Float)
    done = Column(Boolean, nullable=False, default=False)

    operation = relationship("Operation", back_populates="operation_lines")

    __table_args__ = (
        Index('idx_operation_lines_operation', 'operationId'),
    )


class Contact(Base):
    """Address book entry. The id is chosen by the caller, not generated."""
    __tablename__ = 'contacts'

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(Text)
    nickname = Column(Text)
    number = Column(BigInteger)
    favorite = Column(Boolean, nullable=False, default=False)
    picture = Column(LargeBinary)

    def __repr__(self):
        return (
            f'Contact(id={self.id!r}, name={self.name!r}, nickname={self.nickname!r}, '
            f'number={self.number!r}, favorite={self.favorite!r}, picture={self.picture is not None})'
        )
