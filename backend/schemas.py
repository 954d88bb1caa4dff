import base64
import binascii
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

from constants import SQLiteLimits


def _decode_blob(value):
    """Accept raw bytes, a base64 string or a JSON array of byte values"""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ValueError(f'Invalid base64 content: {e}')
    if isinstance(value, list):
        for b in value:
            # bool is an int subclass
            if isinstance(b, bool) or not isinstance(b, int):
                raise ValueError(f'Byte values must be integers, got {b!r}')
            if not SQLiteLimits.BYTE_MIN <= b <= SQLiteLimits.BYTE_MAX:
                raise ValueError(f'Byte value {b} is outside {SQLiteLimits.BYTE_MIN}..{SQLiteLimits.BYTE_MAX}')
        # Negative values are signed bytes
        return bytes(b & 0xFF for b in value)
    raise ValueError('Binary content must be a base64 string or an array of bytes')


def _encode_blob(value: bytes) -> str:
    return base64.b64encode(value).decode('ascii')


Blob = Annotated[
    bytes,
    BeforeValidator(_decode_blob),
    PlainSerializer(_encode_blob, return_type=str, when_used='json'),
]

# Integer storable in a SQLite INTEGER column
SqlInt = Annotated[int, Field(ge=SQLiteLimits.INT_MIN, le=SQLiteLimits.INT_MAX)]


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python, readable from ORM rows"""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Operation lines

class OperationLineWrite(CamelModel):
    id: Optional[SqlInt] = Field(None, description="Set to update an existing line inside a nested payload")
    type: Optional[str] = None
    reference: Optional[str] = None
    quantity: Optional[float] = None
    done: bool = False

    @field_validator('done', mode='before')
    @classmethod
    def default_done(cls, v):
        return False if v is None else v


class OperationLineRead(CamelModel):
    id: SqlInt
    type: Optional[str] = None
    reference: Optional[str] = None
    quantity: Optional[float] = None
    done: bool = False


# Operations

class OperationWrite(CamelModel):
    id: Optional[SqlInt] = Field(None, description="Set to update an existing operation inside a nested payload")
    label: str = Field(min_length=1)
    operation_lines: Optional[List[OperationLineWrite]] = Field(
        None, description="When given, replaces the stored lines (missing ones are deleted)"
    )


class OperationRead(CamelModel):
    id: SqlInt
    label: str
    operation_lines: List[OperationLineRead] = []


# Interventions

class InterventionWrite(CamelModel):
    id: Optional[SqlInt] = Field(None, description="Set to update an existing intervention inside a nested payload")
    year: Optional[SqlInt] = Field(None, description="Insert only; defaults to the current year")
    number: Optional[SqlInt] = Field(None, description="Insert only; defaults to the next number of the year")
    status: str = Field(min_length=1)
    description: Optional[str] = None
    mileage: Optional[SqlInt] = None
    estimated_time: Optional[float] = None
    real_time: Optional[float] = None
    amount: Optional[float] = None
    paid_amount: Optional[float] = None
    comments: Optional[str] = None
    operations: Optional[List[OperationWrite]] = Field(
        None, description="When given, replaces the stored operations (missing ones are deleted)"
    )


class InterventionRead(CamelModel):
    """Interventions compare by identity only"""

    id: SqlInt
    year: Optional[SqlInt] = None
    number: Optional[SqlInt] = None
    status: str
    description: Optional[str] = None
    mileage: Optional[SqlInt] = None
    estimated_time: Optional[float] = None
    real_time: Optional[float] = None
    amount: Optional[float] = None
    paid_amount: Optional[float] = None
    comments: Optional[str] = None
    operations: List[OperationRead] = []

    def __eq__(self, other):
        if not isinstance(other, InterventionRead):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


# Cars

class CarWrite(CamelModel):
    registration: str = Field(min_length=1)
    serial_number: Optional[str] = None
    owner: str = Field(min_length=1)
    brand: Optional[str] = None
    model: Optional[str] = None
    motorization: Optional[str] = None
    engine_code: Optional[str] = None
    release_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    comments: Optional[str] = None
    certificate: Optional[Blob] = None
    picture: Optional[Blob] = None
    interventions: Optional[List[InterventionWrite]] = Field(
        None, description="When given, replaces the stored interventions (missing ones are deleted)"
    )

    @field_validator('serial_number', mode='before')
    @classmethod
    def blank_serial_is_none(cls, v):
        # Several cars without serial number must not collide on ''
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CarRead(CamelModel):
    id: SqlInt
    registration: str
    serial_number: Optional[str] = None
    owner: str
    brand: Optional[str] = None
    model: Optional[str] = None
    motorization: Optional[str] = None
    engine_code: Optional[str] = None
    release_date: Optional[str] = None
    comments: Optional[str] = None
    certificate: Optional[Blob] = None
    picture: Optional[Blob] = None
    interventions: List[InterventionRead] = []


# Contacts

class ContactBase(CamelModel):
    name: Optional[str] = None
    nickname: Optional[str] = None
    number: Optional[SqlInt] = None
    favorite: bool = False
    picture: Optional[Blob] = None

    @field_validator('favorite', mode='before')
    @classmethod
    def default_favorite(cls, v):
        return False if v is None else v


class ContactCreate(ContactBase):
    id: SqlInt


class ContactUpdate(ContactBase):
    pass


class ContactRead(ContactBase):
    id: SqlInt

    def __str__(self):
        return (
            f'Contact[ID: {self.id}; Name: "{self.name}"; Nickname: "{self.nickname}"; '
            f'Number: {self.number}; Favorite: {self.favorite}; Picture: {self.picture is not None}]'
        )
