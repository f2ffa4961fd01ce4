"""Schema tree consumed by the decoder.

Schemas are immutable: every node is a frozen dataclass and container
nodes hold tuples, so one schema tree can be shared by any number of
concurrent decode calls. Parsing schemas from their JSON form is not part
of this package; trees are built directly from these classes.

Example:
    Building a record schema::

        from avrovalue.schema import (
            RecordSchema, RecordField, ArraySchema, UnionSchema,
            NULL, LONG, STRING,
        )

        user = RecordSchema(
            name="User",
            fields=(
                RecordField("id", LONG),
                RecordField("email", UnionSchema((NULL, STRING))),
                RecordField("tags", ArraySchema(STRING)),
            ),
        )
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Tuple


class SchemaKind(IntEnum):
    """Schema node kinds understood by the decoder."""

    NULL = 0
    BOOLEAN = 1
    INT = 2
    LONG = 3
    FLOAT = 4
    DOUBLE = 5
    BYTES = 6
    STRING = 7
    DATE = 8
    TIME_MILLIS = 9
    TIME_MICROS = 10
    TIMESTAMP_MILLIS = 11
    TIMESTAMP_MICROS = 12
    DURATION = 13
    UUID = 14
    FIXED = 15
    DECIMAL = 16
    ARRAY = 17
    MAP = 18
    UNION = 19
    RECORD = 20
    ENUM = 21


PRIMITIVE_KINDS = frozenset(
    {
        SchemaKind.NULL,
        SchemaKind.BOOLEAN,
        SchemaKind.INT,
        SchemaKind.LONG,
        SchemaKind.FLOAT,
        SchemaKind.DOUBLE,
        SchemaKind.BYTES,
        SchemaKind.STRING,
        SchemaKind.DATE,
        SchemaKind.TIME_MILLIS,
        SchemaKind.TIME_MICROS,
        SchemaKind.TIMESTAMP_MILLIS,
        SchemaKind.TIMESTAMP_MICROS,
        SchemaKind.DURATION,
        SchemaKind.UUID,
    }
)


class Schema:
    """Base class for schema nodes."""

    @property
    def kind(self) -> SchemaKind:
        raise NotImplementedError


@dataclass(frozen=True)
class PrimitiveSchema(Schema):
    """A schema node without parameters (primitives and simple logical types)."""

    primitive: SchemaKind

    def __post_init__(self):
        if self.primitive not in PRIMITIVE_KINDS:
            raise ValueError(f"{self.primitive!r} is not a primitive schema kind")

    @property
    def kind(self) -> SchemaKind:
        return self.primitive

    def __repr__(self) -> str:
        return self.primitive.name


@dataclass(frozen=True)
class FixedSchema(Schema):
    """A fixed number of raw bytes, declared by the schema."""

    size: int
    name: str = ""

    def __post_init__(self):
        if self.size < 0:
            raise ValueError("fixed size must not be negative")

    @property
    def kind(self) -> SchemaKind:
        return SchemaKind.FIXED


@dataclass(frozen=True)
class DecimalSchema(Schema):
    """Decimal logical type layered over a fixed or bytes schema.

    The inner schema is not checked here: the decoder rejects any inner
    kind other than fixed or bytes when it meets a value.
    """

    inner: Schema
    precision: int
    scale: int = 0

    @property
    def kind(self) -> SchemaKind:
        return SchemaKind.DECIMAL


@dataclass(frozen=True)
class ArraySchema(Schema):
    """A block-framed sequence of items of one schema."""

    items: Schema

    @property
    def kind(self) -> SchemaKind:
        return SchemaKind.ARRAY


@dataclass(frozen=True)
class MapSchema(Schema):
    """A block-framed string-keyed mapping of values of one schema."""

    values: Schema

    @property
    def kind(self) -> SchemaKind:
        return SchemaKind.MAP


@dataclass(frozen=True)
class UnionSchema(Schema):
    """An ordered choice between variant schemas."""

    schemas: Tuple[Schema, ...]

    def __post_init__(self):
        object.__setattr__(self, "schemas", tuple(self.schemas))

    @property
    def kind(self) -> SchemaKind:
        return SchemaKind.UNION

    def variants(self) -> Tuple[Schema, ...]:
        """Get the variant schemas in declaration order."""
        return self.schemas


@dataclass(frozen=True)
class RecordField:
    """A named field of a record schema."""

    name: str
    schema: Schema


@dataclass(frozen=True)
class RecordSchema(Schema):
    """A named record with ordered fields."""

    name: str
    fields: Tuple[RecordField, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "fields", tuple(self.fields))

    @property
    def kind(self) -> SchemaKind:
        return SchemaKind.RECORD

    def get_field(self, name: str):
        """Get a field by name, or None if absent."""
        for f in self.fields:
            if f.name == name:
                return f
        return None


@dataclass(frozen=True)
class EnumSchema(Schema):
    """A named enumeration of symbols."""

    name: str
    symbols: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "symbols", tuple(self.symbols))

    @property
    def kind(self) -> SchemaKind:
        return SchemaKind.ENUM


NULL = PrimitiveSchema(SchemaKind.NULL)
BOOLEAN = PrimitiveSchema(SchemaKind.BOOLEAN)
INT = PrimitiveSchema(SchemaKind.INT)
LONG = PrimitiveSchema(SchemaKind.LONG)
FLOAT = PrimitiveSchema(SchemaKind.FLOAT)
DOUBLE = PrimitiveSchema(SchemaKind.DOUBLE)
BYTES = PrimitiveSchema(SchemaKind.BYTES)
STRING = PrimitiveSchema(SchemaKind.STRING)
DATE = PrimitiveSchema(SchemaKind.DATE)
TIME_MILLIS = PrimitiveSchema(SchemaKind.TIME_MILLIS)
TIME_MICROS = PrimitiveSchema(SchemaKind.TIME_MICROS)
TIMESTAMP_MILLIS = PrimitiveSchema(SchemaKind.TIMESTAMP_MILLIS)
TIMESTAMP_MICROS = PrimitiveSchema(SchemaKind.TIMESTAMP_MICROS)
DURATION = PrimitiveSchema(SchemaKind.DURATION)
UUID = PrimitiveSchema(SchemaKind.UUID)
