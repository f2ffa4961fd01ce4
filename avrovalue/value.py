"""Decoded value tree.

Every decoded value is an instance of a :class:`Value` subclass that
mirrors the schema kind it was decoded from. Values are frozen once
built; containers hold tuples (arrays, records) or a dict owned solely by
the value (maps).

Supported Types:
    - Primitives: null, boolean, int, long, float, double, bytes, string
    - Temporal: date, time-millis, time-micros, timestamp-millis,
      timestamp-micros (raw integers, with conversion helpers)
    - Logical: fixed, decimal, duration, uuid
    - Complex: array, map, union, record, enum

:meth:`Value.to_python` flattens a tree into plain Python objects.
"""

import struct
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any, ClassVar, Dict, Optional, Tuple

from avrovalue.schema import SchemaKind


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
EPOCH_DATE = date(1970, 1, 1)
DURATION_SIZE = 12

_DURATION_STRUCT = struct.Struct("<III")


@dataclass(frozen=True)
class Duration:
    """Avro duration: three independent unsigned 32-bit quantities."""

    months: int
    days: int
    millis: int

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Duration":
        """Build a duration from its 12-byte little-endian encoding.

        Raises:
            ValueError: If ``raw`` is not exactly 12 bytes long.
        """
        if len(raw) != DURATION_SIZE:
            raise ValueError(
                f"duration requires {DURATION_SIZE} bytes, got {len(raw)}"
            )
        months, days, millis = _DURATION_STRUCT.unpack(raw)
        return cls(months, days, millis)

    def to_bytes(self) -> bytes:
        return _DURATION_STRUCT.pack(self.months, self.days, self.millis)


def decimal_from_bytes(raw: bytes, scale: int) -> Decimal:
    """Interpret big-endian two's complement bytes as an unscaled decimal.

    The buffer may be longer than the precision requires; sign extension
    makes the extra leading bytes harmless. An empty buffer is zero.

    Args:
        raw: Unscaled integer, big-endian two's complement.
        scale: Number of digits after the decimal point.

    Returns:
        The exact decimal value, with exponent ``-scale``.
    """
    unscaled = int.from_bytes(raw, "big", signed=True)
    # Decimal(int) does not go through str, so there is no digit limit.
    sign, digits, _ = Decimal(unscaled).as_tuple()
    return Decimal((sign, digits, -scale))


class Value:
    """Base class for decoded values."""

    kind: ClassVar[SchemaKind]

    def to_python(self) -> Any:
        """Convert this value into plain Python objects."""
        raise NotImplementedError


@dataclass(frozen=True)
class NullValue(Value):
    kind: ClassVar[SchemaKind] = SchemaKind.NULL

    def to_python(self) -> None:
        return None


@dataclass(frozen=True)
class BooleanValue(Value):
    value: bool
    kind: ClassVar[SchemaKind] = SchemaKind.BOOLEAN

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class IntValue(Value):
    value: int
    kind: ClassVar[SchemaKind] = SchemaKind.INT

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class LongValue(Value):
    value: int
    kind: ClassVar[SchemaKind] = SchemaKind.LONG

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class FloatValue(Value):
    """Single precision float, widened to a Python float."""

    value: float
    kind: ClassVar[SchemaKind] = SchemaKind.FLOAT

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class DoubleValue(Value):
    value: float
    kind: ClassVar[SchemaKind] = SchemaKind.DOUBLE

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class BytesValue(Value):
    value: bytes
    kind: ClassVar[SchemaKind] = SchemaKind.BYTES

    def to_python(self) -> bytes:
        return self.value


@dataclass(frozen=True)
class StringValue(Value):
    value: str
    kind: ClassVar[SchemaKind] = SchemaKind.STRING

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class FixedValue(Value):
    """Raw bytes of a schema-declared size."""

    size: int
    value: bytes
    kind: ClassVar[SchemaKind] = SchemaKind.FIXED

    def to_python(self) -> bytes:
        return self.value


@dataclass(frozen=True)
class DateValue(Value):
    """Days since the Unix epoch."""

    value: int
    kind: ClassVar[SchemaKind] = SchemaKind.DATE

    def to_python(self) -> int:
        return self.value

    def to_date(self) -> date:
        return EPOCH_DATE + timedelta(days=self.value)


@dataclass(frozen=True)
class TimeMillisValue(Value):
    """Milliseconds after midnight."""

    value: int
    kind: ClassVar[SchemaKind] = SchemaKind.TIME_MILLIS

    def to_python(self) -> int:
        return self.value

    def to_time(self) -> time:
        return _time_from_micros(self.value * 1000)


@dataclass(frozen=True)
class TimeMicrosValue(Value):
    """Microseconds after midnight."""

    value: int
    kind: ClassVar[SchemaKind] = SchemaKind.TIME_MICROS

    def to_python(self) -> int:
        return self.value

    def to_time(self) -> time:
        return _time_from_micros(self.value)


@dataclass(frozen=True)
class TimestampMillisValue(Value):
    """Milliseconds since the Unix epoch, UTC."""

    value: int
    kind: ClassVar[SchemaKind] = SchemaKind.TIMESTAMP_MILLIS

    def to_python(self) -> int:
        return self.value

    def to_datetime(self) -> datetime:
        return EPOCH + timedelta(milliseconds=self.value)


@dataclass(frozen=True)
class TimestampMicrosValue(Value):
    """Microseconds since the Unix epoch, UTC."""

    value: int
    kind: ClassVar[SchemaKind] = SchemaKind.TIMESTAMP_MICROS

    def to_python(self) -> int:
        return self.value

    def to_datetime(self) -> datetime:
        return EPOCH + timedelta(microseconds=self.value)


@dataclass(frozen=True)
class DurationValue(Value):
    value: Duration
    kind: ClassVar[SchemaKind] = SchemaKind.DURATION

    def to_python(self) -> Duration:
        return self.value


@dataclass(frozen=True)
class UuidValue(Value):
    value: uuid.UUID
    kind: ClassVar[SchemaKind] = SchemaKind.UUID

    def to_python(self) -> uuid.UUID:
        return self.value


@dataclass(frozen=True)
class DecimalValue(Value):
    value: Decimal
    kind: ClassVar[SchemaKind] = SchemaKind.DECIMAL

    def to_python(self) -> Decimal:
        return self.value


@dataclass(frozen=True)
class ArrayValue(Value):
    items: Tuple[Value, ...] = ()
    kind: ClassVar[SchemaKind] = SchemaKind.ARRAY

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def to_python(self) -> list:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class MapValue(Value):
    items: Dict[str, Value] = field(default_factory=dict)
    kind: ClassVar[SchemaKind] = SchemaKind.MAP

    def __hash__(self) -> int:
        return hash(frozenset(self.items.items()))

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, key: str) -> Value:
        return self.items[key]

    def to_python(self) -> dict:
        return {key: value.to_python() for key, value in self.items.items()}


@dataclass(frozen=True)
class UnionValue(Value):
    """The resolved branch of a union.

    Attributes:
        value: The decoded value of the branch that was taken.
        index: Position of that branch in the union's variants.
    """

    value: Value
    index: int = field(default=0, compare=False)
    kind: ClassVar[SchemaKind] = SchemaKind.UNION

    def to_python(self) -> Any:
        return self.value.to_python()


@dataclass(frozen=True)
class RecordValue(Value):
    """Record fields as ``(name, value)`` pairs in schema order."""

    fields: Tuple[Tuple[str, Value], ...] = ()
    kind: ClassVar[SchemaKind] = SchemaKind.RECORD

    def get(self, name: str) -> Optional[Value]:
        """Get the value of a field by name, or None if absent."""
        for field_name, value in self.fields:
            if field_name == name:
                return value
        return None

    def field_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    def to_python(self) -> dict:
        return {name: value.to_python() for name, value in self.fields}


@dataclass(frozen=True)
class EnumValue(Value):
    index: int
    symbol: str
    kind: ClassVar[SchemaKind] = SchemaKind.ENUM

    def to_python(self) -> str:
        return self.symbol


def _time_from_micros(micros: int) -> time:
    seconds, micro = divmod(micros, 1_000_000)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return time(hour, minute, second, micro)
