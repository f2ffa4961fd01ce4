"""Schema-driven decoding of Avro binary data into value trees.

The :class:`Decoder` walks a schema tree and consumes exactly the bytes of
one value from a :class:`~avrovalue.serialization.api.ByteInput`. Each
schema kind has one handler; array, map, union and record handlers call
back into the same entry point, so recursion depth follows schema nesting.

A decoder holds no per-call state and can be shared between threads, as
can the schemas it decodes against. Any malformed input aborts the whole
call with a :class:`~avrovalue.exceptions.DecodeException`; partially built
values are discarded.

Example:
    >>> from avrovalue.schema import ArraySchema, INT
    >>> decode(ArraySchema(INT), bytes([6, 2, 4, 6, 0]))
    ArrayValue(items=(IntValue(value=1), IntValue(value=2), IntValue(value=3)))
"""

import uuid
from typing import Any, Callable, Dict, Iterator, Optional

from avrovalue.config import DecoderConfig
from avrovalue.exceptions import (
    DecimalSchemaException,
    DecodeException,
    EnumIndexException,
    InvalidBooleanException,
    InvalidUtf8Exception,
    InvalidUuidException,
    RecursionDepthExceededException,
    UnionIndexException,
)
from avrovalue.logging import get_logger
from avrovalue.schema import (
    ArraySchema,
    DecimalSchema,
    EnumSchema,
    FixedSchema,
    MapSchema,
    RecordSchema,
    Schema,
    SchemaKind,
    UnionSchema,
)
from avrovalue.serialization.api import ByteInput
from avrovalue.serialization.blocks import iter_block_items
from avrovalue.serialization.input import BytesInput, as_input
from avrovalue.serialization.primitives import (
    read_double,
    read_float,
    read_int,
    read_length,
    read_long,
)
from avrovalue.value import (
    DURATION_SIZE,
    ArrayValue,
    BooleanValue,
    BytesValue,
    DateValue,
    DecimalValue,
    DoubleValue,
    Duration,
    DurationValue,
    EnumValue,
    FixedValue,
    FloatValue,
    IntValue,
    LongValue,
    MapValue,
    NullValue,
    RecordValue,
    StringValue,
    TimeMicrosValue,
    TimeMillisValue,
    TimestampMicrosValue,
    TimestampMillisValue,
    UnionValue,
    UuidValue,
    Value,
    decimal_from_bytes,
)

_logger = get_logger("decoder")

Handler = Callable[[Schema, ByteInput, int], Value]


class Decoder:
    """Decodes values against schemas using a fixed configuration.

    Args:
        config: Decoder limits; defaults to :class:`DecoderConfig()`.
    """

    def __init__(self, config: Optional[DecoderConfig] = None):
        self._config = config or DecoderConfig()
        self._handlers: Dict[SchemaKind, Handler] = {
            SchemaKind.NULL: self._read_null,
            SchemaKind.BOOLEAN: self._read_boolean,
            SchemaKind.INT: self._read_int,
            SchemaKind.LONG: self._read_long,
            SchemaKind.FLOAT: self._read_float,
            SchemaKind.DOUBLE: self._read_double,
            SchemaKind.BYTES: self._read_bytes,
            SchemaKind.STRING: self._read_string,
            SchemaKind.DATE: self._read_date,
            SchemaKind.TIME_MILLIS: self._read_time_millis,
            SchemaKind.TIME_MICROS: self._read_time_micros,
            SchemaKind.TIMESTAMP_MILLIS: self._read_timestamp_millis,
            SchemaKind.TIMESTAMP_MICROS: self._read_timestamp_micros,
            SchemaKind.DURATION: self._read_duration,
            SchemaKind.UUID: self._read_uuid,
            SchemaKind.FIXED: self._read_fixed,
            SchemaKind.DECIMAL: self._read_decimal,
            SchemaKind.ARRAY: self._read_array,
            SchemaKind.MAP: self._read_map,
            SchemaKind.UNION: self._read_union,
            SchemaKind.RECORD: self._read_record,
            SchemaKind.ENUM: self._read_enum,
        }

    @property
    def config(self) -> DecoderConfig:
        return self._config

    def decode(self, schema: Schema, source: Any) -> Value:
        """Decode one value.

        Args:
            schema: The schema the value was written with.
            source: A ByteInput, a bytes-like object or a binary file-like
                object. The stream is left positioned after the value.

        Returns:
            The decoded value tree.

        Raises:
            DecodeException: If the input is malformed or truncated.
        """
        stream = as_input(source)
        _logger.debug("Decoding %s value at position %d", schema.kind.name, stream.position())
        try:
            value = self._decode(schema, stream, 1)
        except RecursionError as e:
            raise RecursionDepthExceededException(
                "Schema nesting exceeds the interpreter recursion limit", cause=e
            ) from e
        _logger.debug("Decoded %s value, position now %d", schema.kind.name, stream.position())
        return value

    def decode_bytes(
        self, schema: Schema, data: bytes, require_exhausted: bool = False
    ) -> Value:
        """Decode one value from an in-memory buffer.

        Args:
            schema: The schema the value was written with.
            data: The encoded bytes.
            require_exhausted: Fail if bytes remain after the value.

        Raises:
            DecodeException: If the input is malformed, truncated, or has
                trailing bytes while ``require_exhausted`` is set.
        """
        stream = BytesInput(data)
        value = self.decode(schema, stream)
        if require_exhausted and stream.remaining():
            raise DecodeException(
                f"{stream.remaining()} trailing bytes after {schema.kind.name} value"
            )
        return value

    def iter_decode(self, schema: Schema, source: Any, count: int) -> Iterator[Value]:
        """Decode ``count`` consecutive values written with the same schema."""
        stream = as_input(source)
        for _ in range(count):
            yield self.decode(schema, stream)

    def _decode(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        max_depth = self._config.max_depth
        if max_depth is not None and depth > max_depth:
            raise RecursionDepthExceededException(
                f"Schema nesting deeper than {max_depth} levels"
            )
        handler = self._handlers.get(schema.kind)
        if handler is None:
            raise DecodeException(f"Unsupported schema kind: {schema.kind!r}")
        return handler(schema, stream, depth)

    def _read_null(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return NullValue()

    def _read_boolean(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        byte = stream.read_byte()
        if byte == 0:
            return BooleanValue(False)
        if byte == 1:
            return BooleanValue(True)
        raise InvalidBooleanException(f"not a bool: 0x{byte:02x}")

    def _read_int(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return IntValue(read_int(stream))

    def _read_long(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return LongValue(read_long(stream))

    def _read_float(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return FloatValue(read_float(stream))

    def _read_double(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return DoubleValue(read_double(stream))

    def _read_raw(self, stream: ByteInput) -> bytes:
        length = read_length(stream, self._config.max_allocation_bytes)
        return stream.read_exact(length)

    def _read_bytes(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return BytesValue(self._read_raw(stream))

    def _read_text(self, stream: ByteInput) -> str:
        raw = self._read_raw(stream)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidUtf8Exception("not a valid utf-8 string", cause=e) from e

    def _read_string(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return StringValue(self._read_text(stream))

    def _read_date(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return DateValue(read_int(stream))

    def _read_time_millis(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return TimeMillisValue(read_int(stream))

    def _read_time_micros(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return TimeMicrosValue(read_long(stream))

    def _read_timestamp_millis(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return TimestampMillisValue(read_long(stream))

    def _read_timestamp_micros(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return TimestampMicrosValue(read_long(stream))

    def _read_duration(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        return DurationValue(Duration.from_bytes(stream.read_exact(DURATION_SIZE)))

    def _read_uuid(self, schema: Schema, stream: ByteInput, depth: int) -> Value:
        text = self._read_text(stream)
        try:
            return UuidValue(uuid.UUID(text))
        except ValueError as e:
            raise InvalidUuidException(f"not a valid uuid: {text!r}", cause=e) from e

    def _read_fixed(self, schema: FixedSchema, stream: ByteInput, depth: int) -> Value:
        return FixedValue(schema.size, stream.read_exact(schema.size))

    def _read_decimal(self, schema: DecimalSchema, stream: ByteInput, depth: int) -> Value:
        inner_kind = schema.inner.kind
        if inner_kind == SchemaKind.FIXED:
            inner = self._decode(schema.inner, stream, depth + 1)
            if not isinstance(inner, FixedValue):
                raise DecimalSchemaException(
                    "not a fixed value, required for decimal with fixed schema"
                )
        elif inner_kind == SchemaKind.BYTES:
            inner = self._decode(schema.inner, stream, depth + 1)
            if not isinstance(inner, BytesValue):
                raise DecimalSchemaException(
                    "not a bytes value, required for decimal with bytes schema"
                )
        else:
            raise DecimalSchemaException(
                f"not a fixed or bytes type, required for decimal schema: {inner_kind.name}"
            )
        return DecimalValue(decimal_from_bytes(inner.value, schema.scale))

    def _read_array(self, schema: ArraySchema, stream: ByteInput, depth: int) -> Value:
        items = iter_block_items(
            stream,
            lambda: self._decode(schema.items, stream, depth + 1),
            self._config.max_allocation_bytes,
            self._config.strict_block_size,
        )
        return ArrayValue(tuple(items))

    def _read_map(self, schema: MapSchema, stream: ByteInput, depth: int) -> Value:
        def read_entry():
            key = self._read_text(stream)
            return key, self._decode(schema.values, stream, depth + 1)

        entries = iter_block_items(
            stream,
            read_entry,
            self._config.max_allocation_bytes,
            self._config.strict_block_size,
        )
        return MapValue(dict(entries))

    def _read_union(self, schema: UnionSchema, stream: ByteInput, depth: int) -> Value:
        index = read_long(stream)
        variants = schema.variants()
        if index < 0 or index >= len(variants):
            raise UnionIndexException(
                f"Union index out of bounds: {index} (variants: {len(variants)})"
            )
        return UnionValue(self._decode(variants[index], stream, depth + 1), index)

    def _read_record(self, schema: RecordSchema, stream: ByteInput, depth: int) -> Value:
        fields = tuple(
            (f.name, self._decode(f.schema, stream, depth + 1)) for f in schema.fields
        )
        return RecordValue(fields)

    def _read_enum(self, schema: EnumSchema, stream: ByteInput, depth: int) -> Value:
        index = read_int(stream)
        if index < 0 or index >= len(schema.symbols):
            raise EnumIndexException(
                f"enum symbol index out of bounds: {index} (symbols: {len(schema.symbols)})"
            )
        return EnumValue(index, schema.symbols[index])


_default_decoder = Decoder()


def decode(schema: Schema, source: Any, config: Optional[DecoderConfig] = None) -> Value:
    """Decode one value written with ``schema`` from ``source``.

    Args:
        schema: The schema the value was written with.
        source: A ByteInput, bytes-like object or binary file-like object.
        config: Optional limits; the defaults apply when omitted.

    Returns:
        The decoded value tree.

    Raises:
        DecodeException: If the input is malformed or truncated.
    """
    decoder = _default_decoder if config is None else Decoder(config)
    return decoder.decode(schema, source)
