"""Tests for avrovalue/serialization/decoder.py module."""

import io
import uuid
from decimal import Decimal

import pytest

from avrovalue.config import DecoderConfig
from avrovalue.exceptions import (
    DecimalSchemaException,
    DecodeException,
    EnumIndexException,
    InvalidBooleanException,
    InvalidLengthException,
    InvalidUtf8Exception,
    InvalidUuidException,
    RecursionDepthExceededException,
    StreamExhaustedException,
    UnionIndexException,
)
from avrovalue.schema import (
    BOOLEAN,
    BYTES,
    DATE,
    DURATION,
    INT,
    LONG,
    NULL,
    STRING,
    TIME_MICROS,
    TIME_MILLIS,
    TIMESTAMP_MICROS,
    TIMESTAMP_MILLIS,
    UUID,
    ArraySchema,
    DecimalSchema,
    EnumSchema,
    FixedSchema,
    MapSchema,
    RecordField,
    RecordSchema,
    UnionSchema,
)
from avrovalue.serialization.decoder import Decoder, decode
from avrovalue.serialization.input import BytesInput
from avrovalue.value import (
    ArrayValue,
    BooleanValue,
    BytesValue,
    DateValue,
    DecimalValue,
    Duration,
    DurationValue,
    EnumValue,
    FixedValue,
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
)


class TestDecodeArray:
    """Tests for array decoding."""

    def test_decode_array_without_size(self):
        result = decode(ArraySchema(INT), bytes([6, 2, 4, 6, 0]))
        assert result == ArrayValue((IntValue(1), IntValue(2), IntValue(3)))

    def test_decode_array_with_size(self):
        result = decode(ArraySchema(INT), bytes([5, 6, 2, 4, 6, 0]))
        assert result == ArrayValue((IntValue(1), IntValue(2), IntValue(3)))

    def test_decode_empty_array(self):
        assert decode(ArraySchema(STRING), b"\x00") == ArrayValue(())


class TestDecodeMap:
    """Tests for map decoding."""

    def test_decode_map_without_size(self):
        data = bytes([0x02, 0x08]) + b"test" + bytes([0x02, 0x00])
        result = decode(MapSchema(INT), data)
        assert result == MapValue({"test": IntValue(1)})

    def test_decode_map_with_size(self):
        data = bytes([0x01, 0x0C, 0x08]) + b"test" + bytes([0x02, 0x00])
        result = decode(MapSchema(INT), data)
        assert result == MapValue({"test": IntValue(1)})

    def test_duplicate_key_last_wins(self):
        data = bytes([0x04, 0x02]) + b"k" + bytes([0x02, 0x02]) + b"k" + bytes([0x04, 0x00])
        result = decode(MapSchema(INT), data)
        assert result == MapValue({"k": IntValue(2)})

    def test_invalid_utf8_key(self):
        data = bytes([0x02, 0x02, 0xFF, 0x02, 0x00])
        with pytest.raises(InvalidUtf8Exception):
            decode(MapSchema(INT), data)


class TestDecodeScalars:
    """Tests for primitive and simple logical kinds."""

    def test_null_consumes_nothing(self):
        stream = BytesInput(b"\x01")
        assert decode(NULL, stream) == NullValue()
        assert stream.position() == 0

    def test_boolean(self):
        assert decode(BOOLEAN, b"\x00") == BooleanValue(False)
        assert decode(BOOLEAN, b"\x01") == BooleanValue(True)

    def test_boolean_rejects_other_bytes(self):
        with pytest.raises(InvalidBooleanException) as exc_info:
            decode(BOOLEAN, b"\x02")
        assert "not a bool" in str(exc_info.value)

    def test_int_kinds(self):
        assert decode(INT, b"\x54") == IntValue(42)
        assert decode(DATE, b"\x54") == DateValue(42)
        assert decode(TIME_MILLIS, b"\x54") == TimeMillisValue(42)

    def test_long_kinds(self):
        assert decode(LONG, b"\x53") == LongValue(-42)
        assert decode(TIME_MICROS, b"\x53") == TimeMicrosValue(-42)
        assert decode(TIMESTAMP_MILLIS, b"\x53") == TimestampMillisValue(-42)
        assert decode(TIMESTAMP_MICROS, b"\x53") == TimestampMicrosValue(-42)

    def test_bytes(self):
        assert decode(BYTES, b"\x06abc") == BytesValue(b"abc")
        assert decode(BYTES, b"\x00") == BytesValue(b"")

    def test_string_multibyte(self):
        encoded = "żółw".encode("utf-8")
        data = bytes([len(encoded) * 2]) + encoded
        assert decode(STRING, data) == StringValue("żółw")

    def test_string_invalid_utf8(self):
        with pytest.raises(InvalidUtf8Exception) as exc_info:
            decode(STRING, b"\x04\xff\xfe")
        assert "not a valid utf-8 string" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_string_negative_length(self):
        with pytest.raises(InvalidLengthException):
            decode(STRING, b"\x01")

    def test_string_huge_length_rejected_before_read(self, varint):
        with pytest.raises(InvalidLengthException):
            decode(BYTES, varint(1 << 60) + b"abc")

    def test_string_truncated(self):
        with pytest.raises(StreamExhaustedException) as exc_info:
            decode(STRING, b"\x08te")
        assert exc_info.value.requested == 4
        assert exc_info.value.available == 2

    def test_fixed(self):
        assert decode(FixedSchema(3, "f3"), b"xyz") == FixedValue(3, b"xyz")

    def test_fixed_zero_size(self):
        stream = BytesInput(b"\x07")
        assert decode(FixedSchema(0, "empty"), stream) == FixedValue(0, b"")
        assert stream.position() == 0

    def test_duration(self):
        data = (1).to_bytes(4, "little") + (2).to_bytes(4, "little") + (3).to_bytes(4, "little")
        assert decode(DURATION, data) == DurationValue(Duration(1, 2, 3))

    def test_duration_truncated(self):
        with pytest.raises(StreamExhaustedException):
            decode(DURATION, b"\x00" * 11)


class TestDecodeUuid:
    """Tests for uuid decoding."""

    def test_valid_uuid(self):
        text = "550e8400-e29b-41d4-a716-446655440000"
        data = bytes([len(text) * 2]) + text.encode("ascii")
        assert decode(UUID, data) == UuidValue(uuid.UUID(text))

    def test_invalid_uuid(self):
        text = b"not-a-uuid"
        with pytest.raises(InvalidUuidException):
            decode(UUID, bytes([len(text) * 2]) + text)


class TestDecodeDecimal:
    """Tests for decimal decoding."""

    def test_negative_on_fixed(self):
        schema = DecimalSchema(FixedSchema(2, "decimal"), precision=4, scale=2)
        raw = (-423).to_bytes(2, "big", signed=True)
        assert decode(schema, raw) == DecimalValue(Decimal("-4.23"))

    def test_oversized_fixed(self):
        schema = DecimalSchema(FixedSchema(13, "decimal"), precision=4, scale=2)
        raw = (-423).to_bytes(13, "big", signed=True)
        assert decode(schema, raw) == DecimalValue(Decimal("-4.23"))

    def test_bytes_longer_than_int_string_limit(self, varint):
        schema = DecimalSchema(BYTES, precision=10, scale=2)
        data = varint(2000) + b"\x01" + b"\x00" * 1999
        value = decode(schema, data)
        assert isinstance(value, DecimalValue)
        assert value.value.as_tuple().exponent == -2
        assert len(value.value.as_tuple().digits) > 4300

    def test_positive_on_bytes(self):
        schema = DecimalSchema(BYTES, precision=10, scale=3)
        raw = (123456).to_bytes(3, "big", signed=True)
        result = decode(schema, bytes([len(raw) * 2]) + raw)
        assert result == DecimalValue(Decimal("123.456"))
        assert result.value.as_tuple().exponent == -3

    def test_inner_must_be_fixed_or_bytes(self):
        schema = DecimalSchema(INT, precision=4, scale=2)
        stream = BytesInput(b"\x02")
        with pytest.raises(DecimalSchemaException):
            decode(schema, stream)
        assert stream.position() == 0


class TestDecodeUnion:
    """Tests for union decoding."""

    def test_each_branch(self):
        schema = UnionSchema((NULL, INT, STRING))
        assert decode(schema, b"\x00") == UnionValue(NullValue())
        assert decode(schema, b"\x02\x54") == UnionValue(IntValue(42))
        assert decode(schema, b"\x04\x02a") == UnionValue(StringValue("a"))

    def test_branch_index_is_kept(self):
        result = decode(UnionSchema((NULL, INT)), b"\x02\x02")
        assert result.index == 1

    def test_index_out_of_bounds(self):
        with pytest.raises(UnionIndexException) as exc_info:
            decode(UnionSchema((NULL, INT)), b"\x04")
        assert "Union index out of bounds" in str(exc_info.value)

    def test_negative_index(self):
        with pytest.raises(UnionIndexException):
            decode(UnionSchema((NULL, INT)), b"\x01")


class TestDecodeEnum:
    """Tests for enum decoding."""

    SUITS = EnumSchema("Suit", ("SPADES", "HEARTS", "DIAMONDS", "CLUBS"))

    def test_symbols(self):
        assert decode(self.SUITS, b"\x00") == EnumValue(0, "SPADES")
        assert decode(self.SUITS, b"\x04") == EnumValue(2, "DIAMONDS")
        assert decode(self.SUITS, b"\x06") == EnumValue(3, "CLUBS")

    def test_symbol_is_shared_with_schema(self):
        result = decode(self.SUITS, b"\x02")
        assert result.symbol is self.SUITS.symbols[1]

    def test_index_out_of_bounds(self):
        with pytest.raises(EnumIndexException) as exc_info:
            decode(self.SUITS, b"\x08")
        assert "enum symbol index out of bounds" in str(exc_info.value)

    def test_negative_index(self):
        with pytest.raises(EnumIndexException):
            decode(self.SUITS, b"\x01")


class TestDecodeRecord:
    """Tests for record decoding."""

    def test_fields_in_schema_order(self):
        schema = RecordSchema(
            "Point",
            (RecordField("y", INT), RecordField("x", INT), RecordField("label", STRING)),
        )
        result = decode(schema, b"\x02\x04\x02p")
        assert result == RecordValue(
            (("y", IntValue(1)), ("x", IntValue(2)), ("label", StringValue("p")))
        )
        assert result.field_names() == ("y", "x", "label")

    def test_empty_record(self):
        assert decode(RecordSchema("Empty"), b"") == RecordValue(())

    def test_failure_discards_partial_record(self):
        schema = RecordSchema("Pair", (RecordField("a", INT), RecordField("b", BOOLEAN)))
        with pytest.raises(InvalidBooleanException):
            decode(schema, b"\x02\x05")


class TestDecoderService:
    """Tests for the Decoder class."""

    def test_stream_left_after_value(self, decoder):
        stream = BytesInput(b"\x02\x04\x06")
        assert decoder.decode(INT, stream) == IntValue(1)
        assert stream.position() == 1
        assert decoder.decode(INT, stream) == IntValue(2)
        assert stream.position() == 2

    def test_decode_from_file_object(self, decoder):
        assert decoder.decode(STRING, io.BytesIO(b"\x04hi")) == StringValue("hi")

    def test_decode_bytes_trailing_data(self, decoder):
        assert decoder.decode_bytes(INT, b"\x02\x00") == IntValue(1)
        with pytest.raises(DecodeException) as exc_info:
            decoder.decode_bytes(INT, b"\x02\x00", require_exhausted=True)
        assert "1 trailing bytes" in str(exc_info.value)

    def test_iter_decode(self, decoder):
        values = list(decoder.iter_decode(LONG, b"\x02\x04\x06", 3))
        assert values == [LongValue(1), LongValue(2), LongValue(3)]

    def test_rejects_non_byte_source(self, decoder):
        with pytest.raises(TypeError):
            decoder.decode(INT, 42)

    def test_custom_allocation_ceiling(self):
        decoder = Decoder(DecoderConfig(max_allocation_bytes=4))
        assert decoder.decode(STRING, b"\x08test") == StringValue("test")
        with pytest.raises(InvalidLengthException):
            decoder.decode(STRING, b"\x0atests")

    def test_strict_block_size(self, strict_decoder):
        with pytest.raises(DecodeException):
            strict_decoder.decode(ArraySchema(INT), bytes([5, 8, 2, 4, 6, 0]))
        result = strict_decoder.decode(MapSchema(INT), bytes([0x01, 0x0C, 0x08]) + b"test" + bytes([0x02, 0x00]))
        assert result == MapValue({"test": IntValue(1)})


class TestDepthLimit:
    """Tests for nesting limits."""

    NESTED = ArraySchema(ArraySchema(INT))
    DATA = b"\x02\x02\x02\x00\x00"

    def test_within_limit(self):
        decoder = Decoder(DecoderConfig(max_depth=3))
        result = decoder.decode(self.NESTED, self.DATA)
        assert result == ArrayValue((ArrayValue((IntValue(1),)),))

    def test_exceeds_limit(self):
        decoder = Decoder(DecoderConfig(max_depth=2))
        with pytest.raises(RecursionDepthExceededException):
            decoder.decode(self.NESTED, self.DATA)

    def test_interpreter_limit_becomes_decode_error(self, decoder):
        schema = NULL
        for _ in range(5000):
            schema = UnionSchema((schema,))
        with pytest.raises(RecursionDepthExceededException):
            decoder.decode(schema, b"\x00" * 5000)


class TestPackageExports:
    """Tests for the top-level package surface."""

    def test_decode_is_exported(self):
        import avrovalue

        assert avrovalue.decode is decode
        assert avrovalue.Decoder is Decoder
        assert avrovalue.decode(avrovalue.schema.INT, b"\x02") == IntValue(1)
