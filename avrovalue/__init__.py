"""avrovalue: schema-driven decoder for the Avro binary encoding."""

from avrovalue.config import DecoderConfig
from avrovalue.exceptions import (
    AvroException,
    ConfigurationException,
    DecodeException,
    StreamExhaustedException,
    VarintOverflowException,
    InvalidLengthException,
    InvalidBooleanException,
    InvalidUtf8Exception,
    UnionIndexException,
    EnumIndexException,
    DecimalSchemaException,
    InvalidUuidException,
    BlockSizeMismatchException,
    RecursionDepthExceededException,
)
from avrovalue.schema import (
    SchemaKind,
    Schema,
    PrimitiveSchema,
    FixedSchema,
    DecimalSchema,
    ArraySchema,
    MapSchema,
    UnionSchema,
    RecordField,
    RecordSchema,
    EnumSchema,
)
from avrovalue.value import Value, Duration
from avrovalue.serialization import (
    ByteInput,
    BytesInput,
    FileInput,
    Decoder,
    decode,
)

__version__ = "0.1.0"

__all__ = [
    "DecoderConfig",
    "AvroException",
    "ConfigurationException",
    "DecodeException",
    "StreamExhaustedException",
    "VarintOverflowException",
    "InvalidLengthException",
    "InvalidBooleanException",
    "InvalidUtf8Exception",
    "UnionIndexException",
    "EnumIndexException",
    "DecimalSchemaException",
    "InvalidUuidException",
    "BlockSizeMismatchException",
    "RecursionDepthExceededException",
    "SchemaKind",
    "Schema",
    "PrimitiveSchema",
    "FixedSchema",
    "DecimalSchema",
    "ArraySchema",
    "MapSchema",
    "UnionSchema",
    "RecordField",
    "RecordSchema",
    "EnumSchema",
    "Value",
    "Duration",
    "ByteInput",
    "BytesInput",
    "FileInput",
    "Decoder",
    "decode",
]
