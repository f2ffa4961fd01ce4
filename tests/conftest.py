"""Shared pytest fixtures for avrovalue tests."""

from io import BytesIO

import fastavro
import pytest

from avrovalue.config import DecoderConfig
from avrovalue.serialization.decoder import Decoder


def zigzag_varint(n: int) -> bytes:
    """Encode a signed integer the way Avro writes int and long."""
    value = (n << 1) ^ (n >> 63)
    value &= (1 << 64) - 1
    out = bytearray()
    while value & ~0x7F:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


@pytest.fixture
def decoder():
    """Create a Decoder with default limits."""
    return Decoder()


@pytest.fixture
def strict_decoder():
    """Create a Decoder that verifies declared block sizes."""
    return Decoder(DecoderConfig(strict_block_size=True))


@pytest.fixture
def avro_encode():
    """Encode a datum with fastavro against a JSON-style schema."""

    def encode(schema, datum) -> bytes:
        buffer = BytesIO()
        fastavro.schemaless_writer(buffer, fastavro.parse_schema(schema), datum)
        return buffer.getvalue()

    return encode


@pytest.fixture
def varint():
    """Expose the zig-zag varint encoder to tests."""
    return zigzag_varint
