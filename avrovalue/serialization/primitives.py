"""Primitive decoders for the Avro binary encoding.

These are the leaves of the decoder: zig-zag variable-length integers,
little-endian IEEE-754 floats and the length guard applied before every
stream-controlled allocation.

Wire format:
    - int and long: 7 payload bits per byte, least significant group
      first, high bit set on every byte but the last. The unsigned result
      is zig-zag mapped, ``n >= 0 -> 2n`` and ``n < 0 -> -2n - 1``.
    - float and double: 4 or 8 bytes, little-endian IEEE-754.
"""

import struct

from avrovalue.exceptions import InvalidLengthException, VarintOverflowException
from avrovalue.serialization.api import ByteInput


MAX_INT_VARINT_BYTES = 5
MAX_LONG_VARINT_BYTES = 10

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
UINT64_MASK = (1 << 64) - 1

_FLOAT = struct.Struct("<f")
_DOUBLE = struct.Struct("<d")


def read_varint(stream: ByteInput, max_bytes: int) -> int:
    """Read an unsigned variable-length integer.

    Args:
        stream: The input to read from.
        max_bytes: Maximum number of bytes the integer may span.

    Returns:
        The unsigned value, truncated to 64 bits.

    Raises:
        VarintOverflowException: If the continuation bit is still set
            after ``max_bytes`` bytes.
    """
    result = 0
    shift = 0
    for _ in range(max_bytes):
        byte = stream.read_byte()
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result & UINT64_MASK
        shift += 7
    raise VarintOverflowException(
        f"Integer overflow: varint longer than {max_bytes} bytes"
    )


def zigzag_decode(n: int) -> int:
    """Map an unsigned zig-zag value back to a signed integer."""
    return (n >> 1) ^ -(n & 1)


def read_long(stream: ByteInput) -> int:
    """Read a zig-zag encoded signed 64-bit integer."""
    return zigzag_decode(read_varint(stream, MAX_LONG_VARINT_BYTES))


def read_int(stream: ByteInput) -> int:
    """Read a zig-zag encoded signed 32-bit integer.

    Raises:
        VarintOverflowException: If the encoding is longer than 5 bytes or
            the value does not fit in 32 bits.
    """
    value = zigzag_decode(read_varint(stream, MAX_INT_VARINT_BYTES))
    if value < INT32_MIN or value > INT32_MAX:
        raise VarintOverflowException(f"int out of range: {value}")
    return value


def read_float(stream: ByteInput) -> float:
    return _FLOAT.unpack(stream.read_exact(4))[0]


def read_double(stream: ByteInput) -> float:
    return _DOUBLE.unpack(stream.read_exact(8))[0]


def safe_len(length: int, max_allocation_bytes: int) -> int:
    """Validate a length read from the stream before anything is allocated.

    Args:
        length: The signed length as decoded.
        max_allocation_bytes: The configured ceiling.

    Returns:
        ``length`` unchanged.

    Raises:
        InvalidLengthException: If the length is negative or above the
            ceiling.
    """
    if length < 0:
        raise InvalidLengthException(f"Negative length: {length}", length=length)
    if length > max_allocation_bytes:
        raise InvalidLengthException(
            f"Unable to allocate {length} bytes "
            f"(maximum allowed: {max_allocation_bytes})",
            length=length,
        )
    return length


def read_length(stream: ByteInput, max_allocation_bytes: int) -> int:
    """Read a long and pass it through :func:`safe_len`."""
    return safe_len(read_long(stream), max_allocation_bytes)
