"""Byte input implementations."""

from typing import Any, BinaryIO, Union

from avrovalue.exceptions import StreamExhaustedException
from avrovalue.serialization.api import ByteInput


class BytesInput(ByteInput):
    """Input over an in-memory buffer."""

    def __init__(self, buffer: Union[bytes, bytearray, memoryview]):
        self._buffer = bytes(buffer)
        self._pos = 0

    def read_exact(self, n: int) -> bytes:
        end = self._pos + n
        if end > len(self._buffer):
            available = len(self._buffer) - self._pos
            raise StreamExhaustedException(
                f"Unexpected end of input: needed {n} bytes, {available} available",
                requested=n,
                available=available,
            )
        data = self._buffer[self._pos:end]
        self._pos = end
        return data

    def read_byte(self) -> int:
        if self._pos >= len(self._buffer):
            raise StreamExhaustedException(
                "Unexpected end of input: needed 1 bytes, 0 available",
                requested=1,
                available=0,
            )
        value = self._buffer[self._pos]
        self._pos += 1
        return value

    def position(self) -> int:
        return self._pos

    def remaining(self) -> int:
        """Get the number of unread bytes."""
        return len(self._buffer) - self._pos

    def __len__(self) -> int:
        return len(self._buffer)


class FileInput(ByteInput):
    """Input over a binary file-like object.

    Short reads from the underlying object are retried until it reports
    end of file, so pipes and sockets that return partial chunks are
    handled.
    """

    def __init__(self, fo: BinaryIO):
        self._fo = fo
        self._pos = 0

    def read_exact(self, n: int) -> bytes:
        if n == 0:
            return b""
        data = self._fo.read(n)
        if data is None:
            data = b""
        while len(data) < n:
            chunk = self._fo.read(n - len(data))
            if not chunk:
                raise StreamExhaustedException(
                    f"Unexpected end of input: needed {n} bytes, {len(data)} available",
                    requested=n,
                    available=len(data),
                )
            data += chunk
        self._pos += n
        return data

    def position(self) -> int:
        return self._pos

    @property
    def file(self) -> BinaryIO:
        return self._fo


def as_input(source: Any) -> ByteInput:
    """Coerce a byte source into a :class:`ByteInput`.

    Args:
        source: An existing input, a bytes-like object, or a binary
            file-like object with a ``read`` method.

    Returns:
        A ByteInput reading from ``source``.

    Raises:
        TypeError: If ``source`` is none of the above.
    """
    if isinstance(source, ByteInput):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return BytesInput(source)
    if hasattr(source, "read"):
        return FileInput(source)
    raise TypeError(f"Cannot read bytes from {type(source).__name__}")
