"""Byte stream interface consumed by the decoder.

The decoder never peeks or rewinds: it only asks for an exact number of
bytes and moves forward. Anything that can satisfy :meth:`ByteInput.read_exact`
can be decoded from, including sockets or pipes wrapped by the caller.

Example:
    Implementing a custom input::

        from avrovalue.exceptions import StreamExhaustedException
        from avrovalue.serialization.api import ByteInput

        class SocketInput(ByteInput):
            def __init__(self, sock):
                self._file = sock.makefile("rb")
                self._pos = 0

            def read_exact(self, n: int) -> bytes:
                data = self._file.read(n)
                if len(data) != n:
                    raise StreamExhaustedException("socket closed", n, len(data))
                self._pos += n
                return data

            def position(self) -> int:
                return self._pos
"""

from abc import ABC, abstractmethod


class ByteInput(ABC):
    """Interface for reading bytes sequentially."""

    @abstractmethod
    def read_exact(self, n: int) -> bytes:
        """Read exactly ``n`` bytes.

        Args:
            n: Number of bytes to read. Zero returns ``b""``.

        Returns:
            The bytes read.

        Raises:
            StreamExhaustedException: If fewer than ``n`` bytes remain.
        """
        pass

    @abstractmethod
    def position(self) -> int:
        """Get the number of bytes consumed so far.

        Returns:
            The current byte position.
        """
        pass

    def read_byte(self) -> int:
        """Read a single unsigned byte."""
        return self.read_exact(1)[0]
