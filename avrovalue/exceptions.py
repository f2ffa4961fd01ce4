"""avrovalue exceptions.

This module defines the exception hierarchy for the avrovalue decoder.
All exceptions inherit from :class:`AvroException`, and every failure
raised while consuming a byte stream inherits from
:class:`DecodeException`.

Example:
    Handling decode failures::

        from avrovalue import decode
        from avrovalue.exceptions import (
            DecodeException,
            StreamExhaustedException,
        )

        try:
            value = decode(schema, payload)
        except StreamExhaustedException:
            print("Payload is truncated")
        except DecodeException as e:
            print(f"Malformed payload: {e}")
"""


class AvroException(Exception):
    """Base class for all avrovalue exceptions.

    Args:
        message: The error message describing the exception.
        cause: The underlying exception that caused this error, if any.

    Attributes:
        cause: The underlying cause of this exception, if any.
    """

    def __init__(self, message: str = "", cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationException(AvroException):
    """Raised when a decoder configuration is invalid.

    Example:
        - Non-positive allocation ceiling
        - Negative depth limit
        - Unreadable YAML configuration file
    """
    pass


class DecodeException(AvroException):
    """Raised when a byte stream cannot be decoded against a schema.

    This is the common base for every structural failure. A failed decode
    never returns a partially built value.
    """
    pass


class StreamExhaustedException(DecodeException):
    """Raised when the stream ends before the requested bytes were read.

    Args:
        message: The error message.
        requested: Number of bytes the decoder asked for.
        available: Number of bytes the stream could supply.
    """

    def __init__(self, message: str, requested: int = 0, available: int = 0):
        super().__init__(message)
        self._requested = requested
        self._available = available

    @property
    def requested(self) -> int:
        """Number of bytes that were requested."""
        return self._requested

    @property
    def available(self) -> int:
        """Number of bytes that were actually available."""
        return self._available


class VarintOverflowException(DecodeException):
    """Raised when a variable-length integer is malformed.

    Example:
        - More than 5 continuation bytes for an int
        - More than 10 continuation bytes for a long
        - An int whose decoded value exceeds the signed 32-bit range
    """
    pass


class InvalidLengthException(DecodeException):
    """Raised when a decoded length is negative or above the ceiling.

    Args:
        message: The error message.
        length: The offending length as decoded from the stream.
    """

    def __init__(self, message: str, length: int = 0):
        super().__init__(message)
        self._length = length

    @property
    def length(self) -> int:
        """The rejected length."""
        return self._length


class InvalidBooleanException(DecodeException):
    """Raised when a boolean byte is neither 0x00 nor 0x01."""
    pass


class InvalidUtf8Exception(DecodeException):
    """Raised when string bytes are not well-formed UTF-8."""
    pass


class UnionIndexException(DecodeException):
    """Raised when a union branch index is outside the variant list."""
    pass


class EnumIndexException(DecodeException):
    """Raised when an enum index is outside the symbol list."""
    pass


class DecimalSchemaException(DecodeException):
    """Raised when a decimal is not backed by a fixed or bytes schema."""
    pass


class InvalidUuidException(DecodeException):
    """Raised when a uuid string is not a valid UUID literal."""
    pass


class BlockSizeMismatchException(DecodeException):
    """Raised in strict mode when a block's declared byte size is wrong.

    Args:
        message: The error message.
        declared: The byte size written before the block.
        actual: The number of bytes the block items consumed.
    """

    def __init__(self, message: str, declared: int = 0, actual: int = 0):
        super().__init__(message)
        self._declared = declared
        self._actual = actual

    @property
    def declared(self) -> int:
        """The declared block byte size."""
        return self._declared

    @property
    def actual(self) -> int:
        """The consumed block byte size."""
        return self._actual


class RecursionDepthExceededException(DecodeException):
    """Raised when schema nesting exceeds the configured depth ceiling."""
    pass
