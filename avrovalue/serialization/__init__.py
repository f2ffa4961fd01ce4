"""avrovalue serialization package."""

from avrovalue.serialization.api import ByteInput
from avrovalue.serialization.input import BytesInput, FileInput, as_input
from avrovalue.serialization.decoder import Decoder, decode

__all__ = [
    "ByteInput",
    "BytesInput",
    "FileInput",
    "as_input",
    "Decoder",
    "decode",
]
