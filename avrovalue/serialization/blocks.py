"""Block framing shared by arrays and maps.

A collection is written as a series of blocks. Each block starts with a
long item count:

- ``0`` ends the collection.
- A positive count is followed directly by that many items.
- A negative count means ``-count`` items, preceded by a long giving the
  byte size of the block so readers can skip it.

The byte size is consumed and, unless strict checking is enabled,
otherwise ignored: item decoding keeps the stream in sync.
"""

from typing import Callable, Iterator, Optional, TypeVar

from avrovalue.exceptions import BlockSizeMismatchException
from avrovalue.logging import get_logger
from avrovalue.serialization.api import ByteInput
from avrovalue.serialization.primitives import read_long, safe_len

T = TypeVar("T")

_logger = get_logger("blocks")


def iter_block_items(
    stream: ByteInput,
    read_item: Callable[[], T],
    max_allocation_bytes: int,
    strict_block_size: bool = False,
) -> Iterator[T]:
    """Yield every item of a block-framed collection.

    Args:
        stream: The input positioned at the first block count.
        read_item: Decodes one item from ``stream``.
        max_allocation_bytes: Ceiling for each block's item count.
        strict_block_size: Check the declared byte size of negative-count
            blocks against the bytes actually consumed.

    Raises:
        InvalidLengthException: If a block count fails the length guard.
        BlockSizeMismatchException: In strict mode, if a declared block
            size does not match.
    """
    while True:
        count = read_long(stream)
        if count == 0:
            return

        declared_size: Optional[int] = None
        if count < 0:
            declared_size = read_long(stream)
            count = -count
        count = safe_len(count, max_allocation_bytes)

        _logger.debug("Reading block of %d items (declared size=%s)", count, declared_size)

        start = stream.position()
        for _ in range(count):
            yield read_item()

        if strict_block_size and declared_size is not None:
            consumed = stream.position() - start
            if consumed != declared_size:
                raise BlockSizeMismatchException(
                    f"Block declared {declared_size} bytes but items used {consumed}",
                    declared=declared_size,
                    actual=consumed,
                )
