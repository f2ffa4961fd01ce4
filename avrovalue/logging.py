"""Loggers for avrovalue components.

Every module logs through a child of the ``avrovalue`` logger. That logger
carries a :class:`logging.NullHandler`, so nothing is printed and the
"no handlers could be found" fallback never fires until the application
configures logging, either through its own setup or :func:`configure_logging`.

Example:
    >>> import logging
    >>> from avrovalue.logging import configure_logging
    >>> configure_logging(level=logging.DEBUG)
"""

import logging
from typing import Optional


AVROVALUE_ROOT_LOGGER = "avrovalue"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_root = logging.getLogger(AVROVALUE_ROOT_LOGGER)
_root.addHandler(logging.NullHandler())

# Handler installed by configure_logging, replaced on reconfiguration.
_handler: Optional[logging.Handler] = None


def get_logger(name: str = "") -> logging.Logger:
    """Return the logger for a component, or the ``avrovalue`` root if empty."""
    if name:
        return _root.getChild(name)
    return _root


def configure_logging(
    level: int = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Send avrovalue log records to a handler.

    Calling this again swaps the previous handler out instead of adding a
    second one.

    Args:
        level: Level for the root avrovalue logger and the handler.
        format_string: Format applied to the handler.
        handler: Destination; a ``StreamHandler`` on stderr when omitted.

    Returns:
        The root avrovalue logger.
    """
    global _handler
    if _handler is not None:
        _root.removeHandler(_handler)
    if handler is None:
        handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    _root.addHandler(handler)
    _root.setLevel(level)
    _handler = handler
    return _root


def set_level(level: int, component: str = "") -> None:
    get_logger(component).setLevel(level)


def disable_logging() -> None:
    """Silence every avrovalue logger, whatever its level."""
    _root.disabled = True


def enable_logging() -> None:
    _root.disabled = False
