"""Decoder configuration."""

from typing import Optional
import os

from avrovalue.exceptions import ConfigurationException


DEFAULT_MAX_ALLOCATION_BYTES = 512 * 1024 * 1024


class DecoderConfig:
    """Configuration for the binary decoder.

    Attributes:
        max_allocation_bytes: Ceiling applied to every length read from the
            stream (bytes and string lengths, collection block counts).
        max_depth: Maximum schema nesting depth, or None for no limit.
        strict_block_size: Verify the byte size that precedes a
            negative-count collection block.

    Example:
        Limit payloads to 1 MiB and nesting to 32 levels::

            config = DecoderConfig(max_allocation_bytes=1 << 20, max_depth=32)

        From YAML::

            config = DecoderConfig.from_yaml("avrovalue.yml")
    """

    def __init__(
        self,
        max_allocation_bytes: int = DEFAULT_MAX_ALLOCATION_BYTES,
        max_depth: Optional[int] = None,
        strict_block_size: bool = False,
    ):
        self._max_allocation_bytes = max_allocation_bytes
        self._max_depth = max_depth
        self._strict_block_size = strict_block_size
        self._validate()

    def _validate(self) -> None:
        if isinstance(self._max_allocation_bytes, bool) or not isinstance(
            self._max_allocation_bytes, int
        ):
            raise ConfigurationException("max_allocation_bytes must be an integer")
        if self._max_allocation_bytes <= 0:
            raise ConfigurationException("max_allocation_bytes must be positive")
        if self._max_depth is not None:
            if isinstance(self._max_depth, bool) or not isinstance(self._max_depth, int):
                raise ConfigurationException("max_depth must be an integer or None")
            if self._max_depth <= 0:
                raise ConfigurationException("max_depth must be positive")

    @property
    def max_allocation_bytes(self) -> int:
        """Get the length guard ceiling in bytes."""
        return self._max_allocation_bytes

    @max_allocation_bytes.setter
    def max_allocation_bytes(self, value: int) -> None:
        self._max_allocation_bytes = value
        self._validate()

    @property
    def max_depth(self) -> Optional[int]:
        """Get the nesting ceiling, or None if unlimited."""
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: Optional[int]) -> None:
        self._max_depth = value
        self._validate()

    @property
    def strict_block_size(self) -> bool:
        """Whether declared block byte sizes are verified."""
        return self._strict_block_size

    @strict_block_size.setter
    def strict_block_size(self, value: bool) -> None:
        self._strict_block_size = bool(value)

    def __repr__(self) -> str:
        return (
            f"DecoderConfig(max_allocation_bytes={self._max_allocation_bytes}, "
            f"max_depth={self._max_depth}, "
            f"strict_block_size={self._strict_block_size})"
        )

    @classmethod
    def from_dict(cls, data: dict) -> "DecoderConfig":
        """Create DecoderConfig from a dictionary."""
        return cls(
            max_allocation_bytes=data.get(
                "max_allocation_bytes", DEFAULT_MAX_ALLOCATION_BYTES
            ),
            max_depth=data.get("max_depth"),
            strict_block_size=bool(data.get("strict_block_size", False)),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "DecoderConfig":
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            DecoderConfig instance.

        Raises:
            ConfigurationException: If the file cannot be read or parsed.
        """
        import yaml

        if not os.path.exists(yaml_path):
            raise ConfigurationException(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}", cause=e)
        except IOError as e:
            raise ConfigurationException(
                f"Failed to read configuration file: {e}", cause=e
            )

        return cls._from_loaded(data)

    @classmethod
    def from_yaml_string(cls, yaml_content: str) -> "DecoderConfig":
        """Load configuration from a YAML string.

        Raises:
            ConfigurationException: If the YAML cannot be parsed.
        """
        import yaml

        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}", cause=e)

        return cls._from_loaded(data)

    @classmethod
    def _from_loaded(cls, data) -> "DecoderConfig":
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ConfigurationException("Configuration root must be a mapping")

        if "avrovalue" in data:
            data = data["avrovalue"] or {}

        return cls.from_dict(data)
