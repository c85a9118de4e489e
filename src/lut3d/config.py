"""Configuration for the lut3d loader.

Settings can be built directly, from a dictionary, or from a YAML file:

    # lut3d.yaml
    lut3d:
      identity_size: 32
      dat_default_size: 33
      encoding: utf-8
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .exceptions import InvalidArgumentError, LutIOError
from .grid import MAX_LEVEL

CONFIG_SECTION = "lut3d"


@dataclass
class LoaderConfig:
    """Configuration for LUT loading.

    Attributes:
        identity_size: Edge length of the identity grid used when no source
            is given
        dat_default_size: Grid size assumed for ``.dat`` files without a
            ``3DLUTSIZE`` directive
        encoding: Text encoding used to decode byte input
        decode_errors: Error handler passed to ``bytes.decode``
    """

    identity_size: int = 32
    dat_default_size: int = 33
    encoding: str = "utf-8"
    decode_errors: str = "replace"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        for attr in ("identity_size", "dat_default_size"):
            val = getattr(self, attr)
            if isinstance(val, bool) or not isinstance(val, int):
                raise ValueError(f"{attr} must be an integer")
            if not 2 <= val <= MAX_LEVEL:
                raise ValueError(f"{attr} must be between 2 and {MAX_LEVEL}")

        try:
            "".encode(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding '{self.encoding}'")

        if self.decode_errors not in ("strict", "replace", "ignore"):
            raise ValueError("decode_errors must be 'strict', 'replace' or 'ignore'")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoaderConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored.
        """
        valid_keys = {"identity_size", "dat_default_size", "encoding", "decode_errors"}
        filtered_data = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered_data)


def load_config(path: Union[str, Path]) -> LoaderConfig:
    """Load a :class:`LoaderConfig` from a YAML file.

    The settings may sit under a top-level ``lut3d:`` key or at the top level.

    Raises:
        LutIOError: If the file cannot be read
        InvalidArgumentError: If the file is not valid YAML, is not a
            mapping, or holds invalid values
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise InvalidArgumentError(
            f"YAML parsing error in {path}",
            argument="config",
            value=str(path),
            cause=e,
        )
    except OSError as e:
        raise LutIOError(
            f"Failed to read config file: {e}",
            path=str(path),
            operation="read",
            cause=e,
        )

    if isinstance(data, dict) and isinstance(data.get(CONFIG_SECTION), dict):
        data = data[CONFIG_SECTION]
    if not isinstance(data, dict):
        raise InvalidArgumentError(
            "Config file must contain a mapping",
            argument="config",
            value=str(path),
        )

    try:
        return LoaderConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(
            f"Invalid configuration in {path}: {e}",
            argument="config",
            value=str(path),
            cause=e,
        )
