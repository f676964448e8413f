"""Read-only configuration source for the autoscaler."""

import json
import logging
import math
import re
from datetime import timedelta
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Optional, Union

import yaml

from .options import DURATION, FLOAT, ConfigOption

logger = logging.getLogger(__name__)

_DURATION_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$")

# Unit label -> milliseconds
_DURATION_UNITS = {
    "": 1,
    "ms": 1,
    "milli": 1,
    "millis": 1,
    "millisecond": 1,
    "milliseconds": 1,
    "s": 1000,
    "sec": 1000,
    "secs": 1000,
    "second": 1000,
    "seconds": 1000,
    "m": 60_000,
    "min": 60_000,
    "mins": 60_000,
    "minute": 60_000,
    "minutes": 60_000,
    "h": 3_600_000,
    "hour": 3_600_000,
    "hours": 3_600_000,
    "d": 86_400_000,
    "day": 86_400_000,
    "days": 86_400_000,
}


def parse_duration(value: Union[str, int, float, timedelta]) -> timedelta:
    """Parse a duration value.

    Accepts a ``timedelta``, a number of milliseconds, or a string such as
    ``"5 min"``, ``"300s"`` or ``"2 hours"``. Strings without a unit are
    interpreted as milliseconds.

    Raises:
        ValueError: If the value is negative or cannot be parsed.
    """
    if isinstance(value, timedelta):
        if value < timedelta(0):
            raise ValueError(f"Duration must not be negative: {value}")
        return value

    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")

    if isinstance(value, (int, float)):
        if math.isnan(value) or math.isinf(value) or value < 0:
            raise ValueError(f"Invalid duration: {value!r}")
        return _from_millis(value, value)

    if not isinstance(value, str):
        raise ValueError(f"Invalid duration: {value!r}")

    match = _DURATION_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount, unit = match.groups()
    multiplier = _DURATION_UNITS.get(unit.lower())
    if multiplier is None:
        raise ValueError(f"Unknown time unit '{unit}' in duration {value!r}")

    return _from_millis(float(amount) * multiplier, value)


def _from_millis(millis: float, value: Any) -> timedelta:
    try:
        return timedelta(milliseconds=millis)
    except OverflowError:
        raise ValueError(f"Duration out of range: {value!r}")


class Configuration:
    """Immutable key/value configuration.

    Values are looked up through :class:`ConfigOption` descriptors, falling
    back to the option default when a key is not set.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._data = MappingProxyType(dict(data or {}))

    def get(self, option: ConfigOption) -> Any:
        """Return the typed value of an option."""
        raw = self._data.get(option.key, option.default)
        if option.value_type == DURATION:
            return parse_duration(raw)
        if option.value_type == FLOAT:
            return float(raw)
        return raw

    def get_seconds(self, option: ConfigOption) -> int:
        """Return a duration option in whole seconds, truncating any remainder."""
        return self.get(option) // timedelta(seconds=1)

    def contains(self, option: ConfigOption) -> bool:
        return option.key in self._data

    def with_overrides(self, overrides: Dict[str, Any]) -> "Configuration":
        """Return a new configuration with the given keys replaced."""
        merged = dict(self._data)
        merged.update(overrides)
        return Configuration(merged)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Configuration({dict(self._data)!r})"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Configuration":
        return cls(data)

    @classmethod
    def from_yaml_file(cls, config_path: str) -> "Configuration":
        """Create a configuration from a YAML file of option keys.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Configuration instance
        """
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        logger.info(f"Loaded {len(data)} options from {Path(config_path).name}")
        return cls(data)

    @classmethod
    def from_json_file(cls, config_path: str) -> "Configuration":
        """Create a configuration from a JSON file of option keys.

        Args:
            config_path: Path to JSON configuration file

        Returns:
            Configuration instance
        """
        with open(config_path, "r") as f:
            data = json.load(f)

        logger.info(f"Loaded {len(data)} options from {Path(config_path).name}")
        return cls(data)
