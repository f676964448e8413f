"""Autoscaler configuration."""

from .configuration import Configuration, parse_duration
from .options import AutoScalerOptions, ConfigOption
from .validator import ConfigurationError

__all__ = [
    "AutoScalerOptions",
    "ConfigOption",
    "Configuration",
    "ConfigurationError",
    "parse_duration",
]
