"""
Configuration validation for capacity evaluation runs.

This module provides validation for:
- Autoscaler option values
- Job metrics snapshots
- Complete evaluation configuration files
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..metrics.models import ScalingMetric
from .configuration import parse_duration
from .options import DURATION, FLOAT, AutoScalerOptions

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""
    pass


class AutoScalerConfigValidator:
    """Validates autoscaler option values."""

    @classmethod
    def validate(cls, options: Dict[str, Any]) -> List[str]:
        """Validate a mapping of option keys to raw values."""
        errors = []

        if not isinstance(options, dict):
            return [f"Autoscaler options must be a mapping, got {type(options).__name__}"]

        for key, value in options.items():
            option = AutoScalerOptions.by_key(key)
            if option is None:
                logger.warning(f"Ignoring unknown autoscaler option: {key}")
                continue

            if option.value_type == DURATION:
                try:
                    parse_duration(value)
                except ValueError as e:
                    errors.append(f"Option {key}: {e}")
            elif option.value_type == FLOAT:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    errors.append(f"Option {key}: expected a number, got {value!r}")
                elif math.isnan(value):
                    errors.append(f"Option {key}: must not be NaN")

        utilization = options.get(AutoScalerOptions.TARGET_UTILIZATION.key)
        if isinstance(utilization, (int, float)) and not isinstance(utilization, bool):
            if not 0 < utilization <= 1:
                # Out of range values are clamped into [0, 1] during evaluation
                logger.warning(
                    f"Target utilization {utilization} is outside (0, 1] and will be clamped"
                )

        return errors


class MetricsSnapshotValidator:
    """Validates a job metrics snapshot."""

    REQUIRED_METRICS = {
        ScalingMetric.CATCH_UP_DATA_RATE.name,
        ScalingMetric.TARGET_DATA_RATE.name,
    }

    VALUE_FIELDS = {'current', 'average'}

    @classmethod
    def validate(cls, vertices: Any) -> List[str]:
        """Validate the per-vertex metrics section."""
        errors = []

        if not isinstance(vertices, dict) or not vertices:
            errors.append("Snapshot must contain a non-empty vertices mapping")
            return errors

        known_metrics = {metric.name for metric in ScalingMetric}

        for vertex_id, metrics in vertices.items():
            if not isinstance(metrics, dict):
                errors.append(f"Vertex {vertex_id}: metrics must be a mapping")
                continue

            unknown = set(metrics.keys()) - known_metrics
            if unknown:
                errors.append(f"Vertex {vertex_id}: unknown metrics {sorted(unknown)}")

            missing = cls.REQUIRED_METRICS - set(metrics.keys())
            if missing:
                errors.append(f"Vertex {vertex_id}: missing required metrics {sorted(missing)}")

            for name, value in metrics.items():
                if not isinstance(value, dict):
                    errors.append(f"Vertex {vertex_id}: {name} must be a mapping of current/average")
                    continue
                extra = set(value.keys()) - cls.VALUE_FIELDS
                if extra:
                    errors.append(f"Vertex {vertex_id}: {name} has unexpected fields {sorted(extra)}")
                for field in cls.VALUE_FIELDS & set(value.keys()):
                    raw = value[field]
                    if raw is not None and not isinstance(raw, (int, float)):
                        errors.append(
                            f"Vertex {vertex_id}: {name}.{field} must be a number or null, got {raw!r}"
                        )

        return errors


class EvaluationConfigValidator:
    """Validates a complete evaluation configuration."""

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """Validate complete evaluation configuration."""
        all_errors = []

        if not isinstance(config, dict):
            return False, ["Configuration must be a mapping"]

        if 'vertices' not in config:
            all_errors.append("Missing top-level field: vertices")
            return False, all_errors

        all_errors.extend(AutoScalerConfigValidator.validate(config.get('autoscaler') or {}))
        all_errors.extend(MetricsSnapshotValidator.validate(config['vertices']))

        return len(all_errors) == 0, all_errors


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load a YAML or JSON configuration file based on its suffix."""
    config_file = Path(config_path)

    with open(config_file) as f:
        if config_file.suffix in ['.yaml', '.yml']:
            config = yaml.safe_load(f)
        else:
            config = json.load(f)

    return config


def validate_and_load_config(config_path: str) -> Tuple[bool, List[str], Optional[Dict[str, Any]]]:
    """
    Load and validate an evaluation configuration file.

    Returns:
        (is_valid, errors, config)
    """
    config = load_config_file(config_path)

    is_valid, errors = EvaluationConfigValidator.validate(config)

    if not is_valid:
        logger.warning(f"Configuration has {len(errors)} validation errors")
        for error in errors[:10]:  # Show first 10 errors
            logger.warning(f"  - {error}")
        if len(errors) > 10:
            logger.warning(f"  ... and {len(errors) - 10} more errors")

    return is_valid, errors, config
