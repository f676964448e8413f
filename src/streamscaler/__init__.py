"""streamscaler: target processing capacity for streaming job autoscaling."""

from .config import AutoScalerOptions, Configuration
from .metrics import EvaluatedScalingMetric, ScalingMetric
from .utils import get_target_processing_capacity

__version__ = "0.1.0"

__all__ = [
    "AutoScalerOptions",
    "Configuration",
    "EvaluatedScalingMetric",
    "ScalingMetric",
    "get_target_processing_capacity",
]
