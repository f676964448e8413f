"""Data models for evaluated scaling metrics."""

import math
from dataclasses import dataclass
from enum import Enum


class ScalingMetric(Enum):
    """Per-vertex signals produced by the metric evaluator."""

    LOAD = "LOAD"
    MAX_PARALLELISM = "MAX_PARALLELISM"
    PARALLELISM = "PARALLELISM"
    IS_SOURCE = "IS_SOURCE"
    TRUE_PROCESSING_RATE = "TRUE_PROCESSING_RATE"
    TRUE_OUTPUT_RATE = "TRUE_OUTPUT_RATE"
    OUTPUT_RATIO = "OUTPUT_RATIO"
    SOURCE_DATA_RATE = "SOURCE_DATA_RATE"
    CURRENT_PROCESSING_RATE = "CURRENT_PROCESSING_RATE"
    TARGET_DATA_RATE = "TARGET_DATA_RATE"  # steady-state input rate to sustain
    CATCH_UP_DATA_RATE = "CATCH_UP_DATA_RATE"  # rate needed to drain the lag
    SCALE_UP_RATE_THRESHOLD = "SCALE_UP_RATE_THRESHOLD"
    SCALE_DOWN_RATE_THRESHOLD = "SCALE_DOWN_RATE_THRESHOLD"
    LAG = "LAG"


@dataclass(frozen=True)
class EvaluatedScalingMetric:
    """Latest and smoothed value of a metric. Either may be NaN."""

    current: float
    average: float

    @classmethod
    def of(cls, value: float) -> "EvaluatedScalingMetric":
        """Create a metric that only carries a current value."""
        return cls(current=value, average=math.nan)
