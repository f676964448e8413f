"""Job metrics snapshot documents."""

import math
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..metrics.models import EvaluatedScalingMetric, ScalingMetric


class MetricValue(BaseModel):
    """Raw current/average pair as written in a snapshot document."""

    model_config = ConfigDict(extra="forbid")

    current: Optional[float] = None
    average: Optional[float] = None

    def to_evaluated(self) -> EvaluatedScalingMetric:
        # Missing values are undefined rather than zero
        return EvaluatedScalingMetric(
            current=math.nan if self.current is None else self.current,
            average=math.nan if self.average is None else self.average,
        )


class JobMetricsSnapshot(BaseModel):
    """Evaluated metrics of every vertex in a job at one point in time."""

    vertices: Dict[str, Dict[str, MetricValue]]

    @field_validator("vertices")
    @classmethod
    def _check_metric_names(cls, vertices: Dict[str, Dict[str, MetricValue]]):
        for vertex_id, metrics in vertices.items():
            for name in metrics:
                if name not in ScalingMetric.__members__:
                    raise ValueError(f"Vertex {vertex_id}: unknown metric {name}")
        return vertices

    def to_metrics(self) -> Dict[str, Dict[ScalingMetric, EvaluatedScalingMetric]]:
        """Convert to per-vertex evaluated metric mappings."""
        return {
            vertex_id: {
                ScalingMetric[name]: value.to_evaluated()
                for name, value in metrics.items()
            }
            for vertex_id, metrics in self.vertices.items()
        }
