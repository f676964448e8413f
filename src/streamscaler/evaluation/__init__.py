"""Vertex level capacity evaluation."""

from .report import CapacityReportGenerator
from .snapshot import JobMetricsSnapshot, MetricValue
from .thresholds import compute_processing_rate_thresholds

__all__ = [
    "CapacityReportGenerator",
    "JobMetricsSnapshot",
    "MetricValue",
    "compute_processing_rate_thresholds",
]
