"""Scaling metric data models."""

from .models import EvaluatedScalingMetric, ScalingMetric

__all__ = ["EvaluatedScalingMetric", "ScalingMetric"]
