"""Scale up / scale down processing rate thresholds."""

import logging
from typing import Dict

from ..config.configuration import Configuration
from ..config.options import AutoScalerOptions
from ..metrics.models import EvaluatedScalingMetric, ScalingMetric
from ..utils.scaling_utils import get_target_processing_capacity

logger = logging.getLogger(__name__)


def compute_processing_rate_thresholds(
    evaluated_metrics: Dict[ScalingMetric, EvaluatedScalingMetric],
    conf: Configuration,
) -> Dict[ScalingMetric, EvaluatedScalingMetric]:
    """Return a copy of the metrics with the scaling thresholds added.

    The scale up threshold is the capacity needed at the upper utilization
    bound without a restart; the scale down threshold is the capacity needed
    at the lower bound including restart catch-up.
    """
    target_utilization = conf.get(AutoScalerOptions.TARGET_UTILIZATION)
    utilization_boundary = conf.get(AutoScalerOptions.TARGET_UTILIZATION_BOUNDARY)

    scale_up_threshold = get_target_processing_capacity(
        evaluated_metrics, conf, target_utilization + utilization_boundary, False
    )
    scale_down_threshold = get_target_processing_capacity(
        evaluated_metrics, conf, target_utilization - utilization_boundary, True
    )
    logger.debug(
        f"Processing rate thresholds: scale up {scale_up_threshold}, "
        f"scale down {scale_down_threshold}"
    )

    result = dict(evaluated_metrics)
    result[ScalingMetric.SCALE_UP_RATE_THRESHOLD] = EvaluatedScalingMetric.of(scale_up_threshold)
    result[ScalingMetric.SCALE_DOWN_RATE_THRESHOLD] = EvaluatedScalingMetric.of(scale_down_threshold)
    return result
