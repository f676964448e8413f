"""
Target processing capacity computation.

The target capacity of a vertex is the sum of three independent budgets:

    Target = Lag Catchup Rate + Restart Catchup Rate + Processing at utilization
    Target = LAG/CATCH_UP + INPUT_RATE*RESTART/CATCH_UP + INPUT_RATE/TARGET_UTIL
"""

import math
from typing import Dict

from ..config.configuration import Configuration
from ..config.options import AutoScalerOptions
from ..metrics.models import EvaluatedScalingMetric, ScalingMetric


def round_half_up(value: float) -> float:
    """Round to the nearest integer, resolving ties toward positive infinity.

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value

    floor = math.floor(value)
    # value - floor is exact for doubles in [floor, floor + 1)
    if value - floor >= 0.5:
        return float(floor + 1)
    return float(floor)


def get_target_processing_capacity(
    evaluated_metrics: Dict[ScalingMetric, EvaluatedScalingMetric],
    conf: Configuration,
    target_utilization: float,
    with_restart: bool,
) -> float:
    """
    Compute the processing rate a vertex must sustain.

    Args:
        evaluated_metrics: Evaluated metrics of the vertex; must contain
            CATCH_UP_DATA_RATE and TARGET_DATA_RATE
        conf: Autoscaler configuration providing catch-up duration and restart time
        target_utilization: Desired utilization, clamped into [0, 1]
        with_restart: Whether to budget for the backlog accumulated during a restart

    Returns:
        The target rate rounded to a whole number, NaN when the input metrics are
        undefined, or positive infinity when the clamped utilization is 0
    """
    lag_catchup_target_rate = evaluated_metrics[ScalingMetric.CATCH_UP_DATA_RATE].current
    if math.isnan(lag_catchup_target_rate):
        return math.nan

    catch_up_target_sec = conf.get_seconds(AutoScalerOptions.CATCH_UP_DURATION)
    restart_time_sec = conf.get_seconds(AutoScalerOptions.RESTART_TIME)

    target_utilization = max(0.0, target_utilization)
    target_utilization = min(1.0, target_utilization)

    avg_input_target_rate = evaluated_metrics[ScalingMetric.TARGET_DATA_RATE].average
    if math.isnan(avg_input_target_rate):
        return math.nan

    if target_utilization == 0:
        return math.inf

    if not with_restart or catch_up_target_sec == 0:
        restart_catchup_rate = 0.0
    else:
        restart_catchup_rate = avg_input_target_rate * restart_time_sec / catch_up_target_sec
    input_target_at_utilization = avg_input_target_rate / target_utilization

    return round_half_up(
        lag_catchup_target_rate + restart_catchup_rate + input_target_at_utilization
    )
