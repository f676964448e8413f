"""Capacity evaluation and reporting across job vertices."""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from pydantic import ValidationError

from ..config.configuration import Configuration
from ..config.options import AutoScalerOptions
from ..config.validator import ConfigurationError, EvaluationConfigValidator, load_config_file
from ..metrics.models import EvaluatedScalingMetric, ScalingMetric
from ..utils.scaling_utils import get_target_processing_capacity
from .snapshot import JobMetricsSnapshot
from .thresholds import compute_processing_rate_thresholds

logger = logging.getLogger(__name__)

STATUS_OK = "OK"
STATUS_UNDEFINED = "UNDEFINED"
STATUS_UNBOUNDED = "UNBOUNDED"


def classify_capacity(value: float) -> str:
    """Map a capacity result onto its outcome class."""
    if math.isnan(value):
        return STATUS_UNDEFINED
    if math.isinf(value):
        return STATUS_UNBOUNDED
    return STATUS_OK


class CapacityReportGenerator:
    """Evaluates target capacities for all vertices of a job."""

    def __init__(self, conf: Configuration):
        """Initialize the report generator.

        Args:
            conf: Autoscaler configuration containing:
                - job.autoscaler.target.utilization: Utilization to size for
                - job.autoscaler.target.utilization.boundary: Threshold band width
                - job.autoscaler.catch-up.duration: Time budget to drain backlog
                - job.autoscaler.restart.time: Expected restart downtime
        """
        self.conf = conf
        self.rows: List[Dict[str, Any]] = []

    def evaluate_vertex(
        self, vertex_id: str, evaluated_metrics: Dict[ScalingMetric, EvaluatedScalingMetric]
    ) -> Dict[str, Any]:
        """Evaluate a single vertex and record the result."""
        target_utilization = self.conf.get(AutoScalerOptions.TARGET_UTILIZATION)
        target_capacity = get_target_processing_capacity(
            evaluated_metrics, self.conf, target_utilization, True
        )
        with_thresholds = compute_processing_rate_thresholds(evaluated_metrics, self.conf)

        status = classify_capacity(target_capacity)
        if status == STATUS_UNDEFINED:
            logger.warning(
                f"Vertex {vertex_id}: target capacity is undefined, "
                f"no scaling decision can be made this cycle"
            )
        elif status == STATUS_UNBOUNDED:
            logger.warning(
                f"Vertex {vertex_id}: target capacity is unbounded "
                f"(target utilization {target_utilization} clamps to 0)"
            )
        else:
            logger.debug(f"Vertex {vertex_id}: target capacity {target_capacity:.0f}")

        row = {
            "vertex_id": vertex_id,
            "catch_up_data_rate": evaluated_metrics[ScalingMetric.CATCH_UP_DATA_RATE].current,
            "target_data_rate": evaluated_metrics[ScalingMetric.TARGET_DATA_RATE].average,
            "target_capacity": target_capacity,
            "scale_up_threshold": with_thresholds[ScalingMetric.SCALE_UP_RATE_THRESHOLD].current,
            "scale_down_threshold": with_thresholds[ScalingMetric.SCALE_DOWN_RATE_THRESHOLD].current,
            "status": status,
        }
        self.rows.append(row)
        return row

    def evaluate_job(
        self, job_metrics: Dict[str, Dict[ScalingMetric, EvaluatedScalingMetric]]
    ) -> pd.DataFrame:
        """Evaluate every vertex and return the results as a DataFrame.

        Results of any previous evaluation are discarded.
        """
        self.rows = []
        for vertex_id, evaluated_metrics in job_metrics.items():
            self.evaluate_vertex(vertex_id, evaluated_metrics)
        return self.get_results_df()

    def get_results_df(self) -> pd.DataFrame:
        """Get all evaluated vertices as a pandas DataFrame."""
        if not self.rows:
            return pd.DataFrame()
        return pd.DataFrame(self.rows)

    def generate_summary_report(self) -> Dict[str, Any]:
        """Generate summary statistics over the evaluated vertices."""
        statuses = [row["status"] for row in self.rows]
        capacities = np.array([row["target_capacity"] for row in self.rows], dtype=float)
        finite = capacities[np.isfinite(capacities)]

        summary = {
            "vertices": {
                "total": len(self.rows),
                "ok": statuses.count(STATUS_OK),
                "undefined": statuses.count(STATUS_UNDEFINED),
                "unbounded": statuses.count(STATUS_UNBOUNDED),
            },
            "capacity": {
                "total_finite": float(np.sum(finite)) if finite.size else 0.0,
                "max_finite": float(np.max(finite)) if finite.size else None,
            },
            "configuration": {
                "target_utilization": self.conf.get(AutoScalerOptions.TARGET_UTILIZATION),
                "target_utilization_boundary": self.conf.get(
                    AutoScalerOptions.TARGET_UTILIZATION_BOUNDARY
                ),
                "catch_up_duration_s": self.conf.get_seconds(AutoScalerOptions.CATCH_UP_DURATION),
                "restart_time_s": self.conf.get_seconds(AutoScalerOptions.RESTART_TIME),
            },
            "results": {row["vertex_id"]: _json_safe(row) for row in self.rows},
        }

        logger.info(
            f"Evaluated {summary['vertices']['total']} vertices: "
            f"{summary['vertices']['ok']} ok, "
            f"{summary['vertices']['undefined']} undefined, "
            f"{summary['vertices']['unbounded']} unbounded"
        )
        return summary

    def save(
        self,
        summary_path: Optional[str] = None,
        csv_path: Optional[str] = None,
        summary: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Save the summary as JSON and/or the per-vertex results as CSV.

        A summary already built by generate_summary_report can be passed in
        to avoid building it again.
        """
        if summary_path:
            summary_file = Path(summary_path)
            summary_file.parent.mkdir(parents=True, exist_ok=True)
            with open(summary_file, "w") as f:
                if summary is None:
                    summary = self.generate_summary_report()
                json.dump(summary, f, indent=2)
            logger.info(f"Saved summary report to {summary_file}")

        if csv_path:
            csv_file = Path(csv_path)
            csv_file.parent.mkdir(parents=True, exist_ok=True)
            self.get_results_df().to_csv(csv_file, index=False)
            logger.info(f"Saved vertex results to {csv_file}")

    @classmethod
    def from_config(cls, config_data: Dict[str, Any]) -> "CapacityReportGenerator":
        """Create a generator and evaluate the vertices of a configuration document.

        Raises:
            ConfigurationError: If the document fails validation
        """
        is_valid, errors = EvaluationConfigValidator.validate(config_data)
        if not is_valid:
            raise ConfigurationError("; ".join(errors))

        conf = Configuration(config_data.get("autoscaler") or {})
        try:
            snapshot = JobMetricsSnapshot.model_validate({"vertices": config_data["vertices"]})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid metrics snapshot: {e}") from e

        generator = cls(conf)
        generator.evaluate_job(snapshot.to_metrics())
        return generator

    @classmethod
    def from_file(cls, config_path: str) -> "CapacityReportGenerator":
        """Create a generator from a YAML or JSON configuration file."""
        return cls.from_config(load_config_file(config_path))


def _json_safe(row: Dict[str, Any]) -> Dict[str, Any]:
    """Replace NaN/inf with strings so the summary stays valid JSON."""
    safe = {}
    for key, value in row.items():
        if isinstance(value, float) and not math.isfinite(value):
            safe[key] = str(value)
        else:
            safe[key] = value
    return safe
