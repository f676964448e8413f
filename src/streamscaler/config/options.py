"""Autoscaler configuration options and their defaults."""

from dataclasses import dataclass
from typing import Any, List, Optional

DURATION = "duration"
FLOAT = "float"


@dataclass(frozen=True)
class ConfigOption:
    """A typed configuration key with a default value."""

    key: str
    default: Any
    value_type: str
    description: str = ""


class AutoScalerOptions:
    """Options read by the capacity computation and threshold evaluation."""

    CATCH_UP_DURATION = ConfigOption(
        key="job.autoscaler.catch-up.duration",
        default="5 min",
        value_type=DURATION,
        description=(
            "The target duration for fully processing any backlog after a scaling "
            "operation. Set to 0 to disable backlog based scaling."
        ),
    )

    RESTART_TIME = ConfigOption(
        key="job.autoscaler.restart.time",
        default="5 min",
        value_type=DURATION,
        description="Expected restart time to be used until the operator can determine it reliably from history.",
    )

    TARGET_UTILIZATION = ConfigOption(
        key="job.autoscaler.target.utilization",
        default=0.7,
        value_type=FLOAT,
        description="Target vertex utilization.",
    )

    TARGET_UTILIZATION_BOUNDARY = ConfigOption(
        key="job.autoscaler.target.utilization.boundary",
        default=0.4,
        value_type=FLOAT,
        description=(
            "Target vertex utilization boundary. Scaling won't be performed if the "
            "processing capacity is within [target - boundary, target + boundary]."
        ),
    )

    @classmethod
    def all_options(cls) -> List[ConfigOption]:
        """Return every declared option."""
        return [
            cls.CATCH_UP_DURATION,
            cls.RESTART_TIME,
            cls.TARGET_UTILIZATION,
            cls.TARGET_UTILIZATION_BOUNDARY,
        ]

    @classmethod
    def by_key(cls, key: str) -> Optional[ConfigOption]:
        for option in cls.all_options():
            if option.key == key:
                return option
        return None
