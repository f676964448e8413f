"""Autoscaler utilities."""

from .scaling_utils import get_target_processing_capacity, round_half_up

__all__ = ["get_target_processing_capacity", "round_half_up"]
