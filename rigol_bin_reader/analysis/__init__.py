"""Derived quantities computed from decoded captures."""

from .time_axis import build_time_axis

__all__ = [
    "build_time_axis",
]
