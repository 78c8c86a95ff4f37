"""Presentation collaborators: console summary and plots.

Plotting is imported lazily by callers (``presentation.plots``) so that summary
printing does not pull in matplotlib.
"""

from .summary import (
    DETAILED,
    NORMAL,
    QUIET,
    format_record_length,
    format_sample_interval,
    format_summary,
    print_summary,
)

__all__ = [
    "DETAILED",
    "NORMAL",
    "QUIET",
    "format_record_length",
    "format_sample_interval",
    "format_summary",
    "print_summary",
]
