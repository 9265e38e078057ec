"""Visualization utilities for single-server queue runs."""

from .plotting import (
    plot_time_series,
    plot_theory_comparison,
    plot_distribution_comparison,
    create_performance_report
)

__all__ = [
    'plot_time_series',
    'plot_theory_comparison',
    'plot_distribution_comparison',
    'create_performance_report'
]
