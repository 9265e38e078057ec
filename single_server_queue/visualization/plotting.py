"""
Visualization utilities for single-server queue runs.
"""

import math
import os
from typing import Dict, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from scipy import stats

from ..distributions.random_variables import exponential_pdf
from ..system.queueing_system import METRIC_NAMES, THEORY_KEYS, SimulationResult
from ..system.time_series import SimulationTimeSeries


# Series name -> (panel title, y label, matching key in theoretical values)
PANELS = {
    'queue_length': ('Queue Length', 'Customers waiting', 'queue_length'),
    'mean_wait_time': ('Mean Wait Time', 'Time', 'wait_time'),
    'utilization': ('Server Utilization', 'Fraction busy', 'utilization'),
    'customers_served': ('Customers Served', 'Customers', None),
    'customers_in_system': ('Customers in System', 'Customers', 'customers_in_system'),
    'throughput': ('Throughput', 'Customers / time', 'throughput'),
}


def plot_time_series(time_series: SimulationTimeSeries,
                     theoretical: Optional[Dict[str, float]] = None,
                     title: str = "M/M/1 Simulation Over Time"):
    """Create a 3x2 dashboard of every sampled series."""
    sns.set_theme(style='whitegrid')
    fig, axes = plt.subplots(3, 2, figsize=(15, 12), sharex=True)
    fig.suptitle(title, fontsize=16)

    for ax, (name, (panel_title, ylabel, theory_key)) in zip(axes.flat, PANELS.items()):
        series = time_series.series[name]
        if len(series) == 0:
            ax.text(0.5, 0.5, 'No samples', ha='center', va='center',
                    transform=ax.transAxes)
        else:
            ax.plot(series.times, series.values, linewidth=1, label='Simulated')

        if theoretical is not None and theory_key is not None:
            expected = theoretical.get(theory_key)
            if expected is not None and math.isfinite(expected):
                ax.axhline(expected, color='r', linestyle='--', linewidth=1.5,
                           label='Theoretical')
                ax.legend(loc='best')

        ax.set_title(panel_title)
        ax.set_ylabel(ylabel)

    for ax in axes[-1]:
        ax.set_xlabel('Simulated time')

    plt.tight_layout()
    return fig


def plot_theory_comparison(result: SimulationResult,
                           title: str = "Observed vs Theoretical (M/M/1)"):
    """Grouped bars of each observed metric next to its closed-form value."""
    sns.set_theme(style='whitegrid')
    fig, ax = plt.subplots(figsize=(12, 6))

    labels = [name.replace('_', ' ') for name in METRIC_NAMES]
    observed = [getattr(result, name) for name in METRIC_NAMES]
    expected = [result.theoretical.get(THEORY_KEYS[name], np.nan) for name in METRIC_NAMES]
    expected = [v if math.isfinite(v) else np.nan for v in expected]

    x = np.arange(len(labels))
    width = 0.35
    ax.bar(x - width/2, observed, width, label='Observed')
    ax.bar(x + width/2, expected, width, label='Theoretical')

    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=30, ha='right')
    ax.set_ylabel('Value')
    ax.set_title(f"{title}  (rho = {result.traffic_intensity:.3f})")
    ax.legend()

    plt.tight_layout()
    return fig


def plot_distribution_comparison(samples: Sequence[float],
                                 rate: float,
                                 title: str = "Exponential Variate Check"):
    """Compare sampled durations with the exponential density they should follow."""
    samples = np.asarray(samples, dtype=float)
    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    ax1.hist(samples, bins=50, density=True, alpha=0.7,
             color='blue', label='Simulated')
    x_range = np.linspace(0, samples.max(), 200)
    ax1.plot(x_range, exponential_pdf(x_range, rate), 'r-', linewidth=2,
             label='Theoretical')
    ax1.set_xlabel('Value')
    ax1.set_ylabel('Density')
    ax1.set_title('PDF Comparison')
    ax1.legend()

    # Q-Q plot
    stats.probplot(samples, dist=stats.expon, sparams=(0, 1.0 / rate), plot=ax2)
    ax2.set_title('Q-Q Plot')

    fig.suptitle(title)
    return fig


def create_performance_report(result: SimulationResult, save_path: Optional[str] = None):
    """Dashboard plus theory comparison, optionally saved next to each other."""
    figures = {'comparison': plot_theory_comparison(result)}
    if result.time_series is not None:
        figures['time_series'] = plot_time_series(result.time_series, result.theoretical)

    if save_path:
        root, ext = os.path.splitext(save_path)
        ext = ext or '.png'
        for name, fig in figures.items():
            fig.savefig(f"{root}_{name}{ext}", dpi=300, bbox_inches='tight')

    return figures
