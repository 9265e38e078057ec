#!/usr/bin/env python3
"""Command-line interface for running single-server queue simulations."""

import argparse
import json
import logging
import math
import sys
from typing import Dict, List, Optional

from ..distributions.random_variables import exponential_distribution, uniform_source
from ..system.config import (
    DEFAULT_ARRIVAL_RATE,
    DEFAULT_SAMPLE_INTERVAL,
    DEFAULT_SERVICE_RATE,
    SimulationConfig,
    StopCondition,
)
from ..system.queueing_system import (
    METRIC_NAMES,
    THEORY_KEYS,
    SimulationResult,
    run_replications,
    run_simulation,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMITS = {
    'time': 100_000.0,
    'events': 200_000,
    'customers': 100_000,
}

VARIATE_CHECK_SAMPLES = 10_000


def build_config(args: argparse.Namespace) -> SimulationConfig:
    """Merge a JSON config file (if any) with command-line overrides."""
    if args.config:
        config = SimulationConfig.from_json(args.config)
        logger.info("Loaded configuration from %s", args.config)
    else:
        config = SimulationConfig()

    arrival_rate = args.arrival_rate if args.arrival_rate is not None else config.arrival_rate
    service_rate = args.service_rate if args.service_rate is not None else config.service_rate

    stop = config.stop if args.config else StopCondition.by_time(DEFAULT_LIMITS['time'])
    if args.stop is not None or args.limit is not None:
        kind = args.stop or stop.kind
        limit = args.limit if args.limit is not None else DEFAULT_LIMITS[kind]
        stop = StopCondition(kind, limit)

    sample_interval = config.sample_interval
    if args.sample_interval is not None:
        sample_interval = args.sample_interval if args.sample_interval > 0 else None

    return SimulationConfig(
        arrival_rate=arrival_rate,
        service_rate=service_rate,
        stop=stop,
        seed=args.seed if args.seed is not None else config.seed,
        sample_interval=sample_interval,
    )


def _finite_for_json(data):
    """json.dump writes inf/nan as bare tokens; turn them into strings instead."""
    if isinstance(data, dict):
        return {k: _finite_for_json(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_finite_for_json(v) for v in data]
    if isinstance(data, float) and not math.isfinite(data):
        return str(data)
    return data


def save_results(results: Dict, output_path: str) -> None:
    """Save results to JSON file."""
    with open(output_path, 'w') as f:
        json.dump(_finite_for_json(results), f, indent=2)


def print_parameters(config: SimulationConfig) -> None:
    print("\n=== Single Server Queue Simulation ===")
    print("Parameters:")
    print(f"  Arrival rate (λ): {config.arrival_rate:.4f}")
    print(f"  Service rate (μ): {config.service_rate:.4f}")
    print(f"  Stop condition: {config.stop.describe()}")
    print(f"  Traffic intensity (ρ=λ/μ): {config.traffic_intensity:.4f}")
    if config.sample_interval is not None:
        print(f"  Sample interval: {config.sample_interval:.0f}")


def print_results(result: SimulationResult) -> None:
    """Print a single run's results next to the M/M/1 values."""
    print("\n=== Simulation Results ===")
    print(f"Total simulation time: {result.total_time:.2f}")
    print(f"Events processed: {result.events_processed}")
    print(f"Customers served: {result.served_customers}")
    print(f"Average wait time: {result.average_wait_time:.4f}")
    print(f"Average queue length: {result.average_queue_length:.4f}")
    print(f"Average customers in system: {result.average_customers_in_system:.4f}")
    print(f"Server utilization: {result.utilization:.4f}")
    print(f"System throughput: {result.throughput:.4f}")

    theory = result.theoretical
    print("\n=== Theoretical Values (M/M/1) ===")
    print(f"Expected wait time: {theory['wait_time']:.4f}")
    print(f"Expected queue length: {theory['queue_length']:.4f}")
    print(f"Expected customers in system: {theory['customers_in_system']:.4f}")
    print(f"Expected utilization: {theory['utilization']:.4f}")
    print(f"Expected throughput: {theory['throughput']:.4f}")

    print("\n=== Performance Metrics ===")
    print(f"Wall-clock time: {result.wall_clock_seconds:.2f}s")
    print(f"Events per second: {result.events_per_second:.0f}")
    if result.total_time > 0:
        print(f"Events per simulated time unit: {result.events_processed / result.total_time:.4f}")


def print_replication_summary(summary: Dict) -> None:
    print("\n=== Replication Results ===")
    print(f"Replications: {summary['replications']}")
    print(f"Confidence level: {summary['confidence']:.0%}")

    for name in METRIC_NAMES:
        stats = summary['metrics'][name]
        expected = summary['theoretical'][THEORY_KEYS[name]]
        print(f"  {name}:")
        print(f"    Mean: {stats['mean']:.4f} (±{stats['ci_half_width']:.4f})"
              f"  expected {expected:.4f}")
        print(f"    Std: {stats['std']:.4f}, Min: {stats['min']:.4f}, Max: {stats['max']:.4f}")


def make_plots(result: SimulationResult, plot_file: Optional[str], show: bool) -> None:
    from ..visualization.plotting import (
        create_performance_report,
        plot_distribution_comparison,
    )

    figures = create_performance_report(result, save_path=plot_file)

    service_time = exponential_distribution(result.service_rate, uniform_source(result.seed))
    samples = [service_time() for _ in range(VARIATE_CHECK_SAMPLES)]
    figures['variates'] = plot_distribution_comparison(
        samples, result.service_rate, title="Service Time Variate Check")

    if plot_file:
        print(f"Plots saved next to: {plot_file}")
    if show:
        import matplotlib.pyplot as plt
        plt.show()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run M/M/1 single-server queue simulations')

    parser.add_argument('--arrival-rate', type=float, default=None,
                        help=f'Arrival rate λ (default: {DEFAULT_ARRIVAL_RATE})')
    parser.add_argument('--service-rate', type=float, default=None,
                        help=f'Service rate μ (default: {DEFAULT_SERVICE_RATE})')
    parser.add_argument('--stop', choices=['time', 'events', 'customers'], default=None,
                        help='Stopping condition (default: time)')
    parser.add_argument('--limit', type=float, default=None,
                        help='Limit for the stopping condition '
                             f'(defaults: {DEFAULT_LIMITS})')
    parser.add_argument('-s', '--seed', type=int, default=None,
                        help='Random seed (default: 42 for replications, random otherwise)')
    parser.add_argument('--sample-interval', type=float, default=None,
                        help='Simulated time between samples, 0 disables sampling '
                             f'(default: {DEFAULT_SAMPLE_INTERVAL:.0f})')
    parser.add_argument('--config', type=str,
                        help='JSON configuration file')

    parser.add_argument('-r', '--replications', type=int, default=1,
                        help='Number of replications (default: 1)')
    parser.add_argument('-j', '--workers', type=int, default=1,
                        help='Worker processes for replications (default: 1)')

    parser.add_argument('-o', '--output', type=str,
                        help='Output file for results (JSON)')
    parser.add_argument('-p', '--plot', action='store_true',
                        help='Show plots')
    parser.add_argument('--plot-file', type=str,
                        help='Save plots to files derived from this name')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Suppress console output')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase log verbosity (-v info, -vv debug)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.replications < 1:
        parser.error(f"--replications must be at least 1, got {args.replications}")
    if args.workers < 1:
        parser.error(f"--workers must be at least 1, got {args.workers}")

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        config = build_config(args)
    except (ValueError, TypeError) as e:
        parser.error(str(e))
    except OSError as e:
        parser.error(f"Cannot read config file: {e}")

    if not args.quiet:
        print_parameters(config)

    if args.replications > 1:
        base_seed = config.seed if config.seed is not None else 42
        try:
            summary = run_replications(config, args.replications,
                                       base_seed=base_seed, workers=args.workers)
        except ValueError as e:
            parser.error(str(e))

        results = summary.pop('results')
        if not args.quiet:
            print_replication_summary(summary)
        if args.output:
            summary['runs'] = [r.as_dict() for r in results]
            save_results(summary, args.output)
        plot_result = results[0]
    else:
        result = run_simulation(config)
        if not args.quiet:
            print_results(result)
        if args.output:
            save_results(result.as_dict(include_time_series=True), args.output)
        plot_result = result

    if args.output and not args.quiet:
        print(f"\nResults saved to: {args.output}")

    if args.plot or args.plot_file:
        make_plots(plot_result, args.plot_file, show=args.plot)

    return 0


if __name__ == '__main__':
    sys.exit(main())
