"""
Machine Reservation - Load simulation entry point.

Runs the load simulation against the workflow engine and logs the cost
and cache report.
"""

import argparse
from dataclasses import replace
from typing import Optional, Sequence

from machine_reservation.infrastructure.settings import get_settings
from machine_reservation.loggers import logger
from machine_reservation.simulation.load_simulation import LoadSimulation, SimulationReport


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser; defaults come from the settings."""
    settings = get_settings()
    sim = settings.simulation

    parser = argparse.ArgumentParser(
        prog="machine-reservation-sim",
        description="Simulate load on the machine reservation workflow engine.",
    )
    parser.add_argument("--runs", type=int, default=sim.runs, help="Requests per iteration")
    parser.add_argument("--iterations", type=int, default=sim.iterations, help="Number of iterations")
    parser.add_argument("--machines", type=int, default=sim.machines, help="Machines in the store")
    parser.add_argument("--locations", type=int, default=sim.locations, help="Locations to spread machines over")
    parser.add_argument(
        "--failure-rate",
        type=float,
        default=sim.hardware_failure_rate,
        help="Probability that starting a machine fails",
    )
    parser.add_argument("--seed", type=int, default=sim.seed, help="Random seed")
    parser.add_argument(
        "--cache-capacity",
        type=int,
        default=settings.cache.capacity,
        help="Read cache capacity",
    )
    return parser


def run_simulation(argv: Optional[Sequence[str]] = None) -> SimulationReport:
    """
    Parse arguments and run the simulation.

    Args:
        argv: Command line arguments (defaults to ``sys.argv``).

    Returns:
        The simulation report.
    """
    args = build_parser().parse_args(argv)
    sim_settings = replace(
        get_settings().simulation,
        runs=args.runs,
        iterations=args.iterations,
        machines=args.machines,
        locations=args.locations,
        hardware_failure_rate=args.failure_rate,
        seed=args.seed,
    )

    logger.info(
        f"Simulating {sim_settings.iterations} x {sim_settings.runs} requests "
        f"over {sim_settings.machines} machines at {sim_settings.locations} locations"
    )
    simulation = LoadSimulation(sim_settings, cache_capacity=args.cache_capacity)
    return simulation.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code.
    """
    try:
        report = run_simulation(argv)
    except ValueError as e:
        logger.error(f"Invalid simulation parameters: {e}")
        return 2

    logger.info(f"Simulation report:\n{report.render()}")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        logger.info("Simulation stopped by user")
