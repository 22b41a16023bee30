#!/usr/bin/env python3
# run_simulator.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Command-line interface for pulse network simulation and extrapolation

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from core.network import Network, build_network
from core.exceptions import ExtrapolationError, NetworkError
from core.extrapolator import (
    DEFAULT_MAX_TRIGGERS,
    DEFAULT_SINK,
    DEFAULT_TRIGGERS,
    extrapolate_pulse_counts,
    first_low_trigger,
    watch_candidates,
)
from utils.network_reader import read_network_file, NetworkFileError
from utils.logger import LogLevel, get_logger
from parser.exceptions import ParseError


def configure_logging_for_simulator(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging levels for the simulator.

    Results are reported at INFO, so INFO is the floor.

    Args:
        verbose: Also report simulation steps (cycles, rising edges) at INFO
        debug: Enable DEBUG level logging, including per-trigger counts
    """
    logger = get_logger()
    logger.set_verbose(verbose)

    if debug:
        logger.set_level(LogLevel.DEBUG)
    else:
        logger.set_level(LogLevel.INFO)


def parse_watch_list(value: Optional[str]) -> Optional[List[str]]:
    """Split a comma-separated ``--watch`` value into module names."""
    if value is None:
        return None
    names = [name.strip() for name in value.split(",") if name.strip()]
    return names or None


def report_pulse_counts(network: Network, triggers: int) -> int:
    """Extrapolate and print the pulse product after ``triggers`` triggers.

    Returns:
        Product of Low and High pulse totals
    """
    logger = get_logger()

    total = extrapolate_pulse_counts(network, triggers)
    logger.info(f"📊 Pulses after {triggers} triggers: {total.product}")
    return total.product


def report_first_low(
    network: Network,
    sink: str,
    watched: Optional[List[str]],
    max_triggers: int,
    verify: bool,
) -> Optional[int]:
    """Predict and print the first trigger sending Low to ``sink``.

    Skipped when the network has no such sink.

    Returns:
        Trigger count, or None when skipped
    """
    logger = get_logger()

    if sink not in network.sinks():
        logger.info(f"ℹ️  No sink named '{sink}'; skipping first-low prediction")
        return None

    names = watched if watched is not None else watch_candidates(network, sink)
    logger.info(f"👀 Watching: {', '.join(names)}")

    result = first_low_trigger(
        network, sink, names, max_triggers=max_triggers, verify=verify
    )
    logger.info(f"🎯 Triggers before low '{sink}' pulse: {result}")
    return result


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Pulsar Pulse Network Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_simulator.py -n network.txt
  python run_simulator.py -n network.txt --triggers 5000 -v
  python run_simulator.py -n network.txt --sink rx --watch ka,kb,kc --verify
  python run_simulator.py -n network.txt --render network --format svg

Network file format:
  One module per line, '%' for latches and '&' for detectors:

  network.txt:
    broadcaster -> a, b, c
    %a -> b
    %b -> c
    %c -> inv
    &inv -> a
        """,
    )

    parser.add_argument(
        "-n", "--network", required=True, type=Path, help="Path to module description file"
    )

    parser.add_argument(
        "--triggers",
        type=int,
        default=DEFAULT_TRIGGERS,
        help=f"Number of triggers to extrapolate pulse counts over (default {DEFAULT_TRIGGERS})",
    )

    parser.add_argument(
        "--sink",
        default=DEFAULT_SINK,
        help=f"External sink whose first low pulse is predicted (default '{DEFAULT_SINK}')",
    )

    parser.add_argument(
        "--watch",
        help="Comma-separated nodes to watch for rising edges (default: inputs of the sink's detector)",
    )

    parser.add_argument(
        "--verify",
        action="store_true",
        help="Confirm each watched node rises again after one period before combining",
    )

    parser.add_argument(
        "--max-triggers",
        type=int,
        default=DEFAULT_MAX_TRIGGERS,
        help=f"Ceiling on triggers while watching for rising edges (default {DEFAULT_MAX_TRIGGERS})",
    )

    parser.add_argument(
        "--render", metavar="FILE", help="Render the network with Graphviz to FILE"
    )

    parser.add_argument(
        "--format", default="png", help="Render format (default png)"
    )

    parser.add_argument(
        "--validate-only", action="store_true", help="Only parse and build the network"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Also report cycles and rising edges as they are found"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the simulator.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging_for_simulator(verbose=args.verbose, debug=args.debug)
    logger = get_logger()

    try:
        source = read_network_file(args.network)
        network = build_network(source)
        logger.validation_result(
            True, f"Network loaded: {len(network.modules)} modules from {args.network}"
        )

        if args.render:
            from utils.network_visualizer import render_network

            render_network(network, args.render, parse_watch_list(args.watch) or (), args.format)

        if args.validate_only:
            return 0

        report_pulse_counts(network, args.triggers)

        network.reset()
        report_first_low(
            network,
            args.sink,
            parse_watch_list(args.watch),
            args.max_triggers,
            args.verify,
        )

        return 0

    except NetworkFileError as e:
        logger.validation_result(False, f"Network file error: {e}")
        return 1

    except ParseError as e:
        logger.validation_result(False, f"Network parsing error: {e}")
        return 2

    except (NetworkError, ExtrapolationError, ValueError) as e:
        logger.error(f"Simulation error: {e}")
        return 3

    except KeyboardInterrupt:
        logger.error("Simulation interrupted by user")
        return 4

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return 5


if __name__ == "__main__":
    sys.exit(main())
