#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command-line interface for NetCalc.
"""
import argparse
import json
import logging
import sys
import time
import traceback
import typing

from . import __version__ as VERSION
from . import adapters
from . import core

# Configure logging
logging.basicConfig(
    handlers=[logging.StreamHandler(sys.stderr)],
    level=logging.WARNING,
    format=core.LOG_FORMAT,
    datefmt=core.LOG_DATEFMT
)
logger = logging.getLogger(__name__)

RESULT_LABELS = (
    ("network_address", "Network Address"),
    ("ip", "IP"),
    ("gateway", "Gateway"),
    ("subnet_mask", "Subnet Mask"),
    ("dns1", "DNS1"),
    ("dns2", "DNS2"),
)


def print_result_stdout(res: core.CalculationResult) -> None:
    """Print result to stdout in human-readable format."""
    values = res.to_dict()
    for key, label in RESULT_LABELS:
        print(f"{label}: {values[key]}")


def print_result_json(res: core.CalculationResult, timing_info: dict = None) -> None:
    """Print result as valid JSON to stdout."""
    data = res.to_dict()
    if timing_info:
        data["_timing"] = timing_info
    print(json.dumps(data))


def print_presets(json_output: bool = False) -> None:
    """Print the predefined networks, numbered from 1."""
    if json_output:
        print(json.dumps([{"label": label, "value": value} for label, value in core.PREDEFINED_NETWORKS]))
        return
    for index, (label, value) in enumerate(core.PREDEFINED_NETWORKS, start=1):
        print(f"{index}. {label} ({value})")


def resolve_preset(number: int) -> str:
    """Return the network value of the 1-based preset number."""
    if not 1 <= number <= len(core.PREDEFINED_NETWORKS):
        raise ValueError(f"Unknown preset {number}, expected 1-{len(core.PREDEFINED_NETWORKS)}")
    return core.PREDEFINED_NETWORKS[number - 1][1]


def run_cli(network: str, ip: str, json_output: bool = False, text_output: bool = False,
            copy: bool = False, debug: bool = False) -> int:
    """
    Run CLI mode with the given network and host address.

    Args:
        network: network in CIDR notation
        ip: host IPv4 address
        json_output: Whether to output JSON format
        text_output: Whether to print the clipboard text block
        copy: Whether to copy the clipboard text block to the system clipboard
        debug: Whether to show debug information

    Returns:
        Exit code (0 for success, 1 for error)
    """
    start_time = time.time()

    try:
        if debug:
            logger.debug(f"Starting computation for: {network} {ip}")

        result = core.calculate(network, ip)
        timing_info = {"computation_time": (time.time() - start_time) * 1000}

        if json_output:
            print_result_json(result, timing_info if debug else None)
        elif text_output:
            print(result.clipboard_text())
        else:
            if debug:
                print(f"Computation time: {timing_info['computation_time']:.3f}ms")
                print()
            print_result_stdout(result)

        if copy and not adapters.copy_to_clipboard(result.clipboard_text()):
            print("Warning: could not copy result to clipboard", file=sys.stderr)
        return 0

    except core.CalcError as e:
        logger.info(f"{e.kind} {str(e)}")
        if json_output:
            print(json.dumps(e.to_dict()))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"{type(e).__name__} {str(e)}\n{traceback.format_exc()}")
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="netcalc",
        description="NetCalc: IPv4 network calculator",
        epilog="Examples:\n"
               "  netcalc 192.168.1.0/27 192.168.1.10\n"
               "  netcalc 10.0.0.0/8 10.1.2.3 --json\n"
               "  netcalc --preset 1 192.168.1.10 --copy\n"
               "  netcalc --list-presets",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "network",
        nargs="?",
        help="Network in CIDR notation (e.g., 192.168.100.0/24)"
    )
    parser.add_argument(
        "ip",
        nargs="?",
        help="Host IPv4 address inside the network (e.g., 192.168.100.10)"
    )
    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--json", "-j", action="store_true", help="Output result in JSON format"
    )
    output_group.add_argument(
        "--text", "-t", action="store_true", help="Output the plain text block used for copying"
    )
    parser.add_argument(
        "--copy", "-c", action="store_true", help="Copy IP, gateway, subnet and DNS to the clipboard"
    )
    parser.add_argument(
        "--preset",
        "-p",
        type=int,
        metavar="N",
        help="Use predefined network N; the first positional argument is then the IP"
    )
    parser.add_argument(
        "--list-presets",
        "-l",
        action="store_true",
        dest="list_presets",
        help="Show predefined networks and exit"
    )
    parser.add_argument("--version", "-v", action="version", version=f"NetCalc {VERSION}")
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Enable debug mode with detailed logging and timing information"
    )
    return parser


def main(argv: typing.Optional[list] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (uses sys.argv[1:] if None)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if argv is None:
        # Exclude program name when parsing args
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        core.setup_logging(debug=True)
        logger.debug("Debug mode enabled")

    if args.list_presets:
        print_presets(args.json)
        return 0

    network, ip = args.network, args.ip
    if args.preset is not None:
        if ip is not None:
            parser.error("with --preset give only the IP address")
        try:
            network, ip = resolve_preset(args.preset), network
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if network and ip:
        return run_cli(network, ip, args.json, args.text, args.copy, args.debug)

    # Without both inputs, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
