"""CLI entry point for the VLAN port report."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from loguru import logger

from vlanreport._util import DEFAULT_PASSTHROUGH_DEVICES
from vlanreport.exceptions import VlanReportError
from vlanreport.formatters import FORMATTERS, get_formatter
from vlanreport.lacp import parse_lacp_overrides
from vlanreport.snmp import HAS_PYSNMP

ENV_COMMUNITY = "VLANREPORT_COMMUNITY"


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Build argparse parser for the VLAN report."""
    parser = argparse.ArgumentParser(
        description="Report per-port VLAN and LACP configuration of a switch via SNMPv2c.",
    )
    parser.add_argument(
        "ip",
        help="IP address of the SNMP agent (e.g. 10.1.0.23)",
    )
    parser.add_argument(
        "-c",
        "--community",
        default=os.getenv(ENV_COMMUNITY, "public"),
        help=f"SNMP community string (default: ${ENV_COMMUNITY} or public)",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=2.0,
        help="SNMP timeout in seconds (default: 2)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=0,
        help="SNMP retries per request (default: 0)",
    )
    parser.add_argument(
        "-n",
        "--ignore-alias",
        action="store_true",
        help="Ignore interface aliases",
    )
    parser.add_argument(
        "-f",
        "--format",
        type=str.lower,
        choices=sorted(FORMATTERS),
        default="markdown",
        help="Output format (default: markdown)",
    )
    parser.add_argument(
        "--override-lacp",
        action="append",
        default=[],
        metavar="SRC:PORT[,PORT...]",
        help="Treat PORTs as members of trunk interface SRC, e.g. 26:21,22 (repeatable)",
    )
    parser.add_argument(
        "--max-port",
        type=int,
        default=None,
        help="Hide ranges starting above this port number (default: show all)",
    )
    parser.add_argument(
        "--keep-all-interfaces",
        action="store_true",
        help="Do not filter interfaces by type (keeps LAGs, VLAN interfaces, ...)",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(args)


def main(args: list[str] | None = None) -> None:
    """Main entry point for the VLAN report CLI."""
    parsed = parse_args(args)

    logger.enable("vlanreport")
    if not parsed.verbose:
        logger.remove()
        logger.add(sys.stderr, level="INFO")

    if not HAS_PYSNMP:
        logger.error("pysnmp is required (pip install pysnmp)")
        sys.exit(1)

    from vlanreport.collector import PortVlanCollector
    from vlanreport.report import build_report

    overrides = parse_lacp_overrides(parsed.override_lacp)

    collector = PortVlanCollector(parsed.ip, parsed.community, timeout=parsed.timeout, retries=parsed.retries)
    try:
        snapshot = collector.collect()
        report = build_report(
            snapshot,
            overrides=overrides,
            ignore_alias=parsed.ignore_alias,
            device=parsed.ip,
            passthrough_devices={parsed.ip} if parsed.keep_all_interfaces else DEFAULT_PASSTHROUGH_DEVICES,
            host=parsed.ip,
        )
    except VlanReportError as e:
        logger.error(f"{parsed.ip}: {e}")
        sys.exit(1)

    output = get_formatter(parsed.format, report, max_port=parsed.max_port).format()

    if parsed.output:
        Path(parsed.output).write_text(output + "\n")
        logger.info(f"Output written to {parsed.output}")
    else:
        print(output)
