"""SNMP VLAN/LACP port report.

Queries a switch via SNMPv2c for per-port VLAN membership and link
aggregation, then renders the ports as compact ranges of identical
configuration.
"""

__version__ = "0.1.0"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink with a convenient format and filter."""
    os.environ["LOGURU_LEVEL"] = os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})
    glogger.enable(__name__)


from vlanreport.exceptions import (  # noqa: E402
    OverrideParseError,
    SnmpFetchError,
    TableTypeError,
    VlanReportError,
)
from vlanreport.models import (  # noqa: E402
    LacpInfo,
    LacpOverride,
    PortConfig,
    PortRange,
    PortReport,
    TableSnapshot,
)
from vlanreport.report import build_report  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "build_report",
    "LacpInfo",
    "LacpOverride",
    "PortConfig",
    "PortRange",
    "PortReport",
    "TableSnapshot",
    "VlanReportError",
    "SnmpFetchError",
    "TableTypeError",
    "OverrideParseError",
]
