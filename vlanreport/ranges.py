"""Compress sorted per-port configurations into contiguous ranges."""

from __future__ import annotations

from collections.abc import Iterable

from vlanreport.models import PortConfig, PortRange


def compress_ranges(configs: Iterable[PortConfig]) -> list[PortRange]:
    """Merge ascending, contiguous ports with identical settings.

    ``configs`` must be sorted by port. A range is extended only by the port
    directly following its last one (``end + 1``) whose settings equal the
    range's first port; anything else closes it and opens a new range.
    """
    ranges: list[PortRange] = []
    current: PortConfig | None = None
    start = end = 0

    for cfg in configs:
        if current is not None and cfg.port == end + 1 and cfg.same_settings(current):
            end = cfg.port
            continue
        if current is not None:
            ranges.append(PortRange(first_port=start, last_port=end, config=current))
        current = cfg
        start = end = cfg.port

    if current is not None:
        ranges.append(PortRange(first_port=start, last_port=end, config=current))
    return ranges
