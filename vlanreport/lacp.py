"""Link aggregation: trunk resolution, operator overrides and VLAN overlay."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from loguru import logger

from vlanreport._util import vlan_membership
from vlanreport.exceptions import OverrideParseError
from vlanreport.models import LacpInfo, LacpOverride, PortConfig

_ID_RE = re.compile(r"[0-9]+")


def aggregate_vlans(
    agg_ids: Iterable[int],
    egress_index: Mapping[int, Iterable[int]],
    untagged_index: Mapping[int, Iterable[int]],
) -> dict[int, tuple[frozenset[int], frozenset[int]]]:
    """VLAN sets of each aggregate, looked up as if the aggregate id were a port.

    Aggregates without any VLAN membership are left out.
    """
    result: dict[int, tuple[frozenset[int], frozenset[int]]] = {}
    for agg_id in set(agg_ids):
        if agg_id <= 0:
            continue
        tagged, untagged = vlan_membership(agg_id, egress_index, untagged_index)
        if tagged or untagged:
            result[agg_id] = (tagged, untagged)
    return result


def resolve_aggregates(
    configs: Iterable[PortConfig],
    selected: Mapping[int, int],
    agg_names: Mapping[int, str],
    egress_index: Mapping[int, Iterable[int]],
    untagged_index: Mapping[int, Iterable[int]],
) -> list[PortConfig]:
    """Attach a :class:`LacpInfo` to every port that selects an aggregate.

    ``selected`` maps port id to dot3adAggPortSelectedAggID; 0 means the port
    is not aggregated. VLAN sets are not touched here, see
    :func:`apply_trunk_overlay`.
    """
    agg_vlans = aggregate_vlans(selected.values(), egress_index, untagged_index)

    resolved: list[PortConfig] = []
    for cfg in configs:
        agg_id = selected.get(cfg.port, 0)
        if agg_id > 0:
            info = LacpInfo(
                agg_id=agg_id,
                agg_name=agg_names.get(agg_id) or None,
                agg_vlans=agg_vlans.get(agg_id),
            )
            cfg = cfg.model_copy(update={"lacp": info})
        resolved.append(cfg)
    return resolved


def _parse_id(text: str, what: str) -> int:
    """Parse a plain run of ASCII digits; signs, underscores and spaces are rejected."""
    if not _ID_RE.fullmatch(text):
        raise OverrideParseError(f"Invalid {what} number: {text!r}")
    return int(text)


def parse_lacp_override(text: str) -> LacpOverride:
    """Parse ``'source:target[,target...]'``, e.g. ``'26:21,22'``.

    Raises:
        OverrideParseError: On wrong field count or non-numeric ids.
    """
    parts = text.strip().split(":")
    if len(parts) != 2:
        raise OverrideParseError("Invalid format. Expected: source_interface:target_ports")

    source = _parse_id(parts[0], "source interface")
    targets = [_parse_id(p, "target port") for p in parts[1].split(",")]

    if source <= 0 or any(t <= 0 for t in targets):
        raise OverrideParseError("Interface numbers must be positive")
    return LacpOverride(source=source, targets=targets)


def parse_lacp_overrides(texts: Iterable[str]) -> list[LacpOverride]:
    """Parse many override declarations, warning about and skipping bad ones."""
    overrides: list[LacpOverride] = []
    for text in texts:
        try:
            overrides.append(parse_lacp_override(text))
        except OverrideParseError as e:
            logger.warning(f"Invalid LACP override '{text}': {e}")
    return overrides


def apply_lacp_overrides(
    configs: Iterable[PortConfig],
    overrides: Iterable[LacpOverride],
    aliases: Mapping[int, str],
    egress_index: Mapping[int, Iterable[int]],
    untagged_index: Mapping[int, Iterable[int]],
    *,
    ignore_alias: bool = False,
) -> list[PortConfig]:
    """Make each override's target ports look like members of its source trunk.

    Overrides are applied in order; a later one wins for the same port.
    """
    by_port: dict[int, PortConfig] = {cfg.port: cfg for cfg in configs}

    for ov in overrides:
        pair = vlan_membership(ov.source, egress_index, untagged_index)
        # source name copied as-is; only an empty name counts as unset
        alias = None if ignore_alias else (aliases.get(ov.source) or None)
        info = LacpInfo(agg_id=ov.source, agg_name=f"Trk{ov.source}", agg_vlans=pair)

        for target in ov.targets:
            if target not in by_port:
                logger.debug(f"LACP override {ov.source}: port {target} not present, skipped")
                continue
            by_port[target] = by_port[target].model_copy(update={"alias": alias, "lacp": info})

    return list(by_port.values())


def apply_trunk_overlay(configs: Iterable[PortConfig]) -> list[PortConfig]:
    """Replace a member port's VLAN sets with its trunk's, where known.

    This is a replacement, not a union: the port's own membership is dropped.
    """
    result: list[PortConfig] = []
    for cfg in configs:
        if cfg.lacp is not None and cfg.lacp.agg_vlans is not None:
            tagged, untagged = cfg.lacp.agg_vlans
            cfg = cfg.model_copy(update={"tagged": tagged, "untagged": untagged})
        result.append(cfg)
    return result
