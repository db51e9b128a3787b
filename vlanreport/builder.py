"""Assemble per-port configuration records from raw table snapshots."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping

from loguru import logger

from vlanreport._util import (
    DEFAULT_PASSTHROUGH_DEVICES,
    invert_portlists,
    is_physical_port,
    normalize_alias,
    vlan_membership,
)
from vlanreport.models import PortConfig


def build_port_configs(
    port_ids: Iterable[int],
    aliases: Mapping[int, str],
    pvids: Mapping[int, int],
    egress: Mapping[int, bytes],
    untagged: Mapping[int, bytes],
    *,
    if_types: Mapping[int, int] | None = None,
    device: str = "",
    passthrough_devices: Collection[str] = DEFAULT_PASSTHROUGH_DEVICES,
    ignore_alias: bool = False,
    egress_index: Mapping[int, Iterable[int]] | None = None,
    untagged_index: Mapping[int, Iterable[int]] | None = None,
) -> list[PortConfig]:
    """Build one :class:`PortConfig` per known port, ascending by port id.

    Args:
        port_ids: Interface indices reported by the device.
        aliases: Port id to display name (ifAlias or ifName).
        pvids: Port id to PVID; missing ports get 0.
        egress: VLAN id to egress PortList bitmask.
        untagged: VLAN id to untagged PortList bitmask.
        if_types: Port id to IANA ifType. When given, non-physical
            interfaces are dropped (see :func:`is_physical_port`).
        device: Device identity used by the interface filter.
        passthrough_devices: Devices whose interfaces are never filtered.
        ignore_alias: Leave every alias unset.
        egress_index: Pre-inverted ``egress`` (port to VLAN ids), reused
            when the caller already built it.
        untagged_index: Pre-inverted ``untagged``.
    """
    if egress_index is None:
        egress_index = invert_portlists(egress)
    if untagged_index is None:
        untagged_index = invert_portlists(untagged)

    configs: list[PortConfig] = []
    skipped = 0
    for port in sorted(set(port_ids)):
        if port <= 0:
            continue
        if if_types is not None and not is_physical_port(if_types.get(port, 0), device, passthrough_devices):
            skipped += 1
            continue

        tagged_vlans, untagged_vlans = vlan_membership(port, egress_index, untagged_index)
        configs.append(
            PortConfig(
                port=port,
                alias=None if ignore_alias else normalize_alias(port, aliases.get(port)),
                pvid=pvids.get(port, 0),
                tagged=tagged_vlans,
                untagged=untagged_vlans,
            )
        )

    if skipped:
        logger.debug(f"Skipped {skipped} non-physical interfaces")
    return configs
