"""Report pipeline: snapshot in, compressed port ranges out."""

from __future__ import annotations

from collections.abc import Collection, Iterable

from loguru import logger

from vlanreport._util import DEFAULT_PASSTHROUGH_DEVICES, invert_portlists
from vlanreport.builder import build_port_configs
from vlanreport.lacp import apply_lacp_overrides, apply_trunk_overlay, resolve_aggregates
from vlanreport.models import LacpOverride, PortReport, TableSnapshot
from vlanreport.ranges import compress_ranges


def build_report(
    snapshot: TableSnapshot,
    *,
    overrides: Iterable[LacpOverride] = (),
    ignore_alias: bool = False,
    filter_interfaces: bool = True,
    device: str = "",
    passthrough_devices: Collection[str] = DEFAULT_PASSTHROUGH_DEVICES,
    host: str = "",
) -> PortReport:
    """Turn one batch of SNMP tables into a :class:`PortReport`.

    Stages run strictly in this order: build port records, resolve
    aggregates, apply operator overrides, overlay trunk VLANs, compress.
    """
    egress_index = invert_portlists(snapshot.egress)
    untagged_index = invert_portlists(snapshot.untagged)
    aliases = snapshot.port_aliases

    configs = build_port_configs(
        snapshot.if_indices,
        aliases,
        snapshot.pvids,
        snapshot.egress,
        snapshot.untagged,
        if_types=snapshot.if_types if filter_interfaces else None,
        device=device,
        passthrough_devices=passthrough_devices,
        ignore_alias=ignore_alias,
        egress_index=egress_index,
        untagged_index=untagged_index,
    )
    configs = resolve_aggregates(configs, snapshot.agg_selected, snapshot.agg_names, egress_index, untagged_index)
    configs = apply_lacp_overrides(
        configs,
        overrides,
        aliases,
        egress_index,
        untagged_index,
        ignore_alias=ignore_alias,
    )
    configs = apply_trunk_overlay(configs)
    configs.sort(key=lambda c: c.port)

    ranges = compress_ranges(configs)
    logger.debug(f"{len(configs)} ports compressed into {len(ranges)} ranges")

    return PortReport(
        host=host,
        sys_name=snapshot.sys_name,
        sys_descr=snapshot.sys_descr,
        ranges=ranges,
        vlan_names=dict(snapshot.vlan_names),
    )
