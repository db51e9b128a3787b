"""Port/VLAN data collector: orchestrates SNMP table walks into a TableSnapshot."""

from __future__ import annotations

import asyncio

from loguru import logger

from vlanreport.exceptions import SnmpFetchError
from vlanreport.models import TableSnapshot
from vlanreport.snmp import (
    OID_DOT1Q_PVID,
    OID_IF_ALIAS,
    OID_IF_INDEX,
    OID_IF_NAME,
    OID_IF_TYPE,
    OID_LAG_AGG_NAME,
    OID_LAG_PORT_SELECTED,
    OID_SYS_DESCR,
    OID_SYS_NAME,
    OID_VLAN_CURRENT_EGRESS,
    OID_VLAN_CURRENT_UNTAG,
    OID_VLAN_EGRESS_PORTS,
    OID_VLAN_STATIC_NAME,
    OID_VLAN_UNTAGGED_PORTS,
    integer_table,
    octet_table,
    snmp_get_scalars,
    snmp_walk_table,
    string_table,
)


class PortVlanCollector:
    """Collect per-port VLAN and LACP tables from a switch via SNMPv2c."""

    def __init__(self, host: str, community: str = "public", timeout: float = 2.0, retries: int = 0) -> None:
        self.host = host
        self.community = community
        self.timeout = timeout
        self.retries = retries

    def collect(self) -> TableSnapshot:
        """Synchronous entry point, wraps the async implementation."""
        return asyncio.run(self._collect())

    async def _walk(self, engine, auth, target, oid: str, index_len: int = 1) -> list[tuple]:
        return await snmp_walk_table(engine, auth, target, oid, index_len=index_len, host=self.host)

    async def _collect(self) -> TableSnapshot:
        """Async implementation: query switch and return a populated TableSnapshot."""
        from pysnmp.hlapi.asyncio import (
            CommunityData,
            SnmpEngine,
            UdpTransportTarget,
        )
        from pysnmp.error import PySnmpError

        logger.info(f"Querying {self.host} (timeout: {self.timeout}s, retries: {self.retries}) ...")

        engine = SnmpEngine()
        try:
            auth = CommunityData(self.community)
            target = await UdpTransportTarget.create(
                (self.host, 161),
                timeout=self.timeout,
                retries=self.retries,
            )

            scalars = await snmp_get_scalars(engine, auth, target, OID_SYS_DESCR, OID_SYS_NAME, host=self.host)
            sys_descr = str(scalars[0]) if scalars[0] is not None else ""
            sys_name = str(scalars[1]) if scalars[1] is not None else ""

            # ── Interface tables ───────────────────────────────────────
            if_index_rows = await self._walk(engine, auth, target, OID_IF_INDEX)
            if_name_rows = await self._walk(engine, auth, target, OID_IF_NAME)
            if_type_rows = await self._walk(engine, auth, target, OID_IF_TYPE)
            if_alias_rows = await self._walk(engine, auth, target, OID_IF_ALIAS)

            # ── VLAN tables ────────────────────────────────────────────
            vlan_name_rows = await self._walk(engine, auth, target, OID_VLAN_STATIC_NAME)
            egress_rows = await self._walk(engine, auth, target, OID_VLAN_EGRESS_PORTS)
            untagged_rows = await self._walk(engine, auth, target, OID_VLAN_UNTAGGED_PORTS)
            pvid_rows = await self._walk(engine, auth, target, OID_DOT1Q_PVID)

            # Fallback: if Static table is empty, use Current table (e.g. GS108T)
            if not egress_rows:
                logger.debug(f"Static egress table empty on {self.host}, falling back to current table")
                cur_egress = await self._walk(engine, auth, target, OID_VLAN_CURRENT_EGRESS, index_len=2)
                cur_untag = await self._walk(engine, auth, target, OID_VLAN_CURRENT_UNTAG, index_len=2)
                # Current table index is (TimeMark, VlanIndex), extract VlanIndex only
                egress_rows = [(vid, val) for (_, vid), val in cur_egress]
                untagged_rows = [(vid, val) for (_, vid), val in cur_untag]

            # ── LACP tables ────────────────────────────────────────────
            lag_selected_rows = await self._walk(engine, auth, target, OID_LAG_PORT_SELECTED)
        except PySnmpError as e:
            raise SnmpFetchError(f"SNMP transport error [{self.host}]: {e}") from e
        finally:
            engine.close_dispatcher()

        snapshot = TableSnapshot(
            sys_descr=sys_descr,
            sys_name=sys_name,
            if_indices=sorted(integer_table(if_index_rows).values()),
            if_types=integer_table(if_type_rows),
            if_names=string_table(if_name_rows, OID_IF_NAME),
            if_aliases=string_table(if_alias_rows, OID_IF_ALIAS),
            vlan_names=string_table(vlan_name_rows, OID_VLAN_STATIC_NAME),
            egress=octet_table(egress_rows),
            untagged=octet_table(untagged_rows),
            pvids=integer_table(pvid_rows),
            agg_selected=integer_table(lag_selected_rows),
            # aggregates are named through ifName, reuse that walk
            agg_names=string_table(if_name_rows, OID_LAG_AGG_NAME),
        )
        logger.info(
            f"Collected {len(snapshot.if_indices)} interfaces and {len(snapshot.egress)} VLANs from {self.host}"
        )
        return snapshot
