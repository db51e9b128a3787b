"""OID constants and async SNMP wrappers for the VLAN report."""

from __future__ import annotations

from typing import Any

from loguru import logger

from vlanreport.exceptions import SnmpFetchError, TableTypeError

# Optional pysnmp import
try:
    from pysnmp.hlapi.asyncio import (
        CommunityData,
        ContextData,
        ObjectIdentity,
        ObjectType,
        SnmpEngine,
        UdpTransportTarget,
        bulk_walk_cmd,
        get_cmd,
    )

    HAS_PYSNMP = True
except ImportError:
    HAS_PYSNMP = False

# ── OID constants ──────────────────────────────────────────────────────
OID_SYS_DESCR = "1.3.6.1.2.1.1.1.0"
OID_SYS_NAME = "1.3.6.1.2.1.1.5.0"
OID_IF_INDEX = "1.3.6.1.2.1.2.2.1.1"  # IF-MIB::ifIndex
OID_IF_TYPE = "1.3.6.1.2.1.2.2.1.3"  # IF-MIB::ifType
OID_IF_NAME = "1.3.6.1.2.1.31.1.1.1.1"  # IF-MIB::ifName
OID_IF_ALIAS = "1.3.6.1.2.1.31.1.1.1.18"  # IF-MIB::ifAlias
OID_VLAN_STATIC_NAME = "1.3.6.1.2.1.17.7.1.4.3.1.1"  # Q-BRIDGE-MIB
OID_VLAN_EGRESS_PORTS = "1.3.6.1.2.1.17.7.1.4.3.1.2"  # Q-BRIDGE-MIB
OID_VLAN_UNTAGGED_PORTS = "1.3.6.1.2.1.17.7.1.4.3.1.4"  # Q-BRIDGE-MIB
OID_VLAN_CURRENT_EGRESS = "1.3.6.1.2.1.17.7.1.4.2.1.4"  # Q-BRIDGE-MIB (fallback)
OID_VLAN_CURRENT_UNTAG = "1.3.6.1.2.1.17.7.1.4.2.1.5"  # Q-BRIDGE-MIB (fallback)
OID_DOT1Q_PVID = "1.3.6.1.2.1.17.7.1.4.5.1.1"  # Q-BRIDGE-MIB
OID_LAG_PORT_SELECTED = "1.2.840.10006.300.43.1.2.1.1.13"  # IEEE8023-LAG-MIB::dot3adAggPortSelectedAggID
OID_LAG_AGG_NAME = OID_IF_NAME  # aggregates are named through ifName


async def snmp_get_scalars(
    engine: Any,
    auth: Any,
    target: Any,
    *oids: str,
    host: str = "",
) -> list:
    """GET one or more scalar OIDs, return list of values."""
    tag = f" [{host}]" if host else ""
    error_indication, error_status, _, var_binds = await get_cmd(
        engine,
        auth,
        target,
        ContextData(),
        *[ObjectType(ObjectIdentity(oid)) for oid in oids],
    )
    if error_indication:
        logger.warning(f"SNMP error{tag}: {error_indication}")
        return [None] * len(oids)
    if error_status:
        logger.warning(f"SNMP error{tag}: {error_status.prettyPrint()}")
        return [None] * len(oids)
    return [val for _, val in var_binds]


def coerce_value(val: Any) -> bytes | int:
    """Reduce a pysnmp value to ``bytes`` (octet strings) or ``int``."""
    if isinstance(val, (bytes, int)):
        return val
    if hasattr(val, "asOctets"):
        return bytes(val.asOctets())
    return int(val)


async def snmp_walk_table(
    engine: Any,
    auth: Any,
    target: Any,
    oid: str,
    index_len: int = 1,
    host: str = "",
) -> list[tuple]:
    """Bulk-walk an OID subtree.

    index_len=1: return (last_index, value) tuples.
    index_len=2: return ((idx[-2], idx[-1]), value) tuples (e.g. Current table).

    Values are ``bytes`` or ``int``. Any error aborts the walk with
    :class:`SnmpFetchError`; a partial table is never returned.
    """
    tag = f" [{host}]" if host else ""
    results: list[tuple] = []
    async for error_indication, error_status, _, var_binds in bulk_walk_cmd(
        engine,
        auth,
        target,
        ContextData(),
        0,
        25,  # nonRepeaters, maxRepetitions
        ObjectType(ObjectIdentity(oid)),
        lexicographicMode=False,
    ):
        if error_indication:
            raise SnmpFetchError(f"SNMP walk error{tag} on {oid}: {error_indication}", oid=oid)
        if error_status:
            raise SnmpFetchError(f"SNMP walk error{tag} on {oid}: {error_status.prettyPrint()}", oid=oid)
        for var_bind_oid, val in var_binds:
            idx: int | tuple[int, ...]
            if index_len == 1:
                idx = int(var_bind_oid[-1])
            else:
                idx = tuple(int(var_bind_oid[-i]) for i in range(index_len, 0, -1))
            results.append((idx, coerce_value(val)))
    logger.debug(f"Walked {oid}{tag}: {len(results)} rows")
    return results


# ── Table coercion ─────────────────────────────────────────────────────


def string_table(rows: list[tuple], oid: str = "") -> dict[int, str]:
    """Rows of a textual table as ``{index: str}``; integers are rejected."""
    table: dict[int, str] = {}
    for idx, val in rows:
        if isinstance(val, int):
            raise TableTypeError(f"Expected text in {oid or 'table'} at index {idx}, got integer {val}", oid=oid)
        table[idx] = val.decode("utf-8", errors="replace")
    return table


def integer_table(rows: list[tuple]) -> dict[int, int]:
    """Rows of a numeric table as ``{index: int}`` (byte payloads read big-endian)."""
    return {idx: val if isinstance(val, int) else int.from_bytes(val, "big") for idx, val in rows}


def octet_table(rows: list[tuple]) -> dict[int, bytes]:
    """Rows of an octet-string table as ``{index: bytes}``."""
    return {idx: val if isinstance(val, bytes) else val.to_bytes(4, "big", signed=True) for idx, val in rows}
