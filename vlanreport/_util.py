"""Private helper functions for VLAN report processing."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Collection, Iterable, Mapping

# IANA ifType codes kept by the physical-port filter
IF_TYPE_ETHERNET_CSMACD = 6  # 10/100M
IF_TYPE_GIGABIT_ETHERNET = 117
PHYSICAL_IF_TYPES = frozenset({IF_TYPE_ETHERNET_CSMACD, IF_TYPE_GIGABIT_ETHERNET})

# Devices whose ifType values are unreliable: keep every interface
DEFAULT_PASSTHROUGH_DEVICES: frozenset[str] = frozenset()

DEFAULT_VLAN = 1


def decode_portlist(data: bytes) -> set[int]:
    """Decode a dot1q PortList (raw bytes) into a set of port numbers (1-based)."""
    ports: set[int] = set()
    for byte_idx, byte_val in enumerate(data):
        for bit in range(8):
            if byte_val & (0x80 >> bit):
                ports.add(byte_idx * 8 + bit + 1)
    return ports


def invert_portlists(portlists: Mapping[int, bytes]) -> dict[int, set[int]]:
    """Turn ``{vlan_id: PortList}`` into ``{port: {vlan_id, ...}}``.

    Each bitmask is decoded exactly once.
    """
    index: dict[int, set[int]] = defaultdict(set)
    for vlan_id, data in portlists.items():
        for port in decode_portlist(data):
            index[port].add(vlan_id)
    return dict(index)


def vlan_membership(
    key: int,
    egress_index: Mapping[int, Iterable[int]],
    untagged_index: Mapping[int, Iterable[int]],
) -> tuple[frozenset[int], frozenset[int]]:
    """Return ``(tagged, untagged)`` VLAN ids for a port or aggregate id."""
    return frozenset(egress_index.get(key, ())), frozenset(untagged_index.get(key, ()))


def normalize_alias(port: int, alias: str | None) -> str | None:
    """Collapse empty aliases and aliases that merely repeat the port number."""
    if alias is None:
        return None
    alias = alias.strip()
    if not alias or alias == str(port):
        return None
    return alias


def is_physical_port(
    if_type: int,
    device: str = "",
    passthrough_devices: Collection[str] = DEFAULT_PASSTHROUGH_DEVICES,
) -> bool:
    """Return True if an interface should appear in the report.

    Keeps 100M/1G Ethernet (ifType 6 and 117). Devices listed in
    ``passthrough_devices`` keep every interface regardless of type.
    """
    if device and device in passthrough_devices:
        return True
    return if_type in PHYSICAL_IF_TYPES


def format_vlan(vlan_id: int, vlan_names: Mapping[int, str]) -> str:
    """Return 'name (id)' for named VLANs; the default VLAN is always bare."""
    if vlan_id == DEFAULT_VLAN:
        return str(vlan_id)
    name = vlan_names.get(vlan_id)
    if name:
        return f"{name} ({vlan_id})"
    return str(vlan_id)
