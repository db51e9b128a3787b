"""Shared fixtures for the vlanreport test suite."""

from __future__ import annotations

import pytest

from vlanreport.models import LacpInfo, PortConfig, PortRange, PortReport, TableSnapshot


@pytest.fixture()
def make_port_config():
    """Factory fixture returning a PortConfig with customizable fields."""

    def _make(port: int = 1, **kwargs):
        defaults = {
            "alias": None,
            "pvid": 1,
            "tagged": frozenset({1}),
            "untagged": frozenset({1}),
            "lacp": None,
        }
        defaults.update(kwargs)
        return PortConfig(port=port, **defaults)

    return _make


@pytest.fixture()
def sample_snapshot():
    """Factory fixture returning a populated TableSnapshot.

    Ten ports plus LAG interface 26 (ifType 161):
      - ports 1-4: access VLAN 10
      - ports 5-6: access VLAN 20, 6 has an alias
      - ports 7-8: trunk members of aggregate 26 (tagged 10, 20, untagged 1)
      - port 9: trunk port carrying VLAN 1 untagged and 10/20 tagged
      - port 10: no VLAN at all
    """

    def _make(**overrides):
        defaults = dict(
            sys_descr="GS724T Smart Switch",
            sys_name="switch01",
            if_indices=[1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 26],
            if_types={**{p: 6 for p in range(1, 9)}, 9: 117, 10: 117, 26: 161},
            if_names={**{p: str(p) for p in range(1, 11)}, 26: "Trk1"},
            if_aliases={6: "printer", 9: "uplink", 26: "core-lag"},
            vlan_names={1: "default", 10: "servers", 20: "clients"},
            egress={
                1: bytes([0x00, 0x80, 0x00, 0x40]),  # ports 9, 26
                10: bytes([0xF3, 0x80, 0x00, 0x40]),  # ports 1-4, 7, 8, 9, 26
                20: bytes([0x0F, 0x80, 0x00, 0x40]),  # ports 5-8, 9, 26
            },
            untagged={
                1: bytes([0x00, 0x80, 0x00, 0x40]),  # ports 9, 26
                10: bytes([0xF0, 0x00, 0x00, 0x00]),  # ports 1-4
                20: bytes([0x0C, 0x00, 0x00, 0x00]),  # ports 5-6
            },
            pvids={1: 10, 2: 10, 3: 10, 4: 10, 5: 20, 6: 20, 7: 1, 8: 1, 9: 1, 10: 1, 26: 1},
            agg_selected={7: 26, 8: 26, 9: 0},
            agg_names={**{p: str(p) for p in range(1, 11)}, 26: "Trk1"},
        )
        defaults.update(overrides)
        return TableSnapshot(**defaults)

    return _make


@pytest.fixture()
def sample_report(make_port_config):
    """Factory fixture returning a small PortReport."""

    def _make(**overrides):
        access = make_port_config(1, pvid=10, tagged=frozenset({10}), untagged=frozenset({10}))
        uplink = make_port_config(4, alias="uplink", pvid=20, tagged=frozenset({30}), untagged=frozenset())
        trunk = make_port_config(
            5,
            pvid=1,
            tagged=frozenset({1, 10, 20}),
            untagged=frozenset({1}),
            lacp=LacpInfo(agg_id=26, agg_name="Trk1", agg_vlans=(frozenset({1, 10, 20}), frozenset({1}))),
        )
        defaults = dict(
            host="10.1.0.23",
            sys_name="switch01",
            sys_descr="GS724T Smart Switch",
            ranges=[
                PortRange(first_port=1, last_port=3, config=access),
                PortRange(first_port=4, last_port=4, config=uplink),
                PortRange(first_port=5, last_port=6, config=trunk),
            ],
            vlan_names={1: "default", 10: "servers", 20: "clients", 30: "dmz"},
        )
        defaults.update(overrides)
        return PortReport(**defaults)

    return _make
