"""Pydantic models for port configuration, ranges and raw SNMP snapshots."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator


class LacpInfo(BaseModel):
    """Link aggregation a port belongs to, with the aggregate's own VLAN sets."""

    model_config = ConfigDict(frozen=True)

    agg_id: int
    agg_name: str | None = None
    agg_vlans: tuple[frozenset[int], frozenset[int]] | None = None  # (tagged, untagged)


class PortConfig(BaseModel):
    """VLAN configuration of a single port."""

    model_config = ConfigDict(frozen=True)

    port: PositiveInt
    alias: str | None = None
    pvid: int = 0
    tagged: frozenset[int] = Field(default_factory=frozenset)
    untagged: frozenset[int] = Field(default_factory=frozenset)
    lacp: LacpInfo | None = None

    def same_settings(self, other: PortConfig) -> bool:
        """Return True if everything but the port number matches."""
        return (
            self.pvid == other.pvid
            and self.tagged == other.tagged
            and self.untagged == other.untagged
            and self.alias == other.alias
            and self.lacp == other.lacp
        )


class LacpOverride(BaseModel):
    """Operator-declared trunk: ``targets`` inherit the settings of ``source``."""

    source: PositiveInt
    targets: list[PositiveInt] = Field(default_factory=list)


class PortRange(BaseModel):
    """Inclusive run of contiguous ports sharing one configuration."""

    model_config = ConfigDict(frozen=True)

    first_port: PositiveInt
    last_port: PositiveInt
    config: PortConfig

    @model_validator(mode="after")
    def _check_bounds(self) -> PortRange:
        if self.first_port > self.last_port:
            raise ValueError(f"first_port {self.first_port} > last_port {self.last_port}")
        return self

    @property
    def is_single(self) -> bool:
        return self.first_port == self.last_port

    @property
    def label(self) -> str:
        """'4' for a single port, '1-3' for a range."""
        if self.is_single:
            return str(self.first_port)
        return f"{self.first_port}-{self.last_port}"


class TableSnapshot(BaseModel):
    """Raw SNMP tables collected from one switch in a single query pass."""

    sys_descr: str = ""
    sys_name: str = ""

    if_indices: list[int] = Field(default_factory=list)
    if_types: dict[int, int] = Field(default_factory=dict)
    if_names: dict[int, str] = Field(default_factory=dict)
    if_aliases: dict[int, str] = Field(default_factory=dict)

    vlan_names: dict[int, str] = Field(default_factory=dict)
    egress: dict[int, bytes] = Field(default_factory=dict)
    untagged: dict[int, bytes] = Field(default_factory=dict)
    pvids: dict[int, int] = Field(default_factory=dict)

    agg_selected: dict[int, int] = Field(default_factory=dict)
    agg_names: dict[int, str] = Field(default_factory=dict)

    @property
    def port_aliases(self) -> dict[int, str]:
        """ifAlias when the device reports any, else ifName."""
        return self.if_aliases if self.if_aliases else self.if_names


class PortReport(BaseModel):
    """Final report: compressed port ranges plus presentation metadata."""

    host: str = ""
    sys_name: str = ""
    sys_descr: str = ""
    ranges: list[PortRange] = Field(default_factory=list)
    vlan_names: dict[int, str] = Field(default_factory=dict)
