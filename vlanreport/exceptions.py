"""Exception hierarchy for the VLAN report."""


class VlanReportError(Exception):
    """Base exception for all VLAN report errors."""


class SnmpFetchError(VlanReportError):
    """An SNMP table walk failed (timeout, transport or agent error)."""

    def __init__(self, message: str, oid: str | None = None):
        self.oid = oid
        super().__init__(message)


class TableTypeError(VlanReportError):
    """A table expected to hold text returned an integer value."""

    def __init__(self, message: str, oid: str | None = None):
        self.oid = oid
        super().__init__(message)


class OverrideParseError(VlanReportError):
    """A LACP override declaration is malformed."""
