"""Markdown, HTML and terminal formatters for port range reports."""

from __future__ import annotations

import html
from collections.abc import Mapping

from tabulate import tabulate

from vlanreport._util import format_vlan
from vlanreport.models import PortRange, PortReport

UNKNOWN_AGG_NAME = "Unknown"

HEADERS = ("Port", "Alias", "VLAN(s)", "Trunk")

HTML_STYLE = """<style>
    .port-table {
        border-collapse: collapse;
        width: 100%;
        margin: 20px 0;
        font-family: Arial, sans-serif;
    }
    .port-table th, .port-table td {
        border: 1px solid #ddd;
        padding: 8px;
        text-align: left;
    }
    .port-table th {
        background-color: #f2f2f2;
        font-weight: bold;
    }
    .port-table tr:nth-child(even) {
        background-color: #f9f9f9;
    }
    .port-table tr:hover {
        background-color: #f5f5f5;
    }
</style>"""


def vlan_cell(rng: PortRange, vlan_names: Mapping[int, str]) -> str:
    """VLAN column text for a range.

    A plain access port (one untagged VLAN equal to the PVID, at most one
    tagged VLAN) shows just that VLAN; anything else lists both sets.
    """
    cfg = rng.config
    if len(cfg.untagged) == 1 and len(cfg.tagged) <= 1:
        (only,) = cfg.untagged
        if cfg.pvid == only:
            return format_vlan(only, vlan_names)

    parts: list[str] = []
    if cfg.tagged:
        parts.append("Tagged:[" + ", ".join(format_vlan(v, vlan_names) for v in sorted(cfg.tagged)) + "]")
    if cfg.untagged:
        parts.append("Untagged:[" + ", ".join(format_vlan(v, vlan_names) for v in sorted(cfg.untagged)) + "]")
    return " ".join(parts)


def trunk_cell(rng: PortRange) -> str:
    """Trunk column text: the aggregate's name, or empty for standalone ports."""
    lacp = rng.config.lacp
    if lacp is None:
        return ""
    return lacp.agg_name or UNKNOWN_AGG_NAME


class _RangeFormatter:
    """Shared row building for all report formats."""

    def __init__(self, report: PortReport, max_port: int | None = None) -> None:
        self.report = report
        self.max_port = max_port

    def visible_ranges(self) -> list[PortRange]:
        """Ranges to display; ranges starting above ``max_port`` are dropped."""
        if self.max_port is None:
            return list(self.report.ranges)
        return [r for r in self.report.ranges if r.first_port <= self.max_port]

    def rows(self) -> list[list[str]]:
        vlan_names = self.report.vlan_names
        return [
            [rng.label, rng.config.alias or "", vlan_cell(rng, vlan_names), trunk_cell(rng)]
            for rng in self.visible_ranges()
        ]

    def format(self) -> str:
        raise NotImplementedError


class MarkdownFormatter(_RangeFormatter):
    """Format a PortReport as a Markdown table."""

    def format(self) -> str:
        """Return the complete Markdown document as a string."""
        r = self.report
        lines: list[str] = []
        if r.sys_name:
            lines.append(f"# Port Information: {r.sys_name}\n")
            if r.sys_descr:
                lines.append(f"- **Switch:** {r.sys_descr}")
            if r.host:
                lines.append(f"- **Host:** {r.host}")
            lines.append("")
        else:
            lines.append("Port Information Table:")

        lines.append("| " + " | ".join(HEADERS) + " |")
        lines.append("|------|-------|---------|-------|")
        for row in self.rows():
            lines.append("| " + " | ".join(cell.replace("|", "\\|") for cell in row) + " |")

        return "\n".join(lines)


class HtmlFormatter(_RangeFormatter):
    """Format a PortReport as a styled HTML table."""

    def format(self) -> str:
        """Return the HTML fragment (style block plus table) as a string."""
        lines: list[str] = [HTML_STYLE]
        if self.report.host:
            lines.append(f"<h2>{html.escape(self.report.host)}</h2>")
        lines.append('<table class="port-table">')
        lines.append("    <thead>")
        lines.append("        <tr>")
        for head in HEADERS:
            lines.append(f"            <th>{head}</th>")
        lines.append("        </tr>")
        lines.append("    </thead>")
        lines.append("    <tbody>")
        for row in self.rows():
            lines.append("        <tr>")
            for cell in row:
                lines.append(f"            <td>{html.escape(cell)}</td>")
            lines.append("        </tr>")
        lines.append("    </tbody>")
        lines.append("</table>")
        return "\n".join(lines)


class TerminalFormatter(_RangeFormatter):
    """Format a PortReport as a plain-text grid for the terminal."""

    def format(self) -> str:
        """Return the terminal output as a string."""
        r = self.report
        lines: list[str] = []
        if r.sys_name:
            lines.append(f"  Switch:  {r.sys_descr}")
            lines.append(f"  Name:    {r.sys_name}")
        lines.append(f"  Ranges:  {len(r.ranges)}")
        lines.append("")
        lines.append(tabulate(self.rows(), headers=HEADERS, tablefmt="simple_grid"))
        return "\n".join(lines)


FORMATTERS: dict[str, type[_RangeFormatter]] = {
    "markdown": MarkdownFormatter,
    "html": HtmlFormatter,
    "text": TerminalFormatter,
}


def get_formatter(name: str, report: PortReport, max_port: int | None = None) -> _RangeFormatter:
    """Return the formatter registered under ``name``.

    Raises:
        ValueError: If no formatter has that name.
    """
    key = name.lower()
    if key not in FORMATTERS:
        available = ", ".join(sorted(FORMATTERS))
        raise ValueError(f"Unknown output format '{name}'. Available: {available}")
    return FORMATTERS[key](report, max_port=max_port)
