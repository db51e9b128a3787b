"""Tests for vlanreport.formatters output formatters."""

from __future__ import annotations

import pytest

from vlanreport.formatters import (
    HtmlFormatter,
    MarkdownFormatter,
    TerminalFormatter,
    get_formatter,
    trunk_cell,
    vlan_cell,
)
from vlanreport.models import LacpInfo, PortRange


class TestVlanCell:
    """Test vlan_cell rendering rules."""

    def _range(self, make_port_config, **kwargs):
        return PortRange(first_port=1, last_port=1, config=make_port_config(1, **kwargs))

    def test_access_port_collapsed(self, make_port_config):
        """One untagged VLAN equal to PVID: only that VLAN is shown."""
        rng = self._range(make_port_config, pvid=10, tagged=frozenset({10}), untagged=frozenset({10}))
        assert vlan_cell(rng, {10: "servers"}) == "servers (10)"

    def test_pvid_mismatch_not_collapsed(self, make_port_config):
        rng = self._range(make_port_config, pvid=20, tagged=frozenset(), untagged=frozenset({10}))
        assert vlan_cell(rng, {}) == "Untagged:[10]"

    def test_trunk_lists_both(self, make_port_config):
        """Sorted ids, VLAN 1 never decorated."""
        rng = self._range(make_port_config, pvid=1, tagged=frozenset({20, 1, 10}), untagged=frozenset({1}))
        names = {1: "default", 10: "servers"}
        assert vlan_cell(rng, names) == "Tagged:[1, servers (10), 20] Untagged:[1]"

    def test_default_vlan_access(self, make_port_config):
        rng = self._range(make_port_config, pvid=1, tagged=frozenset({1}), untagged=frozenset({1}))
        assert vlan_cell(rng, {1: "default"}) == "1"

    def test_no_vlans(self, make_port_config):
        rng = self._range(make_port_config, pvid=0, tagged=frozenset(), untagged=frozenset())
        assert vlan_cell(rng, {}) == ""


class TestTrunkCell:
    """Test trunk_cell rendering."""

    def test_no_lacp(self, make_port_config):
        rng = PortRange(first_port=1, last_port=1, config=make_port_config(1))
        assert trunk_cell(rng) == ""

    def test_named(self, make_port_config):
        rng = PortRange(first_port=1, last_port=1, config=make_port_config(1, lacp=LacpInfo(agg_id=26, agg_name="Trk1")))
        assert trunk_cell(rng) == "Trk1"

    def test_unknown_name(self, make_port_config):
        rng = PortRange(first_port=1, last_port=1, config=make_port_config(1, lacp=LacpInfo(agg_id=26)))
        assert trunk_cell(rng) == "Unknown"


class TestMarkdownFormatter:
    """Test MarkdownFormatter."""

    def test_contains_header(self, sample_report):
        output = MarkdownFormatter(sample_report()).format()
        assert "# Port Information: switch01" in output
        assert "| Port | Alias | VLAN(s) | Trunk |" in output

    def test_rows(self, sample_report):
        output = MarkdownFormatter(sample_report()).format()
        assert "| 1-3 |  | servers (10) |  |" in output
        assert "| 4 | uplink | Tagged:[dmz (30)] |  |" in output
        assert "| 5-6 |  | Tagged:[1, servers (10), clients (20)] Untagged:[1] | Trk1 |" in output

    def test_pipe_in_alias_escaped(self, sample_report, make_port_config):
        cfg = make_port_config(1, alias="a|b")
        report = sample_report(ranges=[PortRange(first_port=1, last_port=1, config=cfg)])
        assert "a\\|b" in MarkdownFormatter(report).format()

    def test_no_sys_name(self, sample_report):
        output = MarkdownFormatter(sample_report(sys_name="")).format()
        assert output.startswith("Port Information Table:")

    def test_max_port_cutoff(self, sample_report):
        """Ranges starting above max_port are hidden."""
        output = MarkdownFormatter(sample_report(), max_port=4).format()
        assert "| 4 |" in output
        assert "| 5-6 |" not in output


class TestHtmlFormatter:
    """Test HtmlFormatter."""

    def test_structure(self, sample_report):
        output = HtmlFormatter(sample_report()).format()
        assert output.startswith("<style>")
        assert '<table class="port-table">' in output
        assert "<th>VLAN(s)</th>" in output
        assert output.rstrip().endswith("</table>")

    def test_cells_escaped(self, sample_report, make_port_config):
        cfg = make_port_config(1, alias="<b>lab</b>")
        report = sample_report(ranges=[PortRange(first_port=1, last_port=1, config=cfg)])
        output = HtmlFormatter(report).format()
        assert "&lt;b&gt;lab&lt;/b&gt;" in output
        assert "<b>lab</b>" not in output

    def test_row_count(self, sample_report):
        output = HtmlFormatter(sample_report()).format()
        assert output.count("<tr>") == 4  # header + 3 ranges


class TestTerminalFormatter:
    """Test TerminalFormatter."""

    def test_contains_system_info(self, sample_report):
        output = TerminalFormatter(sample_report()).format()
        assert "switch01" in output
        assert "GS724T Smart Switch" in output
        assert "Ranges:  3" in output

    def test_contains_rows(self, sample_report):
        output = TerminalFormatter(sample_report()).format()
        assert "VLAN(s)" in output
        assert "uplink" in output
        assert "1-3" in output


class TestGetFormatter:
    """Test formatter lookup."""

    @pytest.mark.parametrize(
        "name,cls",
        [("markdown", MarkdownFormatter), ("HTML", HtmlFormatter), ("text", TerminalFormatter)],
    )
    def test_lookup(self, sample_report, name, cls):
        assert isinstance(get_formatter(name, sample_report()), cls)

    def test_unknown(self, sample_report):
        with pytest.raises(ValueError, match="Unknown output format"):
            get_formatter("pdf", sample_report())
