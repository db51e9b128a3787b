"""Console entry point.

Examples:
  vlanreport 10.1.0.23 -c public

  vlanreport 10.1.0.23 --format html -o ports.html --override-lacp 26:21,22
"""

from __future__ import annotations

import os
import sys

from tabulate import tabulate

from vlanreport import __version__, configure_logging
from vlanreport import glogger


def _print_startup_banner() -> None:
    startup_rows = [
        ["version", __version__],
    ]

    for var in ("GITHUB_REF", "GITHUB_SHA", "BUILDTIME"):
        val = os.environ.get(var)
        if val and not val.endswith("_is_undefined"):
            startup_rows.append([var, val])

    table_str = tabulate(startup_rows, tablefmt="mixed_grid")
    lines = table_str.split("\n")
    table_width = len(lines[0])
    title = "vlanreport starting up"
    title_border = "┍" + "━" * (table_width - 2) + "┑"
    title_row = "│ " + title.center(table_width - 4) + " │"
    separator = lines[0].replace("┍", "┝").replace("┑", "┥").replace("┯", "┿")

    glogger.opt(raw=True).debug(
        "\n{}\n", title_border + "\n" + title_row + "\n" + separator + "\n" + "\n".join(lines[1:])
    )


def main() -> None:
    """Main entry point: configure logging and run the CLI.

    The startup banner is debug output and only shown with ``-v``/``--verbose``.
    """
    argv = sys.argv[1:]
    configure_logging()
    if "-v" in argv or "--verbose" in argv:
        _print_startup_banner()

    from vlanreport.cli import main as cli_main

    cli_main(argv)


if __name__ == "__main__":
    main()
