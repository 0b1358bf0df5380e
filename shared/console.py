"""
Gauge Console Interface
========================

Rich-powered console abstraction shared by the Gauge CLI.

The class wraps :class:`rich.console.Console` and adds helpers for the
banner, section headers, status messages, tables and the findings
table, all with one consistent theme.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_GAUGE_THEME = Theme(
    {
        "gauge.banner": "bold bright_cyan",
        "gauge.section": "bold bright_magenta",
        "gauge.success": "bold green",
        "gauge.warning": "bold yellow",
        "gauge.error": "bold red",
        "gauge.info": "bold bright_blue",
        "gauge.dim": "dim white",
        "gauge.critical": "bold white on red",
        "gauge.high": "bold red",
        "gauge.medium": "bold yellow",
        "gauge.low": "bold bright_cyan",
        "gauge.informational": "bold bright_blue",
    }
)

_BANNER_ART = r"""[bright_cyan]
   ____    _   _   _  ____ _____
  / ___|  / \ | | | |/ ___| ____|
 | |  _  / _ \| | | | |  _|  _|
 | |_| |/ ___ \ |_| | |_| | |___
  \____/_/   \_\___/ \____|_____|
[/bright_cyan]"""

_TAGLINE = "Password Quality Estimator"

_SEVERITY_STYLES: dict[str, str] = {
    "CRITICAL": "gauge.critical",
    "HIGH": "gauge.high",
    "MEDIUM": "gauge.medium",
    "LOW": "gauge.low",
    "INFO": "gauge.informational",
}


class GaugeConsole:
    """Unified console interface for the Gauge CLI.

    Usage::

        con = GaugeConsole()
        con.banner()
        con.section("Audit")
        con.success("Audit complete")
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (library / test mode).
            record: Enable Rich recording for export.
        """
        self._console = Console(
            theme=_GAUGE_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    def banner(self, version: str = "1.0.0") -> None:
        """Display the Gauge banner with the version underneath."""
        subtitle = (
            f"[gauge.banner]{_TAGLINE}[/gauge.banner]\n"
            f"[gauge.dim]Version: {version}[/gauge.dim]"
        )
        panel = Panel(
            Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
            border_style="bright_cyan",
            padding=(0, 2),
        )
        self._console.print(panel)

    def section(self, title: str) -> None:
        """Print a section header rule."""
        self._console.rule(f"  {title}  ", style="gauge.section", characters="─")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(f"[gauge.success][✔] SUCCESS:[/gauge.success] {escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[gauge.error][✘] ERROR:[/gauge.error] {escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[gauge.info][ℹ] INFO:[/gauge.info] {escape(message)}")

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    def findings_table(self, findings: Sequence[Any]) -> None:
        """Render findings with severity colouring.

        Expects objects with ``severity``, ``title`` and ``description``
        attributes (e.g. :class:`shared.models.Finding`).
        """
        if not findings:
            self.success("No weak passwords found.")
            return

        tbl = Table(
            title="Findings",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        tbl.add_column("#", style="dim", width=4, justify="right")
        tbl.add_column("Severity", width=10)
        tbl.add_column("Title")
        tbl.add_column("Description", ratio=2)

        for idx, finding in enumerate(findings, start=1):
            sev = getattr(finding, "severity", "INFO")
            sev_name = sev.value if hasattr(sev, "value") else str(sev).upper()
            sev_style = _SEVERITY_STYLES.get(sev_name, "")
            tbl.add_row(
                str(idx),
                Text(sev_name, style=sev_style),
                Text(str(getattr(finding, "title", ""))),
                Text(str(getattr(finding, "description", ""))),
            )

        self._console.print(tbl)

