"""
Gauge Console Output
=====================

Rich-based console output for Gauge results: a colour-highlighted
assessment panel with a bit meter, the cutoff table and the per-entry
audit table. Tier colours run from red (very weak) to green (very
strong).

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.console import GaugeConsole
from shared.models import ScanResult
from gauge.analyzers.tiers import UNBOUNDED, CutoffTable
from gauge.core.models import AuditEntry, PasswordAssessment, QualityTier


# ===================================================================== #
#  Colour Maps
# ===================================================================== #

TIER_COLOURS: dict[QualityTier, str] = {
    QualityTier.VERY_WEAK: "bold red",
    QualityTier.WEAK: "bold dark_orange",
    QualityTier.MODERATE: "bold yellow",
    QualityTier.STRONG: "bold green_yellow",
    QualityTier.VERY_STRONG: "bold green",
}

_METER_WIDTH = 40


def tier_text(tier: QualityTier) -> Text:
    """Tier label styled with its colour."""
    return Text(tier.label.upper(), style=TIER_COLOURS.get(tier, "white"))


class GaugeConsoleOutput:
    """Console output formatters for Gauge results.

    Usage::

        console = GaugeConsole()
        output = GaugeConsoleOutput(console)
        output.display_assessment(assessment, table)
        output.display_audit(scan_result)

    With ``quiet`` set the results are still shown; only the closing
    audit summary line is dropped.
    """

    def __init__(self, console: Optional[GaugeConsole] = None, quiet: bool = False) -> None:
        self.console = console or GaugeConsole()
        self.quiet = quiet
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Single Password
    # ------------------------------------------------------------------ #

    def display_assessment(self, result: PasswordAssessment, table: CutoffTable) -> None:
        """Display one assessment with a bit meter and its breakdown.

        The meter is scaled to the largest finite cutoff of *table* and
        each cell takes the colour of the tier it falls in.

        Args:
            result: PasswordAssessment from the engine.
            table: Cutoff table the assessment was classified with.
        """
        self.console.section("Password Quality")

        meter = Text()
        meter.append("Entropy: ", style="bold")
        meter.append(f"{result.bits} bits  ")
        meter.append("[", style="dim")
        meter.append_text(self._bit_meter(result.bits, table))
        meter.append("]  ", style="dim")
        meter.append_text(tier_text(result.tier))

        self._rich.print(Panel(meter, title="Quality Meter", border_style="cyan"))

        breakdown = result.breakdown
        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
        )
        tbl.add_column("Property", style="bold")
        tbl.add_column("Value")

        tbl.add_row("Password", Text(result.password_masked))
        tbl.add_row("Length", str(result.length))
        tbl.add_row(
            "Character Classes",
            ", ".join(cls.value for cls in breakdown.char_classes) or "-",
        )
        tbl.add_row("Pool Size", str(breakdown.pool_size))
        tbl.add_row("Pool Estimate", f"{breakdown.pool_bits:.2f} bits")
        tbl.add_row("Pattern Estimate", f"{breakdown.structural_bits:.2f} bits")
        tbl.add_row("Reported", f"{result.bits} bits")

        self._rich.print(tbl)

        if breakdown.matches:
            self._rich.print()
            self._rich.print("[bold]Patterns Detected:[/bold]")
            for match in breakdown.matches:
                line = Text("  ")
                line.append("⚠", style="yellow")
                line.append(
                    f" [{match.kind}] {match.detail} at {match.start}-{match.end - 1} "
                    f"({match.bits:.1f} bits)"
                )
                self._rich.print(line)

    def display_classification(self, bits: int, tier: QualityTier) -> None:
        line = Text()
        line.append(f"{bits} bits", style="bold")
        line.append(" → ")
        line.append_text(tier_text(tier))
        self._rich.print(line)

    # ------------------------------------------------------------------ #
    #  Cutoff Table
    # ------------------------------------------------------------------ #

    def display_table(self, table: CutoffTable) -> None:
        """Display the active cutoff table as inclusive bit ranges."""
        self.console.section("Cutoff Table")

        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=False,
        )
        tbl.add_column("Tier")
        tbl.add_column("Bits", justify="right")

        for lower, upper, tier in table.bounds():
            span = f"{lower}+" if upper is UNBOUNDED else f"{lower}-{upper}"
            tbl.add_row(tier_text(tier), span)

        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Audit
    # ------------------------------------------------------------------ #

    def display_audit(self, result: ScanResult) -> None:
        """Display per-entry rows, tier counts and findings of an audit."""
        self.console.section(f"Audit: {result.target}")

        entries = [AuditEntry(**row) for row in result.metadata.get("entries", [])]
        tbl = Table(
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=False,
        )
        tbl.add_column("#", style="dim", justify="right")
        tbl.add_column("Label")
        tbl.add_column("Password")
        tbl.add_column("Length", justify="right")
        tbl.add_column("Bits", justify="right")
        tbl.add_column("Tier")

        for idx, entry in enumerate(entries, start=1):
            tbl.add_row(
                str(idx),
                Text(entry.label or "-"),
                Text(entry.password_masked),
                str(entry.length),
                Text(str(entry.bits), style=TIER_COLOURS[entry.tier]),
                tier_text(entry.tier),
            )
        self._rich.print(tbl)

        counts = result.metadata.get("tier_counts", {})
        if counts:
            summary = Text()
            for value, count in counts.items():
                tier = QualityTier(value)
                summary.append(f"{tier.label}: ", style=TIER_COLOURS[tier])
                summary.append(f"{count}  ")
            self._rich.print(Panel(summary, title="Tier Counts", border_style="cyan"))

        self.console.findings_table(result.findings)
        if not self.quiet:
            elapsed = result.duration_seconds
            suffix = f" ({elapsed:.3f}s)" if elapsed is not None else ""
            self.console.info(f"{result.summary}{suffix}")

    @staticmethod
    def _bit_meter(bits: int, table: CutoffTable) -> Text:
        finite = [cutoff for cutoff, _ in table if cutoff is not UNBOUNDED]
        scale = max(finite) if finite and max(finite) > 0 else 128
        # One extra cell so the top tier is reachable on the meter
        scale = scale * (_METER_WIDTH + 1) / _METER_WIDTH
        filled = max(0, min(_METER_WIDTH, int(bits / scale * _METER_WIDTH)))

        meter = Text()
        for i in range(_METER_WIDTH):
            if i < filled:
                cell_bits = (i + 1) * scale / _METER_WIDTH
                meter.append("█", style=TIER_COLOURS[table.classify(cell_bits)])
            else:
                meter.append("░", style="dim")
        return meter
