"""
Gauge CLI
==========

Click-based command-line interface for the Gauge password quality
estimator. Provides subcommands for estimating a single password,
classifying a bit count, showing the active cutoff table and auditing a
list of credentials.

Usage::

    python -m gauge estimate "Tr0ub4dor&3xQ9"
    python -m gauge classify 72
    python -m gauge tiers
    python -m gauge audit passwords.txt
    python -m gauge -o json audit - < passwords.txt

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

import json
import sys
from typing import Any, Iterator, Optional, TextIO

import click

from shared.config import GaugeConfig
from shared.console import GaugeConsole

from gauge import __version__
from gauge.analyzers.tiers import UNBOUNDED, ConfigurationError
from gauge.core.engine import GaugeEngine
from gauge.output.console import GaugeConsoleOutput


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a Gauge configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(["console", "json"]),
    default="console",
    help="Output format.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and informational output.",
)
@click.version_option(__version__, prog_name="gauge")
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], output: str, quiet: bool) -> None:
    """Gauge -- Password Quality Estimator.

    Estimate password entropy in bits and classify it into a quality
    tier, from very weak to very strong.
    """
    ctx.ensure_object(dict)

    console = GaugeConsole()
    ctx.obj["console"] = console
    ctx.obj["output_format"] = output

    try:
        gauge_config = GaugeConfig.load(config)
        engine = GaugeEngine(gauge_config)
    except (ConfigurationError, FileNotFoundError) as exc:
        _fail(ctx, str(exc))

    ctx.obj["config"] = gauge_config
    ctx.obj["engine"] = engine
    ctx.obj["display"] = GaugeConsoleOutput(console, quiet=quiet)

    if not quiet and output == "console":
        console.banner(version=__version__)


def _fail(ctx: click.Context, message: str) -> None:
    """Report *message* and exit with the usage-error status.

    JSON mode keeps stdout clean and reports on stderr instead.
    """
    if ctx.obj["output_format"] == "json":
        click.echo(f"Error: {message}", err=True)
    else:
        ctx.obj["console"].error(message)
    sys.exit(2)


def _emit_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _read_entries(stream: TextIO, delimiter: str) -> Iterator[tuple[str, str]]:
    """Yield ``(label, password)`` pairs from a credential list.

    Lines without the delimiter are passwords labelled by line number.
    Blank lines are skipped; only the line terminator is stripped so
    leading and trailing spaces stay part of the password.
    """
    for lineno, line in enumerate(stream, start=1):
        line = line.rstrip("\r\n")
        if not line:
            continue
        if delimiter in line:
            label, password = line.split(delimiter, 1)
            yield label.strip(), password
        else:
            yield f"line {lineno}", line


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("password")
@click.pass_context
def estimate(ctx: click.Context, password: str) -> None:
    """Estimate the entropy of PASSWORD and classify it.

    Prints the estimate in whole bits, the quality tier and the
    patterns that lowered the estimate.
    """
    engine: GaugeEngine = ctx.obj["engine"]
    display: GaugeConsoleOutput = ctx.obj["display"]

    assessment = engine.assess(password)

    if ctx.obj["output_format"] == "json":
        _emit_json(assessment.model_dump(mode="json"))
    else:
        display.display_assessment(assessment, engine.table)


@cli.command()
@click.argument("bits", type=click.IntRange(min=0))
@click.pass_context
def classify(ctx: click.Context, bits: int) -> None:
    """Classify a non-negative BITS estimate under the active cutoffs."""
    engine: GaugeEngine = ctx.obj["engine"]
    tier = engine.classify(bits)

    if ctx.obj["output_format"] == "json":
        _emit_json({"bits": bits, "tier": tier.value})
    else:
        ctx.obj["display"].display_classification(bits, tier)


@cli.command()
@click.pass_context
def tiers(ctx: click.Context) -> None:
    """Show the active cutoff table."""
    engine: GaugeEngine = ctx.obj["engine"]

    if ctx.obj["output_format"] == "json":
        _emit_json([
            {
                "tier": tier.value,
                "min_bits": lower,
                "max_bits": None if upper is UNBOUNDED else upper,
            }
            for lower, upper, tier in engine.table.bounds()
        ])
    else:
        ctx.obj["display"].display_table(engine.table)


@cli.command()
@click.argument("file", type=click.File("r", encoding="utf-8"))
@click.option(
    "--delimiter", "-d",
    default="\t",
    show_default="TAB",
    help="Separator between label and password.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit with status 1 when any password is flagged.",
)
@click.pass_context
def audit(ctx: click.Context, file: TextIO, delimiter: str, strict: bool) -> None:
    """Audit a credential list read from FILE ('-' for stdin).

    Each line holds a password, or a label and a password separated by
    the delimiter. Passwords are masked in every output.
    """
    engine: GaugeEngine = ctx.obj["engine"]
    display: GaugeConsoleOutput = ctx.obj["display"]

    if not delimiter:
        raise click.BadParameter("delimiter must not be empty", param_hint="--delimiter")

    target = str(getattr(file, "name", "") or "<stdin>")
    try:
        result = engine.audit(_read_entries(file, delimiter), target=target)
    except UnicodeDecodeError as exc:
        _fail(ctx, f"{target} is not valid UTF-8 (byte offset {exc.start})")

    if ctx.obj["output_format"] == "json":
        _emit_json(result.model_dump(mode="json"))
    else:
        display.display_audit(result)

    if strict and result.findings:
        sys.exit(1)


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the Gauge CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
