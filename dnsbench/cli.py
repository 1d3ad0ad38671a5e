"""
Command-line interface for DNS Bench.

Provides a CLI for benchmarking DNS resolvers with various options
and output formats.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from . import __version__
from .exceptions import ConfigurationError, OutputError
from .output import ConsoleOutput, CSVOutput, JSONOutput, RichConsoleOutput
from .resolvers import (
    RESOLVERS,
    DEFAULT_RESOLVERS,
    default_resolver_spec,
    list_resolvers,
    require_resolvers,
)
from .runner import TestRunner


logger = logging.getLogger(__name__)

DURATION_UNITS = {
    "us": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
}

DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*(us|ms|s|m)?\s*$")


class DurationParamType(click.ParamType):
    """Durations such as ``1500ms``, ``2s`` or ``1.5``; converted to seconds."""

    name = "duration"

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            seconds = float(value)
        else:
            match = DURATION_RE.match(value)
            if not match:
                self.fail(f"{value!r} is not a valid duration (e.g. 1500ms, 2s)", param, ctx)
            number, unit = match.groups()
            seconds = float(number) * DURATION_UNITS[unit or "s"]

        if seconds <= 0:
            self.fail(f"{value!r} must be greater than zero", param, ctx)
        return seconds


DURATION = DurationParamType()


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable debug logging.
    """
    log_level = logging.DEBUG if verbose else logging.WARNING
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def create_progress_callback():
    """Create a progress display on stderr and a callback that drives it."""
    console = Console(stderr=True)
    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
        transient=True,
    )

    task_id = None

    def callback(message: str, current: int, total: int):
        nonlocal task_id
        if task_id is None:
            task_id = progress.add_task(message, total=total)
        progress.update(task_id, description=message, completed=current)

    return progress, callback


@click.group(context_settings={"auto_envvar_prefix": "DNSBENCH"})
@click.version_option(__version__)
def main():
    """
    DNS Bench - DNS resolver latency and reliability benchmarking.

    Sends repeated queries to each resolver and reports min/avg/median/p95/max
    latency and success rate.
    """


@main.command()
@click.option(
    "--domain", "-d",
    default="example.com",
    show_default=True,
    help="Domain to resolve",
)
@click.option(
    "--count", "-n",
    type=click.IntRange(min=1),
    default=10,
    show_default=True,
    help="Number of queries per resolver",
)
@click.option(
    "--timeout",
    type=DURATION,
    default="1500ms",
    show_default=True,
    help="Per-query timeout (e.g. 1500ms, 2s)",
)
@click.option(
    "--network",
    default="ip4",
    show_default=True,
    help="Network: ip4 or ip6 (A vs AAAA records); anything else means A",
)
@click.option(
    "--cold/--warm",
    default=False,
    show_default=True,
    help="Cold mode: use a random subdomain for each query to bust resolver caches",
)
@click.option(
    "--resolvers", "-r",
    default=default_resolver_spec(),
    show_default=True,
    help="Resolvers as Name=Host[:Port][,Name=Host[:Port]...]",
)
@click.option(
    "--out", "-o",
    type=click.Path(dir_okay=False),
    help="Write results to this file (CSV, or JSON for a .json suffix)",
)
@click.option(
    "--parallel", "-p",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of resolvers benchmarked at the same time",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Output results as JSON to stdout",
)
@click.option(
    "--plain",
    is_flag=True,
    help="Plain text table instead of rich formatting",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress progress and report output",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable debug logging",
)
def run(
    domain: str,
    count: int,
    timeout: float,
    network: str,
    cold: bool,
    resolvers: str,
    out: Optional[str],
    parallel: int,
    as_json: bool,
    plain: bool,
    quiet: bool,
    verbose: bool,
):
    """
    Run DNS benchmark tests.

    Examples:

    \b
      # Quick test with default resolvers
      dnsbench run

    \b
      # Compare two resolvers with 20 uncached queries each
      dnsbench run -r "Cloudflare=1.1.1.1,Local=192.168.1.1:5353" -n 20 --cold

    \b
      # AAAA lookups, results exported to CSV
      dnsbench run --network ip6 -o results.csv
    """
    setup_logging(verbose)

    try:
        targets = require_resolvers(resolvers)
        runner = TestRunner(targets, timeout=timeout, network=network)
    except ConfigurationError as e:
        click.echo(e.message, err=True)
        sys.exit(1)

    logger.debug("Benchmarking %d resolvers: %s", len(targets), [t.address for t in targets])

    kwargs = dict(domain=domain, count=count, cold=cold, concurrency=parallel)

    if quiet:
        results = runner.run_benchmark(**kwargs)
    else:
        progress_ctx, progress_callback = create_progress_callback()
        with progress_ctx:
            results = runner.run_benchmark(progress_callback=progress_callback, **kwargs)

    if as_json:
        click.echo(JSONOutput.format(results))
    elif not quiet:
        if plain:
            click.echo(ConsoleOutput.format(results))
        else:
            RichConsoleOutput.print(results)

    if out:
        path = Path(out)
        try:
            if path.suffix.lower() == ".json":
                JSONOutput.save(results, path)
            else:
                CSVOutput.save(results, path)
        except OutputError as e:
            click.echo(f"Write error: {e.message}", err=True)
            sys.exit(1)
        if not quiet:
            click.echo(f"\nResults written to: {path}", err=as_json)


@main.command()
def list_available():
    """List the built-in DNS resolvers."""
    from rich import box
    from rich.table import Table

    console = Console()
    table = Table(
        title="Available DNS Resolvers",
        box=box.ROUNDED,
        header_style="bold cyan",
    )

    table.add_column("Name", style="green")
    table.add_column("IPv4", style="cyan")
    table.add_column("IPv6", style="cyan")
    table.add_column("Description")

    for key in sorted(list_resolvers()):
        resolver = RESOLVERS[key]
        table.add_row(
            key,
            resolver.ipv4,
            resolver.ipv6 or "",
            resolver.description or "",
        )

    console.print(table)
    console.print()
    console.print("[dim]Default resolvers:[/dim]", ", ".join(DEFAULT_RESOLVERS))


if __name__ == "__main__":
    main()
