"""
Output formatting for DNS benchmark results.

Provides multiple output formats:
- Plain text: fixed-width table, one row per resolver
- Rich: colored terminal tables and summaries
- CSV: summary section plus raw per-query rows
- JSON: machine-readable full results
"""

import csv
import json
from io import StringIO
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .exceptions import OutputError
from .models import BenchmarkResult
from .statistics import StatisticsEngine


NOT_AVAILABLE = "--"

SUMMARY_HEADER = [
    "resolver",
    "count",
    "successes",
    "min_ms",
    "avg_ms",
    "median_ms",
    "p95_ms",
    "max_ms",
    "errors",
]

RAW_HEADER = ["resolver", "run_index", "duration_ms", "error"]

ERROR_SEPARATOR = " | "


def format_ms(value: Optional[float]) -> str:
    """Latency for display, or a placeholder when not available."""
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.1f}ms"


def format_timeout(seconds: float) -> str:
    return f"{seconds * 1000:g}ms"


def csv_ms(value: Optional[float]) -> str:
    if value is None:
        return ""
    return f"{value:.3f}"


def _write_file(path: Path, content: str) -> None:
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise OutputError(f"Could not write {path}: {e}", path=str(path)) from e


def header_line(result: BenchmarkResult) -> str:
    return (
        f"Target: {result.domain} | Runs: {result.count} | "
        f"Timeout: {format_timeout(result.timeout)} | "
        f"Network: {result.network} | Mode: {result.mode}"
    )


class ConsoleOutput:
    """Plain text console output."""

    @staticmethod
    def format(result: BenchmarkResult) -> str:
        """
        Format benchmark result for console display.

        Args:
            result: BenchmarkResult to format

        Returns:
            Report text with one row per resolver and its errors below it
        """
        lines = [
            "DNS Benchmark",
            header_line(result),
            "-" * 80,
            "%-12s  %6s  %6s  %6s  %6s  %6s  %9s" % (
                "Resolver", "Min", "Avg", "Med", "p95", "Max", "Success%",
            ),
            "-" * 72,
        ]

        for run in result.results:
            s = run.stats
            lines.append("%-12s  %6s  %6s  %6s  %6s  %6s  %8.1f%%" % (
                run.target.name,
                format_ms(s.min_ms),
                format_ms(s.avg_ms),
                format_ms(s.median_ms),
                format_ms(s.p95_ms),
                format_ms(s.max_ms),
                s.success_rate,
            ))
            for error in s.errors:
                lines.append(f"  ! {error}")

        return "\n".join(lines)

    @staticmethod
    def print(result: BenchmarkResult) -> None:
        """Print benchmark result to console."""
        print(ConsoleOutput.format(result))


class RichConsoleOutput:
    """Rich library console output with colors and tables."""

    @staticmethod
    def print(result: BenchmarkResult, console: Optional[Console] = None) -> None:
        """Print benchmark result using rich library."""
        console = console or Console()

        console.print()
        console.print(Panel.fit(
            "[bold blue]DNS Benchmark[/bold blue]",
            border_style="blue",
        ))
        console.print(f"  [dim]{escape(header_line(result))}[/dim]")
        console.print(f"  [dim]Duration:[/dim] {result.duration_seconds:.1f}s")
        console.print()

        table = Table(
            title="Resolver Performance",
            box=box.ROUNDED,
            header_style="bold magenta",
        )

        table.add_column("Resolver", style="cyan")
        table.add_column("Address", style="dim")
        table.add_column("Min", justify="right")
        table.add_column("Avg", justify="right", style="green")
        table.add_column("Med", justify="right")
        table.add_column("p95", justify="right", style="yellow")
        table.add_column("Max", justify="right")
        table.add_column("Success%", justify="right")

        for index, run in enumerate(result.results):
            s = run.stats
            last = index == len(result.results) - 1
            table.add_row(
                escape(run.target.name),
                run.target.address,
                format_ms(s.min_ms),
                format_ms(s.avg_ms),
                format_ms(s.median_ms),
                format_ms(s.p95_ms),
                format_ms(s.max_ms),
                f"{s.success_rate:.1f}%",
                end_section=not s.errors and not last,
            )
            for position, error in enumerate(s.errors, start=1):
                table.add_row(
                    f"  [red]![/red] {escape(error)}",
                    style="dim",
                    end_section=position == len(s.errors) and not last,
                )

        console.print(table)

        console.print()

        comparison = StatisticsEngine.compare_resolvers(result.results)
        winner = comparison.get("winner")

        if winner:
            console.print(Panel(
                f"[bold green]Fastest: {escape(winner.target.name)}[/bold green]\n"
                f"Average Latency: {winner.stats.avg_ms:.1f}ms | "
                f"Success Rate: {winner.stats.success_rate:.1f}%",
                border_style="green",
            ))
        else:
            console.print(Panel(
                "[bold yellow]No successful queries - cannot determine winner[/bold yellow]",
                border_style="yellow",
            ))

        console.print()


class CSVOutput:
    """CSV output formatter."""

    @staticmethod
    def format(result: BenchmarkResult) -> str:
        """
        Format benchmark result as CSV.

        The summary section and the raw per-query section are separated
        by a blank line.
        """
        output = StringIO()
        writer = csv.writer(output)

        writer.writerow(SUMMARY_HEADER)
        for run in result.results:
            s = run.stats
            writer.writerow([
                run.target.name,
                s.count,
                s.success_count,
                csv_ms(s.min_ms),
                csv_ms(s.avg_ms),
                csv_ms(s.median_ms),
                csv_ms(s.p95_ms),
                csv_ms(s.max_ms),
                ERROR_SEPARATOR.join(s.errors),
            ])

        writer.writerow([])

        writer.writerow(RAW_HEADER)
        for run in result.results:
            for index, outcome in enumerate(run.outcomes):
                writer.writerow([
                    run.target.name,
                    index,
                    f"{outcome.elapsed_ms:.3f}",
                    outcome.error or "",
                ])

        return output.getvalue()

    @staticmethod
    def read_summary(text: str) -> list[dict]:
        """
        Parse the summary section of a CSV report.

        Returns one dict per resolver; latency fields are floats or None,
        ``errors`` is a list of messages.
        """
        reader = csv.reader(StringIO(text))
        header = next(reader, None)
        if header != SUMMARY_HEADER:
            raise ValueError(f"Unexpected CSV header: {header}")

        rows = []
        for row in reader:
            if not row:
                break
            record = dict(zip(SUMMARY_HEADER, row))
            rows.append({
                "resolver": record["resolver"],
                "count": int(record["count"]),
                "successes": int(record["successes"]),
                **{
                    key: float(record[key]) if record[key] else None
                    for key in ("min_ms", "avg_ms", "median_ms", "p95_ms", "max_ms")
                },
                "errors": record["errors"].split(ERROR_SEPARATOR) if record["errors"] else [],
            })
        return rows

    @staticmethod
    def save(result: BenchmarkResult, path: Path) -> None:
        """Save benchmark result to a CSV file."""
        _write_file(path, CSVOutput.format(result))


class JSONOutput:
    """JSON output formatter."""

    @staticmethod
    def format(result: BenchmarkResult, indent: int = 2) -> str:
        """
        Format benchmark result as JSON.

        Args:
            result: BenchmarkResult to format
            indent: JSON indentation level

        Returns:
            JSON string
        """
        def rounded(value: Optional[float]) -> Optional[float]:
            return None if value is None else round(value, 3)

        data = {
            "metadata": {
                "started_at": result.started_at.isoformat(),
                "completed_at": result.completed_at.isoformat(),
                "duration_seconds": result.duration_seconds,
                "domain": result.domain,
                "count": result.count,
                "timeout_ms": result.timeout * 1000,
                "network": result.network,
                "mode": result.mode.lower(),
            },
            "resolvers": [],
        }

        for run in result.results:
            s = run.stats
            data["resolvers"].append({
                "name": run.target.name,
                "host": run.target.host,
                "port": run.target.port,
                "queries": {
                    "total": s.count,
                    "successful": s.success_count,
                    "failed": s.failure_count,
                    "success_rate_pct": round(s.success_rate, 2),
                },
                "latency_ms": {
                    "min": rounded(s.min_ms),
                    "max": rounded(s.max_ms),
                    "avg": rounded(s.avg_ms),
                    "median": rounded(s.median_ms),
                    "p95": rounded(s.p95_ms),
                },
                "errors": list(s.errors),
                "samples": [
                    {
                        "run_index": index,
                        "query_name": outcome.query_name,
                        "duration_ms": round(outcome.elapsed_ms, 3),
                        "error": outcome.error,
                    }
                    for index, outcome in enumerate(run.outcomes)
                ],
            })

        comparison = StatisticsEngine.compare_resolvers(result.results)
        if comparison["winner"]:
            data["winner"] = {
                "name": comparison["winner"].target.name,
                "avg_latency_ms": round(comparison["winner"].stats.avg_ms, 3),
                "improvements_pct": {
                    k: round(v, 2) for k, v in comparison.get("improvements", {}).items()
                },
            }

        return json.dumps(data, indent=indent)

    @staticmethod
    def save(result: BenchmarkResult, path: Path) -> None:
        """Save benchmark result to JSON file."""
        _write_file(path, JSONOutput.format(result))
