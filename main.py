#!/usr/bin/env python3
"""Idea Terminal - CLI Entry Point.

Turn raw idea submission logs into a daily report of categories,
clusters, recurring problems and signal scores.
"""

import logging
import sys
from collections import Counter
from datetime import datetime, time, timedelta, timezone
from pathlib import Path

# Check for required dependencies
def check_dependencies():
    """Check if required dependencies are installed."""
    missing = []

    try:
        import click
    except ImportError:
        missing.append("click")

    try:
        import rich
    except ImportError:
        missing.append("rich")

    try:
        import yaml
    except ImportError:
        missing.append("pyyaml")

    try:
        from dotenv import load_dotenv
    except ImportError:
        missing.append("python-dotenv")

    if missing:
        print("Missing required dependencies:")
        for dep in missing:
            print(f"  - {dep}")
        print("\nInstall them with:")
        print(f"  pip install {' '.join(missing)}")
        print("\nOr install the project:")
        print("  pip install -e .")
        sys.exit(1)


# Only import heavy dependencies after checking
check_dependencies()

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from idea_terminal.config import get_config, reload_config, ensure_directories
from idea_terminal.dates import date_string, format_percentage_change, get_log_filename, parse_log_date
from idea_terminal.analysis import (
    ReportNotFoundError,
    build_daily_report,
    save_report,
    load_report,
)
from idea_terminal.parsing import parse_log_content, parse_idea_generator_content
from idea_terminal.sources import LogSource


console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging once for a CLI run."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def resolve_report_time(day: str | None) -> datetime:
    """End of the report window: now, or the last second of ``day``."""
    if not day:
        return datetime.now(timezone.utc).replace(tzinfo=None)
    try:
        parsed = datetime.strptime(day, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"Expected YYYY-MM-DD, got {day!r}", param_hint="--date")
    return datetime.combine(parsed, time(23, 59, 59))


def print_report(report: dict) -> None:
    """Render a report dict as tables."""
    metadata = report.get("metadata", {})
    signal = report.get("signalScore", {})
    validation = report.get("validation", {})

    console.print(Panel(
        f"[bold]{metadata.get('totalIdeas', 0)}[/bold] unique ideas, "
        f"[bold]{metadata.get('totalChartEntries', 0)}[/bold] chart entries\n"
        f"This week: {metadata.get('currentWeekCount', 0)} ideas, "
        f"{metadata.get('currentWeekChartCount', 0)} chart entries\n"
        f"Advice: {metadata.get('adviceEntries', 0)} entries, "
        f"Base44 clicks: {metadata.get('base44Clicks', 0)}\n"
        f"Signal score: avg {signal.get('average', 0)}, top decile {signal.get('topDecile', 0)}",
        title=f"Idea Terminal - {report.get('date')}",
        border_style="cyan",
    ))

    table = Table(title="Categories", show_header=True, header_style="bold magenta")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("WoW", justify="right")
    for cat in report.get("categories", [])[:10]:
        table.add_row(escape(cat["name"]), str(cat["count"]), format_percentage_change(cat["delta"]))
    console.print(table)

    table = Table(title="Clusters", show_header=True, header_style="bold magenta")
    table.add_column("Cluster", style="cyan")
    table.add_column("Ideas", justify="right")
    table.add_column("WoW", justify="right")
    for cluster in report.get("clusters", []):
        table.add_row(escape(cluster["name"]), str(cluster["count"]), format_percentage_change(cluster["wow"]))
    console.print(table)

    source = metadata.get("problemHeatmapSource", "ideas")
    title = "Problem Heatmap" if source != "chart" else "Problem Heatmap (friction areas from chart scores)"
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Problem", style="cyan", max_width=60)
    table.add_column("Count", justify="right")
    table.add_column("WoW", justify="right")
    for bucket in report.get("problemHeatmap", []):
        table.add_row(escape(bucket["problem"]), str(bucket["count"]), format_percentage_change(bucket["delta"]))
    console.print(table)

    rules = signal.get("rules", {})
    console.print(
        f"\n[bold]Rules:[/bold] clear problem {rules.get('clearProblem', 0)}%, "
        f"named competitor {rules.get('namedCompetitor', 0)}%, "
        f"concise description {rules.get('conciseDescription', 0)}%"
    )
    console.print(
        f"[bold]Validation:[/bold] "
        + ", ".join(f"{key} {value * 100:.1f}%" for key, value in validation.items())
    )


@click.group()
@click.version_option(version="0.1.0", prog_name="idea-terminal")
@click.option("--config", "-c", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False), help="Config file (YAML)")
def cli(config_path: str | None):
    """Idea Terminal - Daily analytics over idea submission logs."""
    if config_path:
        reload_config(config_path)


@cli.command()
def init():
    """Initialize Idea Terminal (create log and report directories)."""
    console.print("[bold]Initializing Idea Terminal...[/bold]\n")

    config = get_config()
    ensure_directories(config)
    console.print(f"[green]✓[/green] Log directory: {config.sources.directory}")
    console.print(f"[green]✓[/green] Report directory: {config.output.directory}")

    console.print("\n[bold green]Initialization complete![/bold green]")


@cli.command()
@click.option("--date", "-d", "day", default=None, help="Report date (YYYY-MM-DD), defaults to today")
@click.option("--sources", "-s", default=None, help="Directory holding the log files")
@click.option("--output", "-o", default=None, help="Report output directory")
@click.option("--days", default=None, type=int, help="Number of daily logs to read")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def collect(day: str | None, sources: str | None, output: str | None, days: int | None, verbose: bool):
    """Build and save the daily report."""
    setup_logging(verbose)
    config = get_config()
    now = resolve_report_time(day)

    source = LogSource(sources or config.sources.directory, config)
    console.print(f"[bold]Reading logs from[/bold] {source.directory}")
    inputs = source.collect_inputs(now, days)

    report = build_daily_report(inputs, config, now)
    path = save_report(report, output or config.output.directory)

    print_report(report.to_dict())
    console.print(f"\n[green]✓[/green] Report saved to {path}")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--date", "-d", "day", default=None, help="Stamp ideas with this date (YYYY-MM-DD)")
@click.option("--limit", "-l", default=20, type=int, help="Number of ideas to show")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def parse(file: str, day: str | None, limit: int, verbose: bool):
    """Parse an idea log and show what each line became."""
    setup_logging(verbose)
    content = Path(file).read_text(encoding="utf-8", errors="replace")
    ideas = parse_log_content(content, day)

    if not ideas:
        console.print("[yellow]No ideas found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Format", style="cyan")
    table.add_column("Title", max_width=40)
    table.add_column("Category")
    table.add_column("Problem", max_width=40)

    for i, idea in enumerate(ideas[:limit], 1):
        table.add_row(str(i), idea.source_format, escape(idea.title), escape(idea.category), escape(idea.problem or "-"))

    console.print(table)

    formats = Counter(idea.source_format for idea in ideas)
    summary = ", ".join(f"{name}: {count}" for name, count in formats.most_common())
    console.print(f"\n[bold]{len(ideas)} ideas[/bold] ({summary})")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def generator(file: str, verbose: bool):
    """Parse an Idea Generator log and show the entries that pass cleaning."""
    setup_logging(verbose)
    content = Path(file).read_text(encoding="utf-8", errors="replace")
    entries = parse_idea_generator_content(content)

    if not entries:
        console.print("[yellow]No clean Idea Generator entries found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Industry", max_width=25)
    table.add_column("Problem", max_width=40)
    table.add_column("Customer", max_width=25)
    table.add_column("Ideas", justify="right")

    for entry in entries:
        table.add_row(entry.date, escape(entry.industry), escape(entry.problem), escape(entry.customer), str(len(entry.ideas)))

    console.print(table)
    console.print(f"\n[bold]{len(entries)} entries[/bold]")


@cli.command()
@click.argument("day")
@click.option("--output", "-o", default=None, help="Report directory")
def show(day: str, output: str | None):
    """Show a saved report."""
    config = get_config()
    try:
        report = load_report(output or config.output.directory, day)
    except ReportNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    print_report(report)


@cli.command()
def check():
    """Check configuration and log files."""
    console.print("\n[bold]Configuration Check[/bold]\n")

    config = get_config()
    directory = Path(config.sources.directory)

    if directory.exists():
        console.print(f"[green]✓[/green] Log directory: {directory}")
    else:
        console.print(f"[red]✗[/red] Log directory: {directory} (run init)")

    for label, name in (
        ("Overall log", config.sources.overall_log),
        ("Chart log", config.sources.chart_log),
        ("Idea Generator log", config.sources.idea_generator_log),
    ):
        if (directory / name).exists():
            console.print(f"[green]✓[/green] {label}: {name}")
        else:
            console.print(f"[yellow]![/yellow] {label}: {name} (missing)")

    today = datetime.now(timezone.utc).date()
    window = config.collection.daily_log_days
    found = sum(
        1 for offset in range(window)
        if (directory / get_log_filename(today - timedelta(days=offset), config.sources.daily_log_prefix)).exists()
    )
    console.print(f"[green]✓[/green] Daily logs: {found}/{window} found")

    prefix = config.sources.daily_log_prefix
    stamps = sorted(filter(None, (
        parse_log_date(path.stem[len(prefix):]) for path in directory.glob(f"{prefix}*.txt")
    )))
    if stamps:
        console.print(f"  Newest daily log: {stamps[-1]} ({len(stamps)} total)")

    output_dir = Path(config.output.directory)
    if output_dir.exists():
        console.print(f"[green]✓[/green] Report directory: {output_dir}")
    else:
        console.print(f"[yellow]![/yellow] Report directory: {output_dir} (will be created)")

    console.print(f"\n[bold]Current Settings:[/bold]")
    console.print(f"  Lookback: {config.collection.lookback_days} days")
    console.print(f"  Daily logs: {config.collection.daily_log_days}")
    console.print(f"  Advice / Base44 logs: {config.collection.advice_days} / {config.collection.base44_days} days")
    console.print(f"  Cluster threshold: {config.clustering.cluster_threshold}")
    console.print(f"  Heatmap entries: {config.heatmap.max_entries}")
    console.print(f"  Today: {date_string(today)}")


if __name__ == "__main__":
    cli()
