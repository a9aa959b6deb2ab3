#!/usr/bin/env python3
"""
unwind CLI - Command Line Interface

Copyright (C) 2025 Marc Rivero López

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program. If not, see <https://www.gnu.org/licenses/>.
"""

import sys
from dataclasses import dataclass
from typing import Any

import click
import pyfiglet
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .__version__ import __author__, __license__, __url__, __version__
from .config import Config
from .error_handling import OutcomeStatus
from .scenarios import SCENARIOS, ScenarioReport, default_scenarios, list_scenarios, run_scenario
from .utils.logger import configure_logging_levels, setup_logger
from .utils.output_json import JsonOutputFormatter

console = Console()

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_USAGE = 2

STATUS_STYLES = {
    OutcomeStatus.COMPLETED: "green",
    OutcomeStatus.HANDLED: "cyan",
    OutcomeStatus.UNHANDLED: "yellow",
    OutcomeStatus.FATAL: "bold red",
}


@dataclass
class CLIArgs:
    scenarios: tuple[str, ...]
    list_only: bool
    output_json: bool
    verbose: bool
    quiet: bool
    config: str | None
    workdir: str | None
    version: bool


def print_banner() -> None:
    """Print unwind banner"""
    banner = pyfiglet.figlet_format("unwind", font="slant")
    console.print(f"[bold blue]{escape(banner)}[/bold blue]")
    console.print("[bold]Deterministic error recovery, one region at a time[/bold]\n")


def display_version() -> None:
    console.print(f"[bold cyan]unwind[/bold cyan] version [bold green]{__version__}[/bold green]")
    console.print(f"Author: {__author__}")
    console.print(f"License: {__license__}")
    console.print(f"Repository: {__url__}")


def display_scenario_list() -> None:
    table = Table(title="Scenarios", show_header=True)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description", style="green", overflow="fold")
    table.add_column("Default", justify="center")
    for entry in list_scenarios():
        table.add_row(entry.name, entry.description, "no" if entry.fatal else "yes")
    console.print(table)


def display_report(report: ScenarioReport) -> None:
    status = report.outcome.status
    style = STATUS_STYLES.get(status, "white")
    console.print(f"[bold]{escape(report.name)}[/bold] - {escape(report.description)}")
    for message in report.messages:
        console.print(f"  {escape(message)}", soft_wrap=True)
    console.print(f"  [{style}]{status.value}[/{style}]\n")


def display_summary(reports: list[ScenarioReport]) -> None:
    table = Table(title="Summary", show_header=True)
    table.add_column("Scenario", style="cyan", no_wrap=True)
    table.add_column("Outcome", no_wrap=True)
    table.add_column("Condition", overflow="fold")
    for report in reports:
        outcome = report.outcome
        style = STATUS_STYLES.get(outcome.status, "white")
        condition = outcome.condition.kind.value if outcome.condition else "-"
        table.add_row(report.name, f"[{style}]{outcome.status.value}[/{style}]", condition)
    console.print(table)


def _build_config(args: CLIArgs) -> Config:
    config = Config(args.config)
    if args.workdir:
        config.apply_overrides({"scenarios": {"workdir": args.workdir}})
    if args.verbose:
        config.set("general", "verbose", True)
    return config


def run_cli(args: CLIArgs) -> int:
    """Primary CLI workflow separated for clarity and testability."""
    if args.version:
        display_version()
        return EXIT_OK

    if args.list_only:
        display_scenario_list()
        return EXIT_OK

    unknown = [name for name in args.scenarios if name not in SCENARIOS]
    if unknown:
        console.print(f"[red]Unknown scenario(s): {escape(', '.join(unknown))}[/red]")
        console.print("Use --list to see available scenarios")
        return EXIT_USAGE

    setup_logger()
    config = _build_config(args)
    configure_logging_levels(args.verbose or config.get("general", "verbose", False), args.quiet)

    if not args.output_json and not args.quiet:
        print_banner()

    names = list(args.scenarios) or default_scenarios()
    reports = [run_scenario(name, config) for name in names]

    if args.output_json:
        click.echo(JsonOutputFormatter(reports).to_json(indent=config.get("output", "json_indent", 2)))
    else:
        for report in reports:
            display_report(report)
        display_summary(reports)

    if any(report.outcome.fatal for report in reports):
        return EXIT_FATAL
    return EXIT_OK


def main(**kwargs: Any):
    """
    unwind - walk through deterministic error recovery scenarios.

    Runs every default scenario when none are named.
    """
    args = CLIArgs(**kwargs)
    try:
        exit_code = run_cli(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(EXIT_FATAL)
    sys.exit(exit_code)


@click.command()
@click.argument("scenarios", nargs=-1)
@click.option("-l", "--list", "list_only", is_flag=True, help="List available scenarios and exit")
@click.option("-j", "--json", "output_json", is_flag=True, help="Output scenario reports in JSON format")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.option("--quiet", is_flag=True, help="Suppress banner and non-critical log output")
@click.option("--config", type=click.Path(dir_okay=False), help="Custom config file path")
@click.option("--workdir", type=click.Path(file_okay=False), help="Directory used by the file scenarios")
@click.option("--version", is_flag=True, help="Show version information and exit")
def cli(**kwargs: Any):
    """Click-based CLI entry point."""
    main(**kwargs)


if __name__ == "__main__":
    cli()
