"""CLI interface for anchor using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from anchor import __description__, __version__
from anchor.config import AnchorConfig, load_config
from anchor.validation import RuleRegistry, Validator

app = typer.Typer(
    name="anchor",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"anchor version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """anchor - Declarative structural validation for Python data."""


def _configure_logging(config: AnchorConfig) -> None:
    logging.basicConfig(level=_LOG_LEVELS.get(config.logging.level, logging.INFO))


def _load_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        try:
            return jsonlib.load(f)
        except jsonlib.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}")


@app.command("check")
def check_command(
    data: Annotated[
        Path,
        typer.Argument(help="JSON file holding the data to validate")
    ],
    ruleset: Annotated[
        Path,
        typer.Argument(help="JSON file holding the ruleset")
    ],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .anchor.json)")
    ] = None,
) -> None:
    """Validate a JSON document against a JSON ruleset."""
    valid_formats = ["table", "json"]

    if format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    try:
        anchor_config = load_config(config)
        _configure_logging(anchor_config)

        payload = _load_json(data)
        rules = _load_json(ruleset)

        validator = Validator.from_config(anchor_config)
        result = validator.check(payload, rules)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if format == "json":
        console.print(jsonlib.dumps(result.to_dict(), indent=2), markup=False)
    else:
        if result.valid:
            console.print("[green]Validation Status: VALID[/green]")
        else:
            console.print("[red]Validation Status: INVALID[/red]")
            details = result.to_dict()["error"]

            error_table = Table()
            error_table.add_column("Error", style="cyan")
            error_table.add_column("Rule", style="white")
            error_table.add_column("Message", style="white")
            error_table.add_row(details["type"], escape(details["rule"] or ""), escape(details["message"]))
            console.print(error_table)

    raise typer.Exit(0 if result.valid else 1)


@app.command()
def rules() -> None:
    """List the built-in rule names."""
    registry = RuleRegistry.builtin()

    table = Table(title="Built-in Rules")
    table.add_column("Rule", style="cyan")
    table.add_column("Predicate", style="dim")

    for name in registry.names():
        table.add_row(name, registry.resolve(name).__name__)

    console.print(table)
    console.print(f"\n[blue]{len(registry)} rules registered[/blue]")


if __name__ == "__main__":
    app()
