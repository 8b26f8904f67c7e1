"""CLI interface for nsvalidators using Typer framework."""

import json as jsonlib
import logging
import zipfile
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nsvalidators import __description__, __version__
from nsvalidators.bundle import JarBundle
from nsvalidators.config import LogLevel, PatternRuleSet, load_config
from nsvalidators.constants import RULE_DESCRIPTIONS
from nsvalidators.exceptions import NsValidatorsError
from nsvalidators.validation import NamespaceValidator, Severity, ValidationResult

app = typer.Typer(
    name="nsvalidators",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

_LOG_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.TRACE: logging.DEBUG,
}

_SEVERITY_COLORS = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.TRACE: "dim",
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"nsvalidators version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """Build-time namespace compliance checks for OSGi bundles."""


def _parse_overrides(values: list[str]) -> dict[str, str]:
    overrides = {}
    for value in values:
        key, sep, patterns = value.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected KEY=PATTERNS, got '{value}'", param_hint="--rule")
        overrides[key.strip()] = patterns
    return overrides


def _print_table(result: ValidationResult, show_trace: bool) -> None:
    shown = [d for d in result.diagnostics if show_trace or d.severity != Severity.TRACE]

    if shown:
        table = Table()
        table.add_column("Severity", style="white")
        table.add_column("Rule", style="cyan")
        table.add_column("Message", style="white")

        for diagnostic in shown:
            color = _SEVERITY_COLORS[diagnostic.severity]
            table.add_row(
                f"[{color}]{diagnostic.severity.value.upper()}[/{color}]",
                diagnostic.rule or "",
                escape(diagnostic.message),
            )
        console.print(table)
    else:
        console.print("[green]No issues found![/green]")

    status_color = "red" if result.exit_code else "green"
    console.print(
        f"[{status_color}]{len(result.errors)} errors[/{status_color}], "
        f"{len(result.warnings)} warnings"
    )


@app.command()
def verify(
    jar: Annotated[
        Path,
        typer.Argument(help="Path to the built bundle JAR")
    ],
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .nsvalidators.json)")
    ] = None,
    rule: Annotated[
        Optional[list[str]],
        typer.Option("--rule", "-r", help="Rule override as KEY=PATTERNS (comma-separated), repeatable")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json (default: table)")
    ] = "table",
    show_trace: Annotated[
        bool,
        typer.Option("--show-trace", help="Include trace diagnostics in table output")
    ] = False,
) -> None:
    """Verify a bundle against the configured namespace patterns."""
    valid_formats = ["table", "json"]
    if format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{escape(format)}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(2)

    overrides = _parse_overrides(rule or [])

    try:
        settings = load_config(config)
        logging.basicConfig(level=_LOG_LEVELS[LogLevel(settings.logging.level)])

        result = ValidationResult()
        rule_set = settings.model_copy(update={"rules": {**settings.rules, **overrides}}).rule_set(result)
        validator = NamespaceValidator(rule_set, reporter=result)

        with JarBundle(jar) as bundle:
            run = validator.verify(bundle)
        result.counters.update(run.counters)

    except (NsValidatorsError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)
    except (OSError, zipfile.BadZipFile) as e:
        console.print(f"[red]Error:[/red] Cannot read bundle {escape(str(jar))}: {escape(str(e))}")
        raise typer.Exit(2)

    if format == "json":
        console.print_json(jsonlib.dumps(result.to_dict()))
    else:
        _print_table(result, show_trace)

    raise typer.Exit(result.exit_code)


@app.command()
def rules() -> None:
    """List the configuration keys and what each of them checks."""
    table = Table()
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Checks", style="white")

    for key in PatternRuleSet.known_keys():
        table.add_row(key, RULE_DESCRIPTIONS[key])

    console.print(table)


if __name__ == "__main__":
    app()
