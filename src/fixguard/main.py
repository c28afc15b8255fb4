"""
fixguard command line.

classify, safe-zone, validate, compare, extract-function,
extract-declaration, replace
"""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from fixguard.cli.common import atomic_write, build_session, read_source
from fixguard.cli.output import CLIConfig, get_console, print_error, print_json
from fixguard.logging_config import logger, reset_logging, setup_logging
from fixguard.schemas import SourceLocation, ValidationResult

app = typer.Typer(help="Lexical safety checks for automated lint fixes.")
console = get_console()

LANGUAGE_OPTION = typer.Option(
    None, "--language", "-l", help="javascript, typescript or tsx (default: from file extension)"
)
JSON_OPTION = typer.Option(False, "--json", help="Output as JSON")


@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: tables and colors (also via FIXGUARD_HUMAN_MODE env var)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
):
    """fixguard: is this offset safe to mutate?"""
    CLIConfig.set_machine_mode(False if human else None)
    if verbose:
        reset_logging()
        setup_logging(level="DEBUG", suppress_console=False)


def _print_validation(result: ValidationResult, json_output: bool) -> None:
    if json_output or CLIConfig.is_machine_mode():
        print_json(result.model_dump())
    elif result.is_valid:
        console.print(f"[green]✓ {result.details.kind} check passed[/green]")
    else:
        console.print(f"[red]✗ {result.error}[/red]")
        for warning in result.warnings:
            console.print(f"  - {warning}")

    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command("classify")
def classify_cmd(
    file: Path = typer.Argument(..., help="Source file", exists=True, dir_okay=False),
    line: int = typer.Argument(..., help="1-indexed line"),
    column: int = typer.Argument(..., help="1-indexed column"),
    json_output: bool = JSON_OPTION,
):
    """Show the lexical context at LINE:COLUMN."""
    buffer = read_source(file, json_output)
    session = build_session(file, json_output=json_output)
    context = session.classify(buffer, line, column)

    if json_output or CLIConfig.is_machine_mode():
        print_json(context.model_dump())
        return

    table = Table(title=f"{file}:{line}:{column}")
    table.add_column("Flag", style="cyan")
    table.add_column("Value")
    for key, value in context.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)


@app.command("safe-zone")
def safe_zone_cmd(
    file: Path = typer.Argument(..., help="Source file", exists=True, dir_okay=False),
    line: int = typer.Argument(..., help="1-indexed line"),
    column: int = typer.Argument(..., help="1-indexed column"),
    json_output: bool = JSON_OPTION,
):
    """Check whether LINE:COLUMN may be edited. Exits 1 if not."""
    buffer = read_source(file, json_output)
    session = build_session(file, json_output=json_output)
    zone = session.find_safe_zone(buffer, SourceLocation(line=line, column=column))

    if json_output or CLIConfig.is_machine_mode():
        print_json(zone.model_dump())
    elif zone.is_safe:
        console.print(f"[green]✓ {zone.reason}[/green]")
    else:
        console.print(f"[red]✗ {zone.reason}[/red]")

    if not zone.is_safe:
        raise typer.Exit(code=1)


@app.command("validate")
def validate_cmd(
    file: Path = typer.Argument(..., help="Source file", exists=True, dir_okay=False),
    language: Optional[str] = LANGUAGE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """Check bracket balance and parse FILE."""
    buffer = read_source(file, json_output)
    session = build_session(file, language, json_output)
    _print_validation(session.validate_syntax(buffer), json_output)


@app.command("compare")
def compare_cmd(
    before: Path = typer.Argument(..., help="Original file", exists=True, dir_okay=False),
    after: Path = typer.Argument(..., help="Fixed file", exists=True, dir_okay=False),
    language: Optional[str] = LANGUAGE_OPTION,
    json_output: bool = JSON_OPTION,
):
    """Detect structural drift between BEFORE and AFTER."""
    before_buffer = read_source(before, json_output)
    after_buffer = read_source(after, json_output)
    session = build_session(after, language, json_output)
    _print_validation(session.validate_semantics(before_buffer, after_buffer), json_output)


@app.command("extract-function")
def extract_function_cmd(
    file: Path = typer.Argument(..., help="Source file", exists=True, dir_okay=False),
    marker: str = typer.Argument(..., help="Text that starts the function, e.g. 'function foo('"),
    json_output: bool = JSON_OPTION,
):
    """Print the brace-matched code starting at MARKER."""
    buffer = read_source(file, json_output)
    session = build_session(file, json_output=json_output)
    fragment = session.extract_function_body(buffer, marker)

    if not fragment:
        print_error(f"Marker not found: {marker}", code="NOT_FOUND", json_output=json_output)
        raise typer.Exit(code=1)

    if json_output:
        print_json({"marker": marker, "code": fragment, "complete": fragment != marker})
    else:
        typer.echo(fragment)


@app.command("extract-declaration")
def extract_declaration_cmd(
    file: Path = typer.Argument(..., help="Source file", exists=True, dir_okay=False),
    name: str = typer.Argument(..., help="Declared variable name"),
    json_output: bool = JSON_OPTION,
):
    """Print the var/let/const declaration of NAME."""
    buffer = read_source(file, json_output)
    session = build_session(file, json_output=json_output)
    fragment = session.extract_declaration(buffer, name)

    if fragment is None:
        print_error(f"No declaration of '{name}'", code="NOT_FOUND", json_output=json_output)
        raise typer.Exit(code=1)

    if json_output:
        print_json(fragment.model_dump())
    else:
        typer.echo(f"{fragment.start_line}: {fragment.text}")


@app.command("replace")
def replace_cmd(
    file: Path = typer.Argument(..., help="Source file", exists=True, dir_okay=False),
    line: int = typer.Argument(..., help="1-indexed line"),
    column: int = typer.Argument(..., help="1-indexed column"),
    length: int = typer.Argument(..., help="Characters to replace"),
    text: str = typer.Argument(..., help="Replacement text"),
    write: bool = typer.Option(False, "--write", "-w", help="Write the result back to FILE"),
    json_output: bool = JSON_OPTION,
):
    """Replace LENGTH characters at LINE:COLUMN if it is safe to do so."""
    buffer = read_source(file, json_output)
    session = build_session(file, json_output=json_output)
    result = session.safe_replace(buffer, line, column, length, text)

    if result.success and write:
        if not atomic_write(file, result.buffer):
            print_error(f"Failed to write changes to {file}", code="FILE_WRITE_ERROR", json_output=json_output)
            raise typer.Exit(code=1)
        logger.info(f"Replaced {length} character(s) at {file}:{line}:{column}")

    if json_output or CLIConfig.is_machine_mode():
        print_json(result.model_dump())
    elif result.success:
        console.print(f"[green]✓ {result.message}[/green]")
        if not write:
            typer.echo(result.buffer)
    else:
        console.print(f"[red]✗ {result.message}[/red]")
        for warning in result.warnings:
            console.print(f"  - {warning}")

    if not result.success:
        raise typer.Exit(code=1)


def main():
    app()


if __name__ == "__main__":
    main()
