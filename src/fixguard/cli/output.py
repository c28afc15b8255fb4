"""
CLI Output Utilities

Machine-aware output functions that adapt based on machine mode.
"""

import json
import os
import re
from typing import Any, List, Optional

import typer
from rich.console import Console as RichConsole
from rich.table import Table


class CLIConfig:
    """Output mode for CLI commands"""

    _machine_mode: Optional[bool] = None

    @classmethod
    def set_machine_mode(cls, enabled: Optional[bool]) -> None:
        cls._machine_mode = enabled

    @classmethod
    def is_machine_mode(cls) -> bool:
        """
        Machine mode (plain, minified output) is the default.
        Human mode is opted into with --human or FIXGUARD_HUMAN_MODE.
        """
        if cls._machine_mode is not None:
            return cls._machine_mode
        if os.getenv("FIXGUARD_HUMAN_MODE", "").lower() in ("1", "true", "yes"):
            return False
        return True


class MachineAwareConsole:
    """
    A Console wrapper that automatically adapts output based on machine mode.
    Acts as a drop-in replacement for rich.console.Console.
    """

    def __init__(self):
        self._rich_console = RichConsole()

    def print(self, *args, **kwargs):
        """Print that respects machine mode."""
        if CLIConfig.is_machine_mode():
            for arg in args:
                if isinstance(arg, str):
                    plain = re.sub(r'\[/?[a-z ]+\]', '', arg).strip()
                    if plain:
                        typer.echo(plain)
                elif isinstance(arg, Table):
                    # Tables are only rendered for humans, use --json instead
                    pass
                elif arg:
                    typer.echo(str(arg))
        else:
            self._rich_console.print(*args, **kwargs)

    def __getattr__(self, name):
        """Delegate all other attributes to the rich console."""
        return getattr(self._rich_console, name)


_console = MachineAwareConsole()


def get_console() -> MachineAwareConsole:
    return _console


def print_json(data: Any, minified: Optional[bool] = None) -> None:
    """
    Print JSON data respecting machine mode.
    In machine mode, always minifies. In human mode, pretty prints.
    """
    if minified is None:
        minified = CLIConfig.is_machine_mode()

    if minified:
        typer.echo(json.dumps(data, separators=(',', ':'), default=str))
    else:
        typer.echo(json.dumps(data, indent=2, default=str))


def structured_error(code: str, message: str, suggestions: Optional[List[str]] = None) -> dict:
    """Build a machine-readable error payload."""
    error = {"status": "error", "error_code": code, "message": message}
    if suggestions:
        error["suggestions"] = suggestions
    return error


def print_error(message: str, code: str = "ERROR", json_output: bool = False,
                suggestions: Optional[List[str]] = None) -> None:
    """Print an error as JSON (machine mode / --json) or red text."""
    if json_output or CLIConfig.is_machine_mode():
        print_json(structured_error(code, message, suggestions))
    else:
        _console.print(f"[red]Error: {message}[/red]")
