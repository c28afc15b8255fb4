"""
Shared helpers for CLI commands: reading sources, building sessions and
writing results back atomically.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

import typer

from fixguard.config import detect_language, load_config
from fixguard.exceptions import ConfigError
from fixguard.logging_config import logger
from fixguard.session import FixSession

from .output import print_error


def read_source(path: Path, json_output: bool = False) -> str:
    """Read a source file (line endings untouched) or exit with code 1."""
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Failed to read {path}: {e}", code="FILE_READ_ERROR", json_output=json_output)
        raise typer.Exit(code=1)


def build_session(path: Path, language: Optional[str] = None, json_output: bool = False) -> FixSession:
    """
    Create a session configured for the file's language.

    Explicit language wins over the extension; unknown extensions fall back
    to the configured default.
    """
    try:
        config = load_config()
    except ConfigError as e:
        print_error(str(e), code="CONFIG_ERROR", json_output=json_output)
        raise typer.Exit(code=1)

    language = language or detect_language(path)
    if language:
        config["validation"] = {**config["validation"], "language": language}

    try:
        return FixSession(config)
    except ConfigError as e:
        print_error(str(e), code="CONFIG_ERROR", json_output=json_output,
                    suggestions=["--language javascript", "--language typescript", "--language tsx"])
        raise typer.Exit(code=1)


def atomic_write(file_path: Path, content: str) -> bool:
    """
    Write file atomically using temp file + rename.

    Returns:
        True if successful
    """
    fd, temp_path = tempfile.mkstemp(
        dir=str(file_path.parent),
        prefix=f".{file_path.name}.",
        suffix=".tmp"
    )

    try:
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
        os.replace(temp_path, str(file_path))
        logger.debug(f"Atomic write completed: {file_path}")
        return True
    except OSError as e:
        logger.error(f"Failed during atomic write: {e}")
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        return False
