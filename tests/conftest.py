"""
Pytest configuration for the fixguard test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Shared classifier / validator / session fixtures
- Sample JavaScript sources written to temp files
"""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from fixguard.logging_config import reset_logging, setup_logging


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for machine-mode operation."""
    os.environ.setdefault("FIXGUARD_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True, scope="session")
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    reset_logging()
    setup_logging(level="DEBUG", suppress_console=True)


# ============================================================================
# COMPONENT FIXTURES
# ============================================================================

@pytest.fixture
def classifier():
    from fixguard.context import ContextClassifier
    return ContextClassifier()


@pytest.fixture
def validator():
    from fixguard.validation import CodeValidator
    return CodeValidator()


@pytest.fixture
def session():
    from fixguard.session import FixSession
    return FixSession()


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    tmp = Path(tempfile.mkdtemp(prefix="fixguard_test_"))
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_js(temp_dir):
    """
    Write a small JavaScript module with strings, comments, a regex and a
    template literal.

    Returns:
        Path to the file
    """
    sample = temp_dir / "sample.js"
    sample.write_text(
        'const greeting = "a == b";\n'
        '// a == b in a comment\n'
        'function check(a, b) {\n'
        '  if (a == b) {\n'
        '    return /ab+c/.test(`${a}-text`);\n'
        '  }\n'
        '  return false;\n'
        '}\n',
        encoding="utf-8",
    )
    yield sample
