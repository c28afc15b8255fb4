"""
fixguard - Lexical safety checks for automated lint fixes

Classifies source offsets (string, comment, regex, template) and gates
in-place edits on that classification plus whole-buffer syntax checks.
"""

__version__ = "1.0.0"

# Core exports
from fixguard.context import ContextClassifier
from fixguard.mutation import SafeEditGate, StructuralExtractor
from fixguard.validation import CodeValidator
from fixguard.fixers import FixerBase, FixerRegistry
from fixguard.session import FixSession
from fixguard.schemas import (
    LexicalContext,
    LintMessage,
    SafeZone,
    SourceLocation,
    ValidationResult,
)

__all__ = [
    "__version__",
    "ContextClassifier",
    "SafeEditGate",
    "StructuralExtractor",
    "CodeValidator",
    "FixerBase",
    "FixerRegistry",
    "FixSession",
    "LexicalContext",
    "LintMessage",
    "SafeZone",
    "SourceLocation",
    "ValidationResult",
]
