"""
Lexical context package.

Maps positions to offsets and classifies offsets as string, comment,
regex, template text or plain code.
"""

from .classifier import ContextClassifier, DEFAULT_CONTEXT
from .position import (
    to_offset,
    to_position,
    get_line,
    extract_lines,
    line_count,
)

__all__ = [
    "ContextClassifier",
    "DEFAULT_CONTEXT",
    "to_offset",
    "to_position",
    "get_line",
    "extract_lines",
    "line_count",
]
