"""
Mutation package: gated replacements and structural extraction.
"""

from .gate import SafeEditGate
from .extraction import StructuralExtractor
from .patterns import find_pattern_occurrences, find_quoted_name, comment_out_lines

__all__ = [
    "SafeEditGate",
    "StructuralExtractor",
    "find_pattern_occurrences",
    "find_quoted_name",
    "comment_out_lines",
]
