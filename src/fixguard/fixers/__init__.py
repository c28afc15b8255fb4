"""
Fixer boundary: base class for rule fixers and the registry that holds them.
"""

from .base import FixerBase
from .registry import FixerRegistry

__all__ = ["FixerBase", "FixerRegistry"]
