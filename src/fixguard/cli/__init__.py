"""
CLI helper modules for the fixguard command.
"""

from fixguard.cli import common, output

__all__ = ['common', 'output']
