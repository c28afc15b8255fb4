"""
Position mapping between 1-indexed (line, column) pairs and absolute offsets.

Lines are split on '\\n' only; a '\\r' before the newline counts as an
ordinary character of its line.
"""

from typing import Optional, Tuple

from fixguard.exceptions import PositionError


def to_offset(buffer: str, line: int, column: int) -> int:
    """
    Convert a 1-indexed (line, column) pair to an absolute offset.

    The column may point one past the last character of its line, which is
    the slot of the terminating newline (or the end of the buffer).

    Raises:
        PositionError: If the line or column is outside the buffer
    """
    lines = buffer.split('\n')

    if line < 1 or line > len(lines):
        raise PositionError(
            f"Line {line} is outside the buffer (1-{len(lines)})",
            line=line,
            column=column,
        )

    target = lines[line - 1]
    if column < 1 or column > len(target) + 1:
        raise PositionError(
            f"Column {column} is outside line {line} (1-{len(target) + 1})",
            line=line,
            column=column,
        )

    offset = 0
    for preceding in lines[:line - 1]:
        offset += len(preceding) + 1  # +1 for the newline
    return offset + column - 1


def to_position(buffer: str, offset: int) -> Tuple[int, int]:
    """
    Convert an absolute offset back to a 1-indexed (line, column) pair.

    Raises:
        PositionError: If offset is negative or past the end of the buffer
    """
    if offset < 0 or offset > len(buffer):
        raise PositionError(
            f"Offset {offset} is outside the buffer (0-{len(buffer)})",
            offset=offset,
        )

    line = buffer.count('\n', 0, offset) + 1
    line_start = buffer.rfind('\n', 0, offset) + 1
    return line, offset - line_start + 1


def get_line(buffer: str, line: int) -> str:
    """Return the text of a 1-indexed line, or '' if it does not exist."""
    lines = buffer.split('\n')
    if line < 1 or line > len(lines):
        return ""
    return lines[line - 1]


def extract_lines(buffer: str, start_line: int, end_line: Optional[int] = None) -> str:
    """
    Return lines start_line..end_line (inclusive) joined with newlines.

    An invalid start line yields ''. A missing end line means a single line.
    """
    lines = buffer.split('\n')

    if start_line < 1 or start_line > len(lines):
        return ""

    if end_line and end_line != start_line:
        return '\n'.join(lines[start_line - 1:end_line])

    return lines[start_line - 1]


def line_count(buffer: str) -> int:
    """Number of '\\n'-separated lines (an empty buffer has one line)."""
    return buffer.count('\n') + 1
