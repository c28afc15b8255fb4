"""
Pattern search and small text helpers shared by fixers.
"""

import re
from typing import List, Optional, Pattern, Union

from fixguard.context.classifier import ContextClassifier
from fixguard.context.position import to_position
from fixguard.schemas import PatternMatch


_QUOTED_NAME = re.compile(r"'([^']*)'")
_LEADING_WHITESPACE = re.compile(r"^\s*")


def find_pattern_occurrences(
    classifier: ContextClassifier,
    buffer: str,
    pattern: Union[str, Pattern[str]],
    skip_strings: bool = True,
    skip_comments: bool = True,
    skip_regex: bool = True,
    skip_templates: bool = True,
) -> List[PatternMatch]:
    """
    Find regex matches, dropping those that start in unwanted contexts.

    Args:
        classifier: Classifier used to check each match start
        buffer: Source text
        pattern: Regex string or compiled pattern
        skip_*: Which lexical contexts to exclude

    Returns:
        Matches in buffer order
    """
    regex = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)
    matches = []

    for match in regex.finditer(buffer):
        index = match.start()
        context = classifier.classify_offset(buffer, index)

        if skip_strings and context.in_string:
            continue
        if skip_comments and context.in_comment:
            continue
        if skip_regex and context.in_regex:
            continue
        if skip_templates and context.in_template:
            continue

        line, column = to_position(buffer, index)
        matches.append(PatternMatch(
            match=match.group(0),
            index=index,
            line=line,
            column=column,
            context=context,
            groups=list(match.groups()),
        ))

    return matches


def find_quoted_name(message: str) -> Optional[str]:
    """First single-quoted name in a lint message, e.g. "'foo' is defined but never used"."""
    match = _QUOTED_NAME.search(message)
    return match.group(1) if match else None


def comment_out_lines(text: str) -> str:
    """
    Prefix every non-blank line with '// ', keeping its indentation.

    Blank input yields ''.
    """
    if text.strip() == "":
        return ""

    commented = []
    for line in text.split('\n'):
        indent = _LEADING_WHITESPACE.match(line).group(0)
        content = line[len(indent):]
        if content == "":
            commented.append(line)
        else:
            commented.append(f"{indent}// {content}")

    return '\n'.join(commented)
