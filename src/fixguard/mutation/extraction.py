"""
StructuralExtractor: cut function bodies and variable declarations out of a
buffer, ignoring braces and semicolons that sit inside strings or comments.
"""

import re
from typing import Optional

from fixguard.context.classifier import ContextClassifier
from fixguard.logging_config import logger
from fixguard.schemas import DeclarationFragment
from fixguard.validation.validator import CodeValidator


_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class StructuralExtractor:
    """
    Best-effort extraction of brace-matched and semicolon-terminated code.

    Callers that need a syntax guarantee must validate the returned text.
    """

    def __init__(self, classifier: ContextClassifier, validator: CodeValidator):
        self.classifier = classifier
        self.validator = validator

    def extract_function_body(self, buffer: str, marker: str) -> str:
        """
        Extract the code from the first occurrence of `marker` through its
        matching closing brace.

        Args:
            buffer: Source text
            marker: Text that starts the function, e.g. "function foo("

        Returns:
            The extracted code; "" if the marker is absent; the marker
            itself if no matching brace is found or the fragment does not
            parse.
        """
        start = buffer.find(marker)
        if start == -1:
            logger.warning(f"Function marker \"{marker}\" not found in code")
            return ""

        end = self._find_closing_brace(buffer, start)
        if end == -1:
            logger.warning(f"Could not find end of function starting at position {start}")
            return marker

        fragment = buffer[start:end + 1]

        parse_errors = self._parse_errors(fragment)
        if parse_errors:
            logger.warning(f"Extracted function code has syntax issues: {parse_errors[0]}")
            return marker

        return fragment

    def extract_declaration(self, buffer: str, name: str) -> Optional[DeclarationFragment]:
        """
        Extract the `var|let|const <name>` declaration up to its semicolon.

        Args:
            buffer: Source text
            name: Declared identifier

        Returns:
            DeclarationFragment (text and 1-indexed start line), or None if
            no declaration of that name exists. Without a terminating
            semicolon the text is empty.
        """
        match = re.search(rf"\b(var|let|const)\s+{re.escape(name)}\b", buffer)
        if not match:
            logger.warning(f"Variable declaration for \"{name}\" not found")
            return None

        start = match.start()
        end = start

        for i in range(start, len(buffer)):
            if buffer[i] != ';':
                continue
            context = self.classifier.classify_offset(buffer, i)
            if not context.in_string and not context.in_comment:
                end = i + 1
                break

        text = buffer[start:end].strip()
        start_line = len(_LINE_BREAK.split(buffer[:start]))

        if text:
            parse_errors = self._parse_errors(text)
            if parse_errors:
                logger.warning(f"Extracted declaration has syntax issues: {parse_errors[0]}")

        logger.debug(f"Found declaration of '{name}' at line {start_line}")
        return DeclarationFragment(text=text, start_line=start_line)

    def _find_closing_brace(self, buffer: str, start: int) -> int:
        """Offset of the brace that closes the first block after start, or -1."""
        depth = 0

        for i in range(start, len(buffer)):
            char = buffer[i]
            if char != '{' and char != '}':
                continue

            context = self.classifier.classify_offset(buffer, i)
            if context.in_string or context.in_comment:
                continue

            if char == '{':
                depth += 1
            else:
                depth = max(depth - 1, 0)
                if depth == 0:
                    return i

        return -1

    def _parse_errors(self, fragment: str):
        """Parser diagnostics for a fragment, without the raw bracket scan."""
        checker = self.validator.syntax_checker
        if not checker.available:
            return []
        return checker.parse_errors(fragment)
