"""
ContextClassifier: Lexical context of a buffer offset without a parse tree.

Scans JavaScript/TypeScript source from offset 0 to a target offset and
reports whether the target lies in a string, a comment, a regex literal,
template-literal text or a template substitution.
"""

import hashlib
import re
from typing import Dict, Optional, Tuple

from fixguard.config import CLASSIFIER_CONFIG
from fixguard.context.position import to_offset
from fixguard.exceptions import ConfigError, PositionError
from fixguard.logging_config import logger
from fixguard.schemas import LexicalContext


_WORD_CHAR = re.compile(r"[A-Za-z_$]")

# Returned for any position that cannot be mapped into the buffer
DEFAULT_CONTEXT = LexicalContext()


class ContextClassifier:
    """
    Classify buffer offsets by lexical context.

    Every query re-scans the prefix [0, offset), so results depend only on
    (buffer, offset). Results are memoized per (content fingerprint, offset);
    the cache is cleared wholesale when it reaches max_cache_size.
    """

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize classifier with optional config.

        Args:
            config: Optional config overrides (merges with CLASSIFIER_CONFIG)
        """
        self.config = {**CLASSIFIER_CONFIG, **(config or {})}
        try:
            self.max_cache_size = int(self.config["max_cache_size"])
            self.regex_preceders = frozenset(self.config["regex_preceders"])
            self.regex_keywords = frozenset(self.config["regex_keywords"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid classifier config: {e}") from e

        self._cache: Dict[Tuple[str, int], LexicalContext] = {}
        self._last_buffer: Optional[str] = None
        self._last_fingerprint = ""

    def classify(self, buffer: str, line: int, column: int) -> LexicalContext:
        """
        Classify a 1-indexed (line, column) position.

        Positions outside the buffer yield the default (plain code) context.
        """
        try:
            offset = to_offset(buffer, line, column)
        except PositionError as e:
            logger.debug(f"Classifying unmappable position as plain code: {e}")
            return DEFAULT_CONTEXT

        return self.classify_offset(buffer, offset)

    def classify_offset(self, buffer: str, offset: int) -> LexicalContext:
        """
        Classify an absolute offset.

        Offsets outside [0, len(buffer)] yield the default context.
        """
        if offset < 0 or offset > len(buffer):
            return DEFAULT_CONTEXT

        key = (self._fingerprint(buffer), offset)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        context = self.scan(buffer, offset)

        if len(self._cache) >= self.max_cache_size:
            logger.debug(f"Classifier cache full ({len(self._cache)} entries), clearing")
            self._cache.clear()
        self._cache[key] = context

        return context

    def scan(self, buffer: str, position: int) -> LexicalContext:
        """
        Uncached single pass over buffer[:position].

        Escapes inside quotes, templates and regex literals consume two
        characters at once, so a position directly after a backslash reports
        the state after the escaped character.
        """
        in_single_quote = False
        in_double_quote = False
        in_template = False
        in_single_comment = False
        in_multi_comment = False
        in_regex = False
        template_depth = 0

        end = min(position, len(buffer))
        i = 0

        while i < end:
            char = buffer[i]
            next_char = buffer[i + 1] if i + 1 < len(buffer) else ""

            if char == '\\' and (in_single_quote or in_double_quote or in_template or in_regex):
                i += 2
                continue

            if in_single_comment:
                if char == '\n':
                    in_single_comment = False
                i += 1
                continue

            if in_multi_comment:
                if char == '*' and next_char == '/':
                    in_multi_comment = False
                    i += 2
                else:
                    i += 1
                continue

            if in_regex:
                if char == '/' and not self.is_escaped(buffer, i):
                    in_regex = False
                i += 1
                continue

            in_code = not (in_single_quote or in_double_quote or in_template)

            if in_code and char == '/':
                if next_char == '/':
                    in_single_comment = True
                    i += 2
                    continue
                if next_char == '*':
                    in_multi_comment = True
                    i += 2
                    continue
                if self.could_be_regex_start(buffer, i):
                    in_regex = True
                # Otherwise a division operator
                i += 1
                continue

            if char == "'" and not in_double_quote and not in_template:
                in_single_quote = not in_single_quote
            elif char == '"' and not in_single_quote and not in_template:
                in_double_quote = not in_double_quote
            elif char == '`' and not in_single_quote and not in_double_quote:
                if in_template:
                    template_depth -= 1
                    if template_depth == 0:
                        in_template = False
                else:
                    in_template = True
                    template_depth = 1
            elif in_template and char == '$' and next_char == '{':
                template_depth += 1
                i += 2
                continue
            elif in_template and char == '}' and template_depth > 1:
                template_depth -= 1

            i += 1

        in_string = in_single_quote or in_double_quote
        in_comment = in_single_comment or in_multi_comment

        string_char = None
        if in_string:
            string_char = "'" if in_single_quote else '"'
        if in_template:
            string_char = '`'

        comment_type = None
        if in_comment:
            comment_type = "single" if in_single_comment else "multi"

        return LexicalContext(
            in_string=in_string,
            in_comment=in_comment,
            in_regex=in_regex,
            in_template=in_template,
            in_template_expression=in_template and template_depth > 1,
            string_char=string_char,
            comment_type=comment_type,
        )

    def could_be_regex_start(self, buffer: str, position: int) -> bool:
        """
        Guess whether the slash at `position` opens a regex literal.

        Looks back over whitespace to the previous token: a punctuator from
        regex_preceders, the start of the buffer, or a keyword such as
        `return` means regex; anything else (identifier, number, closing
        bracket) means division.
        """
        i = position - 1
        while i >= 0 and buffer[i].isspace():
            i -= 1

        if i < 0:
            return True

        if buffer[i] in self.regex_preceders:
            return True

        word_start = i
        while word_start >= 0 and _WORD_CHAR.match(buffer[word_start]):
            word_start -= 1

        word = buffer[word_start + 1:i + 1]
        return word in self.regex_keywords

    @staticmethod
    def is_escaped(buffer: str, position: int) -> bool:
        """True if the character at position follows an odd run of backslashes."""
        escape_count = 0
        i = position - 1
        while i >= 0 and buffer[i] == '\\':
            escape_count += 1
            i -= 1
        return escape_count % 2 == 1

    # Convenience predicates

    def is_in_string(self, buffer: str, line: int, column: int) -> bool:
        return self.classify(buffer, line, column).in_string

    def is_in_comment(self, buffer: str, line: int, column: int) -> bool:
        return self.classify(buffer, line, column).in_comment

    def is_in_regex(self, buffer: str, line: int, column: int) -> bool:
        return self.classify(buffer, line, column).in_regex

    def is_in_template(self, buffer: str, line: int, column: int) -> bool:
        return self.classify(buffer, line, column).in_template

    def is_inside_string_or_comment(self, buffer: str, line: int, column: int) -> bool:
        context = self.classify(buffer, line, column)
        return context.in_string or context.in_comment

    # Cache management

    def clear_cache(self) -> None:
        """Drop every memoized classification."""
        self._cache.clear()
        self._last_buffer = None
        self._last_fingerprint = ""

    def cache_stats(self) -> Dict[str, int]:
        return {
            "size": len(self._cache),
            "max_size": self.max_cache_size,
        }

    def _fingerprint(self, buffer: str) -> str:
        """Content hash of the buffer, remembered for the most recent buffer object."""
        if buffer is self._last_buffer:
            return self._last_fingerprint

        digest = hashlib.sha1(buffer.encode("utf-8", "surrogatepass")).hexdigest()
        self._last_buffer = buffer
        self._last_fingerprint = digest
        return digest
