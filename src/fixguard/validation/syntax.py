"""
SyntaxChecker: bracket balance and full-parse checks for a whole buffer.
"""

from typing import Dict, List

from tree_sitter import Parser, Language, Node
import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript

from fixguard.config import SUPPORTED_LANGUAGES
from fixguard.exceptions import ConfigError
from fixguard.logging_config import logger


BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
CLOSING_BRACKETS = frozenset(BRACKET_PAIRS.values())


def check_brackets(buffer: str) -> List[str]:
    """
    Scan every (){}[] in the buffer and report imbalances.

    The scan is purely character based; brackets inside strings and
    comments are counted too.

    Returns:
        One message per unmatched closer, then one per unclosed opener
    """
    issues = []
    stack = []

    for i, char in enumerate(buffer):
        if char in BRACKET_PAIRS:
            stack.append((char, i))
        elif char in CLOSING_BRACKETS:
            last = stack.pop() if stack else None
            if last is None or BRACKET_PAIRS[last[0]] != char:
                issues.append(f"Unmatched bracket '{char}' at position {i}")

    for char, pos in stack:
        issues.append(f"Unclosed bracket '{char}' at position {pos}")

    return issues


class SyntaxChecker:
    """
    Parse buffers with tree-sitter and collect ERROR / MISSING nodes.
    """

    def __init__(self, language: str = "javascript"):
        """
        Initialize the checker for one language.

        Args:
            language: "javascript", "typescript" or "tsx"

        Raises:
            ConfigError: If the language is not supported
        """
        if language not in SUPPORTED_LANGUAGES:
            raise ConfigError(
                f"Unsupported language '{language}'. "
                f"Expected one of: {', '.join(sorted(SUPPORTED_LANGUAGES))}"
            )
        self.language = language
        self.parsers: Dict[str, Parser] = {}
        self._init_parsers()

    def _init_parsers(self):
        """Initialize tree-sitter parsers."""
        try:
            js_parser = Parser()
            js_parser.language = Language(tsjavascript.language())
            self.parsers["javascript"] = js_parser

            ts_parser = Parser()
            ts_parser.language = Language(tstypescript.language_typescript())
            self.parsers["typescript"] = ts_parser

            tsx_parser = Parser()
            tsx_parser.language = Language(tstypescript.language_tsx())
            self.parsers["tsx"] = tsx_parser

            logger.debug(f"SyntaxChecker initialized parsers: {list(self.parsers.keys())}")
        except Exception as e:
            logger.error(f"Failed to initialize parsers: {e}")
            self.parsers = {}

    @property
    def available(self) -> bool:
        return self.language in self.parsers

    def parse_errors(self, buffer: str) -> List[str]:
        """
        Parse the buffer and describe every syntax error.

        Returns:
            Messages of the form "Syntax error at line L, column C"
        """
        parser = self.parsers[self.language]

        try:
            tree = parser.parse(bytes(buffer, "utf8"))
        except Exception as e:
            logger.error(f"Failed to parse code: {e}")
            return [f"Parse error: {e}"]

        errors = []
        for node in self._find_error_nodes(tree.root_node):
            line = node.start_point[0] + 1
            col = node.start_point[1] + 1
            if node.is_missing:
                errors.append(f"Syntax error at line {line}, column {col}: missing '{node.type}'")
            else:
                errors.append(f"Syntax error at line {line}, column {col}")
        return errors

    def _find_error_nodes(self, node: Node) -> List[Node]:
        """
        Recursively find all ERROR and MISSING nodes.

        Subtrees without errors are not descended into.
        """
        if not node.has_error and not node.is_missing:
            return []

        errors = []
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)

        for child in node.children:
            errors.extend(self._find_error_nodes(child))

        return errors
