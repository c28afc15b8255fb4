"""
FixerBase: common behaviour for per-rule lint fixers.
"""

from typing import List, Optional

from fixguard.exceptions import InvalidReplacementBoundsError
from fixguard.logging_config import logger
from fixguard.schemas import FixResult, LintMessage
from fixguard.validation.validator import CodeValidator


class FixerBase:
    """
    Base class for all rule fixers.

    Subclasses implement fix(); can_fix() and validate() have usable
    defaults that subclasses may narrow.
    """

    def __init__(
        self,
        rule_id: str,
        complexity: str = "simple",
        validator: Optional[CodeValidator] = None
    ):
        """
        Args:
            rule_id: The lint rule this fixer handles
            complexity: "simple" or "complex"
            validator: Validator used to check fixed code (one is created if omitted)
        """
        self.rule_id = rule_id
        self.complexity = complexity
        self.validator = validator or CodeValidator()

    def can_fix(self, buffer: str, error: LintMessage) -> bool:
        if error.rule_id != self.rule_id:
            return False
        return self.is_valid_position(buffer, error.line, error.column)

    def fix(self, buffer: str, error: LintMessage) -> FixResult:
        raise NotImplementedError(f"fix() must be implemented by {type(self).__name__}")

    def validate(self, before: str, after: str) -> bool:
        """A fix is valid if it changed something and the result parses."""
        if before == after:
            return False
        return self.validator.validate_syntax(after).is_valid

    def is_valid_position(self, buffer: str, line: int, column: int) -> bool:
        lines = buffer.split('\n')

        if line < 1 or line > len(lines):
            return False

        target = lines[line - 1]
        return 1 <= column <= len(target) + 1

    def create_success_result(
        self,
        buffer: str,
        message: Optional[str] = None,
        warnings: Optional[List[str]] = None
    ) -> FixResult:
        return FixResult(
            success=True,
            buffer=buffer,
            message=message or f"Applied {self.rule_id} fix",
            warnings=warnings or [],
        )

    def create_failure_result(
        self,
        original: str,
        message: Optional[str] = None,
        warnings: Optional[List[str]] = None
    ) -> FixResult:
        return FixResult(
            success=False,
            buffer=original,
            message=message or f"Failed to apply {self.rule_id} fix",
            warnings=warnings or [],
        )

    def replace_range(self, buffer: str, start: int, end: int, replacement: str) -> str:
        """
        Splice replacement into buffer[start:end].

        Raises:
            InvalidReplacementBoundsError: If the range does not fit the buffer
        """
        if start < 0 or end > len(buffer) or start > end:
            raise InvalidReplacementBoundsError(start, end, len(buffer))
        return buffer[:start] + replacement + buffer[end:]

    def handle_error(self, error: Exception, original: str, context: str = "") -> FixResult:
        """Turn an exception raised while fixing into a failure result."""
        where = f" in {context}" if context else ""
        message = f"{self.rule_id} fixer error{where}: {error}"
        logger.warning(message)

        return self.create_failure_result(original, message, [
            "Fix operation failed due to unexpected error",
            "Original code was preserved",
        ])
