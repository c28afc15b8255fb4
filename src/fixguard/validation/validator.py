"""
CodeValidator: syntax certification and coarse semantic drift detection.

Also owns the fix history and the snapshot store used for diffing and
reverting applied fixes.
"""

import re
from typing import List, Optional

from fixguard.config import VALIDATION_CONFIG
from fixguard.context.position import line_count
from fixguard.exceptions import ConfigError, RevertError
from fixguard.logging_config import logger
from fixguard.schemas import DiffResult, FixRecord, ValidationDetails, ValidationResult

from .history import FixHistory, SnapshotStore
from .syntax import SyntaxChecker, check_brackets


class CodeValidator:
    """
    Validate buffers before and after a fix.

    Checks:
    1. Bracket balance - every (){}[] matched, by character scan
    2. Full parse - tree-sitter ERROR / MISSING nodes
    3. Drift - line count and keyword count deltas between two versions
    """

    def __init__(self, config: Optional[dict] = None):
        """
        Initialize validator with optional config.

        Args:
            config: Optional config overrides (merges with VALIDATION_CONFIG)
        """
        self.config = {**VALIDATION_CONFIG, **(config or {})}
        try:
            self.line_delta_threshold = int(self.config["line_delta_threshold"])
            self.tracked_keywords = tuple(self.config["tracked_keywords"])
            self._keyword_patterns = {
                keyword: re.compile(rf"\b{re.escape(keyword)}\b")
                for keyword in self.tracked_keywords
            }
            history_limit = int(self.config["history_limit"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid validation config: {e}") from e

        self.syntax_checker = SyntaxChecker(self.config["language"])
        self.history = FixHistory(history_limit)
        self.snapshots = SnapshotStore()

    def validate_syntax(self, buffer: str) -> ValidationResult:
        """
        Certify that a buffer is syntactically sound.

        Both the bracket scan and the parse always run so that every
        available diagnostic is reported in one call.

        Args:
            buffer: Source text to validate

        Returns:
            ValidationResult with kind "syntax"
        """
        bracket_issues = check_brackets(buffer)

        if self.syntax_checker.available:
            syntax_errors = self.syntax_checker.parse_errors(buffer)
            skipped = []
        else:
            logger.warning(f"No parser for {self.syntax_checker.language}, skipping syntax check")
            syntax_errors = []
            skipped = [f"Parser for {self.syntax_checker.language} unavailable, only brackets were checked"]

        issues = bracket_issues + syntax_errors

        if issues:
            return ValidationResult(
                is_valid=False,
                error="Syntax validation failed",
                warnings=issues + skipped,
                details=ValidationDetails(
                    kind="syntax",
                    issues=issues,
                    bracket_issues=bracket_issues,
                    syntax_errors=syntax_errors,
                ),
            )

        return ValidationResult(
            is_valid=True,
            warnings=skipped,
            details=ValidationDetails(kind="syntax", passed=True),
        )

    def validate_semantics(self, before: str, after: str) -> ValidationResult:
        """
        Flag structural drift between two versions of a buffer.

        This is a heuristic: it catches fixes that delete or duplicate
        declarations and control flow, it does not prove equivalence.

        Args:
            before: Buffer before the fix
            after: Buffer after the fix

        Returns:
            ValidationResult with kind "semantic"
        """
        after_syntax = self.validate_syntax(after)
        if not after_syntax.is_valid:
            return ValidationResult(
                is_valid=False,
                error="Fixed code has syntax errors",
                warnings=after_syntax.warnings,
                details=ValidationDetails(
                    kind="semantic",
                    cause="syntax_error_in_fixed",
                    syntax_errors=after_syntax.details.syntax_errors,
                    bracket_issues=after_syntax.details.bracket_issues,
                ),
            )

        issues = self.check_semantic_changes(before, after)

        if issues:
            return ValidationResult(
                is_valid=False,
                error="Semantic validation failed",
                warnings=issues,
                details=ValidationDetails(kind="semantic", issues=issues),
            )

        return ValidationResult(
            is_valid=True,
            details=ValidationDetails(kind="semantic", passed=True),
        )

    def check_semantic_changes(self, before: str, after: str) -> List[str]:
        """Line count and keyword count deltas, one message per change."""
        issues = []

        before_lines = line_count(before)
        after_lines = line_count(after)
        if abs(before_lines - after_lines) > self.line_delta_threshold:
            issues.append(f"Significant line count change: {before_lines} -> {after_lines}")

        for keyword, pattern in self._keyword_patterns.items():
            before_count = len(pattern.findall(before))
            after_count = len(pattern.findall(after))
            if before_count != after_count:
                issues.append(f"Keyword '{keyword}' count changed: {before_count} -> {after_count}")

        return issues

    # Fix history

    def record_fix(
        self,
        rule_id: str,
        line: int,
        column: int,
        original_text: str,
        fixed_text: str
    ) -> FixRecord:
        return self.history.record(rule_id, line, column, original_text, fixed_text)

    def can_revert(self, history: Optional[List[FixRecord]] = None) -> bool:
        target = history if history is not None else self.history.export()
        return len(target) > 0

    def revert_last_fix(self, buffer: str, last_fix: FixRecord) -> str:
        """
        Undo a recorded fix by swapping its fixed text back on its line.

        Only the first occurrence of fixed_text on that line is replaced.

        Raises:
            RevertError: If the line no longer exists or the reverted
                buffer would not pass syntax validation
        """
        lines = buffer.split('\n')

        if last_fix.line < 1 or last_fix.line > len(lines):
            raise RevertError(
                f"Cannot revert fix: line {last_fix.line} exceeds code length ({len(lines)} lines)"
            )

        target = lines[last_fix.line - 1]
        lines[last_fix.line - 1] = target.replace(last_fix.fixed_text, last_fix.original_text, 1)
        reverted = '\n'.join(lines)

        validation = self.validate_syntax(reverted)
        if not validation.is_valid:
            logger.error(f"Failed to revert {last_fix.rule_id} fix: {validation.error}")
            raise RevertError(f"Cannot revert fix: reversion would create invalid code: {validation.error}")

        logger.info(f"Reverted {last_fix.rule_id} fix at line {last_fix.line}")
        return reverted

    def export_history(self) -> List[FixRecord]:
        return self.history.export()

    # Snapshots

    def create_snapshot(self, buffer: str, snapshot_id: str) -> None:
        self.snapshots.create(buffer, snapshot_id)

    def compare_with_snapshot(self, buffer: str, snapshot_id: str) -> DiffResult:
        """
        Raises:
            SnapshotNotFoundError: If the snapshot id is unknown
        """
        return self.snapshots.compare(buffer, snapshot_id)

    def clear(self) -> None:
        """Clear fix history and snapshots."""
        self.history.clear()
        self.snapshots.clear()
