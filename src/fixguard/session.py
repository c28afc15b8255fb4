"""
FixSession: the entry point fixers and hosts talk to.

A session owns one classifier cache, one fix history and one snapshot
store. Sessions are not thread safe; give each worker its own.
"""

from typing import Any, Dict, List, Optional, Pattern, Union

from fixguard.config import CLASSIFIER_CONFIG, VALIDATION_CONFIG
from fixguard.context import ContextClassifier
from fixguard.exceptions import RevertError
from fixguard.logging_config import logger
from fixguard.mutation import SafeEditGate, StructuralExtractor, find_pattern_occurrences
from fixguard.schemas import (
    DeclarationFragment,
    DiffResult,
    FixRecord,
    LexicalContext,
    PatternMatch,
    ReplaceResult,
    SafeZone,
    SessionStats,
    SourceLocation,
    ValidationResult,
)
from fixguard.validation import CodeValidator


class FixSession:
    """
    Facade over the classifier, validator, gate and extractor.

    Components:
    1. ContextClassifier - lexical context of offsets (memoized)
    2. CodeValidator - syntax/drift checks, fix history, snapshots
    3. SafeEditGate - safe-zone verdicts and gated replacements
    4. StructuralExtractor - function bodies and declarations
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize a session.

        Args:
            config: Optional overrides, shaped like load_config() output
                ({"classifier": {...}, "validation": {...}})
        """
        config = config or {}
        self.classifier = ContextClassifier({**CLASSIFIER_CONFIG, **config.get("classifier", {})})
        self.validator = CodeValidator({**VALIDATION_CONFIG, **config.get("validation", {})})
        self.gate = SafeEditGate(self.classifier, self.validator)
        self.extractor = StructuralExtractor(self.classifier, self.validator)

        logger.debug("FixSession initialized")

    # Classification

    def classify(self, buffer: str, line: int, column: int) -> LexicalContext:
        return self.classifier.classify(buffer, line, column)

    def find_safe_zone(self, buffer: str, location: SourceLocation) -> SafeZone:
        return self.gate.find_safe_zone(buffer, location)

    def find_pattern_occurrences(
        self,
        buffer: str,
        pattern: Union[str, Pattern[str]],
        **skip_flags: bool
    ) -> List[PatternMatch]:
        return find_pattern_occurrences(self.classifier, buffer, pattern, **skip_flags)

    # Mutation

    def safe_replace(
        self,
        buffer: str,
        line: int,
        column: int,
        length: int,
        replacement: str
    ) -> ReplaceResult:
        return self.gate.safe_replace(buffer, line, column, length, replacement)

    def extract_function_body(self, buffer: str, marker: str) -> str:
        return self.extractor.extract_function_body(buffer, marker)

    def extract_declaration(self, buffer: str, name: str) -> Optional[DeclarationFragment]:
        return self.extractor.extract_declaration(buffer, name)

    # Validation

    def validate_syntax(self, buffer: str) -> ValidationResult:
        return self.validator.validate_syntax(buffer)

    def validate_semantics(self, before: str, after: str) -> ValidationResult:
        return self.validator.validate_semantics(before, after)

    # History and snapshots

    def record_fix(
        self,
        rule_id: str,
        line: int,
        column: int,
        original_text: str,
        fixed_text: str
    ) -> None:
        self.validator.record_fix(rule_id, line, column, original_text, fixed_text)

    def export_history(self) -> List[FixRecord]:
        return self.validator.export_history()

    def can_revert(self) -> bool:
        return self.validator.can_revert()

    def revert_last_fix(self, buffer: str, last_fix: Optional[FixRecord] = None) -> str:
        """
        Revert a fix (the most recent one by default).

        Raises:
            RevertError: If there is nothing to revert or the revert is invalid
        """
        last_fix = last_fix or self.validator.history.last()
        if last_fix is None:
            raise RevertError("Cannot revert fix: fix history is empty")
        return self.validator.revert_last_fix(buffer, last_fix)

    def create_snapshot(self, buffer: str, snapshot_id: str) -> None:
        self.validator.create_snapshot(buffer, snapshot_id)

    def compare_with_snapshot(self, buffer: str, snapshot_id: str) -> DiffResult:
        """
        Raises:
            SnapshotNotFoundError: If the snapshot id is unknown
        """
        return self.validator.compare_with_snapshot(buffer, snapshot_id)

    # Housekeeping

    def clear_cache(self) -> None:
        self.classifier.clear_cache()

    def reset(self) -> None:
        """Clear the classifier cache, fix history and snapshots."""
        self.classifier.clear_cache()
        self.validator.clear()

    def get_stats(self) -> SessionStats:
        cache = self.classifier.cache_stats()
        return SessionStats(
            cache_size=cache["size"],
            max_cache_size=cache["max_size"],
            history_size=len(self.validator.history),
            snapshot_count=len(self.validator.snapshots),
            last_fix_time=self.validator.history.last_fix_time,
        )
