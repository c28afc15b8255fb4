from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Literal


# Locations

class SourceLocation(BaseModel):
    """1-indexed line/column pair inside a buffer."""
    line: int
    column: int


class LintMessage(SourceLocation):
    """
    A single lint violation as reported by the linter.
    Fixers receive these and decide whether they can repair them.
    """
    rule_id: str
    message: str = ""
    end_line: Optional[int] = None
    end_column: Optional[int] = None
    severity: int = 2  # 1 = warning, 2 = error


# Lexical classification

class LexicalContext(BaseModel):
    """
    Lexical classification of one buffer offset.
    At most one of in_string / in_comment / in_regex / in_template is set.
    """
    model_config = ConfigDict(frozen=True)

    in_string: bool = False
    in_comment: bool = False
    in_regex: bool = False
    in_template: bool = False
    in_template_expression: bool = False  # Inside ${...} of a template
    string_char: Optional[Literal["'", '"', "`"]] = None
    comment_type: Optional[Literal["single", "multi"]] = None

    @property
    def is_plain_code(self) -> bool:
        return not (self.in_string or self.in_comment or self.in_regex or self.in_template)


class SafeZone(BaseModel):
    """Verdict of the safe-edit gate for one location."""
    is_safe: bool
    reason: str
    context: LexicalContext


class PatternMatch(BaseModel):
    """A regex match found in plain code."""
    match: str
    index: int
    line: int
    column: int
    context: LexicalContext
    groups: List[Optional[str]] = Field(default_factory=list)


# Validation

class ValidationDetails(BaseModel):
    """Structured diagnostic payload attached to a ValidationResult."""
    kind: Literal["syntax", "semantic"]
    passed: bool = False
    issues: List[str] = Field(default_factory=list)
    bracket_issues: List[str] = Field(default_factory=list)
    syntax_errors: List[str] = Field(default_factory=list)
    cause: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Outcome of a syntax or semantic validation pass.
    Produced fresh per call.
    """
    is_valid: bool
    error: Optional[str] = None
    warnings: List[str] = Field(default_factory=list)
    details: ValidationDetails


class FixRecord(BaseModel):
    """An applied fix, kept in the bounded fix history."""
    rule_id: str
    line: int
    column: int
    original_text: str
    fixed_text: str
    timestamp: datetime = Field(default_factory=datetime.now)


class DiffResult(BaseModel):
    """Coarse comparison between a buffer and a stored snapshot."""
    identical: bool
    length_diff: int
    line_diff: int
    has_changes: bool


class DeclarationFragment(BaseModel):
    """A variable declaration cut out of a buffer."""
    text: str
    start_line: int


# Mutation

FailureKind = Literal[
    "unsafe_position",
    "invalid_syntax",
    "invalid_bounds",
    "position_out_of_range",
    "internal_error",
]


class ReplaceResult(BaseModel):
    """
    Result of a gated in-place replacement.
    On failure `buffer` is always the untouched original.
    """
    success: bool
    buffer: str
    message: str
    warnings: List[str] = Field(default_factory=list)
    failure_kind: Optional[FailureKind] = None


class FixResult(BaseModel):
    """Result returned by a rule fixer."""
    success: bool
    buffer: str
    message: str
    warnings: List[str] = Field(default_factory=list)


class FixerInfo(BaseModel):
    """Registry bookkeeping for one fixer."""
    rule_id: str
    complexity: Literal["simple", "complex"] = "simple"
    module_path: str
    enabled: bool = True


class SessionStats(BaseModel):
    """Snapshot of a FixSession's in-memory state."""
    cache_size: int
    max_cache_size: int
    history_size: int
    snapshot_count: int
    last_fix_time: Optional[datetime] = None


class RegistryStats(BaseModel):
    total: int
    enabled: int
    disabled: int
    complexity: Dict[str, int] = Field(default_factory=dict)


class FixerValidationReport(BaseModel):
    valid: List[str] = Field(default_factory=list)
    invalid: List[Dict[str, Any]] = Field(default_factory=list)
