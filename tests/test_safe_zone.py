"""
Unit tests for SafeEditGate: safe-zone verdicts and gated replacement.
"""

import pytest

from fixguard.mutation import SafeEditGate
from fixguard.schemas import SourceLocation


@pytest.fixture
def gate(classifier, validator):
    return SafeEditGate(classifier, validator)


def column_of(line_text: str, needle: str) -> int:
    return line_text.index(needle) + 1


class TestFindSafeZone:
    """Test veto order and reasons."""

    def test_plain_code_is_safe(self, gate):
        code = "if (a == b) { run(); }"
        zone = gate.find_safe_zone(code, SourceLocation(line=1, column=column_of(code, "==")))
        assert zone.is_safe
        assert zone.reason == "Position is safe for modifications"
        assert zone.context.is_plain_code

    def test_string_veto(self, gate):
        code = 'const s = "a == b";'
        zone = gate.find_safe_zone(code, SourceLocation(line=1, column=column_of(code, "==")))
        assert not zone.is_safe
        assert zone.reason == 'Position is inside a string literal (")'

    def test_single_comment_veto(self, gate):
        code = "x = 1; // a == b"
        zone = gate.find_safe_zone(code, SourceLocation(line=1, column=column_of(code, "==")))
        assert not zone.is_safe
        assert zone.reason == "Position is inside a single comment"

    def test_multi_comment_veto(self, gate):
        code = "/* a\n == b */ x = 1;"
        zone = gate.find_safe_zone(code, SourceLocation(line=2, column=2))
        assert zone.reason == "Position is inside a multi comment"

    def test_regex_veto(self, gate):
        code = "r = /a==b/;"
        zone = gate.find_safe_zone(code, SourceLocation(line=1, column=column_of(code, "==")))
        assert not zone.is_safe
        assert zone.reason == "Position is inside a regular expression literal"

    def test_template_text_veto(self, gate):
        code = "t = `a == b`;"
        zone = gate.find_safe_zone(code, SourceLocation(line=1, column=column_of(code, "==")))
        assert not zone.is_safe
        assert zone.reason == "Position is inside template literal text"

    def test_template_expression_is_safe(self, gate):
        code = "t = `${a == b}`;"
        zone = gate.find_safe_zone(code, SourceLocation(line=1, column=column_of(code, "==")))
        assert zone.is_safe
        assert zone.context.in_template_expression

    def test_template_veto_wins_over_comment_marker(self, gate):
        code = "`//not a comment`"
        zone = gate.find_safe_zone(code, SourceLocation(line=1, column=column_of(code, "not")))
        assert zone.reason == "Position is inside template literal text"

    def test_out_of_range_location_is_plain_code(self, gate):
        zone = gate.find_safe_zone("x = 1;", SourceLocation(line=9, column=1))
        assert zone.is_safe

    def test_accepts_lint_message(self, gate):
        from fixguard.schemas import LintMessage

        code = "x = 1; // y"
        message = LintMessage(rule_id="no-comment", line=1, column=10)
        assert not gate.find_safe_zone(code, message).is_safe


class TestSafeReplace:
    """Test gated replacement outcomes."""

    CODE = "if (a == b) { run(); }"

    def test_successful_replacement(self, gate):
        result = gate.safe_replace(self.CODE, 1, column_of(self.CODE, "=="), 2, "===")
        assert result.success
        assert result.buffer == "if (a === b) { run(); }"
        assert result.message == "Text replaced successfully"
        assert result.failure_kind is None
        assert result.warnings == []

    def test_insertion(self, gate):
        code = "const a = 1;"
        result = gate.safe_replace(code, 1, column_of(code, ";"), 0, " + 2")
        assert result.success
        assert result.buffer == "const a = 1 + 2;"

    def test_unsafe_position_leaves_buffer(self, gate):
        code = 'const s = "a == b";'
        result = gate.safe_replace(code, 1, column_of(code, "=="), 2, "===")
        assert not result.success
        assert result.buffer == code
        assert result.failure_kind == "unsafe_position"
        assert result.message.startswith("Cannot replace text: Position is inside a string literal")
        assert result.warnings == ["Position is not safe for modification"]

    def test_invalid_syntax_is_rejected(self, gate):
        result = gate.safe_replace(self.CODE, 1, column_of(self.CODE, "=="), 2, "(")
        assert not result.success
        assert result.buffer == self.CODE
        assert result.failure_kind == "invalid_syntax"
        assert result.message.startswith("Replacement would create invalid syntax")
        assert result.warnings

    @pytest.mark.parametrize("length", [-1, 100])
    def test_invalid_bounds(self, gate, length):
        result = gate.safe_replace("x = 1;", 1, 1, length, "y")
        assert not result.success
        assert result.buffer == "x = 1;"
        assert result.failure_kind == "invalid_bounds"
        assert result.warnings

    def test_position_out_of_range(self, gate):
        result = gate.safe_replace("x = 1;", 5, 1, 1, "y")
        assert not result.success
        assert result.buffer == "x = 1;"
        assert result.failure_kind == "position_out_of_range"
        assert result.message.startswith("Error during replacement")

    def test_unexpected_error_is_contained(self, gate, monkeypatch):
        def explode(buffer):
            raise RuntimeError("parser crashed")

        monkeypatch.setattr(gate.validator, "validate_syntax", explode)
        result = gate.safe_replace(self.CODE, 1, column_of(self.CODE, "=="), 2, "===")
        assert not result.success
        assert result.buffer == self.CODE
        assert result.failure_kind == "internal_error"
        assert "parser crashed" in result.message
        assert result.warnings

    def test_replacement_spanning_lines(self, gate):
        code = "a();\nb();\n"
        result = gate.safe_replace(code, 1, 1, 5, "")
        assert result.success
        assert result.buffer == "b();\n"
