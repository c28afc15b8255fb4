"""
Integration tests for FixSession: the full classify -> replace -> validate
-> record -> revert workflow.
"""

import pytest

from fixguard.exceptions import RevertError, SnapshotNotFoundError
from fixguard.session import FixSession


class TestWorkflow:
    """Test a fixer-style round trip over a real file."""

    def test_fix_loose_equality(self, session, sample_js):
        before = sample_js.read_text(encoding="utf-8")

        matches = session.find_pattern_occurrences(before, r"(?<!=)==(?!=)")
        assert len(matches) == 1
        match = matches[0]
        assert (match.line, match.column) == (4, 9)

        session.create_snapshot(before, "before")
        result = session.safe_replace(before, match.line, match.column, 2, "===")
        assert result.success

        after = result.buffer
        assert session.validate_semantics(before, after).is_valid
        session.record_fix("eqeqeq", match.line, match.column, "==", "===")

        diff = session.compare_with_snapshot(after, "before")
        assert diff.has_changes
        assert diff.length_diff == 1
        assert diff.line_diff == 0

        assert session.can_revert()
        assert session.revert_last_fix(after) == before

    def test_skip_flags_pass_through(self, session, sample_js):
        code = sample_js.read_text(encoding="utf-8")
        everything = session.find_pattern_occurrences(
            code, "==", skip_strings=False, skip_comments=False,
        )
        assert len(everything) == 3

    def test_extraction_on_file(self, session, sample_js):
        code = sample_js.read_text(encoding="utf-8")
        body = session.extract_function_body(code, "function check(")
        assert body.startswith("function check(a, b) {")
        assert body.endswith("return false;\n}")

        declaration = session.extract_declaration(code, "greeting")
        assert declaration.text == 'const greeting = "a == b";'
        assert declaration.start_line == 1

    def test_classify_and_safe_zone(self, session, sample_js):
        code = sample_js.read_text(encoding="utf-8")
        assert session.classify(code, 2, 6).in_comment
        assert session.classify(code, 5, 13).in_regex

        from fixguard.schemas import SourceLocation
        assert not session.find_safe_zone(code, SourceLocation(line=1, column=20)).is_safe


class TestHistoryAndSnapshots:
    """Test history bookkeeping exposed by the session."""

    def test_record_fix_returns_nothing(self, session):
        assert session.record_fix("semi", 1, 2, "", ";") is None
        assert len(session.export_history()) == 1

    def test_revert_with_empty_history(self, session):
        assert not session.can_revert()
        with pytest.raises(RevertError, match="fix history is empty"):
            session.revert_last_fix("a;")

    def test_revert_explicit_record(self, session):
        session.record_fix("eqeqeq", 1, 3, "==", "===")
        session.record_fix("semi", 2, 2, "", ";")
        first = session.export_history()[0]
        assert session.revert_last_fix("a === b;", first) == "a == b;"

    def test_missing_snapshot(self, session):
        with pytest.raises(SnapshotNotFoundError):
            session.compare_with_snapshot("a", "never")


class TestHousekeeping:
    """Test stats, cache clearing and reset."""

    def test_stats(self, session):
        stats = session.get_stats()
        assert stats.cache_size == 0
        assert stats.max_cache_size == 1000
        assert stats.history_size == 0
        assert stats.snapshot_count == 0
        assert stats.last_fix_time is None

        session.classify("'a'", 1, 2)
        session.record_fix("semi", 1, 2, "", ";")
        session.create_snapshot("a", "s")

        stats = session.get_stats()
        assert stats.cache_size == 1
        assert stats.history_size == 1
        assert stats.snapshot_count == 1
        assert stats.last_fix_time is not None

    def test_clear_cache_keeps_history(self, session):
        session.classify("'a'", 1, 2)
        session.record_fix("semi", 1, 2, "", ";")
        session.clear_cache()
        assert session.get_stats().cache_size == 0
        assert session.get_stats().history_size == 1

    def test_reset(self, session):
        session.classify("'a'", 1, 2)
        session.record_fix("semi", 1, 2, "", ";")
        session.create_snapshot("a", "s")
        session.reset()

        stats = session.get_stats()
        assert (stats.cache_size, stats.history_size, stats.snapshot_count) == (0, 0, 0)

    def test_config_overrides(self):
        session = FixSession({
            "classifier": {"max_cache_size": 5},
            "validation": {"language": "typescript", "history_limit": 2},
        })
        assert session.get_stats().max_cache_size == 5
        assert session.validator.syntax_checker.language == "typescript"
        for i in range(3):
            session.record_fix(f"r{i}", 1, 1, "a", "b")
        assert [r.rule_id for r in session.export_history()] == ["r1", "r2"]

    def test_default_history_keeps_last_hundred(self, session):
        for i in range(101):
            session.record_fix(f"r{i}", 1, 1, "a", "b")

        history = session.export_history()
        assert len(history) == 100
        assert "r0" not in [record.rule_id for record in history]
        assert history[0].rule_id == "r1"
        assert history[-1].rule_id == "r100"
