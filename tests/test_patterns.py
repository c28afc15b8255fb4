"""
Unit tests for pattern search and message helpers.
"""

import re

from fixguard.mutation import comment_out_lines, find_pattern_occurrences, find_quoted_name


CODE = (
    'a == b; s = "c == d"; // e == f\n'
    "r = /x==y/; t = `g == h`; u = `${i == j}`;"
)


class TestFindPatternOccurrences:
    """Test context-filtered regex search."""

    def test_defaults_keep_plain_code_only(self, classifier):
        matches = find_pattern_occurrences(classifier, CODE, "==")
        assert len(matches) == 1
        assert matches[0].index == 2
        assert (matches[0].line, matches[0].column) == (1, 3)
        assert matches[0].context.is_plain_code

    def test_include_strings(self, classifier):
        matches = find_pattern_occurrences(classifier, CODE, "==", skip_strings=False)
        assert len(matches) == 2
        assert matches[1].context.in_string

    def test_include_comments(self, classifier):
        matches = find_pattern_occurrences(classifier, CODE, "==", skip_comments=False)
        assert [m.context.in_comment for m in matches] == [False, True]

    def test_include_regex(self, classifier):
        matches = find_pattern_occurrences(classifier, CODE, "==", skip_regex=False)
        assert len(matches) == 2
        assert matches[1].line == 2
        assert matches[1].column == CODE.split("\n")[1].index("==") + 1

    def test_include_templates(self, classifier):
        matches = find_pattern_occurrences(classifier, CODE, "==", skip_templates=False)
        assert len(matches) == 3
        assert not matches[1].context.in_template_expression
        assert matches[2].context.in_template_expression

    def test_no_filters(self, classifier):
        matches = find_pattern_occurrences(
            classifier, CODE, "==",
            skip_strings=False, skip_comments=False, skip_regex=False, skip_templates=False,
        )
        assert len(matches) == 6

    def test_groups_and_compiled_pattern(self, classifier):
        matches = find_pattern_occurrences(classifier, CODE, re.compile(r"(\w+) == (\w+)"))
        assert len(matches) == 1
        assert matches[0].match == "a == b"
        assert matches[0].groups == ["a", "b"]

    def test_no_matches(self, classifier):
        assert find_pattern_occurrences(classifier, CODE, "!==") == []


class TestFindQuotedName:
    """Test name extraction from lint messages."""

    def test_first_quoted_name(self):
        assert find_quoted_name("'foo' is defined but never used") == "foo"
        assert find_quoted_name("'a' is assigned to 'b'") == "a"

    def test_no_quoted_name(self):
        assert find_quoted_name("Missing semicolon.") is None


class TestCommentOutLines:
    """Test line commenting."""

    def test_keeps_indentation_and_blank_lines(self):
        assert comment_out_lines("  a();\n\n  b();") == "  // a();\n\n  // b();"

    def test_blank_input(self):
        assert comment_out_lines("   \n") == ""
        assert comment_out_lines("") == ""
