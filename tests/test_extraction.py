"""
Unit tests for StructuralExtractor.
"""

import pytest

from fixguard.mutation import StructuralExtractor


@pytest.fixture
def extractor(classifier, validator):
    return StructuralExtractor(classifier, validator)


FUNCTION_CODE = (
    "function foo(a) {\n"
    "  const s = \"}\";\n"
    "  // }\n"
    "  return a;\n"
    "}\n"
    "foo(1);\n"
)


class TestExtractFunctionBody:
    """Test brace-matched function extraction."""

    def test_braces_in_strings_and_comments_are_ignored(self, extractor):
        fragment = extractor.extract_function_body(FUNCTION_CODE, "function foo(")
        assert fragment == FUNCTION_CODE[:FUNCTION_CODE.index("foo(1);")].rstrip("\n")
        assert fragment.endswith("return a;\n}")

    def test_missing_marker(self, extractor):
        assert extractor.extract_function_body(FUNCTION_CODE, "function bar(") == ""

    def test_unterminated_function_returns_marker(self, extractor):
        code = "function foo() {\n  return 1;\n"
        assert extractor.extract_function_body(code, "function foo(") == "function foo("

    def test_unparseable_fragment_returns_marker(self, extractor):
        code = "if (x) { return; }"
        assert extractor.extract_function_body(code, "x) {") == "x) {"

    def test_template_substitution_braces_balance(self, extractor):
        code = "function t(a) {\n  return `${a}`;\n}\nt(1);"
        fragment = extractor.extract_function_body(code, "function t(")
        assert fragment == "function t(a) {\n  return `${a}`;\n}"

    def test_without_parser_fragment_is_returned(self, extractor):
        extractor.validator.syntax_checker.parsers = {}
        code = "if (x) { return; }"
        assert extractor.extract_function_body(code, "x) {") == "x) { return; }"


class TestExtractDeclaration:
    """Test declaration extraction."""

    CODE = 'let a = 1;\nconst msg = "a;b"; // x;\nvar z = 3;'

    def test_semicolon_in_string_is_skipped(self, extractor):
        fragment = extractor.extract_declaration(self.CODE, "msg")
        assert fragment.text == 'const msg = "a;b";'
        assert fragment.start_line == 2

    def test_first_line(self, extractor):
        fragment = extractor.extract_declaration(self.CODE, "a")
        assert fragment.text == "let a = 1;"
        assert fragment.start_line == 1

    def test_missing_declaration(self, extractor):
        assert extractor.extract_declaration(self.CODE, "nothing") is None

    def test_name_must_be_whole_word(self, extractor):
        code = "const totalSum = 1;\nconst total = 2;"
        fragment = extractor.extract_declaration(code, "total")
        assert fragment.text == "const total = 2;"
        assert fragment.start_line == 2

    def test_no_semicolon_gives_empty_text(self, extractor):
        fragment = extractor.extract_declaration("const total = 5\n", "total")
        assert fragment.text == ""
        assert fragment.start_line == 1

    def test_semicolon_in_comment_is_skipped(self, extractor):
        code = "let x = 1 // ;\n;"
        fragment = extractor.extract_declaration(code, "x")
        assert fragment.text == "let x = 1 // ;\n;"

    def test_crlf_line_counting(self, extractor):
        fragment = extractor.extract_declaration("a();\r\nlet b = 1;", "b")
        assert fragment.start_line == 2
        assert fragment.text == "let b = 1;"
