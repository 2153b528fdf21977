"""
Tests for configuration headers and specification documents.

Tests cover header parsing, comment stripping, blank-line requirement
splitting, canonical document printing, and the raising entry point
with its failing-requirement index.
"""

import pytest

from tctl.parser.ast_nodes import Always, Globally, LanguagePredicate, Quantified
from tctl.parser.grammar import ParseError
from tctl.parser.language import Language, LanguageExpression
from tctl.parser.specification import (
    Configuration,
    Specification,
    parse_specification,
    split_header,
    split_requirements,
    strip_comments,
)

DOCUMENT = """// spec:language VHDL

A G recoveryMode = '1'

A G failureCount = 3

"""

DOCUMENT_WITH_COMMENTS = """// spec:language VHDL

-- Another comment.
-- Another comment2.

-- A recovery mode requirement.
A G recoveryMode = '1' -- Check recovery mode is high.
-- Comment 3

-- A failure count requirement.
-- Multiline comment.
A G failureCount = 3

"""


def always_globally(text: str) -> Quantified:
    return Quantified(Always(Globally(LanguagePredicate(LanguageExpression.parse(text)))))


@pytest.fixture
def expected() -> Specification:
    return Specification(
        Configuration(Language.VHDL),
        (always_globally("recoveryMode = '1'"), always_globally("failureCount = 3")),
    )


class TestConfiguration:
    """Test the configuration header."""

    def test_print(self) -> None:
        assert str(Configuration(Language.VHDL)) == "// spec:language VHDL"

    def test_parse(self) -> None:
        assert Configuration.parse("// spec:language VHDL") == Configuration(Language.VHDL)

    def test_extra_directives_ignored(self) -> None:
        header = "// spec:author someone\n// spec:language VHDL\n// spec:version 2"
        assert Configuration.parse(header) == Configuration(Language.VHDL)

    @pytest.mark.parametrize(
        "header",
        [
            "",
            "//",
            "// spec:language",
            "// spec:language none",
            "// spec:language VHDLA G recoveryMode = '1'",
            "// spec:author someone",
            "// spec:language VHDL\n// spec:language VHDL",
            "// spec:language VHDL\n// a plain comment",
        ],
    )
    def test_invalid(self, header: str) -> None:
        assert Configuration.parse(header) is None


class TestDocumentHelpers:
    """Test header splitting, comment stripping and block splitting."""

    def test_split_header(self) -> None:
        header, body = split_header("  // spec:language VHDL\n// spec:x\n\nA G ready = '1'\n")
        assert header == "// spec:language VHDL\n// spec:x"
        assert body == ["", "A G ready = '1'"]

    def test_split_header_requires_comment(self) -> None:
        assert split_header("A G ready = '1'") is None
        assert split_header("") is None

    def test_strip_comments(self) -> None:
        lines = ["-- whole line", "A G ready = '1' -- trailing", "", "  -- indented"]
        assert strip_comments(lines) == ["A G ready = '1' ", ""]

    def test_split_requirements(self) -> None:
        lines = ["", "a = '1'", "", "", "b = '1'", "-> c = '1'", ""]
        assert split_requirements(lines) == ["a = '1'", "b = '1'\n-> c = '1'"]


class TestSpecification:
    """Test document parsing and printing."""

    def test_print(self, expected: Specification) -> None:
        assert str(expected) == (
            "// spec:language VHDL\n\nA G recoveryMode = '1'\n\nA G failureCount = 3\n"
        )

    def test_parse(self, expected: Specification) -> None:
        assert Specification.parse(DOCUMENT) == expected

    def test_parse_with_comments(self, expected: Specification) -> None:
        assert Specification.parse(DOCUMENT_WITH_COMMENTS) == expected

    def test_round_trip(self, expected: Specification) -> None:
        assert Specification.parse(str(expected)) == expected
        assert str(Specification.parse(DOCUMENT_WITH_COMMENTS)) == str(expected)

    def test_configuration_only(self) -> None:
        result = Specification.parse("// spec:language VHDL")
        assert result == Specification(Configuration(Language.VHDL), ())
        assert str(result) == "// spec:language VHDL\n\n\n"
        assert Specification.parse(str(result)) == result

    def test_requirement_spanning_lines(self) -> None:
        result = Specification.parse(
            "// spec:language VHDL\n\nA G failureCount = 3\n-> A F recoveryMode = '1'\n",
        )
        assert result is not None
        assert str(result.requirements[0]) == "A G failureCount = 3 -> A F recoveryMode = '1'"

    def test_requirements_are_tuple(self, expected: Specification) -> None:
        spec = Specification(Configuration(Language.VHDL), list(expected.requirements))
        assert isinstance(spec.requirements, tuple)
        assert hash(spec) == hash(expected)

    @pytest.mark.parametrize(
        "text",
        [
            "// spec:language VHDL\n\nA G recoveryMode = '1'\n\nA G failureCount == 3\n\n",
            "// spec:language VHDL\n\nA G recoveryMode = '1'\nA G failureCount = 3\n\n",
            "// spec:language VHDLA G recoveryMode = '1'\n\nA G failureCount == 3\n\n",
            "// spec:language undefined\n\nA G recoveryMode = '1'\n\nA G failureCount == 3\n\n",
            "A G recoveryMode = '1'\n\nA G failureCount == 3\n\n",
            "// spec:language none\n\n",
            "",
            "//",
        ],
    )
    def test_invalid(self, text: str) -> None:
        assert Specification.parse(text) is None


class TestParseSpecification:
    """Test the raising entry point."""

    def test_success(self, expected: Specification) -> None:
        assert parse_specification(DOCUMENT) == expected

    def test_failing_requirement_index(self) -> None:
        text = "// spec:language VHDL\n\nA G recoveryMode = '1'\n\nA G failureCount == 3\n"
        with pytest.raises(ParseError, match="Requirement 2") as info:
            parse_specification(text)
        assert info.value.requirement == 2
        assert info.value.text == "A G failureCount == 3"

    def test_missing_header(self) -> None:
        with pytest.raises(ParseError, match="configuration header") as info:
            parse_specification("A G recoveryMode = '1'")
        assert info.value.requirement is None

    def test_bad_header(self) -> None:
        with pytest.raises(ParseError, match="exactly one"):
            parse_specification("// spec:language Verilog\n\nA G ready = '1'")

    def test_max_depth(self) -> None:
        text = "// spec:language VHDL\n\n" + "!" * 20 + "true\n"
        assert parse_specification(text).requirements
        with pytest.raises(ParseError):
            parse_specification(text, max_depth=5)
