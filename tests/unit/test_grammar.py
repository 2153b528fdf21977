"""
Tests for the TCTL grammar/parser.

Tests cover embedded predicates, negation scoping, grouping, the
left-to-right operator scan, global and path quantifiers, constrained
expressions, round-tripping through the canonical printer, the
recursion bound, and error handling.
"""

import pytest

from tctl.parser.ast_nodes import (
    Always,
    Conjunction,
    Constrained,
    ConstrainedExpression,
    Disjunction,
    Eventually,
    Finally,
    Globally,
    Implication,
    LanguagePredicate,
    Negation,
    Next,
    Precedence,
    Quantified,
    Until,
    Weak,
)
from tctl.parser.constraints import ComparisonOperator, ConstrainedStatement, Constraint
from tctl.parser.grammar import ParseError, TCTLParser
from tctl.parser.language import LanguageExpression
from tctl.parser.units import EnergyUnit, TimeUnit


def leaf(text: str) -> LanguagePredicate:
    """Helper: build a VHDL predicate node."""
    expression = LanguageExpression.parse(text)
    assert expression is not None
    return LanguagePredicate(expression)


RECOVERY = "recoveryMode = '1'"
FAILURES = "failureCount = 3"


class TestPredicates:
    """Test parsing of embedded VHDL predicates."""

    def test_predicate(self, parser: TCTLParser) -> None:
        assert parser.expression(RECOVERY) == leaf(RECOVERY)

    def test_surrounding_whitespace(self, parser: TCTLParser) -> None:
        assert parser.expression(f"  \n{RECOVERY}\t ") == leaf(RECOVERY)

    def test_boolean(self, parser: TCTLParser) -> None:
        assert str(parser.expression("TRUE")) == "true"

    def test_bracketed_predicate(self, parser: TCTLParser) -> None:
        result = parser.expression("(count + 1) = 3")
        assert isinstance(result, LanguagePredicate)
        assert str(result) == "(count + 1) = 3"

    def test_vhdl_logical_operators(self, parser: TCTLParser) -> None:
        result = parser.expression("bootMode = '1' and bootSuccess = '1'")
        assert isinstance(result, LanguagePredicate)

    def test_string_literal_hides_operators(self, parser: TCTLParser) -> None:
        result = parser.expression('message = "a ^ b -> c"')
        assert isinstance(result, LanguagePredicate)

    @pytest.mark.parametrize(
        "text",
        [
            "recoveryMode == '1'",
            "recoveryMode = '11'",
            "invalid",
            "x!! = 5",
            "count + 1",
        ],
    )
    def test_invalid_predicates(self, parser: TCTLParser, text: str) -> None:
        assert parser.expression(text) is None


class TestNegation:
    """Test negation scoping."""

    def test_single_token(self, parser: TCTLParser) -> None:
        assert parser.expression("!false") == Negation(leaf("false"))

    def test_negated_quantifier(self, parser: TCTLParser) -> None:
        expected = Negation(
            Quantified(Always(Globally(Negation(leaf("false"))))),
        )
        assert parser.expression("!A G !false") == expected

    def test_multi_token_predicate_rejected(self, parser: TCTLParser) -> None:
        assert parser.expression("!recoveryMode = '1'") is None

    def test_bracketed_predicate(self, parser: TCTLParser) -> None:
        result = parser.expression("!(recoveryMode = '1')")
        assert result == Negation(Precedence(leaf(RECOVERY)))

    def test_double_negation(self, parser: TCTLParser) -> None:
        assert parser.expression("!!true") == Negation(Negation(leaf("true")))

    def test_negation_of_quantified_inside_path(self, parser: TCTLParser) -> None:
        result = parser.expression("A G !false")
        assert result == Quantified(Always(Globally(Negation(leaf("false")))))


class TestBinaryOperators:
    """Test ->, ^ and V."""

    def test_implication(self, parser: TCTLParser) -> None:
        result = parser.expression(f"{FAILURES} -> {RECOVERY}")
        assert result == Implication(leaf(FAILURES), leaf(RECOVERY))

    def test_conjunction(self, parser: TCTLParser) -> None:
        assert parser.expression("a = '1' ^ b = '1'") == Conjunction(leaf("a = '1'"), leaf("b = '1'"))

    def test_disjunction(self, parser: TCTLParser) -> None:
        assert parser.expression("a = '1' V b = '1'") == Disjunction(leaf("a = '1'"), leaf("b = '1'"))

    def test_leftmost_operator_splits_first(self, parser: TCTLParser) -> None:
        result = parser.expression("a = '1' ^ b = '1' V c = '1'")
        assert result == Conjunction(
            leaf("a = '1'"), Disjunction(leaf("b = '1'"), leaf("c = '1'")),
        )

    def test_logical_found_before_implication(self, parser: TCTLParser) -> None:
        result = parser.expression("a = '1' -> b = '1' ^ c = '1'")
        assert result == Conjunction(
            Implication(leaf("a = '1'"), leaf("b = '1'")), leaf("c = '1'"),
        )

    def test_implication_right_nested(self, parser: TCTLParser) -> None:
        result = parser.expression("a = '1' -> b = '1' -> c = '1'")
        assert result == Implication(
            leaf("a = '1'"), Implication(leaf("b = '1'"), leaf("c = '1'")),
        )

    def test_operator_needs_whitespace(self, parser: TCTLParser) -> None:
        assert parser.expression("a = '1'^b = '1'") is None

    @pytest.mark.parametrize(
        "text, node_type",
        [
            ("(a = '1') ^b = '1'", Conjunction),
            ("(a = '1') Vb = '1'", Disjunction),
            ("(a = '1')->b = '1'", Implication),
        ],
    )
    def test_operator_after_group_needs_no_whitespace(
        self, parser: TCTLParser, text: str, node_type: type,
    ) -> None:
        result = parser.expression(text)
        assert result == node_type(Precedence(leaf("a = '1'")), leaf("b = '1'"))

    def test_identifier_containing_v(self, parser: TCTLParser) -> None:
        result = parser.expression("Vdd = '1' V vOut = '0'")
        assert result == Disjunction(leaf("Vdd = '1'"), leaf("vOut = '0'"))

    def test_grouping_then_operator(self, parser: TCTLParser) -> None:
        result = parser.expression("(a = '1' ^ b = '1') V c = '1'")
        assert result == Disjunction(
            Precedence(Conjunction(leaf("a = '1'"), leaf("b = '1'"))), leaf("c = '1'"),
        )

    def test_grouping_then_implication(self, parser: TCTLParser) -> None:
        result = parser.expression("(a = '1') -> A F b = '1'")
        assert result == Implication(
            Precedence(leaf("a = '1'")), Quantified(Always(Finally(leaf("b = '1'")))),
        )

    def test_operator_inside_group_ignored(self, parser: TCTLParser) -> None:
        result = parser.expression("A G (a = '1' V b = '1')")
        assert result == Quantified(
            Always(Globally(Precedence(Disjunction(leaf("a = '1'"), leaf("b = '1'"))))),
        )


class TestQuantifiers:
    """Test global (A, E) and path (G, X, F, U, W) quantifiers."""

    def test_always_globally(self, parser: TCTLParser) -> None:
        assert parser.expression(f"A G {RECOVERY}") == Quantified(Always(Globally(leaf(RECOVERY))))

    def test_eventually_globally(self, parser: TCTLParser) -> None:
        assert parser.expression(f"E G {RECOVERY}") == Quantified(
            Eventually(Globally(leaf(RECOVERY))),
        )

    def test_next(self, parser: TCTLParser) -> None:
        assert parser.expression(f"A X {RECOVERY}") == Quantified(Always(Next(leaf(RECOVERY))))

    def test_finally(self, parser: TCTLParser) -> None:
        assert parser.expression(f"E F {RECOVERY}") == Quantified(
            Eventually(Finally(leaf(RECOVERY))),
        )

    def test_until(self, parser: TCTLParser) -> None:
        assert parser.expression(f"E {RECOVERY} U {FAILURES}") == Quantified(
            Eventually(Until(leaf(RECOVERY), leaf(FAILURES))),
        )

    def test_weak(self, parser: TCTLParser) -> None:
        assert parser.expression(f"A {RECOVERY} W {FAILURES}") == Quantified(
            Always(Weak(leaf(RECOVERY), leaf(FAILURES))),
        )

    def test_nested_through_path(self, parser: TCTLParser) -> None:
        inner = Quantified(Always(Globally(leaf(RECOVERY))))
        assert parser.expression(f"A G A G {RECOVERY}") == Quantified(Always(Globally(inner)))

    def test_nested_through_next(self, parser: TCTLParser) -> None:
        text = "A X A G operationalMode = '1' -> E operationalMode = '1' U bootMode = '1'"
        expected = Quantified(
            Always(
                Next(
                    Quantified(
                        Always(
                            Globally(
                                Implication(
                                    leaf("operationalMode = '1'"),
                                    Quantified(
                                        Eventually(
                                            Until(leaf("operationalMode = '1'"), leaf("bootMode = '1'")),
                                        ),
                                    ),
                                ),
                            ),
                        ),
                    ),
                ),
            ),
        )
        assert parser.expression(text) == expected

    def test_quantified_lhs_of_until(self, parser: TCTLParser) -> None:
        tree = Quantified(
            Always(Until(Quantified(Eventually(Finally(leaf("x = '1'")))), leaf("y = '1'"))),
        )
        assert str(tree) == "A E F x = '1' U y = '1'"
        assert parser.expression(str(tree)) == tree

    def test_quantifier_in_implication(self, parser: TCTLParser) -> None:
        result = parser.expression(f"{FAILURES} -> A F {RECOVERY}")
        assert result == Implication(leaf(FAILURES), Quantified(Always(Finally(leaf(RECOVERY)))))


class TestGloballyQuantified:
    """Test the global-quantifier entry point."""

    def test_always(self, parser: TCTLParser) -> None:
        assert parser.globally_quantified(f"A G {RECOVERY}") == Always(Globally(leaf(RECOVERY)))

    def test_nested(self, parser: TCTLParser) -> None:
        assert parser.globally_quantified(f"A G A G {RECOVERY}") is not None

    @pytest.mark.parametrize(
        "text",
        [
            "AG recoveryMode = '1'",
            "A G recoveryMode == '1'",
            "A A recoveryMode = '1'",
            "A A G recoveryMode = '1'",
            "A E F recoveryMode = '1'",
            "A recoveryMode = '1'",
            "G recoveryMode = '1'",
            "A",
            "",
        ],
    )
    def test_invalid(self, parser: TCTLParser, text: str) -> None:
        assert parser.globally_quantified(text) is None


class TestPathQuantified:
    """Test the path-quantifier entry point."""

    @pytest.mark.parametrize("symbol, node_type", [("G", Globally), ("X", Next), ("F", Finally)])
    def test_unary(self, parser: TCTLParser, symbol: str, node_type) -> None:
        assert parser.path_quantified(f"{symbol} {RECOVERY}") == node_type(leaf(RECOVERY))

    @pytest.mark.parametrize("symbol, node_type", [("U", Until), ("W", Weak)])
    def test_binary(self, parser: TCTLParser, symbol: str, node_type) -> None:
        expected = node_type(leaf(RECOVERY), leaf(FAILURES))
        assert parser.path_quantified(f"{RECOVERY} {symbol} {FAILURES}") == expected

    def test_binary_across_newlines(self, parser: TCTLParser) -> None:
        expected = Until(leaf(RECOVERY), leaf(FAILURES))
        assert parser.path_quantified(f"{RECOVERY}\nU\n{FAILURES}") == expected

    @pytest.mark.parametrize(
        "text",
        [
            "recoveryMode = '1'",
            "GrecoveryMode = '1'",
            "G recoveryMode == '1'",
            "G G recoveryMode = '1'",
            "",
            "U",
            "W",
            "recoveryMode = '1' U",
            "recoveryMode = '1' W",
            "U recoveryMode = '1'",
            "W recoveryMode = '1'",
            " U recoveryMode = '1' ",
            "recoveryMode = '1' U ",
            "failureCount == 3 U recoveryMode = '1'",
            "failureCount = 3 U recoveryMode == '1'",
        ],
    )
    def test_invalid(self, parser: TCTLParser, text: str) -> None:
        assert parser.path_quantified(text) is None


class TestConstrainedExpressions:
    """Test constrained expressions and their trailing operators."""

    @pytest.fixture
    def expected(self) -> ConstrainedExpression:
        return ConstrainedExpression(
            Quantified(Always(Finally(leaf("true")))),
            [
                ConstrainedStatement(ComparisonOperator.LESS_THAN, Constraint(100, TimeUnit.ns)),
                ConstrainedStatement(ComparisonOperator.LESS_THAN, Constraint(200, EnergyUnit.mJ)),
            ],
        )

    def test_parse(self, parser: TCTLParser, expected: ConstrainedExpression) -> None:
        text = "{A F true}_{t < 100 ns, E < 200 mJ}"
        assert parser.constrained_expression(text) == expected
        assert parser.expression(text) == Constrained(expected)

    @pytest.mark.parametrize(
        "text",
        [
            "\n{\nA F true\n}_{\nt\n<\n100\nns,\nE\n<\n200\nmJ}",
            "\n{\nA F true\n}\n_\n{\nt\n<\n100\nns,\nE\n<\n200\nmJ}",
        ],
    )
    def test_whitespace(self, parser: TCTLParser, text: str, expected: ConstrainedExpression) -> None:
        assert parser.constrained_expression(text) == expected

    def test_less_than_or_equal(self, parser: TCTLParser) -> None:
        result = parser.constrained_expression("{A F done = '1'}_{t <= 2 us}")
        assert result is not None
        assert result.constraints[0].operator is ComparisonOperator.LESS_THAN_OR_EQUAL

    def test_trailing_implication(self, parser: TCTLParser, expected: ConstrainedExpression) -> None:
        result = parser.expression("{A F true}_{t < 100 ns, E < 200 mJ} -> A G ready = '1'")
        assert result == Implication(
            Constrained(expected), Quantified(Always(Globally(leaf("ready = '1'")))),
        )

    def test_trailing_conjunction(self, parser: TCTLParser, expected: ConstrainedExpression) -> None:
        result = parser.expression("{A F true}_{t < 100 ns, E < 200 mJ} ^ ready = '1'")
        assert result == Conjunction(Constrained(expected), leaf("ready = '1'"))

    @pytest.mark.parametrize(
        "text, node_type",
        [
            ("{true}_{t < 1 ns} ^b = '1'", Conjunction),
            ("{true}_{t < 1 ns} Vready = '1'", Disjunction),
            ("{true}_{t < 1 ns}V ready = '1'", Disjunction),
        ],
    )
    def test_trailing_operator_without_whitespace(
        self, parser: TCTLParser, text: str, node_type: type,
    ) -> None:
        result = parser.expression(text)
        assert isinstance(result, node_type)
        assert isinstance(result.lhs, Constrained)

    def test_as_consequent(self, parser: TCTLParser) -> None:
        result = parser.expression("A G failureCount = 3 -> {A F recoveryMode = '1'}_{t <= 2 us}")
        assert isinstance(result, Quantified)
        implication = result.expression.expression.expression
        assert isinstance(implication, Implication)
        assert isinstance(implication.rhs, Constrained)

    @pytest.mark.parametrize(
        "text",
        [
            "{true_{t < 100 ns, E < 200 mJ}",
            "{true_{t < 100 ns, E < 200 mJ",
            "{true}{t < 100 ns, E < 200 mJ}",
            "{true}_t < 100 ns, E < 200 mJ}",
            "{true}_{t < 100 ns, E < 200 mJ",
            "true}_{t < 100 ns, E < 200 mJ}",
            "{true!}_{t < 100 ns, E < 200 mJ}",
            "{true}_{E < 100 ns, E < 200 mJ}",
            "{true}_{t < 100 ns, t < 200 mJ}",
            "{true}_{t < 100 ns E < 200 mJ}",
            "{true}_{t < 100 ns,}",
            "{true}",
            "{true}_",
            "{true}_{",
            "{true}_{}",
            "",
            " ",
            "\n",
        ],
    )
    def test_invalid(self, parser: TCTLParser, text: str) -> None:
        assert parser.constrained_expression(text) is None
        assert parser.expression(text) is None

    @pytest.mark.parametrize(
        "text",
        [
            "{true}_{t < 100 ns} garbage",
            "{true}_{t < 100 ns} ready = '1'",
            "{true}_{t < 100 ns} ->",
        ],
    )
    def test_invalid_trailing_material(self, parser: TCTLParser, text: str) -> None:
        assert parser.expression(text) is None


class TestMalformedExpressions:
    """Test that malformed input never yields a partial tree."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            " ",
            "failureCount = 3 ->",
            "-> failureCount = 3",
            "failureCount = 3 -> recoveryMode = '11'",
            "failureCount == 3 -> recoveryMode = '1'",
            "failureCount = 3 -> A G recoveryMode = '1' -> finished == '1'",
            "failureCount = 3 -> A G recoveryMode = '1' finished == '1'",
            "failureCount = 3 -> A S recoveryMode = '1' -> finished = '1'",
            "failureCount = 3 -> A recoveryMode = '1' -> finished = '1'",
            "failureCount = 3 -> G recoveryMode = '1' -> finished = '1'",
            "G recoveryMode = '1'",
            "A recoveryMode = '1'",
            "A G recoveryMode == '1'",
            "(recoveryMode = '1'",
            "recoveryMode = '1')",
            "(recoveryMode = '1') failureCount = 3",
            "((recoveryMode = '1')",
            "(recoveryMode = '1'}",
            "a = '1' ^",
            "^ a = '1'",
            "a = '1' V b = '1' V",
        ],
    )
    def test_invalid(self, parser: TCTLParser, text: str) -> None:
        assert parser.expression(text) is None


class TestRoundTrip:
    """Test that canonical text parses back to an equal tree."""

    @pytest.mark.parametrize(
        "text",
        [
            "recoveryMode = '1'",
            "!false",
            "!A G !false",
            "A G recoveryMode = '1'",
            "E F done = '1'",
            "A X ready = '1'",
            "A G A G recoveryMode = '1'",
            "A X A G recoveryMode = '1'",
            "A E F x = '1' U y = '1'",
            "E A G x = '1' W y = '1'",
            "E idle = '1' U start = '1'",
            "A busy = '1' W done = '1'",
            "a = '1' -> b = '1'",
            "a = '1' -> b = '1' -> c = '1'",
            "a = '1' ^ b = '1' V c = '1'",
            "(a = '1' ^ b = '1') V c = '1'",
            "!(a = '1' ^ b = '1')",
            "(count + 1) = 3",
            "A G (ready = '1' -> E F done = '1')",
            "{A F true}_{t < 100 ns, E < 200 mJ}",
            "{A F true}_{t < 100 ns} -> A G ready = '1'",
            "A G failureCount = 3 -> {A F recoveryMode = '1'}_{t <= 2 us}",
            "A G pulse = '1' -> {A X timerOn = '0'}_{t != 1 us, E >= 5 pJ}",
            'A G state = "IDLE" -> E F state = "RUN"',
        ],
    )
    def test_round_trip(self, parser: TCTLParser, text: str) -> None:
        result = parser.expression(text)
        assert result is not None
        assert str(result) == text
        assert parser.expression(str(result)) == result

    @pytest.mark.parametrize(
        "text, canonical",
        [
            ("  A   G  recoveryMode='1'  ", "A G recoveryMode = '1'"),
            ("{ A F TRUE } _ {t<100 ns}", "{A F true}_{t < 100 ns}"),
            ("a = '1'\n^\nb = '1'", "a = '1' ^ b = '1'"),
            ("!( ready  =  '1' )", "!(ready = '1')"),
        ],
    )
    def test_idempotent_reprint(self, parser: TCTLParser, text: str, canonical: str) -> None:
        first = str(parser.expression(text))
        assert first == canonical
        assert str(parser.expression(first)) == first


class TestRecursionBound:
    """Test the max_depth guard against deeply nested input."""

    def test_within_bound(self) -> None:
        text = "!" * 50 + "true"
        assert TCTLParser(max_depth=256).expression(text) is not None

    def test_beyond_bound(self) -> None:
        text = "!" * 50 + "true"
        assert TCTLParser(max_depth=10).expression(text) is None

    def test_deep_brackets_fail_cleanly(self, parser: TCTLParser) -> None:
        text = "(" * 400 + "true" + ")" * 400
        assert parser.expression(text) is None


class TestParseError:
    """Test the raising entry point."""

    def test_parse(self, parser: TCTLParser) -> None:
        assert parser.parse(f"A G {RECOVERY}") == Quantified(Always(Globally(leaf(RECOVERY))))

    def test_invalid_raises(self, parser: TCTLParser) -> None:
        with pytest.raises(ParseError, match="could not parse") as info:
            parser.parse("recoveryMode == '1'")
        assert info.value.text == "recoveryMode == '1'"
        assert info.value.requirement is None

    def test_empty_raises(self, parser: TCTLParser) -> None:
        with pytest.raises(ParseError, match="empty"):
            parser.parse("   ")
