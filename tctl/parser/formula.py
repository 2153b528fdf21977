"""
Expression utilities for TCTL.

Provides convenience functions for parsing and inspecting TCTL
expressions and specifications: subexpression extraction, embedded
predicate and constraint listing, quantifier nesting depth, canonical
string conversion, and summary statistics.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Tuple

from tctl.parser.ast_nodes import (
    Constrained,
    Expression,
    LanguagePredicate,
    Negation,
    Precedence,
    Quantified,
    _BinaryExpression,
)
from tctl.parser.constraints import ConstrainedStatement
from tctl.parser.grammar import TCTLParser
from tctl.parser.language import LanguageExpression
from tctl.parser.specification import Specification
from tctl.parser.specification import parse_specification as _parse_specification


_parser = TCTLParser()


def parse_expression(text: str) -> Expression:
    """
    Parse an expression string into an AST.

    Args:
        text: The TCTL expression string, with VHDL predicates.

    Returns:
        The root Expression node of the AST.

    Raises:
        ParseError: If the expression is syntactically invalid.
    """
    return _parser.parse(text)


def parse_specification(text: str) -> Specification:
    """
    Parse a specification document.

    Raises:
        ParseError: If the header is malformed or a requirement is
            invalid; ``requirement`` identifies the failing block.
    """
    return _parse_specification(text)


def subexpressions(expression: Expression) -> FrozenSet[Expression]:
    """
    Return all subexpressions of the given expression, including itself.

    Args:
        expression: The expression to extract subexpressions from.

    Returns:
        A frozenset of all subexpressions.
    """
    return expression.subexpressions()


def language_expressions(expression: Expression) -> FrozenSet[LanguageExpression]:
    """
    Return all embedded-language predicates appearing in the expression.

    Args:
        expression: The expression to inspect.

    Returns:
        A frozenset of LanguageExpression leaves.
    """
    return frozenset(
        sub.expression
        for sub in expression.subexpressions()
        if isinstance(sub, LanguagePredicate)
    )


def constraints(expression: Expression) -> Tuple[ConstrainedStatement, ...]:
    """
    Return every constraint statement in the expression, outermost first.

    Args:
        expression: The expression to inspect.

    Returns:
        The constraint statements in left-to-right textual order.
    """
    found: List[ConstrainedStatement] = []
    pending = [expression]
    while pending:
        current = pending.pop()
        if isinstance(current, Constrained):
            found.extend(current.expression.constraints)
        pending.extend(reversed(_children(current)))
    return tuple(found)


def quantifier_depth(expression: Expression) -> int:
    """
    Return the maximum nesting depth of global quantifiers (A, E).

    ``ready = '1'`` has depth 0, ``A G ready = '1'`` depth 1 and
    ``A G (ready = '1' -> E F done = '1')`` depth 2.
    """
    own = 1 if isinstance(expression, Quantified) else 0
    children = _children(expression)
    if not children:
        return own
    return own + max(quantifier_depth(child) for child in children)


def to_string(expression: Expression) -> str:
    """
    Convert an expression to its canonical string representation.

    Args:
        expression: The expression to convert.

    Returns:
        The canonical string representation.
    """
    return str(expression)


def statistics(specification: Specification) -> Dict[str, int]:
    """
    Summarise a specification.

    Returns:
        Counts keyed by ``requirements``, ``predicates``,
        ``quantifiers``, ``constraints`` and ``max_quantifier_depth``.
    """
    predicates = 0
    quantifiers = 0
    constraint_count = 0
    depth = 0
    for requirement in specification.requirements:
        subs = requirement.subexpressions()
        predicates += len(language_expressions(requirement))
        quantifiers += sum(1 for sub in subs if isinstance(sub, Quantified))
        constraint_count += len(constraints(requirement))
        depth = max(depth, quantifier_depth(requirement))
    return {
        "requirements": len(specification.requirements),
        "predicates": predicates,
        "quantifiers": quantifiers,
        "constraints": constraint_count,
        "max_quantifier_depth": depth,
    }


def _children(expression: Expression) -> List[Expression]:
    """Direct child expressions, in textual order."""
    if isinstance(expression, (Negation, Precedence)):
        return [expression.expression]
    if isinstance(expression, _BinaryExpression):
        return [expression.lhs, expression.rhs]
    if isinstance(expression, Quantified):
        path = expression.expression.expression
        if path.expression is not None:
            return [path.expression]
        return [path.lhs, path.rhs]
    if isinstance(expression, Constrained):
        return [expression.expression.expression]
    return []
