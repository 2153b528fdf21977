"""
Recursive-descent parser for TCTL expressions.

TCTL has no operator-precedence table: the parser tries a fixed
sequence of rules against the trimmed text (negation, constrained
expression, global quantifier, parenthesised expression, ``^``/``V``,
``->``, embedded predicate) and the first rule whose prefix matches
decides the shape of the tree. Binary operators split at their first
occurrence outside brackets, so ``a ^ b V c`` parses as
``a ^ (b V c)``.

Every parse method returns None for malformed input; ``parse`` raises
``ParseError`` instead, for callers that want an exception.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from tctl.parser.ast_nodes import (
    ConstrainedExpression,
    Constrained,
    Expression,
    GloballyQuantifiedExpression,
    LanguagePredicate,
    Negation,
    PathQuantifiedExpression,
    Precedence,
    Quantified,
    binary_operation,
)
from tctl.parser.constraints import ConstrainedStatement
from tctl.parser.language import Language, LanguageExpression


class ParseError(Exception):
    """
    Exception raised for parsing errors.

    Attributes:
        text: The text that failed to parse.
        requirement: 1-based index of the failing requirement, when the
            error comes from a specification document.
    """

    def __init__(
        self, message: str, text: str = "", requirement: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.text = text
        self.requirement = requirement


GLOBAL_QUANTIFIERS = frozenset({"A", "E"})
UNARY_PATH_QUANTIFIERS = frozenset({"G", "X", "F"})
BINARY_PATH_QUANTIFIERS = ("U", "W")
LOGICAL_OPERATORS = ("^", "V")
IMPLIES = "->"

DEFAULT_MAX_DEPTH = 256

_OPENING = "({"
_CLOSING = ")}"
_PAIRS = {"(": ")", "{": "}"}

# Depth marker for characters inside quoted literals of the embedded language
_QUOTED = -1


# ---------------------------------------------------------------------- #
# Text scanning helpers
# ---------------------------------------------------------------------- #


def _nesting(text: str) -> List[int]:
    """
    Return the bracket depth of every character of ``text``.

    Opening brackets carry the depth outside them, closing brackets the
    depth after them, so a matched pair has equal depths. Characters of
    quoted literals (``"..."`` strings and ``'x'`` characters) are marked
    ``_QUOTED`` and never count as brackets or operators.
    """
    depths: List[int] = []
    depth = 0
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c == '"':
            end = text.find('"', i + 1)
            end = n - 1 if end == -1 else end
            depths.extend([_QUOTED] * (end - i + 1))
            i = end + 1
            continue
        if c == "'" and i + 2 < n and text[i + 2] == "'":
            depths.extend([_QUOTED] * 3)
            i += 3
            continue
        if c in _OPENING:
            depths.append(depth)
            depth += 1
        elif c in _CLOSING:
            depth -= 1
            depths.append(depth)
        else:
            depths.append(depth)
        i += 1
    return depths


def _closing_index(text: str) -> Optional[int]:
    """
    Index of the bracket matching the one that opens ``text``.

    Returns:
        The index, or None if ``text`` does not start with a bracket,
        the bracket is never closed, or it is closed by the wrong kind.
    """
    if not text or text[0] not in _PAIRS:
        return None
    depths = _nesting(text)
    for i in range(1, len(text)):
        if text[i] in _CLOSING and depths[i] == 0:
            return i if text[i] == _PAIRS[text[0]] else None
    return None


def _first_token(text: str, tokens: Sequence[str]) -> Optional[Tuple[int, str]]:
    """
    Find the first whitespace-delimited operator token outside brackets.

    The token must sit strictly inside ``text``, with whitespace on both
    sides.

    Returns:
        ``(index, token)`` of the leftmost match, or None.
    """
    depths = _nesting(text)
    for i in range(1, len(text) - 1):
        if depths[i] != 0 or not text[i - 1].isspace():
            continue
        for token in tokens:
            end = i + len(token)
            if text.startswith(token, i) and end < len(text) and text[end].isspace():
                return i, token
    return None


def _first_occurrence(text: str, token: str) -> Optional[int]:
    """Index of the first occurrence of ``token`` outside brackets."""
    depths = _nesting(text)
    start = text.find(token)
    while start != -1:
        if depths[start] == 0:
            return start
        start = text.find(token, start + 1)
    return None


def _starts_with_global_quantifier(text: str) -> bool:
    return len(text) >= 2 and text[0] in GLOBAL_QUANTIFIERS and text[1].isspace()


def _leading_operator(text: str) -> Optional[Tuple[str, str]]:
    """
    Split a leading binary operator off ``text``.

    Returns:
        ``(operator, rest)`` if ``text`` starts with ``->``, ``^`` or
        ``V``; otherwise None.
    """
    if text.startswith(IMPLIES):
        return IMPLIES, text[len(IMPLIES):]
    if text[:1] in LOGICAL_OPERATORS:
        return text[0], text[1:]
    return None


def _split_constrained(text: str) -> Optional[Tuple[str, str]]:
    """
    Separate a leading ``{expr}_{constraints}`` from what follows it.

    Returns:
        ``(constrained, remaining)`` with ``remaining`` trimmed, or None
        if ``text`` does not start with a complete constrained form.
    """
    end = _closing_index(text)
    if end is None or text[0] != "{":
        return None
    after = text[end + 1:].lstrip()
    if not after.startswith("_"):
        return None
    after = after[1:].lstrip()
    if not after.startswith("{"):
        return None
    constraints_end = after.find("}")
    if constraints_end == -1:
        return None
    constrained = text[:end + 1] + "_" + after[:constraints_end + 1]
    return constrained, after[constraints_end + 1:].strip()


# ---------------------------------------------------------------------- #
# Parser
# ---------------------------------------------------------------------- #


class TCTLParser:
    """
    Parser for TCTL expressions.

    Attributes:
        language: The embedded language of atomic predicates.
        max_depth: Maximum recursion depth; deeper inputs fail to parse.
    """

    def __init__(
        self,
        language: Language = Language.VHDL,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.language: Language = language
        self.max_depth: int = max_depth

    def parse(self, text: str) -> Expression:
        """
        Parse an expression string into an AST.

        Args:
            text: The TCTL expression to parse.

        Returns:
            The root Expression node of the AST.

        Raises:
            ParseError: If the expression is syntactically invalid.
        """
        if not text.strip():
            raise ParseError("Syntax error: empty expression", text)
        result = self.expression(text)
        if result is None:
            raise ParseError(
                f"Syntax error: could not parse expression '{text.strip()}'", text,
            )
        return result

    # ------------------------------------------------------------------ #
    # Public entry points
    # ------------------------------------------------------------------ #

    def expression(self, text: str) -> Optional[Expression]:
        """Parse an Expression, or return None."""
        return self._expression(text, 0)

    def globally_quantified(self, text: str) -> Optional[GloballyQuantifiedExpression]:
        """Parse ``A <path>`` or ``E <path>``, or return None."""
        return self._globally_quantified(text, 0)

    def path_quantified(self, text: str) -> Optional[PathQuantifiedExpression]:
        """Parse ``G|X|F <expr>`` or ``<expr> U|W <expr>``, or return None."""
        return self._path_quantified(text, 0)

    def constrained_expression(self, text: str) -> Optional[ConstrainedExpression]:
        """Parse ``{<expr>}_{<c1>, <c2>, ...}``, or return None."""
        return self._constrained_expression(text, 0)

    # ------------------------------------------------------------------ #
    # Expression rules
    # ------------------------------------------------------------------ #

    def _expression(self, text: str, depth: int) -> Optional[Expression]:
        if depth > self.max_depth:
            return None
        trimmed = text.strip()
        if not trimmed:
            return None
        if trimmed.startswith("!"):
            return self._negation(trimmed[1:], depth + 1)
        if trimmed.startswith("{"):
            return self._constrained_operation(trimmed, depth + 1)
        if _starts_with_global_quantifier(trimmed):
            quantified = self._globally_quantified(trimmed, depth + 1)
            return None if quantified is None else Quantified(quantified)
        if trimmed.startswith("("):
            return self._precedence(trimmed, depth + 1)
        logical = self._logical(trimmed, depth + 1)
        if logical is not None:
            return logical
        index = _first_occurrence(trimmed, IMPLIES)
        if index is None:
            return self._language_predicate(trimmed)
        lhs_raw = trimmed[:index]
        rhs_raw = trimmed[index + len(IMPLIES):]
        if not lhs_raw.strip() or not rhs_raw.strip():
            return None
        lhs = self._expression(lhs_raw, depth + 1)
        if lhs is None:
            return None
        rhs = self._expression(rhs_raw, depth + 1)
        if rhs is None:
            return None
        return binary_operation(IMPLIES, lhs, rhs)

    def _negation(self, text: str, depth: int) -> Optional[Expression]:
        trimmed = text.strip()
        expression = self._expression(trimmed, depth + 1)
        if expression is None:
            return None
        # Only single-token predicates may be negated without brackets
        if isinstance(expression, LanguagePredicate) and any(c.isspace() for c in trimmed):
            return None
        return Negation(expression)

    def _constrained_operation(self, text: str, depth: int) -> Optional[Expression]:
        split = _split_constrained(text)
        if split is None:
            return None
        constrained_raw, remaining = split
        constrained = self._constrained_expression(constrained_raw, depth + 1)
        if constrained is None:
            return None
        lhs = Constrained(constrained)
        if not remaining:
            return lhs
        operation = _leading_operator(remaining)
        if operation is None:
            return None
        return self._combine(operation, lhs, depth + 1)

    def _precedence(self, text: str, depth: int) -> Optional[Expression]:
        end = _closing_index(text)
        if end is None:
            return None
        inner = text[1:end]
        if end == len(text) - 1:
            expression = self._expression(inner, depth + 1)
            return None if expression is None else Precedence(expression)
        remaining = text[end + 1:].strip()
        operation = _leading_operator(remaining)
        if operation is None:
            # e.g. "(count + 1) = 3" is a predicate that starts with a bracket
            return self._language_predicate(text)
        lhs = self._expression(inner, depth + 1)
        if lhs is None:
            return None
        return self._combine(operation, Precedence(lhs), depth + 1)

    def _combine(
        self, operation: Tuple[str, str], lhs: Expression, depth: int,
    ) -> Optional[Expression]:
        operator, rhs_raw = operation
        rhs = self._expression(rhs_raw, depth + 1)
        if rhs is None:
            return None
        return binary_operation(operator, lhs, rhs)

    def _logical(self, text: str, depth: int) -> Optional[Expression]:
        if len(text) <= 4:
            return None
        match = _first_token(text, LOGICAL_OPERATORS)
        if match is None:
            return None
        index, operator = match
        lhs = self._expression(text[:index], depth + 1)
        if lhs is None:
            return None
        rhs = self._expression(text[index + len(operator):], depth + 1)
        if rhs is None:
            return None
        return binary_operation(operator, lhs, rhs)

    def _language_predicate(self, text: str) -> Optional[Expression]:
        expression = LanguageExpression.parse(text, self.language)
        return None if expression is None else LanguagePredicate(expression)

    # ------------------------------------------------------------------ #
    # Quantifier rules
    # ------------------------------------------------------------------ #

    def _globally_quantified(
        self, text: str, depth: int,
    ) -> Optional[GloballyQuantifiedExpression]:
        trimmed = text.strip()
        if not _starts_with_global_quantifier(trimmed):
            return None
        path = self._path_quantified(trimmed[1:], depth + 1)
        if path is None:
            return None
        return GloballyQuantifiedExpression.create(trimmed[0], path)

    def _path_quantified(self, text: str, depth: int) -> Optional[PathQuantifiedExpression]:
        trimmed = text.strip()
        if len(trimmed) >= 2 and trimmed[0] in UNARY_PATH_QUANTIFIERS and trimmed[1].isspace():
            expression = self._expression(trimmed[1:], depth + 1)
            if expression is None:
                return None
            return PathQuantifiedExpression.unary(trimmed[0], expression)
        match = _first_token(trimmed, BINARY_PATH_QUANTIFIERS)
        if match is None:
            return None
        index, quantifier = match
        lhs = self._expression(trimmed[:index], depth + 1)
        if lhs is None:
            return None
        rhs = self._expression(trimmed[index + len(quantifier):], depth + 1)
        if rhs is None:
            return None
        return PathQuantifiedExpression.binary(quantifier, lhs, rhs)

    # ------------------------------------------------------------------ #
    # Constrained expressions
    # ------------------------------------------------------------------ #

    def _constrained_expression(
        self, text: str, depth: int,
    ) -> Optional[ConstrainedExpression]:
        trimmed = text.strip()
        end = _closing_index(trimmed)
        if end is None or trimmed[0] != "{":
            return None
        expression = self._expression(trimmed[1:end], depth + 1)
        if expression is None:
            return None
        section = trimmed[end + 1:].strip()
        if not (section.startswith("_") and section.endswith("}")):
            return None
        body = section[1:-1].strip()
        if not body.startswith("{"):
            return None
        statements = [ConstrainedStatement.parse(raw) for raw in body[1:].split(",")]
        if not statements or any(statement is None for statement in statements):
            return None
        return ConstrainedExpression(expression, statements)
