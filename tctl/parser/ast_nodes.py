"""
Abstract syntax tree node definitions for TCTL expressions.

Defines immutable, hashable nodes for the mutually recursive TCTL
families: expressions (implication, negation, grouping, conjunction,
disjunction, embedded predicates, quantified and constrained
expressions), global quantifiers (A, E), path quantifiers (G, X, F,
U, W), and constrained expressions carrying time/energy bounds.

``str()`` of every node is its canonical TCTL text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable, Optional, Tuple

from tctl.parser.constraints import ConstrainedStatement
from tctl.parser.immutable import Immutable
from tctl.parser.language import LanguageExpression


class Expression(Immutable, ABC):
    """
    Base class for all TCTL expression nodes.

    All expression nodes are immutable and support equality comparison
    and hashing for use in sets and dictionaries.
    """

    @abstractmethod
    def subexpressions(self) -> FrozenSet[Expression]:
        """Return set of all subexpressions including self."""

    @abstractmethod
    def __str__(self) -> str:
        """Return the canonical TCTL text of the expression."""

    @abstractmethod
    def __eq__(self, other: object) -> bool:
        """Check equality with another expression."""

    @abstractmethod
    def __hash__(self) -> int:
        """Return hash for use in sets and dicts."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


# === Atomic ===


class LanguagePredicate(Expression):
    """
    Represents a predicate written in the embedded language.

    Attributes:
        expression: The embedded-language predicate.
    """

    __slots__ = ("expression",)

    def __init__(self, expression: LanguageExpression) -> None:
        self.expression = expression

    def subexpressions(self) -> FrozenSet[Expression]:
        return frozenset({self})

    def __str__(self) -> str:
        return str(self.expression)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LanguagePredicate):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self) -> int:
        return hash(("LanguagePredicate", self.expression))


# === Unary ===


class Negation(Expression):
    """
    Represents !phi (negation).

    Attributes:
        expression: The expression being negated.
    """

    __slots__ = ("expression",)

    def __init__(self, expression: Expression) -> None:
        self.expression = expression

    def subexpressions(self) -> FrozenSet[Expression]:
        return frozenset({self}) | self.expression.subexpressions()

    def __str__(self) -> str:
        return f"!{self.expression}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Negation):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self) -> int:
        return hash(("Negation", self.expression))


class Precedence(Expression):
    """
    Represents (phi), an explicitly grouped expression.

    Attributes:
        expression: The grouped expression.
    """

    __slots__ = ("expression",)

    def __init__(self, expression: Expression) -> None:
        self.expression = expression

    def subexpressions(self) -> FrozenSet[Expression]:
        return frozenset({self}) | self.expression.subexpressions()

    def __str__(self) -> str:
        return f"({self.expression})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Precedence):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self) -> int:
        return hash(("Precedence", self.expression))


class Quantified(Expression):
    """
    Represents a globally quantified expression used as an expression.

    Attributes:
        expression: The quantified expression, e.g. ``A G ready = '1'``.
    """

    __slots__ = ("expression",)

    def __init__(self, expression: GloballyQuantifiedExpression) -> None:
        self.expression = expression

    def subexpressions(self) -> FrozenSet[Expression]:
        return frozenset({self}) | self.expression.subexpressions()

    def __str__(self) -> str:
        return str(self.expression)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantified):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self) -> int:
        return hash(("Quantified", self.expression))


class Constrained(Expression):
    """
    Represents a constrained expression used as an expression.

    Attributes:
        expression: The constrained expression, e.g.
            ``{A F done = '1'}_{t <= 2 us}``.
    """

    __slots__ = ("expression",)

    def __init__(self, expression: ConstrainedExpression) -> None:
        self.expression = expression

    def subexpressions(self) -> FrozenSet[Expression]:
        return frozenset({self}) | self.expression.subexpressions()

    def __str__(self) -> str:
        return str(self.expression)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constrained):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self) -> int:
        return hash(("Constrained", self.expression))


# === Binary Operator Base ===


class _BinaryExpression(Expression):
    """Base class for binary operators (not part of public API)."""

    __slots__ = ("lhs", "rhs")

    _op_symbol: str = ""

    def __init__(self, lhs: Expression, rhs: Expression) -> None:
        self.lhs = lhs
        self.rhs = rhs

    def subexpressions(self) -> FrozenSet[Expression]:
        return frozenset({self}) | self.lhs.subexpressions() | self.rhs.subexpressions()

    def __str__(self) -> str:
        return f"{self.lhs} {self._op_symbol} {self.rhs}"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.lhs == other.lhs and self.rhs == other.rhs

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.lhs, self.rhs))


# === Binary Operators ===


class Implication(_BinaryExpression):
    """
    Represents phi -> psi (implication).

    Attributes:
        lhs: Antecedent.
        rhs: Consequent.
    """

    _op_symbol = "->"


class Conjunction(_BinaryExpression):
    """
    Represents phi ^ psi (conjunction).

    Attributes:
        lhs: Left operand.
        rhs: Right operand.
    """

    _op_symbol = "^"


class Disjunction(_BinaryExpression):
    """
    Represents phi V psi (disjunction).

    Attributes:
        lhs: Left operand.
        rhs: Right operand.
    """

    _op_symbol = "V"


BINARY_OPERATORS = {
    Implication._op_symbol: Implication,
    Conjunction._op_symbol: Conjunction,
    Disjunction._op_symbol: Disjunction,
}


def binary_operation(operator: str, lhs: Expression, rhs: Expression) -> Optional[Expression]:
    """
    Combine two expressions with a binary operator symbol.

    Args:
        operator: ``->``, ``^`` or ``V``.
        lhs: Left operand.
        rhs: Right operand.

    Returns:
        The combined expression, or None for an unknown operator.
    """
    node_type = BINARY_OPERATORS.get(operator.strip())
    if node_type is None:
        return None
    return node_type(lhs, rhs)


# === Path Quantifiers ===


class PathQuantifiedExpression(Immutable, ABC):
    """
    Base class for path quantifiers.

    Path quantifiers scope an expression to a single execution path.
    Unary quantifiers (G, X, F) expose ``expression``; binary
    quantifiers (U, W) expose ``lhs`` and ``rhs``. The accessors of the
    other arity return None.
    """

    __slots__ = ()

    quantifier: str = ""

    @property
    def expression(self) -> Optional[Expression]:
        return None

    @property
    def lhs(self) -> Optional[Expression]:
        return None

    @property
    def rhs(self) -> Optional[Expression]:
        return None

    @abstractmethod
    def subexpressions(self) -> FrozenSet[Expression]:
        """Return set of all expressions within the quantifier."""

    @abstractmethod
    def __str__(self) -> str:
        """Return the canonical TCTL text of the path expression."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    @staticmethod
    def unary(quantifier: str, expression: Expression) -> Optional[PathQuantifiedExpression]:
        """
        Create a unary path quantifier from its symbol.

        Returns:
            The quantifier, or None unless ``quantifier`` is G, X or F.
        """
        node_type = UNARY_PATH_QUANTIFIERS.get(quantifier)
        if node_type is None:
            return None
        return node_type(expression)

    @staticmethod
    def binary(
        quantifier: str, lhs: Expression, rhs: Expression,
    ) -> Optional[PathQuantifiedExpression]:
        """
        Create a binary path quantifier from its symbol.

        Returns:
            The quantifier, or None unless ``quantifier`` is U or W.
        """
        node_type = BINARY_PATH_QUANTIFIERS.get(quantifier)
        if node_type is None:
            return None
        return node_type(lhs, rhs)


class _UnaryPathQuantifier(PathQuantifiedExpression):
    """Base class for unary path quantifiers (not part of public API)."""

    __slots__ = ("_expression",)

    def __init__(self, expression: Expression) -> None:
        self._expression = expression

    @property
    def expression(self) -> Expression:
        return self._expression

    def subexpressions(self) -> FrozenSet[Expression]:
        return self._expression.subexpressions()

    def __str__(self) -> str:
        return f"{self.quantifier} {self._expression}"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._expression == other._expression

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._expression))


class _BinaryPathQuantifier(PathQuantifiedExpression):
    """Base class for binary path quantifiers (not part of public API)."""

    __slots__ = ("_lhs", "_rhs")

    def __init__(self, lhs: Expression, rhs: Expression) -> None:
        self._lhs = lhs
        self._rhs = rhs

    @property
    def lhs(self) -> Expression:
        return self._lhs

    @property
    def rhs(self) -> Expression:
        return self._rhs

    def subexpressions(self) -> FrozenSet[Expression]:
        return self._lhs.subexpressions() | self._rhs.subexpressions()

    def __str__(self) -> str:
        return f"{self._lhs} {self.quantifier} {self._rhs}"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._lhs == other._lhs and self._rhs == other._rhs

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._lhs, self._rhs))


class Globally(_UnaryPathQuantifier):
    """Represents G phi: phi holds in every state of the path."""

    __slots__ = ()

    quantifier = "G"


class Next(_UnaryPathQuantifier):
    """Represents X phi: phi holds in the next state of the path."""

    __slots__ = ()

    quantifier = "X"


class Finally(_UnaryPathQuantifier):
    """Represents F phi: phi holds in some state of the path."""

    __slots__ = ()

    quantifier = "F"


class Until(_BinaryPathQuantifier):
    """
    Represents phi U psi: phi holds until psi holds, and psi must
    eventually hold.
    """

    __slots__ = ()

    quantifier = "U"


class Weak(_BinaryPathQuantifier):
    """
    Represents phi W psi (weak until): phi holds until psi holds,
    without requiring psi to ever hold.
    """

    __slots__ = ()

    quantifier = "W"


UNARY_PATH_QUANTIFIERS = {
    Globally.quantifier: Globally,
    Next.quantifier: Next,
    Finally.quantifier: Finally,
}

BINARY_PATH_QUANTIFIERS = {
    Until.quantifier: Until,
    Weak.quantifier: Weak,
}


# === Global Quantifiers ===


class GloballyQuantifiedExpression(Immutable, ABC):
    """
    Base class for branch quantifiers applied to a path expression.

    Attributes:
        expression: The path-quantified expression.
    """

    __slots__ = ("expression",)

    quantifier: str = ""

    def __init__(self, expression: PathQuantifiedExpression) -> None:
        self.expression = expression

    @staticmethod
    def create(
        quantifier: str, expression: PathQuantifiedExpression,
    ) -> Optional[GloballyQuantifiedExpression]:
        """
        Create a global quantifier from its symbol.

        Returns:
            The quantifier, or None unless ``quantifier`` is A or E.
        """
        node_type = GLOBAL_QUANTIFIERS.get(quantifier)
        if node_type is None:
            return None
        return node_type(expression)

    def subexpressions(self) -> FrozenSet[Expression]:
        return self.expression.subexpressions()

    def __str__(self) -> str:
        return f"{self.quantifier} {self.expression}"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.expression))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class Always(GloballyQuantifiedExpression):
    """Represents A path: the path expression holds on all branches."""

    __slots__ = ()

    quantifier = "A"


class Eventually(GloballyQuantifiedExpression):
    """Represents E path: the path expression holds on some branch."""

    __slots__ = ()

    quantifier = "E"


GLOBAL_QUANTIFIERS = {
    Always.quantifier: Always,
    Eventually.quantifier: Eventually,
}


# === Constrained Expressions ===


class ConstrainedExpression(Immutable):
    """
    An expression restricted by physical constraints.

    Printed as ``{expression}_{c1, c2, ...}``, e.g.
    ``{A F true}_{t < 100 ns, E < 200 mJ}``.

    Attributes:
        expression: The constrained expression.
        constraints: Non-empty tuple of constraint statements, in order.
    """

    __slots__ = ("expression", "constraints")

    def __init__(
        self, expression: Expression, constraints: Iterable[ConstrainedStatement],
    ) -> None:
        """
        Initialise a constrained expression.

        Args:
            expression: The expression to constrain.
            constraints: The constraints, at least one.

        Raises:
            ValueError: If ``constraints`` is empty.
        """
        statements: Tuple[ConstrainedStatement, ...] = tuple(constraints)
        if not statements:
            raise ValueError("Constraints cannot be empty")
        self.expression = expression
        self.constraints = statements

    def subexpressions(self) -> FrozenSet[Expression]:
        return self.expression.subexpressions()

    def __str__(self) -> str:
        constraints = ", ".join(str(c) for c in self.constraints)
        return f"{{{self.expression}}}_{{{constraints}}}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstrainedExpression):
            return NotImplemented
        return self.expression == other.expression and self.constraints == other.constraints

    def __hash__(self) -> int:
        return hash(("ConstrainedExpression", self.expression, self.constraints))

    def __repr__(self) -> str:
        return f"ConstrainedExpression({str(self)!r})"
