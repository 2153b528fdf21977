"""
Abstract syntax tree node definitions for embedded VHDL predicates.

Defines immutable, hashable nodes for the VHDL condition subset:
names, literals, unary and binary operations, and parenthesised
sub-expressions. Parentheses are kept as explicit nodes so that
printing a parsed predicate reproduces its grouping exactly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import FrozenSet, Union


class VHDLNode(ABC):
    """
    Base class for all VHDL expression nodes.

    All nodes are immutable and support equality comparison and
    hashing.
    """

    @property
    def is_condition(self) -> bool:
        """True if the node is a boolean condition usable as a predicate."""
        return False

    @abstractmethod
    def names(self) -> FrozenSet[str]:
        """Return the set of all identifiers referenced in the node."""

    @abstractmethod
    def __str__(self) -> str:
        """Return the canonical VHDL text of the node."""

    @abstractmethod
    def __eq__(self, other: object) -> bool:
        """Check equality with another node."""

    @abstractmethod
    def __hash__(self) -> int:
        """Return hash for use in sets and dicts."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


# === Leaves ===


class Name(VHDLNode):
    """
    Reference to a signal, variable or enumeration literal.

    Attributes:
        identifier: The name as written, e.g. ``recoveryMode`` or
            ``status.ready``.
    """

    __slots__ = ("identifier",)

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier

    def names(self) -> FrozenSet[str]:
        return frozenset({self.identifier})

    def __str__(self) -> str:
        return self.identifier

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Name):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(("Name", self.identifier))


class LiteralKind(Enum):
    """Kinds of VHDL literal."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    REAL = "real"
    CHARACTER = "character"
    STRING = "string"
    BIT_STRING = "bit_string"


class Literal(VHDLNode):
    """
    A literal value, stored as its source text.

    Boolean literals are normalised to lower case. Character literals
    include their quotes, e.g. ``'1'``.

    Attributes:
        kind: The literal kind.
        text: The literal as printed.
    """

    __slots__ = ("kind", "text")

    def __init__(self, kind: LiteralKind, text: str) -> None:
        self.kind = kind
        self.text = text.lower() if kind is LiteralKind.BOOLEAN else text

    @classmethod
    def boolean(cls, value: bool) -> Literal:
        return cls(LiteralKind.BOOLEAN, "true" if value else "false")

    @classmethod
    def integer(cls, value: int) -> Literal:
        return cls(LiteralKind.INTEGER, str(value))

    @classmethod
    def bit(cls, value: str) -> Literal:
        return cls(LiteralKind.CHARACTER, f"'{value}'")

    @property
    def is_condition(self) -> bool:
        return self.kind is LiteralKind.BOOLEAN

    @property
    def value(self) -> Union[bool, int, float, str]:
        """The Python value of the literal."""
        if self.kind is LiteralKind.BOOLEAN:
            return self.text == "true"
        if self.kind is LiteralKind.INTEGER:
            return int(self.text.replace("_", ""))
        if self.kind is LiteralKind.REAL:
            return float(self.text.replace("_", ""))
        if self.kind is LiteralKind.BIT_STRING:
            return self.text[2:-1]
        return self.text[1:-1]

    def names(self) -> FrozenSet[str]:
        return frozenset()

    def __str__(self) -> str:
        return self.text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return NotImplemented
        return self.kind is other.kind and self.text == other.text

    def __hash__(self) -> int:
        return hash(("Literal", self.kind, self.text))


# === Grouping ===


class Parenthesized(VHDLNode):
    """
    Represents (expr).

    Attributes:
        expression: The grouped expression.
    """

    __slots__ = ("expression",)

    def __init__(self, expression: VHDLNode) -> None:
        self.expression = expression

    @property
    def is_condition(self) -> bool:
        return self.expression.is_condition

    def names(self) -> FrozenSet[str]:
        return self.expression.names()

    def __str__(self) -> str:
        return f"({self.expression})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parenthesized):
            return NotImplemented
        return self.expression == other.expression

    def __hash__(self) -> int:
        return hash(("Parenthesized", self.expression))


# === Unary Operators ===


class UnaryOperation(VHDLNode):
    """
    Represents a prefix operator applied to an operand.

    ``not`` and ``abs`` print with a separating space, sign operators
    without: ``not ready``, ``abs x``, ``-x``.

    Attributes:
        operator: ``not``, ``abs``, ``-`` or ``+``.
        operand: The operand.
    """

    __slots__ = ("operator", "operand")

    def __init__(self, operator: str, operand: VHDLNode) -> None:
        self.operator = operator.lower()
        self.operand = operand

    @property
    def is_condition(self) -> bool:
        return self.operator == "not"

    def names(self) -> FrozenSet[str]:
        return self.operand.names()

    def __str__(self) -> str:
        operand = str(self.operand)
        # "--" would start a comment
        if self.operator.isalpha() or operand[:1] in ("-", "+"):
            return f"{self.operator} {operand}"
        return f"{self.operator}{operand}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnaryOperation):
            return NotImplemented
        return self.operator == other.operator and self.operand == other.operand

    def __hash__(self) -> int:
        return hash(("UnaryOperation", self.operator, self.operand))


# === Binary Operator Base ===


class _BinaryOperation(VHDLNode):
    """Base class for binary operations (not part of public API)."""

    __slots__ = ("operator", "lhs", "rhs")

    def __init__(self, operator: str, lhs: VHDLNode, rhs: VHDLNode) -> None:
        self.operator = operator.lower()
        self.lhs = lhs
        self.rhs = rhs

    def names(self) -> FrozenSet[str]:
        return self.lhs.names() | self.rhs.names()

    def __str__(self) -> str:
        return f"{self.lhs} {self.operator} {self.rhs}"

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (
            self.operator == other.operator
            and self.lhs == other.lhs
            and self.rhs == other.rhs
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.operator, self.lhs, self.rhs))


# === Binary Operators ===


class Arithmetic(_BinaryOperation):
    """
    Represents an adding or multiplying operation, e.g. ``count + 1``.

    Attributes:
        operator: ``+``, ``-``, ``&``, ``*``, ``/``, ``mod``, ``rem`` or ``**``.
        lhs: Left operand.
        rhs: Right operand.
    """


class Comparison(_BinaryOperation):
    """
    Represents a relational test, e.g. ``recoveryMode = '1'``.

    Attributes:
        operator: ``=``, ``/=``, ``<``, ``<=``, ``>`` or ``>=``.
        lhs: Left operand.
        rhs: Right operand.
    """

    @property
    def is_condition(self) -> bool:
        return True


class Logical(_BinaryOperation):
    """
    Represents a logical operation, e.g. ``bootMode = '1' and ready``.

    Attributes:
        operator: ``and``, ``or``, ``xor``, ``nand``, ``nor`` or ``xnor``.
        lhs: Left operand.
        rhs: Right operand.
    """

    @property
    def is_condition(self) -> bool:
        return True
