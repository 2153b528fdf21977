"""
Physical constraints on TCTL expressions.

A constraint bounds a physical quantity (time or energy) by an unsigned
amount in a given unit. A constrained statement compares the quantity's
symbol (``t`` for time, ``E`` for energy) against such a constraint,
e.g. ``t <= 2 us``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tctl.parser.units import EnergyUnit, TimeUnit, Unit, parse_unit


class ConstraintKind(Enum):
    """The physical quantity a constraint bounds, valued by its symbol."""

    TIME = "t"
    ENERGY = "E"


@dataclass(frozen=True)
class Constraint:
    """
    Immutable bound on a physical quantity.

    The kind and symbol are derived from the unit, so a time unit always
    yields the symbol ``t`` and an energy unit the symbol ``E``.

    Attributes:
        amount: Non-negative, unitless magnitude.
        unit: A time or energy unit.
    """

    amount: int
    unit: Unit

    def __post_init__(self) -> None:
        """Validate amount and unit."""
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError(f"amount must be an integer, got {self.amount!r}")
        if self.amount < 0:
            raise ValueError(f"amount must be non-negative, got {self.amount}")
        if not isinstance(self.unit, (TimeUnit, EnergyUnit)):
            raise ValueError(f"unit must be a TimeUnit or EnergyUnit, got {self.unit!r}")

    @classmethod
    def time(cls, amount: int, unit: TimeUnit) -> Constraint:
        """Create a time constraint."""
        return cls(amount, unit)

    @classmethod
    def energy(cls, amount: int, unit: EnergyUnit) -> Constraint:
        """Create an energy constraint."""
        return cls(amount, unit)

    @property
    def kind(self) -> ConstraintKind:
        if isinstance(self.unit, TimeUnit):
            return ConstraintKind.TIME
        return ConstraintKind.ENERGY

    @property
    def symbol(self) -> str:
        """The variable symbol of the constrained quantity (``t`` or ``E``)."""
        return self.kind.value

    def __str__(self) -> str:
        return f"{self.amount} {self.unit.value}"

    @classmethod
    def parse(cls, text: str) -> Optional[Constraint]:
        """
        Parse a constraint such as ``100 ns``.

        The text must hold exactly two whitespace-separated tokens: a
        decimal amount and a unit. Any amount of surrounding or
        separating whitespace (including newlines) is accepted.

        Args:
            text: The constraint text.

        Returns:
            The constraint, or None if the text is malformed.
        """
        components = text.split()
        if len(components) != 2:
            return None
        amount_raw, unit_raw = components
        if not (amount_raw.isascii() and amount_raw.isdigit()):
            return None
        unit = parse_unit(unit_raw)
        if unit is None:
            return None
        return cls(int(amount_raw), unit)


class ComparisonOperator(Enum):
    """
    Comparison operators of a constrained statement.

    Declared in the order the statement parser tries them.
    """

    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    EQUAL = "=="
    NOT_EQUAL = "!="

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ConstrainedStatement:
    """
    A single comparison of a physical quantity against a constraint.

    Printed as ``<symbol> <operator> <amount> <unit>``, e.g.
    ``E < 200 mJ``.

    Attributes:
        operator: The comparison applied.
        constraint: The bound being compared against.
    """

    operator: ComparisonOperator
    constraint: Constraint

    @property
    def symbol(self) -> str:
        return self.constraint.symbol

    def __str__(self) -> str:
        return f"{self.symbol} {self.operator.value} {self.constraint}"

    @classmethod
    def from_parts(
        cls, symbol: str, operator: str, constraint: Constraint,
    ) -> Optional[ConstrainedStatement]:
        """
        Build a statement from its textual symbol and operator.

        Args:
            symbol: The quantity symbol; must equal ``constraint.symbol``.
            operator: One of ``<``, ``<=``, ``>``, ``>=``, ``==``, ``!=``.
            constraint: The bound.

        Returns:
            The statement, or None if the symbol does not match the
            constraint or the operator is unknown.
        """
        if symbol.strip() != constraint.symbol:
            return None
        try:
            op = ComparisonOperator(operator.strip())
        except ValueError:
            return None
        return cls(op, constraint)

    @classmethod
    def parse(cls, text: str) -> Optional[ConstrainedStatement]:
        """
        Parse a statement such as ``t <= 2 us``.

        Operators are located by plain substring containment, trying
        them in declaration order of ``ComparisonOperator``. A contained
        operator whose split does not yield a valid statement hands over
        to the next contained operator, so ``t <= 2 us`` is not lost to
        the ``<`` it also contains.

        Args:
            text: The statement text.

        Returns:
            The statement, or None if the text is malformed.
        """
        trimmed = text.strip()
        for op in ComparisonOperator:
            if op.value not in trimmed:
                continue
            components = trimmed.split(op.value)
            if len(components) != 2:
                continue
            constraint = Constraint.parse(components[1])
            if constraint is None:
                continue
            statement = cls.from_parts(components[0], op.value, constraint)
            if statement is not None:
                return statement
        return None
