"""
Physical units accepted in TCTL constraints.

Time and energy units are closed enumerations whose values are the
exact tokens written in a specification (e.g. ``ns``, ``mJ``).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union


class TimeUnit(Enum):
    """Units of time, from seconds down to picoseconds."""

    s = "s"
    ms = "ms"
    us = "us"
    ns = "ns"
    ps = "ps"

    def __str__(self) -> str:
        return self.value


class EnergyUnit(Enum):
    """Units of energy, from joules down to picojoules."""

    J = "J"
    mJ = "mJ"
    uJ = "uJ"
    nJ = "nJ"
    pJ = "pJ"

    def __str__(self) -> str:
        return self.value


Unit = Union[TimeUnit, EnergyUnit]


def parse_unit(token: str) -> Optional[Unit]:
    """
    Look up a unit token.

    Time units are tried before energy units.

    Args:
        token: The unit as written, e.g. ``"us"``.

    Returns:
        The matching unit, or None if the token is not a known unit.
    """
    for enum in (TimeUnit, EnergyUnit):
        try:
            return enum(token)
        except ValueError:
            continue
    return None
