"""
Embedded-language boundary for TCTL.

Atomic predicates inside a TCTL expression are written in a target
language (currently VHDL). The TCTL grammar treats them as opaque: each
``Language`` has a registered ``LeafLanguage`` that parses text into a
leaf node, or fails, and prints a leaf node back to text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional

from tctl.parser.immutable import Immutable
from tctl.vhdl.grammar import ParseError as VHDLParseError
from tctl.vhdl.grammar import VHDLParser
from tctl.vhdl.lexer import LexerError


class Language(Enum):
    """Languages that may be embedded within TCTL expressions."""

    VHDL = "VHDL"

    def __str__(self) -> str:
        return self.value


class LeafLanguage(ABC):
    """
    Parser and printer for the predicates of one embedded language.

    Implementations must be pure: ``parse`` either returns a complete
    node or None, and ``to_string`` of a parsed node must parse back to
    an equal node.
    """

    @abstractmethod
    def parse(self, text: str) -> Optional[Any]:
        """Parse a predicate, returning None if the text is invalid."""

    @abstractmethod
    def to_string(self, node: Any) -> str:
        """Return the canonical text of a predicate."""


class VHDLLanguage(LeafLanguage):
    """Predicates written as VHDL conditions."""

    def __init__(self) -> None:
        self._parser = VHDLParser()

    def parse(self, text: str) -> Optional[Any]:
        try:
            return self._parser.parse_condition(text)
        except (LexerError, VHDLParseError):
            return None

    def to_string(self, node: Any) -> str:
        return str(node)


_REGISTRY: Dict[Language, LeafLanguage] = {
    Language.VHDL: VHDLLanguage(),
}


def register_language(language: Language, implementation: LeafLanguage) -> None:
    """
    Install the parser/printer used for ``language`` predicates.

    Args:
        language: The embedded language.
        implementation: Its parser and printer.
    """
    _REGISTRY[language] = implementation


def leaf_language(language: Language) -> LeafLanguage:
    """
    Return the parser/printer registered for ``language``.

    Raises:
        KeyError: If no implementation is registered.
    """
    return _REGISTRY[language]


class LanguageExpression(Immutable):
    """
    An atomic predicate written in an embedded language.

    Attributes:
        language: The language the predicate is written in.
        expression: The opaque node produced by that language's parser.
    """

    __slots__ = ("language", "expression")

    def __init__(self, language: Language, expression: Any) -> None:
        self.language = language
        self.expression = expression

    @classmethod
    def vhdl(cls, expression: Any) -> LanguageExpression:
        return cls(Language.VHDL, expression)

    @classmethod
    def parse(
        cls, text: str, language: Language = Language.VHDL,
    ) -> Optional[LanguageExpression]:
        """
        Parse a predicate in ``language``.

        Args:
            text: The predicate text.
            language: The embedded language to parse with.

        Returns:
            The predicate, or None if the text is invalid.
        """
        trimmed = text.strip()
        if not trimmed:
            return None
        node = leaf_language(language).parse(trimmed)
        if node is None:
            return None
        return cls(language, node)

    def __str__(self) -> str:
        return leaf_language(self.language).to_string(self.expression)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LanguageExpression):
            return NotImplemented
        return self.language is other.language and self.expression == other.expression

    def __hash__(self) -> int:
        return hash(("LanguageExpression", self.language, self.expression))

    def __repr__(self) -> str:
        return f"LanguageExpression({self.language.value}, {str(self)!r})"
