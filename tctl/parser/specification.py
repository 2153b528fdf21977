"""
TCTL specification documents.

A specification is a configuration header followed by requirements::

    // spec:language VHDL

    -- Comments run from "--" to the end of the line.
    A G recoveryMode = '1'

    A G failureCount = 3 -> {A F recoveryMode = '1'}_{t <= 2 us}

The header is the leading run of ``//`` lines. Requirements are
separated by blank lines and each must parse as one TCTL expression.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from tctl.parser.ast_nodes import Expression
from tctl.parser.grammar import ParseError, TCTLParser
from tctl.parser.language import Language

HEADER_PREFIX = "//"
DIRECTIVE_PREFIX = "// spec:"
LANGUAGE_DIRECTIVE = "language"
COMMENT_PREFIX = "--"


@dataclass(frozen=True)
class Configuration:
    """
    Settings declared in a specification's header.

    Attributes:
        language: The language embedded within the requirements.
    """

    language: Language

    def __str__(self) -> str:
        return f"{DIRECTIVE_PREFIX}{LANGUAGE_DIRECTIVE} {self.language.value}"

    @classmethod
    def parse(cls, text: str) -> Optional[Configuration]:
        """
        Parse a configuration header.

        Every line must be a ``// spec:`` directive and exactly one of
        them must be a ``language`` directive naming a known language.
        Other directives are ignored.

        Args:
            text: The header lines only.

        Returns:
            The configuration, or None if the header is malformed.
        """
        lines = [line.strip() for line in text.strip().splitlines()]
        if not all(line.startswith(DIRECTIVE_PREFIX) for line in lines):
            return None
        languages: List[Language] = []
        for line in lines:
            directive = line[len(DIRECTIVE_PREFIX):].strip()
            if not directive.startswith(LANGUAGE_DIRECTIVE):
                continue
            name = directive[len(LANGUAGE_DIRECTIVE):].strip()
            try:
                languages.append(Language(name))
            except ValueError:
                continue
        if len(languages) != 1:
            return None
        return cls(languages[0])


@dataclass(frozen=True)
class Specification:
    """
    A set of TCTL requirements that must hold.

    Attributes:
        configuration: The header settings.
        requirements: The requirements, in document order.
    """

    configuration: Configuration
    requirements: Tuple[Expression, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Freeze requirements into a tuple."""
        object.__setattr__(self, "requirements", tuple(self.requirements))

    def __str__(self) -> str:
        """
        Canonical text: header, blank line, blank-line separated
        requirements, and a trailing newline. Comments are not kept.

        The blank line after the header is written even when there are
        no requirements.
        """
        requirements = "\n\n".join(str(requirement) for requirement in self.requirements)
        return f"{self.configuration}\n\n{requirements}\n"

    @classmethod
    def parse(cls, text: str) -> Optional[Specification]:
        """
        Parse a specification document.

        Args:
            text: The full document.

        Returns:
            The specification, or None if the header or any requirement
            is malformed.
        """
        try:
            return parse_specification(text)
        except ParseError:
            return None


# ---------------------------------------------------------------------- #
# Document structure helpers
# ---------------------------------------------------------------------- #


def split_header(text: str) -> Optional[Tuple[str, List[str]]]:
    """
    Split a document into its header and the lines that follow it.

    Args:
        text: The full document.

    Returns:
        ``(header, body_lines)`` with every line trimmed, or None if the
        document does not start with a ``//`` line.
    """
    lines = [line.strip() for line in text.strip().splitlines()]
    if not lines or not lines[0].startswith(HEADER_PREFIX):
        return None
    end = next(
        (i for i, line in enumerate(lines) if not line.startswith(HEADER_PREFIX)),
        len(lines),
    )
    return "\n".join(lines[:end]), lines[end:]


def strip_comments(lines: Iterable[str]) -> List[str]:
    """
    Remove ``--`` comments.

    Comment-only lines are dropped entirely; trailing comments are cut
    from the line they end.
    """
    stripped: List[str] = []
    for line in lines:
        if line.strip().startswith(COMMENT_PREFIX):
            continue
        stripped.append(line.split(COMMENT_PREFIX, 1)[0])
    return stripped


def split_requirements(lines: Iterable[str]) -> List[str]:
    """
    Group comment-free lines into blank-line separated requirement blocks.

    Returns:
        The non-empty blocks, trimmed, in document order.
    """
    text = "\n".join(line.strip() for line in lines).strip()
    blocks = (block.strip() for block in text.split("\n\n"))
    return [block for block in blocks if block]


def parse_specification(text: str, max_depth: Optional[int] = None) -> Specification:
    """
    Parse a specification document, raising on failure.

    Args:
        text: The full document.
        max_depth: Optional recursion bound for each requirement.

    Returns:
        The parsed specification.

    Raises:
        ParseError: If the header is malformed or a requirement does
            not parse; ``requirement`` holds the failing block's 1-based
            index.
    """
    split = split_header(text)
    if split is None:
        raise ParseError("Specification must start with a '//' configuration header", text)
    header, body = split
    configuration = Configuration.parse(header)
    if configuration is None:
        raise ParseError(
            "Configuration must contain exactly one '// spec:language <name>' directive",
            header,
        )
    parser = TCTLParser(language=configuration.language)
    if max_depth is not None:
        parser.max_depth = max_depth
    requirements: List[Expression] = []
    for index, block in enumerate(split_requirements(strip_comments(body)), start=1):
        expression = parser.expression(block)
        if expression is None:
            raise ParseError(
                f"Requirement {index} is not a valid TCTL expression: '{block}'",
                block,
                requirement=index,
            )
        requirements.append(expression)
    return Specification(configuration, tuple(requirements))
