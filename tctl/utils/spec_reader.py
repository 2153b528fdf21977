"""
Reader for TCTL specification files.

Loads a specification document from disk, parses its configuration
header and requirements, and reports every malformed requirement at
once for validation.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from tctl.parser.grammar import ParseError, TCTLParser
from tctl.parser.specification import (
    Configuration,
    Specification,
    parse_specification,
    split_header,
    split_requirements,
    strip_comments,
)


class SpecificationReader:
    """
    Parses specification files into Specification objects.

    Expected format::

        // spec:language VHDL

        -- Optional comments, whole-line or trailing
        A G ready = '1'

        A G req = '1' -> {A F ack = '1'}_{t <= 2 us}

    Attributes:
        filepath: Path to the specification file.
    """

    def __init__(self, filepath: Path) -> None:
        """
        Initialize reader with file path.

        Args:
            filepath: Path to the specification file.
        """
        self.filepath: Path = Path(filepath)

    def read(self, max_depth: Optional[int] = None) -> Specification:
        """
        Read and parse the whole specification.

        Args:
            max_depth: Optional recursion bound for each requirement.

        Returns:
            The parsed specification.

        Raises:
            FileNotFoundError: If the file does not exist.
            ParseError: If the header or a requirement is malformed.
        """
        return parse_specification(self._read_text(), max_depth=max_depth)

    def read_configuration(self) -> Configuration:
        """
        Read only the configuration header.

        Raises:
            FileNotFoundError: If the file does not exist.
            ParseError: If the header is missing or malformed.
        """
        text = self._read_text()
        split = split_header(text)
        if split is None:
            raise ParseError("Specification must start with a '//' configuration header", text)
        configuration = Configuration.parse(split[0])
        if configuration is None:
            raise ParseError(
                "Configuration must contain exactly one '// spec:language <name>' directive",
                split[0],
            )
        return configuration

    def read_requirement_blocks(self) -> List[str]:
        """
        Read the raw requirement blocks, comments removed.

        Returns:
            The requirement texts in file order (empty if the file has
            no header).

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        split = split_header(self._read_text())
        if split is None:
            return []
        return split_requirements(strip_comments(split[1]))

    def validate(self) -> List[str]:
        """
        Validate the specification file and return a list of error strings.

        Unlike ``read``, every requirement is checked, so one call
        reports all malformed blocks.

        Returns:
            List of error messages (empty if valid).
        """
        errors: List[str] = []

        if not self.filepath.exists():
            errors.append(f"File not found: {self.filepath}")
            return errors

        try:
            configuration = self.read_configuration()
        except ParseError as exc:
            errors.append(str(exc))
            return errors

        parser = TCTLParser(language=configuration.language)
        for index, block in enumerate(self.read_requirement_blocks(), start=1):
            if parser.expression(block) is None:
                errors.append(f"Requirement {index} is not a valid TCTL expression: '{block}'")

        return errors

    def _read_text(self) -> str:
        if not self.filepath.exists():
            raise FileNotFoundError(f"Specification file not found: {self.filepath}")
        return self.filepath.read_text()
