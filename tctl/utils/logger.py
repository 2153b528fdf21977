"""
Structured logging for the TCTL checker.

Provides configurable log levels (silent, normal, verbose, debug)
with consistent formatting for verdicts, per-requirement details,
and specification statistics.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Any, Dict, TextIO


class LogLevel(Enum):
    """
    Logging levels for the checker.

    SILENT:  No output at all.
    NORMAL:  Final verdict only.
    VERBOSE: Configuration, requirements and statistics.
    DEBUG:   Detailed per-requirement parse output.
    """

    SILENT = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


class SpecLogger:
    """
    Structured logger for checking TCTL specifications.

    Output is filtered by the configured log level.

    Attributes:
        level: The minimum log level to display.
        stream: The output stream (defaults to stdout).
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.NORMAL,
        stream: TextIO = sys.stdout,
    ) -> None:
        self.level: LogLevel = level
        self.stream: TextIO = stream

    def debug(self, message: str, **kwargs: Any) -> None:
        """
        Log a debug message (only shown at DEBUG level).

        Args:
            message: The message to log.
            **kwargs: Additional key-value pairs to include.
        """
        if self.level.value >= LogLevel.DEBUG.value:
            self._write(f"[DEBUG] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def info(self, message: str, **kwargs: Any) -> None:
        """
        Log an info message (shown at VERBOSE and DEBUG levels).

        Args:
            message: The message to log.
            **kwargs: Additional key-value pairs to include.
        """
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write(f"[INFO] {message}")
            for k, v in kwargs.items():
                self._write(f"  {k}: {v}")

    def verdict_valid(self, requirements: int) -> None:
        """Log a VALID verdict (shown at NORMAL level and above)."""
        if self.level.value >= LogLevel.NORMAL.value:
            noun = "requirement" if requirements == 1 else "requirements"
            self._write(f"VALID: {requirements} {noun} parsed")

    def verdict_invalid(self, reason: str) -> None:
        """Log an INVALID verdict (shown at NORMAL level and above)."""
        if self.level.value >= LogLevel.NORMAL.value:
            self._write(f"INVALID: {reason}")

    def statistics(self, stats: Dict[str, Any]) -> None:
        """
        Log specification statistics (shown at VERBOSE level and above).

        Args:
            stats: Dictionary of statistic names to values.
        """
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write("=== Statistics ===")
            for key, value in stats.items():
                label = key.replace("_", " ").title()
                self._write(f"  {label}: {value}")

    def configuration_info(self, configuration: Any) -> None:
        """Log the parsed configuration header at VERBOSE level."""
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write(f"[CONFIG] {configuration}")

    def requirement_info(self, index: int, requirement: Any) -> None:
        """
        Log one parsed requirement at VERBOSE level.

        Args:
            index: 1-based position of the requirement.
            requirement: The parsed expression.
        """
        if self.level.value >= LogLevel.VERBOSE.value:
            self._write(f"[REQ {index}] {requirement}")

    def _write(self, message: str) -> None:
        """Write a line to the output stream."""
        self.stream.write(message + "\n")
