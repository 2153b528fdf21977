"""
Shared pytest fixtures for the TCTL test suite.

Provides parser instances, fixture paths, and temporary file paths
used across unit and integration tests.
"""

from pathlib import Path

import pytest

from tctl.parser.grammar import TCTLParser


@pytest.fixture
def parser() -> TCTLParser:
    """Return a fresh TCTL parser with VHDL predicates."""
    return TCTLParser()


@pytest.fixture
def tmp_spec_file(tmp_path: Path) -> Path:
    """Path for a temporary specification file."""
    return tmp_path / "requirements.tctl"


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def specs_dir(fixtures_dir: Path) -> Path:
    """Path to the specification fixtures directory."""
    return fixtures_dir / "specs"
