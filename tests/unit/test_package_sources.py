"""
Tests that every scitext source file compiles cleanly.
"""

import warnings
from pathlib import Path

import pytest

import scitext

SOURCE_FILES = sorted(Path(scitext.__file__).parent.rglob("*.py"))


@pytest.mark.unit
@pytest.mark.parametrize("path", SOURCE_FILES, ids=lambda path: path.name)
def test_source_compiles_without_warnings(path):
    """Test no string literal carries an invalid escape sequence (e.g. "\\begin" in a docstring)."""
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compile(path.read_text(encoding="utf-8"), str(path), "exec")
