"""Unit tests for scitext.contexts.segmentation.smiles."""

import pytest

from scitext.contexts.segmentation.smiles import (
    extract_smiles_code,
    sanitize_smiles_code,
    split_smiles,
    validate_smiles_code,
)


@pytest.mark.unit
class TestSmilesTags:
    """Tests for tag splitting and extraction."""

    def test_split_keeps_tags(self):
        """Test tags are kept as their own parts."""
        assert split_smiles("Water: <smiles>O</smiles>.") == ["Water: ", "<smiles>O</smiles>", "."]

    def test_split_round_trip(self):
        """Test joining split parts reproduces the input."""
        text = "a <smiles>C</smiles> b <smiles>\nCC\n</smiles>"
        assert "".join(split_smiles(text)) == text

    def test_extract(self):
        assert extract_smiles_code("<smiles>CCO</smiles>") == "CCO"

    def test_extract_missing(self):
        assert extract_smiles_code("no tag") is None


@pytest.mark.unit
class TestValidateSmilesCode:
    """Tests for validate_smiles_code function."""

    @pytest.mark.parametrize("code", ["C", "CCO", "C1=CC=CC=C1", "CC(=O)O", "[Na+].[Cl-]", "C/C=C\\C"])
    def test_valid(self, code):
        """Test typical SMILES codes pass."""
        assert validate_smiles_code(code)

    @pytest.mark.parametrize("code", ["", "CC(C", "C]", "C C", "<b>C</b>", "C;drop"])
    def test_invalid(self, code):
        """Test empty, unbalanced or out-of-charset codes fail."""
        assert not validate_smiles_code(code)

    def test_length_limit(self):
        """Test codes longer than max_length fail."""
        assert validate_smiles_code("C" * 10, max_length=10)
        assert not validate_smiles_code("C" * 11, max_length=10)


@pytest.mark.unit
class TestSanitizeSmilesCode:
    """Tests for sanitize_smiles_code function."""

    def test_strips_markup(self):
        assert sanitize_smiles_code(" <b>CCO</b> ") == "CCO"

    def test_strips_schemes(self):
        assert sanitize_smiles_code("javascript:CC data:O") == "CC O"
