"""
Unit tests for the disposition normalizer.
"""

import pytest

from sbct.normalize.disposition import (
    CANONICAL_DISPOSITIONS,
    canonical_or_none,
    is_canonical,
    is_adjective_form,
    normalize_disposition,
)

ADJECTIVE_PAIRS = {
    "lawful good": "law/good",
    "lawful neutral": "law/neutral",
    "lawful evil": "law/evil",
    "neutral good": "neutral/good",
    "true neutral": "neutral",
    "neutral evil": "neutral/evil",
    "chaotic good": "chaos/good",
    "chaotic neutral": "chaos/neutral",
    "chaotic evil": "chaos/evil",
}

SINGLE_AXIS = ("lawful", "chaotic", "neutral", "good", "evil")


class TestNormalizeDisposition:
    """Adjective and noun spellings to the canonical set."""

    @pytest.mark.parametrize("adjective,expected", sorted(ADJECTIVE_PAIRS.items()))
    def test_adjective_pairs(self, adjective, expected):
        """Each two-axis adjective maps to its noun form."""
        assert normalize_disposition(adjective) == expected

    @pytest.mark.parametrize("term", SINGLE_AXIS)
    def test_single_axis_is_canonical(self, term):
        """Single-axis terms land in the canonical set."""
        assert normalize_disposition(term) in CANONICAL_DISPOSITIONS

    @pytest.mark.parametrize("value", sorted(CANONICAL_DISPOSITIONS))
    def test_idempotent(self, value):
        """Re-normalizing a canonical value is a no-op."""
        assert normalize_disposition(value) == value
        assert normalize_disposition(normalize_disposition(value)) == value

    def test_case_and_separators(self):
        """Case, hyphens, and slashes don't matter."""
        assert normalize_disposition("Lawful-Good") == "law/good"
        assert normalize_disposition("CHAOTIC / EVIL") == "chaos/evil"
        assert normalize_disposition("Law/Good") == "law/good"

    def test_unknown_returned_trimmed(self):
        """Unknown input comes back trimmed and otherwise untouched."""
        assert normalize_disposition("  Mostly Harmless  ") == "Mostly Harmless"


class TestDispositionHelpers:
    """Adjective detection and canonical lookup."""

    def test_is_adjective_form(self):
        """Adjectives are flagged, nouns are not."""
        assert is_adjective_form("lawful good")
        assert is_adjective_form("evil")
        assert not is_adjective_form("law/good")
        assert not is_adjective_form("neutral")

    def test_canonical_or_none(self):
        """Only values that normalize into the canonical set come back."""
        assert canonical_or_none("chaotic good") == "chaos/good"
        assert canonical_or_none("banana") is None
        assert canonical_or_none(None) is None

    def test_is_canonical(self):
        """Canonical nouns pass; adjectives do not."""
        assert is_canonical(" Law/Good ")
        assert is_canonical("neutral")
        assert not is_canonical("lawful good")
