"""
Unit tests for the attribute normalizer.
"""

import pytest

from sbct.ir.enums import AttributeKind
from sbct.ir.schema import AttributeContext, AttributeSummary
from sbct.normalize.attributes import (
    has_class_levels,
    normalize_attributes,
    render_attributes,
    tokenize_attributes,
)
from sbct.normalize.classes import ATTRIBUTE_ORDER, get_lexicon


def classed(char_class: str, level: str = "4") -> AttributeContext:
    return AttributeContext(
        race_class_text=f"human, {level}th level {char_class}",
        level_text=level,
    )


class TestTokenize:
    """Raw attribute text to (name, score) pairs."""

    def test_abbreviations_and_scores(self):
        """Abbreviations expand and optional scores are read."""
        assert tokenize_attributes("Str 16, dex, CON: 7") == [
            ("strength", 16),
            ("dexterity", None),
            ("constitution", 7),
        ]

    def test_no_attributes(self):
        """Text without attribute words yields nothing."""
        assert tokenize_attributes("none to speak of") == []


class TestClassLevels:
    """Whether the enumerating branch applies."""

    def test_known_class_with_level(self):
        """A lexicon class plus a level counts."""
        assert has_class_levels(classed("fighter"))

    def test_level_in_text_only(self):
        """A level written in the race/class text is enough."""
        assert has_class_levels(AttributeContext(race_class_text="elf, 3rd level ranger"))

    def test_unknown_class(self):
        """Unknown classes never count."""
        assert not has_class_levels(classed("militia"))

    def test_monster_context(self):
        """No race/class text at all."""
        assert not has_class_levels(AttributeContext())


class TestNormalizeAttributes:
    """The four-branch decision."""

    @pytest.mark.parametrize("char_class", sorted(get_lexicon().classes))
    def test_class_primes_enumerate(self, char_class):
        """A class's own primes with qualifying scores list exactly those primes, in order."""
        primes = get_lexicon().primes_for(char_class)
        raw = ", ".join(f"{name} 16" for name in primes)

        summary = normalize_attributes(raw, classed(char_class))

        assert summary.kind == AttributeKind.LIST
        assert summary.names == [a for a in ATTRIBUTE_ORDER if a in primes]

    def test_classed_keyword_without_scores(self):
        """An explicit keyword gives a prime type."""
        summary = normalize_attributes("physical", classed("fighter"))
        assert summary == AttributeSummary(kind=AttributeKind.PRIME, value="physical")

    def test_classed_bare_names_sorted(self):
        """Bare names enumerate in canonical order."""
        summary = normalize_attributes("wisdom, strength", classed("cleric"))
        assert summary.kind == AttributeKind.LIST
        assert summary.names == ["strength", "wisdom"]

    def test_classed_scores_keep_notable_and_primes(self):
        """Scores <=8 or >=13 qualify, plus the class primes present."""
        summary = normalize_attributes("strength 10, dexterity 15, wisdom 7", classed("cleric"))
        assert summary.names == ["dexterity", "wisdom"]

    def test_classed_prime_with_average_score_kept(self):
        """A class prime qualifies even with an average score."""
        summary = normalize_attributes("strength 10, intelligence 11", classed("wizard"))
        assert summary.names == ["intelligence"]

    def test_classed_scores_nothing_notable(self):
        """Average scores and no class primes give nothing."""
        summary = normalize_attributes("strength 10, charisma 11", classed("rogue"))
        assert summary.kind == AttributeKind.NONE

    def test_unclassed_physical(self):
        """Non-classed entities collapse to a prime type."""
        summary = normalize_attributes("strength 18, dexterity 14", AttributeContext())
        assert summary == AttributeSummary(kind=AttributeKind.PRIME, value="physical")

    def test_unclassed_mental(self):
        """All-mental names infer mental."""
        summary = normalize_attributes("intelligence, wisdom", AttributeContext(is_unit=True))
        assert summary.value == "mental"

    def test_unclassed_mixed_defaults_to_physical(self):
        """Ambiguous mixes fall back to physical."""
        summary = normalize_attributes("strength, wisdom", AttributeContext())
        assert summary.value == "physical"

    def test_empty(self):
        """No text, no summary."""
        assert normalize_attributes(None, classed("fighter")).kind == AttributeKind.NONE
        assert normalize_attributes("  ", AttributeContext()).kind == AttributeKind.NONE


class TestRenderAndAbbreviations:
    """Rendering summaries and expanding abbreviations."""

    def test_render_list(self):
        """Lists render with an Oxford comma."""
        summary = AttributeSummary(kind=AttributeKind.LIST, names=["strength", "dexterity", "wisdom"])
        assert render_attributes(summary) == "strength, dexterity, and wisdom"

    def test_render_prime(self):
        """Prime summaries render as their type."""
        assert render_attributes(AttributeSummary(kind=AttributeKind.PRIME, value="mental")) == "mental"

    def test_render_none(self):
        """Nothing to render."""
        assert render_attributes(AttributeSummary(kind=AttributeKind.NONE)) is None
