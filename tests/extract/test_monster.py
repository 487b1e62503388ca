"""
Unit tests for the monster extractor and the classifier.
"""

import pytest

from sbct.extract.classify import classify
from sbct.extract.entity import entity_name, extract_entity, has_content
from sbct.extract.legacy import extract_legacy
from sbct.extract.monster import extract_monster, parse_monster_blocks, starts_monster_field
from sbct.ir.enums import CanonicalLabel, EntityVariant, FormatterMode


class TestExtractMonster:
    """Monster stat blocks."""

    def test_goblin(self, goblin_text):
        """Inline and labelled runs both fold to canonical keys."""
        entity = extract_monster(goblin_text)

        assert entity.name == "Goblin"
        assert entity.get(CanonicalLabel.HD) == "1d6"
        assert entity.get(CanonicalLabel.AC) == "13"
        assert entity.get(CanonicalLabel.ATTACKS) == "weapon (1d6)"
        assert entity.get(CanonicalLabel.SAVES) == "P"
        assert entity.get(CanonicalLabel.TYPE) == "humanoid"
        assert entity.get(CanonicalLabel.XP) == "5"

    def test_upper_case_runs_share_a_line(self):
        """Capitalized labels split one line into several fields."""
        entity = extract_monster("**Ogre**\nSIZE: Large HD: 4 (d8)")
        assert entity.get(CanonicalLabel.SIZE) == "Large"
        assert entity.get(CanonicalLabel.HD) == "4 (d8)"

    def test_continuation_line(self):
        """A line with no label continues the previous field."""
        entity = extract_monster("**Wolf**\nSpecial: pack tactics\n  and keen smell")
        assert entity.get(CanonicalLabel.SPECIAL_ABILITIES) == "pack tactics and keen smell"

    def test_alignment_normalized(self):
        """Alignment values are stored in noun form and remembered as read."""
        entity = extract_monster("**Orc**\nAlignment: chaotic evil")
        assert entity.get(CanonicalLabel.DISPOSITION) == "chaos/evil"
        assert "Alignment" in entity.schema_labels

    def test_parse_monster_blocks(self):
        """Blank lines before a bold name separate monsters."""
        blocks = parse_monster_blocks("**Goblin**\nHD 1\n\n**Orc**\nHD 2\n")
        assert blocks == ["**Goblin**\nHD 1", "**Orc**\nHD 2"]

    def test_starts_monster_field(self):
        """Monster-only labels are recognized with or without a colon."""
        assert starts_monster_field("HD 1d6")
        assert starts_monster_field("**Type:** humanoid")
        assert not starts_monster_field("HP: 24")


class TestExtractEntity:
    """Extractor routing."""

    def test_monster_routed_by_fields(self, goblin_text):
        """A block with monster fields uses the monster extractor."""
        entity = extract_entity(goblin_text)
        assert entity.get(CanonicalLabel.HD) == "1d6"

    def test_forced_modes(self, owen_text, goblin_text):
        """NPC and MONSTER modes skip routing."""
        assert extract_entity(owen_text, FormatterMode.NPC).get(CanonicalLabel.HP) == "24"
        assert extract_entity(goblin_text, "monster").get(CanonicalLabel.XP) == "5"

    def test_has_content_and_name(self):
        """A bare name has no content; unnamed entities get a fallback."""
        entity = extract_entity("**Nobody**")
        assert not has_content(entity)
        assert entity_name(entity) == "Nobody"
        assert entity_name(extract_entity("HP: 4")) == "Unnamed"


class TestClassify:
    """NPC or monster."""

    def test_monster(self, goblin_text):
        """Monster-only fields make a monster."""
        entity = extract_monster(goblin_text)
        assert classify(entity) == EntityVariant.MONSTER
        assert entity.variant == EntityVariant.MONSTER

    def test_npc(self, owen_text):
        """Plain vital stats make an NPC."""
        entity = extract_legacy(owen_text)
        assert classify(entity) == EntityVariant.NPC

    def test_alignment_label_is_monster(self):
        """An Alignment label read by the monster extractor marks a monster."""
        entity = extract_monster("**Orc**\nAlignment: chaotic evil\nAC: 13")
        assert classify(entity) == EntityVariant.MONSTER

    def test_variant_set_once(self, owen_text):
        """Reclassifying to a different variant is an error."""
        entity = extract_legacy(owen_text)
        classify(entity)
        with pytest.raises(ValueError):
            entity.assign_variant(EntityVariant.MONSTER)
