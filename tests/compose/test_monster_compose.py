"""
Unit tests for monster and mount rendering.
"""

import pytest

from sbct.compose import compose_entity
from sbct.compose.monster import compose_monster, is_group, monster_level, save_category
from sbct.compose.mount import format_mount_block, mount_bridge
from sbct.extract.monster import extract_monster
from sbct.ir.enums import CanonicalLabel
from sbct.ir.schema import MountBlock, ParsedEntity


class TestMonsterHelpers:
    """Levels, saves, and groups."""

    def test_level_from_hit_dice(self):
        """Hit dice carry both level and die."""
        entity = ParsedEntity(fields={"HD": "4 (d8)"})
        assert monster_level(entity) == "Level 4(d8)"

        entity = ParsedEntity(fields={"HD": "1d6"})
        assert monster_level(entity) == "Level 1(d6)"

    def test_level_fallbacks(self):
        """Level beats non-dice HD; raw HD is the last resort."""
        assert monster_level(ParsedEntity(fields={"HD": "2+1", "Level": "3"})) == "Level 3"
        assert monster_level(ParsedEntity(fields={"HD": "2+1"})) == "Level 2+1"
        assert monster_level(ParsedEntity()) is None

    def test_save_category(self):
        """P and M letters become category names."""
        assert save_category("P") == "Physical"
        assert save_category("p, m") == "Physical/Mental"
        assert save_category("special") == "special"

    def test_is_group(self):
        """A count marker makes a group."""
        assert is_group("Goblins x12")
        assert not is_group("Goblin")


class TestComposeMonster:
    """Monster rendering."""

    def test_goblin(self, goblin_text):
        """One vital-stats sentence in field order."""
        text = compose_monster(extract_monster(goblin_text))

        assert text.startswith("**Goblin** *(This creature’s vital stats are Level 1(d6), AC 13, ")
        assert "attacks with weapon (1d6), save category is Physical, Type: humanoid, XP: 5" in text
        assert text.endswith(".)*")

    def test_abbreviation_periods_kept(self):
        """'ft.' survives inside the sentence; plain periods do not."""
        entity = ParsedEntity(name="Wolf")
        entity.set(CanonicalLabel.AC, "13.")
        entity.set(CanonicalLabel.MOVE, "50 ft.")
        entity.set(CanonicalLabel.TYPE, "animal.")

        assert compose_monster(entity) == (
            "**Wolf** *(This creature’s vital stats are AC 13, moves 50 ft., Type: animal.)*"
        )

    def test_compose_entity_requires_variant(self):
        """Unclassified entities cannot be composed."""
        with pytest.raises(ValueError):
            compose_entity(ParsedEntity(name="Goblin"))


class TestMountRendering:
    """Mount bridge and block."""

    def test_block_with_stats(self):
        """Stats, then attacks."""
        mount = MountBlock(name="heavy war horse", hp="30", ac="19", disposition="neutral", attacks="2 hooves 1d6")

        assert format_mount_block(mount) == (
            "**Heavy War Horse (mount)** *(This creature’s vital stats are "
            "HP 30, AC 19, disposition neutral. It attacks with 2 hooves 1d6.)*"
        )

    def test_block_without_stats(self):
        """No stats reads as unavailable."""
        assert format_mount_block(MountBlock(name="mule")) == (
            "**Mule (mount)** *(This creature’s vital stats are unavailable.)*"
        )

    def test_bridge(self):
        """Singular takes an article; plural pluralizes the mount."""
        assert mount_bridge(MountBlock(name="heavy war horse"), "He", False) == "He rides a heavy war horse"
        assert mount_bridge(MountBlock(name="pony"), "They", True) == "They ride ponies"
