"""
Unit tests for equipment canonicalization.
"""

from sbct.normalize.equipment import (
    canonicalize_coins,
    canonicalize_equipment,
    canonicalize_jewelry,
    canonicalize_shields,
    coin_text_to_words,
    deduplicate_equipment,
    is_armor,
    is_magic_item,
    pluralize_equipment_item,
    reposition_magic_item_bonuses,
    split_equipment_items,
)


class TestShields:
    """Every shield gets a size and a material."""

    def test_material_only(self):
        """A bare material shield gains 'medium'."""
        assert canonicalize_shields("steel shield") == "medium steel shield"
        assert canonicalize_shields("wooden shield") == "medium wooden shield"

    def test_bare_shield(self):
        """A bare shield becomes medium steel, keeping its article."""
        assert canonicalize_shields("a shield") == "a medium steel shield"

    def test_bonus_shield(self):
        """Bonus shields move the bonus to the end."""
        assert canonicalize_shields("+1 shield") == "medium steel shield +1"
        assert canonicalize_shields("+2 wooden shield") == "medium wooden shield +2"

    def test_plural_bonus_shields(self):
        """Plural bonus shields keep their plural."""
        assert canonicalize_shields("+1 shields") == "medium steel shields +1"

    def test_sized_shield_untouched(self):
        """Already-sized shields are left alone."""
        assert canonicalize_shields("large steel shield") == "large steel shield"
        assert canonicalize_shields("medium steel shield") == "medium steel shield"

    def test_buckler_untouched(self):
        """Bucklers never take size or material."""
        assert canonicalize_shields("buckler +1") == "buckler +1"
        assert canonicalize_shields("steel buckler") == "buckler"


class TestBonusRepositioning:
    """Enhancement bonuses go after the item."""

    def test_leading_bonuses(self):
        """Each leading bonus moves behind its noun."""
        assert (
            reposition_magic_item_bonuses("+1 longsword, +2 shield, +3 lance")
            == "longsword +1, shield +2, lance +3"
        )

    def test_verb_led(self):
        """The verb stays in front."""
        assert reposition_magic_item_bonuses("wields +2 mace") == "wields mace +2"

    def test_plural_nouns(self):
        """Plural item nouns still take the bonus after them."""
        assert reposition_magic_item_bonuses("+1 longswords, +2 axes") == "longswords +1, axes +2"
        assert reposition_magic_item_bonuses("carry +1 daggers") == "carry daggers +1"

    def test_unknown_noun_untouched(self):
        """Nouns outside the list keep their bonus where it is."""
        assert reposition_magic_item_bonuses("+1 spoon") == "+1 spoon"


class TestItems:
    """Splitting, classifying, and pluralizing single items."""

    def test_split_drops_pronouns_verbs_articles(self):
        """Prose becomes bare item phrases."""
        items = split_equipment_items("He wears chain mail and carries a longsword, a dagger")
        assert items == ["chain mail", "longsword", "dagger"]

    def test_magic_signatures(self):
        """Bonuses, em-dashes, and 'of X' names are magic."""
        assert is_magic_item("longsword +1")
        assert is_magic_item("cloak of elvenkind")
        assert is_magic_item("Frostfire — flame tongue")
        assert not is_magic_item("flask of oil")
        assert not is_magic_item("rope")

    def test_armor_keywords(self):
        """Armor and clothing take 'wear'."""
        assert is_armor("chain mail")
        assert is_armor("leather armor")
        assert not is_armor("longsword")

    def test_pluralize(self):
        """Units carry plural items; mail and armor stay uncountable."""
        assert pluralize_equipment_item("longsword") == "longswords"
        assert pluralize_equipment_item("staff") == "staves"
        assert pluralize_equipment_item("longsword +1") == "longswords +1"
        assert pluralize_equipment_item("*dagger +2*") == "*daggers +2*"
        assert pluralize_equipment_item("chain mail") == "chain mail"
        assert pluralize_equipment_item("leather armor") == "leather armor"
        assert pluralize_equipment_item("crossbow (1d8)") == "crossbows (1d8)"

    def test_deduplicate_keeps_first(self):
        """Exact duplicates collapse in first-seen order."""
        assert deduplicate_equipment(["a", "b", "a", "c", "b"]) == ["a", "b", "c"]


class TestCoinsAndJewelry:
    """Valuables are pulled out of the item list."""

    def test_coins(self):
        """Coin amounts become '... in coin'."""
        assert canonicalize_coins("10 gp") == "10 gold in coin"
        assert canonicalize_coins("2-12 gold") == "2–12 gold in coin"
        assert canonicalize_coins("no money") is None

    def test_jewelry(self):
        """Jewelry with a value reads as 'N gold worth of jewelry'."""
        assert canonicalize_jewelry("jewelry worth 50 gp") == "50 gold worth of jewelry"
        assert canonicalize_jewelry("a dagger") is None

    def test_coin_words(self):
        """Coin ranges are spelled out."""
        assert coin_text_to_words("1–6 gold in coin") == "one to six gold in coin"


class TestCanonicalizeEquipment:
    """The whole pipeline."""

    def test_groups(self):
        """Shields, bonuses, coins, duplicates, and verbs in one pass."""
        groups = canonicalize_equipment("chain mail, shield, +1 longsword, longsword +1, 10 gp")

        assert groups.wear == ["chain mail"]
        assert groups.carry == ["medium steel shield", "*longsword +1*"]
        assert groups.coins == "10 gold in coin"
        assert groups.jewelry is None

    def test_plural(self):
        """Unit equipment is pluralized."""
        groups = canonicalize_equipment("chain mail and longsword", plural=True)
        assert groups.wear == ["chain mail"]
        assert groups.carry == ["longswords"]

    def test_plural_bonus_shields(self):
        """A unit's bonus shields are sized, keep the plural, and carry the bonus last."""
        groups = canonicalize_equipment("chain mail, +1 shields, longswords", plural=True)
        assert groups.wear == ["chain mail"]
        assert groups.carry == ["*medium steel shields +1*", "longswords"]

    def test_name_mapping_italicizes(self, dictionaries):
        """Mapped legacy names are treated as magic items."""
        groups = canonicalize_equipment("dagger of venom", mappings=dictionaries.name_mappings)
        assert groups.carry == ["*Dagger of Envenomation*"]

    def test_mundane_container_not_italicized(self):
        """'flask of oil' is gear, not a magic item."""
        groups = canonicalize_equipment("flask of oil")
        assert groups.carry == ["flask of oil"]

    def test_empty(self):
        """No text, empty groups."""
        assert canonicalize_equipment(None).is_empty()
        assert canonicalize_equipment("   ").is_empty()
