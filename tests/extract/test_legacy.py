"""
Unit tests for the labelled-line extractor.
"""

from sbct.extract.legacy import (
    disposition_from_prose,
    extract_legacy,
    mount_from_prose,
    parse_race_class_level,
)
from sbct.ir.enums import CanonicalLabel


class TestExtractLegacy:
    """Labelled house-format blocks."""

    def test_owen(self, owen_text):
        """Every label folds to its canonical key."""
        entity = extract_legacy(owen_text)

        assert entity.name == "Owen"
        assert entity.get(CanonicalLabel.DISPOSITION) == "law/good"
        assert entity.get(CanonicalLabel.RACE_CLASS) == "human, 4th level fighter"
        assert entity.get(CanonicalLabel.HP) == "24"
        assert entity.get(CanonicalLabel.AC) == "16"
        assert (entity.race, entity.class_level, entity.char_class) == ("human", "4", "fighter")
        assert entity.notes == []

    def test_labels_share_a_line(self):
        """Several labels on one line are each stored."""
        entity = extract_legacy("**Mara** Disposition: chaos/good HP: 10 AC: 13")

        assert entity.name == "Mara"
        assert entity.get(CanonicalLabel.DISPOSITION) == "chaos/good"
        assert entity.get(CanonicalLabel.HP) == "10"
        assert entity.get(CanonicalLabel.AC) == "13"

    def test_alias_labels(self):
        """Alternative spellings land on the same key."""
        entity = extract_legacy("**Brom**\nAlignment: neutral\nGear: rope, torch\nPrime Attributes (PA): strength")

        assert entity.get(CanonicalLabel.DISPOSITION) == "neutral"
        assert entity.get(CanonicalLabel.EQUIPMENT) == "rope, torch"
        assert entity.get(CanonicalLabel.PRIMARY_ATTRIBUTES) == "strength"

    def test_unlabelled_lines_become_notes(self):
        """Prose survives as notes and still fills missing fields."""
        entity = extract_legacy("**Tess**\nShe is a 3rd level elf ranger with HP 14.")

        assert entity.notes == ["She is a 3rd level elf ranger with HP 14."]
        assert entity.get(CanonicalLabel.HP) == "14"
        assert entity.char_class == "ranger"

    def test_mount_label(self):
        """A Mount label becomes a MountBlock."""
        entity = extract_legacy("**Owen**\nMount: a heavy war horse")
        assert entity.mount.name == "heavy war horse"

    def test_empty(self):
        """Blank input yields an empty entity."""
        entity = extract_legacy("   ")
        assert entity.name == ""
        assert entity.fields == {}


class TestProse:
    """Prose fallbacks."""

    def test_race_class_level_orders(self):
        """All three common orders are understood."""
        assert parse_race_class_level("human, 4th level fighter") == ("human", "4", "fighter")
        assert parse_race_class_level("4th level human fighter") == ("human", "4", "fighter")
        assert parse_race_class_level("fighter, 4th level") == (None, "4", "fighter")
        assert parse_race_class_level("no class here") == (None, None, None)

    def test_disposition(self):
        """'He is lawful good' and a lone 'neutral' are recognized."""
        assert disposition_from_prose("He is lawful good.") == "law/good"
        assert disposition_from_prose("a neutral sort") == "neutral"
        assert disposition_from_prose("nothing") is None

    def test_mount(self):
        """'rides a ...' phrases are captured."""
        assert mount_from_prose("He rides a pony.") == "a pony"
        assert mount_from_prose("He walks.") is None
