"""
Entity classifier — decides NPC or monster once extraction is done.
"""

from sbct.ir.enums import CanonicalLabel, EntityVariant
from sbct.ir.schema import ParsedEntity

MONSTER_MARKERS = (
    CanonicalLabel.HD,
    CanonicalLabel.LEVEL,
    CanonicalLabel.TYPE,
    CanonicalLabel.TREASURE,
    CanonicalLabel.XP,
    CanonicalLabel.SAVES,
)


def is_monster(entity: ParsedEntity) -> bool:
    """Any monster-only field, or an Alignment label read by the monster extractor."""
    if any(entity.has(marker) for marker in MONSTER_MARKERS):
        return True
    return "Alignment" in entity.schema_labels


def classify(entity: ParsedEntity) -> EntityVariant:
    """Set and return the entity's variant."""
    variant = EntityVariant.MONSTER if is_monster(entity) else EntityVariant.NPC
    entity.assign_variant(variant)
    return variant
