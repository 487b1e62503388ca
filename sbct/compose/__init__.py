"""
Narrative composers — ParsedEntity to constrained Markdown.
"""

from typing import Optional

from sbct.compose.monster import compose_monster
from sbct.compose.mount import format_mount_block
from sbct.compose.narrative import Voice, compose_npc
from sbct.dictionaries.models import NameMappings
from sbct.ir.enums import EntityVariant
from sbct.ir.schema import ParsedEntity

COMPOSERS = {
    EntityVariant.NPC: compose_npc,
    EntityVariant.MONSTER: lambda entity, mappings=None: compose_monster(entity),
}


def compose_entity(entity: ParsedEntity, mappings: Optional[NameMappings] = None) -> str:
    """Render a classified entity with the composer for its variant."""
    if entity.variant is None:
        raise ValueError(f"Entity '{entity.name}' has not been classified")
    return COMPOSERS[entity.variant](entity, mappings=mappings)


__all__ = [
    "COMPOSERS",
    "Voice",
    "compose_entity",
    "compose_monster",
    "compose_npc",
    "format_mount_block",
]
