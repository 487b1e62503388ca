"""
NPC narrative composer.

An entity becomes a list of fragments, each one semantic clause. A
fragment either opens a new sentence or continues the one before it;
assembly capitalizes sentence leads and closes the parenthetical:

    **Owen** *(This 4ᵗʰ level human fighter’s vital stats are HP 24,
    AC 16, disposition law/good. He wears chain mail.)*
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sbct.compose.mount import UNAVAILABLE, format_mount_block, mount_bridge
from sbct.core.logging import LogChannel, get_logger
from sbct.dictionaries.models import NameMappings
from sbct.ir.enums import CanonicalLabel, Gender
from sbct.ir.schema import AttributeContext, ParsedEntity
from sbct.normalize.attributes import normalize_attributes, render_attributes
from sbct.normalize.classes import get_lexicon
from sbct.normalize.disposition import normalize_disposition
from sbct.normalize.equipment import canonicalize_equipment, coin_text_to_words, italicize_item
from sbct.normalize.grammar import (
    build_subject_descriptor,
    capitalize_first,
    find_unit_noun,
    oxford_join,
    singularize_class_name,
    superscript_ordinals_in,
    to_possessive,
)

log = get_logger(LogChannel.COMPOSE)


# ============================================================================
# Voice
# ============================================================================

@dataclass(frozen=True)
class Voice:
    """Pronoun and verb forms for one entity."""

    plural: bool
    determiner: str
    subject: str
    possessive: str
    wear: str
    carry: str
    ride: str

    @classmethod
    def for_entity(cls, is_unit: bool, gender: Gender = Gender.MALE) -> "Voice":
        if is_unit:
            return cls(True, "These", "They", "Their", "wear", "carry", "ride")
        subject, possessive = {
            Gender.MALE: ("He", "His"),
            Gender.FEMALE: ("She", "Her"),
            Gender.NEUTRAL: ("It", "Its"),
        }[Gender(gender)]
        return cls(False, "This", subject, possessive, "wears", "carries", "rides")


# ============================================================================
# Fragments
# ============================================================================

class FragmentKind(str, Enum):
    VITAL_STATS = "vital_stats"
    PRIMARY_ATTRIBUTES = "primary_attributes"
    SECONDARY_SKILLS = "secondary_skills"
    SIGNIFICANT_ATTRIBUTES = "significant_attributes"
    EQUIPMENT = "equipment"
    SPELLS = "spells"
    MOUNT_BRIDGE = "mount_bridge"


@dataclass
class Fragment:
    kind: FragmentKind
    text: str
    continues: bool = False


def assemble(fragments: list[Fragment]) -> str:
    """Join fragments into sentences. Empty input gives an empty string."""
    sentences: list[str] = []
    for fragment in fragments:
        if fragment.continues and sentences:
            sentences[-1] = f"{sentences[-1]}{fragment.text}"
        else:
            sentences.append(capitalize_first(fragment.text))
    return " ".join(f"{s}." for s in sentences)


# ============================================================================
# Fragment builders
# ============================================================================

def _descriptor(entity: ParsedEntity, voice: Voice) -> str:
    race, char_class, level = entity.race, entity.char_class, entity.class_level
    subject_phrase = entity.parenthetical.subject_phrase if entity.parenthetical else None

    if char_class and not get_lexicon().is_class(singularize_class_name(char_class)):
        # "human militia" reads as a phrase, not a class to inflect
        subject_phrase = subject_phrase or " ".join(p for p in (race, char_class) if p)
        char_class = None
    if subject_phrase:
        subject_phrase = superscript_ordinals_in(subject_phrase)

    return build_subject_descriptor(
        voice.plural,
        race=race,
        level=level,
        char_class=char_class,
        subject_phrase=subject_phrase,
        unit_noun=find_unit_noun(entity.name),
    )


def vital_stats_fragment(entity: ParsedEntity, voice: Voice) -> Optional[Fragment]:
    stats = []
    creature_level = entity.get(CanonicalLabel.CREATURE_LEVEL)
    if creature_level:
        stats.append(creature_level)
    if entity.has(CanonicalLabel.HP):
        stats.append(f"HP {entity.get(CanonicalLabel.HP)}")
    if entity.has(CanonicalLabel.AC):
        stats.append(f"AC {entity.get(CanonicalLabel.AC)}")
    if entity.has(CanonicalLabel.DISPOSITION):
        stats.append(f"disposition {normalize_disposition(entity.get(CanonicalLabel.DISPOSITION)).lower()}")
    if not stats:
        return None
    possessive = to_possessive(_descriptor(entity, voice), voice.plural)
    return Fragment(FragmentKind.VITAL_STATS, f"{possessive} vital stats are {', '.join(stats)}")


def attributes_fragment(entity: ParsedEntity, voice: Voice) -> Optional[Fragment]:
    context = AttributeContext(
        is_unit=entity.is_unit,
        race_class_text=entity.get(CanonicalLabel.RACE_CLASS),
        level_text=entity.class_level,
    )
    rendered = render_attributes(normalize_attributes(entity.get(CanonicalLabel.PRIMARY_ATTRIBUTES), context))
    if not rendered:
        return None
    return Fragment(FragmentKind.PRIMARY_ATTRIBUTES, f"{voice.possessive} primary attributes are {rendered}")


def secondary_skills_fragment(entity: ParsedEntity, voice: Voice) -> Optional[Fragment]:
    skills = entity.get(CanonicalLabel.SECONDARY_SKILLS)
    if not skills:
        return None
    several = bool(re.search(r",|\band\b", skills))
    noun = "secondary skills are" if several else "secondary skill is"
    return Fragment(FragmentKind.SECONDARY_SKILLS, f"{voice.possessive} {noun} {skills.strip().rstrip('.')}")


def significant_attributes_fragment(entity: ParsedEntity, voice: Voice) -> Optional[Fragment]:
    value = entity.get(CanonicalLabel.SIGNIFICANT_ATTRIBUTES)
    if not value:
        return None
    return Fragment(
        FragmentKind.SIGNIFICANT_ATTRIBUTES,
        f"{voice.possessive} significant attributes are {value.strip().rstrip('.')}",
    )


def equipment_fragments(
    entity: ParsedEntity,
    voice: Voice,
    mappings: Optional[NameMappings] = None,
) -> list[Fragment]:
    """
    Wear group, then carry group, one sentence. Coins and jewelry continue
    the carry clause, or open their own carry clause.
    """
    groups = canonicalize_equipment(entity.get(CanonicalLabel.EQUIPMENT), plural=voice.plural, mappings=mappings)
    coins = entity.get(CanonicalLabel.COINS) or groups.coins
    jewelry = entity.get(CanonicalLabel.JEWELRY) or groups.jewelry
    if groups.is_empty() and not (coins or jewelry):
        return []
    valuables = [v for v in (coin_text_to_words(coins) if coins else None, jewelry) if v]

    clauses = []
    if groups.wear:
        clauses.append(f"{voice.wear} {oxford_join(groups.wear)}")
    if groups.carry:
        clauses.append(f"{voice.carry} {oxford_join(groups.carry)}")

    fragments = []
    if clauses:
        fragments.append(Fragment(FragmentKind.EQUIPMENT, f"{voice.subject} {' and '.join(clauses)}"))
    if valuables:
        if groups.carry:
            text = f", and {voice.carry} {oxford_join(valuables)}"
            fragments.append(Fragment(FragmentKind.EQUIPMENT, text, continues=True))
        elif groups.wear:
            fragments.append(Fragment(FragmentKind.EQUIPMENT, f" and {voice.carry} {oxford_join(valuables)}", continues=True))
        else:
            fragments.append(Fragment(FragmentKind.EQUIPMENT, f"{voice.subject} {voice.carry} {oxford_join(valuables)}"))
    return fragments


_SPELL_TIERS_RE = re.compile(r"^[\d\s,/:–\-ˢᵗⁿᵈʳᵈᵗʰstndrh]+$", re.IGNORECASE)


def spells_fragment(entity: ParsedEntity, voice: Voice) -> Optional[Fragment]:
    spells = entity.get(CanonicalLabel.SPELLS)
    if not spells:
        return None
    spells = spells.strip().rstrip(".")
    can = "can cast"
    if _SPELL_TIERS_RE.match(spells):
        char_class = f"{entity.char_class} " if entity.char_class else ""
        text = f"{voice.subject} {can} the following number of {char_class}spells per day: {superscript_ordinals_in(spells)}"
        return Fragment(FragmentKind.SPELLS, text)

    names = [s.strip() for s in re.split(r",|\band\b", spells) if s.strip()]
    listed = oxford_join(italicize_item(name.strip("*")) for name in names)
    return Fragment(FragmentKind.SPELLS, f"{voice.subject} {can} the following spells: {listed}")


# ============================================================================
# Composer
# ============================================================================

def npc_voice(entity: ParsedEntity) -> Voice:
    gender = Gender.FEMALE if entity.gender == Gender.FEMALE else Gender.MALE
    return Voice.for_entity(entity.is_unit, gender)


def build_fragments(entity: ParsedEntity, mappings: Optional[NameMappings] = None) -> list[Fragment]:
    voice = npc_voice(entity)
    fragments: list[Fragment] = []
    for builder in (
        vital_stats_fragment,
        attributes_fragment,
        secondary_skills_fragment,
        significant_attributes_fragment,
    ):
        fragment = builder(entity, voice)
        if fragment:
            fragments.append(fragment)
    fragments.extend(equipment_fragments(entity, voice, mappings))
    spells = spells_fragment(entity, voice)
    if spells:
        fragments.append(spells)
    if entity.mount:
        fragments.append(Fragment(FragmentKind.MOUNT_BRIDGE, mount_bridge(entity.mount, voice.subject, voice.plural)))
    return fragments


def compose_npc(entity: ParsedEntity, mappings: Optional[NameMappings] = None) -> str:
    """Render an NPC entity, plus its mount block after a blank line."""
    fragments = build_fragments(entity, mappings)
    body = assemble(fragments) or UNAVAILABLE
    name = entity.name or "Unnamed"
    text = f"**{name}** *({body})*"
    if entity.mount:
        text = f"{text}\n\n{format_mount_block(entity.mount)}"

    log.debug("npc_composed", name=name, fragments=[f.kind.value for f in fragments])
    return text
