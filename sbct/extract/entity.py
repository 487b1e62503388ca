"""
Extractor selection — one block in, one ParsedEntity out.

Forced modes pick their extractor directly. Enhanced mode routes monster
stat lines to the monster extractor, narrative parentheticals to the
enhanced extractor (backed by the legacy extractor for anything they
leave out), and everything else to the legacy extractor.
"""

import re
from typing import Optional

from sbct.core.logging import LogChannel, get_logger
from sbct.extract.legacy import extract_legacy
from sbct.extract.monster import extract_monster, starts_monster_field
from sbct.extract.parenthetical import extract_parenthetical_data
from sbct.extract.splitter import (
    BOLD_LEAD_RE,
    clean_name,
    is_unit_heading,
    split_title_and_body,
)
from sbct.ir.enums import CanonicalLabel, FormatterMode
from sbct.ir.schema import ParentheticalData, ParsedEntity
from sbct.normalize.grammar import extract_gender

log = get_logger(LogChannel.EXTRACT)

_DICE_ONLY_RE = re.compile(r"^\s*\d*\s*d\d+\s*$", re.IGNORECASE)

_PARENTHETICAL_FIELDS = (
    (CanonicalLabel.DISPOSITION, "disposition"),
    (CanonicalLabel.RACE_CLASS, "race_class"),
    (CanonicalLabel.HP, "hp"),
    (CanonicalLabel.AC, "ac"),
    (CanonicalLabel.CREATURE_LEVEL, "creature_level"),
    (CanonicalLabel.PRIMARY_ATTRIBUTES, "attributes"),
    (CanonicalLabel.SIGNIFICANT_ATTRIBUTES, "significant_attributes"),
    (CanonicalLabel.SECONDARY_SKILLS, "secondary_skills"),
    (CanonicalLabel.EQUIPMENT, "equipment"),
    (CanonicalLabel.SPELLS, "spells"),
    (CanonicalLabel.COINS, "coins"),
    (CanonicalLabel.JEWELRY, "jewelry"),
)


def merge_parenthetical_data(parts: list[ParentheticalData]) -> ParentheticalData:
    """Combine several parentheticals; the first value seen for a field wins."""
    merged = ParentheticalData()
    for part in parts:
        for name in ParentheticalData.model_fields:
            if name == "raw":
                continue
            if getattr(merged, name) is None and getattr(part, name) is not None:
                setattr(merged, name, getattr(part, name))
    merged.raw = "\n".join(p.raw for p in parts if p.raw)
    return merged


def _looks_like_monster(text: str) -> bool:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return False
    bold = BOLD_LEAD_RE.match(lines[0])
    if bold and starts_monster_field(lines[0][bold.end():]):
        return True
    return any(starts_monster_field(line) for line in lines[1:])


def _strip_parentheticals(text: str, parentheticals: list[str]) -> str:
    for segment in parentheticals:
        text = text.replace(f"({segment})", " ")
    return text


def extract_enhanced(text: str) -> ParsedEntity:
    """Parenthetical-first extraction with legacy backfill."""
    parsed = split_title_and_body(text)
    segments = [p for p in parsed.parentheticals if not _DICE_ONLY_RE.match(p)]
    title_unit = is_unit_heading(clean_name(parsed.title)) if parsed.title else False

    data = merge_parenthetical_data([
        extract_parenthetical_data(segment, is_unit=title_unit, title=parsed.title)
        for segment in segments
    ])

    entity = ParsedEntity(original=text, name=clean_name(parsed.title), parenthetical=data)
    for label, attr in _PARENTHETICAL_FIELDS:
        entity.set(label, getattr(data, attr))
    if data.mount_data:
        entity.mount = data.mount_data
        entity.set(CanonicalLabel.MOUNT, data.mount_data.name)
    entity.race = data.race
    entity.char_class = data.char_class
    entity.class_level = data.level
    entity.is_unit = title_unit or data.original_pronoun in ("these", "those")

    legacy = extract_legacy(_strip_parentheticals(text, parsed.parentheticals))
    for key, value in legacy.fields.items():
        entity.set(key, value, overwrite=False)
    entity.notes.extend(legacy.notes)
    if not entity.name:
        entity.name = legacy.name
    if entity.race is None and entity.char_class is None:
        entity.race, entity.class_level, entity.char_class = legacy.race, legacy.class_level, legacy.char_class
    entity.mount = entity.mount or legacy.mount
    entity.gender = extract_gender(text)
    return entity


def extract_entity(text: str, mode: FormatterMode = FormatterMode.ENHANCED) -> ParsedEntity:
    """Run the extractor the mode calls for."""
    mode = FormatterMode(mode)
    if mode == FormatterMode.MONSTER:
        return extract_monster(text)
    if mode == FormatterMode.NPC:
        return extract_legacy(text)

    if _looks_like_monster(text):
        log.debug("extractor_selected", extractor="monster")
        return extract_monster(text)
    if split_title_and_body(text).parentheticals:
        log.debug("extractor_selected", extractor="enhanced")
        return extract_enhanced(text)
    log.debug("extractor_selected", extractor="legacy")
    return extract_legacy(text)


def has_content(entity: ParsedEntity) -> bool:
    """Anything extracted besides a name?"""
    return bool(entity.fields or entity.mount)


def entity_name(entity: ParsedEntity, fallback: Optional[str] = None) -> str:
    return entity.name or fallback or "Unnamed"
