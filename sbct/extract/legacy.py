"""
Legacy line extractor.

Reads the labelled house format:

    **Owen**
    Disposition: lawful good
    Race & Class: human, 4th level fighter
    Hit Points (HP): 24
    Armor Class (AC): 16

Labels may share a line ("**Owen** Disposition: law/good HP: 24"). Fields
still missing after the labels are filled from prose, first match wins.
"""

import re
from typing import Optional

from sbct.core.logging import LogChannel, get_logger
from sbct.extract.parenthetical import (
    AC_RE,
    HP_RE,
    attribute_run,
    equipment_verbs,
)
from sbct.extract.splitter import BOLD_LEAD_RE, is_bold_lead, clean_name, is_unit_heading
from sbct.ir.enums import CanonicalLabel
from sbct.ir.schema import ParsedEntity
from sbct.normalize.disposition import normalize_disposition
from sbct.normalize.grammar import ORDINAL_SUFFIX_PATTERN, extract_gender, superscript_ordinal
from sbct.normalize.mounts import parse_mount

log = get_logger(LogChannel.EXTRACT)

ORD = ORDINAL_SUFFIX_PATTERN

LABEL_ALIASES: dict[str, CanonicalLabel] = {
    "Disposition": CanonicalLabel.DISPOSITION,
    "Alignment": CanonicalLabel.DISPOSITION,
    "Race & Class": CanonicalLabel.RACE_CLASS,
    "Race and Class": CanonicalLabel.RACE_CLASS,
    "Race/Class": CanonicalLabel.RACE_CLASS,
    "Hit Points (HP)": CanonicalLabel.HP,
    "Hit Points": CanonicalLabel.HP,
    "HP": CanonicalLabel.HP,
    "Armor Class (AC)": CanonicalLabel.AC,
    "Armor Class": CanonicalLabel.AC,
    "AC": CanonicalLabel.AC,
    "Prime Attributes (PA)": CanonicalLabel.PRIMARY_ATTRIBUTES,
    "Primary Attributes": CanonicalLabel.PRIMARY_ATTRIBUTES,
    "Prime Attributes": CanonicalLabel.PRIMARY_ATTRIBUTES,
    "PA": CanonicalLabel.PRIMARY_ATTRIBUTES,
    "Significant Attributes": CanonicalLabel.SIGNIFICANT_ATTRIBUTES,
    "Secondary Skills": CanonicalLabel.SECONDARY_SKILLS,
    "Secondary Skill": CanonicalLabel.SECONDARY_SKILLS,
    "Equipment": CanonicalLabel.EQUIPMENT,
    "Gear": CanonicalLabel.EQUIPMENT,
    "EQ": CanonicalLabel.EQUIPMENT,
    "Spells": CanonicalLabel.SPELLS,
    "Mount": CanonicalLabel.MOUNT,
    "Special Abilities": CanonicalLabel.SPECIAL_ABILITIES,
    "Special": CanonicalLabel.SPECIAL_ABILITIES,
    "Background": CanonicalLabel.BACKGROUND,
}

_ALIAS_LOOKUP = {alias.lower(): label for alias, label in LABEL_ALIASES.items()}

# Longest first so "Hit Points (HP)" wins over "HP"
_LABEL_RE = re.compile(
    r"(?<![\w])("
    + "|".join(re.escape(a) for a in sorted(LABEL_ALIASES, key=len, reverse=True))
    + r")\s*:",
    re.IGNORECASE,
)


# ============================================================================
# Race / class / level
# ============================================================================

_RCL_PATTERNS = (
    # human, 16th level cleric
    (re.compile(rf"\b([a-z-]+)\s*,\s*(\d{{1,2}}(?:{ORD})?(?:\s*/\s*\d{{1,2}}(?:{ORD})?)?)\s*level\s+([a-z/-]+)", re.IGNORECASE), (1, 2, 3)),
    # 16th level human cleric
    (re.compile(rf"\b(\d{{1,2}}(?:{ORD})?(?:\s*/\s*\d{{1,2}}(?:{ORD})?)?)\s*level\s+([a-z-]+)\s+([a-z/-]+)", re.IGNORECASE), (2, 1, 3)),
    # cleric, 16th level
    (re.compile(rf"\b([a-z/-]+)\s*,\s*(\d{{1,2}}(?:{ORD})?)\s*level\b", re.IGNORECASE), (None, 2, 1)),
)


def _strip_ordinals(level: str) -> str:
    return re.sub(ORD, "", re.sub(r"\s+", "", level))


def parse_race_class_level(text: str) -> tuple[Optional[str], Optional[str], Optional[str]]:
    """
    (race, level, class) from race/class prose.

    "human, 4th level fighter", "4th level human fighter" and
    "fighter, 4th level" are understood. The race is None when the text
    names only a class.
    """
    for pattern, (race_group, level_group, class_group) in _RCL_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        race = match.group(race_group).lower() if race_group else None
        return race, _strip_ordinals(match.group(level_group)), match.group(class_group).lower()
    return None, None, None


# ============================================================================
# Prose fallbacks
# ============================================================================

def disposition_from_prose(text: str) -> Optional[str]:
    """Labelled or "He is lawful good" style disposition, then a lone "neutral"."""
    match = re.search(r"\b(?:Disposition|Alignment)[^:\n]*[:\-]\s*([A-Za-z /-]+)", text, re.IGNORECASE)
    if match:
        return normalize_disposition(match.group(1))

    match = re.search(
        r"\b(?:he|she)\s+is\s+(?:an?\s+)?(lawful|chaotic|neutral)[ -]?(good|evil|neutral)?\b",
        text,
        re.IGNORECASE,
    )
    if not match:
        match = re.search(
            r"\bthey\s+are\s+(?:an?\s+)?(lawful|chaotic|neutral)[ -]?(good|evil|neutral)?\b",
            text,
            re.IGNORECASE,
        )
    if match:
        return normalize_disposition(" ".join(p for p in match.groups() if p))

    if re.search(r"\bneutral\b", text, re.IGNORECASE):
        return "neutral"
    return None


def primes_from_prose(text: str) -> Optional[str]:
    match = re.search(r"\b(?:primary|prime)\s+attributes?[^:)\n]*?\s*(?:are|:)\s*([^.\n)]+)", text, re.IGNORECASE)
    return attribute_run(match.group(1)) if match else None


def equipment_from_shorthand(text: str) -> Optional[str]:
    match = re.search(r"\bEQ\s+([^.\n)]+)", text)
    return match.group(1).strip() if match else None


def mount_from_prose(text: str) -> Optional[str]:
    match = re.search(r"\b(?:rides?|riding)\s+((?:an?|the)\s+[^.;\n)]+)", text, re.IGNORECASE)
    return match.group(1).strip() if match else None


# ============================================================================
# Extractor
# ============================================================================

def _parse_labelled(line: str, entity: ParsedEntity) -> bool:
    """Store every `Label: value` run on a line. False when the line has none."""
    matches = list(_LABEL_RE.finditer(line))
    if not matches:
        return False
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(line)
        value = line[match.end():end].strip().rstrip(",;").strip()
        label = _ALIAS_LOOKUP[match.group(1).lower()]
        _store(entity, label, value)
    return True


def _store(entity: ParsedEntity, label: CanonicalLabel, value: str) -> None:
    if not value:
        return
    if label == CanonicalLabel.DISPOSITION:
        value = normalize_disposition(value)
    elif label in (CanonicalLabel.HP, CanonicalLabel.AC):
        number = re.match(r"\d+(?:/\d+)*", value)
        value = number.group(0) if number else value
    entity.set(label, value, overwrite=False)


def extract_legacy(text: str) -> ParsedEntity:
    """Parse one labelled block into a ParsedEntity. Never raises."""
    entity = ParsedEntity(original=text)
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return entity

    first = lines[0]
    body = lines[1:]
    bold = BOLD_LEAD_RE.match(first) if is_bold_lead(first) else None
    if bold:
        entity.name = clean_name(bold.group(0))
        rest = first[bold.end():].strip().lstrip(",;:").strip()
        if rest:
            body.insert(0, rest)
    elif _LABEL_RE.match(first):
        body.insert(0, first)
    else:
        entity.name = clean_name(first)
        if "(" in first:
            body.insert(0, first[first.index("("):])

    for line in body:
        if not _parse_labelled(line.replace("**", ""), entity):
            entity.notes.append(line)

    _fill_from_prose(entity, "\n".join(body))

    race_class = entity.get(CanonicalLabel.RACE_CLASS)
    if race_class:
        entity.race, entity.class_level, entity.char_class = parse_race_class_level(race_class)

    mount_text = entity.get(CanonicalLabel.MOUNT)
    if mount_text:
        entity.mount = parse_mount(mount_text)

    entity.is_unit = is_unit_heading(entity.name) if entity.name else False
    entity.gender = extract_gender(text)

    log.debug("legacy_extracted", name=entity.name, fields=sorted(entity.fields), notes=len(entity.notes))
    return entity


def _fill_from_prose(entity: ParsedEntity, body: str) -> None:
    if not entity.has(CanonicalLabel.HP):
        match = HP_RE.search(body)
        entity.set(CanonicalLabel.HP, match.group(1) if match else None)
    if not entity.has(CanonicalLabel.AC):
        match = AC_RE.search(body)
        entity.set(CanonicalLabel.AC, match.group(1) if match else None)

    if not entity.has(CanonicalLabel.RACE_CLASS):
        race, level, char_class = parse_race_class_level(body)
        if char_class:
            parts = [race, f"{superscript_ordinal(level)} level {char_class}" if level else char_class]
            entity.set(CanonicalLabel.RACE_CLASS, ", ".join(p for p in parts if p))

    if not entity.has(CanonicalLabel.DISPOSITION):
        entity.set(CanonicalLabel.DISPOSITION, disposition_from_prose(body))
    if not entity.has(CanonicalLabel.PRIMARY_ATTRIBUTES):
        entity.set(CanonicalLabel.PRIMARY_ATTRIBUTES, primes_from_prose(body))
    if not entity.has(CanonicalLabel.EQUIPMENT):
        entity.set(CanonicalLabel.EQUIPMENT, equipment_from_shorthand(body) or equipment_verbs(body))
    if not entity.has(CanonicalLabel.MOUNT):
        entity.set(CanonicalLabel.MOUNT, mount_from_prose(body))
