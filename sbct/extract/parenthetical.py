"""
Enhanced parenthetical extractor.

Reads narrative parentheticals such as

    (these 2nd level human fighters' vital stats are HP 12, AC 15,
     disposition neutral. PA physical. they wear chain mail and carry
     longbows, and carry 2-12 gold in coin.)

Every field has its own cascade of small strategies; the first strategy
to return a value wins, and a missing field never blocks another.
"""

import re
from typing import Optional

from sbct.core.cascade import first_match
from sbct.core.logging import LogChannel, get_logger
from sbct.ir.schema import ParentheticalData
from sbct.normalize.attributes import ATTRIBUTE_WORD
from sbct.normalize.classes import get_lexicon
from sbct.normalize.disposition import ADJECTIVE_PATTERN, canonical_or_none, normalize_disposition
from sbct.normalize.equipment import canonicalize_coins, canonicalize_jewelry, JEWELRY_RE
from sbct.normalize.grammar import (
    ORDINAL_SUFFIX_PATTERN,
    singularize_class_name,
    superscript_ordinal,
)
from sbct.normalize.mounts import extract_mount

log = get_logger(LogChannel.EXTRACT)

ORD = ORDINAL_SUFFIX_PATTERN

MILITARY_TERMS_RE = re.compile(
    r"\b(men-at-arms|guards|militia|troops|soldiers|fighters|warriors|bowmen|crossbowmen"
    r"|halberdiers|sergeants|knights|cavalry|infantry)\b",
    re.IGNORECASE,
)

HP_RE = re.compile(r"\b(?:HP|Hit\s*Points)\s*(?:\(HP\))?\s*[:=-]?\s*(\d+)\b", re.IGNORECASE)
AC_RE = re.compile(r"\b(?:AC|Armou?r\s*Class)\s*(?:\(AC\))?\s*[:=-]?\s*(\d+(?:/\d+)*)\b", re.IGNORECASE)

_ALIGN = rf"{ADJECTIVE_PATTERN}|(?:law|chaos|neutral)/(?:good|evil|neutral)|lawful|chaotic|neutral|good|evil"
_SUBJECT_RE = re.compile(r"^\s*(these|this|those)\s+(.+?)\s*['’]s?\s+vital\s+stats", re.IGNORECASE)
_PRONOUN_RE = re.compile(r"^\s*(these|this|those)\b", re.IGNORECASE)


# ============================================================================
# Small helpers
# ============================================================================

def _search(pattern: str, flags: int = re.IGNORECASE, group: int = 1):
    compiled = re.compile(pattern, flags)

    def strategy(text: str) -> Optional[str]:
        match = compiled.search(text)
        return match.group(group) if match else None

    return strategy


def _normalize_level(level: str) -> str:
    return re.sub(r"\s+", "", level)


def _creature_level(dice: str) -> str:
    """"1d6" / "1 (d6)" -> "Level 1(d6)"."""
    dice = re.sub(r"\s+", "", dice)
    split = re.fullmatch(r"(\d+)d(\d+)", dice)
    if split:
        dice = f"{split.group(1)}(d{split.group(2)})"
    return f"Level {dice}"


# ============================================================================
# Field strategies
# ============================================================================

def hp_label(text: str) -> Optional[str]:
    match = HP_RE.search(text)
    return match.group(1) if match else None


def ac_label(text: str) -> Optional[str]:
    match = AC_RE.search(text)
    return match.group(1) if match else None


def disposition_label(text: str) -> Optional[str]:
    match = re.search(r"\b(?:disposition|alignment)\s*[:=‑-]?\s*([^,.;)]+)", text, re.IGNORECASE)
    if not match:
        return None
    words = match.group(1).split()
    if not words:
        return None
    for candidate in (" ".join(words[:2]), words[0]):
        value = canonical_or_none(candidate)
        if value:
            return value
    return words[0]


def disposition_prose(text: str) -> Optional[str]:
    match = re.search(
        rf"\b(?:he|she|it|they)\s+(?:is|are)\s+(?:an?\s+)?({_ALIGN})\b",
        text,
        re.IGNORECASE,
    )
    return normalize_disposition(match.group(1)) if match else None


def disposition_liberal(text: str) -> Optional[str]:
    match = re.search(
        rf"\b({ADJECTIVE_PATTERN}|(?:law|chaos|neutral)/(?:good|evil|neutral)|lawful|chaotic)\b",
        text,
        re.IGNORECASE,
    )
    return normalize_disposition(match.group(1)) if match else None


DISPOSITION_STRATEGIES = (disposition_label, disposition_prose, disposition_liberal)


def _known_race(word: str) -> bool:
    return get_lexicon().is_race(word)


def _known_class(word: str) -> bool:
    return get_lexicon().is_class(singularize_class_name(word)) or get_lexicon().is_class(word)


def _display(race: str, level: Optional[str], char_class: str) -> str:
    if level:
        return f"{race.lower()}, {superscript_ordinal(level)} level {char_class.lower()}"
    return f"{race.lower()} {char_class.lower()}"


def _make_rcl_strategy(is_unit: bool):
    """Race/class/level strategies close over the unit flag for class plurality."""

    def shape_class(char_class: str) -> str:
        return char_class.lower() if is_unit else singularize_class_name(char_class)

    def level_race_class(text: str) -> Optional[str]:
        for match in re.finditer(
            rf"\b(\d{{1,2}}){ORD}?(?:\s*/\s*(\d{{1,2}}){ORD}?)?\s*level\s+([a-z-]+)\s+([a-z/-]+)",
            text,
            re.IGNORECASE,
        ):
            race, char_class = match.group(3), match.group(4)
            if not (_known_race(race) or _known_class(char_class)):
                continue
            level = match.group(1) + (f"/{match.group(2)}" if match.group(2) else "")
            return _display(race, level, shape_class(char_class))
        return None

    def race_comma_level_class(text: str) -> Optional[str]:
        for match in re.finditer(
            rf"\b([a-z-]+),\s*(\d{{1,2}}){ORD}?(?:\s*/\s*(\d{{1,2}}){ORD}?)?\s*level\s+([a-z/-]+)",
            text,
            re.IGNORECASE,
        ):
            if not _known_race(match.group(1)):
                continue
            level = match.group(2) + (f"/{match.group(3)}" if match.group(3) else "")
            return _display(match.group(1), level, shape_class(match.group(4)))
        return None

    def race_class_comma_level(text: str) -> Optional[str]:
        match = re.search(
            rf"\b([a-z-]+),\s*([a-z/-]+),\s*(\d{{1,2}}){ORD}?\s*level\b",
            text,
            re.IGNORECASE,
        )
        if not match or not _known_race(match.group(1)):
            return None
        return _display(match.group(1), match.group(3), shape_class(match.group(2)))

    def race_then_class(text: str) -> Optional[str]:
        for match in re.finditer(r"\b([a-z-]+)\s+([a-z/-]+)\b", text, re.IGNORECASE):
            if _known_race(match.group(1)) and _known_class(match.group(2)):
                return _display(match.group(1), None, shape_class(match.group(2)))
        return None

    def hit_dice_race_class(text: str) -> Optional[str]:
        match = re.search(r"\bHD\s+\d+\s*\(d\d+\)\s+([a-z-]+)\s+([a-z-]+)", text, re.IGNORECASE)
        if not match:
            return None
        return _display(match.group(1), None, match.group(2))

    return (
        level_race_class,
        race_comma_level_class,
        race_class_comma_level,
        race_then_class,
        hit_dice_race_class,
    )


_RACE_CLASS_DISPLAY_RE = re.compile(
    rf"^([a-z-]+),\s*(\d+){ORD}?(?:/(\d+){ORD}?)?\s+level\s+([a-z/-]+)$",
    re.IGNORECASE,
)


def parse_race_class(display: str) -> tuple[Optional[str], Optional[str], Optional[str]]:
    """(race, level, class) from a display string such as "human, 4ᵗʰ level fighter"."""
    match = _RACE_CLASS_DISPLAY_RE.match(display.strip())
    if match:
        level = match.group(2) + (f"/{match.group(3)}" if match.group(3) else "")
        return match.group(1).lower(), level, match.group(4).lower()
    simple = re.match(r"^([a-z-]+)\s+([a-z/-]+)$", display.strip(), re.IGNORECASE)
    if simple:
        return simple.group(1).lower(), None, simple.group(2).lower()
    return None, None, None


def creature_level_dice(text: str) -> Optional[str]:
    match = re.search(r"\bLevel\s+(\d+\s*\(d\d+\)|\d+d\d+)", text, re.IGNORECASE)
    return _creature_level(match.group(1)) if match else None


def creature_level_hit_dice(text: str) -> Optional[str]:
    match = re.search(r"\bHD\s+(\d+\s*\(d\d+\)|\d+d\d+)", text, re.IGNORECASE)
    return _creature_level(match.group(1)) if match else None


CREATURE_LEVEL_STRATEGIES = (creature_level_dice, creature_level_hit_dice)


_ATTR_RUN_RE = re.compile(
    rf"^\s*((?:(?:{ATTRIBUTE_WORD}|physical|mental)\b(?:\s*[:=]?\s*\d{{1,2}}\b)?(?:\s*(?:,|&|/|\band\b)\s*|\s+)?)+)",
    re.IGNORECASE,
)


def attribute_run(value: Optional[str]) -> Optional[str]:
    """Leading run of attribute words (with optional scores) from a capture."""
    if not value:
        return None
    match = _ATTR_RUN_RE.match(value)
    if not match:
        return None
    run = re.sub(r"(?:\s*(?:,|&|/|\band\b)\s*|\s+)$", "", match.group(1))
    return run.strip() or None


def _attr_strategy(pattern: str, flags: int = re.IGNORECASE):
    compiled = re.compile(pattern, flags)

    def strategy(text: str) -> Optional[str]:
        match = compiled.search(text)
        return attribute_run(match.group(1)) if match else None

    return strategy


def bare_attribute_run(text: str) -> Optional[str]:
    token = rf"(?:{ATTRIBUTE_WORD})\b(?:\s*\d{{1,2}}\b)?"
    match = re.search(rf"\b({token}(?:\s*(?:,|/|\band\b)\s*{token})+)", text, re.IGNORECASE)
    return match.group(1).strip() if match else None


ATTRIBUTE_STRATEGIES = (
    _attr_strategy(r"\b(?:their|his|her|its)\s+prime\s+attributes\s+are:\s*([^.]+)"),
    _attr_strategy(r"\b(?:prime|primary)\s+attributes?\s+are[:\s]*([^.;]+)"),
    _attr_strategy(r"\b(?:his|her|their|its)\s+(?:primary\s+)?attributes?\s+are\s+([^.;]+)"),
    _attr_strategy(r"\b(?:his|her|their|its)\s+primes?\s+are[:\s]*([^.;]+)"),
    _attr_strategy(r"(?:\bPA\b|\b(?i:prime|primary)\s+(?i:attributes?))\s*[:=-]?\s*([^.;]+)", 0),
    bare_attribute_run,
)


_EQUIPMENT_STOP_RE = re.compile(r",\s*(?:spells|disposition|HP|AC|PA|prime|primary)\b.*$", re.IGNORECASE)
_EQUIPMENT_VERBS = r"wears?|wearing|carries|carry|carrying|wields?|wielding|bears?|bearing|holds?|holding|dons?"


def equipment_label(text: str) -> Optional[str]:
    match = re.search(r"(?:\bEQ\b|\b(?i:equipment))\s*[:=-]?\s*([^.;]+)", text)
    return _EQUIPMENT_STOP_RE.sub("", match.group(1)).strip() if match else None


def equipment_verbs(text: str) -> Optional[str]:
    clauses = []
    for match in re.finditer(rf"\b({_EQUIPMENT_VERBS})\s+([^.;]+)", text, re.IGNORECASE):
        clause = _EQUIPMENT_STOP_RE.sub("", f"{match.group(1)} {match.group(2)}").strip()
        if clause:
            clauses.append(clause)
    return ", ".join(clauses) if clauses else None


def equipment_have(text: str) -> Optional[str]:
    match = re.search(r"\b(?:has|have)\s+(?!(?:an?\s+)?secondary\s+skill)([^.;]+)", text, re.IGNORECASE)
    return _EQUIPMENT_STOP_RE.sub("", match.group(1)).strip() if match else None


EQUIPMENT_STRATEGIES = (equipment_label, equipment_verbs, equipment_have)


def _jewelry_clauses(text: str) -> list[str]:
    return [c for c in re.split(r"[.;,]|\band\b", text) if JEWELRY_RE.search(c)]


def jewelry_clause(text: str) -> Optional[str]:
    for clause in _jewelry_clauses(text):
        value = canonicalize_jewelry(clause)
        if value:
            return value
    return None


def coins_range(text: str) -> Optional[str]:
    for clause in re.split(r"[.;]", text):
        if JEWELRY_RE.search(clause):
            continue
        match = re.search(r"(\d+)\s*[–-]\s*(\d+)\s*(?:gp|gold)\b", clause, re.IGNORECASE)
        if match:
            return f"{match.group(1)}–{match.group(2)} gold in coin"
    return None


def coins_any(text: str) -> Optional[str]:
    without_jewelry = text
    for clause in _jewelry_clauses(text):
        without_jewelry = without_jewelry.replace(clause, " ")
    return canonicalize_coins(without_jewelry)


COIN_STRATEGIES = (coins_range, coins_any)

SECONDARY_SKILL_STRATEGIES = (
    _search(r"\bsecondary\s+skills?\s*(?:is|are|:|-)?\s*([^.;]+)"),
)
SIGNIFICANT_ATTRIBUTE_STRATEGIES = (
    _search(r"\bsignificant\s+attributes?\s*(?:are|is|:|-)?\s*([^.;]+)"),
)
SPELL_STRATEGIES = (
    _search(r"\bspells?\s*(?:are|:|-)\s*([^;]+?)(?:\.\s|\.$|$)"),
    _search(r"\bcan\s+cast\s+(?:the\s+following\s+)?(?:spells?\s*)?:?\s*([^.;]+)"),
)


# ============================================================================
# Extractor
# ============================================================================

def extract_parenthetical_data(
    parenthetical: str,
    is_unit: bool = False,
    title: Optional[str] = None,
) -> ParentheticalData:
    """Run every field cascade over one parenthetical."""
    text, mount = extract_mount(parenthetical)
    data = ParentheticalData(raw=parenthetical, mount_data=mount)

    subject = _SUBJECT_RE.search(text)
    pronoun = _PRONOUN_RE.search(text)
    if subject:
        data.original_pronoun = subject.group(1).lower()
        data.subject_phrase = re.sub(r"\s+", " ", subject.group(2)).strip().lower()
    elif pronoun:
        data.original_pronoun = pronoun.group(1).lower()

    plural = is_unit or data.original_pronoun in ("these", "those")

    data.hp = hp_label(text)
    data.ac = ac_label(text)
    data.disposition = first_match(DISPOSITION_STRATEGIES, text)
    data.creature_level = first_match(CREATURE_LEVEL_STRATEGIES, text)

    race_class = first_match(_make_rcl_strategy(plural), text)
    if race_class:
        data.race_class = race_class
        data.race, data.level, data.char_class = parse_race_class(race_class)

    data.attributes = first_match(ATTRIBUTE_STRATEGIES, text)
    data.significant_attributes = first_match(SIGNIFICANT_ATTRIBUTE_STRATEGIES, text)
    data.secondary_skills = first_match(SECONDARY_SKILL_STRATEGIES, text)
    data.spells = first_match(SPELL_STRATEGIES, text)
    data.equipment = first_match(EQUIPMENT_STRATEGIES, text)
    data.jewelry = jewelry_clause(text)
    data.coins = first_match(COIN_STRATEGIES, text)

    if plural and (MILITARY_TERMS_RE.search(text) or (title and MILITARY_TERMS_RE.search(title))):
        _apply_military_defaults(data)

    log.debug(
        "parenthetical_extracted",
        hp=data.hp,
        ac=data.ac,
        disposition=data.disposition,
        race_class=data.race_class,
        mount=mount.name if mount else None,
    )
    return data


def _apply_military_defaults(data: ParentheticalData) -> None:
    if not data.disposition:
        data.disposition = "neutral/good"
    if data.coins or not data.level or "/" in data.level:
        return
    level = int(data.level)
    if level == 1:
        data.coins = "1–6 gold in coin"
    elif level <= 3:
        data.coins = f"{level}–{level * 6} gold in coin"
