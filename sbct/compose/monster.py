"""
Monster narrative composer.

    **Goblin** *(This creature’s vital stats are Level 1(d6), HP 5, AC 13,
    disposition law/evil, moves 20 ft., attacks with weapon (1d6), save
    category is Physical, Type: humanoid, Treasure: 1, XP: 5.)*
"""

import re
from typing import Optional

from sbct.core.logging import LogChannel, get_logger
from sbct.ir.enums import CanonicalLabel
from sbct.ir.schema import ParsedEntity
from sbct.normalize.disposition import normalize_disposition
from sbct.normalize.grammar import APOSTROPHE

log = get_logger(LogChannel.COMPOSE)

_COUNT_RE = re.compile(r"\bx\s*\d+\b", re.IGNORECASE)
_DICE_RE = re.compile(r"^(\d+)\s*\(?d(\d+)\)?$", re.IGNORECASE)
_SAVE_NAMES = {"P": "Physical", "M": "Mental"}
_ABBREVIATION_END_RE = re.compile(r"\b(?:ft|yd|yds|mi|in|lb|lbs|sq|rd|rds|min|hr|hrs|etc)\.$", re.IGNORECASE)


def is_group(name: str) -> bool:
    """"Goblins x12" describes several creatures."""
    return bool(_COUNT_RE.search(name))


def monster_level(entity: ParsedEntity) -> Optional[str]:
    """
    "Level 4(d10)" from HD and/or Level.

    Hit dice in "4d10" or "4 (d10)" form are preferred since they carry
    both the level and the die.
    """
    hit_dice = entity.get(CanonicalLabel.HD)
    if hit_dice:
        dice = _DICE_RE.match(re.sub(r"\s+", "", hit_dice))
        if dice:
            return f"Level {dice.group(1)}(d{dice.group(2)})"
    level = entity.get(CanonicalLabel.LEVEL)
    if level:
        return f"Level {level}"
    if hit_dice:
        return f"Level {hit_dice}"
    return None


def _trim_period(part: str) -> str:
    """Drop a sentence period but keep abbreviations ("20 ft.")."""
    if _ABBREVIATION_END_RE.search(part):
        return part
    return part.rstrip(".")


def save_category(saves: str) -> str:
    letters = re.findall(r"\b([PM])\b", saves.upper())
    if not letters:
        return saves
    return "/".join(dict.fromkeys(_SAVE_NAMES[letter] for letter in letters))


def compose_monster(entity: ParsedEntity) -> str:
    """Render a monster as one vital-stats sentence."""
    parts = []
    level = monster_level(entity)
    if level:
        parts.append(level)
    if entity.has(CanonicalLabel.HP):
        parts.append(f"HP {entity.get(CanonicalLabel.HP)}")
    if entity.has(CanonicalLabel.AC):
        parts.append(f"AC {entity.get(CanonicalLabel.AC)}")
    if entity.has(CanonicalLabel.DISPOSITION):
        parts.append(f"disposition {normalize_disposition(entity.get(CanonicalLabel.DISPOSITION))}")
    if entity.has(CanonicalLabel.MOVE):
        parts.append(f"moves {entity.get(CanonicalLabel.MOVE)}")
    if entity.has(CanonicalLabel.ATTACKS):
        parts.append(f"attacks with {entity.get(CanonicalLabel.ATTACKS)}")
    if entity.has(CanonicalLabel.SAVES):
        parts.append(f"save category is {save_category(entity.get(CanonicalLabel.SAVES))}")
    for label, caption in (
        (CanonicalLabel.SPECIAL_ABILITIES, "Special"),
        (CanonicalLabel.TYPE, "Type"),
        (CanonicalLabel.TREASURE, "Treasure"),
        (CanonicalLabel.XP, "XP"),
    ):
        if entity.has(label):
            parts.append(f"{caption}: {entity.get(label)}")

    name = entity.name or "Unnamed"
    subject = f"These creatures{APOSTROPHE}" if is_group(name) else f"This creature{APOSTROPHE}s"
    if parts:
        parts = [_trim_period(p) for p in parts[:-1]] + [parts[-1].rstrip(".")]
    stats = ", ".join(parts) if parts else "unavailable"

    log.debug("monster_composed", name=name, parts=len(parts))
    return f"**{name}** *({subject} vital stats are {stats}.)*"
