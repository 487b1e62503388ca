"""
Monster field extractor.

Alias-table driven. Understands `Label: value` lines, legacy upper-case
runs sharing a line ("SIZE: Large HD: 5 (d8)"), and colon-less inline
runs ("HD 4d8, AC 15, Move 40 ft."). A line that starts no known field
continues the previous one.
"""

import re
from typing import Optional

from sbct.core.logging import LogChannel, get_logger
from sbct.extract.splitter import BOLD_LEAD_RE, clean_name
from sbct.ir.enums import CanonicalLabel
from sbct.ir.schema import ParsedEntity
from sbct.normalize.disposition import normalize_disposition

log = get_logger(LogChannel.EXTRACT)

MONSTER_ALIASES: dict[str, CanonicalLabel] = {
    "HD": CanonicalLabel.HD,
    "Hit Dice": CanonicalLabel.HD,
    "Level": CanonicalLabel.LEVEL,
    "AC": CanonicalLabel.AC,
    "Armor Class": CanonicalLabel.AC,
    "HP": CanonicalLabel.HP,
    "Hit Points": CanonicalLabel.HP,
    "Move": CanonicalLabel.MOVE,
    "Movement": CanonicalLabel.MOVE,
    "Speed": CanonicalLabel.MOVE,
    "Attacks": CanonicalLabel.ATTACKS,
    "Attack": CanonicalLabel.ATTACKS,
    "Damage": CanonicalLabel.DAMAGE,
    "Saves": CanonicalLabel.SAVES,
    "Save": CanonicalLabel.SAVES,
    "Type": CanonicalLabel.TYPE,
    "Treasure": CanonicalLabel.TREASURE,
    "XP": CanonicalLabel.XP,
    "Experience": CanonicalLabel.XP,
    "Alignment": CanonicalLabel.DISPOSITION,
    "Disposition": CanonicalLabel.DISPOSITION,
    "Special Abilities": CanonicalLabel.SPECIAL_ABILITIES,
    "Special": CanonicalLabel.SPECIAL_ABILITIES,
    "Size": CanonicalLabel.SIZE,
    "INT": CanonicalLabel.INTELLIGENCE,
    "Intelligence": CanonicalLabel.INTELLIGENCE,
    "No. Encountered": CanonicalLabel.NO_ENCOUNTERED,
    "Climate": CanonicalLabel.CLIMATE,
    "Organization": CanonicalLabel.ORGANIZATION,
}

# Aliases that never open an NPC line; used to route blocks in enhanced mode
MONSTER_ONLY_ALIASES = (
    "HD", "Hit Dice", "Level", "Move", "Movement", "Speed", "Attacks", "Attack",
    "Damage", "Saves", "Save", "Type", "Treasure", "XP", "Experience", "Size",
    "No. Encountered", "Climate", "Organization",
)

_LOOKUP = {alias.lower(): alias for alias in MONSTER_ALIASES}
_ALIASES = "|".join(re.escape(a) for a in sorted(MONSTER_ALIASES, key=len, reverse=True))

_LABEL_RE = re.compile(rf"(?<![\w.])({_ALIASES})\s*:", re.IGNORECASE)
_INLINE_START_RE = re.compile(rf"^({_ALIASES})\b\s+(?=\S)", re.IGNORECASE)
_INLINE_SPLIT_RE = re.compile(rf",\s*(?=(?:{_ALIASES})\b)", re.IGNORECASE)
_MONSTER_LINE_RE = re.compile(
    r"^\s*(?:"
    + "|".join(re.escape(a) for a in sorted(MONSTER_ONLY_ALIASES, key=len, reverse=True))
    + r")\b\s*:?\s*\S",
    re.IGNORECASE,
)


def starts_monster_field(line: str) -> bool:
    """Does this line open with a monster-only label?"""
    return bool(_MONSTER_LINE_RE.match(line.replace("**", "")))


def parse_monster_blocks(text: str) -> list[str]:
    """Split a monster dump on blank lines followed by a **Name** line."""
    return [b.strip() for b in re.split(r"\n\s*\n(?=\*\*)", text.strip()) if b.strip()]


class _FieldReader:
    """Accumulates field values line by line, tracking the open field."""

    def __init__(self, entity: ParsedEntity):
        self.entity = entity
        self.current: Optional[str] = None

    def store(self, alias: str, value: str) -> None:
        canonical = _LOOKUP[alias.lower()]
        label = MONSTER_ALIASES[canonical]
        if canonical not in self.entity.schema_labels:
            self.entity.schema_labels.append(canonical)
        self.current = label.value
        value = value.strip().rstrip(",;").strip()
        if value and not self.entity.has(label):
            self.entity.fields[label.value] = value

    def extend(self, text: str) -> bool:
        if self.current is None:
            return False
        previous = self.entity.fields.get(self.current, "")
        self.entity.fields[self.current] = f"{previous} {text.strip()}".strip()
        return True


def _labelled_runs(line: str) -> list[tuple[str, str]]:
    """
    `Label: value` runs on one line.

    The first label must open the line; later ones count only when written
    in capitals, so "Move: 30 ft., Attack: bite" stays one Move value.
    """
    matches = []
    for match in _LABEL_RE.finditer(line):
        if not matches:
            if line[:match.start()].strip():
                return []
        elif not match.group(1).isupper():
            continue
        matches.append(match)

    runs = []
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(line)
        runs.append((match.group(1), line[match.end():end]))
    return runs


def _inline_runs(line: str) -> list[tuple[str, str]]:
    """"HD 4d8, AC 15, Move 40 ft." -> [("HD", "4d8"), ("AC", "15"), ("Move", "40 ft.")]."""
    if not _INLINE_START_RE.match(line):
        return []
    runs = []
    for piece in _INLINE_SPLIT_RE.split(line):
        match = _INLINE_START_RE.match(piece.strip())
        if match:
            runs.append((match.group(1), piece.strip()[match.end():]))
        elif runs:
            alias, value = runs[-1]
            runs[-1] = (alias, f"{value}, {piece.strip()}")
    return runs


def extract_monster(text: str) -> ParsedEntity:
    """Parse one monster block. The first line carries the name."""
    entity = ParsedEntity(original=text)
    raw_lines = [line.rstrip() for line in text.splitlines() if line.strip()]
    if not raw_lines:
        return entity

    first = raw_lines[0].strip()
    body = raw_lines[1:]
    bold = BOLD_LEAD_RE.match(first)
    if bold:
        entity.name = clean_name(bold.group(0))
        rest = first[bold.end():].strip().lstrip(",;:").strip()
        if rest:
            body.insert(0, rest)
    elif _labelled_runs(first) or _inline_runs(first):
        body.insert(0, first)
    else:
        entity.name = clean_name(first)

    reader = _FieldReader(entity)
    for raw in body:
        line = raw.replace("**", "").strip()
        if raw[:1].isspace() and reader.extend(line):
            continue
        runs = _labelled_runs(line) or _inline_runs(line)
        if runs:
            for alias, value in runs:
                reader.store(alias, value)
        elif not reader.extend(line):
            entity.notes.append(line)

    _normalize_values(entity)
    log.debug("monster_extracted", name=entity.name, labels=entity.schema_labels)
    return entity


def _normalize_values(entity: ParsedEntity) -> None:
    saves = entity.get(CanonicalLabel.SAVES)
    if saves:
        entity.fields[CanonicalLabel.SAVES.value] = saves.upper()
    disposition = entity.get(CanonicalLabel.DISPOSITION)
    if disposition:
        entity.fields[CanonicalLabel.DISPOSITION.value] = normalize_disposition(disposition)
