"""
Correction detectors — scan raw text and propose offset-anchored fixes.

Each detector is a function `(text, scan) -> list[CorrectionFix]`. Fixes
always carry the exact span they replace so they can be applied later
without re-searching.
"""

import re
from dataclasses import dataclass
from typing import Callable

from sbct.dictionaries.models import Dictionaries
from sbct.ir.enums import Confidence
from sbct.ir.schema import CorrectionFix
from sbct.normalize.attributes import ABBREVIATION_RE, ABBREVIATIONS
from sbct.normalize.classes import get_lexicon
from sbct.normalize.disposition import ADJECTIVE_PATTERN, canonical_or_none, normalize_disposition
from sbct.normalize.equipment import BONUS_NOUNS
from sbct.normalize.grammar import superscript_ordinal


@dataclass(frozen=True)
class Scan:
    """What detectors may consult besides the text."""

    dictionaries: Dictionaries
    enable_dictionary_suggestions: bool = False


Detector = Callable[[str, Scan], list[CorrectionFix]]


def _fix(
    category: str,
    description: str,
    match_start: int,
    original: str,
    corrected: str,
    confidence: Confidence,
) -> CorrectionFix:
    return CorrectionFix(
        id=f"{category}-{match_start}",
        category=category,
        description=description,
        original_text=original,
        corrected_text=corrected,
        confidence=confidence,
        start=match_start,
        end=match_start + len(original),
    )


# ============================================================================
# High confidence
# ============================================================================

_ALIGNMENT_LABEL_RE = re.compile(r"\bAlignment\s*:\s*([A-Za-z]+)(?:([ /-])([A-Za-z]+))?", re.IGNORECASE)


def detect_alignment_label(text: str, scan: Scan) -> list[CorrectionFix]:
    """"Alignment: Lawful Good" -> "Disposition: law/good"."""
    fixes = []
    for match in _ALIGNMENT_LABEL_RE.finditer(text):
        first, _, second = match.groups()
        pair = canonical_or_none(f"{first} {second}") if second else None
        if pair:
            original, value = match.group(0), pair
        else:
            # only the first word belongs to the alignment
            original = match.group(0)[: match.end(1) - match.start()]
            value = normalize_disposition(first)
        fixes.append(_fix(
            "alignment_label",
            "Use the Disposition label with a noun-form value",
            match.start(), original, f"Disposition: {value}", Confidence.HIGH,
        ))
    return fixes


_DISPOSITION_ADJECTIVE_RE = re.compile(rf"\bdisposition\b\s*:?\s*({ADJECTIVE_PATTERN})\b", re.IGNORECASE)


def detect_disposition_adjective(text: str, scan: Scan) -> list[CorrectionFix]:
    """"Disposition: lawful good" -> "Disposition: law/good"."""
    fixes = []
    for match in _DISPOSITION_ADJECTIVE_RE.finditer(text):
        adjective = match.group(1)
        fixes.append(_fix(
            "disposition_adjective",
            "Use the noun form of the disposition",
            match.start(1), adjective, normalize_disposition(adjective), Confidence.HIGH,
        ))
    return fixes


_PRIME_LABEL_RE = re.compile(r"\bPrime\s+Attributes?(?:\s*\(PA\))?", re.IGNORECASE)


def detect_prime_label(text: str, scan: Scan) -> list[CorrectionFix]:
    """"Prime Attributes (PA)" -> "Primary attributes"."""
    return [
        _fix(
            "prime_label",
            "Use the 'Primary attributes' label",
            match.start(), match.group(0), "Primary attributes", Confidence.HIGH,
        )
        for match in _PRIME_LABEL_RE.finditer(text)
    ]


_ORDINAL_RE = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)(?=\s+level\b)", re.IGNORECASE)


def detect_ordinals(text: str, scan: Scan) -> list[CorrectionFix]:
    """"4th level" -> "4ᵗʰ level"."""
    return [
        _fix(
            "ordinal",
            "Superscript the level ordinal",
            match.start(), match.group(0), superscript_ordinal(match.group(1)), Confidence.HIGH,
        )
        for match in _ORDINAL_RE.finditer(text)
    ]


_MAGIC_BONUS_RE = re.compile(
    rf"(?<![\w*])\+\s*(\d+)\s+((?:[a-z-]+\s+){{0,2}}?(?:{'|'.join(BONUS_NOUNS)})(?:s|es)?)\b",
    re.IGNORECASE,
)


def detect_magic_bonus(text: str, scan: Scan) -> list[CorrectionFix]:
    """"+1 longsword" -> "*longsword +1*"."""
    return [
        _fix(
            "magic_bonus",
            "Move the bonus after the item name and italicize it",
            match.start(), match.group(0), f"*{match.group(2)} +{match.group(1)}*", Confidence.HIGH,
        )
        for match in _MAGIC_BONUS_RE.finditer(text)
    ]


_WORD_PAIR_RE = re.compile(r"\b([a-z][a-z-]*)(\s+)([a-z][a-z-]*)\b", re.IGNORECASE)


def detect_class_race_order(text: str, scan: Scan) -> list[CorrectionFix]:
    """"fighter human" -> "human fighter"."""
    lexicon = get_lexicon()
    fixes = []
    position = 0
    while True:
        match = _WORD_PAIR_RE.search(text, position)
        if not match:
            break
        first, gap, second = match.groups()
        if lexicon.is_class(first) and lexicon.is_race(second):
            fixes.append(_fix(
                "race_class_order",
                "Put the race before the class",
                match.start(), match.group(0), f"{second}{gap}{first}", Confidence.HIGH,
            ))
            position = match.end()
        else:
            # pairs overlap: retry from the second word
            position = match.start(3)
    return fixes


# ============================================================================
# Medium confidence
# ============================================================================

_ATTRIBUTE_CONTEXT_RE = re.compile(r"\b(?:attributes?|primes?|PA)\b", re.IGNORECASE)


def detect_abbreviations(text: str, scan: Scan) -> list[CorrectionFix]:
    """Attribute abbreviations on attribute lines only ("Str" -> "strength")."""
    fixes = []
    offset = 0
    for line in text.splitlines(keepends=True):
        if _ATTRIBUTE_CONTEXT_RE.search(line):
            for match in ABBREVIATION_RE.finditer(line):
                fixes.append(_fix(
                    "attribute_abbreviation",
                    "Write attribute names out in full",
                    offset + match.start(), match.group(0), ABBREVIATIONS[match.group(1).lower()],
                    Confidence.MEDIUM,
                ))
        offset += len(line)
    return fixes


def detect_spell_italics(text: str, scan: Scan) -> list[CorrectionFix]:
    """Italicize dictionary spell names that appear in plain text."""
    if not (scan.enable_dictionary_suggestions and scan.dictionaries.spells):
        return []
    fixes = []
    for spell in sorted(scan.dictionaries.spells, key=len, reverse=True):
        pattern = re.compile(rf"(?<![\w*]){re.escape(spell)}(?![\w*])", re.IGNORECASE)
        for match in pattern.finditer(text):
            fixes.append(_fix(
                "spell_italics",
                "Italicize spell names",
                match.start(), match.group(0), f"*{match.group(0)}*", Confidence.MEDIUM,
            ))
    return fixes


# ============================================================================
# Low confidence
# ============================================================================

def detect_name_mappings(text: str, scan: Scan) -> list[CorrectionFix]:
    """Legacy magic-item and monster names to their canonical names."""
    fixes = []
    for mapping in scan.dictionaries.name_mappings.all():
        pattern = re.compile(rf"(?<![\w-]){re.escape(mapping.legacy)}(?![\w-])", re.IGNORECASE)
        for match in pattern.finditer(text):
            if match.group(0) == mapping.canonical:
                continue
            fixes.append(_fix(
                "name_mapping",
                f"Use the current name '{mapping.canonical}'",
                match.start(), match.group(0), mapping.canonical, Confidence.LOW,
            ))
    return fixes


# Order matters: on overlap the earlier detector wins at equal confidence
DETECTORS: tuple[Detector, ...] = (
    detect_alignment_label,
    detect_disposition_adjective,
    detect_prime_label,
    detect_ordinals,
    detect_magic_bonus,
    detect_class_race_order,
    detect_abbreviations,
    detect_spell_italics,
    detect_name_mappings,
)
