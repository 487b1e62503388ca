"""
Attribute normalizer — prime designations and enumerated attributes.

Classed characters enumerate their notable attributes; everything else
(monsters, units without a class level) collapses to "physical" or "mental".
"""

import re
from typing import Optional

from sbct.core.logging import LogChannel, get_logger
from sbct.ir.enums import AttributeKind, PrimeType
from sbct.ir.schema import AttributeContext, AttributeSummary
from sbct.normalize.classes import ATTRIBUTE_ORDER, get_lexicon
from sbct.normalize.grammar import oxford_join, singularize_class_name

log = get_logger(LogChannel.NORMALIZE)

ABBREVIATIONS = {
    "str": "strength",
    "dex": "dexterity",
    "con": "constitution",
    "int": "intelligence",
    "wis": "wisdom",
    "cha": "charisma",
}

PHYSICAL = frozenset({"strength", "dexterity", "constitution"})
MENTAL = frozenset({"intelligence", "wisdom", "charisma"})

# Full names before abbreviations so "con" never eats "constitution"
ATTRIBUTE_WORD = (
    r"strength|dexterity|constitution|intelligence|wisdom|charisma"
    r"|str|dex|con|int|wis|cha"
)

_TOKEN_RE = re.compile(
    rf"\b({ATTRIBUTE_WORD})\b(?:\s*[:=]?\s*(\d{{1,2}})\b)?",
    re.IGNORECASE,
)
_KEYWORD_RE = re.compile(r"\b(physical|mental)\b", re.IGNORECASE)
ABBREVIATION_RE = re.compile(r"\b(str|dex|con|int|wis|cha)\b", re.IGNORECASE)
_LEVEL_RE = re.compile(r"\b\d{1,2}\s*(?:st|nd|rd|th|ˢᵗ|ⁿᵈ|ʳᵈ|ᵗʰ)?\s*(?:/\s*\d{1,2}\s*(?:st|nd|rd|th|ˢᵗ|ⁿᵈ|ʳᵈ|ᵗʰ)?\s*)?level\b", re.IGNORECASE)


def tokenize_attributes(raw: str) -> list[tuple[str, Optional[int]]]:
    """
    Split attribute text into (full name, score) pairs.

    "Str 16, dex, CON: 7" -> [("strength", 16), ("dexterity", None), ("constitution", 7)]
    """
    tokens = []
    for match in _TOKEN_RE.finditer(raw):
        word = match.group(1).lower()
        name = ABBREVIATIONS.get(word, word)
        score = int(match.group(2)) if match.group(2) else None
        tokens.append((name, score))
    return tokens


def infer_prime_type(names: list[str]) -> Optional[PrimeType]:
    if not names:
        return None
    unique = set(names)
    if unique <= PHYSICAL:
        return PrimeType.PHYSICAL
    if unique <= MENTAL:
        return PrimeType.MENTAL
    return None


def _known_class(text: str) -> Optional[str]:
    lexicon = get_lexicon()
    for word in re.findall(r"[a-z]+(?:-[a-z]+)?(?:/[a-z]+(?:-[a-z]+)?)*", text.lower()):
        candidates = [word, singularize_class_name(word)]
        for candidate in candidates:
            if lexicon.is_class(candidate):
                return candidate
    return None


def has_class_levels(context: AttributeContext) -> bool:
    """A recognized class plus a class level."""
    text = context.race_class_text or ""
    if not _known_class(text):
        return False
    return bool(context.level_text and context.level_text.strip()) or bool(_LEVEL_RE.search(text))


def _ordered(names) -> list[str]:
    present = set(names)
    return [a for a in ATTRIBUTE_ORDER if a in present]


def normalize_attributes(raw: Optional[str], context: AttributeContext) -> AttributeSummary:
    """
    Normalize raw attribute text for an entity.

    With a class level: keywords give a prime type, bare names enumerate,
    and scored names keep only notable scores (<=8 or >=13) plus the
    class's own primes. Without one: always a prime type.
    """
    if raw is None or not raw.strip():
        return AttributeSummary(kind=AttributeKind.NONE)

    tokens = tokenize_attributes(raw)
    names = [name for name, _ in tokens]
    keyword_match = _KEYWORD_RE.search(raw)
    keyword = PrimeType(keyword_match.group(1).lower()) if keyword_match else None
    prime_type = keyword or infer_prime_type(names)

    if not has_class_levels(context):
        value = (prime_type or PrimeType.PHYSICAL).value
        return AttributeSummary(kind=AttributeKind.PRIME, value=value)

    has_scores = any(score is not None for _, score in tokens)
    if not has_scores:
        if keyword:
            return AttributeSummary(kind=AttributeKind.PRIME, value=keyword.value)
        if names:
            return AttributeSummary(kind=AttributeKind.LIST, names=_ordered(names))
        return AttributeSummary(kind=AttributeKind.NONE)

    char_class = _known_class(context.race_class_text or "") or ""
    class_primes = set(get_lexicon().primes_for(char_class))
    qualifying = {
        name for name, score in tokens
        if score is not None and (score <= 8 or score >= 13)
    }
    qualifying |= {name for name in names if name in class_primes}

    log.debug("attributes_scored", tokens=len(tokens), qualifying=len(qualifying), char_class=char_class)

    if not qualifying:
        return AttributeSummary(kind=AttributeKind.NONE)
    return AttributeSummary(kind=AttributeKind.LIST, names=_ordered(qualifying))


def render_attributes(summary: AttributeSummary) -> Optional[str]:
    """Narrative text for a summary, or None when there is nothing to say."""
    if summary.kind == AttributeKind.PRIME:
        return summary.value
    if summary.kind == AttributeKind.LIST and summary.names:
        return oxford_join(summary.names)
    return None
