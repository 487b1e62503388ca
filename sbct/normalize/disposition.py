"""
Disposition normalizer — adjective alignments to canonical noun form.

    lawful good   -> law/good
    true neutral  -> neutral
    good          -> neutral/good
    chaos/evil    -> chaos/evil (already canonical)
"""

import re
from typing import Optional

CANONICAL_DISPOSITIONS = frozenset({
    "law/good",
    "law/neutral",
    "law/evil",
    "neutral/good",
    "neutral",
    "neutral/evil",
    "chaos/good",
    "chaos/neutral",
    "chaos/evil",
})

_ADJECTIVE_MAP = {
    "lawful good": "law/good",
    "lawful neutral": "law/neutral",
    "lawful evil": "law/evil",
    "neutral good": "neutral/good",
    "true neutral": "neutral",
    "neutral neutral": "neutral",
    "neutral evil": "neutral/evil",
    "chaotic good": "chaos/good",
    "chaotic neutral": "chaos/neutral",
    "chaotic evil": "chaos/evil",
    # single-axis
    "lawful": "law/neutral",
    "chaotic": "chaos/neutral",
    "neutral": "neutral",
    "good": "neutral/good",
    "evil": "neutral/evil",
    # noun spellings
    "neutral/neutral": "neutral",
    "law": "law/neutral",
    "chaos": "chaos/neutral",
}

# Two-word adjective forms, longest first, for scanning prose
ADJECTIVE_PATTERN = (
    r"(?:lawful|chaotic|neutral)[\s/-]+(?:good|evil|neutral)"
    r"|true[\s-]+neutral"
)


def normalize_disposition(text: str) -> str:
    """
    Map an alignment in any accepted spelling to its canonical noun form.

    Idempotent. Unknown input is returned trimmed and otherwise untouched.
    """
    trimmed = text.strip()
    key = re.sub(r"\s*[-/]\s*|\s+", " ", trimmed.lower()).strip(" .,;")

    if is_canonical(trimmed):
        return trimmed.lower()
    if key in _ADJECTIVE_MAP:
        return _ADJECTIVE_MAP[key]
    if trimmed.lower() in _ADJECTIVE_MAP:
        return _ADJECTIVE_MAP[trimmed.lower()]
    return trimmed


def is_canonical(text: str) -> bool:
    """True for one of the nine noun-form dispositions."""
    return text.strip().lower() in CANONICAL_DISPOSITIONS


def is_adjective_form(text: str) -> bool:
    """True if the value is an alignment written as adjectives ("lawful good")."""
    if is_canonical(text):
        return False
    lower = text.strip().lower()
    return bool(re.fullmatch(ADJECTIVE_PATTERN + r"|lawful|chaotic|good|evil", lower))


def canonical_or_none(text: Optional[str]) -> Optional[str]:
    """Normalized value if it lands in the canonical set, else None."""
    if not text:
        return None
    value = normalize_disposition(text)
    return value if is_canonical(value) else None
