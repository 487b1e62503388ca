"""
Grammar helpers — ordinals, possessives, plurals, number words, lists.

Pure string functions shared by the extractors and the composer.
"""

import re
from typing import Iterable, Optional, Union

from sbct.ir.enums import Gender

APOSTROPHE = "’"

SUPERSCRIPT_SUFFIXES = {
    "st": "ˢᵗ",
    "nd": "ⁿᵈ",
    "rd": "ʳᵈ",
    "th": "ᵗʰ",
}

# Any ordinal suffix, plain or superscript
ORDINAL_SUFFIX_PATTERN = r"(?:st|nd|rd|th|ˢᵗ|ⁿᵈ|ʳᵈ|ᵗʰ)"

UNIT_NOUNS = (
    "men-at-arms",
    "militia",
    "warriors",
    "halflings",
    "bowmen",
    "guards",
    "sergeants",
    "fighters",
    "troops",
)

_UNIT_NOUN_RE = re.compile(r"\b(" + "|".join(re.escape(n) for n in UNIT_NOUNS) + r")\b", re.IGNORECASE)

_CLASS_PLURALS = {
    "thief": "thieves",
    "archer": "archers",
    "fighter": "fighters",
    "cleric": "clerics",
    "paladin": "paladins",
    "ranger": "rangers",
    "wizard": "wizards",
    "warlock": "warlocks",
    "druid": "druids",
    "bard": "bards",
    "monk": "monks",
    "rogue": "rogues",
    "assassin": "assassins",
    "knight": "knights",
    "magic-user": "magic-users",
}

_CLASS_SINGULARS = {plural: singular for singular, plural in _CLASS_PLURALS.items()}

_UNITS = ["zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
_TEENS = [
    "ten", "eleven", "twelve", "thirteen", "fourteen",
    "fifteen", "sixteen", "seventeen", "eighteen", "nineteen",
]
_TENS = ["", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety"]


# ============================================================================
# Ordinals
# ============================================================================

def ordinal_suffix(n: int) -> str:
    """
    Plain ordinal suffix for n.

    Level 0 (cantrip tier) reads as "st".
    """
    if n == 0:
        return "st"
    if n % 10 == 1 and n % 100 != 11:
        return "st"
    if n % 10 == 2 and n % 100 != 12:
        return "nd"
    if n % 10 == 3 and n % 100 != 13:
        return "rd"
    return "th"


def superscript_ordinal(level: Union[int, str]) -> str:
    """
    "4" -> "4ᵗʰ", "2" -> "2ⁿᵈ"; multiclass "4/5" -> "4ᵗʰ/5ᵗʰ".

    Non-numeric parts are returned untouched.
    """
    parts = str(level).strip().split("/")
    out = []
    for part in parts:
        part = part.strip()
        if part.isdigit():
            n = int(part)
            out.append(f"{n}{SUPERSCRIPT_SUFFIXES[ordinal_suffix(n)]}")
        else:
            out.append(part)
    return "/".join(out)


def superscript_ordinals_in(text: str) -> str:
    """Rewrite every plain "4th" style ordinal in text to superscript."""
    def _sub(match: re.Match) -> str:
        return superscript_ordinal(match.group(1))

    return re.sub(r"\b(\d{1,3})(?:st|nd|rd|th)\b", _sub, text, flags=re.IGNORECASE)


# ============================================================================
# Possessives & plurals
# ============================================================================

def to_possessive(subject: str, is_plural: bool) -> str:
    """
    Possessive form with a typographic apostrophe.

    Plural nouns that already look plural ("guards", "bowmen") take a bare
    apostrophe; everything else takes ’s, except singular nouns ending in s.
    """
    trimmed = subject.strip()
    if not trimmed:
        return f"These creatures{APOSTROPHE}" if is_plural else f"This creature{APOSTROPHE}s"

    lower = trimmed.lower()
    if lower.endswith("'") or lower.endswith(APOSTROPHE):
        return trimmed

    if is_plural and lower.endswith(("men", "children", "people")):
        return f"{trimmed}{APOSTROPHE}"
    if lower.endswith("s"):
        return f"{trimmed}{APOSTROPHE}"
    return f"{trimmed}{APOSTROPHE}s"


def pluralize_class_name(name: str) -> str:
    lower = name.strip().lower()
    if lower in _CLASS_PLURALS:
        return _CLASS_PLURALS[lower]
    if lower in _CLASS_SINGULARS:
        return lower
    if lower.endswith("man"):
        return lower[:-3] + "men"
    if lower.endswith("fe"):
        return lower[:-2] + "ves"
    if lower.endswith("f"):
        return lower[:-1] + "ves"
    if lower.endswith("y") and not re.search(r"[aeiou]y$", lower):
        return lower[:-1] + "ies"
    if lower.endswith("s"):
        return lower
    return lower + "s"


def singularize_class_name(name: str) -> str:
    lower = name.strip().lower()
    if lower in _CLASS_SINGULARS:
        return _CLASS_SINGULARS[lower]
    if lower.endswith("men"):
        return lower[:-3] + "man"
    if lower.endswith("ies"):
        return lower[:-3] + "y"
    if lower.endswith("s") and not lower.endswith("ss"):
        return lower[:-1]
    return lower


# ============================================================================
# Numbers & lists
# ============================================================================

def number_to_words(num: int) -> str:
    """Spell out 0-9999; anything else is returned as digits."""
    if num < 0 or num >= 10000:
        return str(num)
    if num < 10:
        return _UNITS[num]
    if num < 20:
        return _TEENS[num - 10]
    if num < 100:
        tens, rest = divmod(num, 10)
        return _TENS[tens] if rest == 0 else f"{_TENS[tens]}-{_UNITS[rest]}"
    if num < 1000:
        hundreds, rest = divmod(num, 100)
        tail = "" if rest == 0 else f" {number_to_words(rest)}"
        return f"{_UNITS[hundreds]} hundred{tail}"
    thousands, rest = divmod(num, 1000)
    tail = "" if rest == 0 else f" {number_to_words(rest)}"
    return f"{_UNITS[thousands]} thousand{tail}"


def oxford_join(items: Iterable[str]) -> str:
    """
    1 item -> "A"; 2 -> "A and B"; 3+ -> "A, B, and C".
    """
    items = [i for i in items if i]
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:] if text else text


# ============================================================================
# Subjects
# ============================================================================

def find_unit_noun(title: Optional[str]) -> Optional[str]:
    """First unit noun in a heading, lowercased."""
    if not title:
        return None
    match = _UNIT_NOUN_RE.search(title)
    return match.group(1).lower() if match else None


def build_subject_descriptor(
    is_plural: bool,
    race: Optional[str] = None,
    level: Optional[str] = None,
    char_class: Optional[str] = None,
    subject_phrase: Optional[str] = None,
    unit_noun: Optional[str] = None,
) -> str:
    """
    Determiner + descriptor for the vital-stats sentence.

    Order: classed ("This 4ᵗʰ level human fighter"), the input's own subject
    phrase, race + class, race + unit noun, unit noun, race troops/character,
    then "This creature" / "These creatures".
    """
    determiner = "These" if is_plural else "This"
    race = race.strip().lower() if race else None
    if char_class:
        char_class = char_class.strip().lower()
        char_class = pluralize_class_name(char_class) if is_plural else singularize_class_name(char_class)

    def _join(*parts: Optional[str]) -> str:
        return re.sub(r"\s+", " ", " ".join([determiner, *[p for p in parts if p]])).strip()

    if level and char_class:
        return _join(f"{superscript_ordinal(level)} level", race, char_class)
    if subject_phrase:
        return _join(subject_phrase.strip().lower())
    if race and char_class:
        return _join(race, char_class)
    if is_plural and race and unit_noun:
        return _join(race, unit_noun)
    if is_plural and unit_noun:
        return _join(unit_noun)
    if race:
        return _join(race, "troops" if is_plural else "character")
    if char_class:
        return _join(char_class)
    return _join("creatures" if is_plural else "creature")


# ============================================================================
# Gender
# ============================================================================

def extract_gender(text: str) -> Gender:
    """
    Guess grammatical gender from pronouns and titles.

    Female words are checked first ("priestess" contains "priest");
    a bare "her" is the weakest signal.
    """
    lower = text.lower()
    if re.search(r"\b(she|female|priestess|queen|lady|actress|woman|dame|duchess|countess|baroness|mistress)\b", lower):
        return Gender.FEMALE
    if re.search(r"\bhigh priest\b", lower):
        return Gender.MALE
    if re.search(r"\b(he|him|his|male|priest|king|lord|actor|man|sir)\b", lower):
        return Gender.MALE
    if re.search(r"\bher\b", lower):
        return Gender.FEMALE
    return Gender.NEUTRAL
