"""
Equipment canonicalization.

Ordered, composable rewrites applied to raw equipment text:

1. canonicalize_shields           - every shield gets size + material
2. reposition_magic_item_bonuses  - "+1 sword" -> "sword +1"
3. normalize_equipment_verbs      - wearing/dons -> wears, wields/holds -> carry
4. split into items, pull out coins and jewelry
5. apply_name_mappings, italicize magic items, pluralize for units
6. deduplicate_equipment
7. wear/carry grouping for the composer
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from sbct.core.logging import LogChannel, get_logger
from sbct.dictionaries.loader import apply_name_mappings
from sbct.dictionaries.models import NameMappings
from sbct.normalize.grammar import number_to_words, oxford_join

log = get_logger(LogChannel.NORMALIZE)

BONUS_NOUNS = (
    "longsword", "sword", "mail", "armor", "shield", "lance", "dagger", "mace",
    "axe", "crossbow", "bow", "staff", "rod", "wand", "ring", "robe", "cloak",
    "boots", "gauntlets", "helm", "bracers", "pectoral",
)
_NOUNS = "|".join(BONUS_NOUNS)

_VERB_BONUS_RE = re.compile(
    rf"\b(wears?|carries|carry|wields?)\s+\+\s*(\d+)\s+((?:[a-z-]+\s+){{0,3}}?(?:{_NOUNS})(?:s|es)?)\b",
    re.IGNORECASE,
)
_LEADING_BONUS_RE = re.compile(
    rf"\+\s*(\d+)\s+((?:[a-z-]+\s+){{0,3}}?(?:{_NOUNS})(?:s|es)?)\b",
    re.IGNORECASE,
)

_BONUS_SHIELD_RE = re.compile(r"\+\s*(\d+)\s+(?:(wooden|steel|iron)\s+)?shield(s)?\b", re.IGNORECASE)
_SHIELD_RE = re.compile(r"\b(?:(an?)\s+)?(?:(wooden|steel|iron)\s+)?shield(s)?\b", re.IGNORECASE)
_SIZED_BEFORE_RE = re.compile(r"\b(?:small|medium|large|tower)\s+$", re.IGNORECASE)
_MATERIAL_BUCKLER_RE = re.compile(r"\b(?:wooden|steel|iron)\s+(buckler|pavis)\b", re.IGNORECASE)

_WEAR_VERBS_RE = re.compile(r"\b(?:wears?|wearing|worn|has\s+on|dons?)\b\s+", re.IGNORECASE)
_CARRY_VERBS_RE = re.compile(
    r"\b(?:carries|carry|carrying|bears?|bearing|holds?|holding|wields?|wielding)\b\s+",
    re.IGNORECASE,
)

_ARMOR_RE = re.compile(
    r"\b(?:shirts?|mail|armou?rs?|robes?|cloaks?|boots|gauntlets|helms?|bracers|leather)\b",
    re.IGNORECASE,
)

_MUNDANE_OF_RE = re.compile(
    r"\b(?:suit|flask|vial|pouch|bag|set|pair|bottle|bundle|quiver|case|coil|sack|loaf|skin|jug)s?\s+of\b",
    re.IGNORECASE,
)

COIN_UNITS = {
    "gp": "gold", "gold": "gold",
    "sp": "silver", "silver": "silver",
    "cp": "copper", "copper": "copper",
    "pp": "platinum", "platinum": "platinum",
    "ep": "electrum", "electrum": "electrum",
}
_COIN_UNIT = r"gp|sp|cp|pp|ep|gold|silver|copper|platinum|electrum"
COIN_RE = re.compile(
    rf"\b(\d+)(?:\s*[–-]\s*(\d+))?\s*({_COIN_UNIT})\b(?:\s+(?:pieces?|coins?))?",
    re.IGNORECASE,
)
_COIN_ITEM_RE = re.compile(
    rf"^(?:\d+(?:\s*[–-]\s*\d+)?\s*(?:{_COIN_UNIT})\b(?:\s+(?:pieces?|coins?))?\s*)+(?:in\s+coins?)?$",
    re.IGNORECASE,
)
JEWELRY_RE = re.compile(r"\b(?:jewel(?:le)?ry|gems?|jewels)\b", re.IGNORECASE)

_UNCOUNTABLE = frozenset({
    "chain mail", "plate mail", "full plate mail",
    "leather armor", "scale armor", "banded armor",
})
_ITEM_IRREGULARS = {
    "staff": "staves",
    "chain shirt": "chain shirts",
}


# ============================================================================
# Rewrites
# ============================================================================

def canonicalize_shields(text: str) -> str:
    """
    Give every shield an explicit size and material.

    "+1 shield" -> "medium steel shield +1"; "wooden shield" -> "medium wooden shield";
    "shield" -> "medium steel shield". Sized shields are left alone, and
    bucklers/pavises lose any material prefix.
    """
    result = _BONUS_SHIELD_RE.sub(
        lambda m: f"medium {(m.group(2) or 'steel').lower()} shield{m.group(3) or ''} +{m.group(1)}",
        text,
    )

    def _shield(match: re.Match) -> str:
        if _SIZED_BEFORE_RE.search(match.string[:match.start()]):
            return match.group(0)
        article = "a " if match.group(1) else ""
        material = (match.group(2) or "steel").lower()
        plural = match.group(3) or ""
        return f"{article}medium {material} shield{plural}"

    result = _SHIELD_RE.sub(_shield, result)
    return _MATERIAL_BUCKLER_RE.sub(lambda m: m.group(1), result)


def reposition_magic_item_bonuses(text: str) -> str:
    """Move enhancement bonuses after the item: "+1 longsword" -> "longsword +1"."""
    result = _VERB_BONUS_RE.sub(lambda m: f"{m.group(1)} {m.group(3)} +{m.group(2)}", text)
    return _LEADING_BONUS_RE.sub(lambda m: f"{m.group(2)} +{m.group(1)}", result)


def normalize_equipment_verbs(text: str) -> str:
    """Rewrite surface verbs to the two canonical ones."""
    result = _WEAR_VERBS_RE.sub("wears ", text)
    return _CARRY_VERBS_RE.sub("carry ", result)


# ============================================================================
# Items
# ============================================================================

def split_equipment_items(text: str) -> list[str]:
    """
    Break equipment prose into bare item phrases.

    Pronouns, the canonical verbs, and leading articles are dropped.
    """
    normalized = normalize_equipment_verbs(text)
    items = []
    for part in re.split(r"[,;]|\s+and\s+|\.\s+", normalized):
        item = part.strip().strip(".").strip()
        item = re.sub(r"^(?:and\s+)?(?:(?:he|she|it|they)\s+(?:each\s+)?)?", "", item, flags=re.IGNORECASE)
        item = re.sub(r"^(?:also\s+)?(?:wears|wear|carries|carry|has|have)\s+", "", item, flags=re.IGNORECASE)
        item = re.sub(r"^(?:an?|the)\s+", "", item, flags=re.IGNORECASE)
        item = item.strip()
        if item:
            items.append(item)
    return items


def is_magic_item(item: str) -> bool:
    """+N bonus, an em-dash, or an "of X" name. Mundane containers don't count."""
    if re.search(r"\+\s*\d+", item) or "—" in item:
        return True
    if _MUNDANE_OF_RE.search(item):
        return False
    return bool(re.search(r"\b[a-z-]+\s+of\s+(?:the\s+)?[a-z]", item, re.IGNORECASE))


def italicize_item(item: str) -> str:
    stripped = item.strip()
    if stripped.startswith("*") and stripped.endswith("*"):
        return stripped
    return f"*{stripped}*"


def is_armor(item: str) -> bool:
    return bool(_ARMOR_RE.search(item))


def is_coin_item(item: str) -> bool:
    return bool(_COIN_ITEM_RE.match(item.strip()))


def is_jewelry_item(item: str) -> bool:
    return bool(JEWELRY_RE.search(item))


def deduplicate_equipment(items: list[str]) -> list[str]:
    """Collapse exact duplicates, keeping the first occurrence."""
    seen: set[str] = set()
    unique = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        unique.append(item)
    return unique


def pluralize_equipment_item(item: str) -> str:
    """
    Plural of one item for unit write-ups.

    Mechanics in parentheses, trailing bonuses and italics survive;
    mail and armor are uncountable.
    """
    mechanics = re.match(r"^(.+?)(\s*\([^)]+\))$", item)
    if mechanics:
        return pluralize_equipment_item(mechanics.group(1)) + mechanics.group(2)

    italics = re.match(r"^\*(.+)\*$", item)
    if italics:
        return f"*{pluralize_equipment_item(italics.group(1))}*"

    bonus = re.match(r"^(.+?)(\s+\+\d+)$", item)
    if bonus:
        return pluralize_equipment_item(bonus.group(1)) + bonus.group(2)

    lower = item.strip().lower()
    if lower in _UNCOUNTABLE or lower.endswith("armor"):
        return item
    if lower in _ITEM_IRREGULARS:
        return _ITEM_IRREGULARS[lower]
    if lower.endswith("s") or lower.endswith("mail"):
        return item
    if re.search(r"[^aeiou]y$", lower):
        return item[:-1] + "ies"
    if lower.endswith("fe"):
        return item[:-2] + "ves"
    if lower.endswith("f"):
        return item[:-1] + "ves"
    return item + "s"


# ============================================================================
# Coins & jewelry
# ============================================================================

def canonicalize_coins(text: str) -> Optional[str]:
    """
    "2d6 gp" style text aside, every "N gp" / "a-b gold" becomes "N gold",
    joined into one "... in coin" phrase. None when no amount is found.
    """
    amounts = []
    for match in COIN_RE.finditer(text):
        low, high, unit = match.group(1), match.group(2), match.group(3)
        metal = COIN_UNITS[unit.lower()]
        amount = f"{low}–{high}" if high else low
        amounts.append(f"{amount} {metal}")
    if not amounts:
        return None
    return f"{oxford_join(amounts)} in coin"


def canonicalize_jewelry(text: str) -> Optional[str]:
    """"jewelry worth 50 gp" -> "50 gold worth of jewelry"."""
    if not JEWELRY_RE.search(text):
        return None
    match = COIN_RE.search(text)
    if not match:
        return text.strip().strip(".")
    low, high, unit = match.group(1), match.group(2), match.group(3)
    amount = f"{low}–{high}" if high else low
    return f"{amount} {COIN_UNITS[unit.lower()]} worth of jewelry"


def coin_text_to_words(text: str) -> str:
    """"1–6 gold in coin" -> "one to six gold in coin"."""
    def _range(match: re.Match) -> str:
        return f"{number_to_words(int(match.group(1)))} to {number_to_words(int(match.group(2)))}"

    result = re.sub(r"(\d+)\s*[–-]\s*(\d+)", _range, text)
    return re.sub(r"\b(\d+)\b", lambda m: number_to_words(int(m.group(1))), result)


# ============================================================================
# Pipeline
# ============================================================================

@dataclass
class EquipmentGroups:
    """Canonical items split by verb."""

    wear: list[str] = field(default_factory=list)
    carry: list[str] = field(default_factory=list)
    coins: Optional[str] = None
    jewelry: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.wear or self.carry or self.coins or self.jewelry)


def canonicalize_equipment(
    text: Optional[str],
    plural: bool = False,
    mappings: Optional[NameMappings] = None,
) -> EquipmentGroups:
    """Run the full equipment pipeline over raw equipment text."""
    groups = EquipmentGroups()
    if not text or not text.strip():
        return groups

    rewritten = reposition_magic_item_bonuses(canonicalize_shields(text))
    coins: list[str] = []

    items = []
    for raw_item in split_equipment_items(rewritten):
        if is_jewelry_item(raw_item):
            groups.jewelry = groups.jewelry or canonicalize_jewelry(raw_item)
            continue
        if is_coin_item(raw_item):
            coin_text = canonicalize_coins(raw_item)
            if coin_text:
                coins.append(coin_text[: -len(" in coin")])
            continue

        mapped = apply_name_mappings(raw_item, mappings)
        magic = is_magic_item(raw_item) or is_magic_item(mapped) or mapped.lower() != raw_item.lower()
        item = mapped
        if plural:
            item = pluralize_equipment_item(item)
        if magic:
            item = italicize_item(item)
        items.append(item)

    if coins:
        groups.coins = f"{oxford_join(coins)} in coin"

    for item in deduplicate_equipment(items):
        (groups.wear if is_armor(item) else groups.carry).append(item)

    log.debug("equipment_canonicalized", wear=len(groups.wear), carry=len(groups.carry), coins=bool(groups.coins))
    return groups
