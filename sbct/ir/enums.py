"""
IR Enums — Labels, variants, and codes shared by every pass.

No stringly-typed constants scattered across passes.
"""

from enum import Enum


# ============================================================================
# Entities
# ============================================================================

class EntityVariant(str, Enum):
    """
    Which stat-block family an entity belongs to.

    Set exactly once by the classifier and used for all downstream dispatch:
    - NPC: classed or non-classed characters and units
    - MONSTER: HD/Type/Treasure/XP schema creatures
    """

    NPC = "npc"
    MONSTER = "monster"


class CanonicalLabel(str, Enum):
    """
    Fixed label set for ParsedEntity.fields.

    Surface labels ("Alignment", "Prime Attributes (PA)", "Hit Dice")
    are always folded into one of these.
    """

    # NPC vital stats
    DISPOSITION = "Disposition"
    RACE_CLASS = "Race & Class"
    HP = "HP"
    AC = "AC"
    CREATURE_LEVEL = "Creature level"

    # NPC detail
    PRIMARY_ATTRIBUTES = "Primary attributes"
    SIGNIFICANT_ATTRIBUTES = "Significant attributes"
    SECONDARY_SKILLS = "Secondary skills"
    EQUIPMENT = "Equipment"
    SPELLS = "Spells"
    COINS = "Coins"
    JEWELRY = "Jewelry"
    MOUNT = "Mount"
    BACKGROUND = "Background"

    # Monster schema
    HD = "HD"
    LEVEL = "Level"
    MOVE = "Move"
    ATTACKS = "Attacks"
    DAMAGE = "Damage"
    SAVES = "Saves"
    TYPE = "Type"
    TREASURE = "Treasure"
    XP = "XP"
    SPECIAL_ABILITIES = "Special Abilities"
    SIZE = "Size"
    INTELLIGENCE = "Intelligence"
    NO_ENCOUNTERED = "No. Encountered"
    CLIMATE = "Climate"
    ORGANIZATION = "Organization"


class Gender(str, Enum):
    """Grammatical gender used for singular pronouns."""

    MALE = "male"
    FEMALE = "female"
    NEUTRAL = "neutral"


class FormatterMode(str, Enum):
    """Which extraction strategy the pipeline uses."""

    ENHANCED = "enhanced"   # Auto: monster schema, parenthetical, or labeled lines
    NPC = "npc"             # Legacy labeled-line extractor only
    MONSTER = "monster"     # Monster schema extractor only


# ============================================================================
# Attributes
# ============================================================================

class PrimeType(str, Enum):
    """Coarse prime designation for non-classed creatures."""

    PHYSICAL = "physical"
    MENTAL = "mental"


class AttributeKind(str, Enum):
    """Shape of a normalized attribute summary."""

    PRIME = "prime"    # "physical" / "mental"
    LIST = "list"      # enumerated attribute names
    NONE = "none"      # nothing worth rendering


# ============================================================================
# Validation & Correction
# ============================================================================

class Severity(str, Enum):
    """Severity of a validation warning."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Confidence(str, Enum):
    """
    Confidence contract for a correction fix.

    Not a probability:
    - HIGH: mechanical, unambiguous rewrites
    - MEDIUM: lexical expansions, dictionary suggestions
    - LOW: legacy-name guesses
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort rank (0 = most confident)."""
        return {"high": 0, "medium": 1, "low": 2}[self.value]


# ============================================================================
# Pipeline
# ============================================================================

class TransformStatus(str, Enum):
    """Final status of a transformation."""

    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


class DiagnosticLevel(str, Enum):
    """Severity level for pipeline diagnostics."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
