"""
Ruleset Loader — Load style-guide rulesets from YAML files.

A ruleset is a list of checks, each with a weight (score deduction),
severity, and suggestion. Rulesets live in `rulesets/<name>.yaml`.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import yaml

from sbct.core.logging import LogChannel, get_logger
from sbct.ir.enums import Severity

log = get_logger(LogChannel.VALIDATE)

# Default ruleset directory
RULESETS_DIR = Path(__file__).parent / "rulesets"


class CheckType(str, Enum):
    """What a rule looks at."""
    MISSING_FIELD = "missing_field"      # any listed field absent
    MISSING_ALL = "missing_all"          # every listed field absent
    NAME_NOT_BOLD = "name_not_bold"      # original name line lacks **bold**
    PATTERN_PRESENT = "pattern_present"  # regex found in the target text


@dataclass
class ValidationRule:
    """A single style-guide check."""
    id: str
    check: CheckType
    severity: Severity
    category: str
    message: str
    weight: int = 0
    fields: list[str] = field(default_factory=list)
    pattern: Optional[str] = None
    target: str = "original"   # "original" or a field label
    case_sensitive: bool = False
    suggestion: Optional[str] = None
    enabled: bool = True


@dataclass
class RulesetSettings:
    info_deduction_cap: Optional[int] = None


@dataclass
class Ruleset:
    """A loaded ruleset."""
    version: str
    name: str
    description: str
    settings: RulesetSettings
    rules: list[ValidationRule]


def load_ruleset(name: str) -> Ruleset:
    """
    Load a ruleset by name.

    Raises:
        FileNotFoundError: If the ruleset file doesn't exist
    """
    path = RULESETS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Ruleset not found: {path}")
    return load_ruleset_from_path(path)


def load_ruleset_from_path(path: Union[str, Path]) -> Ruleset:
    """Load a ruleset from an arbitrary path."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return parse_ruleset(data, default_name=Path(path).stem)


def parse_ruleset(data: dict, default_name: str = "unnamed") -> Ruleset:
    """Parse a ruleset from a dictionary, skipping invalid rules."""
    settings_data = data.get("settings", {}) or {}
    settings = RulesetSettings(
        info_deduction_cap=settings_data.get("info_deduction_cap"),
    )

    rules = []
    for rule_data in data.get("rules", []) or []:
        rule = parse_rule(rule_data)
        if rule:
            rules.append(rule)

    return Ruleset(
        version=str(data.get("version", "1.0")),
        name=data.get("name", default_name),
        description=data.get("description", ""),
        settings=settings,
        rules=rules,
    )


def parse_rule(data: dict) -> Optional[ValidationRule]:
    """Parse a single rule from a dictionary. Invalid rules give None."""
    try:
        check = CheckType(data["check"])
        if check in (CheckType.MISSING_FIELD, CheckType.MISSING_ALL) and not data.get("fields"):
            raise ValueError(f"rule '{data['id']}' needs fields")
        if check == CheckType.PATTERN_PRESENT and not data.get("pattern"):
            raise ValueError(f"rule '{data['id']}' needs a pattern")

        return ValidationRule(
            id=data["id"],
            check=check,
            severity=Severity(data["severity"]),
            category=data.get("category", "General"),
            message=data["message"],
            weight=int(data.get("weight", 0)),
            fields=list(data.get("fields", [])),
            pattern=data.get("pattern"),
            target=data.get("target", "original"),
            case_sensitive=data.get("case_sensitive", False),
            suggestion=data.get("suggestion"),
            enabled=data.get("enabled", True),
        )
    except (KeyError, ValueError, TypeError) as e:
        log.warning("invalid_rule_skipped", rule=data.get("id") if isinstance(data, dict) else None, error=str(e))
        return None


def list_rulesets() -> list[str]:
    """List available ruleset names."""
    return sorted(p.stem for p in RULESETS_DIR.glob("*.yaml"))


# Cache for loaded rulesets
_cache: dict[str, Ruleset] = {}


def get_ruleset(name: str, use_cache: bool = True) -> Ruleset:
    """Get a ruleset, using cache by default."""
    if use_cache and name in _cache:
        return _cache[name]

    ruleset = load_ruleset(name)
    _cache[name] = ruleset
    return ruleset


def clear_cache() -> None:
    """Clear the ruleset cache."""
    _cache.clear()
