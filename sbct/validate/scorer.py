"""
Validator / Scorer — style-guide warnings and a 0-100 compliance score.

Each variant has its own ruleset. A score starts at 100 and loses each
failing rule's weight; info-level deductions are capped per ruleset.
"""

import re
from typing import Optional

from sbct.core.contracts import Validator
from sbct.core.logging import LogChannel, get_logger
from sbct.ir.enums import EntityVariant, Severity
from sbct.ir.schema import ParsedEntity, ValidationResult, ValidationWarning
from sbct.validate.rules import CheckType, Ruleset, ValidationRule, get_ruleset

log = get_logger(LogChannel.VALIDATE)


# ============================================================================
# Checks
# ============================================================================

def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


def _missing_field(rule: ValidationRule, entity: ParsedEntity) -> bool:
    return any(not entity.has(label) for label in rule.fields)


def _missing_all(rule: ValidationRule, entity: ParsedEntity) -> bool:
    return all(not entity.has(label) for label in rule.fields)


def _name_not_bold(rule: ValidationRule, entity: ParsedEntity) -> bool:
    return not _first_line(entity.original).startswith("**")


def _pattern_present(rule: ValidationRule, entity: ParsedEntity) -> bool:
    text = entity.original if rule.target == "original" else entity.get(rule.target)
    if not text:
        return False
    flags = 0 if rule.case_sensitive else re.IGNORECASE
    return bool(re.search(rule.pattern, text, flags))


CHECKS = {
    CheckType.MISSING_FIELD: _missing_field,
    CheckType.MISSING_ALL: _missing_all,
    CheckType.NAME_NOT_BOLD: _name_not_bold,
    CheckType.PATTERN_PRESENT: _pattern_present,
}


# ============================================================================
# Scoring
# ============================================================================

def compute_score(failed: list[ValidationRule], info_cap: Optional[int] = None) -> int:
    """100 minus deductions, clamped to 0-100."""
    info = sum(r.weight for r in failed if r.severity == Severity.INFO)
    other = sum(r.weight for r in failed if r.severity != Severity.INFO)
    if info_cap is not None:
        info = min(info, info_cap)
    return max(0, min(100, 100 - other - info))


def evaluate(ruleset: Ruleset, entity: ParsedEntity) -> ValidationResult:
    """Run every enabled rule of a ruleset against one entity."""
    failed = []
    for rule in ruleset.rules:
        if not rule.enabled:
            continue
        if CHECKS[rule.check](rule, entity):
            failed.append(rule)

    warnings = [
        ValidationWarning(
            severity=rule.severity,
            category=rule.category,
            message=rule.message,
            suggestion=rule.suggestion,
            rule_id=rule.id,
        )
        for rule in failed
    ]
    score = compute_score(failed, ruleset.settings.info_deduction_cap)
    log.debug("entity_scored", name=entity.name, ruleset=ruleset.name, failed=len(failed), score=score)
    return ValidationResult(warnings=warnings, compliance_score=score)


# ============================================================================
# Validators
# ============================================================================

class RulesetValidator(Validator):
    """Validator backed by a named YAML ruleset."""

    ruleset_name: str = ""

    @property
    def name(self) -> str:
        return f"{self.ruleset_name}_validator"

    def validate(self, entity: ParsedEntity) -> ValidationResult:
        return evaluate(get_ruleset(self.ruleset_name), entity)


class NpcValidator(RulesetValidator):
    ruleset_name = "npc"


class MonsterValidator(RulesetValidator):
    ruleset_name = "monster"


VALIDATORS: dict[EntityVariant, Validator] = {
    EntityVariant.NPC: NpcValidator(),
    EntityVariant.MONSTER: MonsterValidator(),
}


def validate_entity(entity: ParsedEntity) -> ValidationResult:
    """Validate a classified entity with the validator for its variant."""
    if entity.variant is None:
        raise ValueError(f"Entity '{entity.name}' has not been classified")
    return VALIDATORS[entity.variant].validate(entity)
