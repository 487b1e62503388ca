"""
Validation — YAML rulesets, compliance scoring, and text reports.
"""

from sbct.validate.report import batch_report, single_report
from sbct.validate.rules import clear_cache, get_ruleset, list_rulesets
from sbct.validate.scorer import VALIDATORS, compute_score, validate_entity

__all__ = [
    "VALIDATORS",
    "batch_report",
    "clear_cache",
    "compute_score",
    "get_ruleset",
    "list_rulesets",
    "single_report",
    "validate_entity",
]
