"""Passes — Pipeline stages for SBCT transformation."""

from sbct.passes.p00_normalize import normalize
from sbct.passes.p05_precorrect import precorrect
from sbct.passes.p10_split_blocks import split_blocks
from sbct.passes.p20_extract_fields import extract_fields
from sbct.passes.p30_classify import classify_entities
from sbct.passes.p40_validate import validate_entities
from sbct.passes.p50_compose import compose_narratives
from sbct.passes.p60_suggest_fixes import suggest_fixes
from sbct.passes.p80_package import package

__all__ = [
    "normalize",
    "precorrect",
    "split_blocks",
    "extract_fields",
    "classify_entities",
    "validate_entities",
    "compose_narratives",
    "suggest_fixes",
    "package",
]
