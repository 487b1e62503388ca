"""
Auto-correction — offset-anchored fixes for raw stat-block text.
"""

from sbct.correct.engine import (
    CorrectionOptions,
    apply_all_high_confidence_fixes,
    apply_fix,
    apply_fixes,
    generate_fixes,
)

__all__ = [
    "CorrectionOptions",
    "apply_all_high_confidence_fixes",
    "apply_fix",
    "apply_fixes",
    "generate_fixes",
]
