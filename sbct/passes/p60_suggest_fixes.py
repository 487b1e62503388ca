"""
Pass 60 — Fix Suggestions

Scans the raw input for style violations and records offset-anchored
fixes. Offsets refer to the raw text exactly as submitted.
"""

from collections import Counter

from sbct.core.context import TransformContext
from sbct.core.logging import get_pass_logger
from sbct.correct.engine import CorrectionOptions, generate_fixes

PASS_NAME = "p60_suggest_fixes"
log = get_pass_logger(PASS_NAME)


def suggest_fixes(ctx: TransformContext) -> TransformContext:
    """Populate ctx.fixes from the raw text."""
    options = CorrectionOptions(
        enable_dictionary_suggestions=ctx.options.enable_dictionary_suggestions,
    )
    ctx.fixes = generate_fixes(ctx.raw_text, options, ctx.dictionaries)

    by_confidence = Counter(f.confidence.value for f in ctx.fixes)
    log.info("fixes_suggested", total=len(ctx.fixes), **dict(by_confidence))
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="suggested_fixes",
        after=f"{len(ctx.fixes)} fixes",
    )

    return ctx
