"""
Pass 05 — Pre-parse Correction

When the request asks for input normalization, applies every
high-confidence fix to the normalized text before it is parsed.
The raw text is left untouched for fix suggestions.
"""

from sbct.core.context import TransformContext
from sbct.core.logging import get_pass_logger
from sbct.correct.engine import CorrectionOptions, apply_all_high_confidence_fixes

PASS_NAME = "p05_precorrect"
log = get_pass_logger(PASS_NAME)


def precorrect(ctx: TransformContext) -> TransformContext:
    """Set ctx.parse_text, pre-corrected when normalize_input is on."""
    text = ctx.normalized_text or ctx.raw_text

    if not ctx.options.normalize_input:
        ctx.parse_text = text
        log.verbose("precorrect_skipped")
        return ctx

    corrected = apply_all_high_confidence_fixes(
        text,
        CorrectionOptions(enable_dictionary_suggestions=ctx.options.enable_dictionary_suggestions),
        ctx.dictionaries,
    )
    ctx.parse_text = corrected

    changed = corrected != text
    log.info("precorrected", changed=changed, output_chars=len(corrected))
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="applied_high_confidence_fixes" if changed else "no_fixes_applied",
        before=f"{len(text)} chars",
        after=f"{len(corrected)} chars",
    )

    return ctx
