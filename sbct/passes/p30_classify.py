"""
Pass 30 — Classification

Assigns each entity its variant (NPC or monster) exactly once.
"""

from collections import Counter

from sbct.core.context import TransformContext
from sbct.core.logging import get_pass_logger
from sbct.extract.classify import classify

PASS_NAME = "p30_classify"
log = get_pass_logger(PASS_NAME)


def classify_entities(ctx: TransformContext) -> TransformContext:
    """Classify every extracted entity."""
    counts: Counter = Counter()
    for entity in ctx.entities:
        variant = classify(entity)
        counts[variant.value] += 1
        log.debug("classified", name=entity.name, variant=variant.value)

    log.info("classified_entities", **dict(counts))
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="classified",
        after=", ".join(f"{k}={v}" for k, v in sorted(counts.items())) or "none",
    )

    return ctx
