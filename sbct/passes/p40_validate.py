"""
Pass 40 — Validation

Scores every classified entity against its variant's ruleset.
ctx.validations stays index-aligned with ctx.entities.
"""

from sbct.core.context import TransformContext
from sbct.core.logging import get_pass_logger
from sbct.validate.scorer import validate_entity

PASS_NAME = "p40_validate"
log = get_pass_logger(PASS_NAME)


def validate_entities(ctx: TransformContext) -> TransformContext:
    """Validate each entity and record its compliance score."""
    ctx.validations = []
    for entity in ctx.entities:
        result = validate_entity(entity)
        ctx.validations.append(result)
        log.verbose(
            "validated",
            name=entity.name,
            score=result.compliance_score,
            warnings=len(result.warnings),
        )

    scores = [v.compliance_score for v in ctx.validations]
    log.info(
        "validated_entities",
        entities=len(scores),
        min_score=min(scores) if scores else None,
    )
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="validated",
        after=f"scores={scores}",
    )

    return ctx
