"""
Pass 50 — Narrative Composition

Renders each entity as canonical Markdown. ctx.converted stays
index-aligned with ctx.entities.
"""

from sbct.compose import compose_entity
from sbct.core.context import TransformContext
from sbct.core.logging import get_pass_logger

PASS_NAME = "p50_compose"
log = get_pass_logger(PASS_NAME)


def compose_narratives(ctx: TransformContext) -> TransformContext:
    """Compose the converted text for every entity."""
    mappings = ctx.dictionaries.name_mappings
    ctx.converted = []
    for entity in ctx.entities:
        text = compose_entity(entity, mappings=mappings)
        ctx.converted.append(text)
        log.debug("composed", name=entity.name, chars=len(text))

    log.info("composed_entities", entities=len(ctx.converted))
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="composed",
        after=f"{len(ctx.converted)} narratives",
    )

    return ctx
