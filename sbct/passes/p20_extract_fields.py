"""
Pass 20 — Field Extraction

Runs the extractor the formatter mode selects over every block and
collects one ParsedEntity per block that yields any content.

Blocks with nothing beyond a name are skipped with a diagnostic.
Non-empty input with no entity at all gets a NO_ENTITIES warning.
"""

from sbct.core.context import TransformContext
from sbct.core.logging import get_pass_logger
from sbct.extract.entity import extract_entity, has_content

PASS_NAME = "p20_extract_fields"
log = get_pass_logger(PASS_NAME)

NO_ENTITIES_MESSAGE = (
    "No NPC or monster stat blocks were recognized. "
    "Check the formatting: start each entity with its **bold** name and "
    "include labelled stats or a parenthetical stat block."
)


def extract_fields(ctx: TransformContext) -> TransformContext:
    """Extract a ParsedEntity from each block."""
    mode = ctx.options.mode
    log.verbose("starting_extraction", blocks=len(ctx.blocks), mode=mode.value)

    skipped = 0
    for block in ctx.blocks:
        block_log = log.bind(block=block.index)
        entity = extract_entity(block.text, mode)
        if not has_content(entity):
            skipped += 1
            block_log.debug("block_skipped", name=entity.name)
            ctx.add_diagnostic(
                level="info",
                code="BLOCK_SKIPPED",
                message=f"Block {block.index + 1} has no recognizable stats",
                source=PASS_NAME,
            )
            continue
        ctx.entities.append(entity)
        block_log.debug("entity_extracted", name=entity.name, fields=len(entity.fields))

    if not ctx.entities and ctx.working_text.strip():
        ctx.add_diagnostic(
            level="warning",
            code="NO_ENTITIES",
            message=NO_ENTITIES_MESSAGE,
            source=PASS_NAME,
        )
        log.warning("no_entities", blocks=len(ctx.blocks))

    log.info("extracted", entities=len(ctx.entities), skipped=skipped)
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="extracted_fields",
        before=f"{len(ctx.blocks)} blocks",
        after=f"{len(ctx.entities)} entities",
    )

    return ctx
