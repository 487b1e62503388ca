"""
Pass 80 — Packaging

Final packaging of processed entities, rendered text, trace, and
diagnostics.
"""

from sbct.core.context import TransformContext
from sbct.core.logging import get_pass_logger
from sbct.extract.entity import entity_name
from sbct.ir.enums import DiagnosticLevel, TransformStatus
from sbct.ir.schema import ProcessedEntity

PASS_NAME = "p80_package"
log = get_pass_logger(PASS_NAME)


def package(ctx: TransformContext) -> TransformContext:
    """
    Package the final output.

    This pass:
    - Zips entities, validations and converted text into ProcessedEntity records
    - Joins the converted text, blank-line separated
    - Downgrades status to PARTIAL when warnings were raised
    """
    log.verbose("starting_packaging")

    ctx.processed = [
        ProcessedEntity(
            name=entity_name(entity),
            original=entity.original,
            converted=converted,
            validation=validation,
            variant=entity.variant,
        )
        for entity, validation, converted in zip(ctx.entities, ctx.validations, ctx.converted)
    ]

    if len(ctx.processed) != len(ctx.entities):
        ctx.add_diagnostic(
            level="error",
            code="PACKAGE_MISMATCH",
            message=f"{len(ctx.entities)} entities but {len(ctx.processed)} processed records",
            source=PASS_NAME,
        )
        log.warning("package_mismatch", entities=len(ctx.entities), processed=len(ctx.processed))

    ctx.rendered_text = "\n\n".join(ctx.converted)

    if ctx.status == TransformStatus.SUCCESS and any(
        d.level != DiagnosticLevel.INFO for d in ctx.diagnostics
    ):
        ctx.status = TransformStatus.PARTIAL

    log.info(
        "packaged",
        status=ctx.status.value,
        entities=len(ctx.processed),
        fixes=len(ctx.fixes),
        diagnostics=len(ctx.diagnostics),
    )
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="packaged",
        after=f"status={ctx.status.value}, entities={len(ctx.processed)}",
    )

    return ctx
