"""
Pass 10 — Block Splitting

Splits the working text into one RawBlock per entity.

Forced monster mode splits on blank lines followed by a **Name**
line; every other mode splits on name lines.
"""

from sbct.core.context import TransformContext
from sbct.core.logging import get_pass_logger
from sbct.extract.monster import parse_monster_blocks
from sbct.extract.splitter import split_blocks as split_on_name_lines
from sbct.ir.enums import FormatterMode
from sbct.ir.schema import RawBlock

PASS_NAME = "p10_split_blocks"
log = get_pass_logger(PASS_NAME)


def _monster_blocks(text: str) -> list[RawBlock]:
    blocks = []
    cursor = 0
    for chunk in parse_monster_blocks(text):
        start = text.find(chunk, cursor)
        if start < 0:
            start = cursor
        blocks.append(RawBlock(
            index=len(blocks),
            text=chunk,
            start_char=start,
            end_char=start + len(chunk),
        ))
        cursor = start + len(chunk)
    return blocks


def split_blocks(ctx: TransformContext) -> TransformContext:
    """Populate ctx.blocks from the working text."""
    text = ctx.working_text

    if not text.strip():
        ctx.add_diagnostic(
            level="warning",
            code="EMPTY_INPUT",
            message="Input text is empty",
            source=PASS_NAME,
        )
        log.warning("empty_input")
        return ctx

    if ctx.options.mode == FormatterMode.MONSTER:
        ctx.blocks = _monster_blocks(text)
    else:
        ctx.blocks = split_on_name_lines(text)

    log.info("split", blocks=len(ctx.blocks), mode=ctx.options.mode.value)
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="split_blocks",
        after=f"{len(ctx.blocks)} blocks",
    )

    return ctx
