"""
Pass 00 — Input Normalization

Normalizes raw input text:
- Unicode normalization (NFC)
- Line endings to LF
- Trailing whitespace on each line

Leading indentation and blank lines are kept; the monster extractor
reads indentation as field continuation and the splitter needs lines.
"""

import unicodedata

from sbct.core.context import TransformContext
from sbct.core.logging import get_pass_logger

PASS_NAME = "p00_normalize"
log = get_pass_logger(PASS_NAME)


def normalize(ctx: TransformContext) -> TransformContext:
    """
    Normalize raw input text.

    This pass:
    - Normalizes Unicode (NFC)
    - Converts \\r\\n and \\r to \\n
    - Strips trailing spaces from every line
    """
    raw = ctx.raw_text
    raw_len = len(raw)

    log.verbose("starting_normalization", input_chars=raw_len)

    text = unicodedata.normalize("NFC", raw)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [line.rstrip() for line in text.split("\n")]
    text = "\n".join(lines)

    log.info(
        "normalized",
        input_chars=raw_len,
        output_chars=len(text),
        lines=len(lines),
    )

    ctx.normalized_text = text
    ctx.add_trace(
        pass_name=PASS_NAME,
        action="normalized_input",
        before=f"{raw_len} chars",
        after=f"{len(text)} chars",
    )

    return ctx
