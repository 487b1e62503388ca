"""
Block splitting — raw multi-entity text into one RawBlock per entity,
and a block into its title, body, and top-level parentheticals.
"""

import re

from sbct.core.logging import LogChannel, get_logger
from sbct.ir.schema import ParsedTitleAndBody, RawBlock

log = get_logger(LogChannel.EXTRACT)

HONORIFICS = (
    "Sir", "Lady", "Lord", "Dame", "Master", "Mistress", "Captain", "Commander",
    "General", "Admiral", "Duke", "Duchess", "Count", "Countess", "Baron",
    "Baroness", "Knight", "Ser",
)

BOLD_LEAD_RE = re.compile(r"^\s*\*\*[^*\n]+\*\*")
_HONORIFIC_RE = re.compile(r"^\s*(?:" + "|".join(HONORIFICS) + r")\b")

UNIT_COUNT_RE = re.compile(r"\bx\s*(\d{1,3})\b", re.IGNORECASE)
UNIT_PATTERNS = (
    UNIT_COUNT_RE,
    re.compile(r"\b(men-at-arms|militia|warriors|halflings|bowmen|guards|sergeants|fighters|troops)\b", re.IGNORECASE),
)


def is_unit_heading(title: str) -> bool:
    """True for headings like "Guards x10" or "Men-at-Arms, Bowmen"."""
    return any(pattern.search(title) for pattern in UNIT_PATTERNS)


def _is_unit_heading_line(line: str) -> bool:
    # unbolded roster lines need a head count ("Bowmen x12")
    head = line.split("(", 1)[0].strip()
    if not head or ":" in head or len(head) > 60:
        return False
    if not head[0].isupper():
        return False
    return bool(UNIT_COUNT_RE.search(head))


def is_bold_lead(line: str) -> bool:
    match = BOLD_LEAD_RE.match(line)
    if not match:
        return False
    # "**Disposition:** law/good" is a bolded label, not a name
    bolded = match.group(0).strip().strip("*").strip()
    rest = line[match.end():].lstrip()
    return not (bolded.endswith(":") or rest.startswith(":"))


def is_name_line(line: str) -> bool:
    """Does this line open a new entity?"""
    if not line.strip():
        return False
    return bool(
        is_bold_lead(line)
        or _HONORIFIC_RE.match(line)
        or _is_unit_heading_line(line)
    )


def split_blocks(text: str) -> list[RawBlock]:
    """
    Split input into entity blocks.

    Only name lines start blocks; blank lines never do. Text before the
    first name line belongs to the first block. Whitespace-only input
    yields no blocks.
    """
    if not text.strip():
        return []

    starts = [0]
    seen_name = False
    offset = 0
    for line in text.splitlines(keepends=True):
        if is_name_line(line):
            if seen_name:
                starts.append(offset)
            seen_name = True
        offset += len(line)

    blocks = []
    bounds = starts + [len(text)]
    for begin, end in zip(bounds, bounds[1:]):
        chunk = text[begin:end]
        if not chunk.strip():
            continue
        lead = len(chunk) - len(chunk.lstrip())
        trimmed = chunk.strip()
        start_char = begin + lead
        blocks.append(RawBlock(
            index=len(blocks),
            text=trimmed,
            start_char=start_char,
            end_char=start_char + len(trimmed),
        ))

    log.verbose("blocks_split", count=len(blocks))
    return blocks


def find_parentheticals(text: str) -> list[str]:
    """
    Top-level parenthetical contents, in order.

    Nested parentheses stay inside their segment. An unterminated "("
    yields the rest of the text as a final segment.
    """
    segments = []
    depth = 0
    start = -1
    for i, ch in enumerate(text):
        if ch == "(":
            if depth == 0:
                start = i
            depth += 1
        elif ch == ")" and depth > 0:
            depth -= 1
            if depth == 0:
                segments.append(text[start + 1:i].strip())
    if depth > 0 and start >= 0:
        remaining = text[start + 1:].strip()
        if remaining:
            segments.append(remaining)
    return [s for s in segments if s]


def split_title_and_body(text: str) -> ParsedTitleAndBody:
    """
    Title, body, and parentheticals of one block.

    A single line's title is the text before its first "(". With several
    lines the first line is the title and the rest is the body.
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return ParsedTitleAndBody()

    if len(lines) == 1:
        line = lines[0]
        title = line.split("(", 1)[0].strip() if "(" in line else line
        return ParsedTitleAndBody(title=title, body="", parentheticals=find_parentheticals(line))

    return ParsedTitleAndBody(
        title=lines[0],
        body="\n".join(lines[1:]),
        parentheticals=find_parentheticals("\n".join(lines)),
    )


def clean_name(title: str) -> str:
    """Display name from a title line: bold markers and parentheticals dropped."""
    name = title.split("(", 1)[0]
    bold = re.search(r"\*\*([^*]+)\*\*", title)
    if bold:
        name = bold.group(1)
    name = name.replace("**", "").strip()
    return name.rstrip(":,;").strip()
