"""
Mount extraction — pull a ridden creature out of its rider's write-up.

The mount becomes its own MountBlock; the host text loses the mount
phrase, and the mount's stats when they follow it in the same sentence.
"""

import re
from typing import Optional

from sbct.core.logging import LogChannel, get_logger
from sbct.ir.schema import MountBlock
from sbct.normalize.disposition import canonical_or_none

log = get_logger(LogChannel.NORMALIZE)

MOUNT_PHRASE = (
    r"(?:heavy|light)\s+war\s*horse"
    r"|war\s*horse"
    r"|riding\s+horse"
    r"|pony|ponies|mule|horse"
)

MOUNT_RE = re.compile(rf"\b({MOUNT_PHRASE})(?:s|es)?\b", re.IGNORECASE)
_RIDER_RE = re.compile(
    rf"(?:\b(?:he|she|it|they)\s+)?\b(?:rides?|riding|mounted\s+on)\s+(?:(?:an?|the)\s+)?(?:{MOUNT_PHRASE})(?:s|es)?\b",
    re.IGNORECASE,
)

_HP_RE = re.compile(r"\b(?:HP|hit\s*points)\s*[:=]?\s*(\d+)\b", re.IGNORECASE)
_AC_RE = re.compile(r"\bAC\s*[:=]?\s*(\d+(?:/\d+)*)\b", re.IGNORECASE)
_LEVEL_RE = re.compile(r"\b(?:Level|HD)\s*[:=]?\s*(\d+\s*\(d\d+\)|\d+d\d+|\d+)", re.IGNORECASE)
_ATTACK_RE = re.compile(r"((?:\d+\s+)?(?:hoof|hooves|bite)\b[^.;,)]*(?:,\s*(?:\d+\s+)?(?:hoof|hooves|bite)\b[^.;,)]*)*)", re.IGNORECASE)
_DISPOSITION_RE = re.compile(r"\bdisposition\s*[:=]?\s*([a-z]+(?:/[a-z]+)?)", re.IGNORECASE)


def _mount_name(phrase: str) -> str:
    name = re.sub(r"\s+", " ", phrase.strip().lower())
    if name == "ponies":
        return "pony"
    if name.endswith("horses") or name.endswith("mules"):
        return name[:-1]
    return name


def _stats_from(text: str, mount: MountBlock) -> bool:
    """Fill mount stats found in text. Returns True if any were found."""
    found = False
    hp = _HP_RE.search(text)
    if hp:
        mount.hp = hp.group(1)
        found = True
    ac = _AC_RE.search(text)
    if ac:
        mount.ac = ac.group(1)
        found = True
    level = _LEVEL_RE.search(text)
    if level:
        mount.level = re.sub(r"\s+", "", level.group(1))
        found = True
    attacks = _ATTACK_RE.search(text)
    if attacks:
        mount.attacks = attacks.group(1).strip()
        found = True
    disposition = _DISPOSITION_RE.search(text)
    if disposition:
        mount.disposition = canonical_or_none(disposition.group(1)) or mount.disposition
    return found


def _tidy(text: str) -> str:
    text = re.sub(r"\(\s*\)", "", text)
    text = re.sub(r"\s*,\s*(?:,\s*)+", ", ", text)
    text = re.sub(r"\s+([,.;])", r"\1", text)
    text = re.sub(r"([,;])\s*\.", ".", text)
    text = re.sub(r"\.\s*\.", ".", text)
    text = re.sub(r"\band\s*([.,;]|$)", r"\1", text)
    text = re.sub(r"[ \t]{2,}", " ", text)
    return text.strip().strip(",;").strip()


def has_mount(text: str) -> bool:
    return bool(MOUNT_RE.search(text))


def extract_mount(parenthetical: str) -> tuple[str, Optional[MountBlock]]:
    """
    Split a host parenthetical into (cleaned text, mount).

    Stats are read from the span after the mount phrase up to the next
    "." or ";". When that span has stats the whole span is removed;
    otherwise only the rider phrase goes. A mount word with neither a
    riding verb nor stats ("a horse bow") is not a mount.
    """
    if not has_mount(parenthetical):
        return parenthetical, None
    rider = _RIDER_RE.search(parenthetical)
    phrase = MOUNT_RE.search(parenthetical, rider.start()) if rider else MOUNT_RE.search(parenthetical)
    if not phrase:
        return parenthetical, None

    mount = MountBlock(
        name=_mount_name(phrase.group(1)),
        disposition="neutral",
        raw=parenthetical,
    )

    remove_start = rider.start() if rider else phrase.start()
    tail_end = len(parenthetical)
    depth = 0
    for i in range(phrase.end(), len(parenthetical)):
        ch = parenthetical[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            if depth == 0:
                tail_end = i
                break
            depth -= 1
        elif ch in ".;" and depth == 0:
            tail_end = i
            break
    tail = parenthetical[phrase.end():tail_end]

    if _stats_from(tail, mount):
        remove_end = tail_end
    elif rider:
        remove_end = rider.end()
    else:
        return parenthetical, None

    cleaned = parenthetical[:remove_start] + parenthetical[remove_end:]
    log.verbose("mount_extracted", mount=mount.name, has_stats=mount.has_stats())
    return _tidy(cleaned), mount


def parse_mount(text: str) -> Optional[MountBlock]:
    """
    Build a MountBlock from a "Mount:" value or "rides a ..." phrase.

    Unrecognized creatures keep the text before any stats as their name.
    """
    value = text.strip().strip(".")
    if not value:
        return None
    value = re.sub(r"^(?:(?:he|she|it|they)\s+)?(?:rides?|riding|mounted\s+on)\s+", "", value, flags=re.IGNORECASE)
    value = re.sub(r"^(?:an?|the)\s+", "", value, flags=re.IGNORECASE)

    phrase = MOUNT_RE.search(value)
    if phrase:
        name = _mount_name(phrase.group(1))
    else:
        name = re.split(r"[(,;:]", value, maxsplit=1)[0].strip().lower()
    if not name:
        return None

    mount = MountBlock(name=name, raw=text.strip())
    _stats_from(value, mount)
    return mount
