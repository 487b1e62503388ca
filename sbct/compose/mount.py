"""
Mount rendering — the rider's bridge sentence and the mount's own block.
"""

from sbct.ir.schema import MountBlock
from sbct.normalize.equipment import pluralize_equipment_item
from sbct.normalize.grammar import APOSTROPHE

UNAVAILABLE = f"This creature{APOSTROPHE}s vital stats are unavailable."


def _article(noun: str) -> str:
    return "an" if noun[:1].lower() in "aeiou" else "a"


def mount_bridge(mount: MountBlock, subject: str, plural: bool) -> str:
    """"He rides a heavy war horse" / "They ride heavy war horses"."""
    if plural:
        return f"{subject} ride {pluralize_equipment_item(mount.name)}"
    return f"{subject} rides {_article(mount.name)} {mount.name}"


def mount_title(mount: MountBlock) -> str:
    return " ".join(word.capitalize() for word in mount.name.split())


def format_mount_block(mount: MountBlock) -> str:
    """
    Independent block for a mount:

        **Heavy War Horse (mount)** *(This creature’s vital stats are
        Level 4(d10), HP 35, AC 19, disposition neutral. It attacks with
        2 hooves (1d4).)*
    """
    stats = []
    if mount.level:
        stats.append(f"Level {mount.level}")
    if mount.hp:
        stats.append(f"HP {mount.hp}")
    if mount.ac:
        stats.append(f"AC {mount.ac}")
    if mount.disposition:
        stats.append(f"disposition {mount.disposition}")

    sentences = []
    if stats:
        sentences.append(f"This creature{APOSTROPHE}s vital stats are {', '.join(stats)}.")
    if mount.attacks:
        sentences.append(f"It attacks with {mount.attacks}.")
    if mount.equipment:
        sentences.append(f"It wears {mount.equipment}.")
    if not stats:
        sentences.insert(0, UNAVAILABLE)

    return f"**{mount_title(mount)} (mount)** *({' '.join(sentences)})*"
