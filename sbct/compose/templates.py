"""
Fill-in input templates for the labelled house format.
"""

_NPC_TEMPLATE = """**Character Name**
Disposition: law/good
Race & Class: human, 4th level fighter
Hit Points (HP): 24
Armor Class (AC): 16
Primary attributes: strength, dexterity, constitution
Equipment: chain mail, medium steel shield, longsword, dagger
Spells:
Mount:"""

_UNIT_TEMPLATE = """Men-at-Arms x10 (these 1st level human fighters' vital stats are HP 7, AC 15, \
disposition neutral/good. Their primary attributes are physical. They wear chain mail \
and carry medium steel shields and longswords.)"""


def npc_template(unit: bool = False) -> str:
    """Single-entity template; the unit form is one narrative line."""
    return _UNIT_TEMPLATE if unit else _NPC_TEMPLATE


def batch_template(count: int = 3) -> str:
    """`count` numbered NPC templates separated by blank lines."""
    count = max(1, count)
    blocks = []
    for i in range(1, count + 1):
        blocks.append(_NPC_TEMPLATE.replace("**Character Name**", f"**Character Name {i}**"))
    return "\n\n".join(blocks)
