"""
Shared fixtures.
"""

import pytest

from sbct.core.engine import Engine
from sbct.core.pipelines import setup_default_pipeline
from sbct.dictionaries.loader import default_dictionaries, load_dictionaries


OWEN = """**Owen**
Disposition: lawful good
Race & Class: human, 4th level fighter
Hit Points (HP): 24
Armor Class (AC): 16"""

GOBLIN = """**Goblin**
HD 1d6, AC 13, Move 20 ft.
Attacks: weapon (1d6)
Saves: p
Type: humanoid
XP: 5"""

SIR_ALDRIC = (
    "**Sir Aldric** (This 6th level human knight's vital stats are HP 40, AC 18, "
    "disposition law/good. He wears plate mail and carries a lance. "
    "He rides a heavy war horse (HP 30, AC 19, 2 hooves 1d6).)"
)


@pytest.fixture
def engine() -> Engine:
    """A fresh engine with the stock pipelines."""
    engine = Engine()
    setup_default_pipeline(engine)
    return engine


@pytest.fixture
def dictionaries():
    """Packaged name mappings and empty name sets."""
    return default_dictionaries()


@pytest.fixture
def spell_dictionaries(tmp_path):
    """Dictionaries with a small spell list loaded from CSV."""
    spells = tmp_path / "spells.csv"
    spells.write_text("name,level\nmagic missile,1\nsleep,1\ncure light wounds,1\n", encoding="utf-8")
    return load_dictionaries(spells_csv=spells)


@pytest.fixture
def owen_text() -> str:
    return OWEN


@pytest.fixture
def goblin_text() -> str:
    return GOBLIN


@pytest.fixture
def aldric_text() -> str:
    return SIR_ALDRIC
