"""
SBCT — Stat Block Canonical Transformer

A deterministic text pipeline that turns freeform Castles & Crusades
NPC and monster write-ups into canonical narrative stat blocks,
scores the original input for style compliance, and suggests fixes.

Heuristics parse the input. The style guide defines the output.
"""

__version__ = "0.1.0"


def process(text: str, **options):
    """Convert raw text into a list of ProcessedEntity records."""
    from sbct.core.engine import process as _process

    return _process(text, **options)


def transform(text: str, pipeline_id=None, **options):
    """Run a pipeline and return the full TransformResult."""
    from sbct.core.engine import transform as _transform

    return _transform(text, pipeline_id, **options)


def generate_fixes(text: str, options=None, dictionaries=None):
    from sbct.correct.engine import generate_fixes as _generate_fixes

    return _generate_fixes(text, options, dictionaries)


def apply_fix(text: str, fix):
    from sbct.correct.engine import apply_fix as _apply_fix

    return _apply_fix(text, fix)


def load_dictionaries(spells_csv=None, items_csv=None, monsters_csv=None):
    """Build an immutable Dictionaries value from optional CSV files."""
    from sbct.dictionaries.loader import load_dictionaries as _load_dictionaries

    return _load_dictionaries(spells_csv, items_csv, monsters_csv)
