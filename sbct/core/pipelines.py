"""
Stock pipelines.

- default: full conversion plus fix suggestions
- parse_only: conversion without fix suggestions
- fixes_only: fix suggestions over the raw text, no conversion
"""

from sbct.core.engine import Engine, Pipeline
from sbct.passes import (
    classify_entities,
    compose_narratives,
    extract_fields,
    normalize,
    package,
    precorrect,
    split_blocks,
    suggest_fixes,
    validate_entities,
)


def setup_default_pipeline(engine: Engine) -> None:
    """Register the stock pipelines."""
    from sbct.validate.rules import clear_cache

    clear_cache()

    engine.register_pipeline(Pipeline(
        id="default",
        name="Default SBCT Pipeline",
        passes=[
            normalize,
            precorrect,
            split_blocks,
            extract_fields,
            classify_entities,
            validate_entities,
            compose_narratives,
            suggest_fixes,
            package,
        ],
    ))

    engine.register_pipeline(Pipeline(
        id="parse_only",
        name="Conversion without fix suggestions",
        passes=[
            normalize,
            precorrect,
            split_blocks,
            extract_fields,
            classify_entities,
            validate_entities,
            compose_narratives,
            package,
        ],
    ))

    engine.register_pipeline(Pipeline(
        id="fixes_only",
        name="Fix suggestions only",
        passes=[
            normalize,
            suggest_fixes,
            package,
        ],
    ))
