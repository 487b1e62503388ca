"""
Cascade — First-match evaluation of ordered extraction strategies.
"""

from typing import Iterable, Optional

from sbct.core.contracts import Strategy


def first_match(strategies: Iterable[Strategy], text: str) -> Optional[str]:
    """
    Run strategies in order and return the first non-empty result.

    Strategies are pure `(text) -> Optional[str]` functions. A strategy
    returning None or a blank string defers to the next one.
    """
    for strategy in strategies:
        value = strategy(text)
        if value is not None and value.strip():
            return value.strip()
    return None
