"""
Class lexicon — class → prime attributes, plus known races.

Loaded from YAML and validated with pydantic; cached per path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DATA_DIR = Path(__file__).parent / "data"
CLASSES_PATH = DATA_DIR / "classes.yaml"

ATTRIBUTE_ORDER = (
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)


class ClassLexicon(BaseModel):
    """Known classes with their canonical primes, and known races."""

    model_config = ConfigDict(frozen=True)

    version: str = "1.0"
    classes: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    races: tuple[str, ...] = ()

    @field_validator("classes")
    @classmethod
    def _check_primes(cls, value: dict[str, tuple[str, ...]]) -> dict[str, tuple[str, ...]]:
        for name, primes in value.items():
            unknown = [p for p in primes if p not in ATTRIBUTE_ORDER]
            if unknown:
                raise ValueError(f"Class '{name}' lists unknown attributes: {unknown}")
        return {name.lower(): tuple(primes) for name, primes in value.items()}

    def primes_for(self, char_class: str) -> tuple[str, ...]:
        """
        Primes for a class; multiclass "fighter/assassin" unions both.
        Unknown classes have no primes.
        """
        primes: set[str] = set()
        for part in char_class.lower().split("/"):
            primes.update(self.classes.get(part.strip(), ()))
        return tuple(a for a in ATTRIBUTE_ORDER if a in primes)

    def is_class(self, word: str) -> bool:
        parts = [p.strip() for p in word.lower().split("/") if p.strip()]
        return bool(parts) and all(p in self.classes for p in parts)

    def is_race(self, word: str) -> bool:
        return word.strip().lower() in self.races


_cache: dict[str, ClassLexicon] = {}


def load_lexicon(path: Optional[Union[str, Path]] = None) -> ClassLexicon:
    """
    Load a class lexicon from YAML.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the lexicon is malformed
    """
    path = Path(path) if path is not None else CLASSES_PATH
    if not path.exists():
        raise FileNotFoundError(f"Class lexicon not found: {path}")
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return ClassLexicon.model_validate(data)


def get_lexicon(use_cache: bool = True) -> ClassLexicon:
    key = str(CLASSES_PATH)
    if use_cache and key in _cache:
        return _cache[key]
    lexicon = load_lexicon()
    _cache[key] = lexicon
    return lexicon


def clear_cache() -> None:
    _cache.clear()
