"""
Dictionary models — Immutable reference data for corrections.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NameMapping(BaseModel):
    """One legacy name and its canonical replacement."""

    model_config = ConfigDict(frozen=True)

    legacy: str = Field(..., min_length=1)
    canonical: str = Field(..., min_length=1)


class NameMappings(BaseModel):
    """Legacy → canonical names for magic items and monsters."""

    model_config = ConfigDict(frozen=True)

    version: str = "1.0"
    magic_items: tuple[NameMapping, ...] = ()
    monsters: tuple[NameMapping, ...] = ()

    def all(self) -> list[NameMapping]:
        """Every mapping, longest legacy name first."""
        return sorted(
            (*self.magic_items, *self.monsters),
            key=lambda m: len(m.legacy),
            reverse=True,
        )


class Dictionaries(BaseModel):
    """
    Spell, item, and monster name sets plus name mappings.

    Frozen: build a new value to change dictionaries.
    Names are stored lowercased.
    """

    model_config = ConfigDict(frozen=True)

    spells: frozenset[str] = Field(default_factory=frozenset)
    items: frozenset[str] = Field(default_factory=frozenset)
    monsters: frozenset[str] = Field(default_factory=frozenset)
    name_mappings: NameMappings = Field(default_factory=NameMappings)
