"""Dictionaries — spell/item/monster name sets and legacy name mappings."""

from sbct.dictionaries.loader import (
    apply_name_mappings,
    clear_cache,
    default_dictionaries,
    get_name_mappings,
    load_dictionaries,
    load_dictionaries_from_dir,
    load_name_mappings,
    parse_csv_names,
)
from sbct.dictionaries.models import Dictionaries, NameMapping, NameMappings

__all__ = [
    "Dictionaries",
    "NameMapping",
    "NameMappings",
    "apply_name_mappings",
    "clear_cache",
    "default_dictionaries",
    "get_name_mappings",
    "load_dictionaries",
    "load_dictionaries_from_dir",
    "load_name_mappings",
    "parse_csv_names",
]
