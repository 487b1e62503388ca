"""
Dictionary Loader — CSV name lists and YAML name mappings.

CSV format: one entry per line, name in the first comma-delimited
column, optional header row whose first cell is "name".
"""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Optional, Union

import yaml

from sbct.core.logging import LogChannel, get_logger
from sbct.dictionaries.models import Dictionaries, NameMappings

log = get_logger(LogChannel.CORRECT)

DATA_DIR = Path(__file__).parent / "data"
NAME_MAPPINGS_PATH = DATA_DIR / "name_mappings.yaml"

PathLike = Union[str, Path]


def parse_csv_names(text: str) -> frozenset[str]:
    """Parse CSV text into a set of lowercased names."""
    names = set()
    for index, row in enumerate(csv.reader(text.splitlines())):
        first = row[0].strip() if row else ""
        if not first:
            continue
        if index == 0 and first.lower() == "name":
            continue
        names.add(first.lower())
    return frozenset(names)


def _read_csv(path: Optional[PathLike]) -> frozenset[str]:
    if path is None:
        return frozenset()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dictionary file not found: {path}")
    return parse_csv_names(path.read_text(encoding="utf-8"))


def load_name_mappings(path: Optional[PathLike] = None) -> NameMappings:
    """
    Load name mappings from YAML.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the mapping file is malformed
    """
    path = Path(path) if path is not None else NAME_MAPPINGS_PATH
    if not path.exists():
        raise FileNotFoundError(f"Name mapping file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return NameMappings.model_validate(data)


def load_dictionaries(
    spells_csv: Optional[PathLike] = None,
    items_csv: Optional[PathLike] = None,
    monsters_csv: Optional[PathLike] = None,
    name_mappings: Optional[NameMappings] = None,
) -> Dictionaries:
    """Build a Dictionaries value from CSV files and the packaged mappings."""
    dictionaries = Dictionaries(
        spells=_read_csv(spells_csv),
        items=_read_csv(items_csv),
        monsters=_read_csv(monsters_csv),
        name_mappings=name_mappings or get_name_mappings(),
    )
    log.info(
        "dictionaries_loaded",
        spells=len(dictionaries.spells),
        items=len(dictionaries.items),
        monsters=len(dictionaries.monsters),
    )
    return dictionaries


def load_dictionaries_from_dir(directory: PathLike) -> Dictionaries:
    """
    Load spells.csv, items.csv, monsters.csv and an optional
    name_mappings.yaml from one directory. Missing CSVs are empty.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"Dictionary directory not found: {directory}")

    def optional(name: str) -> Optional[Path]:
        candidate = directory / name
        return candidate if candidate.exists() else None

    mappings_path = optional("name_mappings.yaml")
    return load_dictionaries(
        spells_csv=optional("spells.csv"),
        items_csv=optional("items.csv"),
        monsters_csv=optional("monsters.csv"),
        name_mappings=load_name_mappings(mappings_path) if mappings_path else None,
    )


# Read-only caches
_mappings_cache: dict[str, NameMappings] = {}
_default_cache: dict[str, Dictionaries] = {}


def get_name_mappings(use_cache: bool = True) -> NameMappings:
    """Packaged name mappings, cached."""
    if use_cache and "default" in _mappings_cache:
        return _mappings_cache["default"]
    mappings = load_name_mappings()
    _mappings_cache["default"] = mappings
    return mappings


def default_dictionaries() -> Dictionaries:
    """Empty name sets plus the packaged name mappings."""
    if "default" not in _default_cache:
        _default_cache["default"] = Dictionaries(name_mappings=get_name_mappings())
    return _default_cache["default"]


def clear_cache() -> None:
    """Clear the mapping and default-dictionary caches."""
    _mappings_cache.clear()
    _default_cache.clear()


def apply_name_mappings(text: str, mappings: Optional[NameMappings] = None) -> str:
    """
    Replace legacy names with canonical ones.

    Case-insensitive, whole phrase, longest legacy name first. One pass,
    so a replacement is never rewritten by a shorter mapping.
    """
    mappings = mappings or get_name_mappings()
    ordered = mappings.all()
    if not ordered:
        return text
    lookup: dict[str, str] = {}
    for mapping in ordered:
        lookup.setdefault(mapping.legacy.lower(), mapping.canonical)
    alternation = "|".join(re.escape(m.legacy) for m in ordered)
    pattern = re.compile(rf"(?<![\w-])(?:{alternation})(?![\w-])", re.IGNORECASE)
    return pattern.sub(lambda m: lookup[m.group(0).lower()], text)
