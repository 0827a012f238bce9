"""
Layout registry for tconv.

Loads the format tables from tconv/layouts/ and provides structured access
via Pydantic models:
- Layout: a canonical name mapped to a reference-time layout.
- EpochFormat: a numeric epoch format and its scale (microseconds per unit).
- GuessRule: a shape regex plus the ordered formats to try when it matches.

``resolve(name)`` is the single lookup entry point. Resolution order is
canonical layout -> epoch format -> raw pattern; an unknown name is never an
error here, it is handed on as a raw pattern (``%``-patterns go to strftime,
anything else is read as a reference-time layout).

Both tables are read once and cached; they are read-only for the life of the
process.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

logger = logging.getLogger(__name__)

# Directory containing the YAML tables (sibling package)
_LAYOUTS_DIR = Path(__file__).parent / "layouts"


class Layout(BaseModel):
    """A canonical format backed by a reference-time layout."""
    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    pattern: str

    @property
    def example(self) -> str:
        return self.pattern


class EpochFormat(BaseModel):
    """A numeric epoch format. ``scale`` is microseconds per unit."""
    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    scale: int = Field(..., gt=0)
    example: str


class GuessRule(BaseModel):
    """A format-guessing rule: shape regex + candidate formats in order."""
    model_config = ConfigDict(frozen=True)

    pattern: str
    formats: tuple[str, ...] = Field(..., min_length=1)

    _regex: re.Pattern[str] = PrivateAttr()

    def model_post_init(self, __context: Any) -> None:
        self._regex = re.compile(self.pattern, re.ASCII)

    def matches(self, text: str) -> bool:
        """True if the shape regex is found anywhere in *text*."""
        return self._regex.search(text) is not None


class Registry(BaseModel):
    """All named formats, keyed by lower-cased name."""
    model_config = ConfigDict(frozen=True)

    layouts: tuple[Layout, ...]
    epochs: tuple[EpochFormat, ...]

    @model_validator(mode="after")
    def _check_unique_names(self) -> Registry:
        seen: set[str] = set()
        for entry in (*self.layouts, *self.epochs):
            key = entry.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate format name '{entry.name}'")
            seen.add(key)
        return self

    def lookup(self, name: str) -> Layout | EpochFormat | None:
        key = name.lower()
        for entry in (*self.layouts, *self.epochs):
            if entry.name.lower() == key:
                return entry
        return None


class FormatSpec(BaseModel):
    """A resolved format identifier, ready to hand to a parser."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["layout", "epoch", "reference", "strftime"]
    name: str
    pattern: str = ""
    scale: int = 1


def _load_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(raw).__name__}")
    return raw


@lru_cache(maxsize=None)
def load_registry(layouts_dir: Path | None = None) -> Registry:
    """Load the named-format table (``named.yaml``)."""
    path = (layouts_dir or _LAYOUTS_DIR) / "named.yaml"
    registry = Registry.model_validate(_load_yaml(path))
    logger.debug(
        "Loaded %d layouts and %d epoch formats from %s",
        len(registry.layouts), len(registry.epochs), path,
    )
    return registry


@lru_cache(maxsize=None)
def load_guess_rules(layouts_dir: Path | None = None) -> tuple[GuessRule, ...]:
    """Load the ordered guess rules (``guess_rules.yaml``).

    File order is evaluation order.
    """
    path = (layouts_dir or _LAYOUTS_DIR) / "guess_rules.yaml"
    raw = _load_yaml(path)
    rules = tuple(GuessRule.model_validate(r) for r in raw.get("rules", []))

    # Every candidate must be a registered name, or guessing would silently
    # fall through to raw-pattern parsing.
    registry = load_registry(layouts_dir)
    for rule in rules:
        unknown = [f for f in rule.formats if registry.lookup(f) is None]
        if unknown:
            raise ValueError(f"Guess rule '{rule.pattern}' names unknown formats: {unknown}")

    logger.debug("Loaded %d guess rules from %s", len(rules), path)
    return rules


def resolve(name: str) -> FormatSpec:
    """Resolve a format identifier.

    Args:
        name: A canonical name (any case), an epoch name, or a raw pattern.

    Returns:
        A ``FormatSpec``. Unknown names come back as ``reference`` or
        ``strftime`` specs with the pattern exactly as given.
    """
    entry = load_registry().lookup(name)
    if isinstance(entry, Layout):
        return FormatSpec(kind="layout", name=entry.name, pattern=entry.pattern)
    if isinstance(entry, EpochFormat):
        return FormatSpec(kind="epoch", name=entry.name, scale=entry.scale)
    if "%" in name:
        return FormatSpec(kind="strftime", name=name, pattern=name)
    return FormatSpec(kind="reference", name=name, pattern=name)


def format_examples() -> list[tuple[str, str]]:
    """(label, example) pairs for every named format, in table order."""
    registry = load_registry()
    rows = [(l.label, l.example) for l in registry.layouts]
    rows += [(e.label, e.example) for e in registry.epochs]
    return rows
