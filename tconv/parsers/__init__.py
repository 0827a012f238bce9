"""
Parsers sub-package for tconv.

Contains the format-specific parsers that turn text into an ``Instant`` and
back again.

Design: Strategy Pattern
- base.py defines the BaseParser ABC (protocol).
- reference.py implements ReferenceLayoutParser for named layouts and raw
  reference-time layouts (``2006-01-02``, ``Jan _2 15:04:05``, ...).
- epoch.py implements EpochParser for unix / unix-milli / unix-micro.
- strftime.py implements StrftimeParser for raw ``%``-patterns.

``get_parser()`` selects the parser class from a resolved ``FormatSpec``.
"""

from __future__ import annotations

from tconv.layout_registry import FormatSpec
from tconv.parsers.base import BaseParser
from tconv.parsers.epoch import EpochParser
from tconv.parsers.reference import ReferenceLayoutParser
from tconv.parsers.strftime import StrftimeParser

# Maps FormatSpec.kind to parser class
_PARSER_MAP: dict[str, type[BaseParser]] = {
    "layout": ReferenceLayoutParser,
    "reference": ReferenceLayoutParser,
    "epoch": EpochParser,
    "strftime": StrftimeParser,
}


def get_parser(spec: FormatSpec) -> BaseParser:
    """Instantiate the parser for a resolved format."""
    return _PARSER_MAP[spec.kind](spec)


__all__ = [
    "BaseParser",
    "EpochParser",
    "ReferenceLayoutParser",
    "StrftimeParser",
    "get_parser",
]
