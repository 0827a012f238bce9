"""
Base parser ABC for tconv.

Every kind of format identifier (reference layout, strftime pattern, epoch
number) has a parser implementing this interface. The contract is:
1. parse() takes text and returns an ``Instant``, or raises a
   ``ConversionError`` subclass.
2. format() takes an ``Instant`` and returns text. It never fails for an
   instant that exists.

Parsers are cheap, stateless objects built from a ``FormatSpec``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tconv.instant import Instant
from tconv.layout_registry import FormatSpec


class BaseParser(ABC):
    """Abstract base class for format parsers."""

    def __init__(self, spec: FormatSpec) -> None:
        self.spec = spec

    @abstractmethod
    def parse(self, text: str) -> Instant:
        """Parse *text* into an Instant.

        Raises:
            ConversionError: If *text* does not match the format.
        """

    @abstractmethod
    def format(self, instant: Instant) -> str:
        """Render *instant* in this format."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.spec.name!r})"
