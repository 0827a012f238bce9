"""
Scalar conversion between text and ``Instant``.

- ``string_to_time(text, fmt)`` parses one value. An empty *fmt* hands the
  value to the format guesser (``detect.guess_time``).
- ``time_to_string(instant, fmt)`` renders one value.

*fmt* is anything ``layout_registry.resolve`` accepts: a canonical name in
any case (``rfc3339``, ``Kitchen``), an epoch name (``unix-milli``), or a
raw pattern (``2006/01/02``, ``%Y-%m-%d``).
"""

from __future__ import annotations

import logging

from tconv.instant import Instant
from tconv.layout_registry import resolve
from tconv.parsers import get_parser

logger = logging.getLogger(__name__)


def string_to_time(text: str, fmt: str = "") -> Instant:
    """Parse *text* using *fmt*, or guess the format when *fmt* is empty.

    Raises:
        ConversionError: If *text* cannot be parsed (``UnknownFormatError``
            when guessing found nothing).
    """
    if not fmt:
        # Lazy import: detect depends on this module
        from tconv.detect import guess_time

        return guess_time(text)
    return get_parser(resolve(fmt)).parse(text)


def time_to_string(instant: Instant, fmt: str) -> str:
    """Render *instant* using *fmt*."""
    return get_parser(resolve(fmt)).format(instant)
