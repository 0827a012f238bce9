"""
tconv: convert timestamps between text formats, epoch numbers and timezones.

Public API surface:

- ``string_to_time(text, fmt="")`` -- parse one value. An empty *fmt*
  guesses the format from the shape of the text.
- ``time_to_string(instant, fmt)`` -- format one value.
- ``guess_time(text)`` -- parse with format guessing only.
- ``transform(instant, location, add, sub)`` -- change display zone, then
  shift.
- ``LineProcessor`` / ``run`` -- apply all of the above to lines of text,
  whole lines or regex matches within them.

Formats are canonical names (``rfc3339``, ``kitchen``, ``unix-milli``, ...,
see ``format_examples()``), layouts of the reference time
``Mon Jan 2 15:04:05 MST 2006`` (``2006/01/02``), or strftime patterns
(``%Y-%m-%d``).

Example::

    >>> from tconv import string_to_time, time_to_string
    >>> t = string_to_time("1136239445", "unix")
    >>> time_to_string(t, "rfc1123z")
    'Mon, 02 Jan 2006 22:04:05 +0000'
"""

from __future__ import annotations

from tconv.config import ConvertConfig, ConvertOptions, load_config, resolve_options
from tconv.convert import string_to_time, time_to_string
from tconv.detect import guess_time
from tconv.durations import parse_duration
from tconv.exceptions import (
    ConfigValidationError,
    ConversionError,
    DurationParseError,
    LocationResolutionError,
    NumericParseError,
    PatternCompileError,
    PatternParseError,
    TconvError,
    TimeRangeError,
    UnknownFormatError,
)
from tconv.instant import Instant
from tconv.layout_registry import FormatSpec, format_examples, resolve
from tconv.processor import LineProcessor, run
from tconv.transforms import transform
from tconv.zones import local_zone, resolve_location

__all__ = [
    "string_to_time",
    "time_to_string",
    "guess_time",
    "transform",
    "Instant",
    "LineProcessor",
    "run",
    "resolve",
    "FormatSpec",
    "format_examples",
    "ConvertConfig",
    "ConvertOptions",
    "load_config",
    "resolve_options",
    "parse_duration",
    "local_zone",
    "resolve_location",
    "TconvError",
    "ConversionError",
    "UnknownFormatError",
    "NumericParseError",
    "PatternParseError",
    "TimeRangeError",
    "ConfigValidationError",
    "LocationResolutionError",
    "DurationParseError",
    "PatternCompileError",
]
