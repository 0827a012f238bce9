"""
Numeric epoch formats: unix, unix-milli, unix-micro.

Parsing multiplies the decimal value by the format's scale as a float and
truncates to whole microseconds (sub-microsecond digits are dropped, not
rounded; very long inputs lose precision past ~15 significant digits).

Formatting divides the instant's microseconds by the scale and prints the
shortest decimal that round-trips, positional and without a trailing ``.0``:
1136239445.0 -> ``1136239445``, 1698292629.5 -> ``1698292629.5``.
"""

from __future__ import annotations

import math
import re

import numpy as np

from tconv.exceptions import NumericParseError
from tconv.instant import Instant
from tconv.parsers.base import BaseParser
from tconv.zones import local_zone

# Plain decimal float: no inf/nan, no underscores, no surrounding whitespace
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class EpochParser(BaseParser):
    """Epoch time counted in units of ``spec.scale`` microseconds."""

    def parse(self, text: str) -> Instant:
        if not _DECIMAL_RE.fullmatch(text):
            raise NumericParseError(f"failed to parse epoch time: {text}")
        value = float(text) * self.spec.scale
        if not math.isfinite(value):
            raise NumericParseError(f"failed to parse epoch time: {text}")
        return Instant.from_epoch_micros(int(value), local_zone())

    def format(self, instant: Instant) -> str:
        value = instant.epoch_micros / self.spec.scale
        return np.format_float_positional(value, trim="-")
