"""
strftime-style raw patterns (any raw format containing ``%``).

Delegates to ``datetime.strptime`` / ``datetime.strftime``. A parse result
without ``%z`` information is taken to be UTC; a bare ``%z`` offset gets an
empty zone name so layouts print it as ``-0700`` rather than ``UTC-07:00``.
Precision is limited to microseconds (``%f``).
"""

from __future__ import annotations

from datetime import datetime, timezone

from tconv.exceptions import PatternParseError
from tconv.instant import Instant
from tconv.parsers.base import BaseParser


class StrftimeParser(BaseParser):

    def parse(self, text: str) -> Instant:
        pattern = self.spec.pattern
        try:
            moment = datetime.strptime(text, pattern)
        except ValueError as e:
            raise PatternParseError(
                f'parsing time "{text}" as "{pattern}": {e}'
            ) from e
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        elif moment.utcoffset() and moment.tzname() == str(timezone(moment.utcoffset())):
            moment = moment.replace(tzinfo=timezone(moment.utcoffset(), ""))
        return Instant(moment)

    def format(self, instant: Instant) -> str:
        return instant.moment.strftime(self.spec.pattern)
