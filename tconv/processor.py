"""
Line processor for tconv.

Three modes, chosen from ``ConvertOptions``:

- **current time** (``now``): one line, the clock transformed and formatted.
- **whole line** (no ``pattern``): every input line, stripped, is a time
  value. The first line that fails to parse ends the run.
- **pattern** (``pattern`` set): every regex match inside a line is
  converted and substituted back. A match that fails to convert is left as
  it was, so unrelated text that happens to match passes through.

Input lines come from the positional arguments when there are any,
otherwise from the input stream, read lazily.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from typing import TextIO

from tconv.config import ConvertOptions
from tconv.convert import string_to_time, time_to_string
from tconv.exceptions import ConversionError
from tconv.instant import Instant
from tconv.transforms import TransformPipeline

logger = logging.getLogger(__name__)


class LineProcessor:
    """Converts values, lines and line streams with fixed options."""

    def __init__(self, options: ConvertOptions) -> None:
        self.options = options
        self.pipeline = TransformPipeline(options.location, options.add, options.sub)

    def _render(self, instant: Instant) -> str:
        return time_to_string(self.pipeline.run(instant), self.options.output_format)

    def convert(self, text: str) -> str:
        """Parse, transform and format one value.

        Raises:
            ConversionError: If *text* cannot be converted.
        """
        return self._render(string_to_time(text, self.options.input_format))

    def current_time(self) -> str:
        """The current time, transformed and formatted."""
        return self._render(Instant.now())

    def _substitute(self, match: re.Match[str]) -> str:
        text = match.group(0)
        try:
            return self.convert(text)
        except ConversionError as e:
            logger.debug("Leaving %r unchanged: %s", text, e)
            return text

    def process_line(self, line: str) -> str:
        """Convert one line according to the mode.

        Raises:
            ConversionError: In whole-line mode, if the line cannot be
                converted.
        """
        if self.options.pattern is None:
            return self.convert(line.strip())
        return self.options.pattern.sub(self._substitute, line)

    def process(self, lines: Iterable[str]) -> Iterator[str]:
        """Yield one output line per input line, without line endings."""
        for line in lines:
            yield self.process_line(line.rstrip("\r\n"))


def iter_input_lines(args: Sequence[str], stream: TextIO | None) -> Iterator[str]:
    """Lines of *args* joined by newlines, or of *stream* when *args* is empty."""
    if args:
        yield from "\n".join(args).splitlines()
        return
    if stream is None:
        return
    yield from stream


def run(
    options: ConvertOptions,
    args: Sequence[str] = (),
    stream: TextIO | None = None,
) -> Iterator[str]:
    """Yield the output lines for one invocation."""
    processor = LineProcessor(options)
    if options.now:
        logger.debug("Current-time mode")
        yield processor.current_time()
        return
    logger.debug(
        "%s mode, input from %s",
        "Pattern" if options.pattern is not None else "Whole-line",
        "arguments" if args else "stream",
    )
    yield from processor.process(iter_input_lines(args, stream))
