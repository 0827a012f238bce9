"""
Custom exception hierarchy for tconv.

Two families:
- ConversionError: a single value could not be parsed, formatted or
  shifted. In ``--grep`` mode these are caught per match and the original
  text is kept; in whole-line mode they end the run.
- ConfigValidationError: an option could not be resolved at startup
  (unknown zone, bad duration, bad regular expression, bad config file).
  Always fatal.
"""


class TconvError(Exception):
    """Base exception for all tconv errors."""


class ConversionError(TconvError):
    """Base class for failures converting a single time value."""


class UnknownFormatError(ConversionError):
    """Raised when format guessing exhausts every matching rule and candidate.

    The message names the original text: ``Unknown format: <text>``.
    """


class NumericParseError(ConversionError):
    """Raised when an epoch-format value is not a decimal number."""


class PatternParseError(ConversionError):
    """Raised when a value does not match a named or raw layout.

    Carries the layout engine's message, e.g.
    ``parsing time "x" as "2006-01-02": cannot parse "x" as "2006"``.
    """


class TimeRangeError(ConversionError):
    """Raised when an instant falls outside the representable years 1..9999."""


class ConfigValidationError(TconvError):
    """Raised when options or the config file fail validation."""


class LocationResolutionError(ConfigValidationError):
    """Raised when a ``--loc`` zone name cannot be loaded."""


class DurationParseError(ConfigValidationError):
    """Raised when an ``--add`` / ``--sub`` duration is malformed."""


class PatternCompileError(ConfigValidationError):
    """Raised when the ``--grep`` regular expression does not compile."""
