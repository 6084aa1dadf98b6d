"""Wall clock and timestamp parsing.

Release identifiers encode their creation time as ``YYYYmmddHHMMSS`` (local
time). Retention by age needs three primitives: the current time, a relative
expression such as ``"121 seconds ago"`` resolved against it, and the
timestamp encoded in an identifier. They are grouped behind the ``Clock``
protocol so tests can pin the current instant with ``FrozenClock``.

All timestamps are integer unix seconds.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from .result import Err, Ok, Result

__all__ = [
    "Clock",
    "FrozenClock",
    "ParseError",
    "RELEASE_IDENTIFIER_FORMAT",
    "SystemClock",
    "format_release_identifier",
    "parse_relative",
    "parse_release_timestamp",
]

RELEASE_IDENTIFIER_FORMAT = "%Y%m%d%H%M%S"

_IDENTIFIER_RE = re.compile(r"^\d{14}$")
_TERM_RE = re.compile(r"\s*([+-]?)\s*(\d+)\s*([a-z]+)\s*")

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR

_UNITS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("sec", "secs", "second", "seconds"), 1),
    (("min", "mins", "minute", "minutes"), _MINUTE),
    (("hour", "hours"), _HOUR),
    (("day", "days"), _DAY),
    (("week", "weeks"), 7 * _DAY),
    (("fortnight", "fortnights"), 14 * _DAY),
    (("month", "months"), 30 * _DAY),
    (("year", "years"), 365 * _DAY),
)
_UNIT_SECONDS: dict[str, int] = {name: seconds for names, seconds in _UNITS for name in names}


@dataclass(frozen=True, slots=True)
class ParseError:
    """A time expression or release identifier could not be parsed."""

    message: str
    value: str
    hint: str | None = None


def _parse_absolute(expression: str) -> int | None:
    try:
        return int(datetime.fromisoformat(expression).timestamp())
    except ValueError:
        return None


def parse_relative(expression: str, now: int) -> Result[int, ParseError]:
    """Resolve a time expression against ``now``.

    Accepted forms:
    - ``now``
    - one or more ``[+-]<n> <unit>`` terms, optionally followed by ``ago``
      (``"121 seconds ago"``, ``"+1 day 2 hours"``, ``"1 week -1 day"``)
    - an ISO 8601 date or date-time (``"2023-01-01 12:00:00"``)

    Months count as 30 days and years as 365 days.
    """
    raw = expression.strip()
    text = raw.lower()
    if not text:
        return Err(ParseError("empty time expression", expression))
    if text == "now":
        return Ok(now)

    absolute = _parse_absolute(raw)
    if absolute is not None:
        return Ok(absolute)

    ago = False
    if text == "ago" or text.endswith(" ago"):
        ago = True
        text = text[:-3].rstrip()

    if not text:
        return Err(ParseError(f"unrecognized time expression: {expression!r}", expression))

    offset = 0
    pos = 0
    while pos < len(text):
        m = _TERM_RE.match(text, pos)
        if m is None:
            return Err(
                ParseError(
                    f"unrecognized time expression: {expression!r}",
                    expression,
                    hint='Use e.g. "121 seconds ago" or "7 days ago".',
                )
            )
        sign, amount, unit = m.groups()
        seconds = _UNIT_SECONDS.get(unit)
        if seconds is None:
            return Err(ParseError(f"unknown time unit: {unit!r}", expression))
        delta = int(amount) * seconds
        offset += -delta if sign == "-" else delta
        pos = m.end()

    if ago:
        offset = -offset
    return Ok(now + offset)


def parse_release_timestamp(value: str) -> Result[int, ParseError]:
    """Parse a ``YYYYmmddHHMMSS`` release identifier as local time."""
    if _IDENTIFIER_RE.match(value) is None:
        return Err(
            ParseError(
                f"release identifier is not a timestamp: {value!r}",
                value,
                hint="Expected 14 digits (YYYYmmddHHMMSS).",
            )
        )
    try:
        parsed = datetime.strptime(value, RELEASE_IDENTIFIER_FORMAT)
    except ValueError as e:
        return Err(ParseError(f"invalid release timestamp {value!r}: {e}", value))
    return Ok(int(parsed.timestamp()))


def format_release_identifier(timestamp: int) -> str:
    """Inverse of ``parse_release_timestamp``."""
    return datetime.fromtimestamp(timestamp).strftime(RELEASE_IDENTIFIER_FORMAT)


class Clock(Protocol):
    """Time source consumed by the retention policy."""

    def current_time(self) -> int: ...

    def string_to_time(self, expression: str) -> Result[int, ParseError]: ...

    def parse_fixed_format(self, value: str) -> Result[int, ParseError]: ...


class SystemClock:
    """Clock backed by the system wall clock."""

    def current_time(self) -> int:
        return int(time.time())

    def string_to_time(self, expression: str) -> Result[int, ParseError]:
        return parse_relative(expression, self.current_time())

    def parse_fixed_format(self, value: str) -> Result[int, ParseError]:
        return parse_release_timestamp(value)


@dataclass(frozen=True, slots=True)
class FrozenClock(SystemClock):
    """Clock pinned to ``now``. Use in tests."""

    now: int

    def current_time(self) -> int:
        return self.now
