"""Typed node attribute values.

A Value is a tagged union over four kinds: string, number, boolean and
duration. Durations count working time, so a day is eight hours, a month
is twenty working days and a year is 260 working days. All durations are
normalised to minutes for comparison and arithmetic.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

logger = logging.getLogger("microdot.graph.values")

MINUTE = 1
HOUR = 60 * MINUTE
DAY = 8 * HOUR
MONTH = 20 * DAY
YEAR = 260 * DAY

UNIT_MINUTES = {
    "m": MINUTE,
    "h": HOUR,
    "d": DAY,
    "M": MONTH,
    "y": YEAR,
}

# Largest unit first; used for display decomposition.
_DISPLAY_UNITS = (
    ("year", YEAR),
    ("month", MONTH),
    ("day", DAY),
    ("hour", HOUR),
    ("minute", MINUTE),
)

_DURATION_RE = re.compile(r"^(\d+)\s*([mhdMy])$")

MIXED_TYPES = "mixed types"
CANNOT_NEGATE = "cannot negate"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


@dataclass(frozen=True, order=False)
class Duration:
    """A span of working time, stored as a signed minute count."""

    minutes: int

    @classmethod
    def of(cls, amount: int, unit: str) -> Duration:
        """Build a duration from an amount of one of the ``m/h/d/M/y`` units."""
        try:
            return cls(amount * UNIT_MINUTES[unit])
        except KeyError:
            raise ValueError(f"Unknown duration unit: {unit!r}") from None

    @classmethod
    def parse(cls, text: str) -> Optional[Duration]:
        """Parse ``<integer><unit>`` text such as ``4d`` or ``90m``.

        Returns:
            Optional[Duration]: The duration, or None when the text is not
            duration-shaped.
        """
        match = _DURATION_RE.match(text.strip())
        if not match:
            return None
        return cls.of(int(match.group(1)), match.group(2))

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.minutes + other.minutes)

    def __neg__(self) -> Duration:
        return Duration(-self.minutes)

    def __lt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.minutes < other.minutes

    def __le__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.minutes <= other.minutes

    def __gt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.minutes > other.minutes

    def __ge__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.minutes >= other.minutes

    def __str__(self) -> str:
        if self.minutes == 0:
            return _plural(0, "minute")

        remaining = abs(self.minutes)
        parts = []
        for unit, size in _DISPLAY_UNITS:
            count, remaining = divmod(remaining, size)
            if count:
                parts.append(_plural(count, unit))

        text = " ".join(parts)
        return f"-{text}" if self.minutes < 0 else text


class ValueKind(str, Enum):
    """Discriminator for Value."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DURATION = "duration"


_KIND_RANK = {
    ValueKind.STRING: 0,
    ValueKind.NUMBER: 1,
    ValueKind.BOOLEAN: 2,
    ValueKind.DURATION: 3,
}


Payload = Union[str, float, bool, Duration]


class Value:
    """An immutable typed value parsed from a ``$name=value`` assignment.

    Equality requires the same kind and payload; values of different kinds
    are never equal. Ordering is total within a kind: numbers order
    numerically with NaN above every other number and equal to another NaN.
    Across kinds the order is string < number < boolean < duration.
    """

    __slots__ = ("_kind", "_payload")

    def __init__(self, kind: ValueKind, payload: Payload) -> None:
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_payload", payload)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Value is immutable")

    # -- constructors -----------------------------------------------------

    @classmethod
    def string(cls, value: str) -> Value:
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def number(cls, value: float) -> Value:
        return cls(ValueKind.NUMBER, float(value))

    @classmethod
    def boolean(cls, value: bool) -> Value:
        return cls(ValueKind.BOOLEAN, bool(value))

    @classmethod
    def duration(cls, value: Duration) -> Value:
        return cls(ValueKind.DURATION, value)

    @classmethod
    def zero(cls) -> Value:
        """Identity for cost summation."""
        return cls.number(0.0)

    @classmethod
    def zero_of(cls, kind: ValueKind) -> Value:
        """Zero of the given kind; kinds without arithmetic fall back to zero()."""
        if kind is ValueKind.DURATION:
            return cls.duration(Duration(0))
        return cls.zero()

    @classmethod
    def infer(cls, text: str) -> Value:
        """Infer a typed value from literal text.

        Tries, in order: boolean (``true``/``false``), number, duration,
        and finally falls back to a string.
        """
        if text in ("true", "false"):
            return cls.boolean(text == "true")

        # float() accepts digit separators; labels treat "1_000" as text.
        if "_" not in text:
            try:
                return cls.number(float(text))
            except ValueError:
                pass

        duration = Duration.parse(text)
        if duration is not None:
            return cls.duration(duration)

        return cls.string(text)

    @classmethod
    def sum(cls, values: Iterable[Value]) -> Value:
        """Add values pairwise.

        An empty iterable sums to zero. Once two kinds disagree the result
        is the ``mixed types`` string, whatever follows.
        """
        total: Optional[Value] = None
        for value in values:
            if total is None:
                total = value
                continue
            if value.kind is not total.kind:
                logger.debug("Summing mixed value kinds: %s + %s", total.kind, value.kind)
                return cls.string(MIXED_TYPES)
            total = total + value
        return total if total is not None else cls.zero()

    # -- accessors --------------------------------------------------------

    @property
    def kind(self) -> ValueKind:
        return self._kind

    @property
    def payload(self) -> Payload:
        return self._payload

    def is_zero(self) -> bool:
        if self._kind is ValueKind.NUMBER:
            return self._payload == 0.0
        if self._kind is ValueKind.DURATION:
            return self._payload.minutes == 0
        return False

    def as_string(self) -> str:
        if self._kind is ValueKind.NUMBER:
            return _format_number(self._payload)
        if self._kind is ValueKind.BOOLEAN:
            return "true" if self._payload else "false"
        return str(self._payload)

    # -- arithmetic -------------------------------------------------------

    def __add__(self, other: Value) -> Value:
        if not isinstance(other, Value):
            return NotImplemented
        if self._kind is not other._kind:
            return Value.string(MIXED_TYPES)
        if self._kind is ValueKind.NUMBER:
            return Value.number(self._payload + other._payload)
        if self._kind is ValueKind.DURATION:
            return Value.duration(self._payload + other._payload)
        if self._kind is ValueKind.STRING:
            return Value.string(self._payload + other._payload)
        return Value.boolean(self._payload or other._payload)

    def __neg__(self) -> Value:
        if self._kind is ValueKind.NUMBER:
            return Value.number(-self._payload)
        if self._kind is ValueKind.DURATION:
            return Value.duration(-self._payload)
        return Value.string(CANNOT_NEGATE)

    # -- comparison -------------------------------------------------------

    def compare(self, other: Value) -> int:
        """Three-way comparison forming a total order over all values.

        Values of different kinds order by kind alone.

        Returns:
            int: -1, 0 or 1.
        """
        if self._kind is not other._kind:
            a_rank, b_rank = _KIND_RANK[self._kind], _KIND_RANK[other._kind]
            return (a_rank > b_rank) - (a_rank < b_rank)

        a, b = self._payload, other._payload
        if self._kind is ValueKind.NUMBER:
            a_nan, b_nan = math.isnan(a), math.isnan(b)
            if a_nan or b_nan:
                return (a_nan > b_nan) - (a_nan < b_nan)
        if self._kind is ValueKind.DURATION:
            a, b = a.minutes, b.minutes
        return (a > b) - (a < b)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._kind is other._kind and self._payload == other._payload

    def __hash__(self) -> int:
        return hash((self._kind, self.as_string()))

    def __lt__(self, other: Value) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: Value) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: Value) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: Value) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.compare(other) >= 0

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return f"Value.{self._kind.value}({self._payload!r})"


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return repr(value)
