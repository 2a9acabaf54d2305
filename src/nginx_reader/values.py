"""Directive value parsers.

Only the shape of a value is checked here, never whether nginx would accept it.
The size and duration parsers keep a lenient numeric part: digits that fail to
parse count as 0 and only an unknown unit suffix is an error.
"""

import re
from abc import ABC, abstractmethod
from datetime import timedelta

from nginx_reader.errors import EmptyValueError, ValueFormatError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

INT_RE = re.compile(r"^[+-]?[0-9]+$")

DIGITS = "0123456789"

SIZE_UNITS = {
    "": 1,
    "k": 1024,
    "K": 1024,
    "m": 1024**2,
    "M": 1024**2,
    "g": 1024**3,
    "G": 1024**3,
}

TIME_UNITS = {
    "ms": timedelta(milliseconds=1),
    "": timedelta(seconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
    "M": timedelta(days=30),
    "y": timedelta(days=365),
}


def parse_bool(value: str) -> bool:
    if value == "on":
        return True
    if value == "off":
        return False
    raise ValueFormatError(f"Unsupported boolean value {value}")


def parse_int(value: str) -> int:
    """Parse a base-10 signed 64-bit integer."""
    if not INT_RE.match(value):
        raise ValueFormatError(f"Invalid integer value {value!r}")

    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueFormatError(f"Integer value {value} is out of range")
    return number


def _lenient_int(value: str) -> int:
    try:
        return parse_int(value)
    except ValueFormatError:
        return 0


def parse_size(value: str) -> int:
    """Parse a byte size such as ``512``, ``16k``, ``8M`` or ``2G``."""
    unit = value.strip(DIGITS)
    number = _lenient_int(value.strip("kKmMgG"))

    if unit not in SIZE_UNITS:
        raise ValueFormatError(f"Unsupported measurement unit {unit}")
    return number * SIZE_UNITS[unit]


def parse_buffers(value: str) -> tuple[int, int]:
    """Parse a ``<count> <size>`` pair like ``4 16k``."""
    if value.count(" ") != 1:
        raise ValueFormatError("Wrong buffer format value")

    count, size = value.split(" ")
    return parse_int(count), parse_size(size)


def parse_time_period(value: str) -> timedelta:
    unit = value.strip(DIGITS)
    number = _lenient_int(value.strip("mshdwMy"))

    if unit not in TIME_UNITS:
        raise ValueFormatError(f"Unsupported time unit {unit}")
    try:
        return number * TIME_UNITS[unit]
    except OverflowError:
        raise ValueFormatError(f"Time value {value} is out of range") from None


def parse_time(value: str) -> timedelta:
    """Parse a duration such as ``30s`` or ``2d 6h 30m 15s`` (tokens are summed)."""
    result = timedelta()
    for part in value.split():
        try:
            result += parse_time_period(part)
        except OverflowError:
            raise ValueFormatError(f"Time value {value} is out of range") from None
    return result


class TypedAccessors(ABC):
    """Typed views over ``get()``; mixed into both property stores."""

    @abstractmethod
    def get(self, name: str) -> str:
        """Return the raw value of a directive, or "" if it is absent."""

    def _require(self, name: str) -> str:
        value = self.get(name)
        if value == "":
            raise EmptyValueError()
        return value

    def get_bool(self, name: str) -> bool:
        return parse_bool(self._require(name))

    def get_int(self, name: str) -> int:
        return parse_int(self._require(name))

    def get_size(self, name: str) -> int:
        """Return the value in bytes."""
        return parse_size(self._require(name))

    def get_buf(self, name: str) -> tuple[int, int]:
        """Return ``(count, size_in_bytes)``."""
        return parse_buffers(self._require(name))

    def get_time(self, name: str) -> timedelta:
        return parse_time(self._require(name))
