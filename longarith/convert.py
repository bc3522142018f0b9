"""Decimal scanning and native-width checks.

Shared by ``BigUInt`` and ``BigInt``; holds no arithmetic of its own.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterator

from longarith.errors import EmptyInputError, InvalidDigitError, NativeRangeError

DECIMAL_DIGITS = "0123456789"


class NativeWidth(Enum):
    """Fixed-width native integer kinds accepted by the constructors."""

    U8 = (8, False)
    U32 = (32, False)
    U64 = (64, False)
    I8 = (8, True)
    I32 = (32, True)
    I64 = (64, True)

    @property
    def bits(self) -> int:
        return self.value[0]

    @property
    def signed(self) -> bool:
        return self.value[1]

    @property
    def lo(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def hi(self) -> int:
        if self.signed:
            return (1 << (self.bits - 1)) - 1
        return (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi


def check_native(value: int, width: NativeWidth) -> int:
    """Return ``value`` unchanged if it fits ``width``, else raise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    if not width.contains(value):
        raise NativeRangeError(value, width.bits, width.signed)
    return value


def iter_decimal_digits(text: str) -> Iterator[int]:
    """Yield the value of each ASCII decimal digit in ``text``.

    Raises ``EmptyInputError`` for an empty string and
    ``InvalidDigitError`` at the first character that is not ``0``-``9``.
    ``str.isdigit`` is not used since it accepts non-ASCII digits.
    """
    if not text:
        raise EmptyInputError()
    for position, char in enumerate(text):
        digit = DECIMAL_DIGITS.find(char)
        if digit < 0:
            raise InvalidDigitError(text, position)
        yield digit
