"""Signed arbitrary-precision integers.

A ``BigInt`` pairs a ``BigUInt`` magnitude with a ``Sign``.  Zero is
always stored with ``Sign.PLUS``; every operation builds its result
through ``BigInt.from_parts`` which forces that.

Division truncates toward zero and the remainder takes the dividend's
sign, so ``//`` and ``%`` here differ from Python's floor semantics for
negative operands::

    >>> BigInt.from_int(-7) // BigInt.from_int(2)
    BigInt(-3)
    >>> BigInt.from_int(-7) % BigInt.from_int(2)
    BigInt(-1)
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union

from longarith.biguint import ZERO, BigUInt
from longarith.convert import NativeWidth, check_native
from longarith.errors import NegativeValueError


class Sign(Enum):
    PLUS = "+"
    MINUS = "-"

    def __neg__(self) -> Sign:
        return Sign.MINUS if self is Sign.PLUS else Sign.PLUS


Operand = Union["BigInt", BigUInt, int]


@dataclass(frozen=True, eq=False)
class BigInt:
    magnitude: BigUInt = ZERO
    sign: Sign = Sign.PLUS

    def __post_init__(self) -> None:
        if not isinstance(self.magnitude, BigUInt):
            raise TypeError(
                f"magnitude must be BigUInt, got {type(self.magnitude).__name__}"
            )
        if not isinstance(self.sign, Sign):
            raise TypeError(f"sign must be Sign, got {type(self.sign).__name__}")
        if self.magnitude.is_zero() and self.sign is Sign.MINUS:
            raise ValueError("zero must carry Sign.PLUS; use BigInt.from_parts")

    # -- construction -------------------------------------------------------

    @classmethod
    def from_parts(cls, magnitude: BigUInt, sign: Sign) -> BigInt:
        """Build from a magnitude and sign, forcing zero to ``PLUS``."""
        if magnitude.is_zero():
            return cls(magnitude, Sign.PLUS)
        return cls(magnitude, sign)

    @classmethod
    def from_biguint(cls, magnitude: BigUInt) -> BigInt:
        return cls(magnitude, Sign.PLUS)

    @classmethod
    def from_words(cls, words: Iterable[int]) -> BigInt:
        return cls(BigUInt.from_words(words), Sign.PLUS)

    @classmethod
    def from_int(cls, value: int) -> BigInt:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        sign = Sign.MINUS if value < 0 else Sign.PLUS
        return cls.from_parts(BigUInt.from_int(abs(value)), sign)

    @classmethod
    def from_native(cls, value: int, width: NativeWidth) -> BigInt:
        return cls.from_int(check_native(value, width))

    @classmethod
    def from_i8(cls, value: int) -> BigInt:
        return cls.from_native(value, NativeWidth.I8)

    @classmethod
    def from_i32(cls, value: int) -> BigInt:
        return cls.from_native(value, NativeWidth.I32)

    @classmethod
    def from_i64(cls, value: int) -> BigInt:
        return cls.from_native(value, NativeWidth.I64)

    @classmethod
    def from_u8(cls, value: int) -> BigInt:
        return cls.from_native(value, NativeWidth.U8)

    @classmethod
    def from_u32(cls, value: int) -> BigInt:
        return cls.from_native(value, NativeWidth.U32)

    @classmethod
    def from_u64(cls, value: int) -> BigInt:
        return cls.from_native(value, NativeWidth.U64)

    @classmethod
    def parse(cls, text: str) -> BigInt:
        """Parse optional ``-`` plus decimal digits, ignoring outer whitespace."""
        body = text.strip()
        if body.startswith("-"):
            return cls.from_parts(BigUInt.parse(body[1:]), Sign.MINUS)
        return cls.from_parts(BigUInt.parse(body), Sign.PLUS)

    # -- extraction ---------------------------------------------------------

    def to_biguint(self) -> BigUInt:
        if self.sign is Sign.MINUS:
            raise NegativeValueError(f"{self} is negative")
        return self.magnitude

    def to_words(self) -> list[int]:
        """Magnitude words; the sign is not encoded."""
        return self.magnitude.to_words()

    def __int__(self) -> int:
        value = int(self.magnitude)
        return -value if self.sign is Sign.MINUS else value

    def __str__(self) -> str:
        prefix = "-" if self.sign is Sign.MINUS else ""
        return f"{prefix}{self.magnitude}"

    def __repr__(self) -> str:
        return f"BigInt({self})"

    # -- predicates ---------------------------------------------------------

    def is_zero(self) -> bool:
        return self.magnitude.is_zero()

    def is_negative(self) -> bool:
        return self.sign is Sign.MINUS

    def __bool__(self) -> bool:
        return not self.is_zero()

    # -- ordering -----------------------------------------------------------

    def cmp(self, other: BigInt) -> int:
        if self.sign is not other.sign:
            return 1 if self.sign is Sign.PLUS else -1
        result = self.magnitude.cmp(other.magnitude)
        return result if self.sign is Sign.PLUS else -result

    def __eq__(self, other: object) -> bool:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.sign is rhs.sign and self.magnitude.words == rhs.magnitude.words

    def __hash__(self) -> int:
        # matches hash(int(self)), and so the hash of an equal BigUInt
        return hash(int(self))

    def __lt__(self, other: Operand) -> bool:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.cmp(rhs) < 0

    def __le__(self, other: Operand) -> bool:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.cmp(rhs) <= 0

    def __gt__(self, other: Operand) -> bool:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.cmp(rhs) > 0

    def __ge__(self, other: Operand) -> bool:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.cmp(rhs) >= 0

    # -- arithmetic ---------------------------------------------------------

    def add(self, rhs: BigInt) -> BigInt:
        if self.sign is rhs.sign:
            return BigInt.from_parts(self.magnitude.add(rhs.magnitude), self.sign)
        if self.sign is Sign.MINUS:
            return rhs.add(self)
        if self.magnitude.cmp(rhs.magnitude) >= 0:
            return BigInt.from_parts(self.magnitude.sub(rhs.magnitude), Sign.PLUS)
        return BigInt.from_parts(rhs.magnitude.sub(self.magnitude), Sign.MINUS)

    def sub(self, rhs: BigInt) -> BigInt:
        return self.add(rhs.neg())

    def mul(self, rhs: BigInt) -> BigInt:
        sign = Sign.PLUS if self.sign is rhs.sign else Sign.MINUS
        return BigInt.from_parts(self.magnitude.mul(rhs.magnitude), sign)

    def div_rem(self, divisor: Operand) -> tuple[BigInt, BigInt]:
        """Truncating division returning ``(quotient, remainder)``.

        The quotient is negative iff the operand signs differ; the
        remainder carries the dividend's sign.
        """
        rhs = _coerce_strict(divisor)
        quotient, remainder = self.magnitude.div_rem(rhs.magnitude)
        quotient_sign = Sign.PLUS if self.sign is rhs.sign else Sign.MINUS
        return (
            BigInt.from_parts(quotient, quotient_sign),
            BigInt.from_parts(remainder, self.sign),
        )

    def neg(self) -> BigInt:
        if self.is_zero():
            return self
        return BigInt(self.magnitude, -self.sign)

    def pow(self, exponent: int) -> BigInt:
        sign = Sign.PLUS if exponent % 2 == 0 else self.sign
        return BigInt.from_parts(self.magnitude.pow(exponent), sign)

    def shl(self, bits: int) -> BigInt:
        return BigInt.from_parts(self.magnitude.shl(bits), self.sign)

    def shr(self, bits: int) -> BigInt:
        return BigInt.from_parts(self.magnitude.shr(bits), self.sign)

    # -- operator forms -----------------------------------------------------

    def __neg__(self) -> BigInt:
        return self.neg()

    def __pos__(self) -> BigInt:
        return self

    def __abs__(self) -> BigInt:
        return BigInt(self.magnitude, Sign.PLUS)

    def __add__(self, other: Operand) -> BigInt:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.add(rhs)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> BigInt:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.sub(rhs)

    def __rsub__(self, other: Operand) -> BigInt:
        lhs = _coerce(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs.sub(self)

    def __mul__(self, other: Operand) -> BigInt:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.mul(rhs)

    __rmul__ = __mul__

    def __floordiv__(self, other: Operand) -> BigInt:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.div_rem(rhs)[0]

    def __rfloordiv__(self, other: Operand) -> BigInt:
        lhs = _coerce(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs.div_rem(self)[0]

    def __mod__(self, other: Operand) -> BigInt:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.div_rem(rhs)[1]

    def __rmod__(self, other: Operand) -> BigInt:
        lhs = _coerce(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs.div_rem(self)[1]

    def __divmod__(self, other: Operand) -> tuple[BigInt, BigInt]:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.div_rem(rhs)

    def __rdivmod__(self, other: Operand) -> tuple[BigInt, BigInt]:
        lhs = _coerce(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs.div_rem(self)

    def __pow__(self, exponent: int) -> BigInt:
        if not isinstance(exponent, int):
            return NotImplemented
        return self.pow(exponent)

    def __lshift__(self, bits: int) -> BigInt:
        if not isinstance(bits, int):
            return NotImplemented
        return self.shl(bits)

    def __rshift__(self, bits: int) -> BigInt:
        if not isinstance(bits, int):
            return NotImplemented
        return self.shr(bits)


def _coerce(value: object) -> BigInt:
    if isinstance(value, BigInt):
        return value
    if isinstance(value, BigUInt):
        return BigInt.from_biguint(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInt.from_int(value)
    return NotImplemented


def _coerce_strict(value: object) -> BigInt:
    rhs = _coerce(value)
    if rhs is NotImplemented:
        raise TypeError(
            f"expected BigInt, BigUInt or int, got {type(value).__name__}"
        )
    return rhs
