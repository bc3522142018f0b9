"""Unsigned arbitrary-precision magnitudes.

A ``BigUInt`` is a frozen tuple of 64-bit words, least significant first.
``0x1_0000_0000_0000_0000`` is ``(0, 1)`` and zero is ``()``.  There are
never most-significant zero words, so structural equality is numeric
equality.

Operations return new values.  Compound assignment (``x += y``) rebinds
the name to the result; the old value is untouched if the operation
raises.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import zip_longest
from typing import Iterable, Union

from longarith.convert import NativeWidth, check_native, iter_decimal_digits
from longarith.errors import UnderflowError, WordOverflowError
from longarith.words import (
    WORD_BITS,
    WORD_MASK,
    borrowing_sub,
    carrying_add,
    shl_bits,
    shl_words,
    shr_bits,
    shr_words,
    trim,
    widening_mul,
)

Operand = Union["BigUInt", int]


@dataclass(frozen=True, eq=False)
class BigUInt:
    words: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        words = tuple(self.words)
        for word in words:
            if isinstance(word, bool) or not isinstance(word, int):
                raise TypeError(f"word must be int, got {type(word).__name__}")
            if not 0 <= word <= WORD_MASK:
                raise ValueError(f"word {word} is outside [0, 2**64)")
        if words and words[-1] == 0:
            raise ValueError(
                f"{words!r} has a most-significant zero word; "
                "use BigUInt.from_words to normalize"
            )
        object.__setattr__(self, "words", words)

    # -- construction -------------------------------------------------------

    @classmethod
    def from_words(cls, words: Iterable[int]) -> BigUInt:
        """Build from little-endian words, trimming high zero words."""
        return cls(tuple(trim(list(words))))

    @classmethod
    def from_int(cls, value: int) -> BigUInt:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"{value} is negative; BigUInt is unsigned")
        words = []
        while value:
            words.append(value & WORD_MASK)
            value >>= WORD_BITS
        return cls(tuple(words))

    @classmethod
    def from_u8(cls, value: int) -> BigUInt:
        return cls.from_int(check_native(value, NativeWidth.U8))

    @classmethod
    def from_u32(cls, value: int) -> BigUInt:
        return cls.from_int(check_native(value, NativeWidth.U32))

    @classmethod
    def from_u64(cls, value: int) -> BigUInt:
        return cls.from_int(check_native(value, NativeWidth.U64))

    @classmethod
    def parse(cls, text: str) -> BigUInt:
        """Parse a string of ASCII decimal digits.

        No sign and no surrounding whitespace are accepted.
        """
        ten = cls.from_int(10)
        acc = ZERO
        for digit in iter_decimal_digits(text):
            acc = acc * ten + cls.from_int(digit)
        return acc

    # -- extraction ---------------------------------------------------------

    def to_words(self) -> list[int]:
        return list(self.words)

    def to_u64(self) -> int:
        """Narrow to a single native word.

        Raises ``WordOverflowError`` when the value needs more than one word.
        """
        if len(self.words) > 1:
            raise WordOverflowError(len(self.words))
        return self.words[0] if self.words else 0

    def __int__(self) -> int:
        value = 0
        for word in reversed(self.words):
            value = (value << WORD_BITS) | word
        return value

    def __str__(self) -> str:
        if self.is_zero():
            return "0"
        ten = BigUInt.from_int(10)
        digits = []
        num = self
        while not num.is_zero():
            num, rem = num.div_rem(ten)
            digits.append(str(rem.to_u64()))
        return "".join(reversed(digits))

    def __repr__(self) -> str:
        hex_words = ", ".join(f"0x{w:X}" for w in self.words)
        return f"BigUInt([{hex_words}])"

    # -- predicates ---------------------------------------------------------

    def is_zero(self) -> bool:
        return not self.words

    def is_even(self) -> bool:
        return not self.words or self.words[0] % 2 == 0

    def __bool__(self) -> bool:
        return not self.is_zero()

    def bit_length(self) -> int:
        if not self.words:
            return 0
        return (len(self.words) - 1) * WORD_BITS + self.words[-1].bit_length()

    def with_bit(self, n: int) -> BigUInt:
        """Return a copy with bit ``n`` set."""
        if n < 0:
            raise ValueError("bit index must be non-negative")
        index, bit = divmod(n, WORD_BITS)
        words = list(self.words)
        if len(words) <= index:
            words.extend([0] * (index + 1 - len(words)))
        words[index] |= 1 << bit
        return BigUInt(tuple(words))

    # -- ordering -----------------------------------------------------------

    def cmp(self, other: BigUInt) -> int:
        """Three-way compare: -1, 0 or 1."""
        if len(self.words) != len(other.words):
            return -1 if len(self.words) < len(other.words) else 1
        for mine, theirs in zip(reversed(self.words), reversed(other.words)):
            if mine != theirs:
                return -1 if mine < theirs else 1
        return 0

    def _order(self, other: object) -> int:
        # negative ints sort below every magnitude
        if isinstance(other, int) and not isinstance(other, bool) and other < 0:
            return 1
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.cmp(rhs)

    def __eq__(self, other: object) -> bool:
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order == 0

    def __hash__(self) -> int:
        # matches hash(int(self))
        return hash(int(self))

    def __lt__(self, other: Operand) -> bool:
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order < 0

    def __le__(self, other: Operand) -> bool:
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order <= 0

    def __gt__(self, other: Operand) -> bool:
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order > 0

    def __ge__(self, other: Operand) -> bool:
        order = self._order(other)
        if order is NotImplemented:
            return NotImplemented
        return order >= 0

    # -- arithmetic ---------------------------------------------------------

    def add(self, rhs: BigUInt) -> BigUInt:
        out = []
        carry = False
        for a, b in zip_longest(self.words, rhs.words, fillvalue=0):
            word, carry = carrying_add(a, b, carry)
            out.append(word)
        if carry:
            out.append(1)
        return BigUInt(tuple(out))

    def sub(self, rhs: BigUInt) -> BigUInt:
        """Subtract ``rhs``; raises ``UnderflowError`` if ``rhs > self``."""
        if self.cmp(rhs) < 0:
            raise UnderflowError(f"cannot subtract {rhs!r} from smaller {self!r}")
        out = []
        borrow = False
        for a, b in zip_longest(self.words, rhs.words, fillvalue=0):
            word, borrow = borrowing_sub(a, b, borrow)
            out.append(word)
        if borrow:
            raise UnderflowError(f"cannot subtract {rhs!r} from smaller {self!r}")
        return BigUInt(tuple(trim(out)))

    def mul(self, rhs: BigUInt) -> BigUInt:
        """Schoolbook multiplication: sum of shifted word-pair products."""
        acc = ZERO
        for i, a in enumerate(self.words):
            for j, b in enumerate(rhs.words):
                partial = mul_word_pair(a, b)
                acc = acc.add(BigUInt(tuple(shl_words(partial.words, i + j))))
        return acc

    def div_rem(self, divisor: Operand) -> tuple[BigUInt, BigUInt]:
        """Binary long division returning ``(quotient, remainder)``."""
        rhs = _coerce_strict(divisor)
        if rhs.is_zero():
            raise ZeroDivisionError("division by zero")
        if self.is_zero():
            return ZERO, ZERO

        self_bits = self.bit_length()
        rhs_bits = rhs.bit_length()
        if self_bits < rhs_bits:
            return ZERO, self

        distance = self_bits - rhs_bits
        shifted = rhs << distance
        remainder = self
        quotient = ZERO
        for bit in range(distance, -1, -1):
            if remainder.cmp(shifted) >= 0:
                remainder = remainder.sub(shifted)
                quotient = quotient.with_bit(bit)
            shifted = shifted >> 1
        return quotient, remainder

    def pow(self, exponent: int) -> BigUInt:
        """Exponentiation by squaring."""
        if exponent < 0:
            raise ValueError("negative exponents not supported")
        result = ONE
        base = self
        while exponent:
            if exponent & 1:
                result = result.mul(base)
            exponent >>= 1
            if exponent:
                base = base.mul(base)
        return result

    def shl(self, bits: int) -> BigUInt:
        if bits < 0:
            raise ValueError("negative shift count")
        whole, rest = divmod(bits, WORD_BITS)
        return BigUInt(tuple(shl_bits(shl_words(self.words, whole), rest)))

    def shr(self, bits: int) -> BigUInt:
        if bits < 0:
            raise ValueError("negative shift count")
        whole, rest = divmod(bits, WORD_BITS)
        return BigUInt(tuple(shr_bits(shr_words(self.words, whole), rest)))

    # -- operator forms -----------------------------------------------------

    def __add__(self, other: Operand) -> BigUInt:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.add(rhs)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> BigUInt:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.sub(rhs)

    def __rsub__(self, other: Operand) -> BigUInt:
        lhs = _coerce(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs.sub(self)

    def __mul__(self, other: Operand) -> BigUInt:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.mul(rhs)

    __rmul__ = __mul__

    def __floordiv__(self, other: Operand) -> BigUInt:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.div_rem(rhs)[0]

    def __rfloordiv__(self, other: Operand) -> BigUInt:
        lhs = _coerce(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs.div_rem(self)[0]

    def __mod__(self, other: Operand) -> BigUInt:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.div_rem(rhs)[1]

    def __rmod__(self, other: Operand) -> BigUInt:
        lhs = _coerce(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs.div_rem(self)[1]

    def __divmod__(self, other: Operand) -> tuple[BigUInt, BigUInt]:
        rhs = _coerce(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self.div_rem(rhs)

    def __rdivmod__(self, other: Operand) -> tuple[BigUInt, BigUInt]:
        lhs = _coerce(other)
        if lhs is NotImplemented:
            return NotImplemented
        return lhs.div_rem(self)

    def __pow__(self, exponent: int) -> BigUInt:
        if not isinstance(exponent, int):
            return NotImplemented
        return self.pow(exponent)

    def __lshift__(self, bits: int) -> BigUInt:
        if not isinstance(bits, int):
            return NotImplemented
        return self.shl(bits)

    def __rshift__(self, bits: int) -> BigUInt:
        if not isinstance(bits, int):
            return NotImplemented
        return self.shr(bits)


ZERO = BigUInt()
ONE = BigUInt((1,))


def mul_word_pair(a: int, b: int) -> BigUInt:
    """Widening product of two words as a normalized magnitude."""
    low, high = widening_mul(a, b)
    return BigUInt(tuple(trim([low, high])))


def _coerce(value: object) -> BigUInt:
    if isinstance(value, BigUInt):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigUInt.from_int(value)
    return NotImplemented


def _coerce_strict(value: object) -> BigUInt:
    rhs = _coerce(value)
    if rhs is NotImplemented:
        raise TypeError(f"expected BigUInt or int, got {type(value).__name__}")
    return rhs
