"""Exception types for the long arithmetic engine.

Parse and narrowing failures are recoverable and carry enough context to
report the problem.  Underflow, division by zero and Karatsuba invariant
violations abort the operation; no partial result is ever returned.
"""
from __future__ import annotations


class ParseIntError(ValueError):
    """Base class for decimal parse failures."""


class EmptyInputError(ParseIntError):
    """Raised when parsing an empty string."""

    def __init__(self) -> None:
        super().__init__("cannot parse integer from empty string")


class InvalidDigitError(ParseIntError):
    """Raised when a non-digit character is found while parsing."""

    def __init__(self, text: str, position: int) -> None:
        self.text = text
        self.position = position
        self.char = text[position]
        super().__init__(
            f"invalid digit {self.char!r} at position {position} in {text!r}"
        )


class UnderflowError(ArithmeticError):
    """Raised when an unsigned subtraction would go below zero."""


class WordOverflowError(OverflowError):
    """Raised when a multi-word magnitude is narrowed to a single word."""

    def __init__(self, word_count: int) -> None:
        self.word_count = word_count
        super().__init__(
            f"value spans {word_count} words and does not fit in 64 bits"
        )


class NativeRangeError(OverflowError):
    """Raised when a native integer is outside its declared width."""

    def __init__(self, value: int, bits: int, signed: bool) -> None:
        self.value = value
        self.bits = bits
        self.signed = signed
        kind = "i" if signed else "u"
        super().__init__(f"{value} does not fit in {kind}{bits}")


class NegativeValueError(ValueError):
    """Raised when a negative value is converted to an unsigned magnitude."""


class InvariantViolation(RuntimeError):
    """Raised when an internal arithmetic invariant is broken."""
