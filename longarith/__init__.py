"""longarith: arbitrary-precision integers on 64-bit words.

Example
-------
::

    from longarith import BigInt, BigUInt, MultiplierFactory

    a = BigInt.parse("-12345678910111213141516")
    q, r = a.div_rem(BigInt.from_int(47))      # truncating division

    multiply = MultiplierFactory.create()      # verified Karatsuba
    product = multiply(BigUInt.from_u64(2**64 - 1), BigUInt.from_u64(2**64 - 1))
    product.to_words()                         # [1, 0xFFFFFFFFFFFFFFFE]
"""
from __future__ import annotations

import logging

from longarith.bigint import BigInt, Sign
from longarith.biguint import ONE, ZERO, BigUInt
from longarith.config import MultiplierConfig, MultiplierKind
from longarith.errors import (
    EmptyInputError,
    InvalidDigitError,
    InvariantViolation,
    NativeRangeError,
    NegativeValueError,
    ParseIntError,
    UnderflowError,
    WordOverflowError,
)
from longarith.factory import MultiplierFactory, VerificationError
from longarith.karatsuba import karatsuba_mul

__version__: str = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BigInt",
    "BigUInt",
    "EmptyInputError",
    "InvalidDigitError",
    "InvariantViolation",
    "MultiplierConfig",
    "MultiplierFactory",
    "MultiplierKind",
    "NativeRangeError",
    "NegativeValueError",
    "ONE",
    "ParseIntError",
    "Sign",
    "UnderflowError",
    "VerificationError",
    "WordOverflowError",
    "ZERO",
    "karatsuba_mul",
]
