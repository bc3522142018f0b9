"""Karatsuba multiplication for ``BigUInt``.

Operands are split at ``ceil(n / 2)`` words and recombined as::

    high * B**(2*m) + (k(uA + lA, uB + lB) - high - low) * B**m + low

where ``B = 2**64`` and ``m`` is the split point.  The middle term is
formed with ``BigInt`` since its partial differences are signed; the final
sum must be non-negative or ``InvariantViolation`` is raised.
"""
from __future__ import annotations

from typing import Sequence

from longarith.bigint import BigInt, Sign
from longarith.biguint import BigUInt, mul_word_pair
from longarith.errors import InvariantViolation
from longarith.words import WORD_BITS


def split_words(
    words: Sequence[int], point: int
) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Split at ``point`` into ``(lower, upper)``.

    ``split_words((1, 2, 3, 4, 5, 6, 7), 4) == ((1, 2, 3, 4), (5, 6, 7))``.
    A point past the end gives an empty upper part.
    """
    point = min(point, len(words))
    return tuple(words[:point]), tuple(words[point:])


def _half(words: tuple[int, ...]) -> BigUInt:
    # a lower half can end in zero words
    return BigUInt.from_words(words)


def karatsuba_mul(lhs: BigUInt, rhs: BigUInt, threshold: int = 1) -> BigUInt:
    """Multiply two magnitudes by recursive decomposition.

    Below ``threshold`` words per operand the product is computed
    directly: a single widening multiply for one-word operands, schoolbook
    multiplication otherwise.  Agrees with ``BigUInt.mul`` for all inputs.
    """
    if threshold < 1:
        raise ValueError("threshold must be at least one word")
    if len(lhs.words) <= threshold and len(rhs.words) <= threshold:
        if threshold == 1:
            return mul_word_pair(lhs.to_u64(), rhs.to_u64())
        return lhs.mul(rhs)

    size = max(len(lhs.words), len(rhs.words))
    point = size // 2 + size % 2

    lhs_lower, lhs_upper = split_words(lhs.words, point)
    rhs_lower, rhs_upper = split_words(rhs.words, point)
    lhs_lower, lhs_upper = _half(lhs_lower), _half(lhs_upper)
    rhs_lower, rhs_upper = _half(rhs_lower), _half(rhs_upper)

    high = BigInt.from_biguint(karatsuba_mul(lhs_upper, rhs_upper, threshold))
    low = BigInt.from_biguint(karatsuba_mul(lhs_lower, rhs_lower, threshold))
    cross = karatsuba_mul(
        lhs_upper.add(lhs_lower), rhs_upper.add(rhs_lower), threshold
    )
    mid = BigInt.from_biguint(cross).sub(high).sub(low)

    total = (
        high.shl(2 * point * WORD_BITS)
        .add(mid.shl(point * WORD_BITS))
        .add(low)
    )
    if total.sign is Sign.MINUS:
        raise InvariantViolation(
            f"karatsuba recombination went negative for operands of "
            f"{len(lhs.words)} and {len(rhs.words)} words"
        )
    return total.magnitude
