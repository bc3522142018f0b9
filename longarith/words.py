"""Word-level primitives for the magnitude engine.

Magnitudes are stored as little-endian sequences of 64-bit words.  The
helpers here operate on plain word lists/tuples so they can be shared by
the unsigned engine and the Karatsuba multiplier without an import cycle.
"""
from __future__ import annotations

from typing import Sequence

WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1


# ---------------------------------------------------------------------------
# Carry / borrow / widening
# ---------------------------------------------------------------------------

def carrying_add(a: int, b: int, carry: bool) -> tuple[int, bool]:
    """Add two words plus an incoming carry bit."""
    total = a + b + carry
    return total & WORD_MASK, total > WORD_MASK


def borrowing_sub(a: int, b: int, borrow: bool) -> tuple[int, bool]:
    """Subtract ``b`` and an incoming borrow bit from ``a``."""
    diff = a - b - borrow
    return diff & WORD_MASK, diff < 0


def widening_mul(a: int, b: int) -> tuple[int, int]:
    """Multiply two words into a ``(low, high)`` double word."""
    product = a * b
    return product & WORD_MASK, product >> WORD_BITS


# ---------------------------------------------------------------------------
# Sub-word splitting
# ---------------------------------------------------------------------------

def split_shl(word: int, bits: int) -> tuple[int, int]:
    """Split ``word << bits`` into ``(overflow, shifted)``.

    ``overflow`` holds the bits that move into the next word up.
    """
    if bits == 0:
        return 0, word
    return word >> (WORD_BITS - bits), (word << bits) & WORD_MASK


def split_shr(word: int, bits: int) -> tuple[int, int]:
    """Split ``word >> bits`` into ``(shifted, underflow)``.

    ``underflow`` holds the bits that move into the next word down,
    already positioned at the top of that word.
    """
    if bits == 0:
        return word, 0
    return word >> bits, (word << (WORD_BITS - bits)) & WORD_MASK


# ---------------------------------------------------------------------------
# Whole-word and sub-word shifts
# ---------------------------------------------------------------------------

def trim(words: list[int]) -> list[int]:
    """Drop most-significant zero words in place and return the list."""
    while words and words[-1] == 0:
        words.pop()
    return words


def shl_words(words: Sequence[int], count: int) -> list[int]:
    if not words:
        return []
    return [0] * count + list(words)


def shr_words(words: Sequence[int], count: int) -> list[int]:
    return list(words[count:])


def shl_bits(words: Sequence[int], bits: int) -> list[int]:
    """Shift left by fewer than ``WORD_BITS`` bits."""
    out: list[int] = []
    spill = 0
    for word in words:
        overflow, shifted = split_shl(word, bits)
        out.append(shifted | spill)
        spill = overflow
    out.append(spill)
    return trim(out)


def shr_bits(words: Sequence[int], bits: int) -> list[int]:
    """Shift right by fewer than ``WORD_BITS`` bits."""
    out: list[int] = []
    for index, word in enumerate(words):
        shifted, _ = split_shr(word, bits)
        if index + 1 < len(words):
            _, underflow = split_shr(words[index + 1], bits)
            shifted |= underflow
        out.append(shifted)
    return trim(out)
