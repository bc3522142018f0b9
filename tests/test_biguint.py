"""White-box tests for the unsigned magnitude engine.

Each test class targets one operation; concrete word vectors pin down
carry, borrow and word-boundary behaviour.
"""
from __future__ import annotations

import pytest

from longarith import BigUInt, UnderflowError, WordOverflowError

U64_MAX = 0xFFFF_FFFF_FFFF_FFFF

LEFT = (0x0000_0000_0000_0000, 0x2000_0000_0000_0000, 0x24_608A_C0F1)
RIGHT = (0x123_0456_0789,)
SHIFTED10 = (0x4_8C11_581E_2400,)


def U(*words: int) -> BigUInt:
    return BigUInt.from_words(words)


# ===================================================================
# CONSTRUCTION & NORMALIZATION
# ===================================================================

class TestConstruction:

    def test_zero_is_empty(self):
        assert BigUInt().words == ()
        assert BigUInt.from_int(0).words == ()

    def test_from_int_single_word(self):
        assert BigUInt.from_int(123_456_789).words == (123_456_789,)

    def test_from_int_multi_word(self):
        assert BigUInt.from_int(1 << 64).words == (0, 1)

    def test_from_words_trims(self):
        assert BigUInt.from_words([5, 0, 0]).words == (5,)
        assert BigUInt.from_words([0, 0]).is_zero()

    def test_direct_trailing_zero_rejected(self):
        with pytest.raises(ValueError):
            BigUInt((5, 0))

    def test_word_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            BigUInt((1 << 64,))
        with pytest.raises(ValueError):
            BigUInt.from_words([-1])

    def test_non_int_word_rejected(self):
        with pytest.raises(TypeError):
            BigUInt((1.5,))

    def test_negative_int_rejected(self):
        with pytest.raises(ValueError):
            BigUInt.from_int(-1)

    def test_list_input_stored_as_tuple(self):
        assert BigUInt([1, 2]).words == (1, 2)


# ===================================================================
# PREDICATES
# ===================================================================

class TestPredicates:

    def test_is_zero(self):
        assert BigUInt.from_int(0).is_zero()
        assert not BigUInt.from_int(128).is_zero()
        assert not U(0, 0, 0, 123).is_zero()

    def test_bool(self):
        assert not BigUInt()
        assert BigUInt.from_int(1)

    def test_is_even(self):
        assert BigUInt.from_int(0).is_even()
        assert BigUInt.from_int(12_345_678).is_even()
        assert U(12_345_678, 123, 456, 789).is_even()
        assert not BigUInt.from_int(7).is_even()

    @pytest.mark.parametrize("words, expected", [
        ((), 0),
        ((128,), 8),
        ((127,), 7),
        ((0, 0, 0, 123), 64 * 3 + 7),
    ])
    def test_bit_length(self, words, expected):
        assert U(*words).bit_length() == expected

    @pytest.mark.parametrize("start, bit, expected", [
        ((), 130, (0, 0, 4)),
        ((128,), 130, (128, 0, 4)),
        ((128, 0, 9), 130, (128, 0, 13)),
        ((128, 0, 8), 131, (128, 0, 8)),
        ((128,), 4, (144,)),
        ((), 0, (1,)),
        ((), 1, (2,)),
    ])
    def test_with_bit(self, start, bit, expected):
        assert U(*start).with_bit(bit) == U(*expected)

    def test_with_bit_leaves_original(self):
        value = BigUInt.from_int(128)
        value.with_bit(0)
        assert value == BigUInt.from_int(128)


# ===================================================================
# ADDITION
# ===================================================================

class TestAdd:

    def test_zero_identity(self):
        assert BigUInt.from_int(0) + 123_456_789 == BigUInt.from_int(123_456_789)

    def test_small(self):
        assert BigUInt.from_int(3) + 123_456_789 == BigUInt.from_int(123_456_792)

    def test_carry_creates_word(self):
        assert U(U64_MAX) + U(U64_MAX) == U(U64_MAX - 1, 1)

    def test_zero_plus_multi_word(self):
        assert U() + U(123, 456, 789) == U(123, 456, 789)

    def test_multi_word_no_carry(self):
        assert U(987, 654, 321) + U(123, 456, 789) == U(1110, 1110, 1110)

    def test_carry_ripples_through_all_words(self):
        assert U(U64_MAX, U64_MAX, U64_MAX) + U(1) == U(0, 0, 0, 1)

    def test_carry_ripples_mixed(self):
        assert U(U64_MAX, U64_MAX, U64_MAX) + U(3, 2, 1) == U(2, 2, 1, 1)

    def test_int_on_left(self):
        assert 5 + BigUInt.from_int(7) == BigUInt.from_int(12)

    def test_compound_assignment_rebinds(self):
        value = BigUInt.from_int(1)
        alias = value
        value += 1
        assert value == BigUInt.from_int(2)
        assert alias == BigUInt.from_int(1)


# ===================================================================
# SUBTRACTION
# ===================================================================

class TestSub:

    def test_minus_zero(self):
        assert U(123_456_789) - U() == U(123_456_789)

    def test_self_is_zero(self):
        assert (U(123_456_789) - U(123_456_789)).words == ()

    def test_trims_high_words(self):
        assert U(123_456_789, 123_456_789) - U(9, 123_456_789) == U(123_456_780)

    def test_borrow_free_high_word(self):
        assert U(U64_MAX, U64_MAX, 3) - U(U64_MAX, U64_MAX, 2) == U(0, 0, 1)

    def test_borrows_across_words(self):
        assert U(0x123, 0x456, 0x789) - U(0x987, 0x654, 0x321) == U(
            0xFFFF_FFFF_FFFF_F79C, 0xFFFF_FFFF_FFFF_FE01, 0x467
        )

    def test_borrow_ripples(self):
        assert U(0, 0, 0, 1) - U(1) == U(U64_MAX, U64_MAX, U64_MAX)

    def test_inverse_of_carry(self):
        assert U(2, 2, 1, 1) - U(U64_MAX, U64_MAX, U64_MAX) == U(3, 2, 1)

    def test_underflow_raises(self):
        with pytest.raises(UnderflowError):
            U(1) - U(2)

    def test_underflow_multi_word(self):
        with pytest.raises(UnderflowError):
            U(U64_MAX) - U(0, 1)

    def test_underflow_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            U() - U(1)


# ===================================================================
# MULTIPLICATION (schoolbook)
# ===================================================================

class TestMul:

    def test_by_zero(self):
        assert BigUInt.from_int(0) * 123_456_789 == BigUInt()

    def test_by_one(self):
        assert BigUInt.from_int(1) * 123_456_789 == BigUInt.from_int(123_456_789)

    def test_small(self):
        assert BigUInt.from_int(3) * 123_456_789 == BigUInt.from_int(370_370_367)

    def test_max_squared(self):
        product = U(U64_MAX) * U(U64_MAX)
        assert product.to_words() == [1, 0xFFFF_FFFF_FFFF_FFFE]

    def test_three_by_three_words(self):
        lhs = U(0xFFFF_FFFF_FFFF_FFFF, 0x1111_1111_1111_1111, 0x3333)
        rhs = U(0xFFFF_FFFF_FFFF_FFFF, 0x2222_2222_2222_2222, 0x3456)
        assert lhs * rhs == U(
            0x0000_0000_0000_0001,
            0xCCCC_CCCC_CCCC_CCCB,
            0x530E_CA86_41FD_51EC,
            0xCF13_579B_E024_C5E5,
            0xA77_9972,
        )

    def test_interior_zero_words(self):
        assert U(0, 1) * U(0, 1) == U(0, 0, 1)

    def test_powers_by_repeated_squaring(self, powers):
        assert powers[1] * powers[1] == powers[2]
        assert powers[2] * powers[2] == powers[4]
        assert powers[4] * powers[4] == powers[8]
        assert powers[2] * powers[8] == powers[10]


# ===================================================================
# DIVISION
# ===================================================================

class TestDivRem:

    @pytest.mark.parametrize("a, b, q, r", [
        (0, 1, 0, 0),
        (127, 2, 63, 1),
        (122, 3, 40, 2),
        (123456, 47, 2626, 34),
        (5, 7, 0, 5),
        (7, 7, 1, 0),
    ])
    def test_small(self, a, b, q, r):
        quotient, remainder = BigUInt.from_int(a).div_rem(BigUInt.from_int(b))
        assert quotient == BigUInt.from_int(q)
        assert remainder == BigUInt.from_int(r)

    def test_multi_word(self):
        dividend = BigUInt.parse("1234567891011121314151617181920")
        quotient, remainder = dividend.div_rem(BigUInt.from_int(456789101112131415))
        assert quotient == BigUInt.from_int(2702708729269)
        assert remainder == BigUInt.from_int(423862836832296285)

    def test_divisor_larger_returns_dividend(self):
        dividend = U(5)
        quotient, remainder = dividend.div_rem(U(0, 1))
        assert quotient.is_zero()
        assert remainder is dividend

    def test_division_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            U(5).div_rem(U())

    def test_zero_by_zero_still_raises(self):
        with pytest.raises(ZeroDivisionError):
            U().div_rem(U())

    def test_operator_forms(self):
        a = BigUInt.from_int(127)
        assert a // 2 == BigUInt.from_int(63)
        assert a % 2 == BigUInt.from_int(1)
        assert divmod(a, 2) == (BigUInt.from_int(63), BigUInt.from_int(1))

    def test_int_divisor_accepted(self):
        assert U(100).div_rem(7) == (U(14), U(2))


# ===================================================================
# POWER
# ===================================================================

class TestPow:

    def test_zero_exponent(self, base):
        assert base.pow(0) == BigUInt.from_int(1)
        assert BigUInt().pow(0) == BigUInt.from_int(1)

    def test_first_power(self, base):
        assert base.pow(1) == base

    @pytest.mark.parametrize("exponent", [2, 4, 8, 10])
    def test_known_powers(self, powers, exponent):
        assert powers[1].pow(exponent) == powers[exponent]

    def test_operator(self, base, powers):
        assert base ** 2 == powers[2]

    def test_zero_base(self):
        assert BigUInt().pow(5).is_zero()

    def test_negative_exponent(self, base):
        with pytest.raises(ValueError):
            base.pow(-1)


# ===================================================================
# SHIFTS
# ===================================================================

class TestShift:

    def test_shl_10(self):
        assert U(*RIGHT) << 10 == U(*SHIFTED10)

    def test_shl_125(self):
        assert U(*RIGHT) << 125 == U(*LEFT)

    def test_shl_one_bit_at_a_time(self):
        num = U(*RIGHT)
        for _ in range(125):
            num <<= 1
        assert num == U(*LEFT)

    def test_shl_61(self):
        assert (U(0x123_0456_0789) << 61).to_words() == [
            0x2000_0000_0000_0000, 0x24_608A_C0F1,
        ]

    def test_shr_10(self):
        assert U(*SHIFTED10) >> 10 == U(*RIGHT)

    def test_shr_125(self):
        assert U(*LEFT) >> 125 == U(*RIGHT)

    def test_shr_one_bit_at_a_time(self):
        num = U(*LEFT)
        for _ in range(125):
            num >>= 1
        assert num == U(*RIGHT)

    def test_shr_to_zero(self):
        assert (U(1, 1) >> 200).is_zero()

    def test_shift_zero(self):
        assert (U() << 100).is_zero()

    def test_negative_count(self):
        with pytest.raises(ValueError):
            U(1) << -1
        with pytest.raises(ValueError):
            U(1) >> -1


# ===================================================================
# ORDERING
# ===================================================================

class TestOrdering:

    def test_same_length(self):
        first, second = U(123, 456, 789), U(789, 456, 789)
        assert first < second
        assert second > first
        assert first.cmp(second) == -1

    def test_longer_is_greater(self):
        first, second = U(123, 456, 789, 123), U(789, 456, 789)
        assert first > second
        assert second < first

    def test_equal(self):
        first, second = U(123, 456, 789), U(123, 456, 789)
        assert first == second
        assert first <= second and first >= second
        assert first.cmp(second) == 0

    def test_against_int(self):
        assert U(5) < 6
        assert U(0, 1) > U64_MAX

    def test_hashable(self):
        assert len({U(1, 2), U(1, 2), U(3)}) == 2

    def test_equal_to_int(self):
        assert U(5) == 5
        assert 5 == U(5)
        assert U(0, 1) == 1 << 64
        assert U() == 0
        assert U(5) != 6

    def test_hash_matches_int(self):
        assert hash(U(5)) == hash(5)
        assert hash(U(0, 1)) == hash(1 << 64)
        assert {U(7): "seven"}[7] == "seven"

    def test_negative_int_is_smaller(self):
        assert U() != -1
        assert U() > -1
        assert not U(5) < -3
        assert -3 < U(5)

    def test_ordering_and_equality_agree(self):
        for value in (4, 5, 6):
            assert (U(5) == value) == (not U(5) < value and not U(5) > value)


class TestReflectedOperators:

    def test_int_on_left_of_division(self):
        assert 17 // U(5) == U(3)
        assert 17 % U(5) == U(2)
        assert divmod(17, U(5)) == (U(3), U(2))

    def test_wide_int_on_left(self):
        assert (1 << 64) // U(2) == U(1 << 63)
        assert (1 << 64) % U(3) == U(1)

    def test_int_on_left_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            5 // U()


# ===================================================================
# NARROWING & WORDS
# ===================================================================

class TestExtraction:

    def test_to_u64_zero(self):
        assert BigUInt().to_u64() == 0

    def test_to_u64_single(self):
        assert U(U64_MAX).to_u64() == U64_MAX

    def test_to_u64_too_large(self):
        with pytest.raises(WordOverflowError) as excinfo:
            U(0, 1).to_u64()
        assert excinfo.value.word_count == 2

    def test_too_large_is_overflow_error(self):
        with pytest.raises(OverflowError):
            U(1, 1, 1).to_u64()

    def test_to_words_is_a_copy(self):
        value = U(1, 2)
        words = value.to_words()
        words.append(3)
        assert value.to_words() == [1, 2]

    def test_int(self):
        assert int(U(0, 1)) == 1 << 64

    def test_repr(self):
        assert repr(U(255, 1)) == "BigUInt([0xFF, 0x1])"
