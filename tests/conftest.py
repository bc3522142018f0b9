"""Shared fixtures and Hypothesis profile for the arithmetic tests."""
from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

from longarith import BigInt, BigUInt, MultiplierConfig, Sign

# Pure-Python long division is slow enough to trip the default deadline.
settings.register_profile(
    "longarith",
    deadline=None,
    max_examples=60,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("longarith")


U64_MAX = 0xFFFF_FFFF_FFFF_FFFF

# 0x123_0456_0789 and its powers, shared by the multiplication tests.
BASE = (0x123_0456_0789,)
POW2 = (0xDBA7_EE9B_5844_C751, 0x1_4AD2)
POW4 = (0x8601_5398_2E37_07A1, 0x0F24_B6D5_18CB_E208, 0x1_AB84_4BFA)
POW8 = (
    0x33E5_47C2_2368_3341,
    0x438A_893F_691C_BEE9,
    0x1DD8_A227_897B_FE70,
    0x8434_FDB6_53E3_A3DF,
    0xC9F2_99D2_9EF0_90E8,
    0x2,
)
POW10 = (
    0xCC35_4D9A_2913_BE91,
    0xD87F_0854_504C_4A4C,
    0x078E_81D7_CF7E_C461,
    0x063F_F73B_69F5_D08B,
    0xD396_F1E9_C39B_8D33,
    0xC7E2_8FF2_C990_3B86,
    0x3_9A9E,
)


@pytest.fixture
def base() -> BigUInt:
    return BigUInt(BASE)


@pytest.fixture
def powers() -> dict[int, BigUInt]:
    """Powers of ``BASE`` keyed by exponent."""
    return {
        1: BigUInt(BASE),
        2: BigUInt(POW2),
        4: BigUInt(POW4),
        8: BigUInt(POW8),
        10: BigUInt(POW10),
    }


@pytest.fixture
def negative_base() -> BigInt:
    return BigInt(BigUInt(BASE), Sign.MINUS)


@pytest.fixture
def fast_config() -> MultiplierConfig:
    """Small verification budget so factory tests stay quick."""
    return MultiplierConfig(sample_count=10, max_words=4, seed=1234)
