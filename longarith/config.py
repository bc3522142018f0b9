"""Multiplier configuration.

``MultiplierConfig`` selects the multiplication routine handed out by
``MultiplierFactory`` and controls how thoroughly it is verified before
release.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MultiplierKind(str, Enum):
    SCHOOLBOOK = "schoolbook"
    KARATSUBA = "karatsuba"


class MultiplierConfig(BaseModel):
    """Which multiplier to build and how to verify it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: MultiplierKind = MultiplierKind.KARATSUBA
    karatsuba_threshold: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Operand size in words at or below which Karatsuba "
        "multiplies directly",
    )
    verify: bool = True
    sample_count: int = Field(
        default=64,
        ge=0,
        le=100_000,
        description="Random operand pairs checked on top of the edge grid",
    )
    max_words: int = Field(default=8, ge=1, le=64)
    seed: int | None = None

    @model_validator(mode="after")
    def threshold_only_for_karatsuba(self) -> MultiplierConfig:
        if (
            self.kind is MultiplierKind.SCHOOLBOOK
            and self.karatsuba_threshold != 1
        ):
            raise ValueError(
                "karatsuba_threshold has no effect on the schoolbook multiplier"
            )
        return self
