"""Verifying multiplier factory.

The factory does not just construct a multiplication routine, it
*verifies* it against the ``umul`` contract before releasing it.

Flow:
  1. Caller requests a multiplier for a ``MultiplierConfig``.
  2. Factory builds the routine (schoolbook or Karatsuba).
  3. Factory checks every ``umul`` postcondition and property on an
     edge-word grid plus seeded random operands.
  4. If verification passes  -> return the multiplier.
     If verification fails   -> raise, never hand out a broken routine.
     A routine that raises on some operands fails the same way.
"""
from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field
from functools import partial

from longarith.biguint import BigUInt
from longarith.config import MultiplierConfig, MultiplierKind
from longarith.contracts import (
    AlgebraicProperty,
    Multiplier,
    OperationContract,
    Postcondition,
    build_contract,
)
from longarith.karatsuba import karatsuba_mul
from longarith.words import WORD_MASK

logger = logging.getLogger(__name__)

# Operands that exercise carries, word boundaries and uneven splits.
EDGE_OPERANDS: tuple[BigUInt, ...] = (
    BigUInt(),
    BigUInt((1,)),
    BigUInt((WORD_MASK,)),
    BigUInt((0, 1)),
    BigUInt((WORD_MASK, WORD_MASK)),
    BigUInt((1 << 63, 0, 1)),
    BigUInt((WORD_MASK,) * 7),
)


@dataclass
class VerificationResult:
    """One ``umul`` check run over the operand samples.

    A failing result keeps the first offending operands as word lists and,
    when the multiplier raised instead of returning, the exception text.
    """

    check_name: str
    passed: bool
    counterexample: tuple | None = None
    tests_run: int = 0
    error: str | None = None

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample else ""
        raised = f"  raised {self.error}" if self.error else ""
        return f"[{status}] {self.check_name} ({self.tests_run} tests){ce}{raised}"


@dataclass
class VerificationReport:
    """Every ``umul`` check run against one candidate multiplier."""

    multiplier_name: str
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> list[VerificationResult]:
        return [r for r in self.results if not r.passed]

    @property
    def tests_run(self) -> int:
        return sum(r.tests_run for r in self.results)

    def summary(self) -> str:
        lines = [f"--- {self.multiplier_name} ---"]
        lines.extend(f"  {r}" for r in self.results)
        if self.passed:
            lines.append(f"  => ALL PASSED ({self.tests_run} operand tuples)")
        else:
            lines.append(f"  => FAILED ({len(self.failures)} of {len(self.results)} checks)")
        return "\n".join(lines)


class VerificationError(Exception):
    """A multiplier disagreed with schoolbook multiplication; never handed out."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(
            f"multiplier {report.multiplier_name} rejected:\n{report.summary()}"
        )


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class MultiplierFactory:
    """Produces multiplication routines that are checked against schoolbook."""

    @classmethod
    def create(cls, config: MultiplierConfig | None = None) -> Multiplier:
        """Build, verify, and return a multiplier."""
        config = config or MultiplierConfig()
        multiplier = cls.build(config)
        if config.verify:
            report = cls.verify(multiplier, config)
            if not report.passed:
                logger.warning("multiplier rejected\n%s", report.summary())
                raise VerificationError(report)
            logger.info(
                "multiplier %s verified (%d checks)",
                report.multiplier_name,
                report.tests_run,
            )
        return multiplier

    @staticmethod
    def build(config: MultiplierConfig) -> Multiplier:
        if config.kind is MultiplierKind.SCHOOLBOOK:
            return BigUInt.mul
        return partial(karatsuba_mul, threshold=config.karatsuba_threshold)

    @classmethod
    def verify(
        cls, multiplier: Multiplier, config: MultiplierConfig | None = None
    ) -> VerificationReport:
        """Check ``multiplier`` against the ``umul`` contract."""
        config = config or MultiplierConfig()
        contract = build_contract(multiplier)["umul"]
        rng = random.Random(config.seed)
        report = VerificationReport(multiplier_name=_describe(multiplier))

        for post in contract.postconditions:
            report.results.append(
                cls._verify_postcondition(contract, post, rng, config)
            )
        for prop in contract.properties:
            report.results.append(cls._verify_property(prop, rng, config))
        return report

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_postcondition(
        cls,
        contract: OperationContract,
        post: Postcondition,
        rng: random.Random,
        config: MultiplierConfig,
    ) -> VerificationResult:
        tests_run = 0
        for combo in _generate_samples(rng, contract.arity, config):
            tests_run += 1
            try:
                holds = post.check(*combo, contract.apply(*combo))
            except Exception as exc:
                return _failure(post.name, combo, tests_run, exc)
            if not holds:
                return _failure(post.name, combo, tests_run)
        logger.debug("postcondition %s held on %d inputs", post.name, tests_run)
        return VerificationResult(check_name=post.name, passed=True, tests_run=tests_run)

    @classmethod
    def _verify_property(
        cls,
        prop: AlgebraicProperty,
        rng: random.Random,
        config: MultiplierConfig,
    ) -> VerificationResult:
        tests_run = 0
        for combo in _generate_samples(rng, prop.arity, config):
            tests_run += 1
            try:
                holds = prop.check(*combo)
            except Exception as exc:
                return _failure(prop.name, combo, tests_run, exc)
            if not holds:
                return _failure(prop.name, combo, tests_run)
        logger.debug("property %s held on %d inputs", prop.name, tests_run)
        return VerificationResult(check_name=prop.name, passed=True, tests_run=tests_run)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _failure(
    name: str, combo: tuple, tests_run: int, exc: Exception | None = None
) -> VerificationResult:
    if exc is not None:
        logger.debug("check %s raised %r on sample %d", name, exc, tests_run)
    return VerificationResult(
        check_name=name,
        passed=False,
        counterexample=tuple(c.to_words() for c in combo),
        tests_run=tests_run,
        error=None if exc is None else f"{type(exc).__name__}: {exc}",
    )


def _describe(multiplier: Multiplier) -> str:
    if isinstance(multiplier, partial):
        kwargs = ", ".join(f"{k}={v}" for k, v in multiplier.keywords.items())
        return f"{multiplier.func.__name__}({kwargs})"
    return getattr(multiplier, "__qualname__", repr(multiplier))


def random_operand(rng: random.Random, max_words: int) -> BigUInt:
    """Random magnitude of 0..max_words words; the top word is nonzero."""
    length = rng.randint(0, max_words)
    words = [rng.getrandbits(64) for _ in range(length)]
    if words and words[-1] == 0:
        words[-1] = 1
    return BigUInt(tuple(words))


def _generate_samples(
    rng: random.Random, arity: int, config: MultiplierConfig
) -> list[tuple[BigUInt, ...]]:
    """Edge-operand combinations followed by random fill."""
    samples: list[tuple[BigUInt, ...]] = list(
        itertools.product(EDGE_OPERANDS, repeat=arity)
    )
    for _ in range(config.sample_count):
        samples.append(
            tuple(random_operand(rng, config.max_words) for _ in range(arity))
        )
    return samples
