"""Machine-readable contract for the arithmetic engine.

Each operation is described as a collection of:
- postconditions: what the output must satisfy given valid inputs,
  checked against Python's native ``int`` as the reference
- error conditions: which inputs must raise which exception
- algebraic properties: relationships that must hold between operations

The contract is data.  ``MultiplierFactory`` walks the ``umul`` entry to
verify a multiplication routine before releasing it, and the conformance
tests iterate over every entry with generated inputs.

Layers
------
Postcondition        predicate over ``(*inputs, result)``
ErrorCondition       trigger predicate plus expected exception type
AlgebraicProperty    predicate over ``arity`` free values
OperationContract    per-operation bundle with the callable under test
ArithmeticContract   all operations
build_contract()     constructs the contract for a given multiplier
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from longarith.bigint import BigInt, Sign
from longarith.biguint import ZERO, BigUInt
from longarith.errors import UnderflowError

Multiplier = Callable[[BigUInt, BigUInt], BigUInt]


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]
    exception: type[BaseException]


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many free input values the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationContract:
    name: str
    signed: bool
    arity: int
    apply: Callable[..., Any]
    postconditions: list[Postcondition] = field(default_factory=list)
    error_conditions: list[ErrorCondition] = field(default_factory=list)
    properties: list[AlgebraicProperty] = field(default_factory=list)

    def should_raise(self, *inputs: Any) -> type[BaseException] | None:
        """Exception type the inputs must trigger, or None."""
        for ec in self.error_conditions:
            if ec.trigger(*inputs):
                return ec.exception
        return None


@dataclass(frozen=True)
class ArithmeticContract:
    """Complete contract for the engine."""

    operations: dict[str, OperationContract]

    def __getitem__(self, name: str) -> OperationContract:
        return self.operations[name]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out


# ---------------------------------------------------------------------------
# Helpers used inside the predicates
# ---------------------------------------------------------------------------

def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def _is_normalized(value: BigUInt | BigInt) -> bool:
    if isinstance(value, BigInt):
        if value.magnitude.is_zero() and value.sign is not Sign.PLUS:
            return False
        value = value.magnitude
    return not value.words or value.words[-1] != 0


def _schoolbook(a: BigUInt, b: BigUInt) -> BigUInt:
    return a.mul(b)


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contract(multiply: Multiplier = _schoolbook) -> ArithmeticContract:
    """Construct the contract, with ``multiply`` as the unsigned multiplier."""

    # ----------------------------------------------------------------- uadd
    uadd = OperationContract(
        name="uadd",
        signed=False,
        arity=2,
        apply=lambda a, b: a + b,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the integer sum",
                lambda a, b, result: int(result) == int(a) + int(b),
            ),
            Postcondition(
                "normalized", "No most-significant zero word",
                lambda a, b, result: _is_normalized(result),
            ),
        ],
        properties=[
            AlgebraicProperty(
                "commutativity", "a + b == b + a", 2,
                lambda a, b: a + b == b + a,
            ),
            AlgebraicProperty(
                "associativity", "(a + b) + c == a + (b + c)", 3,
                lambda a, b, c: (a + b) + c == a + (b + c),
            ),
            AlgebraicProperty(
                "identity", "a + 0 == a", 1,
                lambda a: a + ZERO == a,
            ),
        ],
    )

    # ----------------------------------------------------------------- usub
    usub = OperationContract(
        name="usub",
        signed=False,
        arity=2,
        apply=lambda a, b: a - b,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the integer difference",
                lambda a, b, result: int(result) == int(a) - int(b),
            ),
            Postcondition(
                "normalized", "Trailing zero words are trimmed",
                lambda a, b, result: _is_normalized(result),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "underflow", "UnderflowError when b > a",
                lambda a, b: b > a,
                UnderflowError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "add_inverse", "(a - b) + b == a when a >= b", 2,
                lambda a, b: a < b or (a - b) + b == a,
            ),
            AlgebraicProperty(
                "self_inverse", "a - a == 0", 1,
                lambda a: (a - a).is_zero(),
            ),
            AlgebraicProperty(
                "ordering_agrees", "a < b iff b - a is positive", 2,
                lambda a, b: (a < b) == (b >= a and not (b - a).is_zero()),
            ),
        ],
    )

    # ----------------------------------------------------------------- umul
    umul = OperationContract(
        name="umul",
        signed=False,
        arity=2,
        apply=multiply,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the integer product",
                lambda a, b, result: int(result) == int(a) * int(b),
            ),
            Postcondition(
                "normalized", "No most-significant zero word",
                lambda a, b, result: _is_normalized(result),
            ),
        ],
        properties=[
            AlgebraicProperty(
                "agrees_with_schoolbook", "mul(a, b) is bit-identical to a * b", 2,
                lambda a, b: multiply(a, b).words == a.mul(b).words,
            ),
            AlgebraicProperty(
                "commutativity", "mul(a, b) == mul(b, a)", 2,
                lambda a, b: multiply(a, b) == multiply(b, a),
            ),
            AlgebraicProperty(
                "identity", "mul(a, 1) == a", 1,
                lambda a: multiply(a, BigUInt((1,))) == a,
            ),
            AlgebraicProperty(
                "zero", "mul(a, 0) == 0", 1,
                lambda a: multiply(a, ZERO).is_zero(),
            ),
            AlgebraicProperty(
                "distributivity", "mul(a, b + c) == mul(a, b) + mul(a, c)", 3,
                lambda a, b, c: multiply(a, b + c) == multiply(a, b) + multiply(a, c),
            ),
        ],
    )

    # ------------------------------------------------------------- udiv_rem
    udiv_rem = OperationContract(
        name="udiv_rem",
        signed=False,
        arity=2,
        apply=lambda a, b: a.div_rem(b),
        postconditions=[
            Postcondition(
                "reconstructs", "q * b + r == a",
                lambda a, b, result: result[0] * b + result[1] == a,
            ),
            Postcondition(
                "remainder_bound", "0 <= r < b",
                lambda a, b, result: result[1] < b,
            ),
            Postcondition(
                "result_correct", "Matches integer divmod",
                lambda a, b, result: (int(result[0]), int(result[1]))
                == divmod(int(a), int(b)),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "div_by_zero", "ZeroDivisionError when b == 0",
                lambda a, b: b.is_zero(),
                ZeroDivisionError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "identity", "a // 1 == a", 1,
                lambda a: a // BigUInt((1,)) == a,
            ),
            AlgebraicProperty(
                "self", "a // a == 1 for a != 0", 1,
                lambda a: a.is_zero() or a // a == BigUInt((1,)),
            ),
        ],
    )

    # --------------------------------------------------------------- ushift
    ushift = OperationContract(
        name="ushift",
        signed=False,
        arity=2,
        apply=lambda a, n: a << n,
        postconditions=[
            Postcondition(
                "result_correct", "a << n equals a * 2**n",
                lambda a, n, result: int(result) == int(a) << n,
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "negative_count", "ValueError for a negative shift count",
                lambda a, n: n < 0,
                ValueError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "round_trip", "(a << n) >> n == a", 2,
                lambda a, n: n < 0 or (a << n) >> n == a,
            ),
        ],
    )

    # ---------------------------------------------------------------- utext
    utext = OperationContract(
        name="utext",
        signed=False,
        arity=1,
        apply=str,
        postconditions=[
            Postcondition(
                "result_correct", "Canonical decimal text",
                lambda a, result: result == str(int(a)),
            ),
        ],
        properties=[
            AlgebraicProperty(
                "round_trip", "parse(str(a)) == a", 1,
                lambda a: BigUInt.parse(str(a)) == a,
            ),
        ],
    )

    # ----------------------------------------------------------------- iadd
    iadd = OperationContract(
        name="iadd",
        signed=True,
        arity=2,
        apply=lambda a, b: a + b,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the integer sum",
                lambda a, b, result: int(result) == int(a) + int(b),
            ),
            Postcondition(
                "normalized", "Zero carries Sign.PLUS",
                lambda a, b, result: _is_normalized(result),
            ),
        ],
        properties=[
            AlgebraicProperty(
                "commutativity", "a + b == b + a", 2,
                lambda a, b: a + b == b + a,
            ),
            AlgebraicProperty(
                "associativity", "(a + b) + c == a + (b + c)", 3,
                lambda a, b, c: (a + b) + c == a + (b + c),
            ),
            AlgebraicProperty(
                "inverse", "a + (-a) == 0", 1,
                lambda a: (a + (-a)) == BigInt(),
            ),
        ],
    )

    # ----------------------------------------------------------------- isub
    isub = OperationContract(
        name="isub",
        signed=True,
        arity=2,
        apply=lambda a, b: a - b,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the integer difference",
                lambda a, b, result: int(result) == int(a) - int(b),
            ),
        ],
        properties=[
            AlgebraicProperty(
                "add_inverse", "(a - b) + b == a", 2,
                lambda a, b: (a - b) + b == a,
            ),
            AlgebraicProperty(
                "ordering_agrees", "a < b iff a - b is negative", 2,
                lambda a, b: (a < b) == (a - b).is_negative(),
            ),
        ],
    )

    # ----------------------------------------------------------------- imul
    imul = OperationContract(
        name="imul",
        signed=True,
        arity=2,
        apply=lambda a, b: a * b,
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the integer product",
                lambda a, b, result: int(result) == int(a) * int(b),
            ),
            Postcondition(
                "normalized", "Zero carries Sign.PLUS",
                lambda a, b, result: _is_normalized(result),
            ),
        ],
        properties=[
            AlgebraicProperty(
                "commutativity", "a * b == b * a", 2,
                lambda a, b: a * b == b * a,
            ),
            AlgebraicProperty(
                "negation", "(-a) * b == -(a * b)", 2,
                lambda a, b: (-a) * b == -(a * b),
            ),
        ],
    )

    # ------------------------------------------------------------- idiv_rem
    idiv_rem = OperationContract(
        name="idiv_rem",
        signed=True,
        arity=2,
        apply=lambda a, b: a.div_rem(b),
        postconditions=[
            Postcondition(
                "reconstructs", "q * b + r == a",
                lambda a, b, result: result[0] * b + result[1] == a,
            ),
            Postcondition(
                "remainder_bound", "|r| < |b|",
                lambda a, b, result: abs(result[1]) < abs(b),
            ),
            Postcondition(
                "remainder_sign", "r is zero or shares the sign of a",
                lambda a, b, result: result[1].is_zero()
                or result[1].sign is a.sign,
            ),
            Postcondition(
                "truncates", "Quotient rounds toward zero",
                lambda a, b, result: int(result[0]) == truncdiv(int(a), int(b)),
            ),
            Postcondition(
                "normalized", "Zero quotient and remainder carry Sign.PLUS",
                lambda a, b, result: _is_normalized(result[0])
                and _is_normalized(result[1]),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "div_by_zero", "ZeroDivisionError when b == 0",
                lambda a, b: b.is_zero(),
                ZeroDivisionError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "identity", "a // 1 == a", 1,
                lambda a: a // BigInt.from_int(1) == a,
            ),
            AlgebraicProperty(
                "negated_divisor", "a // (-b) == -(a // b)", 2,
                lambda a, b: b.is_zero() or a // (-b) == -(a // b),
            ),
        ],
    )

    # --------------------------------------------------------------- ishift
    ishift = OperationContract(
        name="ishift",
        signed=True,
        arity=2,
        apply=lambda a, n: a << n,
        postconditions=[
            Postcondition(
                "sign_kept", "Shifting keeps the sign of a nonzero value",
                lambda a, n, result: result.sign is a.sign,
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "negative_count", "ValueError for a negative shift count",
                lambda a, n: n < 0,
                ValueError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "round_trip", "(a << n) >> n == a", 2,
                lambda a, n: n < 0 or (a << n) >> n == a,
            ),
        ],
    )

    # ---------------------------------------------------------------- itext
    itext = OperationContract(
        name="itext",
        signed=True,
        arity=1,
        apply=str,
        postconditions=[
            Postcondition(
                "result_correct", "Canonical decimal text",
                lambda a, result: result == str(int(a)),
            ),
        ],
        properties=[
            AlgebraicProperty(
                "round_trip", "parse(str(a)) == a", 1,
                lambda a: BigInt.parse(str(a)) == a,
            ),
            AlgebraicProperty(
                "double_negation", "-(-a) == a", 1,
                lambda a: -(-a) == a,
            ),
        ],
    )

    return ArithmeticContract(
        operations={
            op.name: op
            for op in (
                uadd, usub, umul, udiv_rem, ushift, utext,
                iadd, isub, imul, idiv_rem, ishift, itext,
            )
        },
    )
