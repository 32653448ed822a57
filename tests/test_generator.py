from __future__ import annotations

import pytest

from fibext.arithmetic import ArithmeticOutcome, ArithmeticPolicy
from fibext.generator import FibonacciGenerator
from fibext.integers import BIGINT, SUPPORTED_WIDTHS, UINT8, UINT64, NativeWidth

CANONICAL_TERMS = [1, 2, 3, 5, 8, 13, 21, 34, 55, 89]
REPRESENTATIONS = [NativeWidth(bits) for bits in SUPPORTED_WIDTHS] + [BIGINT]


def _advance_value(generator: FibonacciGenerator) -> int:
    result = generator.advance()
    if isinstance(result, ArithmeticOutcome):
        return result.unwrap()
    return result


def test_default_construction_uses_checked_u64_and_canonical_seed() -> None:
    generator = FibonacciGenerator()

    assert generator.previous == 0
    assert generator.current == 1
    assert generator.representation == UINT64
    assert generator.policy is ArithmeticPolicy.CHECKED
    assert generator.iterable


@pytest.mark.parametrize("representation", REPRESENTATIONS, ids=lambda rep: rep.label)
@pytest.mark.parametrize("policy", list(ArithmeticPolicy), ids=lambda policy: policy.value)
def test_canonical_sequence_across_representations(representation, policy) -> None:
    generator = FibonacciGenerator(representation=representation, policy=policy)

    produced = [_advance_value(generator) for _ in CANONICAL_TERMS]

    assert produced == CANONICAL_TERMS
    assert generator.current_value() == 89
    assert generator.previous_value() == 55


@pytest.mark.parametrize("policy", list(ArithmeticPolicy), ids=lambda policy: policy.value)
def test_seed_fidelity(policy: ArithmeticPolicy) -> None:
    generator = FibonacciGenerator(7, 11, representation=32, policy=policy)

    assert generator.current_value() == 11
    _advance_value(generator)
    assert generator.current_value() == 18
    assert generator.previous_value() == 11


def test_wrapping_advance_returns_plain_int_and_wraps() -> None:
    generator = FibonacciGenerator(200, 100, representation=UINT8, policy="wrapping")

    result = generator.advance()

    assert result == 44
    assert isinstance(result, int)
    assert generator.current_value() == 44
    assert generator.previous_value() == 100


def test_checked_overflow_leaves_state_uncommitted() -> None:
    generator = FibonacciGenerator(200, 100, representation=UINT8, policy="checked")

    result = generator.advance()

    assert isinstance(result, ArithmeticOutcome)
    assert result.overflowed
    assert generator.current_value() == 100
    assert generator.previous_value() == 200
    # Repeated attempts keep failing without drifting.
    assert generator.advance().overflowed  # type: ignore[union-attr]
    assert generator.current_value() == 100


def test_checked_advance_returns_successful_outcome() -> None:
    generator = FibonacciGenerator(representation=UINT8, policy=ArithmeticPolicy.CHECKED)

    result = generator.advance()

    assert result == ArithmeticOutcome.ok(1)


def test_peek_next_does_not_mutate() -> None:
    generator = FibonacciGenerator(3, 5, representation=16, policy="wrapping")

    assert generator.peek_next() == 8
    assert generator.peek_next() == 8
    assert generator.current_value() == 5
    assert generator.advance() == 8


def test_peek_next_reports_overflow_under_checked_policy() -> None:
    generator = FibonacciGenerator(255, 1, representation=UINT8, policy="checked")

    assert generator.peek_next().overflowed  # type: ignore[union-attr]
    assert generator.current_value() == 1


@pytest.mark.parametrize("bits", SUPPORTED_WIDTHS)
def test_wrapping_recurrence_law(bits: int) -> None:
    width = NativeWidth(bits)
    generator = FibonacciGenerator(representation=width, policy="wrapping")
    history = [generator.previous_value(), generator.current_value()]

    for _ in range(400):
        history.append(generator.advance())  # type: ignore[arg-type]

    modulus = 1 << bits
    for index in range(2, len(history)):
        assert history[index] == (history[index - 1] + history[index - 2]) % modulus


def test_wrapping_generators_are_reproducible() -> None:
    first = FibonacciGenerator(17, 250, representation=UINT8, policy="wrapping")
    second = FibonacciGenerator(17, 250, representation=UINT8, policy="wrapping")

    assert [first.advance() for _ in range(1_000)] == [second.advance() for _ in range(1_000)]


def test_big_integer_is_unbounded() -> None:
    generator = FibonacciGenerator(representation=BIGINT, policy="checked")
    previous, current = 0, 1

    for _ in range(1_000):
        outcome = generator.advance()
        assert isinstance(outcome, ArithmeticOutcome)
        assert not outcome.overflowed
        previous, current = current, previous + current
        assert outcome.value == current

    assert current > UINT64.max_value
    assert generator.current_value() == current


@pytest.mark.parametrize(
    "seed, error",
    [
        ((256, 1), ValueError),
        ((0, -1), ValueError),
        ((0.5, 1), TypeError),
        ((False, 1), TypeError),
    ],
)
def test_invalid_seeds_are_rejected(seed: tuple, error: type) -> None:
    with pytest.raises(error):
        FibonacciGenerator(*seed, representation=UINT8)


def test_representation_and_policy_are_validated() -> None:
    with pytest.raises(ValueError):
        FibonacciGenerator(representation=24)
    with pytest.raises(ValueError):
        FibonacciGenerator(policy="saturating")


def test_disabled_iteration_still_steps() -> None:
    generator = FibonacciGenerator(representation=UINT8, policy="wrapping", iterable=False)

    with pytest.raises(TypeError, match="iteration is disabled"):
        iter(generator)
    assert generator.advance() == 1
    assert generator.advance() == 2


def test_repr_mentions_state() -> None:
    generator = FibonacciGenerator(2, 3, representation="u16", policy="wrapping")

    assert repr(generator) == (
        "FibonacciGenerator(previous=2, current=3, representation='u16', "
        "policy='wrapping', iterable=True)"
    )
