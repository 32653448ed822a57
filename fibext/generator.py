"""Streaming Fibonacci generator over a configurable unsigned representation.

The generator only ever keeps the two most recent terms, so memory use stays
constant for native widths and grows with the digit count for big integers.
Each :meth:`FibonacciGenerator.advance` performs a single addition under the
active :class:`~fibext.arithmetic.ArithmeticPolicy`:

* wrapping – returns the new term as a plain ``int``;
* checked – returns an :class:`~fibext.arithmetic.ArithmeticOutcome` and
  leaves the state untouched when the addition overflows.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, Union

from .arithmetic import ArithmeticOutcome, ArithmeticPolicy
from .integers import UINT64, Representation, resolve_representation
from .iterator import FibonacciIterator

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .config import GeneratorConfig

logger = logging.getLogger(__name__)

__all__ = ["FibonacciGenerator", "StepResult"]

StepResult = Union[int, ArithmeticOutcome]


class FibonacciGenerator:
    """Holds ``previous`` and ``current`` and produces the next term on demand.

    Parameters
    ----------
    previous, current:
        Seed pair.  Omitted values default to zero and one of the selected
        representation, giving the canonical ``0, 1`` start.
    representation:
        Width (``8``..``128``), label (``"u32"``, ``"big"``) or one of the
        constants from :mod:`fibext.integers`.
    policy:
        :class:`ArithmeticPolicy` or its name.  Fixed for the lifetime of the
        instance.
    iterable:
        When ``False`` the generator refuses ``iter()`` and only exposes the
        direct stepping API.
    """

    __slots__ = (
        "_previous",
        "_current",
        "_representation",
        "_policy",
        "_iterable",
        "_step",
    )

    def __init__(
        self,
        previous: Optional[int] = None,
        current: Optional[int] = None,
        *,
        representation: Union[Representation, int, str] = UINT64,
        policy: Union[ArithmeticPolicy, str] = ArithmeticPolicy.CHECKED,
        iterable: bool = True,
    ) -> None:
        self._representation = resolve_representation(representation)
        self._policy = ArithmeticPolicy.parse(policy)
        self._iterable = bool(iterable)
        rep = self._representation
        self._previous = rep.zero() if previous is None else rep.validate(previous)
        self._current = rep.one() if current is None else rep.validate(current)
        self._step: Callable[[int, int], StepResult]
        if self._policy is ArithmeticPolicy.WRAPPING:
            self._step = rep.wrapping_add
        else:
            self._step = rep.checked_add

    @classmethod
    def from_config(cls, config: "GeneratorConfig") -> "FibonacciGenerator":
        previous, current = config.seed
        return cls(
            previous,
            current,
            representation=config.representation,
            policy=config.policy,
            iterable=config.iterable,
        )

    @property
    def previous(self) -> int:
        return self._previous

    @property
    def current(self) -> int:
        return self._current

    @property
    def representation(self) -> Representation:
        return self._representation

    @property
    def policy(self) -> ArithmeticPolicy:
        return self._policy

    @property
    def iterable(self) -> bool:
        return self._iterable

    def current_value(self) -> int:
        return self._current

    def previous_value(self) -> int:
        return self._previous

    def peek_next(self) -> StepResult:
        """Compute the next term without committing it."""

        return self._step(self._previous, self._current)

    def advance(self) -> StepResult:
        """Shift the window forward by one term and return the new term.

        Under the checked policy an overflowed outcome is returned as-is and
        the window is not shifted, so :meth:`current_value` keeps reporting the
        last committed term.
        """

        result = self._step(self._previous, self._current)
        if isinstance(result, ArithmeticOutcome):
            if result.overflowed:
                logger.debug(
                    "Overflow adding %d + %d in %s; state left unchanged",
                    self._previous,
                    self._current,
                    self._representation.label,
                )
                return result
            self._previous, self._current = self._current, result.value
            return result
        self._previous, self._current = self._current, result
        return result

    def __iter__(self) -> FibonacciIterator:
        if not self._iterable:
            raise TypeError("iteration is disabled for this FibonacciGenerator")
        return FibonacciIterator(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(previous={self._previous}, current={self._current}, "
            f"representation={self._representation.label!r}, "
            f"policy={self._policy.value!r}, iterable={self._iterable})"
        )
