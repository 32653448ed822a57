"""Lazy, pull-based view over a :class:`~fibext.generator.FibonacciGenerator`."""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Iterator, List

from .arithmetic import ArithmeticOutcome

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .generator import FibonacciGenerator

logger = logging.getLogger(__name__)

__all__ = ["FibonacciIterator"]


class FibonacciIterator(Iterator[int]):
    """Yield successive terms by advancing the wrapped generator.

    A checked overflow is treated as the natural end of the sequence: the
    iterator raises :class:`StopIteration` instead of yielding an error value
    and stays exhausted on every later pull.  Wrapping and big integer
    generators never run dry.

    The iterator steps the generator it was given in place rather than a
    copy, so the generator's ``current_value()`` tracks the last yielded
    term.  Each ``iter()`` call on a generator returns a new adapter over the
    same generator; pull from one adapter at a time.
    """

    __slots__ = ("_generator", "_exhausted")

    def __init__(self, generator: "FibonacciGenerator") -> None:
        self._generator = generator
        self._exhausted = False

    @property
    def generator(self) -> "FibonacciGenerator":
        return self._generator

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def __iter__(self) -> "FibonacciIterator":
        return self

    def __next__(self) -> int:
        if self._exhausted:
            raise StopIteration
        result = self._generator.advance()
        if isinstance(result, ArithmeticOutcome):
            if result.overflowed:
                self._exhausted = True
                logger.debug(
                    "Sequence exhausted at %d after checked overflow",
                    self._generator.current_value(),
                )
                raise StopIteration
            return result.unwrap()
        return result

    def take(self, count: int) -> List[int]:
        """Return up to ``count`` further terms (fewer if the sequence ends)."""

        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError("count must be an integer")
        if count < 0:
            raise ValueError("count must be non-negative")
        return list(itertools.islice(self, count))
