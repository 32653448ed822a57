"""Bounded sequence capture and JSON report export.

``collect_terms`` drains a fixed number of terms from a generator into a
numpy array whose dtype matches the generator's representation (``uint8``
through ``uint64``; ``object`` for 128-bit and big integers, which numpy
cannot store natively).  ``generate_report`` wraps the captured terms together
with the generator settings so they can be written as JSON and diffed across
runs.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from .config import GeneratorConfig
from .generator import FibonacciGenerator
from .iterator import FibonacciIterator

logger = logging.getLogger(__name__)

__all__ = [
    "SequenceReport",
    "collect_terms",
    "generate_report",
    "write_sequence_report",
]


def _validate_count(count: int) -> None:
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError("count must be an integer")
    if count < 0:
        raise ValueError("count must be non-negative")


def collect_terms(generator: FibonacciGenerator, count: int) -> Tuple[np.ndarray, bool]:
    """Advance ``generator`` up to ``count`` times and return the new terms.

    The second element of the returned tuple is ``True`` when a checked
    overflow ended the sequence before ``count`` terms were produced.  The
    generator does not need to be iterable; stepping goes through a private
    :class:`FibonacciIterator`.
    """

    _validate_count(count)
    iterator = FibonacciIterator(generator)
    values = iterator.take(count)
    terms = np.array(values, dtype=generator.representation.dtype)
    if iterator.exhausted:
        logger.info(
            "Sequence ended after %d of %d requested terms (%s overflow)",
            len(values),
            count,
            generator.representation.label,
        )
    return terms, iterator.exhausted


@dataclass(frozen=True)
class SequenceReport:
    """Captured terms plus the settings that produced them."""

    terms: np.ndarray
    representation: str
    policy: str
    seed: Tuple[int, int]
    exhausted: bool

    @property
    def count(self) -> int:
        return int(self.terms.shape[0])

    def to_dict(self) -> Dict[str, object]:
        """Return a serialisable representation of the report."""

        # ``tolist`` converts numpy scalars back into Python ints.
        sequence: List[int] = [int(value) for value in self.terms.tolist()]
        return {
            "representation": self.representation,
            "policy": self.policy,
            "seed": list(self.seed),
            "count": self.count,
            "exhausted": self.exhausted,
            "sequence": sequence,
        }


def generate_report(count: int, config: Optional[GeneratorConfig] = None) -> SequenceReport:
    """Build a generator from ``config`` and capture ``count`` terms."""

    config = config or GeneratorConfig()
    generator = config.build()
    seed = (generator.previous_value(), generator.current_value())
    terms, exhausted = collect_terms(generator, count)
    return SequenceReport(
        terms=terms,
        representation=generator.representation.label,
        policy=generator.policy.value,
        seed=seed,
        exhausted=exhausted,
    )


def write_sequence_report(report: SequenceReport, output: Path, indent: int = 2) -> Path:
    """Write ``report`` to ``output`` as JSON, creating parent directories."""

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(report.to_dict(), indent=indent, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return output
