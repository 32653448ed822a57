"""Fibonacci sequence generation over configurable unsigned integer widths.

The package exposes a small streaming generator with wrapping or checked
addition, an optional iterator adapter and an arbitrary precision backend.
"""

from .arithmetic import ArithmeticOutcome, ArithmeticOverflowError, ArithmeticPolicy
from .config import ConfigurationError, GeneratorConfig, load_generator_config
from .generator import FibonacciGenerator, StepResult
from .integers import (
    BIGINT,
    SUPPORTED_WIDTHS,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    UINT128,
    BigInteger,
    NativeWidth,
    Representation,
    resolve_representation,
)
from .iterator import FibonacciIterator
from .report import SequenceReport, collect_terms, generate_report, write_sequence_report

__all__ = [
    "ArithmeticOutcome",
    "ArithmeticOverflowError",
    "ArithmeticPolicy",
    "BIGINT",
    "BigInteger",
    "ConfigurationError",
    "FibonacciGenerator",
    "FibonacciIterator",
    "GeneratorConfig",
    "NativeWidth",
    "Representation",
    "SUPPORTED_WIDTHS",
    "SequenceReport",
    "StepResult",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "UINT128",
    "collect_terms",
    "generate_report",
    "load_generator_config",
    "resolve_representation",
    "write_sequence_report",
]
