"""Unsigned integer representations the generator can be parameterised over.

Each representation bundles the capability set the generator relies on:
``zero``/``one`` seeds, seed validation, and the two addition flavours used
by :class:`fibext.arithmetic.ArithmeticPolicy`.  Native widths mirror the
fixed-size unsigned registers (8 to 128 bits); :data:`BIGINT` lifts the upper
bound entirely by leaning on Python's arbitrary precision ``int``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

from .arithmetic import ArithmeticOutcome

__all__ = [
    "BIGINT",
    "BigInteger",
    "NativeWidth",
    "Representation",
    "SUPPORTED_WIDTHS",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
    "UINT128",
    "resolve_representation",
]

SUPPORTED_WIDTHS: tuple[int, ...] = (8, 16, 32, 64, 128)

_NUMPY_DTYPES = {
    8: np.uint8,
    16: np.uint16,
    32: np.uint32,
    64: np.uint64,
}

_BIG_LABELS = frozenset({"big", "bigint", "biguint", "arbitrary"})


def _coerce_int(value: object) -> int:
    if isinstance(value, bool) or isinstance(value, np.bool_):
        raise TypeError("seed values must be integers, not booleans")
    if isinstance(value, (int, np.integer)):
        return int(value)
    raise TypeError(f"seed values must be integers, got {type(value).__name__}")


@dataclass(frozen=True, slots=True)
class NativeWidth:
    """Fixed-width unsigned integer with ``bits`` of storage."""

    bits: int

    def __post_init__(self) -> None:
        if self.bits not in SUPPORTED_WIDTHS:
            supported = ", ".join(str(width) for width in SUPPORTED_WIDTHS)
            raise ValueError(f"Unsupported width {self.bits}; expected one of: {supported}")

    @property
    def label(self) -> str:
        return f"u{self.bits}"

    @property
    def bounded(self) -> bool:
        return True

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    @property
    def dtype(self) -> np.dtype:
        # numpy has no 128-bit unsigned type, values are kept as Python ints.
        return np.dtype(_NUMPY_DTYPES.get(self.bits, object))

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def validate(self, value: object) -> int:
        """Return ``value`` as an ``int`` if it fits into this width."""

        number = _coerce_int(value)
        if number < 0 or number > self.max_value:
            raise ValueError(
                f"{number} is outside the representable range of {self.label} "
                f"(0..{self.max_value})"
            )
        return number

    def wrapping_add(self, lhs: int, rhs: int) -> int:
        return (lhs + rhs) & self.max_value

    def checked_add(self, lhs: int, rhs: int) -> ArithmeticOutcome:
        total = lhs + rhs
        if total > self.max_value:
            return ArithmeticOutcome.overflow(lhs, rhs, self.max_value)
        return ArithmeticOutcome.ok(total)


@dataclass(frozen=True, slots=True)
class BigInteger:
    """Arbitrary precision unsigned integer; additions never overflow."""

    @property
    def label(self) -> str:
        return "big"

    @property
    def bounded(self) -> bool:
        return False

    @property
    def max_value(self) -> None:
        return None

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(object)

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def validate(self, value: object) -> int:
        number = _coerce_int(value)
        if number < 0:
            raise ValueError(f"{number} is negative; big integers are unsigned")
        return number

    def wrapping_add(self, lhs: int, rhs: int) -> int:
        return lhs + rhs

    def checked_add(self, lhs: int, rhs: int) -> ArithmeticOutcome:
        return ArithmeticOutcome.ok(lhs + rhs)


Representation = Union[NativeWidth, BigInteger]

UINT8 = NativeWidth(8)
UINT16 = NativeWidth(16)
UINT32 = NativeWidth(32)
UINT64 = NativeWidth(64)
UINT128 = NativeWidth(128)
BIGINT = BigInteger()


def resolve_representation(value: "Representation | int | str") -> Representation:
    """Resolve ``value`` (width, label or representation) to a representation.

    Accepted forms are an existing representation, an integer width such as
    ``32``, or a label such as ``"u32"``, ``"uint32"``, ``"32"`` or ``"big"``.
    """

    if isinstance(value, (NativeWidth, BigInteger)):
        return value
    if isinstance(value, bool):
        raise TypeError("representation must be a width, label or representation")
    if isinstance(value, int):
        return NativeWidth(value)
    if not isinstance(value, str):
        raise TypeError("representation must be a width, label or representation")

    label = value.strip().lower()
    if label in _BIG_LABELS:
        return BIGINT
    for prefix in ("uint", "u"):
        if label.startswith(prefix):
            label = label[len(prefix):]
            break
    if not label.isdigit():
        raise ValueError(f"Unknown integer representation {value!r}")
    return NativeWidth(int(label))
