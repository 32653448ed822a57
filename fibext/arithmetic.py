"""Arithmetic policies and the outcome type returned by checked addition.

Two policies govern how the generator computes ``previous + current``:

* ``WRAPPING``: the sum wraps modulo ``2**bits`` exactly like unsigned
  hardware registers, so identical seeds always yield identical sequences.
* ``CHECKED``: the sum is compared against the representable maximum and an
  :class:`ArithmeticOutcome` describing either the value or an overflow is
  handed back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = [
    "ArithmeticOutcome",
    "ArithmeticOverflowError",
    "ArithmeticPolicy",
]


class ArithmeticPolicy(str, Enum):
    """Overflow behaviour applied to each addition step."""

    WRAPPING = "wrapping"
    CHECKED = "checked"

    @classmethod
    def parse(cls, value: "ArithmeticPolicy | str") -> "ArithmeticPolicy":
        """Return the policy named by ``value`` (case-insensitive)."""

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise TypeError("policy must be a string or ArithmeticPolicy")
        normalised = value.strip().lower()
        for member in cls:
            if member.value == normalised:
                return member
        choices = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown arithmetic policy {value!r}; expected one of: {choices}")


class ArithmeticOverflowError(ArithmeticError):
    """Raised when an overflowed :class:`ArithmeticOutcome` is unwrapped."""

    def __init__(
        self,
        lhs: Optional[int] = None,
        rhs: Optional[int] = None,
        max_value: Optional[int] = None,
    ) -> None:
        super().__init__("Arithmetic operation overflowed")
        self.lhs = lhs
        self.rhs = rhs
        self.max_value = max_value


@dataclass(frozen=True, slots=True)
class ArithmeticOutcome:
    """Result of one checked addition: a value or an overflow signal."""

    value: Optional[int] = None
    overflowed: bool = False
    lhs: Optional[int] = None
    rhs: Optional[int] = None
    max_value: Optional[int] = None

    @classmethod
    def ok(cls, value: int) -> "ArithmeticOutcome":
        return cls(value=value)

    @classmethod
    def overflow(
        cls,
        lhs: Optional[int] = None,
        rhs: Optional[int] = None,
        max_value: Optional[int] = None,
    ) -> "ArithmeticOutcome":
        return cls(overflowed=True, lhs=lhs, rhs=rhs, max_value=max_value)

    @property
    def succeeded(self) -> bool:
        return not self.overflowed

    def unwrap(self) -> int:
        """Return the produced value or raise :class:`ArithmeticOverflowError`."""

        if self.overflowed or self.value is None:
            raise ArithmeticOverflowError(self.lhs, self.rhs, self.max_value)
        return self.value
