"""Borrowed links between the controller and caller-owned storage.

The controller reads `input` and `setpoint` and writes `output` through
`Signal` cells. The caller creates them, keeps them alive for as long as
the controller exists, and may update them between `compute()` calls.
"""

from typing import Callable

import numpy as np

# Zero-argument callable returning a monotonically non-decreasing
# microsecond count.
Clock = Callable[[], int]


def f32(value) -> np.float32:
    """Coerce a value to single precision."""
    return np.float32(value)


class Signal:
    """Mutable single-value cell shared between caller and controller."""

    __slots__ = ("_value",)

    def __init__(self, value: float = 0.0):
        self._value = f32(value)

    @property
    def value(self) -> np.float32:
        return self._value

    @value.setter
    def value(self, new_value: float):
        self._value = f32(new_value)

    def __float__(self) -> float:
        return float(self._value)

    def __repr__(self) -> str:
        return f"Signal({float(self._value)!r})"
