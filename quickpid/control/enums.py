"""Discrete controller configuration.

Ordinals are fixed and exposed through the query surface, so external
consumers can rely on them.
"""

from enum import IntEnum


class Control(IntEnum):
    """Controller lifecycle mode."""
    IDLE = 0                 # manual, compute() does nothing
    TIME_GATED = 1           # automatic, gated by the injected clock
    EXTERNALLY_CLOCKED = 2   # timer, every compute() call produces output


class Action(IntEnum):
    """Controller action (direction)."""
    DIRECT = 0    # +output leads to +input
    REVERSE = 1   # +output leads to -input


class ProportionalMode(IntEnum):
    ON_ERROR = 0
    ON_MEASUREMENT = 1
    ON_ERROR_AND_MEASUREMENT = 2


class DerivativeMode(IntEnum):
    ON_ERROR = 0
    ON_MEASUREMENT = 1


class AntiWindupMode(IntEnum):
    CONDITIONAL = 0
    CLAMP = 1
    OFF = 2
