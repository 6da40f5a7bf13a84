"""First-order process model.

A lag process with static gain, e.g. a heater driving a thermal mass:

    tau * dy/dt = -(y - ambient) + gain * u

integrated with forward Euler. The drive `u` is clipped to the actuator
range before it is applied.
"""

import numpy as np


class FirstOrderProcess:
    """First-order-plus-gain process driven by a controller output."""

    DEFAULT_PARAMS = {
        "gain": 0.5,            # process units per output unit
        "time_constant": 5.0,   # s
        "ambient": 0.0,         # resting value with zero drive
        "initial_value": None,  # defaults to ambient
        "drive_min": 0.0,       # actuator range
        "drive_max": 255.0,
    }

    def __init__(self, params: dict | None = None):
        p = {**self.DEFAULT_PARAMS, **(params or {})}
        self.gain = p["gain"]
        self.time_constant = max(p["time_constant"], 1e-6)
        self.ambient = p["ambient"]
        self.drive_min = p["drive_min"]
        self.drive_max = p["drive_max"]

        # State variables
        self.value = p["initial_value"] if p["initial_value"] is not None else self.ambient
        self.drive = 0.0
        self.elapsed = 0.0

    def step(self, dt: float, drive: float) -> dict:
        """Advance the process by dt seconds.

        Args:
            dt: Time step in seconds.
            drive: Actuator command (clipped to drive_min..drive_max).

        Returns:
            Dict of current state variables.
        """
        self.drive = float(np.clip(drive, self.drive_min, self.drive_max))
        rate = (-(self.value - self.ambient) + self.gain * self.drive) / self.time_constant
        self.value += rate * dt
        self.elapsed += dt
        return self.get_state()

    def steady_state(self, drive: float) -> float:
        """Value the process settles at under a constant drive."""
        return self.ambient + self.gain * float(np.clip(drive, self.drive_min, self.drive_max))

    def get_state(self) -> dict:
        return {
            "value": round(self.value, 4),
            "drive": round(self.drive, 4),
            "elapsed": round(self.elapsed, 4),
        }
