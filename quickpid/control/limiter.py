"""Output range saturation."""

import logging

import numpy as np

from quickpid.control.signal import f32
from quickpid.core.config import settings

logger = logging.getLogger(__name__)


class OutputLimiter:
    """Owns the valid output range [out_min, out_max]."""

    def __init__(
        self,
        out_min: float = settings.DEFAULT_OUTPUT_MIN,
        out_max: float = settings.DEFAULT_OUTPUT_MAX,
    ):
        self.out_min = f32(settings.DEFAULT_OUTPUT_MIN)
        self.out_max = f32(settings.DEFAULT_OUTPUT_MAX)
        self.set_limits(out_min, out_max)

    def set_limits(self, out_min: float, out_max: float) -> bool:
        """Store a new range. Returns False and keeps the old one if min >= max."""
        out_min, out_max = f32(out_min), f32(out_max)
        if out_min >= out_max:
            logger.debug("Rejected output limits [%s, %s]", out_min, out_max)
            return False
        self.out_min = out_min
        self.out_max = out_max
        return True

    def clamp(self, value) -> np.float32:
        return self.constrain(value, self.out_min, self.out_max)

    @staticmethod
    def constrain(value, low, high) -> np.float32:
        value = f32(value)
        if value < low:
            return f32(low)
        if value > high:
            return f32(high)
        return value
