"""Gain management.

Keeps the user-facing gains for display and converts them into
per-sample coefficients:

    kp = Kp
    ki = Ki * T
    kd = Kd / T

where T is the sample period in seconds. Changing T rescales ki and kd
in place, so the continuous-time behavior of the loop is unchanged.
"""

import logging

import numpy as np

from quickpid.control.enums import AntiWindupMode, DerivativeMode, ProportionalMode
from quickpid.control.signal import f32
from quickpid.core.config import settings

logger = logging.getLogger(__name__)

US_PER_SECOND = 1_000_000


class TuningManager:
    """Raw and scaled gain coefficients plus the term-split selections."""

    def __init__(self, sample_time_us: int = settings.DEFAULT_SAMPLE_TIME_US):
        self.sample_time_us = settings.DEFAULT_SAMPLE_TIME_US
        if int(sample_time_us) > 0:
            self.sample_time_us = int(sample_time_us)

        # Display gains
        self.disp_kp = f32(0.0)
        self.disp_ki = f32(0.0)
        self.disp_kd = f32(0.0)

        # Per-sample coefficients
        self.kp = f32(0.0)
        self.ki = f32(0.0)
        self.kd = f32(0.0)

        self.p_mode = ProportionalMode.ON_ERROR
        self.d_mode = DerivativeMode.ON_MEASUREMENT
        self.aw_mode = AntiWindupMode.CONDITIONAL

    @property
    def sample_time_sec(self) -> np.float32:
        return f32(self.sample_time_us) / f32(US_PER_SECOND)

    def set_tunings(
        self,
        kp: float,
        ki: float,
        kd: float,
        p_mode: ProportionalMode | None = None,
        d_mode: DerivativeMode | None = None,
        aw_mode: AntiWindupMode | None = None,
    ) -> bool:
        """Set gains and, optionally, the term-split selections.

        Omitted selections keep their previous values. Any negative gain
        rejects the whole call and leaves the state untouched.

        Returns:
            True if the tunings were applied.
        """
        if kp < 0 or ki < 0 or kd < 0:
            logger.debug("Rejected tunings Kp=%s Ki=%s Kd=%s: negative gain", kp, ki, kd)
            return False

        if p_mode is not None:
            self.p_mode = ProportionalMode(p_mode)
        if d_mode is not None:
            self.d_mode = DerivativeMode(d_mode)
        if aw_mode is not None:
            self.aw_mode = AntiWindupMode(aw_mode)

        self.disp_kp, self.disp_ki, self.disp_kd = f32(kp), f32(ki), f32(kd)

        sample_time_sec = self.sample_time_sec
        self.kp = f32(kp)
        self.ki = f32(f32(ki) * sample_time_sec)
        self.kd = f32(f32(kd) / sample_time_sec)
        return True

    def set_sample_time_us(self, new_sample_time_us: int) -> bool:
        """Change the sample period, rescaling ki and kd in place."""
        new_sample_time_us = int(new_sample_time_us)
        if new_sample_time_us <= 0:
            logger.debug("Rejected sample time %s us", new_sample_time_us)
            return False

        ratio = f32(new_sample_time_us) / f32(self.sample_time_us)
        self.ki = f32(self.ki * ratio)
        self.kd = f32(self.kd / ratio)
        self.sample_time_us = new_sample_time_us
        return True

    def set_proportional_mode(self, p_mode: ProportionalMode):
        self.p_mode = ProportionalMode(p_mode)

    def set_derivative_mode(self, d_mode: DerivativeMode):
        self.d_mode = DerivativeMode(d_mode)

    def set_anti_windup_mode(self, aw_mode: AntiWindupMode):
        self.aw_mode = AntiWindupMode(aw_mode)
