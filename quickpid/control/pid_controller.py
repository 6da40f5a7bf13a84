"""PID controller for process control loops.

The controller is linked to caller-owned input, output and setpoint
cells. Call `compute()` from the control loop; it decides whether a new
output is due (according to the mode) and, if so, writes it through the
output link.

Based on the Arduino PID_v1 algorithm, extended with:
    - Proportional on error, on measurement, or half of each
    - Derivative on error or on measurement
    - Conditional, clamping or no integral anti-windup
    - Bumpless transfer when leaving IDLE
"""

import logging

import numpy as np

from quickpid.control.enums import Action, AntiWindupMode, Control, DerivativeMode, ProportionalMode
from quickpid.control.limiter import OutputLimiter
from quickpid.control.mode import ModeController
from quickpid.control.signal import Clock, Signal, f32
from quickpid.control.tuning import TuningManager
from quickpid.models.schemas import ControllerConfig, ControllerStatus

logger = logging.getLogger(__name__)


class QuickPID:
    """Discrete PID controller with bumpless transfer and anti-windup."""

    def __init__(
        self,
        input_: Signal,
        output: Signal,
        setpoint: Signal,
        config: ControllerConfig | None = None,
        clock: Clock | None = None,
    ):
        config = config or ControllerConfig()

        # Borrowed links, never copied or replaced
        self._input = input_
        self._output = output
        self._setpoint = setpoint

        self.limiter = OutputLimiter()
        self.tuning = TuningManager(config.sample_time_us)
        self.modes = ModeController()
        self.action = Action.DIRECT

        self.p_term = f32(0.0)
        self.i_term = f32(0.0)
        self.d_term = f32(0.0)

        self.output_sum = f32(0.0)
        self.last_error = f32(0.0)
        self.last_input = f32(0.0)

        self.set_output_limits(config.output_min, config.output_max)
        self.set_controller_direction(config.action)
        self.set_tunings(
            config.kp, config.ki, config.kd,
            config.proportional_mode, config.derivative_mode, config.anti_windup_mode,
        )
        if clock is not None:
            self.modes.set_clock(clock, self.tuning.sample_time_us)

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------

    def compute(self) -> bool:
        """Run one control cycle if one is due.

        Returns:
            True if a new output was computed and written.
        """
        due, now = self.modes.poll(self.tuning.sample_time_us)
        if not due:
            return False

        t = self.tuning
        reverse = self.action == Action.REVERSE

        measured = self._input.value
        d_input = f32(measured - self.last_input)
        if reverse:
            d_input = -d_input

        error = f32(self._setpoint.value - measured)
        if reverse:
            error = -error
        d_error = f32(error - self.last_error)

        # Proportional split
        pe_term = f32(t.kp * error)
        pm_term = f32(t.kp * d_input)
        if t.p_mode == ProportionalMode.ON_ERROR:
            pm_term = f32(0.0)
        elif t.p_mode == ProportionalMode.ON_MEASUREMENT:
            pe_term = f32(0.0)
        else:
            pe_term = f32(pe_term * f32(0.5))
            pm_term = f32(pm_term * f32(0.5))
        self.p_term = f32(pe_term - pm_term)

        self.i_term = f32(t.ki * error)

        if t.d_mode == DerivativeMode.ON_ERROR:
            self.d_term = f32(t.kd * d_error)
        else:
            self.d_term = f32(-t.kd * d_input)

        if t.aw_mode == AntiWindupMode.CONDITIONAL:
            self.i_term = self._conditional_anti_windup(pe_term, pm_term, error, d_error)

        lim = self.limiter
        self.output_sum = f32(self.output_sum + self.i_term)
        if t.aw_mode == AntiWindupMode.OFF:
            self.output_sum = f32(self.output_sum - pm_term)
        else:
            self.output_sum = lim.clamp(self.output_sum - pm_term)
        self._output.value = lim.clamp(self.output_sum + pe_term + self.d_term)

        self.last_error = error
        self.last_input = measured
        if now is not None:
            self.modes.last_time = now
        return True

    def _conditional_anti_windup(self, pe_term, pm_term, error, d_error) -> np.float32:
        """Bound the integral term while the output is driven deeper into saturation."""
        ki = self.tuning.ki
        lim = self.limiter
        i_term_out = f32((pe_term - pm_term) + ki * (self.i_term + error))
        winding_up = (
            (i_term_out > lim.out_max and d_error > 0)
            or (i_term_out < lim.out_min and d_error < 0)
        )
        if winding_up and ki != 0:
            return lim.constrain(self.i_term, -lim.out_max, lim.out_max)
        return self.i_term

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_tunings(
        self,
        kp: float,
        ki: float,
        kd: float,
        p_mode: ProportionalMode | None = None,
        d_mode: DerivativeMode | None = None,
        aw_mode: AntiWindupMode | None = None,
    ):
        """Adjust gains at runtime. Negative gains are ignored."""
        self.tuning.set_tunings(kp, ki, kd, p_mode, d_mode, aw_mode)

    def set_sample_time_us(self, new_sample_time_us: int):
        """Set the computation period in microseconds. Non-positive values are ignored."""
        self.tuning.set_sample_time_us(new_sample_time_us)

    def set_output_limits(self, out_min: float, out_max: float):
        """Set the output range, reclamping output and integral when active."""
        if not self.limiter.set_limits(out_min, out_max):
            return
        if self.modes.is_active:
            self._output.value = self.limiter.clamp(self._output.value)
            self.output_sum = self.limiter.clamp(self.output_sum)

    def set_mode(self, mode: Control, clock: Clock | None = None):
        """Change the lifecycle mode.

        Leaving IDLE initializes the controller for a bumpless transfer.
        A clock passed here replaces the stored one; omitting it keeps the
        clock already installed.
        """
        if self.modes.transition(mode):
            self.initialize()
        if clock is not None:
            self.modes.set_clock(clock, self.tuning.sample_time_us)

    def initialize(self):
        """Seed the integral and input history from the linked values."""
        self.output_sum = self.limiter.clamp(self._output.value)
        self.last_input = self._input.value
        logger.debug(
            "Bumpless transfer: output_sum=%s last_input=%s", self.output_sum, self.last_input
        )

    def set_controller_direction(self, action: Action):
        self.action = Action(action)

    def set_proportional_mode(self, p_mode: ProportionalMode):
        self.tuning.set_proportional_mode(p_mode)

    def set_derivative_mode(self, d_mode: DerivativeMode):
        self.tuning.set_derivative_mode(d_mode)

    def set_anti_windup_mode(self, aw_mode: AntiWindupMode):
        self.tuning.set_anti_windup_mode(aw_mode)

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def get_kp(self) -> float:
        return float(self.tuning.disp_kp)

    def get_ki(self) -> float:
        return float(self.tuning.disp_ki)

    def get_kd(self) -> float:
        return float(self.tuning.disp_kd)

    def get_p_term(self) -> float:
        return float(self.p_term)

    def get_i_term(self) -> float:
        return float(self.i_term)

    def get_d_term(self) -> float:
        return float(self.d_term)

    def get_mode(self) -> int:
        return int(self.modes.mode)

    def get_direction(self) -> int:
        return int(self.action)

    def get_p_mode(self) -> int:
        return int(self.tuning.p_mode)

    def get_d_mode(self) -> int:
        return int(self.tuning.d_mode)

    def get_aw_mode(self) -> int:
        return int(self.tuning.aw_mode)

    def status(self) -> ControllerStatus:
        return ControllerStatus(
            kp=self.get_kp(),
            ki=self.get_ki(),
            kd=self.get_kd(),
            p_term=self.get_p_term(),
            i_term=self.get_i_term(),
            d_term=self.get_d_term(),
            mode=self.modes.mode,
            direction=self.action,
            p_mode=self.tuning.p_mode,
            d_mode=self.tuning.d_mode,
            aw_mode=self.tuning.aw_mode,
            sample_time_us=self.tuning.sample_time_us,
            output_min=float(self.limiter.out_min),
            output_max=float(self.limiter.out_max),
        )
