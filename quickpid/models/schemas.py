"""Pydantic models for controller configuration and status snapshots."""

from pydantic import BaseModel, ConfigDict, Field

from quickpid.control.enums import Action, AntiWindupMode, Control, DerivativeMode, ProportionalMode
from quickpid.core.config import settings


class ControllerConfig(BaseModel):
    """Initial controller configuration.

    Values are applied through the controller's setters, so out-of-range
    gains, periods or limits are ignored and the defaults stay in place.
    """
    kp: float = Field(default=0.0, description="Proportional gain")
    ki: float = Field(default=0.0, description="Integral gain (1/s)")
    kd: float = Field(default=0.0, description="Derivative gain (s)")
    proportional_mode: ProportionalMode = ProportionalMode.ON_ERROR
    derivative_mode: DerivativeMode = DerivativeMode.ON_MEASUREMENT
    anti_windup_mode: AntiWindupMode = AntiWindupMode.CONDITIONAL
    action: Action = Action.DIRECT
    sample_time_us: int = Field(
        default=settings.DEFAULT_SAMPLE_TIME_US, description="Sample period (us)"
    )
    output_min: float = Field(default=settings.DEFAULT_OUTPUT_MIN, description="Lower output limit")
    output_max: float = Field(default=settings.DEFAULT_OUTPUT_MAX, description="Upper output limit")


class ControllerStatus(BaseModel):
    """Read-only snapshot of the query surface. Enums dump as ordinals."""
    model_config = ConfigDict(use_enum_values=True)

    kp: float = Field(description="Proportional gain as set")
    ki: float = Field(description="Integral gain as set")
    kd: float = Field(description="Derivative gain as set")
    p_term: float = Field(description="Last proportional contribution")
    i_term: float = Field(description="Last integral contribution")
    d_term: float = Field(description="Last derivative contribution")
    mode: Control
    direction: Action
    p_mode: ProportionalMode
    d_mode: DerivativeMode
    aw_mode: AntiWindupMode
    sample_time_us: int
    output_min: float
    output_max: float
