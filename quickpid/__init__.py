"""QuickPID: discrete-time PID controller with bumpless transfer and anti-windup."""

from quickpid.control.enums import Action, AntiWindupMode, Control, DerivativeMode, ProportionalMode
from quickpid.control.pid_controller import QuickPID
from quickpid.control.signal import Signal
from quickpid.models.schemas import ControllerConfig, ControllerStatus

__all__ = [
    "Action",
    "AntiWindupMode",
    "Control",
    "ControllerConfig",
    "ControllerStatus",
    "DerivativeMode",
    "ProportionalMode",
    "QuickPID",
    "Signal",
]
