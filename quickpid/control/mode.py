"""Controller lifecycle and time gate."""

import logging

from quickpid.control.enums import Control
from quickpid.control.signal import Clock

logger = logging.getLogger(__name__)


class ModeController:
    """Tracks the lifecycle mode and decides when a computation is due.

    IDLE never computes. TIME_GATED computes once the injected clock has
    advanced by at least one sample period since the last computation;
    without a clock the gate stays closed. EXTERNALLY_CLOCKED computes on
    every call and leaves the cadence to the caller.
    """

    def __init__(self):
        self.mode = Control.IDLE
        self.clock: Clock | None = None
        self.last_time = 0

    @property
    def is_active(self) -> bool:
        return self.mode != Control.IDLE

    def set_clock(self, clock: Clock, sample_time_us: int):
        """Install a clock and back-date last_time so the next gate opens."""
        self.clock = clock
        self.last_time = clock() - sample_time_us

    def transition(self, mode: Control) -> bool:
        """Switch mode. Returns True when this is an activation from IDLE."""
        mode = Control(mode)
        activating = self.mode == Control.IDLE and mode != Control.IDLE
        if mode != self.mode:
            logger.info("Controller mode %s -> %s", self.mode.name, mode.name)
        self.mode = mode
        return activating

    def poll(self, sample_time_us: int) -> tuple[bool, int | None]:
        """Check whether a computation is due.

        Returns:
            (due, now) where `now` is the clock reading in TIME_GATED mode
            and None otherwise.
        """
        if self.mode == Control.IDLE:
            return False, None
        if self.mode == Control.EXTERNALLY_CLOCKED:
            return True, None
        if self.clock is None:
            return False, None
        now = self.clock()
        return now - self.last_time >= sample_time_us, now
