"""SimPy-based closed-loop orchestrator.

Wires a simulated process to a QuickPID controller and advances both in
simulated time. The controller's clock is the SimPy environment time in
microseconds, so TIME_GATED runs are fully deterministic.
"""

import logging
import uuid

import simpy

from quickpid.control.enums import Control
from quickpid.control.pid_controller import QuickPID
from quickpid.control.signal import Signal
from quickpid.core.config import settings
from quickpid.core.recorder import DataRecorder
from quickpid.models.schemas import ControllerConfig
from quickpid.physics.first_order_process import FirstOrderProcess

logger = logging.getLogger(__name__)


class LoopOrchestrator:
    """Runs a process and its controller in a SimPy environment."""

    def __init__(
        self,
        process: FirstOrderProcess,
        config: ControllerConfig | None = None,
        setpoint: float = 0.0,
        mode: Control = Control.TIME_GATED,
        dt: float = settings.SIMULATION_DT,
        max_rows: int = settings.RECORDER_MAX_ROWS,
    ):
        self.id = uuid.uuid4().hex[:8]
        self.process = process
        self.dt = dt
        self.env = simpy.Environment()
        self.recorder = DataRecorder(self.id, max_rows)
        self._running = False
        self._loop = None

        # Caller-side storage linked into the controller
        self.input = Signal(process.value)
        self.output = Signal(process.drive)
        self.setpoint = Signal(setpoint)

        self.controller = QuickPID(self.input, self.output, self.setpoint, config)
        self.controller.set_mode(mode, self.clock)
        self.computations = 0

    def clock(self) -> int:
        """Simulated time in microseconds."""
        return int(round(self.env.now * 1_000_000))

    def _control_loop(self, env: simpy.Environment):
        """Main control loop process."""
        while self._running:
            # 1. Acquire
            self.input.value = self.process.value

            # 2. Control
            computed = self.controller.compute()
            if computed:
                self.computations += 1

            # 3. Actuate
            process_state = self.process.step(self.dt, float(self.output.value))

            state = {
                "process": process_state,
                "controller": {
                    "setpoint": float(self.setpoint.value),
                    "output": float(self.output.value),
                    "computed": computed,
                    "p_term": self.controller.get_p_term(),
                    "i_term": self.controller.get_i_term(),
                    "d_term": self.controller.get_d_term(),
                },
            }
            self.recorder.record(env.now, state)

            yield env.timeout(self.dt)

    def set_setpoint(self, value: float):
        self.setpoint.value = value

    def run(self, until: float) -> list[dict]:
        """Run the loop for `until` simulated seconds and return the retained rows."""
        until = min(until, settings.MAX_SIMULATION_TIME)
        self._running = True
        if self._loop is None or not self._loop.is_alive:
            self._loop = self.env.process(self._control_loop(self.env))
        logger.info("Loop %s running to t=%.2fs (dt=%.3fs)", self.id, until, self.dt)
        try:
            self.env.run(until=self.env.now + until)
        except Exception:
            logger.exception("Loop %s failed at t=%.2fs", self.id, self.env.now)
            raise
        logger.debug("Loop %s: %d records (%d dropped), %d computations",
                     self.id, self.recorder.total_records, self.recorder.dropped,
                     self.computations)
        return self.recorder.rows

    def stop(self):
        """Stop the loop after the current step."""
        self._running = False
        logger.info("Loop %s stopped at t=%.2fs", self.id, self.env.now)
