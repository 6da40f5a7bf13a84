"""Closed-loop step response demo.

Usage:
    python -m quickpid.run --setpoint 50 --kp 2 --ki 1 --duration 60
"""

import argparse
import logging

from quickpid.control.enums import Control
from quickpid.core.config import configure_logging, settings
from quickpid.core.orchestrator import LoopOrchestrator
from quickpid.models.schemas import ControllerConfig
from quickpid.physics.first_order_process import FirstOrderProcess

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a simulated QuickPID step response.")
    parser.add_argument("--setpoint", type=float, default=50.0)
    parser.add_argument("--kp", type=float, default=2.0)
    parser.add_argument("--ki", type=float, default=1.0)
    parser.add_argument("--kd", type=float, default=0.0)
    parser.add_argument("--sample-time-us", type=int, default=settings.DEFAULT_SAMPLE_TIME_US)
    parser.add_argument("--duration", type=float, default=60.0, help="Simulated seconds")
    parser.add_argument("--gain", type=float, default=0.5, help="Process gain")
    parser.add_argument("--time-constant", type=float, default=5.0, help="Process time constant (s)")
    parser.add_argument("--timer", action="store_true",
                        help="Compute on every step instead of gating on the sample period")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def run_demo(args: argparse.Namespace) -> dict:
    """Run one step response and return a summary of the final state."""
    process = FirstOrderProcess({"gain": args.gain, "time_constant": args.time_constant})
    config = ControllerConfig(
        kp=args.kp, ki=args.ki, kd=args.kd, sample_time_us=args.sample_time_us
    )
    mode = Control.EXTERNALLY_CLOCKED if args.timer else Control.TIME_GATED
    loop = LoopOrchestrator(process, config, setpoint=args.setpoint, mode=mode)
    rows = loop.run(args.duration)

    summary = {
        "final_value": round(process.value, 3),
        "setpoint": args.setpoint,
        "final_output": rows[-1]["controller.output"] if rows else 0.0,
        "computations": loop.computations,
        "status": loop.controller.status().model_dump(),
    }
    logger.info("Final value %.3f (setpoint %.3f) after %d computations",
                summary["final_value"], args.setpoint, loop.computations)
    return summary


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)
    run_demo(args)


if __name__ == "__main__":
    main()
