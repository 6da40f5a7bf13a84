"""Tests for the simulated process, recorder and closed-loop orchestrator."""

import pytest

from quickpid.control.enums import Control
from quickpid.core.config import Settings, settings
from quickpid.core.orchestrator import LoopOrchestrator
from quickpid.core.recorder import DataRecorder
from quickpid.models.schemas import ControllerConfig
from quickpid.physics.first_order_process import FirstOrderProcess


class TestFirstOrderProcess:
    def test_initialization(self):
        p = FirstOrderProcess()
        state = p.get_state()
        assert state["value"] == 0.0
        assert state["drive"] == 0.0

    def test_settles_at_steady_state(self):
        p = FirstOrderProcess({"gain": 0.5, "time_constant": 2.0})
        for _ in range(5000):
            state = p.step(0.01, 100.0)
        assert state["value"] == pytest.approx(p.steady_state(100.0), abs=0.01)

    def test_drive_clipped(self):
        p = FirstOrderProcess({"drive_max": 100.0})
        state = p.step(0.1, 500.0)
        assert state["drive"] == 100.0

    def test_decays_to_ambient(self):
        p = FirstOrderProcess({"ambient": 20.0, "initial_value": 80.0})
        for _ in range(2000):
            state = p.step(0.05, 0.0)
        assert abs(state["value"] - 20.0) < 0.1


class TestDataRecorder:
    def test_flatten_nested(self):
        rec = DataRecorder("run")
        row = rec.record(0.5, {"process": {"value": 1.0}, "controller": {"output": 2.0}})
        assert row == {
            "run_id": "run",
            "simulation_time": 0.5,
            "process.value": 1.0,
            "controller.output": 2.0,
        }
        assert rec.rows == [row]
        assert rec.latest == row

    def test_bounded_retention(self):
        rec = DataRecorder("run", max_rows=3)
        for i in range(5):
            rec.record(i * 0.1, {"a": i})
        assert [r["a"] for r in rec.rows] == [2, 3, 4]
        assert rec.total_records == 5
        assert rec.dropped == 2

    def test_clear(self):
        rec = DataRecorder("run")
        rec.record(0.0, {"a": 1})
        rec.clear()
        assert rec.rows == []
        assert rec.latest is None
        assert rec.total_records == 0


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.DEFAULT_SAMPLE_TIME_US == 100_000
        assert s.DEFAULT_OUTPUT_MIN == 0.0
        assert s.DEFAULT_OUTPUT_MAX == 255.0

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("QUICKPID_LOG_LEVEL", "DEBUG")
        assert Settings().LOG_LEVEL == "DEBUG"


class TestLoopOrchestrator:
    def test_time_gated_cadence(self):
        """At dt=10 ms and a 100 ms sample period, one computation per ten steps."""
        loop = LoopOrchestrator(FirstOrderProcess(), ControllerConfig(kp=1.0), setpoint=10.0, dt=0.01)
        loop.run(0.95)
        assert loop.computations == 10
        assert loop.controller.get_mode() == Control.TIME_GATED

    def test_externally_clocked_every_step(self):
        loop = LoopOrchestrator(
            FirstOrderProcess(), ControllerConfig(kp=1.0), setpoint=10.0,
            mode=Control.EXTERNALLY_CLOCKED, dt=0.01,
        )
        loop.run(0.95)
        assert loop.computations == loop.recorder.total_records == len(loop.recorder.rows)

    def test_idle_leaves_output_untouched(self):
        loop = LoopOrchestrator(
            FirstOrderProcess(), ControllerConfig(kp=1.0), setpoint=10.0, mode=Control.IDLE,
        )
        rows = loop.run(1.0)
        assert loop.computations == 0
        assert all(r["controller.output"] == 0.0 for r in rows)

    def test_pi_loop_converges(self):
        process = FirstOrderProcess({"gain": 0.5, "time_constant": 5.0})
        loop = LoopOrchestrator(process, ControllerConfig(kp=2.0, ki=1.0), setpoint=50.0)
        rows = loop.run(120.0)
        assert process.value == pytest.approx(50.0, abs=0.5)
        assert all(0.0 <= r["controller.output"] <= 255.0 for r in rows)
        assert rows[-1]["controller.setpoint"] == 50.0

    def test_setpoint_change_midway(self):
        process = FirstOrderProcess({"gain": 0.5, "time_constant": 5.0})
        loop = LoopOrchestrator(process, ControllerConfig(kp=2.0, ki=1.0), setpoint=20.0)
        loop.run(60.0)
        loop.set_setpoint(40.0)
        loop.run(120.0)
        assert process.value == pytest.approx(40.0, abs=0.5)

    def test_stop_halts_loop(self):
        loop = LoopOrchestrator(FirstOrderProcess(), ControllerConfig(kp=1.0), setpoint=10.0)
        loop.run(1.0)
        loop.stop()
        count = loop.recorder.total_records
        loop.env.run(until=loop.env.now + 1.0)
        assert loop.recorder.total_records <= count + 1

    def test_rows_retained_up_to_max(self):
        loop = LoopOrchestrator(FirstOrderProcess(), ControllerConfig(kp=1.0), setpoint=10.0,
                                dt=0.01, max_rows=50)
        rows = loop.run(0.955)
        assert len(rows) == 50
        assert loop.recorder.total_records == 96
        assert rows[-1]["simulation_time"] == pytest.approx(0.95)

    def test_run_capped_by_settings(self):
        loop = LoopOrchestrator(FirstOrderProcess(), dt=1.0)
        loop.run(settings.MAX_SIMULATION_TIME * 2)
        assert loop.env.now == pytest.approx(settings.MAX_SIMULATION_TIME)


class TestRunEntryPoint:
    def test_step_response_summary(self):
        from quickpid.run import parse_args, run_demo

        summary = run_demo(parse_args(["--setpoint", "30", "--duration", "90", "--log-level", "WARNING"]))
        assert summary["final_value"] == pytest.approx(30.0, abs=0.5)
        assert summary["status"]["mode"] == 1
        assert summary["computations"] > 0

    def test_timer_mode(self):
        from quickpid.run import parse_args, run_demo

        summary = run_demo(parse_args(["--timer", "--duration", "1", "--log-level", "WARNING"]))
        assert summary["status"]["mode"] == 2
