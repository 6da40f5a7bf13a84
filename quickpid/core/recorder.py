"""Control loop data recorder.

Keeps the most recent per-cycle rows of a run (process value, setpoint,
output and the P/I/D term breakdown) as flat dicts. Retention is bounded;
once `max_rows` is reached the oldest rows are discarded.
"""

from collections import deque


class DataRecorder:
    """Bounded store of flattened control loop rows for one run."""

    def __init__(self, run_id: str, max_rows: int = 100_000):
        self.run_id = run_id
        self.max_rows = max(int(max_rows), 1)
        self._rows: deque[dict] = deque(maxlen=self.max_rows)
        self._total_records = 0

    def record(self, simulation_time: float, state: dict) -> dict:
        """Flatten and store one snapshot. Returns the stored row."""
        row = {"run_id": self.run_id, "simulation_time": round(simulation_time, 6)}
        row.update(self._flatten(state))
        self._rows.append(row)
        self._total_records += 1
        return row

    @staticmethod
    def _flatten(state: dict, prefix: str = "") -> dict:
        """Nested dict to one level, joining keys with dots."""
        flat = {}
        for name, value in state.items():
            key = f"{prefix}.{name}" if prefix else name
            if isinstance(value, dict):
                flat.update(DataRecorder._flatten(value, key))
            else:
                flat[key] = value
        return flat

    @property
    def rows(self) -> list[dict]:
        return list(self._rows)

    @property
    def latest(self) -> dict | None:
        return self._rows[-1] if self._rows else None

    @property
    def total_records(self) -> int:
        return self._total_records

    @property
    def dropped(self) -> int:
        """Rows discarded because retention was full."""
        return self._total_records - len(self._rows)

    def clear(self):
        self._rows.clear()
        self._total_records = 0
