"""Control-law engine.

Modules:
    enums: Discrete configuration axes with fixed ordinals
    signal: Borrowed input/output/setpoint cells and the clock capability
    limiter: Output range saturation
    tuning: Gain scaling and term-split selections
    mode: Lifecycle state and time gate
    pid_controller: Per-cycle computation and query surface
"""
