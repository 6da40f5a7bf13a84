"""Simulated process models driven by the controller output.

Modules:
    first_order_process: First-order lag process with static gain
"""
