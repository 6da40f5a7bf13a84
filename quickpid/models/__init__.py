"""Pydantic models for controller configuration and status snapshots."""
