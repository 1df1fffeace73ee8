"""Randomized fuzz and replay harness for a docking layout manager."""

__version__ = "0.1.0"
