"""Threaded pizza delivery simulation and a verifier for its event logs."""

__version__ = "0.1.0"
__all__ = ["delivery", "events", "verifier"]