"""Simulation and MongoDB-backed bookkeeping for a fleet of cleaning robots."""

__version__ = "0.1.0"