"""Deterministic citation key generation for bibliography entries."""

__version__ = "0.1.0"
