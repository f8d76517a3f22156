"""Affinity-based turn combat engine."""
__version__ = "0.1.0"
