"""Hostpulse agent - host metrics snapshot collector."""

__version__ = "0.1.0"
