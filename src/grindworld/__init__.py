"""Procedural world-content and interaction-economy engine."""

__version__ = "0.1.0"
