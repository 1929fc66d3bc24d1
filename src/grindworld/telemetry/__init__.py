"""Logging and telemetry setup."""

from .logging import configure_logging

__all__ = ["configure_logging"]
