"""Daemon orchestration."""

from .daemon import PowerLedDaemon

__all__ = ["PowerLedDaemon"]
